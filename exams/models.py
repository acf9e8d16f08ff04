# exams/models.py
from django.conf import settings
from django.db import models


class Exam(models.Model):
    """A timed, assessable test owned by the admin or faculty member who created it."""
    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='created_exams')
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)

    # Both ends optional: an absent bound leaves that side of the window open
    start_time = models.DateTimeField(null=True, blank=True)
    end_time = models.DateTimeField(null=True, blank=True)

    is_published = models.BooleanField(default=False)
    max_attempts = models.IntegerField(default=1)
    max_violations = models.PositiveIntegerField(null=True, blank=True)
    proctored = models.BooleanField(default=False)
    duration_minutes = models.PositiveIntegerField(null=True, blank=True)

    # Derived from the questions, see recalculate_total_marks()
    total_marks = models.IntegerField(default=0, editable=False)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return self.title

    def recalculate_total_marks(self):
        total = self.questions.aggregate(total=models.Sum('marks'))['total'] or 0
        Exam.objects.filter(pk=self.pk).update(total_marks=total)
        self.total_marks = total
        return total


class Question(models.Model):
    class QuestionType(models.TextChoices):
        MCQ = "MCQ", "Single Correct Choice"
        MAQ = "MAQ", "Multiple Correct Choice"
        FILL_BLANK = "FILL_BLANK", "Fill in the Blank"

    exam = models.ForeignKey(Exam, related_name='questions', on_delete=models.CASCADE)

    text = models.TextField()
    question_type = models.CharField(max_length=20, choices=QuestionType.choices, default=QuestionType.MCQ)

    option_a = models.CharField(max_length=500, blank=True, null=True)
    option_b = models.CharField(max_length=500, blank=True, null=True)
    option_c = models.CharField(max_length=500, blank=True, null=True)
    option_d = models.CharField(max_length=500, blank=True, null=True)

    # Single-correct label (A/B/C/D)
    correct_option = models.CharField(max_length=10, blank=True, null=True)
    # Multi-correct labels, comma separated ("A,C")
    correct_options_csv = models.CharField(max_length=50, blank=True, null=True)
    # Expected text for fill-in-the-blank
    correct_answer = models.TextField(blank=True, null=True)

    marks = models.IntegerField(default=1)
    negative_marks = models.IntegerField(default=0)

    class Meta:
        ordering = ['id']

    def __str__(self):
        return f"{self.text[:50]}..."
