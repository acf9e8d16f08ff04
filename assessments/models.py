# assessments/models.py
from django.db import models
from django.conf import settings
from exams.models import Exam, Question


class Attempt(models.Model):
    """
    A learner's engagement with a test. There is a single row per
    (test, student); later cycles bump attempt_number on the same row.
    """
    exam = models.ForeignKey(Exam, on_delete=models.CASCADE, related_name='attempts')
    student = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='attempts')
    attempt_number = models.PositiveIntegerField(default=1)
    started_at = models.DateTimeField()
    submitted_at = models.DateTimeField(null=True, blank=True)
    completed = models.BooleanField(default=False)
    score = models.IntegerField(default=0)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=['exam', 'student'], name='unique_attempt_per_exam_student'),
        ]

    def __str__(self):
        return f"{self.student} - {self.exam.title} (#{self.attempt_number})"

    @property
    def status(self):
        return "completed" if self.completed else "in_progress"


class Answer(models.Model):
    attempt = models.ForeignKey(Attempt, related_name='answers', on_delete=models.CASCADE)
    question = models.ForeignKey(Question, related_name='answers', on_delete=models.CASCADE)

    # "A" / "A,C" for choice questions, free text for fill-in-the-blank
    answer_text = models.TextField(null=True, blank=True)
    # Evaluated when the answer is written
    is_correct = models.BooleanField(default=False)

    class Meta:
        unique_together = ('attempt', 'question')


class SessionReport(models.Model):
    """Proctoring counters for one attempt, written by the proctoring client."""
    attempt = models.OneToOneField(Attempt, on_delete=models.CASCADE, related_name='session_report')

    heads_turned = models.PositiveIntegerField(null=True, blank=True)
    head_tilts = models.PositiveIntegerField(null=True, blank=True)
    look_aways = models.PositiveIntegerField(null=True, blank=True)
    multiple_people = models.PositiveIntegerField(null=True, blank=True)
    face_visibility_issues = models.PositiveIntegerField(null=True, blank=True)
    mobile_detected = models.PositiveIntegerField(null=True, blank=True)
    audio_incidents = models.PositiveIntegerField(null=True, blank=True)
    tab_switches = models.PositiveIntegerField(null=True, blank=True)
    window_switches = models.PositiveIntegerField(null=True, blank=True)

    is_valid_test = models.BooleanField(null=True)
    invalid_reason = models.TextField(blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    COUNTER_FIELDS = (
        'heads_turned', 'head_tilts', 'look_aways', 'multiple_people',
        'face_visibility_issues', 'mobile_detected', 'audio_incidents',
        'tab_switches', 'window_switches',
    )

    def __str__(self):
        return f"Session report for attempt {self.attempt_id}"
