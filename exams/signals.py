from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from .models import Exam, Question


@receiver(post_save, sender=Question)
@receiver(post_delete, sender=Question)
def refresh_total_marks(sender, instance, **kwargs):
    """Keep Exam.total_marks equal to the sum of its questions' marks."""
    exam = Exam.objects.filter(pk=instance.exam_id).first()
    if exam is not None:
        exam.recalculate_total_marks()
