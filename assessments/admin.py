from django.contrib import admin

from .models import Attempt, Answer, SessionReport


class AnswerInline(admin.TabularInline):
    model = Answer
    extra = 0
    readonly_fields = ('question', 'answer_text', 'is_correct')


@admin.register(Attempt)
class AttemptAdmin(admin.ModelAdmin):
    list_display = ('id', 'exam', 'student', 'attempt_number', 'completed', 'score', 'submitted_at')
    list_filter = ('completed',)
    inlines = [AnswerInline]


admin.site.register(SessionReport)
