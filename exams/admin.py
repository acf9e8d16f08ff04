from django.contrib import admin

# Register your models here.
from .models import Exam, Question


class QuestionInline(admin.TabularInline):
    model = Question
    extra = 0


@admin.register(Exam)
class ExamAdmin(admin.ModelAdmin):
    list_display = ('title', 'created_by', 'is_published', 'start_time', 'end_time', 'max_attempts', 'total_marks')
    readonly_fields = ('total_marks',)
    inlines = [QuestionInline]


admin.site.register(Question)
