# exams/serializers.py
from rest_framework import serializers

from cores.exceptions import BadRequest
from .models import Exam, Question
from .policy import effective_marks, effective_max_attempts, effective_negative_marks
from .question_types import for_type

# --- Question Serializers ---

ANSWER_KEY_FIELDS = ('correct_option', 'correct_options_csv', 'correct_answer')


class QuestionSerializer(serializers.ModelSerializer):
    """Authoring view of a question, answer key included."""
    # Read-only field to show exam title
    exam_title = serializers.CharField(source='exam.title', read_only=True)
    marks = serializers.IntegerField(required=False, allow_null=True)
    negative_marks = serializers.IntegerField(required=False, allow_null=True)

    class Meta:
        model = Question
        fields = [
            'id', 'exam', 'exam_title', 'text', 'question_type',
            'option_a', 'option_b', 'option_c', 'option_d',
            'correct_option', 'correct_options_csv', 'correct_answer',
            'marks', 'negative_marks',
        ]
        extra_kwargs = {'question_type': {'required': True}}

    def validate(self, attrs):
        # Updates are partial: check the answer key as it will be stored
        def current(field):
            if field in attrs:
                return attrs[field]
            return getattr(self.instance, field, None)

        kind = for_type(current('question_type'))
        kind.validate(**{field: current(field) for field in ANSWER_KEY_FIELDS})

        if 'marks' in attrs or self.instance is None:
            attrs['marks'] = effective_marks(attrs.get('marks'))
        if 'negative_marks' in attrs or self.instance is None:
            attrs['negative_marks'] = effective_negative_marks(attrs.get('negative_marks'))
        if self.instance is not None and 'exam' in attrs and attrs['exam'] != self.instance.exam:
            raise BadRequest("A question cannot be moved to another test")
        return attrs


class QuestionItemSerializer(serializers.ModelSerializer):
    """Learner-facing question: never carries the answer key."""
    class Meta:
        model = Question
        fields = [
            'id', 'question_type', 'text', 'marks', 'negative_marks',
            'option_a', 'option_b', 'option_c', 'option_d',
        ]

# --- Exam Serializers ---

class ExamSerializer(serializers.ModelSerializer):
    created_by = serializers.PrimaryKeyRelatedField(read_only=True)
    max_attempts = serializers.IntegerField(required=False, allow_null=True)

    # Read-only counts
    total_questions = serializers.IntegerField(source='questions.count', read_only=True)

    class Meta:
        model = Exam
        fields = [
            'id', 'title', 'description', 'created_by',
            'start_time', 'end_time', 'is_published', 'max_attempts',
            'max_violations', 'proctored', 'duration_minutes',
            'total_marks', 'total_questions', 'created_at',
        ]
        read_only_fields = ['total_marks', 'created_at']

    def validate(self, attrs):
        start = attrs.get('start_time', getattr(self.instance, 'start_time', None))
        end = attrs.get('end_time', getattr(self.instance, 'end_time', None))
        if start is not None and end is not None and end < start:
            raise BadRequest("end_time must be after start_time")

        if 'max_attempts' in attrs or self.instance is None:
            requested = attrs.get('max_attempts')
            if self.instance is not None and (requested is None or requested <= 0):
                # Non-positive values leave an existing limit unchanged
                attrs.pop('max_attempts', None)
            else:
                attrs['max_attempts'] = effective_max_attempts(requested)
        return attrs


class ExamListSerializer(serializers.ModelSerializer):
    class Meta:
        model = Exam
        fields = ['id', 'title', 'start_time', 'end_time', 'duration_minutes', 'total_marks', 'max_attempts']
