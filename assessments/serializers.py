from rest_framework import serializers

from exams.policy import effective_duration_minutes, effective_max_violations, effective_proctored
from exams.serializers import QuestionItemSerializer
from .models import Attempt, SessionReport


class AttemptSerializer(serializers.ModelSerializer):
    """Lightweight serializer for lists / dashboard history."""
    exam_title = serializers.CharField(source='exam.title', read_only=True)
    status = serializers.CharField(read_only=True)

    class Meta:
        model = Attempt
        fields = [
            'id', 'exam', 'exam_title', 'student', 'attempt_number',
            'started_at', 'submitted_at', 'completed', 'score', 'updated_at', 'status',
        ]


class ResultSerializer(AttemptSerializer):
    student_email = serializers.CharField(source='student.email', read_only=True)
    is_valid_test = serializers.SerializerMethodField()

    class Meta(AttemptSerializer.Meta):
        fields = AttemptSerializer.Meta.fields + ['student_email', 'is_valid_test']

    def get_is_valid_test(self, obj):
        report = getattr(obj, 'session_report', None)
        return report.is_valid_test if report is not None else None


# --- Resume read model ---

class AttemptInfoSerializer(serializers.ModelSerializer):
    test_id = serializers.IntegerField(source='exam_id', read_only=True)
    proctored = serializers.SerializerMethodField()
    duration_minutes = serializers.SerializerMethodField()
    max_violations = serializers.SerializerMethodField()

    class Meta:
        model = Attempt
        fields = [
            'id', 'test_id', 'attempt_number', 'completed',
            'started_at', 'submitted_at', 'updated_at',
            'proctored', 'duration_minutes', 'max_violations',
        ]

    def get_proctored(self, obj):
        return effective_proctored(obj.exam)

    def get_duration_minutes(self, obj):
        return effective_duration_minutes(obj.exam.duration_minutes)

    def get_max_violations(self, obj):
        return effective_max_violations(obj.exam.max_violations)


class AttemptStateSerializer(serializers.Serializer):
    """Everything a client needs to resume: no answer keys, no correctness flags."""
    attempt = AttemptInfoSerializer()
    questions = QuestionItemSerializer(many=True)
    answers = serializers.SerializerMethodField()

    def get_answers(self, obj):
        # JSON object keys are strings
        return {str(question_id): text for question_id, text in obj['answers'].items()}


# --- Requests ---

class AnswerSubmitSerializer(serializers.Serializer):
    question_id = serializers.IntegerField()
    # Stored as submitted; normalisation happens only when evaluating
    answer_text = serializers.CharField(trim_whitespace=False)

    def validate_answer_text(self, value):
        if not value.strip():
            raise serializers.ValidationError("This field may not be blank.")
        return value


class SessionReportSerializer(serializers.ModelSerializer):
    class Meta:
        model = SessionReport
        fields = [
            'id', 'attempt',
            *SessionReport.COUNTER_FIELDS,
            'is_valid_test', 'invalid_reason', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'attempt', 'is_valid_test', 'invalid_reason', 'created_at', 'updated_at']


class SessionReportFinalizeSerializer(serializers.Serializer):
    is_valid_test = serializers.BooleanField()
    invalid_reason = serializers.CharField(required=False, allow_blank=True, allow_null=True)
