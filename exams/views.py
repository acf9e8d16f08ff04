import csv
import io
import logging

from django.db import transaction
from django.db.models import Q
from django.shortcuts import get_object_or_404
from django.utils import timezone
from rest_framework import viewsets, permissions, status, filters
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied, ValidationError
from rest_framework.parsers import JSONParser, MultiPartParser, FormParser
from rest_framework.response import Response

from cores.exceptions import BadRequest, first_error
from cores.models import AuditLog
from users.permissions import IsStaffRole
from .models import Exam, Question
from .policy import can_manage_exam
from .serializers import (
    ExamSerializer, ExamListSerializer, QuestionSerializer, QuestionItemSerializer,
)

logger = logging.getLogger(__name__)


class ExamViewSet(viewsets.ModelViewSet):
    serializer_class = ExamSerializer

    # Enable search on title
    filter_backends = [filters.SearchFilter]
    search_fields = ['title']

    def get_queryset(self):
        user = self.request.user
        queryset = Exam.objects.all()
        if user.is_platform_admin:
            return queryset
        if user.is_learner:
            # Learners see the published, currently open tests of the admin who created them
            if user.created_by_id is None:
                return queryset.none()
            now = timezone.now()
            return queryset.filter(
                created_by_id=user.created_by_id, is_published=True,
            ).filter(
                Q(start_time__isnull=True) | Q(start_time__lte=now),
                Q(end_time__isnull=True) | Q(end_time__gte=now),
            )
        tenant = Q(created_by=user)
        if user.created_by_id:
            tenant |= Q(created_by_id=user.created_by_id)
        return queryset.filter(tenant)

    def get_serializer_class(self):
        if self.request.user.is_learner and self.action in ['list', 'retrieve']:
            return ExamListSerializer
        return ExamSerializer

    def get_permissions(self):
        if self.action in ['list', 'retrieve']:
            return [permissions.IsAuthenticated()]
        return [IsStaffRole()]

    def _require_owner(self, exam):
        if exam.created_by_id != self.request.user.id and not self.request.user.is_platform_admin:
            raise PermissionDenied("Not allowed")

    def perform_create(self, serializer):
        exam = serializer.save(created_by=self.request.user)
        AuditLog.record(self.request.user, 'CREATE', exam, details=f"Created test: {exam.title}")

    def perform_update(self, serializer):
        self._require_owner(serializer.instance)
        exam = serializer.save()
        AuditLog.record(self.request.user, 'UPDATE', exam, details=f"Updated test: {exam.title}")

    def perform_destroy(self, instance):
        self._require_owner(instance)
        AuditLog.record(self.request.user, 'DELETE', instance, details=f"Deleted test: {instance.title}")
        instance.delete()

    @action(detail=True, methods=['post'], url_path='publish')
    def publish(self, request, pk=None):
        exam = self.get_object()
        self._require_owner(exam)
        exam.is_published = True
        exam.save(update_fields=['is_published'])
        AuditLog.record(request.user, 'PUBLISH', exam, details=f"Published test: {exam.title}")
        return Response(ExamSerializer(exam).data)


class QuestionViewSet(viewsets.ModelViewSet):
    queryset = Question.objects.select_related('exam').all()

    # Enable Search and Filtering for the Question Bank
    filter_backends = [filters.SearchFilter]
    search_fields = ['text']

    # Add parsers to handle file uploads
    parser_classes = (JSONParser, MultiPartParser, FormParser)

    def get_permissions(self):
        if self.action in ['list', 'retrieve']:
            return [permissions.IsAuthenticated()]
        return [IsStaffRole()]

    def get_serializer_class(self):
        if self.request.user.is_learner:
            return QuestionItemSerializer
        return QuestionSerializer

    def get_queryset(self):
        queryset = super().get_queryset()
        user = self.request.user
        # Filter by Exam if provided ?exam_id=1
        exam_id = self.request.query_params.get('exam_id')
        if exam_id:
            queryset = queryset.filter(exam_id=exam_id)

        if user.is_platform_admin:
            return queryset
        if user.is_learner:
            return queryset.filter(exam__is_published=True, exam__created_by_id=user.created_by_id)
        tenant = Q(exam__created_by=user)
        if user.created_by_id:
            tenant |= Q(exam__created_by_id=user.created_by_id)
        return queryset.filter(tenant)

    def _require_manageable(self, exam):
        if not can_manage_exam(exam, self.request.user):
            logger.info("Question write denied: user=%s exam=%s", self.request.user.pk, exam.pk)
            raise PermissionDenied("Not allowed")

    def perform_create(self, serializer):
        self._require_manageable(serializer.validated_data['exam'])
        question = serializer.save()
        AuditLog.record(self.request.user, 'CREATE', question, details=f"Added question to test {question.exam_id}")

    def perform_update(self, serializer):
        self._require_manageable(serializer.instance.exam)
        question = serializer.save()
        AuditLog.record(self.request.user, 'UPDATE', question, details=f"Updated question on test {question.exam_id}")

    def perform_destroy(self, instance):
        self._require_manageable(instance.exam)
        AuditLog.record(self.request.user, 'DELETE', instance, details=f"Removed question from test {instance.exam_id}")
        instance.delete()

    @action(detail=False, methods=['post'], url_path='bulk-upload')
    def bulk_upload(self, request):
        """
        Upload questions for one test via CSV.
        Form fields: exam (test id), file.
        Expected CSV Header: text, question_type, option_a, option_b, option_c, option_d,
        correct_option, correct_options_csv, correct_answer, marks, negative_marks
        """
        file_obj = request.FILES.get('file')
        if not file_obj:
            raise BadRequest("No file uploaded")

        exam_id = request.data.get('exam')
        if not str(exam_id or '').isdigit():
            raise BadRequest("exam is required")
        exam = get_object_or_404(Exam, pk=int(exam_id))
        self._require_manageable(exam)

        try:
            decoded_file = file_obj.read().decode('utf-8')
        except UnicodeDecodeError:
            raise BadRequest("File must be UTF-8 encoded CSV")
        reader = csv.DictReader(io.StringIO(decoded_file))

        created_count = 0
        with transaction.atomic():
            for line_no, row in enumerate(reader, start=2):
                data = {key: (value.strip() if isinstance(value, str) else value)
                        for key, value in row.items() if key}
                data = {key: value for key, value in data.items() if value not in ('', None)}
                data['exam'] = exam.pk
                data['question_type'] = data.get('question_type', 'MCQ').upper()

                serializer = QuestionSerializer(data=data)
                try:
                    serializer.is_valid(raise_exception=True)
                except (BadRequest, ValidationError) as exc:
                    raise BadRequest(f"Row {line_no}: {first_error(exc.detail)}")
                serializer.save()
                created_count += 1

        AuditLog.record(request.user, 'CREATE', exam, details=f"Bulk uploaded {created_count} questions")
        return Response({"status": f"Successfully uploaded {created_count} questions"}, status=status.HTTP_201_CREATED)
