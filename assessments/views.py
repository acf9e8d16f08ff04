from rest_framework import generics, permissions, status, views
from rest_framework.response import Response

from . import services
from .serializers import (
    AttemptSerializer, AttemptStateSerializer, AnswerSubmitSerializer, ResultSerializer,
    SessionReportSerializer, SessionReportFinalizeSerializer,
)


# --- LEARNER FLOW ---

class StartAttemptView(views.APIView):
    """
    Starts the first attempt on a test, or moves the caller's attempt on
    to its next number. Admin roles may call this to preview a test.
    """
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, exam_id):
        attempt = services.start_attempt(request.user, exam_id)
        return Response(AttemptSerializer(attempt).data)


class SubmitAnswerView(views.APIView):
    """Saves (or overwrites) the caller's answer to one question."""
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, attempt_id):
        serializer = AnswerSubmitSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        services.submit_or_update_answer(
            request.user, attempt_id,
            serializer.validated_data['question_id'],
            serializer.validated_data['answer_text'],
        )
        return Response({"status": "Answer saved successfully"})


class SubmitAttemptView(views.APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, attempt_id):
        attempt = services.submit_attempt(request.user, attempt_id)
        return Response(AttemptSerializer(attempt).data)


class AttemptDetailView(views.APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, attempt_id):
        attempt = services.get_attempt(request.user, attempt_id)
        return Response(AttemptSerializer(attempt).data)


class AttemptStateView(views.APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, attempt_id):
        state = services.get_attempt_state(request.user, attempt_id)
        return Response(AttemptStateSerializer(state).data)


class MyAttemptStateView(views.APIView):
    """Resume without knowing the attempt id: latest attempt of the caller on this test."""
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, exam_id):
        state = services.get_attempt_state_by_test(request.user, exam_id)
        return Response(AttemptStateSerializer(state).data)


class MyLatestAttemptView(views.APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, exam_id):
        only_incomplete = request.query_params.get('only_incomplete', 'true').lower() not in ('false', '0', 'no')
        attempt = services.get_latest_attempt(request.user, exam_id, only_incomplete=only_incomplete)
        if attempt is None:
            return Response({"error": "No attempt found"}, status=status.HTTP_404_NOT_FOUND)
        return Response(AttemptSerializer(attempt).data)


# --- RESULTS ---

class MyResultsView(generics.ListAPIView):
    """List all attempts of the logged-in user."""
    permission_classes = [permissions.IsAuthenticated]
    serializer_class = ResultSerializer

    def get_queryset(self):
        return services.my_results(self.request.user)


class ExamResultsView(generics.ListAPIView):
    permission_classes = [permissions.IsAuthenticated]
    serializer_class = ResultSerializer

    def get_queryset(self):
        return services.exam_results(self.request.user, self.kwargs['exam_id'])


class AllResultsView(generics.ListAPIView):
    """Results across the tests the caller oversees (admin, faculty and platform admins)."""
    permission_classes = [permissions.IsAuthenticated]
    serializer_class = ResultSerializer

    def get_queryset(self):
        return services.all_results(self.request.user)


class ResultDeleteView(views.APIView):
    """Removes an attempt row so the learner can start the test afresh."""
    permission_classes = [permissions.IsAuthenticated]

    def delete(self, request, attempt_id):
        services.delete_result(request.user, attempt_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


# --- PROCTORING ---

class SessionReportView(views.APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, attempt_id):
        report = services.get_session_report(request.user, attempt_id)
        return Response(SessionReportSerializer(report).data)

    def put(self, request, attempt_id):
        serializer = SessionReportSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        report = services.upsert_session_report(request.user, attempt_id, serializer.validated_data)
        return Response(SessionReportSerializer(report).data)

    post = put


class FinalizeSessionReportView(views.APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, attempt_id):
        serializer = SessionReportFinalizeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        report = services.finalize_session_report(
            request.user, attempt_id,
            serializer.validated_data['is_valid_test'],
            serializer.validated_data.get('invalid_reason'),
        )
        return Response(SessionReportSerializer(report).data)
