from django.urls import path
from .views import (
    StartAttemptView, SubmitAnswerView, SubmitAttemptView, AttemptDetailView, AttemptStateView,
    MyAttemptStateView, MyLatestAttemptView, MyResultsView, ExamResultsView,
    AllResultsView, ResultDeleteView,
    SessionReportView, FinalizeSessionReportView,
)

urlpatterns = [
    # --- Learner Attempt Flow ---
    path('tests/<int:exam_id>/attempts/', StartAttemptView.as_view(), name='start-attempt'),
    path('tests/<int:exam_id>/attempts/me/state/', MyAttemptStateView.as_view(), name='my-attempt-state'),
    path('tests/<int:exam_id>/attempts/me/latest/', MyLatestAttemptView.as_view(), name='my-latest-attempt'),
    path('attempts/<int:attempt_id>/', AttemptDetailView.as_view(), name='attempt-detail'),
    path('attempts/<int:attempt_id>/answers/', SubmitAnswerView.as_view(), name='submit-answer'),
    path('attempts/<int:attempt_id>/submit/', SubmitAttemptView.as_view(), name='submit-attempt'),
    path('attempts/<int:attempt_id>/state/', AttemptStateView.as_view(), name='attempt-state'),

    # --- Proctoring ---
    path('attempts/<int:attempt_id>/session-report/', SessionReportView.as_view(), name='session-report'),
    path('attempts/<int:attempt_id>/session-report/finalize/', FinalizeSessionReportView.as_view(), name='session-report-finalize'),

    # --- Results ---
    path('results/me/', MyResultsView.as_view(), name='my-results'),
    path('results/', AllResultsView.as_view(), name='all-results'),
    path('results/<int:attempt_id>/', ResultDeleteView.as_view(), name='delete-result'),
    path('tests/<int:exam_id>/results/', ExamResultsView.as_view(), name='exam-results'),
]
