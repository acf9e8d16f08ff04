from rest_framework import generics
from rest_framework.views import APIView
from rest_framework.response import Response

from users.permissions import IsPlatformAdmin
from .models import PlatformSetting, AuditLog
from .serializers import PlatformSettingSerializer, AuditLogSerializer


class PlatformSettingView(APIView):
    permission_classes = [IsPlatformAdmin]

    def get(self, request):
        return Response(PlatformSettingSerializer(PlatformSetting.load()).data)

    def put(self, request):
        platform = PlatformSetting.load()
        serializer = PlatformSettingSerializer(platform, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        changed = ", ".join(sorted(serializer.validated_data)) or "nothing"
        AuditLog.record(request.user, 'SETTINGS', platform, details=f"Changed: {changed}")
        return Response(serializer.data)


class AuditLogListView(generics.ListAPIView):
    """Newest first; filter with ?action=, ?target_model= and ?target_object_id=."""
    serializer_class = AuditLogSerializer
    permission_classes = [IsPlatformAdmin]
    filter_fields = ('action', 'target_model', 'target_object_id')

    def get_queryset(self):
        queryset = AuditLog.objects.select_related('actor').order_by('-timestamp')
        for field in self.filter_fields:
            value = self.request.query_params.get(field)
            if value:
                queryset = queryset.filter(**{field: value})
        return queryset
