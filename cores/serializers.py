from rest_framework import serializers
from .models import PlatformSetting, AuditLog


class PlatformSettingSerializer(serializers.ModelSerializer):
    class Meta:
        model = PlatformSetting
        fields = [
            'id', 'site_name', 'support_email', 'maintenance_mode',
            'default_max_violations', 'default_duration_minutes', 'strict_proctoring',
        ]
        read_only_fields = ['id']

    def validate_default_max_violations(self, value):
        if value < 1:
            raise serializers.ValidationError("Must allow at least one violation.")
        return value


class AuditLogSerializer(serializers.ModelSerializer):
    actor_email = serializers.CharField(source='actor.email', read_only=True, default=None)
    actor_role = serializers.CharField(source='actor.role', read_only=True, default=None)
    action_label = serializers.CharField(source='get_action_display', read_only=True)

    class Meta:
        model = AuditLog
        fields = [
            'id', 'actor', 'actor_email', 'actor_role', 'action', 'action_label',
            'target_model', 'target_object_id', 'timestamp', 'details',
        ]
