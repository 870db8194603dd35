from rest_framework import serializers

from apps.accounts.serializers import UserMinimalSerializer

from .models import Achievement, AchievementAward


class AchievementSerializer(serializers.ModelSerializer):
    awards_count = serializers.IntegerField(read_only=True, default=0)

    class Meta:
        model = Achievement
        fields = [
            'id', 'name', 'description', 'badge_url', 'criteria',
            'is_active', 'awards_count', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'is_active', 'created_at', 'updated_at']


class AchievementCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    description = serializers.CharField(max_length=1000)
    badge_url = serializers.URLField(required=False, allow_blank=True, default='')
    criteria = serializers.CharField(required=False, allow_blank=True, default='')


class AwardAchievementSerializer(serializers.Serializer):
    user_id = serializers.UUIDField()


class AchievementAwardSerializer(serializers.ModelSerializer):
    user = UserMinimalSerializer(read_only=True)
    awarded_by = UserMinimalSerializer(read_only=True)
    achievement = AchievementSerializer(read_only=True)

    class Meta:
        model = AchievementAward
        fields = ['id', 'user', 'achievement', 'awarded_by', 'request_id', 'created_at']
        read_only_fields = fields
