from rest_framework import serializers

from apps.accounts.serializers import UserMinimalSerializer
from apps.shop.models import ItemRarity

from .models import Event, EventParticipation


class ParticipantSerializer(serializers.ModelSerializer):
    user = UserMinimalSerializer(read_only=True)

    class Meta:
        model = EventParticipation
        fields = ['id', 'user', 'created_at']
        read_only_fields = fields


class EventSerializer(serializers.ModelSerializer):
    participations = ParticipantSerializer(many=True, read_only=True)
    participant_count = serializers.SerializerMethodField()

    class Meta:
        model = Event
        fields = [
            'id', 'title', 'description', 'starts_at', 'ends_at', 'xp_bonus',
            'rarity_reward', 'is_active', 'participant_count', 'participations',
            'created_at',
        ]
        read_only_fields = fields

    def get_participant_count(self, obj):
        return len(obj.participations.all())


class EventCreateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=200)
    description = serializers.CharField(required=False, allow_blank=True, default='')
    starts_at = serializers.DateTimeField()
    ends_at = serializers.DateTimeField(required=False, allow_null=True, default=None)
    xp_bonus = serializers.IntegerField(min_value=0, max_value=10000, default=0)
    rarity_reward = serializers.ChoiceField(
        choices=ItemRarity.choices, required=False, allow_null=True, default=None
    )

    def validate(self, attrs):
        if attrs.get('ends_at') and attrs['ends_at'] < attrs['starts_at']:
            raise serializers.ValidationError({'ends_at': "End must be after start"})
        return attrs


class EventListQuerySerializer(serializers.Serializer):
    include_inactive = serializers.BooleanField(default=False)


class ParticipationSerializer(serializers.ModelSerializer):

    class Meta:
        model = EventParticipation
        fields = ['id', 'event', 'user', 'request_id', 'created_at']
        read_only_fields = fields
