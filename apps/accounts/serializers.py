from rest_framework import serializers
from .models import User


class UserSerializer(serializers.ModelSerializer):
    """Basic user serializer for profile display."""

    school_class = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'display_name',
            'role',
            'school_class',
            'created_at',
            'last_login',
        ]
        read_only_fields = fields

    def get_school_class(self, obj):
        if obj.school_class_id is None:
            return None
        return {'id': obj.school_class_id, 'name': obj.school_class.name}


class UserMinimalSerializer(serializers.ModelSerializer):
    """Minimal user info for nested serialization."""

    display_name = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ['id', 'email', 'display_name', 'role']
        read_only_fields = fields

    def get_display_name(self, obj):
        return obj.get_display_name()
