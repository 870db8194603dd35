from rest_framework import serializers

from .models import TeacherDailyBudget, XPAudit


class XPAuditSerializer(serializers.ModelSerializer):

    class Meta:
        model = XPAudit
        fields = ['id', 'user', 'amount', 'reason', 'request_id', 'created_at']
        read_only_fields = fields


class GrantXPSerializer(serializers.Serializer):
    """Input for a teacher's XP grant."""

    student_id = serializers.UUIDField()
    subject_id = serializers.UUIDField()
    amount = serializers.IntegerField(min_value=1, max_value=10000)
    reason = serializers.CharField(max_length=255)

    def validate_reason(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Reason cannot be blank")
        return value


class StudentXPQuerySerializer(serializers.Serializer):
    student_id = serializers.UUIDField(required=False)


class StudentXPSerializer(serializers.Serializer):
    student_id = serializers.UUIDField(source='student.id')
    total_xp = serializers.IntegerField()
    level = serializers.IntegerField()
    progress_to_next_level = serializers.FloatField()
    xp_for_next_level = serializers.IntegerField()
    xp_needed_for_next_level = serializers.IntegerField()
    recent_grants = XPAuditSerializer(many=True)
    audits = XPAuditSerializer(many=True)


class BudgetQuerySerializer(serializers.Serializer):
    subject_id = serializers.UUIDField(required=False)
    date = serializers.DateField(required=False)


class SubjectBriefSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField()
    code = serializers.CharField()


class DailyBudgetSerializer(serializers.Serializer):
    subject = SubjectBriefSerializer()
    date = serializers.DateField()
    budget = serializers.IntegerField()
    used = serializers.IntegerField()
    remaining = serializers.IntegerField()


class BudgetSummarySerializer(serializers.Serializer):
    total_budget = serializers.IntegerField()
    total_used = serializers.IntegerField()
    total_remaining = serializers.IntegerField()


class DailyBudgetListSerializer(serializers.Serializer):
    date = serializers.DateField()
    budgets = DailyBudgetSerializer(many=True)
    summary = BudgetSummarySerializer()


class SetDailyBudgetSerializer(serializers.Serializer):
    teacher_id = serializers.UUIDField()
    subject_id = serializers.UUIDField()
    budget = serializers.IntegerField(min_value=0, max_value=100000)
    date = serializers.DateField(required=False)


class TeacherDailyBudgetSerializer(serializers.ModelSerializer):
    remaining = serializers.IntegerField(read_only=True)

    class Meta:
        model = TeacherDailyBudget
        fields = ['id', 'teacher', 'subject', 'date', 'budget', 'used', 'remaining']
        read_only_fields = fields


class LeaderboardQuerySerializer(serializers.Serializer):
    class_id = serializers.UUIDField(required=False)
    limit = serializers.IntegerField(required=False, min_value=1, max_value=100, default=10)


class LeaderboardEntrySerializer(serializers.Serializer):
    rank = serializers.IntegerField()
    user_id = serializers.UUIDField()
    name = serializers.CharField()
    total_xp = serializers.IntegerField()
    level = serializers.IntegerField()
