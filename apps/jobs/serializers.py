from rest_framework import serializers

from apps.accounts.serializers import UserMinimalSerializer

from .models import Job, JobAssignment, JobStatus


REVIEW_ACTIONS = ('approve', 'reject', 'return')


class SubjectBriefSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField()
    code = serializers.CharField()


class JobAssignmentSerializer(serializers.ModelSerializer):
    student = UserMinimalSerializer(read_only=True)

    class Meta:
        model = JobAssignment
        fields = ['id', 'job', 'student', 'status', 'created_at', 'updated_at', 'completed_at']
        read_only_fields = fields


class JobSerializer(serializers.ModelSerializer):
    """Job with its subject, teacher and all assignments (teacher view)."""

    subject = SubjectBriefSerializer(read_only=True)
    teacher = UserMinimalSerializer(read_only=True)
    assignments = JobAssignmentSerializer(many=True, read_only=True)

    class Meta:
        model = Job
        fields = [
            'id', 'title', 'description', 'subject', 'teacher',
            'xp_reward', 'money_reward', 'max_students', 'status',
            'assignments', 'created_at', 'updated_at', 'closed_at',
        ]
        read_only_fields = fields


class StudentJobSerializer(serializers.ModelSerializer):
    """Open job as a student sees it, with only their own application."""

    subject = SubjectBriefSerializer(read_only=True)
    teacher = UserMinimalSerializer(read_only=True)
    my_assignment = serializers.SerializerMethodField()

    class Meta:
        model = Job
        fields = [
            'id', 'title', 'description', 'subject', 'teacher',
            'xp_reward', 'money_reward', 'max_students', 'status',
            'my_assignment', 'created_at',
        ]
        read_only_fields = fields

    def get_my_assignment(self, obj):
        mine = getattr(obj, 'my_assignments', [])
        if not mine:
            return None
        return {'id': mine[0].id, 'status': mine[0].status}


class JobCreateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=100)
    description = serializers.CharField(max_length=1000)
    subject_id = serializers.UUIDField()
    xp_reward = serializers.IntegerField(min_value=1, max_value=10000)
    money_reward = serializers.IntegerField(min_value=0, max_value=10000)
    max_students = serializers.IntegerField(min_value=1, max_value=10, default=1)

    def validate_title(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Title is required")
        return value


class JobListQuerySerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=JobStatus.choices, required=False)
    class_id = serializers.UUIDField(required=False)


class ReviewSerializer(serializers.Serializer):
    assignment_id = serializers.UUIDField()
    action = serializers.ChoiceField(choices=REVIEW_ACTIONS)


class PayoutSerializer(serializers.Serializer):
    student_id = serializers.UUIDField()
    name = serializers.CharField()
    xp_amount = serializers.IntegerField()
    money_amount = serializers.IntegerField()


class RemainderSerializer(serializers.Serializer):
    xp = serializers.IntegerField()
    money = serializers.IntegerField()


class CloseJobResultSerializer(serializers.Serializer):
    job = JobSerializer()
    payouts = PayoutSerializer(many=True)
    remainder = RemainderSerializer()


class JobStatsSerializer(serializers.Serializer):
    total_jobs = serializers.IntegerField()
    open_jobs = serializers.IntegerField()
    closed_jobs = serializers.IntegerField()
    total_applications = serializers.IntegerField()
    pending_applications = serializers.IntegerField()
    completed_assignments = serializers.IntegerField()
