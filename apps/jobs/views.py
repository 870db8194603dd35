from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import OpenApiParameter, extend_schema

from apps.accounts.permissions import IsStudent, IsTeacher
from apps.core.request_ids import get_request_id

from .serializers import (
    CloseJobResultSerializer,
    JobAssignmentSerializer,
    JobCreateSerializer,
    JobListQuerySerializer,
    JobSerializer,
    JobStatsSerializer,
    ReviewSerializer,
    StudentJobSerializer,
)
from .services import (
    apply_for_job,
    approve_job_assignment,
    close_job,
    create_job,
    get_job_stats,
    get_jobs_for_student,
    get_jobs_for_teacher,
    reject_job_assignment,
    return_job_assignment,
)

REQUEST_ID_PARAMETER = OpenApiParameter('X-Request-Id', str, OpenApiParameter.HEADER, required=False)

REVIEW_HANDLERS = {
    'approve': approve_job_assignment,
    'reject': reject_job_assignment,
    'return': return_job_assignment,
}


@extend_schema(
    methods=['GET'],
    parameters=[JobListQuerySerializer],
    responses={200: JobSerializer(many=True)},
    description="Teachers see their own jobs; students see open jobs in their subjects.",
    tags=['jobs'],
)
@extend_schema(
    methods=['POST'],
    request=JobCreateSerializer,
    responses={201: JobSerializer},
    parameters=[REQUEST_ID_PARAMETER],
    description="Post a new job (teacher/operator).",
    tags=['jobs'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def jobs(request):
    if request.method == 'POST':
        if not IsTeacher().has_permission(request, None):
            return Response(
                {'error': "Only teachers can create jobs"},
                status=status.HTTP_403_FORBIDDEN
            )

        serializer = JobCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        job = create_job(
            teacher_id=request.user.id,
            request_id=get_request_id(request),
            **serializer.validated_data
        )
        return Response(JobSerializer(job).data, status=status.HTTP_201_CREATED)

    query = JobListQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)

    if IsTeacher().has_permission(request, None):
        job_list = get_jobs_for_teacher(
            teacher_id=request.user.id,
            status=query.validated_data.get('status'),
        )
        return Response(JobSerializer(job_list, many=True).data)

    job_list = get_jobs_for_student(
        student_id=request.user.id,
        class_id=query.validated_data.get('class_id'),
    )
    return Response(StudentJobSerializer(job_list, many=True).data)


@extend_schema(
    request=None,
    responses={201: JobAssignmentSerializer},
    parameters=[REQUEST_ID_PARAMETER],
    description="Apply for an open job (student).",
    tags=['jobs'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsStudent])
def apply(request, job_id):
    assignment = apply_for_job(
        job_id=job_id,
        student_id=request.user.id,
        request_id=get_request_id(request),
    )
    return Response(JobAssignmentSerializer(assignment).data, status=status.HTTP_201_CREATED)


@extend_schema(
    request=ReviewSerializer,
    responses={200: JobAssignmentSerializer},
    parameters=[REQUEST_ID_PARAMETER],
    description="Approve, reject or return an application (job creator only).",
    tags=['jobs'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsTeacher])
def review(request, job_id):
    serializer = ReviewSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    handler = REVIEW_HANDLERS[serializer.validated_data['action']]
    assignment = handler(
        assignment_id=serializer.validated_data['assignment_id'],
        teacher_id=request.user.id,
        request_id=get_request_id(request),
        job_id=job_id,
    )
    return Response(JobAssignmentSerializer(assignment).data)


@extend_schema(
    request=None,
    responses={200: CloseJobResultSerializer},
    parameters=[REQUEST_ID_PARAMETER],
    description="Close a job and pay approved students their share (job creator only).",
    tags=['jobs'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsTeacher])
def close(request, job_id):
    """Close job and distribute rewards."""
    result = close_job(
        job_id=job_id,
        teacher_id=request.user.id,
        request_id=get_request_id(request),
    )
    return Response(CloseJobResultSerializer(result).data)


@extend_schema(
    responses={200: JobStatsSerializer},
    description="Job and application counts for the current teacher.",
    tags=['jobs'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsTeacher])
def stats(request):
    return Response(JobStatsSerializer(get_job_stats(teacher_id=request.user.id)).data)
