from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import OpenApiParameter, extend_schema

from apps.accounts.permissions import IsOperator, IsTeacher
from apps.core.request_ids import get_request_id

from .serializers import (
    BudgetQuerySerializer,
    DailyBudgetListSerializer,
    DailyBudgetSerializer,
    GrantXPSerializer,
    LeaderboardEntrySerializer,
    LeaderboardQuerySerializer,
    SetDailyBudgetSerializer,
    StudentXPQuerySerializer,
    StudentXPSerializer,
    TeacherDailyBudgetSerializer,
    XPAuditSerializer,
)
from .services import (
    get_student_xp,
    get_teacher_daily_budget,
    get_teacher_daily_budgets,
    get_xp_leaderboard,
    grant_xp,
    set_daily_budget,
)


@extend_schema(
    request=GrantXPSerializer,
    responses={201: XPAuditSerializer},
    parameters=[OpenApiParameter('X-Request-Id', str, OpenApiParameter.HEADER, required=False)],
    description="Grant XP to a student. Teachers are limited by their daily budget per subject.",
    tags=['xp'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsTeacher])
def grant(request):
    """Grant XP (teacher/operator)."""
    serializer = GrantXPSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    audit = grant_xp(
        teacher_id=request.user.id,
        request_id=get_request_id(request),
        **serializer.validated_data
    )
    return Response(XPAuditSerializer(audit).data, status=status.HTTP_201_CREATED)


@extend_schema(
    parameters=[StudentXPQuerySerializer],
    responses={200: StudentXPSerializer},
    description="XP total, level and history. Teachers may pass student_id; students see their own.",
    tags=['xp'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def student_xp(request):
    """Get a student's XP and level."""
    query = StudentXPQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)

    student_id = request.user.id
    requested = query.validated_data.get('student_id')
    if requested and requested != request.user.id:
        if not IsTeacher().has_permission(request, None):
            return Response(
                {'error': "You can only view your own XP"},
                status=status.HTTP_403_FORBIDDEN
            )
        student_id = requested

    data = get_student_xp(student_id=student_id)
    return Response(StudentXPSerializer(data).data)


@extend_schema(
    parameters=[BudgetQuerySerializer],
    responses={200: DailyBudgetListSerializer},
    description="Today's XP budget for the current teacher, per subject or all subjects.",
    tags=['xp'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsTeacher])
def budget_today(request):
    """Get the current teacher's daily budget."""
    query = BudgetQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)
    date = query.validated_data.get('date')

    subject_id = query.validated_data.get('subject_id')
    if subject_id:
        budget = get_teacher_daily_budget(
            teacher_id=request.user.id,
            subject_id=subject_id,
            date=date,
        )
        return Response(DailyBudgetSerializer(budget).data)

    budgets = get_teacher_daily_budgets(teacher_id=request.user.id, date=date)
    return Response(DailyBudgetListSerializer(budgets).data)


@extend_schema(
    request=SetDailyBudgetSerializer,
    responses={200: TeacherDailyBudgetSerializer},
    description="Override a teacher's XP budget for a day (operator only).",
    tags=['xp'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsOperator])
def set_budget(request):
    serializer = SetDailyBudgetSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    row = set_daily_budget(operator_id=request.user.id, **serializer.validated_data)
    return Response(TeacherDailyBudgetSerializer(row).data)


@extend_schema(
    parameters=[LeaderboardQuerySerializer],
    responses={200: LeaderboardEntrySerializer(many=True)},
    description="Students ranked by total XP.",
    tags=['xp'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def leaderboard(request):
    query = LeaderboardQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)

    entries = get_xp_leaderboard(
        class_id=query.validated_data.get('class_id'),
        limit=query.validated_data['limit'],
    )
    return Response(LeaderboardEntrySerializer(entries, many=True).data)
