from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import OpenApiParameter, extend_schema

from apps.accounts.permissions import IsOperator
from apps.core.request_ids import get_request_id

from .serializers import (
    AchievementAwardSerializer,
    AchievementCreateSerializer,
    AchievementSerializer,
    AwardAchievementSerializer,
)
from .services import award_achievement, create_achievement, get_achievements, get_user_achievements


@extend_schema(
    methods=['GET'],
    responses={200: AchievementSerializer(many=True)},
    description="All achievements with award counts. Non-operators only see active ones.",
    tags=['achievements'],
)
@extend_schema(
    methods=['POST'],
    request=AchievementCreateSerializer,
    responses={201: AchievementSerializer},
    description="Create an achievement (operator only).",
    tags=['achievements'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def achievements(request):
    is_operator = IsOperator().has_permission(request, None)

    if request.method == 'POST':
        if not is_operator:
            return Response(
                {'error': "Only operators can create achievements"},
                status=status.HTTP_403_FORBIDDEN
            )

        serializer = AchievementCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        achievement = create_achievement(
            operator_id=request.user.id,
            request_id=get_request_id(request),
            **serializer.validated_data
        )
        return Response(AchievementSerializer(achievement).data, status=status.HTTP_201_CREATED)

    return Response(
        AchievementSerializer(get_achievements(include_inactive=is_operator), many=True).data
    )


@extend_schema(
    request=AwardAchievementSerializer,
    responses={201: AchievementAwardSerializer},
    parameters=[OpenApiParameter('X-Request-Id', str, OpenApiParameter.HEADER, required=False)],
    description="Award an achievement to a user (operator only).",
    tags=['achievements'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsOperator])
def award(request, achievement_id):
    serializer = AwardAchievementSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    achievement_award = award_achievement(
        achievement_id=achievement_id,
        user_id=serializer.validated_data['user_id'],
        awarded_by_id=request.user.id,
        request_id=get_request_id(request),
    )
    return Response(AchievementAwardSerializer(achievement_award).data, status=status.HTTP_201_CREATED)


@extend_schema(
    responses={200: AchievementAwardSerializer(many=True)},
    description="Achievements the current user holds.",
    tags=['achievements'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_achievements(request):
    awards = get_user_achievements(user_id=request.user.id)
    return Response(AchievementAwardSerializer(awards, many=True).data)
