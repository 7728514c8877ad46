"""
Invitation Views

- 공고 소유자: 후보자 초대 발송 / 초대 목록 조회 (JWT 인증)
- 후보자: 토큰으로 초대 조회 / 스크리닝 답변 제출 (비인증)
"""

import logging
from datetime import timedelta

from common.application.result import Err, ErrorCode
from common.http import err_response
from django.conf import settings
from drf_spectacular.utils import OpenApiTypes, extend_schema
from invitation.application.container import (
    build_issue_invitations_usecase,
    build_list_invitations_usecase,
    build_resolve_invitation_usecase,
    build_submit_screening_responses_usecase,
)
from invitation.serializers import (
    InvitationListSerializer,
    IssuedInvitationsSerializer,
    IssueInvitationsRequestSerializer,
    ResolvedInvitationSerializer,
    ScreeningSubmissionRequestSerializer,
    SubmissionResultSerializer,
)
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

logger = logging.getLogger(__name__)

# 만료된 초대는 410 Gone
INVITATION_STATUS_OVERRIDES = {ErrorCode.EXPIRED: status.HTTP_410_GONE}


class JobPostingInvitationsView(APIView):
    """
    POST /api/v1/job-postings/<id>/invitations/  후보자 초대 발송
    GET  /api/v1/job-postings/<id>/invitations/  초대 목록 + 집계
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        request=IssueInvitationsRequestSerializer,
        responses={201: IssuedInvitationsSerializer},
        summary="Send screening invitations",
    )
    def post(self, request, job_posting_id: int):
        serializer = IssueInvitationsRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        validity_days = data.get("validity_days") or int(
            getattr(settings, "INVITATION_DEFAULT_VALIDITY_DAYS", 7)
        )
        try:
            result = build_issue_invitations_usecase().execute(
                job_posting_id=int(job_posting_id),
                actor_id=int(request.user.id),
                candidate_ids=data["candidate_ids"],
                message=data.get("message", ""),
                validity_period=timedelta(days=validity_days),
            )
            if isinstance(result, Err):
                return err_response(result)
            return Response(
                IssuedInvitationsSerializer(result.value).data,
                status=status.HTTP_201_CREATED,
            )
        except Exception as e:
            logger.error(
                f"Failed to send invitations for job posting {job_posting_id}: {str(e)}",
                exc_info=True,
            )
            return Response(
                {"error": "Failed to send invitations"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

    @extend_schema(responses={200: InvitationListSerializer}, summary="List invitations")
    def get(self, request, job_posting_id: int):
        try:
            result = build_list_invitations_usecase().execute(
                job_posting_id=int(job_posting_id), actor_id=int(request.user.id)
            )
            if isinstance(result, Err):
                return err_response(result)
            return Response(InvitationListSerializer(result.value).data)
        except Exception as e:
            logger.error(
                f"Failed to fetch invitations for job posting {job_posting_id}: {str(e)}",
                exc_info=True,
            )
            return Response(
                {"error": "Failed to fetch invitations"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )


class InvitationByTokenView(APIView):
    """
    GET  /api/v1/invitations/<token>/  초대 조회 (PENDING -> VIEWED)
    POST /api/v1/invitations/<token>/  스크리닝 답변 제출 (전체 교체)
    """

    authentication_classes = []
    permission_classes = [AllowAny]

    @extend_schema(
        responses={200: ResolvedInvitationSerializer, 410: OpenApiTypes.OBJECT},
        summary="Resolve invitation",
    )
    def get(self, request, token: str):
        try:
            result = build_resolve_invitation_usecase().execute(token=token)
            if isinstance(result, Err):
                return err_response(result, status_overrides=INVITATION_STATUS_OVERRIDES)
            return Response(ResolvedInvitationSerializer(result.value).data)
        except Exception as e:
            logger.error(f"Failed to fetch invitation: {str(e)}", exc_info=True)
            return Response(
                {"error": "Failed to fetch invitation"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

    @extend_schema(
        request=ScreeningSubmissionRequestSerializer,
        responses={200: SubmissionResultSerializer, 410: OpenApiTypes.OBJECT},
        summary="Submit screening responses",
    )
    def post(self, request, token: str):
        serializer = ScreeningSubmissionRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            result = build_submit_screening_responses_usecase().execute(
                token=token, responses=serializer.validated_data["responses"]
            )
            if isinstance(result, Err):
                return err_response(result, status_overrides=INVITATION_STATUS_OVERRIDES)
            return Response(SubmissionResultSerializer(result.value).data)
        except Exception as e:
            logger.error(f"Failed to submit screening responses: {str(e)}", exc_info=True)
            return Response(
                {"error": "Failed to submit responses"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
