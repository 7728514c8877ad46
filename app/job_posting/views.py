"""
Job Posting Lifecycle Views

공고 게시/보관/재게시, 만료 정보, 만료 공고 정리(cron) API (Thin Controller)
"""

import logging

from common.application.result import Err
from common.http import err_response
from drf_spectacular.utils import OpenApiTypes, extend_schema
from job_posting.application.container import (
    build_archive_job_posting_usecase,
    build_get_job_posting_expiry_usecase,
    build_publish_job_posting_usecase,
    build_republish_job_posting_usecase,
    build_sweep_expired_job_postings_usecase,
)
from job_posting.permissions import HasCronSecret
from job_posting.serializers import (
    JobPostingExpirySerializer,
    JobPostingTransitionSerializer,
    SweepRequestSerializer,
    SweepResultSerializer,
)
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

logger = logging.getLogger(__name__)


class _JobPostingTransitionView(APIView):
    permission_classes = [IsAuthenticated]
    action_name = ""

    def build_usecase(self):
        raise NotImplementedError

    @extend_schema(request=None, responses={200: JobPostingTransitionSerializer})
    def patch(self, request, job_posting_id: int):
        try:
            result = self.build_usecase().execute(
                job_posting_id=int(job_posting_id), actor_id=int(request.user.id)
            )
            if isinstance(result, Err):
                return err_response(result)
            return Response(
                JobPostingTransitionSerializer(result.value).data,
                status=status.HTTP_200_OK,
            )
        except Exception as e:
            logger.error(
                f"Failed to {self.action_name} job posting {job_posting_id}: {str(e)}",
                exc_info=True,
            )
            return Response(
                {"error": f"Failed to {self.action_name} job posting"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )


class PublishJobPostingView(_JobPostingTransitionView):
    """
    PATCH /api/v1/job-postings/<id>/publish/
    """

    action_name = "publish"

    def build_usecase(self):
        return build_publish_job_posting_usecase()


class ArchiveJobPostingView(_JobPostingTransitionView):
    """
    PATCH /api/v1/job-postings/<id>/archive/
    """

    action_name = "archive"

    def build_usecase(self):
        return build_archive_job_posting_usecase()


class RepublishJobPostingView(_JobPostingTransitionView):
    """
    PATCH /api/v1/job-postings/<id>/republish/
    """

    action_name = "republish"

    def build_usecase(self):
        return build_republish_job_posting_usecase()


class JobPostingExpiryView(APIView):
    """
    GET /api/v1/job-postings/<id>/expiry/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(responses={200: JobPostingExpirySerializer})
    def get(self, request, job_posting_id: int):
        try:
            result = build_get_job_posting_expiry_usecase().execute(
                job_posting_id=int(job_posting_id), actor_id=int(request.user.id)
            )
            if isinstance(result, Err):
                return err_response(result)
            return Response(JobPostingExpirySerializer(result.value).data)
        except Exception as e:
            logger.error(
                f"Failed to get expiry of job posting {job_posting_id}: {str(e)}",
                exc_info=True,
            )
            return Response(
                {"error": "Failed to get job posting expiry"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )


class SweepExpiredJobPostingsCronView(APIView):
    """
    GET  /api/v1/cron/sweep-expired-job-postings/?limit=
    POST /api/v1/cron/sweep-expired-job-postings/

    외부 스케줄러(대부분 GET 으로 호출)에서 사용합니다. Celery beat 와 같은 유스케이스를 실행합니다.
    """

    authentication_classes = []
    permission_classes = [HasCronSecret]

    @extend_schema(
        parameters=[SweepRequestSerializer],
        responses={200: SweepResultSerializer, 401: OpenApiTypes.OBJECT},
    )
    def get(self, request):
        return self._sweep(request.query_params)

    @extend_schema(
        request=SweepRequestSerializer,
        responses={200: SweepResultSerializer, 401: OpenApiTypes.OBJECT},
    )
    def post(self, request):
        return self._sweep(request.data)

    def _sweep(self, data):
        serializer = SweepRequestSerializer(data=data)
        serializer.is_valid(raise_exception=True)
        try:
            result = build_sweep_expired_job_postings_usecase().execute(
                limit=serializer.validated_data.get("limit")
            )
            if isinstance(result, Err):
                return err_response(result)
            return Response(SweepResultSerializer(result.value).data)
        except Exception as e:
            logger.error(f"Failed to sweep expired job postings: {str(e)}", exc_info=True)
            return Response(
                {"error": "Failed to close expired job postings"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
