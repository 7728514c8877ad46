"""
Task Gateway Views

외부 AI 워커 API 로의 비동기 태스크 제출/조회/취소 (상태는 저장하지 않음)
"""

import logging

from common.application.result import Err
from common.http import err_response
from drf_spectacular.utils import OpenApiParameter, OpenApiTypes, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from task_gateway.application.container import build_task_gateway
from task_gateway.serializers import (
    BatchHandleSerializer,
    BatchStatusSerializer,
    CancelResultSerializer,
    TaskHandleSerializer,
    TaskStatusSerializer,
    TaskSubmitRequestSerializer,
)

logger = logging.getLogger(__name__)


class TaskView(APIView):
    """
    POST   /api/v1/tasks/<kind>/             태스크 제출 ({"payload": ...} 또는 {"payloads": [...]})
    GET    /api/v1/tasks/<task_id>/?batch=   태스크(또는 배치) 상태 조회
    DELETE /api/v1/tasks/<task_id>/          태스크 취소 요청

    같은 경로 세그먼트를 POST 에서는 kind, GET/DELETE 에서는 task_id 로 해석합니다.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        request=TaskSubmitRequestSerializer,
        responses={202: OpenApiTypes.OBJECT},
        summary="Submit async task",
    )
    def post(self, request, key: str):
        serializer = TaskSubmitRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        try:
            gateway = build_task_gateway()
            if "payloads" in data:
                result = gateway.submit_batch(kind=key, payloads=data["payloads"])
                out_serializer = BatchHandleSerializer
            else:
                result = gateway.submit_single(kind=key, payload=data["payload"])
                out_serializer = TaskHandleSerializer
            if isinstance(result, Err):
                return err_response(result)
            return Response(
                out_serializer(result.value).data, status=status.HTTP_202_ACCEPTED
            )
        except Exception as e:
            logger.error(f"Failed to submit {key} task: {str(e)}", exc_info=True)
            return Response(
                {"error": "Failed to submit task"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

    @extend_schema(
        parameters=[
            OpenApiParameter("batch", OpenApiTypes.BOOL, OpenApiParameter.QUERY),
        ],
        responses={200: OpenApiTypes.OBJECT},
        summary="Get task status",
    )
    def get(self, request, key: str):
        is_batch = str(request.query_params.get("batch", "")).lower() == "true"
        try:
            gateway = build_task_gateway()
            if is_batch:
                result = gateway.poll_batch(batch_task_id=key)
                out_serializer = BatchStatusSerializer
            else:
                result = gateway.poll(task_id=key)
                out_serializer = TaskStatusSerializer
            if isinstance(result, Err):
                return err_response(result)
            return Response(out_serializer(result.value).data)
        except Exception as e:
            logger.error(f"Failed to get task status {key}: {str(e)}", exc_info=True)
            return Response(
                {"error": "Failed to get task status"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

    @extend_schema(responses={200: CancelResultSerializer}, summary="Cancel task")
    def delete(self, request, key: str):
        try:
            result = build_task_gateway().cancel(task_id=key)
            if isinstance(result, Err):
                return err_response(result)
            return Response(CancelResultSerializer(result.value).data)
        except Exception as e:
            logger.error(f"Failed to cancel task {key}: {str(e)}", exc_info=True)
            return Response(
                {"error": "Failed to cancel task"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
