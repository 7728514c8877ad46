"""
Purchase Views

공고 게시 상품 결제 세션 생성/조회, 결제 대행사 webhook
"""

import logging

from common.application.result import Err
from common.http import err_response
from drf_spectacular.utils import OpenApiTypes, extend_schema
from purchase.application.container import (
    build_get_purchase_status_usecase,
    build_handle_payment_webhook_usecase,
    build_purchase_job_posting_usecase,
)
from purchase.serializers import (
    PaymentSessionSerializer,
    PurchaseRequestSerializer,
    PurchaseStatusSerializer,
)
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "Stripe-Signature"


class JobPostingPurchaseView(APIView):
    """
    POST /api/v1/job-postings/<id>/purchase/  결제 세션 생성(또는 PENDING 기록 재사용)
    GET  /api/v1/job-postings/<id>/purchase/  결제 상태 조회
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        request=PurchaseRequestSerializer,
        responses={200: PaymentSessionSerializer},
        summary="Create payment session",
    )
    def post(self, request, job_posting_id: int):
        serializer = PurchaseRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            result = build_purchase_job_posting_usecase().execute(
                job_posting_id=int(job_posting_id),
                actor_id=int(request.user.id),
                actor_email=getattr(request.user, "email", None) or None,
                success_url=serializer.validated_data.get("success_url"),
                cancel_url=serializer.validated_data.get("cancel_url"),
            )
            if isinstance(result, Err):
                return err_response(result)
            return Response(PaymentSessionSerializer(result.value).data)
        except Exception as e:
            logger.error(
                f"Failed to create purchase for job posting {job_posting_id}: {str(e)}",
                exc_info=True,
            )
            return Response(
                {"error": "Failed to create purchase"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

    @extend_schema(responses={200: PurchaseStatusSerializer}, summary="Purchase status")
    def get(self, request, job_posting_id: int):
        try:
            result = build_get_purchase_status_usecase().execute(
                job_posting_id=int(job_posting_id), actor_id=int(request.user.id)
            )
            if isinstance(result, Err):
                return err_response(result)
            return Response(PurchaseStatusSerializer(result.value).data)
        except Exception as e:
            logger.error(
                f"Failed to retrieve purchase for job posting {job_posting_id}: {str(e)}",
                exc_info=True,
            )
            return Response(
                {"error": "Failed to retrieve purchase"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )


class PaymentWebhookView(APIView):
    """
    POST /api/v1/payments/webhook/

    인증 대신 서명 헤더로 검증합니다. 서명 검증에는 원본 바디(bytes)가 필요합니다.
    """

    authentication_classes = []
    permission_classes = []

    @extend_schema(request=OpenApiTypes.OBJECT, responses={200: OpenApiTypes.OBJECT})
    def post(self, request):
        signature = request.headers.get(SIGNATURE_HEADER)
        if not signature:
            return Response(
                {"error": f"Missing {SIGNATURE_HEADER} header"},
                status=status.HTTP_400_BAD_REQUEST,
            )
        try:
            result = build_handle_payment_webhook_usecase().execute(
                payload=request.body, signature_header=signature
            )
            if isinstance(result, Err):
                return err_response(result)
            outcome = result.value
            return Response(
                {
                    "received": True,
                    "handled": outcome.handled,
                    "type": outcome.event_type,
                }
            )
        except Exception as e:
            logger.error(f"Webhook handler failed: {str(e)}", exc_info=True)
            return Response(
                {"error": "Webhook handler failed"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
