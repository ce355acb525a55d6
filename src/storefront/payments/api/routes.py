"""FastAPI endpoints for paying for orders and refunding payments."""

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from storefront.identity.api.dependencies import CurrentUser, get_current_user, require_admin
from storefront.order.queries import get_order
from storefront.payments.api.schemas import (
    DuplicateCheckResponse,
    PaymentResponse,
    PaymentResultResponse,
    ProcessPaymentRequest,
    RefundRequest,
)
from storefront.payments.duplicates import is_duplicate
from storefront.payments.processing import ProcessPayment
from storefront.payments.queries import get_payment, payment_for_order
from storefront.payments.refund import RefundPayment

payment_router = APIRouter(prefix="/api/payment", tags=["payments"])


def _owner(current_user: CurrentUser):
    return None if current_user.is_admin else current_user.user_id


@payment_router.post("/process", response_model=PaymentResultResponse)
async def process_payment(
    body: ProcessPaymentRequest,
    current_user: CurrentUser = Depends(get_current_user),
) -> PaymentResultResponse:
    command = ProcessPayment(
        order_id=body.order_id,
        user_id=current_user.user_id,
        payment_method=body.payment_method,
        payment_token=body.payment_token,
    )
    result = current_domain.process(command, asynchronous=False)
    return PaymentResultResponse.from_result(result)


@payment_router.get("/duplicate-check", response_model=DuplicateCheckResponse)
async def duplicate_check(
    order_id: str,
    payment_token: str = Query(..., max_length=255),
    current_user: CurrentUser = Depends(get_current_user),
) -> DuplicateCheckResponse:
    get_order(order_id, _owner(current_user))
    return DuplicateCheckResponse(order_id=order_id, is_duplicate=is_duplicate(order_id, payment_token))


@payment_router.get("/order/{order_id}", response_model=PaymentResponse)
async def payment_by_order(order_id: str, current_user: CurrentUser = Depends(get_current_user)) -> PaymentResponse:
    get_order(order_id, _owner(current_user))
    return PaymentResponse.from_payment(payment_for_order(order_id))


@payment_router.get("/{payment_id}", response_model=PaymentResponse)
async def payment_detail(payment_id: str, current_user: CurrentUser = Depends(get_current_user)) -> PaymentResponse:
    payment = get_payment(payment_id)
    get_order(str(payment.order_id), _owner(current_user))
    return PaymentResponse.from_payment(payment)


@payment_router.post("/{payment_id}/refund", response_model=PaymentResultResponse)
async def refund_payment(
    payment_id: str,
    body: RefundRequest,
    _admin: CurrentUser = Depends(require_admin),
) -> PaymentResultResponse:
    command = RefundPayment(payment_id=payment_id, amount=body.amount, reason=body.reason)
    result = current_domain.process(command, asynchronous=False)
    return PaymentResultResponse.from_result(result)
