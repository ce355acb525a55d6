"""Pydantic request/response schemas for the Payments API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# --- Request Schemas ---


class ProcessPaymentRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "order_id": "d4e5f6a7-b8c9-0123-def0-234567890123",
                    "payment_method": "Credit Card",
                    "payment_token": "tok_visa",
                }
            ]
        }
    }

    order_id: str
    payment_method: str = Field(..., max_length=50)
    payment_token: str | None = Field(None, max_length=255)


class RefundRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"amount": 25.0, "reason": "Damaged item"}]}}

    amount: float | None = None
    reason: str | None = Field(None, max_length=500)


# --- Response Schemas ---


class PaymentResponse(BaseModel):
    id: str
    order_id: str
    amount: float
    currency: str
    status: str
    method: str
    transaction_id: str | None = None
    failure_reason: str | None = None
    refund_amount: float = 0.0
    refunded_at: datetime | None = None
    processed_at: datetime | None = None
    created_at: datetime | None = None

    @classmethod
    def from_payment(cls, payment) -> PaymentResponse:
        return cls(
            id=str(payment.id),
            order_id=str(payment.order_id),
            amount=payment.amount.amount,
            currency=payment.amount.currency,
            status=payment.status,
            method=payment.method,
            transaction_id=payment.transaction_id,
            failure_reason=payment.failure_reason,
            refund_amount=payment.refund_amount or 0.0,
            refunded_at=payment.refunded_at,
            processed_at=payment.processed_at,
            created_at=payment.created_at,
        )


class PaymentResultResponse(BaseModel):
    is_successful: bool
    status: str
    amount: float
    currency: str
    payment_id: str | None = None
    transaction_id: str | None = None
    error_message: str | None = None

    @classmethod
    def from_result(cls, result) -> PaymentResultResponse:
        return cls(
            is_successful=result.is_successful,
            status=result.status,
            amount=result.amount,
            currency=result.currency,
            payment_id=result.payment_id,
            transaction_id=result.transaction_id,
            error_message=result.error_message,
        )


class DuplicateCheckResponse(BaseModel):
    order_id: str
    is_duplicate: bool
