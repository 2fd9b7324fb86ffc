# barberqueue/routers/payments_routes.py

from fastapi import APIRouter, Depends

from barberqueue.auth import Principal
from barberqueue.deps import current_user, get_payment_gate
from barberqueue.payments import PaymentGate
from barberqueue.schemas import (
    CreateOrderRequest,
    CreateOrderResponse,
    JoinQueueResponse,
    VerifyPaymentRequest,
)

router = APIRouter(
    prefix="/payment",
    tags=["payments"],
)


@router.post("/create-order", status_code=201, response_model=CreateOrderResponse)
def create_order(
    payload: CreateOrderRequest,
    principal: Principal = Depends(current_user),
    gate: PaymentGate = Depends(get_payment_gate),
):
    # rupees -> paise
    amount_paise = round(payload.amount * 100)
    return {"order": gate.create_order(amount_paise)}


@router.post("/verify-payment", response_model=JoinQueueResponse)
def verify_payment(
    payload: VerifyPaymentRequest,
    principal: Principal = Depends(current_user),
    gate: PaymentGate = Depends(get_payment_gate),
):
    slot = gate.verify_and_join(
        payload.order_id,
        payload.payment_id,
        payload.signature,
        payload.barber_id,
        principal.id,
        payload.service,
    )
    return {"msg": "Payment verified & joined queue successfully", "queue": slot}
