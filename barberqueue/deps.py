# barberqueue/deps.py

from functools import lru_cache

from fastapi import Depends, HTTPException
from sqlmodel import Session

from .auth import Principal, get_current_principal, USER_ROLE, BARBER_ROLE
from .db import get_session
from .payments import PaymentGate, RazorpayOrderClient
from .queue_service import QueueManager


def require_role(principal: Principal, role: str):
    if principal.role != role:
        raise HTTPException(status_code=403, detail="Forbidden")


def current_user(principal: Principal = Depends(get_current_principal)) -> Principal:
    require_role(principal, USER_ROLE)
    return principal


def current_barber(principal: Principal = Depends(get_current_principal)) -> Principal:
    require_role(principal, BARBER_ROLE)
    return principal


def get_queue_manager(session: Session = Depends(get_session)) -> QueueManager:
    return QueueManager(session)


@lru_cache
def get_order_client() -> RazorpayOrderClient:
    return RazorpayOrderClient()


def get_payment_gate(
    manager: QueueManager = Depends(get_queue_manager),
    order_client: RazorpayOrderClient = Depends(get_order_client),
) -> PaymentGate:
    return PaymentGate(order_client, manager)
