# barberqueue/routers/users_routes.py

from fastapi import APIRouter, Depends
from sqlmodel import Session

from barberqueue.accounts import authenticate_user, create_user
from barberqueue.auth import Principal, create_access_token, get_current_principal, USER_ROLE
from barberqueue.config import DEFAULT_SEARCH_RADIUS_KM
from barberqueue.db import get_session
from barberqueue.deps import current_user, get_queue_manager
from barberqueue.nearby import find_nearby_barbers
from barberqueue.queue_service import QueueManager
from barberqueue.schemas import (
    JoinQueueRequest,
    JoinQueueResponse,
    LeaveQueueResponse,
    MePublic,
    NearbyRequest,
    NearbyResponse,
    QueueStatusResponse,
    UserAuthResponse,
    UserCreate,
    UserSignin,
)

router = APIRouter(
    prefix="/user",
    tags=["users"],
)


def _user_public(user) -> dict:
    return {"id": user.id, "name": user.name, "phone_number": user.phone_number}


@router.post("/signup", status_code=201, response_model=UserAuthResponse)
def signup(
    payload: UserCreate,
    session: Session = Depends(get_session),
):
    user = create_user(session, payload.name, payload.phone_number)
    return {
        "msg": "User created successfully",
        "token": create_access_token(user.id, USER_ROLE),
        "user": _user_public(user),
    }


@router.post("/signin", response_model=UserAuthResponse)
def signin(
    payload: UserSignin,
    session: Session = Depends(get_session),
):
    user = authenticate_user(session, payload.phone_number)
    return {
        "msg": "User Signed In Successfully",
        "token": create_access_token(user.id, USER_ROLE),
        "user": _user_public(user),
    }


@router.get("/me", response_model=MePublic)
def me(principal: Principal = Depends(get_current_principal)):
    return {"id": principal.id, "role": principal.role}


@router.post("/joinqueue", response_model=JoinQueueResponse)
def join_queue(
    payload: JoinQueueRequest,
    principal: Principal = Depends(current_user),
    manager: QueueManager = Depends(get_queue_manager),
):
    slot = manager.join_queue(payload.barber_id, principal.id, payload.service)
    return {"msg": f"You have joined the queue for {slot['service']}", "queue": slot}


@router.post("/leavequeue", response_model=LeaveQueueResponse)
def leave_queue(
    principal: Principal = Depends(current_user),
    manager: QueueManager = Depends(get_queue_manager),
):
    return manager.leave_queue(principal.id)


@router.get("/queue-status", response_model=QueueStatusResponse)
def queue_status(
    principal: Principal = Depends(current_user),
    manager: QueueManager = Depends(get_queue_manager),
):
    return {
        "msg": "Queue status retrieved successfully",
        "queue_status": manager.get_status_for_user(principal.id),
    }


@router.post("/barbers", response_model=NearbyResponse)
def nearby_barbers(
    payload: NearbyRequest,
    principal: Principal = Depends(get_current_principal),
    session: Session = Depends(get_session),
):
    radius = payload.radius if payload.radius is not None else DEFAULT_SEARCH_RADIUS_KM
    barbers = find_nearby_barbers(session, payload.lat, payload.long, radius)
    return {"msg": f"Found {len(barbers)} barbers within {radius:g}km", "barbers": barbers}
