# barberqueue/routers/barbers_routes.py

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlmodel import Session

from barberqueue.accounts import authenticate_barber, create_barber
from barberqueue.auth import Principal, create_access_token, BARBER_ROLE
from barberqueue.db import get_session
from barberqueue.deps import current_barber, get_queue_manager
from barberqueue.errors import NotAuthorized, NotInQueue
from barberqueue.queue_service import QueueManager
from barberqueue.schemas import (
    BarberAuthResponse,
    BarberCreate,
    BarberQueueResponse,
    BarberSignin,
    BarberStats,
    JoinQueueResponse,
    RemoveUserRequest,
    RemoveUserResponse,
    WalkInCreate,
)

router = APIRouter(
    prefix="/barber",
    tags=["barbers"],
)


def _barber_public(barber) -> dict:
    return {
        "id": barber.id,
        "name": barber.name,
        "username": barber.username,
        "lat": barber.lat,
        "long": barber.long,
    }


@router.post("/signup", status_code=201, response_model=BarberAuthResponse)
def signup(
    payload: BarberCreate,
    session: Session = Depends(get_session),
):
    barber = create_barber(session, payload.name, payload.username, payload.password, payload.lat, payload.long)
    return {
        "msg": "Barber Created Successfully",
        "token": create_access_token(barber.id, BARBER_ROLE),
        "barber": _barber_public(barber),
    }


@router.post("/signin", response_model=BarberAuthResponse)
def signin(
    payload: BarberSignin,
    session: Session = Depends(get_session),
):
    barber = authenticate_barber(session, payload.username, payload.password)
    return {
        "msg": "Barber Signed In Successfully",
        "token": create_access_token(barber.id, BARBER_ROLE),
        "barber": _barber_public(barber),
    }


@router.get("/queue", response_model=BarberQueueResponse)
def get_queue(
    principal: Principal = Depends(current_barber),
    manager: QueueManager = Depends(get_queue_manager),
):
    queue = manager.get_queue_for_barber(principal.id)
    return {"barber_id": principal.id, "queue_length": len(queue), "queue": queue}


@router.post("/remove-user", response_model=RemoveUserResponse)
def remove_user(
    payload: RemoveUserRequest,
    principal: Principal = Depends(current_barber),
    manager: QueueManager = Depends(get_queue_manager),
):
    try:
        served = manager.remove_from_queue(principal.id, payload.user_id)
    except (NotInQueue, NotAuthorized) as exc:
        # both cases look the same to the caller
        return JSONResponse(status_code=400, content={"msg": exc.message})
    return {"msg": "User removed from queue successfully", "data": served}


@router.post("/walk-in", status_code=201, response_model=JoinQueueResponse)
def add_walk_in(
    payload: WalkInCreate,
    principal: Principal = Depends(current_barber),
    manager: QueueManager = Depends(get_queue_manager),
):
    slot = manager.add_walk_in(principal.id, payload.name, payload.phone_number, payload.service)
    return {"msg": f"{slot['user']['name']} added to the queue for {slot['service']}", "queue": slot}


@router.get("/stats", response_model=BarberStats)
def stats(
    principal: Principal = Depends(current_barber),
    manager: QueueManager = Depends(get_queue_manager),
):
    return manager.barber_stats(principal.id)
