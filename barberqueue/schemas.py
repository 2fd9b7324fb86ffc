# barberqueue/schemas.py

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class MePublic(BaseModel):
    id: int
    role: str


# users

class UserCreate(BaseModel):
    name: str
    phone_number: str


class UserSignin(BaseModel):
    phone_number: str


class UserPublic(BaseModel):
    id: int
    name: str
    phone_number: str


class UserAuthResponse(BaseModel):
    msg: str
    token: str
    user: UserPublic


# barbers

class BarberCreate(BaseModel):
    name: str
    username: str
    password: str = Field(min_length=8, max_length=72)
    lat: float
    long: float


class BarberSignin(BaseModel):
    username: str
    password: str


class BarberPublic(BaseModel):
    id: int
    name: str
    username: str
    lat: float
    long: float


class BarberAuthResponse(BaseModel):
    msg: str
    token: str
    barber: BarberPublic


class BarberSummary(BaseModel):
    id: int
    name: str


class BarberLocation(BarberSummary):
    lat: float
    long: float


# queue

class JoinQueueRequest(BaseModel):
    barber_id: int
    service: str


class QueueSlotPublic(BaseModel):
    id: int
    barber_id: int
    user_id: int
    service: str
    entered_at: datetime
    user: UserPublic
    barber: BarberSummary


class JoinQueueResponse(BaseModel):
    msg: str
    queue: QueueSlotPublic


class LeftQueue(BaseModel):
    barber_id: int
    barber_name: str


class LeaveQueueResponse(BaseModel):
    left: bool
    msg: str
    data: Optional[LeftQueue] = None


class QueueStatus(BaseModel):
    in_queue: bool
    queue_position: Optional[int] = None
    barber: Optional[BarberLocation] = None
    entered_at: Optional[datetime] = None
    service: Optional[str] = None
    estimated_wait_time: Optional[int] = None


class QueueStatusResponse(BaseModel):
    msg: str
    queue_status: QueueStatus


class QueueEntry(BaseModel):
    position: int
    queue_id: int
    user: UserPublic
    service: str
    entered_at: datetime


class BarberQueueResponse(BaseModel):
    barber_id: int
    queue_length: int
    queue: List[QueueEntry]


class RemoveUserRequest(BaseModel):
    user_id: int


class ServedUser(BaseModel):
    user: UserPublic
    service: str
    served_at: datetime


class RemoveUserResponse(BaseModel):
    msg: str
    data: ServedUser


class WalkInCreate(BaseModel):
    name: str = ""
    phone_number: str
    service: str


class ServiceRecord(BaseModel):
    id: int
    user: UserPublic
    service: str
    served_at: datetime


class BarberStats(BaseModel):
    current_queue_length: int
    total_customers_serviced: int
    today_customers_serviced: int
    estimated_wait_time: int
    recent_services: List[ServiceRecord]


# discovery

class NearbyRequest(BaseModel):
    lat: float
    long: float
    radius: Optional[float] = None


class NearbyBarber(BaseModel):
    id: int
    name: str
    lat: float
    long: float
    distance: float
    queue_length: int
    estimated_wait_time: int


class NearbyResponse(BaseModel):
    msg: str
    barbers: List[NearbyBarber]


class ServicePublic(BaseModel):
    id: str
    name: str
    price: int
    duration_minutes: int
    description: str
    category: str


# payments

class CreateOrderRequest(BaseModel):
    amount: float = Field(gt=0)  # rupees


class OrderPublic(BaseModel):
    id: str
    amount: int
    currency: str


class CreateOrderResponse(BaseModel):
    order: OrderPublic


class VerifyPaymentRequest(BaseModel):
    order_id: str
    payment_id: str
    signature: str
    barber_id: int
    service: str
