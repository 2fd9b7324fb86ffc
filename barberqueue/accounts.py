# barberqueue/accounts.py

import logging

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from .auth import hash_password, verify_password
from .errors import AlreadyExists, InvalidCredentials, ValidationFailed
from .models import Barber, User
from .validators import normalize_phone, validate_coordinates

logger = logging.getLogger(__name__)


def _require_text(value: str, field: str) -> str:
    if not value or not value.strip():
        raise ValidationFailed(f"{field} is required")
    return value.strip()


def create_user(session: Session, name: str, phone_number: str) -> User:
    name = _require_text(name, "Name")
    phone = normalize_phone(phone_number)

    user = User(name=name, phone_number=phone)
    session.add(user)
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        raise AlreadyExists("Phone number already exists")
    session.refresh(user)
    logger.info("User %s signed up", user.id)
    return user


def authenticate_user(session: Session, phone_number: str) -> User:
    phone = normalize_phone(phone_number)
    user = session.exec(select(User).where(User.phone_number == phone)).first()
    if user is None:
        raise InvalidCredentials("Phone number not found. Please sign up first.")
    return user


def create_barber(session: Session, name: str, username: str, password: str, lat: float, long: float) -> Barber:
    name = _require_text(name, "Name")
    username = _require_text(username, "Username")
    validate_coordinates(lat, long)

    barber = Barber(
        name=name,
        username=username,
        password_hash=hash_password(password),
        lat=lat,
        long=long,
    )
    session.add(barber)
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        raise AlreadyExists("Username already exists")
    session.refresh(barber)
    logger.info("Barber %s signed up as %s", barber.id, barber.username)
    return barber


def authenticate_barber(session: Session, username: str, password: str) -> Barber:
    barber = session.exec(select(Barber).where(Barber.username == username)).first()
    if barber is None or not verify_password(password, barber.password_hash):
        raise InvalidCredentials("Invalid username or password")
    return barber
