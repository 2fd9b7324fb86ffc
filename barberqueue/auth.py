# barberqueue/auth.py

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from fastapi import Depends, HTTPException
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError
from passlib.context import CryptContext

from .config import SECRET_KEY, ALGORITHM, ACCESS_TOKEN_EXPIRE_MINUTES

USER_ROLE = "user"
BARBER_ROLE = "barber"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="barber/signin")


@dataclass(frozen=True)
class Principal:
    """The authenticated caller, passed explicitly into every queue operation."""

    id: int
    role: str


def create_access_token(subject_id: int, role: str, expires_minutes: int = ACCESS_TOKEN_EXPIRE_MINUTES) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    to_encode = {"sub": str(subject_id), "role": role, "exp": expire}
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=401,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_principal(token: str = Depends(oauth2_scheme)) -> Principal:
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        raise _unauthorized("Invalid or expired token")

    subject = payload.get("sub")
    role = payload.get("role")
    if subject is None or role not in (USER_ROLE, BARBER_ROLE):
        raise _unauthorized("Invalid token")
    try:
        subject_id = int(subject)
    except (TypeError, ValueError):
        raise _unauthorized("Invalid token")

    return Principal(id=subject_id, role=role)
