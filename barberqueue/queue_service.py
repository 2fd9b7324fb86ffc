# barberqueue/queue_service.py

"""
Queue lifecycle: the only code that writes QueueSlot and ServiceHistory rows.

Positions are never stored. They are recomputed on every read from the
``(entered_at, id)`` ordering of a barber's active slots, so a removal is
reflected by the next poll without any bookkeeping.
"""

import logging
from datetime import timedelta

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select, func, and_, or_, col

from .config import AVERAGE_SERVICE_MINUTES
from .errors import AlreadyExists, NotAuthorized, NotFound, NotInQueue, ValidationFailed
from .models import Barber, QueueSlot, ServiceHistory, User, utcnow
from .validators import clean_service, normalize_phone

logger = logging.getLogger(__name__)

JOIN_ATTEMPTS = 2
RECENT_SERVICES_LIMIT = 10

NOT_IN_QUEUE_STATUS = {
    "in_queue": False,
    "queue_position": None,
    "barber": None,
    "entered_at": None,
    "service": None,
    "estimated_wait_time": None,
}


def _user_summary(user: User) -> dict:
    return {"id": user.id, "name": user.name, "phone_number": user.phone_number}


class QueueManager:
    def __init__(self, session: Session, average_service_minutes: int = AVERAGE_SERVICE_MINUTES, clock=utcnow):
        self.session = session
        self.average_service_minutes = average_service_minutes
        self.clock = clock

    # ------------------------------------------------------------------ reads

    def _slot_for_user(self, user_id: int):
        return self.session.exec(select(QueueSlot).where(QueueSlot.user_id == user_id)).first()

    def _require_barber(self, barber_id: int) -> Barber:
        barber = self.session.get(Barber, barber_id)
        if barber is None:
            raise NotFound("Barber not found")
        return barber

    def queue_length(self, barber_id: int) -> int:
        return self.session.exec(
            select(func.count()).select_from(QueueSlot).where(QueueSlot.barber_id == barber_id)
        ).one()

    def wait_minutes(self, slots_ahead: int) -> int:
        return slots_ahead * self.average_service_minutes

    def get_queue_for_barber(self, barber_id: int) -> list:
        """Active slots for a barber, earliest arrival first, with 1-based positions."""
        self._require_barber(barber_id)
        rows = self.session.exec(
            select(QueueSlot, User)
            .join(User, col(User.id) == col(QueueSlot.user_id))
            .where(QueueSlot.barber_id == barber_id)
            .order_by(col(QueueSlot.entered_at), col(QueueSlot.id))
        ).all()
        return [
            {
                "position": index + 1,
                "queue_id": slot.id,
                "user": _user_summary(user),
                "service": slot.service,
                "entered_at": slot.entered_at,
            }
            for index, (slot, user) in enumerate(rows)
        ]

    def get_status_for_user(self, user_id: int) -> dict:
        slot = self._slot_for_user(user_id)
        if slot is None:
            return dict(NOT_IN_QUEUE_STATUS)

        # equal timestamps fall back to slot id so every slot gets a distinct rank
        ahead = self.session.exec(
            select(func.count())
            .select_from(QueueSlot)
            .where(QueueSlot.barber_id == slot.barber_id)
            .where(
                or_(
                    col(QueueSlot.entered_at) < slot.entered_at,
                    and_(col(QueueSlot.entered_at) == slot.entered_at, col(QueueSlot.id) < slot.id),
                )
            )
        ).one()

        barber = self.session.get(Barber, slot.barber_id)
        return {
            "in_queue": True,
            "queue_position": ahead + 1,
            "barber": {"id": barber.id, "name": barber.name, "lat": barber.lat, "long": barber.long},
            "entered_at": slot.entered_at,
            "service": slot.service,
            "estimated_wait_time": self.wait_minutes(ahead),
        }

    # -------------------------------------------------------------- mutations

    def join_queue(self, barber_id: int, user_id: int, service: str) -> dict:
        """
        Put a user in a barber's queue, dropping any slot they already hold.

        Delete and insert commit together. A concurrent join for the same user
        trips the unique constraint on ``user_id``; the loser rolls back and
        replays the delete-then-insert once before giving up.

        Raises:
            ValidationFailed: blank service
            NotFound: unknown barber or user
            AlreadyExists: the retry also lost the race
        """
        service = clean_service(service)
        barber = self._require_barber(barber_id)
        user = self.session.get(User, user_id)
        if user is None:
            raise NotFound("User not found")

        for attempt in range(1, JOIN_ATTEMPTS + 1):
            previous_barber_id = None
            try:
                previous = self._slot_for_user(user_id)
                if previous is not None:
                    previous_barber_id = previous.barber_id
                    self.session.delete(previous)
                    # the DELETE has to reach the database before the INSERT
                    self.session.flush()
                slot = QueueSlot(
                    user_id=user_id,
                    barber_id=barber_id,
                    service=service,
                    entered_at=self.clock(),
                )
                self.session.add(slot)
                self.session.commit()
                break
            except IntegrityError:
                self.session.rollback()
                if attempt == JOIN_ATTEMPTS:
                    logger.warning("Join for user %s kept conflicting, giving up", user_id)
                    raise AlreadyExists("Queue entry changed concurrently, please retry")
                logger.warning("Concurrent join for user %s, retrying", user_id)

        self.session.refresh(slot)
        if previous_barber_id is not None and previous_barber_id != barber_id:
            logger.info("User %s moved from barber %s to barber %s", user_id, previous_barber_id, barber_id)
        logger.info("User %s joined barber %s queue for %s", user_id, barber_id, service)

        return {
            "id": slot.id,
            "barber_id": slot.barber_id,
            "user_id": slot.user_id,
            "service": slot.service,
            "entered_at": slot.entered_at,
            "user": _user_summary(user),
            "barber": {"id": barber.id, "name": barber.name},
        }

    def leave_queue(self, user_id: int) -> dict:
        """User-initiated exit. Being absent already is a normal outcome, not an error."""
        slot = self._slot_for_user(user_id)
        if slot is None:
            return {"left": False, "msg": NotInQueue().message, "data": None}

        barber = self.session.get(Barber, slot.barber_id)
        data = {"barber_id": barber.id, "barber_name": barber.name}
        self.session.delete(slot)
        self.session.commit()
        logger.info("User %s left barber %s queue", user_id, data["barber_id"])

        return {"left": True, "msg": "Successfully removed from queue", "data": data}

    def remove_from_queue(self, barber_id: int, user_id: int) -> dict:
        """
        Barber marks a customer as served.

        The history row and the slot deletion commit together. The ownership
        check runs after the existence check and before any write.

        Raises:
            NotInQueue: the user holds no slot
            NotAuthorized: the slot belongs to another barber
        """
        slot = self._slot_for_user(user_id)
        if slot is None:
            raise NotInQueue()
        if slot.barber_id != barber_id:
            logger.warning("Barber %s tried to remove user %s from barber %s queue", barber_id, user_id, slot.barber_id)
            raise NotAuthorized("You can only remove users from your own queue")

        user = _user_summary(self.session.get(User, user_id))
        served_at = self.clock()
        service = slot.service
        self.session.add(
            ServiceHistory(barber_id=barber_id, user_id=user_id, service=service, served_at=served_at)
        )
        self.session.delete(slot)
        self.session.commit()
        logger.info("Barber %s served user %s (%s)", barber_id, user_id, service)

        return {"user": user, "service": service, "served_at": served_at}

    def add_walk_in(self, barber_id: int, name: str, phone_number: str, service: str) -> dict:
        """Barber adds a customer to their own queue, registering the customer if needed."""
        phone = normalize_phone(phone_number)
        service = clean_service(service)
        self._require_barber(barber_id)

        user = self.session.exec(select(User).where(User.phone_number == phone)).first()
        if user is None:
            if not name or not name.strip():
                raise ValidationFailed("Name is required for a new customer")
            user = User(name=name.strip(), phone_number=phone)
            self.session.add(user)
            try:
                self.session.commit()
            except IntegrityError:
                # registered by a concurrent request in the meantime
                self.session.rollback()
                user = self.session.exec(select(User).where(User.phone_number == phone)).one()
            else:
                self.session.refresh(user)
                logger.info("Walk-in customer %s registered by barber %s", user.id, barber_id)

        return self.join_queue(barber_id, user.id, service)

    # ------------------------------------------------------------- statistics

    def barber_stats(self, barber_id: int) -> dict:
        self._require_barber(barber_id)
        current = self.queue_length(barber_id)

        total_served = self.session.exec(
            select(func.count()).select_from(ServiceHistory).where(ServiceHistory.barber_id == barber_id)
        ).one()

        now = self.clock()
        today_start = now.replace(hour=0, minute=0, second=0, microsecond=0)
        today_served = self.session.exec(
            select(func.count())
            .select_from(ServiceHistory)
            .where(ServiceHistory.barber_id == barber_id)
            .where(col(ServiceHistory.served_at) >= today_start)
            .where(col(ServiceHistory.served_at) < today_start + timedelta(days=1))
        ).one()

        recent = self.session.exec(
            select(ServiceHistory, User)
            .join(User, col(User.id) == col(ServiceHistory.user_id))
            .where(ServiceHistory.barber_id == barber_id)
            .order_by(col(ServiceHistory.served_at).desc(), col(ServiceHistory.id).desc())
            .limit(RECENT_SERVICES_LIMIT)
        ).all()

        return {
            "current_queue_length": current,
            "total_customers_serviced": total_served,
            "today_customers_serviced": today_served,
            "estimated_wait_time": self.wait_minutes(current),
            "recent_services": [
                {
                    "id": history.id,
                    "user": _user_summary(user),
                    "service": history.service,
                    "served_at": history.served_at,
                }
                for history, user in recent
            ],
        }
