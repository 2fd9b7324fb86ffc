# barberqueue/nearby.py

import logging

from sqlmodel import Session, select, func

from .config import AVERAGE_SERVICE_MINUTES, DEFAULT_SEARCH_RADIUS_KM
from .errors import ValidationFailed
from .geo import haversine_km
from .models import Barber, QueueSlot
from .validators import validate_coordinates

logger = logging.getLogger(__name__)


def find_nearby_barbers(
    session: Session,
    lat: float,
    long: float,
    radius_km: float = DEFAULT_SEARCH_RADIUS_KM,
    average_service_minutes: int = AVERAGE_SERVICE_MINUTES,
) -> list:
    """
    Barbers within ``radius_km`` of a point, closest first (ties by barber id).

    Queue lengths are a snapshot of the active slots at query time.
    """
    validate_coordinates(lat, long)
    if radius_km <= 0:
        raise ValidationFailed("Radius must be greater than 0")

    queue_lengths = dict(
        session.exec(
            select(QueueSlot.barber_id, func.count()).group_by(QueueSlot.barber_id)
        ).all()
    )

    nearby = []
    for barber in session.exec(select(Barber)).all():
        distance = haversine_km(lat, long, barber.lat, barber.long)
        if distance > radius_km:
            continue
        queue_length = queue_lengths.get(barber.id, 0)
        nearby.append(
            {
                "id": barber.id,
                "name": barber.name,
                "lat": barber.lat,
                "long": barber.long,
                "distance": distance,
                "queue_length": queue_length,
                "estimated_wait_time": queue_length * average_service_minutes,
            }
        )

    nearby.sort(key=lambda b: (b["distance"], b["id"]))
    for b in nearby:
        b["distance"] = round(b["distance"], 1)

    logger.debug("Found %d barbers within %skm of (%s, %s)", len(nearby), radius_km, lat, long)
    return nearby
