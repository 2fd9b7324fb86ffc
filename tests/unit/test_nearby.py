import pytest

from barberqueue.errors import ValidationFailed
from barberqueue.geo import haversine_km
from barberqueue.nearby import find_nearby_barbers

# Bengaluru landmarks
MG_ROAD = (12.9756, 77.6050)
INDIRANAGAR = (12.9784, 77.6408)
KORAMANGALA = (12.9352, 77.6245)
MYSURU = (12.2958, 76.6394)


def test_haversine_zero_and_known_distance():
    assert haversine_km(*MG_ROAD, *MG_ROAD) == 0
    # Bengaluru to Mysuru is roughly 128 km as the crow flies
    assert 120 < haversine_km(*MG_ROAD, *MYSURU) < 135


def test_haversine_is_symmetric():
    assert haversine_km(*MG_ROAD, *KORAMANGALA) == pytest.approx(haversine_km(*KORAMANGALA, *MG_ROAD))


def test_nearby_filters_and_sorts(session, manager, make_barber, make_user):
    far = make_barber("Far", lat=MYSURU[0], long=MYSURU[1])
    kora = make_barber("Kora", lat=KORAMANGALA[0], long=KORAMANGALA[1])
    indi = make_barber("Indi", lat=INDIRANAGAR[0], long=INDIRANAGAR[1])
    for i in range(2):
        manager.join_queue(kora.id, make_user(f"U{i}").id, "classic-haircut")

    result = find_nearby_barbers(session, *MG_ROAD, radius_km=10)

    assert [b["id"] for b in result] == [indi.id, kora.id]
    assert far.id not in [b["id"] for b in result]
    kora_row = result[1]
    assert kora_row["queue_length"] == 2
    assert kora_row["estimated_wait_time"] == 30
    assert result[0]["queue_length"] == 0
    assert result[0]["distance"] == round(result[0]["distance"], 1)


def test_nearby_ties_break_by_id(session, make_barber):
    first = make_barber("First", lat=KORAMANGALA[0], long=KORAMANGALA[1])
    second = make_barber("Second", lat=KORAMANGALA[0], long=KORAMANGALA[1])

    result = find_nearby_barbers(session, *MG_ROAD, radius_km=10)

    assert [b["id"] for b in result] == [first.id, second.id]


def test_nearby_empty(session):
    assert find_nearby_barbers(session, *MG_ROAD) == []


@pytest.mark.parametrize("lat, long, radius", [(91, 0, 10), (0, -181, 10), (0, 0, 0)])
def test_nearby_validates_input(session, lat, long, radius):
    with pytest.raises(ValidationFailed):
        find_nearby_barbers(session, lat, long, radius)
