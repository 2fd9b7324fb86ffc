from barberqueue.payments import compute_signature

PAYMENT_SECRET = "test-razorpay-secret"


def test_create_order_converts_rupees_to_paise(client, order_client, make_user, user_headers):
    user = make_user()

    resp = client.post("/payment/create-order", json={"amount": 266.5}, headers=user_headers(user.id))

    assert resp.status_code == 201
    assert resp.json()["order"] == {"id": "order_test_1", "amount": 26650, "currency": "INR"}


def test_create_order_rejects_bad_amount(client, order_client, make_user, user_headers):
    user = make_user()
    resp = client.post("/payment/create-order", json={"amount": 0}, headers=user_headers(user.id))
    assert resp.status_code == 422
    assert order_client.orders == []


def test_verify_payment_joins_queue(client, make_barber, make_user, user_headers, barber_headers):
    barber = make_barber()
    user = make_user()
    signature = compute_signature(PAYMENT_SECRET, "order_1", "pay_1")

    resp = client.post(
        "/payment/verify-payment",
        json={
            "order_id": "order_1",
            "payment_id": "pay_1",
            "signature": signature,
            "barber_id": barber.id,
            "service": "skin-fade",
        },
        headers=user_headers(user.id),
    )

    assert resp.status_code == 200
    assert resp.json()["queue"]["user_id"] == user.id
    assert client.get("/barber/queue", headers=barber_headers(barber.id)).json()["queue_length"] == 1


def test_verify_payment_bad_signature(client, make_barber, make_user, user_headers, barber_headers):
    barber = make_barber()
    user = make_user()

    resp = client.post(
        "/payment/verify-payment",
        json={
            "order_id": "order_1",
            "payment_id": "pay_1",
            "signature": "0" * 64,
            "barber_id": barber.id,
            "service": "skin-fade",
        },
        headers=user_headers(user.id),
    )

    assert resp.status_code == 400
    assert resp.json() == {"msg": "Invalid payment signature"}
    assert client.get("/barber/queue", headers=barber_headers(barber.id)).json()["queue_length"] == 0


def test_verify_payment_join_failure(client, make_user, user_headers):
    user = make_user()
    signature = compute_signature(PAYMENT_SECRET, "order_1", "pay_1")

    resp = client.post(
        "/payment/verify-payment",
        json={
            "order_id": "order_1",
            "payment_id": "pay_1",
            "signature": signature,
            "barber_id": 12345,
            "service": "skin-fade",
        },
        headers=user_headers(user.id),
    )

    assert resp.status_code == 500
    assert resp.json() == {"msg": "Payment captured but queue join failed"}
