"""
Tests for reservation API endpoints.
"""

from datetime import date, timedelta

import pytest
from fastapi import status

from steakz.models import Order, Reservation, RoleEnum


TOMORROW = date.today() + timedelta(days=1)


def booking(user_id, **overrides):
    data = {
        "userId": user_id,
        "name": "Alice",
        "date": TOMORROW.isoformat(),
        "time": "19:00",
        "orders": [{"item": "steak", "price": 30}, {"item": "wine", "price": 10}],
    }
    data.update(overrides)
    return data


class TestBookReservation:
    async def test_manager_books_with_orders(self, client, manager, customer, auth_headers):
        response = await client.post(
            "/api/reservations", json=booking(customer.id), headers=auth_headers(manager)
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["userId"] == customer.id
        assert data["name"] == "Alice"
        assert data["date"] == TOMORROW.isoformat()
        assert data["time"] == "19:00"
        assert data["isPaid"] is False
        assert data["status"] == "booked"
        assert data["served"] is False
        assert sorted((o["menuItem"], o["price"]) for o in data["orders"]) == [("steak", 30), ("wine", 10)]

    async def test_missing_name_creates_nothing(self, client, manager, customer, auth_headers, count_rows):
        payload = booking(customer.id)
        del payload["name"]

        response = await client.post("/api/reservations", json=payload, headers=auth_headers(manager))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"] == "Missing reservation details"
        assert await count_rows(Reservation) == 0
        assert await count_rows(Order) == 0

    async def test_negative_price_rejected(self, client, manager, customer, auth_headers, count_rows):
        payload = booking(customer.id, orders=[{"item": "steak", "price": -1}])

        response = await client.post("/api/reservations", json=payload, headers=auth_headers(manager))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert await count_rows(Reservation) == 0

    async def test_unknown_user(self, client, manager, auth_headers):
        response = await client.post("/api/reservations", json=booking(999), headers=auth_headers(manager))
        assert response.status_code == status.HTTP_404_NOT_FOUND

    async def test_slot_cannot_be_double_booked(self, client, manager, customer, auth_headers, count_rows):
        headers = auth_headers(manager)
        first = await client.post("/api/reservations", json=booking(customer.id), headers=headers)
        second = await client.post("/api/reservations", json=booking(customer.id), headers=headers)

        assert first.status_code == status.HTTP_201_CREATED
        assert second.status_code == status.HTTP_400_BAD_REQUEST
        assert await count_rows(Reservation) == 1
        assert await count_rows(Order) == 2

    @pytest.mark.parametrize("role", [RoleEnum.USER, RoleEnum.CASHIER])
    async def test_staff_route_forbidden_for_other_roles(self, client, make_user, auth_headers, role):
        actor = await make_user("someone", role)
        # payload validity does not matter for the role gate
        response = await client.post("/api/reservations", json={}, headers=auth_headers(actor))
        assert response.status_code == status.HTTP_403_FORBIDDEN

    async def test_user_books_for_self(self, client, customer, auth_headers):
        response = await client.post(
            "/api/reservations/create", json=booking(customer.id), headers=auth_headers(customer)
        )
        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["userId"] == customer.id

    async def test_user_cannot_book_for_someone_else(self, client, customer, manager, auth_headers, count_rows):
        response = await client.post(
            "/api/reservations/create", json=booking(manager.id), headers=auth_headers(customer)
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert await count_rows(Reservation) == 0

    async def test_cashier_cannot_use_self_booking(self, client, cashier, auth_headers):
        response = await client.post(
            "/api/reservations/create", json=booking(cashier.id), headers=auth_headers(cashier)
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN

    async def test_requires_token(self, client, customer):
        response = await client.post("/api/reservations", json=booking(customer.id))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestAvailableTimes:
    async def test_booking_every_slot_leaves_none(self, client, manager, customer, auth_headers):
        headers = auth_headers(manager)
        day = TOMORROW.isoformat()

        response = await client.get("/api/reservations/slots", params={"date": day}, headers=headers)
        assert response.json() == ["13:00", "19:00"]

        await client.post("/api/reservations", json=booking(customer.id, time="19:00"), headers=headers)
        response = await client.get("/api/reservations/slots", params={"date": day}, headers=headers)
        assert response.json() == ["13:00"]

        await client.post("/api/reservations", json=booking(customer.id, time="13:00"), headers=headers)
        response = await client.get("/api/reservations/slots", params={"date": day}, headers=headers)
        assert response.json() == []

        other_day = (TOMORROW + timedelta(days=1)).isoformat()
        response = await client.get("/api/reservations/slots", params={"date": other_day}, headers=headers)
        assert response.json() == ["13:00", "19:00"]

    async def test_date_is_required(self, client, manager, auth_headers):
        response = await client.get("/api/reservations/slots", headers=auth_headers(manager))
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    async def test_cashier_forbidden(self, client, cashier, auth_headers):
        response = await client.get(
            "/api/reservations/slots", params={"date": TOMORROW.isoformat()}, headers=auth_headers(cashier)
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestPaymentAndServing:
    @pytest.fixture
    async def reservation_id(self, client, manager, customer, auth_headers):
        response = await client.post(
            "/api/reservations", json=booking(customer.id), headers=auth_headers(manager)
        )
        return response.json()["id"]

    async def test_mark_paid_is_idempotent(self, client, cashier, auth_headers, reservation_id):
        headers = auth_headers(cashier)
        first = await client.patch(f"/api/reservations/{reservation_id}/mark-paid", headers=headers)
        second = await client.patch(f"/api/reservations/{reservation_id}/mark-paid", headers=headers)

        assert first.status_code == second.status_code == status.HTTP_200_OK
        assert first.json()["reservation"] == second.json()["reservation"]
        assert second.json()["reservation"]["isPaid"] is True
        assert second.json()["reservation"]["status"] == "paid"
        assert second.json()["reservation"]["served"] is False

    async def test_serve_before_payment(self, client, admin, auth_headers, reservation_id):
        headers = auth_headers(admin)
        served = await client.patch(f"/api/reservations/{reservation_id}/serve", headers=headers)

        assert served.status_code == status.HTTP_200_OK
        assert served.json()["reservation"]["served"] is True
        assert served.json()["reservation"]["isPaid"] is False
        assert served.json()["reservation"]["status"] == "booked"

        paid = await client.patch(f"/api/reservations/{reservation_id}/mark-paid", headers=headers)
        assert paid.json()["reservation"]["served"] is True
        assert paid.json()["reservation"]["isPaid"] is True

    async def test_unknown_reservation(self, client, cashier, auth_headers):
        response = await client.patch("/api/reservations/12345/mark-paid", headers=auth_headers(cashier))
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["message"] == "Reservation not found"

    async def test_manager_cannot_mark_paid(self, client, manager, auth_headers, reservation_id):
        response = await client.patch(
            f"/api/reservations/{reservation_id}/mark-paid", headers=auth_headers(manager)
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN

    async def test_unpaid_list(self, client, cashier, auth_headers, reservation_id):
        headers = auth_headers(cashier)
        unpaid = await client.get("/api/reservations/unpaid", headers=headers)
        assert [r["id"] for r in unpaid.json()] == [reservation_id]

        await client.patch(f"/api/reservations/{reservation_id}/mark-paid", headers=headers)
        unpaid = await client.get("/api/reservations/unpaid", headers=headers)
        assert unpaid.json() == []


class TestListing:
    async def test_day_listing_is_half_open(self, client, manager, cashier, customer, auth_headers):
        headers = auth_headers(manager)
        for offset, time in [(0, "13:00"), (0, "19:00"), (1, "13:00"), (-1, "19:00")]:
            day = (TOMORROW + timedelta(days=offset)).isoformat()
            await client.post("/api/reservations", json=booking(customer.id, date=day, time=time), headers=headers)

        response = await client.get(
            "/api/reservations/today", params={"day": TOMORROW.isoformat()}, headers=auth_headers(cashier)
        )

        assert response.status_code == status.HTTP_200_OK
        assert {(r["date"], r["time"]) for r in response.json()} == {
            (TOMORROW.isoformat(), "13:00"),
            (TOMORROW.isoformat(), "19:00"),
        }

    async def test_user_listing_sorted_by_date(self, client, manager, customer, auth_headers):
        headers = auth_headers(manager)
        days = [TOMORROW + timedelta(days=3), TOMORROW, TOMORROW + timedelta(days=1)]
        for day in days:
            await client.post("/api/reservations", json=booking(customer.id, date=day.isoformat()), headers=headers)

        response = await client.get("/api/reservations/user", headers=auth_headers(customer))

        assert response.status_code == status.HTTP_200_OK
        assert [r["date"] for r in response.json()] == [d.isoformat() for d in sorted(days)]

    async def test_user_cannot_list_other_users(self, client, customer, manager, auth_headers):
        response = await client.get(
            "/api/reservations/user", params={"userId": manager.id}, headers=auth_headers(customer)
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN

    async def test_manager_lists_for_user(self, client, manager, customer, auth_headers):
        headers = auth_headers(manager)
        await client.post("/api/reservations", json=booking(customer.id), headers=headers)

        response = await client.get("/api/reservations/user", params={"userId": customer.id}, headers=headers)
        assert len(response.json()) == 1

    async def test_list_all_includes_user(self, client, manager, customer, auth_headers):
        headers = auth_headers(manager)
        await client.post("/api/reservations", json=booking(customer.id), headers=headers)

        response = await client.get("/api/reservations", headers=headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()[0]["user"] == {"id": customer.id, "username": "customer"}

    @pytest.mark.parametrize("role", [RoleEnum.USER, RoleEnum.CASHIER])
    async def test_list_all_forbidden(self, client, make_user, auth_headers, role):
        actor = await make_user("someone", role)
        response = await client.get("/api/reservations", headers=auth_headers(actor))
        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestReport:
    async def test_day_report(self, client, manager, admin, customer, auth_headers):
        headers = auth_headers(manager)
        paid = await client.post(
            "/api/reservations",
            json=booking(customer.id, time="13:00"),
            headers=headers,
        )
        await client.post(
            "/api/reservations",
            json=booking(customer.id, time="19:00", orders=[{"item": "steak", "price": 30}]),
            headers=headers,
        )
        await client.patch(f"/api/reservations/{paid.json()['id']}/mark-paid", headers=auth_headers(admin))

        response = await client.get(
            "/api/reservations/report", params={"day": TOMORROW.isoformat()}, headers=headers
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "totalOrders": 2,
            "totalRevenue": 40,
            "mostOrderedDishes": [{"dish": "steak", "count": 2}, {"dish": "wine", "count": 1}],
        }

    async def test_all_time_summary(self, client, manager, admin, customer, auth_headers):
        headers = auth_headers(manager)
        created = await client.post("/api/reservations", json=booking(customer.id), headers=headers)
        await client.post("/api/reservations", json=booking(customer.id, time="13:00"), headers=headers)
        await client.patch(f"/api/reservations/{created.json()['id']}/mark-paid", headers=auth_headers(admin))

        response = await client.get("/api/reports/summary", headers=headers)

        assert response.json() == {"totalReservations": 2, "revenue": 40}

    async def test_cashier_cannot_see_report(self, client, cashier, auth_headers):
        response = await client.get("/api/reservations/report", headers=auth_headers(cashier))
        assert response.status_code == status.HTTP_403_FORBIDDEN
