"""HTTP tests for the booking API."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from booking.domain.models import OrderStatus, PaymentStatus, Principal, Role
from booking.infrastructure.security import BcryptPasswordHasher, JWTTokenService
from booking.main import create_app
from booking.presentation.dependencies import (
    get_email_service, get_password_hasher, get_token_service, get_uow
)

from fakes import InMemoryUnitOfWork, RecordingEmailService, make_order, make_payment, make_user

SECRET = "test-secret"


@pytest.fixture
def uow() -> InMemoryUnitOfWork:
    uow = InMemoryUnitOfWork()
    hasher = BcryptPasswordHasher(rounds=4)
    for user in (
        make_user("root-1", email="root@example.com", phone_number="+628000000001", role=Role.SUPER_ADMIN),
        make_user("admin-1", email="admin@example.com", phone_number="+628000000002", role=Role.ADMIN,
                  password_hash=hasher.hash("adm1n-pass")),
        make_user("user-1", email="customer@example.com"),
        make_user("user-2", email="other@example.com", phone_number="+628000000003"),
    ):
        uow.store.users[user.id] = user
    payment = make_payment()
    uow.store.payments[payment.id] = payment
    uow.store.orders["order-1"] = make_order()
    return uow


@pytest.fixture
def email() -> RecordingEmailService:
    return RecordingEmailService()


@pytest.fixture
def app(uow: InMemoryUnitOfWork, email: RecordingEmailService) -> FastAPI:
    app = create_app()
    app.dependency_overrides[get_uow] = lambda: uow
    app.dependency_overrides[get_email_service] = lambda: email
    app.dependency_overrides[get_password_hasher] = lambda: BcryptPasswordHasher(rounds=4)
    app.dependency_overrides[get_token_service] = lambda: JWTTokenService(SECRET)
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


def auth(user_id: str, role: Role) -> dict:
    token = JWTTokenService(SECRET).issue(Principal(id=user_id, email=f"{user_id}@example.com", role=role))
    return {"Authorization": f"Bearer {token}"}


ADMIN = auth("admin-1", Role.ADMIN)
CUSTOMER = auth("user-1", Role.CUSTOMER)


class TestOrderLifecycle:
    def test_create_then_admin_completes(self, client: TestClient, uow: InMemoryUnitOfWork) -> None:
        response = client.post(
            "/api/orders",
            json={"orderType": "tour", "departureDate": "2026-12-01T08:00:00+07:00"},
            headers=CUSTOMER,
        )
        assert response.status_code == 201
        order = response.json()["data"]
        assert order["order_status"] == "PENDING"
        assert order["order_type"] == "TOUR"
        assert order["user_id"] == "user-1"

        forbidden = client.put(f"/api/orders/{order['id']}/status", json={"orderStatus": "completed"}, headers=CUSTOMER)
        assert forbidden.status_code == 403
        assert uow.store.orders[order["id"]].order_status == OrderStatus.PENDING

        response = client.put(f"/api/orders/{order['id']}/status", json={"orderStatus": "completed"}, headers=ADMIN)
        assert response.status_code == 200
        assert response.json() == {
            "message": "Order status updated successfully",
            "data": {**response.json()["data"], "order_status": "COMPLETED"},
        }
        assert uow.store.orders[order["id"]].order_status == OrderStatus.COMPLETED

    def test_create_order_requires_authentication(self, client: TestClient) -> None:
        response = client.post("/api/orders", json={"orderType": "TOUR", "departureDate": "2026-12-01T08:00:00Z"})

        assert response.status_code == 401
        assert response.json() == {"message": "Unauthorized", "data": []}

    def test_invalid_token_is_unauthenticated(self, client: TestClient) -> None:
        response = client.get("/api/orders/order-1", headers={"Authorization": "Bearer garbage"})

        assert response.status_code == 401

    def test_invalid_status(self, client: TestClient) -> None:
        response = client.put("/api/orders/order-1/status", json={"orderStatus": "refunded"}, headers=ADMIN)

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid order status"

    def test_missing_status(self, client: TestClient) -> None:
        response = client.put("/api/orders/order-1/status", json={}, headers=ADMIN)

        assert response.status_code == 400
        assert response.json()["message"] == "Missing required fields"

    def test_unknown_order(self, client: TestClient) -> None:
        response = client.put("/api/orders/missing/status", json={"orderStatus": "CONFIRMED"}, headers=ADMIN)

        assert response.status_code == 404
        assert response.json() == {"message": "Order not found", "data": []}

    def test_list_orders_is_admin_only(self, client: TestClient) -> None:
        assert client.get("/api/orders", headers=CUSTOMER).status_code == 403

        response = client.get("/api/orders", headers=ADMIN)
        assert response.status_code == 200
        assert [o["id"] for o in response.json()["data"]] == ["order-1"]


class TestPayments:
    def test_admin_creates_payment(self, client: TestClient, uow: InMemoryUnitOfWork) -> None:
        response = client.post(
            "/api/payments",
            json={
                "orderId": "order-1",
                "senderName": "Budi Santoso",
                "transferDate": "2026-10-18T10:00:00Z",
                "totalPrice": "2500000",
                "proofUrl": "https://storage.example.com/proof/2.jpg",
            },
            headers=ADMIN,
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["payment_status"] == "PENDING"
        assert data["total_price"] == 2500000.0
        assert data["approved_by_admin_id"] == "admin-1"

    def test_total_price_must_be_numeric(self, client: TestClient) -> None:
        response = client.post(
            "/api/payments",
            json={
                "orderId": "order-1",
                "senderName": "Budi",
                "transferDate": "2026-10-18T10:00:00Z",
                "totalPrice": "abc",
                "proofUrl": "https://storage.example.com/proof/2.jpg",
            },
            headers=ADMIN,
        )

        assert response.status_code == 400

    def test_numeric_zero_price(self, client: TestClient) -> None:
        response = client.post(
            "/api/payments",
            json={
                "orderId": "order-1",
                "senderName": "Budi",
                "transferDate": "2026-10-18T10:00:00Z",
                "totalPrice": 0,
                "proofUrl": "https://storage.example.com/proof/2.jpg",
            },
            headers=ADMIN,
        )

        assert response.status_code == 201
        assert response.json()["data"]["total_price"] == 0.0

    def test_padded_status_is_rejected(self, client: TestClient, uow: InMemoryUnitOfWork) -> None:
        response = client.put("/api/payments/payment-1/status", json={"status": "approved\n"}, headers=ADMIN)

        assert response.status_code == 400
        assert uow.store.payments["payment-1"].payment_status == PaymentStatus.PENDING

    def test_status_update(self, client: TestClient, uow: InMemoryUnitOfWork, email: RecordingEmailService) -> None:
        response = client.put("/api/payments/payment-1/status", json={"status": "approved"}, headers=ADMIN)

        assert response.status_code == 200
        assert response.json()["data"]["payment_status"] == "APPROVED"
        assert uow.store.payments["payment-1"].payment_status == PaymentStatus.APPROVED
        assert email.sent[0]["email_type"] == "payment-approval"

    def test_customer_cannot_update_status(self, client: TestClient, uow: InMemoryUnitOfWork) -> None:
        response = client.put("/api/payments/payment-1/status", json={"status": "approved"}, headers=CUSTOMER)

        assert response.status_code == 403
        assert uow.store.payments["payment-1"].payment_status == PaymentStatus.PENDING

    def test_unknown_payment(self, client: TestClient) -> None:
        response = client.put("/api/payments/missing/status", json={"status": "approved"}, headers=ADMIN)

        assert response.status_code == 404

    def test_owner_uploads_proof(self, client: TestClient, uow: InMemoryUnitOfWork, email: RecordingEmailService) -> None:
        uow.store.payments["payment-1"].payment_status = PaymentStatus.REJECTED

        response = client.post(
            "/api/payments/payment-1/proof",
            json={
                "senderName": "Budi Santoso",
                "transferDate": "2026-10-19T09:00:00Z",
                "proofUrl": "https://storage.example.com/proof/3.jpg",
            },
            headers=CUSTOMER,
        )

        assert response.status_code == 200
        assert uow.store.payments["payment-1"].payment_status == PaymentStatus.PENDING
        assert uow.store.payments["payment-1"].proof_url == "https://storage.example.com/proof/3.jpg"
        assert email.sent[0]["email_type"] == "payment-verification"

    def test_other_customer_sees_not_found(self, client: TestClient) -> None:
        response = client.post(
            "/api/payments/payment-1/proof",
            json={
                "senderName": "Someone",
                "transferDate": "2026-10-19T09:00:00Z",
                "proofUrl": "https://storage.example.com/proof/4.jpg",
            },
            headers=auth("user-2", Role.CUSTOMER),
        )

        assert response.status_code == 404

    def test_get_payment(self, client: TestClient) -> None:
        response = client.get("/api/payments/payment-1", headers=CUSTOMER)

        assert response.status_code == 200
        assert response.json()["message"] == "Payment retrieved successfully"


class TestAuthFlow:
    def test_signup_conflict(self, client: TestClient, uow: InMemoryUnitOfWork) -> None:
        body = {"fullName": "Budi", "email": "customer@example.com", "password": "passw0rd!", "phoneNumber": "+62812"}

        response = client.post("/api/auth/signup", json=body)

        assert response.status_code == 409
        assert len(uow.store.users) == 4

    def test_signup_succeeds_when_email_fails(self, client: TestClient, app: FastAPI, uow: InMemoryUnitOfWork) -> None:
        app.dependency_overrides[get_email_service] = lambda: RecordingEmailService(error=RuntimeError("smtp down"))
        body = {"fullName": "Rina", "email": "rina@example.com", "password": "passw0rd!", "phoneNumber": "+62813"}

        response = client.post("/api/auth/signup", json=body)

        assert response.status_code == 201
        assert response.json()["data"]["role"] == "CUSTOMER"
        assert any(u.email == "rina@example.com" for u in uow.store.users.values())

    def test_login_then_use_token(self, client: TestClient) -> None:
        response = client.post("/api/auth/login", json={"email": "admin@example.com", "password": "adm1n-pass"})
        assert response.status_code == 200
        token = response.json()["data"]["access_token"]

        response = client.get("/api/orders", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 200

    def test_reset_password_flow(self, client: TestClient, uow: InMemoryUnitOfWork, email: RecordingEmailService) -> None:
        response = client.post("/api/auth/forgot-password", json={"email": "customer@example.com"})
        assert response.status_code == 200
        token = uow.store.users["user-1"].reset_password_token
        assert token in email.sent[0]["resetLink"]

        assert client.post("/api/auth/validate-reset-token", json={"token": token}).json()["data"] == {"valid": True}

        weak = client.post("/api/auth/reset-password", json={"token": token, "password": "short1"})
        assert weak.status_code == 400
        assert uow.store.users["user-1"].reset_password_token == token

        response = client.post("/api/auth/reset-password", json={"token": token, "password": "n3w-passw0rd"})
        assert response.status_code == 200

        again = client.post("/api/auth/reset-password", json={"token": token, "password": "n3w-passw0rd"})
        assert again.status_code == 400
        assert again.json()["message"] == "Reset password token is invalid or has expired"

    def test_forgot_password_unknown_email_looks_the_same(self, client: TestClient) -> None:
        known = client.post("/api/auth/forgot-password", json={"email": "customer@example.com"})
        unknown = client.post("/api/auth/forgot-password", json={"email": "nobody@example.com"})

        assert known.status_code == unknown.status_code == 200
        assert known.json() == unknown.json()

    def test_forgot_password_email_failure(self, client: TestClient, app: FastAPI) -> None:
        app.dependency_overrides[get_email_service] = lambda: RecordingEmailService(result=False)

        response = client.post("/api/auth/forgot-password", json={"email": "customer@example.com"})

        assert response.status_code == 500

    def test_create_admin_requires_super_admin(self, client: TestClient) -> None:
        body = {"fullName": "Andi", "email": "andi@example.com", "password": "passw0rd!", "phoneNumber": "+62814"}

        assert client.post("/api/users", json=body, headers=ADMIN).status_code == 403

        response = client.post("/api/users", json=body, headers=auth("root-1", Role.SUPER_ADMIN))
        assert response.status_code == 201
        assert response.json()["data"]["role"] == "ADMIN"
