# path: tests/test_api.py
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import DataError, IntegrityError, InterfaceError, OperationalError

from src.core.dependencies import (
    get_category_repository,
    get_transaction_repository,
    get_user_repository,
    get_waste_item_repository,
)
from src.core.models.db_helper import db_helper
from src.core.security import create_user_token, hash_password
from src.main import main_app


API = "/api/v1"


@pytest.fixture
def client(session, user_repo, category_repo, item_repo, tx_repo):
    async def _session():
        yield session

    main_app.dependency_overrides[db_helper.session_getter] = _session
    main_app.dependency_overrides[get_user_repository] = lambda: user_repo
    main_app.dependency_overrides[get_category_repository] = lambda: category_repo
    main_app.dependency_overrides[get_waste_item_repository] = lambda: item_repo
    main_app.dependency_overrides[get_transaction_repository] = lambda: tx_repo
    yield TestClient(main_app)
    main_app.dependency_overrides.clear()


def _auth(user) -> dict[str, str]:
    token = create_user_token(email=user.email, uid=user.id, role=user.role)
    return {"Authorization": f"Bearer {token}"}


def _deposit(client, user, *lines):
    items = [{"waste_item_id": i, "weight": w, "price": p} for i, w, p in lines]
    return client.post(f"{API}/transactions", json={"items": items}, headers=_auth(user))


# --- auth ---

def test_signup_token_me(client):
    resp = client.post(
        f"{API}/auth/signup",
        json={
            "name": "Siti",
            "email": "Siti@Gmail.com",
            "password": "rahasia1",
            "phone": "0812",
            "address": "Jl. Mawar 1",
        },
    )
    assert resp.status_code == 201, resp.text
    body = resp.json()
    assert body["success"] is True
    assert body["data"]["email"] == "siti@gmail.com"
    assert body["data"]["role"] == "USER"

    resp = client.post(f"{API}/auth/token", data={"username": "siti@gmail.com", "password": "rahasia1"})
    assert resp.status_code == 200, resp.text
    token = resp.json()["access_token"]

    me = client.get(f"{API}/users/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["name"] == "Siti"


def test_signup_duplicate_email_and_short_password(client, regular_user):
    payload = {"name": "X", "email": regular_user.email, "password": "rahasia1", "phone": "1", "address": "A"}
    resp = client.post(f"{API}/auth/signup", json=payload)
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "duplicate"

    payload.update(email="baru@gmail.com", password="123")
    assert client.post(f"{API}/auth/signup", json=payload).status_code == 422


def test_wrong_password(client, store):
    user = store.add_user(name="Budi", email="budi@gmail.com", hashed_password=hash_password("password123"))
    resp = client.post(f"{API}/auth/token", data={"username": user.email, "password": "nope"})
    assert resp.status_code == 401
    assert resp.json()["error"]["code"] == "bad_credentials"

    resp = client.post(f"{API}/auth/token", data={"username": "BUDI@gmail.com", "password": "password123"})
    assert resp.status_code == 200
    assert resp.json()["token_type"] == "bearer"


def test_users_list_is_admin_only(client, admin_user, regular_user):
    assert client.get(f"{API}/users", headers=_auth(regular_user)).status_code == 403
    resp = client.get(f"{API}/users", headers=_auth(admin_user))
    assert resp.status_code == 200
    assert {u["email"] for u in resp.json()} == {admin_user.email, regular_user.email}


def test_role_comes_from_database(client, store, regular_user):
    # в токене ADMIN, в БД - USER: прав нет
    forged = create_user_token(email=regular_user.email, uid=regular_user.id, role="ADMIN")
    resp = client.get(f"{API}/users", headers={"Authorization": f"Bearer {forged}"})
    assert resp.status_code == 403


def test_bad_token(client):
    resp = client.get(f"{API}/users/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401
    assert resp.json() == {
        "success": False,
        "error": {"code": "unauthorized", "message": "Invalid or expired token", "details": {}},
    }


# --- catalog ---

def test_catalog_is_public(client, botol, aluminium):
    resp = client.get(f"{API}/waste-items")
    assert resp.status_code == 200
    body = resp.json()
    assert body["count"] == 2
    assert body["data"][1]["name"] == botol.name
    assert body["data"][1]["price"] == 2600.0
    assert body["data"][1]["category"]["name"] == "Plastik"

    assert len(client.get(f"{API}/categories").json()) == 2


def test_item_detail_with_statistics(client, regular_user, botol):
    _deposit(client, regular_user, (botol.id, 3, 2600))
    resp = client.get(f"{API}/waste-items/{botol.id}")
    assert resp.status_code == 200
    assert resp.json()["statistics"]["total_weight"] == 3.0
    assert client.get(f"{API}/waste-items/404").status_code == 404


def test_catalog_mutations_need_admin(client, admin_user, regular_user, plastik):
    payload = {"name": "Aqua gelas", "price": 300, "unit": "Kg", "category_id": plastik.id}
    assert client.post(f"{API}/waste-items", json=payload).status_code == 401
    assert client.post(f"{API}/waste-items", json=payload, headers=_auth(regular_user)).status_code == 403

    resp = client.post(f"{API}/waste-items", json=payload, headers=_auth(admin_user))
    assert resp.status_code == 201, resp.text
    item_id = resp.json()["data"]["id"]

    resp = client.put(f"{API}/waste-items/{item_id}", json={"price": 350}, headers=_auth(admin_user))
    assert resp.status_code == 200
    assert resp.json()["data"]["price"] == 350.0

    resp = client.delete(f"{API}/waste-items/{item_id}", headers=_auth(admin_user))
    assert resp.json()["outcome"] == "REMOVED"


def test_delete_referenced_item(client, admin_user, regular_user, botol):
    _deposit(client, regular_user, (botol.id, 1, 2600))
    resp = client.delete(f"{API}/waste-items/{botol.id}", headers=_auth(admin_user))
    assert resp.status_code == 200
    assert resp.json()["outcome"] == "DEACTIVATED"
    assert client.get(f"{API}/waste-items").json()["count"] == 0


def test_negative_price_is_rejected(client, admin_user, plastik):
    payload = {"name": "Aqua gelas", "price": -1, "unit": "Kg", "category_id": plastik.id}
    resp = client.post(f"{API}/waste-items", json=payload, headers=_auth(admin_user))
    assert resp.status_code == 400
    assert resp.json()["error"]["details"] == {"field": "price"}


# --- transactions ---

def test_create_transaction(client, regular_user, botol):
    resp = _deposit(client, regular_user, (botol.id, 3, 2600))
    assert resp.status_code == 201, resp.text
    data = resp.json()["data"]
    assert data["status"] == "PENDING"
    assert data["total_amount"] == 7800.0
    assert data["total_weight"] == 3.0
    assert data["user"]["email"] == regular_user.email
    assert data["items"][0]["waste_item"]["name"] == botol.name


def test_create_transaction_requires_login(client, botol):
    resp = client.post(f"{API}/transactions", json={"items": [{"waste_item_id": botol.id, "weight": 1, "price": 2600}]})
    assert resp.status_code == 401


def test_create_transaction_errors(client, store, regular_user, botol):
    resp = _deposit(client, regular_user, (botol.id, 3, 3000))
    assert resp.status_code == 400
    err = resp.json()["error"]
    assert err["code"] == "price_mismatch"
    assert err["details"]["item_name"] == botol.name

    resp = client.post(
        f"{API}/transactions",
        json={"items": [{"waste_item_id": botol.id, "weight": 1, "price": 2600}, {"waste_item_id": botol.id}]},
        headers=_auth(regular_user),
    )
    assert resp.status_code == 400
    assert resp.json()["error"] == {
        "code": "invalid_line_shape",
        "message": "Invalid item at index 1: waste_item_id, weight and price are required",
        "details": {"index": 1},
    }

    resp = client.post(f"{API}/transactions", json={"items": []}, headers=_auth(regular_user))
    assert resp.json()["error"]["code"] == "empty_input"

    assert store.transactions == {}


def test_lifecycle_over_http(client, admin_user, regular_user, botol):
    tx_id = _deposit(client, regular_user, (botol.id, 3, 2600)).json()["data"]["id"]
    url = f"{API}/transactions/{tx_id}"

    resp = client.patch(url, json={"status": "APPROVED"}, headers=_auth(regular_user))
    assert resp.status_code == 403

    resp = client.patch(url, json={"status": "COMPLETED"}, headers=_auth(admin_user))
    assert resp.status_code == 400
    assert resp.json()["error"]["details"]["allowed"] == ["APPROVED", "REJECTED"]

    resp = client.patch(url, json={"status": "APPROVED"}, headers=_auth(admin_user))
    assert resp.status_code == 200
    assert resp.json()["data"]["status"] == "APPROVED"

    resp = client.patch(url, json={"status": "COMPLETED", "notes": "lunas"}, headers=_auth(admin_user))
    assert resp.json()["data"]["status"] == "COMPLETED"
    assert resp.json()["data"]["notes"] == "lunas"

    summary = client.get(f"{API}/transactions/summary", headers=_auth(regular_user)).json()
    assert summary["earned_amount"] == 7800.0
    assert summary["by_status"]["COMPLETED"]["count"] == 1


def test_transactions_are_private(client, admin_user, regular_user, other_user, botol):
    tx_id = _deposit(client, regular_user, (botol.id, 1, 2600)).json()["data"]["id"]

    assert client.get(f"{API}/transactions/{tx_id}", headers=_auth(other_user)).status_code == 404
    assert client.get(f"{API}/transactions/{tx_id}", headers=_auth(regular_user)).status_code == 200
    assert client.get(f"{API}/transactions", headers=_auth(other_user)).json() == []
    assert len(client.get(f"{API}/transactions", headers=_auth(admin_user)).json()) == 1


def test_backing_store_failure_is_503(client, item_repo, monkeypatch):
    async def broken(*args, **kwargs):
        raise OperationalError("SELECT 1", {}, ConnectionRefusedError("db is down"))

    monkeypatch.setattr(item_repo, "list_items", broken)
    resp = client.get(f"{API}/waste-items")
    assert resp.status_code == 503
    assert resp.json()["error"]["code"] == "backing_store_unavailable"


def test_lost_connection_is_503(client, item_repo, monkeypatch):
    async def broken(*args, **kwargs):
        raise InterfaceError("SELECT 1", {}, ConnectionResetError("connection is closed"))

    monkeypatch.setattr(item_repo, "list_items", broken)
    resp = client.get(f"{API}/waste-items")
    assert resp.status_code == 503
    assert resp.json()["error"]["code"] == "backing_store_unavailable"


def test_constraint_violation_is_not_503(client, item_repo, admin_user, botol, monkeypatch):
    async def conflicting_update(*args, **kwargs):
        raise IntegrityError("UPDATE waste_items", {}, Exception("duplicate key value violates unique constraint"))

    monkeypatch.setattr(item_repo, "update_fields", conflicting_update)
    resp = client.put(f"{API}/waste-items/{botol.id}", json={"price": 350}, headers=_auth(admin_user))
    assert resp.status_code == 409
    assert resp.json()["error"]["code"] == "constraint_violation"


def test_value_rejected_by_column_is_400(client, item_repo, admin_user, botol, monkeypatch):
    async def overflow(*args, **kwargs):
        raise DataError("UPDATE waste_items", {}, Exception("numeric field overflow"))

    monkeypatch.setattr(item_repo, "update_fields", overflow)
    resp = client.put(f"{API}/waste-items/{botol.id}", json={"price": 350}, headers=_auth(admin_user))
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "invalid_value"
