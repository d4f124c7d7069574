"""Tests for the admin user-management endpoints."""

from unittest.mock import AsyncMock, MagicMock

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from cinereserve.api.deps import get_accounts
from cinereserve.exceptions import NotFoundError
from cinereserve.schemas import SessionUser


def set_rowcount(db: AsyncMock, rowcount: int) -> None:
    """Make every statement run on ``db`` report ``rowcount`` affected rows."""
    result = MagicMock()
    result.rowcount = rowcount
    db.execute = AsyncMock(return_value=result)


# ---------------------------------------------------------------------------
# GET /admin/users
# ---------------------------------------------------------------------------


async def test_list_users(test_app: FastAPI, login_as) -> None:
    login_as("admin")
    accounts = MagicMock()
    accounts.list_users = AsyncMock(
        return_value=[
            SessionUser(id=1, username="root", role="admin"),
            SessionUser(id=2, username="bob", role="client"),
        ]
    )
    test_app.dependency_overrides[get_accounts] = lambda: accounts

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.get("/admin/users")

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 2
    assert body["data"][1] == {"id": 2, "username": "bob", "role": "client"}
    # Password hashes are never exposed
    assert all("password" not in user for user in body["data"])


async def test_list_users_admin_only(test_app: FastAPI, login_as) -> None:
    login_as("manager")

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.get("/admin/users")

    assert response.status_code == 403
    assert response.json()["requiredRoles"] == ["admin"]


# ---------------------------------------------------------------------------
# PUT /admin/users/{user_id}/role
# ---------------------------------------------------------------------------


async def test_change_role(test_app: FastAPI, db: AsyncMock, login_as) -> None:
    login_as("admin", user_id=1)
    set_rowcount(db, 1)

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.put("/admin/users/2/role", json={"role": "employee"})

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "User role updated successfully"}


async def test_change_role_invalid_role(test_app: FastAPI, login_as) -> None:
    login_as("admin", user_id=1)

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.put("/admin/users/2/role", json={"role": "superuser"})

    assert response.status_code == 400
    assert response.json() == {
        "error": "Invalid role",
        "valid_roles": ["client", "employee", "manager", "admin"],
    }


async def test_change_role_self_demotion(test_app: FastAPI, login_as) -> None:
    login_as("admin", user_id=1)

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.put("/admin/users/1/role", json={"role": "client"})

    assert response.status_code == 400
    assert response.json() == {"error": "You cannot remove your own admin privileges"}


async def test_change_role_unknown_user(test_app: FastAPI, db: AsyncMock, login_as) -> None:
    login_as("admin", user_id=1)
    set_rowcount(db, 0)

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.put("/admin/users/77/role", json={"role": "manager"})

    assert response.status_code == 404
    assert response.json() == {"error": "User not found"}


async def test_change_role_invalid_user_id(test_app: FastAPI, login_as) -> None:
    login_as("admin", user_id=1)

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.put("/admin/users/bob/role", json={"role": "manager"})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid user ID"}


async def test_change_role_user_id_out_of_range(
    test_app: FastAPI, db: AsyncMock, login_as
) -> None:
    login_as("admin", user_id=1)

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.put("/admin/users/99999999999/role", json={"role": "manager"})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid user ID"}
    db.execute.assert_not_awaited()


async def test_change_role_requires_admin(test_app: FastAPI, login_as) -> None:
    login_as("manager", user_id=1)
    accounts = MagicMock()
    accounts.change_role = AsyncMock(side_effect=NotFoundError("User not found"))
    test_app.dependency_overrides[get_accounts] = lambda: accounts

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.put("/admin/users/2/role", json={"role": "client"})

    assert response.status_code == 403
    accounts.change_role.assert_not_awaited()
