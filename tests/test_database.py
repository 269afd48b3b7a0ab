"""Database manager: session scope transactions, lazy start-up and failures.

These tests run against a real ``DatabaseManager`` instead of overriding
``get_db``, so requests go through the same session handling as production.
"""

import pytest
from fastapi import HTTPException
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from dottie.models import User


async def count_users(manager):
    async with manager.session_scope() as session:
        return (await session.execute(select(func.count()).select_from(User))).scalar()


async def test_routes_use_the_real_session(live_db, live_client):
    res = await live_client.get("/api/user/")

    assert res.status_code == 200
    assert res.json()["data"]["total_count"] == 0


async def test_session_scope_commits_on_success(live_db, live_client):
    async with live_db.session_scope() as session:
        user = User(email="ada@example.com", first_name="Ada", last_name="Lovelace")
        session.add(user)

    res = await live_client.get(f"/api/user/{user.id}")

    assert res.status_code == 200
    assert res.json()["data"]["email"] == "ada@example.com"


async def test_session_scope_rolls_back_and_maps_sqlalchemy_errors(live_db):
    with pytest.raises(HTTPException) as exc_info:
        async with live_db.session_scope() as session:
            session.add(User(email="ada@example.com", first_name="Ada", last_name="Lovelace"))
            await session.flush()
            raise SQLAlchemyError("write failed")

    assert exc_info.value.status_code == 500
    assert exc_info.value.detail == "Database operation failed"
    assert await count_users(live_db) == 0


async def test_session_scope_rolls_back_and_reraises_http_errors(live_db):
    with pytest.raises(HTTPException) as exc_info:
        async with live_db.session_scope() as session:
            session.add(User(email="ada@example.com", first_name="Ada", last_name="Lovelace"))
            await session.flush()
            raise HTTPException(409, "Conflict")

    assert exc_info.value.status_code == 409
    assert exc_info.value.detail == "Conflict"
    assert await count_users(live_db) == 0


async def test_ensure_initialized_starts_the_engine_once(live_db):
    await live_db.ensure_initialized()
    engine = live_db._engine

    await live_db.ensure_initialized()

    assert engine is not None
    assert live_db._engine is engine
    assert await live_db.health_check() == (True, None)


async def test_health_check_reports_unreachable_database(unreachable_db):
    healthy, error = await unreachable_db.health_check()

    assert healthy is False
    assert error
    assert unreachable_db._engine is None


async def test_user_route_answers_503_when_database_is_unreachable(unreachable_db, live_client):
    res = await live_client.get("/api/user/1")

    assert res.status_code == 503
    payload = res.json()
    assert payload["error"] == "Database Unavailable"
    assert payload["status_code"] == 503
