"""Tests API / API tests."""

import json

import pytest
from sqlalchemy import func, select

from app.config import settings
from app.models.availability import Availability
from app.models.candidate import Candidate
from app.models.comment import Comment
from app.models.schedule import Schedule
from app.models.user import User
from app.schemas.auth import GitHubUser
from app.utils.auth import create_session_token

FORM_HEADERS = {"Content-Type": "application/x-www-form-urlencoded"}


async def _create_schedule(client, name: str, memo: str, candidates: str) -> str:
    resp = await client.post(
        "/schedules",
        data={"scheduleName": name, "memo": memo, "candidates": candidates},
    )
    assert resp.status_code == 302
    return resp.headers["location"].split("/schedules/")[1]


async def _first_candidate_id(db, schedule_id: str) -> int:
    result = await db.execute(select(Candidate.candidate_id).where(Candidate.schedule_id == schedule_id))
    return result.scalars().first()


@pytest.mark.asyncio
async def test_api_health(client):
    resp = await client.get("/api/")
    assert resp.status_code == 200
    assert resp.json()["status"] == "running"
    assert "X-Request-ID" in resp.headers


@pytest.mark.asyncio
async def test_login_page_links_to_github(client):
    resp = await client.get("/login")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    assert '<a href="/auth/github"' in resp.text


@pytest.mark.asyncio
async def test_login_page_shows_username(auth_client):
    resp = await auth_client.get("/login")
    assert resp.status_code == 200
    assert "testuser" in resp.text


@pytest.mark.asyncio
async def test_logout_redirects_to_root(auth_client):
    resp = await auth_client.get("/logout")
    assert resp.status_code == 302
    assert resp.headers["location"] == "/"


@pytest.mark.asyncio
async def test_github_login_redirects_with_state(client):
    resp = await client.get("/auth/github")
    assert resp.status_code == 302
    assert resp.headers["location"].startswith("https://github.com/login/oauth/authorize?")
    assert "oauth_state" in resp.cookies


@pytest.mark.asyncio
async def test_github_callback_rejects_bad_state(client):
    client.cookies.set("oauth_state", "expected")
    resp = await client.get("/auth/github/callback", params={"code": "abc", "state": "forged"})
    assert resp.status_code == 302
    assert resp.headers["location"] == "/login"


@pytest.mark.asyncio
async def test_github_callback_upserts_user(client, db, monkeypatch):
    async def fake_fetch_github_user(code: str) -> GitHubUser:
        assert code == "abc"
        return GitHubUser(id=42, login="octocat")

    monkeypatch.setattr("app.api.auth.fetch_github_user", fake_fetch_github_user)
    client.cookies.set("oauth_state", "state-1")

    resp = await client.get("/auth/github/callback", params={"code": "abc", "state": "state-1"})

    assert resp.status_code == 302
    assert resp.headers["location"] == "/"
    assert settings.SESSION_COOKIE_NAME in resp.cookies
    result = await db.execute(select(User.user_id, User.username))
    assert [tuple(row) for row in result.all()] == [(42, "octocat")]


@pytest.mark.asyncio
async def test_create_and_show_schedule(auth_client):
    resp = await auth_client.post(
        "/schedules",
        data={
            "scheduleName": "テスト予定1",
            "memo": "テストメモ1\r\nテストメモ2",
            "candidates": "テスト候補1\r\nテスト候補2\r\nテスト候補3",
        },
        headers=FORM_HEADERS,
    )
    assert resp.status_code == 302
    location = resp.headers["location"]
    assert "/schedules/" in location

    resp = await auth_client.get(location)
    assert resp.status_code == 200
    body = resp.text
    for fragment in ("テスト予定1", "テストメモ1", "テストメモ2", "テスト候補1", "テスト候補2", "テスト候補3"):
        assert fragment in body


@pytest.mark.asyncio
async def test_create_schedule_validation_failure(auth_client, db):
    resp = await auth_client.post("/schedules", data={"scheduleName": "", "memo": "", "candidates": "A"})
    assert resp.status_code == 400
    assert "location" not in resp.headers

    resp = await auth_client.post("/schedules", data={"scheduleName": "Meeting", "memo": "", "candidates": "\r\n"})
    assert resp.status_code == 400

    assert (await db.execute(select(func.count()).select_from(Schedule))).scalar_one() == 0


@pytest.mark.asyncio
async def test_show_unknown_schedule(auth_client):
    resp = await auth_client.get("/schedules/does-not-exist")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_update_availability(auth_client, db, test_user):
    schedule_id = await _create_schedule(auth_client, "Availability", "memo", "Slot 1")
    candidate_id = await _first_candidate_id(db, schedule_id)

    resp = await auth_client.post(
        f"/schedules/{schedule_id}/users/{test_user.user_id}/candidates/{candidate_id}",
        content=json.dumps({"availability": 2}),
    )

    assert resp.json() == {"status": "OK", "availability": 2}
    result = await db.execute(select(Availability.availability).where(Availability.schedule_id == schedule_id))
    assert result.scalars().all() == [2]


@pytest.mark.asyncio
async def test_update_availability_form_and_default(auth_client, db, test_user):
    schedule_id = await _create_schedule(auth_client, "Availability", "", "Slot 1")
    candidate_id = await _first_candidate_id(db, schedule_id)
    url = f"/schedules/{schedule_id}/users/{test_user.user_id}/candidates/{candidate_id}"

    resp = await auth_client.post(url, data={"availability": "1"})
    assert resp.json() == {"status": "OK", "availability": 1}

    resp = await auth_client.post(url)
    assert resp.json() == {"status": "OK", "availability": 0}

    result = await db.execute(select(Availability.availability).where(Availability.schedule_id == schedule_id))
    assert result.scalars().all() == [0]


@pytest.mark.asyncio
async def test_update_availability_rejections(auth_client, db, test_user):
    first = await _create_schedule(auth_client, "First", "", "A")
    second = await _create_schedule(auth_client, "Second", "", "B")
    candidate_id = await _first_candidate_id(db, first)
    foreign_candidate = await _first_candidate_id(db, second)

    resp = await auth_client.post(
        f"/schedules/{first}/users/{test_user.user_id}/candidates/{candidate_id}",
        json={"availability": 5},
    )
    assert resp.status_code == 400

    resp = await auth_client.post(
        f"/schedules/{first}/users/{test_user.user_id}/candidates/{foreign_candidate}",
        json={"availability": 2},
    )
    assert resp.status_code == 404

    resp = await auth_client.post(
        f"/schedules/{first}/users/999/candidates/{candidate_id}",
        json={"availability": 2},
    )
    assert resp.status_code == 409

    assert (await db.execute(select(func.count()).select_from(Availability))).scalar_one() == 0


@pytest.mark.asyncio
async def test_update_availability_infinite_value_defaults_to_unknown(auth_client, db, test_user):
    schedule_id = await _create_schedule(auth_client, "Availability", "", "Slot 1")
    candidate_id = await _first_candidate_id(db, schedule_id)

    resp = await auth_client.post(
        f"/schedules/{schedule_id}/users/{test_user.user_id}/candidates/{candidate_id}",
        content=b'{"availability": Infinity}',
    )

    assert resp.status_code == 200
    assert resp.json() == {"status": "OK", "availability": 0}


@pytest.mark.asyncio
async def test_oversized_ids_are_client_errors(auth_client, db):
    schedule_id = await _create_schedule(auth_client, "Ids", "", "Slot 1")
    candidate_id = await _first_candidate_id(db, schedule_id)
    huge = 2**70

    resp = await auth_client.post(
        f"/schedules/{schedule_id}/users/{huge}/candidates/{candidate_id}",
        json={"availability": 2},
    )
    assert resp.status_code == 422

    resp = await auth_client.post(
        f"/schedules/{schedule_id}/users/0/candidates/{huge}",
        json={"availability": 2},
    )
    assert resp.status_code == 422

    resp = await auth_client.post(f"/schedules/{schedule_id}/users/{huge}/comments", json={"comment": "hi"})
    assert resp.status_code == 422

    for model in (Availability, Comment):
        assert (await db.execute(select(func.count()).select_from(model))).scalar_one() == 0


@pytest.mark.asyncio
async def test_update_comment(auth_client, db, test_user):
    schedule_id = await _create_schedule(auth_client, "Comment", "memo", "Slot 1")

    resp = await auth_client.post(
        f"/schedules/{schedule_id}/users/{test_user.user_id}/comments",
        content=json.dumps({"comment": "testcomment"}),
    )

    assert resp.json() == {"status": "OK", "comment": "testcomment"}
    result = await db.execute(select(Comment.comment).where(Comment.schedule_id == schedule_id))
    assert result.scalars().all() == ["testcomment"]

    resp = await auth_client.get(f"/schedules/{schedule_id}")
    assert "testcomment" in resp.text


@pytest.mark.asyncio
async def test_unauthenticated_requests_are_refused(client, db, test_user):
    resp = await client.post(
        "/schedules",
        data={"scheduleName": "Nope", "memo": "", "candidates": "A"},
    )
    assert resp.status_code == 401

    resp = await client.post("/schedules/any/users/0/candidates/1", json={"availability": 2})
    assert resp.status_code == 401

    resp = await client.post("/schedules/any/users/0/comments", json={"comment": "hi"})
    assert resp.status_code == 401

    resp = await client.get("/schedules/any")
    assert resp.status_code == 302
    assert resp.headers["location"] == "/login"

    for model in (Schedule, Candidate, Availability, Comment):
        assert (await db.execute(select(func.count()).select_from(model))).scalar_one() == 0


@pytest.mark.asyncio
async def test_bearer_token_is_accepted(client, test_user):
    token = create_session_token(test_user.user_id, test_user.username)
    resp = await client.get("/schedules/new", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 200
    assert 'name="scheduleName"' in resp.text


@pytest.mark.asyncio
async def test_index_lists_own_schedules(auth_client):
    await _create_schedule(auth_client, "Team lunch", "", "Mon\nTue")

    resp = await auth_client.get("/")
    assert resp.status_code == 200
    assert "Team lunch" in resp.text


@pytest.mark.asyncio
async def test_index_anonymous(client):
    resp = await client.get("/")
    assert resp.status_code == 200
    assert 'href="/login"' in resp.text
