from datetime import date, datetime, timezone
from uuid import uuid4
from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from puzzle_rsvp.events.models import EventDB
from puzzle_rsvp.invites.models import InviteDB, RsvpStatus


def make_event(**kwargs):
    defaults = dict(
        id=uuid4(),
        slug="garden-party",
        title="Garden Party",
        event_date=date(2026, 7, 4),
        is_active=True,
        created_at=datetime.now(timezone.utc),
        updated_at=datetime.now(timezone.utc),
    )
    return EventDB(**{**defaults, **kwargs})


def make_invite(**kwargs):
    defaults = dict(
        id=uuid4(),
        token="tok-" + uuid4().hex,
        event_slug="garden-party",
        guest_name="Ada Lovelace",
        created_at=datetime.now(timezone.utc),
    )
    return InviteDB(**{**defaults, **kwargs})


def select_result(value):
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    return result


def scalars_result(values):
    result = MagicMock()
    result.scalars.return_value.all.return_value = values
    return result


def test_admin_routes_require_key(client: TestClient, mock_db):
    response = client.get("/admin/events/")

    assert response.status_code in (401, 403)
    mock_db.execute.assert_not_awaited()


def test_create_event(client: TestClient, mock_db, admin):
    mock_db.execute.return_value = select_result(None)

    async def mock_refresh(obj):
        obj.created_at = datetime.now(timezone.utc)
        obj.updated_at = datetime.now(timezone.utc)

    mock_db.refresh = mock_refresh

    response = client.post(
        "/admin/events/",
        json={"slug": "garden-party", "title": "Garden Party", "event_date": "2026-07-04"},
    )

    assert response.status_code == 201
    data = response.json()
    assert data["slug"] == "garden-party"
    assert data["event_date"] == "2026-07-04"
    assert data["is_active"] is True
    mock_db.add.assert_called_once()


def test_create_event_duplicate_slug(client: TestClient, mock_db, admin):
    mock_db.execute.return_value = select_result(make_event())

    response = client.post("/admin/events/", json={"slug": "garden-party", "title": "Again"})

    assert response.status_code == 409
    mock_db.add.assert_not_called()


def test_list_events(client: TestClient, mock_db, admin):
    mock_db.execute.return_value = scalars_result([make_event(), make_event(slug="b")])

    response = client.get("/admin/events/")

    assert response.status_code == 200
    assert [e["slug"] for e in response.json()] == ["garden-party", "b"]


def test_archive_event(client: TestClient, mock_db, admin):
    event = make_event()
    mock_db.execute.return_value = select_result(event)

    response = client.patch("/admin/events/garden-party", json={"is_active": False})

    assert response.status_code == 200
    assert response.json()["is_active"] is False
    assert response.json()["title"] == "Garden Party"
    assert event.is_active is False


def test_update_missing_event(client: TestClient, mock_db, admin):
    mock_db.execute.return_value = select_result(None)

    response = client.patch("/admin/events/nope", json={"title": "x"})

    assert response.status_code == 404


def test_create_invite(client: TestClient, mock_db, admin):
    mock_db.execute.return_value = select_result(make_event())

    async def mock_refresh(obj):
        obj.created_at = datetime.now(timezone.utc)

    mock_db.refresh = mock_refresh

    response = client.post("/admin/events/garden-party/invites", json={"guest_name": "Grace Hopper"})

    assert response.status_code == 201
    data = response.json()
    assert data["guest_name"] == "Grace Hopper"
    assert data["event_slug"] == "garden-party"
    assert data["puzzle_solved"] is False
    assert data["invite_url"].endswith(f"/invite/{data['token']}")


def test_create_invite_for_unknown_event(client: TestClient, mock_db, admin):
    mock_db.execute.return_value = select_result(None)

    response = client.post("/admin/events/nope/invites", json={"guest_name": "Grace Hopper"})

    assert response.status_code == 404
    mock_db.add.assert_not_called()


def test_create_invite_requires_guest_name(client: TestClient, mock_db, admin):
    response = client.post("/admin/events/garden-party/invites", json={"guest_name": ""})

    assert response.status_code == 422


def test_list_invites_shows_responses_to_admin(client: TestClient, mock_db, admin):
    answered = make_invite(
        puzzle_solved=True,
        rsvp_status=RsvpStatus.accepted,
        rsvp_data={"attending": "Yes"},
        solved_at=datetime.now(timezone.utc),
        rsvp_at=datetime.now(timezone.utc),
    )
    pending = make_invite(guest_name="Grace Hopper")
    mock_db.execute.side_effect = [
        select_result(make_event()),
        scalars_result([answered, pending]),
    ]

    response = client.get("/admin/events/garden-party/invites")

    assert response.status_code == 200
    data = response.json()
    assert data[0]["rsvp_status"] == "accepted"
    assert data[0]["rsvp_data"] == {"attending": "Yes"}
    assert data[1]["rsvp_status"] is None
    assert data[1]["guest_name"] == "Grace Hopper"
