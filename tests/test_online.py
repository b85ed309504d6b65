from datetime import datetime, timedelta, timezone

from storefront.data.models import ActiveSessionModel
from storefront.services.presence_service import PresenceService
from storefront.tasks import sessions as session_tasks


def test_heartbeat_counts_distinct_sessions(client):
    assert client.post("/online", json={"session_id": "a"}).json() == {"count": 1}
    assert client.post("/online", json={"session_id": "b"}).json() == {"count": 2}
    # ponowny heartbeat tej samej sesji nie dubluje
    assert client.post("/online", json={"session_id": "a"}).json() == {"count": 2}
    assert client.get("/online").json() == {"count": 2}


def test_heartbeat_requires_session_id(client):
    assert client.post("/online", json={"session_id": ""}).status_code == 400


def test_online_window_and_purge(db):
    svc = PresenceService(db)
    start = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

    svc.heartbeat("old", now=start)
    svc.heartbeat("fresh", now=start + timedelta(seconds=90))

    # "old" poza oknem 60 s, ale jeszcze nie usuniety
    assert svc.online_count(now=start + timedelta(seconds=100)) == 1
    assert db.query(ActiveSessionModel).count() == 2

    removed = svc.purge_stale(now=start + timedelta(minutes=6))
    assert removed == 1
    assert [s.id for s in db.query(ActiveSessionModel).all()] == ["fresh"]


def test_purge_task_uses_presence_service(monkeypatch):
    calls = []

    def fake_purge(self, now=None):
        calls.append(now)
        return 3

    monkeypatch.setattr(PresenceService, "purge_stale", fake_purge)
    assert session_tasks.purge_stale_sessions_task.run() == {"removed": 3}
    assert calls == [None]
