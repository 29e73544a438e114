# tests/test_notifications.py
from tests.helpers import create_review


def test_participants_receive_one_notification_each(client, people):
    create_review(client, people)

    ana = client.get(f"/api/notifications/{people['ana'].id}").json()
    assert len(ana) == 1
    assert ana[0]["type"] == "enhanced_self_evaluation"
    assert ana[0]["title"] == "New Self-Evaluation Request"
    assert ana[0]["message"] == "You have been requested to complete a self-evaluation: Q1 Review"
    assert ana[0]["read"] is False
    assert len(ana[0]["token"]) == 64

    ben = client.get(f"/api/notifications/{people['ben'].id}").json()
    assert ben[0]["type"] == "enhanced_peer_evaluation"
    assert ben[0]["title"] == "Evaluation Request for Ana Subject"
    assert ben[0]["message"] == "You have been requested to evaluate Ana Subject for: Q1 Review"

    assert client.get(f"/api/notifications/{people['dan'].id}").json() == []


def test_notifications_are_newest_first(client, people):
    first = create_review(client, people, title="First")
    second = create_review(client, people, title="Second")

    rows = client.get(f"/api/notifications/{people['ana'].id}").json()
    assert [n["formId"] for n in rows] == [second, first]


def test_mark_read_and_unread_count(client, people):
    create_review(client, people, title="One")
    create_review(client, people, title="Two")
    uid = people["cara"].id

    assert client.get(f"/api/notifications/{uid}/unread-count").json() == {"count": 2}

    note = client.get(f"/api/notifications/{uid}").json()[0]
    r = client.put(f"/api/notifications/{note['id']}/read")
    assert r.status_code == 200
    assert r.json() == {"success": True}

    assert client.get(f"/api/notifications/{uid}/unread-count").json() == {"count": 1}
    marked = [n for n in client.get(f"/api/notifications/{uid}").json() if n["id"] == note["id"]][0]
    assert marked["read"] is True
    assert marked["readAt"] is not None

    unread = client.get(f"/api/notifications/{uid}", params={"unread_only": True}).json()
    assert len(unread) == 1


def test_mark_read_missing_is_404(client):
    r = client.put("/api/notifications/123456/read")
    assert r.status_code == 404
    assert r.json()["message"] == "Notification not found"


def test_non_numeric_user_id_yields_empty(client):
    assert client.get("/api/notifications/abc").json() == []
    assert client.get("/api/notifications/abc/unread-count").json() == {"count": 0}
