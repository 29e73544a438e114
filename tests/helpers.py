# tests/helpers.py
from evalhub.core.security import get_password_hash
from evalhub.models import User

TEST_PASSWORD = "secret123"

_HASH = None


def make_user(db, name, email, department="Engineering", job_title="Developer"):
    global _HASH
    if _HASH is None:
        _HASH = get_password_hash(TEST_PASSWORD)
    user = User(name=name, email=email, department=department, job_title=job_title, hashed_password=_HASH)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def review_payload(people, **overrides):
    """Ana is evaluated by Ben (position 1) and Cara (position 2)."""
    payload = {
        "title": "Q1 Review",
        "description": "Quarterly review",
        "createdBy": people["owner"].id,
        "subjectMatrix": [
            {
                "subjectId": people["ana"].id,
                "subjectName": people["ana"].name,
                "subjectEmail": people["ana"].email,
                "evaluators": [
                    {"evaluatorId": people["ben"].id, "evaluatorName": people["ben"].name,
                     "evaluatorEmail": people["ben"].email, "position": 1},
                    {"evaluatorId": people["cara"].id, "evaluatorName": people["cara"].name,
                     "evaluatorEmail": people["cara"].email, "position": 2},
                ],
            }
        ],
        "questions": [
            {"id": "q1", "text": "Communication", "type": "rating",
             "canSubjectAnswer": True, "evaluatorPositions": [1]},
            {"id": "q2", "text": "Leadership", "type": "text",
             "canSubjectAnswer": False, "evaluatorPositions": [1, 2]},
        ],
    }
    payload.update(overrides)
    return payload


def create_review(client, people, **overrides):
    r = client.post("/api/forms/enhanced", json=review_payload(people, **overrides))
    assert r.status_code == 200, r.text
    return r.json()["form"]["id"]


def tokens_by_participant(client, form_id):
    """participant id -> token for every assignment of the form."""
    rows = client.get(f"/api/forms/{form_id}/assignments").json()
    return {row["participantId"]: row["token"] for row in rows}
