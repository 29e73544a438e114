# tests/test_forms.py
from evalhub.models import Assignment, EvaluationResponse, Form, FormType, Notification

from tests.helpers import create_review, review_payload, tokens_by_participant


def test_create_enhanced_form_reports_counts(client, people):
    r = client.post("/api/forms/enhanced", json=review_payload(people))
    assert r.status_code == 200, r.text
    body = r.json()

    assert body["success"] is True
    form = body["form"]
    assert form["title"] == "Q1 Review"
    assert form["formType"] == "enhanced"
    assert form["questionsCount"] == 2
    assert form["subjectsCount"] == 1
    assert form["totalAssignments"] == 3
    assert form["subjectAssignments"] == 1
    assert form["evaluatorAssignments"] == 2
    assert body["warnings"] == []


def test_assignments_carry_role_scoped_questions(client, people):
    form_id = create_review(client, people)
    rows = {a["participantId"]: a for a in client.get(f"/api/forms/{form_id}/assignments").json()}

    assert rows[people["ana"].id]["participantType"] == "subject"
    assert rows[people["ana"].id]["assignedQuestions"] == ["q1"]
    assert rows[people["ben"].id]["assignedQuestions"] == ["q1", "q2"]
    assert rows[people["ben"].id]["subjectId"] == people["ana"].id
    assert rows[people["cara"].id]["assignedQuestions"] == ["q2"]
    assert all(a["status"] == "pending" for a in rows.values())
    assert all(len(a["token"]) == 64 for a in rows.values())


def test_create_requires_core_fields(client, people):
    payload = review_payload(people)
    del payload["subjectMatrix"]
    r = client.post("/api/forms/enhanced", json=payload)
    assert r.status_code == 400
    assert r.json()["message"] == "Title, questions, subjectMatrix, and createdBy are required"
    assert r.json()["success"] is False

    r = client.post("/api/forms/enhanced", json=review_payload(people, title=""))
    assert r.status_code == 400


def test_create_rejects_empty_matrix(client, people):
    r = client.post("/api/forms/enhanced", json=review_payload(people, subjectMatrix=[]))
    assert r.status_code == 400
    assert r.json()["message"] == "At least one subject is required"


def test_create_unknown_creator_is_404(client, people):
    r = client.post("/api/forms/enhanced", json=review_payload(people, createdBy=999999))
    assert r.status_code == 404
    assert r.json()["message"] == "Creator not found"


def test_created_by_defaults_to_session_user(client, people, auth_headers):
    payload = review_payload(people)
    del payload["createdBy"]

    assert client.post("/api/forms/enhanced", json=payload).status_code == 400

    r = client.post("/api/forms/enhanced", json=payload, headers=auth_headers)
    assert r.status_code == 200, r.text
    form = client.get(f"/api/forms/{r.json()['form']['id']}").json()
    assert form["createdBy"] == people["owner"].id


def test_create_returns_coverage_warnings(client, people):
    questions = [{"id": "q1", "text": "Self only", "canSubjectAnswer": True, "evaluatorPositions": []}]
    r = client.post("/api/forms/enhanced", json=review_payload(people, questions=questions))
    assert r.status_code == 200
    assert "Evaluator position 1 has no questions assigned" in r.json()["warnings"]


def test_missing_question_ids_are_generated(client, people):
    questions = [{"text": "No id yet", "canSubjectAnswer": True, "evaluatorPositions": [1, 2]}]
    form_id = create_review(client, people, questions=questions)

    stored = client.get(f"/api/forms/{form_id}").json()["questions"]
    assert stored[0]["id"].startswith("q_")


def test_list_and_get_include_creator(client, people):
    first = create_review(client, people, title="First")
    second = create_review(client, people, title="Second")

    forms = client.get("/api/forms").json()
    assert [f["id"] for f in forms][:2] == [second, first]
    assert forms[0]["creator"] == {
        "name": "Olivia Owner",
        "email": "owner@company.com",
        "department": "HR",
    }

    form = client.get(f"/api/forms/{first}").json()
    assert form["title"] == "First"
    assert form["subjectMatrix"][0]["evaluators"][0]["evaluatorName"] == "Ben Peer"


def test_get_missing_form_is_404(client):
    r = client.get("/api/forms/424242")
    assert r.status_code == 404
    assert r.json()["message"] == "Form not found"
    assert "X-Request-Id" in r.headers


def test_update_regenerates_assignments_and_drops_old_responses(client, people, db_session):
    form_id = create_review(client, people)
    old_tokens = tokens_by_participant(client, form_id)
    client.post(f"/api/enhanced-evaluate/{old_tokens[people['ana'].id]}", json={"responses": {"q1": "fine"}})

    matrix = review_payload(people)["subjectMatrix"]
    matrix[0]["evaluators"].append({
        "evaluatorId": people["dan"].id, "evaluatorName": people["dan"].name,
        "evaluatorEmail": people["dan"].email, "position": 2,
    })
    r = client.put(f"/api/forms/enhanced/{form_id}", json=review_payload(people, subjectMatrix=matrix))
    assert r.status_code == 200, r.text
    assert r.json() == {"success": True, "message": "Form updated successfully", "assignmentsCreated": 4}

    new_tokens = tokens_by_participant(client, form_id)
    assert len(new_tokens) == 4
    assert not set(new_tokens.values()) & set(old_tokens.values())
    assert client.get(f"/api/enhanced-evaluate/{old_tokens[people['ana'].id]}").status_code == 404

    assert db_session.query(EvaluationResponse).filter_by(form_id=form_id).count() == 0
    assert db_session.query(Notification).filter_by(form_id=form_id).count() == 4


def test_generic_put_delegates_to_enhanced_update(client, people):
    form_id = create_review(client, people)
    r = client.put(f"/api/forms/{form_id}", json=review_payload(people, title="Renamed"))
    assert r.status_code == 200
    assert r.json()["assignmentsCreated"] == 3
    assert client.get(f"/api/forms/{form_id}").json()["title"] == "Renamed"


def test_generic_put_patches_basic_form_fields_only(client, people, db_session):
    form = Form(
        title="Imported checklist",
        description="Legacy row",
        form_type=FormType.BASIC.value,
        status="draft",
        created_by=people["owner"].id,
    )
    db_session.add(form)
    db_session.commit()

    r = client.put(
        f"/api/forms/{form.id}",
        json={"title": "Checklist v2", "status": "active", "subjectMatrix": review_payload(people)["subjectMatrix"]},
    )
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["form"]["title"] == "Checklist v2"
    assert body["form"]["status"] == "active"
    assert body["form"]["description"] == "Legacy row"
    assert body["form"]["formType"] == "basic"
    assert body["form"]["subjectMatrix"] == []

    assert db_session.query(Assignment).filter_by(form_id=form.id).count() == 0
    assert db_session.query(Notification).filter_by(form_id=form.id).count() == 0


def test_update_missing_form_is_404(client, people):
    assert client.put("/api/forms/enhanced/31337", json=review_payload(people)).status_code == 404


def test_delete_only_touches_that_form(client, people, db_session):
    doomed = create_review(client, people, title="Doomed")
    kept = create_review(client, people, title="Kept")
    token = tokens_by_participant(client, doomed)[people["ben"].id]
    client.post(f"/api/enhanced-evaluate/{token}", json={"responses": {"q1": 4}})

    r = client.delete(f"/api/forms/{doomed}")
    assert r.status_code == 200
    assert r.json()["success"] is True
    assert r.json()["deleted"] == {"notifications": 3, "responses": 1, "assignments": 3}

    assert client.get(f"/api/forms/{doomed}").status_code == 404
    assert db_session.query(Assignment).filter_by(form_id=doomed).count() == 0
    assert db_session.query(Notification).filter_by(form_id=doomed).count() == 0
    assert db_session.query(Assignment).filter_by(form_id=kept).count() == 3
    assert db_session.query(Notification).filter_by(form_id=kept).count() == 3

    assert client.delete(f"/api/forms/{doomed}").status_code == 404


def test_duplicate_creates_draft_without_assignments(client, people):
    form_id = create_review(client, people)
    r = client.post(f"/api/forms/{form_id}/duplicate")
    assert r.status_code == 200
    copy = r.json()

    assert copy["id"] != form_id
    assert copy["title"] == "Q1 Review (Copy)"
    assert copy["status"] == "draft"
    assert [q["id"] for q in copy["questions"]] == ["q1", "q2"]
    assert client.get(f"/api/forms/{copy['id']}/assignments").json() == []


def test_notify_off_skips_notifications(client, people, db_session):
    form_id = create_review(client, people, notifyOnCompletion=False)
    assert db_session.query(Notification).filter_by(form_id=form_id).count() == 0
