# tests/test_analytics.py
from datetime import datetime, timezone

from evalhub.schemas.analytics import EnrichedResponse
from evalhub.services.analytics_service import (
    completion_stats,
    group_by_user,
    has_answer,
    percentage,
    question_breakdown,
)

from tests.helpers import create_review, tokens_by_participant


def _response(email, answers, assignment_id=1):
    return EnrichedResponse(
        id=assignment_id,
        form_id=1,
        assignment_id=assignment_id,
        participant_type="evaluator",
        participant_id=assignment_id,
        participant_email=email,
        responses=answers,
        submitted_at=datetime(2026, 10, 1, tzinfo=timezone.utc),
    )


# Pure pivots

def test_completion_stats():
    stats = completion_stats(3, 1)
    assert (stats.total_assigned, stats.completed, stats.pending) == (3, 1, 2)
    assert stats.completion_rate == 33.3

    assert completion_stats(0, 0).completion_rate == 0.0
    assert completion_stats(1, 2).pending == 0


def test_percentage_rounds_to_one_decimal():
    assert percentage(2, 3) == 66.7
    assert percentage(0, 0) == 0.0


def test_has_answer_treats_zero_and_false_as_answers():
    assert has_answer(0)
    assert has_answer(False)
    assert has_answer("x")
    assert not has_answer(None)
    assert not has_answer("")
    assert not has_answer([])


def test_group_by_user_uses_participant_email():
    grouped = group_by_user([
        _response("a@company.com", {}, 1),
        _response("b@company.com", {}, 2),
        _response("a@company.com", {}, 3),
    ])
    assert {k: len(v) for k, v in grouped.items()} == {"a@company.com": 2, "b@company.com": 1}


def test_question_breakdown_counts_present_answers():
    questions = [{"id": "q1", "text": "One", "type": "rating"}, {"id": "q2", "text": "Two"}]
    responses = [
        _response("a@company.com", {"q1": 0, "q2": ""}, 1),
        _response("b@company.com", {"q1": 3}, 2),
    ]
    rows = question_breakdown(questions, responses, total_assignments=3)

    assert rows[0].question_id == "q1"
    assert rows[0].response_count == 2
    assert rows[0].response_rate == 66.7
    assert rows[1].type == "text"
    assert rows[1].response_count == 0
    assert rows[1].total_assignments == 3


# Endpoints

def test_form_responses_report(client, people):
    form_id = create_review(client, people)
    tokens = tokens_by_participant(client, form_id)
    client.post(f"/api/enhanced-evaluate/{tokens[people['ben'].id]}", json={"responses": {"q1": 4, "q2": "ok"}})

    r = client.get(f"/api/forms/{form_id}/responses")
    assert r.status_code == 200
    body = r.json()

    assert len(body["assignments"]) == 3
    assert len(body["responses"]) == 1
    response = body["responses"][0]
    assert response["userName"] == "Ben Peer"
    assert response["user"]["email"] == "ben@company.com"
    assert "hashedPassword" not in response["user"]

    summary = {row["participantEmail"]: row for row in body["summary"]}
    assert summary["ben@company.com"]["hasResponse"] is True
    assert summary["ben@company.com"]["status"] == "completed"
    assert summary["ben@company.com"]["subjectName"] == "Ana Subject"
    assert summary["ana@company.com"]["hasResponse"] is False
    assert summary["ana@company.com"]["subjectName"] == "Ana Subject"
    assert summary["ana@company.com"]["response"] is None

    assert body["stats"] == {"totalAssigned": 3, "completed": 1, "pending": 2, "completionRate": 33.3}
    assert list(body["byUser"]) == ["ben@company.com"]

    by_question = {row["questionId"]: row for row in body["byQuestion"]}
    assert by_question["q1"]["responseCount"] == 1
    assert by_question["q1"]["responseRate"] == 33.3
    assert by_question["q2"]["text"] == "Leadership"


def test_responses_of_missing_form_is_404(client):
    assert client.get("/api/forms/9999/responses").status_code == 404
    assert client.get("/api/forms/9999/assignments").status_code == 404


def test_user_forms_overview(client, people):
    form_id = create_review(client, people)
    tokens = tokens_by_participant(client, form_id)
    client.post(f"/api/enhanced-evaluate/{tokens[people['ben'].id]}", json={"responses": {"q1": 5}})

    ben = client.get(f"/api/users/{people['ben'].id}/forms").json()
    assert ben["createdForms"] == []
    assert len(ben["assignedForms"]) == 1
    row = ben["assignedForms"][0]
    assert row["formTitle"] == "Q1 Review"
    assert row["myRole"] == "evaluator"
    assert row["myStatus"] == "completed"
    assert row["myToken"] == tokens[people["ben"].id]
    assert row["subjectName"] == "Ana Subject"
    assert row["evaluatorPosition"] == 1
    assert ben["assignedSummary"] == {"total": 1, "pending": 0, "completed": 1}

    owner = client.get(f"/api/users/{people['owner'].id}/forms").json()
    assert [f["id"] for f in owner["createdForms"]] == [form_id]
    assert owner["assignedForms"] == []
    assert owner["createdSummary"] == {
        "formsCreated": 1,
        "assignments": 3,
        "totalParticipants": 3,
        "completedParticipants": 1,
        "pendingParticipants": 2,
    }


def test_user_forms_with_non_numeric_id_is_empty(client):
    body = client.get("/api/users/not-an-id/forms").json()
    assert body["createdForms"] == [] and body["assignedForms"] == []
    assert body["assignedSummary"] == {"total": 0, "pending": 0, "completed": 0}
    assert body["createdSummary"]["formsCreated"] == 0


def test_dashboard_stats(client, people):
    form_id = create_review(client, people)
    tokens = tokens_by_participant(client, form_id)
    client.post(f"/api/enhanced-evaluate/{tokens[people['ana'].id]}", json={"responses": {"q1": "done"}})

    stats = client.get("/api/dashboard/stats").json()
    assert stats == {
        "totalForms": 1,
        "totalUsers": 5,
        "totalEvaluations": 1,
        "pendingEvaluations": 2,
        "totalAssignments": 3,
        "completionRate": 33.3,
    }
