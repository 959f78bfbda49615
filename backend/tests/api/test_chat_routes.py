"""Chat Routes — demo answers, RAG passthrough, chat gating and stored history.

Tests cover:
    - Demo mode: keyword-branched answer, isDemoResponse flag and note
    - Gating: chat-disabled and unknown conditions -> 403 before any upstream call
    - Body validation: blank question / missing disease -> 400 with field messages
    - RAG mode: upstream answer returned, malformed upstream payload -> 500
    - History: stored for the assessment owner, listed newest first, ownership enforced
"""

from app.config import Settings, get_settings
from app.main import app


def _enable_rag():
    app.dependency_overrides[get_settings] = lambda: Settings(rag_enabled=True)


async def _create_assessment(client, user, consent_id, png_upload) -> str:
    res = await client.post(
        "/api/analyze",
        data={"consentId": consent_id},
        files=png_upload,
        headers=user["headers"],
    )
    return res.json()["data"]["assessment_id"]


async def test_demo_answer_for_eczema_treatment(client, fake_ai):
    res = await client.post(
        "/api/chat",
        json={"disease": "eczema", "question": "How do I treat this?"},
    )

    assert res.status_code == 200
    body = res.json()
    assert body["message"] == "Answer generated successfully"
    data = body["data"]
    assert data["isDemoResponse"] is True
    assert "**Treatment:**" in data["answer"]
    assert data["sources"] == []
    assert data["note"]
    assert data["historyId"] is None
    assert fake_ai.chat_calls == []


async def test_alias_label_unlocks_chat(client):
    res = await client.post(
        "/api/chat",
        json={"disease": "Atopic Dermatitis", "question": "What causes it?"},
    )

    assert res.status_code == 200
    assert "**Causes:**" in res.json()["data"]["answer"]


async def test_chat_disabled_condition_is_403(client, fake_ai):
    res = await client.post(
        "/api/chat", json={"disease": "melanoma", "question": "Is it bad?"},
    )

    assert res.status_code == 403
    error = res.json()["error"]
    assert error["details"]["disease"] == "melanoma"
    assert fake_ai.chat_calls == []


async def test_unknown_condition_is_403(client):
    res = await client.post(
        "/api/chat", json={"disease": "space rash", "question": "Why?"},
    )

    assert res.status_code == 403


async def test_blank_question_is_validation_error(client):
    res = await client.post(
        "/api/chat", json={"disease": "eczema", "question": "   "},
    )

    assert res.status_code == 400
    assert res.json()["error"]["details"] == [
        {"field": "question", "message": "Question is Required"},
    ]


async def test_missing_disease_is_validation_error(client):
    res = await client.post("/api/chat", json={"question": "Hello?"})

    assert res.status_code == 400
    fields = [d["field"] for d in res.json()["error"]["details"]]
    assert fields == ["disease"]


async def test_rag_answer_is_returned(client, fake_ai):
    _enable_rag()

    res = await client.post(
        "/api/chat",
        json={
            "disease": "psoriasis",
            "question": "Does sunlight help?",
            "consentId": "9b2f7a52-3f7c-4a39-9c1d-1f0d3b3f0c11",
        },
    )

    assert res.status_code == 200
    data = res.json()["data"]
    assert data["isDemoResponse"] is False
    assert data["answer"] == "Moisturize twice daily."
    assert data["sources"] == ["aad.org"]
    assert fake_ai.chat_calls == [{
        "disease": "psoriasis",
        "question": "Does sunlight help?",
        "consent_id": "9b2f7a52-3f7c-4a39-9c1d-1f0d3b3f0c11",
    }]


async def test_rag_empty_answer_is_500(client, fake_ai):
    _enable_rag()
    fake_ai.chat_payload = {"success": True, "answer": ""}

    res = await client.post(
        "/api/chat", json={"disease": "acne", "question": "Diet?"},
    )

    assert res.status_code == 500
    assert res.json()["error"]["message"] == "Invalid response from RAG server"


async def test_owner_chat_is_stored_and_listed(
    client, signed_up, consent_id, png_upload,
):
    assessment_id = await _create_assessment(
        client, signed_up, consent_id, png_upload,
    )
    for question in ("How do I treat this?", "What causes it?"):
        res = await client.post(
            "/api/chat",
            json={
                "disease": "eczema",
                "question": question,
                "assessmentId": assessment_id,
            },
            headers=signed_up["headers"],
        )
        assert res.json()["data"]["historyId"]

    res = await client.get(
        "/api/chat/history",
        params={"assessmentId": assessment_id},
        headers=signed_up["headers"],
    )

    assert res.status_code == 200
    history = res.json()["data"]["history"]
    assert [h["question"] for h in history] == [
        "What causes it?", "How do I treat this?",
    ]
    assert all(h["assessmentId"] == assessment_id for h in history)


async def test_anonymous_chat_with_assessment_is_not_stored(
    client, signed_up, consent_id, png_upload,
):
    assessment_id = await _create_assessment(
        client, signed_up, consent_id, png_upload,
    )

    res = await client.post(
        "/api/chat",
        json={
            "disease": "eczema",
            "question": "Is it contagious?",
            "assessmentId": assessment_id,
        },
    )

    assert res.status_code == 200
    assert res.json()["data"]["historyId"] is None


async def test_chat_on_someone_elses_assessment_is_404(
    client, signed_up, other_user, consent_id, png_upload,
):
    assessment_id = await _create_assessment(
        client, signed_up, consent_id, png_upload,
    )

    res = await client.post(
        "/api/chat",
        json={
            "disease": "eczema",
            "question": "Is it contagious?",
            "assessmentId": assessment_id,
        },
        headers=other_user["headers"],
    )

    assert res.status_code == 404


async def test_history_requires_token(client):
    res = await client.get("/api/chat/history")

    assert res.status_code == 401


async def test_history_limit_is_bounded(client, signed_up):
    res = await client.get(
        "/api/chat/history",
        params={"limit": 0},
        headers=signed_up["headers"],
    )

    assert res.status_code == 400
    assert res.json()["error"]["details"][0]["field"] == "limit"
