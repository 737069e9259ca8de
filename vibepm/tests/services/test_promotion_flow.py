import json
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from vibepm.core.exceptions import AIProviderError
from vibepm.models.quick_capture import QuickCapture
from vibepm.services.ai_providers import AICompletion
from vibepm.services.analysis import AI_MARKER
from vibepm.services.promotion import PromotionFlow, PromotionRequestError, PromotionStep

SUGGESTIONS = {
    "suggestedName": "HydroBuddy",
    "suggestedProblem": "Office workers forget to drink water",
    "suggestedMvp": "## Must Have\n- Hourly reminder",
    "clarifyingQuestions": [
        {"id": "q1", "question": "Who is the target user?", "hint": ""},
        {"id": "q2", "question": "Mobile or desktop?", "hint": ""},
    ],
}

def _capture(client: TestClient, **fields) -> dict:
    return client.post("/api/quick-capture", json={"content": "Water reminder app", **fields}).json()

@pytest.fixture
def ai_answers(fake_ai):
    """Анализ на первый вызов, JSON с предложениями на остальные."""
    replies = iter([AICompletion(content="Strong niche, simple MVP")])

    async def reply(config, system_prompt, user_prompt, **kwargs):
        if "brainstormed ideas" in user_prompt:
            return next(replies)
        return AICompletion(content=json.dumps(SUGGESTIONS))

    fake_ai.side_effect = reply
    return fake_ai

def test_full_promotion(client: TestClient, db: Session, openai_key, ai_answers):
    capture = _capture(client)
    flow = PromotionFlow(client, capture)

    assert flow.start() == PromotionStep.QUESTIONS
    assert flow.name == "HydroBuddy"
    assert [q["id"] for q in flow.questions] == ["q1", "q2"]

    # анализ сохранён отдельно, текст идеи не изменился
    stored = db.get(QuickCapture, capture["id"])
    db.refresh(stored)
    assert stored.content == "Water reminder app"
    assert stored.analysis == "Strong niche, simple MVP"

    flow.answer("q1", "Remote workers")
    flow.answer("q2", "   ")
    assert flow.refine() == PromotionStep.QUESTIONS
    system_prompt = ai_answers.await_args.args[1]
    assert "Q: Who is the target user?\nA: Remote workers" in system_prompt
    assert "Mobile or desktop?" not in system_prompt

    flow.skip_questions()
    flow.edit(name="Hydro Buddy")
    assert flow.create_project() == PromotionStep.SUCCESS
    assert flow.project == {"slug": "hydro-buddy", "name": "Hydro Buddy"}

    db.refresh(stored)
    assert stored.project is not None
    assert stored.project.slug == "hydro-buddy"

def test_existing_analysis_skips_analyze(client: TestClient, openai_key, ai_answers):
    capture = _capture(client, analysis="Already analyzed")
    flow = PromotionFlow(client, capture)

    flow.start()
    assert flow.step == PromotionStep.QUESTIONS
    ai_answers.assert_awaited_once()
    assert "Already analyzed" in ai_answers.await_args.args[2]

def test_legacy_capture_content_is_split(client: TestClient):
    flow = PromotionFlow(client, {"id": "c1", "content": "Idea" + AI_MARKER + "Old analysis"})
    assert flow.raw_idea == "Idea"
    assert flow.analysis == "Old analysis"

def test_no_questions_goes_to_review(client: TestClient, openai_key, fake_ai):
    fake_ai.return_value = AICompletion(content=json.dumps({**SUGGESTIONS, "clarifyingQuestions": []}))
    flow = PromotionFlow(client, _capture(client, analysis="Done"))
    assert flow.start() == PromotionStep.REVIEW

def test_empty_name_stays_in_review(client: TestClient, openai_key, fake_ai):
    fake_ai.return_value = AICompletion(content=json.dumps(SUGGESTIONS))
    flow = PromotionFlow(client, _capture(client, analysis="Done"))
    flow.start()
    flow.skip_questions()
    flow.edit(name="   ")

    assert flow.create_project() == PromotionStep.REVIEW
    assert flow.error.message == "Project name is required"
    assert client.get("/api/projects").json() == []

def test_failed_analysis_can_be_retried(client: TestClient, openai_key, fake_ai):
    flow = PromotionFlow(client, _capture(client))
    fake_ai.side_effect = AIProviderError("Rate limit reached", status_code=429)

    assert flow.start() == PromotionStep.ERROR
    assert flow.error.step == PromotionStep.ANALYZING
    assert flow.error.message == "Rate limit reached"

    fake_ai.side_effect = None
    fake_ai.return_value = AICompletion(content=json.dumps(SUGGESTIONS))
    assert flow.retry() == PromotionStep.QUESTIONS

def test_missing_key_fails_generation(client: TestClient, fake_ai):
    flow = PromotionFlow(client, _capture(client, analysis="Done"))
    assert flow.start() == PromotionStep.ERROR
    assert flow.error.step == PromotionStep.GENERATING
    assert flow.error.message == "AI API key not configured"

def test_retry_after_failed_link_reuses_project(client: TestClient, db: Session, openai_key, fake_ai):
    fake_ai.return_value = AICompletion(content=json.dumps(SUGGESTIONS))
    capture = _capture(client, analysis="Done")
    flow = PromotionFlow(client, capture)
    flow.start()
    flow.skip_questions()

    real_request = flow._request
    failed = []

    def link_fails_once(method, url, payload):
        if method == "PATCH" and not failed:
            failed.append(url)
            raise PromotionRequestError("Failed to update quick capture")
        return real_request(method, url, payload)

    with patch.object(flow, "_request", side_effect=link_fails_once):
        assert flow.create_project() == PromotionStep.ERROR
        assert flow.error.step == PromotionStep.CREATING
        assert flow.retry() == PromotionStep.SUCCESS

    assert [p["slug"] for p in client.get("/api/projects").json()] == ["hydrobuddy"]
    stored = db.get(QuickCapture, capture["id"])
    db.refresh(stored)
    assert stored.project.slug == "hydrobuddy"

def test_retry_with_missing_capture_creates_one_project(client: TestClient, openai_key, fake_ai):
    fake_ai.return_value = AICompletion(content=json.dumps(SUGGESTIONS))
    capture = _capture(client, analysis="Done")
    flow = PromotionFlow(client, capture)
    flow.start()
    flow.skip_questions()
    client.delete(f"/api/quick-capture/{capture['id']}", params={"permanent": "true"})

    assert flow.create_project() == PromotionStep.ERROR
    assert flow.retry() == PromotionStep.ERROR
    assert len(client.get("/api/projects").json()) == 1
