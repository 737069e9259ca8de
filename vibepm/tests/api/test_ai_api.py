import json

from fastapi.testclient import TestClient

from vibepm.core.exceptions import AIProviderError
from vibepm.services.ai_providers import AICompletion

SUGGESTIONS = {
    "suggestedName": "HydroBuddy",
    "suggestedProblem": "Office workers forget to drink water",
    "suggestedMvp": "## Must Have\n- Hourly reminder",
    "clarifyingQuestions": [
        {"id": "q1", "question": "Who is the target user?", "hint": "Narrows the MVP"},
    ],
}

def test_analyze_rejects_empty_batch_before_calling_ai(client: TestClient, openai_key, fake_ai):
    for payload in ({"items": []}, {}):
        response = client.post("/api/analyze", json=payload)
        assert response.status_code == 400
        assert response.json() == {"error": "No items provided for analysis"}
    fake_ai.assert_not_called()

def test_analyze_returns_analysis_and_items(client: TestClient, openai_key, fake_ai):
    fake_ai.return_value = AICompletion(content="### Idea 1\nSolid niche")
    items = [{"id": "c1", "content": "Water reminder"}, {"id": "c2", "content": "Recipe scaler"}]

    response = client.post("/api/analyze", json={"items": items})
    assert response.status_code == 200
    assert response.json() == {"originalItems": items, "analysis": "### Idea 1\nSolid niche"}

    config, system_prompt, user_prompt = fake_ai.await_args.args
    assert config.provider == "openai"
    assert config.api_key == "sk-test"
    assert "1. Water reminder" in user_prompt
    assert "2. Recipe scaler" in user_prompt

def test_analyze_without_key(client: TestClient, fake_ai):
    response = client.post("/api/analyze", json={"items": [{"id": "c1", "content": "Idea"}]})
    assert response.status_code == 500
    assert response.json() == {"error": "AI API key not configured"}

def test_analyze_surfaces_provider_message(client: TestClient, openai_key, fake_ai):
    fake_ai.side_effect = AIProviderError("Rate limit reached", status_code=429)
    response = client.post("/api/analyze", json={"items": [{"id": "c1", "content": "Idea"}]})
    assert response.status_code == 500
    assert response.json() == {"error": "Rate limit reached"}

def test_promote_requires_capture_and_content(client: TestClient, openai_key, fake_ai):
    response = client.post("/api/promote-to-project/generate", json={"content": "Idea"})
    assert response.status_code == 400
    assert response.json() == {"error": "captureId and content are required"}
    fake_ai.assert_not_called()

def test_promote_parses_fenced_json(client: TestClient, openai_key, fake_ai):
    fake_ai.return_value = AICompletion(content="```json\n" + json.dumps(SUGGESTIONS) + "\n```")

    response = client.post("/api/promote-to-project/generate", json={"captureId": "c1", "content": "Water app"})
    assert response.status_code == 200
    assert response.json() == SUGGESTIONS

def test_promote_includes_user_answers(client: TestClient, openai_key, fake_ai):
    fake_ai.return_value = AICompletion(content=json.dumps({**SUGGESTIONS, "clarifyingQuestions": []}))

    response = client.post("/api/promote-to-project/generate", json={
        "captureId": "c1",
        "content": "Water app",
        "analysis": "Strong demand",
        "userAnswers": [{"question": "Who is the target user?", "answer": "Remote workers"}],
    })
    assert response.status_code == 200
    assert response.json()["clarifyingQuestions"] == []

    _, system_prompt, user_prompt = fake_ai.await_args.args
    assert "Remote workers" in system_prompt
    assert "Strong demand" in user_prompt

def test_promote_falls_back_on_unparseable_answer(client: TestClient, openai_key, fake_ai):
    fake_ai.return_value = AICompletion(content="Sure! Here is a great project idea.")

    response = client.post("/api/promote-to-project/generate", json={"captureId": "c1", "content": "Water app"})
    assert response.status_code == 200
    data = response.json()
    assert data["suggestedName"] == "New Project"
    assert data["suggestedProblem"] == "Water app"
    assert data["clarifyingQuestions"][0]["id"] == "q1"
