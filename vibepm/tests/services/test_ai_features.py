import asyncio
import json

import pytest

from vibepm.services.ai_config import AIConfig
from vibepm.services.ai_features import (
    strip_code_fences,
    parse_suggestions,
    generate_project_name,
    generate_project_suggestions,
    NAME_MAX_TOKENS,
    NAME_TEMPERATURE,
)
from vibepm.services.ai_providers import AICompletion, FALLBACK_CONTENT

CONFIG = AIConfig(provider="openai", model="gpt-4o", api_key="sk-test")

@pytest.mark.parametrize("text", [
    '{"a": 1}',
    '```json\n{"a": 1}\n```',
    '```\n{"a": 1}\n```',
    '  ```json{"a": 1}```  ',
])
def test_strip_code_fences(text: str):
    assert json.loads(strip_code_fences(text)) == {"a": 1}

def test_parse_suggestions_without_questions():
    text = json.dumps({"suggestedName": "Hydro", "suggestedProblem": "Thirst", "suggestedMvp": "## Must Have"})
    suggestions = parse_suggestions(text, "Water app")
    assert suggestions.suggested_name == "Hydro"
    assert suggestions.clarifying_questions == []

def test_parse_suggestions_missing_field_falls_back(caplog):
    text = json.dumps({"suggestedName": "Hydro"})
    with caplog.at_level("WARNING", logger="VibePM.AI"):
        suggestions = parse_suggestions(text, "Water app")
    assert suggestions.suggested_name == "New Project"
    assert suggestions.suggested_problem == "Water app"
    assert "using fallback" in caplog.text

@pytest.mark.parametrize("answer, expected", [
    ('"Hydrate"', "Hydrate"),
    ("  Sip'n'Go \n", "SipnGo"),
    ('""', "Habit Tracker"),
    (FALLBACK_CONTENT, "Habit Tracker"),
])
def test_generate_project_name(fake_ai, answer: str, expected: str):
    fake_ai.return_value = AICompletion(content=answer)
    name = asyncio.run(generate_project_name(CONFIG, "Habit Tracker", "Daily habits"))
    assert name == expected
    assert fake_ai.await_args.kwargs["max_tokens"] == NAME_MAX_TOKENS
    assert fake_ai.await_args.kwargs["temperature"] == NAME_TEMPERATURE

def test_generate_suggestions_without_answers(fake_ai):
    fake_ai.return_value = AICompletion(content="not json")
    suggestions = asyncio.run(generate_project_suggestions(CONFIG, "Water app", None))

    assert suggestions.suggested_name == "New Project"
    system_prompt, user_prompt = fake_ai.await_args.args[1:]
    assert "Q&A" not in system_prompt
    assert "No AI analysis available yet." in user_prompt
