import asyncio

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel

from core.exceptions import ConfigurationError
from utils.answer_grader import AnswerGrader, build_grading_prompt, parse_verdict


@pytest.mark.parametrize(
    "raw",
    [
        '{"status": "Correct"}',
        '```json\n{"status": "Correct"}\n```',
        '```\n{"status": "correct"}\n```',
        'Here you go: ```json\n{"status": "CORRECT"}\n```',
    ],
)
def test_parse_correct_json(raw):
    verdict = parse_verdict(raw)

    assert verdict.status == "Correct"
    assert verdict.hint is None


def test_parse_incorrect_json_keeps_hint():
    verdict = parse_verdict('{"status": "Incorrect", "hint": "Consider null."}')

    assert verdict.status == "Incorrect"
    assert verdict.hint == "Consider null."


def test_parse_incorrect_json_without_hint_gets_generic_hint():
    verdict = parse_verdict('{"status": "Incorrect"}')

    assert verdict.hint == "Review the concept and try again."


@pytest.mark.parametrize(
    "raw",
    ["Correct.", "The student's answer is correct", "Status: CORRECT"],
)
def test_fallback_finds_correct_substring(raw):
    assert parse_verdict(raw).status == "Correct"


@pytest.mark.parametrize("raw", ["", "Wrong answer.", '{"verdict": "pass"}', "[1, 2]"])
def test_fallback_defaults_to_incorrect(raw):
    verdict = parse_verdict(raw)

    assert verdict.status == "Incorrect"
    assert verdict.hint == "Review the concept and try again."


def test_prompt_embeds_question_and_answer():
    prompt = build_grading_prompt("What is a pointer?", "idk")

    assert "Question: What is a pointer?" in prompt
    assert "Student's Answer: idk" in prompt
    assert '{"status": "Correct"}' in prompt
    assert "max 20 words" in prompt


def test_grade_sends_prompt_and_parses_reply():
    llm = FakeListChatModel(responses=['{"status": "Correct"}'])
    grader = AnswerGrader(llm=llm)

    verdict = asyncio.run(grader.grade("Q", "A"))

    assert verdict.status == "Correct"


def test_missing_api_key_raises_before_any_call(monkeypatch):
    monkeypatch.delenv("GROQ_API_KEY", raising=False)
    grader = AnswerGrader()

    with pytest.raises(ConfigurationError, match="GROQ_API_KEY"):
        asyncio.run(grader.grade("Q", "A"))


def test_llm_is_built_from_configuration(monkeypatch):
    monkeypatch.setenv("GROQ_API_KEY", "test-key")

    llm = AnswerGrader().llm

    assert llm.model_name == "llama-3.3-70b-versatile"
    assert llm.max_retries == 0
    assert llm.temperature == 0.1


def test_truncated_json_is_not_repaired():
    verdict = parse_verdict('{"status": "Incorrect", "hint": "Think about what the variable')

    # Not valid JSON, so only the substring check applies
    assert verdict.status == "Correct"
    assert verdict.hint is None


def test_json_followed_by_text_is_not_accepted():
    verdict = parse_verdict('{"status": "Incorrect"} although the idea is correct')

    assert verdict.status == "Correct"


def test_truncated_json_without_keyword_falls_back_to_incorrect():
    verdict = parse_verdict('{"status": "Inc')

    assert verdict.status == "Incorrect"
    assert verdict.hint == "Review the concept and try again."
