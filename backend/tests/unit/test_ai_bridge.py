"""
Name: AI Bridge Unit Tests

Responsibilities:
  - Each operation makes exactly one completion call
  - Prompt language selection and English fallback
  - Per-operation model and token ceiling
  - Caller text embedded verbatim
"""

import pytest

from eduai.domain.entities import AIResponse, Difficulty, TestCase


pytestmark = pytest.mark.unit


def test_generate_code_questions_english(ai_bridge, fake_completion):
    response = ai_bridge.generate_code_questions("Recursion", "beginner", count=3)

    assert response.success is True
    assert len(fake_completion.calls) == 1
    call = fake_completion.calls[0]
    system, user = call["messages"]
    assert system.role == "system"
    assert 'Generate 3 coding questions at beginner level for the topic "Recursion"' in (
        system.content
    )
    assert user.content == 'Generate 3 coding questions about "Recursion" at beginner level.'
    assert call["model"] == "chat-model"
    assert call["temperature"] == 0.5
    assert call["max_tokens"] == 4000


def test_generate_code_questions_french(ai_bridge, fake_completion):
    ai_bridge.generate_code_questions("Tris", Difficulty.ADVANCED, count=2, language="fr")

    system, user = fake_completion.calls[0]["messages"]
    assert system.content.startswith("Tu es un expert en éducation informatique")
    assert user.content == 'Génère 2 questions de programmation sur "Tris" de niveau advanced.'


def test_unknown_language_falls_back_to_english(ai_bridge, fake_completion):
    ai_bridge.generate_code_questions("Loops", "beginner", language="de")

    system, _ = fake_completion.calls[0]["messages"]
    assert system.content.startswith("You are an expert computer science educator")


def test_analyze_code_embeds_context(ai_bridge, fake_completion):
    ai_bridge.analyze_code(
        "x = {'a': 1}",
        "python",
        specifications="Must be pure",
        standards="PEP 8",
        review_language="fr",
    )

    system, user = fake_completion.calls[0]["messages"]
    assert system.content.startswith("Tu es un expert en révision de code")
    assert "**Programming Language**: python" in user.content
    assert "**Project Specifications**: Must be pure" in user.content
    assert "**Coding Standards**: PEP 8" in user.content
    assert "```python\nx = {'a': 1}\n```" in user.content


def test_analyze_code_omits_empty_optional_sections(ai_bridge, fake_completion):
    ai_bridge.analyze_code("print(1)", "python")

    _, user = fake_completion.calls[0]["messages"]
    assert "Project Specifications" not in user.content
    assert "Coding Standards" not in user.content


def test_exam_uses_larger_token_ceiling(ai_bridge, fake_completion):
    ai_bridge.generate_mcq_from_latex("\\int_0^1 x\\,dx", number_of_questions=4)

    call = fake_completion.calls[0]
    system, user = call["messages"]
    assert call["max_tokens"] == 6000
    assert "generate 4 multiple-choice questions at intermediate level" in system.content
    assert '"topic": "Derived from LaTeX content"' in system.content
    assert user.content.endswith("\\int_0^1 x\\,dx")


def test_exam_topic_is_embedded(ai_bridge, fake_completion):
    ai_bridge.generate_mcq_from_latex("content", topic="Integrals", language="fr")

    system, user = fake_completion.calls[0]["messages"]
    assert '"topic": "Integrals"' in system.content
    assert user.content.startswith("Voici le contenu LaTeX")


def test_validate_code_answer_lists_test_cases(ai_bridge, fake_completion):
    ai_bridge.validate_code_answer(
        "Reverse a string",
        "def rev(s): return s[::-1]",
        "def rev(s): return ''.join(reversed(s))",
        [TestCase("'abc'", "'cba'"), TestCase("''", "''")],
    )

    _, user = fake_completion.calls[0]["messages"]
    assert "**Question**: Reverse a string" in user.content
    assert "Test 1: Input: 'abc', Expected Output: 'cba'" in user.content
    assert "Test 2: Input: '', Expected Output: ''" in user.content


def test_educational_image_uses_image_model(ai_bridge, fake_completion):
    ai_bridge.generate_educational_image("The water cycle", context="geography class")

    call = fake_completion.calls[0]
    assert call["model"] == "image-model"
    assert len(call["messages"]) == 1
    assert call["messages"][0].content.startswith(
        "Educational illustration: The water cycle. Context: geography class."
    )


def test_upstream_failure_is_returned_not_raised(prompt_loader):
    from eduai.application import AIBridge

    class _Down:
        def complete(self, messages, **kwargs):
            return AIResponse(success=False, error="AI API request failed: 502 Bad Gateway")

    bridge = AIBridge(_Down(), prompt_loader, chat_model="m", image_model="i")

    response = bridge.analyze_code("print(1)", "python")

    assert response.success is False
    assert response.error == "AI API request failed: 502 Bad Gateway"
