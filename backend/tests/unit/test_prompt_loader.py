"""
Unit tests for infrastructure/prompts/loader.py.
"""

import pytest

from eduai.domain.entities import Language
from eduai.infrastructure.prompts import PromptLoader


pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    "name", ["code_questions", "code_review", "exam", "code_validation"]
)
@pytest.mark.parametrize("language", [Language.EN, Language.FR])
def test_every_template_exists(name, language):
    assert PromptLoader("v1").get_template(name, language).template


def test_format_substitutes_and_keeps_json_braces():
    text = PromptLoader("v1").format(
        "code_questions", Language.EN, count=7, difficulty="advanced", topic="Graphs"
    )

    assert 'Generate 7 coding questions at advanced level for the topic "Graphs"' in text
    assert '"questions": [' in text
    assert "$" not in text


def test_caller_text_is_not_reinterpreted():
    text = PromptLoader("v1").format(
        "code_questions", Language.EN, count=1, difficulty="x", topic="$count {0}"
    )

    assert 'for the topic "$count {0}"' in text


def test_templates_are_cached():
    loader = PromptLoader("v1")
    assert loader.get_template("exam", Language.EN) is loader.get_template(
        "exam", Language.EN
    )


def test_missing_version_raises(tmp_path):
    loader = PromptLoader("v9", prompts_dir=tmp_path)
    with pytest.raises(FileNotFoundError):
        loader.get_template("exam", Language.EN)


def test_missing_placeholder_raises():
    with pytest.raises(KeyError):
        PromptLoader("v1").format("exam", Language.EN, difficulty="easy")
