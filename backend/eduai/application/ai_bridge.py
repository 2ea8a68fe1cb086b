"""
Name: AI Request/Response Bridge

Responsibilities:
  - Turn each educational task into one chat-completion exchange
  - Pick the system prompt by task and language
  - Apply per-task model, temperature and token ceiling
  - Log stage timings and token usage for every call

Collaborators:
  - domain.services.CompletionService: outbound completion adapter
  - infrastructure.prompts.PromptLoader: versioned system prompts

Constraints:
  - Exactly one completion call per operation, no retries
  - Never raises on upstream failure: the AIResponse carries it
  - Caller text is embedded verbatim (no escaping, no truncation)

Notes:
  - Replies are free text; response_parsing extracts the JSON object
"""

from typing import List, Optional, Sequence

from ..domain.entities import (
    AIResponse,
    ChatMessage,
    Difficulty,
    Language,
    TestCase,
)
from ..domain.services import CompletionService
from ..infrastructure.prompts import PromptLoader
from ..logger import logger
from ..timing import StageTimings

DEFAULT_IMAGE_CONTEXT = "educational platform"
DEFAULT_EXAM_TOPIC = {
    Language.EN: "Derived from LaTeX content",
    Language.FR: "Dérivé du contenu LaTeX",
}


def _difficulty_value(difficulty: "Difficulty | str") -> str:
    return difficulty.value if isinstance(difficulty, Difficulty) else str(difficulty)


def _code_review_context(
    code: str,
    language: str,
    specifications: Optional[str],
    standards: Optional[str],
) -> str:
    spec_line = f"**Project Specifications**: {specifications}" if specifications else ""
    standards_line = f"**Coding Standards**: {standards}" if standards else ""
    return (
        f"\n**Programming Language**: {language}\n"
        f"{spec_line}\n"
        f"{standards_line}\n"
        "\n**Code to Analyze**:\n"
        f"```{language}\n"
        f"{code}\n"
        "```\n"
    )


def _validation_context(
    question: str,
    student_code: str,
    expected_solution: str,
    test_cases: Sequence[TestCase],
) -> str:
    tests = "\n".join(
        f"Test {i}: Input: {case.input}, Expected Output: {case.expected_output}"
        for i, case in enumerate(test_cases, start=1)
    )
    return (
        f"\n**Question**: {question}\n"
        "\n**Expected Solution**:\n"
        f"```\n{expected_solution}\n```\n"
        "\n**Student's Code**:\n"
        f"```\n{student_code}\n```\n"
        "\n**Test Cases**:\n"
        f"{tests}\n"
    )


class AIBridge:
    """
    R: Educational AI operations over a CompletionService.

    Each public method builds [system, user] messages and performs one call.
    """

    def __init__(
        self,
        completion_service: CompletionService,
        prompt_loader: PromptLoader,
        *,
        chat_model: str,
        image_model: str,
        temperature: float = 0.5,
        max_tokens: int = 4000,
        exam_max_tokens: int = 6000,
    ):
        self.completion_service = completion_service
        self.prompt_loader = prompt_loader
        self.chat_model = chat_model
        self.image_model = image_model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.exam_max_tokens = exam_max_tokens

    def generate_code_questions(
        self,
        topic: str,
        difficulty: "Difficulty | str",
        count: int = 10,
        language: "Language | str" = Language.EN,
    ) -> AIResponse:
        """R: Ask for `count` coding questions on `topic`."""
        lang = Language.resolve(language)
        level = _difficulty_value(difficulty)
        system_prompt = self.prompt_loader.format(
            "code_questions", lang, count=count, difficulty=level, topic=topic
        )
        if lang is Language.FR:
            user_prompt = (
                f'Génère {count} questions de programmation sur "{topic}" '
                f"de niveau {level}."
            )
        else:
            user_prompt = (
                f'Generate {count} coding questions about "{topic}" at {level} level.'
            )
        return self._run(
            "generate_code_questions",
            [
                ChatMessage(role="system", content=system_prompt),
                ChatMessage(role="user", content=user_prompt),
            ],
            max_tokens=self.max_tokens,
            language=lang,
        )

    def analyze_code(
        self,
        code: str,
        language: str,
        specifications: Optional[str] = None,
        standards: Optional[str] = None,
        review_language: "Language | str" = Language.EN,
    ) -> AIResponse:
        """
        R: Review `code` written in programming `language`.

        `review_language` selects the prompt language, not the code's.
        """
        lang = Language.resolve(review_language)
        return self._run(
            "analyze_code",
            [
                ChatMessage(
                    role="system",
                    content=self.prompt_loader.format("code_review", lang),
                ),
                ChatMessage(
                    role="user",
                    content=_code_review_context(
                        code, language, specifications, standards
                    ),
                ),
            ],
            max_tokens=self.max_tokens,
            language=lang,
        )

    def generate_mcq_from_latex(
        self,
        latex_content: str,
        number_of_questions: int = 20,
        difficulty: "Difficulty | str" = Difficulty.INTERMEDIATE,
        language: "Language | str" = Language.EN,
        topic: Optional[str] = None,
    ) -> AIResponse:
        """R: Build a multiple-choice exam from LaTeX course material."""
        lang = Language.resolve(language)
        system_prompt = self.prompt_loader.format(
            "exam",
            lang,
            number_of_questions=number_of_questions,
            difficulty=_difficulty_value(difficulty),
            topic=topic or DEFAULT_EXAM_TOPIC[lang],
        )
        if lang is Language.FR:
            user_prompt = (
                f"Voici le contenu LaTeX pour générer l'examen:\n\n{latex_content}"
            )
        else:
            user_prompt = (
                f"Here is the LaTeX content to generate the exam from:\n\n{latex_content}"
            )
        return self._run(
            "generate_mcq_from_latex",
            [
                ChatMessage(role="system", content=system_prompt),
                ChatMessage(role="user", content=user_prompt),
            ],
            max_tokens=self.exam_max_tokens,
            language=lang,
        )

    def validate_code_answer(
        self,
        question: str,
        student_code: str,
        expected_solution: str,
        test_cases: Sequence[TestCase],
        language: "Language | str" = Language.EN,
    ) -> AIResponse:
        """R: Grade a student's code against a question and its test cases."""
        lang = Language.resolve(language)
        return self._run(
            "validate_code_answer",
            [
                ChatMessage(
                    role="system",
                    content=self.prompt_loader.format("code_validation", lang),
                ),
                ChatMessage(
                    role="user",
                    content=_validation_context(
                        question, student_code, expected_solution, test_cases
                    ),
                ),
            ],
            max_tokens=self.max_tokens,
            language=lang,
        )

    def generate_educational_image(
        self, description: str, context: str = DEFAULT_IMAGE_CONTEXT
    ) -> AIResponse:
        """R: Ask the image model for an illustration; the reply is returned raw."""
        prompt = (
            f"Educational illustration: {description}. Context: {context}. "
            "Style: clean, professional, modern educational design suitable for "
            "academic platform. High quality, clear, and engaging for students "
            "and professors."
        )
        return self._run(
            "generate_educational_image",
            [ChatMessage(role="user", content=prompt)],
            model=self.image_model,
            max_tokens=self.max_tokens,
        )

    def _run(
        self,
        operation: str,
        messages: List[ChatMessage],
        *,
        max_tokens: int,
        model: Optional[str] = None,
        language: Optional[Language] = None,
    ) -> AIResponse:
        timings = StageTimings()
        with timings.measure("llm"):
            response = self.completion_service.complete(
                messages,
                model=model or self.chat_model,
                temperature=self.temperature,
                max_tokens=max_tokens,
            )

        log_extra = {
            "operation": operation,
            "model": model or self.chat_model,
            "success": response.success,
            **timings.to_dict(),
        }
        if language is not None:
            log_extra["language"] = language.value
        if response.usage:
            log_extra["total_tokens"] = response.usage.total_tokens

        if response.success:
            logger.info("AI call completed", extra=log_extra)
        else:
            logger.warning(
                "AI call failed", extra={**log_extra, "upstream_error": response.error}
            )
        return response
