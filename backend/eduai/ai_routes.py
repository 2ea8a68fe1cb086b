"""
Name: AI Routes

Responsibilities:
  - Expose the AI bridge operations to authenticated users
  - Apply request defaults and required-field checks
  - Parse the model reply into JSON before answering

Collaborators:
  - application.AIBridge: one completion call per request
  - application.response_parsing: JSON extraction from free text
  - dependencies.require_user: bearer check runs before the bridge

Constraints:
  - Upstream error text is logged, never returned to the client
  - No retries: one inbound request makes at most one outbound call

Notes:
  - A reply missing its expected top-level keys is still returned;
    the gap is only logged
"""

from typing import Any, Callable, Optional, Sequence

from fastapi import APIRouter, Depends
from pydantic import Field

from .application import AIBridge, parse_ai_response, validate_ai_response
from .container import get_ai_bridge
from .dependencies import require_user
from .domain.entities import AIResponse, Difficulty, Language, TestCase
from .error_responses import OPENAPI_ERROR_RESPONSES, bad_request
from .exceptions import ParseError, UpstreamServiceError
from .logger import logger
from .schemas import CamelModel
from .timing import StageTimings

PARSE_FAILED_MESSAGE = "Failed to parse AI response"

DEFAULT_QUESTION_COUNT = 5
DEFAULT_EXAM_QUESTIONS = 10

router = APIRouter(
    prefix="/ai",
    tags=["ai"],
    responses=OPENAPI_ERROR_RESPONSES,
    dependencies=[Depends(require_user())],
)


class GenerateQuestionsRequest(CamelModel):
    topic: Optional[str] = None
    difficulty: Optional[str] = None
    count: Optional[int] = Field(default=None, ge=1)
    language: Optional[str] = None


class AnalyzeCodeRequest(CamelModel):
    code: Optional[str] = None
    language: Optional[str] = None
    specifications: Optional[str] = None
    standards: Optional[str] = None
    review_language: Optional[str] = None


class GenerateExamRequest(CamelModel):
    latex_content: Optional[str] = None
    number_of_questions: Optional[int] = Field(default=None, ge=1)
    difficulty: Optional[str] = None
    language: Optional[str] = None
    topic: Optional[str] = None


class TestCaseModel(CamelModel):
    input: str = ""
    expected_output: str = ""


class ValidateCodeRequest(CamelModel):
    question: Optional[str] = None
    student_code: Optional[str] = None
    expected_solution: Optional[str] = None
    test_cases: list[TestCaseModel] = Field(default_factory=list)
    language: Optional[str] = None


class GenerateImageRequest(CamelModel):
    description: Optional[str] = None
    context: Optional[str] = None


class AIDataResponse(CamelModel):
    success: bool = True
    data: Any
    message: str


def _upstream_failure(
    operation: str, response: AIResponse, failure_message: str
) -> UpstreamServiceError:
    logger.warning("AI operation failed", extra={"operation": operation})
    return UpstreamServiceError(
        failure_message, original_error=RuntimeError(response.error or "unknown")
    )


def _reply_json(
    operation: str,
    call: Callable[[], AIResponse],
    failure_message: str,
    required_fields: Sequence[str] = (),
) -> Any:
    """R: Run one bridge call and decode its reply, or raise a 500."""
    response = call()
    if not response.success:
        raise _upstream_failure(operation, response, failure_message)

    timings = StageTimings()
    with timings.measure("parse"):
        data = parse_ai_response(response)
    if data is None:
        raise ParseError(PARSE_FAILED_MESSAGE)

    if required_fields and not validate_ai_response(data, required_fields):
        logger.warning(
            "AI reply missing expected fields",
            extra={"operation": operation, "required_fields": list(required_fields)},
        )
    logger.info("AI reply parsed", extra={"operation": operation, **timings.to_dict()})
    return data


@router.post("/generate-questions", response_model=AIDataResponse)
def generate_questions(
    req: GenerateQuestionsRequest, bridge: AIBridge = Depends(get_ai_bridge)
):
    if not req.topic or not req.difficulty:
        raise bad_request("Topic and difficulty are required")

    data = _reply_json(
        "generate_code_questions",
        lambda: bridge.generate_code_questions(
            req.topic,
            req.difficulty,
            req.count or DEFAULT_QUESTION_COUNT,
            req.language or Language.EN,
        ),
        "Failed to generate questions",
        required_fields=("questions",),
    )
    return AIDataResponse(data=data, message="Questions generated successfully")


@router.post("/analyze-code", response_model=AIDataResponse)
def analyze_code(req: AnalyzeCodeRequest, bridge: AIBridge = Depends(get_ai_bridge)):
    if not req.code or not req.language:
        raise bad_request("Code and language are required")

    data = _reply_json(
        "analyze_code",
        lambda: bridge.analyze_code(
            req.code,
            req.language,
            req.specifications,
            req.standards,
            req.review_language or Language.EN,
        ),
        "Failed to analyze code",
        required_fields=("analysis", "overallScore"),
    )
    return AIDataResponse(data=data, message="Code analyzed successfully")


@router.post("/generate-exam", response_model=AIDataResponse)
def generate_exam(req: GenerateExamRequest, bridge: AIBridge = Depends(get_ai_bridge)):
    if not req.latex_content:
        raise bad_request("LaTeX content is required")

    data = _reply_json(
        "generate_mcq_from_latex",
        lambda: bridge.generate_mcq_from_latex(
            req.latex_content,
            req.number_of_questions or DEFAULT_EXAM_QUESTIONS,
            req.difficulty or Difficulty.INTERMEDIATE,
            req.language or Language.EN,
            req.topic,
        ),
        "Failed to generate exam",
        required_fields=("exam.questions",),
    )
    return AIDataResponse(data=data, message="Exam generated successfully")


@router.post("/validate-code", response_model=AIDataResponse)
def validate_code(req: ValidateCodeRequest, bridge: AIBridge = Depends(get_ai_bridge)):
    if not req.question or not req.student_code:
        raise bad_request("Question and student code are required")

    test_cases = [
        TestCase(input=case.input, expected_output=case.expected_output)
        for case in req.test_cases
    ]
    data = _reply_json(
        "validate_code_answer",
        lambda: bridge.validate_code_answer(
            req.question,
            req.student_code,
            req.expected_solution or "",
            test_cases,
            req.language or Language.EN,
        ),
        "Failed to validate code",
        required_fields=("evaluation",),
    )
    return AIDataResponse(data=data, message="Code validated successfully")


@router.post("/generate-image", response_model=AIDataResponse)
def generate_image(req: GenerateImageRequest, bridge: AIBridge = Depends(get_ai_bridge)):
    if not req.description:
        raise bad_request("Description is required")

    if req.context:
        response = bridge.generate_educational_image(req.description, req.context)
    else:
        response = bridge.generate_educational_image(req.description)

    if not response.success:
        raise _upstream_failure(
            "generate_educational_image", response, "Failed to generate image"
        )
    return AIDataResponse(data=response.data, message="Image generated successfully")
