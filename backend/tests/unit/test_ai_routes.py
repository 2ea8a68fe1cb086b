"""
Name: AI Routes Tests

Responsibilities:
  - Bearer check runs before the bridge (401 "No token provided")
  - Request defaults reach the bridge
  - Upstream and parse failures map to generic 500 messages
"""

import json

import pytest
from fastapi import APIRouter, FastAPI
from fastapi.testclient import TestClient

from eduai.ai_routes import router as ai_router
from eduai.application import AIBridge
from eduai.container import get_ai_bridge, get_auth_service
from eduai.domain.entities import AIResponse
from eduai.exception_handlers import register_exception_handlers
from eduai.infrastructure.services import FakeCompletionService


pytestmark = pytest.mark.unit


class _FailingCompletion:
    """Completion service whose upstream always errors."""

    def __init__(self, error: str = "AI API request failed: 503 Service Unavailable"):
        self.error = error
        self.calls = 0

    def complete(self, messages, *, model=None, temperature=None, max_tokens=None):
        self.calls += 1
        return AIResponse(success=False, error=self.error)


def _build_app(auth_service, bridge: AIBridge) -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)
    api = APIRouter(prefix="/api")
    api.include_router(ai_router)
    app.include_router(api)
    app.dependency_overrides[get_auth_service] = lambda: auth_service
    app.dependency_overrides[get_ai_bridge] = lambda: bridge
    return app


def _bridge(completion, prompt_loader) -> AIBridge:
    return AIBridge(
        completion_service=completion,
        prompt_loader=prompt_loader,
        chat_model="chat-model",
        image_model="image-model",
    )


@pytest.fixture
def token(auth_service) -> str:
    return auth_service.register("ada@example.com", "secret1", "Ada").token


@pytest.fixture
def headers(token) -> dict:
    return {"Authorization": f"Bearer {token}"}


def test_missing_token_never_reaches_bridge(auth_service, prompt_loader):
    completion = FakeCompletionService()
    client = TestClient(_build_app(auth_service, _bridge(completion, prompt_loader)))

    response = client.post(
        "/api/ai/generate-questions",
        json={"topic": "Recursion", "difficulty": "beginner"},
    )

    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "No token provided"}
    assert completion.calls == []


def test_generate_questions_applies_defaults(auth_service, prompt_loader, headers):
    completion = FakeCompletionService(reply='```json\n{"questions": []}\n```')
    client = TestClient(_build_app(auth_service, _bridge(completion, prompt_loader)))

    response = client.post(
        "/api/ai/generate-questions",
        json={"topic": "Recursion", "difficulty": "beginner"},
        headers=headers,
    )

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "data": {"questions": []},
        "message": "Questions generated successfully",
    }
    call = completion.calls[0]
    assert call["max_tokens"] == 4000
    assert call["temperature"] == 0.5
    assert "Generate 5 coding questions" in call["messages"][0].content


def test_generate_questions_requires_topic(auth_service, prompt_loader, headers):
    completion = FakeCompletionService()
    client = TestClient(_build_app(auth_service, _bridge(completion, prompt_loader)))

    response = client.post(
        "/api/ai/generate-questions", json={"difficulty": "beginner"}, headers=headers
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Topic and difficulty are required"
    assert completion.calls == []


def test_analyze_code_upstream_failure_hides_details(
    auth_service, prompt_loader, headers
):
    completion = _FailingCompletion()
    client = TestClient(_build_app(auth_service, _bridge(completion, prompt_loader)))

    response = client.post(
        "/api/ai/analyze-code",
        json={"code": "print(1)", "language": "python"},
        headers=headers,
    )

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Failed to analyze code"}
    assert "503" not in response.text
    assert completion.calls == 1


def test_unparseable_reply_is_500(auth_service, prompt_loader, headers):
    completion = FakeCompletionService(reply="I cannot help with that.")
    client = TestClient(_build_app(auth_service, _bridge(completion, prompt_loader)))

    response = client.post(
        "/api/ai/analyze-code",
        json={"code": "print(1)", "language": "python"},
        headers=headers,
    )

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "error": "Failed to parse AI response",
    }


def test_generate_exam_uses_exam_token_ceiling(auth_service, prompt_loader, headers):
    reply = json.dumps({"exam": {"questions": [{"id": "q1"}]}})
    completion = FakeCompletionService(reply=f"Here you go:\n{reply}\nGood luck!")
    client = TestClient(_build_app(auth_service, _bridge(completion, prompt_loader)))

    response = client.post(
        "/api/ai/generate-exam",
        json={"latexContent": "\\section{Limits}"},
        headers=headers,
    )

    assert response.status_code == 200
    assert response.json()["data"]["exam"]["questions"][0]["id"] == "q1"
    call = completion.calls[0]
    assert call["max_tokens"] == 6000
    assert "generate 10 multiple-choice questions at intermediate level" in (
        call["messages"][0].content
    )
    assert "\\section{Limits}" in call["messages"][1].content


def test_large_question_counts_reach_the_prompt(auth_service, prompt_loader, headers):
    completion = FakeCompletionService(reply='{"questions": [], "exam": {"questions": []}}')
    client = TestClient(_build_app(auth_service, _bridge(completion, prompt_loader)))

    questions = client.post(
        "/api/ai/generate-questions",
        json={"topic": "Recursion", "difficulty": "beginner", "count": 60},
        headers=headers,
    )
    exam = client.post(
        "/api/ai/generate-exam",
        json={"latexContent": "\\section{Limits}", "numberOfQuestions": 150},
        headers=headers,
    )

    assert questions.status_code == 200
    assert exam.status_code == 200
    assert "Generate 60 coding questions" in completion.calls[0]["messages"][0].content
    assert "generate 150 multiple-choice questions" in (
        completion.calls[1]["messages"][0].content
    )


def test_generate_exam_requires_latex(auth_service, prompt_loader, headers):
    client = TestClient(
        _build_app(auth_service, _bridge(FakeCompletionService(), prompt_loader))
    )

    response = client.post("/api/ai/generate-exam", json={}, headers=headers)

    assert response.status_code == 400
    assert response.json()["error"] == "LaTeX content is required"


def test_validate_code_passes_test_cases(auth_service, prompt_loader, headers):
    completion = FakeCompletionService(reply='{"evaluation": {"score": 90}}')
    client = TestClient(_build_app(auth_service, _bridge(completion, prompt_loader)))

    response = client.post(
        "/api/ai/validate-code",
        json={
            "question": "Add two numbers",
            "studentCode": "def add(a, b): return a + b",
            "testCases": [{"input": "1, 2", "expectedOutput": "3"}],
            "language": "fr",
        },
        headers=headers,
    )

    assert response.status_code == 200
    assert response.json()["data"] == {"evaluation": {"score": 90}}
    system, user = completion.calls[0]["messages"]
    assert system.content.startswith("Tu es un correcteur expert")
    assert "Test 1: Input: 1, 2, Expected Output: 3" in user.content


def test_validate_code_requires_student_code(auth_service, prompt_loader, headers):
    client = TestClient(
        _build_app(auth_service, _bridge(FakeCompletionService(), prompt_loader))
    )

    response = client.post(
        "/api/ai/validate-code", json={"question": "Add"}, headers=headers
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Question and student code are required"


def test_wrong_field_type_is_invalid_body(auth_service, prompt_loader, headers):
    client = TestClient(
        _build_app(auth_service, _bridge(FakeCompletionService(), prompt_loader))
    )

    response = client.post(
        "/api/ai/generate-questions",
        json={"topic": "Loops", "difficulty": "beginner", "count": "many"},
        headers=headers,
    )

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Invalid request body"}


def test_generate_image_returns_raw_reply(auth_service, prompt_loader, headers):
    completion = FakeCompletionService(reply="https://images.example/owl.png")
    client = TestClient(_build_app(auth_service, _bridge(completion, prompt_loader)))

    response = client.post(
        "/api/ai/generate-image",
        json={"description": "An owl reading"},
        headers=headers,
    )

    assert response.status_code == 200
    assert response.json()["data"] == "https://images.example/owl.png"
    call = completion.calls[0]
    assert call["model"] == "image-model"
    assert "Context: educational platform" in call["messages"][0].content


def test_generate_image_upstream_failure(auth_service, prompt_loader, headers):
    client = TestClient(
        _build_app(auth_service, _bridge(_FailingCompletion(), prompt_loader))
    )

    response = client.post(
        "/api/ai/generate-image", json={"description": "An owl"}, headers=headers
    )

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Failed to generate image"}
