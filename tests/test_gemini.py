"""
services/gemini.py with the genai client swapped for a stub.
"""
import base64
import json
from types import SimpleNamespace

import pytest
from google.genai import errors as gerrors

from config import settings
from core.meal_analysis import ImageFormatError
from core.models.meal import MealType
from services import gemini

IMAGE = "data:image/png;base64," + base64.b64encode(b"img").decode()
REPLY = {
    "foodItems": [{"name": "Pancakes", "estimatedCalories": 350.2, "confidence": 0.8}],
    "totalCalories": 350.2,
    "analysisConfidence": 0.75,
}


class _Models:
    """Replays `outcomes` in order; the last one repeats."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    def generate_content(self, *, model, contents, config):
        self.calls.append((model, contents))
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return SimpleNamespace(text=outcome)


@pytest.fixture
def stub(monkeypatch):
    def _install(*outcomes):
        models = _Models(*outcomes)
        monkeypatch.setattr(gemini, "_client", SimpleNamespace(models=models))
        return models
    return _install


def test_analyze_food_image(stub):
    models = stub("```json\n" + json.dumps(REPLY) + "\n```")
    a = gemini.analyze_food_image(IMAGE, MealType.breakfast)
    assert a.total_calories == 350
    assert a.food_items[0].name == "Pancakes"

    model, contents = models.calls[0]
    assert model == settings.gemini_model
    assert "breakfast meal" in contents[0]


def test_unparseable_reply_is_analysis_error(stub):
    stub("sorry, I can't see any food")
    with pytest.raises(gemini.MealAnalysisError, match="Failed to analyze food image"):
        gemini.analyze_food_image(IMAGE, MealType.lunch)


def test_api_failure_is_classified(stub):
    stub(RuntimeError("403 PERMISSION_DENIED"))
    with pytest.raises(gemini.MealAnalysisError, match="authentication failed"):
        gemini.analyze_food_image(IMAGE, MealType.dinner)


def test_bad_image_propagates(stub):
    stub(json.dumps(REPLY))
    with pytest.raises(ImageFormatError):
        gemini.analyze_food_image("not-a-data-url", MealType.dinner)


def test_missing_api_key(monkeypatch):
    monkeypatch.setattr(gemini, "_client", None)
    monkeypatch.setattr(settings, "gemini_api_key", None)
    with pytest.raises(gemini.MealAnalysisError, match="GEMINI_API_KEY"):
        gemini.analyze_food_image(IMAGE, MealType.dinner)


@pytest.mark.parametrize(
    "msg,expected",
    [
        ("404 model not found", "not found"),
        ("401 UNAUTHENTICATED", "authentication failed"),
        ("quota exceeded for project", "quota exceeded"),
        ("boom", "Failed to analyze food image"),
    ],
)
def test_classify(msg, expected):
    assert expected in gemini._classify(RuntimeError(msg))


def test_numeric_quantity_reply(stub):
    reply = {
        "foodItems": [{"name": "Egg", "estimatedCalories": 78, "confidence": 0.9, "quantity": 2}],
        "totalCalories": 156,
        "analysisConfidence": 0.8,
    }
    stub(json.dumps(reply))
    a = gemini.analyze_food_image(IMAGE, MealType.breakfast)
    assert a.food_items[0].quantity == "2"


def test_nan_confidence_is_analysis_error(stub):
    stub(json.dumps({**REPLY, "analysisConfidence": float("nan")}))
    with pytest.raises(gemini.MealAnalysisError):
        gemini.analyze_food_image(IMAGE, MealType.breakfast)


def _client_error(code: int, status: str) -> gerrors.ClientError:
    err = gerrors.ClientError(code, {"error": {"code": code, "message": status, "status": status}})
    err.status = status
    return err


def test_rate_limit_is_retried(stub, monkeypatch):
    sleeps = []
    monkeypatch.setattr(gemini.time, "sleep", sleeps.append)
    models = stub(_client_error(429, "RESOURCE_EXHAUSTED"), json.dumps(REPLY))

    a = gemini.analyze_food_image(IMAGE, MealType.lunch)
    assert a.total_calories == 350
    assert len(models.calls) == 2
    assert len(sleeps) == 1 and 1 <= sleeps[0] < 2


def test_rate_limit_gives_up_after_max_attempts(stub, monkeypatch):
    monkeypatch.setattr(gemini.time, "sleep", lambda _s: None)
    models = stub(_client_error(429, "RESOURCE_EXHAUSTED"))

    with pytest.raises(gemini.MealAnalysisError, match="quota exceeded"):
        gemini.analyze_food_image(IMAGE, MealType.lunch)
    assert len(models.calls) == gemini.MAX_ATTEMPTS


def test_other_client_errors_not_retried(stub, monkeypatch):
    sleeps = []
    monkeypatch.setattr(gemini.time, "sleep", sleeps.append)
    models = stub(_client_error(400, "INVALID_ARGUMENT"), json.dumps(REPLY))

    with pytest.raises(gemini.MealAnalysisError):
        gemini.analyze_food_image(IMAGE, MealType.lunch)
    assert len(models.calls) == 1
    assert sleeps == []


# ── chat ─────────────────────────────────────────────────────────────
def test_chat(stub):
    models = stub("  Drink water and sleep well.  ")
    assert gemini.chat("tips?") == "Drink water and sleep well."
    _, contents = models.calls[0]
    assert contents[0].endswith("User question: tips?")


def test_chat_empty_reply(stub):
    stub("   ")
    with pytest.raises(gemini.GeminiError, match="No response"):
        gemini.chat("tips?")


def test_chat_api_failure(stub):
    stub(RuntimeError("boom"))
    with pytest.raises(gemini.GeminiError, match="Failed to answer the question"):
        gemini.chat("tips?")


def test_chat_missing_api_key(monkeypatch):
    monkeypatch.setattr(gemini, "_client", None)
    monkeypatch.setattr(settings, "gemini_api_key", None)
    with pytest.raises(gemini.GeminiError, match="GEMINI_API_KEY"):
        gemini.chat("tips?")
