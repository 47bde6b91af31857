# services/gemini.py
import logging
import random
import time

from google import genai
from google.genai import types, errors as gerrors

from config import settings
from core.fitbot import build_chat_prompt
from core.meal_analysis import AnalysisParseError, build_prompt, parse_analysis, split_data_url
from core.models.meal import MealAnalysis, MealType

_LOG = logging.getLogger(__name__)

MAX_ATTEMPTS = 5

_client: genai.Client | None = None


class GeminiError(RuntimeError):
    """Gemini call failed; message is user-presentable."""


class MealAnalysisError(GeminiError):
    """Gemini call or reply parsing failed for a meal photo."""


# ───────────── Client (lazy) ─────────────
def _get_client() -> genai.Client:
    global _client
    if _client is None:
        if not settings.gemini_api_key:
            raise GeminiError("GEMINI_API_KEY is not configured")
        _client = genai.Client(api_key=settings.gemini_api_key)
    return _client


def _classify(exc: Exception, action: str = "analyze food image") -> str:
    code = getattr(exc, "code", None)
    msg = str(exc)
    if code == 404 or "404" in msg:
        return (
            "Gemini API model not found or does not support generateContent. "
            f"Original error: {msg}"
        )
    if code in (401, 403) or "401" in msg or "403" in msg:
        return f"Gemini API authentication failed. Please check your GEMINI_API_KEY. Original error: {msg}"
    if code == 429 or "quota" in msg.lower() or "RESOURCE_EXHAUSTED" in msg:
        return f"Gemini API quota exceeded. Original error: {msg}"
    return f"Failed to {action}: {msg}"


# ───────────── Generation (sync + retry) ─────────────
def _generate(contents: list, config: types.GenerateContentConfig) -> str:
    """Run generate_content, retrying on rate limits."""
    client = _get_client()
    for attempt in range(MAX_ATTEMPTS):
        try:
            resp = client.models.generate_content(
                model=settings.gemini_model,
                contents=contents,
                config=config,
            )
            return resp.text or ""
        except gerrors.ClientError as e:
            if getattr(e, "status", None) == "RESOURCE_EXHAUSTED" and attempt < MAX_ATTEMPTS - 1:
                backoff = (2 ** attempt) + random.random()
                _LOG.warning("429 from Gemini, retrying in %.1fs", backoff)
                time.sleep(backoff)
                continue
            raise
    raise GeminiError("Gemini API quota exceeded. Retries exhausted")  # pragma: no cover


def analyze_food_image(image_data: str, meal_type: MealType) -> MealAnalysis:
    """Send a `data:image/...` URL to Gemini and return the parsed analysis.

    ImageFormatError propagates unchanged (caller's input is bad); every
    other failure surfaces as MealAnalysisError.
    """
    mime, raw = split_data_url(image_data)
    prompt = build_prompt(meal_type)
    config = types.GenerateContentConfig(
        temperature=0.2,
        response_mime_type="application/json",
    )

    try:
        text = _generate([prompt, types.Part.from_bytes(data=raw, mime_type=mime)], config)
    except GeminiError as exc:
        raise MealAnalysisError(str(exc)) from exc
    except Exception as exc:
        _LOG.error("Gemini meal analysis failed: %s", exc)
        raise MealAnalysisError(_classify(exc)) from exc

    _LOG.debug("raw Gemini reply: %.500s", text)
    try:
        return parse_analysis(text, meal_type)
    except AnalysisParseError as exc:
        raise MealAnalysisError(f"Failed to analyze food image: {exc}") from exc


def chat(message: str) -> str:
    """Answer a fitness question; raises GeminiError on any failure."""
    config = types.GenerateContentConfig(
        temperature=0.7,
        top_k=40,
        top_p=0.95,
        max_output_tokens=200,
    )
    try:
        text = _generate([build_chat_prompt(message)], config)
    except GeminiError:
        raise
    except Exception as exc:
        _LOG.error("Gemini chat failed: %s", exc)
        raise GeminiError(_classify(exc, "answer the question")) from exc

    if not text.strip():
        raise GeminiError("No response generated from Gemini")
    return text.strip()
