"""
core/meal_analysis.py
────────────────────────────────────────────────────────────────────────
Everything about a meal-photo analysis that does not touch the network:

* data-URL splitting (mime type + raw bytes)
* the prompt sent to Gemini
* parsing / validating the JSON reply into a `MealAnalysis`
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
import math
import re
from typing import Any

from pydantic import ValidationError as ModelError

from core.calorie_calc import round_half_up
from core.models.meal import FoodItem, MealAnalysis, MealType

_LOG = logging.getLogger(__name__)

DEFAULT_MIME = "image/jpeg"
DEFAULT_ITEM_CONFIDENCE = 0.5

_FENCE_RE = re.compile(r"^```(?:json)?\s*\n?([\s\S]*?)\n?```\s*$")
_MIME_RE = re.compile(r"^data:([^;,]+)[;,]")


class ImageFormatError(ValueError):
    """Image payload is not a `data:image/...` URL."""


class AnalysisParseError(ValueError):
    """Model reply is not the JSON shape we asked for."""


# ───────────────────────── image ──────────────────────────
def split_data_url(image_data: str) -> tuple[str, bytes]:
    """Return (mime_type, raw bytes) for a base64 `data:image/...` URL."""
    if not isinstance(image_data, str) or not image_data.startswith("data:image/"):
        raise ImageFormatError("Invalid image format")

    header, sep, payload = image_data.partition(",")
    if not sep or not payload:
        raise ImageFormatError("Invalid image format")

    m = _MIME_RE.match(header + ",")
    mime = m.group(1) if m else DEFAULT_MIME
    try:
        raw = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ImageFormatError("Invalid image format") from exc
    return mime, raw


# ───────────────────────── prompt ─────────────────────────
def build_prompt(meal_type: MealType) -> str:
    mt = MealType(meal_type).value
    return f"""
Analyze this food image for a {mt} meal. Please identify all food items visible and estimate their calories.

Return your analysis in the following JSON format:
{{
  "foodItems": [
    {{
      "name": "food item name",
      "estimatedCalories": number,
      "confidence": number (0-1),
      "quantity": "estimated portion size"
    }}
  ],
  "totalCalories": number,
  "analysisConfidence": number (0-1)
}}

Guidelines:
- Identify all visible food items
- Estimate calories based on typical portion sizes
- Provide confidence scores (0-1) for each item
- Include estimated portion sizes when possible
- Be conservative with calorie estimates
- Focus on the meal type context ({mt})

Only return valid JSON, no additional text.
"""


# ───────────────────────── reply ──────────────────────────
def _clamp(v: float, lo: float = 0.0, hi: float = 1.0) -> float:
    return min(max(v, lo), hi)


def _is_number(v: Any) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool) and math.isfinite(v)


def strip_fences(text: str) -> str:
    text = text.strip()
    m = _FENCE_RE.match(text)
    return m.group(1).strip() if m else text


def _food_item(raw: Any) -> FoodItem:
    if not isinstance(raw, dict) or not raw.get("name") or not _is_number(raw.get("estimatedCalories")):
        raise AnalysisParseError("Invalid food item format")

    conf = raw.get("confidence")
    if not _is_number(conf) or not conf:
        conf = DEFAULT_ITEM_CONFIDENCE
    qty = raw.get("quantity")
    try:
        return FoodItem(
            name=str(raw["name"]),
            estimated_calories=round_half_up(raw["estimatedCalories"]),
            confidence=_clamp(conf),
            quantity=str(qty) if qty not in (None, "") else None,   # "2" for a bare 2
        )
    except ModelError as exc:
        raise AnalysisParseError(f"Invalid food item format: {exc}") from exc


def parse_analysis(text: str, meal_type: MealType) -> MealAnalysis:
    """Turn the raw model reply into a validated `MealAnalysis`."""
    try:
        data = json.loads(strip_fences(text))
    except json.JSONDecodeError as exc:
        _LOG.warning("Gemini reply is not JSON: %.200s", text)
        raise AnalysisParseError(f"Reply is not valid JSON: {exc.msg}") from exc

    if not isinstance(data, dict) or not isinstance(data.get("foodItems"), list):
        raise AnalysisParseError("Invalid response format from Gemini API")
    if not _is_number(data.get("totalCalories")):
        raise AnalysisParseError("Invalid total calories in response")
    if not _is_number(data.get("analysisConfidence")):
        raise AnalysisParseError("Invalid confidence score in response")

    items = [_food_item(it) for it in data["foodItems"]]
    try:
        analysis = MealAnalysis(
            meal_type=MealType(meal_type),
            food_items=items,
            total_calories=round_half_up(data["totalCalories"]),
            analysis_confidence=_clamp(data["analysisConfidence"]),
        )
    except ModelError as exc:
        raise AnalysisParseError(f"Invalid response format from Gemini API: {exc}") from exc
    _LOG.info(
        "parsed meal analysis: %d items, %d kcal, confidence %.2f",
        len(items), analysis.total_calories, analysis.analysis_confidence,
    )
    return analysis
