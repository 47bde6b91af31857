"""
core/fitbot.py – prompt wrapping and canned fallback replies.
"""
import pytest

from core.fitbot import DEFAULT_REPLY, SYSTEM_PROMPT, build_chat_prompt, fallback_reply


def test_prompt_wraps_question():
    p = build_chat_prompt("  how much protein?  ")
    assert p.startswith(SYSTEM_PROMPT)
    assert p.endswith("User question: how much protein?")


@pytest.mark.parametrize(
    "message,needle",
    [
        ("Why does my WEIGHT jump around?", "fluctuations"),
        ("what is tdee", "Total Daily Energy Expenditure"),
        ("what should I eat for lunch", "plate method"),
        ("best workout for beginners", "150 minutes"),
        ("I'm stuck on my goal", "isn't always linear"),
        ("need some motivation", "right steps"),
    ],
)
def test_fallback_keywords(message, needle):
    assert needle in fallback_reply(message)


def test_fallback_first_match_wins():
    # "weight" row comes before "calorie"
    assert "fluctuations" in fallback_reply("calories vs weight")


def test_fallback_default():
    assert fallback_reply("hello there") == DEFAULT_REPLY
