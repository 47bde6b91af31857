"""
core/fitbot.py
────────────────────────────────────────────────────────────────────────
Fitness assistant text: the prompt wrapped around a user question and
the canned replies used when Gemini is unavailable.
"""

from __future__ import annotations

SYSTEM_PROMPT = """You are the CalSnap AI assistant, a knowledgeable and friendly AI fitness assistant for the CalSnap fitness tracking app.

Your expertise includes:
- Weight management and tracking
- Calorie counting and nutrition
- TDEE (Total Daily Energy Expenditure) calculations
- General fitness tips and motivation
- Meal planning and healthy eating habits
- Exercise recommendations

Key guidelines:
- Keep responses conversational, encouraging, and supportive
- Provide practical, actionable advice
- Be concise but informative (aim for 2-4 sentences)
- If asked about specific medical concerns, recommend consulting healthcare professionals
- Focus on sustainable, healthy habits
- Use a positive, motivational tone

User context: The user is using the CalSnap fitness dashboard that tracks weight, calories, meals, and calculates TDEE. They may ask about their progress, get explanations about fitness concepts, or seek advice."""

DEFAULT_REPLY = (
    "I'm your CalSnap AI assistant! I can help you with weight tracking, calories, "
    "TDEE, and fitness tips. What would you like to know?"
)

# first matching row wins
_FALLBACKS: tuple[tuple[tuple[str, ...], str], ...] = (
    (
        ("weight",),
        "Weight fluctuations are completely normal! Hydration, meal timing, sodium intake and "
        "even the time of day all move the scale. Focus on the trend over weeks rather than "
        "daily changes, and keep logging consistently.",
    ),
    (
        ("calorie", "tdee"),
        "TDEE (Total Daily Energy Expenditure) is the total calories you burn in a day: your "
        "basal metabolic rate plus daily activity and exercise. Eating around your TDEE "
        "maintains weight, eating below it helps with weight loss. The calculator works it "
        "out for you.",
    ),
    (
        ("meal", "food", "eat"),
        "Try the plate method: half vegetables, a quarter lean protein, a quarter complex "
        "carbs, plus some healthy fats like avocado or nuts. Stay hydrated, eat at regular "
        "times, and use meal analysis to track what you eat.",
    ),
    (
        ("exercise", "workout", "fitness"),
        "Start with activities you enjoy and build intensity gradually. Aim for 150 minutes "
        "of moderate exercise a week plus 2 days of strength training. Consistency beats "
        "perfection!",
    ),
    (
        ("progress", "goal"),
        "Progress isn't always linear, and that's okay. Celebrate small wins, track more "
        "than just weight, and notice how you feel. The dashboard shows your patterns over time.",
    ),
    (
        ("motivation", "help"),
        "You're already taking the right steps by tracking your health. Every healthy choice "
        "matters, and small consistent actions lead to big results. Focus on progress, not "
        "perfection!",
    ),
)


def build_chat_prompt(message: str) -> str:
    return f"{SYSTEM_PROMPT}\n\nUser question: {message.strip()}"


def fallback_reply(message: str) -> str:
    """Keyword-matched canned answer for when the model can't be reached."""
    low = message.lower()
    for keys, reply in _FALLBACKS:
        if any(k in low for k in keys):
            return reply
    return DEFAULT_REPLY
