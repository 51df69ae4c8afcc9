from __future__ import annotations

from enum import Enum


class Category(str, Enum):
    CAREER = "career"
    RESUME = "resume"
    INTERVIEW = "interview"
    SCORE = "score"


# Evaluated top to bottom; the first rule with any keyword present wins.
_INTENT_RULES: tuple[tuple[Category, tuple[str, ...]], ...] = (
    (Category.RESUME, ("resume",)),
    (Category.INTERVIEW, ("interview",)),
    (Category.SCORE, ("score", "readiness")),
)


def classify_intent(text: str) -> Category:
    lowered = (text or "").lower()
    for category, keywords in _INTENT_RULES:
        if any(keyword in lowered for keyword in keywords):
            return category
    return Category.CAREER
