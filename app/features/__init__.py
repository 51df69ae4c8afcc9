from .guardrail import BANNED_TERMS, REFUSAL_MESSAGE, check_guardrails, find_banned_term
from .intent import Category, classify_intent

__all__ = [
    "BANNED_TERMS",
    "REFUSAL_MESSAGE",
    "check_guardrails",
    "find_banned_term",
    "Category",
    "classify_intent",
]
