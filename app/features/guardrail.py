from __future__ import annotations

BANNED_TERMS: tuple[str, ...] = (
    "politics",
    "religion",
    "crypto",
    "relationship",
    "dating",
    "medical",
    "health",
    "trading",
    "betting",
)

REFUSAL_MESSAGE = (
    "I'm GEN-E, your career and professional growth assistant. "
    "I can't help with that topic, but I'm happy to support you with career guidance, "
    "resumes, interview preparation, or job-readiness questions."
)


def find_banned_term(text: str) -> str | None:
    lowered = (text or "").lower()
    for term in BANNED_TERMS:
        # Plain containment: "cryptography" still trips "crypto".
        if term in lowered:
            return term
    return None


def check_guardrails(text: str) -> str | None:
    """Return the fixed refusal when ``text`` touches an out-of-scope topic."""
    if find_banned_term(text) is not None:
        return REFUSAL_MESSAGE
    return None
