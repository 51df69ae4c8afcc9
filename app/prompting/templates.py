from __future__ import annotations

from typing import Callable

from app.features.intent import Category

SYSTEM_PROMPT = (
    "You are GEN-E, a next-generation AI Career & Life Assistant for students, freshers, "
    "and working professionals. Your mission is to help users become job-ready, confident, "
    "and clear about their career direction. You serve as a calm mentor, practical coach, "
    "and strategic advisor. Begin with a quick analysis, present clear strategies, and apply "
    "them to the user's case. You specialize in career guidance, interview preparation, "
    "resume and LinkedIn optimization, job application strategy, workplace communication, "
    "and modern life skills for professional growth. Your tone is formal, composed, and "
    "reassuring. Acknowledge what users are doing right before suggesting improvements. "
    "Adjust depth to experience level: freshers and students receive foundational structure, "
    "professionals receive advanced strategy. Organize responses with headings, bullet points, "
    "and logical flow, staying concise and purposeful. Never guarantee outcomes or provide "
    "unethical guidance. Always end with a practical next step or a guiding question."
)

READINESS_SCORE_LINE = "Career Readiness Score: XX%"


def _resume_template(text: str) -> str:
    return (
        "Create a professional, ATS-friendly resume from the details below.\n"
        "Use exactly these markdown sections, in this order:\n"
        "## Professional Summary\n"
        "## Core Skills\n"
        "## Experience\n"
        "## Projects\n"
        "## Education\n\n"
        "Keep bullet points concise and achievement-focused. "
        "Do not invent employers, dates, or degrees that are not given.\n\n"
        f"USER DETAILS:\n{text}"
    )


def _interview_template(text: str) -> str:
    return (
        "Prepare the user for the interview described below.\n"
        "Use exactly these markdown sections, in this order:\n"
        "## Quick Analysis\n"
        "## HR Questions\n"
        "## Technical Questions\n"
        "## STAR Strategy\n"
        "## Practical Next Step\n\n"
        "List 5 likely questions under each question section with a short answer hint.\n\n"
        f"USER REQUEST:\n{text}"
    )


def _score_template(text: str) -> str:
    return (
        "Evaluate the user's career readiness from the details below.\n"
        f"Start with one line in exactly this format: {READINESS_SCORE_LINE}\n"
        "Replace XX with a whole number from 0 to 100. Then use these markdown sections:\n"
        "## Strengths\n"
        "## Skill Gaps\n"
        "## Action Plan\n\n"
        f"USER DETAILS:\n{text}"
    )


def _career_template(text: str) -> str:
    return (
        "Give structured career guidance for the request below.\n"
        "Use exactly these markdown sections, in this order:\n"
        "## Quick Analysis\n"
        "## Recommended Roles\n"
        "## Skill Gaps\n"
        "## Action Plan\n"
        "## Practical Next Step\n\n"
        f"USER REQUEST:\n{text}"
    )


PROMPT_TEMPLATES: dict[Category, Callable[[str], str]] = {
    Category.RESUME: _resume_template,
    Category.INTERVIEW: _interview_template,
    Category.SCORE: _score_template,
    Category.CAREER: _career_template,
}


def build_prompt(category: Category, text: str) -> str:
    template = PROMPT_TEMPLATES.get(category, _career_template)
    return template(text)


def build_document_prompt(text: str, max_chars: int | None = None) -> str:
    """Wrap extracted document text in the fixed analysis instruction.

    ``max_chars`` bounds how much document text is sent upstream; anything
    beyond it is cut and marked with an ellipsis.
    """
    document_text = (text or "").strip()
    if max_chars and len(document_text) > max_chars:
        document_text = document_text[:max_chars] + "..."
    return (
        "Analyze the uploaded document below as a career mentor.\n"
        "Use exactly these markdown sections, in this order:\n"
        "## Document Overview\n"
        "## Strengths\n"
        "## Improvement Areas\n"
        "## Recommended Roles\n"
        "## Practical Next Step\n\n"
        f"DOCUMENT:\n{document_text}"
    )
