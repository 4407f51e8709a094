"""Scoring rules for submitted exam answers.

Everything here is pure: it takes question rows (or anything exposing ``id``,
``correct_option``, ``marks``, ``negative`` and ``subject``) plus the student's
responses, and returns a :class:`ScoreCard`. Persistence is the caller's job.
"""
import re
from typing import Dict, Iterable, List, Optional, Tuple

from pydantic import BaseModel

from coaching.core.constants import SUBJECT_BUCKETS

_KEY_DECORATIONS = re.compile(r"[\[\]'\"]")


class GradedAnswer(BaseModel):
    question_id: int
    selected_option: Optional[str] = None
    is_correct: bool = False
    marks_awarded: float = 0
    time_taken: int = 0


class ScoreCard(BaseModel):
    total_score: float = 0
    physics: float = 0
    chemistry: float = 0
    maths: float = 0
    biology: float = 0
    correct_count: int = 0
    wrong_count: int = 0
    skipped_count: int = 0
    answers: List[GradedAnswer] = []


def normalize_option(value: Optional[str]) -> Optional[str]:
    """Lowercase and trim a submitted option. Blank means unanswered."""
    if value is None:
        return None
    normalized = str(value).lower().strip()
    return normalized or None


def clean_answer_key(correct_option: Optional[str]) -> str:
    """Turn a stored key such as ``"[A, C]"`` or ``"'b'"`` into ``"a, c"`` / ``"b"``."""
    return _KEY_DECORATIONS.sub("", (correct_option or "").lower()).strip()


def _option_set(value: str) -> set:
    return {token.strip() for token in value.split(",") if token.strip()}


def is_correct(selected: Optional[str], correct_option: Optional[str]) -> bool:
    selected = normalize_option(selected)
    if selected is None:
        return False
    key = clean_answer_key(correct_option)
    if "," in key:
        return _option_set(selected) == _option_set(key)
    return selected == key


def subject_bucket(subject: Optional[str]) -> Optional[str]:
    """Name of the per-subject score column a question counts toward, if any."""
    lowered = (subject or "").lower()
    for keyword, bucket in SUBJECT_BUCKETS:
        if keyword in lowered:
            return bucket
    return None


def grade_submission(questions: Iterable, responses: Dict[int, Tuple[Optional[str], int]]) -> ScoreCard:
    """Grade every question of an exam.

    ``responses`` maps question id to ``(selected_option, time_taken)``; questions
    missing from it are skipped. Exactly one :class:`GradedAnswer` is produced per
    question, in question order.
    """
    card = ScoreCard()
    answers = []
    for question in questions:
        raw, time_taken = responses.get(question.id, (None, 0))
        selected = normalize_option(raw)

        if selected is None:
            correct = False
            awarded = 0.0
            card.skipped_count += 1
        elif is_correct(selected, question.correct_option):
            correct = True
            awarded = float(question.marks)
            card.correct_count += 1
        else:
            correct = False
            awarded = float(question.negative)
            card.wrong_count += 1

        card.total_score += awarded
        bucket = subject_bucket(question.subject)
        if bucket:
            setattr(card, bucket, getattr(card, bucket) + awarded)

        answers.append(GradedAnswer(
            question_id=question.id,
            selected_option=selected,
            is_correct=correct,
            marks_awarded=awarded,
            time_taken=time_taken or 0,
        ))
    card.answers = answers
    return card
