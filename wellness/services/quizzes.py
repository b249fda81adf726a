"""
Quiz scoring.

A quiz stores its questions as ``{"question", "options", "scores"}``
entries; answering a question means picking an option index, and the
option's score counts towards the total.  ``scoring_rules`` maps each
result category to an inclusive ``[min, max]`` band and the message
shown to the employee.  Rules are checked in declared order and the
first band containing the total wins.
"""
import logging
import math
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from wellness.models import Quiz, QuizResult, User
from wellness.services.audit import log_action
from wellness.services.formatting import format_category, iso

logger = logging.getLogger(__name__)

UNAVAILABLE_MESSAGE = 'Result unavailable'


class QuizMisconfigured(Exception):
    """A stored quiz carries scores that cannot be summed."""


@dataclass(frozen=True)
class QuizOutcome:
    score: float
    category: Optional[str]
    message: str


def _number(value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError('Scores must be numbers')
    if isinstance(value, (int, float)):
        return value
    return float(value)


def lookup_rule(scoring_rules: dict, total: float) -> tuple[Optional[str], str]:
    """Return ``(category, message)`` for the first band holding ``total``."""
    for category, rule in (scoring_rules or {}).items():
        if not isinstance(rule, dict):
            continue
        try:
            low, high = _number(rule.get('min')), _number(rule.get('max'))
        except (TypeError, ValueError):
            logger.warning("skipping malformed scoring rule %r", category)
            continue
        if low <= total <= high:
            return category, rule.get('message') or ''
    return None, UNAVAILABLE_MESSAGE


def _tidy(value: float) -> float:
    return int(value) if float(value).is_integer() else value


def score_answers(questions: Sequence[dict], answers: Sequence[int]) -> float:
    """Sum the score of every chosen option.

    ``answers`` holds one option index per question, in order.  A
    non-numeric score stored on the quiz raises ``QuizMisconfigured``.
    """
    if len(answers) != len(questions):
        raise ValueError(f'Expected {len(questions)} answers, got {len(answers)}')
    total = 0
    for position, (question, choice) in enumerate(zip(questions, answers), start=1):
        scores = question.get('scores') or []
        if isinstance(choice, bool) or not isinstance(choice, int) or not 0 <= choice < len(scores):
            raise ValueError(f'Invalid option for question {position}')
        try:
            value = _number(scores[choice])
            if not math.isfinite(value):
                raise ValueError(value)
            total += value
        except (TypeError, ValueError):
            logger.error("quiz question %d option %d has a non-numeric score %r", position, choice, scores[choice])
            raise QuizMisconfigured('This quiz is misconfigured')
    return _tidy(total)


def evaluate(quiz: Quiz, answers: Sequence[int]) -> QuizOutcome:
    total = score_answers(quiz.questions or [], answers)
    category, message = lookup_rule(quiz.scoring_rules, total)
    return QuizOutcome(score=total, category=category, message=message)


def question_count(quiz: Quiz) -> int:
    return len(quiz.questions or [])


def serialize_quiz(q: Quiz, *, with_questions: bool = False) -> dict:
    data = {
        'id': q.id,
        'title': q.title,
        'description': q.description,
        'category': q.category,
        'categoryLabel': format_category(q.category),
        'questionCount': question_count(q),
        'isActive': q.is_active,
        'createdAt': iso(q.created_at),
    }
    if with_questions:
        # scores stay server side so the outcome cannot be steered
        data['questions'] = [
            {'question': item.get('question', ''), 'options': list(item.get('options') or [])}
            for item in (q.questions or [])
        ]
    return data


def serialize_result(r: QuizResult) -> dict:
    return {
        'id': r.id,
        'quizId': r.quiz_id,
        'quizTitle': r.quiz.title,
        'quizCategory': r.quiz.category,
        'score': _tidy(r.score),
        'resultCategory': r.result_category,
        'recommendations': r.recommendations,
        'takenAt': iso(r.taken_at),
    }


def list_active() -> list[dict]:
    return [serialize_quiz(q) for q in Quiz.objects.filter(is_active=True).order_by('-created_at', '-id')]


def submit(user: User, quiz_id: int, answers: Sequence[int]) -> tuple[QuizResult, QuizOutcome]:
    quiz = Quiz.objects.filter(id=quiz_id).first()
    if quiz is None:
        raise LookupError('Quiz not found')
    if not quiz.is_active:
        raise ValueError('This quiz is no longer available')
    outcome = evaluate(quiz, answers)
    result = QuizResult.objects.create(
        user=user,
        quiz=quiz,
        answers=list(answers),
        score=outcome.score,
        result_category=outcome.category,
        recommendations=outcome.message,
    )
    log_action(user=user, action='quiz_submit', object_type='quiz', object_id=quiz.id,
               detail={'score': outcome.score, 'category': outcome.category})
    return result, outcome


def list_results(user: User) -> list[dict]:
    qs = QuizResult.objects.filter(user=user).select_related('quiz').order_by('-taken_at', '-id')
    return [serialize_result(r) for r in qs]
