"""
QUESTIONS.PY - Builds one multiplication question per round
Picks two factors, makes two believable wrong answers and
spreads all three over the lanes in random order
"""

from dataclasses import dataclass
import numpy as np
from mathrace.Constants import LANE_COUNT, MIN_WRONG_SPREAD, WRONG_ANSWER_ATTEMPTS
from mathrace.errors import InvalidArgumentError, InvariantViolationError


@dataclass(frozen=True)
class Question:
    operand_a: int
    operand_b: int
    correct_answer: int

    def __str__(self):
        return f"{self.operand_a} × {self.operand_b} = ?"


@dataclass(frozen=True)
class Choice:
    value: int
    is_correct: bool
    lane: int


def _check_max_factor(max_factor):
    if isinstance(max_factor, bool) or not isinstance(max_factor, (int, np.integer)):
        raise InvalidArgumentError(f"max_factor must be an integer, got {max_factor!r}")
    if max_factor < 1:
        raise InvalidArgumentError(f"max_factor must be >= 1, got {max_factor}")


def wrong_answers(correct, max_factor, rng, count=LANE_COUNT - 1):
    """Distinct positive numbers close to the correct answer"""
    spread = max(MIN_WRONG_SPREAD, max_factor)
    wrongs = []
    for _ in range(WRONG_ANSWER_ATTEMPTS):
        delta = int(rng.integers(1, spread, endpoint=True))
        # Coin flip: above or below the real answer
        candidate = correct + delta if rng.integers(0, 2) == 0 else correct - delta
        if candidate > 0 and candidate != correct and candidate not in wrongs:
            wrongs.append(candidate)
            if len(wrongs) == count:
                return wrongs
    raise InvariantViolationError(
        f"no {count} wrong answers for {correct} after {WRONG_ANSWER_ATTEMPTS} draws"
    )


def generate_round(max_factor, rng=None):
    """Returns (Question, [Choice x3]) - choice index == lane"""
    _check_max_factor(max_factor)
    max_factor = int(max_factor)
    if rng is None:
        rng = np.random.default_rng()

    a = int(rng.integers(1, max_factor, endpoint=True))
    b = int(rng.integers(1, max_factor, endpoint=True))
    question = Question(a, b, a * b)

    values = [question.correct_answer] + wrong_answers(question.correct_answer, max_factor, rng)
    order = rng.permutation(len(values))
    choices = [
        Choice(values[idx], values[idx] == question.correct_answer, lane)
        for lane, idx in enumerate(order)
    ]
    return question, choices
