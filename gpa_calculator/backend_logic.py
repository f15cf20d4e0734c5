import logging
from dataclasses import dataclass, replace
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import List, NamedTuple, Optional, Sequence

import numpy as np

from gpa_calculator.config import (
    DEFAULT_COURSE_NAME,
    DEFAULT_CREDITS,
    FAIL_COLOR,
    FALLBACK_GRADE,
    GPA_PLACES,
    GRADE_COLOR_BANDS,
    GRADING_SCALE,
    MAX_GRADE_POINT,
    MAX_SCORE,
    MIN_SCORE,
    NO_SCORE_COLOR,
    NOT_AVAILABLE,
    POINTS_PLACES,
    GradePoint,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Course:
    id: int
    name: str
    credits: float
    score: Optional[float] = None


class GradeDetails(NamedTuple):
    grade: str
    points: float


@dataclass(frozen=True)
class CalculationResult:
    gpa: float
    total_credits: float
    total_points: float
    max_points: float


class RejectedEdit(ValueError):
    """An edit whose value is outside the allowed range; the prior value is kept."""


# ------------------------
# Core logic
# ------------------------
def round_half_up(x: float, places: int) -> float:
    if not np.isfinite(x):
        return x
    value = Decimal(str(x))
    with localcontext() as ctx:
        # quantize needs room for every integer digit plus the decimals
        ctx.prec = max(ctx.prec, value.adjusted() + places + 2)
        return float(value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP))


def _is_missing(score) -> bool:
    if score is None:
        return True
    try:
        return bool(np.isnan(score))
    except TypeError:
        return False


def resolve_grade(score: Optional[float],
                  scale: Sequence[GradePoint] = GRADING_SCALE) -> GradeDetails:
    """
    Map a percentage score to (letter grade, grade points).

    scale must be ordered by descending min_percentage; the first entry the
    score meets or exceeds wins. Missing or out-of-range scores give N/A.
    """
    if _is_missing(score) or score < MIN_SCORE or score > MAX_SCORE:
        return GradeDetails(NOT_AVAILABLE, 0.0)

    for entry in scale:
        if score >= entry.min_percentage:
            return GradeDetails(entry.grade, entry.points)

    # only reachable for a scale without a 0% floor
    return GradeDetails(FALLBACK_GRADE, 0.0)


def grade_color(score: Optional[float]) -> str:
    if _is_missing(score):
        return NO_SCORE_COLOR
    for lower, color in GRADE_COLOR_BANDS:
        if score >= lower:
            return color
    return FAIL_COLOR


def is_counted(course: Course) -> bool:
    """Courses without a score or with non-positive credits are left out of every total."""
    return not _is_missing(course.score) and course.credits is not None and course.credits > 0


def calculate_gpa(courses: Sequence[Course]) -> CalculationResult:
    counted = [c for c in courses if is_counted(c)]
    if not counted:
        return CalculationResult(gpa=0.0, total_credits=0.0, total_points=0.0, max_points=0.0)

    points = np.array([resolve_grade(c.score).points for c in counted], dtype=float)
    credits = np.array([c.credits for c in counted], dtype=float)

    total_credits = float(credits.sum())
    with np.errstate(over="ignore", invalid="ignore"):
        total_points = float(np.dot(points, credits))
    gpa = total_points / total_credits if total_credits > 0 else 0.0
    max_points = total_credits * MAX_GRADE_POINT

    return CalculationResult(
        gpa=round_half_up(gpa, GPA_PLACES),
        total_credits=total_credits,
        total_points=round_half_up(total_points, POINTS_PLACES),
        max_points=round_half_up(max_points, POINTS_PLACES),
    )


# ------------------------
# Term views
# ------------------------
TERM_LABELS = {
    "term1": "First term",
    "term2": "Second term",
    "combined": "Combined",
}
TERMS = tuple(TERM_LABELS)
INITIAL_TERM = "term1"


def select_courses(term: str,
                   term1: Sequence[Course],
                   term2: Sequence[Course]) -> List[Course]:
    if term == "term1":
        return list(term1)
    if term == "term2":
        return list(term2)
    if term == "combined":
        return list(term1) + list(term2)
    raise ValueError(f"Unknown term {term!r}. Expected one of: {', '.join(TERMS)}.")


def calculate_term_gpa(term: str,
                       term1: Sequence[Course],
                       term2: Sequence[Course]) -> CalculationResult:
    return calculate_gpa(select_courses(term, term1, term2))


# ------------------------
# Course list edits
# ------------------------
EDITABLE_FIELDS = ("name", "credits", "score")


def courses_from_records(records) -> List[Course]:
    return [
        Course(
            id=int(r["id"]),
            name=str(r["name"]),
            credits=float(r.get("credits", DEFAULT_CREDITS)),
            score=r.get("score"),
        )
        for r in records
    ]


def next_course_id(courses: Sequence[Course]) -> int:
    return max((c.id for c in courses), default=0) + 1


def add_course(courses: Sequence[Course],
               name: str = DEFAULT_COURSE_NAME,
               credits: float = DEFAULT_CREDITS) -> List[Course]:
    new_course = Course(id=next_course_id(courses), name=name, credits=credits, score=None)
    return list(courses) + [new_course]


def remove_course(courses: Sequence[Course], course_id: int) -> List[Course]:
    return [c for c in courses if c.id != course_id]


def _to_number(value) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if value == "":
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise RejectedEdit(f"Not a number: {value!r}")
    if np.isnan(number):
        return None
    if not np.isfinite(number):
        raise RejectedEdit(f"Not a finite number: {value!r}")
    return number


def validate_edit(field: str, value):
    """
    Return the value to store for field, or raise RejectedEdit.

    Raises a plain ValueError for a field that cannot be edited.
    """
    if field not in EDITABLE_FIELDS:
        raise ValueError(f"Unknown course field {field!r}. Expected one of: {', '.join(EDITABLE_FIELDS)}.")

    if field == "name":
        return "" if value is None else str(value)

    number = _to_number(value)
    if field == "score":
        if number is not None and (number < MIN_SCORE or number > MAX_SCORE):
            raise RejectedEdit(f"Score must be between {MIN_SCORE:g} and {MAX_SCORE:g} (got {number:g}).")
        return number

    # credits: an emptied cell counts as zero credits
    if number is None:
        return 0.0
    if number < 0:
        raise RejectedEdit(f"Credits cannot be negative (got {number:g}).")
    return number


def update_course(courses: Sequence[Course], course_id: int, field: str, value) -> List[Course]:
    try:
        new_value = validate_edit(field, value)
    except RejectedEdit as e:
        logger.debug("Rejected edit of %s on course %s: %s", field, course_id, e)
        return list(courses)

    return [replace(c, **{field: new_value}) if c.id == course_id else c for c in courses]
