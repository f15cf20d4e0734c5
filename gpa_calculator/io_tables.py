import logging
from typing import List, Sequence, Tuple

import pandas as pd

from gpa_calculator.backend_logic import (
    Course,
    RejectedEdit,
    add_course,
    grade_color,
    is_counted,
    remove_course,
    resolve_grade,
    update_course,
    validate_edit,
)
from gpa_calculator.config import GRADING_SCALE, MAX_SCORE, GradePoint

logger = logging.getLogger(__name__)

# ------------------------
# DataFrame helpers (UI-side)
# ------------------------

COLUMN_FIELDS = {
    "Course": "name",
    "Credits": "credits",
    "Score (%)": "score",
}
DERIVED_COLUMNS = ["Grade", "Points"]


def courses_to_frame(courses: Sequence[Course]) -> pd.DataFrame:
    rows = []
    for c in courses:
        details = resolve_grade(c.score)
        rows.append({
            "Course": c.name,
            "Credits": c.credits,
            "Score (%)": c.score,
            "Grade": details.grade,
            "Points": details.points,
        })
    df = pd.DataFrame(rows, columns=list(COLUMN_FIELDS) + DERIVED_COLUMNS,
                      index=pd.Index([c.id for c in courses], name="id"))
    df["Credits"] = df["Credits"].astype(float)
    df["Score (%)"] = df["Score (%)"].astype(float)
    return df


def _row_id(index_value):
    if index_value is None or pd.isna(index_value):
        return None
    try:
        return int(index_value)
    except (TypeError, ValueError):
        return None


def _is_blank(value) -> bool:
    if isinstance(value, str):
        return value.strip() == ""
    return value is None or pd.isna(value)


def frame_to_courses(df: pd.DataFrame, previous: Sequence[Course]) -> Tuple[List[Course], List[str]]:
    """
    Read an edited grid back into a course list.

    Every changed cell goes through the same validation as update_course, so
    out-of-range values keep the previous value. Returns the new list and
    the messages of any rejected edits.
    """
    courses = list(previous)
    known_ids = {c.id for c in previous}
    seen_ids = set()
    rejected = []

    for index_value, row in df.iterrows():
        course_id = _row_id(index_value)
        is_new = course_id is None or course_id not in known_ids or course_id in seen_ids
        if is_new:
            courses = add_course(courses)
            course_id = courses[-1].id
        seen_ids.add(course_id)
        current = next(c for c in courses if c.id == course_id)

        for column, field in COLUMN_FIELDS.items():
            if column not in df.columns:
                continue
            value = row[column]
            # blank cells on a fresh row keep the new-course defaults
            if is_new and _is_blank(value):
                continue
            try:
                new_value = validate_edit(field, value)
            except RejectedEdit as e:
                rejected.append(f"{current.name}: {e}")
                continue
            if new_value != getattr(current, field):
                courses = update_course(courses, course_id, field, new_value)

    for course_id in known_ids - seen_ids:
        courses = remove_course(courses, course_id)

    if rejected:
        logger.debug("Grid edits rejected: %s", rejected)
    return courses, rejected


def chart_frame(courses: Sequence[Course]) -> pd.DataFrame:
    rows = []
    for c in courses:
        if not is_counted(c):
            continue
        details = resolve_grade(c.score)
        rows.append({
            "name": c.name,
            "score": float(c.score),
            "grade": details.grade,
            "points": details.points,
            "fill": grade_color(c.score),
        })
    return pd.DataFrame(rows, columns=["name", "score", "grade", "points", "fill"])


def scale_frame(scale: Sequence[GradePoint] = GRADING_SCALE) -> pd.DataFrame:
    rows = []
    upper = MAX_SCORE
    for i, entry in enumerate(scale):
        if i == 0:
            range_label = f"{entry.min_percentage:g} - {upper:g}"
        else:
            range_label = f"{entry.min_percentage:g} - {upper - 0.01:g}"
        rows.append({"Grade": entry.grade, "Points": entry.points, "Range": range_label})
        upper = entry.min_percentage
    return pd.DataFrame(rows, columns=["Grade", "Points", "Range"])
