import os
from dataclasses import dataclass
from typing import List, Tuple


@dataclass(frozen=True)
class GradePoint:
    grade: str
    points: float
    min_percentage: float


# ------------------------
# Grading scale
# ------------------------

# Ordered by descending min_percentage; must end with a 0% floor.
GRADING_SCALE: Tuple[GradePoint, ...] = (
    GradePoint("A+", 4.0, 97),
    GradePoint("A", 4.0, 93),
    GradePoint("A-", 3.7, 89),
    GradePoint("B+", 3.3, 84),
    GradePoint("B", 3.0, 80),
    GradePoint("B-", 2.7, 76),
    GradePoint("C+", 2.3, 73),
    GradePoint("C", 2.0, 70),
    GradePoint("C-", 1.7, 67),
    GradePoint("D+", 1.3, 64),
    GradePoint("D", 1.0, 60),
    GradePoint("F", 0.0, 0),
)

MAX_GRADE_POINT = 4.0
MIN_SCORE = 0.0
MAX_SCORE = 100.0

NOT_AVAILABLE = "N/A"
FALLBACK_GRADE = "F"

GPA_PLACES = 3
POINTS_PLACES = 2

DEFAULT_COURSE_NAME = "New course"
DEFAULT_CREDITS = 3.0

# ------------------------
# Chart colours
# ------------------------

NO_SCORE_COLOR = "#9ca3af"

# (lower bound, colour), checked top-down
GRADE_COLOR_BANDS: List[Tuple[float, str]] = [
    (93, "#10B981"),  # A+, A
    (89, "#34D399"),  # A-
    (84, "#FBBF24"),  # B+
    (80, "#FCD34D"),  # B
    (76, "#FB923C"),  # B-
    (70, "#F59E0B"),  # C+, C
    (60, "#F87171"),  # C-, D+, D
]
FAIL_COLOR = "#EF4444"

# ------------------------
# Seed data (first-year engineering curriculum)
# ------------------------

INITIAL_TERM_1_COURSES = [
    {"id": 1, "name": "Mathematics (1)", "credits": 3},
    {"id": 2, "name": "Physics (1)", "credits": 3},
    {"id": 3, "name": "Mechanics (1)", "credits": 3},
    {"id": 4, "name": "Engineering Chemistry", "credits": 3},
    {"id": 5, "name": "Engineering Drawing & Projection", "credits": 3},
    {"id": 6, "name": "Technical English", "credits": 2},
]

INITIAL_TERM_2_COURSES = [
    {"id": 101, "name": "Mathematics (2)", "credits": 3},
    {"id": 102, "name": "Physics (2)", "credits": 3},
    {"id": 103, "name": "Mechanics (2)", "credits": 3},
    {"id": 104, "name": "Engineering Chemistry", "credits": 3},
    {"id": 105, "name": "Computers & Programming", "credits": 3},
    {"id": 106, "name": "History of Engineering", "credits": 2},
    {"id": 107, "name": "Human Rights", "credits": 2},
]

# ------------------------
# Page
# ------------------------

PAGE_TITLE = "GPA Calculator | Faculty of Engineering"
PAGE_ICON = "🎓"
PAGE_LAYOUT = "wide"

LOG_LEVEL = os.environ.get("GPA_LOG_LEVEL", "WARNING").upper()
