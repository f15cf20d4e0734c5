import pytest

from gpa_calculator.backend_logic import Course


@pytest.fixture
def term1_courses():
    return [
        Course(id=1, name="Mathematics (1)", credits=3, score=95),
        Course(id=2, name="Physics (1)", credits=3, score=85),
        Course(id=3, name="Technical English", credits=2, score=None),
    ]


@pytest.fixture
def term2_courses():
    return [
        Course(id=101, name="Mathematics (2)", credits=3, score=72),
        Course(id=102, name="Human Rights", credits=2, score=59),
    ]
