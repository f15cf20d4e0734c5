import pandas as pd
import pytest

from gpa_calculator.backend_logic import Course
from gpa_calculator.config import DEFAULT_CREDITS, GRADING_SCALE
from gpa_calculator.io_tables import chart_frame, courses_to_frame, frame_to_courses, scale_frame


class TestCoursesToFrame:

    def test_columns_and_index(self, term1_courses):
        df = courses_to_frame(term1_courses)
        assert list(df.columns) == ["Course", "Credits", "Score (%)", "Grade", "Points"]
        assert list(df.index) == [1, 2, 3]

    def test_derived_grade_columns(self, term1_courses):
        df = courses_to_frame(term1_courses)
        assert df.loc[1, "Grade"] == "A"
        assert df.loc[2, "Points"] == pytest.approx(3.3)
        assert df.loc[3, "Grade"] == "N/A"
        assert pd.isna(df.loc[3, "Score (%)"])

    def test_empty_list(self):
        df = courses_to_frame([])
        assert df.empty


class TestFrameToCourses:

    def test_unchanged_grid_round_trips(self, term1_courses):
        courses, rejected = frame_to_courses(courses_to_frame(term1_courses), term1_courses)
        assert courses == term1_courses
        assert rejected == []

    def test_valid_cell_edit(self, term1_courses):
        df = courses_to_frame(term1_courses)
        df.loc[3, "Score (%)"] = 64.0
        df.loc[1, "Course"] = "Calculus"
        courses, rejected = frame_to_courses(df, term1_courses)
        assert courses[2].score == 64.0
        assert courses[0].name == "Calculus"
        assert rejected == []

    def test_out_of_range_edit_keeps_previous_value(self, term1_courses):
        df = courses_to_frame(term1_courses)
        df.loc[1, "Score (%)"] = 150.0
        df.loc[2, "Credits"] = -3.0
        courses, rejected = frame_to_courses(df, term1_courses)
        assert courses == term1_courses
        assert len(rejected) == 2
        assert rejected[0].startswith("Mathematics (1)")

    def test_deleted_row_removes_course(self, term1_courses):
        df = courses_to_frame(term1_courses).drop(index=2)
        courses, _ = frame_to_courses(df, term1_courses)
        assert [c.id for c in courses] == [1, 3]

    def test_added_row_becomes_new_course(self, term1_courses):
        df = courses_to_frame(term1_courses)
        new_row = pd.DataFrame(
            [{"Course": "Statics", "Credits": None, "Score (%)": 81.0}],
            index=pd.Index([None], name="id"),
        )
        df = pd.concat([df, new_row])
        courses, rejected = frame_to_courses(df, term1_courses)
        assert rejected == []
        assert len(courses) == 4
        new = courses[-1]
        assert new.id == 4
        assert new.name == "Statics"
        assert new.credits == DEFAULT_CREDITS
        assert new.score == 81.0

    def test_does_not_mutate_previous(self, term1_courses):
        before = list(term1_courses)
        df = courses_to_frame(term1_courses)
        df.loc[1, "Score (%)"] = 50.0
        frame_to_courses(df, term1_courses)
        assert term1_courses == before


class TestChartFrame:

    def test_only_counted_courses(self, term1_courses):
        courses = term1_courses + [Course(id=9, name="Zero", credits=0, score=70)]
        df = chart_frame(courses)
        assert list(df["name"]) == ["Mathematics (1)", "Physics (1)"]
        assert list(df["grade"]) == ["A", "B+"]
        assert list(df["fill"]) == ["#10B981", "#FBBF24"]

    def test_nothing_to_chart(self):
        df = chart_frame([Course(id=1, name="a", credits=3)])
        assert df.empty
        assert list(df.columns) == ["name", "score", "grade", "points", "fill"]


def test_scale_frame_ranges():
    df = scale_frame()
    assert len(df) == len(GRADING_SCALE)
    assert df.iloc[0]["Range"] == "97 - 100"
    assert df.iloc[1]["Range"] == "93 - 96.99"
    assert df.iloc[-1]["Grade"] == "F"
    assert df.iloc[-1]["Range"] == "0 - 59.99"
