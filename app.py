import logging

import altair as alt
import streamlit as st

from gpa_calculator.backend_logic import (
    INITIAL_TERM,
    TERM_LABELS,
    TERMS,
    calculate_term_gpa,
    courses_from_records,
    select_courses,
)
from gpa_calculator.config import (
    INITIAL_TERM_1_COURSES,
    INITIAL_TERM_2_COURSES,
    LOG_LEVEL,
    MAX_SCORE,
    MIN_SCORE,
    PAGE_ICON,
    PAGE_LAYOUT,
    PAGE_TITLE,
)
from gpa_calculator.io_tables import chart_frame, courses_to_frame, frame_to_courses, scale_frame

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

# ------------------------
# Streamlit UI
# ------------------------

st.set_page_config(
    page_title=PAGE_TITLE,
    page_icon=PAGE_ICON,
    layout=PAGE_LAYOUT,
)

st.title("🎓 Faculty of Engineering GPA Calculator")
st.write(
    "Enter the credit hours and percentage score of each course. Every score is "
    "converted to a letter grade and grade points on a 4.0 scale, and the "
    "credit-weighted GPA is shown for each term or for both terms combined."
)

# ---- Session state (lives until the page is closed) ----
if "term1_courses" not in st.session_state:
    st.session_state["term1_courses"] = courses_from_records(INITIAL_TERM_1_COURSES)
if "term2_courses" not in st.session_state:
    st.session_state["term2_courses"] = courses_from_records(INITIAL_TERM_2_COURSES)
if "editor_version" not in st.session_state:
    st.session_state["editor_version"] = 0

active_term = st.radio(
    "View",
    TERMS,
    index=TERMS.index(INITIAL_TERM),
    format_func=lambda term: TERM_LABELS[term],
    horizontal=True,
    key="active_term",
)

COLUMN_CONFIG = {
    "Course": st.column_config.TextColumn("Course", required=True),
    "Credits": st.column_config.NumberColumn("Credits", min_value=0.0, step=1.0, format="%g"),
    "Score (%)": st.column_config.NumberColumn(
        "Score (%)", min_value=MIN_SCORE, max_value=MAX_SCORE, step=0.5, format="%g"
    ),
    "Grade": st.column_config.TextColumn("Grade", disabled=True),
    "Points": st.column_config.NumberColumn("Points", disabled=True, format="%.1f"),
}


def course_editor(state_key: str, read_only: bool = False):
    courses = st.session_state[state_key]
    edited_df = st.data_editor(
        courses_to_frame(courses),
        key=f"{state_key}_editor_{st.session_state['editor_version']}",
        num_rows="fixed" if read_only else "dynamic",
        disabled=read_only,
        hide_index=True,
        use_container_width=True,
        column_config=COLUMN_CONFIG,
    )
    if read_only:
        return

    updated, rejected = frame_to_courses(edited_df, courses)
    if rejected or updated != courses:
        st.session_state[state_key] = updated
        st.session_state["edit_warnings"] = rejected
        # a fresh widget key redraws the grid from the stored courses
        st.session_state["editor_version"] += 1
        st.rerun()


# ------------------------
# Course tables
# ------------------------

st.markdown("---")
for message in st.session_state.pop("edit_warnings", []):
    st.warning(f"Edit ignored - {message}")

if active_term == "term1":
    st.subheader(TERM_LABELS["term1"])
    course_editor("term1_courses")
elif active_term == "term2":
    st.subheader(TERM_LABELS["term2"])
    course_editor("term2_courses")
else:
    col_t1, col_t2 = st.columns(2)
    with col_t1:
        st.subheader(f"{TERM_LABELS['term1']} courses")
        course_editor("term1_courses", read_only=True)
    with col_t2:
        st.subheader(f"{TERM_LABELS['term2']} courses")
        course_editor("term2_courses", read_only=True)

term1_courses = st.session_state["term1_courses"]
term2_courses = st.session_state["term2_courses"]
result = calculate_term_gpa(active_term, term1_courses, term2_courses)
logger.debug("GPA for %s: %s", active_term, result)

# ------------------------
# Results
# ------------------------

st.markdown("---")
st.subheader(f"Result - {TERM_LABELS[active_term]}")

col1, col2, col3, col4 = st.columns(4)
with col1:
    st.metric("GPA", f"{result.gpa:.3f}")
with col2:
    st.metric("Total credit hours", f"{result.total_credits:g}")
with col3:
    st.metric("Total points", f"{result.total_points:.2f}")
with col4:
    st.metric("Maximum points", f"{result.max_points:.2f}")

# ------------------------
# Per-course chart
# ------------------------

st.subheader("Course performance")
chart_df = chart_frame(select_courses(active_term, term1_courses, term2_courses))

if chart_df.empty:
    st.info("Enter a score for at least one course to see the chart.")
else:
    chart = (
        alt.Chart(chart_df)
        .mark_bar()
        .encode(
            x=alt.X("name:N", title=None, sort=None, axis=alt.Axis(labelAngle=-45)),
            y=alt.Y("score:Q", title="Score (%)", scale=alt.Scale(domain=[MIN_SCORE, MAX_SCORE])),
            color=alt.Color("fill:N", scale=None),
            tooltip=[
                alt.Tooltip("name:N", title="Course"),
                alt.Tooltip("grade:N", title="Grade"),
                alt.Tooltip("score:Q", title="Score (%)"),
                alt.Tooltip("points:Q", title="Points", format=".2f"),
            ],
        )
        .properties(height=380)
    )
    st.altair_chart(chart, use_container_width=True)

with st.expander("Grading scale"):
    st.dataframe(scale_frame(), hide_index=True, use_container_width=True)


st.header("FAQ")

st.subheader("How is the GPA calculated?")
st.write(
    "Each course's grade points are multiplied by its credit hours. The GPA is the sum of "
    "those points divided by the total credit hours. Courses without a score or with zero "
    "credit hours are left out entirely."
)

st.subheader("How is the combined GPA calculated?")
st.write(
    "The combined view pools the courses of both terms and calculates a single GPA over all "
    "of them. It is not the average of the two term GPAs."
)

st.subheader("What data do you collect or store?")
st.write(
    "None. Courses and scores are kept only in your browser session "
    "and are cleared when you refresh or close the page."
)
