from gpa_calculator.backend_logic import (
    CalculationResult,
    Course,
    GradeDetails,
    add_course,
    calculate_gpa,
    calculate_term_gpa,
    remove_course,
    resolve_grade,
    select_courses,
    update_course,
)

__version__ = "1.0.0"
