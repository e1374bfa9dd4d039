def calculate_grade(score):
    if score >= 90: return "A"
    elif score >= 80: return "B"
    elif score >= 70: return "C"
    elif score >= 60: return "D"
    elif score >= 50: return "E"
    else: return "F"


def grade_or_blank(score) -> str:
    """Grade for a raw form value, or "" when it isn't a number."""
    try:
        return calculate_grade(float(score))
    except (TypeError, ValueError):
        return ""
