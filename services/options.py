# Select options for the student and result screens.

DEPARTMENT_OPTIONS = {
    "long": [
        "Computer Science",
        "Electrical Engineering",
        "Business Administration",
        "Mass Communication",
    ],
    "short": [
        "ICT",
        "Languages",
        "Vocational",
    ],
}

COURSE_OPTIONS = {
    # Long course
    "Computer Science": ["ND Computer Science", "HND Computer Science"],
    "Electrical Engineering": ["ND Electrical Engineering", "HND Electrical Engineering"],
    "Business Administration": ["ND Business Administration", "HND Business Administration"],
    "Mass Communication": ["ND Mass Communication", "HND Mass Communication"],
    # Short course
    "ICT": ["Computer Appreciation", "Web Design", "Data Analysis"],
    "Languages": ["French", "English Proficiency"],
    "Vocational": ["Fashion Design", "Catering", "Photography"],
}

QUARTER_OPTIONS = ["First", "Second", "Third", "Fourth"]


def departments_for(kind: str):
    return DEPARTMENT_OPTIONS.get(kind, [])


def courses_for(department: str):
    return COURSE_OPTIONS.get(department or "", [])
