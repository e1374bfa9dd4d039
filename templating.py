import os

from fastapi.templating import Jinja2Templates

from config import SCHOOL_NAME

TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "templates")

templates = Jinja2Templates(directory=TEMPLATES_DIR)


def _date_string(value):
    # "Mon Jan 15 2024", the same shape the list tables have always shown
    return value.strftime("%a %b %d %Y") if value else "-"


def _score(value):
    return f"{value:.2f}".rstrip("0").rstrip(".") if value is not None else "-"


templates.env.globals["school_name"] = SCHOOL_NAME
templates.env.filters["date_string"] = _date_string
templates.env.filters["score"] = _score
