from typing import Dict

from pydantic import ValidationError
from pydantic_core import PydanticCustomError


def required_error(message: str) -> PydanticCustomError:
    return PydanticCustomError("required", message)


def is_blank(value) -> bool:
    return value is None or str(value).strip() == ""


def field_errors(exc: ValidationError) -> Dict[str, str]:
    """
    Flatten a ValidationError into {"courses.0.score": "message"}.
    Only the first message per field is kept, the way a form shows it.
    """
    errors: Dict[str, str] = {}
    for err in exc.errors():
        key = ".".join(str(part) for part in err["loc"]) or "__root__"
        errors.setdefault(key, err["msg"])
    return errors
