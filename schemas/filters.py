"""
View state for the list pages.

Everything a list page needs to re-render itself lives in these models and is
rebuilt from the query string on every request; nothing is kept server side.
"""

from typing import Optional
from urllib.parse import urlencode

from pydantic import BaseModel, field_validator


class _FilterModel(BaseModel):
    @field_validator("*", mode="before")
    @classmethod
    def none_to_blank(cls, v):
        return "" if v is None else str(v).strip()

    @property
    def is_active(self) -> bool:
        return any(getattr(self, name) for name in type(self).model_fields)

    def cleared(self):
        return type(self)()


class ResultFilters(_FilterModel):
    student_id: str = ""
    department: str = ""
    year: str = ""


class ShortCourseFilters(_FilterModel):
    year: str = ""
    quarter: str = ""
    department: str = ""
    course: str = ""


class ListState(BaseModel):
    page: int = 1
    search: str = ""
    filters: Optional[_FilterModel] = None
    filter_modal_open: bool = False

    def query_string(self, **overrides) -> str:
        """Query string reproducing this state, used for pagination links."""
        params = {}
        if self.filters is not None:
            params.update(self.filters.model_dump())
        params["search"] = self.search
        params["page"] = self.page
        params.update(overrides)
        return urlencode({k: v for k, v in params.items() if v not in ("", None)})
