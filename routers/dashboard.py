import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database import get_db
from models.results import LongCourseResult
from models.students import LongCourseStudent, ShortCourseStudent
from services import gateway
from services.aggregation import aggregate_results
from templating import templates

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Dashboard"])


def count_rows(db: Session, model):
    try:
        return db.query(func.count(model.id)).scalar() or 0
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Dashboard count error for %s: %s", model.__tablename__, e)
        return None


@router.get("/")
def dashboard_view(request: Request, db: Session = Depends(get_db)):
    # 1. Basic Counts (None renders as "-")
    long_count = count_rows(db, LongCourseStudent)
    short_count = count_rows(db, ShortCourseStudent)
    result_count = count_rows(db, LongCourseResult)

    # 2. Most recent students with results
    recent = gateway.select_all(db, LongCourseResult, order_by=LongCourseResult.id.desc())
    recent_results = aggregate_results(recent.data)[:5]

    return templates.TemplateResponse(request, "dashboard.html", {
        "long_count": long_count,
        "short_count": short_count,
        "result_count": result_count,
        "recent_results": recent_results,
        "fetch_ok": recent.ok,
    })
