import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from config import CORS_ORIGINS, LOG_LEVEL
from database import Base, engine

# --- IMPORT ROUTERS ---
from routers import auth, bulk_import, dashboard, results, students

# --- IMPORT MODELS (registers the tables on Base.metadata) ---
from models.results import LongCourseResult  # noqa: F401
from models.students import LongCourseStudent, ShortCourseStudent  # noqa: F401

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[logging.StreamHandler()],
)
logger = logging.getLogger(__name__)

# --- CREATE DATABASE TABLES ---
Base.metadata.create_all(bind=engine)

app = FastAPI(title="Institution Admin Dashboard")


# ==========================================
#   SESSION MIDDLEWARE
# ==========================================
@app.middleware("http")
async def auth_middleware(request: Request, call_next):
    path = request.url.path
    session = auth.read_session(request)
    request.state.role = session.get("role") if session else None

    if session is None and not auth.is_public(path):
        if "/api/" in path or path.startswith("/bulk-import"):
            return JSONResponse(status_code=401, content={"detail": "Not authenticated"})
        return RedirectResponse(url="/auth/login")

    return await call_next(request)


# ==========================================
#   CORS MIDDLEWARE
# ==========================================
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- REGISTER ROUTERS ---
app.include_router(auth.router)
app.include_router(dashboard.router)
app.include_router(students.router)
app.include_router(results.router)
app.include_router(bulk_import.router)

logger.info("Dashboard ready (%d routes)", len(app.routes))


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
