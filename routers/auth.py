import logging
import secrets
from typing import Optional

from fastapi import APIRouter, Form, Request, responses
from itsdangerous import BadData, URLSafeSerializer

from config import ADMIN_PASSWORD, ADMIN_USERNAME, SECRET_KEY, SESSION_MAX_AGE
from templating import templates

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])

COOKIE_NAME = "user_token"
serializer = URLSafeSerializer(SECRET_KEY, salt="dashboard-session")

# Paths reachable without a session
PUBLIC_PATHS = ["/auth/login"]


def make_token(username: str, role: str) -> str:
    return serializer.dumps({"username": username, "role": role})


def read_session(request: Request) -> Optional[dict]:
    token = request.cookies.get(COOKIE_NAME)
    if not token:
        return None
    try:
        return serializer.loads(token)
    except BadData:
        logger.warning("Rejected tampered session cookie from %s", request.client.host if request.client else "?")
        return None


def is_public(path: str) -> bool:
    return path in PUBLIC_PATHS


# 1. Login Page (GET)
@router.get("/login")
def login_page(request: Request):
    return templates.TemplateResponse(request, "login.html", {"error": None})


# 2. Login Process (POST)
@router.post("/login")
def process_login(request: Request, username: str = Form(""), password: str = Form("")):
    valid = secrets.compare_digest(username, ADMIN_USERNAME) and secrets.compare_digest(password, ADMIN_PASSWORD)
    if not valid:
        logger.info("Failed login for '%s'", username)
        return templates.TemplateResponse(
            request, "login.html", {"error": "Invalid username or password"}, status_code=401
        )

    response = responses.RedirectResponse(url="/", status_code=303)
    response.set_cookie(key=COOKIE_NAME, value=make_token(username, "admin"), max_age=SESSION_MAX_AGE, httponly=True)
    return response


# 3. Logout (GET)
@router.get("/logout")
def logout():
    response = responses.RedirectResponse(url="/auth/login", status_code=302)
    response.delete_cookie(COOKIE_NAME)
    return response
