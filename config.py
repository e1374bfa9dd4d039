import os
from dotenv import load_dotenv

# .env next to the app wins over nothing, but real env vars still win over .env
env_path = os.path.join(os.path.dirname(os.path.abspath(__file__)), ".env")
load_dotenv(dotenv_path=env_path)

# --- DATABASE ---
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./dashboard.db")
if DATABASE_URL.startswith("postgres://"):
    DATABASE_URL = DATABASE_URL.replace("postgres://", "postgresql://", 1)

# --- AUTH ---
SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "admin")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin")
SESSION_MAX_AGE = 86400  # 24 hours

# --- UI ---
SCHOOL_NAME = os.getenv("SCHOOL_NAME", "Institution Admin")
ITEMS_PER_PAGE = int(os.getenv("ITEMS_PER_PAGE", "10"))
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",") if o.strip()]

# --- MEDIA ---
CLOUDINARY_URL = os.getenv("CLOUDINARY_URL")
CLOUDINARY_FOLDER = os.getenv("CLOUDINARY_FOLDER", "dashboard_students")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
