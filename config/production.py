import os

JWT_SECRET = os.getenv("JWT_SECRET")
DATABASE_URL = os.getenv("DATABASE_URL")

PORT = int(os.getenv("PORT", "5000"))
UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads")
TOKEN_TTL_SECONDS = int(os.getenv("TOKEN_TTL_SECONDS", "3600"))
MAX_CONTENT_LENGTH = int(os.getenv("MAX_CONTENT_LENGTH", str(10 * 1024 * 1024)))

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
ENABLE_LEGACY_ROUTES = bool(int(os.getenv("ENABLE_LEGACY_ROUTES", "0")))
