import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# Any SQLAlchemy URL; the default is an embedded SQLite file.
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///instance/officeroute.db")

# Remote sync endpoint (Apps Script web app). Can also be set at runtime.
CLOUD_URL = os.getenv("CLOUD_URL", "")
SYNC_PROVIDER_DOMAIN = os.getenv("SYNC_PROVIDER_DOMAIN", "script.google.com")
SYNC_TIMEOUT_SECONDS = float(os.getenv("SYNC_TIMEOUT_SECONDS", "30"))
POSITION_TIMEOUT_SECONDS = float(os.getenv("POSITION_TIMEOUT_SECONDS", "10"))
AUTO_SYNC = bool(int(os.getenv("AUTO_SYNC", "1")))

LATE_AFTER_HOUR = int(os.getenv("LATE_AFTER_HOUR", "9"))

GEMINI_API_KEY = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")

# Passwords of the two users seeded on first run
BOOTSTRAP_ADMIN_PASSWORD = os.getenv("BOOTSTRAP_ADMIN_PASSWORD", "admin123")
BOOTSTRAP_EMPLOYEE_PASSWORD = os.getenv("BOOTSTRAP_EMPLOYEE_PASSWORD", "staff123")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
