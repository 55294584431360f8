import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:////var/lib/officeroute/officeroute.db")

CLOUD_URL = os.getenv("CLOUD_URL", "")
SYNC_PROVIDER_DOMAIN = os.getenv("SYNC_PROVIDER_DOMAIN", "script.google.com")
SYNC_TIMEOUT_SECONDS = float(os.getenv("SYNC_TIMEOUT_SECONDS", "30"))
POSITION_TIMEOUT_SECONDS = float(os.getenv("POSITION_TIMEOUT_SECONDS", "10"))
AUTO_SYNC = bool(int(os.getenv("AUTO_SYNC", "1")))

LATE_AFTER_HOUR = int(os.getenv("LATE_AFTER_HOUR", "9"))

GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")

BOOTSTRAP_ADMIN_PASSWORD = os.getenv("BOOTSTRAP_ADMIN_PASSWORD", "please-change-me")
BOOTSTRAP_EMPLOYEE_PASSWORD = os.getenv("BOOTSTRAP_EMPLOYEE_PASSWORD", "please-change-me")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
