import os
import tempfile

SECRET_KEY = "test-secret"

DATABASE_URL = os.getenv("DATABASE_URL") or "sqlite:///" + os.path.join(tempfile.mkdtemp(prefix="officeroute-test-"), "test.db")

CLOUD_URL = ""
SYNC_PROVIDER_DOMAIN = "script.google.com"
SYNC_TIMEOUT_SECONDS = 5.0
POSITION_TIMEOUT_SECONDS = 10.0
AUTO_SYNC = False

LATE_AFTER_HOUR = 9

GEMINI_API_KEY = None
GEMINI_MODEL = "gemini-2.5-flash"

BOOTSTRAP_ADMIN_PASSWORD = "admin123"
BOOTSTRAP_EMPLOYEE_PASSWORD = "staff123"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
