import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timeclock_db"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

# Payroll
DEFAULT_HOURLY_RATE = os.getenv("DEFAULT_HOURLY_RATE", "15.00")
OVERTIME_MULTIPLIER = os.getenv("OVERTIME_MULTIPLIER", "1.5")
WEEKLY_OVERTIME_THRESHOLD_MINUTES = int(os.getenv("WEEKLY_OVERTIME_THRESHOLD_MINUTES", "2400"))

# Standard workday used as the expected window for anomaly checks
EXPECTED_CLOCK_IN = os.getenv("EXPECTED_CLOCK_IN", "08:00")
EXPECTED_CLOCK_OUT = os.getenv("EXPECTED_CLOCK_OUT", "17:00")
LATE_AFTER = os.getenv("LATE_AFTER", "09:15")

ANOMALY_SERVICE_URL = os.getenv("ANOMALY_SERVICE_URL", "http://localhost:8400")
ANOMALY_SERVICE_TIMEOUT = float(os.getenv("ANOMALY_SERVICE_TIMEOUT", "10"))
ANOMALY_MODEL = os.getenv("ANOMALY_MODEL", "attendance-anomaly")
