import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timeclock_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False

DEFAULT_HOURLY_RATE = "15.00"
OVERTIME_MULTIPLIER = "1.5"
WEEKLY_OVERTIME_THRESHOLD_MINUTES = 2400

EXPECTED_CLOCK_IN = "08:00"
EXPECTED_CLOCK_OUT = "17:00"
LATE_AFTER = "09:15"

ANOMALY_SERVICE_URL = "http://anomaly.test"
ANOMALY_SERVICE_TIMEOUT = 1.0
ANOMALY_MODEL = "attendance-anomaly"
