import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "leave_db_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

MONTHLY_LEAVE_QUOTA = 12
ALPHA_DEDUCTION_RATE = 100000

UPLOAD_DIR = os.getenv("UPLOAD_DIR", "/tmp/leave-system-test-uploads")
MAX_ATTACHMENT_MB = 5
