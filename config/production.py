import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "leave_db"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

MONTHLY_LEAVE_QUOTA = int(os.getenv("MONTHLY_LEAVE_QUOTA", "12"))
ALPHA_DEDUCTION_RATE = int(os.getenv("ALPHA_DEDUCTION_RATE", "100000"))

UPLOAD_DIR = os.getenv("UPLOAD_DIR", "/var/lib/leave-system/sick-letters")
MAX_ATTACHMENT_MB = int(os.getenv("MAX_ATTACHMENT_MB", "5"))
