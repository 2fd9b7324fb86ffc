# barberqueue/config.py

import os
import warnings
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(dotenv_path=BASE_DIR / ".env")


def _clean_env(value):
    return (value or "").strip().strip("'").strip('"')


ENVIRONMENT = _clean_env(os.getenv("ENVIRONMENT")) or "development"
LOG_LEVEL = (_clean_env(os.getenv("LOG_LEVEL")) or "INFO").upper()

DATABASE_URL = _clean_env(os.getenv("DATABASE_URL")) or "sqlite:///./barberqueue.db"

# JWT
SECRET_KEY = _clean_env(os.getenv("SECRET_KEY"))
if not SECRET_KEY:
    warnings.warn("SECRET_KEY not set, using an insecure development key", RuntimeWarning, stacklevel=2)
    SECRET_KEY = "change-me-later"
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "480"))

# Queue
AVERAGE_SERVICE_MINUTES = int(os.getenv("AVERAGE_SERVICE_MINUTES", "15"))
DEFAULT_SEARCH_RADIUS_KM = float(os.getenv("DEFAULT_SEARCH_RADIUS_KM", "10"))

# Razorpay
RAZORPAY_KEY_ID = _clean_env(os.getenv("RAZORPAY_KEY_ID"))
RAZORPAY_KEY_SECRET = _clean_env(os.getenv("RAZORPAY_KEY_SECRET"))
PAYMENT_CURRENCY = _clean_env(os.getenv("PAYMENT_CURRENCY")) or "INR"

CORS_ORIGINS = [
    o.strip()
    for o in os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000").split(",")
    if o.strip()
]
