import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./esports_hub.db")

# Auth
JWT_SECRET = os.getenv("JWT_SECRET", "change-me-in-production")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440"))
RESET_TOKEN_EXPIRE_MINUTES = int(os.getenv("RESET_TOKEN_EXPIRE_MINUTES", "30"))

# Uploads
UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads")
PUBLIC_BASE_URL = os.getenv("PUBLIC_BASE_URL", "http://localhost:8000")
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(5 * 1024 * 1024)))

# Frontend origins (comma separated)
CORS_ORIGINS = [
    o.strip()
    for o in os.getenv("CORS_ORIGINS", "http://localhost:9002,http://localhost:3000").split(",")
    if o.strip()
]

# Payment gateway (RupantorPay). Admin-managed settings take precedence.
RUPANTORPAY_ACCESS_TOKEN = os.getenv("RUPANTORPAY_ACCESS_TOKEN", "")
RUPANTORPAY_API_URL = os.getenv("RUPANTORPAY_API_URL", "https://payment.rupantorpay.com/api/payment")
FRONTEND_BASE_URL = os.getenv("FRONTEND_BASE_URL", "http://localhost:9002")

SUMMARY_MODEL = os.getenv("SUMMARY_MODEL", "gemini-2.5-flash")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
