import os
from datetime import timedelta
from dotenv import load_dotenv

load_dotenv()


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key-change-me")

    # Database
    SQLALCHEMY_DATABASE_URI = os.getenv(
        "DATABASE_URL",
        f"sqlite:///{os.path.join(os.getcwd(), 'instance', 'choukwa.db')}",
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # JWT
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "dev-jwt-secret-change-me")
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(
        hours=int(os.getenv("JWT_ACCESS_TOKEN_EXPIRES", 12))
    )

    # CORS
    CORS_ORIGINS = [
        o.strip()
        for o in os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",")
        if o.strip()
    ]

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_DIR = os.getenv("LOG_DIR", "")

    # Complaint handling
    WHATSAPP_COUNTRY_CODE = os.getenv("WHATSAPP_COUNTRY_CODE", "216")
    OVERDUE_AFTER_DAYS = int(os.getenv("OVERDUE_AFTER_DAYS", 7))
    MAX_COMPLAINT_IMAGES = int(os.getenv("MAX_COMPLAINT_IMAGES", 3))
    MIN_COMPLAINT_LENGTH = int(os.getenv("MIN_COMPLAINT_LENGTH", 10))

    # Reporting
    REPORT_TOP_N = int(os.getenv("REPORT_TOP_N", 10))
    REPORT_MONTHS = int(os.getenv("REPORT_MONTHS", 6))


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    JWT_SECRET_KEY = "test-jwt-secret-key-with-enough-length"
    SECRET_KEY = "test-secret"
    BCRYPT_LOG_ROUNDS = 4
    LOG_LEVEL = "WARNING"
