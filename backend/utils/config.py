"""Configuration from environment (a .env file in the working directory is loaded first)."""
import os

from dotenv import find_dotenv, load_dotenv

# Real environment variables win over .env entries.
load_dotenv(find_dotenv(usecwd=True))

PORT = int(os.environ.get("PORT", "5000"))

# When TESTING=true, use test DB URL so tests never touch production.
if os.environ.get("TESTING") == "true":
    DATABASE_URL = os.environ.get("TESTING_DATABASE_URL", "sqlite:///:memory:")
else:
    DATABASE_URL = os.environ.get(
        "DATABASE_URL",
        "sqlite:///./stations.db",
    )

# Exact origin strings; no wildcards, no trailing slashes.
ALLOWED_ORIGINS = [
    o.strip()
    for o in os.environ.get(
        "ALLOWED_ORIGINS",
        "http://localhost:5173,https://test-project-frontend-test.vercel.app",
    ).split(",")
    if o.strip()
]

JWT_SECRET = os.environ.get("JWT_SECRET", "dev-secret-change-me-before-deploying")
JWT_ALGORITHM = os.environ.get("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.environ.get("ACCESS_TOKEN_EXPIRE_MINUTES", "1440"))

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()


def is_production() -> bool:
    """True when APP_ENV=production (error detail is hidden from clients)."""
    return os.environ.get("APP_ENV", "development").lower() == "production"
