import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///./pomotrack.db")

# Tokens are issued by the external identity provider; we only verify them
AUTH_JWT_SECRET = os.environ.get("AUTH_JWT_SECRET")
AUTH_JWT_ALGORITHM = os.environ.get("AUTH_JWT_ALGORITHM", "HS256")
AUTH_JWT_AUDIENCE = os.environ.get("AUTH_JWT_AUDIENCE") or None

CORS_ORIGINS = [
    origin.strip()
    for origin in os.environ.get("CORS_ORIGINS", "http://localhost:5173,http://localhost:5174").split(",")
    if origin.strip()
]

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# 'textblob' or 'none'
SENTIMENT_CLASSIFIER = os.environ.get("SENTIMENT_CLASSIFIER", "textblob").lower()
