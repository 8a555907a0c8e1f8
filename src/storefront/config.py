"""Runtime settings read from the environment.

Protean's own configuration (providers, brokers, event processing) lives in
``domain.toml``; this module holds the application-level knobs.
"""

import os

SECRET_KEY = os.getenv("STOREFRONT_SECRET_KEY", "dev-secret-change-me")
TOKEN_ALGORITHM = "HS256"

SESSION_TTL_MINUTES = int(os.getenv("STOREFRONT_SESSION_TTL_MINUTES", "60"))
RESET_TOKEN_TTL_MINUTES = int(os.getenv("STOREFRONT_RESET_TOKEN_TTL_MINUTES", "60"))
INACTIVITY_DAYS = int(os.getenv("STOREFRONT_INACTIVITY_DAYS", "2"))
BCRYPT_ROUNDS = int(os.getenv("STOREFRONT_BCRYPT_ROUNDS", "12"))

UPLOAD_DIR = os.getenv("STOREFRONT_UPLOAD_DIR", "uploads")
BASE_URL = os.getenv("STOREFRONT_BASE_URL", "http://localhost:8000")

# Mail
EMAIL_BACKEND = os.getenv("STOREFRONT_EMAIL_BACKEND", "fake")
EMAIL_FROM = os.getenv("STOREFRONT_EMAIL_FROM", "no-reply@storefront.local")
SMTP_HOST = os.getenv("STOREFRONT_SMTP_HOST", "localhost")
SMTP_PORT = int(os.getenv("STOREFRONT_SMTP_PORT", "587"))
SMTP_USER = os.getenv("STOREFRONT_SMTP_USER")
SMTP_PASSWORD = os.getenv("STOREFRONT_SMTP_PASSWORD")
