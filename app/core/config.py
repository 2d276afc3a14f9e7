import os

# Database configuration
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./portal.db")

# Admin credential (single shared organizer account)
ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "admin")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin321")
ADMIN_SESSION_TTL = int(os.getenv("ADMIN_SESSION_TTL", "28800"))

# Outbound CRM webhook
WEBHOOK_TIMEOUT = float(os.getenv("WEBHOOK_TIMEOUT", "5.0"))

# Per-event registration lock. httpx applies WEBHOOK_TIMEOUT to each of its
# connect, write, read and pool phases, so the default TTL covers all four.
REGISTRATION_LOCK_TIMEOUT = int(
    os.getenv("REGISTRATION_LOCK_TIMEOUT", str(int(4 * WEBHOOK_TIMEOUT) + 10))
)
REGISTRATION_LOCK_WAIT = int(os.getenv("REGISTRATION_LOCK_WAIT", "5"))

MAX_IMAGE_BYTES = int(os.getenv("MAX_IMAGE_BYTES", "500000"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
