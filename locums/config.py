import os
import warnings
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        warnings.warn(f"{name}={raw!r} is not an integer, using {default}", RuntimeWarning, stacklevel=2)
        return default
    if value < 0:
        warnings.warn(f"{name} must not be negative, using {default}", RuntimeWarning, stacklevel=2)
        return default
    return value


LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Shift arithmetic
# "full_day" treats start == end as a 24h shift, "zero" as 0h, "reject" raises
ZERO_LENGTH_SHIFT_POLICY = os.getenv("ZERO_LENGTH_SHIFT_POLICY", "full_day").lower()
if ZERO_LENGTH_SHIFT_POLICY not in ("full_day", "zero", "reject"):
    warnings.warn(
        f"Unknown ZERO_LENGTH_SHIFT_POLICY {ZERO_LENGTH_SHIFT_POLICY!r}, using 'full_day'",
        RuntimeWarning,
        stacklevel=2,
    )
    ZERO_LENGTH_SHIFT_POLICY = "full_day"

OVERTIME_WEEKLY_THRESHOLD_HOURS = _int_env("OVERTIME_WEEKLY_THRESHOLD_HOURS", 40)

# Compliance
EXPIRY_WARNING_DAYS = _int_env("EXPIRY_WARNING_DAYS", 90)
# Optional JSON file replacing the built-in requirement catalog
COMPLIANCE_CATALOG_PATH = os.getenv("COMPLIANCE_CATALOG_PATH")

# External marketplace API (auth endpoints live here)
AUTH_API_URL = os.getenv("AUTH_API_URL", "http://localhost:5000")

# Frontend base URL, used for CORS defaults
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:5173")
ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv("ALLOWED_ORIGINS", f"{FRONTEND_URL},http://localhost:3000").split(",")
    if origin.strip()
]
