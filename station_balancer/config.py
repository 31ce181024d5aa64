import os
from dotenv import load_dotenv

load_dotenv()

DEFAULT_MAX_ITERATIONS = 10

# Busiest/least-busy spread at which balancing stops.
BALANCE_TOLERANCE_MINUTES = 5

# Suggested cap is this factor times the average station load.
DEFAULT_MAX_TIME_FACTOR = 1.2


def get_default_max_iterations() -> int:
    """
    Return the move budget from BALANCER_MAX_ITERATIONS, or the built-in default.

    Raises:
        RuntimeError: if the env var is set but is not a positive integer.
    """
    raw = os.environ.get("BALANCER_MAX_ITERATIONS", "").strip()
    if not raw:
        return DEFAULT_MAX_ITERATIONS
    try:
        value = int(raw)
    except ValueError:
        value = 0
    if value <= 0:
        raise RuntimeError(
            f"BALANCER_MAX_ITERATIONS must be a positive integer, got {raw!r}"
        )
    return value


def get_cors_origins() -> list[str]:
    """Return allowed CORS origins from BACKEND_CORS_ORIGINS (comma-separated)."""
    origins_env = os.getenv("BACKEND_CORS_ORIGINS")
    if origins_env:
        return [o.strip() for o in origins_env.split(",") if o.strip()]
    return ["*"]
