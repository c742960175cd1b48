import os

from dotenv import load_dotenv

# Load .env from repo root
load_dotenv()


def _env_int(name: str) -> int | None:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}")


def _env_seed(name: str) -> int | None:
    seed = _env_int(name)
    if seed is not None and seed < 0:
        raise RuntimeError(f"{name} must be a non-negative integer, got {seed}")
    return seed


BACKTEST_HOST = os.environ.get("BACKTEST_HOST", "127.0.0.1")
BACKTEST_PORT = _env_int("BACKTEST_PORT") or 5000
BACKTEST_DEBUG = os.environ.get("BACKTEST_DEBUG", "").lower() in ("1", "true", "yes")

# Seeds every run that does not send its own; unset means fresh randomness.
BACKTEST_SEED = _env_seed("BACKTEST_SEED")
