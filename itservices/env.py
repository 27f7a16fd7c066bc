import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


def load_env() -> None:
    """Load .env from project root if present."""
    env_path = Path.cwd() / ".env"
    if not env_path.exists():
        return
    load_dotenv(dotenv_path=env_path)


@dataclass(frozen=True)
class Settings:
    db_path: Path
    log_level: str
    log_dir: Path
    fetch_retries: int
    fetch_base_delay: float


def _read_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _read_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def get_settings() -> Settings:
    """Read runtime settings from the environment (call load_env() first)."""
    return Settings(
        db_path=Path(os.getenv("ITSERVICES_DB_PATH") or "data/it_services.db"),
        log_level=(os.getenv("ITSERVICES_LOG_LEVEL") or "INFO").upper(),
        log_dir=Path(os.getenv("ITSERVICES_LOG_DIR") or "logs"),
        fetch_retries=_read_int("ITSERVICES_FETCH_RETRIES", 3),
        fetch_base_delay=_read_float("ITSERVICES_FETCH_BASE_DELAY", 0.5),
    )
