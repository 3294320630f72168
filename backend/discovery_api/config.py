import logging
import logging.handlers
from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    host: str = "0.0.0.0"
    port: int = 3000
    environment: str = "development"

    # OpenAI
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    openai_max_tokens: int = 300
    openai_temperature: float = 0.3
    openai_timeout_seconds: float | None = None
    fallback_on_error: bool = True

    # HTTP
    rate_limit_api: str = "100 per 15 minutes"
    rate_limit_enabled: bool = True
    cors_origin_regex: str = r"^(chrome-extension|moz-extension)://.*$"
    max_body_bytes: int = 1_048_576  # 1 MB

    # Logging
    log_level: str = "INFO"
    log_to_file: bool = True
    log_dir: str = "logs"
    log_max_bytes: int = 10_485_760  # 10 MB
    log_backup_count: int = 5

    model_config = {"env_file": ".env"}

    @property
    def openai_configured(self) -> bool:
        return bool(self.openai_api_key)

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


settings = Settings()


_BRIEF_FORMAT = logging.Formatter("%(asctime)s %(levelname)-8s %(name)s: %(message)s", datefmt="%H:%M:%S")
_DETAIL_FORMAT = logging.Formatter(
    "%(asctime)s %(levelname)-8s [%(name)s:%(funcName)s:%(lineno)d] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

_NOISY_LOGGERS = ("uvicorn.access", "httpcore", "httpx", "openai")


def _rotating_handler(path: Path, level: int) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        path,
        maxBytes=settings.log_max_bytes,
        backupCount=settings.log_backup_count,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(_DETAIL_FORMAT)
    return handler


def setup_logging() -> None:
    """Configure root logging for the service.

    Console output (INFO+) is always on. With ``log_to_file`` enabled,
    ``app.log`` (DEBUG+) and ``error.log`` (ERROR+) are written under
    ``log_dir`` and rotated by size.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
    root.handlers.clear()

    console = logging.StreamHandler()
    console.setLevel(logging.INFO)
    console.setFormatter(_BRIEF_FORMAT)
    root.addHandler(console)

    if settings.log_to_file:
        log_dir = Path(settings.log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        root.addHandler(_rotating_handler(log_dir / "app.log", logging.DEBUG))
        root.addHandler(_rotating_handler(log_dir / "error.log", logging.ERROR))

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        "Logging configured: level=%s, files=%s",
        settings.log_level,
        settings.log_dir if settings.log_to_file else "off",
    )
