# idhunt/config.py
# Environment-driven configuration with eager validation

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Optional

from idhunt import __version__
from idhunt.errors import ConfigurationError, ErrorCode

logger = logging.getLogger(__name__)

URL_PATH_VAR = "URL_PATH"
SESSION_ID_VAR = "SESSION_ID"


@dataclass(frozen=True)
class TargetConfig:
    url_path: str
    session_id: str


@dataclass(frozen=True)
class TransportConfig:
    timeout: float = 10.0
    verify_tls: bool = True
    user_agent: str = f"idhunt/{__version__}"


@dataclass(frozen=True)
class LogConfig:
    level: str = "INFO"
    format: str = "%(levelname)s: %(message)s"
    file_path: Optional[Path] = None
    max_file_size_mb: int = 10
    backup_count: int = 5


@dataclass(frozen=True)
class HuntConfig:
    target: TargetConfig
    transport: TransportConfig = field(default_factory=TransportConfig)
    log: LogConfig = field(default_factory=LogConfig)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "HuntConfig":
        env = os.environ if environ is None else environ

        # Both are checked before anything else so a bad launch never sends a request.
        target = TargetConfig(
            url_path=_require(env, URL_PATH_VAR),
            session_id=_require(env, SESSION_ID_VAR),
        )

        transport = TransportConfig(
            timeout=_parse_float(env, "IDHUNT_TIMEOUT", 10.0),
            verify_tls=env.get("IDHUNT_VERIFY_TLS", "true").lower() == "true",
            user_agent=env.get("IDHUNT_USER_AGENT", f"idhunt/{__version__}"),
        )

        log_file = env.get("IDHUNT_LOG_FILE")
        log = LogConfig(
            level=env.get("IDHUNT_LOG_LEVEL", "INFO"),
            file_path=Path(log_file) if log_file else None,
            max_file_size_mb=_parse_int(env, "IDHUNT_LOG_MAX_MB", 10),
            backup_count=_parse_int(env, "IDHUNT_LOG_BACKUPS", 5),
        )

        return cls(target=target, transport=transport, log=log)


def _require(env: Mapping[str, str], name: str) -> str:
    value = env.get(name)
    if not value:
        raise ConfigurationError(
            ErrorCode.CONFIG_MISSING_REQUIRED,
            f"Must define {name} environment variable!",
            details={"variable": name},
        )
    return value


def _parse_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(
            ErrorCode.CONFIG_INVALID,
            f"{name} must be a number, got {raw!r}",
            details={"variable": name, "value": raw},
        ) from None
    if value <= 0:
        raise ConfigurationError(
            ErrorCode.CONFIG_INVALID,
            f"{name} must be positive, got {raw!r}",
            details={"variable": name, "value": raw},
        )
    return value


def _parse_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(
            ErrorCode.CONFIG_INVALID,
            f"{name} must be an integer, got {raw!r}",
            details={"variable": name, "value": raw},
        ) from None


def setup_logging(config: LogConfig) -> None:
    level = getattr(logging, config.level.upper(), None)
    if not isinstance(level, int):
        raise ConfigurationError(
            ErrorCode.CONFIG_INVALID,
            f"Unknown log level {config.level!r}",
            details={"variable": "IDHUNT_LOG_LEVEL", "value": config.level},
        )

    handlers: List[logging.Handler] = [logging.StreamHandler()]

    if config.file_path is not None:
        from logging.handlers import RotatingFileHandler
        try:
            file_handler = RotatingFileHandler(
                config.file_path,
                maxBytes=config.max_file_size_mb * 1024 * 1024,
                backupCount=config.backup_count,
            )
        except OSError as exc:
            raise ConfigurationError(
                ErrorCode.CONFIG_INVALID,
                f"Cannot open log file {str(config.file_path)!r}: {exc.strerror or exc}",
                details={"variable": "IDHUNT_LOG_FILE", "value": str(config.file_path)},
            ) from exc
        file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
        handlers.append(file_handler)

    logging.basicConfig(
        level=level,
        format=config.format,
        handlers=handlers,
        force=True,
    )
