# ## File: documentwise_engine/config.py
# Version: 1.3.0
# Date: 2026-10-19
# Purpose: Runtime configuration for the DocumentWise front-end.
#          - Values come from the environment first, then from an optional
#            config.env at the project root.
#          - The config object is built explicitly and passed to the API
#            clients; nothing is read at import time.
#          - read_config applies the configured log level to the package loggers.

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional

from .exceptions import ConfigurationError
from .utils import apply_log_level, get_logger

logger = get_logger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_ENV_FILE = PROJECT_ROOT / "config.env"

API_BASE_URL_VAR = "DOCUMENTWISE_API_BASE_URL"
CHAT_API_BASE_URL_VAR = "DOCUMENTWISE_CHAT_API_BASE_URL"

DEFAULT_REQUEST_TIMEOUT = 30

_TRUTHY = {"1", "true", "yes", "on"}


def load_env_file(path: Path) -> Dict[str, str]:
    values: Dict[str, str] = {}
    if not path.exists():
        return values
    for raw in path.read_text(encoding="utf-8", errors="ignore").splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        k, v = line.split("=", 1)
        values[k.strip()] = v.strip().strip('"').strip("'")
    return values


@dataclass(frozen=True)
class ApiConfig:
    api_base_url: str
    chat_api_base_url: str
    request_timeout: int = DEFAULT_REQUEST_TIMEOUT
    log_level: str = "INFO"
    use_mock_data: bool = False


def _normalize_base_url(value: str) -> str:
    return (value or "").strip().rstrip("/")


def read_config(
    environ: Optional[Mapping[str, str]] = None,
    env_file: Optional[Path] = None,
) -> ApiConfig:
    """
    Build the ApiConfig from the environment and the optional config.env.

    Args:
        environ: Mapping to read from (defaults to os.environ)
        env_file: Fallback KEY=value file (defaults to <project>/config.env)

    Returns:
        Populated ApiConfig

    Raises:
        ConfigurationError: If a base URL is missing or a number is malformed
    """
    environ = os.environ if environ is None else environ
    file_vars = load_env_file(env_file or DEFAULT_ENV_FILE)

    def get(name: str, default: str) -> str:
        return environ.get(name, file_vars.get(name, default))

    use_mock_data = get("DOCUMENTWISE_USE_MOCK_DATA", "false").strip().lower() in _TRUTHY
    api_base_url = _normalize_base_url(get(API_BASE_URL_VAR, ""))
    chat_api_base_url = _normalize_base_url(get(CHAT_API_BASE_URL_VAR, ""))

    # The in-memory repository needs no backend.
    if not use_mock_data:
        missing = [
            name for name, value in ((API_BASE_URL_VAR, api_base_url), (CHAT_API_BASE_URL_VAR, chat_api_base_url))
            if not value
        ]
        if missing:
            raise ConfigurationError(
                "API base URL is not configured",
                f"set {' and '.join(missing)} in the environment or config.env",
            )

    raw_timeout = get("DOCUMENTWISE_REQUEST_TIMEOUT", str(DEFAULT_REQUEST_TIMEOUT)).strip()
    try:
        request_timeout = int(raw_timeout)
    except ValueError:
        raise ConfigurationError("Invalid DOCUMENTWISE_REQUEST_TIMEOUT", raw_timeout)
    if request_timeout <= 0:
        raise ConfigurationError("Invalid DOCUMENTWISE_REQUEST_TIMEOUT", raw_timeout)

    cfg = ApiConfig(
        api_base_url=api_base_url,
        chat_api_base_url=chat_api_base_url,
        request_timeout=request_timeout,
        log_level=get("DOCUMENTWISE_LOG_LEVEL", "INFO").strip().upper() or "INFO",
        use_mock_data=use_mock_data,
    )
    apply_log_level(cfg.log_level)

    if cfg.use_mock_data:
        logger.info("Using in-memory mock data; no backend requests will be made")
    else:
        logger.info(f"API base URL: {cfg.api_base_url} (chat: {cfg.chat_api_base_url})")
    return cfg
