"""Configuration models using simple dataclasses."""

import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Type
from urllib.parse import urlparse

import yaml

logger = logging.getLogger(__name__)

API_KEY_ENV_VAR = "YOUTUBE_API_KEY"
SUPPORTED_LOCALES = ("en", "ko")
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@dataclass
class ApiConfig:
    """Upstream search API settings."""

    api_key: str = ""
    base_url: str = "https://www.googleapis.com/youtube/v3"
    timeout_seconds: float = 10.0


@dataclass
class SamplingConfig:
    """Pagination bounds for the video sampler."""

    max_pages: int = 5
    page_size: int = 50  # search.list maximum


@dataclass
class RetryConfig:
    """Backoff policy for quota exhaustion."""

    max_attempts: int = 5
    base_delay: float = 1.0  # seconds, doubled after every attempt
    retry_video_phase: bool = True


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    file_path: str = "channel_roulette.log"
    max_file_size_mb: int = 10
    backup_count: int = 3
    console_output: bool = False


@dataclass
class UIConfig:
    """User interface configuration."""

    locale: str = "en"
    show_progress_bar: bool = True


@dataclass
class RouletteConfig:
    """Main configuration model."""

    api: ApiConfig = field(default_factory=ApiConfig)
    sampling: SamplingConfig = field(default_factory=SamplingConfig)
    retry: RetryConfig = field(default_factory=RetryConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    ui: UIConfig = field(default_factory=UIConfig)


def _filter_fields(data: Dict[str, Any], cls: Type[Any]) -> Dict[str, Any]:
    """Return only keys present on the dataclass to avoid TypeErrors."""
    valid_fields = cls.__dataclass_fields__.keys()
    return {k: v for k, v in data.items() if k in valid_fields}


def validate_config(cfg: RouletteConfig) -> None:
    """Bounds checking for every section; raises ValueError on the first violation."""
    parsed = urlparse(cfg.api.base_url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("api.base_url must be a valid HTTP/HTTPS URL")
    if not (0 < cfg.api.timeout_seconds <= 300):
        raise ValueError("api.timeout_seconds must be between 0 and 300")

    if not (1 <= cfg.sampling.max_pages <= 20):
        raise ValueError("sampling.max_pages must be between 1 and 20")
    if not (1 <= cfg.sampling.page_size <= 50):
        raise ValueError("sampling.page_size must be between 1 and 50")

    if not (1 <= cfg.retry.max_attempts <= 10):
        raise ValueError("retry.max_attempts must be between 1 and 10")
    if not (0 < cfg.retry.base_delay <= 60):
        raise ValueError("retry.base_delay must be between 0 and 60 seconds")

    if cfg.logging.level.upper() not in LOG_LEVELS:
        raise ValueError(f"logging.level must be one of: {LOG_LEVELS}")
    if not (1 <= cfg.logging.max_file_size_mb <= 1000):
        raise ValueError("logging.max_file_size_mb must be between 1 and 1000 MB")
    if not (0 <= cfg.logging.backup_count <= 100):
        raise ValueError("logging.backup_count must be between 0 and 100")

    if cfg.ui.locale not in SUPPORTED_LOCALES:
        raise ValueError(f"ui.locale must be one of: {list(SUPPORTED_LOCALES)}")


def apply_env_overrides(cfg: RouletteConfig, environ: Optional[Dict[str, str]] = None) -> RouletteConfig:
    """Let the environment supply the API key; it wins over the file value."""
    environ = os.environ if environ is None else environ
    api_key = environ.get(API_KEY_ENV_VAR, "").strip()
    if api_key:
        cfg.api.api_key = api_key
    return cfg


def load_config(config_path: Optional[str] = None) -> RouletteConfig:
    """Load configuration from YAML file or return defaults."""
    if config_path and Path(config_path).exists():
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config_data = yaml.safe_load(f)

            if config_data is None:
                logger.warning(f"Configuration file {config_path} is empty, using defaults")
                config_data = {}
            elif not isinstance(config_data, dict):
                raise ValueError(
                    f"Configuration file must contain a dictionary, got {type(config_data).__name__}"
                )

        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file {config_path}: {e}")
        except (IOError, OSError) as e:
            raise ValueError(f"Cannot read configuration file {config_path}: {e}")

        try:
            cfg = RouletteConfig(
                api=ApiConfig(**_filter_fields(config_data.get("api") or {}, ApiConfig)),
                sampling=SamplingConfig(
                    **_filter_fields(config_data.get("sampling") or {}, SamplingConfig)
                ),
                retry=RetryConfig(**_filter_fields(config_data.get("retry") or {}, RetryConfig)),
                logging=LoggingConfig(
                    **_filter_fields(config_data.get("logging") or {}, LoggingConfig)
                ),
                ui=UIConfig(**_filter_fields(config_data.get("ui") or {}, UIConfig)),
            )
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid configuration values in {config_path}: {e}")
    else:
        if config_path:
            logger.warning(f"Configuration file {config_path} not found, using defaults")
        cfg = RouletteConfig()

    apply_env_overrides(cfg)
    validate_config(cfg)
    return cfg


def save_config_template(output_path: str = "config_template.yaml") -> None:
    """Save a template configuration file (the API key is always left blank)."""
    config_dict = asdict(RouletteConfig())
    config_dict["api"]["api_key"] = ""

    with open(output_path, "w", encoding="utf-8") as f:
        yaml.dump(config_dict, f, default_flow_style=False, indent=2)

    print(f"Configuration template saved to: {output_path}")
