"""Configuration management for the categorizer.

Reads configuration from ~/.config/lm-categorizer.toml and creates a default
config if needed. Secrets may also come from the environment
(LUNCHMONEY_TOKEN, LLM_API_KEY), which take precedence over the file.
"""

import os
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Optional, Tuple

import tomllib
import tomli_w
from dateutil.relativedelta import relativedelta

DEFAULT_LEDGER_URL = "https://dev.lunchmoney.app/v1"
DEFAULT_PAGE_SIZE = 500


@dataclass
class Config:
    """Application configuration."""

    base_dir: Path
    log_level: str
    log_dir: Path
    ledger_base_url: str = DEFAULT_LEDGER_URL
    ledger_token: str = ""
    ledger_page_size: int = DEFAULT_PAGE_SIZE
    ledger_timeout: float = 30.0
    llm_provider: str = "openai"
    llm_model: str = ""
    llm_api_key: str = ""
    llm_timeout: float = 60.0
    lookback_months: int = 2

    @classmethod
    def default(cls) -> "Config":
        """Create a Config with default values."""
        base_dir = Path.home() / "data" / "lm-categorizer"
        return cls(
            base_dir=base_dir,
            log_level="INFO",
            log_dir=base_dir / "logs",
            llm_model="gpt-4.1-mini",
        )


def get_config_path() -> Path:
    """Get the path to the config file."""
    return Path.home() / ".config" / "lm-categorizer.toml"


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from file, creating default if it doesn't exist.

    Args:
        config_path: Optional explicit path; defaults to get_config_path().

    Returns:
        Config object with loaded or default values.
    """
    config_path = config_path or get_config_path()

    if not config_path.exists():
        config = Config.default()
        _write_config(config, config_path)
        return _apply_env_overrides(config)

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    defaults = Config.default()
    base_dir = Path(data.get("base_dir", defaults.base_dir))

    log_config = data.get("logging", {})
    ledger_config = data.get("ledger", {})
    llm_config = data.get("llm", {})
    run_config = data.get("run", {})

    config = Config(
        base_dir=base_dir,
        log_level=log_config.get("level", "INFO"),
        log_dir=Path(log_config.get("log_dir", base_dir / "logs")),
        ledger_base_url=ledger_config.get("base_url", DEFAULT_LEDGER_URL),
        ledger_token=ledger_config.get("token", ""),
        ledger_page_size=int(ledger_config.get("page_size", DEFAULT_PAGE_SIZE)),
        ledger_timeout=float(ledger_config.get("timeout", defaults.ledger_timeout)),
        llm_provider=llm_config.get("provider", defaults.llm_provider),
        llm_model=llm_config.get("model", defaults.llm_model),
        llm_api_key=llm_config.get("api_key", ""),
        llm_timeout=float(llm_config.get("timeout", defaults.llm_timeout)),
        lookback_months=int(run_config.get("lookback_months", defaults.lookback_months)),
    )
    return _apply_env_overrides(config)


def default_date_range(config: Config, today: Optional[date] = None) -> Tuple[date, date]:
    """Return the default (start, end) window ending today.

    Args:
        config: Application configuration (uses lookback_months).
        today: Override for the current date, mainly for tests.

    Returns:
        Tuple of inclusive start and end dates.
    """
    end = today or date.today()
    start = end - relativedelta(months=config.lookback_months)
    return start, end


def _apply_env_overrides(config: Config) -> Config:
    token = os.environ.get("LUNCHMONEY_TOKEN")
    if token:
        config.ledger_token = token
    api_key = os.environ.get("LLM_API_KEY")
    if api_key:
        config.llm_api_key = api_key
    return config


def _write_config(config: Config, config_path: Path) -> None:
    """Write config to the config file.

    Args:
        config: Config object to write.
        config_path: Destination path.
    """
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "base_dir": str(config.base_dir),
        "logging": {
            "level": config.log_level,
            "log_dir": str(config.log_dir),
        },
        "ledger": {
            "base_url": config.ledger_base_url,
            "token": config.ledger_token,
            "page_size": config.ledger_page_size,
            "timeout": config.ledger_timeout,
        },
        "llm": {
            "provider": config.llm_provider,
            "model": config.llm_model,
            "api_key": config.llm_api_key,
            "timeout": config.llm_timeout,
        },
        "run": {
            "lookback_months": config.lookback_months,
        },
    }

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
