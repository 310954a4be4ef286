#!/usr/bin/env python3
"""
Configuration Management for MiscIncome Sync

Handles environment-based configuration with secure defaults and validation.
Supports multiple environments (development, test, production).
"""

import logging
import os
import tempfile
from dataclasses import dataclass
from enum import Enum
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

LEDGER_BACKENDS = ("quickbooks", "json")


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


@dataclass
class QuickBooksConfig:
    """QuickBooks Desktop SDK (QBFC) connection settings."""

    app_name: str = "QB MiscIncome Sync"
    company_file: str = ""  # Empty means the company file currently open
    country: str = "US"
    sdk_major_version: int = 16
    sdk_minor_version: int = 0


@dataclass
class LedgerConfig:
    """Which ledger backend to talk to."""

    backend: str
    json_file: Path


@dataclass
class ImportConfig:
    """Defaults applied when turning spreadsheet rows into deposits."""

    deposit_to_account: str = "Checking"
    default_received_from: str = "Misc Income"


@dataclass
class LoggingConfig:
    """Run log settings."""

    log_file: Path
    max_bytes: int = 5_000_000
    backup_count: int = 7


@dataclass
class Config:
    """
    Main configuration class for the MiscIncome sync tool.

    Loads configuration from environment variables with defaults and
    validation for each environment type.
    """

    environment: Environment

    data_dir: Path
    output_dir: Path

    quickbooks: QuickBooksConfig
    ledger: LedgerConfig
    importer: ImportConfig
    logging: LoggingConfig

    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(os.getenv("MISCINCOME_ENV", "development"))

        if env == Environment.TEST:
            default_test_dir = Path(tempfile.gettempdir()) / "test_miscincome"
            data_dir = Path(os.getenv("MISCINCOME_DATA_DIR", str(default_test_dir)))
        else:
            data_dir = Path(os.getenv("MISCINCOME_DATA_DIR", "./data")).expanduser().resolve()

        output_dir = data_dir / "reports"

        for directory in [data_dir, output_dir]:
            directory.mkdir(parents=True, exist_ok=True)

        quickbooks = QuickBooksConfig(
            app_name=os.getenv("QB_APP_NAME", "QB MiscIncome Sync"),
            company_file=os.getenv("QB_COMPANY_FILE", ""),
            country=os.getenv("QB_COUNTRY", "US"),
            sdk_major_version=int(os.getenv("QB_SDK_MAJOR", "16")),
            sdk_minor_version=int(os.getenv("QB_SDK_MINOR", "0")),
        )

        json_file = os.getenv("LEDGER_JSON_FILE")
        ledger = LedgerConfig(
            backend=os.getenv("LEDGER_BACKEND", "quickbooks").lower(),
            json_file=Path(json_file) if json_file else data_dir / "ledger" / "deposits.json",
        )

        importer = ImportConfig(
            deposit_to_account=os.getenv("DEPOSIT_TO_ACCOUNT", "Checking"),
            default_received_from=os.getenv("DEFAULT_RECEIVED_FROM", "Misc Income"),
        )

        log_file = os.getenv("LOG_FILE")
        logging_config = LoggingConfig(
            log_file=Path(log_file) if log_file else data_dir / "logs" / "qb_sync.log",
        )

        return cls(
            environment=env,
            data_dir=data_dir,
            output_dir=output_dir,
            quickbooks=quickbooks,
            ledger=ledger,
            importer=importer,
            logging=logging_config,
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> list[str]:
        """Validate configuration and return list of errors."""
        errors = []

        for name, path in [("data_dir", self.data_dir), ("output_dir", self.output_dir)]:
            if not path.exists():
                errors.append(f"{name} does not exist: {path}")

        if self.ledger.backend not in LEDGER_BACKENDS:
            errors.append(
                f"LEDGER_BACKEND must be one of {', '.join(LEDGER_BACKENDS)}, got '{self.ledger.backend}'"
            )

        if not self.quickbooks.app_name.strip():
            errors.append("QB_APP_NAME must not be empty")

        if self.quickbooks.sdk_major_version <= 0 or self.quickbooks.sdk_minor_version < 0:
            errors.append("QuickBooks SDK version must be positive")

        if not self.importer.deposit_to_account.strip():
            errors.append("DEPOSIT_TO_ACCOUNT must not be empty")

        if not isinstance(logging.getLevelName(self.log_level), int):
            errors.append(f"Unknown LOG_LEVEL: {self.log_level}")

        return errors

    def setup_logging(self) -> None:
        """
        Configure logging based on configuration.

        Console output at the configured level, plus a size-rotating run log
        that keeps INFO and above.
        """
        level = getattr(logging, self.log_level, logging.INFO)

        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=min(level, logging.INFO), format=format_str, datefmt="%Y-%m-%d %H:%M:%S")

        root = logging.getLogger()
        if root.level > logging.INFO:
            root.setLevel(logging.INFO)
        for handler in root.handlers:
            # Console handlers installed by basicConfig follow the configured level
            if type(handler) is logging.StreamHandler:
                handler.setLevel(level)

        log_file = self.logging.log_file
        already_attached = any(
            isinstance(handler, RotatingFileHandler) and Path(handler.baseFilename) == log_file.resolve()
            for handler in root.handlers
        )
        if not already_attached:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=self.logging.max_bytes,
                backupCount=self.logging.backup_count,
                encoding="utf-8",
            )
            file_handler.setLevel(max(level, logging.INFO))
            file_handler.setFormatter(logging.Formatter(format_str, datefmt="%Y-%m-%d %H:%M:%S"))
            root.addHandler(file_handler)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary for display."""
        result: dict[str, Any] = {}

        for field_name, field_value in self.__dict__.items():
            if hasattr(field_value, "__dict__") and not isinstance(field_value, (Path, Enum)):
                nested_dict: dict[str, Any] = {}
                for nested_name, nested_value in field_value.__dict__.items():
                    if isinstance(nested_value, Path):
                        nested_dict[nested_name] = str(nested_value)
                    else:
                        nested_dict[nested_name] = nested_value
                result[field_name] = nested_dict
            elif isinstance(field_value, Path):
                result[field_name] = str(field_value)
            elif isinstance(field_value, Enum):
                result[field_name] = field_value.value
            else:
                result[field_name] = field_value

        return result


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_environment()

        errors = _config.validate()
        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        _config.setup_logging()

    return _config


def reload_config() -> Config:
    """Reload configuration from environment (useful for testing)."""
    global _config
    _config = None
    return get_config()
