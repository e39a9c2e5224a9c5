"""
Configuration management.
"""

import os
from dataclasses import dataclass, field
from typing import List


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


def _env_list(name: str) -> List[str]:
    raw = os.getenv(name, "")
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass
class Config:
    """
    Application configuration.

    Loads from environment variables with sensible defaults.
    """

    # Server
    host: str = field(default_factory=lambda: os.getenv("HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))
    debug: bool = field(default_factory=lambda: _env_flag("DEBUG"))
    production: bool = field(
        default_factory=lambda: os.getenv("RAILWAY_ENVIRONMENT") is not None or _env_flag("PRODUCTION")
    )
    allowed_origins: List[str] = field(default_factory=lambda: _env_list("ALLOWED_ORIGINS"))

    # Logging
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())

    # PDF output
    output_dir: str = field(default_factory=lambda: os.getenv("PDF_OUTPUT_DIR", "invoices"))
    deterministic_pdf: bool = field(default_factory=lambda: _env_flag("PDF_DETERMINISTIC", "true"))

    @classmethod
    def load(cls) -> "Config":
        """Load configuration from environment."""
        return cls()

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "host": self.host,
            "port": self.port,
            "debug": self.debug,
            "production": self.production,
            "allowed_origins": list(self.allowed_origins),
            "log_level": self.log_level,
            "output_dir": self.output_dir,
            "deterministic_pdf": self.deterministic_pdf,
        }
