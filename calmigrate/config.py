"""Configuration for calendar migration."""

import os
from pathlib import Path

from pydantic import BaseModel, Field

from calmigrate.constants import DEFAULT_PRODID, FILENAME_EXT

try:
    from dotenv import find_dotenv, load_dotenv
except ImportError:
    load_dotenv = None


class MigratorConfig(BaseModel):
    """Migration configuration with Pydantic validation."""

    # Storage paths
    store_dir: Path = Field(default=Path("data/store"))
    export_dir: Path = Field(default=Path("data/export"))
    log_dir: Path = Field(default=Path("logs"))

    # File naming
    file_extension: str = Field(default=FILENAME_EXT)
    log_filename: str = Field(default="calmigrate.log")

    # Export
    prodid: str = Field(default=DEFAULT_PRODID)

    # Import
    max_name_attempts: int = Field(default=5, ge=1)

    @classmethod
    def from_env(cls) -> "MigratorConfig":
        """Load configuration from environment variables and .env file."""
        # Load .env file if python-dotenv is available
        if load_dotenv is not None:
            load_dotenv(find_dotenv(usecwd=True))

        config_dict = {}

        # Storage paths
        if "CALMIGRATE_STORE_DIR" in os.environ:
            config_dict["store_dir"] = Path(os.environ["CALMIGRATE_STORE_DIR"])
        if "CALMIGRATE_EXPORT_DIR" in os.environ:
            config_dict["export_dir"] = Path(os.environ["CALMIGRATE_EXPORT_DIR"])
        if "LOG_DIR" in os.environ:
            config_dict["log_dir"] = Path(os.environ["LOG_DIR"])

        # File naming
        if "LOG_FILENAME" in os.environ:
            config_dict["log_filename"] = os.environ["LOG_FILENAME"]

        # Export
        if "CALMIGRATE_PRODID" in os.environ:
            config_dict["prodid"] = os.environ["CALMIGRATE_PRODID"]

        # Import
        if "MAX_NAME_ATTEMPTS" in os.environ:
            try:
                attempts = int(os.environ["MAX_NAME_ATTEMPTS"])
                if attempts >= 1:
                    config_dict["max_name_attempts"] = attempts
            except ValueError:
                pass  # Keep default if invalid

        return cls(**config_dict)
