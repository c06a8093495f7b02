"""Configuration management for schemagen-cli."""

import os
from pathlib import Path
from pydantic_settings import BaseSettings
from pydantic import Field
from typing import Optional


def _find_env_file() -> Optional[str]:
    """Find .env file in multiple locations.

    Search order:
    1. Current working directory
    2. ~/.schemagen/.env
    3. Package directory (where this file is located)
    """
    if os.path.exists(".env"):
        return ".env"

    user_env = Path.home() / ".schemagen" / ".env"
    if user_env.exists():
        return str(user_env)

    package_dir = Path(__file__).parent.parent
    package_env = package_dir / ".env"
    if package_env.exists():
        return str(package_env)

    return None


class Settings(BaseSettings):
    """Defaults for CLI options, loaded from SCHEMAGEN_* environment variables."""

    # Output
    output_dir: str = Field(
        default="./schemagen-output",
        description="Directory rendered artifacts are written to"
    )
    dialect: Optional[str] = Field(
        default=None,
        description="Dialect for snapshot sources (sqlite, duckdb, postgres, mysql, mssql)"
    )

    # Rendering
    indentation: int = Field(
        default=1,
        description="Number of indentation characters per level"
    )
    use_spaces: bool = Field(
        default=False,
        description="Indent with spaces instead of tabs"
    )
    camel_case: bool = Field(
        default=False,
        description="camelCase table and column names in the artifacts"
    )
    camel_case_file_names: bool = Field(
        default=False,
        description="camelCase output file names"
    )
    typescript: bool = Field(
        default=False,
        description="Also emit db.d.ts and db.tables.ts"
    )
    resolver_find_method: str = Field(
        default="findByPk",
        description="Data-access call used by single-record resolvers (findByPk or findById)"
    )

    # Logging
    log_level: str = Field(
        default="WARNING",
        description="Log level used when --verbose is not given"
    )

    class Config:
        env_prefix = "SCHEMAGEN_"
        env_file = _find_env_file()
        env_file_encoding = "utf-8"
        extra = "ignore"


# Global settings instance
settings = Settings()
