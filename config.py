"""
Configuration module for the File Operations server.

Handles:
- Environment variable loading (.env files)
- Settings for the path-safety policy and logging
- Building the explicit PathPolicy handed to the file operations
"""

import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from fileops.policy import (
    DEFAULT_ALLOWED_EXTENSIONS,
    DEFAULT_BLOCKED_EXTENSIONS,
    DEFAULT_BLOCKED_ROOTS,
    DEFAULT_MAX_FILE_SIZE,
    PathPolicy,
)

# =============================================================================
# Environment Loading
# =============================================================================


def load_configuration(env_file: Optional[str] = None) -> None:
    """Load environment variables from multiple sources in priority order."""
    sources = []

    # 1. Explicitly provided file
    if env_file and os.path.exists(env_file):
        sources.append(env_file)
    elif env_file:
        raise FileNotFoundError(f"Env file '{env_file}' not found.")

    # 2. FILEOPS_ENV pointer
    env_var_path = os.getenv("FILEOPS_ENV")
    if env_var_path and os.path.exists(env_var_path):
        sources.append(env_var_path)

    # 3. CWD .env
    cwd_env = Path(os.getcwd()) / ".env"
    if cwd_env.exists():
        sources.append(str(cwd_env))

    # 4. Global config
    tool_env = Path.home() / ".config" / "fileops" / ".env"
    if tool_env.exists():
        sources.append(str(tool_env))

    if not sources:
        return

    load_dotenv(dotenv_path=sources[0], override=True)
    for path in sources[1:]:
        load_dotenv(dotenv_path=path, override=False)


# =============================================================================
# Settings
# =============================================================================


class FileOpsSettings(BaseSettings):
    """Server settings. List fields are read from the environment as JSON arrays."""

    model_config = SettingsConfigDict(env_prefix="FILEOPS_")

    allowed_roots: List[str] = Field(
        default_factory=list, description="Allowed roots; empty means the working directory"
    )
    blocked_roots: List[str] = Field(default_factory=lambda: list(DEFAULT_BLOCKED_ROOTS))
    allowed_extensions: Optional[List[str]] = Field(
        default_factory=lambda: list(DEFAULT_ALLOWED_EXTENSIONS)
    )
    blocked_extensions: Optional[List[str]] = Field(
        default_factory=lambda: list(DEFAULT_BLOCKED_EXTENSIONS)
    )
    max_file_size: int = DEFAULT_MAX_FILE_SIZE
    log_level: str = "INFO"
    log_file: Optional[str] = None

    def to_policy(self, cwd: Optional[str] = None) -> PathPolicy:
        """Freeze these settings into the PathPolicy used by the validator."""
        return PathPolicy(
            allowed_roots=self.allowed_roots or [cwd or os.getcwd()],
            blocked_roots=self.blocked_roots,
            allowed_extensions=self.allowed_extensions,
            blocked_extensions=self.blocked_extensions,
            max_file_size=self.max_file_size,
        )


def get_settings(env_file: Optional[str] = None) -> FileOpsSettings:
    """Load .env sources, then read settings from the environment."""
    load_configuration(env_file)
    return FileOpsSettings()
