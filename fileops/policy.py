import os
from typing import FrozenSet, Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_BLOCKED_ROOTS = ("/etc", "/usr", "/bin", "/sbin", "/var", "/sys", "/proc")
DEFAULT_ALLOWED_EXTENSIONS = (".txt", ".json", ".md", ".csv", ".log", ".xml", ".yaml", ".yml")
DEFAULT_BLOCKED_EXTENSIONS = (".exe", ".bat", ".sh", ".ps1", ".cmd")
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB


def _normalize_extension(ext: str) -> str:
    ext = ext.strip().lower()
    if ext and not ext.startswith("."):
        ext = f".{ext}"
    return ext


class PathPolicy(BaseModel):
    """
    Immutable safety policy shared read-only by every operation.

    Blocked roots always win over allowed roots, and blocked extensions always
    win over allowed ones. An empty or missing allow-list of extensions means
    any extension is accepted.

    NOTE: max_file_size is carried for callers but no handler enforces it.
    """

    model_config = ConfigDict(frozen=True)

    allowed_roots: FrozenSet[str] = Field(
        ..., description="Absolute directory prefixes under which operations are permitted"
    )
    blocked_roots: FrozenSet[str] = Field(
        default_factory=frozenset, description="Absolute directory prefixes that are always denied"
    )
    allowed_extensions: Optional[FrozenSet[str]] = Field(
        None, description="Lowercase extensions (with leading dot) that may be touched"
    )
    blocked_extensions: Optional[FrozenSet[str]] = Field(
        None, description="Lowercase extensions (with leading dot) that are always denied"
    )
    max_file_size: int = Field(DEFAULT_MAX_FILE_SIZE, ge=0, description="Declared size cap in bytes")

    @field_validator("allowed_roots", "blocked_roots", mode="before")
    @classmethod
    def _absolute_roots(cls, value: Iterable[str]) -> FrozenSet[str]:
        return frozenset(os.path.abspath(os.fspath(root)) for root in value)

    @field_validator("allowed_extensions", "blocked_extensions", mode="before")
    @classmethod
    def _lowercase_extensions(cls, value: Optional[Iterable[str]]) -> Optional[FrozenSet[str]]:
        if value is None:
            return None
        return frozenset(_normalize_extension(ext) for ext in value)

    @classmethod
    def default(cls, cwd: Optional[str] = None) -> "PathPolicy":
        """Build the default policy with `cwd` (or the process cwd) as the sole allowed root."""
        return cls(
            allowed_roots=[cwd or os.getcwd()],
            blocked_roots=DEFAULT_BLOCKED_ROOTS,
            allowed_extensions=DEFAULT_ALLOWED_EXTENSIONS,
            blocked_extensions=DEFAULT_BLOCKED_EXTENSIONS,
            max_file_size=DEFAULT_MAX_FILE_SIZE,
        )
