import os
import re
from typing import Any, Optional

from .policy import PathPolicy
from .validation import ValidationResult

_UNSAFE_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


def normalize_file_path(file_path: str) -> str:
    """Return the absolute, normalized form of a path (symlinks are not followed)."""
    return os.path.abspath(file_path)


def sanitize_file_name(file_name: str) -> str:
    """Replace characters that are unsafe in file names with underscores."""
    return _UNSAFE_FILENAME_CHARS.sub("_", file_name)


def _extension(resolved_path: str) -> str:
    # Leading-dot names like ".env" have no extension
    return os.path.splitext(os.path.basename(resolved_path))[1].lower()


class PathValidator:
    """
    Decides whether a candidate path may be used by any file operation.

    Checks run in order and stop at the first failure:
    1. traversal markers ('..' or '~') anywhere in the raw input
    2. resolved path must sit under an allowed root
    3. resolved path must not sit under a blocked root
    4. extension must not be blocked, and must be allowed when an allow-list exists

    Holds no mutable state, so one instance may serve concurrent calls.
    """

    def __init__(self, policy: PathPolicy):
        self.policy = policy

    def check(self, candidate_path: Any) -> ValidationResult:
        """Validate a path and name the rule that rejected it. Never raises."""
        try:
            return self._check(candidate_path)
        except Exception as e:
            return ValidationResult(False, f"Path could not be resolved: {e}")

    def is_path_safe(self, candidate_path: Any) -> bool:
        return self.check(candidate_path).valid

    def _check(self, candidate_path: Any) -> ValidationResult:
        if not isinstance(candidate_path, str) or not candidate_path:
            return ValidationResult(False, "Path must be a non-empty string")

        # Textual check on the raw input, before normalization hides it
        if ".." in candidate_path or "~" in candidate_path:
            return ValidationResult(False, "Path traversal detected")

        resolved = normalize_file_path(candidate_path)

        if not any(resolved.startswith(root) for root in self.policy.allowed_roots):
            return ValidationResult(False, "Path outside allowed directories")

        if any(resolved.startswith(root) for root in self.policy.blocked_roots):
            return ValidationResult(False, "Path inside a blocked directory")

        ext = _extension(resolved)
        if self.policy.blocked_extensions and ext in self.policy.blocked_extensions:
            return ValidationResult(False, f"Extension '{ext}' is blocked")

        if self.policy.allowed_extensions and ext not in self.policy.allowed_extensions:
            return ValidationResult(False, f"Extension '{ext}' is not allowed")

        return ValidationResult(True)


def is_path_safe(candidate_path: Any, policy: Optional[PathPolicy] = None) -> bool:
    """Check a path against `policy`, or the default policy for the current directory."""
    return PathValidator(policy or PathPolicy.default()).is_path_safe(candidate_path)
