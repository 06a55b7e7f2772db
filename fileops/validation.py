"""
Structural validation of operation parameters.

Every validator returns a ValidationResult naming the first problem found.
Nothing here touches the filesystem or the PathPolicy.
"""

from collections.abc import Mapping
from typing import Any, NamedTuple, Optional

MAX_PATH_BYTES = 4096


class ValidationResult(NamedTuple):
    valid: bool
    error: Optional[str] = None


OK = ValidationResult(True)


def validate_file_path(path: Any) -> ValidationResult:
    """String-level path checks: type, emptiness, length and NUL bytes."""
    if not isinstance(path, str):
        return ValidationResult(False, "File path is required")

    if path.strip() == "":
        return ValidationResult(False, "File path is empty")

    if len(path.encode("utf-8", errors="surrogatepass")) > MAX_PATH_BYTES:
        return ValidationResult(False, "File path is too long")

    if "\0" in path:
        return ValidationResult(False, "File path contains invalid characters")

    return OK


def _check_object(params: Any) -> ValidationResult:
    if not isinstance(params, Mapping):
        return ValidationResult(False, "Parameters must be an object")
    return validate_file_path(params.get("path"))


def _check_encoding(params: Mapping) -> ValidationResult:
    # None is treated like an absent key
    encoding = params.get("encoding")
    if encoding is not None and not isinstance(encoding, str):
        return ValidationResult(False, "encoding must be a string")
    return OK


def _check_flag(params: Mapping, name: str) -> ValidationResult:
    if name in params and not isinstance(params[name], bool):
        return ValidationResult(False, f"{name} must be a boolean")
    return OK


def _first_failure(*results: ValidationResult) -> ValidationResult:
    for result in results:
        if not result.valid:
            return result
    return OK


def validate_read_file_params(params: Any) -> ValidationResult:
    result = _check_object(params)
    if not result.valid:
        return result
    return _check_encoding(params)


def validate_write_file_params(params: Any) -> ValidationResult:
    result = _check_object(params)
    if not result.valid:
        return result

    # Empty string is valid content
    if not isinstance(params.get("content"), str):
        return ValidationResult(False, "content must be a string")

    return _check_encoding(params)


def validate_list_files_params(params: Any) -> ValidationResult:
    result = _check_object(params)
    if not result.valid:
        return result
    return _first_failure(
        _check_flag(params, "recursive"),
        _check_flag(params, "include_hidden"),
    )


def validate_delete_file_params(params: Any) -> ValidationResult:
    return _check_object(params)


def validate_create_directory_params(params: Any) -> ValidationResult:
    result = _check_object(params)
    if not result.valid:
        return result
    return _check_flag(params, "recursive")
