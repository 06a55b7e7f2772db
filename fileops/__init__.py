from .models import FileEntry, FileErrorKind, OperationResult
from .operations import FileOperations
from .policy import PathPolicy
from .security import PathValidator, is_path_safe, normalize_file_path, sanitize_file_name
from .validation import (
    ValidationResult,
    validate_create_directory_params,
    validate_delete_file_params,
    validate_file_path,
    validate_list_files_params,
    validate_read_file_params,
    validate_write_file_params,
)

__all__ = [
    "FileEntry",
    "FileErrorKind",
    "FileOperations",
    "OperationResult",
    "PathPolicy",
    "PathValidator",
    "ValidationResult",
    "is_path_safe",
    "normalize_file_path",
    "sanitize_file_name",
    "validate_create_directory_params",
    "validate_delete_file_params",
    "validate_file_path",
    "validate_list_files_params",
    "validate_read_file_params",
    "validate_write_file_params",
]
