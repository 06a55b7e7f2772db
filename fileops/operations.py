import errno
import os
from datetime import datetime, timezone
from typing import Any, Callable, List

from .logger import logger
from .models import FileEntry, FileErrorKind, OperationResult
from .policy import PathPolicy
from .security import PathValidator
from .validation import (
    ValidationResult,
    validate_create_directory_params,
    validate_delete_file_params,
    validate_list_files_params,
    validate_read_file_params,
    validate_write_file_params,
)

DEFAULT_ENCODING = "utf-8"

INVALID_PARAMETERS = "Invalid parameters"
UNSAFE_PATH = "Unsafe path"


class FileOperations:
    """
    Read, write, list, delete and mkdir behind a PathPolicy.

    Every public method accepts an untyped parameter mapping and returns an
    OperationResult. Filesystem errors are mapped onto FileErrorKind and never
    propagate to the caller.
    """

    def __init__(self, policy: PathPolicy):
        self.policy = policy
        self.validator = PathValidator(policy)

    def _precheck(
        self, operation: str, params: Any, validate: Callable[[Any], ValidationResult]
    ) -> OperationResult | None:
        """Run the structural then the path checks; return a failure or None."""
        shape = validate(params)
        if not shape.valid:
            logger.debug(f"{operation}: invalid parameters ({shape.error})")
            return OperationResult.fail(FileErrorKind.INVALID_PARAMETERS, INVALID_PARAMETERS)

        safety = self.validator.check(params["path"])
        if not safety.valid:
            # The reason stays in the log; callers only learn the path is unsafe
            logger.warning(f"{operation}: rejected {params['path']!r} ({safety.error})")
            return OperationResult.fail(FileErrorKind.UNSAFE_PATH, UNSAFE_PATH)

        return None

    # ------------------------------------------------------------------
    # read
    # ------------------------------------------------------------------

    def read_file(self, params: Any) -> OperationResult:
        failure = self._precheck("read_file", params, validate_read_file_params)
        if failure:
            return failure

        path = params["path"]
        encoding = params.get("encoding") or DEFAULT_ENCODING
        try:
            with open(path, "r", encoding=encoding, newline="") as f:
                content = f.read()
            return OperationResult.ok(data=content)
        except FileNotFoundError:
            return OperationResult.fail(FileErrorKind.NOT_FOUND, "File not found")
        except PermissionError:
            return OperationResult.fail(
                FileErrorKind.PERMISSION_DENIED, "Permission denied: cannot read file"
            )
        except IsADirectoryError:
            return OperationResult.fail(FileErrorKind.IS_A_DIRECTORY, "Path is a directory")
        except Exception as e:
            logger.error(f"read_file failed for {path}", str(e))
            return OperationResult.fail(FileErrorKind.IO_ERROR, f"Error reading file: {e}")

    # ------------------------------------------------------------------
    # write
    # ------------------------------------------------------------------

    def write_file(self, params: Any) -> OperationResult:
        failure = self._precheck("write_file", params, validate_write_file_params)
        if failure:
            return failure

        path = params["path"]
        encoding = params.get("encoding") or DEFAULT_ENCODING
        try:
            # Encode before opening so a bad codec cannot truncate the target
            data = params["content"].encode(encoding)
            parent = os.path.dirname(os.path.abspath(path))
            os.makedirs(parent, exist_ok=True)
            with open(path, "wb") as f:
                f.write(data)
            logger.info(f"Wrote {os.path.abspath(path)}")
            return OperationResult.ok(message="File written successfully")
        except PermissionError:
            return OperationResult.fail(
                FileErrorKind.PERMISSION_DENIED, "Permission denied: cannot write file"
            )
        except IsADirectoryError:
            return OperationResult.fail(FileErrorKind.IS_A_DIRECTORY, "Path is a directory")
        except OSError as e:
            if e.errno == errno.ENOSPC:
                return OperationResult.fail(FileErrorKind.OUT_OF_SPACE, "Insufficient disk space")
            logger.error(f"write_file failed for {path}", str(e))
            return OperationResult.fail(FileErrorKind.IO_ERROR, f"Error writing file: {e}")
        except Exception as e:
            logger.error(f"write_file failed for {path}", str(e))
            return OperationResult.fail(FileErrorKind.IO_ERROR, f"Error writing file: {e}")

    # ------------------------------------------------------------------
    # list
    # ------------------------------------------------------------------

    def list_files(self, params: Any) -> OperationResult:
        failure = self._precheck("list_files", params, validate_list_files_params)
        if failure:
            return failure

        # include_hidden is validated but does not filter entries
        root = os.path.abspath(params["path"])
        try:
            entries: List[FileEntry] = []
            _collect_entries(root, params.get("recursive", False), entries)
            return OperationResult.ok(data=entries)
        except FileNotFoundError:
            return OperationResult.fail(FileErrorKind.NOT_FOUND, "Directory not found")
        except PermissionError:
            return OperationResult.fail(
                FileErrorKind.PERMISSION_DENIED, "Permission denied: cannot access directory"
            )
        except NotADirectoryError:
            return OperationResult.fail(FileErrorKind.NOT_A_DIRECTORY, "Path is not a directory")
        except Exception as e:
            logger.error(f"list_files failed for {root}", str(e))
            return OperationResult.fail(FileErrorKind.IO_ERROR, f"Error listing directory: {e}")

    # ------------------------------------------------------------------
    # delete
    # ------------------------------------------------------------------

    def delete_file(self, params: Any) -> OperationResult:
        failure = self._precheck("delete_file", params, validate_delete_file_params)
        if failure:
            return failure

        path = params["path"]
        try:
            # unlink reports EPERM instead of EISDIR on some platforms
            if os.path.isdir(path) and not os.path.islink(path):
                raise IsADirectoryError(errno.EISDIR, os.strerror(errno.EISDIR), path)
            os.remove(path)
            logger.info(f"Deleted {os.path.abspath(path)}")
            return OperationResult.ok(message="File deleted successfully")
        except FileNotFoundError:
            return OperationResult.fail(FileErrorKind.NOT_FOUND, "File not found")
        except IsADirectoryError:
            return OperationResult.fail(FileErrorKind.IS_A_DIRECTORY, "Path is a directory")
        except PermissionError:
            return OperationResult.fail(
                FileErrorKind.PERMISSION_DENIED, "Permission denied: cannot delete file"
            )
        except Exception as e:
            logger.error(f"delete_file failed for {path}", str(e))
            return OperationResult.fail(FileErrorKind.IO_ERROR, f"Error deleting file: {e}")

    # ------------------------------------------------------------------
    # mkdir
    # ------------------------------------------------------------------

    def create_directory(self, params: Any) -> OperationResult:
        failure = self._precheck("create_directory", params, validate_create_directory_params)
        if failure:
            return failure

        path = params["path"]
        try:
            if params.get("recursive", False):
                os.makedirs(path)
            else:
                os.mkdir(path)
            logger.info(f"Created directory {os.path.abspath(path)}")
            return OperationResult.ok(message="Directory created successfully")
        except FileExistsError:
            return OperationResult.ok(message="Directory already exists")
        except PermissionError:
            return OperationResult.fail(
                FileErrorKind.PERMISSION_DENIED, "Permission denied: cannot create directory"
            )
        except NotADirectoryError:
            return OperationResult.fail(
                FileErrorKind.NOT_A_DIRECTORY, "Parent path is not a directory"
            )
        except FileNotFoundError:
            return OperationResult.fail(FileErrorKind.NOT_FOUND, "Parent directory not found")
        except Exception as e:
            logger.error(f"create_directory failed for {path}", str(e))
            return OperationResult.fail(FileErrorKind.IO_ERROR, f"Error creating directory: {e}")


def _collect_entries(directory: str, recursive: bool, entries: List[FileEntry]) -> None:
    """
    Append the entries of `directory` in enumeration order, descending into a
    subdirectory right after its own entry when `recursive` is set.

    Errors opening `directory` itself propagate. Errors on a single nested
    entry (stat failure, unreadable subdirectory) drop that entry's remaining
    work and enumeration continues.
    """
    with os.scandir(directory) as it:
        for entry in it:
            try:
                stats = entry.stat()
                is_dir = entry.is_dir(follow_symlinks=False)
                entries.append(
                    FileEntry(
                        name=entry.name,
                        path=os.path.join(directory, entry.name),
                        kind="directory" if is_dir else "file",
                        size=stats.st_size if entry.is_file(follow_symlinks=False) else None,
                        last_modified=datetime.fromtimestamp(stats.st_mtime, tz=timezone.utc),
                    )
                )
                if recursive and is_dir:
                    _collect_entries(entry.path, True, entries)
            except OSError as e:
                logger.debug(f"Skipping unreadable entry {entry.path}: {e}")
