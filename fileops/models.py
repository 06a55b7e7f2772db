from datetime import datetime
from enum import Enum
from typing import Any, List, Literal, Optional, Union

from pydantic import BaseModel, Field


class FileErrorKind(str, Enum):
    """Stable failure taxonomy shared by every operation."""

    INVALID_PARAMETERS = "invalid_parameters"
    UNSAFE_PATH = "unsafe_path"
    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    IS_A_DIRECTORY = "is_a_directory"
    NOT_A_DIRECTORY = "not_a_directory"
    OUT_OF_SPACE = "out_of_space"
    IO_ERROR = "io_error"


class FileEntry(BaseModel):
    """One directory entry produced by list_files."""

    name: str = Field(..., description="Entry name within its directory")
    path: str = Field(..., description="Absolute path of the entry")
    kind: Literal["file", "directory"] = Field(..., description="Entry type")
    size: Optional[int] = Field(None, description="Size in bytes, files only")
    last_modified: datetime = Field(..., description="Last modification time (UTC)")


class OperationResult(BaseModel):
    """
    Uniform outcome of a file operation.

    A success may carry `data` (file content or a list of FileEntry) and a
    confirmation `message`. A failure always carries `message` and `error`.
    """

    success: bool
    data: Optional[Union[str, List[FileEntry]]] = None
    message: Optional[str] = None
    error: Optional[FileErrorKind] = None

    @classmethod
    def ok(cls, data: Any = None, message: Optional[str] = None) -> "OperationResult":
        return cls(success=True, data=data, message=message)

    @classmethod
    def fail(cls, error: FileErrorKind, message: str) -> "OperationResult":
        return cls(success=False, error=error, message=message)

    def to_payload(self) -> dict:
        """JSON-ready dict in the shape the transport returns to clients."""
        if self.success:
            return self.model_dump(mode="json", include={"success", "data", "message"}, exclude_none=True)
        return {"success": False, "error": self.message}
