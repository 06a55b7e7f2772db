import json
from typing import Optional

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError

from config import FileOpsSettings, get_settings
from fileops import FileOperations, OperationResult
from fileops.logger import configure_logging, logger

mcp = FastMCP("File Operations Server")

# Built on first use, or by main() once .env sources are loaded
operations: Optional[FileOperations] = None


def get_operations() -> FileOperations:
    global operations
    if operations is None:
        operations = FileOperations(FileOpsSettings().to_policy())
    return operations


def _respond(result: OperationResult) -> str:
    """Serialize a result; failures are raised so the protocol flags isError."""
    payload = json.dumps(result.to_payload(), indent=2, ensure_ascii=False)
    if not result.success:
        raise ToolError(payload)
    return payload


@mcp.tool()
def read_file(path: str, encoding: str = "utf-8") -> str:
    """
    Read the full contents of a text file.
    Returns JSON with the content in 'data'.
    """
    return _respond(get_operations().read_file({"path": path, "encoding": encoding}))


@mcp.tool()
def write_file(path: str, content: str, encoding: str = "utf-8") -> str:
    """
    Write content to a file, replacing what was there.
    Missing parent directories are created automatically.
    """
    return _respond(
        get_operations().write_file({"path": path, "content": content, "encoding": encoding})
    )


@mcp.tool()
def list_files(path: str, recursive: bool = False, include_hidden: bool = False) -> str:
    """
    List the files and directories inside a directory.
    With recursive=True, subdirectory contents follow each subdirectory entry.
    """
    return _respond(
        get_operations().list_files(
            {"path": path, "recursive": recursive, "include_hidden": include_hidden}
        )
    )


@mcp.tool()
def delete_file(path: str) -> str:
    """
    Delete a single file. Directories are refused.
    """
    return _respond(get_operations().delete_file({"path": path}))


@mcp.tool()
def create_directory(path: str, recursive: bool = False) -> str:
    """
    Create a directory. With recursive=True, missing parents are created too.
    An existing directory is reported as success.
    """
    return _respond(get_operations().create_directory({"path": path, "recursive": recursive}))


def main(env_file: Optional[str] = None) -> None:
    global operations

    settings = get_settings(env_file)
    configure_logging(settings.log_level, settings.log_file)

    policy = settings.to_policy()
    operations = FileOperations(policy)
    logger.info(
        f"File Operations server starting on stdio (roots: {sorted(policy.allowed_roots)})"
    )
    mcp.run()


if __name__ == "__main__":
    main()
