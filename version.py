"""Version information for the Todoist assignments MCP server."""

from importlib import metadata
from pathlib import Path

_VERSION_FILE = Path(__file__).parent / "VERSION"
_DISTRIBUTION = "todoist-assignments-mcp"


def get_version() -> str:
    """Read version from the VERSION file, falling back to package metadata."""
    try:
        return _VERSION_FILE.read_text().strip()
    except FileNotFoundError:
        pass
    try:
        return metadata.version(_DISTRIBUTION)
    except metadata.PackageNotFoundError:
        return "unknown"


VERSION = get_version()
