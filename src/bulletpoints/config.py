"""Configuration constants for the bulletpoints outline core."""

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bulletpoints.models.item import FontSize

# Identifier of the absolute root item. Never deleted, never a child.
ROOT_ID: str = "root"
ROOT_TEXT: str = "Home"

# Text of the starter child in a freshly created document.
WELCOME_TEXT: str = "Welcome to Bulletpoints! Data is now shared across all devices/browsers."

# Generated ids are this many base-36 characters.
ID_LENGTH: int = 9

DEFAULT_FONT_SIZE: "FontSize" = "small"

# Where the CLI keeps its snapshot when no path is given.
DEFAULT_DATA_DIR: Path = Path("~/.local/share/bulletpoints").expanduser()
SNAPSHOT_FILENAME: str = "outline.json"


def resolve_snapshot_path(path: Path | None = None) -> Path:
    """Return the snapshot path to use: the explicit one, else the default."""
    if path is not None:
        return path.expanduser()
    return DEFAULT_DATA_DIR / SNAPSHOT_FILENAME
