"""
Display-name source for event types and type levels.

Labels are looked up by symbolic key (e.g. "BaseTypes.fileSystem.name") so
that a localized bundle can replace the bundled English defaults.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Mapping, Protocol, Set

logger = logging.getLogger(__name__)


DEFAULT_LABELS: Dict[str, str] = {
    "EventTypeZoomLevel.rootType": "Root Type",
    "EventTypeZoomLevel.baseType": "Base Type",
    "EventTypeZoomLevel.subType": "Sub Type",
    "RootEventType.eventTypes.name": "Event Types",
    "BaseTypes.fileSystem.name": "File System",
    "BaseTypes.webActivity.name": "Web Activity",
    "BaseTypes.miscTypes.name": "Misc Types",
    "BaseTypes.customTypes.name": "Custom Types",
    "FileSystemTypes.fileModified.name": "File Modified",
    "FileSystemTypes.fileAccessed.name": "File Accessed",
    "FileSystemTypes.fileCreated.name": "File Created",
    "FileSystemTypes.fileChanged.name": "File Changed",
    "WebTypes.webDownloads.name": "Web Downloads",
    "WebTypes.webCookies.name": "Web Cookies",
    "WebTypes.webBookmarks.name": "Web Bookmarks",
    "WebTypes.webHistory.name": "Web History",
    "WebTypes.webSearch.name": "Web Searches",
    "WebTypes.webFormAutoFill.name": "Web Form Autofill",
    "WebTypes.webFormAddress.name": "Web Form Address",
    "MiscTypes.message.name": "Messages",
    "MiscTypes.GPSRoutes.name": "GPS Routes",
    "MiscTypes.GPSTrackpoint.name": "GPS Trackpoint",
    "MiscTypes.Calls.name": "Calls",
    "MiscTypes.Email.name": "Email",
    "MiscTypes.recentDocuments.name": "Recent Documents",
    "MiscTypes.installedPrograms.name": "Installed Programs",
    "MiscTypes.exif.name": "Exif",
    "MiscTypes.devicesAttached.name": "Devices Attached",
    "MiscTypes.LogEntry.name": "Log Entry",
    "MiscTypes.Registry.name": "Registry",
    "CustomTypes.other.name": "Other",
    "CustomTypes.userCreated.name": "User Created",
}


class DisplayNameSource(Protocol):
    """Anything that resolves a symbolic key to a human-readable label."""

    def get(self, key: str) -> str:
        ...


class BundleDisplayNames:
    """
    Bundled English labels with optional per-key overrides.

    Unknown keys resolve to the key itself so a missing translation never
    blocks construction of the registry.

    Args:
        overrides: Labels that replace the defaults for matching keys
    """

    def __init__(self, overrides: Mapping[str, str] | None = None):
        self._labels: Dict[str, str] = {**DEFAULT_LABELS, **(overrides or {})}
        self._reported: Set[str] = set()

    def get(self, key: str) -> str:
        label = self._labels.get(key)
        if label is None:
            if key not in self._reported:
                logger.warning(f"No display name for key '{key}', using the key")
                self._reported.add(key)
            return key
        return label


def load_display_names(filepath: str | Path) -> Dict[str, str] | None:
    """
    Load label overrides from a JSON file.

    Args:
        filepath: Path to a JSON object mapping keys to labels

    Returns:
        Dictionary of labels, or None if loading fails
    """
    try:
        with open(str(filepath), "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.error(f"Label file {filepath} was not found")
        return None
    except json.JSONDecodeError:
        logger.error(f"Label file {filepath} is not a valid JSON file")
        return None

    if not isinstance(data, dict):
        logger.error(f"Label file {filepath} must contain a JSON object")
        return None
    return {str(k): str(v) for k, v in data.items()}
