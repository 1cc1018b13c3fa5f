"""
Value types shared across the taxonomy.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict

from .labels import DisplayNameSource, BundleDisplayNames


class DescriptionLevel(str, Enum):
    """Granularity of an event description, most detailed first."""

    FULL = "full"
    MEDIUM = "medium"
    SHORT = "short"


class TypeLevel(Enum):
    """
    Depth of a node in the event type hierarchy.

    ROOT has a single instance, BASE nodes are the categories directly under
    it, and every other node is a SUB type.
    """

    ROOT = "EventTypeZoomLevel.rootType"
    BASE = "EventTypeZoomLevel.baseType"
    SUB = "EventTypeZoomLevel.subType"

    def display_name(self, names: DisplayNameSource | None = None) -> str:
        return (names or BundleDisplayNames()).get(self.value)


class EventDescription(BaseModel):
    """
    The three renderings of a single event.

    Attributes:
        full: Most detailed description
        medium: Intermediate description
        short: Least detailed description
    """

    model_config = ConfigDict(frozen=True)

    full: str
    medium: str
    short: str

    def get(self, level: DescriptionLevel | str) -> str:
        """Return the description for one level of detail."""
        return getattr(self, DescriptionLevel(level).value)
