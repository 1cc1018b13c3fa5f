"""
Event type nodes and the navigation rules of the type hierarchy.

Nodes are created by the registry, linked to their parent and children, and
then frozen. After that they are shared, read-only values.
"""

import functools
from typing import Any, Mapping, Optional, Tuple

from .attributes import AttributeType, Record, RecordStore, RecordType
from .models import EventDescription, TypeLevel
from .strategies import DescriptionStrategy, derive_description, parse_description


@functools.total_ordering
class EventTypeNode:
    """
    A node of the event type hierarchy.

    Nodes are identified and ordered by their numeric id, which is also the
    key stored alongside every event and must never change.

    Attributes:
        id: Permanent numeric type id
        key: Symbolic name (e.g. "FILE_MODIFIED")
        display_name: Localized label
        level: Depth of the node (ROOT, BASE or SUB)
        super_type: Parent node, None only for the root
    """

    def __init__(
        self,
        type_id: int,
        key: str,
        display_name: str,
        level: TypeLevel,
        super_type: Optional["EventTypeNode"] = None,
    ):
        self._id = type_id
        self._key = key
        self._display_name = display_name
        self._level = level
        self._super_type = super_type
        self._sub_types: Tuple["EventTypeNode", ...] = ()
        self._frozen = False

    def __setattr__(self, name: str, value: Any) -> None:
        if getattr(self, "_frozen", False):
            raise AttributeError(f"{self!r} is immutable")
        super().__setattr__(name, value)

    def _link(self, sub_types: Tuple["EventTypeNode", ...]) -> None:
        self._sub_types = tuple(sorted(sub_types))

    def _freeze(self) -> None:
        self._frozen = True

    @property
    def id(self) -> int:
        return self._id

    @property
    def key(self) -> str:
        return self._key

    @property
    def display_name(self) -> str:
        return self._display_name

    @property
    def level(self) -> TypeLevel:
        return self._level

    @property
    def super_type(self) -> Optional["EventTypeNode"]:
        return self._super_type

    def sub_types(self) -> Tuple["EventTypeNode", ...]:
        """Children of this node ordered by id (empty for leaf types)."""
        return self._sub_types

    def sub_type(self, name: str) -> Optional["EventTypeNode"]:
        """
        Find a direct child by display name or symbolic key.

        Args:
            name: Display name or key of the child

        Returns:
            The matching child, or None
        """
        return next(
            (t for t in self._sub_types if name in (t.display_name, t.key)), None
        )

    def base_type(self) -> "EventTypeNode":
        """
        The category directly below the root on this node's path.

        The root is its own base type, as is every BASE node.
        """
        super_type = self._super_type
        if super_type is None or super_type.level is TypeLevel.ROOT:
            return self
        return super_type.base_type()

    def sibling_types(self) -> Tuple["EventTypeNode", ...]:
        """All children of this node's parent, including itself."""
        if self._super_type is None:
            return (self,)
        return self._super_type.sub_types()

    def compare_to(self, other: "EventTypeNode") -> int:
        """Negative, zero or positive as this id is below, equal to or above other's."""
        return (self._id > other._id) - (self._id < other._id)

    def parse_description(self, full: str, medium: str, short: str) -> EventDescription:
        """Wrap three stored description strings."""
        return parse_description(None, full, medium, short)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EventTypeNode):
            return NotImplemented
        return self._id == other._id

    def __lt__(self, other: "EventTypeNode") -> bool:
        if not isinstance(other, EventTypeNode):
            return NotImplemented
        return self._id < other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._id}, {self._key})"

    def __str__(self) -> str:
        return self._display_name


class LeafEventType(EventTypeNode):
    """
    A SUB type that knows how to describe its events.

    Args:
        strategy: Description strategy for events of this type
    """

    def __init__(
        self,
        type_id: int,
        key: str,
        display_name: str,
        super_type: EventTypeNode,
        strategy: DescriptionStrategy,
    ):
        super().__init__(type_id, key, display_name, TypeLevel.SUB, super_type)
        self._strategy = strategy

    @property
    def strategy(self) -> DescriptionStrategy:
        return self._strategy

    def derive(
        self,
        record: "Record | Mapping | str",
        store: Optional[RecordStore] = None,
    ) -> EventDescription:
        """
        Describe a newly seen event from its record.

        Args:
            record: Record, attribute bag, or inherent file-system path
            store: Record store, needed only by types that resolve the
                underlying file

        Raises:
            RecordLookupError: If the record store lookup fails
        """
        return derive_description(self._strategy, record, store)

    def parse_description(self, full: str, medium: str, short: str) -> EventDescription:
        """Rebuild the description of a stored event."""
        return parse_description(self._strategy, full, medium, short)


class ArtifactEventType(LeafEventType):
    """
    A leaf type derived from records of one kind.

    Args:
        source_record_type: Kind of record this type is built from
        time_attribute_type: Attribute supplying the event timestamp
    """

    def __init__(
        self,
        type_id: int,
        key: str,
        display_name: str,
        super_type: EventTypeNode,
        strategy: DescriptionStrategy,
        source_record_type: RecordType,
        time_attribute_type: AttributeType,
    ):
        super().__init__(type_id, key, display_name, super_type, strategy)
        self._source_record_type = source_record_type
        self._time_attribute_type = time_attribute_type

    @property
    def source_record_type(self) -> RecordType:
        return self._source_record_type

    @property
    def time_attribute_type(self) -> AttributeType:
        return self._time_attribute_type

    def matches(self, record: Record) -> bool:
        """Whether the record is of the kind this type is built from."""
        return record.record_type == self._source_record_type

    def event_time(self, record: Record) -> Any:
        """Raw timestamp value of the record, or None if absent."""
        return record.get(self._time_attribute_type)
