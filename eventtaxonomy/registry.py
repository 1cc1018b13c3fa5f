"""
The fixed event type hierarchy.

The tree is declared as a table of rows (id, key, label key, level, parent
id) with leaf-specific payloads. build_registry() turns the table into
linked, frozen nodes once; the default registry and its named constants are
built when this module is imported.

Type ids are the durable join key between stored events and this taxonomy:
an id, once assigned, never changes meaning.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from .attributes import AttributeType as A
from .attributes import RecordType as R
from .errors import RegistryConsistencyError
from .extractors import (
    EmptyExtractor,
    MessageSummaryExtractor,
    SingleAttributeExtractor,
    SourceFileNameExtractor,
    TemplateExtractor,
    UrlDomainExtractor,
    UrlHostExtractor,
)
from .labels import BundleDisplayNames, DisplayNameSource
from .models import TypeLevel
from .nodes import ArtifactEventType, EventTypeNode, LeafEventType
from .strategies import (
    DescriptionStrategy,
    ExtractorStrategy,
    PathStrategy,
    SingleDescriptionStrategy,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NodeRow:
    """
    One row of the type table.

    Attributes:
        type_id: Permanent numeric id
        key: Symbolic name
        label_key: Display-name key
        level: Depth in the hierarchy
        parent_id: Id of the parent row, None for the root
        strategy: Description strategy (leaf rows only)
        record_type: Source record kind (artifact leaves only)
        time_attribute: Timestamp attribute (artifact leaves only)
    """

    type_id: int
    key: str
    label_key: str
    level: TypeLevel
    parent_id: Optional[int]
    strategy: Optional[DescriptionStrategy] = None
    record_type: Optional[R] = None
    time_attribute: Optional[A] = None


def _single(attribute: A) -> SingleAttributeExtractor:
    return SingleAttributeExtractor(attribute)


def _url_strategy(attribute: A) -> ExtractorStrategy:
    return ExtractorStrategy(
        full=_single(attribute),
        medium=UrlHostExtractor(attribute),
        short=UrlDomainExtractor(attribute),
    )


def _base(type_id: int, key: str, label_key: str) -> NodeRow:
    return NodeRow(type_id, key, label_key, TypeLevel.BASE, 0)


def _leaf(
    type_id: int,
    key: str,
    label_key: str,
    parent_id: int,
    strategy: DescriptionStrategy,
    record_type: Optional[R] = None,
    time_attribute: Optional[A] = None,
) -> NodeRow:
    return NodeRow(
        type_id, key, label_key, TypeLevel.SUB, parent_id, strategy, record_type, time_attribute
    )


_EMPTY = EmptyExtractor()
_DESCRIPTION = SingleDescriptionStrategy(A.TSK_DESCRIPTION)

ROOT_ID, FILE_SYSTEM_ID, WEB_ACTIVITY_ID, MISC_TYPES_ID, CUSTOM_TYPES_ID = 0, 1, 2, 3, 22

NODE_TABLE: Tuple[NodeRow, ...] = (
    NodeRow(ROOT_ID, "ROOT_EVENT_TYPE", "RootEventType.eventTypes.name", TypeLevel.ROOT, None),
    _base(FILE_SYSTEM_ID, "FILE_SYSTEM", "BaseTypes.fileSystem.name"),
    _base(WEB_ACTIVITY_ID, "WEB_ACTIVITY", "BaseTypes.webActivity.name"),
    _base(MISC_TYPES_ID, "MISC_TYPES", "BaseTypes.miscTypes.name"),
    _base(CUSTOM_TYPES_ID, "CUSTOM_TYPES", "BaseTypes.customTypes.name"),
    # File system
    _leaf(4, "FILE_MODIFIED", "FileSystemTypes.fileModified.name", FILE_SYSTEM_ID, PathStrategy()),
    _leaf(5, "FILE_ACCESSED", "FileSystemTypes.fileAccessed.name", FILE_SYSTEM_ID, PathStrategy()),
    _leaf(6, "FILE_CREATED", "FileSystemTypes.fileCreated.name", FILE_SYSTEM_ID, PathStrategy()),
    _leaf(7, "FILE_CHANGED", "FileSystemTypes.fileChanged.name", FILE_SYSTEM_ID, PathStrategy()),
    # Web activity
    _leaf(
        8, "WEB_DOWNLOADS", "WebTypes.webDownloads.name", WEB_ACTIVITY_ID,
        _url_strategy(A.TSK_URL), R.TSK_WEB_DOWNLOAD, A.TSK_DATETIME_ACCESSED,
    ),
    _leaf(
        9, "WEB_COOKIE", "WebTypes.webCookies.name", WEB_ACTIVITY_ID,
        _url_strategy(A.TSK_URL), R.TSK_WEB_COOKIE, A.TSK_DATETIME,
    ),
    _leaf(
        10, "WEB_BOOKMARK", "WebTypes.webBookmarks.name", WEB_ACTIVITY_ID,
        _url_strategy(A.TSK_URL), R.TSK_WEB_BOOKMARK, A.TSK_DATETIME_CREATED,
    ),
    _leaf(
        11, "WEB_HISTORY", "WebTypes.webHistory.name", WEB_ACTIVITY_ID,
        _url_strategy(A.TSK_URL), R.TSK_WEB_HISTORY, A.TSK_DATETIME_ACCESSED,
    ),
    _leaf(
        12, "WEB_SEARCH", "WebTypes.webSearch.name", WEB_ACTIVITY_ID,
        _url_strategy(A.TSK_DOMAIN), R.TSK_WEB_SEARCH_QUERY, A.TSK_DATETIME_ACCESSED,
    ),
    # Misc
    _leaf(
        13, "MESSAGE", "MiscTypes.message.name", MISC_TYPES_ID,
        ExtractorStrategy(
            full=_single(A.TSK_TEXT),
            medium=MessageSummaryExtractor(),
            short=_single(A.TSK_MESSAGE_TYPE),
        ),
        R.TSK_MESSAGE, A.TSK_DATETIME,
    ),
    _leaf(
        14, "GPS_ROUTE", "MiscTypes.GPSRoutes.name", MISC_TYPES_ID,
        ExtractorStrategy(
            full=TemplateExtractor(
                "from {0} {1} to {2} {3}",
                A.TSK_GEO_LATITUDE_START, A.TSK_GEO_LONGITUDE_START,
                A.TSK_GEO_LATITUDE_END, A.TSK_GEO_LONGITUDE_END,
            ),
            medium=_single(A.TSK_LOCATION),
            short=_single(A.TSK_PROG_NAME),
        ),
        R.TSK_GPS_ROUTE, A.TSK_DATETIME,
    ),
    _leaf(
        15, "GPS_TRACKPOINT", "MiscTypes.GPSTrackpoint.name", MISC_TYPES_ID,
        ExtractorStrategy(
            full=TemplateExtractor("{0} {1}", A.TSK_GEO_LATITUDE, A.TSK_GEO_LONGITUDE),
            medium=_single(A.TSK_PROG_NAME),
            short=_EMPTY,
        ),
        R.TSK_GPS_TRACKPOINT, A.TSK_DATETIME,
    ),
    _leaf(
        16, "CALL_LOG", "MiscTypes.Calls.name", MISC_TYPES_ID,
        ExtractorStrategy(
            full=_single(A.TSK_DIRECTION),
            medium=_single(A.TSK_PHONE_NUMBER),
            short=_single(A.TSK_NAME),
        ),
        R.TSK_CALLLOG, A.TSK_DATETIME_START,
    ),
    _leaf(
        17, "EMAIL", "MiscTypes.Email.name", MISC_TYPES_ID,
        ExtractorStrategy(
            full=TemplateExtractor("{0} to {1}", A.TSK_EMAIL_FROM, A.TSK_EMAIL_TO),
            medium=_single(A.TSK_SUBJECT),
            short=_single(A.TSK_EMAIL_CONTENT_PLAIN),
        ),
        R.TSK_EMAIL_MSG, A.TSK_DATETIME_SENT,
    ),
    _leaf(
        18, "RECENT_DOCUMENTS", "MiscTypes.recentDocuments.name", MISC_TYPES_ID,
        PathStrategy(A.TSK_PATH), R.TSK_RECENT_OBJECT, A.TSK_DATETIME,
    ),
    _leaf(
        19, "INSTALLED_PROGRAM", "MiscTypes.installedPrograms.name", MISC_TYPES_ID,
        ExtractorStrategy(full=_EMPTY, medium=_EMPTY, short=_single(A.TSK_PROG_NAME)),
        R.TSK_INSTALLED_PROG, A.TSK_DATETIME,
    ),
    _leaf(
        20, "EXIF", "MiscTypes.exif.name", MISC_TYPES_ID,
        ExtractorStrategy(
            full=SourceFileNameExtractor(),
            medium=_single(A.TSK_DEVICE_MODEL),
            short=_single(A.TSK_DEVICE_MAKE),
        ),
        R.TSK_METADATA_EXIF, A.TSK_DATETIME_CREATED,
    ),
    _leaf(
        21, "DEVICES_ATTACHED", "MiscTypes.devicesAttached.name", MISC_TYPES_ID,
        ExtractorStrategy(
            full=_single(A.TSK_DEVICE_ID),
            medium=_single(A.TSK_DEVICE_MODEL),
            short=_single(A.TSK_DEVICE_MAKE),
        ),
        R.TSK_DEVICE_ATTACHED, A.TSK_DATETIME,
    ),
    # Catch-all and free-text events
    _leaf(23, "OTHER", "CustomTypes.other.name", CUSTOM_TYPES_ID, _DESCRIPTION, R.TSK_TL_EVENT, A.TSK_DATETIME),
    _leaf(24, "LOG_ENTRY", "MiscTypes.LogEntry.name", MISC_TYPES_ID, _DESCRIPTION, R.TSK_TL_EVENT, A.TSK_DATETIME),
    _leaf(25, "REGISTRY", "MiscTypes.Registry.name", MISC_TYPES_ID, _DESCRIPTION, R.TSK_TL_EVENT, A.TSK_DATETIME),
    _leaf(
        26, "USER_CREATED", "CustomTypes.userCreated.name", CUSTOM_TYPES_ID,
        _DESCRIPTION, R.TSK_TL_EVENT, A.TSK_DATETIME,
    ),
    _leaf(
        27, "WEB_FORM_AUTOFILL", "WebTypes.webFormAutoFill.name", WEB_ACTIVITY_ID,
        ExtractorStrategy(
            full=TemplateExtractor("{0}:{1} count: {2}", A.TSK_NAME, A.TSK_VALUE, A.TSK_COUNT),
            medium=_EMPTY,
            short=_EMPTY,
        ),
        R.TSK_WEB_FORM_AUTOFILL, A.TSK_DATETIME_ACCESSED,
    ),
    _leaf(
        28, "WEB_FORM_ADDRESSES", "WebTypes.webFormAddress.name", WEB_ACTIVITY_ID,
        _url_strategy(A.TSK_EMAIL), R.TSK_WEB_FORM_ADDRESS, A.TSK_DATETIME_ACCESSED,
    ),
)


def _make_node(row: NodeRow, names: DisplayNameSource) -> EventTypeNode:
    display_name = names.get(row.label_key)
    if row.strategy is None:
        return EventTypeNode(row.type_id, row.key, display_name, row.level)
    if row.record_type is None:
        return LeafEventType(row.type_id, row.key, display_name, None, row.strategy)
    return ArtifactEventType(
        row.type_id,
        row.key,
        display_name,
        None,
        row.strategy,
        row.record_type,
        row.time_attribute,
    )


def validate_registry(nodes: Sequence[EventTypeNode]) -> List[str]:
    """
    Check that linked nodes form a well-formed hierarchy.

    Args:
        nodes: Every node of the hierarchy

    Returns:
        List of issues found (empty if valid)
    """
    issues = []

    seen: Dict[int, EventTypeNode] = {}
    for node in nodes:
        if node.id in seen:
            issues.append(f"Duplicate type id {node.id}: {seen[node.id].key} and {node.key}")
        else:
            seen[node.id] = node

    roots = [n for n in nodes if n.super_type is None]
    if len(roots) != 1:
        issues.append(f"Expected exactly one root, found {[n.key for n in roots]}")
    for node in nodes:
        if (node.level is TypeLevel.ROOT) != (node.super_type is None):
            issues.append(f"{node.key} has level {node.level.name} but parent {node.super_type!r}")

    for node in nodes:
        current, steps = node, 0
        while current.super_type is not None and steps <= len(nodes):
            current, steps = current.super_type, steps + 1
        if current.super_type is not None:
            issues.append(f"{node.key} is part of a parent cycle")
            continue
        parent = node.super_type
        if parent is None:
            continue
        expected = TypeLevel.BASE if parent.level is TypeLevel.ROOT else TypeLevel.SUB
        if node.level is not expected:
            issues.append(f"{node.key} should be {expected.name}, not {node.level.name}")

    for node in nodes:
        listed = list(node.sub_types())
        declared = [n for n in nodes if n.super_type is node]
        if sorted(id(c) for c in listed) != sorted(id(c) for c in declared):
            issues.append(f"Children of {node.key} disagree with their parent links")
        if [c.id for c in listed] != sorted(c.id for c in listed):
            issues.append(f"Children of {node.key} are not ordered by id")

    return issues


class TypeRegistry:
    """
    A built, frozen event type hierarchy.

    Args:
        nodes: Linked and validated nodes
    """

    def __init__(self, nodes: Sequence[EventTypeNode]):
        self._by_id: Dict[int, EventTypeNode] = {n.id: n for n in nodes}
        self._by_key: Dict[str, EventTypeNode] = {n.key: n for n in nodes}
        self._root = next(n for n in nodes if n.super_type is None)

    @property
    def root(self) -> EventTypeNode:
        return self._root

    def get(self, type_id: int) -> Optional[EventTypeNode]:
        """Look up a type by its stored id."""
        return self._by_id.get(type_id)

    def by_key(self, key: str) -> Optional[EventTypeNode]:
        """Look up a type by symbolic name (e.g. "WEB_HISTORY")."""
        return self._by_key.get(key)

    def all_types(self) -> Tuple[EventTypeNode, ...]:
        return tuple(sorted(self._by_id.values()))

    def all_base_types(self) -> Tuple[EventTypeNode, ...]:
        return self._root.sub_types()

    def file_system_types(self) -> Tuple[EventTypeNode, ...]:
        return self._by_id[FILE_SYSTEM_ID].sub_types()

    def web_activity_types(self) -> Tuple[EventTypeNode, ...]:
        return self._by_id[WEB_ACTIVITY_ID].sub_types()

    def misc_types(self) -> Tuple[EventTypeNode, ...]:
        return self._by_id[MISC_TYPES_ID].sub_types()

    def custom_types(self) -> Tuple[EventTypeNode, ...]:
        return self._by_id[CUSTOM_TYPES_ID].sub_types()

    def types_for_record_type(self, record_type: R | int) -> Tuple[ArtifactEventType, ...]:
        """
        Artifact types built from a given record kind.

        Several types share the generic timeline-event record kind, so the
        result may hold more than one type.
        """
        return tuple(
            n
            for n in self.all_types()
            if isinstance(n, ArtifactEventType) and n.source_record_type == record_type
        )

    def __iter__(self) -> Iterator[EventTypeNode]:
        return iter(self.all_types())

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, node: object) -> bool:
        return isinstance(node, EventTypeNode) and self._by_id.get(node.id) is node


def build_registry(
    names: DisplayNameSource | None = None,
    table: Sequence[NodeRow] = NODE_TABLE,
) -> TypeRegistry:
    """
    Build and freeze the event type hierarchy.

    Args:
        names: Display-name source (bundled English labels by default)
        table: Rows describing the hierarchy

    Returns:
        The frozen registry

    Raises:
        RegistryConsistencyError: If the table does not describe a valid tree
    """
    names = names or BundleDisplayNames()
    nodes = [_make_node(row, names) for row in table]
    by_id = {n.id: n for n in nodes}

    issues = []
    children: Dict[int, List[EventTypeNode]] = defaultdict(list)
    for row, node in zip(table, nodes):
        if row.parent_id is None:
            continue
        parent = by_id.get(row.parent_id)
        if parent is None:
            issues.append(f"{row.key} refers to unknown parent id {row.parent_id}")
            continue
        node._super_type = parent
        children[id(parent)].append(node)

    for node in nodes:
        node._link(tuple(children[id(node)]))

    issues.extend(validate_registry(nodes))
    if issues:
        raise RegistryConsistencyError(issues)

    for node in nodes:
        node._freeze()

    logger.debug(f"Built event type registry with {len(nodes)} types")
    return TypeRegistry(nodes)


REGISTRY = build_registry()

ROOT_EVENT_TYPE = REGISTRY.get(0)
FILE_SYSTEM = REGISTRY.get(1)
WEB_ACTIVITY = REGISTRY.get(2)
MISC_TYPES = REGISTRY.get(3)
FILE_MODIFIED = REGISTRY.get(4)
FILE_ACCESSED = REGISTRY.get(5)
FILE_CREATED = REGISTRY.get(6)
FILE_CHANGED = REGISTRY.get(7)
WEB_DOWNLOADS = REGISTRY.get(8)
WEB_COOKIE = REGISTRY.get(9)
WEB_BOOKMARK = REGISTRY.get(10)
WEB_HISTORY = REGISTRY.get(11)
WEB_SEARCH = REGISTRY.get(12)
MESSAGE = REGISTRY.get(13)
GPS_ROUTE = REGISTRY.get(14)
GPS_TRACKPOINT = REGISTRY.get(15)
CALL_LOG = REGISTRY.get(16)
EMAIL = REGISTRY.get(17)
RECENT_DOCUMENTS = REGISTRY.get(18)
INSTALLED_PROGRAM = REGISTRY.get(19)
EXIF = REGISTRY.get(20)
DEVICES_ATTACHED = REGISTRY.get(21)
CUSTOM_TYPES = REGISTRY.get(22)
OTHER = REGISTRY.get(23)
LOG_ENTRY = REGISTRY.get(24)
REGISTRY_TYPE = REGISTRY.get(25)
USER_CREATED = REGISTRY.get(26)
WEB_FORM_AUTOFILL = REGISTRY.get(27)
WEB_FORM_ADDRESSES = REGISTRY.get(28)


def all_base_types() -> Tuple[EventTypeNode, ...]:
    return REGISTRY.all_base_types()


def file_system_types() -> Tuple[EventTypeNode, ...]:
    return REGISTRY.file_system_types()


def web_activity_types() -> Tuple[EventTypeNode, ...]:
    return REGISTRY.web_activity_types()


def misc_types() -> Tuple[EventTypeNode, ...]:
    return REGISTRY.misc_types()


def custom_types() -> Tuple[EventTypeNode, ...]:
    return REGISTRY.custom_types()
