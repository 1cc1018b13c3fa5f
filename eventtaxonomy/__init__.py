"""
Timeline Event Type Taxonomy
"""

from .attributes import AttributeType, InMemoryRecordStore, Record, RecordStore, RecordType
from .coercion import direction_label, display_string_of
from .errors import EventTaxonomyError, RecordLookupError, RegistryConsistencyError
from .extractors import (
    AttributeExtractor,
    EmptyExtractor,
    FunctionExtractor,
    MessageSummaryExtractor,
    SingleAttributeExtractor,
    SourceFileNameExtractor,
    TemplateExtractor,
    UrlDomainExtractor,
    UrlHostExtractor,
)
from .hierarchy import format_type_path, format_type_tree, get_leaf_types, get_type_path
from .labels import BundleDisplayNames, DisplayNameSource, load_display_names
from .models import DescriptionLevel, EventDescription, TypeLevel
from .nodes import ArtifactEventType, EventTypeNode, LeafEventType
from .registry import (
    CALL_LOG,
    CUSTOM_TYPES,
    DEVICES_ATTACHED,
    EMAIL,
    EXIF,
    FILE_ACCESSED,
    FILE_CHANGED,
    FILE_CREATED,
    FILE_MODIFIED,
    FILE_SYSTEM,
    GPS_ROUTE,
    GPS_TRACKPOINT,
    INSTALLED_PROGRAM,
    LOG_ENTRY,
    MESSAGE,
    MISC_TYPES,
    OTHER,
    RECENT_DOCUMENTS,
    REGISTRY,
    REGISTRY_TYPE,
    ROOT_EVENT_TYPE,
    USER_CREATED,
    WEB_ACTIVITY,
    WEB_BOOKMARK,
    WEB_COOKIE,
    WEB_DOWNLOADS,
    WEB_FORM_ADDRESSES,
    WEB_FORM_AUTOFILL,
    WEB_HISTORY,
    WEB_SEARCH,
    TypeRegistry,
    all_base_types,
    build_registry,
    custom_types,
    file_system_types,
    misc_types,
    validate_registry,
    web_activity_types,
)
from .strategies import (
    DescriptionStrategy,
    ExtractorStrategy,
    PathStrategy,
    SingleDescriptionStrategy,
    derive_description,
    parse_description,
)

__version__ = "1.0.0"

__all__ = [
    # Records
    "AttributeType",
    "RecordType",
    "Record",
    "RecordStore",
    "InMemoryRecordStore",
    # Coercion
    "display_string_of",
    "direction_label",
    # Errors
    "EventTaxonomyError",
    "RecordLookupError",
    "RegistryConsistencyError",
    # Extractors
    "AttributeExtractor",
    "SingleAttributeExtractor",
    "EmptyExtractor",
    "TemplateExtractor",
    "MessageSummaryExtractor",
    "UrlHostExtractor",
    "UrlDomainExtractor",
    "SourceFileNameExtractor",
    "FunctionExtractor",
    # Strategies
    "DescriptionStrategy",
    "ExtractorStrategy",
    "PathStrategy",
    "SingleDescriptionStrategy",
    "derive_description",
    "parse_description",
    # Models
    "EventDescription",
    "DescriptionLevel",
    "TypeLevel",
    # Nodes
    "EventTypeNode",
    "LeafEventType",
    "ArtifactEventType",
    # Labels
    "DisplayNameSource",
    "BundleDisplayNames",
    "load_display_names",
    # Hierarchy
    "get_type_path",
    "format_type_path",
    "get_leaf_types",
    "format_type_tree",
    # Registry
    "TypeRegistry",
    "REGISTRY",
    "build_registry",
    "validate_registry",
    "all_base_types",
    "file_system_types",
    "web_activity_types",
    "misc_types",
    "custom_types",
    "ROOT_EVENT_TYPE",
    "FILE_SYSTEM",
    "WEB_ACTIVITY",
    "MISC_TYPES",
    "CUSTOM_TYPES",
    "FILE_MODIFIED",
    "FILE_ACCESSED",
    "FILE_CREATED",
    "FILE_CHANGED",
    "WEB_DOWNLOADS",
    "WEB_COOKIE",
    "WEB_BOOKMARK",
    "WEB_HISTORY",
    "WEB_SEARCH",
    "WEB_FORM_AUTOFILL",
    "WEB_FORM_ADDRESSES",
    "MESSAGE",
    "GPS_ROUTE",
    "GPS_TRACKPOINT",
    "CALL_LOG",
    "EMAIL",
    "RECENT_DOCUMENTS",
    "INSTALLED_PROGRAM",
    "EXIF",
    "DEVICES_ATTACHED",
    "LOG_ENTRY",
    "REGISTRY_TYPE",
    "OTHER",
    "USER_CREATED",
]
