"""
Description strategies: how a leaf event type turns a record into its
full, medium and short descriptions.

The set of strategies is closed. Each case is a frozen dataclass and the
two operations dispatch with an exhaustive match, so a new case fails
loudly until both operations handle it.
"""

from dataclasses import dataclass
from typing import Mapping, Optional, Tuple, Union

from .attributes import AttributeType, Record, RecordStore
from .coercion import display_string_of
from .errors import RecordLookupError
from .extractors import AttributeExtractor
from .models import EventDescription

_SEPARATORS = ("/", "\\")


@dataclass(frozen=True)
class ExtractorStrategy:
    """One independent extractor per description level."""

    full: AttributeExtractor
    medium: AttributeExtractor
    short: AttributeExtractor


@dataclass(frozen=True)
class PathStrategy:
    """
    Describe an event by a file-system path.

    Attributes:
        path_attribute: Attribute holding the path, or None to use the
            record's inherent path
    """

    path_attribute: Optional[AttributeType] = None


@dataclass(frozen=True)
class SingleDescriptionStrategy:
    """One pre-formatted attribute reused verbatim at every level."""

    description_attribute: AttributeType = AttributeType.TSK_DESCRIPTION


DescriptionStrategy = Union[ExtractorStrategy, PathStrategy, SingleDescriptionStrategy]


def split_path(path: str) -> Tuple[str, str]:
    """
    Split a path into its containing directory and final segment.

    Args:
        path: File-system path using "/" or "\\" separators

    Returns:
        (directory, name). The directory is "" when the path has no separator
        and the bare separator when the name sits at the root.
    """
    cut = max(path.rfind(sep) for sep in _SEPARATORS)
    if cut < 0:
        return "", path
    if cut == 0:
        return path[:1], path[1:]
    return path[:cut], path[cut + 1:]


def describe_path(path: str) -> EventDescription:
    """Full path, containing directory and file name as a description."""
    directory, name = split_path(path)
    return EventDescription(full=path, medium=directory, short=name)


def _path_of(strategy: PathStrategy, record: Record) -> str:
    if strategy.path_attribute is None:
        return record.path or ""
    return display_string_of(record.get(strategy.path_attribute))


def _derive_with_extractors(
    strategy: ExtractorStrategy, record: Record, store: Optional[RecordStore]
) -> EventDescription:
    fragments = {}
    failure: Optional[RecordLookupError] = None
    for level in ("full", "medium", "short"):
        extractor = getattr(strategy, level)
        try:
            fragments[level] = extractor.extract(record, store)
        except RecordLookupError as e:
            fragments[level] = ""
            failure = failure or e

    description = EventDescription(**fragments)
    if failure is not None:
        failure.partial = description
        raise failure
    return description


def derive_description(
    strategy: DescriptionStrategy,
    record: "Record | Mapping | str",
    store: Optional[RecordStore] = None,
) -> EventDescription:
    """
    Derive the three descriptions of a record.

    Args:
        strategy: Strategy of the record's event type
        record: Record, attribute bag, or inherent file-system path
        store: Record store for strategies that resolve external objects

    Returns:
        The derived EventDescription

    Raises:
        RecordLookupError: If an extractor needs the record store and the
            lookup fails. The error's ``partial`` holds every level that
            could still be derived.
    """
    record = Record.coerce(record)
    match strategy:
        case ExtractorStrategy():
            return _derive_with_extractors(strategy, record, store)
        case PathStrategy():
            return describe_path(_path_of(strategy, record))
        case SingleDescriptionStrategy():
            text = display_string_of(record.get(strategy.description_attribute))
            return EventDescription(full=text, medium=text, short=text)
        case _:
            raise TypeError(f"Unknown description strategy: {strategy!r}")


def parse_description(
    strategy: DescriptionStrategy | None,
    full: str,
    medium: str,
    short: str,
) -> EventDescription:
    """
    Rebuild a description from its stored strings.

    Path strategies treat ``full`` as the path and recompute the other two
    levels. Every other strategy returns the strings unchanged.
    """
    match strategy:
        case PathStrategy():
            return describe_path(full or "")
        case ExtractorStrategy() | SingleDescriptionStrategy() | None:
            return EventDescription(full=full, medium=medium, short=short)
        case _:
            raise TypeError(f"Unknown description strategy: {strategy!r}")
