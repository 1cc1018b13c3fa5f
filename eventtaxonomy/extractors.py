"""
Attribute extractors: the building blocks of event descriptions.

An extractor turns a record into one description fragment. Every extractor
is total over missing data: an absent attribute contributes "" and never
raises. The one exception is SourceFileNameExtractor, which consults an
external record store and reports lookup failures to the caller.
"""

import logging
from typing import Any, Callable, Optional, Protocol
from urllib.parse import urlsplit

import tldextract

from .attributes import AttributeType, Record, RecordStore
from .coercion import direction_label, display_string_of
from .errors import RecordLookupError

logger = logging.getLogger(__name__)

# Bundled public suffix list snapshot, no network fetch. Private suffixes such
# as github.io count as public, so every user site is its own domain.
_suffix_extract = tldextract.TLDExtract(
    suffix_list_urls=(), cache_dir=None, include_psl_private_domains=True
)


class AttributeExtractor(Protocol):
    """
    Protocol defining the interface for description extractors.
    """

    def extract(self, record: Record, store: Optional[RecordStore] = None) -> str:
        """
        Produce one description fragment.

        Args:
            record: Record whose attribute bag is read
            store: Optional record store for lookups outside the bag

        Returns:
            The fragment, "" when the data is missing
        """
        ...


class SingleAttributeExtractor:
    """
    Display string of a single attribute.

    Args:
        attribute_type: Attribute to read
    """

    def __init__(self, attribute_type: AttributeType):
        self.attribute_type = AttributeType(attribute_type)

    def extract(self, record: Record, store: Optional[RecordStore] = None) -> str:
        return display_string_of(record.get(self.attribute_type))

    def __repr__(self) -> str:
        return f"SingleAttributeExtractor({self.attribute_type.value})"


class EmptyExtractor:
    """Placeholder for levels a type has nothing to say about."""

    def extract(self, record: Record, store: Optional[RecordStore] = None) -> str:
        return ""

    def __repr__(self) -> str:
        return "EmptyExtractor()"


class TemplateExtractor:
    """
    Format several attributes into one fragment.

    Each attribute is coerced on its own, so missing values leave a gap in
    the text rather than failing the whole fragment.

    Args:
        template: str.format template with positional fields
        *attribute_types: Attributes supplying the positional fields, in order

    Example:
        >>> TemplateExtractor("{0} to {1}", AttributeType.TSK_EMAIL_FROM,
        ...                   AttributeType.TSK_EMAIL_TO)
    """

    def __init__(self, template: str, *attribute_types: AttributeType):
        self.template = template
        self.attribute_types = tuple(AttributeType(a) for a in attribute_types)

    def extract(self, record: Record, store: Optional[RecordStore] = None) -> str:
        values = [display_string_of(record.get(a)) for a in self.attribute_types]
        return self.template.format(*values)

    def __repr__(self) -> str:
        names = ", ".join(a.value for a in self.attribute_types)
        return f"TemplateExtractor({self.template!r}, {names})"


class MessageSummaryExtractor:
    """
    One-line summary of a message: direction, read status, counterpart and
    subject, joined by single spaces.

    The counterpart is the contact name, or the phone number when no name is
    recorded. The direction word ("from"/"to") is only emitted when there is a
    counterpart to attach it to.
    """

    def extract(self, record: Record, store: Optional[RecordStore] = None) -> str:
        direction = record.get(AttributeType.TSK_DIRECTION)
        read_status = record.get(AttributeType.TSK_READ_STATUS)
        name = record.get(AttributeType.TSK_NAME)
        phone_number = record.get(AttributeType.TSK_PHONE_NUMBER)
        subject = record.get(AttributeType.TSK_SUBJECT)

        counterpart = name if name is not None else phone_number
        parts = [
            display_string_of(direction),
            display_string_of(read_status),
            "" if counterpart is None else direction_label(direction),
            display_string_of(counterpart),
            display_string_of(subject),
        ]
        return " ".join(parts)

    def __repr__(self) -> str:
        return "MessageSummaryExtractor()"


def url_host(value: str) -> str:
    """
    Host part of a URL, or of a bare host name / e-mail address.

    Returns the input unchanged when no host can be recovered.
    """
    value = value.strip()
    if not value:
        return ""
    try:
        parsed = urlsplit(value if "//" in value else "//" + value)
        host = parsed.hostname
    except ValueError:
        return value
    return host or value


def registrable_domain(host: str) -> str:
    """
    Reduce a host name to the domain a user registered.

    The domain is one label below the longest matching public suffix:
    "mail.google.com" becomes "google.com", "www.bbc.co.uk" becomes
    "bbc.co.uk" and "alice.github.io" stays as is. Hosts with no label below
    a known suffix, such as IP addresses and "localhost", are returned
    unchanged.
    """
    host = host.rstrip(".")
    if not host:
        return ""
    parts = _suffix_extract(host)
    if parts.domain and parts.suffix:
        return f"{parts.domain}.{parts.suffix}"
    return host


class UrlHostExtractor:
    """
    Host of a URL-valued attribute.

    Args:
        attribute_type: Attribute holding the URL
    """

    def __init__(self, attribute_type: AttributeType):
        self.attribute_type = AttributeType(attribute_type)

    def extract(self, record: Record, store: Optional[RecordStore] = None) -> str:
        return url_host(display_string_of(record.get(self.attribute_type)))

    def __repr__(self) -> str:
        return f"UrlHostExtractor({self.attribute_type.value})"


class UrlDomainExtractor(UrlHostExtractor):
    """Registrable domain of a URL-valued attribute."""

    def extract(self, record: Record, store: Optional[RecordStore] = None) -> str:
        return registrable_domain(super().extract(record, store))

    def __repr__(self) -> str:
        return f"UrlDomainExtractor({self.attribute_type.value})"


class SourceFileNameExtractor:
    """
    Name of the file the record was extracted from.

    Resolved through the record store by the record's object id. This is the
    only extractor that leaves the attribute bag; callers that want retries
    or caching wrap the store they pass in.

    Raises:
        RecordLookupError: If no store is given or the store cannot resolve
            the object
    """

    def extract(self, record: Record, store: Optional[RecordStore] = None) -> str:
        if store is None:
            logger.warning(f"No record store to resolve object {record.object_id}")
            raise RecordLookupError(
                f"A record store is required to resolve object {record.object_id}",
                object_id=record.object_id,
            )
        try:
            return display_string_of(store.get_file_name(record.object_id))
        except RecordLookupError:
            logger.warning(f"Record store could not resolve object {record.object_id}")
            raise
        except LookupError as e:
            logger.warning(f"Record store could not resolve object {record.object_id}: {e}")
            raise RecordLookupError(str(e), object_id=record.object_id) from e

    def __repr__(self) -> str:
        return "SourceFileNameExtractor()"


class FunctionExtractor:
    """
    Adapt a plain function into an extractor.

    The built-in taxonomy never needs one. It is the hook for callers who
    assemble their own ExtractorStrategy, e.g. for a custom event type
    rendered with derive_description.

    Args:
        func: Callable taking (record, store) and returning a string
        name: Optional label used in repr
    """

    def __init__(self, func: Callable[[Record, Optional[RecordStore]], Any], name: str | None = None):
        self.func = func
        self.name = name or getattr(func, "__name__", "function")

    def extract(self, record: Record, store: Optional[RecordStore] = None) -> str:
        return display_string_of(self.func(record, store))

    def __repr__(self) -> str:
        return f"FunctionExtractor({self.name})"
