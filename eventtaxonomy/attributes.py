"""
Record and attribute vocabulary consumed by the taxonomy.

The storage engine that materializes records lives outside this package;
these types only describe the shape of what it hands over.
"""

from collections.abc import Mapping
from enum import Enum, IntEnum
from typing import Any, Dict, Optional, Protocol

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import RecordLookupError


class AttributeType(str, Enum):
    """
    Attribute types read by the description extractors.

    Member values equal their names so that bags keyed by plain strings and
    bags keyed by members are interchangeable.
    """

    TSK_COUNT = "TSK_COUNT"
    TSK_DATETIME = "TSK_DATETIME"
    TSK_DATETIME_ACCESSED = "TSK_DATETIME_ACCESSED"
    TSK_DATETIME_CREATED = "TSK_DATETIME_CREATED"
    TSK_DATETIME_SENT = "TSK_DATETIME_SENT"
    TSK_DATETIME_START = "TSK_DATETIME_START"
    TSK_DESCRIPTION = "TSK_DESCRIPTION"
    TSK_DEVICE_ID = "TSK_DEVICE_ID"
    TSK_DEVICE_MAKE = "TSK_DEVICE_MAKE"
    TSK_DEVICE_MODEL = "TSK_DEVICE_MODEL"
    TSK_DIRECTION = "TSK_DIRECTION"
    TSK_DOMAIN = "TSK_DOMAIN"
    TSK_EMAIL = "TSK_EMAIL"
    TSK_EMAIL_CONTENT_PLAIN = "TSK_EMAIL_CONTENT_PLAIN"
    TSK_EMAIL_FROM = "TSK_EMAIL_FROM"
    TSK_EMAIL_TO = "TSK_EMAIL_TO"
    TSK_GEO_LATITUDE = "TSK_GEO_LATITUDE"
    TSK_GEO_LATITUDE_END = "TSK_GEO_LATITUDE_END"
    TSK_GEO_LATITUDE_START = "TSK_GEO_LATITUDE_START"
    TSK_GEO_LONGITUDE = "TSK_GEO_LONGITUDE"
    TSK_GEO_LONGITUDE_END = "TSK_GEO_LONGITUDE_END"
    TSK_GEO_LONGITUDE_START = "TSK_GEO_LONGITUDE_START"
    TSK_LOCATION = "TSK_LOCATION"
    TSK_MESSAGE_TYPE = "TSK_MESSAGE_TYPE"
    TSK_NAME = "TSK_NAME"
    TSK_PATH = "TSK_PATH"
    TSK_PHONE_NUMBER = "TSK_PHONE_NUMBER"
    TSK_PROG_NAME = "TSK_PROG_NAME"
    TSK_READ_STATUS = "TSK_READ_STATUS"
    TSK_SUBJECT = "TSK_SUBJECT"
    TSK_TEXT = "TSK_TEXT"
    TSK_URL = "TSK_URL"
    TSK_VALUE = "TSK_VALUE"


class RecordType(IntEnum):
    """Record kinds matched by artifact event types, keyed by their stored ids."""

    TSK_WEB_BOOKMARK = 2
    TSK_WEB_COOKIE = 3
    TSK_WEB_HISTORY = 4
    TSK_WEB_DOWNLOAD = 5
    TSK_RECENT_OBJECT = 6
    TSK_GPS_TRACKPOINT = 7
    TSK_INSTALLED_PROG = 8
    TSK_DEVICE_ATTACHED = 11
    TSK_EMAIL_MSG = 13
    TSK_WEB_SEARCH_QUERY = 15
    TSK_METADATA_EXIF = 16
    TSK_MESSAGE = 24
    TSK_CALLLOG = 25
    TSK_GPS_ROUTE = 36
    TSK_WEB_FORM_AUTOFILL = 48
    TSK_WEB_FORM_ADDRESS = 49
    TSK_TL_EVENT = 52


def _attribute_name(attribute_type: Any) -> Any:
    if isinstance(attribute_type, AttributeType):
        return attribute_type.value
    return attribute_type


class Record(BaseModel):
    """
    A materialized forensic record.

    Attributes:
        object_id: Identifier of the object the record is attached to
        record_type: Kind of record (None for plain file-system events)
        path: Inherent path of a file-system event
        attributes: Sparse attribute bag keyed by attribute type name. Names
            outside AttributeType are kept and simply never read.
    """

    model_config = ConfigDict(frozen=True)

    object_id: int = 0
    record_type: Optional[RecordType] = None
    path: Optional[str] = None
    attributes: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("attributes", mode="before")
    @classmethod
    def normalize_keys(cls, v: Any) -> Any:
        if isinstance(v, Mapping):
            return {_attribute_name(k): value for k, value in v.items()}
        return v

    def get(self, attribute_type: AttributeType | str) -> Any:
        """Return the value of an attribute, or None when it is absent."""
        return self.attributes.get(_attribute_name(attribute_type))

    @classmethod
    def coerce(cls, obj: "Record | Mapping[str, Any] | str") -> "Record":
        """
        Build a Record from the shapes callers commonly hold.

        Args:
            obj: A Record, an attribute bag, or a file-system path

        Returns:
            A Record instance
        """
        if isinstance(obj, Record):
            return obj
        if isinstance(obj, str):
            return cls(path=obj)
        if isinstance(obj, Mapping):
            return cls(attributes=dict(obj))
        raise TypeError(f"Cannot build a Record from {type(obj).__name__}")


class RecordStore(Protocol):
    """
    External record store consulted for lookups outside the attribute bag.
    """

    def get_file_name(self, object_id: int) -> str:
        """
        Resolve the name of the file underlying an object.

        Raises:
            RecordLookupError: If the object is unknown to the store
        """
        ...


class InMemoryRecordStore:
    """
    Record store backed by a dict of object id -> file name.

    Args:
        file_names: Initial mapping of object ids to file names
    """

    def __init__(self, file_names: Mapping[int, str] | None = None):
        self._file_names: Dict[int, str] = dict(file_names or {})

    def add_file(self, object_id: int, name: str) -> None:
        self._file_names[object_id] = name

    def get_file_name(self, object_id: int) -> str:
        try:
            return self._file_names[object_id]
        except KeyError:
            raise RecordLookupError(
                f"No file found for object id {object_id}", object_id=object_id
            ) from None
