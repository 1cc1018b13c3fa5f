"""
Shared pytest fixtures for the event taxonomy test suite.
"""

import pytest

from eventtaxonomy import REGISTRY, InMemoryRecordStore, Record, RecordType


@pytest.fixture
def registry():
    """The default, import-time registry."""
    return REGISTRY


@pytest.fixture
def record_store():
    """A store that knows one EXIF source file (object 42)."""
    return InMemoryRecordStore({42: "IMG_0001.jpg"})


@pytest.fixture
def message_record():
    """An incoming SMS with a phone number but no contact name."""
    return Record(
        object_id=7,
        record_type=RecordType.TSK_MESSAGE,
        attributes={
            "TSK_DIRECTION": "Incoming",
            "TSK_READ_STATUS": "Read",
            "TSK_PHONE_NUMBER": "555-1234",
            "TSK_SUBJECT": "hi",
            "TSK_MESSAGE_TYPE": "SMS",
            "TSK_TEXT": "see you at noon",
        },
    )
