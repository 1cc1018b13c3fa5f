"""
Exception types raised by the event taxonomy.

Description derivation is total over missing attributes, so the only
runtime failure is the external record lookup. Registry errors indicate a
programming mistake in the type table and are raised at import time.
"""

from typing import List, Optional


class EventTaxonomyError(Exception):
    """Base class for all taxonomy errors."""


class RecordLookupError(EventTaxonomyError, LookupError):
    """
    An external record store could not resolve an object.

    Attributes:
        object_id: Object whose underlying file could not be resolved
        partial: Description derived from the remaining levels, with the
            failed level(s) left empty. Set by the strategy layer.
    """

    def __init__(self, message: str, object_id: Optional[int] = None, partial=None):
        super().__init__(message)
        self.object_id = object_id
        self.partial = partial


class RegistryConsistencyError(EventTaxonomyError, AssertionError):
    """The static type table does not describe a well-formed tree."""

    def __init__(self, issues: List[str]):
        super().__init__("Inconsistent event type registry:\n  " + "\n  ".join(issues))
        self.issues = list(issues)
