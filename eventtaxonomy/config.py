"""
Runtime settings for tools built on the taxonomy.

The library itself needs no configuration; these settings select the label
bundle and log level used by the command-line interface.
"""

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, field_validator

from .labels import BundleDisplayNames, load_display_names

LABELS_ENV = "EVENTTAXONOMY_LABELS"
LOG_LEVEL_ENV = "EVENTTAXONOMY_LOG_LEVEL"


class TaxonomySettings(BaseModel):
    """
    Settings for label lookup and logging.

    Attributes:
        labels_path: Optional JSON file of display-name overrides
        log_level: Logging level name
    """

    labels_path: Optional[Path] = None
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @classmethod
    def from_env(cls, **overrides) -> "TaxonomySettings":
        """
        Read settings from the environment, then apply explicit overrides.

        Overrides that are None are ignored so CLI options left unset fall
        back to the environment.
        """
        values = {}
        if os.environ.get(LABELS_ENV):
            values["labels_path"] = os.environ[LABELS_ENV]
        if os.environ.get(LOG_LEVEL_ENV):
            values["log_level"] = os.environ[LOG_LEVEL_ENV]
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def display_names(self) -> BundleDisplayNames:
        """Bundled labels, with overrides from ``labels_path`` when it loads."""
        overrides = load_display_names(self.labels_path) if self.labels_path else None
        return BundleDisplayNames(overrides)
