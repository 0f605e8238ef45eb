"""
Field mapping domain logic for the Voyager to Filament converter.

Maps Voyager BREAD field types to the Filament form component and table column
that replace them.
"""

from enum import Enum
from typing import Optional

from ..constants import VOYAGER_TO_FILAMENT_MAP, DefaultConfig
from .models import FieldMapping


class VoyagerFieldType(str, Enum):
    """Field types known to Voyager's BREAD builder."""

    TEXT = "text"
    TEXT_AREA = "text_area"
    RICH_TEXT_BOX = "rich_text_box"
    CODE_EDITOR = "code_editor"
    CHECKBOX = "checkbox"
    RADIO_BTN = "radio_btn"
    SELECT_DROPDOWN = "select_dropdown"
    SELECT_MULTIPLE = "select_multiple"
    FILE = "file"
    IMAGE = "image"
    DATE = "date"
    TIME = "time"
    DATETIME = "datetime"
    TIMESTAMP = "timestamp"
    NUMBER = "number"
    PASSWORD = "password"
    COLOR = "color"
    HIDDEN = "hidden"
    RELATIONSHIP = "relationship"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["VoyagerFieldType"]:
        """Return the member for ``value``, or None for unknown types."""
        try:
            return cls(value)
        except ValueError:
            return None


FALLBACK_MAPPING = FieldMapping(
    component=DefaultConfig.FALLBACK_COMPONENT,
    column=DefaultConfig.FALLBACK_COLUMN,
)


def map_field_type(field_type: Optional[str]) -> FieldMapping:
    """
    Map a Voyager field type to its Filament component and column.

    Unknown types degrade to the generic text input / text column pair.
    """
    pair = VOYAGER_TO_FILAMENT_MAP.get(field_type or "")
    if pair is None:
        return FALLBACK_MAPPING
    component, column = pair
    return FieldMapping(component=component, column=column)
