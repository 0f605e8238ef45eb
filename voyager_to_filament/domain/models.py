"""
Core domain models for the Voyager to Filament converter.

These models mirror the Voyager BREAD metadata rows and describe the pieces
of Filament code generated from them. They are independent of the database
backend and of the PHP templates.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional

from .naming import class_basename, studly_case, pluralize


logger = logging.getLogger(__name__)


def parse_details(raw: Any) -> Dict[str, Any]:
    """
    Parse a data row ``details`` payload into a dict.

    Voyager stores details as JSON text. Absent, malformed or non-object
    payloads resolve to an empty dict.
    """
    if raw is None:
        return {}
    if isinstance(raw, dict):
        return raw
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8", errors="replace")
    if not isinstance(raw, str) or not raw.strip():
        return {}
    try:
        parsed = json.loads(raw)
    except ValueError:
        logger.debug(f"Ignoring malformed details payload: {raw!r}")
        return {}
    return parsed if isinstance(parsed, dict) else {}


@dataclass(frozen=True)
class DataType:
    """A single ``data_types`` row: one BREAD-managed model."""

    id: int
    model_name: str
    name: str = ""
    slug: str = ""
    display_name_singular: str = ""
    display_name_plural: str = ""
    icon: Optional[str] = None

    @property
    def model_basename(self) -> str:
        return class_basename(self.model_name)

    @property
    def resource_name(self) -> str:
        return f"{self.model_basename}Resource"

    @property
    def plural_class_name(self) -> str:
        """StudlyCase plural label used for the table class name."""
        plural = studly_case(self.display_name_plural or "")
        return plural or pluralize(self.model_basename)

    @property
    def singular_label(self) -> str:
        return self.display_name_singular or self.model_basename

    @property
    def plural_label(self) -> str:
        return self.display_name_plural or pluralize(self.model_basename)


@dataclass(frozen=True)
class DataRow:
    """A single ``data_rows`` row: one field of a BREAD definition."""

    field: str
    type: str
    display_name: str = ""
    data_type_id: Optional[int] = None
    id: Optional[int] = None
    required: bool = False
    browse: bool = False
    read: bool = False
    edit: bool = False
    add: bool = False
    delete: bool = False
    details: Dict[str, Any] = field(default_factory=dict)
    order: int = 0

    @property
    def label(self) -> str:
        return self.display_name or self.field

    @property
    def validation_rule(self) -> str:
        validation = self.details.get("validation")
        if not isinstance(validation, dict):
            return ""
        rule = validation.get("rule")
        if isinstance(rule, (list, tuple)):
            return "|".join(str(part) for part in rule)
        return str(rule) if rule is not None else ""

    @property
    def options(self) -> Optional[Dict[str, Any]]:
        """Choice options; a JSON list is keyed by position like a PHP array."""
        options = self.details.get("options")
        if isinstance(options, list):
            return {str(index): value for index, value in enumerate(options)}
        return options if isinstance(options, dict) else None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "DataRow":
        """Build a DataRow from a raw database record."""
        return cls(
            id=record.get("id"),
            data_type_id=record.get("data_type_id"),
            field=record["field"],
            type=record.get("type") or "",
            display_name=record.get("display_name") or "",
            required=bool(record.get("required")),
            browse=bool(record.get("browse")),
            read=bool(record.get("read")),
            edit=bool(record.get("edit")),
            add=bool(record.get("add")),
            delete=bool(record.get("delete")),
            details=parse_details(record.get("details")),
            order=record.get("order") or 0,
        )


@dataclass(frozen=True)
class FieldMapping:
    """Filament counterparts of a Voyager field type."""

    component: str
    column: Optional[str]

    @property
    def is_browsable(self) -> bool:
        return self.column is not None


@dataclass
class FormField:
    """One Filament form component declaration."""

    component: str
    name: str
    label: str
    modifiers: List[str] = field(default_factory=list)


@dataclass
class FormSection:
    """A collapsible group of form fields."""

    title: str
    fields: List[FormField] = field(default_factory=list)


@dataclass
class TableColumn:
    """One Filament table column declaration."""

    column: str
    name: str
    label: str
    modifiers: List[str] = field(default_factory=list)


@dataclass
class TableFilter:
    """One Filament table filter declaration."""

    filter: str
    name: str
    modifiers: List[str] = field(default_factory=list)


@dataclass
class ConversionReport:
    """Outcome of a conversion run, used for end-of-run reporting."""

    converted: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    failed: Dict[str, str] = field(default_factory=dict)
    previewed: List[str] = field(default_factory=list)
    written_files: List[str] = field(default_factory=list)
    skipped_files: List[str] = field(default_factory=list)

    @property
    def has_failures(self) -> bool:
        return bool(self.failed)
