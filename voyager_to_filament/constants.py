"""
Centralized constants for the Voyager to Filament converter.

The lookup tables here are plain data so they can be tested in isolation and
extended without touching the rendering logic.
"""

from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple


# =============================================================================
# CORE CONFIGURATION
# =============================================================================

class DefaultConfig:
    """Default configuration values."""

    PROJECT_ROOT = "."
    PANEL = "admin"
    PASSWORD_REQUIRED_OPERATIONS = ("create",)

    # Form layout
    SECTION_THRESHOLD = 8
    SECTION_SIZE = 6

    # Fallback pair for unrecognized Voyager field types
    FALLBACK_COMPONENT = "TextInput"
    FALLBACK_COLUMN = "TextColumn"


class VoyagerTables:
    """Names of the Voyager BREAD metadata tables."""

    DATA_TYPES = "data_types"
    DATA_ROWS = "data_rows"

    REQUIRED = (DATA_TYPES, DATA_ROWS)


class SupportedDatabases:
    """Django database engines Voyager installations are usually found on."""

    POSTGRESQL = 'django.db.backends.postgresql'
    MYSQL = 'django.db.backends.mysql'
    SQLITE = 'django.db.backends.sqlite3'

    SUPPORTED = [POSTGRESQL, MYSQL, SQLITE]


# =============================================================================
# FIELD TYPE MAPPINGS
# =============================================================================

# Voyager field type -> (Filament form component, Filament table column)
# A None column means the field is never shown in the listing table.
VOYAGER_TO_FILAMENT_MAP: Mapping[str, Tuple[str, Optional[str]]] = MappingProxyType({
    "text": ("TextInput", "TextColumn"),
    "text_area": ("Textarea", "TextColumn"),
    "rich_text_box": ("RichEditor", "TextColumn"),
    "code_editor": ("Textarea", "TextColumn"),
    "checkbox": ("Toggle", "IconColumn"),
    "radio_btn": ("Radio", "TextColumn"),
    "select_dropdown": ("Select", "TextColumn"),
    "select_multiple": ("Select", "TextColumn"),
    "file": ("FileUpload", "TextColumn"),
    "image": ("FileUpload", "ImageColumn"),
    "date": ("DatePicker", "TextColumn"),
    "time": ("TimePicker", "TextColumn"),
    "datetime": ("DateTimePicker", "TextColumn"),
    "timestamp": ("DateTimePicker", "TextColumn"),
    "number": ("TextInput", "TextColumn"),
    "password": ("TextInput", "TextColumn"),
    "color": ("ColorPicker", "ColorColumn"),
    "hidden": ("Hidden", None),
    "relationship": ("Select", "TextColumn"),
})


class FieldNames:
    """Field names with special meaning in BREAD definitions."""

    # Identity and timestamp fields never rendered as inputs or filters
    RESERVED = frozenset({"id", "created_at", "updated_at"})


# =============================================================================
# NAVIGATION LOOKUPS
# =============================================================================

DEFAULT_VOYAGER_ICON = "voyager-list"
DEFAULT_NAVIGATION_ICON = "heroicon-o-rectangle-stack"

# Voyager icon font class -> Heroicon name
NAVIGATION_ICON_MAP: Mapping[str, str] = MappingProxyType({
    "voyager-people": "heroicon-o-users",
    "voyager-person": "heroicon-o-user",
    "voyager-settings": "heroicon-o-cog-6-tooth",
    "voyager-news": "heroicon-o-newspaper",
    "voyager-photos": "heroicon-o-photo",
    "voyager-file-text": "heroicon-o-document-text",
    "voyager-categories": "heroicon-o-tag",
    "voyager-dashboard": "heroicon-o-home",
    "voyager-mail": "heroicon-o-envelope",
    "voyager-lock": "heroicon-o-lock-closed",
    "voyager-list": "heroicon-o-list-bullet",
})

DEFAULT_NAVIGATION_GROUP = "General"

# Model class basename -> navigation group
NAVIGATION_GROUP_MAP: Mapping[str, str] = MappingProxyType({
    "User": "User Management",
    "Role": "User Management",
    "Permission": "User Management",
    "Post": "Content",
    "Page": "Content",
    "Category": "Content",
    "Setting": "Settings",
    "Menu": "Navigation",
})


# =============================================================================
# FORM / TABLE FRAGMENTS
# =============================================================================

SECTION_TITLES: Tuple[str, ...] = ("Basic Information", "Additional Details")
OVERFLOW_SECTION_TITLE = "Extra Information"

RICH_EDITOR_TOOLBAR_BUTTONS: Tuple[str, ...] = (
    "attachFiles",
    "blockquote",
    "bold",
    "bulletList",
    "codeBlock",
    "h2",
    "h3",
    "italic",
    "link",
    "orderedList",
    "redo",
    "strike",
    "underline",
    "undo",
)

BOOLEAN_TRUE_ICON = "heroicon-o-check-badge"
BOOLEAN_FALSE_ICON = "heroicon-o-x-circle"

MANY_TO_MANY_RELATIONSHIP = "belongsToMany"


# =============================================================================
# PHP NAMESPACES
# =============================================================================

class Namespaces:
    """PHP namespace conventions of Laravel, Voyager and Filament."""

    APP = "App\\"
    APP_MODELS = "App\\Models\\"
    VOYAGER = "TCG\\"
    VOYAGER_MODELS = "TCG\\Voyager\\Models\\"
    FILAMENT_ROOT = "App\\Filament"

    # Prefixes tried, in order, when a bare model name is requested
    MODEL_CANDIDATE_PREFIXES = (APP_MODELS, APP, VOYAGER_MODELS)
    QUALIFIED_PREFIXES = (APP, VOYAGER)


# Page class prefix -> (Filament base page class, header actions)
RESOURCE_PAGES: Dict[str, Tuple[str, Tuple[str, ...]]] = {
    "List": ("ListRecords", ("CreateAction",)),
    "Create": ("CreateRecord", ()),
    "View": ("ViewRecord", ("EditAction",)),
    "Edit": ("EditRecord", ("ViewAction", "DeleteAction")),
}

FILAMENT_PACKAGE = "filament/filament"
