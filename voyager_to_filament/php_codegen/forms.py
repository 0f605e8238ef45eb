"""
Filament Form Schema Generator

This module turns the add/edit rows of a BREAD definition into the Filament
``<Model>Form`` schema class.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

from voyager_to_filament.constants import (
    DefaultConfig,
    FieldNames,
    OVERFLOW_SECTION_TITLE,
    RICH_EDITOR_TOOLBAR_BUTTONS,
    SECTION_TITLES,
)
from voyager_to_filament.domain.field_mapping import VoyagerFieldType, map_field_type
from voyager_to_filament.domain.models import DataRow, DataType, FormField, FormSection
from voyager_to_filament.domain.relationships import RelationshipCache
from voyager_to_filament.php_codegen.base import (
    php_array,
    php_list,
    php_string,
    php_value,
    render_template,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldContext:
    """Everything an option renderer may consult for one data row."""

    row: DataRow
    model_name: str
    relationship_cache: Optional[RelationshipCache] = None
    password_required_operations: Sequence[str] = DefaultConfig.PASSWORD_REQUIRED_OPERATIONS

    @property
    def details(self) -> dict:
        return self.row.details


OptionRenderer = Callable[[FieldContext], List[str]]

FORM_OPTION_RENDERERS: Dict[VoyagerFieldType, OptionRenderer] = {}


def form_options(*field_types: VoyagerFieldType):
    """Register an option renderer for one or more Voyager field types."""
    def decorator(func: OptionRenderer) -> OptionRenderer:
        for field_type in field_types:
            FORM_OPTION_RENDERERS[field_type] = func
        return func
    return decorator


@form_options(VoyagerFieldType.IMAGE)
def _image_options(ctx: FieldContext) -> List[str]:
    options = ["image()", "directory('images')", "visibility('public')"]
    resize = ctx.details.get("resize")
    if isinstance(resize, dict) and resize.get("width") is not None and resize.get("height") is not None:
        options.append(f"imageResizeTargetWidth({php_string(resize['width'])})")
        options.append(f"imageResizeTargetHeight({php_string(resize['height'])})")
    if "quality" in ctx.details:
        options.append("imagePreviewHeight('250')")
    return options


@form_options(VoyagerFieldType.FILE)
def _file_options(ctx: FieldContext) -> List[str]:
    options = ["directory('files')", "visibility('public')"]
    allowed = ctx.details.get("allowed")
    if isinstance(allowed, list):
        extensions = [f".{str(ext).lstrip('.')}" for ext in allowed]
        options.append(f"acceptedFileTypes({php_list(extensions)})")
    return options


@form_options(VoyagerFieldType.SELECT_DROPDOWN, VoyagerFieldType.RADIO_BTN)
def _choice_options(ctx: FieldContext) -> List[str]:
    if ctx.row.options is None:
        return []
    return [f"options({php_array(ctx.row.options)})"]


@form_options(VoyagerFieldType.SELECT_MULTIPLE)
def _multiple_choice_options(ctx: FieldContext) -> List[str]:
    return ["multiple()"] + _choice_options(ctx)


@form_options(VoyagerFieldType.NUMBER)
def _number_options(ctx: FieldContext) -> List[str]:
    options = ["numeric()"]
    for key, method in (("min", "minValue"), ("max", "maxValue"), ("step", "step")):
        if ctx.details.get(key) is not None:
            options.append(f"{method}({php_value(ctx.details[key])})")
    return options


def password_required_condition(operations: Sequence[str]) -> str:
    """Closure making a password required only on the given form operations."""
    operations = list(operations)
    if len(operations) == 1:
        return f"required(fn (string $operation): bool => $operation === {php_string(operations[0])})"
    return (
        "required(fn (string $operation): bool => "
        f"in_array($operation, {php_list(operations)}, true))"
    )


@form_options(VoyagerFieldType.PASSWORD)
def _password_options(ctx: FieldContext) -> List[str]:
    options = [
        "password()",
        "revealable()",
        "dehydrateStateUsing(fn ($state) => Hash::make($state))",
        "dehydrated(fn ($state) => filled($state))",
    ]
    if ctx.password_required_operations:
        options.append(password_required_condition(ctx.password_required_operations))
    return options


@form_options(VoyagerFieldType.TEXT_AREA)
def _text_area_options(ctx: FieldContext) -> List[str]:
    rows = ctx.details.get("rows")
    options = [f"rows({php_value(rows if rows is not None else 4)})"]
    if ctx.details.get("max_length") is not None:
        options.append(f"maxLength({php_value(ctx.details['max_length'])})")
    return options


@form_options(VoyagerFieldType.RICH_TEXT_BOX)
def _rich_text_options(ctx: FieldContext) -> List[str]:
    return [
        f"toolbarButtons({php_list(RICH_EDITOR_TOOLBAR_BUTTONS)})",
        "fileAttachmentsDisk('public')",
        "fileAttachmentsDirectory('attachments')",
    ]


@form_options(VoyagerFieldType.CHECKBOX)
def _checkbox_options(ctx: FieldContext) -> List[str]:
    return ["inline(false)"]


@form_options(VoyagerFieldType.TEXT)
def _text_options(ctx: FieldContext) -> List[str]:
    rule = ctx.row.validation_rule
    options = []
    if "email" in rule:
        options.append("email()")
    if "url" in rule:
        options.append("url()")
    return options


@form_options(VoyagerFieldType.RELATIONSHIP)
def _relationship_options(ctx: FieldContext) -> List[str]:
    if ctx.relationship_cache is None:
        return []
    relation = ctx.relationship_cache.get(ctx.model_name, ctx.row.field)
    if relation is None or not relation.related_model:
        return []

    options = [
        f"relationship(name: {php_string(relation.relationship_name)}, "
        f"titleAttribute: {php_string(relation.title_attribute)})"
    ]
    if relation.is_many_to_many:
        options.append("multiple()")
    options.extend(["searchable()", "preload()"])
    return options


def should_include_in_form(row: DataRow) -> bool:
    """A row is editable when it takes part in add or edit and is not reserved."""
    return (row.add or row.edit) and row.field not in FieldNames.RESERVED


def build_form_field(row: DataRow, ctx: FieldContext) -> FormField:
    """Build the Filament component declaration for one data row."""
    mapping = map_field_type(row.type)
    modifiers = [f"label({php_string(row.label)})"]

    field_type = VoyagerFieldType.parse(row.type)
    renderer = FORM_OPTION_RENDERERS.get(field_type)
    if renderer is not None:
        modifiers.extend(renderer(ctx))
    elif field_type is None:
        logger.debug(f"Unknown field type '{row.type}' for '{row.field}', using {mapping.component}.")

    # Passwords carry their own operation-scoped required() closure
    if row.required and field_type is not VoyagerFieldType.PASSWORD:
        modifiers.append("required()")

    return FormField(component=mapping.component, name=row.field, label=row.label, modifiers=modifiers)


def build_form_fields(
    rows: Sequence[DataRow],
    model_name: str,
    relationship_cache: Optional[RelationshipCache] = None,
    password_required_operations: Sequence[str] = DefaultConfig.PASSWORD_REQUIRED_OPERATIONS,
) -> List[FormField]:
    """Build the form fields of a BREAD definition, preserving row order."""
    fields = []
    for row in rows:
        if not should_include_in_form(row):
            continue
        ctx = FieldContext(
            row=row,
            model_name=model_name,
            relationship_cache=relationship_cache,
            password_required_operations=password_required_operations,
        )
        fields.append(build_form_field(row, ctx))
    return fields


def section_title(index: int) -> str:
    if index < len(SECTION_TITLES):
        return SECTION_TITLES[index]
    return OVERFLOW_SECTION_TITLE


def group_into_sections(
    fields: Sequence[FormField],
    threshold: int = DefaultConfig.SECTION_THRESHOLD,
    size: int = DefaultConfig.SECTION_SIZE,
) -> Optional[List[FormSection]]:
    """
    Split long forms into collapsible sections.

    Returns None when the form has ``threshold`` fields or fewer.
    """
    if len(fields) <= threshold:
        return None
    return [
        FormSection(title=section_title(index), fields=list(fields[start:start + size]))
        for index, start in enumerate(range(0, len(fields), size))
    ]


def generate_form_code(
    data_type: DataType,
    rows: Sequence[DataRow],
    namespace: str,
    relationship_cache: Optional[RelationshipCache] = None,
    password_required_operations: Sequence[str] = DefaultConfig.PASSWORD_REQUIRED_OPERATIONS,
) -> str:
    """Render the ``<Model>Form`` schema class."""
    fields = build_form_fields(
        rows,
        data_type.model_name,
        relationship_cache=relationship_cache,
        password_required_operations=password_required_operations,
    )
    sections = group_into_sections(fields)
    logger.debug(
        f"{data_type.model_basename}Form: {len(fields)} fields"
        + (f" in {len(sections)} sections" if sections else "")
    )
    return render_template(
        "form.php.j2",
        {
            "php_namespace": namespace,
            "class_name": f"{data_type.model_basename}Form",
            "fields": fields,
            "sections": sections,
        },
    )
