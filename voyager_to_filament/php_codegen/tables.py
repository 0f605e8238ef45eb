"""
Filament Table Generator

This module turns the browse rows of a BREAD definition into the Filament
``<Plural>Table`` class: columns, filters and the default record actions.
"""

import logging
from typing import Callable, Dict, List, Sequence

from voyager_to_filament.constants import (
    BOOLEAN_FALSE_ICON,
    BOOLEAN_TRUE_ICON,
    FieldNames,
)
from voyager_to_filament.domain.field_mapping import VoyagerFieldType, map_field_type
from voyager_to_filament.domain.models import DataRow, DataType, TableColumn, TableFilter
from voyager_to_filament.php_codegen.base import php_array, php_string, render_template


logger = logging.getLogger(__name__)

DEFAULT_COLUMN_OPTIONS = ["searchable()", "sortable()"]

COLUMN_OPTION_RENDERERS: Dict[VoyagerFieldType, Callable[[DataRow], List[str]]] = {
    VoyagerFieldType.CHECKBOX: lambda row: [
        "boolean()",
        f"trueIcon({php_string(BOOLEAN_TRUE_ICON)})",
        f"falseIcon({php_string(BOOLEAN_FALSE_ICON)})",
    ],
    VoyagerFieldType.DATE: lambda row: ["date()", "sortable()"],
    VoyagerFieldType.DATETIME: lambda row: ["dateTime()", "sortable()"],
    VoyagerFieldType.TIMESTAMP: lambda row: ["dateTime()", "sortable()"],
    VoyagerFieldType.IMAGE: lambda row: ["circular()", "height(50)"],
    VoyagerFieldType.TEXT: lambda row: _truncated_text_options(row),
    VoyagerFieldType.TEXT_AREA: lambda row: _truncated_text_options(row),
    VoyagerFieldType.RICH_TEXT_BOX: lambda row: ["html()", "limit(100)"],
}

# Voyager field type -> Filament filter class
FILTER_CLASSES: Dict[VoyagerFieldType, str] = {
    VoyagerFieldType.SELECT_DROPDOWN: "SelectFilter",
    VoyagerFieldType.CHECKBOX: "TernaryFilter",
    VoyagerFieldType.DATE: "Filter",
    VoyagerFieldType.DATETIME: "Filter",
}


def _truncated_text_options(row: DataRow) -> List[str]:
    return [
        "limit(50)",
        f"tooltip(fn (Model $record): ?string => $record->{{{php_string(row.field)}}})",
        "searchable()",
        "sortable()",
    ]


def should_include_in_table(row: DataRow) -> bool:
    """A row is listed when it is browsable and its type has a column."""
    return bool(row.browse) and map_field_type(row.type).is_browsable


def build_table_columns(rows: Sequence[DataRow]) -> List[TableColumn]:
    """Build the listing columns, preserving row order."""
    columns = []
    for row in rows:
        if not should_include_in_table(row):
            continue
        mapping = map_field_type(row.type)
        renderer = COLUMN_OPTION_RENDERERS.get(VoyagerFieldType.parse(row.type))
        options = renderer(row) if renderer else list(DEFAULT_COLUMN_OPTIONS)
        columns.append(
            TableColumn(
                column=mapping.column,
                name=row.field,
                label=row.label,
                modifiers=[f"label({php_string(row.label)})"] + options,
            )
        )
    return columns


def build_table_filters(rows: Sequence[DataRow]) -> List[TableFilter]:
    """Build filters for browsable select, checkbox and date rows."""
    filters = []
    for row in rows:
        if not row.browse or row.field in FieldNames.RESERVED:
            continue
        field_type = VoyagerFieldType.parse(row.type)
        filter_class = FILTER_CLASSES.get(field_type)
        if filter_class is None:
            continue
        modifiers = []
        if field_type is VoyagerFieldType.SELECT_DROPDOWN and row.options is not None:
            modifiers.append(f"options({php_array(row.options)})")
        filters.append(TableFilter(filter=filter_class, name=row.field, modifiers=modifiers))
    return filters


def generate_table_code(data_type: DataType, rows: Sequence[DataRow], namespace: str) -> str:
    """Render the ``<Plural>Table`` class."""
    columns = build_table_columns(rows)
    filters = build_table_filters(rows)
    logger.debug(
        f"{data_type.plural_class_name}Table: {len(columns)} columns, {len(filters)} filters"
    )
    return render_template(
        "table.php.j2",
        {
            "php_namespace": namespace,
            "class_name": f"{data_type.plural_class_name}Table",
            "columns": columns,
            "filters": filters,
            "default_sort_column": "created_at",
            "default_sort_direction": "desc",
        },
    )
