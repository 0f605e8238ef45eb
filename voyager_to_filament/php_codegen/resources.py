"""
Filament Resource Generator

This module renders the ``<Model>Resource`` class tying the form, table and
pages of one BREAD definition together.
"""

import logging
from typing import List, Tuple

from voyager_to_filament.constants import (
    DEFAULT_NAVIGATION_GROUP,
    DEFAULT_NAVIGATION_ICON,
    DEFAULT_VOYAGER_ICON,
    NAVIGATION_GROUP_MAP,
    NAVIGATION_ICON_MAP,
    RESOURCE_PAGES,
)
from voyager_to_filament.domain.models import DataType
from voyager_to_filament.domain.naming import app_model_class
from voyager_to_filament.php_codegen.base import render_template


logger = logging.getLogger(__name__)

# Page key -> route, in the order Filament lists them
PAGE_ROUTES: Tuple[Tuple[str, str, str], ...] = (
    ("index", "List", "/"),
    ("create", "Create", "/create"),
    ("view", "View", "/{record}"),
    ("edit", "Edit", "/{record}/edit"),
)


def navigation_icon(data_type: DataType) -> str:
    """Heroicon replacing the Voyager icon font class of a data type."""
    icon = data_type.icon or DEFAULT_VOYAGER_ICON
    return NAVIGATION_ICON_MAP.get(icon, DEFAULT_NAVIGATION_ICON)


def navigation_group(data_type: DataType) -> str:
    """Navigation group for a model, keyed by its class basename."""
    return NAVIGATION_GROUP_MAP.get(data_type.model_basename, DEFAULT_NAVIGATION_GROUP)


def page_routes(model_basename: str) -> List[Tuple[str, str, str]]:
    """(key, page class, route) entries of ``getPages()``."""
    return [
        (key, f"{prefix}{model_basename}", route)
        for key, prefix, route in PAGE_ROUTES
        if prefix in RESOURCE_PAGES
    ]


def generate_resource_code(data_type: DataType, namespace: str) -> str:
    """Render the ``<Model>Resource`` class."""
    model_basename = data_type.model_basename
    return render_template(
        "resource.php.j2",
        {
            "php_namespace": namespace,
            "resource_name": data_type.resource_name,
            "model_basename": model_basename,
            "model_class": app_model_class(data_type.model_name),
            "form_class": f"{model_basename}Form",
            "table_class": f"{data_type.plural_class_name}Table",
            "navigation_icon": navigation_icon(data_type),
            "navigation_group": navigation_group(data_type),
            "record_title_attribute": "name",
            "singular_label": data_type.singular_label,
            "plural_label": data_type.plural_label,
            "navigation_sort": 1,
            "pages": page_routes(model_basename),
        },
    )
