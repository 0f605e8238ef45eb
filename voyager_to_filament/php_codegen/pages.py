"""
Filament Resource Page Generator

This module renders the List/Create/View/Edit page classes of a resource.
"""

import logging
from typing import Dict

from voyager_to_filament.constants import RESOURCE_PAGES
from voyager_to_filament.domain.models import DataType
from voyager_to_filament.php_codegen.base import render_template


logger = logging.getLogger(__name__)


def generate_page_code(data_type: DataType, prefix: str, resources_namespace: str) -> str:
    """Render one CRUD page class, e.g. ``ListPost`` for prefix ``List``."""
    base_class, header_actions = RESOURCE_PAGES[prefix]
    resource_name = data_type.resource_name
    return render_template(
        "page.php.j2",
        {
            "php_namespace": f"{resources_namespace}\\{resource_name}\\Pages",
            "resource_class": f"{resources_namespace}\\{resource_name}",
            "resource_name": resource_name,
            "class_name": f"{prefix}{data_type.model_basename}",
            "base_class": base_class,
            "header_actions": list(header_actions),
        },
    )


def generate_pages_code(data_type: DataType, resources_namespace: str) -> Dict[str, str]:
    """Render every page of a resource, keyed by page class name."""
    return {
        f"{prefix}{data_type.model_basename}": generate_page_code(data_type, prefix, resources_namespace)
        for prefix in RESOURCE_PAGES
    }
