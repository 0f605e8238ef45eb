"""
Filament PHP Code Generator Module

This module renders the Filament 4 resource, form schema, table and page
classes for Voyager BREAD definitions.
"""

from .base import ArtifactWriter, render_template
from .forms import generate_form_code, build_form_fields, group_into_sections
from .tables import generate_table_code, build_table_columns, build_table_filters
from .resources import generate_resource_code
from .pages import generate_page_code, generate_pages_code
from .code_generator import ResourceArtifact, ResourceCodeGenerator


__all__ = [
    'ArtifactWriter',
    'render_template',
    'generate_form_code',
    'build_form_fields',
    'group_into_sections',
    'generate_table_code',
    'build_table_columns',
    'build_table_filters',
    'generate_resource_code',
    'generate_page_code',
    'generate_pages_code',
    'ResourceArtifact',
    'ResourceCodeGenerator',
]
