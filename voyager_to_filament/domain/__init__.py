"""
Domain module for the Voyager to Filament converter.

This module contains the BREAD metadata models, the field type mapping and the
relationship cache, separated from database access and PHP rendering.
"""

from .models import (
    DataType,
    DataRow,
    FieldMapping,
    FormField,
    FormSection,
    TableColumn,
    TableFilter,
    ConversionReport,
    parse_details,
)

from .field_mapping import (
    VoyagerFieldType,
    FALLBACK_MAPPING,
    map_field_type,
)

from .relationships import (
    RelationshipCache,
    RelationshipDetails,
    build_relationship_cache,
)

from .naming import (
    class_basename,
    studly_case,
    pluralize,
    panel_namespace,
    resources_namespace,
    app_model_class,
    qualify_model_names,
)

__all__ = [
    # Core models
    'DataType',
    'DataRow',
    'FieldMapping',
    'FormField',
    'FormSection',
    'TableColumn',
    'TableFilter',
    'ConversionReport',
    'parse_details',

    # Field mapping
    'VoyagerFieldType',
    'FALLBACK_MAPPING',
    'map_field_type',

    # Relationships
    'RelationshipCache',
    'RelationshipDetails',
    'build_relationship_cache',

    # Naming
    'class_basename',
    'studly_case',
    'pluralize',
    'panel_namespace',
    'resources_namespace',
    'app_model_class',
    'qualify_model_names',
]
