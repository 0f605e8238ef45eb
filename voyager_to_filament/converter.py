"""
Voyager BREAD to Filament conversion pipeline.

Loads the BREAD definitions, optionally caches relationship details, renders
and writes one Filament resource per data type, and reports the outcome.
"""

import json
import logging
from pathlib import Path
from typing import List, Optional

from voyager_to_filament.colored_logging import (
    log_highlight,
    log_progress,
    log_section,
    log_success,
)
from voyager_to_filament.config_validation import ToolConfigSchema
from voyager_to_filament.constants import FILAMENT_PACKAGE
from voyager_to_filament.domain.field_mapping import map_field_type
from voyager_to_filament.domain.models import ConversionReport, DataType
from voyager_to_filament.domain.relationships import RelationshipCache, build_relationship_cache
from voyager_to_filament.exceptions import FilamentNotDetectedError
from voyager_to_filament.introspection_django import (
    ensure_voyager_tables,
    load_data_rows,
    load_data_types,
    load_relationship_rows,
)
from voyager_to_filament.php_codegen.base import ArtifactWriter
from voyager_to_filament.php_codegen.code_generator import ResourceCodeGenerator


logger = logging.getLogger(__name__)


def is_filament_installed(project_root: Path) -> bool:
    """
    Detect Filament in a Laravel project.

    Filament counts as installed when ``composer.json`` requires it or the
    package is present under ``vendor/``.
    """
    project_root = Path(project_root)
    if (project_root / "vendor" / "filament" / "filament").is_dir():
        return True

    composer_file = project_root / "composer.json"
    if not composer_file.is_file():
        return False
    try:
        with open(composer_file, "r", encoding="utf-8") as f:
            composer = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(f"Could not read {composer_file}: {e}")
        return False
    if not isinstance(composer, dict):
        return False
    for section in ("require", "require-dev"):
        requirements = composer.get(section)
        if isinstance(requirements, dict) and FILAMENT_PACKAGE in requirements:
            return True
    return False


class VoyagerToFilamentConverter:
    """Runs a conversion for a validated configuration."""

    def __init__(self, config: ToolConfigSchema):
        self.config = config
        self.project_root = Path(config.project_root)
        self.relationship_cache: Optional[RelationshipCache] = None
        self.report = ConversionReport()

    def run(self) -> ConversionReport:
        """
        Execute the whole pipeline.

        Raises:
            PreconditionError: When the Voyager tables or Filament are missing
        """
        self.display_header()
        self.validate_environment()

        log_progress(logger, "Loading Voyager BREAD configurations...")
        data_types = load_data_types(self.config.models)
        if not data_types:
            logger.warning("No Voyager BREAD configurations found.")
            return self.report

        if self.config.with_relationships:
            self.cache_relationships(data_types)

        generator = ResourceCodeGenerator(
            self.project_root,
            panel=self.config.panel,
            relationship_cache=self.relationship_cache,
            password_required_operations=self.config.password_required_operations,
        )
        writer = ArtifactWriter(force=self.config.force)

        log_section(logger, "Resource Generation")
        for index, data_type in enumerate(data_types, start=1):
            log_progress(
                logger,
                f"[{index}/{len(data_types)}] Converting: "
                f"{data_type.singular_label} ({data_type.model_basename})",
            )
            self.convert_data_type(data_type, generator, writer)

        self.report.written_files = [str(path) for path in writer.written]
        self.report.skipped_files = [str(path) for path in writer.skipped]

        self.display_conversion_summary()
        if not self.config.dry_run:
            self.display_post_conversion_instructions(generator.resources_dir)
        return self.report

    def display_header(self) -> None:
        log_section(logger, "Voyager to Filament 4 Migration Tool")
        logger.info("Converting BREAD configurations to Filament 4 resources")
        if self.config.dry_run:
            log_highlight(logger, "Dry run: no files will be written.")

    def validate_environment(self) -> None:
        """Abort the run unless Voyager's tables and Filament are both present."""
        ensure_voyager_tables()
        if not is_filament_installed(self.project_root):
            raise FilamentNotDetectedError(str(self.project_root))
        logger.debug("Environment validated: Voyager tables and Filament found.")

    def cache_relationships(self, data_types: List[DataType]) -> None:
        log_progress(logger, "Analyzing relationships...")
        self.relationship_cache = build_relationship_cache(data_types, load_relationship_rows)
        log_highlight(logger, f"Found {len(self.relationship_cache)} relationship fields.")

    def convert_data_type(
        self, data_type: DataType, generator: ResourceCodeGenerator, writer: ArtifactWriter
    ) -> None:
        """Convert one data type. Failures are recorded, never raised."""
        resource_name = data_type.resource_name

        try:
            if self.config.dry_run:
                logger.info(f"   Would create: {resource_name}")
                self.show_field_preview(data_type)
                self.report.previewed.append(resource_name)
                return
            rows = load_data_rows(data_type.id)
            written = generator.generate(data_type, rows, writer)
        except Exception as e:
            logger.error(f"   Failed to convert {resource_name}: {e}", exc_info=logger.isEnabledFor(logging.DEBUG))
            self.report.failed[resource_name] = str(e)
            return

        if written:
            self.report.converted.append(resource_name)
            log_success(logger, f"Created: {resource_name} ({len(written)} files)")
        else:
            self.report.skipped.append(resource_name)
            logger.warning(f"   {resource_name} already exists. Use --force to overwrite.")

    def show_field_preview(self, data_type: DataType) -> None:
        """Log the field-to-component mapping a conversion would produce."""
        rows = load_data_rows(data_type.id)
        logger.info("   Fields to convert:")
        for row in rows:
            component = map_field_type(row.type).component
            logger.info(f"      • {row.field} ({row.type} → {component})")

    def display_conversion_summary(self) -> None:
        log_section(logger, "Conversion Summary")
        if self.config.dry_run:
            log_highlight(logger, f"Previewed: {len(self.report.previewed)} resources")
            for resource in self.report.previewed:
                logger.info(f"   • {resource}")
            return

        log_success(logger, f"Successfully converted: {len(self.report.converted)} resources")
        for resource in self.report.converted:
            logger.info(f"   • {resource}")

        if self.report.skipped:
            logger.warning(f"Skipped (already exist): {len(self.report.skipped)} resources")
            for resource in self.report.skipped:
                logger.info(f"   • {resource}")

        if self.report.failed:
            logger.error(f"Failed: {len(self.report.failed)} resources")
            for resource, reason in self.report.failed.items():
                logger.error(f"   • {resource}: {reason}")

    def display_post_conversion_instructions(self, resources_dir: Path) -> None:
        log_section(logger, "Next Steps")
        logger.info(f"1. Review generated resources in {resources_dir}")
        logger.info("2. Customize form layouts and add custom fields")
        logger.info("3. Review table columns and add custom filters")
        logger.info("4. Set up relationship managers for complex relationships")
        logger.info("5. Customize navigation groups and icons")
        logger.info("6. Test all CRUD operations thoroughly")
        logger.info("7. Consider removing Voyager dependencies when satisfied")
        logger.info("Tips:")
        logger.info("   • Use --dry-run first to preview changes")
        logger.info("   • Use --with-relationships to include relationship fields")
        logger.info(f"   • Visit /{self.config.panel} to see your new Filament panel")
        logger.info("Documentation: https://filamentphp.com/docs/4.x")
