"""
Filament Resource Code Generator

Renders every artifact of one Filament resource and lays them out under the
panel's resource directory.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from voyager_to_filament.constants import DefaultConfig, RESOURCE_PAGES
from voyager_to_filament.domain.models import DataRow, DataType
from voyager_to_filament.domain.naming import panel_namespace, resources_namespace
from voyager_to_filament.domain.relationships import RelationshipCache
from voyager_to_filament.exceptions import ResourceGenerationError
from voyager_to_filament.php_codegen.base import ArtifactWriter
from voyager_to_filament.php_codegen.forms import generate_form_code
from voyager_to_filament.php_codegen.pages import generate_page_code
from voyager_to_filament.php_codegen.resources import generate_resource_code
from voyager_to_filament.php_codegen.tables import generate_table_code

logger = logging.getLogger(__name__)


@dataclass
class ResourceArtifact:
    """A rendered PHP file and where it belongs."""

    component: str
    path: Path
    content: str


class ResourceCodeGenerator:
    """Generates the Filament resource, form, table and pages of a data type."""

    def __init__(
        self,
        project_root: Path,
        panel: str = DefaultConfig.PANEL,
        relationship_cache: Optional[RelationshipCache] = None,
        password_required_operations: Sequence[str] = DefaultConfig.PASSWORD_REQUIRED_OPERATIONS,
    ):
        self.project_root = Path(project_root)
        self.panel = panel
        self.relationship_cache = relationship_cache
        self.password_required_operations = tuple(password_required_operations)
        self.namespace = resources_namespace(panel)

    @property
    def resources_dir(self) -> Path:
        return self.project_root / "app" / "Filament" / panel_namespace(self.panel) / "Resources"

    def resource_path(self, data_type: DataType) -> Path:
        return self.resources_dir / f"{data_type.resource_name}.php"

    def form_path(self, data_type: DataType) -> Path:
        return self.resources_dir / data_type.resource_name / "Schemas" / f"{data_type.model_basename}Form.php"

    def table_path(self, data_type: DataType) -> Path:
        return self.resources_dir / data_type.resource_name / "Tables" / f"{data_type.plural_class_name}Table.php"

    def page_path(self, data_type: DataType, prefix: str) -> Path:
        return self.resources_dir / data_type.resource_name / "Pages" / f"{prefix}{data_type.model_basename}.php"

    def build_artifacts(self, data_type: DataType, rows: Sequence[DataRow]) -> List[ResourceArtifact]:
        """Render every artifact of a resource without touching the file system."""
        resource_name = data_type.resource_name
        component = "resource"
        try:
            artifacts = [
                ResourceArtifact(
                    "resource",
                    self.resource_path(data_type),
                    generate_resource_code(data_type, self.namespace),
                )
            ]
            component = "form"
            artifacts.append(
                ResourceArtifact(
                    "form",
                    self.form_path(data_type),
                    generate_form_code(
                        data_type,
                        rows,
                        f"{self.namespace}\\{resource_name}\\Schemas",
                        relationship_cache=self.relationship_cache,
                        password_required_operations=self.password_required_operations,
                    ),
                )
            )
            component = "table"
            artifacts.append(
                ResourceArtifact(
                    "table",
                    self.table_path(data_type),
                    generate_table_code(data_type, rows, f"{self.namespace}\\{resource_name}\\Tables"),
                )
            )
            component = "pages"
            for prefix in RESOURCE_PAGES:
                artifacts.append(
                    ResourceArtifact(
                        "page",
                        self.page_path(data_type, prefix),
                        generate_page_code(data_type, prefix, self.namespace),
                    )
                )
        except ResourceGenerationError:
            raise
        except Exception as e:
            raise ResourceGenerationError(
                f"Failed to render {component} of {resource_name}: {e}",
                resource=resource_name,
                component=component,
            ) from e
        return artifacts

    def generate(
        self, data_type: DataType, rows: Sequence[DataRow], writer: ArtifactWriter
    ) -> List[ResourceArtifact]:
        """Render and write a resource. Returns the artifacts actually written."""
        written = []
        for artifact in self.build_artifacts(data_type, rows):
            if writer.write(artifact.path, artifact.content):
                written.append(artifact)
        return written
