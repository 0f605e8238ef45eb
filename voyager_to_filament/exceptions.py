"""
Custom exception hierarchy for the Voyager to Filament converter.

Every error carries optional context and recovery suggestions so the CLI can
print a useful remediation hint before exiting.
"""

from typing import Dict, Any, Optional, List


class VoyagerToFilamentError(Exception):
    """
    Base exception for all converter errors.

    Provides rich context and error recovery guidance.
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        error_code: Optional[str] = None
    ):
        """
        Initialize the exception with context and recovery suggestions.

        Args:
            message: Human-readable error message
            context: Additional context about where/why the error occurred
            suggestions: List of potential solutions or next steps
            error_code: Unique error code for programmatic handling
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.suggestions = suggestions or []
        self.error_code = error_code

    def __str__(self) -> str:
        """Return formatted error message with context."""
        lines = [super().__str__()]

        if self.error_code:
            lines.append(f"Error Code: {self.error_code}")

        if self.context:
            lines.append("Context:")
            for key, value in self.context.items():
                lines.append(f"  {key}: {value}")

        if self.suggestions:
            lines.append("Suggestions:")
            for suggestion in self.suggestions:
                lines.append(f"  • {suggestion}")

        return "\n".join(lines)


class ConfigurationError(VoyagerToFilamentError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str, config_file: str = None, **kwargs):
        context = kwargs.get('context', {})
        if config_file:
            context['config_file'] = config_file

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Check the configuration file syntax",
                "Verify the 'databases' section contains a 'default' connection",
                "Check the README for configuration examples"
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="CONFIG_ERROR"
        )


class PreconditionError(VoyagerToFilamentError):
    """Raised when the environment cannot support a conversion run at all."""

    def __init__(self, message: str, error_code: str = "PRECONDITION_ERROR", **kwargs):
        super().__init__(
            message,
            context=kwargs.get('context', {}),
            suggestions=kwargs.get('suggestions', []),
            error_code=error_code
        )


class VoyagerTablesMissingError(PreconditionError):
    """Raised when the Voyager metadata tables are absent from the database."""

    def __init__(self, missing_tables: List[str], **kwargs):
        self.missing_tables = list(missing_tables)
        context = kwargs.get('context', {})
        context['missing_tables'] = ", ".join(self.missing_tables)
        context['required_tables'] = "data_types, data_rows"

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Ensure Voyager is properly installed and migrated",
                "Check that the 'default' database points at the Voyager database",
            ]

        super().__init__(
            "Voyager tables not found. Ensure Voyager is properly installed.",
            error_code="VOYAGER_TABLES_MISSING",
            context=context,
            suggestions=suggestions,
        )


class FilamentNotDetectedError(PreconditionError):
    """Raised when the target Laravel project does not have Filament installed."""

    def __init__(self, project_root: str, **kwargs):
        context = kwargs.get('context', {})
        context['project_root'] = project_root

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                'composer require filament/filament:"^4.0" -W',
                "php artisan filament:install --panels",
            ]

        super().__init__(
            "Filament 4 not detected. Please install Filament first.",
            error_code="FILAMENT_NOT_DETECTED",
            context=context,
            suggestions=suggestions,
        )


class ResourceGenerationError(VoyagerToFilamentError):
    """Raised when generating the artifacts of a single resource fails."""

    def __init__(self, message: str, resource: str = None, component: str = None, **kwargs):
        self.resource = resource
        context = kwargs.get('context', {})
        if resource:
            context['resource'] = resource
        if component:
            context['component'] = component  # e.g. 'form', 'table', 'pages'

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Check the BREAD field definitions of this model",
                "Verify the 'details' JSON of its data rows",
                "Re-run with --verbose for the full traceback",
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="RESOURCE_GENERATION_ERROR"
        )
