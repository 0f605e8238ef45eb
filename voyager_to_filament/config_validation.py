from argparse import Namespace
import sys
import logging
import re
from typing import List, Optional, Dict, Any, Literal, Self
import yaml
import os
from pathlib import Path

from pydantic import (
    BaseModel,
    Field,
    ValidationError,
    field_validator,
    model_validator,
    ConfigDict,
)

from voyager_to_filament.constants import DefaultConfig, SupportedDatabases
from voyager_to_filament.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

PANEL_NAME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9_-]*$")

# CLI argument names that differ from their configuration key
CLI_TO_CONFIG_KEYS = {
    "model": "models",
    "all": "all_models",
}


# --- Pydantic Models for Configuration Schema ---
class DatabaseSettings(BaseModel):
    """Schema for a single database connection within the DATABASES dict."""

    ENGINE: str = Field(
        ...,
        min_length=1,
        description="Django database engine (e.g., 'django.db.backends.mysql').",
    )
    NAME: str = Field(..., min_length=1, description="Database name.")
    USER: Optional[str] = Field(default=None, description="Database user.")
    PASSWORD: Optional[str] = Field(default=None, description="Database password.")
    HOST: Optional[str] = Field(default=None, description="Database host address.")
    PORT: Optional[int] = Field(default=None, description="Database port number.")
    OPTIONS: Dict[str, Any] = Field(
        default_factory=dict, description="Database engine specific options."
    )

    @field_validator("ENGINE")
    @classmethod
    def validate_engine(cls, v: str) -> str:
        """Ensure engine is a supported Django database engine."""
        if v not in SupportedDatabases.SUPPORTED:
            raise ValueError(
                f"Database engine: {v} is not supported. "
                f"Supported engines are: {', '.join(SupportedDatabases.SUPPORTED)}"
            )
        return v

    @field_validator("PORT", mode="before")
    @classmethod
    def validate_port(cls, v: Any) -> Optional[int]:
        """Ensure port is a number or string representation of one, and within range."""
        if v is None or v == "":
            return None
        if isinstance(v, bool):
            raise ValueError("Port must be an integer or string containing digits, got bool")
        if isinstance(v, int):
            port_num = v
        elif isinstance(v, str):
            if not v.isdigit():
                raise ValueError(
                    f"Port must be a number or string containing only digits, got '{v}'"
                )
            port_num = int(v)
        else:
            raise ValueError(
                f"Port must be an integer or string containing digits, got {type(v).__name__}"
            )

        if not 0 <= port_num <= 65535:
            raise ValueError(f"Port must be between 0 and 65535, got {port_num}")
        return port_num


class ToolConfigSchema(BaseModel):
    """Pydantic schema defining the expected structure and types for the configuration."""

    databases: Dict[str, DatabaseSettings] = Field(
        ...,
        description="Django DATABASES setting dictionary pointing at the Voyager database. "
        "Must contain a 'default' key.",
    )
    project_root: str = Field(
        DefaultConfig.PROJECT_ROOT,
        min_length=1,
        description="Root directory of the Laravel application receiving the resources.",
    )
    panel: str = Field(
        DefaultConfig.PANEL,
        min_length=1,
        description="Filament panel the generated resources belong to.",
    )
    models: Optional[List[str]] = Field(
        default=None,
        description="Optional list of Voyager model names to convert.",
    )
    all_models: bool = Field(
        default=False, description="Convert every Voyager BREAD definition."
    )
    force: bool = Field(
        default=False, description="Overwrite existing Filament resource files."
    )
    dry_run: bool = Field(
        default=False, description="Show the planned field mappings without writing files."
    )
    with_relationships: bool = Field(
        default=False, description="Render relationship fields using their BREAD details."
    )
    password_required_operations: List[Literal["create", "edit"]] = Field(
        default_factory=lambda: list(DefaultConfig.PASSWORD_REQUIRED_OPERATIONS),
        description="Form operations on which password fields are required.",
    )

    # Internal field, usually added by load_config if not provided by user
    SECRET_KEY: Optional[str] = Field(
        default=None, description="Internal secret key for Django setup."
    )

    # --- Custom Field Validators ---

    @field_validator("panel")
    @classmethod
    def check_panel_name(cls, v: str) -> str:
        """Panel names become PHP namespace segments."""
        v = v.strip()
        if not PANEL_NAME_PATTERN.match(v):
            raise ValueError(
                f"'{v}' is not a valid panel name. Use letters, digits, '-' or '_' "
                "and start with a letter."
            )
        return v

    @field_validator("models", mode="before")
    @classmethod
    def check_model_names_list(cls, v: Optional[Any]) -> Optional[List[str]]:
        """Ensure requested model names are non-empty strings."""
        if v is None:
            return None
        if isinstance(v, str):
            v = [v]
        if not isinstance(v, list):
            raise ValueError("models must be a list of model names.")
        processed_list = []
        for index, item in enumerate(v):
            if not isinstance(item, str):
                raise ValueError(
                    f"Item at index {index} must be a string, found: {type(item).__name__}"
                )
            stripped_item = item.strip()
            if not stripped_item:
                raise ValueError(
                    f"Item at index {index} cannot be empty or just whitespace."
                )
            processed_list.append(stripped_item)
        return processed_list or None

    @field_validator("password_required_operations")
    @classmethod
    def dedupe_operations(cls, v: List[str]) -> List[str]:
        return list(dict.fromkeys(v))

    @model_validator(mode="after")
    def check_database_and_selection(self) -> Self:
        """Perform cross-field validation checks."""
        if self.databases is not None and "default" not in self.databases:
            raise ValueError(
                "The 'databases' configuration dictionary must contain a 'default' key."
            )

        if self.all_models and self.models:
            logger.warning(
                "Both 'all_models' and 'models' are set. Only the listed models will be converted."
            )

        return self

    model_config = ConfigDict(
        extra="ignore",  # Allow and ignore extra fields from input dict
    )


# --- Validation Function ---
def validate_and_parse_config(config_dict: Dict[str, Any]) -> ToolConfigSchema:
    """
    Validates a raw configuration dictionary against the ToolConfigSchema.
    Exits with error messages if validation fails.
    """
    try:
        validated_config = ToolConfigSchema.model_validate(config_dict)
        logger.debug(
            "Configuration dictionary parsed and validated successfully against schema."
        )
        return validated_config
    except ValidationError as e:
        logger.critical(
            "Configuration validation failed! Please check your config file or arguments."
        )
        print("\n--- Configuration Errors ---", file=sys.stderr)
        for error in e.errors():
            loc_parts = [str(loc_item) for loc_item in error.get("loc", ())]
            loc_str = " -> ".join(loc_parts) if loc_parts else "Model Level"
            msg = error.get("msg", "Unknown validation error")

            print(f"  - Location: '{loc_str}'", file=sys.stderr)
            print(f"    Error:    {msg}", file=sys.stderr)

            if "databases" in loc_parts or (not loc_parts and "databases" in msg):
                print(
                    "    Hint:     Provide a Django DATABASES mapping under 'databases' "
                    "in the config file (see README).",
                    file=sys.stderr,
                )

        print("----------------------------", file=sys.stderr)
        sys.exit(1)


def load_config(config_path: Optional[str], cli_args: Namespace) -> ToolConfigSchema:
    """
    Loads configuration from YAML file, merges with CLI arguments,
    validates the result, and returns a validated Pydantic model instance.
    Exits with error messages if validation fails.

    Raises:
        ConfigurationError: If the project root is not an existing directory
    """
    raw_config: Dict[str, Any] = {}

    # 1. Load from YAML file if path is provided
    if config_path:
        config_file = Path(config_path)
        if config_file.is_file():
            try:
                with open(config_file, "r", encoding="utf-8") as f:
                    yaml_config = yaml.safe_load(f)
            except yaml.YAMLError as e:
                logger.error(f"Error parsing YAML file {config_path}: {e}")
                logger.warning("Proceeding with defaults and CLI arguments only.")
                yaml_config = None
            if yaml_config and isinstance(yaml_config, dict):
                raw_config.update(yaml_config)
                logger.debug(f"Loaded configuration from {config_path}")
            elif yaml_config:
                logger.warning(
                    f"Content in config file {config_path} is not a dictionary. Ignoring file content."
                )
        else:
            logger.warning(
                f"Config file not found at {config_path}. Using defaults and CLI arguments."
            )

    # 2. Override with CLI arguments (only those explicitly provided)
    overridden_keys = set()
    for key, value in vars(cli_args).items():
        key = CLI_TO_CONFIG_KEYS.get(key, key)
        if (
            value is not None and key != "databases" and key in ToolConfigSchema.model_fields
        ):
            raw_config[key] = value
            overridden_keys.add(key)
    if overridden_keys:
        logger.debug(f"Overridden config keys from CLI arguments: {sorted(overridden_keys)}")

    # 3. Add internal SECRET_KEY if not present (needed for django.setup)
    if "SECRET_KEY" not in raw_config:
        raw_config["SECRET_KEY"] = os.urandom(50).hex()

    logger.info("Validating final configuration...")
    validated_config: ToolConfigSchema = validate_and_parse_config(raw_config)

    validated_config.project_root = str(Path(validated_config.project_root).resolve())
    if not Path(validated_config.project_root).is_dir():
        raise ConfigurationError(
            f"Project root '{validated_config.project_root}' is not a directory.",
            config_file=config_path,
            suggestions=["Point 'project_root' or --project-root at the Laravel application root"],
        )

    logger.info("Configuration loaded and validated successfully.")
    return validated_config
