# File: model_auto_generator/config_validation.py
from argparse import Namespace
import logging
import keyword
from typing import List, Optional, Dict, Any, Literal, Self
import yaml
from pathlib import Path

from pydantic import (
    BaseModel,
    Field,
    ValidationError,
    field_validator,
    model_validator,
    ConfigDict,
)

from model_auto_generator.constants import DefaultConfig, SUPPORTED_ON_DELETE
from model_auto_generator.exceptions import ConfigurationError
from model_auto_generator.mapper import MappingOptions
from model_auto_generator.ast_codegen.models import RenderOptions

logger = logging.getLogger(__name__)

# --- Helper Functions for Validation ---


def is_valid_python_identifier(name: str) -> bool:
    """Check if a string is a valid Python identifier and not a keyword."""
    return name.isidentifier() and not keyword.iskeyword(name)


def is_valid_dotted_path(path: str) -> bool:
    """Check if a string is a dotted path of identifiers (e.g. 'app.domain')."""
    return bool(path) and all(is_valid_python_identifier(part) for part in path.split("."))


# --- Pydantic Model for Configuration Schema ---
class ToolConfigSchema(BaseModel):
    """Pydantic schema defining the expected structure and types for the configuration."""

    enum_types: List[str] = Field(
        default_factory=lambda: list(DefaultConfig.ENUM_TYPES),
        description="Type names whose attributes are stored as the raw string of an enumeration.",
    )
    identifier_types: List[str] = Field(
        default_factory=lambda: list(DefaultConfig.IDENTIFIER_TYPES),
        description="Type names that make an 'id' attribute the primary key.",
    )
    model_suffix: str = Field(
        default=DefaultConfig.MODEL_SUFFIX,
        min_length=1,
        description="Suffix appended to a domain type name to name its persistence class.",
    )
    pluralization: Literal["simple", "inflect"] = Field(
        default=DefaultConfig.PLURALIZATION,
        description="Table name pluralization strategy.",
    )
    include_types: Optional[List[str]] = Field(
        default=None,
        description="Optional list of domain type names to generate models for.",
    )
    exclude_types: Optional[List[str]] = Field(
        default=None, description="Optional list of domain type names to skip."
    )
    detect_enums: bool = Field(
        default=DefaultConfig.DETECT_ENUMS,
        description="Treat Enum subclasses declared in the source as enumerations.",
    )
    strict_relations: bool = Field(
        default=DefaultConfig.STRICT_RELATIONS,
        description="Fail when a relation targets a type that is not declared.",
    )
    external_types: List[str] = Field(
        default_factory=list,
        description="Type names declared elsewhere that relations may target.",
    )
    on_delete: str = Field(
        default=DefaultConfig.ON_DELETE,
        description="Django on_delete behaviour for generated foreign keys.",
    )
    app_label: Optional[str] = Field(
        default=None, description="Optional Meta.app_label for generated models."
    )
    domain_module: Optional[str] = Field(
        default=None,
        description="Dotted module the generated models import the domain types from.",
    )
    output_file: str = Field(
        default=DefaultConfig.OUTPUT_FILE,
        min_length=1,
        description="Path of the generated models module.",
    )
    type_overrides: Dict[str, str] = Field(
        default_factory=dict,
        description="Domain type text -> Django field class name (e.g. {'str': 'CharField'}).",
    )
    decimal_max_digits: int = Field(default=DefaultConfig.DECIMAL_MAX_DIGITS, gt=0)
    decimal_places: int = Field(default=DefaultConfig.DECIMAL_PLACES, ge=0)

    # --- Custom Field Validators using @field_validator ---

    @field_validator("model_suffix")
    @classmethod
    def check_suffix(cls, v: str) -> str:
        if not v.isidentifier():
            raise ValueError(f"'{v}' cannot be appended to a class name.")
        return v

    @field_validator("app_label")
    @classmethod
    def check_app_label(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not is_valid_python_identifier(v):
            raise ValueError(f"'{v}' is not a valid Python identifier or is a reserved keyword.")
        return v

    @field_validator("domain_module")
    @classmethod
    def check_domain_module(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not is_valid_dotted_path(v):
            raise ValueError(f"'{v}' is not a valid dotted module path.")
        return v

    @field_validator("on_delete")
    @classmethod
    def check_on_delete(cls, v: str) -> str:
        if v not in SUPPORTED_ON_DELETE:
            raise ValueError(
                f"on_delete '{v}' is not supported. Supported values are: {', '.join(SUPPORTED_ON_DELETE)}"
            )
        return v

    @field_validator("type_overrides")
    @classmethod
    def check_type_overrides(cls, v: Dict[str, str]) -> Dict[str, str]:
        for type_text, field_type in v.items():
            if not is_valid_python_identifier(field_type):
                raise ValueError(
                    f"Override for '{type_text}' must name a Django field class, got '{field_type}'."
                )
        return v

    # Use mode='before' to catch non-strings early
    @field_validator(
        "enum_types", "identifier_types", "include_types", "exclude_types", "external_types",
        mode="before",
    )
    @classmethod
    def check_type_names_list(cls, v: Optional[List[Any]]) -> Optional[List[str]]:
        """Ensure items in type name lists are non-empty strings."""
        if v is None:
            return None
        if not isinstance(v, list):
            raise ValueError("Type name options must be lists.")
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
        return processed_list

    @field_validator("identifier_types")
    @classmethod
    def check_identifier_types(cls, v: List[str]) -> List[str]:
        # Primary keys default to uuid.uuid4, so only UUID spellings qualify
        unsupported = [name for name in v if name not in DefaultConfig.IDENTIFIER_TYPES]
        if unsupported:
            raise ValueError(
                f"Unsupported identifier types {unsupported}; expected a subset of {DefaultConfig.IDENTIFIER_TYPES}"
            )
        return v

    # --- Custom Model Validator using @model_validator ---
    @model_validator(mode="after")
    def check_type_filters(self) -> Self:
        """Perform cross-field validation checks."""
        if self.include_types and self.exclude_types:
            overlap = set(self.include_types) & set(self.exclude_types)
            if overlap:
                raise ValueError(
                    f"Types cannot be both included and excluded: {', '.join(sorted(overlap))}"
                )
        if self.on_delete == "SET_NULL":
            logger.warning(
                "'on_delete: SET_NULL' requires nullable foreign keys, but relation slots are generated non-null."
            )
        return self

    model_config = ConfigDict(
        extra="forbid",  # Misspelled options are errors, not silently ignored
    )

    # --- Derived option groups ---

    def mapping_options(self) -> MappingOptions:
        return MappingOptions(
            type_overrides=dict(self.type_overrides),
            decimal_max_digits=self.decimal_max_digits,
            decimal_places=self.decimal_places,
        )

    def render_options(self) -> RenderOptions:
        return RenderOptions(
            mapping=self.mapping_options(),
            on_delete=self.on_delete,
            app_label=self.app_label,
        )


# --- Validation Function ---
def validate_and_parse_config(config_dict: Dict[str, Any], config_file: Optional[str] = None) -> ToolConfigSchema:
    """
    Validates a raw configuration dictionary against the ToolConfigSchema.

    Raises:
        ConfigurationError: With one context entry per invalid option
    """
    try:
        validated_config = ToolConfigSchema.model_validate(config_dict)
        logger.debug(
            "Configuration dictionary parsed and validated successfully against schema."
        )
        return validated_config
    except ValidationError as e:
        context = {}
        for error in e.errors():
            loc_parts = [str(loc_item) for loc_item in error.get("loc", ())]
            loc_str = " -> ".join(loc_parts) if loc_parts else "Model Level"
            context[loc_str] = error.get("msg", "Unknown validation error")
        raise ConfigurationError(
            "Configuration validation failed", config_file=config_file, context=context
        ) from e


def load_config(config_path: Optional[str], cli_args: Optional[Namespace] = None) -> ToolConfigSchema:
    """
    Loads configuration from YAML file, merges with CLI arguments,
    validates the result, and returns a validated Pydantic model instance.
    """
    raw_config: Dict[str, Any] = {}

    # 1. Load from YAML file if path is provided
    if config_path:
        config_file = Path(config_path)
        if not config_file.is_file():
            raise ConfigurationError(f"Config file not found at {config_path}", config_file=config_path)
        try:
            with open(config_file, "r", encoding="utf-8") as f:
                yaml_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Error parsing YAML file: {e}", config_file=config_path) from e

        if yaml_config and isinstance(yaml_config, dict):
            raw_config.update(yaml_config)
            logger.debug(f"Loaded configuration from {config_path}")
        elif yaml_config:
            raise ConfigurationError(
                "Configuration file must contain a mapping of options", config_file=config_path
            )

    # 2. Override with CLI arguments (only those explicitly provided)
    if cli_args is not None:
        overridden_keys = set()
        for key, value in vars(cli_args).items():
            if value is not None and key in ToolConfigSchema.model_fields:
                raw_config[key] = value
                overridden_keys.add(key)
        if overridden_keys:
            logger.debug(f"Overridden config keys from CLI arguments: {overridden_keys}")

    # 3. Validate
    logger.debug("Validating final configuration...")
    return validate_and_parse_config(raw_config, config_file=config_path)
