import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, FrozenSet, List, Optional

from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape

from model_auto_generator.ast_codegen.models import module_imports
from model_auto_generator.codegen_utils import format_python_code_using_black
from model_auto_generator.colored_logging import log_highlight
from model_auto_generator.config_validation import ToolConfigSchema
from model_auto_generator.constants import GenerationOptions
from model_auto_generator.domain.models import SynthesizedModel
from model_auto_generator.exceptions import CodeGenerationError
from model_auto_generator.introspection import ModuleInfo, introspect_module
from model_auto_generator.transform import ModelTransformer


logger = logging.getLogger(__name__)

# Define the path to the templates directory relative to this file
TEMPLATE_DIR = Path(__file__).parent / GenerationOptions.TEMPLATE_DIR


@dataclass
class GenerationResult:
    """Outcome of generating one models module."""
    models: List[SynthesizedModel] = field(default_factory=list)
    content: str = ""
    output_path: Optional[Path] = None  # None when nothing was written


def setup_jinja_env() -> Environment:
    """Sets up and returns the Jinja2 environment."""
    return Environment(
        loader=FileSystemLoader(TEMPLATE_DIR),
        # Generated Python must never be HTML-escaped
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def enum_registry_for(info: ModuleInfo, config: ToolConfigSchema) -> FrozenSet[str]:
    """Configured enumeration names, plus the ones declared in the module when detection is on."""
    registry = set(config.enum_types)
    if config.detect_enums:
        registry.update(info.enum_types)
    return frozenset(registry)


def known_types_for(info: ModuleInfo, config: ToolConfigSchema) -> Optional[List[str]]:
    """Relation targets that may be referenced; None trusts every target."""
    if not config.strict_relations:
        return None
    return info.declared_types + list(config.external_types)


def synthesize_models(info: ModuleInfo, config: ToolConfigSchema) -> List[SynthesizedModel]:
    """Runs the transform over every declaration of a module, in source order."""
    transformer = ModelTransformer(config)
    registry = enum_registry_for(info, config)
    known_types = known_types_for(info, config)
    if info.enum_types:
        log_highlight(logger, f"Detected enumerations: {', '.join(info.enum_types)}")
    logger.debug(f"Enumeration registry: {sorted(registry)}")

    models = []
    for declaration in info.declarations:
        model = transformer.transform(declaration, registry, known_types)
        logger.info(f"Generated '{model.class_name}' for '{model.domain_name}' (table '{model.table_name}')")
        models.append(model)
    return models


def render_models_module(
    models: List[SynthesizedModel],
    config: ToolConfigSchema,
    source_name: Optional[str] = None,
    env: Optional[Environment] = None,
) -> str:
    """Renders the complete models module and formats it with Black."""
    env = env or setup_jinja_env()
    context: Dict[str, Any] = {
        "source_name": source_name,
        "imports": module_imports([model.document for model in models], config.domain_module),
        "models": models,
    }
    try:
        template = env.get_template(GenerationOptions.MODELS_TEMPLATE)
        rendered_content = template.render(context)
    except TemplateError as e:
        raise CodeGenerationError(
            f"Error rendering template '{GenerationOptions.MODELS_TEMPLATE}': {e}",
            component="template",
        ) from e

    logger.debug("Formatting generated module using Black")
    return format_python_code_using_black(Path(config.output_file), rendered_content)


def write_models_module(output_path: Path, content: str) -> None:
    """Writes the module, creating parent directories as needed."""
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(content)
    except OSError as e:
        raise CodeGenerationError(
            f"Could not write generated models to '{output_path}': {e}",
            component="writer",
        ) from e
    logger.debug(f"Generated file: {output_path}")


def generate_models_module(
    source: str,
    config: Optional[ToolConfigSchema] = None,
    source_name: Optional[str] = None,
    write: bool = True,
) -> GenerationResult:
    """
    Generates the Django models module for every type declared in a source module.

    Args:
        source: Python source holding the domain type declarations
        config: Validated configuration; defaults when None
        source_name: Shown in the generated module docstring
        write: Write the module to config.output_file

    Returns:
        GenerationResult with the synthesized models and the formatted module text
    """
    config = config or ToolConfigSchema()
    info = introspect_module(
        source,
        module=config.domain_module,
        include_types=config.include_types,
        exclude_types=config.exclude_types,
    )
    for skipped in info.skipped_types:
        log_highlight(logger, f"Skipping '{skipped}' (filtered by include/exclude types)")

    if not info.declarations:
        logger.warning("No type declarations found; nothing to generate.")
        return GenerationResult()

    models = synthesize_models(info, config)
    content = render_models_module(models, config, source_name)

    output_path = None
    if write:
        output_path = Path(config.output_file)
        write_models_module(output_path, content)
    return GenerationResult(models=models, content=content, output_path=output_path)


def generate_models_from_file(
    source_path: str, config: Optional[ToolConfigSchema] = None, write: bool = True
) -> GenerationResult:
    """Reads a domain module from disk and generates its models module."""
    path = Path(source_path)
    try:
        source = path.read_text(encoding="utf-8")
    except OSError as e:
        raise CodeGenerationError(
            f"Could not read domain source '{source_path}': {e}",
            component="reader",
            suggestions=["Check that SOURCE points to a readable Python file"],
        ) from e
    return generate_models_module(source, config, source_name=path.name, write=write)
