"""
Tests for models module generation and the command line interface.
"""

import ast
import io
import logging
from pathlib import Path
from tempfile import TemporaryDirectory
from unittest import TestCase
from unittest.mock import patch

from model_auto_generator import cli
from model_auto_generator.codegen import (
    generate_models_from_file,
    generate_models_module,
    render_models_module,
)
from model_auto_generator.codegen_utils import format_python_code_using_black
from model_auto_generator.colored_logging import ColoredFormatter
from model_auto_generator.config_validation import ToolConfigSchema
from model_auto_generator.exceptions import CodeGenerationError, UnresolvedRelationError


SOURCE = '''
from dataclasses import dataclass
from enum import Enum
from typing import Optional
from uuid import UUID


class Tier(Enum):
    GOLD = "gold"
    SILVER = "silver"


@dataclass
class Venue:
    id: Optional[UUID]
    name: str
    tier: Tier


@dataclass
class Event:
    title: str
    venueID: UUID
'''


def class_names(content):
    return [node.name for node in ast.parse(content).body if isinstance(node, ast.ClassDef)]


class TestGenerateModelsModule(TestCase):
    """Test cases for generate_models_module"""

    def setUp(self):
        self.tmp = TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.output = Path(self.tmp.name) / "app" / "models.py"

    def test_writes_formatted_module(self):
        config = ToolConfigSchema(output_file=str(self.output), domain_module="app.domain")
        result = generate_models_module(SOURCE, config, source_name="domain.py")

        assert result.output_path == self.output
        content = self.output.read_text(encoding="utf-8")
        assert content == result.content
        assert class_names(content) == ["VenueModel", "EventModel"]
        assert "import uuid\n" in content
        assert "from django.db import models\n" in content
        assert "from app.domain import Venue, Tier, Event\n" in content
        assert "domain.py" in ast.get_docstring(ast.parse(content))
        # Black output uses double quotes
        assert 'db_table = "venues"' in content

    def test_detected_enums_join_the_registry(self):
        config = ToolConfigSchema(enum_types=[])
        result = generate_models_module(SOURCE, config, write=False)
        assert "tier=self._parse_enum(Tier, self.tier)" in result.models[0].text
        assert result.output_path is None

    def test_enum_detection_can_be_disabled(self):
        config = ToolConfigSchema(enum_types=[], detect_enums=False)
        result = generate_models_module(SOURCE, config, write=False)
        assert "_parse_enum(Tier, self.tier)" not in result.models[0].text

    def test_strict_relations(self):
        config = ToolConfigSchema(exclude_types=["Venue"])
        with self.assertRaises(UnresolvedRelationError):
            generate_models_module(SOURCE, config, write=False)

    def test_external_types_satisfy_relations(self):
        config = ToolConfigSchema(exclude_types=["Venue"], external_types=["Venue"])
        result = generate_models_module(SOURCE, config, write=False)
        assert [model.class_name for model in result.models] == ["EventModel"]

    def test_relaxed_relations(self):
        config = ToolConfigSchema(include_types=["Event"], strict_relations=False)
        result = generate_models_module(SOURCE, config, write=False)
        assert class_names(result.content) == ["EventModel"]

    def test_no_declarations(self):
        config = ToolConfigSchema(output_file=str(self.output))
        result = generate_models_module("class Tier(Enum):\n    A = 'a'\n", config)
        assert result.models == []
        assert not self.output.exists()

    def test_from_file(self):
        source_path = Path(self.tmp.name) / "domain.py"
        source_path.write_text(SOURCE, encoding="utf-8")
        result = generate_models_from_file(str(source_path), ToolConfigSchema(), write=False)
        assert len(result.models) == 2

    def test_missing_source_file(self):
        with self.assertRaises(CodeGenerationError):
            generate_models_from_file(str(Path(self.tmp.name) / "absent.py"), write=False)

    def test_render_without_domain_module(self):
        result = generate_models_module(SOURCE, ToolConfigSchema(), write=False)
        content = render_models_module(result.models, ToolConfigSchema())
        assert "from app" not in content
        assert content == result.content


class TestFormatting(TestCase):
    """Test cases for Black formatting"""

    def test_formats_code(self):
        assert format_python_code_using_black(None, "x = {'a':1}\n") == 'x = {"a": 1}\n'

    def test_invalid_code(self):
        with self.assertRaises(CodeGenerationError):
            format_python_code_using_black(None, "class :\n")


class TestCli(TestCase):
    """Test cases for the model-auto-generator command"""

    def setUp(self):
        self.tmp = TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.source = Path(self.tmp.name) / "domain.py"
        self.source.write_text(SOURCE, encoding="utf-8")
        self.output = Path(self.tmp.name) / "models.py"
        root = logging.getLogger()
        self.addCleanup(setattr, root, "handlers", root.handlers[:])
        self.addCleanup(root.setLevel, root.level)

    def run_cli(self, *args):
        stdout = io.StringIO()
        with patch("sys.stdout", stdout):
            cli.main([str(self.source), "--no-color", *args])
        return stdout.getvalue()

    def test_writes_output_file(self):
        self.run_cli("-o", str(self.output), "--app-label", "ticketing")
        content = self.output.read_text(encoding="utf-8")
        assert class_names(content) == ["VenueModel", "EventModel"]
        assert 'app_label = "ticketing"' in content

    def test_dry_run(self):
        printed = self.run_cli("-o", str(self.output), "--dry-run", "--domain-module", "app.domain")
        assert "class EventModel(models.Model):" in printed
        assert "from app.domain import" in printed
        assert not self.output.exists()

    def test_config_file(self):
        config_path = Path(self.tmp.name) / "generator.yaml"
        config_path.write_text(f"output_file: {self.output}\nmodel_suffix: Record\n", encoding="utf-8")
        self.run_cli("-c", str(config_path))
        assert class_names(self.output.read_text(encoding="utf-8")) == ["VenueRecord", "EventRecord"]

    def test_generator_error_exits_with_one(self):
        with self.assertRaises(SystemExit) as ctx:
            self.run_cli("-o", str(self.output), "--app-label", "not valid")
        assert ctx.exception.code == 1

    def test_missing_source_exits_with_one(self):
        self.source.unlink()
        with self.assertRaises(SystemExit) as ctx:
            self.run_cli("-o", str(self.output))
        assert ctx.exception.code == 1


class TestColoredFormatter(TestCase):
    """Test cases for the CLI log formatter"""

    def record(self, level, message):
        return logging.LogRecord("test", level, __file__, 1, message, None, None)

    def test_levels_and_markers(self):
        formatter = ColoredFormatter(use_colors=False)
        assert formatter.color_for(self.record(logging.ERROR, "boom")) == ColoredFormatter.COLORS["ERROR"]
        assert formatter.color_for(self.record(logging.INFO, "✓ Generated 2 models")).startswith(
            ColoredFormatter.SPECIAL_COLORS["success"]
        )
        assert formatter.color_for(self.record(logging.INFO, "→ Loading configuration...")) == (
            ColoredFormatter.SPECIAL_COLORS["progress"]
        )
        assert formatter.color_for(self.record(logging.INFO, "plain")) == ""

    def test_plain_output_without_colors(self):
        formatter = ColoredFormatter(use_colors=False)
        assert formatter.format(self.record(logging.WARNING, "careful")) == "WARNING: careful"
