import logging
from pathlib import Path
from typing import Optional

import black
from black import (
    FileMode,
    format_str as black_format_str,
    InvalidInput as BlackInvalidInput,
)

from model_auto_generator.constants import GenerationOptions
from model_auto_generator.exceptions import CodeGenerationError


logger = logging.getLogger(__name__)

BLACK_FORMATTER_MODE = FileMode(line_length=GenerationOptions.DEFAULT_LINE_LENGTH)


def format_python_code_using_black(filepath: Optional[Path], code_string: str) -> str:
    """
    Formats the given Python code using Black.

    Raises:
        CodeGenerationError: If the code is not valid Python
    """
    try:
        formatted_code = black_format_str(code_string, mode=BLACK_FORMATTER_MODE)
    except BlackInvalidInput as e:
        raise CodeGenerationError(
            f"Generated code is not valid Python: {e}",
            component="black",
            context={"file": str(filepath) if filepath else "<stdout>", "black": black.__version__},
        ) from e

    if formatted_code == code_string:
        logger.debug(f"Black formatter did not change the code: {filepath}")
    else:
        logger.debug(f"Formatted code using Black: {filepath}")
    return formatted_code
