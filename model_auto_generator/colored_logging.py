"""
Colored logging formatter for Model Auto Generator.

Console output of the CLI is colored by level, and INFO/DEBUG lines are
colored by what they report (a finished step, a step in progress, a type
that was found or skipped).
"""

import logging
import sys
from typing import Optional


class ColoredFormatter(logging.Formatter):
    """
    Colored logging formatter that adds ANSI color codes to log messages.

    Different log levels get different colors for better visual distinction.
    """

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
    }

    SPECIAL_COLORS = {
        'success': '\033[92m',    # Bright Green
        'progress': '\033[94m',   # Bright Blue
        'highlight': '\033[96m',  # Bright Cyan
    }

    RESET = '\033[0m'
    BOLD = '\033[1m'

    SUCCESS_MARKERS = ('✓', 'generated', 'written', 'complete', 'success')
    PROGRESS_MARKERS = ('→', 'loading', 'parsing', 'classifying', 'rendering', 'formatting')
    HIGHLIGHT_MARKERS = ('•', 'found', 'detected', 'skipping', 'enumeration')

    def __init__(self, fmt: Optional[str] = None, use_colors: bool = True):
        """
        Initialize the colored formatter.

        Args:
            fmt: Log format string (uses default if None)
            use_colors: Whether to use colors; ignored when stderr is not a TTY
        """
        if fmt is None:
            fmt = "%(levelname)s: %(message)s"
        super().__init__(fmt)
        self.use_colors = use_colors and hasattr(sys.stderr, 'isatty') and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        formatted_message = super().format(record)
        if not self.use_colors:
            return formatted_message

        color = self.color_for(record)
        if not color:
            return formatted_message
        return f"{color}{formatted_message}{self.RESET}"

    def color_for(self, record: logging.LogRecord) -> str:
        """ANSI prefix for a record; empty for plain INFO lines."""
        if record.levelno >= logging.WARNING:
            return self.COLORS.get(record.levelname, '')

        message = record.getMessage().lower()
        if self._matches(message, self.SUCCESS_MARKERS):
            return self.SPECIAL_COLORS['success'] + self.BOLD
        if self._matches(message, self.PROGRESS_MARKERS):
            return self.SPECIAL_COLORS['progress']
        if self._matches(message, self.HIGHLIGHT_MARKERS):
            return self.SPECIAL_COLORS['highlight']
        if self._is_section_message(message):
            return self.BOLD + self.SPECIAL_COLORS['highlight']
        if record.levelno == logging.DEBUG:
            return self.COLORS['DEBUG']
        return ''

    @staticmethod
    def _matches(message: str, markers) -> bool:
        return any(marker in message for marker in markers)

    @staticmethod
    def _is_section_message(message: str) -> bool:
        return '=' in message and len(message.strip()) > 20


def setup_colored_logging(level: int = logging.INFO, use_colors: bool = True) -> None:
    """
    Set up colored logging on the root logger, replacing existing handlers.

    Args:
        level: Logging level (default: INFO)
        use_colors: Whether to use colors (default: True)
    """
    formatter = ColoredFormatter(use_colors=use_colors)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level)

    root_logger.addHandler(console_handler)
    root_logger.setLevel(level)


def get_colored_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_success(logger: logging.Logger, message: str) -> None:
    logger.info(f"✓ {message}")


def log_progress(logger: logging.Logger, message: str) -> None:
    logger.info(f"→ {message}")


def log_highlight(logger: logging.Logger, message: str) -> None:
    logger.info(f"• {message}")


def log_section(logger: logging.Logger, section_name: str) -> None:
    """Log a section header framed by separator lines."""
    separator = "=" * 60
    logger.info(separator)
    logger.info(f"  {section_name.upper()}")
    logger.info(separator)
