"""Console output for mazechase.

Everything the package prints goes through ``emit`` or one of the ``log_*``
shortcuts. Each line carries a tag marker so it still reads correctly with
colors turned off (``MAZECHASE_NO_COLOR``).
"""

import os
from enum import Enum
from typing import Dict, Tuple

from .config import Config


class Color(Enum):
    """ANSI escape codes used for console output."""

    BLUE = "\033[94m"
    RED = "\033[91m"
    GREEN = "\033[92m"
    CYAN = "\033[96m"
    YELLOW = "\033[93m"

    BOLD = "\033[1m"
    RESET = "\033[0m"


# Tag markers (color-blind accessible)
LOG_TAG_STEP = "[•]"
LOG_TAG_WARNING = "[?]"
LOG_TAG_ERROR = "[!]"
LOG_TAG_SUCCESS = "[✓]"
LOG_TAG_INFO = "[i]"

# kind -> (tag, color, severity); severities follow the stdlib logging names
_STYLES: Dict[str, Tuple[str, Color, str]] = {
    "step": (LOG_TAG_STEP, Color.BLUE, "INFO"),
    "info": (LOG_TAG_INFO, Color.CYAN, "INFO"),
    "success": (LOG_TAG_SUCCESS, Color.GREEN, "INFO"),
    "warning": (LOG_TAG_WARNING, Color.YELLOW, "WARNING"),
    "error": (LOG_TAG_ERROR, Color.RED, "ERROR"),
}

_SEVERITY = {"DEBUG": 10, "INFO": 20, "WARNING": 30, "ERROR": 40, "CRITICAL": 50}


def colors_enabled() -> bool:
    return not os.getenv("MAZECHASE_NO_COLOR")


def colored(text: str, color: Color, bold: bool = False) -> str:
    """Wrap ``text`` in ANSI codes unless colors are disabled."""
    if not colors_enabled():
        return text
    codes = (Color.BOLD.value if bold else "") + color.value
    return f"{codes}{text}{Color.RESET.value}"


def emit(kind: str, message: str, *, indent: int = 2, bold: bool = False) -> None:
    """Print ``message`` behind the tag for ``kind``.

    Lines below ``Config.LOG_LEVEL`` are dropped.

    Args:
        kind: One of step, warning, error, success, info
        message: Text to print after the tag
        indent: Leading spaces (per-step lines are indented under banners)
        bold: Print in bold

    Raises:
        KeyError: If ``kind`` is unknown
    """
    tag, color, severity = _STYLES[kind]
    threshold = _SEVERITY.get(Config.LOG_LEVEL.upper(), _SEVERITY["INFO"])
    if _SEVERITY[severity] < threshold:
        return
    print(colored(f"{' ' * indent}{tag} {message}", color, bold=bold))


def log_step(message: str, **kwargs) -> None:
    emit("step", message, **kwargs)


def log_warning(message: str, **kwargs) -> None:
    emit("warning", message, **kwargs)


def log_error(message: str, **kwargs) -> None:
    emit("error", message, **kwargs)


def log_success(message: str, **kwargs) -> None:
    emit("success", message, **kwargs)


def log_info(message: str, **kwargs) -> None:
    emit("info", message, **kwargs)
