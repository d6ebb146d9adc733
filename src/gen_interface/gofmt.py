"""
Canonical formatting of generated Go source.

Rendered text is first parsed with tree-sitter so broken output is caught
even where no Go toolchain is installed, then piped through gofmt when the
configured binary can be found.
"""

import logging
import shutil
import subprocess

from .errors import FormatError
from .source import describe_syntax_error, find_syntax_error, parse_tree

logger = logging.getLogger(__name__)

GOFMT_TIMEOUT_S = 30


def check_syntax(text: str, label: str = "<generated>") -> None:
    """Raise FormatError if *text* is not syntactically valid Go."""
    root = parse_tree(text.encode("utf-8")).root_node
    if root.has_error:
        error_node = find_syntax_error(root) or root
        raise FormatError(f"failed to format {label}: {describe_syntax_error(error_node)}", text)


def run_gofmt(text: str, command: str, label: str = "<generated>") -> str:
    """Pipe *text* through gofmt and return the formatted source."""
    try:
        proc = subprocess.run(
            [command],
            input=text,
            capture_output=True,
            encoding="utf-8",
            timeout=GOFMT_TIMEOUT_S,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        raise FormatError(f"failed to format {label}: cannot run {command}: {e}", text) from e
    if proc.returncode != 0:
        raise FormatError(f"failed to format {label}: {proc.stderr.strip()}", text)
    return proc.stdout


def gofmt_available(command: str | None) -> bool:
    return bool(command) and shutil.which(command) is not None


def format_source(text: str, gofmt_command: str | None = "gofmt", label: str = "<generated>") -> str:
    """
    Validate and canonically format generated Go source.

    Args:
        text: Rendered Go source
        gofmt_command: gofmt executable name or path; None skips gofmt
        label: Used in error messages (interface name and file)

    Returns:
        Formatted source ending in exactly one newline
    """
    check_syntax(text, label)

    if gofmt_command:
        resolved = shutil.which(gofmt_command)
        if resolved:
            text = run_gofmt(text, resolved, label)
        else:
            logger.debug("%s not found on PATH; keeping rendered layout for %s", gofmt_command, label)

    return text.rstrip("\n") + "\n"
