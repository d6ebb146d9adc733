"""
Generation and run configuration.

GenerationConfig is an immutable value passed explicitly through the builder
and renderer; nothing here is process-wide state. Values can come from the
command line or from a TOML file (top level or a [tool.gen-interface] table).
"""

import re
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

# Prefer stdlib tomllib in 3.11+, fall back to tomli
try:
    import tomllib
except ImportError:
    import tomli as tomllib

from .errors import ConfigError

DEFAULT_STRUCT_PATTERN = r"^.+Dao$"
DEFAULT_INTERFACE_PREFIX = "I"
DEFAULT_MOCK_PATH = "../mocks"
DEFAULT_GOFMT = "gofmt"
DEFAULT_INCLUDE = ("*.go",)

_PREFIX_RE = re.compile(r"[A-Za-z0-9_]*")

# camelCase keys accepted in config files, mapped to their value types
CONFIG_KEYS: dict[str, type | tuple[type, ...]] = {
    "src": str,
    "dst": str,
    "include": (str, list),
    "exclude": (str, list),
    "stPattern": str,
    "structNamePattern": str,
    "prefix": str,
    "interfacePrefix": str,
    "generateRegister": bool,
    "generateMock": bool,
    "mockPath": str,
    "gofmt": (str, bool),
    "failFast": bool,
}


@dataclass(frozen=True)
class GenerationConfig:
    """Options consumed by the interface builder and renderer."""
    struct_name_pattern: re.Pattern[str] = field(
        default_factory=lambda: re.compile(DEFAULT_STRUCT_PATTERN)
    )
    interface_prefix: str = DEFAULT_INTERFACE_PREFIX
    generate_register: bool = False
    generate_mock: bool = False
    mock_path: str = DEFAULT_MOCK_PATH
    # None disables the gofmt pass; rendered text is still syntax checked
    gofmt_command: str | None = DEFAULT_GOFMT

    @classmethod
    def create(
        cls,
        struct_name_pattern: str = DEFAULT_STRUCT_PATTERN,
        interface_prefix: str = DEFAULT_INTERFACE_PREFIX,
        generate_register: bool = False,
        generate_mock: bool = False,
        mock_path: str = DEFAULT_MOCK_PATH,
        gofmt_command: str | None = DEFAULT_GOFMT,
    ) -> "GenerationConfig":
        """Validate raw option values and build a config."""
        try:
            pattern = re.compile(struct_name_pattern)
        except re.error as e:
            raise ConfigError(f"invalid struct name pattern {struct_name_pattern!r}: {e}") from e

        if not _PREFIX_RE.fullmatch(interface_prefix):
            raise ConfigError(
                f"invalid interface prefix {interface_prefix!r}: "
                "only letters, digits and underscores are allowed"
            )

        # an explicitly named formatter must exist; only the default may be absent
        if gofmt_command and gofmt_command != DEFAULT_GOFMT and shutil.which(gofmt_command) is None:
            raise ConfigError(f"gofmt command {gofmt_command!r} not found")

        return cls(
            struct_name_pattern=pattern,
            interface_prefix=interface_prefix,
            generate_register=generate_register,
            generate_mock=generate_mock,
            mock_path=mock_path,
            gofmt_command=gofmt_command or None,
        )

    def matches(self, struct_name: str) -> bool:
        """Anchored match of a struct name against the configured pattern."""
        return self.struct_name_pattern.fullmatch(struct_name) is not None


@dataclass(frozen=True)
class RunOptions:
    """Where to read sources from, where to write, and which files to take."""
    src: Path
    dst: Path
    include: tuple[str, ...] = DEFAULT_INCLUDE
    exclude: tuple[str, ...] = ()
    fail_fast: bool = False


def split_patterns(value: str | list[str] | tuple[str, ...] | None) -> tuple[str, ...]:
    """Normalize a comma-separated string or list of globs."""
    if not value:
        return ()
    if isinstance(value, str):
        value = value.split(",")
    return tuple(p.strip() for p in value if p.strip())


def load_config_file(path: Path) -> dict[str, Any]:
    """
    Load option values from a TOML file.

    Keys are read from a [tool.gen-interface] table when the file has one,
    so a pyproject.toml works, otherwise from the top level. Unknown keys
    and wrongly typed values raise ConfigError.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except OSError as e:
        raise ConfigError(f"cannot read config file {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"invalid config file {path}: {e}") from e

    table = data.get("tool", {}).get("gen-interface")
    if isinstance(table, dict):
        values = dict(table)
    else:
        values = {k: v for k, v in data.items() if k != "tool"}

    for key, value in values.items():
        expected = CONFIG_KEYS.get(key)
        if expected is None:
            raise ConfigError(f"unknown option {key!r} in {path}")
        if not isinstance(value, expected):
            raise ConfigError(f"option {key!r} in {path} has wrong type {type(value).__name__}")
        if isinstance(value, list) and not all(isinstance(v, str) for v in value):
            raise ConfigError(f"option {key!r} in {path} must be a list of strings")

    return values
