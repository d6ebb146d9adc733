"""
Generate Go interfaces that mirror the exported methods of concrete structs.
"""

from .config import GenerationConfig, RunOptions
from .errors import (
    ConfigError,
    DuplicateTargetError,
    FormatError,
    GenInterfaceError,
    OutputWriteError,
    SourceParseError,
)
from .generate import RunReport, generate_file, generate_tree, generate_unit
from .model import SynthesisUnit, build_units
from .render import render_interface
from .source import CompilationUnit, load_source, parse_source

__version__ = "0.1.0"

__all__ = [
    "CompilationUnit",
    "ConfigError",
    "DuplicateTargetError",
    "FormatError",
    "GenInterfaceError",
    "GenerationConfig",
    "OutputWriteError",
    "RunOptions",
    "RunReport",
    "SourceParseError",
    "SynthesisUnit",
    "build_units",
    "generate_file",
    "generate_tree",
    "generate_unit",
    "load_source",
    "parse_source",
    "render_interface",
]
