"""
Interface model construction.

Turns a parsed compilation unit into SynthesisUnits: one per struct whose
name matches the configured pattern and that has at least one exported
method.
"""

import logging
from dataclasses import dataclass, field
from pathlib import PurePath

from .config import GenerationConfig
from .imports import find_used_imports
from .signatures import MethodSignature, extract_methods
from .source import CompilationUnit, ImportDeclaration

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SynthesisUnit:
    """Everything needed to render one generated interface."""
    name: str
    interface_name: str
    capitalized_name: str
    package_name: str
    target_file_name: str
    methods: list[MethodSignature] = field(default_factory=list)
    imports: list[ImportDeclaration] = field(default_factory=list)
    generate_register: bool = False
    generate_mock: bool = False
    mock_path: str = ""


def upper_first(name: str) -> str:
    return name[:1].upper() + name[1:]


def to_snake_case(name: str) -> str:
    """Convert CamelCase to snake_case (UserDao -> user_dao)."""
    result = ""
    for i, ch in enumerate(name):
        if i > 0 and "A" <= ch <= "Z":
            result += "_"
        result += ch.lower()
    return result


def struct_names(unit: CompilationUnit) -> list[str]:
    """Names of the top-level struct declarations, in source order."""
    return [t.name for t in unit.types if t.is_struct]


def build_units(
    unit: CompilationUnit,
    config: GenerationConfig,
    package_name: str,
    file_name: str,
) -> list[SynthesisUnit]:
    """
    Build the synthesis units for one compilation unit.

    Args:
        unit: Parsed source file; not modified
        config: Active generation options
        package_name: Package clause for the generated file
        file_name: Base name of the source file

    Returns:
        Units in struct declaration order. When a single struct qualifies its
        output reuses *file_name*; when several do, each gets
        <stem>_<snake_case(struct)>.go so the outputs stay distinct.
    """
    matched: list[tuple[str, list[MethodSignature], set[str]]] = []
    for name in struct_names(unit):
        if not config.matches(name):
            continue
        methods, used_types = extract_methods(unit, name)
        if not methods:
            logger.debug("skipping %s in %s: no exported methods", name, unit.path)
            continue
        matched.append((name, methods, used_types))

    stem = PurePath(file_name).stem
    suffix = PurePath(file_name).suffix or ".go"

    units = []
    for name, methods, used_types in matched:
        capitalized = upper_first(name)
        target_file_name = file_name
        if len(matched) > 1:
            target_file_name = f"{stem}_{to_snake_case(name)}{suffix}"
        units.append(SynthesisUnit(
            name=name,
            interface_name=config.interface_prefix + capitalized,
            capitalized_name=capitalized,
            package_name=package_name,
            target_file_name=target_file_name,
            methods=methods,
            imports=find_used_imports(unit.imports, used_types),
            generate_register=config.generate_register,
            generate_mock=config.generate_mock,
            mock_path=config.mock_path,
        ))
    return units
