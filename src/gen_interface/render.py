"""
Go source rendering for synthesis units.

Output follows gofmt's layout so the canonical formatter leaves it
unchanged: tab indentation, imports sorted by path, single unnamed results
without parentheses, and directives set off from doc text by a bare //.
"""

from .model import SynthesisUnit
from .signatures import MethodSignature
from .source import ImportDeclaration

MOCK_PACKAGE = "mocks"


def format_comment(text: str, indent: str = "") -> list[str]:
    """Render comment text as // lines."""
    return [f"{indent}// {line}" if line else f"{indent}//" for line in text.split("\n")]


def format_import(imp: ImportDeclaration) -> str:
    if imp.name:
        return f'\t{imp.name} "{imp.path}"'
    return f'\t"{imp.path}"'


def format_method(method: MethodSignature) -> str:
    """Render one interface method line."""
    line = f"\t{method.name}({method.params})"
    if method.results:
        if method.single_result:
            line += f" {method.results}"
        else:
            line += f" ({method.results})"
    return line


def mock_directive(unit: SynthesisUnit) -> str:
    file_name = unit.target_file_name
    return (
        f"//go:generate mockgen -source={file_name} "
        f"-destination={unit.mock_path}/{file_name} -package={MOCK_PACKAGE}"
    )


def render_interface(unit: SynthesisUnit) -> str:
    """Render a synthesis unit as a Go source file."""
    lines = [f"package {unit.package_name}", ""]

    if unit.imports:
        lines.append("import (")
        for imp in sorted(unit.imports, key=lambda i: (i.path, i.name)):
            lines.append(format_import(imp))
        lines.append(")")
        lines.append("")

    lines.append(f"// {unit.interface_name} is the interface definition for {unit.name}.")
    if unit.generate_mock:
        lines.append("//")
        lines.append(mock_directive(unit))
    lines.append(f"type {unit.interface_name} interface {{")
    for method in unit.methods:
        if method.comment:
            lines.extend(format_comment(method.comment, indent="\t"))
        lines.append(format_method(method))
    lines.append("}")

    if unit.generate_register:
        lines.extend(render_register(unit))

    return "\n".join(lines) + "\n"


def render_register(unit: SynthesisUnit) -> list[str]:
    """
    Registration glue: a package variable holding the implementation, an
    accessor that panics when nothing was registered, and a setter.
    """
    iface = unit.interface_name
    local = f"local{iface}"
    return [
        "",
        "var (",
        f"\t{local} {iface}",
        ")",
        "",
        f"func {unit.capitalized_name}() {iface} {{",
        f"\tif {local} == nil {{",
        f'\t\tpanic("implement not found for interface {iface}, forgot register?")',
        "\t}",
        f"\treturn {local}",
        "}",
        "",
        f"func Register{unit.capitalized_name}(impl {iface}) {{",
        f"\t{local} = impl",
        "}",
    ]
