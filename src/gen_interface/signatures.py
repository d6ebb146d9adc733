"""
Method signature extraction.

Collects the exported methods declared on a struct and renders their
parameter and result lists, tracking every type the signatures touch.
"""

from dataclasses import dataclass

from .source import CompilationUnit, MethodDeclaration
from .typeexpr import format_parameters, format_result, iter_parameters


@dataclass(frozen=True)
class MethodSignature:
    name: str
    params: str
    results: str = ""
    param_names: str = ""
    comment: str = ""
    # True when the results are a single unnamed type: printed without parens
    single_result: bool = False


def is_exported(name: str) -> bool:
    """Check if a Go identifier is exported (upper-case first character)."""
    return bool(name) and name[0].isupper()


def format_param_names(method: MethodDeclaration) -> str:
    """Comma-joined parameter names, `_` standing in for unnamed ones."""
    return ", ".join(
        name or "_" for name, _, _ in iter_parameters(method.parameters)
    )


def extract_signature(method: MethodDeclaration, refs: set[str]) -> MethodSignature:
    """Render one method declaration and collect its type references."""
    params = format_parameters(method.parameters, refs)
    results, single = format_result(method.result, refs)
    return MethodSignature(
        name=method.name,
        params=params,
        results=results,
        param_names=format_param_names(method),
        comment=method.doc.strip(),
        single_result=single,
    )


def extract_methods(unit: CompilationUnit, struct_name: str) -> tuple[list[MethodSignature], set[str]]:
    """
    Extract the exported methods of *struct_name* in declaration order.

    Both pointer and value receivers count. Returns the signatures together
    with every type referenced by their parameters and results.
    """
    methods: list[MethodSignature] = []
    used_types: set[str] = set()

    for method in unit.methods:
        if method.receiver != struct_name or not is_exported(method.name):
            continue
        methods.append(extract_signature(method, used_types))

    return methods, used_types
