"""
Import usage inference.

An import is kept only when some referenced type is qualified with the
import's package name. This is a syntactic prefix test: Go already forbids
two imports with the same name in one file, so the name alone identifies
the import.
"""

from .source import ImportDeclaration


def is_import_used(imp: ImportDeclaration, used_types: set[str]) -> bool:
    prefix = imp.effective_name + "."
    return any(type_name.startswith(prefix) for type_name in used_types)


def find_used_imports(imports: list[ImportDeclaration], used_types: set[str]) -> list[ImportDeclaration]:
    """Return the imports referenced by *used_types*, in declaration order."""
    return [imp for imp in imports if is_import_used(imp, used_types)]
