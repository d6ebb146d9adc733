"""
Go source loading.

Parses a Go file with tree-sitter and exposes the parts the generator reads:
package name, imports, top-level type declarations and method declarations.
The resulting CompilationUnit is read-only to the rest of the pipeline.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

import tree_sitter_go
from tree_sitter import Language, Node, Parser, Tree

from .errors import SourceParseError

logger = logging.getLogger(__name__)

GO_LANGUAGE = Language(tree_sitter_go.language())

# Comment lines Go treats as tool directives rather than documentation.
_DIRECTIVE_RE = re.compile(r"^(line |extern |export |[a-z0-9]+:[a-z0-9])")


# =============================================================================
# Compilation Unit Model
# =============================================================================

@dataclass(frozen=True)
class ImportDeclaration:
    """One import spec: optional alias plus the unquoted import path."""
    path: str
    name: str = ""

    @property
    def effective_name(self) -> str:
        """Alias if declared, else the last segment of the import path."""
        if self.name:
            return self.name
        return self.path.rsplit("/", 1)[-1]


@dataclass(frozen=True)
class TypeDeclaration:
    name: str
    type_node: Node

    @property
    def is_struct(self) -> bool:
        return self.type_node.type == "struct_type"


@dataclass(frozen=True)
class MethodDeclaration:
    """A function declaration with a receiver."""
    name: str
    receiver: str | None
    parameters: Node
    result: Node | None
    doc: str = ""


@dataclass
class CompilationUnit:
    path: Path
    package_name: str
    imports: list[ImportDeclaration] = field(default_factory=list)
    types: list[TypeDeclaration] = field(default_factory=list)
    methods: list[MethodDeclaration] = field(default_factory=list)
    tree: Tree | None = None


# =============================================================================
# Parsing
# =============================================================================

def node_text(node: Node) -> str:
    """Source text of a node."""
    return node.text.decode("utf-8") if node.text is not None else ""


def parse_tree(source: bytes) -> Tree:
    """Parse Go source bytes into a tree-sitter tree."""
    return Parser(GO_LANGUAGE).parse(source)


def find_syntax_error(node: Node) -> Node | None:
    """Return the first ERROR or MISSING node below *node*, if any."""
    if node.type == "ERROR" or node.is_missing:
        return node
    if not node.has_error:
        return None
    for child in node.children:
        found = find_syntax_error(child)
        if found is not None:
            return found
    return node


def describe_syntax_error(node: Node) -> str:
    row, column = node.start_point[0] + 1, node.start_point[1] + 1
    if node.is_missing:
        return f"missing {node.type!r} at line {row}, column {column}"
    return f"syntax error at line {row}, column {column}"


def parse_source(source: bytes, path: Path | str = "<memory>") -> CompilationUnit:
    """
    Parse Go source into a CompilationUnit.

    Raises SourceParseError when the bytes are not UTF-8, the tree contains
    syntax errors, or the file has no package clause.
    """
    try:
        source.decode("utf-8")
    except UnicodeDecodeError as e:
        raise SourceParseError(path, f"not valid UTF-8: {e}") from e

    tree = parse_tree(source)
    root = tree.root_node
    if root.has_error:
        error_node = find_syntax_error(root)
        raise SourceParseError(path, describe_syntax_error(error_node or root))

    unit = CompilationUnit(path=Path(path), package_name="", tree=tree)

    for child in root.named_children:
        if child.type == "package_clause":
            for sub in child.named_children:
                if sub.type == "package_identifier":
                    unit.package_name = node_text(sub)
        elif child.type == "import_declaration":
            unit.imports.extend(_collect_imports(child))
        elif child.type == "type_declaration":
            unit.types.extend(_collect_types(child))
        elif child.type == "method_declaration":
            unit.methods.append(_collect_method(child))

    if not unit.package_name:
        raise SourceParseError(path, "missing package clause")

    logger.debug(
        "parsed %s: package %s, %d imports, %d types, %d methods",
        path, unit.package_name, len(unit.imports), len(unit.types), len(unit.methods),
    )
    return unit


def load_source(path: Path) -> CompilationUnit:
    """Read and parse a Go file."""
    try:
        source = path.read_bytes()
    except OSError as e:
        raise SourceParseError(path, str(e)) from e
    return parse_source(source, path)


def _collect_imports(decl: Node) -> list[ImportDeclaration]:
    specs: list[Node] = []
    for child in decl.named_children:
        if child.type == "import_spec":
            specs.append(child)
        elif child.type == "import_spec_list":
            specs.extend(c for c in child.named_children if c.type == "import_spec")

    imports = []
    for spec in specs:
        path_node = spec.child_by_field_name("path")
        name_node = spec.child_by_field_name("name")
        if path_node is None:
            continue
        imports.append(ImportDeclaration(
            path=node_text(path_node).strip('"`'),
            name=node_text(name_node) if name_node is not None else "",
        ))
    return imports


def _collect_types(decl: Node) -> list[TypeDeclaration]:
    types = []
    for spec in decl.named_children:
        if spec.type != "type_spec":
            continue
        name_node = spec.child_by_field_name("name")
        type_node = spec.child_by_field_name("type")
        if name_node is None or type_node is None:
            continue
        types.append(TypeDeclaration(name=node_text(name_node), type_node=type_node))
    return types


def _collect_method(decl: Node) -> MethodDeclaration:
    name_node = decl.child_by_field_name("name")
    return MethodDeclaration(
        name=node_text(name_node) if name_node is not None else "",
        receiver=receiver_base_name(decl.child_by_field_name("receiver")),
        parameters=decl.child_by_field_name("parameters"),
        result=decl.child_by_field_name("result"),
        doc=leading_comment(decl),
    )


def receiver_base_name(receiver: Node | None) -> str | None:
    """
    Base identifier of a method receiver.

    Handles value receivers (T), pointer receivers (*T), parenthesized forms
    and generic receivers (*T[K]). Returns None for anything else.
    """
    if receiver is None:
        return None
    params = [c for c in receiver.named_children if c.type == "parameter_declaration"]
    if not params:
        return None
    node = params[0].child_by_field_name("type")
    while node is not None:
        if node.type == "type_identifier":
            return node_text(node)
        if node.type == "generic_type":
            node = node.child_by_field_name("type")
        elif node.type in ("pointer_type", "parenthesized_type"):
            node = node.named_children[0] if node.named_children else None
        else:
            return None
    return None


# =============================================================================
# Doc Comments
# =============================================================================

def leading_comment(decl: Node) -> str:
    """
    Documentation comment directly above a declaration.

    Collects the run of comments ending on the line before *decl*, without
    blank lines in between. A comment sharing its line with the previous
    declaration belongs to that declaration and is dropped.
    """
    comments: list[Node] = []
    expected_row = decl.start_point[0] - 1
    sibling = decl.prev_named_sibling
    while sibling is not None and sibling.type == "comment" and sibling.end_point[0] == expected_row:
        comments.append(sibling)
        expected_row = sibling.start_point[0] - 1
        sibling = sibling.prev_named_sibling

    if comments and sibling is not None and sibling.end_point[0] == comments[-1].start_point[0]:
        comments.pop()

    comments.reverse()
    return comment_text([node_text(c) for c in comments]).strip()


def comment_text(comments: list[str]) -> str:
    """
    Text of a comment group with comment markers removed.

    The first space of a line comment is dropped, directive lines such as
    //go:generate are skipped, trailing whitespace is stripped, leading and
    trailing blank lines are removed and runs of blank lines collapse to one.
    """
    lines: list[str] = []
    for text in comments:
        if text.startswith("//"):
            body = text[2:]
            if _DIRECTIVE_RE.match(body):
                continue
            if body.startswith(" "):
                body = body[1:]
            lines.append(body)
        else:
            lines.extend(text[2:-2].split("\n"))

    cleaned: list[str] = []
    for line in (line.rstrip() for line in lines):
        if not line and (not cleaned or not cleaned[-1]):
            continue
        cleaned.append(line)
    while cleaned and not cleaned[-1]:
        cleaned.pop()
    return "\n".join(cleaned)
