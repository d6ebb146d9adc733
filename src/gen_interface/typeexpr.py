"""
Type expression formatting.

Renders a Go type expression back to source text and records every named
type it references, so the import resolver can tell which packages the
generated interface needs.
"""

from collections.abc import Callable, Iterator

from tree_sitter import Node

from .source import node_text


# =============================================================================
# Predeclared Type Detection
# =============================================================================

PREDECLARED_TYPES = frozenset({
    "any", "bool", "byte", "comparable", "complex64", "complex128", "error",
    "float32", "float64", "int", "int8", "int16", "int32", "int64", "rune",
    "string", "uint", "uint8", "uint16", "uint32", "uint64", "uintptr",
})

# Marker recorded for anonymous interface types; never matches an import.
EMPTY_INTERFACE = "interface{}"


def is_predeclared(name: str) -> bool:
    """Check if a bare type name is one of Go's predeclared types."""
    return name in PREDECLARED_TYPES


# =============================================================================
# Type Expression Formatting
# =============================================================================

def format_type(node: Node, refs: set[str]) -> str:
    """
    Render a type expression and collect the named types it references.

    Properly handles:
    - Bare identifiers: User, string
    - Qualified names: model.User
    - Pointers, slices, arrays and maps: *T, []T, [4]T, map[K]V
    - Channels and function types: chan T, func(T) error
    - Generic instantiations: Page[model.User]
    - Anonymous interfaces, recorded as interface{}
    Anything else is rendered verbatim and contributes no references.
    """
    handler = _TYPE_HANDLERS.get(node.type, _format_verbatim)
    return handler(node, refs)


def format_type_expr(node: Node) -> tuple[str, set[str]]:
    """Render a type expression, returning the text and its references."""
    refs: set[str] = set()
    return format_type(node, refs), refs


def _format_identifier(node: Node, refs: set[str]) -> str:
    name = node_text(node)
    if not is_predeclared(name):
        refs.add(name)
    return name


def _format_qualified(node: Node, refs: set[str]) -> str:
    package = node.child_by_field_name("package")
    name = node.child_by_field_name("name")
    if package is None or name is None:
        return _format_verbatim(node, refs)
    qualified = f"{node_text(package)}.{node_text(name)}"
    refs.add(qualified)
    return qualified


def _format_pointer(node: Node, refs: set[str]) -> str:
    return "*" + format_type(_inner(node), refs)


def _format_parenthesized(node: Node, refs: set[str]) -> str:
    return "(" + format_type(_inner(node), refs) + ")"


def _format_slice(node: Node, refs: set[str]) -> str:
    return "[]" + format_type(node.child_by_field_name("element"), refs)


def _format_array(node: Node, refs: set[str]) -> str:
    length = node.child_by_field_name("length")
    element = node.child_by_field_name("element")
    return f"[{node_text(length)}]{format_type(element, refs)}"


def _format_map(node: Node, refs: set[str]) -> str:
    key = format_type(node.child_by_field_name("key"), refs)
    value = format_type(node.child_by_field_name("value"), refs)
    return f"map[{key}]{value}"


def _format_channel(node: Node, refs: set[str]) -> str:
    value = format_type(node.child_by_field_name("value"), refs)
    tokens = [c.type for c in node.children if not c.is_named]
    if tokens[:1] == ["<-"]:
        return f"<-chan {value}"
    if tokens[:2] == ["chan", "<-"]:
        return f"chan<- {value}"
    return f"chan {value}"


def _format_function(node: Node, refs: set[str]) -> str:
    params = format_parameters(node.child_by_field_name("parameters"), refs)
    text = f"func({params})"
    result = node.child_by_field_name("result")
    if result is not None:
        rendered, single = format_result(result, refs)
        text += f" {rendered}" if single else f" ({rendered})"
    return text


def _format_generic(node: Node, refs: set[str]) -> str:
    base = format_type(node.child_by_field_name("type"), refs)
    args: list[str] = []
    type_args = node.child_by_field_name("type_arguments")
    for arg in type_args.named_children if type_args is not None else []:
        if arg.type == "type_elem":
            args.append(" | ".join(format_type(t, refs) for t in arg.named_children))
        elif arg.type != "comment":
            args.append(format_type(arg, refs))
    return f"{base}[{', '.join(args)}]"


def _format_interface(node: Node, refs: set[str]) -> str:
    refs.add(EMPTY_INTERFACE)
    return node_text(node)


def _format_verbatim(node: Node, refs: set[str]) -> str:
    return node_text(node)


def _inner(node: Node) -> Node:
    return next(c for c in node.named_children if c.type != "comment")


_TYPE_HANDLERS: dict[str, Callable[[Node, set[str]], str]] = {
    "type_identifier": _format_identifier,
    "qualified_type": _format_qualified,
    "pointer_type": _format_pointer,
    "parenthesized_type": _format_parenthesized,
    "slice_type": _format_slice,
    "array_type": _format_array,
    "map_type": _format_map,
    "channel_type": _format_channel,
    "function_type": _format_function,
    "generic_type": _format_generic,
    "interface_type": _format_interface,
}


# =============================================================================
# Parameter Lists
# =============================================================================

def iter_parameters(param_list: Node | None) -> Iterator[tuple[str | None, Node, bool]]:
    """
    Yield (name, type node, variadic) for each parameter in a list.

    A declaration naming several parameters (a, b int) yields one entry per
    name; unnamed parameters yield a None name.
    """
    if param_list is None:
        return
    for decl in param_list.named_children:
        if decl.type not in ("parameter_declaration", "variadic_parameter_declaration"):
            continue
        type_node = decl.child_by_field_name("type")
        if type_node is None:
            continue
        variadic = decl.type == "variadic_parameter_declaration"
        names = decl.children_by_field_name("name")
        if not names:
            yield None, type_node, variadic
        for name in names:
            yield node_text(name), type_node, variadic


def format_parameter(name: str | None, type_node: Node, variadic: bool, refs: set[str]) -> str:
    rendered = format_type(type_node, refs)
    if variadic:
        rendered = "..." + rendered
    return f"{name} {rendered}" if name else rendered


def format_parameters(param_list: Node | None, refs: set[str]) -> str:
    """Comma-joined `name type` pairs, bare types for unnamed parameters."""
    return ", ".join(
        format_parameter(name, type_node, variadic, refs)
        for name, type_node, variadic in iter_parameters(param_list)
    )


def format_result(result: Node | None, refs: set[str]) -> tuple[str, bool]:
    """
    Render a result list.

    Returns the comma-joined results and whether they consist of a single
    unnamed type, which Go prints without parentheses.
    """
    if result is None:
        return "", False
    if result.type != "parameter_list":
        return format_type(result, refs), True
    entries = list(iter_parameters(result))
    rendered = ", ".join(format_parameter(n, t, v, refs) for n, t, v in entries)
    single = len(entries) == 1 and entries[0][0] is None
    return rendered, single
