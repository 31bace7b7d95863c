"""
TypeScript declaration extraction using tree-sitter - single-pass version.

Classification works on NodeShape tuples only, so any parser that reports
tree-sitter-typescript node type names can drive it.
"""

import logging
from typing import Dict, FrozenSet, List, NamedTuple, Optional, Tuple

import tree_sitter

from ..languages import TYPESCRIPT, get_parser
from ..models import SIGNATURE_MAX_LENGTH, SymbolKind, SymbolRecord

logger = logging.getLogger(__name__)

DEFAULT_NAME = "default"


class NodeShape(NamedTuple):
    """The syntactic facts classification needs about one node."""

    type: str
    parent_type: Optional[str] = None
    local_scope: bool = False  # inside a function or method body
    global_augmentation: bool = False  # `declare global { ... }`


_DECLARATION_KINDS: Dict[str, SymbolKind] = {
    'function_declaration': SymbolKind.FUNCTION,
    'generator_function_declaration': SymbolKind.FUNCTION,
    'function_signature': SymbolKind.FUNCTION,
    'class_declaration': SymbolKind.CLASS,
    'abstract_class_declaration': SymbolKind.CLASS,
    'interface_declaration': SymbolKind.INTERFACE,
    'type_alias_declaration': SymbolKind.TYPE,
    'enum_declaration': SymbolKind.ENUM,
    'module': SymbolKind.NAMESPACE,
    'internal_module': SymbolKind.NAMESPACE,
}

# Anonymous declarations only count as `export default <expr>`
_DEFAULT_EXPORT_KINDS: Dict[str, SymbolKind] = {
    'function_expression': SymbolKind.FUNCTION,
    'function': SymbolKind.FUNCTION,
    'generator_function': SymbolKind.FUNCTION,
    'class': SymbolKind.CLASS,
}

_VARIABLE_TYPES: FrozenSet[str] = frozenset({'lexical_declaration', 'variable_declaration'})

# Variable statements here are loop headers, not declarations
_NON_STATEMENT_PARENTS: FrozenSet[str] = frozenset({'for_statement', 'for_in_statement'})

_LOCAL_SCOPE_TYPES: FrozenSet[str] = frozenset({
    'function_declaration',
    'generator_function_declaration',
    'function_expression',
    'function',
    'generator_function',
    'arrow_function',
    'method_definition',
    'class_static_block',
})

# Wrappers whose span belongs to the declaration they carry
_WRAPPER_TYPES: FrozenSet[str] = frozenset({'export_statement', 'ambient_declaration'})


def classify_node(shape: NodeShape) -> Optional[SymbolKind]:
    """Map a node shape to a symbol kind, or None when it is not recorded."""
    kind = _DECLARATION_KINDS.get(shape.type)
    if kind is not None:
        return kind

    if shape.type in _VARIABLE_TYPES:
        if shape.local_scope or shape.parent_type in _NON_STATEMENT_PARENTS:
            return None
        return SymbolKind.VARIABLE

    if shape.type == 'ambient_declaration' and shape.global_augmentation:
        return SymbolKind.NAMESPACE

    if shape.parent_type == 'export_statement':
        return _DEFAULT_EXPORT_KINDS.get(shape.type)

    return None


class TypeScriptParsingStrategy:
    """TypeScript-specific parsing strategy using tree-sitter - Single Pass."""

    def __init__(self, language: str = TYPESCRIPT):
        self.language = language
        self.parser = get_parser(language)

    def parse_file(self, file_path: str, source: bytes) -> List[SymbolRecord]:
        """
        Parse one file and return its declarations in depth-first order.

        Args:
            file_path: Path relative to the package directory, recorded as-is
            source: Raw file bytes

        Returns:
            SymbolRecords for every classified node
        """
        tree = self.parser.parse(source)
        if tree.root_node.has_error:
            logger.debug("Syntax errors in %s, keeping recovered declarations", file_path)

        context = TraversalContext(
            file_path=file_path,
            source=source,
            lines=source.decode('utf-8', errors='replace').split('\n'),
        )
        self._traverse(tree.root_node, context)
        return context.symbols

    def _traverse(self, root: tree_sitter.Node, context: 'TraversalContext') -> None:
        """Iterative pre-order walk; deep expression trees never hit the recursion limit."""
        stack: List[Tuple[tree_sitter.Node, Optional[str], bool]] = [(root, None, False)]

        while stack:
            node, parent_type, local_scope = stack.pop()
            shape = NodeShape(
                type=node.type,
                parent_type=parent_type,
                local_scope=local_scope,
                global_augmentation=node.type == 'ambient_declaration' and _is_global_block(node),
            )

            kind = classify_node(shape)
            if kind is not None:
                context.symbols.append(self._build_record(node, shape, kind, context))

            child_scope = local_scope or node.type in _LOCAL_SCOPE_TYPES
            for child in reversed(node.named_children):
                stack.append((child, node.type, child_scope))

    def _build_record(self, node: tree_sitter.Node, shape: NodeShape, kind: SymbolKind,
                      context: 'TraversalContext') -> SymbolRecord:
        span = _span_node(node)
        start_line = span.start_point[0] + 1
        end_row, end_column = span.end_point[0], span.end_point[1]
        # A span ending at column 0 finished on the previous line
        end_line = end_row + 1 if end_column > 0 else end_row
        end_line = max(start_line, end_line)

        signature = ''
        if start_line <= len(context.lines):
            signature = context.lines[start_line - 1].strip()[:SIGNATURE_MAX_LENGTH]

        return SymbolRecord(
            kind=kind,
            name=self._extract_name(node, shape, context.source),
            file=context.file_path,
            start_line=start_line,
            end_line=end_line,
            signature=signature,
        )

    def _extract_name(self, node: tree_sitter.Node, shape: NodeShape, source: bytes) -> str:
        """Identifier of the declaration, first binding of a variable statement, or 'default'."""
        if shape.global_augmentation:
            return 'global'

        name_node = node.child_by_field_name('name')
        if name_node is not None:
            return _node_text(name_node, source)

        if node.type in _VARIABLE_TYPES:
            for child in node.named_children:
                if child.type == 'variable_declarator':
                    binding = child.child_by_field_name('name')
                    if binding is not None:
                        return _node_text(binding, source)
                    break

        return DEFAULT_NAME


class TraversalContext:
    """Context object to pass state during single-pass traversal."""

    def __init__(self, file_path: str, source: bytes, lines: List[str]):
        self.file_path = file_path
        self.source = source
        self.lines = lines
        self.symbols: List[SymbolRecord] = []


def _node_text(node: tree_sitter.Node, source: bytes) -> str:
    return source[node.start_byte:node.end_byte].decode('utf-8', errors='replace')


def _is_global_block(node: tree_sitter.Node) -> bool:
    return any(child.type == 'global' for child in node.children)


def _span_node(node: tree_sitter.Node) -> tree_sitter.Node:
    """Widen to enclosing export/declare wrappers so modifiers are part of the span."""
    span = node
    parent = node.parent
    while parent is not None and parent.type in _WRAPPER_TYPES:
        span = parent
        parent = parent.parent
    return span
