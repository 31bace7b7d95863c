"""Declaration extraction from TypeScript sources with tree-sitter."""

import pytest

from node_modules_mcp.indexing.languages import TSX, detect_language
from node_modules_mcp.indexing.models import SymbolKind
from node_modules_mcp.indexing.strategies import NodeShape, TypeScriptParsingStrategy, classify_node

from conftest import LEFT_PAD_DTS, NODE_TYPES_DTS


def _parse(source, file_path="index.d.ts", language="typescript"):
    return TypeScriptParsingStrategy(language).parse_file(file_path, source.encode("utf-8"))


def _tuples(symbols):
    return [(s.kind.value, s.name, s.start_line, s.end_line) for s in symbols]


class TestClassifyNode:
    @pytest.mark.parametrize("node_type, kind", [
        ("function_declaration", SymbolKind.FUNCTION),
        ("function_signature", SymbolKind.FUNCTION),
        ("class_declaration", SymbolKind.CLASS),
        ("abstract_class_declaration", SymbolKind.CLASS),
        ("interface_declaration", SymbolKind.INTERFACE),
        ("type_alias_declaration", SymbolKind.TYPE),
        ("enum_declaration", SymbolKind.ENUM),
        ("module", SymbolKind.NAMESPACE),
        ("internal_module", SymbolKind.NAMESPACE),
        ("lexical_declaration", SymbolKind.VARIABLE),
        ("variable_declaration", SymbolKind.VARIABLE),
    ])
    def test_declaration_types(self, node_type, kind):
        assert classify_node(NodeShape(node_type, "program")) is kind

    def test_unrelated_nodes_are_not_recorded(self):
        assert classify_node(NodeShape("call_expression", "program")) is None
        assert classify_node(NodeShape("method_definition", "class_body")) is None

    def test_local_variables_are_not_recorded(self):
        assert classify_node(NodeShape("lexical_declaration", "statement_block", local_scope=True)) is None
        assert classify_node(NodeShape("lexical_declaration", "for_statement")) is None

    def test_anonymous_default_exports(self):
        assert classify_node(NodeShape("class", "export_statement")) is SymbolKind.CLASS
        assert classify_node(NodeShape("function_expression", "export_statement")) is SymbolKind.FUNCTION
        assert classify_node(NodeShape("class", "variable_declarator")) is None

    def test_global_augmentation(self):
        assert classify_node(NodeShape("ambient_declaration", "program", global_augmentation=True)) is SymbolKind.NAMESPACE
        assert classify_node(NodeShape("ambient_declaration", "program")) is None


class TestParseFile:
    def test_left_pad_declaration(self):
        symbols = _parse(LEFT_PAD_DTS)

        assert _tuples(symbols) == [("function", "leftPad", 3, 7)]
        assert symbols[0].file == "index.d.ts"
        assert symbols[0].signature == "export declare function leftPad("

    def test_nested_declarations_are_found(self):
        symbols = _parse(NODE_TYPES_DTS)

        assert _tuples(symbols) == [
            ("namespace", "NodeJS", 1, 5),
            ("interface", "Process", 2, 4),
            ("namespace", '"fs"', 6, 8),
            ("function", "readFileSync", 7, 7),
        ]

    def test_all_kinds(self):
        source = (
            "export interface Options {\n"
            "  verbose?: boolean;\n"
            "}\n"
            "export type Mode = 'a' | 'b';\n"
            "export enum Color {\n"
            "  Red,\n"
            "  Green,\n"
            "}\n"
            "export const VERSION = '1.0';\n"
            "export class Widget {\n"
            "  render(): void {}\n"
            "}\n"
        )
        assert _tuples(_parse(source, "types.ts")) == [
            ("interface", "Options", 1, 3),
            ("type", "Mode", 4, 4),
            ("enum", "Color", 5, 8),
            ("variable", "VERSION", 9, 9),
            ("class", "Widget", 10, 12),
        ]

    def test_variables_inside_functions_are_skipped(self):
        source = (
            "export function outer() {\n"
            "  const inner = 1;\n"
            "  function nested() {}\n"
            "  return inner;\n"
            "}\n"
            "let counter = 0;\n"
        )
        assert _tuples(_parse(source, "impl.ts")) == [
            ("function", "outer", 1, 5),
            ("function", "nested", 3, 3),
            ("variable", "counter", 6, 6),
        ]

    def test_variable_name_is_first_binding(self):
        symbols = _parse("var first = 1, second = 2;\n", "vars.ts")
        assert [(s.kind.value, s.name) for s in symbols] == [("variable", "first")]

    def test_declare_global(self):
        source = (
            "declare global {\n"
            "  interface Window {\n"
            "    myGlobal: string;\n"
            "  }\n"
            "}\n"
            "export {};\n"
        )
        assert _tuples(_parse(source)) == [
            ("namespace", "global", 1, 5),
            ("interface", "Window", 2, 4),
        ]

    def test_anonymous_default_export_is_named_default(self):
        symbols = _parse("export default function () {\n  return 1;\n}\n", "main.ts")
        assert [(s.kind.value, s.name, s.start_line, s.end_line) for s in symbols] == [
            ("function", "default", 1, 3)
        ]

    def test_signature_is_trimmed_and_truncated(self):
        long_value = "x" * 300
        symbols = _parse(f"    export declare const LONG: '{long_value}';\n")

        assert symbols[0].name == "LONG"
        assert symbols[0].signature.startswith("export declare const LONG")
        assert len(symbols[0].signature) == 200

    def test_syntax_errors_keep_recovered_declarations(self):
        source = "export declare function ok(): void;\nexport class {{{ broken\n"
        symbols = _parse(source)
        assert ("function", "ok") in [(s.kind.value, s.name) for s in symbols]

    def test_tsx_grammar(self):
        assert detect_language("components/Button.tsx") == TSX
        source = "export function Button() {\n  return <button>ok</button>;\n}\n"
        symbols = _parse(source, "Button.tsx", TSX)
        assert _tuples(symbols) == [("function", "Button", 1, 3)]

    def test_line_invariants(self):
        for symbol in _parse(NODE_TYPES_DTS) + _parse(LEFT_PAD_DTS):
            assert 1 <= symbol.start_line <= symbol.end_line
