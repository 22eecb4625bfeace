"""JavaScript-specific complexity analyzer implementation.

This module enumerates the function units of JavaScript source using the
tree-sitter JavaScript grammar and scores each one with cyclomatic
complexity.
"""

import logging
import threading
from typing import Any, List, Optional

import tree_sitter_javascript as tsjavascript
from tree_sitter import Language, Parser

from ...exceptions import ParseError
from ..base_analyzer import BaseComplexityAnalyzer
from ..models import FunctionKind, FunctionUnit

logger = logging.getLogger(__name__)

FUNCTION_NODE_KINDS = {
    "function_declaration": FunctionKind.FUNCTION,
    "function_expression": FunctionKind.FUNCTION,
    "generator_function_declaration": FunctionKind.GENERATOR,
    "generator_function": FunctionKind.GENERATOR,
    "arrow_function": FunctionKind.ARROW,
    "method_definition": FunctionKind.METHOD,
}

DECISION_STATEMENTS = {
    "if_statement",
    "for_statement",
    "for_in_statement",
    "while_statement",
    "do_statement",
    "switch_case",
    "catch_clause",
    "ternary_expression",
}

SHORT_CIRCUIT_OPERATORS = {"&&", "||", "??", "&&=", "||=", "??="}


def is_function_node(node) -> bool:
    """Check whether a syntax node is a function unit.

    Anonymous nodes are keyword tokens such as ``function`` and never units.
    """
    return node.is_named and node.type in FUNCTION_NODE_KINDS


class JavaScriptComplexityAnalyzer(BaseComplexityAnalyzer):
    """Complexity analyzer for JavaScript code.

    Every function declaration, function expression, generator, arrow
    function and method is reported as its own unit. Decision points inside
    a nested function count towards the nested unit only.
    """

    def __init__(self):
        """Initialize JavaScript analyzer."""
        super().__init__("js")
        self._language = self._init_language()
        # tree-sitter parsers are not safe to share between threads
        self._local = threading.local()

    @staticmethod
    def _init_language() -> Language:
        try:
            return Language(tsjavascript.language())
        except Exception as e:
            logger.error(f"Failed to initialize JavaScript grammar: {e}")
            raise

    @property
    def parser(self) -> Parser:
        parser = getattr(self._local, "parser", None)
        if parser is None:
            parser = Parser(self._language)
            self._local.parser = parser
        return parser

    def analyze(self, source: str) -> List[FunctionUnit]:
        """Analyze JavaScript source.

        Args:
            source: JavaScript source code

        Returns:
            Function units sorted by line, then column

        Raises:
            ParseError: If the source contains a syntax error
        """
        tree = self.parser.parse(source.encode("utf-8"))
        root_node = tree.root_node

        if root_node.has_error:
            error_node = self._find_first_error(root_node)
            line = error_node.start_point[0] + 1
            column = error_node.start_point[1] + 1
            raise ParseError("Invalid JavaScript syntax", line=line, column=column)

        return [
            FunctionUnit(
                line=node.start_point[0] + 1,
                complexity=self.calculate_cyclomatic_complexity(node),
                name=self._function_name(node),
                kind=FUNCTION_NODE_KINDS[node.type],
            )
            for node in self._walk_functions(root_node)
        ]

    def _walk_functions(self, root_node) -> List[Any]:
        """Collect function nodes in source order."""
        found = []
        stack = [root_node]
        while stack:
            node = stack.pop()
            if is_function_node(node):
                found.append(node)
            stack.extend(reversed(node.children))
        found.sort(key=lambda n: (n.start_point[0], n.start_point[1]))
        return found

    def calculate_cyclomatic_complexity(self, ast_node: Any) -> int:
        """Calculate cyclomatic complexity for a function node.

        JavaScript rules:
        - Base complexity: 1
        - +1 for: if, for, for-in/for-of, while, do-while, case, catch, ?:
        - +1 for each short-circuit operator: &&, ||, ?? and their
          assignment forms
        - Nested functions are not descended into
        """
        complexity = 1

        stack = list(ast_node.children)
        while stack:
            node = stack.pop()

            if is_function_node(node):
                continue

            if node.type in DECISION_STATEMENTS:
                complexity += 1
            elif node.type in ("binary_expression", "augmented_assignment_expression"):
                if self._get_operator(node) in SHORT_CIRCUIT_OPERATORS:
                    complexity += 1

            stack.extend(node.children)

        return complexity

    def _get_operator(self, node) -> Optional[str]:
        operator = node.child_by_field_name("operator")
        return operator.type if operator is not None else None

    def _find_first_error(self, node):
        """Locate the first ERROR or MISSING node below ``node``."""
        while not (node.is_error or node.is_missing):
            for child in node.children:
                if child.has_error or child.is_missing:
                    node = child
                    break
            else:
                return node
        return node

    def _function_name(self, node) -> str:
        name_node = node.child_by_field_name("name")
        if name_node is not None:
            return self._text(name_node)

        parent = node.parent
        if parent is None:
            return "<anonymous>"

        if parent.type == "variable_declarator":
            target = parent.child_by_field_name("name")
        elif parent.type in ("pair", "field_definition"):
            target = parent.child_by_field_name("key") or parent.child_by_field_name("property")
        elif parent.type in ("assignment_expression", "assignment_pattern"):
            target = parent.child_by_field_name("left")
        else:
            target = None

        if target is None:
            return "<anonymous>"
        return self._text(target)

    @staticmethod
    def _text(node) -> str:
        return node.text.decode("utf-8")
