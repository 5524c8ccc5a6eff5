"""Shared fixtures and utilities for Org parser tests."""

from typing import Callable, List

import pytest

from orgmode import (
    OrgASTBuilder, OrgASTDocumentNode, OrgASTRenderer, OrgInlineParser, OrgParser, OrgToken, OrgTokenizer,
    OrgTokenType
)


@pytest.fixture
def parser():
    """Create a fresh parser with default limits for each test."""
    return OrgParser()


@pytest.fixture
def parser_custom():
    """Factory for parsers with custom limits."""
    def _create_parser(
        max_input_size: int = 1024 * 1024,
        max_line_length: int = 1000,
        max_inline_depth: int = 10
    ) -> OrgParser:
        return OrgParser(
            max_input_size=max_input_size,
            max_line_length=max_line_length,
            max_inline_depth=max_inline_depth
        )
    return _create_parser


@pytest.fixture
def inline_parser():
    """Create an inline parser with the default depth limit."""
    return OrgInlineParser()


@pytest.fixture
def renderer():
    """Create a renderer."""
    return OrgASTRenderer()


@pytest.fixture
def build():
    """Factory that builds a document and returns it with the builder's diagnostics."""
    def _build(text: str):
        builder = OrgASTBuilder(OrgTokenizer(text))
        document = builder.build_ast()
        return document, builder.errors()
    return _build


@pytest.fixture
def tokenize():
    """Factory that tokenizes text and returns every token up to and including EOF."""
    def _tokenize(text: str, **kwargs) -> List[OrgToken]:
        return OrgTokenizer(text, **kwargs).tokenize()
    return _tokenize


class OrgTestHelpers:
    """Helper utilities for Org testing."""

    @staticmethod
    def content_tokens(tokens: List[OrgToken]) -> List[OrgToken]:
        """Drop NEWLINE and EOF tokens, leaving the per-line content tokens."""
        return [t for t in tokens if t.type not in (OrgTokenType.NEWLINE, OrgTokenType.EOF)]

    @staticmethod
    def token_types(tokens: List[OrgToken]) -> List[OrgTokenType]:
        """Get the types of a list of tokens."""
        return [t.type for t in tokens]

    @staticmethod
    def shape(node) -> List:
        """
        Describe the structural shape of a tree as nested lists of class names.

        Two trees with the same shape have the same node types and counts at
        every level.
        """
        return [node.__class__.__name__, [OrgTestHelpers.shape(child) for child in node.children]]

    @staticmethod
    def reparse(parser: OrgParser, document: OrgASTDocumentNode) -> OrgASTDocumentNode:
        """Render a document and parse the result again."""
        text = OrgASTRenderer().render(document)
        return parser.parse(text).document


@pytest.fixture
def helpers():
    """Provide test helper utilities."""
    return OrgTestHelpers


@pytest.fixture
def adversarial_inputs() -> Callable[[], List[str]]:
    """Factory for inputs designed to stress termination and recursion limits."""
    def _inputs() -> List[str]:
        return [
            "*" * 5000,
            "* " + "*" * 5000,
            "[" * 3000 + "]" * 3000,
            "[[" * 2000,
            "*/_+" * 2000,
            "*a " * 3000,
            "- " + "*" * 2000 + "x" + "*" * 2000,
            "#+BEGIN_SRC\n" * 500,
            ":DRAWER:\n" * 500,
            "|" * 4000,
            "1" * 5000 + ". item",
            "\t" * 3000 + "- deep",
            "no trailing newline",
        ]
    return _inputs
