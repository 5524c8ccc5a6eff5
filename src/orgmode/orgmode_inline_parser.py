"""
Recursive-descent parser for Org inline markup.

Decomposes a line of text into text, emphasis, code, verbatim and link
elements.  Recursion depth is bounded so adversarial input always terminates.
"""

import logging
import re
from typing import Callable, Dict, List, NamedTuple

from orgmode.orgmode_ast_node import (
    OrgASTBoldNode, OrgASTCodeNode, OrgASTInlineNode, OrgASTItalicNode, OrgASTLinkNode, OrgASTNode,
    OrgASTStrikethroughNode, OrgASTTextNode, OrgASTUnderlineNode, OrgASTVerbatimNode
)


DEFAULT_MAX_INLINE_DEPTH = 10


class InlineMarker(NamedTuple):
    """Describes an inline formatting marker."""
    closer: str
    nestable: bool
    factory: Callable[..., OrgASTInlineNode]


class OrgInlineParser:
    """
    Parser for inline formatting within a single line of text.

    The parser is total: any input decomposes into a list of elements, in the
    worst case a single text element.
    """

    _LINK_PATTERN = re.compile(r'\[\[([^\]]+)\](?:\[([^\]]+)\])?\]')

    _MARKERS: Dict[str, InlineMarker] = {
        '*': InlineMarker('*', True, OrgASTBoldNode),
        '/': InlineMarker('/', True, OrgASTItalicNode),
        '~': InlineMarker('~', False, OrgASTCodeNode),
        '=': InlineMarker('=', False, OrgASTVerbatimNode),
        '+': InlineMarker('+', True, OrgASTStrikethroughNode),
        '_': InlineMarker('_', True, OrgASTUnderlineNode),
    }

    def __init__(self, max_depth: int = DEFAULT_MAX_INLINE_DEPTH, logger: logging.Logger | None = None) -> None:
        """
        Initialize the inline parser.

        Args:
            max_depth: Maximum nesting depth before the remaining text is kept as plain text
            logger: Optional logger used for step tracing
        """
        self._max_depth = max_depth
        self._logger = logger if logger is not None else logging.getLogger("OrgInlineParser")

    def parse(self, text: str) -> List[OrgASTNode]:
        """
        Parse inline formatting in text.

        Args:
            text: The text to parse

        Returns:
            A list of inline nodes covering the whole text
        """
        return self._parse_recursive(text, 0)

    def _parse_recursive(self, text: str, depth: int) -> List[OrgASTNode]:
        """
        Parse inline formatting with an explicit depth counter.

        Args:
            text: The text to parse
            depth: Current nesting depth

        Returns:
            A list of inline nodes covering the whole text
        """
        if depth > self._max_depth:
            self._logger.debug("inline nesting limit reached, keeping %d characters as text", len(text))
            return [OrgASTTextNode(text)]

        nodes: List[OrgASTNode] = []
        i = 0
        text_len = len(text)

        while i < text_len:
            # Links take precedence over everything else
            if text.startswith('[[', i):
                match = self._LINK_PATTERN.match(text, i)
                if match:
                    link = OrgASTLinkNode(match.group(1))
                    description = match.group(2)
                    if description:
                        for child in self._parse_recursive(description, depth + 1):
                            link.add_child(child)

                    nodes.append(link)
                    i = match.end()
                    continue

            marker = self._MARKERS.get(text[i])
            if marker is not None and text_len - i > 2:
                end = text.find(marker.closer, i + 1)
                if end > i + 1:
                    inner = text[i + 1:end]
                    if marker.nestable:
                        node = marker.factory()
                        for child in self._parse_recursive(inner, depth + 1):
                            node.add_child(child)

                    else:
                        node = marker.factory(inner)

                    nodes.append(node)
                    i = end + 1
                    continue

            next_marker = self._find_next_marker(text, i)
            if next_marker == -1:
                nodes.append(OrgASTTextNode(text[i:]))
                break

            if next_marker > i:
                nodes.append(OrgASTTextNode(text[i:next_marker]))
                i = next_marker
                continue

            # A marker that failed to match is consumed as a single character
            nodes.append(OrgASTTextNode(text[i]))
            i += 1

        return nodes

    def _find_next_marker(self, text: str, start: int) -> int:
        """
        Find the position of the next character that could start an inline element.

        Args:
            text: The text to search
            start: Position to start searching from

        Returns:
            The position of the next marker or link opener, or -1 if there is none
        """
        for i in range(start, len(text)):
            ch = text[i]
            if ch in self._MARKERS:
                return i

            if ch == '[' and text.startswith('[[', i):
                return i

        return -1
