"""
Builder to construct an AST from a stream of Org tokens.

The builder makes a single pass over the tokens and rebuilds the structure
that the flat token stream does not express: headline nesting by level, list
nesting by indentation, block and drawer bodies by their delimiters and
inline formatting by recursive descent.
"""

import logging
import re
from typing import Callable, ClassVar, Dict, List, Set, Tuple

from orgmode.orgmode_ast_node import (
    OrgASTBlockNode, OrgASTCommentNode, OrgASTDocumentNode, OrgASTDrawerNode, OrgASTHeadlineNode,
    OrgASTHorizontalRuleNode, OrgASTKeywordNode, OrgASTListItemNode, OrgASTListNode, OrgASTNode,
    OrgASTParagraphNode, OrgASTTableNode, OrgASTTableRowNode, OrgCheckboxState, OrgHeadlineKeyword
)
from orgmode.orgmode_error import OrgCancelledError
from orgmode.orgmode_inline_parser import DEFAULT_MAX_INLINE_DEPTH, OrgInlineParser
from orgmode.orgmode_token import OrgToken, OrgTokenType
from orgmode.orgmode_tokenizer import OrgTokenizer


class OrgASTBuilder:
    """
    Builder class for constructing an AST from Org tokens.

    Pulls tokens from an `OrgTokenizer` with two tokens of lookahead and
    dispatches on the current token type to a per-construct parse method.
    Problems are recorded as `"line <n>: <message>"` diagnostics; building
    never raises.

    A builder consumes its tokenizer, so each instance builds one document.
    """

    _DIGIT_CHARS: ClassVar[Set[str]] = set("0123456789")

    _TAGS_PATTERN = re.compile(r'\s+:([a-zA-Z0-9_@#%:]+):\s*$')
    _PRIORITY_PATTERN = re.compile(r'^\[#([A-Z])\]\s*')
    _CHECKBOX_PATTERN = re.compile(r'^\s*\[([ Xx\-])\]\s*')
    _PROPERTY_PATTERN = re.compile(r'^:([^:]+):\s*(.*)$')

    _CHECKBOX_STATES: ClassVar[Dict[str, OrgCheckboxState]] = {
        ' ': OrgCheckboxState.UNCHECKED,
        'X': OrgCheckboxState.CHECKED,
        'x': OrgCheckboxState.CHECKED,
        '-': OrgCheckboxState.PARTIAL,
    }

    def __init__(
        self,
        tokenizer: OrgTokenizer,
        max_inline_depth: int = DEFAULT_MAX_INLINE_DEPTH,
        logger: logging.Logger | None = None
    ) -> None:
        """
        Initialize the AST builder.

        Args:
            tokenizer: The tokenizer to pull tokens from
            max_inline_depth: Maximum nesting depth for inline formatting
            logger: Optional logger used for step tracing
        """
        self._tokenizer = tokenizer
        self._logger = logger if logger is not None else logging.getLogger("OrgASTBuilder")
        self._inline_parser = OrgInlineParser(max_inline_depth, logger)
        self._errors: List[str] = []
        self._document = OrgASTDocumentNode()

        self._current_token = OrgToken(OrgTokenType.EOF, "", 1, 1)
        self._peek_token = OrgToken(OrgTokenType.EOF, "", 1, 1)

        self._parse_functions: Dict[OrgTokenType, Callable[[], OrgASTNode | None]] = {
            OrgTokenType.HEADING: self._parse_headline,
            OrgTokenType.KEYWORD: self._parse_keyword,
            OrgTokenType.BLOCK_BEGIN: self._parse_block,
            OrgTokenType.BLOCK_END: self._parse_unmatched_block_end,
            OrgTokenType.DRAWER_BEGIN: self._parse_drawer,
            OrgTokenType.DRAWER_END: self._parse_unmatched_drawer_end,
            OrgTokenType.LIST_ITEM: self._parse_list,
            OrgTokenType.TABLE_ROW: self._parse_table,
            OrgTokenType.TABLE_SEPARATOR: self._parse_table,
            OrgTokenType.COMMENT: self._parse_comment,
            OrgTokenType.TEXT: self._parse_text,
            OrgTokenType.INVALID: self._parse_invalid,
        }

    def document(self) -> OrgASTDocumentNode:
        """
        Get the current document node.

        Returns:
            The document node
        """
        return self._document

    def errors(self) -> List[str]:
        """
        Get the diagnostics recorded so far.

        Returns:
            Diagnostic strings of the form `"line <n>: <message>"`
        """
        return list(self._errors)

    def build_ast(self) -> OrgASTDocumentNode:
        """
        Build the complete AST from the tokenizer's input.

        Returns:
            The document root node
        """
        self._logger.debug("starting document parse")

        self._advance()
        self._advance()

        # Headlines that are still open, outermost first
        headline_stack: List[OrgASTHeadlineNode] = []

        while self._current_token.type != OrgTokenType.EOF:
            node = self._parse_node()
            if node is not None:
                if isinstance(node, OrgASTHeadlineNode):
                    while headline_stack and headline_stack[-1].level >= node.level:
                        headline_stack.pop()

                    parent: OrgASTNode = headline_stack[-1] if headline_stack else self._document
                    parent.add_child(node)
                    headline_stack.append(node)

                else:
                    parent = headline_stack[-1] if headline_stack else self._document
                    parent.add_child(node)

            self._advance()

        self._record_tokenizer_error()

        self._logger.debug(
            "document parse complete: %d top-level nodes, %d errors", len(self._document.children), len(self._errors)
        )
        return self._document

    def _advance(self) -> None:
        self._current_token = self._peek_token
        self._peek_token = self._tokenizer.next_token()

    def _add_error(self, line: int, message: str) -> None:
        """
        Record a diagnostic.

        Args:
            line: 1-based line number the diagnostic refers to
            message: Human-readable description
        """
        self._errors.append(f"line {line}: {message}")
        self._logger.warning("parse error at line %d: %s", line, message)

    def _record_tokenizer_error(self) -> None:
        """Surface a terminal tokenizer condition as a diagnostic."""
        error = self._tokenizer.error
        if error is None:
            return

        line = error.line if error.line is not None else self._tokenizer.line
        if isinstance(error, OrgCancelledError):
            self._add_error(line, f"parsing cancelled: {error.message}")
            return

        self._add_error(line, f"lexer error: {error.message}")

    def _parse_node(self) -> OrgASTNode | None:
        """
        Parse the construct that starts at the current token.

        Returns:
            The node produced, or None if the token produces no node
        """
        parse_function = self._parse_functions.get(self._current_token.type)
        if parse_function is None:
            return None

        return parse_function()

    def _parse_headline(self) -> OrgASTHeadlineNode:
        """Parse a headline from its star token and the title text that follows."""
        token = self._current_token
        headline = OrgASTHeadlineNode(len(token.literal))
        headline.line_start = token.line
        headline.line_end = token.line

        if self._peek_token.type == OrgTokenType.TEXT:
            self._advance()
            self._parse_headline_title(headline, self._current_token.literal)

        headline.inline = self._inline_parser.parse(headline.title)
        self._logger.debug(
            "parsed headline: level %d, title %r, keyword %s, tags %s",
            headline.level, headline.title, headline.keyword, headline.tags
        )
        return headline

    def _parse_headline_title(self, headline: OrgASTHeadlineNode, text: str) -> None:
        """
        Split a headline's text into tags, status keyword, priority and title.

        Tags are removed first so a trailing colon block is never read as part
        of the title, then the keyword, then the priority.

        Args:
            headline: The headline to populate
            text: The headline text after the stars
        """
        # The space after the stars is kept until tags are found so `* :tag:` still has tags
        text = text.rstrip()

        tags_match = self._TAGS_PATTERN.search(text)
        if tags_match:
            tags: List[str] = []
            for tag in tags_match.group(1).split(':'):
                if tag and tag not in tags:
                    tags.append(tag)

            headline.tags = tags
            text = text[:tags_match.start()]

        text = text.strip()

        for keyword in OrgHeadlineKeyword:
            if text.startswith(keyword.value + ' '):
                headline.keyword = keyword
                text = text[len(keyword.value) + 1:].strip()
                break

            if text == keyword.value:
                headline.keyword = keyword
                text = ""
                break

        priority_match = self._PRIORITY_PATTERN.match(text)
        if priority_match:
            headline.priority = priority_match.group(1)
            text = text[priority_match.end():].strip()

        headline.title = text

    def _parse_keyword(self) -> OrgASTKeywordNode | None:
        """Parse a `#+KEY: value` directive."""
        token = self._current_token
        literal = token.literal
        key, _separator, value = literal[2:].partition(':')
        key = key.strip()

        if not key:
            self._add_error(token.line, f"empty keyword key in {literal!r}")
            return None

        if any(ch.isspace() for ch in key):
            self._add_error(token.line, f"invalid keyword format: expected #+KEY: VALUE, got {literal!r}")
            return None

        keyword = OrgASTKeywordNode(key.upper(), value.strip())
        keyword.line_start = token.line
        keyword.line_end = token.line
        self._logger.debug("parsed keyword: %s = %r", keyword.key, keyword.value)
        return keyword

    def _collect_body_lines(self, is_end: Callable[[OrgToken], bool]) -> Tuple[List[str], bool]:
        """
        Collect the raw lines that follow the current line, up to an end marker.

        Every token on a line is concatenated back into the line's text, so the
        body is reproduced verbatim, blank lines included.  On return the
        current token is the end marker, or the last token before EOF.

        Args:
            is_end: Predicate identifying the end marker token at the start of a line

        Returns:
            Tuple of (body lines, whether the end marker was found)
        """
        lines: List[str] = []
        parts: List[str] = []
        in_body = False

        while self._peek_token.type != OrgTokenType.EOF:
            self._advance()
            token = self._current_token

            if token.type == OrgTokenType.NEWLINE:
                if in_body:
                    lines.append("".join(parts))

                parts = []
                in_body = True
                continue

            if in_body and not parts and is_end(token):
                return lines, True

            parts.append(token.literal)

        if in_body and parts:
            lines.append("".join(parts))

        return lines, False

    def _block_end_kind(self, literal: str) -> str:
        """
        Get the upper-cased kind named by a `#+END_KIND` marker.

        Args:
            literal: The end marker line

        Returns:
            The block kind
        """
        parts = literal[len("#+END_"):].split()
        if not parts:
            return ""

        return parts[0].upper()

    def _parse_block(self) -> OrgASTBlockNode:
        """Parse a `#+BEGIN_KIND [language] [params]` block up to its matching end marker."""
        token = self._current_token
        parts = token.literal[len("#+BEGIN_"):].split()

        kind = parts[0].upper() if parts else ""
        language = parts[1] if len(parts) > 1 else None
        params = " ".join(parts[2:]) if len(parts) > 2 else None

        lines, terminated = self._collect_body_lines(
            lambda t: t.type == OrgTokenType.BLOCK_END and self._block_end_kind(t.literal) == kind
        )

        block = OrgASTBlockNode(kind, "\n".join(lines), language, params)
        block.line_start = token.line
        block.line_end = self._current_token.line
        if not terminated:
            self._logger.debug("block %s at line %d runs to end of input", kind, token.line)

        self._logger.debug("parsed block: kind %s, language %s, %d lines", kind, language, len(lines))
        return block

    def _parse_drawer(self) -> OrgASTDrawerNode:
        """Parse a `:NAME:` drawer up to the next `:END:` marker."""
        token = self._current_token
        drawer = OrgASTDrawerNode(token.literal.strip()[1:-1])

        lines, terminated = self._collect_body_lines(lambda t: t.type == OrgTokenType.DRAWER_END)

        if drawer.is_properties:
            for line in lines:
                match = self._PROPERTY_PATTERN.match(line.strip())
                if match:
                    drawer.properties[match.group(1)] = match.group(2)

        else:
            drawer.content = "\n".join(lines)

        drawer.line_start = token.line
        drawer.line_end = self._current_token.line
        if not terminated:
            self._logger.debug("drawer %s at line %d runs to end of input", drawer.name, token.line)

        self._logger.debug("parsed drawer: name %s, %d properties", drawer.name, len(drawer.properties))
        return drawer

    def _parse_unmatched_block_end(self) -> None:
        token = self._current_token
        self._add_error(token.line, f"unexpected {token.literal.strip()!r} without a matching #+BEGIN_ line")

    def _parse_unmatched_drawer_end(self) -> None:
        token = self._current_token
        self._add_error(token.line, "unexpected :END: without an open drawer")

    def _parse_invalid(self) -> None:
        token = self._current_token
        self._add_error(token.line, f"invalid token {token.literal!r}")

    def _get_indentation(self, text: str) -> int:
        """
        Get the indentation of a line, counting a tab as two columns.

        Args:
            text: The line to measure

        Returns:
            The indentation column count
        """
        indent = 0
        for ch in text:
            if ch == ' ':
                indent += 1

            elif ch == '\t':
                indent += 2

            else:
                break

        return indent

    def _split_bullet(self, text: str) -> Tuple[str, str]:
        """
        Split a list marker (`-`, `+`, `N.` or `N)`) from the start of an item.

        Args:
            text: The item text with indentation removed

        Returns:
            Tuple of (marker, remaining text).  If no marker can be found the
            marker is empty and the text is returned unchanged.
        """
        if text.startswith("- ") or text.startswith("+ "):
            return text[0], text[2:]

        i = 0
        while i < len(text) and text[i] in self._DIGIT_CHARS:
            i += 1

        if 0 < i < len(text) and text[i] in ".)" and text[i + 1:i + 2] == ' ':
            return text[:i + 1], text[i + 2:]

        return "", text

    def _is_ordered_bullet(self, bullet: str) -> bool:
        return bullet != "" and bullet[0] in self._DIGIT_CHARS

    def _parse_list_item(self, token: OrgToken) -> OrgASTListItemNode:
        """
        Parse a single list item line.

        The marker is removed first, then the checkbox.

        Args:
            token: The list item token

        Returns:
            The list item node, not yet attached to a list
        """
        literal = token.literal
        bullet, content = self._split_bullet(literal.lstrip(" \t"))
        if not bullet:
            self._logger.debug("no list marker found at line %d, keeping item as plain text", token.line)

        checkbox = OrgCheckboxState.NONE
        checkbox_match = self._CHECKBOX_PATTERN.match(content)
        if checkbox_match:
            checkbox = self._CHECKBOX_STATES[checkbox_match.group(1)]
            content = content[checkbox_match.end():]

        item = OrgASTListItemNode(content.strip(), self._get_indentation(literal), bullet, checkbox)
        item.inline = self._inline_parser.parse(item.content)
        item.line_start = token.line
        item.line_end = token.line
        return item

    def _parse_list(self) -> OrgASTListNode:
        """
        Parse a run of list items and nest them by indentation.

        The run continues across at most one blank line between items.
        """
        first_token = self._current_token

        items: List[OrgASTListItemNode] = []
        while True:
            items.append(self._parse_list_item(self._current_token))

            # Step over the end of this line and at most one blank line
            if self._peek_token.type == OrgTokenType.NEWLINE:
                self._advance()

            if self._peek_token.type == OrgTokenType.NEWLINE:
                self._advance()

            if self._peek_token.type != OrgTokenType.LIST_ITEM:
                break

            self._advance()

        list_node = OrgASTListNode(self._is_ordered_bullet(items[0].bullet))
        list_node.line_start = first_token.line
        list_node.line_end = items[-1].line_end

        # Items that may still receive nested items, outermost first
        stack: List[OrgASTListItemNode] = []

        for item in items:
            while stack and stack[-1].indent >= item.indent:
                stack.pop()

            if not stack:
                list_node.add_child(item)

            else:
                parent = stack[-1]
                nested_list: OrgASTListNode | None = None
                if parent.children and isinstance(parent.children[-1], OrgASTListNode):
                    nested_list = parent.children[-1]

                if nested_list is None:
                    nested_list = OrgASTListNode(self._is_ordered_bullet(item.bullet))
                    nested_list.line_start = item.line_start
                    parent.add_child(nested_list)

                nested_list.add_child(item)
                nested_list.line_end = item.line_end

            stack.append(item)

        self._logger.debug("parsed list: ordered %s, %d items", list_node.ordered, len(items))
        return list_node

    def _parse_table_row(self, token: OrgToken) -> OrgASTTableRowNode:
        """
        Parse a table row or separator row.

        Args:
            token: The table row token

        Returns:
            The table row node
        """
        if token.type == OrgTokenType.TABLE_SEPARATOR:
            row = OrgASTTableRowNode(separator=True)

        else:
            text = token.literal.strip()
            if text.startswith('|'):
                text = text[1:]

            if text.endswith('|'):
                text = text[:-1]

            row = OrgASTTableRowNode([cell.strip() for cell in text.split('|')])

        row.line_start = token.line
        row.line_end = token.line
        return row

    def _parse_table(self) -> OrgASTTableNode:
        """Parse a run of consecutive table rows."""
        table = OrgASTTableNode()
        table.line_start = self._current_token.line

        while True:
            table.add_child(self._parse_table_row(self._current_token))
            table.line_end = self._current_token.line

            if self._peek_token.type == OrgTokenType.NEWLINE:
                self._advance()

            if self._peek_token.type not in (OrgTokenType.TABLE_ROW, OrgTokenType.TABLE_SEPARATOR):
                break

            self._advance()

        self._logger.debug("parsed table: %d rows", len(table.children))
        return table

    def _parse_comment(self) -> OrgASTCommentNode:
        """Parse a `# comment` line."""
        token = self._current_token
        literal = token.literal
        if literal.startswith("# "):
            content = literal[2:]

        else:
            content = literal[1:]

        comment = OrgASTCommentNode(content)
        comment.line_start = token.line
        comment.line_end = token.line
        return comment

    def _parse_text(self) -> OrgASTNode | None:
        """Parse a plain text line as a paragraph or horizontal rule."""
        token = self._current_token
        literal = token.literal

        # Whitespace-only lines separate content like blank lines do
        if not literal.strip():
            return None

        node: OrgASTNode
        if len(literal) >= 5 and literal == '-' * len(literal):
            node = OrgASTHorizontalRuleNode()

        else:
            node = OrgASTParagraphNode(literal)
            for child in self._inline_parser.parse(literal):
                node.add_child(child)

        node.line_start = token.line
        node.line_end = token.line
        return node
