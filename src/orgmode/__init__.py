"""Org outline markup parser package."""

# Main API
from orgmode.orgmode_parser import OrgParser, OrgParseResult

# Terminal tokenizer conditions
from orgmode.orgmode_error import OrgError, OrgInputTooLargeError, OrgLineTooLongError, OrgCancelledError

# Tree model
from orgmode.orgmode_ast_node import (
    OrgASTNode, OrgASTVisitor, OrgHeadlineKeyword, OrgCheckboxState,
    OrgASTDocumentNode, OrgASTHeadlineNode, OrgASTParagraphNode, OrgASTKeywordNode, OrgASTBlockNode,
    OrgASTDrawerNode, OrgASTListNode, OrgASTListItemNode, OrgASTTableNode, OrgASTTableRowNode,
    OrgASTTimestampNode, OrgASTCommentNode, OrgASTHorizontalRuleNode,
    OrgASTInlineNode, OrgASTTextNode, OrgASTBoldNode, OrgASTItalicNode, OrgASTStrikethroughNode,
    OrgASTUnderlineNode, OrgASTCodeNode, OrgASTVerbatimNode, OrgASTLinkNode
)

# Timestamps
from orgmode.orgmode_timestamp import parse_timestamp, find_timestamps

# Visitors
from orgmode.orgmode_ast_renderer import OrgASTRenderer
from orgmode.orgmode_ast_printer import OrgASTPrinter

# Lower-level components (for advanced usage)
from orgmode.orgmode_token import OrgToken, OrgTokenType
from orgmode.orgmode_tokenizer import (
    OrgTokenizer, CancelSignal, is_table_separator, DEFAULT_MAX_INPUT_SIZE, DEFAULT_MAX_LINE_LENGTH
)
from orgmode.orgmode_inline_parser import OrgInlineParser, DEFAULT_MAX_INLINE_DEPTH
from orgmode.orgmode_ast_builder import OrgASTBuilder


__all__ = [
    # Main API
    "OrgParser", "OrgParseResult",

    # Errors
    "OrgError", "OrgInputTooLargeError", "OrgLineTooLongError", "OrgCancelledError",

    # Tree model
    "OrgASTNode", "OrgASTVisitor", "OrgHeadlineKeyword", "OrgCheckboxState",
    "OrgASTDocumentNode", "OrgASTHeadlineNode", "OrgASTParagraphNode", "OrgASTKeywordNode", "OrgASTBlockNode",
    "OrgASTDrawerNode", "OrgASTListNode", "OrgASTListItemNode", "OrgASTTableNode", "OrgASTTableRowNode",
    "OrgASTTimestampNode", "OrgASTCommentNode", "OrgASTHorizontalRuleNode",
    "OrgASTInlineNode", "OrgASTTextNode", "OrgASTBoldNode", "OrgASTItalicNode", "OrgASTStrikethroughNode",
    "OrgASTUnderlineNode", "OrgASTCodeNode", "OrgASTVerbatimNode", "OrgASTLinkNode",

    # Timestamps
    "parse_timestamp", "find_timestamps",

    # Visitors
    "OrgASTRenderer", "OrgASTPrinter",

    # Lower-level components
    "OrgToken", "OrgTokenType", "OrgTokenizer", "CancelSignal", "is_table_separator",
    "DEFAULT_MAX_INPUT_SIZE", "DEFAULT_MAX_LINE_LENGTH", "OrgInlineParser", "DEFAULT_MAX_INLINE_DEPTH",
    "OrgASTBuilder"
]
