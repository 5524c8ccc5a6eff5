"""Host-facing entry point for parsing Org documents."""

import logging
from dataclasses import dataclass, field
from typing import List

from orgmode.orgmode_ast_builder import OrgASTBuilder
from orgmode.orgmode_ast_node import OrgASTDocumentNode
from orgmode.orgmode_inline_parser import DEFAULT_MAX_INLINE_DEPTH
from orgmode.orgmode_tokenizer import DEFAULT_MAX_INPUT_SIZE, DEFAULT_MAX_LINE_LENGTH, CancelSignal, OrgTokenizer


@dataclass
class OrgParseResult:
    """The outcome of a parse: a best-effort document plus any diagnostics."""
    document: OrgASTDocumentNode
    errors: List[str] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return len(self.errors) > 0


class OrgParser:
    """
    Org document parser.

    Holds the host's size policy and diagnostic sink.  Each call to `parse()`
    is an independent run with its own tokenizer and builder, so one parser
    can be reused for any number of documents.
    """

    def __init__(
        self,
        max_input_size: int = DEFAULT_MAX_INPUT_SIZE,
        max_line_length: int = DEFAULT_MAX_LINE_LENGTH,
        max_inline_depth: int = DEFAULT_MAX_INLINE_DEPTH,
        logger: logging.Logger | None = None
    ) -> None:
        """
        Initialize the parser.

        Args:
            max_input_size: Maximum input size in UTF-8 bytes
            max_line_length: Maximum length of a single line in characters
            max_inline_depth: Maximum nesting depth for inline formatting
            logger: Optional logger that receives step tracing from every stage
        """
        self.max_input_size = max_input_size
        self.max_line_length = max_line_length
        self.max_inline_depth = max_inline_depth
        self._logger = logger if logger is not None else logging.getLogger("OrgParser")
        self._component_logger = logger

    def parse(self, text: str, cancel_event: CancelSignal | None = None) -> OrgParseResult:
        """
        Parse Org text into a document tree.

        Args:
            text: The Org text to parse
            cancel_event: Optional cancellation signal, e.g. a `threading.Event`

        Returns:
            The document and the diagnostics recorded while building it.  This
            never raises for malformed input, oversized input or cancellation.
        """
        tokenizer = OrgTokenizer(
            text,
            max_input_size=self.max_input_size,
            max_line_length=self.max_line_length,
            cancel_event=cancel_event,
            logger=self._component_logger
        )
        builder = OrgASTBuilder(tokenizer, max_inline_depth=self.max_inline_depth, logger=self._component_logger)
        document = builder.build_ast()
        errors = builder.errors()

        if errors:
            self._logger.debug("parse finished with %d diagnostics", len(errors))

        return OrgParseResult(document, errors)
