"""Line-aware tokenizer for Org documents."""

import logging
from typing import Callable, ClassVar, Dict, List, Protocol, Set

from orgmode.orgmode_error import OrgCancelledError, OrgError, OrgInputTooLargeError, OrgLineTooLongError
from orgmode.orgmode_token import OrgToken, OrgTokenType


DEFAULT_MAX_INPUT_SIZE = 10 * 1024 * 1024
DEFAULT_MAX_LINE_LENGTH = 10000


class CancelSignal(Protocol):
    """Anything that can report a cancellation request, e.g. `threading.Event`."""

    def is_set(self) -> bool:
        """Return True once cancellation has been requested."""


def is_table_separator(line: str) -> bool:
    """
    Determine whether a table line is a separator row such as `|---+---|`.

    Args:
        line: The raw table line

    Returns:
        True if the line starts and ends with `|`, contains at least one dash and
        no letters or digits
    """
    trimmed = line.strip()
    if not trimmed.startswith('|') or not trimmed.endswith('|'):
        return False

    interior = trimmed.replace('|', '')
    if '-' not in interior:
        return False

    for ch in interior:
        if ch.isalnum():
            return False

    return True


class OrgTokenizer:
    """
    Tokenizes Org text one physical line at a time.

    Each call to `next_token()` classifies the content of the current line (or
    the newline that ends it).  Structural characters are only significant at
    the start of a line; everything else is plain text.  Classification never
    fails: anything that does not match a structural pattern is read to the
    end of the line as TEXT.

    The tokenizer never raises.  Oversized input, overlong lines and
    cancellation are recorded in `error` and the token stream switches to
    EOF tokens from then on.
    """

    _DIGIT_CHARS: ClassVar[Set[str]] = set("0123456789")
    _INDENT_CHARS: ClassVar[Set[str]] = set(" \t")
    _STAR_CHARS: ClassVar[Set[str]] = set("*")
    _DASH_CHARS: ClassVar[Set[str]] = set("-")
    _ORDERED_DELIMITERS: ClassVar[Set[str]] = set(".)")
    _BULLET_CHARS: ClassVar[Set[str]] = set("-+")

    def __init__(
        self,
        text: str,
        max_input_size: int = DEFAULT_MAX_INPUT_SIZE,
        max_line_length: int = DEFAULT_MAX_LINE_LENGTH,
        cancel_event: CancelSignal | None = None,
        logger: logging.Logger | None = None
    ) -> None:
        """
        Initialize the tokenizer.

        Args:
            text: The Org text to tokenize
            max_input_size: Maximum input size in UTF-8 bytes
            max_line_length: Maximum length of a single line in characters
            cancel_event: Optional cancellation signal polled before every token
            logger: Optional logger used for step tracing
        """
        self._input = text
        self._input_len = len(text)
        self._position = 0
        self._line = 1
        self._line_start = 0
        self._max_input_size = max_input_size
        self._max_line_length = max_line_length
        self._cancel_event = cancel_event
        self._logger = logger if logger is not None else logging.getLogger("OrgTokenizer")
        self._error: OrgError | None = None

        # Line-start dispatch table keyed by leading character
        self._lexing_functions: Dict[str, Callable[[], OrgToken]] = {
            '*': self._read_heading,
            '#': self._read_hash_line,
            ':': self._read_drawer_line,
            '-': self._read_dash_line,
            '+': self._read_plus_line,
            '|': self._read_table_row,
            ' ': self._read_indented_line,
            '\t': self._read_indented_line,
        }
        for digit in self._DIGIT_CHARS:
            self._lexing_functions[digit] = self._read_ordered_line

        size = len(text.encode('utf-8'))
        if size > max_input_size:
            self._error = OrgInputTooLargeError(size, max_input_size)
            self._logger.error("input too large: size %d, max %d", size, max_input_size)

        self._logger.debug("tokenizer initialized: input length %d", self._input_len)

    @property
    def error(self) -> OrgError | None:
        """The terminal condition that stopped tokenization, if any."""
        return self._error

    @property
    def line(self) -> int:
        """The 1-based line the cursor is currently on."""
        return self._line

    def tokenize(self) -> List[OrgToken]:
        """
        Tokenize the whole input.

        Returns:
            Every token up to and including the first EOF token
        """
        tokens = []
        while True:
            token = self.next_token()
            tokens.append(token)
            if token.type == OrgTokenType.EOF:
                return tokens

    def next_token(self) -> OrgToken:
        """
        Get the next token from the input.

        Returns:
            The next token; EOF forever once the input is exhausted or a
            terminal condition has been recorded
        """
        if self._error is not None:
            return self._eof_token()

        if self._cancel_event is not None and self._cancel_event.is_set():
            self._error = OrgCancelledError(self._line)
            self._logger.error("tokenizing cancelled at line %d", self._line)
            return self._eof_token()

        if self._position >= self._input_len:
            return self._eof_token()

        ch = self._input[self._position]
        if ch == '\n':
            start = self._position
            self._position += 1
            token = self._make_token(OrgTokenType.NEWLINE, start)
            self._line += 1
            self._line_start = self._position
            return token

        if self._is_line_start():
            lexing_function = self._lexing_functions.get(ch)
            if lexing_function is not None:
                return lexing_function()

        return self._read_text()

    def _eof_token(self) -> OrgToken:
        return OrgToken(OrgTokenType.EOF, "", self._line, self._position - self._line_start + 1)

    def _is_line_start(self) -> bool:
        return self._position == 0 or self._input[self._position - 1] == '\n'

    def _char_at(self, position: int) -> str:
        """
        Get the character at a position.

        Args:
            position: Index into the input

        Returns:
            The character, or an empty string past the end of the input
        """
        if position >= self._input_len:
            return ""

        return self._input[position]

    def _current_char(self) -> str:
        return self._char_at(self._position)

    def _peek_char(self) -> str:
        return self._char_at(self._position + 1)

    def _at_end_of_line(self) -> bool:
        return self._position >= self._input_len or self._input[self._position] == '\n'

    def _make_token(self, token_type: OrgTokenType, start: int) -> OrgToken:
        """
        Create a token covering the input from `start` to the cursor.

        Args:
            token_type: The type of token to create
            start: Start position of the token in the input

        Returns:
            The new token
        """
        token = OrgToken(token_type, self._input[start:self._position], self._line, start - self._line_start + 1)
        self._logger.debug("token %s %r at line %d", token_type.name, token.literal, self._line)
        return token

    def _check_line_length(self) -> bool:
        """
        Check the cursor has not moved past the maximum line length.

        Returns:
            True if the line is still within the limit
        """
        if self._error is not None:
            return False

        if self._position - self._line_start < self._max_line_length:
            return True

        line_end = self._input.find('\n', self._line_start)
        if line_end == -1:
            line_end = self._input_len

        self._error = OrgLineTooLongError(self._line, line_end - self._line_start, self._max_line_length)
        self._logger.error(
            "line too long: line %d, length %d, max %d",
            self._line, line_end - self._line_start, self._max_line_length
        )
        return False

    def _advance_while(self, chars: Set[str]) -> int:
        """
        Advance the cursor over a run of characters from a set.

        Args:
            chars: The set of characters to skip

        Returns:
            The number of characters skipped
        """
        count = 0
        while self._position < self._input_len and self._input[self._position] in chars:
            if not self._check_line_length():
                break

            self._position += 1
            count += 1

        return count

    def _skip_to_end_of_line(self) -> None:
        """Advance the cursor to the newline ending the current line, or the end of input."""
        while self._position < self._input_len and self._input[self._position] != '\n':
            if not self._check_line_length():
                return

            self._position += 1

    def _read_text(self) -> OrgToken:
        """Read the rest of the current line as plain text."""
        start = self._position
        self._skip_to_end_of_line()
        return self._make_token(OrgTokenType.TEXT, start)

    def _read_heading(self) -> OrgToken:
        """
        Read a run of stars at the start of a line.

        A run followed by a space is a heading marker and the rest of the line
        is returned by the next call.  Anything else is plain text.
        """
        start = self._position
        self._advance_while(self._STAR_CHARS)
        if self._error is None and self._current_char() == ' ':
            return self._make_token(OrgTokenType.HEADING, start)

        self._skip_to_end_of_line()
        return self._make_token(OrgTokenType.TEXT, start)

    def _read_hash_line(self) -> OrgToken:
        """Read a `#+` directive, a `#` comment or a plain text line starting with `#`."""
        start = self._position
        peek = self._peek_char()
        if peek == '+':
            self._skip_to_end_of_line()
            upper_literal = self._input[start:self._position].upper()
            if upper_literal.startswith("#+BEGIN_"):
                return self._make_token(OrgTokenType.BLOCK_BEGIN, start)

            if upper_literal.startswith("#+END_"):
                return self._make_token(OrgTokenType.BLOCK_END, start)

            return self._make_token(OrgTokenType.KEYWORD, start)

        if peek in (' ', '\n', ''):
            self._skip_to_end_of_line()
            return self._make_token(OrgTokenType.COMMENT, start)

        return self._read_text()

    def _read_drawer_line(self) -> OrgToken:
        """Read a `:NAME:` drawer marker, an `:END:` marker or plain text starting with `:`."""
        start = self._position
        self._skip_to_end_of_line()
        trimmed = self._input[start:self._position].strip()

        if trimmed.upper() == ":END:":
            return self._make_token(OrgTokenType.DRAWER_END, start)

        name = trimmed[1:-1]
        if (len(trimmed) > 2 and trimmed.endswith(':') and ':' not in name and
                not any(ch.isspace() for ch in name)):
            return self._make_token(OrgTokenType.DRAWER_BEGIN, start)

        return self._make_token(OrgTokenType.TEXT, start)

    def _read_dash_line(self) -> OrgToken:
        """
        Read a line starting with `-`.

        `- ` starts a list item.  Five or more dashes alone on a line are a
        horizontal rule, which is returned as TEXT for the builder to recognize.
        """
        start = self._position
        dash_count = self._advance_while(self._DASH_CHARS)
        if self._error is not None:
            return self._make_token(OrgTokenType.TEXT, start)

        if dash_count == 1 and self._current_char() == ' ':
            self._skip_to_end_of_line()
            return self._make_token(OrgTokenType.LIST_ITEM, start)

        self._skip_to_end_of_line()
        return self._make_token(OrgTokenType.TEXT, start)

    def _read_plus_line(self) -> OrgToken:
        """Read a `+ ` list item or a plain text line starting with `+`."""
        start = self._position
        is_item = self._peek_char() == ' '
        self._skip_to_end_of_line()
        return self._make_token(OrgTokenType.LIST_ITEM if is_item else OrgTokenType.TEXT, start)

    def _read_table_row(self) -> OrgToken:
        """Read a table row or table separator row."""
        start = self._position
        self._skip_to_end_of_line()
        if is_table_separator(self._input[start:self._position]):
            return self._make_token(OrgTokenType.TABLE_SEPARATOR, start)

        return self._make_token(OrgTokenType.TABLE_ROW, start)

    def _try_read_ordered_marker(self) -> OrgTokenType:
        """
        Try to consume an ordered list marker (`N.` or `N)` followed by a space).

        Returns:
            LIST_ITEM if the marker was consumed, INVALID otherwise
        """
        if self._advance_while(self._DIGIT_CHARS) == 0 or self._error is not None:
            return OrgTokenType.INVALID

        if self._current_char() in self._ORDERED_DELIMITERS and self._peek_char() == ' ':
            self._position += 1
            return OrgTokenType.LIST_ITEM

        return OrgTokenType.INVALID

    def _read_ordered_line(self) -> OrgToken:
        """Read an `N. ` / `N) ` ordered list item or a plain text line starting with a digit."""
        start = self._position
        token_type = self._try_read_ordered_marker()
        self._skip_to_end_of_line()
        if token_type == OrgTokenType.INVALID:
            token_type = OrgTokenType.TEXT

        return self._make_token(token_type, start)

    def _read_indented_line(self) -> OrgToken:
        """Read an indented list item, or the indented line as plain text."""
        start = self._position
        self._advance_while(self._INDENT_CHARS)

        token_type = OrgTokenType.INVALID
        ch = self._current_char()
        if self._error is None:
            if ch in self._BULLET_CHARS and self._peek_char() == ' ':
                token_type = OrgTokenType.LIST_ITEM

            elif ch in self._DIGIT_CHARS:
                token_type = self._try_read_ordered_marker()

        self._skip_to_end_of_line()
        if token_type == OrgTokenType.INVALID:
            token_type = OrgTokenType.TEXT

        return self._make_token(token_type, start)
