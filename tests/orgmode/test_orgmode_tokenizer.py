"""Tests for the Org tokenizer."""

import pytest

from orgmode import OrgToken, OrgTokenizer, OrgTokenType, is_table_separator


class TestOrgTokenizerBasics:
    """Test token stream structure."""

    def test_empty_input(self, tokenize):
        """Test that empty input yields a single EOF token."""
        tokens = tokenize("")
        assert len(tokens) == 1
        assert tokens[0].type == OrgTokenType.EOF
        assert tokens[0].line == 1
        assert tokens[0].column == 1

    def test_eof_repeats_forever(self):
        """Test that an exhausted tokenizer keeps returning EOF."""
        tokenizer = OrgTokenizer("text")
        assert tokenizer.next_token().type == OrgTokenType.TEXT
        for _ in range(5):
            assert tokenizer.next_token().type == OrgTokenType.EOF

    def test_newline_tokens_and_line_numbers(self, tokenize, helpers):
        """Test that every newline is a token and line numbers advance."""
        tokens = tokenize("a\n\nb")
        assert helpers.token_types(tokens) == [
            OrgTokenType.TEXT,
            OrgTokenType.NEWLINE,
            OrgTokenType.NEWLINE,
            OrgTokenType.TEXT,
            OrgTokenType.EOF,
        ]
        assert [t.line for t in tokens] == [1, 1, 2, 3, 3]
        assert tokens[1].column == 2
        assert tokens[2].column == 1
        assert tokens[3].literal == "b"

    def test_no_trailing_newline(self, tokenize, helpers):
        """Test that the last line does not need a newline."""
        tokens = tokenize("* H\ntext")
        assert helpers.token_types(helpers.content_tokens(tokens)) == [
            OrgTokenType.HEADING, OrgTokenType.TEXT, OrgTokenType.TEXT
        ]
        assert tokens[-1].type == OrgTokenType.EOF

    def test_line_follows_cursor(self):
        """Test that the current line advances past each newline token."""
        tokenizer = OrgTokenizer("a\nb\n")
        assert tokenizer.line == 1
        tokenizer.next_token()
        assert tokenizer.line == 1
        tokenizer.next_token()
        assert tokenizer.line == 2
        tokenizer.tokenize()
        assert tokenizer.line == 3

    def test_token_repr(self):
        """Test the token debug representation."""
        token = OrgToken(OrgTokenType.TEXT, "abc", 2, 3)
        assert repr(token) == "OrgToken(TEXT, 'abc', line=2, col=3)"


class TestOrgTokenizerHeadings:
    """Test headline classification."""

    def test_heading_splits_stars_and_text(self, tokenize, helpers):
        """Test that a headline yields the stars and then the rest of the line."""
        tokens = helpers.content_tokens(tokenize("** Title here"))
        assert tokens[0].type == OrgTokenType.HEADING
        assert tokens[0].literal == "**"
        assert tokens[0].column == 1
        assert tokens[1].type == OrgTokenType.TEXT
        assert tokens[1].literal == " Title here"
        assert tokens[1].column == 3

    @pytest.mark.parametrize("line", [
        "*bold* at line start",
        "***",
        "*",
    ])
    def test_stars_without_space_are_text(self, tokenize, helpers, line):
        """Test that a star run not followed by a space is plain text."""
        tokens = helpers.content_tokens(tokenize(line))
        assert len(tokens) == 1
        assert tokens[0].type == OrgTokenType.TEXT
        assert tokens[0].literal == line

    def test_star_not_at_line_start(self, tokenize, helpers):
        """Test that structural characters are only significant at line start."""
        tokens = helpers.content_tokens(tokenize("text * more"))
        assert helpers.token_types(tokens) == [OrgTokenType.TEXT]

    def test_heading_after_newline(self, tokenize, helpers):
        """Test that a headline on a later line is recognized."""
        tokens = tokenize("intro\n* H")
        assert helpers.token_types(tokens) == [
            OrgTokenType.TEXT,
            OrgTokenType.NEWLINE,
            OrgTokenType.HEADING,
            OrgTokenType.TEXT,
            OrgTokenType.EOF,
        ]
        assert tokens[2].line == 2


class TestOrgTokenizerLineClassification:
    """Test classification of each kind of line."""

    @pytest.mark.parametrize("line,expected_type", [
        ("#+TITLE: Document", OrgTokenType.KEYWORD),
        ("#+STARTUP", OrgTokenType.KEYWORD),
        ("#+BEGIN_SRC python", OrgTokenType.BLOCK_BEGIN),
        ("#+begin_quote", OrgTokenType.BLOCK_BEGIN),
        ("#+END_SRC", OrgTokenType.BLOCK_END),
        ("#+end_quote", OrgTokenType.BLOCK_END),
        ("# a comment", OrgTokenType.COMMENT),
        ("#", OrgTokenType.COMMENT),
        ("#hashtag", OrgTokenType.TEXT),
        (":PROPERTIES:", OrgTokenType.DRAWER_BEGIN),
        (":LOGBOOK:", OrgTokenType.DRAWER_BEGIN),
        (":END:", OrgTokenType.DRAWER_END),
        (":end:", OrgTokenType.DRAWER_END),
        (":not a drawer:", OrgTokenType.TEXT),
        ("::", OrgTokenType.TEXT),
        (":a:b:", OrgTokenType.TEXT),
        (":ID: 123", OrgTokenType.TEXT),
        ("- item", OrgTokenType.LIST_ITEM),
        ("-----", OrgTokenType.TEXT),
        ("--", OrgTokenType.TEXT),
        ("-x", OrgTokenType.TEXT),
        ("+ item", OrgTokenType.LIST_ITEM),
        ("+x", OrgTokenType.TEXT),
        ("1. first", OrgTokenType.LIST_ITEM),
        ("2) second", OrgTokenType.LIST_ITEM),
        ("10. tenth", OrgTokenType.LIST_ITEM),
        ("1.5 meters", OrgTokenType.TEXT),
        ("2024 was a year", OrgTokenType.TEXT),
        ("1.", OrgTokenType.TEXT),
        ("| a | b |", OrgTokenType.TABLE_ROW),
        ("|---+---|", OrgTokenType.TABLE_SEPARATOR),
        ("|-----|", OrgTokenType.TABLE_SEPARATOR),
        ("| - a |", OrgTokenType.TABLE_ROW),
        ("  - nested", OrgTokenType.LIST_ITEM),
        ("\t+ tabbed", OrgTokenType.LIST_ITEM),
        ("   3. three", OrgTokenType.LIST_ITEM),
        ("  plain", OrgTokenType.TEXT),
        ("  -x", OrgTokenType.TEXT),
        ("  12abc", OrgTokenType.TEXT),
        ("plain *text*", OrgTokenType.TEXT),
    ])
    def test_line_classification(self, tokenize, helpers, line, expected_type):
        """Test that a single line is classified as expected."""
        tokens = helpers.content_tokens(tokenize(line))
        assert len(tokens) == 1
        assert tokens[0].type == expected_type
        assert tokens[0].literal == line

    def test_indented_list_item_keeps_indentation(self, tokenize, helpers):
        """Test that an indented list item's literal includes its indentation."""
        tokens = helpers.content_tokens(tokenize("    - deep"))
        assert tokens[0].literal == "    - deep"
        assert tokens[0].column == 1

    def test_whitespace_only_line_is_text(self, tokenize, helpers):
        """Test that a whitespace-only line is read as text."""
        tokens = helpers.content_tokens(tokenize("   \nx"))
        assert tokens[0].type == OrgTokenType.TEXT
        assert tokens[0].literal == "   "

    def test_every_line_is_classified(self, tokenize, helpers):
        """Test a mixed document produces one content token per line (two for headlines)."""
        text = "#+TITLE: T\n* H\n- a\n| x |\n# c\nplain\n"
        tokens = helpers.content_tokens(tokenize(text))
        assert helpers.token_types(tokens) == [
            OrgTokenType.KEYWORD,
            OrgTokenType.HEADING,
            OrgTokenType.TEXT,
            OrgTokenType.LIST_ITEM,
            OrgTokenType.TABLE_ROW,
            OrgTokenType.COMMENT,
            OrgTokenType.TEXT,
        ]
        assert [t.line for t in tokens] == [1, 2, 2, 3, 4, 5, 6]


class TestTableSeparator:
    """Test table separator detection."""

    @pytest.mark.parametrize("line,expected", [
        ("|---+---|", True),
        ("|-|", True),
        ("  |---|---|  ", True),
        ("| - + - |", True),
        ("| a | b |", False),
        ("|   |", False),
        ("|---", False),
        ("---|", False),
        ("|-1-|", False),
        ("|-x-|", False),
    ])
    def test_is_table_separator(self, line, expected):
        """Test separator detection over a range of rows."""
        assert is_table_separator(line) is expected
