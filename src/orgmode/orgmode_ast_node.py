"""
Abstract Syntax Tree node classes for Org documents.

The tree is strictly owned top-down: a node holds its children and nothing
holds a reference back to its parent.
"""

from enum import Enum
from typing import Any, Dict, List


class OrgHeadlineKeyword(Enum):
    """Status keyword of a headline."""
    TODO = "TODO"
    DONE = "DONE"


class OrgCheckboxState(Enum):
    """Completion marker on a list item."""
    NONE = ""
    UNCHECKED = " "
    CHECKED = "X"
    PARTIAL = "-"


class OrgASTNode:
    """Base class for all Org AST nodes."""

    def __init__(self) -> None:
        """Initialize a node with no children and no source range."""
        self.children: List['OrgASTNode'] = []

        # Source range information, 1-based
        self.line_start: int | None = None
        self.line_end: int | None = None

    def add_child(self, child: 'OrgASTNode') -> 'OrgASTNode':
        """
        Add a child node to this node.

        Args:
            child: The child node to add

        Returns:
            The added child node for method chaining
        """
        self.children.append(child)
        return child


class OrgASTVisitor:
    """
    Base visitor class for Org AST traversal.

    Dispatches to `visit_<ClassName>` methods, falling back to `generic_visit`.
    """

    def visit(self, node: OrgASTNode) -> Any:
        """
        Visit a node and dispatch to the appropriate visit method.

        Args:
            node: The node to visit

        Returns:
            The result of visiting the node
        """
        method_name = f'visit_{node.__class__.__name__}'
        visitor = getattr(self, method_name, self.generic_visit)
        return visitor(node)

    def generic_visit(self, node: OrgASTNode) -> List[Any]:
        """
        Default visit method for nodes without specific handlers.

        Args:
            node: The node to visit

        Returns:
            A list of results from visiting each child
        """
        results = []
        for child in node.children:
            results.append(self.visit(child))

        return results


class OrgASTDocumentNode(OrgASTNode):
    """Root node representing an entire Org document."""

    def keywords(self) -> Dict[str, str]:
        """
        Get the document-level keywords that precede the first headline.

        Returns:
            Mapping of keyword key to value, in order of first appearance; later
            duplicates overwrite earlier values
        """
        result: Dict[str, str] = {}
        for child in self.children:
            if isinstance(child, OrgASTHeadlineNode):
                break

            if isinstance(child, OrgASTKeywordNode):
                result[child.key] = child.value

        return result

    @property
    def title(self) -> str | None:
        return self.keywords().get("TITLE")

    @property
    def author(self) -> str | None:
        return self.keywords().get("AUTHOR")

    @property
    def date(self) -> str | None:
        return self.keywords().get("DATE")


class OrgASTHeadlineNode(OrgASTNode):
    """Node representing a headline; owns the content up to the next headline of the same or lower level."""

    def __init__(
        self,
        level: int,
        title: str = "",
        keyword: OrgHeadlineKeyword | None = None,
        priority: str | None = None,
        tags: List[str] | None = None
    ) -> None:
        """
        Initialize a headline node.

        Args:
            level: Number of heading stars
            title: Headline text with keyword, priority and tags removed
            keyword: Optional TODO/DONE status keyword
            priority: Optional single uppercase priority letter
            tags: Ordered, de-duplicated tag names
        """
        super().__init__()
        self.level = level
        self.title = title
        self.keyword = keyword
        self.priority = priority
        self.tags: List[str] = tags if tags is not None else []

        # Inline decomposition of the title
        self.inline: List[OrgASTNode] = []


class OrgASTParagraphNode(OrgASTNode):
    """Node representing a line of text; its children are the inline elements."""

    def __init__(self, content: str) -> None:
        """
        Initialize a paragraph node.

        Args:
            content: The raw text of the line
        """
        super().__init__()
        self.content = content

    @property
    def inline(self) -> List[OrgASTNode]:
        return self.children

    def plain_text(self) -> str:
        """
        Get the visible text of the paragraph with formatting markers removed.

        Returns:
            The concatenated plain text of every inline element
        """
        return "".join(child.plain_text() for child in self.children)  # type: ignore[attr-defined]


class OrgASTKeywordNode(OrgASTNode):
    """Node representing a `#+KEY: value` directive."""

    def __init__(self, key: str, value: str) -> None:
        super().__init__()
        self.key = key
        self.value = value


class OrgASTBlockNode(OrgASTNode):
    """Node representing a `#+BEGIN_KIND ... #+END_KIND` block."""

    def __init__(self, kind: str, content: str, language: str | None = None, params: str | None = None) -> None:
        """
        Initialize a block node.

        Args:
            kind: Upper-cased block kind, e.g. SRC or QUOTE
            content: The raw lines between the markers, joined with newlines
            language: Optional language identifier (first word after the kind)
            params: Optional remaining parameters
        """
        super().__init__()
        self.kind = kind
        self.content = content
        self.language = language
        self.params = params


class OrgASTDrawerNode(OrgASTNode):
    """Node representing a `:NAME: ... :END:` drawer."""

    def __init__(self, name: str) -> None:
        """
        Initialize a drawer node.

        Args:
            name: The drawer name
        """
        super().__init__()
        self.name = name

        # Populated for PROPERTIES drawers only
        self.properties: Dict[str, str] = {}

        # Raw body for every other drawer
        self.content = ""

    @property
    def is_properties(self) -> bool:
        return self.name == "PROPERTIES"


class OrgASTListNode(OrgASTNode):
    """Node representing an ordered or unordered list; its children are list items."""

    def __init__(self, ordered: bool = False) -> None:
        super().__init__()
        self.ordered = ordered

    @property
    def items(self) -> List['OrgASTListItemNode']:
        return self.children  # type: ignore[return-value]


class OrgASTListItemNode(OrgASTNode):
    """Node representing a list item; a nested list appears among its children."""

    def __init__(
        self,
        content: str,
        indent: int = 0,
        bullet: str = "-",
        checkbox: OrgCheckboxState = OrgCheckboxState.NONE
    ) -> None:
        """
        Initialize a list item node.

        Args:
            content: Item text with the marker and checkbox removed
            indent: Indentation column count of the marker
            bullet: The marker text, e.g. `-`, `+`, `1.` or `2)`
            checkbox: Checkbox state
        """
        super().__init__()
        self.content = content
        self.indent = indent
        self.bullet = bullet
        self.checkbox = checkbox

        # Inline decomposition of the content
        self.inline: List[OrgASTNode] = []

    def nested_list(self) -> 'OrgASTListNode | None':
        """
        Get the nested list attached to this item, if any.

        Returns:
            The nested list node or None
        """
        for child in self.children:
            if isinstance(child, OrgASTListNode):
                return child

        return None


class OrgASTTableNode(OrgASTNode):
    """Node representing a table; its children are table rows."""

    @property
    def rows(self) -> List['OrgASTTableRowNode']:
        return self.children  # type: ignore[return-value]


class OrgASTTableRowNode(OrgASTNode):
    """Node representing a table row or a separator row."""

    def __init__(self, cells: List[str] | None = None, separator: bool = False) -> None:
        super().__init__()
        self.cells: List[str] = cells if cells is not None else []
        self.separator = separator


class OrgASTTimestampNode(OrgASTNode):
    """Node representing an active `<...>` or inactive `[...]` timestamp."""

    def __init__(
        self,
        date: str,
        active: bool = True,
        day: str | None = None,
        time: str | None = None,
        repeater: str | None = None,
        warning: str | None = None,
        end_date: str | None = None,
        end_time: str | None = None
    ) -> None:
        """
        Initialize a timestamp node.

        Args:
            date: Date in YYYY-MM-DD form
            active: True for `<...>`, False for `[...]`
            day: Optional day name as written
            time: Optional HH:MM start time
            repeater: Optional repeater such as `+1w`, `++1m` or `.+1d`
            warning: Optional warning delay such as `-3d`
            end_date: End date of a `<...>--<...>` range
            end_time: End time of a time range
        """
        super().__init__()
        self.date = date
        self.active = active
        self.day = day
        self.time = time
        self.repeater = repeater
        self.warning = warning
        self.end_date = end_date
        self.end_time = end_time


class OrgASTCommentNode(OrgASTNode):
    """Node representing a `# comment` line."""

    def __init__(self, content: str) -> None:
        super().__init__()
        self.content = content


class OrgASTHorizontalRuleNode(OrgASTNode):
    """Node representing a horizontal rule (five or more dashes)."""


class OrgASTInlineNode(OrgASTNode):
    """Base class for inline elements inside paragraphs, titles, list items and link descriptions."""

    def plain_text(self) -> str:
        """
        Get the visible text of this element with formatting markers removed.

        Returns:
            The concatenated plain text of the nested elements
        """
        return "".join(child.plain_text() for child in self.children)  # type: ignore[attr-defined]


class OrgASTTextNode(OrgASTInlineNode):
    """Node representing plain text."""

    def __init__(self, content: str) -> None:
        super().__init__()
        self.content = content

    def plain_text(self) -> str:
        return self.content


class OrgASTBoldNode(OrgASTInlineNode):
    """Node representing `*bold*` text."""


class OrgASTItalicNode(OrgASTInlineNode):
    """Node representing `/italic/` text."""


class OrgASTStrikethroughNode(OrgASTInlineNode):
    """Node representing `+strikethrough+` text."""


class OrgASTUnderlineNode(OrgASTInlineNode):
    """Node representing `_underline_` text."""


class OrgASTCodeNode(OrgASTInlineNode):
    """Node representing `~code~`; the content is never decomposed further."""

    def __init__(self, content: str) -> None:
        super().__init__()
        self.content = content

    def plain_text(self) -> str:
        return self.content


class OrgASTVerbatimNode(OrgASTInlineNode):
    """Node representing `=verbatim=`; the content is never decomposed further."""

    def __init__(self, content: str) -> None:
        super().__init__()
        self.content = content

    def plain_text(self) -> str:
        return self.content


class OrgASTLinkNode(OrgASTInlineNode):
    """Node representing `[[url]]` or `[[url][description]]`; the children are the description."""

    def __init__(self, url: str) -> None:
        super().__init__()
        self.url = url

    def plain_text(self) -> str:
        if not self.children:
            return self.url

        return super().plain_text()
