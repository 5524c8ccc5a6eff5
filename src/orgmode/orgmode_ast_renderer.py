"""
Visitor class to render Org AST structures back to Org markup.

Rendering is a normalizing reconstruction rather than a byte-identical copy of
the source: list items are re-indented by nesting level, ordered lists are
renumbered and table separators are rebuilt.  Parsing the rendered text
produces a tree of the same shape.
"""

from typing import List

from orgmode.orgmode_ast_node import (
    OrgASTBlockNode, OrgASTBoldNode, OrgASTCodeNode, OrgASTCommentNode, OrgASTDocumentNode, OrgASTDrawerNode,
    OrgASTHeadlineNode, OrgASTHorizontalRuleNode, OrgASTItalicNode, OrgASTKeywordNode, OrgASTLinkNode,
    OrgASTListItemNode, OrgASTListNode, OrgASTNode, OrgASTParagraphNode, OrgASTStrikethroughNode,
    OrgASTTableNode, OrgASTTableRowNode, OrgASTTextNode, OrgASTTimestampNode, OrgASTUnderlineNode,
    OrgASTVerbatimNode, OrgASTVisitor, OrgCheckboxState
)
from orgmode.orgmode_tokenizer import is_table_separator


class OrgASTRenderer(OrgASTVisitor):
    """Visitor that renders any Org AST node as markup text."""

    def __init__(self) -> None:
        """Initialize the renderer at the outermost list level."""
        super().__init__()
        self._list_level = 0

    def render(self, node: OrgASTNode) -> str:
        """
        Render a node and everything below it.

        Args:
            node: The node to render

        Returns:
            The Org markup for the node.  Structural nodes end with a newline,
            inline nodes and timestamps do not.
        """
        self._list_level = 0
        return self.visit(node)

    def generic_visit(self, node: OrgASTNode) -> str:
        return self._render_children(node.children)

    def _render_children(self, children: List[OrgASTNode]) -> str:
        """
        Render a sequence of sibling structural nodes.

        Adjacent lists and adjacent tables are separated so that they do not
        merge into one when parsed again.

        Args:
            children: The nodes to render

        Returns:
            The concatenated markup
        """
        parts: List[str] = []
        previous: OrgASTNode | None = None
        for child in children:
            if isinstance(child, OrgASTListNode) and isinstance(previous, OrgASTListNode):
                parts.append("\n\n")

            elif isinstance(child, OrgASTTableNode) and isinstance(previous, OrgASTTableNode):
                parts.append("\n")

            parts.append(self.visit(child))
            previous = child

        return "".join(parts)

    def _render_inline(self, children: List[OrgASTNode]) -> str:
        return "".join(self.visit(child) for child in children)

    def visit_OrgASTDocumentNode(self, node: OrgASTDocumentNode) -> str:  # pylint: disable=invalid-name
        return self._render_children(node.children)

    def visit_OrgASTHeadlineNode(self, node: OrgASTHeadlineNode) -> str:  # pylint: disable=invalid-name
        """
        Render a headline and the content it owns.

        Args:
            node: The headline node to render

        Returns:
            The headline line followed by its children
        """
        parts: List[str] = []
        if node.keyword is not None:
            parts.append(node.keyword.value)

        if node.priority is not None:
            parts.append(f"[#{node.priority}]")

        if node.title:
            parts.append(node.title)

        if node.tags:
            parts.append(":" + ":".join(node.tags) + ":")

        line = "*" * node.level + " " + " ".join(parts)
        return line + "\n" + self._render_children(node.children)

    def visit_OrgASTParagraphNode(self, node: OrgASTParagraphNode) -> str:  # pylint: disable=invalid-name
        return node.content + "\n"

    def visit_OrgASTKeywordNode(self, node: OrgASTKeywordNode) -> str:  # pylint: disable=invalid-name
        if not node.value:
            return f"#+{node.key}:\n"

        return f"#+{node.key}: {node.value}\n"

    def visit_OrgASTBlockNode(self, node: OrgASTBlockNode) -> str:  # pylint: disable=invalid-name
        """
        Render a block with its begin and end markers.

        Args:
            node: The block node to render

        Returns:
            The block markup
        """
        begin = f"#+BEGIN_{node.kind}"
        if node.language:
            begin += f" {node.language}"

        if node.params:
            begin += f" {node.params}"

        body = node.content + "\n" if node.content else ""
        return f"{begin}\n{body}#+END_{node.kind}\n"

    def visit_OrgASTDrawerNode(self, node: OrgASTDrawerNode) -> str:  # pylint: disable=invalid-name
        """
        Render a drawer with its begin and end markers.

        Args:
            node: The drawer node to render

        Returns:
            The drawer markup
        """
        lines = [f":{node.name}:"]
        if node.is_properties:
            for key, value in node.properties.items():
                lines.append(f":{key}: {value}" if value else f":{key}:")

        elif node.content:
            lines.append(node.content)

        lines.append(":END:")
        return "\n".join(lines) + "\n"

    def visit_OrgASTListNode(self, node: OrgASTListNode) -> str:  # pylint: disable=invalid-name
        """
        Render a list, numbering ordered items from one.

        Args:
            node: The list node to render

        Returns:
            The list markup, one line per item plus any nested lists
        """
        parts: List[str] = []
        for index, item in enumerate(node.items, start=1):
            if node.ordered:
                marker = f"{index}."

            else:
                marker = item.bullet if item.bullet in ("-", "+") else "-"

            parts.append(self._render_list_item(item, marker))

        return "".join(parts)

    def _render_list_item(self, item: OrgASTListItemNode, marker: str) -> str:
        """
        Render a list item line and its nested list.

        Args:
            item: The list item to render
            marker: The marker to use in place of the item's own bullet

        Returns:
            The list item markup
        """
        line = "  " * self._list_level + marker + " "
        if item.checkbox != OrgCheckboxState.NONE:
            line += f"[{item.checkbox.value}] "

        line += item.content

        self._list_level += 1
        nested = self._render_children(item.children)
        self._list_level -= 1
        return line + "\n" + nested

    def visit_OrgASTListItemNode(self, node: OrgASTListItemNode) -> str:  # pylint: disable=invalid-name
        return self._render_list_item(node, node.bullet if node.bullet else "-")

    def visit_OrgASTTableNode(self, node: OrgASTTableNode) -> str:  # pylint: disable=invalid-name
        """
        Render a table, rebuilding separators to match the column count.

        Args:
            node: The table node to render

        Returns:
            The table markup
        """
        columns = max((len(row.cells) for row in node.rows if not row.separator), default=1)
        lines = [self._render_table_row(row, columns) for row in node.rows]
        return "\n".join(lines) + "\n"

    def _render_table_row(self, row: OrgASTTableRowNode, columns: int) -> str:
        if row.separator:
            return "|" + "+".join(["---"] * max(columns, 1)) + "|"

        line = "| " + " | ".join(row.cells) + " |"

        # A data row of dashes would read back as a separator without its closing pipe
        if is_table_separator(line):
            line = "| " + " | ".join(row.cells)

        return line

    def visit_OrgASTTableRowNode(self, node: OrgASTTableRowNode) -> str:  # pylint: disable=invalid-name
        return self._render_table_row(node, len(node.cells)) + "\n"

    def visit_OrgASTTimestampNode(self, node: OrgASTTimestampNode) -> str:  # pylint: disable=invalid-name
        """
        Render a timestamp, including any date range it spans.

        Args:
            node: The timestamp node to render

        Returns:
            The timestamp markup
        """
        opener, closer = ("<", ">") if node.active else ("[", "]")

        parts = [node.date]
        if node.day:
            parts.append(node.day)

        if node.time:
            if node.end_time and node.end_date is None:
                parts.append(f"{node.time}-{node.end_time}")

            else:
                parts.append(node.time)

        if node.repeater:
            parts.append(node.repeater)

        if node.warning:
            parts.append(node.warning)

        result = opener + " ".join(parts) + closer
        if node.end_date is None:
            return result

        end_parts = [node.end_date]
        if node.end_time:
            end_parts.append(node.end_time)

        return result + "--" + opener + " ".join(end_parts) + closer

    def visit_OrgASTCommentNode(self, node: OrgASTCommentNode) -> str:  # pylint: disable=invalid-name
        if not node.content:
            return "#\n"

        return f"# {node.content}\n"

    def visit_OrgASTHorizontalRuleNode(self, node: OrgASTHorizontalRuleNode) -> str:  # pylint: disable=invalid-name
        return "-----\n"

    def visit_OrgASTTextNode(self, node: OrgASTTextNode) -> str:  # pylint: disable=invalid-name
        return node.content

    def visit_OrgASTBoldNode(self, node: OrgASTBoldNode) -> str:  # pylint: disable=invalid-name
        return "*" + self._render_inline(node.children) + "*"

    def visit_OrgASTItalicNode(self, node: OrgASTItalicNode) -> str:  # pylint: disable=invalid-name
        return "/" + self._render_inline(node.children) + "/"

    def visit_OrgASTStrikethroughNode(self, node: OrgASTStrikethroughNode) -> str:  # pylint: disable=invalid-name
        return "+" + self._render_inline(node.children) + "+"

    def visit_OrgASTUnderlineNode(self, node: OrgASTUnderlineNode) -> str:  # pylint: disable=invalid-name
        return "_" + self._render_inline(node.children) + "_"

    def visit_OrgASTCodeNode(self, node: OrgASTCodeNode) -> str:  # pylint: disable=invalid-name
        return f"~{node.content}~"

    def visit_OrgASTVerbatimNode(self, node: OrgASTVerbatimNode) -> str:  # pylint: disable=invalid-name
        return f"={node.content}="

    def visit_OrgASTLinkNode(self, node: OrgASTLinkNode) -> str:  # pylint: disable=invalid-name
        if not node.children:
            return f"[[{node.url}]]"

        return f"[[{node.url}][{self._render_inline(node.children)}]]"
