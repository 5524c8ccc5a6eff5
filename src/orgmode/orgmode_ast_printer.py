"""
Visitor class to print Org AST structures for debugging
"""
from typing import Any, List

from orgmode.orgmode_ast_node import (
    OrgASTBlockNode, OrgASTCodeNode, OrgASTCommentNode, OrgASTDrawerNode, OrgASTHeadlineNode, OrgASTKeywordNode,
    OrgASTLinkNode, OrgASTListItemNode, OrgASTListNode, OrgASTNode, OrgASTTableRowNode, OrgASTTextNode,
    OrgASTTimestampNode, OrgASTVerbatimNode, OrgASTVisitor
)


class OrgASTPrinter(OrgASTVisitor):
    """Visitor that prints the AST structure for debugging."""
    def __init__(self) -> None:
        """Initialize the AST printer with zero indentation."""
        super().__init__()
        self.indent_level = 0

    def _indent(self) -> str:
        """
        Get the current indentation string.

        Returns:
            A string of spaces for the current indentation level
        """
        return "  " * self.indent_level

    def _line_range(self, node: OrgASTNode) -> str:
        if node.line_start is None or node.line_end is None:
            return ""

        if node.line_start == node.line_end:
            return f" (line {node.line_start})"

        return f" (lines {node.line_start}-{node.line_end})"

    def _visit_children(self, node: OrgASTNode) -> List[Any]:
        self.indent_level += 1
        results = super().generic_visit(node)
        self.indent_level -= 1
        return results

    def generic_visit(self, node: OrgASTNode) -> List[Any]:
        """
        Default visit method that prints the node type.

        Args:
            node: The node to visit

        Returns:
            The results of visiting the children
        """
        print(f"{self._indent()}{node.__class__.__name__}{self._line_range(node)}")
        return self._visit_children(node)

    def visit_OrgASTHeadlineNode(self, node: OrgASTHeadlineNode) -> List[Any]:  # pylint: disable=invalid-name
        """
        Visit a headline node and print its level, status and title.

        Args:
            node: The headline node to visit

        Returns:
            The results of visiting the children
        """
        details = f"level {node.level}"
        if node.keyword is not None:
            details += f", {node.keyword.value}"

        if node.priority is not None:
            details += f", priority {node.priority}"

        if node.tags:
            details += f", tags {':'.join(node.tags)}"

        print(f"{self._indent()}Headline ({details}){self._line_range(node)}: '{node.title}'")
        return self._visit_children(node)

    def visit_OrgASTKeywordNode(self, node: OrgASTKeywordNode) -> str:  # pylint: disable=invalid-name
        print(f"{self._indent()}Keyword{self._line_range(node)}: {node.key} = '{node.value}'")
        return node.value

    def visit_OrgASTBlockNode(self, node: OrgASTBlockNode) -> str:  # pylint: disable=invalid-name
        """
        Visit a block node and print its kind, language and content summary.

        Args:
            node: The block node to visit

        Returns:
            The block content
        """
        print(f"{self._indent()}Block{self._line_range(node)}: kind='{node.kind}', language='{node.language}'")
        self.indent_level += 1
        print(f"{self._indent()}Content: '{node.content[:30]}...' ({len(node.content)} chars)")
        self.indent_level -= 1
        return node.content

    def visit_OrgASTDrawerNode(self, node: OrgASTDrawerNode) -> None:  # pylint: disable=invalid-name
        """
        Visit a drawer node and print its name and properties.

        Args:
            node: The drawer node to visit

        Returns:
            None
        """
        print(f"{self._indent()}Drawer{self._line_range(node)}: name='{node.name}'")
        self.indent_level += 1
        for key, value in node.properties.items():
            print(f"{self._indent()}Property: {key} = '{value}'")

        if node.content:
            print(f"{self._indent()}Content: ({len(node.content)} chars)")

        self.indent_level -= 1

    def visit_OrgASTListNode(self, node: OrgASTListNode) -> List[Any]:  # pylint: disable=invalid-name
        kind = "ordered" if node.ordered else "unordered"
        print(f"{self._indent()}List ({kind}){self._line_range(node)}")
        return self._visit_children(node)

    def visit_OrgASTListItemNode(self, node: OrgASTListItemNode) -> List[Any]:  # pylint: disable=invalid-name
        """
        Visit a list item node and print its marker, checkbox and content.

        Args:
            node: The list item node to visit

        Returns:
            The results of visiting the children
        """
        checkbox = f" [{node.checkbox.value}]" if node.checkbox.value else ""
        print(f"{self._indent()}ListItem (indent {node.indent}){self._line_range(node)}: "
              f"{node.bullet}{checkbox} '{node.content}'")
        return self._visit_children(node)

    def visit_OrgASTTableRowNode(self, node: OrgASTTableRowNode) -> List[str]:  # pylint: disable=invalid-name
        if node.separator:
            print(f"{self._indent()}TableSeparator{self._line_range(node)}")
            return []

        print(f"{self._indent()}TableRow{self._line_range(node)}: {node.cells}")
        return node.cells

    def visit_OrgASTTimestampNode(self, node: OrgASTTimestampNode) -> str:  # pylint: disable=invalid-name
        kind = "active" if node.active else "inactive"
        print(f"{self._indent()}Timestamp ({kind}): date='{node.date}', time='{node.time}'")
        return node.date

    def visit_OrgASTCommentNode(self, node: OrgASTCommentNode) -> str:  # pylint: disable=invalid-name
        print(f"{self._indent()}Comment{self._line_range(node)}: '{node.content}'")
        return node.content

    def visit_OrgASTTextNode(self, node: OrgASTTextNode) -> str:  # pylint: disable=invalid-name
        print(f"{self._indent()}Text: '{node.content}'")
        return node.content

    def visit_OrgASTCodeNode(self, node: OrgASTCodeNode) -> str:  # pylint: disable=invalid-name
        print(f"{self._indent()}Code: '{node.content}'")
        return node.content

    def visit_OrgASTVerbatimNode(self, node: OrgASTVerbatimNode) -> str:  # pylint: disable=invalid-name
        print(f"{self._indent()}Verbatim: '{node.content}'")
        return node.content

    def visit_OrgASTLinkNode(self, node: OrgASTLinkNode) -> List[Any]:  # pylint: disable=invalid-name
        """
        Visit a link node and print its URL.

        Args:
            node: The link node to visit

        Returns:
            The results of visiting the description
        """
        print(f"{self._indent()}Link: url='{node.url}'")
        return self._visit_children(node)
