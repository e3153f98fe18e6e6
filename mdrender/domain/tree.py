"""
领域层 - 文档树模型
Markdown解析器输出的节点树，所有渲染器都只读遍历它
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional


class NodeKind(Enum):
    """节点类型"""

    DOCUMENT = "document"
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    LIST = "list"
    ITEM = "item"
    TEXT = "text"
    CODE = "code"
    EMPHASIS = "emphasis"
    STRONG = "strong"
    SOFT_BREAK = "soft_break"
    LINE_BREAK = "line_break"
    TABLE = "table"
    TABLE_ROW = "table_row"
    TABLE_CELL = "table_cell"
    BLOCK_QUOTE = "block_quote"
    CODE_BLOCK = "code_block"
    THEMATIC_BREAK = "thematic_break"
    HTML_INLINE = "html_inline"
    HTML_BLOCK = "html_block"
    FOOTNOTE_DEFINITION = "footnote_definition"
    TASK_ITEM = "task_item"
    DESCRIPTION_LIST = "description_list"
    DESCRIPTION_ITEM = "description_item"
    DESCRIPTION_TERM = "description_term"
    DESCRIPTION_DETAILS = "description_details"
    # 行内补充类型
    LINK = "link"
    IMAGE = "image"
    STRIKETHROUGH = "strikethrough"
    FOOTNOTE_REFERENCE = "footnote_reference"


@dataclass
class TreeNode:
    """文档树节点

    literal 保存 Text/Code/CodeBlock/HTML 节点的文本内容，
    level 仅对 Heading 有意义，checked 仅对 TaskItem 有意义。
    """

    kind: NodeKind
    children: list["TreeNode"] = field(default_factory=list)
    literal: str = ""
    level: int = 0
    checked: Optional[bool] = None

    def append(self, child: "TreeNode") -> "TreeNode":
        self.children.append(child)
        return child

    def walk(self) -> Iterator["TreeNode"]:
        """按文档顺序深度优先遍历"""
        yield self
        for child in self.children:
            yield from child.walk()

    @classmethod
    def text(cls, literal: str) -> "TreeNode":
        return cls(NodeKind.TEXT, literal=literal)

    @classmethod
    def heading(cls, level: int, *children: "TreeNode") -> "TreeNode":
        return cls(NodeKind.HEADING, list(children), level=level)

    @classmethod
    def of(cls, kind: NodeKind, *children: "TreeNode") -> "TreeNode":
        return cls(kind, list(children))
