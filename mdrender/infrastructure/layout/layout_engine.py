"""
排版引擎
自上而下单遍遍历文档树，在单页画布上放置文本，不分页
"""

from dataclasses import dataclass

from loguru import logger

from ...domain.tree import NodeKind, TreeNode
from ...types import DrawCommand
from .text_collector import collect_text

HEADING_FONT_SIZES = {1: 24, 2: 20, 3: 16}
DEFAULT_HEADING_FONT_SIZE = 14
BODY_FONT_SIZE = 12
BULLET = "• "


@dataclass(frozen=True)
class PageGeometry:
    """页面几何参数，单位毫米（默认A4）"""

    width: float = 210.0
    height: float = 297.0
    body_x: float = 20.0
    list_x: float = 25.0
    top_offset: float = 10.0


class LayoutCursor:
    """纵向书写位置，只会减小；越过页底后继续绘制到页面之外"""

    def __init__(self, start_y: float):
        self._y = start_y

    @property
    def y(self) -> float:
        return self._y

    def advance(self, distance: float) -> float:
        self._y -= distance
        return self._y


class LayoutEngine:
    """
    排版引擎

    规则:
    - Heading: 先下移 字号*0.7，绘制于 x=20，再下移 4
    - Paragraph: 下移 10，12pt 绘制于 x=20，再下移 4
    - List: 每个直接 Item 子节点下移 8，绘制 "• "+文本 于 x=25，再下移 2
    - 其余类型不直接绘制，只递归处理子节点
    """

    def __init__(self, geometry: PageGeometry = PageGeometry()):
        self._geometry = geometry

    @property
    def geometry(self) -> PageGeometry:
        return self._geometry

    def layout(self, root: TreeNode) -> list[DrawCommand]:
        """将文档树排版为绘制指令序列"""
        cursor = LayoutCursor(self._geometry.height - self._geometry.top_offset)
        commands: list[DrawCommand] = []
        self._visit(root, cursor, commands)

        logger.debug(
            f"[MdRender] 排版完成，指令数: {len(commands)}，结束位置: {cursor.y:.1f}mm"
        )
        if cursor.y < 0:
            logger.warning("[MdRender] 内容超出单页范围，超出部分将绘制在页面之外")
        return commands

    def _visit(
        self, node: TreeNode, cursor: LayoutCursor, commands: list[DrawCommand]
    ) -> None:
        if node.kind is NodeKind.HEADING:
            self._place_heading(node, cursor, commands)
        elif node.kind is NodeKind.PARAGRAPH:
            cursor.advance(10)
            commands.append(self._draw(collect_text(node), BODY_FONT_SIZE, self._geometry.body_x, cursor))
            cursor.advance(4)
        elif node.kind is NodeKind.LIST:
            self._place_list(node, cursor, commands)
        else:
            for child in node.children:
                self._visit(child, cursor, commands)

    def _place_heading(
        self, node: TreeNode, cursor: LayoutCursor, commands: list[DrawCommand]
    ) -> None:
        size = HEADING_FONT_SIZES.get(node.level, DEFAULT_HEADING_FONT_SIZE)
        cursor.advance(size * 0.7)
        commands.append(self._draw(collect_text(node), size, self._geometry.body_x, cursor))
        cursor.advance(4)

    def _place_list(
        self, node: TreeNode, cursor: LayoutCursor, commands: list[DrawCommand]
    ) -> None:
        for child in node.children:
            if child.kind is NodeKind.ITEM:
                cursor.advance(8)
                text = BULLET + collect_text(child)
                commands.append(self._draw(text, BODY_FONT_SIZE, self._geometry.list_x, cursor))
                cursor.advance(2)
            else:
                self._visit(child, cursor, commands)

    @staticmethod
    def _draw(text: str, size: int, x: float, cursor: LayoutCursor) -> DrawCommand:
        return DrawCommand(text=text, font_size=size, x=x, y=cursor.y)
