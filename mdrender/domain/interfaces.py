"""
领域层 - 核心接口定义
遵循依赖倒置原则(DIP)，定义抽象接口
"""

from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..types import DrawCommand, ParsedDocument
    from .tree import TreeNode


@runtime_checkable
class IMarkdownParser(Protocol):
    """Markdown解析器接口"""

    def parse(self, markdown_text: str) -> "ParsedDocument":
        """解析Markdown，返回HTML片段和文档树"""
        ...


@runtime_checkable
class IHtmlAssembler(Protocol):
    """HTML组装器接口"""

    def assemble(self, fragment: str, css_url: str, css_class: str) -> str:
        """将HTML片段包装为完整的带样式文档"""
        ...


@runtime_checkable
class ILayoutEngine(Protocol):
    """排版引擎接口"""

    def layout(self, root: "TreeNode") -> list["DrawCommand"]:
        """将文档树排版为绘制指令序列"""
        ...


@runtime_checkable
class IPdfConverter(Protocol):
    """PDF转换器接口 - 命令行转换器与浏览器打印共用同一契约"""

    async def convert(self, html_file: Path, pdf_file: Path) -> None:
        """将HTML文件转换为PDF

        Raises:
            ConversionError: 任意一种转换错误
        """
        ...


@runtime_checkable
class IConversionOrchestrator(Protocol):
    """转换编排器接口"""

    async def convert(self, input_path: Path, output_path: Path, output_format) -> Path:
        """执行完整的转换流程"""
        ...
