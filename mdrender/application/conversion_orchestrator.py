"""
转换编排器
编排完整的转换流程
"""
import tempfile
import traceback
import uuid
from pathlib import Path
from typing import Optional

from loguru import logger

from ..domain.errors import ConversionError, ErrorCode, IoFailureError
from ..domain.interfaces import (
    IHtmlAssembler,
    ILayoutEngine,
    IMarkdownParser,
    IPdfConverter,
)
from ..infrastructure.html import HtmlAssembler
from ..infrastructure.layout import CanvasWriter, LayoutEngine
from ..infrastructure.parser import MarkdownParser
from ..types import ConvertConfig, OutputFormat
from ..utils import best_effort_sync
from .converter_selector import select_converter


class ConversionOrchestrator:
    """
    转换编排器

    Pipeline:
    markdown ──► parse ──┬─► assemble ──► html
                         ├─► assemble ──► temp html ──► pdf converter ──► pdf
                         └─► layout ──► canvas ──► pdf

    1. 读取Markdown文件
    2. 解析为HTML片段和文档树 (markdown_parser)
    3. 按输出格式组装HTML / 转换PDF / 排版绘制
    """

    def __init__(
        self,
        config: ConvertConfig = ConvertConfig(),
        pdf_converter: Optional[IPdfConverter] = None,
        temp_dir: Optional[Path] = None,
        parser: Optional[IMarkdownParser] = None,
        assembler: Optional[IHtmlAssembler] = None,
        layout_engine: Optional[ILayoutEngine] = None,
    ):
        self._config = config
        self._parser: IMarkdownParser = parser or MarkdownParser()
        self._assembler: IHtmlAssembler = assembler or HtmlAssembler()
        self._layout_engine: ILayoutEngine = layout_engine or LayoutEngine()
        self._canvas_writer = CanvasWriter()
        self._pdf_converter = pdf_converter
        self._temp_dir = temp_dir

    @property
    def pdf_converter(self) -> IPdfConverter:
        """按配置选择的PDF转换器（首次使用时创建）"""
        if self._pdf_converter is None:
            self._pdf_converter = select_converter(self._config)
        return self._pdf_converter

    async def convert(
        self, input_path: Path, output_path: Path, output_format: OutputFormat
    ) -> Path:
        """执行转换

        Returns:
            生成的文件路径

        Raises:
            ConversionError: 任意一种转换错误
        """
        logger.info(
            f"[MdRender] 开始转换: {input_path} -> {output_path} ({output_format.value})"
        )

        try:
            markdown_text = self._read_text(input_path)
            document = self._parser.parse(markdown_text)

            if output_format is OutputFormat.LAYOUT:
                commands = self._layout_engine.layout(document.tree)
                self._canvas_writer.write(commands, output_path)
            else:
                page = self._assembler.assemble(
                    document.fragment, self._config.css_url, self._config.css_class
                )
                if output_format is OutputFormat.HTML:
                    self._write_text(output_path, page)
                else:
                    await self._convert_pdf(page, output_path)

            logger.info(f"[MdRender] 转换成功: {output_path}")
            return output_path

        except ConversionError as e:
            code = e.code.value if e.code else "UNKNOWN"
            logger.error(f"[MdRender] 转换失败 [{code}]: {e}")
            raise
        except Exception as e:
            logger.error(f"[MdRender] 转换失败: {type(e).__name__}: {e}")
            logger.debug(f"[MdRender] 堆栈信息:\n{traceback.format_exc()}")
            raise ConversionError(f"转换失败: {e}", code=ErrorCode.CONVERSION_FAILURE)

    async def _convert_pdf(self, page: str, output_path: Path) -> None:
        """写入临时HTML文件并交给PDF转换器，结束后删除临时文件"""
        temp_dir = self._temp_dir or Path(tempfile.gettempdir())
        tmp_path = temp_dir / f"mdrender_{uuid.uuid4().hex[:8]}.html"

        logger.info(f"[MdRender] HTML 临时文件: {tmp_path}")

        try:
            self._write_text(tmp_path, page)
            await self.pdf_converter.convert(tmp_path, output_path)
        finally:
            best_effort_sync("删除临时文件", lambda: tmp_path.unlink(missing_ok=True))

    @staticmethod
    def _read_text(path: Path) -> str:
        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise IoFailureError(f"无法读取文件 {path}: {e}")

    @staticmethod
    def _write_text(path: Path, content: str) -> None:
        try:
            with open(path, "w", encoding="utf-8") as f:
                f.write(content)
        except OSError as e:
            raise IoFailureError(f"无法写入文件 {path}: {e}")
