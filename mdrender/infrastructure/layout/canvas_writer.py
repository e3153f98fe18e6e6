"""
画布输出
按顺序回放绘制指令，生成单页PDF
"""

from pathlib import Path
from typing import Sequence

from loguru import logger
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from ...domain.errors import IoFailureError
from ...types import DrawCommand
from ...utils import log_execution


class CanvasWriter:
    """基于 reportlab 的画布输出"""

    def __init__(self, font_name: str = "Helvetica", pagesize: tuple = A4):
        self.font_name = font_name
        self.pagesize = pagesize

    @log_execution
    def write(self, commands: Sequence[DrawCommand], pdf_file: Path) -> None:
        """将绘制指令写入PDF文件

        Raises:
            IoFailureError: 目标文件无法写入
        """
        pdf = canvas.Canvas(str(pdf_file), pagesize=self.pagesize)
        for command in commands:
            pdf.setFont(self.font_name, command.font_size)
            pdf.drawString(command.x * mm, command.y * mm, command.text)
        pdf.showPage()

        try:
            pdf.save()
        except OSError as e:
            raise IoFailureError(f"无法写入PDF文件 {pdf_file}: {e}")

        logger.info(f"[MdRender] 画布PDF已保存: {pdf_file}，指令数: {len(commands)}")
