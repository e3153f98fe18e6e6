"""
命令处理器
处理 convert 命令
"""

from pathlib import Path
from typing import Sequence

from loguru import logger

from ..domain.errors import ConversionError
from ..domain.interfaces import IConversionOrchestrator
from ..types import ConversionResult, OutputFormat

USAGE = "用法: mdrender convert <input.md> [html|pdf|layout] [output]"


class CommandHandler:
    """命令处理器"""

    def __init__(self, orchestrator: IConversionOrchestrator):
        self._orchestrator = orchestrator

    async def handle(self, args: Sequence[str]) -> ConversionResult:
        """分发命令，错误转换为失败结果而不抛出"""
        if not args or args[0] != "convert":
            command = args[0] if args else ""
            logger.error(f"[MdRender] 未知命令: {command!r}")
            return ConversionResult(success=False, error_message=USAGE)

        if len(args) < 2:
            return ConversionResult(success=False, error_message=USAGE)

        return await self.handle_convert(args[1:])

    async def handle_convert(self, args: Sequence[str]) -> ConversionResult:
        """处理 convert 命令"""
        input_path = Path(args[0])

        try:
            output_format = OutputFormat(args[1]) if len(args) > 1 else OutputFormat.HTML
        except ValueError:
            return ConversionResult(
                success=False, error_message=f"不支持的输出格式: {args[1]}\n{USAGE}"
            )

        if len(args) > 2:
            output_path = Path(args[2])
        else:
            output_path = input_path.with_suffix(output_format.suffix)

        try:
            path = await self._orchestrator.convert(input_path, output_path, output_format)
        except ConversionError as e:
            return ConversionResult(success=False, error_message=str(e), error_code=e.code)

        return ConversionResult(success=True, output_path=path)
