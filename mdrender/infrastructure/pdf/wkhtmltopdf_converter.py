"""
wkhtmltopdf 转换器
调用命令行转换器将HTML文件转换为PDF
"""

import asyncio
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from ...domain.errors import ConversionFailedError, ProcessUnavailableError
from ...utils import log_execution
from ..browser.browser_locator import wkhtmltopdf_install_hint

if TYPE_CHECKING:
    from ...types import ConvertConfig

CONVERT_FLAGS = [
    "--enable-local-file-access",
    "--print-media-type",
    "--margin-top", "20mm",
    "--margin-bottom", "20mm",
    "--margin-left", "20mm",
    "--margin-right", "20mm",
    "--page-size", "A4",
    "--encoding", "UTF-8",
]


class WkhtmltopdfConverter:
    """wkhtmltopdf 命令行转换器"""

    def __init__(self, binary: str = "wkhtmltopdf"):
        self._binary = binary

    @classmethod
    def from_config(cls, config: "ConvertConfig") -> "WkhtmltopdfConverter":
        return cls(binary=config.wkhtmltopdf_binary)

    @log_execution
    async def convert(self, html_file: Path, pdf_file: Path) -> None:
        """将HTML文件转换为PDF

        Raises:
            ProcessUnavailableError: 转换器未安装
            ConversionFailedError: 转换器退出码非零
        """
        version = await self.probe()
        logger.info(f"[MdRender] 使用转换器: {version or self._binary}")

        try:
            process = await asyncio.create_subprocess_exec(
                self._binary,
                *CONVERT_FLAGS,
                str(html_file),
                str(pdf_file),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except (FileNotFoundError, PermissionError) as e:
            raise self._unavailable(e)
        _, stderr = await process.communicate()
        stderr_text = stderr.decode("utf-8", errors="replace").strip()

        if process.returncode != 0:
            logger.error(
                f"[MdRender] {self._binary} 退出码 {process.returncode}: {stderr_text}"
            )
            raise ConversionFailedError(
                f"{self._binary} 转换失败 (退出码 {process.returncode}): {stderr_text}",
                stderr=stderr_text,
            )

        logger.info(f"[MdRender] PDF已生成: {pdf_file}")

    async def probe(self) -> str:
        """以 --version 探测转换器是否可用，返回版本信息

        Raises:
            ProcessUnavailableError: 转换器无法启动
        """
        try:
            process = await asyncio.create_subprocess_exec(
                self._binary,
                "--version",
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except (FileNotFoundError, PermissionError) as e:
            raise self._unavailable(e)

        stdout, _ = await process.communicate()
        return stdout.decode("utf-8", errors="replace").strip()

    def _unavailable(self, error: OSError) -> ProcessUnavailableError:
        logger.warning(f"[MdRender] {self._binary} 不可用: {error}")
        return ProcessUnavailableError(
            f"未找到 {self._binary}，无法生成PDF",
            install_hint=wkhtmltopdf_install_hint(),
        )
