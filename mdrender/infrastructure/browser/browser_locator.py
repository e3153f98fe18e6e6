"""
外部程序定位器
确定可尝试的浏览器候选列表，并在外部程序缺失时给出安装提示
"""

import platform
from pathlib import Path
from typing import AsyncIterator, Optional, Sequence

from loguru import logger
from playwright.async_api import async_playwright


class BrowserLocator:
    """
    浏览器候选定位

    候选顺序:
    1. 配置中的浏览器命令名（默认 google-chrome / chromium / chromium-browser）
    2. Playwright 自带的 Chromium（可选，需已执行 playwright install chromium）
    """

    def __init__(self, candidates: Sequence[str], use_bundled_chromium: bool = True):
        self._candidates = list(candidates)
        self._use_bundled_chromium = use_bundled_chromium
        self._bundled: Optional[str] = None
        self._bundled_checked: bool = False

    async def candidates(self) -> AsyncIterator[str]:
        """按优先级逐个给出候选可执行文件

        配置的候选全部被消费后才查询 Playwright，调用方在首个成功时停止迭代即可
        """
        for binary in self._candidates:
            yield binary
        if self._use_bundled_chromium:
            bundled = await self._find_bundled_chromium()
            if bundled and bundled not in self._candidates:
                yield bundled

    async def _find_bundled_chromium(self) -> Optional[str]:
        """查找 Playwright 下载的 Chromium（结果缓存）"""
        if self._bundled_checked:
            return self._bundled
        self._bundled_checked = True

        try:
            async with async_playwright() as pw:
                executable = pw.chromium.executable_path
        except Exception as e:
            logger.debug(f"[MdRender] 无法查询 Playwright Chromium: {type(e).__name__}: {e}")
            return None

        if executable and Path(executable).exists():
            logger.debug(f"[MdRender] 找到 Playwright Chromium: {executable}")
            self._bundled = executable
        else:
            logger.debug("[MdRender] Playwright Chromium 尚未下载")
        return self._bundled


def browser_install_hint() -> str:
    """浏览器缺失时的手动安装说明"""
    system = platform.system()
    if system == "Darwin":
        return (
            "请安装 Chrome 或 Chromium:\n"
            "  brew install --cask google-chrome\n"
            "  或使用: playwright install chromium"
        )
    if system == "Windows":
        return (
            "请从 https://www.google.com/chrome/ 安装 Chrome，并确保其在 PATH 中\n"
            "  或使用: playwright install chromium"
        )
    return (
        "请安装 Chrome 或 Chromium:\n"
        "  Debian/Ubuntu:\n"
        "    sudo apt-get update\n"
        "    sudo apt-get install -y chromium\n"
        "  或使用:\n"
        "    playwright install --with-deps chromium"
    )


def wkhtmltopdf_install_hint() -> str:
    """wkhtmltopdf 缺失时的手动安装说明"""
    system = platform.system()
    if system == "Darwin":
        return "请安装 wkhtmltopdf:\n  brew install --cask wkhtmltopdf"
    if system == "Windows":
        return (
            "请从 https://wkhtmltopdf.org/downloads.html 下载安装 wkhtmltopdf，"
            "并将其安装目录加入 PATH"
        )
    return (
        "请安装 wkhtmltopdf:\n"
        "  Debian/Ubuntu:\n"
        "    sudo apt-get install -y wkhtmltopdf\n"
        "  Fedora:\n"
        "    sudo dnf install -y wkhtmltopdf"
    )
