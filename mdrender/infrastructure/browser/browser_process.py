"""
浏览器进程管理
启动无头浏览器并在结束时终止它
"""
import asyncio
from typing import AsyncIterable, Optional

from loguru import logger

from ...domain.errors import ProcessUnavailableError
from .browser_locator import browser_install_hint

TERMINATE_TIMEOUT = 5.0


def build_launch_args(port: int) -> list[str]:
    """无头浏览器启动参数"""
    return [
        "--headless",
        "--disable-gpu",
        "--no-sandbox",
        "--disable-dev-shm-usage",
        f"--remote-debugging-port={port}",
        "--disable-web-security",
        "--allow-running-insecure-content",
    ]


class BrowserProcess:
    """无头浏览器进程，由创建它的打印编排器独占"""

    def __init__(self, port: int):
        self._port = port
        self._process: Optional[asyncio.subprocess.Process] = None
        self._binary: Optional[str] = None

    @property
    def binary(self) -> Optional[str]:
        return self._binary

    @property
    def is_running(self) -> bool:
        return self._process is not None and self._process.returncode is None

    async def spawn(self, candidates: AsyncIterable[str]) -> None:
        """按顺序尝试候选浏览器，第一个启动成功的胜出，其后的候选不再取用

        Raises:
            ProcessUnavailableError: 所有候选都无法启动
        """
        args = build_launch_args(self._port)
        tried: list[str] = []
        async for binary in candidates:
            tried.append(binary)
            try:
                self._process = await asyncio.create_subprocess_exec(
                    binary,
                    *args,
                    stdout=asyncio.subprocess.DEVNULL,
                    stderr=asyncio.subprocess.DEVNULL,
                )
            except (FileNotFoundError, PermissionError) as e:
                logger.debug(f"[MdRender] 浏览器 {binary} 无法启动: {e}")
                continue

            self._binary = binary
            logger.info(
                f"[MdRender] 浏览器已启动: {binary} (pid={self._process.pid}, 端口={self._port})"
            )
            return

        raise ProcessUnavailableError(
            f"未找到可用的浏览器，已尝试: {', '.join(tried) or '(无)'}",
            install_hint=browser_install_hint(),
        )

    async def terminate(self) -> None:
        """终止浏览器进程，超时后强制结束"""
        process = self._process
        if process is None:
            return
        self._process = None

        if process.returncode is not None:
            return

        try:
            process.terminate()
        except ProcessLookupError:
            return

        try:
            await asyncio.wait_for(process.wait(), timeout=TERMINATE_TIMEOUT)
        except asyncio.TimeoutError:
            logger.warning(f"[MdRender] 浏览器 {TERMINATE_TIMEOUT}s 内未退出，强制结束")
            process.kill()
            await process.wait()

        logger.info("[MdRender] 浏览器进程已终止")
