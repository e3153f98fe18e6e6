"""
浏览器打印编排器
启动无头浏览器，经控制端点导航到HTML文件并打印为PDF
"""

import asyncio
import base64
import binascii
from contextlib import asynccontextmanager
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, AsyncIterator, Optional

import httpx
from loguru import logger

from ...domain.errors import (
    ConversionFailedError,
    IoFailureError,
    NetworkError,
    ProcessUnavailableError,
    RemoteProtocolError,
)
from ...utils import best_effort, log_execution
from .browser_locator import BrowserLocator
from .browser_process import BrowserProcess
from .devtools_client import DevToolsClient

if TYPE_CHECKING:
    from ...types import ConvertConfig

# A4 纵向，单位英寸
PRINT_OPTIONS = {
    "paperWidth": 8.27,
    "paperHeight": 11.69,
    "landscape": False,
    "printBackground": True,
    "preferCSSPageSize": True,
    "marginTop": 0.4,
    "marginBottom": 0.4,
    "marginLeft": 0.4,
    "marginRight": 0.4,
}

POLL_INITIAL_DELAY = 0.05
POLL_MAX_DELAY = 1.0


class BrowserState(Enum):
    """打印流程状态"""

    NOT_STARTED = "not_started"
    PROCESS_SPAWNED = "process_spawned"
    DEBUGGER_READY = "debugger_ready"
    TAB_CREATED = "tab_created"
    NAVIGATED = "navigated"
    PRINTED = "printed"
    CLOSED = "closed"
    FAILED = "failed"


@dataclass
class BrowserSession:
    """一次转换独占的浏览器会话"""

    process: BrowserProcess
    port: int
    base_url: str
    client: DevToolsClient
    tab_id: Optional[str] = None


class BrowserPrintOrchestrator:
    """
    浏览器打印编排器

    NotStarted → ProcessSpawned → DebuggerReady → TabCreated → Navigated → Printed → Closed
    任一步失败进入 Failed；无论成功失败，退出会话时都会关闭标签页并终止浏览器进程。
    """

    def __init__(
        self,
        locator: BrowserLocator,
        port: int = 9222,
        startup_timeout: float = 10.0,
        load_timeout: float = 10.0,
        settle_delay: float = 0.5,
        request_timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._locator = locator
        self._port = port
        self._startup_timeout = startup_timeout
        self._load_timeout = load_timeout
        self._settle_delay = settle_delay
        self._request_timeout = request_timeout
        self._transport = transport
        self.state = BrowserState.NOT_STARTED

    @classmethod
    def from_config(cls, config: "ConvertConfig") -> "BrowserPrintOrchestrator":
        return cls(
            locator=BrowserLocator(
                config.browser_candidates, config.use_bundled_chromium
            ),
            port=config.debug_port,
            startup_timeout=config.startup_timeout,
            load_timeout=config.load_timeout,
            settle_delay=config.settle_delay,
            request_timeout=config.request_timeout,
        )

    @log_execution
    async def convert(self, html_file: Path, pdf_file: Path) -> None:
        """将HTML文件打印为PDF

        Raises:
            ProcessUnavailableError: 没有可启动的浏览器，或控制端点未就绪
            RemoteProtocolError: 控制端点响应异常
            NetworkError: 无法连接控制端点
            ConversionFailedError: PDF数据无法解码
            IoFailureError: PDF文件写入失败
        """
        self.state = BrowserState.NOT_STARTED
        try:
            async with self._session() as session:
                await self._wait_for_debugger(session)
                await self._create_tab(session)
                await self._navigate(session, html_file)
                pdf_bytes = await self._print(session)
                self._write_pdf(pdf_bytes, pdf_file)
        except Exception as e:
            self.state = BrowserState.FAILED
            logger.error(f"[MdRender] 浏览器打印失败: {type(e).__name__}: {e}")
            raise

        self.state = BrowserState.CLOSED
        logger.info(f"[MdRender] 浏览器打印完成: {pdf_file}")

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[BrowserSession]:
        """启动浏览器并保证退出时释放标签页与进程"""
        process = BrowserProcess(self._port)
        await process.spawn(self._locator.candidates())
        self.state = BrowserState.PROCESS_SPAWNED

        base_url = f"http://127.0.0.1:{self._port}"
        session = BrowserSession(
            process=process,
            port=self._port,
            base_url=base_url,
            client=DevToolsClient(base_url, self._request_timeout, self._transport),
        )
        try:
            yield session
        finally:
            if session.tab_id is not None:
                await best_effort(
                    "关闭标签页", lambda: session.client.close_tab(session.tab_id)
                )
            await best_effort("关闭控制端点连接", session.client.aclose)
            await best_effort("终止浏览器进程", process.terminate)

    async def _wait_for_debugger(self, session: BrowserSession) -> None:
        """轮询控制端点直到可达，超时视为浏览器不可用"""
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self._startup_timeout
        delay = POLL_INITIAL_DELAY

        while True:
            if not session.process.is_running:
                raise ProcessUnavailableError(
                    f"浏览器 {session.process.binary} 启动后立即退出"
                )
            try:
                await session.client.list_targets()
                break
            except NetworkError:
                if loop.time() >= deadline:
                    raise ProcessUnavailableError(
                        f"控制端点 {session.base_url} 在 {self._startup_timeout}s 内未就绪"
                    )
            await asyncio.sleep(delay)
            delay = min(delay * 2, POLL_MAX_DELAY)

        self.state = BrowserState.DEBUGGER_READY
        logger.debug(f"[MdRender] 控制端点已就绪: {session.base_url}")

    async def _create_tab(self, session: BrowserSession) -> None:
        target = await session.client.first_page_target()
        logger.debug(f"[MdRender] 默认页面目标: {target.get('id')}")
        session.tab_id = await session.client.new_tab()
        self.state = BrowserState.TAB_CREATED

    async def _navigate(self, session: BrowserSession, html_file: Path) -> None:
        url = html_file.resolve().as_uri()
        await session.client.navigate(session.tab_id, url)
        await self._wait_for_load(session, url)
        self.state = BrowserState.NAVIGATED

    async def _wait_for_load(self, session: BrowserSession, url: str) -> None:
        """轮询目标列表，直到标签页报告已导航到目标URL"""
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self._load_timeout
        delay = POLL_INITIAL_DELAY

        while True:
            targets = await session.client.list_targets()
            if any(
                t.get("id") == session.tab_id and t.get("url") == url
                for t in targets
                if isinstance(t, dict)
            ):
                break
            if loop.time() >= deadline:
                raise RemoteProtocolError(
                    f"标签页 {session.tab_id} 在 {self._load_timeout}s 内未加载 {url}"
                )
            await asyncio.sleep(delay)
            delay = min(delay * 2, POLL_MAX_DELAY)

        # 等待样式表和字体
        if self._settle_delay > 0:
            await asyncio.sleep(self._settle_delay)

    async def _print(self, session: BrowserSession) -> bytes:
        data = await session.client.print_to_pdf(session.tab_id, PRINT_OPTIONS)
        try:
            pdf_bytes = base64.b64decode(data, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ConversionFailedError(f"PDF数据base64解码失败: {e}")

        self.state = BrowserState.PRINTED
        logger.debug(f"[MdRender] 已收到PDF数据: {len(pdf_bytes)} 字节")
        return pdf_bytes

    @staticmethod
    def _write_pdf(pdf_bytes: bytes, pdf_file: Path) -> None:
        try:
            with open(pdf_file, "wb") as f:
                f.write(pdf_bytes)
        except OSError as e:
            raise IoFailureError(f"无法写入PDF文件 {pdf_file}: {e}")
