"""
浏览器控制端点客户端
本地 HTTP/JSON 接口: /json, /json/new, /json/navigate, /json/print, /json/close
"""

from typing import Any, Optional

import httpx
from loguru import logger

from ...domain.errors import NetworkError, RemoteProtocolError


class DevToolsClient:
    """控制端点的请求/响应封装，所有失败都映射为领域错误"""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url
        self._client = httpx.AsyncClient(
            base_url=base_url, timeout=timeout, transport=transport
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def list_targets(self) -> list[dict[str, Any]]:
        """GET /json - 列出所有目标"""
        targets = self._json(await self._request("GET", "/json"))
        if not isinstance(targets, list):
            raise RemoteProtocolError("目标列表格式错误：期望JSON数组")
        return targets

    async def first_page_target(self) -> dict[str, Any]:
        """返回第一个 page 类型的目标，必须带有 webSocketDebuggerUrl"""
        for target in await self.list_targets():
            if isinstance(target, dict) and target.get("type") == "page":
                if not target.get("webSocketDebuggerUrl"):
                    raise RemoteProtocolError("page 目标缺少 webSocketDebuggerUrl 字段")
                return target
        raise RemoteProtocolError("控制端点没有 page 类型的目标")

    async def new_tab(self) -> str:
        """POST /json/new - 新建标签页，返回其ID"""
        payload = self._json(await self._request("POST", "/json/new"))
        tab_id = payload.get("id") if isinstance(payload, dict) else None
        if not tab_id:
            raise RemoteProtocolError("新建标签页的响应缺少 id 字段")
        logger.debug(f"[MdRender] 已创建标签页: {tab_id}")
        return str(tab_id)

    async def navigate(self, tab_id: str, url: str) -> None:
        """POST /json/navigate/{id}"""
        await self._request("POST", f"/json/navigate/{tab_id}", json={"url": url})
        logger.debug(f"[MdRender] 标签页 {tab_id} 导航至 {url}")

    async def print_to_pdf(self, tab_id: str, options: dict[str, Any]) -> str:
        """POST /json/print/{id} - 返回base64编码的PDF"""
        payload = self._json(
            await self._request("POST", f"/json/print/{tab_id}", json=options)
        )
        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, str):
            raise RemoteProtocolError("打印响应缺少 data 字段")
        return data

    async def close_tab(self, tab_id: str) -> None:
        """POST /json/close/{id}"""
        await self._request("POST", f"/json/close/{tab_id}")
        logger.debug(f"[MdRender] 标签页已关闭: {tab_id}")

    async def _request(
        self, method: str, path: str, json: Optional[dict[str, Any]] = None
    ) -> httpx.Response:
        try:
            response = await self._client.request(method, path, json=json)
        except httpx.TransportError as e:
            raise NetworkError(f"无法连接控制端点 {self.base_url}{path}: {type(e).__name__}: {e}")

        if not response.is_success:
            raise RemoteProtocolError(
                f"{method} {path} 返回状态码 {response.status_code}",
                status_code=response.status_code,
            )
        return response

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise RemoteProtocolError(f"{response.request.url.path} 返回的不是有效JSON: {e}")
