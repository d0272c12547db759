"""
HTTP 客户端

对 aiohttp 的薄封装：GET 请求返回 (状态码, 响应体)，网络异常统一转换为 APIError。
"""

import asyncio
import json
from dataclasses import dataclass
from typing import Any, Dict, Optional

import aiohttp
from loguru import logger

from modpak.exceptions import APIError


USER_AGENT = "modpak/0.1.0 (minecraft modpack builder)"


@dataclass
class HttpResponse:
    """HTTP 响应"""

    status: int
    body: bytes
    url: str = ""

    @property
    def ok(self) -> bool:
        return self.status == 200

    def json(self) -> Any:
        try:
            return json.loads(self.body)
        except ValueError as e:
            raise APIError(
                f"响应不是合法的 JSON: {e}", status=self.status, url=self.url
            )


class HttpClient:
    """基于 aiohttp 的 HTTP 客户端"""

    def __init__(self, session: Optional[aiohttp.ClientSession] = None):
        self._session = session
        self._owned_session = session is None

    @property
    def session(self) -> aiohttp.ClientSession:
        """获取或创建 aiohttp session"""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={"User-Agent": USER_AGENT}
            )
        return self._session

    async def get(
        self,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> HttpResponse:
        """发送 GET 请求，不做任何重试"""
        logger.debug(f"GET {url} {params or ''}")
        try:
            async with self.session.get(
                url, headers=headers, params=params
            ) as response:
                body = await response.read()
                return HttpResponse(
                    status=response.status, body=body, url=str(response.url)
                )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise APIError(f"请求失败: {e or type(e).__name__}", url=url)

    async def close(self):
        """关闭客户端"""
        if self._owned_session and self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self):
        """异步上下文管理器入口"""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """异步上下文管理器出口"""
        await self.close()
