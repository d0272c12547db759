"""
平台客户端抽象

两个平台（Modrinth / CurseForge）统一实现 ProviderClient 的三个操作，
查询结果以 LookupResult 表示：找到、不存在、或网络错误。
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, TypeVar

from loguru import logger

from modpak.api.http import HttpClient
from modpak.exceptions import (
    APIError,
    APIRateLimitError,
    APIServerError,
)
from modpak.models import ModLoader, ModProject, ModVersionCandidate, Provider


T = TypeVar("T")


class LookupStatus(Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    TRANSPORT_ERROR = "transport_error"


@dataclass
class LookupResult:
    """项目查询结果"""

    status: LookupStatus
    project: Optional[ModProject] = None
    error: Optional[str] = None

    @classmethod
    def found(cls, project: ModProject) -> "LookupResult":
        return cls(LookupStatus.FOUND, project=project)

    @classmethod
    def not_found(cls) -> "LookupResult":
        return cls(LookupStatus.NOT_FOUND)

    @classmethod
    def transport_error(cls, error: str) -> "LookupResult":
        return cls(LookupStatus.TRANSPORT_ERROR, error=error)

    @property
    def ok(self) -> bool:
        return self.status == LookupStatus.FOUND

    def __bool__(self) -> bool:
        return self.ok


def pick_best(
    results: Sequence[T],
    query: str,
    slug_of: Callable[[T], str],
    name_of: Callable[[T], str],
) -> Optional[T]:
    """
    从搜索结果中挑选最匹配的一项

    顺序：slug 完全匹配 → 名称完全匹配 → 名称前缀匹配 → 第一个结果。
    比较均忽略大小写。
    """
    if not results:
        return None
    q = query.lower()
    for item in results:
        if slug_of(item).lower() == q:
            return item
    for item in results:
        if name_of(item).lower() == q:
            return item
    for item in results:
        if name_of(item).lower().startswith(q):
            return item
    return results[0]


class ProviderClient(ABC):
    """平台客户端基类"""

    provider: Provider

    def __init__(self, http: HttpClient):
        self.http = http

    def _headers(self) -> Optional[Dict[str, str]]:
        return None

    async def _request(
        self, url: str, params: Optional[Dict[str, Any]] = None
    ) -> Optional[Any]:
        """
        发送 API 请求

        Returns:
            解析后的 JSON；404 返回 None

        Raises:
            APIError: 网络错误或其他非 200 响应
        """
        response = await self.http.get(url, headers=self._headers(), params=params)
        if response.status == 200:
            return response.json()
        if response.status == 404:
            return None
        if response.status == 429:
            raise APIRateLimitError(
                "请求过于频繁", status=response.status, url=response.url
            )
        if response.status >= 500:
            raise APIServerError(
                f"服务器错误 (状态码: {response.status})",
                status=response.status,
                url=response.url,
            )
        raise APIError(
            f"API 请求失败 (状态码: {response.status})",
            status=response.status,
            url=response.url,
        )

    async def find_project(self, query: str) -> LookupResult:
        """按 slug / id / 名称查找项目，网络错误不会抛出"""
        try:
            project = await self._find_project(query)
        except APIError as e:
            logger.debug(f"{self.provider.value} 查询 '{query}' 失败: {e}")
            return LookupResult.transport_error(str(e))
        if project is None:
            return LookupResult.not_found()
        return LookupResult.found(project)

    async def get_by_numeric_id(self, idx: int) -> LookupResult:
        """按数字 ID 获取项目"""
        try:
            project = await self._get_by_numeric_id(idx)
        except APIError as e:
            return LookupResult.transport_error(str(e))
        if project is None:
            return LookupResult.not_found()
        return LookupResult.found(project)

    @abstractmethod
    async def _find_project(self, query: str) -> Optional[ModProject]:
        pass

    async def _get_by_numeric_id(self, idx: int) -> Optional[ModProject]:
        return None

    @abstractmethod
    async def list_versions(
        self,
        project: ModProject,
        loader: ModLoader,
        mc_version: str,
    ) -> List[ModVersionCandidate]:
        """
        获取与加载器、游戏版本兼容的版本列表（保持平台返回的顺序）。
        """
        pass
