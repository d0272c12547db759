import json
from typing import List, Optional

from loguru import logger

from modpak.api.base import ProviderClient, pick_best
from modpak.models import (
    DependencyKind,
    DependencyRef,
    FileRef,
    ModLoader,
    ModProject,
    ModVersionCandidate,
    Provider,
    StabilityTier,
    SupportLevel,
)

MODRINTH_BASE_URL = "https://api.modrinth.com/v2"


def project_from_modrinth(data: dict) -> ModProject:
    """项目详情和搜索结果共用：搜索结果的 id 字段叫 project_id"""
    return ModProject(
        provider=Provider.MODRINTH,
        provider_id=data.get("id") or data.get("project_id", ""),
        slug=data["slug"],
        title=data.get("title", data["slug"]),
        client_support=SupportLevel.parse(data.get("client_side")),
        server_support=SupportLevel.parse(data.get("server_side")),
    )


def version_from_modrinth(data: dict) -> ModVersionCandidate:
    """
    将 Modrinth API 返回的版本信息转换为 ModVersionCandidate 对象。
    """
    files = [
        FileRef(
            id=data.get("id", ""),
            filename=file["filename"],
            size=file.get("size", 0),
            hashes=file.get("hashes") or {},
            download_url=file.get("url"),
        )
        for file in data.get("files", [])
    ]

    dependencies = []
    for dep in data.get("dependencies", []):
        try:
            kind = DependencyKind(dep.get("dependency_type", "required"))
        except ValueError:
            kind = DependencyKind.OPTIONAL
        dependencies.append(
            DependencyRef(
                project_id=dep.get("project_id"),
                version_id=dep.get("version_id"),
                kind=kind,
            )
        )

    try:
        stability = StabilityTier(data.get("version_type", "release"))
    except ValueError:
        stability = StabilityTier.ALPHA

    return ModVersionCandidate(
        id=data.get("id", ""),
        display_name=data.get("name") or data.get("version_number", ""),
        version_number=data.get("version_number", ""),
        stability=stability,
        published_at=data.get("date_published", ""),
        files=files,
        dependencies=dependencies,
    )


class ModrinthClient(ProviderClient):
    """Modrinth API 客户端"""

    provider = Provider.MODRINTH

    async def get_project(self, idx: str) -> Optional[ModProject]:
        """通过 slug 或 id 获取项目详情"""
        response = await self._request(f"{MODRINTH_BASE_URL}/project/{idx}")
        if response is None:
            return None
        return project_from_modrinth(response)

    async def search(self, query: str, limit: int = 20) -> List[ModProject]:
        params = {
            "query": query,
            "facets": json.dumps([["project_type:mod"]]),
            "limit": limit,
        }
        response = await self._request(f"{MODRINTH_BASE_URL}/search", params)
        if not response:
            return []
        return [project_from_modrinth(hit) for hit in response.get("hits", [])]

    async def _find_project(self, query: str) -> Optional[ModProject]:
        project = await self.get_project(query)
        if project is not None:
            return project

        # 不是 slug / id，按名称搜索
        logger.debug(f"Modrinth 上没有 '{query}'，尝试搜索")
        results = await self.search(query)
        return pick_best(results, query, lambda p: p.slug, lambda p: p.title)

    async def list_versions(
        self,
        project: ModProject,
        loader: ModLoader,
        mc_version: str,
    ) -> List[ModVersionCandidate]:
        params = {
            "loaders": json.dumps([loader.value]),
            "game_versions": json.dumps([mc_version]),
        }
        response = await self._request(
            f"{MODRINTH_BASE_URL}/project/{project.provider_id}/version", params
        )
        if not response:
            return []
        return [version_from_modrinth(v) for v in response]
