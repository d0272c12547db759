"""
CurseForge API 客户端

CurseForge 需要 x-api-key；未提供时使用内置的公共 key（base64 混淆，仅作兜底）。
"""

import base64
from typing import Dict, List, Optional

from loguru import logger

from modpak.api.base import ProviderClient, pick_best
from modpak.api.http import HttpClient
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

CURSEFORGE_BASE_URL = "https://api.curseforge.com/v1"
MINECRAFT_GAME_ID = 432
MODS_CLASS_ID = 6

# 与 packwiz 使用的公共 key 相同
DEFAULT_KEY_B64 = (
    "JDJhJDEwJHNBWVhqblU1N0EzSmpzcmJYM3JVdk92UWk2NHBLS3BnQ2VpbGc1TUM1UGNKL0RYTmlGWWxh"
)

LOADER_TYPES = {
    ModLoader.FORGE: 1,
    ModLoader.FABRIC: 4,
    ModLoader.QUILT: 5,
    ModLoader.NEOFORGE: 6,
}

RELEASE_TYPES = {1: StabilityTier.RELEASE, 2: StabilityTier.BETA}

HASH_ALGOS = {1: "sha1", 2: "md5"}

RELATION_TYPES = {
    1: DependencyKind.EMBEDDED,
    2: DependencyKind.OPTIONAL,
    3: DependencyKind.REQUIRED,
    4: DependencyKind.TOOL,
    5: DependencyKind.INCOMPATIBLE,
    6: DependencyKind.INCLUDE,
}


def resolve_key(user_key: Optional[str]) -> str:
    if user_key and user_key.strip():
        return user_key.strip()
    return base64.b64decode(DEFAULT_KEY_B64).decode("utf-8")


def project_from_curseforge(data: dict) -> ModProject:
    # CurseForge 不声明运行端
    return ModProject(
        provider=Provider.CURSEFORGE,
        provider_id=str(data["id"]),
        slug=data["slug"],
        title=data.get("name", data["slug"]),
        client_support=SupportLevel.OPTIONAL,
        server_support=SupportLevel.OPTIONAL,
    )


def version_from_curseforge(data: dict) -> ModVersionCandidate:
    """CurseForge 的一个 file 即一个可选版本"""
    hashes: Dict[str, str] = {}
    for h in data.get("hashes", []):
        algo = HASH_ALGOS.get(h.get("algo"))
        if algo and h.get("value"):
            hashes[algo] = h["value"]

    file = FileRef(
        id=str(data["id"]),
        filename=data["fileName"],
        size=data.get("fileLength", 0),
        hashes=hashes,
        download_url=data.get("downloadUrl") or None,
    )

    dependencies = [
        DependencyRef(
            project_id=str(dep["modId"]),
            version_id=None,
            kind=RELATION_TYPES.get(dep.get("relationType"), DependencyKind.OPTIONAL),
        )
        for dep in data.get("dependencies", [])
    ]

    return ModVersionCandidate(
        id=str(data["id"]),
        display_name=data.get("displayName") or data["fileName"],
        version_number=data.get("displayName") or data["fileName"],
        stability=RELEASE_TYPES.get(data.get("releaseType"), StabilityTier.ALPHA),
        published_at=data.get("fileDate", ""),
        files=[file],
        dependencies=dependencies,
    )


class CurseForgeClient(ProviderClient):
    """CurseForge API 客户端"""

    provider = Provider.CURSEFORGE

    def __init__(self, http: HttpClient, api_key: Optional[str] = None):
        super().__init__(http)
        self.api_key = resolve_key(api_key)

    def _headers(self) -> Dict[str, str]:
        return {"x-api-key": self.api_key, "Accept": "application/json"}

    async def _get_by_numeric_id(self, idx: int) -> Optional[ModProject]:
        response = await self._request(f"{CURSEFORGE_BASE_URL}/mods/{idx}")
        if not response or not response.get("data"):
            return None
        return project_from_curseforge(response["data"])

    async def search(self, query: str, page_size: int = 20) -> List[ModProject]:
        params = {
            "gameId": MINECRAFT_GAME_ID,
            "classId": MODS_CLASS_ID,
            "searchFilter": query,
            "sortField": 2,
            "sortOrder": "desc",
            "pageSize": page_size,
        }
        response = await self._request(f"{CURSEFORGE_BASE_URL}/mods/search", params)
        if not response:
            return []
        return [project_from_curseforge(m) for m in response.get("data", [])]

    async def _find_project(self, query: str) -> Optional[ModProject]:
        if query.isdigit():
            return await self._get_by_numeric_id(int(query))

        results = await self.search(query)
        if not results:
            logger.debug(f"CurseForge 搜索 '{query}' 无结果")
        return pick_best(results, query, lambda p: p.slug, lambda p: p.title)

    async def list_versions(
        self,
        project: ModProject,
        loader: ModLoader,
        mc_version: str,
    ) -> List[ModVersionCandidate]:
        params = {"gameVersion": mc_version}
        loader_type = LOADER_TYPES.get(loader)
        if loader_type is not None:
            params["modLoaderType"] = loader_type

        response = await self._request(
            f"{CURSEFORGE_BASE_URL}/mods/{project.provider_id}/files", params
        )
        if not response:
            return []

        # 服务端过滤不可靠，再按 gameVersions 校验一次
        versions = []
        for data in response.get("data", []):
            game_versions = [v.lower() for v in data.get("gameVersions", [])]
            if mc_version.lower() not in game_versions:
                continue
            if loader_type is not None and loader.value not in game_versions:
                continue
            versions.append(version_from_curseforge(data))
        return versions
