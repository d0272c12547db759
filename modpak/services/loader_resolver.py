"""
加载器版本查询

为 mrpack 的 dependencies 查询加载器的具体版本，任何失败都退回通配符 "*"。
"""

import re
from typing import Tuple

from loguru import logger

from modpak.api.http import HttpClient
from modpak.exceptions import APIError
from modpak.models import ModLoader


FABRIC_META_URL = "https://meta.fabricmc.net/v2/versions/loader/{mc}"
QUILT_META_URL = "https://meta.quiltmc.org/v3/versions/loader/{mc}"
FORGE_PROMOTIONS_URL = (
    "https://files.minecraftforge.net/net/minecraftforge/forge/promotions_slim.json"
)
NEOFORGE_VERSIONS_URL = (
    "https://maven.neoforged.net/api/maven/versions/releases/net/neoforged/neoforge"
)

WILDCARD = "*"

LOADER_KEYS = {
    ModLoader.FABRIC: "fabric-loader",
    ModLoader.QUILT: "quilt-loader",
    ModLoader.FORGE: "forge",
    ModLoader.NEOFORGE: "neoforge",
}


def natural_key(version: str) -> Tuple[int, ...]:
    return tuple(int(p) for p in re.split(r"[.\-]", version) if p.isdigit())


def pick_neoforge(versions: list, mc_version: str) -> str:
    """
    NeoForge 版本号前两段对应 MC 的次版本与修订号，例如 1.20.4 -> 20.4.x
    """
    parts = mc_version.split(".")
    if parts[0] != "1" or len(parts) < 2:
        return WILDCARD
    major = parts[1]
    minor = parts[2] if len(parts) > 2 else "0"

    matching = [
        v
        for v in versions
        if len(v.split(".")) >= 2 and v.split(".")[:2] == [major, minor]
    ]
    stable = [
        v for v in matching if not any(t in v for t in ("-beta", "-alpha", "-rc"))
    ]
    candidates = stable or matching
    if not candidates:
        return WILDCARD
    return max(candidates, key=natural_key)


class LoaderResolver:
    """加载器版本解析"""

    def __init__(self, http: HttpClient):
        self.http = http

    async def resolve(self, loader: ModLoader, mc_version: str) -> Tuple[str, str]:
        """
        Returns:
            (依赖键, 版本号)，查询失败时版本号为 "*"
        """
        key = LOADER_KEYS.get(loader, loader.value)
        try:
            if loader == ModLoader.FABRIC:
                version = await self._first_loader(FABRIC_META_URL, mc_version)
            elif loader == ModLoader.QUILT:
                version = await self._first_loader(QUILT_META_URL, mc_version)
            elif loader == ModLoader.FORGE:
                version = await self._forge(mc_version)
            elif loader == ModLoader.NEOFORGE:
                version = await self._neoforge(mc_version)
            else:
                version = WILDCARD
        except (APIError, KeyError, IndexError, TypeError, ValueError) as e:
            logger.debug(f"查询 {loader.value} 版本失败: {e}")
            version = WILDCARD
        return key, version

    async def _get_json(self, url: str):
        response = await self.http.get(url)
        if not response.ok:
            raise APIError(f"状态码 {response.status}", status=response.status, url=url)
        return response.json()

    async def _first_loader(self, url: str, mc_version: str) -> str:
        data = await self._get_json(url.format(mc=mc_version))
        if not data:
            return WILDCARD
        return data[0]["loader"]["version"]

    async def _forge(self, mc_version: str) -> str:
        promos = (await self._get_json(FORGE_PROMOTIONS_URL)).get("promos", {})
        return (
            promos.get(f"{mc_version}-recommended")
            or promos.get(f"{mc_version}-latest")
            or WILDCARD
        )

    async def _neoforge(self, mc_version: str) -> str:
        data = await self._get_json(NEOFORGE_VERSIONS_URL)
        return pick_neoforge(data.get("versions", []), mc_version)
