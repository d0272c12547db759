"""
模组解析服务

把用户输入（URL、slug、数字 ID、名称）解析为平台 + 查询串，再交给对应平台查找项目。
"""

import re
from typing import Dict, Optional

from loguru import logger

from modpak.api.base import LookupResult, ProviderClient
from modpak.models import ModProject, ModRef, Provider
from modpak.prompt import Prompter


MODRINTH_URL = re.compile(
    r"modrinth\.com/(?:mod|plugin|datapack|resourcepack|shader|project)/([^/?#]+)"
)
CURSEFORGE_URL = re.compile(r"curseforge\.com/minecraft/mc-mods/([^/?#]+)")


def resolve_identity(token: str, default_provider: Provider) -> ModRef:
    """
    解析模组标识

    已知平台的 URL 会强制使用对应平台；其余输入原样传递并使用默认平台。
    不发起任何网络请求。
    """
    token = token.strip()
    match = MODRINTH_URL.search(token)
    if match:
        return ModRef(Provider.MODRINTH, match.group(1), from_url=True)
    match = CURSEFORGE_URL.search(token)
    if match:
        return ModRef(Provider.CURSEFORGE, match.group(1), from_url=True)
    return ModRef(default_provider, token)


class ModResolver:
    """模组解析器"""

    def __init__(
        self,
        clients: Dict[Provider, ProviderClient],
        prompter: Optional[Prompter] = None,
    ):
        self.clients = clients
        self.prompter = prompter

    def client_for(self, provider: Provider) -> ProviderClient:
        return self.clients[provider]

    async def lookup(self, ref: ModRef) -> LookupResult:
        """按引用查找项目"""
        return await self.client_for(ref.provider).find_project(ref.query)

    async def fallback_to_curseforge(self, ref: ModRef) -> Optional[ModProject]:
        """
        Modrinth 上找不到时尝试 CurseForge

        仅用于非 URL 输入；找到后需用户确认才会继续。
        """
        if ref.from_url or ref.provider != Provider.MODRINTH:
            return None
        if Provider.CURSEFORGE not in self.clients or self.prompter is None:
            return None

        result = await self.clients[Provider.CURSEFORGE].find_project(ref.query)
        if not result.ok:
            logger.debug(f"CurseForge 上也没有找到 '{ref.query}'")
            return None

        project = result.project
        if self.prompter.confirm(
            f"在 CurseForge 上找到 '{project.title}' ({project.slug})，是否使用？"
        ):
            return project
        return None
