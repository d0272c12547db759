"""
版本变更服务

对已安装模组执行更新（切换到最新兼容版本）或手动选择版本（升级 / 降级）。
"""

import re
from typing import Dict, List, Optional

from loguru import logger

from modpak.api.base import ProviderClient
from modpak.exceptions import APIError
from modpak.models import (
    InstalledMod,
    ModProject,
    ModVersionCandidate,
    PackConfig,
    Provider,
)
from modpak.services.version_selector import VersionSelector
from modpak.store import LocalModStore


def project_from_installed(mod: InstalledMod) -> ModProject:
    """根据本地记录还原项目标识，用于重新查询版本列表"""
    return ModProject(
        provider=mod.provider.provider,
        provider_id=mod.project_id,
        slug=mod.slug,
        title=mod.name,
    )


class VersionChanger:
    """已安装模组的版本变更"""

    def __init__(
        self,
        clients: Dict[Provider, ProviderClient],
        store: LocalModStore,
        selector: VersionSelector,
        config: PackConfig,
    ):
        self.clients = clients
        self.store = store
        self.selector = selector
        self.config = config

    async def _versions(self, mod: InstalledMod) -> List[ModVersionCandidate]:
        client = self.clients[mod.provider.provider]
        return await client.list_versions(
            project_from_installed(mod), self.config.loader, self.config.mc_version
        )

    async def _apply(self, mod: InstalledMod, version: ModVersionCandidate) -> bool:
        file = version.primary_file()
        if file is None:
            logger.warning(f"版本 {version.display_name} 没有可用文件")
            return False
        if file.filename == mod.file_name:
            return False
        await self.store.save(mod.with_file(file))
        return True

    async def update_all(self, allow_unstable: bool = False) -> int:
        """
        将全部模组更新到最新兼容版本

        Returns:
            更新的模组数量
        """
        mods = await self.store.load_all()
        if not mods:
            logger.warning("没有需要更新的模组")
            return 0

        updated = 0
        for mod in mods:
            try:
                candidates = self.selector.filter_stable(
                    await self._versions(mod), allow_unstable
                )
            except APIError as e:
                logger.error(f"检查 {mod.name} 的更新失败: {e}")
                continue

            latest = self.selector.select_default(candidates)
            if latest is None:
                logger.debug(f"{mod.name} 没有可用的兼容版本")
                continue

            old_file = mod.file_name
            if await self._apply(mod, latest):
                updated += 1
                new_file = latest.primary_file().filename
                logger.success(f"↑ 更新 {mod.name}: {old_file} -> {new_file}")

        if updated == 0:
            logger.success("所有模组均已是最新版本")
        else:
            logger.success(f"已更新 {updated} 个模组")
        return updated

    async def select(self, query: str, version: Optional[str] = None) -> bool:
        """
        为已安装模组选择指定版本

        Args:
            query: 已安装模组的 slug 或名称
            version: 指定版本；为空时交互选择

        Returns:
            是否修改了记录
        """
        mod = await self.store.find(query)
        if mod is None:
            logger.error(f"未找到已安装的模组 '{query}'")
            if re.search(r"\d", query):
                logger.info(f'  （是否想使用 -v "{query}"？）')
            return False

        logger.info(f"处理 {mod.name}（当前: {mod.file_name}）")
        try:
            candidates = await self._versions(mod)
        except APIError as e:
            logger.error(f"获取 {mod.name} 的版本列表失败: {e}")
            return False

        if not candidates:
            logger.error(
                f"{mod.name} 没有适用于 {self.config.loader.value} "
                f"{self.config.mc_version} 的版本"
            )
            return False

        if version:
            selected = self.selector.select_explicit(candidates, version)
            if selected is None:
                logger.error(f"找不到 {mod.name} 的版本 '{version}'")
                return False
        else:
            selected = self.selector.prompt(candidates, mod.name, mod.file_name)
            if selected is None:
                return False

        if await self._apply(mod, selected):
            logger.success(f"✔ {mod.name} 已切换到 {selected.display_name}")
            return True

        logger.info("该版本已被选中")
        return False
