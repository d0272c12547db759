"""
主协调器

为一次命令调用组装各层组件（HTTP、平台客户端、本地存储、交互），并编排
添加、构建、更新、选择版本等流程。
"""

from pathlib import Path
from typing import Dict, List, Optional, Union

from loguru import logger

from modpak.api import CurseForgeClient, HttpClient, ModrinthClient, ProviderClient
from modpak.config import find_config, load_config, resolve_api_key, save_config
from modpak.download import DownloadManager
from modpak.exceptions import ConfigError
from modpak.models import (
    InstalledMod,
    ModLoader,
    PackConfig,
    Provider,
    Side,
)
from modpak.packager import (
    MrpackBuilder,
    PackLayout,
    ServerBuilder,
    ZipBuilder,
    check_manual_files,
)
from modpak.prompt import ClickPrompter, Prompter
from modpak.services import (
    DependencyResolver,
    LoaderResolver,
    ModResolver,
    ResolveReport,
    VersionChanger,
    VersionSelector,
    resolve_identity,
)
from modpak.store import LocalModStore


def init_pack(
    root: Union[str, Path],
    name: str,
    mc_version: str,
    loader: ModLoader,
    author: str = "Unknown",
    curseforge_api_key: Optional[str] = None,
    fmt: str = "toml",
) -> Path:
    """
    初始化整合包目录

    Raises:
        ConfigError: 目录中已存在配置文件
    """
    existing = find_config(root)
    if existing is not None:
        raise ConfigError(f"{existing.name} 已存在")

    config = PackConfig(
        name=name,
        mc_version=mc_version,
        loader=loader,
        author=author,
        curseforge_api_key=curseforge_api_key,
    )
    PackLayout.at(root).create()
    path = save_config(config, root, fmt)
    logger.success(f"已初始化整合包 '{name}'：Minecraft {mc_version} ({loader.value})")
    if curseforge_api_key:
        logger.info("CurseForge API Key 已保存")
    return path


class PackOrchestrator:
    """modpak 主协调器"""

    def __init__(
        self,
        root: Union[str, Path] = ".",
        config: Optional[PackConfig] = None,
        prompter: Optional[Prompter] = None,
        http: Optional[HttpClient] = None,
        api_key: Optional[str] = None,
    ):
        self.layout = PackLayout.at(root)
        self.config = config or load_config(root)
        self.prompter = prompter or ClickPrompter()
        self.http = http or HttpClient()
        self.store = LocalModStore(root)
        self.selector = VersionSelector(self.prompter)
        self.clients: Dict[Provider, ProviderClient] = {
            Provider.MODRINTH: ModrinthClient(self.http),
            Provider.CURSEFORGE: CurseForgeClient(
                self.http, resolve_api_key(api_key, self.config)
            ),
        }
        self.resolver = ModResolver(self.clients, self.prompter)

    async def add(
        self,
        queries: List[str],
        version: Optional[str] = None,
        provider: Provider = Provider.MODRINTH,
        side: Side = Side.BOTH,
        allow_unstable: bool = True,
        interactive: bool = False,
    ) -> ResolveReport:
        """添加模组及其依赖"""
        roots = [resolve_identity(q, provider) for q in queries]
        resolver = DependencyResolver(
            self.resolver, self.store, self.selector, self.config
        )
        report = await resolver.resolve(
            roots,
            side=side,
            version=version,
            allow_unstable=allow_unstable,
            interactive=interactive,
        )

        logger.info(
            f"新增 {len(report.added)} 个，已存在 {len(report.present)} 个，"
            f"失败 {len(report.failed)} 个"
        )
        return report

    async def build(self, target: str) -> str:
        """
        构建客户端 (.mrpack) 或服务端 (.zip)

        Raises:
            ManualFilesMissingError: 存在未放入 contents/jarmods 的手动下载模组
        """
        mods = await self.store.load_all()
        check_manual_files(mods, self.layout.jarmods_dir)

        downloader = DownloadManager(self.http)
        zip_builder = ZipBuilder()
        if target == "client":
            builder = MrpackBuilder(downloader, LoaderResolver(self.http), zip_builder)
            return await builder.build(self.config, mods, self.layout)
        if target == "server":
            return await ServerBuilder(downloader, zip_builder).build(
                self.config, mods, self.layout
            )
        raise ConfigError(f"未知的构建目标: {target}")

    def _changer(self) -> VersionChanger:
        return VersionChanger(self.clients, self.store, self.selector, self.config)

    async def update(self, allow_unstable: bool = False) -> int:
        """更新全部模组"""
        return await self._changer().update_all(allow_unstable)

    async def select(self, queries: List[str], version: Optional[str] = None) -> int:
        """为已安装模组选择版本，返回修改的数量"""
        changer = self._changer()
        changed = 0
        for query in queries:
            if await changer.select(query, version):
                changed += 1
        return changed

    async def list_mods(self) -> List[InstalledMod]:
        return await self.store.load_all()

    async def close(self):
        await self.http.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
