"""
Mrpack 生成器

实现 Modrinth 标准整合包 (.mrpack) 的生成：
可下载的模组写入 modrinth.index.json，手动下载的 jar 与配置文件放入 overrides。
"""

import json
import os
from pathlib import Path
from typing import Dict, List

import aiofiles
from loguru import logger

from modpak.download import DownloadManager, FileVerifier
from modpak.exceptions import DownloadError, MrpackError
from modpak.models import InstalledMod, PackConfig, Side
from modpak.packager.layout import PackLayout, copy_tree, fresh_dir
from modpak.packager.zip import ZipBuilder
from modpak.services.loader_resolver import WILDCARD, LoaderResolver


INDEX_FILE = "modrinth.index.json"

ENV_BY_SIDE = {
    Side.CLIENT: {"client": "required", "server": "unsupported"},
    Side.SERVER: {"client": "unsupported", "server": "required"},
    Side.BOTH: {"client": "required", "server": "required"},
}


def manifest_hashes(hashes: Dict[str, str]) -> Dict[str, str]:
    """mrpack 只认 sha1 / sha512"""
    picked = {k: hashes[k] for k in ("sha1", "sha512") if hashes.get(k)}
    return picked or dict(hashes)


class MrpackBuilder:
    """Mrpack 构建器"""

    def __init__(
        self,
        downloader: DownloadManager,
        loader_resolver: LoaderResolver,
        zip_builder: ZipBuilder,
    ):
        self.downloader = downloader
        self.loader_resolver = loader_resolver
        self.zip_builder = zip_builder

    async def build(
        self,
        config: PackConfig,
        mods: List[InstalledMod],
        layout: PackLayout,
    ) -> str:
        """
        构建 mrpack 文件

        Args:
            config: 整合包配置
            mods: 全部已安装模组
            layout: 目录布局

        Returns:
            生成的 .mrpack 路径
        """
        logger.info("正在构建客户端整合包 (.mrpack)...")

        logger.info(
            f"解析 {config.loader.value} 加载器版本 (MC {config.mc_version})..."
        )
        loader_key, loader_version = await self.loader_resolver.resolve(
            config.loader, config.mc_version
        )
        if loader_version == WILDCARD:
            logger.warning("无法确定加载器的具体版本，使用通配符 '*'（部分启动器可能无法识别）")
        else:
            logger.success(f"加载器: {loader_key} {loader_version}")

        build_dir = fresh_dir(layout.build_dir / "client")

        files = []
        for mod in mods:
            # 手动下载的模组通过 overrides 分发
            if mod.is_manual:
                continue
            hashes = await self._ensure_hashes(mod, build_dir)
            files.append(
                {
                    "path": f"mods/{mod.file_name}",
                    "hashes": manifest_hashes(hashes),
                    "env": dict(ENV_BY_SIDE[mod.side]),
                    "downloads": [mod.download_url],
                    "fileSize": mod.file_size,
                }
            )

        manifest = self._create_manifest(config, loader_key, loader_version, files)

        try:
            async with aiofiles.open(
                build_dir / INDEX_FILE, "w", encoding="utf-8"
            ) as f:
                await f.write(json.dumps(manifest, indent=4, ensure_ascii=False))
        except OSError as e:
            raise MrpackError(f"写入 {INDEX_FILE} 失败: {e}")

        overrides = build_dir / "overrides"
        overrides.mkdir(exist_ok=True)
        copy_tree(layout.configs_dir, overrides / "config")
        copy_tree(layout.jarmods_dir, overrides / "mods")

        output = layout.root / f"{config.name}-{config.version}.mrpack"
        logger.info("正在压缩...")
        path = await self.zip_builder.archive(str(build_dir), str(output))
        logger.success(f"构建完成: {path}")
        return path

    def _create_manifest(
        self,
        config: PackConfig,
        loader_key: str,
        loader_version: str,
        files: List[dict],
    ) -> dict:
        """创建 modrinth.index.json"""
        return {
            "formatVersion": 1,
            "game": "minecraft",
            "versionId": config.version,
            "name": config.name,
            "dependencies": {
                "minecraft": config.mc_version,
                loader_key: loader_version,
            },
            "files": files,
        }

    async def _ensure_hashes(self, mod: InstalledMod, build_dir: Path) -> Dict[str, str]:
        """
        缺少 sha1 / sha512 时下载到临时文件计算，失败则沿用已有哈希
        """
        if FileVerifier.has_hashes(mod.hashes):
            return mod.hashes

        logger.info(f"计算哈希: {mod.file_name}")
        temp_path = str(build_dir / f"{mod.slug}.tmp")
        try:
            await self.downloader.download_file(mod.download_url, temp_path)
            computed = await FileVerifier.calc_hashes(temp_path)
        except DownloadError as e:
            logger.error(f"哈希计算失败: {mod.name} ({e.message})")
            return mod.hashes
        finally:
            if os.path.exists(temp_path):
                os.remove(temp_path)

        if computed is None:
            logger.error(f"哈希计算失败: {mod.name}")
            return mod.hashes
        return {**mod.hashes, **computed}
