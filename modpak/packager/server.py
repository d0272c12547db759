"""
服务端包生成器

把所有非纯客户端模组平铺到 mods/ 目录，连同配置文件一起压缩为 zip。
"""

from typing import List

from loguru import logger

from modpak.download import DownloadManager
from modpak.exceptions import DownloadError
from modpak.models import InstalledMod, PackConfig, Side
from modpak.packager.layout import PackLayout, copy_tree, fresh_dir
from modpak.packager.zip import ZipBuilder


class ServerBuilder:
    """服务端 ZIP 构建器"""

    def __init__(self, downloader: DownloadManager, zip_builder: ZipBuilder):
        self.downloader = downloader
        self.zip_builder = zip_builder

    async def build(
        self,
        config: PackConfig,
        mods: List[InstalledMod],
        layout: PackLayout,
    ) -> str:
        """
        构建服务端压缩包

        单个模组下载失败只记录错误，不影响其他模组。

        Returns:
            生成的 zip 路径
        """
        logger.info("正在构建服务端包 (.zip)...")
        build_dir = fresh_dir(layout.build_dir / "server")
        mods_dir = build_dir / "mods"
        mods_dir.mkdir()

        for mod in mods:
            if mod.side == Side.CLIENT:
                logger.debug(f"跳过纯客户端模组: {mod.name}")
                continue

            dest = mods_dir / mod.file_name
            if mod.is_manual:
                self.downloader.copy_local_file(
                    str(layout.jarmods_dir / mod.file_name), str(dest)
                )
                logger.info(f"[本地] {mod.file_name}")
                continue

            logger.info(f"[下载] {mod.file_name}")
            try:
                await self.downloader.download_file(mod.download_url, str(dest))
            except DownloadError as e:
                logger.error(f"下载失败: {mod.name} ({e.message})")

        copy_tree(layout.configs_dir, build_dir / "config")
        copy_tree(layout.jarmods_dir, mods_dir)

        stats = self.downloader.get_stats()
        if stats.failed:
            logger.warning(f"{stats.failed} 个模组下载失败: {', '.join(stats.failed_files)}")

        output = layout.root / f"{config.name}-{config.version}-server.zip"
        logger.info("正在压缩...")
        path = await self.zip_builder.archive(str(build_dir), str(output))
        logger.success(f"构建完成: {path}")
        return path
