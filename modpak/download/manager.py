"""
下载管理器

逐个下载文件并统计结果。模组之间不并发，失败不自动重试。
"""

import os
import shutil
from dataclasses import dataclass, field
from typing import List

import aiofiles
from loguru import logger

from modpak.api.http import HttpClient
from modpak.exceptions import (
    APIError,
    DownloadError,
    DownloadFileError,
    DownloadNetworkError,
)


@dataclass
class DownloadStats:
    """下载统计"""

    completed: int = 0
    failed: int = 0
    copied: int = 0
    bytes_downloaded: int = 0
    failed_files: List[str] = field(default_factory=list)


class DownloadManager:
    """下载管理器"""

    def __init__(self, http: HttpClient):
        self.http = http
        self.stats = DownloadStats()

    async def download_file(self, url: str, file_path: str) -> str:
        """
        下载单个文件

        Returns:
            写入的文件路径

        Raises:
            DownloadError: 网络错误、非 200 响应或写入失败
        """
        filename = os.path.basename(file_path)
        os.makedirs(os.path.dirname(file_path) or ".", exist_ok=True)

        try:
            response = await self.http.get(url)
        except APIError as e:
            self._record_failure(filename)
            raise DownloadNetworkError(
                f"下载 {filename} 失败: {e.message}", context={"url": url}
            )

        if not response.ok:
            self._record_failure(filename)
            raise DownloadNetworkError(
                f"下载 {filename} 失败: HTTP {response.status}",
                context={"url": url, "status": response.status},
            )

        try:
            async with aiofiles.open(file_path, "wb") as f:
                await f.write(response.body)
        except OSError as e:
            self._record_failure(filename)
            if os.path.exists(file_path):
                os.remove(file_path)
            raise DownloadFileError(
                f"写入 {filename} 失败: {e}", context={"path": file_path}
            )

        self.stats.completed += 1
        self.stats.bytes_downloaded += len(response.body)
        logger.debug(f"[完成] '{filename}' ({len(response.body) / 1024:.1f} KB)")
        return file_path

    def copy_local_file(self, src_path: str, dest_path: str) -> str:
        """复制本地文件"""
        try:
            os.makedirs(os.path.dirname(dest_path) or ".", exist_ok=True)
            shutil.copy2(src_path, dest_path)
        except OSError as e:
            self._record_failure(os.path.basename(src_path))
            raise DownloadFileError(
                f"复制文件失败: {e}", context={"src": src_path, "dest": dest_path}
            )
        self.stats.copied += 1
        return dest_path

    def _record_failure(self, filename: str):
        self.stats.failed += 1
        self.stats.failed_files.append(filename)

    def get_stats(self) -> DownloadStats:
        """获取下载统计"""
        return self.stats


__all__ = ["DownloadManager", "DownloadStats", "DownloadError"]
