"""
modpak 下载层

包含文件下载、本地复制与哈希校验。
"""

from modpak.download.manager import DownloadManager, DownloadStats
from modpak.download.verifier import FileVerifier

__all__ = [
    "DownloadManager",
    "DownloadStats",
    "FileVerifier",
]
