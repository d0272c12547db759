"""
modpak 打包层

包含构建前置检查、客户端 mrpack、服务端 zip 生成器。
"""

from modpak.packager.layout import PackLayout, copy_tree
from modpak.packager.preflight import check_manual_files, find_missing_manual_files
from modpak.packager.mrpack import MrpackBuilder
from modpak.packager.server import ServerBuilder
from modpak.packager.zip import ZipBuilder

__all__ = [
    "PackLayout",
    "copy_tree",
    "check_manual_files",
    "find_missing_manual_files",
    "MrpackBuilder",
    "ServerBuilder",
    "ZipBuilder",
]
