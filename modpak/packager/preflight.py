"""
构建前置检查

禁止直接下载的模组必须事先放到 contents/jarmods/，缺失时整个构建中止。
"""

from pathlib import Path
from typing import List

from modpak.exceptions import ManualFilesMissingError
from modpak.models import InstalledMod


def find_missing_manual_files(
    mods: List[InstalledMod], jarmods_dir: Path
) -> List[InstalledMod]:
    """返回没有下载地址且本地文件也不存在的模组"""
    return [
        mod
        for mod in mods
        if mod.is_manual and not (jarmods_dir / mod.file_name).is_file()
    ]


def check_manual_files(mods: List[InstalledMod], jarmods_dir: Path):
    missing = find_missing_manual_files(mods, jarmods_dir)
    if missing:
        raise ManualFilesMissingError(missing, str(jarmods_dir))
