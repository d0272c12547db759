"""
整合包目录布局

contents/ 下保存模组记录、配置文件和手动下载的 jar，build/ 下生成构建目录。
"""

import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from modpak.store import CONFIGS_DIR, JARMODS_DIR, MODS_DIR


@dataclass
class PackLayout:
    """整合包根目录下的各个路径"""

    root: Path

    @classmethod
    def at(cls, root: Union[str, Path]) -> "PackLayout":
        return cls(Path(root))

    @property
    def mods_dir(self) -> Path:
        return self.root / MODS_DIR

    @property
    def configs_dir(self) -> Path:
        return self.root / CONFIGS_DIR

    @property
    def jarmods_dir(self) -> Path:
        return self.root / JARMODS_DIR

    @property
    def build_dir(self) -> Path:
        return self.root / "build"

    def create(self):
        for path in (self.mods_dir, self.jarmods_dir, self.configs_dir):
            path.mkdir(parents=True, exist_ok=True)


def fresh_dir(path: Path) -> Path:
    """清空并重新创建目录"""
    if path.exists():
        shutil.rmtree(path)
    path.mkdir(parents=True)
    return path


def copy_tree(src: Path, dest: Path) -> int:
    """
    递归复制目录，目标中已存在的文件保持不变

    Returns:
        复制的文件数量
    """
    if not src.is_dir():
        return 0

    copied = 0
    for root, _dirs, files in os.walk(src):
        relative = os.path.relpath(root, src)
        dest_dir = dest / relative if relative != "." else dest
        dest_dir.mkdir(parents=True, exist_ok=True)
        for name in files:
            target = dest_dir / name
            if target.exists():
                continue
            shutil.copy2(os.path.join(root, name), target)
            copied += 1
    return copied
