"""
本地模组存储

contents/mods/<slug>.json 每个文件一条 InstalledMod 记录，是整合包内容的唯一依据。
"""

import json
import os
from pathlib import Path
from typing import List, Optional, Union

import aiofiles
from loguru import logger

from modpak.exceptions import StoreError
from modpak.models import InstalledMod


MODS_DIR = os.path.join("contents", "mods")
CONFIGS_DIR = os.path.join("contents", "configs")
JARMODS_DIR = os.path.join("contents", "jarmods")


class LocalModStore:
    """已安装模组记录的读写"""

    def __init__(self, root: Union[str, Path] = "."):
        self.root = Path(root)
        self.mods_dir = self.root / MODS_DIR

    def exists(self) -> bool:
        return self.mods_dir.is_dir()

    def path_for(self, slug: str) -> Path:
        return self.mods_dir / f"{slug}.json"

    async def _read(self, path: Path) -> InstalledMod:
        try:
            async with aiofiles.open(path, "r", encoding="utf-8") as f:
                data = json.loads(await f.read())
            return InstalledMod.from_dict(data)
        except (OSError, ValueError, KeyError, TypeError) as e:
            raise StoreError(
                f"无法读取模组记录 {path.name}: {e}", context={"path": str(path)}
            )

    async def get(self, slug: str) -> Optional[InstalledMod]:
        """按 slug 读取记录，不存在或损坏时返回 None"""
        path = self.path_for(slug)
        if not path.is_file():
            return None
        try:
            return await self._read(path)
        except StoreError as e:
            logger.warning(str(e))
            return None

    async def save(self, mod: InstalledMod):
        """写入（或覆盖）一条记录"""
        self.mods_dir.mkdir(parents=True, exist_ok=True)
        path = self.path_for(mod.slug)
        async with aiofiles.open(path, "w", encoding="utf-8") as f:
            await f.write(json.dumps(mod.to_dict(), indent=4, ensure_ascii=False))
        logger.debug(f"已写入 {path}")

    async def load_all(self) -> List[InstalledMod]:
        """
        读取全部记录

        损坏的记录会被跳过并记录警告，不会中断整体流程。
        """
        if not self.exists():
            return []

        mods = []
        for path in sorted(self.mods_dir.glob("*.json")):
            try:
                mods.append(await self._read(path))
            except StoreError as e:
                logger.warning(f"{e}，已跳过")
        return mods

    async def find(self, query: str) -> Optional[InstalledMod]:
        """
        按 slug 文件名精确查找，否则按 slug（忽略大小写）或名称包含关系查找
        """
        exact = await self.get(query)
        if exact is not None:
            return exact

        q = query.lower()
        for mod in await self.load_all():
            if mod.slug.lower() == q or q in mod.name.lower():
                return mod
        return None
