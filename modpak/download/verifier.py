"""
文件校验器

计算 mrpack 需要的 SHA1 / SHA512。
"""

import hashlib
import os
from typing import Dict, Iterable, Optional

import aiofiles


DEFAULT_ALGORITHMS = ("sha1", "sha512")


class FileVerifier:
    """文件校验器"""

    @staticmethod
    async def calc_hashes(
        file_path: str,
        algorithms: Iterable[str] = DEFAULT_ALGORITHMS,
    ) -> Optional[Dict[str, str]]:
        """
        一次读取同时计算多个哈希

        Args:
            file_path: 文件路径
            algorithms: hashlib 支持的算法名

        Returns:
            {算法: 十六进制摘要}，文件不存在或读取失败时返回 None
        """
        if not os.path.exists(file_path):
            return None

        hashers = {name: hashlib.new(name) for name in algorithms}
        try:
            async with aiofiles.open(file_path, "rb") as f:
                while True:
                    data = await f.read(65536)
                    if not data:
                        break
                    for hasher in hashers.values():
                        hasher.update(data)
        except (IOError, OSError):
            return None
        return {name: hasher.hexdigest() for name, hasher in hashers.items()}

    @staticmethod
    def has_hashes(
        hashes: Optional[Dict[str, str]],
        algorithms: Iterable[str] = DEFAULT_ALGORITHMS,
    ) -> bool:
        """记录中是否已包含全部所需哈希"""
        if not hashes:
            return False
        return all(hashes.get(name) for name in algorithms)
