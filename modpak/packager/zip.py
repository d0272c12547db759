"""
ZIP 生成器

实现目录压缩功能。
"""

import os
import shutil

from modpak.exceptions import ZipError


class ZipBuilder:
    """ZIP 构建器"""

    async def archive(self, source_dir: str, output_file: str) -> str:
        """
        将目录压缩为指定文件（扩展名可以是 .zip 以外的，如 .mrpack）

        Args:
            source_dir: 源文件目录
            output_file: 输出文件完整路径

        Returns:
            生成的文件路径
        """
        try:
            base, _ext = os.path.splitext(str(output_file))
            zip_path = shutil.make_archive(base, "zip", str(source_dir))

            if os.path.abspath(zip_path) != os.path.abspath(str(output_file)):
                if os.path.exists(output_file):
                    os.remove(output_file)
                shutil.move(zip_path, output_file)

            return str(output_file)

        except OSError as e:
            raise ZipError(
                f"构建 ZIP 失败: {e}",
                context={"source_dir": str(source_dir), "output_file": str(output_file)},
            )
