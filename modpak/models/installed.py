"""
已安装模组记录

每个模组对应 contents/mods/<slug>.json 中的一条记录，是整合包内容的唯一依据。
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Optional

from modpak.models.api import FileRef, ModProject, Provider
from modpak.models.config import Side


CURSEFORGE_MANUAL_LINK = (
    "https://www.curseforge.com/minecraft/mc-mods/{slug}/download/{file_id}"
)


class InstalledProvider(Enum):
    """记录中的来源，cf_manual 表示需要手动下载的 CurseForge 文件"""

    MODRINTH = "mr"
    CURSEFORGE = "cf"
    CURSEFORGE_MANUAL = "cf_manual"

    @property
    def provider(self) -> Provider:
        if self == InstalledProvider.MODRINTH:
            return Provider.MODRINTH
        return Provider.CURSEFORGE


def manual_link(slug: str, file_id: str) -> str:
    return CURSEFORGE_MANUAL_LINK.format(slug=slug, file_id=file_id)


@dataclass
class InstalledMod:
    """已安装模组"""

    name: str
    slug: str
    provider: InstalledProvider
    side: Side
    file_name: str
    hashes: Dict[str, str] = field(default_factory=dict)
    download_url: str = ""
    file_size: int = 0
    project_id: str = ""
    manual_link: Optional[str] = None

    @property
    def is_manual(self) -> bool:
        return not self.download_url

    @classmethod
    def from_file(
        cls,
        project: ModProject,
        file: FileRef,
        side: Side,
    ) -> "InstalledMod":
        """根据选定的文件生成记录，受限文件生成手动下载链接"""
        if project.provider == Provider.MODRINTH:
            provider = InstalledProvider.MODRINTH
        elif file.restricted:
            provider = InstalledProvider.CURSEFORGE_MANUAL
        else:
            provider = InstalledProvider.CURSEFORGE

        return cls(
            name=project.title,
            slug=project.slug,
            provider=provider,
            side=side,
            file_name=file.filename,
            hashes=dict(file.hashes),
            download_url=file.download_url or "",
            file_size=file.size,
            project_id=project.provider_id,
            manual_link=(
                manual_link(project.slug, file.id)
                if provider == InstalledProvider.CURSEFORGE_MANUAL
                else None
            ),
        )

    def with_file(self, file: FileRef) -> "InstalledMod":
        """切换到同一项目的另一个文件（更新/选择版本时使用）"""
        if self.provider == InstalledProvider.MODRINTH:
            provider = InstalledProvider.MODRINTH
        elif file.restricted:
            provider = InstalledProvider.CURSEFORGE_MANUAL
        else:
            provider = InstalledProvider.CURSEFORGE

        return replace(
            self,
            provider=provider,
            file_name=file.filename,
            hashes=dict(file.hashes),
            download_url=file.download_url or "",
            file_size=file.size,
            manual_link=(
                manual_link(self.slug, file.id)
                if provider == InstalledProvider.CURSEFORGE_MANUAL
                else None
            ),
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InstalledMod":
        return cls(
            name=data["name"],
            slug=data["slug"],
            provider=InstalledProvider(data["provider"]),
            side=Side(data.get("side", "both")),
            file_name=data["fileName"],
            hashes=dict(data.get("hashes") or {}),
            download_url=data.get("downloadUrl") or "",
            file_size=int(data.get("fileSize", 0)),
            project_id=str(data.get("projectId", "")),
            manual_link=data.get("manualLink"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "slug": self.slug,
            "provider": self.provider.value,
            "side": self.side.value,
            "fileName": self.file_name,
            "hashes": self.hashes,
            "downloadUrl": self.download_url,
            "fileSize": self.file_size,
            "projectId": self.project_id,
            "manualLink": self.manual_link,
        }
