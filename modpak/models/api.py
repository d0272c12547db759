"""
API 数据模型

把 Modrinth 与 CurseForge 两个平台的项目、版本、文件信息统一成同一套数据类。
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class Provider(Enum):
    """模组平台"""

    MODRINTH = "mr"
    CURSEFORGE = "cf"

    @classmethod
    def parse(cls, value: str) -> "Provider":
        """解析 mr / modrinth / cf / curseforge"""
        value = value.strip().lower()
        if value in ("cf", "curseforge"):
            return cls.CURSEFORGE
        if value in ("mr", "modrinth"):
            return cls.MODRINTH
        raise ValueError(f"未知的平台: {value}")


class SupportLevel(Enum):
    """项目在某一端的支持程度"""

    REQUIRED = "required"
    OPTIONAL = "optional"
    UNSUPPORTED = "unsupported"

    @classmethod
    def parse(cls, value: Optional[str]) -> "SupportLevel":
        # Modrinth 还会返回 unknown，按 optional 处理
        try:
            return cls(value)
        except ValueError:
            return cls.OPTIONAL


class StabilityTier(Enum):
    """版本稳定性"""

    RELEASE = "release"
    BETA = "beta"
    ALPHA = "alpha"


class DependencyKind(Enum):
    """依赖类型"""

    REQUIRED = "required"
    OPTIONAL = "optional"
    INCOMPATIBLE = "incompatible"
    EMBEDDED = "embedded"
    TOOL = "tool"
    INCLUDE = "include"


@dataclass
class ModRef:
    """未解析的模组标识"""

    provider: Provider
    query: str
    from_url: bool = False
    by_id: bool = False

    def key(self) -> tuple:
        """按项目 ID 引用时区分大小写，按名称或 slug 引用时忽略大小写"""
        if self.by_id:
            return (self.provider, self.query)
        return (self.provider, self.query.lower())


@dataclass
class ModProject:
    """
    模组项目信息。
    """

    provider: Provider
    provider_id: str
    slug: str
    title: str
    client_support: SupportLevel = SupportLevel.OPTIONAL
    server_support: SupportLevel = SupportLevel.OPTIONAL

    def key(self) -> tuple:
        return (self.provider, self.provider_id)

    def aliases(self) -> List[tuple]:
        """用于去重的全部标识：项目 ID（原样）与 slug（忽略大小写）"""
        return [
            self.key(),
            (self.provider, self.slug.lower()),
        ]


@dataclass
class FileRef:
    """文件信息，download_url 为 None 表示平台禁止直接下载"""

    id: str
    filename: str
    size: int
    hashes: Dict[str, str] = field(default_factory=dict)
    download_url: Optional[str] = None

    @property
    def restricted(self) -> bool:
        return not self.download_url


@dataclass
class DependencyRef:
    """依赖信息"""

    project_id: Optional[str]
    version_id: Optional[str]
    kind: DependencyKind


@dataclass
class ModVersionCandidate:
    """
    模组版本信息。
    """

    id: str
    display_name: str
    version_number: str
    stability: StabilityTier
    published_at: str
    files: List[FileRef]
    dependencies: List[DependencyRef] = field(default_factory=list)

    @property
    def required_dependencies(self) -> List[DependencyRef]:
        return [d for d in self.dependencies if d.kind == DependencyKind.REQUIRED]

    def primary_file(self) -> Optional[FileRef]:
        """优先选择 .jar 文件，否则返回第一个文件"""
        if not self.files:
            return None
        for file in self.files:
            if file.filename.endswith(".jar"):
                return file
        return self.files[0]

    def has_file(self, filename: Optional[str]) -> bool:
        if not filename:
            return False
        return any(f.filename == filename for f in self.files)
