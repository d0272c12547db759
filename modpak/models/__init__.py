"""
modpak 数据模型包

包含配置模型、API 模型和已安装模组记录。
"""

from modpak.models.config import (
    ModLoader,
    Side,
    PackConfig,
)
from modpak.models.api import (
    Provider,
    SupportLevel,
    StabilityTier,
    DependencyKind,
    ModRef,
    ModProject,
    FileRef,
    DependencyRef,
    ModVersionCandidate,
)
from modpak.models.installed import (
    InstalledProvider,
    InstalledMod,
    manual_link,
)

__all__ = [
    # 配置模型
    "ModLoader",
    "Side",
    "PackConfig",
    # API 模型
    "Provider",
    "SupportLevel",
    "StabilityTier",
    "DependencyKind",
    "ModRef",
    "ModProject",
    "FileRef",
    "DependencyRef",
    "ModVersionCandidate",
    # 本地记录
    "InstalledProvider",
    "InstalledMod",
    "manual_link",
]
