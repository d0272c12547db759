"""
modpak 服务层

包含业务逻辑服务：模组解析、依赖处理、版本选择与变更、加载器版本查询。
"""

from modpak.services.mod_resolver import ModResolver, resolve_identity
from modpak.services.dependency_resolver import (
    DependencyResolver,
    ResolveFailure,
    ResolveReport,
    infer_side,
)
from modpak.services.version_selector import VersionSelector
from modpak.services.version_changer import VersionChanger
from modpak.services.loader_resolver import LoaderResolver

__all__ = [
    "ModResolver",
    "resolve_identity",
    "DependencyResolver",
    "ResolveFailure",
    "ResolveReport",
    "infer_side",
    "VersionSelector",
    "VersionChanger",
    "LoaderResolver",
]
