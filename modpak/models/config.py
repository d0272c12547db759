"""
配置模型

定义整合包配置、模组加载器与运行端等基础类型。
"""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, Optional


class ModLoader(Enum):
    """模组加载器"""

    FORGE = "forge"
    FABRIC = "fabric"
    QUILT = "quilt"
    NEOFORGE = "neoforge"


class Side(Enum):
    """模组运行端"""

    CLIENT = "client"
    SERVER = "server"
    BOTH = "both"

    @classmethod
    def parse(cls, value: str) -> "Side":
        """解析命令行中的简写（c / s）或完整名称"""
        aliases = {"c": cls.CLIENT, "s": cls.SERVER}
        value = value.strip().lower()
        if value in aliases:
            return aliases[value]
        return cls(value)


@dataclass
class PackConfig:
    """
    整合包配置

    对核心逻辑只读，由 ``modpak.config`` 负责加载和保存。
    """

    name: str
    mc_version: str
    loader: ModLoader
    version: str = "1.0.0"
    author: str = "Unknown"
    curseforge_api_key: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PackConfig":
        known = {
            "name",
            "mc_version",
            "loader",
            "version",
            "author",
            "curseforge_api_key",
        }
        return cls(
            name=str(data["name"]),
            mc_version=str(data["mc_version"]),
            loader=ModLoader(str(data["loader"]).lower()),
            version=str(data.get("version", "1.0.0")),
            author=str(data.get("author", "Unknown")),
            curseforge_api_key=data.get("curseforge_api_key") or None,
            extra={k: v for k, v in data.items() if k not in known},
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["loader"] = self.loader.value
        extra = data.pop("extra")
        if data["curseforge_api_key"] is None:
            data.pop("curseforge_api_key")
        data.update(extra)
        return data
