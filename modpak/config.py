"""
配置加载

整合包根目录下的 modpak.toml / modpak.json / modpak.yaml，三者取其一。
"""

import json
import os
from pathlib import Path
from typing import Optional, Union

import toml
import yaml

from modpak.exceptions import ConfigError, ConfigParseError, ConfigValidationError
from modpak.models import ModLoader, PackConfig


CONFIG_NAMES = ("modpak.toml", "modpak.json", "modpak.yaml", "modpak.yml")
REQUIRED_KEYS = ("name", "mc_version", "loader")


def find_config(root: Union[str, Path]) -> Optional[Path]:
    """返回根目录下的配置文件路径，不存在时返回 None"""
    for name in CONFIG_NAMES:
        path = Path(root) / name
        if path.is_file():
            return path
    return None


def _parse(path: Path) -> dict:
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    try:
        if suffix == ".toml":
            return toml.loads(text)
        elif suffix == ".json":
            return json.loads(text)
        elif suffix in (".yaml", ".yml"):
            return yaml.safe_load(text) or {}
    except (toml.TomlDecodeError, ValueError, yaml.YAMLError) as e:
        raise ConfigParseError(
            f"配置文件解析失败: {e}", context={"path": str(path)}
        )
    raise ConfigParseError(f"不支持的配置文件格式: {suffix}")


def load_config(root: Union[str, Path] = ".") -> PackConfig:
    """
    加载整合包配置

    Raises:
        ConfigError: 找不到配置文件
        ConfigParseError: 文件无法解析
        ConfigValidationError: 缺少必填项或加载器不受支持
    """
    path = find_config(root)
    if path is None:
        raise ConfigError(
            f"当前目录不是 modpak 整合包（缺少 {CONFIG_NAMES[0]}）",
            context={"root": str(root)},
        )

    data = _parse(path)
    if not isinstance(data, dict):
        raise ConfigParseError("配置文件顶层必须是键值表", context={"path": str(path)})

    missing = [k for k in REQUIRED_KEYS if not data.get(k)]
    if missing:
        raise ConfigValidationError(
            f"配置缺少必填项: {', '.join(missing)}", context={"path": str(path)}
        )

    loaders = [l.value for l in ModLoader]
    if str(data["loader"]).lower() not in loaders:
        raise ConfigValidationError(
            f"loader 必须为 {'/'.join(loaders)}", context={"loader": data["loader"]}
        )

    return PackConfig.from_dict(data)


def save_config(config: PackConfig, root: Union[str, Path] = ".", fmt: str = "toml") -> Path:
    """写入配置文件"""
    path = Path(root) / f"modpak.{fmt}"
    data = config.to_dict()
    if fmt == "toml":
        text = toml.dumps(data)
    elif fmt == "json":
        text = json.dumps(data, indent=4, ensure_ascii=False)
    elif fmt in ("yaml", "yml"):
        text = yaml.safe_dump(data, allow_unicode=True, sort_keys=False)
    else:
        raise ConfigError(f"不支持的配置文件格式: {fmt}")
    os.makedirs(path.parent, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def resolve_api_key(cli_key: Optional[str], config: PackConfig) -> Optional[str]:
    """命令行 > 配置文件 > 环境变量 CURSEFORGE_API_KEY"""
    return cli_key or config.curseforge_api_key or os.environ.get("CURSEFORGE_API_KEY")
