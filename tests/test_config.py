import pytest

from modpak.config import find_config, load_config, resolve_api_key, save_config
from modpak.exceptions import ConfigError, ConfigParseError, ConfigValidationError
from modpak.models import ModLoader, PackConfig, Side


@pytest.mark.parametrize("fmt", ["toml", "json", "yaml"])
def test_save_and_load_each_format(tmp_path, fmt):
    config = PackConfig(
        name="Skyblock",
        mc_version="1.20.1",
        loader=ModLoader.NEOFORGE,
        version="2.1.0",
        author="someone",
        extra={"description": "islands"},
    )

    path = save_config(config, tmp_path, fmt)

    assert path.name == f"modpak.{fmt}"
    assert find_config(tmp_path) == path
    assert load_config(tmp_path) == config


def test_defaults_for_optional_fields(tmp_path):
    (tmp_path / "modpak.toml").write_text(
        'name = "Mini"\nmc_version = "1.20.1"\nloader = "Fabric"\n', encoding="utf-8"
    )

    config = load_config(tmp_path)

    assert config.loader == ModLoader.FABRIC
    assert config.version == "1.0.0"
    assert config.author == "Unknown"
    assert config.curseforge_api_key is None


def test_missing_config(tmp_path):
    with pytest.raises(ConfigError) as exc_info:
        load_config(tmp_path)
    assert exc_info.value.code == "E100"


def test_unparseable_config(tmp_path):
    (tmp_path / "modpak.json").write_text("{oops", encoding="utf-8")
    with pytest.raises(ConfigParseError):
        load_config(tmp_path)


@pytest.mark.parametrize(
    "text",
    [
        'name = "A"\nloader = "fabric"\n',
        'name = "A"\nmc_version = "1.20.1"\nloader = "rift"\n',
    ],
)
def test_invalid_config(tmp_path, text):
    (tmp_path / "modpak.toml").write_text(text, encoding="utf-8")
    with pytest.raises(ConfigValidationError):
        load_config(tmp_path)


def test_api_key_precedence(monkeypatch):
    config = PackConfig(name="A", mc_version="1.20.1", loader=ModLoader.FORGE)
    monkeypatch.setenv("CURSEFORGE_API_KEY", "from-env")

    assert resolve_api_key(None, config) == "from-env"
    config.curseforge_api_key = "from-config"
    assert resolve_api_key(None, config) == "from-config"
    assert resolve_api_key("from-cli", config) == "from-cli"

    monkeypatch.delenv("CURSEFORGE_API_KEY")
    config.curseforge_api_key = None
    assert resolve_api_key(None, config) is None


@pytest.mark.parametrize(
    "value, side",
    [("c", Side.CLIENT), ("Server", Side.SERVER), ("s", Side.SERVER), ("both", Side.BOTH)],
)
def test_side_parse(value, side):
    assert Side.parse(value) == side
