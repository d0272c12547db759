import json
import zipfile

import pytest

from modpak.exceptions import ManualFilesMissingError
from modpak.models import ModLoader, Provider, Side
from modpak.orchestrator import PackOrchestrator, init_pack
from modpak.services.loader_resolver import FABRIC_META_URL
from tests.helpers import (
    CF,
    MR,
    ScriptedPrompter,
    cf_file,
    cf_mod,
    mr_file,
    mr_project,
    mr_version,
)


@pytest.fixture
def pack_root(tmp_path):
    init_pack(tmp_path, "E2E", "1.20.1", ModLoader.FABRIC)
    return tmp_path


@pytest.fixture
def routes(http):
    http.add(
        f"{MR}/project/sodium",
        mr_project("AANobbMI", "sodium", "Sodium", server_side="unsupported"),
    )
    http.add(
        f"{MR}/project/AANobbMI/version",
        [mr_version("S1", "AANobbMI", "0.5.8", [mr_file("sodium.jar")], deps=[("P7dR8mSH",)])],
    )
    http.add(f"{MR}/project/P7dR8mSH", mr_project("P7dR8mSH", "fabric-api", "Fabric API"))
    http.add(
        f"{MR}/project/P7dR8mSH/version",
        [mr_version("F1", "P7dR8mSH", "0.92.0", [mr_file("fabric-api.jar")])],
    )
    http.add(f"{CF}/mods/search", {"data": [cf_mod(238222, "jei", "Just Enough Items")]})
    http.add(
        f"{CF}/mods/238222/files",
        {"data": [cf_file(4712, "jei.jar", ["1.20.1", "Fabric"], download_url=None)]},
    )
    http.add(FABRIC_META_URL.format(mc="1.20.1"), [{"loader": {"version": "0.15.7"}}])
    http.add(f"{MR}/project/lithium", mr_project("gvQqBUqZ", "lithium", "Lithium"))
    http.add(
        f"{MR}/project/gvQqBUqZ/version",
        [mr_version("L1", "gvQqBUqZ", "0.11.2", [mr_file("lithium.jar")])],
    )
    http.add("https://cdn.modrinth.com/data/fabric-api.jar", raw=b"fabric-api")
    http.add("https://cdn.modrinth.com/data/lithium.jar", raw=b"lithium")
    return http


async def test_add_then_build_client_and_server(pack_root, routes):
    async with PackOrchestrator(pack_root, prompter=ScriptedPrompter(), http=routes) as pak:
        report = await pak.add(["sodium", "lithium"])
        assert [m.slug for m in report.added] == ["sodium", "fabric-api", "lithium"]

        client = await pak.build("client")
        server = await pak.build("server")

    with zipfile.ZipFile(client) as zf:
        manifest = json.loads(zf.read("modrinth.index.json"))
    assert [f["path"] for f in manifest["files"]] == [
        "mods/fabric-api.jar",
        "mods/lithium.jar",
        "mods/sodium.jar",
    ]
    assert manifest["dependencies"]["fabric-loader"] == "0.15.7"

    with zipfile.ZipFile(server) as zf:
        names = zf.namelist()
    # fabric-api 作为 sodium 的依赖继承了 client 端
    assert "mods/lithium.jar" in names
    assert "mods/fabric-api.jar" not in names
    assert "mods/sodium.jar" not in names


async def test_manual_mod_blocks_build_until_placed(pack_root, routes):
    async with PackOrchestrator(pack_root, prompter=ScriptedPrompter(), http=routes) as pak:
        await pak.add(["jei"], provider=Provider.CURSEFORGE, side=Side.BOTH)

        with pytest.raises(ManualFilesMissingError) as exc_info:
            await pak.build("client")
        assert [m.slug for m in exc_info.value.missing] == ["jei"]
        assert not (pack_root / "build").exists()
        assert routes.count(FABRIC_META_URL.format(mc="1.20.1")) == 0

        (pack_root / "contents" / "jarmods" / "jei.jar").write_bytes(b"jei")
        path = await pak.build("client")

    with zipfile.ZipFile(path) as zf:
        assert "overrides/mods/jei.jar" in zf.namelist()
        manifest = json.loads(zf.read("modrinth.index.json"))
    assert manifest["files"] == []


async def test_list_mods_is_sorted_by_slug(pack_root, routes):
    async with PackOrchestrator(pack_root, prompter=ScriptedPrompter(), http=routes) as pak:
        await pak.add(["sodium"])
        mods = await pak.list_mods()
    assert [m.slug for m in mods] == ["fabric-api", "sodium"]
