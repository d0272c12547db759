import pytest

from modpak.models import ModLoader
from modpak.services import LoaderResolver
from modpak.services.loader_resolver import (
    FABRIC_META_URL,
    FORGE_PROMOTIONS_URL,
    NEOFORGE_VERSIONS_URL,
    QUILT_META_URL,
    pick_neoforge,
)


@pytest.mark.parametrize(
    "mc, expected",
    [
        ("1.20.4", "20.4.237"),
        ("1.20.1", "20.1.5"),
        ("1.21", "21.0.10-beta"),
        ("1.19.2", "*"),
        ("24w14a", "*"),
    ],
)
def test_pick_neoforge(mc, expected):
    versions = [
        "20.1.5",
        "20.4.80-beta",
        "20.4.9",
        "20.4.237",
        "20.4.300-beta",
        "21.0.2-beta",
        "21.0.10-beta",
    ]
    assert pick_neoforge(versions, mc) == expected


async def test_fabric_takes_first_loader(http):
    http.add(FABRIC_META_URL.format(mc="1.20.1"), [{"loader": {"version": "0.15.7"}}])
    assert await LoaderResolver(http).resolve(ModLoader.FABRIC, "1.20.1") == (
        "fabric-loader",
        "0.15.7",
    )


async def test_quilt_empty_list_is_wildcard(http):
    http.add(QUILT_META_URL.format(mc="1.20.1"), [])
    assert await LoaderResolver(http).resolve(ModLoader.QUILT, "1.20.1") == (
        "quilt-loader",
        "*",
    )


async def test_forge_prefers_recommended(http):
    http.add(
        FORGE_PROMOTIONS_URL,
        {"promos": {"1.20.1-latest": "47.2.20", "1.20.1-recommended": "47.2.0", "1.19.2-latest": "43.3.0"}},
    )
    resolver = LoaderResolver(http)

    assert await resolver.resolve(ModLoader.FORGE, "1.20.1") == ("forge", "47.2.0")
    assert await resolver.resolve(ModLoader.FORGE, "1.19.2") == ("forge", "43.3.0")
    assert await resolver.resolve(ModLoader.FORGE, "1.12.2") == ("forge", "*")


async def test_neoforge_from_maven_listing(http):
    http.add(NEOFORGE_VERSIONS_URL, {"versions": ["20.4.9", "20.4.237"]})
    assert await LoaderResolver(http).resolve(ModLoader.NEOFORGE, "1.20.4") == (
        "neoforge",
        "20.4.237",
    )


async def test_failures_become_wildcard(http):
    http.fail(FABRIC_META_URL.format(mc="1.20.1"))
    http.add(FORGE_PROMOTIONS_URL, raw=b"<html>")
    resolver = LoaderResolver(http)

    assert (await resolver.resolve(ModLoader.FABRIC, "1.20.1"))[1] == "*"
    assert (await resolver.resolve(ModLoader.FORGE, "1.20.1"))[1] == "*"
    assert (await resolver.resolve(ModLoader.NEOFORGE, "1.20.1"))[1] == "*"
