from modpak.models import InstalledMod, InstalledProvider, Side


def make_mod(slug, name=None, **kwargs):
    defaults = dict(
        name=name or slug.title(),
        slug=slug,
        provider=InstalledProvider.MODRINTH,
        side=Side.BOTH,
        file_name=f"{slug}-1.0.jar",
        hashes={"sha1": "a" * 40},
        download_url=f"https://cdn.modrinth.com/data/{slug}-1.0.jar",
        file_size=100,
        project_id=f"ID-{slug}",
    )
    defaults.update(kwargs)
    return InstalledMod(**defaults)


async def test_save_and_get(store):
    mod = make_mod("sodium", side=Side.CLIENT)
    await store.save(mod)

    assert store.path_for("sodium").is_file()
    assert await store.get("sodium") == mod
    assert await store.get("missing") is None


async def test_record_uses_camel_case_keys(store):
    await store.save(make_mod("jei", provider=InstalledProvider.CURSEFORGE_MANUAL, download_url="", manual_link="https://example.invalid/jei"))

    text = store.path_for("jei").read_text(encoding="utf-8")
    assert '"fileName": "jei-1.0.jar"' in text
    assert '"provider": "cf_manual"' in text
    assert '"manualLink"' in text


async def test_load_all_skips_corrupt_records(store):
    await store.save(make_mod("b-mod"))
    await store.save(make_mod("a-mod"))
    store.path_for("broken").write_text("{not json", encoding="utf-8")
    store.path_for("partial").write_text('{"name": "x"}', encoding="utf-8")

    mods = await store.load_all()

    assert [m.slug for m in mods] == ["a-mod", "b-mod"]
    assert await store.get("broken") is None


async def test_load_all_without_directory(tmp_path):
    from modpak.store import LocalModStore

    assert await LocalModStore(tmp_path / "nowhere").load_all() == []


async def test_find_by_slug_or_name(store):
    await store.save(make_mod("fabric-api", name="Fabric API"))
    await store.save(make_mod("sodium", name="Sodium"))

    assert (await store.find("sodium")).slug == "sodium"
    assert (await store.find("FABRIC-API")).slug == "fabric-api"
    assert (await store.find("fabric")).slug == "fabric-api"
    assert await store.find("iris") is None
