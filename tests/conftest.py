import pytest

from modpak.models import ModLoader, PackConfig
from modpak.packager import PackLayout
from modpak.store import LocalModStore
from tests.helpers import FakeHttp


@pytest.fixture
def http():
    return FakeHttp()


@pytest.fixture
def config():
    return PackConfig(name="TestPack", mc_version="1.20.1", loader=ModLoader.FABRIC)


@pytest.fixture
def layout(tmp_path):
    layout = PackLayout.at(tmp_path)
    layout.create()
    return layout


@pytest.fixture
def store(layout):
    return LocalModStore(layout.root)
