import pytest
from reflectcall.config import ReflectCallConfig

from sample_targets import Sample


@pytest.fixture
def sample():
    return Sample()


@pytest.fixture
def test_config():
    return ReflectCallConfig(capture_stack=True, payload_echo_limit=40)


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    # Never read the developer's real ~/.config/reflectcall
    monkeypatch.setenv("REFLECTCALL_HOME", str(tmp_path / "reflectcall_home"))
    yield
