import pytest


class ScriptedRandom:
    """Random source replaying fixed columns and a fixed coin value."""

    def __init__(self, columns=(), coin=0.0):
        self.columns = list(columns)
        self.coin = coin

    def randrange(self, stop):
        value = self.columns.pop(0)
        assert 0 <= value < stop
        return value

    def random(self):
        return self.coin


class NoRandom:
    def randrange(self, stop):
        raise AssertionError("randrange consulted")

    def random(self):
        raise AssertionError("random consulted")


@pytest.fixture
def scripted():
    return ScriptedRandom


@pytest.fixture
def no_random():
    return NoRandom()


@pytest.fixture
def config_home(tmp_path, monkeypatch):
    monkeypatch.setattr("sandfall.config.platform.system", lambda: "Linux")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    monkeypatch.delenv("SANDFALL_DEBUG", raising=False)
    return tmp_path / "sandfall"
