import pytest


class FixedSource:
    """Random source replaying a fixed list of uint32 values."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = []

    def fill(self, n):
        self.calls.append(n)
        if n > len(self.values):
            raise AssertionError("FixedSource exhausted")
        out, self.values = self.values[:n], self.values[n:]
        return out


@pytest.fixture
def fixed_source():
    return FixedSource


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    path = tmp_path / "config.json"
    monkeypatch.setenv("POOLPASS_CONFIG", str(path))
    return path
