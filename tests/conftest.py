import pytest

REFERENCE_CSV = """WG1,WG2,WG3
"kw1","kw2",kw3
kw4,,
,kw1,kw2
,kw5,
"""


@pytest.fixture
def reference_csv(tmp_path):
    path = tmp_path / "keywords.csv"
    path.write_text(REFERENCE_CSV, encoding="utf-8")
    return path


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Run with a cwd and home that hold no config file."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(home))
    return tmp_path
