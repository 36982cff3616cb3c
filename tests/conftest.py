import pytest


@pytest.fixture(autouse=True)
def data_dir(tmp_path, monkeypatch):
    # every test gets its own empty store
    d = tmp_path / "data"
    monkeypatch.setenv("QUESTIONS_DATA_DIR", str(d))
    monkeypatch.delenv("QUESTIONS_API_KEY", raising=False)
    monkeypatch.delenv("QUESTIONS_MAX_BYTES", raising=False)
    monkeypatch.delenv("QUESTIONS_BACKUP_KEEP", raising=False)
    return d
