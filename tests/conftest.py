import logging

import pytest


class RecordingSink:
    """Collects (level, tag, msg, tr) tuples instead of writing them."""

    def __init__(self):
        self.records = []

    def log(self, level, tag, msg, tr=None):
        self.records.append((level, tag, msg, tr))

    @property
    def messages(self):
        return [r[2] for r in self.records]


@pytest.fixture(autouse=True)
def data_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("POPVIEW_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("POPVIEW_LOG_ENABLED", raising=False)
    monkeypatch.delenv("POPVIEW_LOG_TAG", raising=False)
    return tmp_path


@pytest.fixture(autouse=True)
def restore_root_logging():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for h in list(root.handlers):
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    root.setLevel(level)


@pytest.fixture
def sink():
    return RecordingSink()
