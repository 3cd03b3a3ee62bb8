"""
conftest.py
-----------
Shared pytest fixtures for countdown tests.

Provides fixtures for:
- Temporary directories and a throwaway SQLite key-value store
- Configuration files (conferences.yml, types.yml)
- Entry factories and reference times
"""
from datetime import datetime, timedelta, timezone
from pathlib import Path
from tempfile import TemporaryDirectory

import pytest


AOE = timezone(timedelta(hours=-12))
NOW = datetime(2026, 3, 1, 12, 0, 30, tzinfo=timezone.utc)


ENV_VARS = (
    "COUNTDOWN_API_URL",
    "COUNTDOWN_API_TOKEN",
    "COUNTDOWN_NAMESPACE",
    "COUNTDOWN_TIMEOUT",
    "COUNTDOWN_TIMEZONE",
    "COUNTDOWN_DATA_DIR",
    "COUNTDOWN_STORE_PATH",
    "COUNTDOWN_LOG_DIR",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep the developer's COUNTDOWN_* variables and cached settings out of every test."""
    from countdown.core.settings import get_settings

    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# ----- Path Fixtures -----

@pytest.fixture
def tmp_dir():
    """Create a temporary directory for test file operations."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def log_dir(tmp_dir):
    return tmp_dir / "logs"


# ----- Store Fixtures -----

@pytest.fixture
def kv_store(tmp_dir):
    """KeyValueStore backed by a temporary SQLite file."""
    from countdown.storage.store import KeyValueStore

    store = KeyValueStore(tmp_dir / "var" / "countdown.db")
    yield store
    store.dispose()


@pytest.fixture
def local_store(kv_store):
    from countdown.deadlines.sources import LocalDeadlineStore

    return LocalDeadlineStore(kv_store, "ddl.test")


# ----- Configuration Fixtures -----

@pytest.fixture
def conferences_yaml():
    """Three configured items: two rounds, one AoE, one TBA."""
    return """\
- name: ConfX
  year: 2026
  description: Conference on X
  deadline: ["2026-03-15T23:59", "%y-04-01 12:00"]
  tags: [nlp]

- name: VisionConf
  year: 2026
  deadline: "%Y-12-01 23:59"
  timezone: Europe/Paris
  tags: [vision]

- name: LaterConf
  year: 2026
  deadline: ["TBA"]
  tags: [nlp, vision]
"""


@pytest.fixture
def types_yaml():
    return """\
- tag: nlp
  name: Natural Language Processing
- tag: vision
  name: Computer Vision
"""


@pytest.fixture
def data_dir(tmp_dir, conferences_yaml, types_yaml):
    """Data directory holding conferences.yml and types.yml."""
    path = tmp_dir / "data"
    path.mkdir()
    (path / "conferences.yml").write_text(conferences_yaml, encoding="utf-8")
    (path / "types.yml").write_text(types_yaml, encoding="utf-8")
    return path


# ----- Entry Factories -----

@pytest.fixture
def now():
    return NOW


@pytest.fixture
def make_entry():
    """Factory for Entry values; instant given as an offset from NOW."""
    from countdown.deadlines.models import Entry

    def _make(entry_id, offset=None, tags=(), source="config", name=None):
        instant = NOW + offset if offset is not None else None
        return Entry(
            id=entry_id,
            name=name or entry_id.upper(),
            instant=instant,
            tags=tuple(tags),
            source=source,
        )

    return _make
