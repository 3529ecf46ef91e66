import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'layerstore' and tests/ importable as 'helpers'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from layerstore.core.stdlib_logging import reset_stdlib_logging_for_tests
from layerstore.core.storage import MemoryStorage
from helpers.layers import RecordingStorage


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch):
    """Tests must not pick up layers files or storage URLs from the developer shell."""
    monkeypatch.delenv("LAYERSTORE_CONFIG", raising=False)
    monkeypatch.delenv("LAYERSTORE_STORAGE", raising=False)
    yield
    reset_stdlib_logging_for_tests()


@pytest.fixture
def override_layer() -> RecordingStorage:
    """Immutable top layer overriding the site name."""
    return RecordingStorage({"system.core": {"site_name": "Override"}}, immutable=True)


@pytest.fixture
def active_layer() -> RecordingStorage:
    """Mutable layer holding the full default object."""
    return RecordingStorage({"system.core": {"site_name": "Default", "theme": "basic"}})


@pytest.fixture
def empty_memory() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def write_layers_file(tmp_path: Path):
    """Write a layers file under tmp_path and return its path."""

    def _write(content: str, name: str = "layers.yaml") -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
