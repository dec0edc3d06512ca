# Root-level pytest configuration helpers applied to all tests
# - Ensure the repository root is importable so tests can `from database...` and `from utils...`
# - Register the markers used across test packages

from pathlib import Path
import sys


def _add_repo_root_to_sys_path() -> None:
    repo_root = Path(__file__).resolve().parent
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))


_add_repo_root_to_sys_path()


def pytest_configure(config):
    """Configure pytest with markers"""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
