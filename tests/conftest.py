"""
Shared pytest fixtures for the pkgdocs test suite.

Stores are real DirectoryStore trees under tmp_path (see factories.py).

Usage in tests:
    def test_something(docs_factory):
        docs_factory.add_package("elm/core", "1.0.5", modules=[...])
        docs = docs_factory.create_docs()

    def test_with_data(docs_env):
        # docs_env comes pre-populated with elm/core and elm/json
        docs = docs_env.create_docs()
"""

import pytest

from tests.factories import DocsTestFactory


@pytest.fixture
def docs_factory(tmp_path):
    """Empty package store."""
    return DocsTestFactory(tmp_path)


@pytest.fixture
def docs_env(tmp_path):
    """
    Package store with sample data.

    Pre-populated with:
    - elm/core 1.0.0, 1.0.5, 1.0.10, 2.0.0-beta.1 (module Maybe)
    - elm/json 1.1.3 (grouped modules Json.Decode, Json.Encode)
    """
    return DocsTestFactory(tmp_path).create_sample_store()


@pytest.fixture(autouse=True)
def isolated_user_config(tmp_path, monkeypatch):
    """Keep tests away from the real ~/.pkgdocs and PKGDOCS_* variables."""
    from pkgdocs.config import ConfigManager

    user_dir = tmp_path / "home" / ".pkgdocs"
    monkeypatch.setattr(ConfigManager, "USER_CONFIG_DIR", user_dir)
    monkeypatch.setattr(ConfigManager, "USER_CONFIG_FILE", user_dir / "config.yaml")
    for key in ("PKGDOCS_FORMAT", "PKGDOCS_UNRESOLVED", "PKGDOCS_STORE", "PKGDOCS_LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
