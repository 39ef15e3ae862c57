"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from refnote.vault.resolver import VaultResolver


@pytest.fixture
def vault_path(tmp_path: Path) -> Path:
    """A small vault with an .obsidian folder and two notes."""
    vault = tmp_path / "vault"
    (vault / ".obsidian").mkdir(parents=True)
    (vault / "concepts").mkdir()
    (vault / "concepts" / "Ownership.md").write_text("# Ownership\n", encoding="utf-8")
    (vault / "reading.md").write_text("# Reading\n", encoding="utf-8")
    return vault


@pytest.fixture
def resolver(vault_path: Path) -> VaultResolver:
    return VaultResolver(vault_path)
