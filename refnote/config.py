from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .references.catalog import STATUS_CATALOG, TYPE_CATALOG
from .references.locator import SECTION_HEADING

CONFIG_FILENAME = ".refnote.toml"


@dataclass(frozen=True)
class RefnoteConfig:
    section_heading: str = SECTION_HEADING
    default_type: str = TYPE_CATALOG.default.key
    default_status: str = STATUS_CATALOG.default.key


def _coerce_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def parse_config(text: str) -> RefnoteConfig:
    """
    Parse refnote settings from TOML.

    Example::

        section_heading = "References"

        [defaults]
        type = "web-page"
        status = "saved"
    """
    import tomllib

    data = tomllib.loads(text)

    heading = str(data.get("section_heading", SECTION_HEADING)).strip()
    if not heading:
        raise ValueError("section_heading must not be empty")

    defaults = _coerce_dict(data.get("defaults"))

    default_type = str(defaults.get("type", TYPE_CATALOG.default.key)).strip()
    if default_type not in TYPE_CATALOG.keys:
        raise ValueError(f"unknown default type {default_type!r} (expected one of {', '.join(TYPE_CATALOG.keys)})")

    default_status = str(defaults.get("status", STATUS_CATALOG.default.key)).strip()
    if default_status not in STATUS_CATALOG.keys:
        raise ValueError(
            f"unknown default status {default_status!r} (expected one of {', '.join(STATUS_CATALOG.keys)})"
        )

    return RefnoteConfig(section_heading=heading, default_type=default_type, default_status=default_status)


def load_config(vault_path: Path) -> RefnoteConfig:
    """Load the vault-owned config, falling back to defaults when absent."""
    config_path = vault_path / CONFIG_FILENAME
    if not config_path.exists():
        return RefnoteConfig()
    try:
        return parse_config(config_path.read_text(encoding="utf-8"))
    except ValueError as e:
        # tomllib.TOMLDecodeError is a ValueError too
        raise ValueError(f"{config_path}: {e}") from e
