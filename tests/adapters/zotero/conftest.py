"""Shared fixtures for Zotero adapter tests."""

from __future__ import annotations

import pytest

from bibsync.config.http_resilience import ResilienceConfig
from bibsync.config.zotero import ZoteroConfig


@pytest.fixture
def zotero_config() -> ZoteroConfig:
    return ZoteroConfig(
        api_key="secret",
        resilience=ResilienceConfig(
            name="zotero",
            base_url="https://zotero.test",
            cache=None,
            default_headers={"Zotero-API-Key": "secret", "Zotero-API-Version": "3"},
        ),
    )
