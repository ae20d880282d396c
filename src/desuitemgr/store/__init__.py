"""Public store exports for desuitemgr."""

from __future__ import annotations

from .resource_store import CachedStore, ResourceStore, StoreError

__all__ = ["CachedStore", "ResourceStore", "StoreError"]
