"""Public session exports for desuitemgr."""

from __future__ import annotations

from .context import IdentityStore, SessionContext, require_identity

__all__ = ["SessionContext", "IdentityStore", "require_identity"]
