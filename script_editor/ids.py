"""Unique id providers used for task ids."""

from __future__ import annotations

import uuid


class IdProvider:
    """Asynchronous source of globally unique ids."""

    async def generate_id(self) -> str:  # pragma: no cover - interface
        raise NotImplementedError


class UuidIdProvider(IdProvider):
    """Local stand-in for the backend id service."""

    async def generate_id(self) -> str:
        return uuid.uuid4().hex
