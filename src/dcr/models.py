"""Typed document models for dcr."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class ComposeDocument(BaseModel):
    # Service bodies are the compose tool's business; only the keys matter here
    services: dict[str, Any]

    def service_names(self) -> tuple[str, ...]:
        return tuple(sorted(self.services))


class GroupDocument(BaseModel):
    # Member order is significant: it is the order used for expansion
    groups: dict[str, list[str]]
