"""Portrait manifest models — the layer hierarchy of a layered portrait.

A manifest describes the nodes a directive can address::

    name = "hero"
    default_directive = "set face/neutral"

    [[layers]]
    name = "face"
    children = [
        { name = "neutral" },
        { name = "angry", visible = false },
    ]

A spec with children is a group: it can be addressed as part of a path but
is not itself a layer, so ``show``/``hide``/``set`` reject it.
"""

from __future__ import annotations

import re
from typing import Any, Self

from pydantic import BaseModel, Field, field_validator, model_validator

# Names become path segments: no separators, escapes, or whitespace.
_NAME_PATTERN = re.compile(r"^[^/,\\\s]+$")


class LayerSpec(BaseModel):
    """One node in the portrait hierarchy."""

    model_config = {"frozen": True}

    name: str
    visible: bool = True
    group: bool = False
    children: list[LayerSpec] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _children_imply_group(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("children") and "group" not in data:
            return {**data, "group": True}
        return data

    @field_validator("name")
    @classmethod
    def _valid_name(cls, value: str) -> str:
        if value in (".", "..") or not _NAME_PATTERN.match(value):
            msg = f"Invalid layer name {value!r}: must be non-empty without '/', ',', '\\' or spaces"
            raise ValueError(msg)
        return value

    @model_validator(mode="after")
    def _unique_children(self) -> Self:
        _check_unique(self.children, parent=self.name)
        return self


class PortraitManifest(BaseModel):
    """Root manifest: a named portrait with its top-level layers."""

    model_config = {"frozen": True}

    name: str = "portrait"
    default_directive: str = ""
    layers: list[LayerSpec] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_layers(self) -> Self:
        _check_unique(self.layers, parent=None)
        return self


def _check_unique(specs: list[LayerSpec], *, parent: str | None) -> None:
    seen: set[str] = set()
    for spec in specs:
        if spec.name in seen:
            where = f"under {parent!r}" if parent else "at the top level"
            msg = f"Duplicate layer name {spec.name!r} {where}"
            raise ValueError(msg)
        seen.add(spec.name)
