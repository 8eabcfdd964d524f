"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, portraitctl.toml only contains
overrides. An empty file is a valid configuration.
"""

from __future__ import annotations

from pydantic import BaseModel

# --- portraitctl.toml sections ---


class PortraitConfig(BaseModel):
    """[portrait] section."""

    model_config = {"frozen": True}

    manifest: str = "portrait.toml"


class DirectiveConfig(BaseModel):
    """[directive] section."""

    model_config = {"frozen": True}

    strict: bool = False


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    enabled: bool = True
    local_dir: str = ".portraitctl/plugins"
