"""Plugin discovery and loading.

Sources, in load order: the built-in manifest formats, pip-installed
packages in the ``portraitctl.plugins`` entry-point group, and single-file
plugins in the project's local plugin directory.
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from collections.abc import Iterator
from pathlib import Path
from types import ModuleType

import pluggy

from portraitctl.plugins.builtins.manifest_formats import ManifestFormatsPlugin
from portraitctl.plugins.hookspecs import PortraitctlHookSpec

PROJECT_NAME = "portraitctl"
ENTRY_POINT_GROUP = "portraitctl.plugins"
LOCAL_MODULE_PREFIX = "portraitctl_local_plugin_"

logger = logging.getLogger(__name__)


class PluginManager:
    """Owns the pluggy manager behind every portraitctl hook call.

    A bare manager already reads TOML, JSON, and YAML manifests;
    :meth:`discover_and_load` adds third-party and local plugins.
    """

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(PortraitctlHookSpec)
        self.register(ManifestFormatsPlugin(), name="manifest-formats")

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    def register(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance under *name* (default: its class name)."""
        self._pm.register(plugin, name=name or type(plugin).__name__)
        logger.debug("Registered plugin %s", name or type(plugin).__name__)

    def discover_and_load(self, *, local_dir: Path | None = None) -> list[str]:
        """Load entry-point plugins, then local plugins from *local_dir*.

        Returns the names of every registered plugin. A plugin that fails to
        import or instantiate is logged and skipped.
        """
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._instantiate_registered_classes()
        if local_dir is not None:
            for py_file in _local_plugin_files(local_dir):
                module = _import_local(py_file)
                if module is not None:
                    self._register_module_classes(module, py_file)
        return [self._pm.get_name(p) or type(p).__name__ for p in self._pm.get_plugins()]

    def _register_module_classes(self, module: ModuleType, source: Path) -> None:
        for cls in _plugin_classes(module):
            try:
                self.register(cls(), name=f"{module.__name__}.{cls.__name__}")
            except Exception:
                logger.warning(
                    "Failed to register plugin %s from %s", cls.__name__, source, exc_info=True
                )

    def _instantiate_registered_classes(self) -> None:
        # Entry points may name a class; hooks on a class object have no bound self.
        for plugin in list(self._pm.get_plugins()):
            if not (inspect.isclass(plugin) and _has_hook_impls(plugin)):
                continue
            name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)
            try:
                self._pm.register(plugin(), name=name)
            except Exception:
                logger.warning("Failed to instantiate entry-point plugin %s", name, exc_info=True)


def _local_plugin_files(local_dir: Path) -> Iterator[Path]:
    if not local_dir.is_dir():
        return
    for py_file in sorted(local_dir.glob("*.py")):
        if not py_file.name.startswith("_"):
            yield py_file


def _import_local(py_file: Path) -> ModuleType | None:
    """Import *py_file* as ``portraitctl_local_plugin_<stem>``, or None on failure."""
    module_name = f"{LOCAL_MODULE_PREFIX}{py_file.stem}"
    spec = importlib.util.spec_from_file_location(module_name, py_file)
    if spec is None or spec.loader is None:
        logger.warning("Could not create module spec for %s", py_file)
        return None
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception:
        logger.warning("Failed to load local plugin %s", py_file, exc_info=True)
        sys.modules.pop(module_name, None)
        return None
    return module


def _plugin_classes(module: ModuleType) -> list[type]:
    """Classes defined in *module* (not imported into it) that carry hookimpls."""
    return [
        cls
        for _, cls in inspect.getmembers(module, inspect.isclass)
        if cls.__module__ == module.__name__ and _has_hook_impls(cls)
    ]


def _has_hook_impls(cls: type) -> bool:
    # HookimplMarker("portraitctl") tags decorated functions with ``portraitctl_impl``.
    marker = f"{PROJECT_NAME}_impl"
    return any(
        getattr(getattr(cls, attr, None), marker, None) is not None
        for attr in dir(cls)
        if not attr.startswith("_")
    )
