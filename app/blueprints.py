"""Blueprint registration helpers."""

from __future__ import annotations

import importlib
import pkgutil
from pathlib import Path
from typing import Iterable

from flask import Blueprint, Flask

PLUGIN_ROOT = Path(__file__).resolve().parent.parent


def discover_plugins(package: str = "plugins") -> Iterable[str]:
    """Yield dotted import paths of all plugin packages."""

    package_path = PLUGIN_ROOT / package
    if not package_path.exists():
        return []
    return [
        f"{package}.{module_info.name}"
        for module_info in pkgutil.iter_modules([str(package_path)])
        if module_info.ispkg
    ]


def _iter_blueprints(package: str = "plugins") -> Iterable[Blueprint]:
    blueprints: list[Blueprint] = []
    for dotted in discover_plugins(package):
        module = importlib.import_module(f"{dotted}.api")
        module_blueprints = getattr(module, "blueprints", None)
        if module_blueprints:
            blueprints.extend(module_blueprints)
            continue
        blueprint = getattr(module, "bp", None)
        if blueprint is not None:
            blueprints.append(blueprint)
    return blueprints


def register_plugin_blueprints(app: Flask) -> None:
    for bp in _iter_blueprints():
        app.register_blueprint(bp)


__all__ = ["discover_plugins", "register_plugin_blueprints"]
