"""Utilities to discover circuits in scripts and modules.

This module was adapted from `fastapi_cli.discover` of package `fastapi-cli` version 0.0.8 (77e6d1f).
"""

from __future__ import annotations

import importlib
import logging
import sys
from dataclasses import dataclass
from typing import TYPE_CHECKING

from arithgraph._builder import Builder

if TYPE_CHECKING:
    from pathlib import Path
    from types import ModuleType

    from .config import CircuitSource

logger = logging.getLogger(__name__)


@dataclass
class ModuleData:
    """Module data for a Python module."""

    module_import_str: str
    extra_sys_path: Path
    module_paths: list[Path]


def get_module_data_from_path(path: Path) -> ModuleData:
    """Get module data from a file path.

    Args:
        path: Path to a Python file or package

    Returns:
        ModuleData containing module import information

    """
    use_path = path.resolve()
    module_path = use_path
    if use_path.is_file() and use_path.stem == "__init__":
        module_path = use_path.parent
    module_paths = [module_path]
    extra_sys_path = module_path.parent
    for parent in module_path.parents:
        init_path = parent / "__init__.py"
        if init_path.is_file():
            module_paths.insert(0, parent)
            extra_sys_path = parent.parent
        else:
            break

    module_str = ".".join(p.stem for p in module_paths)
    return ModuleData(
        module_import_str=module_str,
        extra_sys_path=extra_sys_path.resolve(),
        module_paths=module_paths,
    )


def _as_builder(obj: object, name: str, module_name: str) -> Builder:
    """Return ``obj`` if it is a Builder, or the Builder a factory returns."""
    if isinstance(obj, Builder):
        return obj
    if callable(obj):
        built = obj()
        if isinstance(built, Builder):
            return built
        msg = f"'{name}' in {module_name} returned {type(built).__name__}, not a Builder"
        raise TypeError(msg)
    msg = f"'{name}' in {module_name} is not a Builder instance"
    raise TypeError(msg)


def _find_builder(module: ModuleType) -> Builder:
    for name in dir(module):
        obj = getattr(module, name)
        if isinstance(obj, Builder):
            logger.debug("Found circuit: %s", name)
            return obj

    msg = "Could not find a Builder in module, try using --builder"
    raise ValueError(msg)


def load_circuit_from_script(script_path: Path, builder_name: str | None = None) -> Builder:
    """Load a circuit from a Python script path.

    Args:
        script_path: Path to the Python script containing the circuit
        builder_name: Name of the Builder variable or factory function. If None, the
            first module-level Builder instance is used

    Returns:
        The loaded Builder

    Raises:
        ImportError: If the module cannot be imported
        ValueError: If no circuit is found or the specified name doesn't exist
        TypeError: If the specified variable is not a Builder or Builder factory

    """
    module_data = get_module_data_from_path(script_path)
    sys.path.insert(0, str(module_data.extra_sys_path))

    try:
        module = importlib.import_module(module_data.module_import_str)
    except (ImportError, ValueError):
        logger.exception("Import error")
        logger.warning("Ensure all the package directories have an __init__.py file")
        raise

    if builder_name:
        if not hasattr(module, builder_name):
            msg = f"Could not find '{builder_name}' in {module_data.module_import_str}"
            raise ValueError(msg)
        return _as_builder(getattr(module, builder_name), builder_name, module_data.module_import_str)

    return _find_builder(module)


def load_circuit_from_module_path(module_path: str) -> Builder:
    """Load a circuit from a module path (e.g., 'examples.division:builder').

    Args:
        module_path: Module path in format 'module.path:variable_name'

    Returns:
        The loaded Builder

    Raises:
        ValueError: If module path format is invalid
        TypeError: If the specified variable is not a Builder or Builder factory

    """
    if ":" not in module_path:
        msg = "Module path must be in format 'module.path:variable_name'"
        raise ValueError(msg)

    module_name, builder_name = module_path.split(":", 1)
    module = importlib.import_module(module_name)
    if not hasattr(module, builder_name):
        msg = f"Could not find '{builder_name}' in module '{module_name}'"
        raise ValueError(msg)
    return _as_builder(getattr(module, builder_name), builder_name, module_name)


def load_circuit_from_source(source: CircuitSource) -> Builder:
    """Load a circuit from a configured CircuitSource (script or module)."""
    if source.module is not None:
        return load_circuit_from_module_path(source.module)
    if source.script is not None:
        return load_circuit_from_script(source.script, source.name)

    msg = f"Circuit source has neither a script nor a module: {source!r}"
    raise ValueError(msg)
