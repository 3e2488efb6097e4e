"""Import resolution — ``"module:attribute"`` strings to live objects.

Shared by ``reroute check`` and ``reroute routes``.
"""

import importlib
import inspect
from typing import Any

from reroute.registry import ServeMux


def resolve(import_string: str, default_attr: str) -> Any:
    """Resolve ``"module:attribute"`` to an object.

    When the attribute portion is omitted, *default_attr* is used. A
    resolved function or class is called with no arguments (a factory).

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        ValueError: If the module part is empty.
        TypeError: If a factory raised.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = default_attr

    if not module_path:
        msg = f"{import_string!r} has no module part"
        raise ValueError(msg)

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    # ASGI apps are callable too; only plain functions and classes are factories
    if inspect.isfunction(obj) or inspect.isclass(obj):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc
    return obj


def resolve_mux(import_string: str) -> ServeMux:
    """Resolve an import string to a ``ServeMux`` instance.

    Raises ``TypeError`` if the object is something else.
    """
    obj = resolve(import_string, "mux")
    if not isinstance(obj, ServeMux):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a reroute.ServeMux instance"
        raise TypeError(msg)
    return obj
