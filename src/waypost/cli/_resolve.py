"""Registry import resolution — ``"module:attribute"`` strings to ``Routes``."""

import importlib

from waypost.routing.registry import Routes


def resolve_routes(import_string: str) -> Routes:
    """Resolve an import string to a ``Routes`` instance.

    When the attribute portion is omitted it defaults to ``"routes"``
    (``"myapp"`` resolves to ``myapp.routes``). A callable that is not a
    ``Routes`` is treated as a factory and called without arguments.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not a ``Routes`` registry.
    """
    module_path, _, attr_name = import_string.partition(":")
    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name or "routes")

    if callable(obj) and not isinstance(obj, Routes):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, Routes):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a waypost.Routes instance"
        raise TypeError(msg)
    return obj
