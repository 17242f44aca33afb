"""Import resolution — resolves ``"module:attribute"`` strings.

Shared by ``petrel build``, ``petrel paths`` and ``petrel routes`` to
locate a ``Site`` or ``Dispatcher`` from a user-supplied import string.
"""

import importlib
import os
import sys


def resolve_object[T](import_string: str, expected: type[T], default_attr: str) -> T:
    """Resolve an import string to an instance of *expected*.

    Accepts ``"module:attribute"``; without ``:attribute`` the
    *default_attr* is used (``"mysite"`` -> ``mysite.site``). A callable
    that is not already an instance is treated as a factory and called.
    The current directory is importable, like ``python -m``.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object has the wrong type.
    """
    module_path, _, attr_name = import_string.partition(":")
    attr_name = attr_name or default_attr

    cwd = os.getcwd()
    if cwd not in sys.path:
        sys.path.insert(0, cwd)

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if callable(obj) and not isinstance(obj, expected):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, expected):
        msg = (
            f"{import_string!r} resolved to {type(obj).__name__}, "
            f"not a petrel.{expected.__name__} instance"
        )
        raise TypeError(msg)
    return obj
