"""Compatibility helpers for Streamlit sizing keyword arguments."""
from __future__ import annotations

import inspect
from typing import Any, Callable, Dict

ComponentCallable = Callable[..., Any]

_KWARGS_CACHE: Dict[int, Dict[str, Any]] = {}


def _unwrap_callable(func: ComponentCallable) -> ComponentCallable:
    """Return the underlying callable for decorated functions."""
    wrapped = getattr(func, "__wrapped__", None)
    while wrapped is not None:
        func = wrapped
        wrapped = getattr(func, "__wrapped__", None)
    return func


def stretch_width_kwargs(func: ComponentCallable) -> Dict[str, Any]:
    """Return kwargs that make *func* fill the container width.

    Newer Streamlit releases take ``width="stretch"`` and deprecate
    ``use_container_width``; older ones only know the latter.
    """

    normalized = _unwrap_callable(func)
    cache_key = id(normalized)
    if cache_key in _KWARGS_CACHE:
        return dict(_KWARGS_CACHE[cache_key])

    try:
        parameters = inspect.signature(normalized).parameters
    except (TypeError, ValueError):
        parameters = {}

    width = parameters.get("width")
    if width is not None and isinstance(width.default, str):
        result: Dict[str, Any] = {"width": "stretch"}
    elif "use_container_width" in parameters:
        result = {"use_container_width": True}
    else:
        result = {}

    _KWARGS_CACHE[cache_key] = result
    return dict(result)


__all__ = ["stretch_width_kwargs"]
