from __future__ import annotations

from geometrylabs.app.ui.panels.base import LabPanel
from geometrylabs.model.state import LabKey

_REGISTRY: dict[LabKey, type[LabPanel]] = {}


def register_panel(cls: type[LabPanel]) -> type[LabPanel]:
    """Class decorator to register a panel by its KEY."""
    key = getattr(cls, "KEY", None)
    if key is None:
        raise ValueError(f"{cls.__name__} must define KEY")
    _REGISTRY[key] = cls
    return cls


def create_panel(key: LabKey, store, parent=None) -> LabPanel:
    cls = _REGISTRY.get(key)
    if not cls:
        raise KeyError(f"No panel registered for lab '{key.value}'")
    return cls(store, parent)


def list_keys() -> list[LabKey]:
    return [key for key in LabKey if key in _REGISTRY]
