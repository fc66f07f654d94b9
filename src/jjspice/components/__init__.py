# src/jjspice/components/__init__.py
from .base_enums import ComponentType
from .physics import lj_to_ic, ic_to_lj

__all__ = [
    "ComponentType",
    "lj_to_ic",
    "ic_to_lj",
]
