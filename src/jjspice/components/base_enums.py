# src/jjspice/components/base_enums.py
from enum import Enum
from typing import Optional, Tuple


class ComponentType(Enum):
    """
    The closed set of circuit component types. Each member's value is a tuple of
    (type tag, name prefix). The type of a component is read from its name prefix.
    """
    PORT = ("P", "P")
    RESISTOR = ("R", "R")
    CAPACITOR = ("C", "C")
    INDUCTOR = ("L", "L")
    JOSEPHSON_INDUCTOR = ("Lj", "Lj")
    NONLINEAR_INDUCTOR = ("NL", "NL")
    MUTUAL_INDUCTANCE = ("K", "K")
    CURRENT_SOURCE = ("I", "I")
    VOLTAGE_SOURCE = ("V", "V")

    @property
    def tag(self) -> str:
        return self.value[0]

    @property
    def prefix(self) -> str:
        return self.value[1]

    @property
    def is_inductor(self) -> bool:
        """True for the types a mutual inductance is allowed to couple."""
        return self in (ComponentType.INDUCTOR, ComponentType.JOSEPHSON_INDUCTOR)

    @classmethod
    def from_name(cls, name: str) -> Optional["ComponentType"]:
        """Returns the type whose prefix matches `name`, longest prefix first."""
        for member in _PREFIX_ORDER:
            if name.startswith(member.prefix):
                return member
        return None

    def __str__(self):
        return self.tag


# 'Lj' must be tried before 'L', and 'NL' is distinct from 'L'.
_PREFIX_ORDER: Tuple[ComponentType, ...] = tuple(
    sorted(ComponentType, key=lambda member: len(member.prefix), reverse=True)
)
