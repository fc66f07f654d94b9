# src/jjspice/parameters/resolver.py
"""
Resolves symbolic component values to numbers.

Component values may be plain numbers, `sympy` expressions, `pint` quantities, or
strings naming a symbol or holding an expression ("Lj", "2*Cj"). Definitions map
symbol names (or `sympy.Symbol` objects) to numbers, `pint` quantities, or unit
strings such as "1000 pH". Quantities are converted to SI base-unit magnitudes,
which is the unit convention of the netlist engine.

A symbol that appears verbatim in the definitions table is replaced by its
definition without any arithmetic, so numeric values reach the netlist exactly
as the caller wrote them.
"""
import logging
import numbers
import re
from tokenize import TokenError
from typing import Any, Dict, List, Mapping, Optional

import numpy as np
import pint
import sympy

from ..components.base_enums import ComponentType
from ..units import (
    ureg, Quantity,
    CAPACITANCE_DIMENSIONALITY, INDUCTANCE_DIMENSIONALITY, RESISTANCE_DIMENSIONALITY,
    CURRENT_DIMENSIONALITY, VOLTAGE_DIMENSIONALITY, DIMENSIONLESS,
)
from .exceptions import ValueResolutionError, ValueDimensionError

logger = logging.getLogger(__name__)

_IDENTIFIER_REGEX = re.compile(r'\b[a-zA-Z_][a-zA-Z0-9_]*\b')

_EXPECTED_DIMENSIONS = {
    ComponentType.RESISTOR: RESISTANCE_DIMENSIONALITY,
    ComponentType.CAPACITOR: CAPACITANCE_DIMENSIONALITY,
    ComponentType.INDUCTOR: INDUCTANCE_DIMENSIONALITY,
    ComponentType.JOSEPHSON_INDUCTOR: INDUCTANCE_DIMENSIONALITY,
    ComponentType.NONLINEAR_INDUCTOR: INDUCTANCE_DIMENSIONALITY,
    ComponentType.MUTUAL_INDUCTANCE: DIMENSIONLESS,
    ComponentType.CURRENT_SOURCE: CURRENT_DIMENSIONALITY,
    ComponentType.VOLTAGE_SOURCE: VOLTAGE_DIMENSIONALITY,
    ComponentType.PORT: DIMENSIONLESS,
}


class ValueResolver:
    """
    Substitutes a table of symbol definitions into component values.

    The resolver holds only the definitions, so one instance can resolve any
    number of value vectors.
    """
    _PARSE_GLOBALS = {
        "pi": sympy.pi,
        "sqrt": sympy.sqrt,
        "exp": sympy.exp,
        "log": sympy.log,
        "sin": sympy.sin,
        "cos": sympy.cos,
    }

    def __init__(self, circuit_defs: Optional[Mapping[Any, Any]] = None):
        self._definitions: Dict[str, Any] = {}
        self._dimensions: Dict[str, Any] = {}
        pending: Dict[str, Any] = {}
        named_defs = {
            (key.name if isinstance(key, sympy.Symbol) else str(key)): raw
            for key, raw in (circuit_defs or {}).items()
        }

        for name, raw in named_defs.items():
            # Strings naming other definitions are expressions, never unit strings.
            if isinstance(raw, str) and set(_IDENTIFIER_REGEX.findall(raw)) & named_defs.keys():
                pending[name] = raw
                continue
            value = self._definition_to_number(name, raw)
            if value is None:
                pending[name] = raw
            else:
                self._definitions[name] = value

        self._substitutions = {sympy.Symbol(name): value for name, value in self._definitions.items()}

        # Definitions written in terms of other definitions, resolved in the order given.
        for name, raw in pending.items():
            value = self._evaluate_expression(raw, user_input=str(raw))
            self._definitions[name] = value
            self._substitutions[sympy.Symbol(name)] = value

        logger.debug("ValueResolver initialized with %d definitions.", len(self._definitions))

    @property
    def definitions(self) -> Dict[str, Any]:
        return dict(self._definitions)

    def resolve(self, value: Any, component_name: Optional[str] = None) -> Any:
        """Returns the numeric value of `value`."""
        if isinstance(value, Quantity):
            return self._quantity_magnitude(value)
        if isinstance(value, np.generic):
            return value.item()
        if isinstance(value, numbers.Number) and not isinstance(value, sympy.Basic):
            return value
        if isinstance(value, sympy.Symbol) and value.name in self._definitions:
            return self._definitions[value.name]
        if isinstance(value, str):
            text = value.strip()
            if text in self._definitions:
                return self._definitions[text]
            try:
                return float(text)
            except ValueError:
                pass
        return self._evaluate_expression(value, user_input=str(value), component_name=component_name)

    def resolve_vector(self, values: List[Any]) -> List[Any]:
        """Resolves every entry of a value vector, preserving order."""
        return [self.resolve(value) for value in values]

    def value_dimension(self, value: Any):
        """The pint dimensionality of `value` when it was given with units, else None."""
        if isinstance(value, Quantity):
            return value.dimensionality
        if isinstance(value, sympy.Symbol):
            return self._dimensions.get(value.name)
        if isinstance(value, str):
            return self._dimensions.get(value.strip())
        return None

    def _definition_to_number(self, name: str, raw: Any) -> Any:
        """Converts a definition to a number, or returns None if it refers to other symbols."""
        if isinstance(raw, Quantity):
            self._dimensions[name] = raw.dimensionality
            return self._quantity_magnitude(raw)
        if isinstance(raw, np.generic):
            return raw.item()
        if isinstance(raw, numbers.Number) and not isinstance(raw, sympy.Basic):
            return raw
        if isinstance(raw, sympy.Basic):
            return _sympy_to_number(raw) if raw.is_number else None
        if isinstance(raw, str):
            try:
                return float(raw)
            except ValueError:
                pass
            try:
                qty = ureg.Quantity(raw)
            except (pint.errors.PintError, AttributeError, TypeError, ValueError, SyntaxError):
                return None
            self._dimensions[name] = qty.dimensionality
            return self._quantity_magnitude(qty)
        raise ValueResolutionError(
            user_input=repr(raw),
            details=f"Definition of '{name}' has unsupported type {type(raw).__name__}."
        )

    def _evaluate_expression(self, value: Any, user_input: str, component_name: Optional[str] = None) -> Any:
        try:
            expr = self._to_sympy(value)
        except (sympy.SympifyError, SyntaxError, TypeError, TokenError) as e:
            raise ValueResolutionError(
                user_input=user_input, details=f"Not a valid expression: {e}", component_name=component_name
            ) from e

        substituted = expr.subs(self._substitutions)
        if not substituted.is_number:
            free = sorted(str(symbol) for symbol in substituted.free_symbols)
            raise ValueResolutionError(
                user_input=user_input,
                details="The value still contains symbols after substituting all definitions.",
                component_name=component_name,
                unresolved_symbols=free,
            )
        return _sympy_to_number(substituted)

    def _to_sympy(self, value: Any) -> sympy.Expr:
        if isinstance(value, sympy.Basic):
            return value
        if isinstance(value, str):
            local_dict = {
                name: sympy.Symbol(name)
                for name in _IDENTIFIER_REGEX.findall(value)
                if name not in self._PARSE_GLOBALS
            }
            return sympy.parse_expr(value, local_dict=local_dict)
        return sympy.sympify(value)

    @staticmethod
    def _quantity_magnitude(qty: Quantity) -> Any:
        magnitude = qty.to_base_units().magnitude
        if isinstance(magnitude, np.generic):
            return magnitude.item()
        return magnitude


def _sympy_to_number(expr: sympy.Basic) -> Any:
    """Converts a numeric sympy expression to int, float or complex."""
    if expr.is_Integer:
        return int(expr)
    value = complex(expr)
    if value.imag == 0:
        return value.real
    return value


def resolve_component_values(parsed, circuit_defs: Optional[Mapping[Any, Any]] = None) -> List[Any]:
    """
    Resolves the value vector of a parsed circuit.

    Values given with units (pint quantities, or symbols defined as quantities) are
    checked against the dimension their component type requires before conversion.

    Raises:
        ValueResolutionError: If a value cannot be reduced to a number.
        ValueDimensionError: If a value with units has the wrong dimension.
    """
    resolver = ValueResolver(circuit_defs)
    values = []
    for name, component_type, raw in zip(parsed.name_vector, parsed.type_vector, parsed.value_vector):
        dimension = resolver.value_dimension(raw)
        expected = _EXPECTED_DIMENSIONS.get(component_type)
        if dimension is not None and expected is not None and dimension != expected:
            raise ValueDimensionError(
                component_name=name,
                user_input=str(raw),
                expected_dimension=str(expected),
                actual_dimension=str(dimension),
            )
        values.append(resolver.resolve(raw, component_name=name))
    logger.debug("Resolved %d component values.", len(values))
    return values
