# --- src/jjspice/units.py ---
import pint
import logging

logger = logging.getLogger(__name__)
ureg = pint.UnitRegistry()
Quantity = ureg.Quantity
logger.info("Pint Unit Registry initialized.")

# --- Canonical dimensionality objects for explicit checks ---
CAPACITANCE_DIMENSIONALITY = ureg.parse_expression('farad').dimensionality
INDUCTANCE_DIMENSIONALITY = ureg.parse_expression('henry').dimensionality
RESISTANCE_DIMENSIONALITY = ureg.parse_expression('ohm').dimensionality
CURRENT_DIMENSIONALITY = ureg.parse_expression('ampere').dimensionality
VOLTAGE_DIMENSIONALITY = ureg.parse_expression('volt').dimensionality
DIMENSIONLESS = ureg.parse_expression('dimensionless').dimensionality

logger.debug("Defined canonical dimensionalities for capacitance, inductance, resistance, current and voltage.")
