# --- src/jjspice/constants.py ---
import logging

logger = logging.getLogger(__name__)

# --- Physical Constants ---

#: Reduced magnetic flux quantum, hbar / (2 e), in webers.
PHI0_REDUCED: float = 3.29105976e-16

# --- Circuit Conventions ---

#: Name of the ground node in circuit descriptions.
GROUND_NODE: str = "0"

# --- Netlist Unit Scale Factors ---
# Values are stored in SI base units and multiplied by these at emission time.

FEMTO: float = 1e15
PICO: float = 1e12
NANO: float = 1e9
MICRO: float = 1e6

# --- WRSPICE Josephson Junction Model Limits ---

#: Smallest allowed ratio of a junction's critical current to the ensemble mean.
WRSPICE_MIN_IC_RATIO: float = 0.02

#: Largest allowed ratio of a junction's critical current to the ensemble mean.
WRSPICE_MAX_IC_RATIO: float = 50.0

#: Largest capacitance-to-critical-current ratio the jj model accepts (F/A).
WRSPICE_MAX_CJ_OVER_IC: float = 1e-6

#: (reference icrit)*rsub, which sets the junction subgap resistance. The allowed
#: range is 8e-3 to 100e-3 V unless the model's force flag is set.
WRSPICE_VM: float = 99e-1

# --- Netlist Text ---

NETLIST_HEADER: str = "* SPICE Simulation"
JJ_MODEL_NAME: str = "jjk"

logger.debug("Defined core constants: PHI0_REDUCED, unit scale factors, WRSPICE model limits.")
