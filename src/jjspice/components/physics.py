# src/jjspice/components/physics.py
"""
Conversions between the Josephson inductance of a junction and its critical
current, Lj = phi0 / Ic, with phi0 the reduced flux quantum hbar / (2 e).
"""
from ..constants import PHI0_REDUCED


def lj_to_ic(lj):
    """
    Returns the critical current (A) of a junction with Josephson inductance `lj` (H).

    Works element-wise on numpy arrays and keeps complex inputs complex; callers
    take the real part where they need one.
    """
    return PHI0_REDUCED / lj


def ic_to_lj(ic):
    """Returns the Josephson inductance (H) of a junction with critical current `ic` (A)."""
    return PHI0_REDUCED / ic
