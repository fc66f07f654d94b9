# src/jjspice/errors.py
import logging
from abc import abstractmethod
from typing import Any, Dict, Protocol
from typing import runtime_checkable

logger = logging.getLogger(__name__)

# --- User-Facing Exception Hierarchy ---

class JJSpiceError(Exception):
    """Base class for all custom, user-facing errors in jjspice."""
    pass


# --- Diagnostic Protocol & Base Exception ---

@runtime_checkable
class Diagnosable(Protocol):
    """
    A protocol for exceptions that can generate their own rich diagnostic report.
    Code that only needs the report can depend on this instead of a concrete type.
    """
    def get_diagnostic_report(self) -> str:
        """Generates a complete, user-friendly, multi-line report string."""
        ...

class DiagnosableError(JJSpiceError, Diagnosable):
    """
    A common, concrete base class for all exceptions raised by jjspice subsystems.

    It inherits from `JJSpiceError`, so a single `except` clause catches every known,
    reportable failure, and it declares `get_diagnostic_report` abstract so every
    subclass has to provide a user-facing report.
    """
    @abstractmethod
    def get_diagnostic_report(self) -> str:
        """
        Abstract method to generate the diagnostic report.
        Subclasses MUST implement this.
        """
        raise NotImplementedError


# --- Stateless Formatting Utility ---

def format_diagnostic_report(
    error_type: str,
    details: str,
    suggestion: str,
    context: Dict[str, Any]
) -> str:
    """
    A stateless helper to format the final multi-line report string, ensuring a
    consistent look and feel for all user-facing diagnostics.

    Args:
        error_type: The high-level category of the error (e.g., "Junction Spread").
        details: A detailed, potentially multi-line description of the problem.
        suggestion: Actionable advice for the user to resolve the issue.
        context: A dictionary of contextual information (component name, node pair,
                 source file, user input).

    Returns:
        A formatted, user-friendly diagnostic report string ready for display.
    """
    lines = [
        "\n",
        "================ jjspice: Actionable Diagnostic Report ================",
        f"Error Type:     {error_type}",
    ]
    if component := context.get('component'):
        lines.append(f"Component:      {component}")
    if node_pair := context.get('node_pair'):
        lines.append(f"Node Pair:      {node_pair}")
    if source_file := context.get('source_file'):
        lines.append(f"Source File:    {source_file}")
    if user_input := context.get('user_input'):
        lines.append(f"User Input:     '{user_input}'")

    lines.append("\nDetails:")
    for line in details.splitlines():
        lines.append(f"  {line}")

    if suggestion:
        lines.append("\nSuggestion:")
        for line in suggestion.splitlines():
            lines.append(f"  {line}")

    lines.append("=======================================================================")
    return "\n".join(lines)
