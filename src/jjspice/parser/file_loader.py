# src/jjspice/parser/file_loader.py
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

import cerberus
import yaml

from .exceptions import ParsingError, SchemaValidationError
from .raw_data import CircuitDescription, ComponentTuple

logger = logging.getLogger(__name__)

ID_REGEX = r"^[a-zA-Z_][a-zA-Z0-9_]*$"


class CircuitFileValidator(cerberus.Validator):
    """Cerberus validator with the rules circuit files need beyond the built-in ones."""
    def __init__(self, *args, **kwargs):
        super(CircuitFileValidator, self).__init__(*args, **kwargs)
        self.rules['unique_component_names'] = {'schema': {'type': 'boolean'}}

    def _validate_unique_component_names(self, constraint: bool, field: str, value: List[Any]):
        """
        Validates that no two component entries share a name.
        The rule's arguments are validated against this schema:
        {'type': 'boolean'}
        """
        if not constraint or not isinstance(value, list):
            return

        seen = set()
        duplicates = set()
        for entry in value:
            if not isinstance(entry, list) or not entry:
                continue  # Let the item schema report this.
            name = entry[0]
            if name in seen:
                duplicates.add(name)
            seen.add(name)

        if duplicates:
            self._error(field, f"Duplicate component names: {sorted(duplicates, key=str)}")


class CircuitFileLoader:
    """
    Loads and validates a YAML circuit file.

    The file format is::

        circuit_name: single_jj
        components:
          - [P1, 1, 0, 1]
          - [R1, 1, 0, R]
          - [Lj1, 2, 0, Lj]
        definitions:
          R: 50.0
          Lj: "1000 pH"

    Component values and definitions may be numbers or strings. String values in
    'components' are symbol names or expressions resolved later against
    'definitions'; string definitions are parsed as pint quantities.
    """
    _value_rule = {"type": ["string", "number"]}
    _node_rule = {"type": ["string", "integer"]}

    _schema = {
        "circuit_name": {"type": "string", "required": False, "regex": ID_REGEX},
        "components": {
            "type": "list",
            "required": True,
            "minlength": 1,
            "unique_component_names": True,
            "schema": {
                "type": "list",
                "minlength": 4,
                "maxlength": 4,
                "items": [
                    {"type": "string", "empty": False, "regex": ID_REGEX},
                    _node_rule,
                    _node_rule,
                    _value_rule,
                ],
            },
        },
        "definitions": {
            "type": "dict",
            "required": False,
            "keysrules": {"type": "string", "regex": ID_REGEX},
            "valuesrules": {"type": ["string", "number"]},
        },
    }

    def __init__(self):
        self._validator = CircuitFileValidator(self._schema)
        self._validator.allow_unknown = False
        logger.debug("CircuitFileLoader initialized.")

    def load(self, path: Union[str, Path]) -> CircuitDescription:
        """Loads, validates and returns the circuit described in `path`."""
        resolved_path = Path(path).resolve()
        logger.info(f"Loading circuit file: {resolved_path}")

        content = self._load_yaml(resolved_path)
        if not self._validator.validate(content):
            raise SchemaValidationError(self._validator.errors, resolved_path)
        document = self._validator.document

        circuit: List[ComponentTuple] = [
            (name, node1, node2, value) for name, node1, node2, value in document["components"]
        ]
        definitions: Dict[str, Any] = dict(document.get("definitions", {}))

        description = CircuitDescription(
            circuit_name=document.get("circuit_name", resolved_path.stem),
            circuit=circuit,
            circuit_defs=definitions,
            source_path=resolved_path,
        )
        logger.info(
            f"Loaded circuit '{description.circuit_name}' with {len(circuit)} components "
            f"and {len(definitions)} definitions."
        )
        return description

    def _load_yaml(self, source: Path) -> Dict[str, Any]:
        """Loads and performs basic sanity checks on a YAML file."""
        if not source.is_file():
            raise ParsingError(details=f"Circuit file not found at path: {source}", file_path=source)
        try:
            with source.open("r", encoding="utf-8") as f:
                content = yaml.safe_load(f)
        except PermissionError as e:
            raise ParsingError(details=f"Permission denied when trying to read file: {e}", file_path=source) from e
        except yaml.YAMLError as e:
            raise ParsingError(details=f"Invalid YAML syntax: {e}", file_path=source) from e

        if content is None:
            raise ParsingError(details="The YAML file is empty or contains no valid content.", file_path=source)
        if not isinstance(content, dict):
            raise ParsingError(details="The root of the YAML file must be a dictionary (mapping).", file_path=source)
        return content
