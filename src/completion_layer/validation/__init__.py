"""
Validation of JSON completions.

- json_repair.py: fence stripping, trailing-comma removal, JSON parse
- schema.py: pydantic / JSON Schema validation
"""

from .exceptions import (
    ValidationError,
    InvalidJSONError,
    SchemaValidationError,
)
from .json_repair import JsonRepairParser, clean_json
from .schema import JsonSchema, SchemaValidator
from .pipeline import JsonRepairValidator

__all__ = [
    # Validator
    "JsonRepairValidator",
    "JsonRepairParser",
    "SchemaValidator",
    "JsonSchema",
    "clean_json",
    # Exceptions (for the orchestrator / callers)
    "ValidationError",
    "InvalidJSONError",
    "SchemaValidationError",
]
