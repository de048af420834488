"""
JsonRepairValidator: repair, parse, then validate against a schema.
"""

from typing import Any

from .json_repair import JsonRepairParser
from .schema import JsonSchema, SchemaValidator


class JsonRepairValidator:
    """
    Two-stage validation of a JSON completion.

    - Stage 1: repair + parse (raises InvalidJSONError)
    - Stage 2: schema validation (raises SchemaValidationError)
    """
    
    def __init__(self, schema: JsonSchema):
        self.parser = JsonRepairParser()
        self.schema_validator = SchemaValidator(schema)
    
    def validate(self, content: str, model: str) -> Any:
        """Return the validated object for ``content`` produced by ``model``."""
        parsed = self.parser.parse(content, model)
        return self.schema_validator.validate(parsed, model)
