"""
Schema validation for parsed JSON completions.

The caller supplies either a pydantic model class or a JSON Schema dict.
Violations raise SchemaValidationError, never InvalidJSONError, so callers
can tell malformed syntax from malformed shape.
"""

from typing import Any, Type, Union

import structlog
from jsonschema import Draft7Validator
from jsonschema.exceptions import SchemaError
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from completion_layer.llm.exceptions import ConfigurationError
from completion_layer.monitoring.metrics import validation_failures_total
from .exceptions import SchemaValidationError

logger = structlog.get_logger(__name__)


JsonSchema = Union[Type[BaseModel], dict[str, Any]]

MAX_REPORTED_ERRORS = 10


class SchemaValidator:
    """
    Validates parsed JSON against a pydantic model or a JSON Schema.
    
    Attributes:
        schema: The caller-supplied schema
    """
    
    def __init__(self, schema: JsonSchema):
        """
        Args:
            schema: pydantic model class or JSON Schema dict
            
        Raises:
            ConfigurationError: If the schema is neither, or is not a valid JSON Schema
        """
        self.schema = schema
        self._validator: Draft7Validator | None = None
        
        if isinstance(schema, dict):
            try:
                Draft7Validator.check_schema(schema)
            except SchemaError as e:
                raise ConfigurationError(
                    f"Invalid JSON Schema: {e.message}",
                    details={"schema_path": list(e.path)},
                ) from e
            self._validator = Draft7Validator(schema)
        elif not (isinstance(schema, type) and issubclass(schema, BaseModel)):
            raise ConfigurationError(
                "Schema must be a pydantic model class or a JSON Schema dict",
                details={"schema_type": type(schema).__name__},
            )
    
    def validate(self, data: Any, model: str) -> Any:
        """
        Validate ``data`` and return the typed value.
        
        Args:
            data: Parsed JSON value
            model: Model that produced it (for error details)
            
        Returns:
            A model instance for pydantic schemas, ``data`` itself for JSON Schemas
            
        Raises:
            SchemaValidationError: If data doesn't conform to the schema
        """
        if self._validator is not None:
            errors = list(self._validator.iter_errors(data))
            if errors:
                messages = []
                for error in errors[:MAX_REPORTED_ERRORS]:
                    path = ".".join(str(p) for p in error.path) if error.path else "root"
                    messages.append(f"{path}: {error.message}")
                self._fail(model, messages)
            return data
        
        try:
            return self.schema.model_validate(data)
        except PydanticValidationError as e:
            messages = [
                f"{'.'.join(str(p) for p in err['loc']) or 'root'}: {err['msg']}"
                for err in e.errors()[:MAX_REPORTED_ERRORS]
            ]
            self._fail(model, messages, cause=e)
    
    def _fail(self, model: str, messages: list[str], cause: Exception | None = None) -> None:
        validation_failures_total.labels(stage="schema", error_type="schema_violation").inc()
        logger.error(
            "Model output failed schema validation",
            model=model,
            error_count=len(messages),
            errors=messages,
        )
        raise SchemaValidationError(
            f"Schema validation failed for {model} with {len(messages)} error(s)",
            model=model,
            validation_errors=messages,
        ) from cause
