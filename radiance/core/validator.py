"""Definition document validation.

Checks raw definition documents against the JSON schemas in ``schema.py``
before they are turned into model dataclasses.
"""
import jsonschema
from .errors import ConfigurationError
from .schema import SCHEMAS


def validate_schema(kind: str, payload, source: str = "<memory>"):
    """Validate payload against the schema registered for ``kind``.

    Raises ConfigurationError naming the source file and the failing path.
    """
    schema = SCHEMAS.get(kind)
    if schema is None:
        raise ConfigurationError(f"{source}: unknown definition kind '{kind}'")
    try:
        jsonschema.validate(payload, schema)
    except jsonschema.ValidationError as e:
        where = "/".join(str(p) for p in e.absolute_path) or "<root>"
        raise ConfigurationError(f"{source}: {kind} definition invalid at {where}: {e.message}") from e
    return True
