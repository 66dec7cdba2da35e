"""Value objects for the container domain.

Exports:
    - Key: Identifier for a producible type
    - ParameterDescriptor: Read-only view of one constructor parameter
    - MISSING: Sentinel for parameters without a declared default
    - key_name: Readable name for a key
"""

from di_engine.domain.value_objects.parameter_descriptor import (
    MISSING,
    Key,
    ParameterDescriptor,
    key_name,
)

__all__ = [
    "Key",
    "MISSING",
    "ParameterDescriptor",
    "key_name",
]
