"""Web boundary layer.

Contracts define the camelCase wire format; services hold the relay logic
and never sign or broadcast transactions.
"""

__all__ = [
    "contracts",
    "services",
]
