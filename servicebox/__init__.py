"""
servicebox: a small dependency injection container.

Services are registered per contract and optional alias, configured with
named argument producers, and built lazily as one instance per key.
"""

from servicebox.core import (
    AlreadyExistsError,
    BuildError,
    BuildInstruction,
    Container,
    ContainerError,
    ContainerSettings,
    ImportTypeOracle,
    InvalidInputError,
    NotFoundError,
    TypeOracle,
    TypeRegistry,
)

__version__ = "0.1.0"

__all__ = [
    "AlreadyExistsError",
    "BuildError",
    "BuildInstruction",
    "Container",
    "ContainerError",
    "ContainerSettings",
    "ImportTypeOracle",
    "InvalidInputError",
    "NotFoundError",
    "TypeOracle",
    "TypeRegistry",
]
