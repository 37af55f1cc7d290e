"""
Core primitives for servicebox.
"""

from .container import Container, RegistrationKey
from .errors import (
    AlreadyExistsError,
    BuildError,
    ContainerError,
    InvalidInputError,
    NotFoundError,
)
from .instruction import ArgumentProducer, BuildInstruction
from .settings import ContainerSettings
from .types import ImportTypeOracle, TypeOracle, TypeRegistry

__all__ = [
    "AlreadyExistsError",
    "ArgumentProducer",
    "BuildError",
    "BuildInstruction",
    "Container",
    "ContainerError",
    "ContainerSettings",
    "ImportTypeOracle",
    "InvalidInputError",
    "NotFoundError",
    "RegistrationKey",
    "TypeOracle",
    "TypeRegistry",
]
