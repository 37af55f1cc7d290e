"""
Errors raised by the service container.

Every failure is synchronous and reported at the call that triggered it.
"""

from __future__ import annotations


class ContainerError(Exception):
    """Base class for all container errors."""


class InvalidInputError(ContainerError, ValueError):
    """Raised for an empty required value or an unknown/wrong-kind type.

    ``contract`` and ``alias`` are set when the error concerns a registration
    key, ``name`` holds the offending value itself.
    """

    def __init__(
        self,
        message: str,
        *,
        name: str | None = None,
        contract: str | None = None,
        alias: str | None = None,
    ):
        self.name = name
        self.contract = contract
        self.alias = alias
        self.message = message
        super().__init__(message)


class AlreadyExistsError(ContainerError):
    """Raised when a registration key or argument name is taken."""

    def __init__(
        self,
        message: str,
        *,
        name: str | None = None,
        contract: str | None = None,
        alias: str | None = None,
    ):
        self.name = name
        self.contract = contract
        self.alias = alias
        self.message = message
        super().__init__(message)


class NotFoundError(ContainerError, LookupError):
    """Raised when a registration key or argument name is missing."""

    def __init__(
        self,
        message: str,
        *,
        name: str | None = None,
        contract: str | None = None,
        alias: str | None = None,
    ):
        self.name = name
        self.contract = contract
        self.alias = alias
        self.message = message
        super().__init__(message)


class BuildError(ContainerError, RuntimeError):
    """
    Raised when lazy construction of a service fails.

    The original exception is kept as ``__cause__``.

    Args:
        class_name: Implementation class being built
        argument: Argument whose producer failed, or None when the
            constructor itself failed
        message: Optional override for the error message
    """

    def __init__(
        self,
        class_name: str,
        argument: str | None = None,
        message: str | None = None,
    ):
        self.class_name = class_name
        self.argument = argument
        if message is None:
            if argument is not None:
                message = (
                    f"argument '{argument}' building for object of class "
                    f"'{class_name}' failed"
                )
            else:
                message = f"object of class '{class_name}' building failed"
        self.message = message
        super().__init__(message)


def describe_alias(alias: str) -> str:
    return alias if alias else "empty"
