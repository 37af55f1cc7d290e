"""
Service building instruction.

Holds the implementation type of one service and the producers of its
constructor arguments.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any

from .errors import AlreadyExistsError, InvalidInputError, NotFoundError

ArgumentProducer = Callable[[], Any]


def qualified_name(obj: type | str) -> str:
    if isinstance(obj, str):
        return obj
    return f"{obj.__module__}.{obj.__qualname__}"


def _require_name(value: str, what: str) -> None:
    if not isinstance(value, str) or not value:
        raise InvalidInputError(f"{what} parameter is empty", name=what)


class BuildInstruction:
    """Recipe for one service: implementation class plus named argument producers.

    Usage:
        instruction = container.register(Logger, FileLogger)
        instruction.add_argument("path", lambda: "/tmp/log")
    """

    def __init__(self, implementation_type: type | str):
        """Create an instruction for an implementation type.

        Args:
            implementation_type: Class object or non-empty importable class name

        Raises:
            InvalidInputError: If the identifier is empty or not a class
        """
        if isinstance(implementation_type, str):
            _require_name(implementation_type, "class name")
        elif not inspect.isclass(implementation_type):
            raise InvalidInputError(
                f"class name {implementation_type!r} is not a class",
                name="class name",
            )
        self._implementation_type = implementation_type
        self._arguments: dict[str, ArgumentProducer] = {}

    def get_implementation_type(self) -> type | str:
        return self._implementation_type

    @property
    def class_name(self) -> str:
        return qualified_name(self._implementation_type)

    def add_argument(self, name: str, producer: ArgumentProducer) -> BuildInstruction:
        """Register a producer for a named constructor argument.

        Args:
            name: Constructor keyword the produced value is passed as
            producer: Zero-argument callable returning the value

        Returns:
            This instruction, so calls can be chained

        Raises:
            InvalidInputError: If name is empty or producer is not callable
            AlreadyExistsError: If name is already registered
        """
        _require_name(name, "argument name")
        if not callable(producer):
            raise InvalidInputError(
                f"producer for argument {name} is not callable", name=name
            )
        if name in self._arguments:
            raise AlreadyExistsError(f"argument {name} is already registered", name=name)
        self._arguments[name] = producer
        return self

    def remove_argument(self, name: str) -> None:
        _require_name(name, "argument name")
        if name not in self._arguments:
            raise NotFoundError(f"argument {name} is not registered", name=name)
        del self._arguments[name]

    def list_argument_names(self) -> list[str]:
        return list(self._arguments)

    def get_argument(self, name: str) -> ArgumentProducer:
        _require_name(name, "argument name")
        if name not in self._arguments:
            raise NotFoundError(f"argument {name} is not registered", name=name)
        return self._arguments[name]

    def __contains__(self, name: object) -> bool:
        return name in self._arguments

    def __len__(self) -> int:
        return len(self._arguments)

    def __repr__(self) -> str:
        args = ", ".join(self._arguments)
        return f"BuildInstruction({self.class_name}, arguments=[{args}])"
