"""
Type-existence oracles.

The container asks an oracle whether a contract names an abstract type and
whether a class name names an instantiable type implementing it. Two oracles
ship with the package:

- ImportTypeOracle resolves dotted names through importlib
- TypeRegistry only knows the classes the host adds to it explicitly
"""

from __future__ import annotations

import importlib
import inspect
import typing
from abc import ABC, abstractmethod

from .errors import InvalidInputError
from .instruction import qualified_name

_PROTOCOL_BASES = (object, typing.Protocol, typing.Generic)


def is_protocol(cls: type) -> bool:
    return inspect.isclass(cls) and bool(getattr(cls, "_is_protocol", False))


def protocol_members(proto: type) -> set[str]:
    """Public attributes declared on a Protocol and its protocol bases."""
    members: set[str] = set()
    for base in proto.__mro__:
        if base in _PROTOCOL_BASES or not is_protocol(base):
            continue
        members.update(attr for attr in vars(base) if not attr.startswith("_"))
    return members


class TypeOracle(ABC):
    """Answers type-existence questions for the container."""

    @abstractmethod
    def lookup(self, name: str) -> type | None:
        """Return the class known under ``name`` or None."""

    def resolve(self, identifier: type | str) -> type | None:
        if inspect.isclass(identifier):
            return identifier
        if isinstance(identifier, str) and identifier:
            found = self.lookup(identifier)
            return found if inspect.isclass(found) else None
        return None

    def is_contract(self, cls: type) -> bool:
        """Classes with abstract members and Protocols."""
        return inspect.isabstract(cls) or is_protocol(cls)

    def is_instantiable(self, cls: type) -> bool:
        return not inspect.isabstract(cls) and not is_protocol(cls)

    def implements(self, cls: type, contract: type) -> bool:
        if is_protocol(contract):
            return all(hasattr(cls, attr) for attr in protocol_members(contract))
        return issubclass(cls, contract)


class ImportTypeOracle(TypeOracle):
    """Resolve ``package.module.Name`` or ``package.module:Name`` via import.

    Missing modules and attributes resolve to None; a module that raises while
    importing is reported as InvalidInputError.
    """

    def lookup(self, name: str) -> type | None:
        if ":" in name:
            module_name, _, attr_path = name.partition(":")
            return self._load(module_name, attr_path.split("."))

        parts = name.split(".")
        # Longest importable module prefix wins; the rest is an attribute path
        for split in range(len(parts) - 1, 0, -1):
            found = self._load(".".join(parts[:split]), parts[split:])
            if found is not None:
                return found
        return None

    @staticmethod
    def _load(module_name: str, attr_path: list[str]) -> type | None:
        if not module_name or not all(attr_path):
            return None
        try:
            obj = importlib.import_module(module_name)
        except ImportError:
            return None
        except Exception as exc:
            raise InvalidInputError(
                f"module {module_name} failed to import: {exc}", name=module_name
            ) from exc
        for attr in attr_path:
            try:
                obj = getattr(obj, attr, None)
            except Exception as exc:
                raise InvalidInputError(
                    f"attribute {attr} of {module_name} failed to load: {exc}",
                    name=module_name,
                ) from exc
            if obj is None:
                return None
        return obj


class TypeRegistry(TypeOracle):
    """Explicit name -> class mapping populated by the host.

    Usage:
        types = TypeRegistry()
        types.add(Logger)
        types.add(FileLogger, name="FileLogger")
        container = Container(type_oracle=types)
    """

    def __init__(self) -> None:
        self._types: dict[str, type] = {}

    def add(self, cls: type, name: str | None = None) -> type:
        """Make ``cls`` known under its qualified name and, optionally, ``name``.

        Returns the class so this can be used as a decorator.
        """
        if not inspect.isclass(cls):
            raise TypeError(f"{cls!r} is not a class")
        self._types[qualified_name(cls)] = cls
        if name:
            self._types[name] = cls
        return cls

    def lookup(self, name: str) -> type | None:
        return self._types.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._types
