"""Service container.

Maps a contract plus an optional alias to a build instruction and memoizes
the built service, one instance per registration key.
"""

from __future__ import annotations

import inspect
import threading
from typing import Any

from servicebox.logging_config import get_logger

from .errors import (
    AlreadyExistsError,
    BuildError,
    InvalidInputError,
    NotFoundError,
    describe_alias,
)
from .instruction import BuildInstruction, qualified_name
from .settings import ContainerSettings
from .types import ImportTypeOracle, TypeOracle

logger = get_logger(__name__)

RegistrationKey = tuple[str, str]


class Container:
    """Dependency injection container.

    Usage:
        container = Container()
        container.register(Logger, FileLogger).add_argument("path", lambda: "/tmp/log")
        logger = container.get(Logger)
        debug_logger = container.get(Logger, "debug")

    Keys are built from the contract as given: a class becomes its
    "<module>.<qualname>" name and a string is used verbatim. Names are not
    resolved through the type oracle, so "pkg.mod:Logger", "pkg.mod.Logger"
    and a TypeRegistry short name are different slots.
    """

    def __init__(
        self,
        type_oracle: TypeOracle | None = None,
        settings: ContainerSettings | None = None,
    ):
        """Initialize an empty container.

        Args:
            type_oracle: Answers whether contracts and classes exist
                (ImportTypeOracle if not provided)
            settings: Container settings (loaded from the environment if not provided)
        """
        self.settings = settings or ContainerSettings.from_env()
        self.type_oracle = type_oracle or ImportTypeOracle()
        self._registrations: dict[RegistrationKey, BuildInstruction] = {}
        self._built: dict[RegistrationKey, Any] = {}
        self._build_locks: dict[RegistrationKey, threading.RLock] = {}
        # Guards _registrations, _built and _build_locks
        self._lock = threading.RLock()

    @staticmethod
    def build_index(contract: type | str, alias: str = "") -> RegistrationKey:
        """Build the registration key for a contract and alias."""
        return (qualified_name(contract), alias)

    def register(
        self,
        contract: type | str,
        class_name: type | str,
        alias: str = "",
    ) -> BuildInstruction:
        """Register an implementation class for a contract.

        Args:
            contract: Abstract type, or a name the type oracle resolves to one
            class_name: Instantiable class, or a name the type oracle resolves to one
            alias: Distinguishes several services on one contract

        Returns:
            The build instruction, for adding constructor arguments

        Raises:
            InvalidInputError: Contract/class name is empty, unknown or of the wrong kind
            AlreadyExistsError: Service already registered for contract and alias
        """
        key = self._key(contract, alias)
        self._require_value(class_name, "class name")

        contract_type = self.type_oracle.resolve(contract)
        if contract_type is None or not self.type_oracle.is_contract(contract_type):
            raise InvalidInputError(
                f"interface {key[0]} does not exist",
                name=key[0],
                contract=key[0],
                alias=alias,
            )

        implementation = self.type_oracle.resolve(class_name)
        impl_name = qualified_name(class_name)
        if implementation is None or not self.type_oracle.is_instantiable(implementation):
            raise InvalidInputError(
                f"class {impl_name} does not exist",
                name=impl_name,
                contract=key[0],
                alias=alias,
            )
        if self.settings.strict_types and not self.type_oracle.implements(
            implementation, contract_type
        ):
            raise InvalidInputError(
                f"class {impl_name} does not implement interface {key[0]}",
                name=impl_name,
                contract=key[0],
                alias=alias,
            )

        with self._lock:
            if key in self._registrations:
                raise AlreadyExistsError(
                    f"service on {key[0]} interface with "
                    f"{describe_alias(alias)} alias is already registered",
                    name=key[0],
                    contract=key[0],
                    alias=alias,
                )
            instruction = BuildInstruction(implementation)
            self._registrations[key] = instruction

        logger.debug(
            "service_registered",
            contract=key[0],
            alias=alias,
            class_name=instruction.class_name,
        )
        return instruction

    def unregister(self, contract: type | str, alias: str = "") -> None:
        """Remove a registration and its built service, if any.

        Raises:
            InvalidInputError: Contract is empty
            NotFoundError: Service is not registered
        """
        key = self._key(contract, alias)
        with self._lock:
            if key not in self._registrations:
                raise self._not_registered(key)
            del self._registrations[key]
            was_built = key in self._built
            self._built.pop(key, None)
            self._build_locks.pop(key, None)

        logger.debug(
            "service_unregistered", contract=key[0], alias=alias, was_built=was_built
        )

    def get(self, contract: type | str, alias: str = "") -> Any:
        """Get the service registered for a contract and alias.

        The service is built on first access and the same instance is
        returned afterwards.

        Raises:
            InvalidInputError: Contract is empty
            NotFoundError: Service is not registered
            BuildError: An argument producer or the constructor failed
        """
        key = self._key(contract, alias)
        with self._lock:
            instruction = self._registrations.get(key)
            if instruction is None:
                raise self._not_registered(key)
            if key in self._built:
                return self._built[key]
            build_lock = self._build_locks.setdefault(key, threading.RLock())

        with build_lock:
            with self._lock:
                if self._registrations.get(key) is not instruction:
                    raise self._not_registered(key)
                if key in self._built:
                    return self._built[key]

            service = self._build_service(instruction)

            with self._lock:
                if self._registrations.get(key) is not instruction:
                    raise NotFoundError(
                        f"service on {key[0]} interface with "
                        f"{describe_alias(alias)} alias was unregistered while building",
                        name=key[0],
                        contract=key[0],
                        alias=alias,
                    )
                self._built[key] = service

        logger.debug(
            "service_built", contract=key[0], alias=alias, class_name=instruction.class_name
        )
        return service

    def has(self, contract: type | str, alias: str = "") -> bool:
        """Check if a service is registered for a contract and alias."""
        key = self._key(contract, alias)
        with self._lock:
            return key in self._registrations

    def is_built(self, contract: type | str, alias: str = "") -> bool:
        """Check if the service for a contract and alias has been built."""
        key = self._key(contract, alias)
        with self._lock:
            return key in self._built

    def keys(self) -> list[RegistrationKey]:
        """Registered keys in registration order."""
        with self._lock:
            return list(self._registrations)

    def reset(self) -> None:
        """Drop all built services, keeping registrations (useful for testing)."""
        with self._lock:
            dropped = len(self._built)
            self._built.clear()
        logger.debug("container_reset", dropped=dropped)

    def __contains__(self, contract: object) -> bool:
        if isinstance(contract, tuple) and len(contract) == 2:
            return self.has(*contract)
        return self.has(contract)  # type: ignore[arg-type]

    def __len__(self) -> int:
        return len(self._registrations)

    def _build_service(self, instruction: BuildInstruction) -> Any:
        class_name = instruction.class_name
        implementation = instruction.get_implementation_type()

        arguments: dict[str, Any] = {}
        for name in instruction.list_argument_names():
            producer = instruction.get_argument(name)
            try:
                arguments[name] = producer()
            except Exception as exc:
                logger.error(
                    "service_build_failed",
                    class_name=class_name,
                    argument=name,
                    error=str(exc),
                )
                raise BuildError(
                    class_name,
                    argument=name,
                    message=(
                        f"argument {name} building for object of class "
                        f"{class_name} failed with error {exc}"
                    ),
                ) from exc

        try:
            return implementation(**arguments)
        except Exception as exc:
            logger.error("service_build_failed", class_name=class_name, error=str(exc))
            raise BuildError(
                class_name,
                message=f"object of class {class_name} building failed with error {exc}",
            ) from exc

    def _key(self, contract: type | str, alias: str) -> RegistrationKey:
        self._require_value(contract, "interface")
        if not isinstance(alias, str):
            raise InvalidInputError(f"alias {alias!r} is not a string", name="alias")
        return self.build_index(contract, alias)

    @staticmethod
    def _require_value(value: type | str, what: str) -> None:
        if isinstance(value, str):
            if not value:
                raise InvalidInputError(f"{what} parameter is empty", name=what)
        elif not inspect.isclass(value):
            raise InvalidInputError(f"{what} parameter {value!r} is not a class", name=what)

    @staticmethod
    def _not_registered(key: RegistrationKey) -> NotFoundError:
        return NotFoundError(
            f"service on {key[0]} interface with "
            f"{describe_alias(key[1])} alias is not registered",
            name=key[0],
            contract=key[0],
            alias=key[1],
        )
