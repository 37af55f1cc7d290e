"""Contracts and implementations used across the test suite."""

from abc import ABC, abstractmethod
from typing import Protocol


class Logger(ABC):
    @abstractmethod
    def log(self, message: str) -> None: ...


class FileLogger(Logger):
    def __init__(self, path: str = "/dev/null", level: str = "INFO"):
        self.path = path
        self.level = level
        self.lines: list[str] = []

    def log(self, message: str) -> None:
        self.lines.append(message)


class Clock(ABC):
    @abstractmethod
    def now(self) -> float: ...


class FixedClock(Clock):
    def __init__(self, value: float = 0.0):
        self.value = value

    def now(self) -> float:
        return self.value


class Cache(Protocol):
    def fetch(self, key: str) -> object: ...

    def store(self, key: str, value: object) -> None: ...


class DictCache:
    def __init__(self) -> None:
        self.data: dict[str, object] = {}

    def fetch(self, key: str) -> object:
        return self.data.get(key)

    def store(self, key: str, value: object) -> None:
        self.data[key] = value


class ReadOnlyCache:
    def fetch(self, key: str) -> object:
        return None
