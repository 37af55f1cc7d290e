import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from sample_services import FileLogger, Logger
from servicebox import Container, ContainerSettings, NotFoundError, TypeRegistry


@pytest.fixture
def shared_container():
    return Container(type_oracle=TypeRegistry(), settings=ContainerSettings())


def test_concurrent_get_builds_once(shared_container):
    calls = []
    lock = threading.Lock()

    def slow_path():
        with lock:
            calls.append(1)
        time.sleep(0.05)
        return "/tmp/log"

    shared_container.register(Logger, FileLogger).add_argument("path", slow_path)

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda _: shared_container.get(Logger), range(16)))

    assert len(calls) == 1
    assert all(result is results[0] for result in results)


def test_unregister_during_build(shared_container):
    started = threading.Event()
    release = threading.Event()

    def blocking_path():
        started.set()
        release.wait(timeout=5)
        return "/tmp/log"

    shared_container.register(Logger, FileLogger).add_argument("path", blocking_path)

    with ThreadPoolExecutor(max_workers=1) as pool:
        future = pool.submit(shared_container.get, Logger)
        assert started.wait(timeout=5)
        shared_container.unregister(Logger)
        release.set()
        with pytest.raises(NotFoundError):
            future.result(timeout=5)

    assert not shared_container.is_built(Logger)


def test_unregistered_while_building_names_key(shared_container):
    started = threading.Event()
    release = threading.Event()

    def blocking_level():
        started.set()
        release.wait(timeout=5)
        return "DEBUG"

    shared_container.register(Logger, FileLogger, "debug").add_argument(
        "level", blocking_level
    )

    with ThreadPoolExecutor(max_workers=1) as pool:
        future = pool.submit(shared_container.get, Logger, "debug")
        assert started.wait(timeout=5)
        shared_container.unregister(Logger, "debug")
        release.set()
        with pytest.raises(NotFoundError) as excinfo:
            future.result(timeout=5)

    assert excinfo.value.contract == "sample_services.Logger"
    assert excinfo.value.alias == "debug"
