import logging
from typing import Any, List, Optional

import pytest

from rxplay import Completion, Publisher

_log = logging.getLogger(__name__)
log_fmt = r"%(asctime)-15s %(levelname)s %(name)s %(funcName)s:%(lineno)d %(message)s"
datefmt = "%Y-%m-%d %H:%M:%S"
logging.basicConfig(format=log_fmt, level=logging.DEBUG, datefmt=datefmt)


@pytest.fixture
def anyio_backend():
    """Exclude trio from tests"""
    return "asyncio"


class Recorder:
    """Sink-backed subscriber that remembers everything it saw."""

    def __init__(self) -> None:
        self.values: List[Any] = []
        self.completions: List[Completion] = []
        self.cancellable = None

    def attach(self, publisher: Publisher) -> "Recorder":
        self.cancellable = publisher.sink(
            receive_value=self.values.append,
            receive_completion=self.completions.append,
        )
        return self

    @property
    def completion(self) -> Optional[Completion]:
        assert len(self.completions) <= 1, "more than one terminal signal"
        return self.completions[0] if self.completions else None


@pytest.fixture
def record():
    """Attach a fresh ``Recorder`` to a publisher: ``record(publisher).values``."""

    def attach(publisher: Publisher) -> Recorder:
        return Recorder().attach(publisher)

    return attach
