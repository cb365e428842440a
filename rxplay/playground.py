import logging
from typing import Any, Callable, Optional, Union

LOG_FORMAT = r"%(asctime)-15s %(levelname)s %(name)s %(funcName)s:%(lineno)d %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def example(of: str, action: Optional[Callable[[], Any]] = None):
    """
    Print a banner for the example and run it.

    Works as a call, ``example("filter", body)``, or as a decorator that
    runs the decorated function immediately::

        @example(of="filter")
        def _():
            ...
    """

    def run(body: Callable[[], Any]) -> Callable[[], Any]:
        print(f"\n——— Example of: {of} ———")
        body()
        return body

    if action is not None:
        return run(action)
    return run


def configure_logging(level: Union[int, str] = logging.WARNING) -> None:
    """Send rxplay's debug trail to stderr, in the same format the tests use."""
    logging.basicConfig(format=LOG_FORMAT, level=level, datefmt=DATE_FORMAT)
