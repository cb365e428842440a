import logging
import math
import threading
from typing import Any, Callable, Optional, Union

import anyio
import anyio.from_thread
import anyio.lowlevel
import anyio.to_thread

from rxplay.completion import Completion
from rxplay.demand import Demand
from rxplay.publisher import Publisher
from rxplay.subscriber import Subscriber
from rxplay.subscription import Subscription

logger = logging.getLogger(__name__)


class AsyncValues(Subscriber):
    """
    Async iterator over the values of a publisher.

    Subscribes on construction and buffers values in an anyio memory object
    stream until the consuming task picks them up. Iteration ends when the
    publisher finishes and raises the error when it fails. With a bounded
    ``max_buffer_size`` the subscription only requests as many values as
    fit in the buffer, topping up as the consumer drains it.

    Must be created inside the event loop. Publishers may emit from any
    thread (a ``Future.after`` timer, a worker thread feeding a subject):
    such deliveries are handed to the event loop thread, and once one has
    happened, calls back into the subscription are made from a worker
    thread so the loop never waits on the emitting thread's lock.
    """

    def __init__(
        self, publisher: Publisher, max_buffer_size: Union[int, float] = math.inf
    ) -> None:
        self._bounded = max_buffer_size != math.inf
        if self._bounded and (not isinstance(max_buffer_size, int) or max_buffer_size < 1):
            raise ValueError(
                f"max_buffer_size must be a positive int or math.inf, got: {max_buffer_size!r}"
            )
        self._max_buffer_size = max_buffer_size
        self._send_stream, self._receive_stream = anyio.create_memory_object_stream(
            max_buffer_size
        )
        self._token = anyio.lowlevel.current_token()
        self._loop_thread = threading.get_ident()
        self._foreign = False
        self._subscription: Optional[Subscription] = None
        self._error: Optional[BaseException] = None
        publisher.subscribe(self)

    def receive_subscription(self, subscription: Subscription) -> None:
        self._subscription = subscription
        if self._bounded:
            subscription.request(Demand.max(self._max_buffer_size))
        else:
            subscription.request(Demand.unlimited())

    def receive(self, value: Any) -> Demand:
        if not self._in_loop(self._push, value):
            logger.debug("consumer gone, cancelling %r", self._subscription)
            self._cancel()
        return Demand.none()

    def receive_completion(self, completion: Completion) -> None:
        self._subscription = None
        if completion.is_failure:
            self._error = completion.error
        self._in_loop(self._close_send)

    def _push(self, value: Any) -> bool:
        try:
            self._send_stream.send_nowait(value)
        except (anyio.BrokenResourceError, anyio.ClosedResourceError):
            return False
        return True

    def _close_send(self) -> bool:
        self._send_stream.close()
        return True

    def _in_loop(self, func: Callable[..., bool], *args: Any) -> bool:
        """Run ``func`` on the event loop thread; False if the loop is gone."""
        if threading.get_ident() == self._loop_thread:
            return func(*args)
        self._foreign = True
        try:
            return anyio.from_thread.run_sync(func, *args, token=self._token)
        except anyio.RunFinishedError:
            logger.debug("event loop finished, dropping %r", func.__name__)
            return False

    async def _call_upstream(self, func: Callable[..., Any], *args: Any) -> None:
        if self._foreign:
            await anyio.to_thread.run_sync(func, *args)
        else:
            func(*args)

    def __aiter__(self) -> "AsyncValues":
        return self

    async def __anext__(self) -> Any:
        try:
            value = await self._receive_stream.receive()
        except (anyio.EndOfStream, anyio.ClosedResourceError):
            if self._error is not None:
                raise self._error from None
            raise StopAsyncIteration
        subscription = self._subscription
        if self._bounded and subscription is not None:
            await self._call_upstream(subscription.request, Demand.max(1))
        return value

    def _cancel(self) -> None:
        subscription, self._subscription = self._subscription, None
        if subscription is not None:
            subscription.cancel()

    async def aclose(self) -> None:
        """Cancel the subscription and drop anything still buffered."""
        await self._call_upstream(self._cancel)
        self._send_stream.close()
        self._receive_stream.close()

    async def __aenter__(self) -> "AsyncValues":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
