"""
Consuming a publisher with ``async for``.

This example demonstrates:
- ``values()`` bridging a subject into an anyio task
- Values sent before the task starts are buffered, not lost
- A bounded buffer keeping the producer within the consumer's pace

Usage:
    python examples/07_async_values.py
"""

import logging

import anyio

from rxplay import Completion, CurrentValueSubject, PassthroughSubject
from rxplay.playground import configure_logging, example


async def consume(values, label="Element"):
    async for element in values:
        print(f"{label}: {element}")
    print("Completed.")


async def async_await():
    subject = CurrentValueSubject(0)
    values = subject.values()

    async with anyio.create_task_group() as task_group:
        task_group.start_soon(consume, values)

        subject.send(1)
        subject.send(2)
        subject.send(3)

        subject.send_completion(Completion.finished)


async def bounded_buffer():
    subject = PassthroughSubject()

    async with subject.values(max_buffer_size=2) as values:
        for n in range(1, 6):
            # only two values fit; the rest are dropped by the subject
            subject.send(n)
        subject.send_completion()
        await consume(values, label="Buffered")


if __name__ == "__main__":
    configure_logging(logging.WARNING)

    example("async/await", lambda: anyio.run(async_await))
    example("bounded values()", lambda: anyio.run(bounded_buffer))
