from typing import Optional


class Completion:
    """Terminal signal of a publisher: ``finished`` or ``failure(error)``."""

    __slots__ = ("error",)

    def __init__(self, error: Optional[BaseException] = None) -> None:
        if error is not None and not isinstance(error, BaseException):
            raise TypeError("failure must carry an exception instance")
        self.error = error

    @classmethod
    def failure(cls, error: BaseException) -> "Completion":
        if error is None:
            raise TypeError("failure requires an error")
        return cls(error)

    @property
    def is_finished(self) -> bool:
        return self.error is None

    @property
    def is_failure(self) -> bool:
        return self.error is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Completion):
            return NotImplemented
        return self.error is other.error or self.error == other.error

    def __hash__(self) -> int:
        return hash(self.error) if self.error is not None else 0

    def __str__(self) -> str:
        if self.error is None:
            return "finished"
        return f"failure({self.error})"

    __repr__ = __str__


Completion.finished = Completion()  # type: ignore[attr-defined]
FINISHED = Completion.finished  # type: ignore[attr-defined]
