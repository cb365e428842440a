from rxplay.completion import Completion
from rxplay.demand import Demand, DemandState
from rxplay.errors import FutureTimeoutError, InvalidDemandError, RxPlayError
from rxplay.future import Future, Promise
from rxplay.publisher import AnyPublisher, Publisher, publisher_of
from rxplay.sources import Empty, Fail, Just, SequencePublisher
from rxplay.streams import AsyncValues
from rxplay.subjects import CurrentValueSubject, PassthroughSubject, Published, Subject
from rxplay.subscriber import DemandSubscriber, Sink, Subscriber
from rxplay.subscription import Cancellable, Subscription

__all__ = [
    "AnyPublisher",
    "AsyncValues",
    "Cancellable",
    "Completion",
    "CurrentValueSubject",
    "Demand",
    "DemandState",
    "DemandSubscriber",
    "Empty",
    "Fail",
    "Future",
    "FutureTimeoutError",
    "InvalidDemandError",
    "Just",
    "PassthroughSubject",
    "Promise",
    "Published",
    "Publisher",
    "RxPlayError",
    "SequencePublisher",
    "Sink",
    "Subject",
    "Subscriber",
    "Subscription",
    "publisher_of",
]
__version__ = "0.1.0"
