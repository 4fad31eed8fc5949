from collections.abc import Iterable
from itertools import chain
from queue import Queue
from threading import Lock
from typing import Any


class Bus:
    """Distribute events to the queues subscribed to their types.

    Everything stays in process, so events may carry values that
    cannot be serialized, such as generators and exceptions.
    """

    def __init__(self):
        self.__lock = Lock()
        self.__subscriptions: dict[type, set[Queue[Any]]] = {}

    def subscribe[T](self, types: Iterable[type[T]]) -> Queue[T]:
        queue = Queue[T]()
        with self.__lock:
            for type in types:
                self.__subscriptions.setdefault(type, set()).add(queue)
        return queue

    def unsubscribe(self, queue: Queue) -> None:
        """Unsubscribe a queue from all event types."""
        with self.__lock:
            for type, subscriptions in list(self.__subscriptions.items()):
                subscriptions.discard(queue)
                if not subscriptions:
                    del self.__subscriptions[type]
        queue.shutdown()

    def subscribed(self) -> bool:
        return bool(self.__subscriptions)

    def publish(self, event: Any):
        """Publish an event to every queue subscribed to one of its types."""
        with self.__lock:
            subscribers = {
                subscription
                for type, subscriptions in self.__subscriptions.items()
                for subscription in subscriptions
                if isinstance(event, type)
            }
        for subscriber in subscribers:
            subscriber.put(event)

    def shutdown(self):
        with self.__lock:
            subscribers = set(chain.from_iterable(self.__subscriptions.values()))
            self.__subscriptions.clear()
        for subscriber in subscribers:
            subscriber.shutdown()
