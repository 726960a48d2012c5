"""Host side of the output contract."""

import logging
import queue
from typing import Iterable, Iterator, Protocol

from hipchat_output import Message, PipelinePack

logger = logging.getLogger(__name__)

_CLOSED = object()


class OutputRunner(Protocol):
    """What an output needs from the host that drives it."""

    def in_chan(self) -> Iterator[PipelinePack]:
        """Yield packs until the host closes the channel."""
        ...

    def log_error(self, err: Exception) -> None:
        ...


class _CountingRunner:
    """Error sink and recycle bookkeeping shared by the runners below."""

    def __init__(self, name: str):
        self.name = name
        self.errors = 0
        self.recycled = 0
        self._log = logging.getLogger(f"{__name__}.{name}")

    def log_error(self, err: Exception) -> None:
        self.errors += 1
        self._log.error("%s: %s", type(err).__name__, err)

    def _pack(self, message: Message) -> PipelinePack:
        return PipelinePack(message=message, on_recycle=self._on_recycle)

    def _on_recycle(self, pack: PipelinePack) -> None:
        self.recycled += 1


class QueueRunner(_CountingRunner):
    """In-process runner backed by a queue.Queue."""

    def __init__(self, name: str = "HipchatOutput", maxsize: int = 0):
        super().__init__(name)
        self._queue: queue.Queue = queue.Queue(maxsize=maxsize)

    def inject(self, message: Message) -> PipelinePack:
        """Enqueue a message; blocks while a bounded queue is full."""
        pack = self._pack(message)
        self._queue.put(pack)
        return pack

    def close(self) -> None:
        """Close the channel; packs already queued are still delivered."""
        self._queue.put(_CLOSED)

    def in_chan(self) -> Iterator[PipelinePack]:
        while True:
            pack = self._queue.get()
            if pack is _CLOSED:
                logger.debug("Inbound channel for %s closed", self.name)
                return
            yield pack


class StreamRunner(_CountingRunner):
    """
    Runner that pulls messages lazily from an iterable.

    The next message is only requested once the previous pack has been
    handed back, so an endless source (a pipe, a followed log file) is
    consumed one message at a time.
    """

    def __init__(self, messages: Iterable[Message], name: str = "HipchatOutput"):
        super().__init__(name)
        self._messages = messages

    def in_chan(self) -> Iterator[PipelinePack]:
        for message in self._messages:
            yield self._pack(message)
        logger.debug("Inbound stream for %s exhausted", self.name)
