"""Log sink protocol used by the processor."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class LogSink(Protocol):
    """Anything that accepts information, warning and error messages.

    A ``logging.Logger`` satisfies this protocol, so callers can pass one
    directly. Tests usually pass a small recording object instead::

        class Recorder:
            def __init__(self):
                self.messages = []

            def info(self, msg): self.messages.append(("info", msg))
            def warning(self, msg): self.messages.append(("warning", msg))
            def error(self, msg): self.messages.append(("error", msg))
    """

    def info(self, msg: str) -> None: ...

    def warning(self, msg: str) -> None: ...

    def error(self, msg: str) -> None: ...
