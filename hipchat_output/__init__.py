"""Base types for the HipChat output plugin."""

import time
import uuid
from dataclasses import dataclass, field
from typing import Any, Callable, Optional


@dataclass
class Message:
    """A pipeline message as delivered by the host."""
    payload: str = ""
    severity: int = 7
    type: str = ""
    logger: str = ""
    hostname: str = ""
    pid: int = 0
    env_version: str = ""
    uuid: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: int = field(default_factory=time.time_ns)
    fields: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "uuid": self.uuid,
            "timestamp": self.timestamp,
            "type": self.type,
            "logger": self.logger,
            "severity": self.severity,
            "payload": self.payload,
            "env_version": self.env_version,
            "pid": self.pid,
            "hostname": self.hostname,
            "fields": self.fields,
        }


@dataclass
class PipelinePack:
    """Host wrapper around a message; recycle() hands it back to the host."""
    message: Message
    on_recycle: Optional[Callable[["PipelinePack"], None]] = None
    recycled: bool = False

    def recycle(self) -> None:
        if self.recycled:
            return
        self.recycled = True
        if self.on_recycle is not None:
            self.on_recycle(self)


@dataclass
class OutboundRequest:
    """Represents the form POST sent to the HipChat API."""
    url: str
    form: dict[str, str]
