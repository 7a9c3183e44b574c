"""Progress reports passed to transfer callbacks."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional


class ProgressKind(enum.Enum):
    """What stage of a transfer a progress report describes."""

    WAITING = "Waiting"
    STARTED = "Started"
    PACKET = "Packet"
    NAK = "NAK"
    UNKNOWN = "Unknown"


@dataclass(frozen=True)
class Progress:
    """A single progress report.

    ``packet`` carries the packet number for ``ProgressKind.PACKET`` reports
    and is ``None`` for every other kind.
    """

    kind: ProgressKind
    packet: Optional[int] = None

    def __post_init__(self) -> None:
        if self.kind is ProgressKind.PACKET:
            if self.packet is None:
                raise ValueError("a packet report needs a packet number")
            if not 0 <= self.packet <= 0xFF:
                raise ValueError(f"packet number {self.packet} is not a byte")
        elif self.packet is not None:
            raise ValueError(f"{self.kind.value} reports carry no packet number")

    def __str__(self) -> str:
        if self.kind is ProgressKind.PACKET:
            return f"{self.kind.value}({self.packet})"
        return self.kind.value


def noop(progress: Progress) -> None:
    """Progress callback that ignores every report."""
    return None