"""
Action: the conventional dispatch payload.

Actions are immutable data carriers. Stores react to them;
they do not contain business logic.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class Action:
    """A named intent plus optional data. The dispatcher accepts any payload; stores use this one."""

    type: str
    payload: Any = None
    timestamp: datetime = field(default_factory=datetime.now)

    def __post_init__(self) -> None:
        if not isinstance(self.type, str) or not self.type:
            raise ValueError("Action.type must be a non-empty string")
