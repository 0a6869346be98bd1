"""Concrete implementations for the conversation ledger."""

from abc import ABC, abstractmethod
from typing import List, Optional

from .models import Turn


class Ledger(ABC):
    """Interface for the ordered record of conversation turns."""

    @abstractmethod
    def append(self, turn: Turn) -> None:
        """Adds a turn at the end of the conversation."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Removes every turn. The only way a ledger shrinks."""
        pass

    @abstractmethod
    def all(self) -> List[Turn]:
        """Returns the turns in the order they were appended."""
        pass

    def get(self, turn_id: int) -> Optional[Turn]:
        return next((turn for turn in self.all() if turn.id == turn_id), None)

    def __len__(self) -> int:
        return len(self.all())


class InMemory(Ledger):
    """Keeps the turns of the active session in a list."""

    def __init__(self):
        self._turns: List[Turn] = []

    def append(self, turn: Turn) -> None:
        self._turns.append(turn)

    def clear(self) -> None:
        self._turns.clear()

    def all(self) -> List[Turn]:
        return list(self._turns)
