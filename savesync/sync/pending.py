# savesync Delete Selection
# Transient user-driven delete request and letter addressing

from dataclasses import dataclass
from string import ascii_lowercase
from typing import Optional, Union


@dataclass(frozen=True)
class NotDeleting:
    """No delete in progress."""


@dataclass(frozen=True)
class AwaitingIndex:
    """User asked to delete and must now pick a record."""


@dataclass(frozen=True)
class Delete:
    """Delete the record at this position of the displayed state."""

    index: int


DeletePending = Union[NotDeleting, AwaitingIndex, Delete]

NOT_DELETING = NotDeleting()
AWAITING_INDEX = AwaitingIndex()

LETTERS = ascii_lowercase


def letter_for_index(index: int) -> Optional[str]:
    """Letter addressing a position, or None past the last letter."""
    if 0 <= index < len(LETTERS):
        return LETTERS[index]
    return None


def index_for_letter(letter: str) -> Optional[int]:
    """Position addressed by a letter, or None if it is not a-z."""
    if len(letter) != 1:
        return None
    position = LETTERS.find(letter.lower())
    return position if position >= 0 else None


def request_delete(pending: DeletePending) -> DeletePending:
    """not-deleting -> awaiting-index. Other states are left alone."""
    if isinstance(pending, NotDeleting):
        return AWAITING_INDEX
    return pending


def cancel_delete(pending: DeletePending) -> DeletePending:
    """
    awaiting-index -> not-deleting.

    Also drops a delete(i) that is still waiting for a valid index.
    """
    return NOT_DELETING


def choose_index(pending: DeletePending, letter: str) -> DeletePending:
    """awaiting-index -> delete(i) when the letter addresses a position."""
    if not isinstance(pending, AwaitingIndex):
        return pending
    index = index_for_letter(letter)
    if index is None:
        return pending
    return Delete(index)


def describe_pending(pending: DeletePending) -> str:
    """Human-readable hint for the current delete state."""
    match pending:
        case NotDeleting():
            return "press 'd' to delete a save game"
        case AwaitingIndex():
            return "press a letter to choose a game to delete, or ESC to cancel"
        case Delete(index=index):
            return f"deleting {letter_for_index(index) or index}"
        case _:
            raise TypeError(f"Unknown delete state: {pending!r}")
