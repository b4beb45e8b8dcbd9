"""Change notification port — what presentation layers implement to re-render.

Core modules publish to this protocol, never to a specific UI toolkit.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from clearair.core.notifier import ChangeEvent


class ChangeListener(Protocol):
    """Called synchronously after a command and its persistence succeed."""

    def __call__(self, event: ChangeEvent) -> None: ...
