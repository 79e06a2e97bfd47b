from __future__ import annotations

from typing import Awaitable, Optional, Protocol, runtime_checkable


@runtime_checkable
class WindowManager(Protocol):
    """Window primitives addressed by label (see ``sticky_notes.roles``)."""

    def open(self, label: str) -> None:
        """Create the window if needed, then show and focus it."""

    def focus(self, label: str) -> None:
        ...

    def hide(self, label: str) -> None:
        ...

    def destroy(self, label: str) -> Optional[Awaitable[None]]:
        """
        Tear the window down without saving. Unknown labels are ignored.

        Returns the note save still running in that window, if any.
        """

    def set_always_on_top(self, label: str, on_top: bool) -> None:
        ...

    def minimize(self, label: str) -> None:
        ...
