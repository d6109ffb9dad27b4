"""Back/forward history of opened views."""

from ..interfaces.view import View


class History:
    """Stack of views the user has opened, with a focus pointer.

    Opening a new view while focused on an older one drops everything
    after it, like a web browser.
    """

    def __init__(self):
        self._views: list[View] = []
        self._focused = -1

    def __len__(self) -> int:
        return len(self._views)

    @property
    def current(self) -> View | None:
        """The focused view, or None if nothing has been opened."""
        if self._focused < 0:
            return None
        return self._views[self._focused]

    def push(self, view: View) -> None:
        """Focus a newly opened view, discarding forward history."""
        del self._views[self._focused + 1:]
        self._views.append(view)
        self._focused = len(self._views) - 1

    def back(self) -> View | None:
        """Focus the previous view. Returns None if already at the start."""
        if self._focused <= 0:
            return None
        self._focused -= 1
        return self._views[self._focused]

    def forward(self) -> View | None:
        """Focus the next view. Returns None if already at the end."""
        if self._focused >= len(self._views) - 1:
            return None
        self._focused += 1
        return self._views[self._focused]

    def urls(self) -> list[str]:
        """URLs of every view, oldest first."""
        return [view.url() for view in self._views]
