"""Editor interface."""

from typing import Protocol

from ..core.outline import Location


class Editor(Protocol):
    """Interface for showing a journal location to the user."""

    def open(self, location: Location) -> None:
        """Open the file with the cursor at the location."""
        ...
