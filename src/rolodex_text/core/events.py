"""Edit events and their dispatch to handlers."""

from dataclasses import dataclass
from typing import Any, Callable, Optional

from openpyxl.utils.cell import column_index_from_string, coordinate_from_string
from openpyxl.utils.exceptions import CellCoordinatesException

from rolodex_text.logging import get_logger

logger = get_logger(__name__)


class EditHandlingError(Exception):
    """A handler failed while processing an edit."""

    def __init__(self, handler_name: str, event: "EditEvent", cause: Exception):
        self.handler_name = handler_name
        self.event = event
        super().__init__(
            f"{handler_name} failed on edit of {event.sheet}!{event.cell}: {cause}"
        )


@dataclass(frozen=True)
class EditEvent:
    """A single-cell edit in a workbook.

    Attributes:
        sheet: Name of the edited sheet
        cell: A1 address of the edited cell
        value: New value (None when the cell was cleared)
        old_value: Previous value (None when the cell was empty)
    """

    sheet: str
    cell: str
    value: Optional[str] = None
    old_value: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "cell", self.cell.strip().upper())
        try:
            coordinate_from_string(self.cell)
        except CellCoordinatesException as e:
            raise ValueError(f"Invalid cell address: {self.cell!r}") from e

    @property
    def row(self) -> int:
        return coordinate_from_string(self.cell)[1]

    @property
    def column(self) -> int:
        return column_index_from_string(coordinate_from_string(self.cell)[0])

    @property
    def is_cleared(self) -> bool:
        return self.value is None or not str(self.value).strip()


EditHandler = Callable[[EditEvent], Any]


class EditDispatcher:
    """Runs every registered handler against an edit, in order."""

    def __init__(self) -> None:
        self._handlers: list[tuple[str, EditHandler]] = []

    def register(self, handler: EditHandler, name: Optional[str] = None) -> None:
        if name is None:
            name = getattr(handler, "__name__", repr(handler))
        self._handlers.append((name, handler))

    @property
    def handler_names(self) -> list[str]:
        return [name for name, _ in self._handlers]

    def dispatch(self, event: EditEvent) -> list[tuple[str, Any]]:
        """Send ``event`` to every handler.

        Returns:
            (handler name, outcome) for each handler that acted

        Raises:
            EditHandlingError: If a handler raises
        """
        logger.info(
            'Edit on %s!%s: "%s" (was "%s")',
            event.sheet,
            event.cell,
            event.value or "",
            event.old_value or "(empty)",
        )
        outcomes: list[tuple[str, Any]] = []
        for name, handler in self._handlers:
            try:
                outcome = handler(event)
            except Exception as e:
                logger.error("%s failed: %s", name, e)
                raise EditHandlingError(name, event, e) from e
            if outcome is not None:
                outcomes.append((name, outcome))
        return outcomes
