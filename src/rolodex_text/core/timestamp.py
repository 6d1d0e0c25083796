"""Timestamp a cell when its paired dropdown is switched to "Yes"."""

from datetime import datetime
from enum import Enum
from typing import Mapping, Optional
from zoneinfo import ZoneInfo

from rolodex_text.core.events import EditEvent
from rolodex_text.formats.base import SectionSink
from rolodex_text.logging import get_logger

logger = get_logger(__name__)


class StampAction(Enum):
    STAMPED = "stamped"
    CLEARED = "cleared"
    UNCHANGED = "unchanged"


class TimestampRule:
    """Maps dropdown cells to the cells that record when they said "Yes".

    Switching a dropdown to the trigger value (again) writes the current
    time; switching it from the trigger to the reset value clears it.
    """

    def __init__(
        self,
        mapping: Mapping[str, str],
        timezone: str = "America/New_York",
        fmt: str = "%m/%d/%Y %H:%M:%S",
        trigger_value: str = "Yes",
        reset_value: str = "No",
    ) -> None:
        self.mapping = {
            source.strip().upper(): target.strip().upper()
            for source, target in mapping.items()
        }
        self.zone = ZoneInfo(timezone)
        self.fmt = fmt
        self.trigger_value = trigger_value
        self.reset_value = reset_value

    def format_now(self, now: Optional[datetime] = None) -> str:
        """Format ``now`` (default: the current time) in the rule's timezone."""
        if now is None:
            now = datetime.now(self.zone)
        elif now.tzinfo is not None:
            now = now.astimezone(self.zone)
        return now.strftime(self.fmt)

    def on_edit(
        self,
        event: EditEvent,
        sink: SectionSink,
        now: Optional[datetime] = None,
    ) -> Optional[StampAction]:
        target = self.mapping.get(event.cell)
        if target is None:
            logger.debug("Edit in %s is not configured for timestamping", event.cell)
            return None

        if event.value == self.trigger_value:
            stamp = self.format_now(now)
            logger.info(
                'Setting timestamp "%s" in %s due to change in %s',
                stamp,
                target,
                event.cell,
            )
            sink.write_value(target, stamp)
            return StampAction.STAMPED

        if event.old_value == self.trigger_value and event.value == self.reset_value:
            logger.info(
                'Clearing timestamp in %s due to change in %s from "%s" to "%s"',
                target,
                event.cell,
                self.trigger_value,
                self.reset_value,
            )
            sink.clear(target)
            return StampAction.CLEARED

        return StampAction.UNCHANGED
