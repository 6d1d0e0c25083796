"""Fit externally hosted images into template rows.

An image is placed through an ``=IMAGE()`` formula in custom size mode
and its row is resized to the image height plus a little padding.
Measuring the image is left to the caller, which passes a function
returning ``(width, height)`` in pixels for a URL.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from openpyxl.utils.cell import coordinate_from_string
from openpyxl.utils.exceptions import CellCoordinatesException

from rolodex_text.core.events import EditEvent
from rolodex_text.formats.xlsx_handler import XLSXTemplate
from rolodex_text.logging import get_logger

logger = get_logger(__name__)

DEFAULT_ROW_HEIGHT = 21
ROW_PADDING = 5
# =IMAGE() mode 4 renders at an explicit height and width
IMAGE_CUSTOM_SIZE_MODE = 4

ImageMeasurer = Callable[[str], tuple[int, int]]


@dataclass(frozen=True)
class ImageFit:
    """Final display size of an image.

    Attributes:
        width: Display width in pixels
        height: Display height in pixels
        scaled: Whether the image was shrunk to the maximum width
    """

    width: int
    height: int
    scaled: bool = False

    @property
    def row_height(self) -> int:
        return round(self.height) + ROW_PADDING

    def formula(self, url: str) -> str:
        escaped = url.replace('"', '""')
        return (
            f'=IMAGE("{escaped}", {IMAGE_CUSTOM_SIZE_MODE}, '
            f"{self.height}, {self.width})"
        )


def fit_image(width: int, height: int, max_width: Optional[int] = None) -> ImageFit:
    """Compute the display size of an image, honouring a maximum width.

    Raises:
        ValueError: If a dimension or the maximum width is not positive
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Invalid image size {width}x{height}")
    if max_width is not None and max_width <= 0:
        raise ValueError(f"Invalid maximum width {max_width}")

    if max_width is not None and width > max_width:
        scaled_height = round(max_width * height / width)
        logger.info(
            "Image width %dpx exceeds %dpx, resizing to %dw x %dh",
            width,
            max_width,
            max_width,
            scaled_height,
        )
        return ImageFit(width=max_width, height=max(scaled_height, 1), scaled=True)

    return ImageFit(width=width, height=height)


def is_url(value: Optional[str]) -> bool:
    return isinstance(value, str) and value.startswith("http")


class ImagePlacer:
    """Writes image formulas into a template and sizes their rows."""

    def __init__(
        self,
        sink: XLSXTemplate,
        measure: ImageMeasurer,
        max_width: Optional[int] = None,
    ) -> None:
        self.sink = sink
        self.measure = measure
        self.max_width = max_width

    def place(self, url: str, cell: str) -> Optional[ImageFit]:
        """Measure the image at ``url`` and place it in ``cell``.

        A measurement failure is reported in the cell itself and
        returns None.
        """
        try:
            width, height = self.measure(url)
            fit = fit_image(width, height, self.max_width)
        except Exception as e:
            logger.error("Failed to measure image %s: %s", url, e)
            self.sink.write_value(cell, f"Error measuring image: {e}")
            return None

        row = self.sink.row_of(cell)
        logger.info("Setting row %d to height %d", row, fit.row_height)
        self.sink.set_row_height(row, fit.row_height)
        self.sink.set_formula(cell, fit.formula(url))
        return fit

    def reset(self, cell: str) -> None:
        """Clear ``cell`` and put its row back to the default height."""
        row = self.sink.row_of(cell)
        self.sink.clear(cell)
        self.sink.set_row_height(row, DEFAULT_ROW_HEIGHT)
        logger.info("Cleared %s and reset row %d height", cell, row)

    def on_edit(
        self,
        event: EditEvent,
        input_sheet: str,
        url_column: int,
        target_for_row: Callable[[int], Optional[str]],
    ) -> Optional[str]:
        """Handle an edit of the URL column on the input sheet.

        Args:
            event: The edit
            input_sheet: Sheet where URLs are pasted
            url_column: 1-based column holding the URLs
            target_for_row: Returns the A1 target address for an input row;
                a missing or malformed address is logged and ignored

        Returns:
            "placed", "reset", or None when nothing was done
        """
        if event.sheet != input_sheet or event.column != url_column:
            return None

        target = target_for_row(event.row)
        if not target:
            logger.error("No target cell address found for row %d", event.row)
            return None
        target = str(target).strip().upper()
        try:
            coordinate_from_string(target)
        except CellCoordinatesException as e:
            logger.error(
                "Address '%s' from row %d is not a valid cell: %s",
                target,
                event.row,
                e,
            )
            return None

        if is_url(event.value):
            logger.info("URL detected in %s, placing in %s", event.cell, target)
            return "placed" if self.place(event.value, target) else None

        if event.is_cleared and is_url(event.old_value):
            logger.info("URL removed from %s, resetting %s", event.cell, target)
            self.reset(target)
            return "reset"

        logger.info("Value in %s is not a URL, no action taken", event.cell)
        return None
