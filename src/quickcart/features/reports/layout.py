"""
Layout engine for the inventory report.

Everything here is pure geometry: text is measured with reportlab's font
metrics (no canvas involved), rows are measured before anything is drawn,
and page breaks are decided from an explicit PageCursor value that callers
pass in and get back. The renderer only ever draws what this module has
already measured.

Coordinates are in PDF points with y growing downward from the top edge of
the page.
"""

from dataclasses import dataclass, replace
from typing import List, Optional, Protocol, Sequence, Tuple

from reportlab.lib.pagesizes import A4
from reportlab.pdfbase import pdfmetrics

PLACEHOLDER = "-"

LINE_HEIGHT_RATIO = 1.2

# Table cell padding
CELL_PADDING_X = 5
CELL_PADDING_TOP = 10
ROW_PADDING_Y = 20


@dataclass(frozen=True)
class ColumnSpec:
    key: str
    title: str
    width: float

    def __post_init__(self):
        if self.width <= 0:
            raise ValueError(f"Column '{self.key}' must have a positive width, got {self.width}")


PRODUCT_COLUMNS: Tuple[ColumnSpec, ...] = (
    ColumnSpec("name", "Name", 120),
    ColumnSpec("price", "Price", 80),
    ColumnSpec("stock", "Stock", 60),
    ColumnSpec("category", "Category", 100),
    ColumnSpec("supplier", "Supplier", 120),
)


@dataclass(frozen=True)
class LayoutBox:
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass(frozen=True)
class PageGeometry:
    width: float = A4[0]
    height: float = A4[1]
    margin: float = 50
    # Absolute y past which a row no longer fits on the page
    break_threshold: float = 700

    @property
    def content_width(self) -> float:
        return self.width - 2 * self.margin


@dataclass(frozen=True)
class PageCursor:
    current_y: float
    page_index: int = 0

    def advance(self, height: float) -> "PageCursor":
        return replace(self, current_y=self.current_y + height)

    def next_page(self, top: float) -> "PageCursor":
        return PageCursor(current_y=top, page_index=self.page_index + 1)


class Measurer(Protocol):
    leading: float

    def wrap(self, text: str, width: float) -> List[str]: ...

    def measure_wrapped_height(self, text: str, width: float) -> float: ...


class TextMeasurer:
    """Greedy word wrapping against the metrics of one font at one size."""

    def __init__(self, font_name: str = "Helvetica", font_size: float = 10, leading: Optional[float] = None):
        self.font_name = font_name
        self.font_size = font_size
        self.leading = leading if leading is not None else font_size * LINE_HEIGHT_RATIO

    def text_width(self, text: str) -> float:
        return pdfmetrics.stringWidth(text, self.font_name, self.font_size)

    def _break_word(self, word: str, width: float) -> List[str]:
        pieces = []
        current = ""
        for char in word:
            if current and self.text_width(current + char) > width:
                pieces.append(current)
                current = char
            else:
                current += char
        pieces.append(current)
        return pieces

    def wrap(self, text: str, width: float) -> List[str]:
        """
        Splits text into lines no wider than `width`.

        Explicit newlines always start a new line. A word wider than the
        available width is broken between characters.
        """
        lines: List[str] = []
        for paragraph in str(text).split("\n"):
            words = paragraph.split()
            if not words:
                lines.append("")
                continue
            current = ""
            for word in words:
                candidate = f"{current} {word}" if current else word
                if self.text_width(candidate) <= width:
                    current = candidate
                    continue
                if current:
                    lines.append(current)
                if self.text_width(word) <= width:
                    current = word
                else:
                    *full_pieces, current = self._break_word(word, width)
                    lines.extend(full_pieces)
            lines.append(current)
        return lines

    def measure_wrapped_height(self, text: str, width: float) -> float:
        return len(self.wrap(text, width)) * self.leading


@dataclass(frozen=True)
class MeasuredCell:
    text: str
    lines: Tuple[str, ...]
    x: float
    width: float
    height: float


@dataclass(frozen=True)
class MeasuredRow:
    cells: Tuple[MeasuredCell, ...]
    height: float


@dataclass(frozen=True)
class RowPlacement:
    box: LayoutBox
    cursor: PageCursor
    page_break: bool

    @property
    def page_index(self) -> int:
        return self.cursor.page_index


def place_row(cursor: PageCursor, row_height: float, geometry: PageGeometry, left: float, width: float) -> RowPlacement:
    """
    Decides where a row of known height goes.

    The row stays on the current page when it ends at or above the break
    threshold. Otherwise it moves, whole, to the top margin of a new page.
    A row already sitting at the top margin is never moved again, so a row
    taller than a full page is placed oversized on its own page.

    Returns:
        RowPlacement: the row's box, the cursor below the row and whether
        a new page has to be started before drawing it.
    """
    page_break = (
        cursor.current_y + row_height > geometry.break_threshold
        and cursor.current_y > geometry.margin
    )
    if page_break:
        cursor = cursor.next_page(geometry.margin)
    box = LayoutBox(x=left, y=cursor.current_y, width=width, height=row_height)
    return RowPlacement(box=box, cursor=cursor.advance(row_height), page_break=page_break)


class TableLayout:
    """Fixed-width column table: offsets, cell wrapping and row heights."""

    def __init__(
        self,
        columns: Sequence[ColumnSpec] = PRODUCT_COLUMNS,
        left: float = 50,
        header_measurer: Optional[Measurer] = None,
        body_measurer: Optional[Measurer] = None,
    ):
        if not columns:
            raise ValueError("A table needs at least one column")
        self.columns = tuple(columns)
        self.left = left
        self.header_measurer = header_measurer or TextMeasurer(font_size=12)
        self.body_measurer = body_measurer or TextMeasurer(font_size=10)

    @property
    def total_width(self) -> float:
        return sum(column.width for column in self.columns)

    def column_offsets(self) -> List[float]:
        offsets = []
        x = self.left
        for column in self.columns:
            offsets.append(x)
            x += column.width
        return offsets

    def _check_cells(self, cells: Sequence[str]):
        if len(cells) != len(self.columns):
            raise ValueError(f"Expected {len(self.columns)} cells, got {len(cells)}")

    def compute_row_height(self, cells: Sequence[str], measurer: Optional[Measurer] = None) -> float:
        measurer = measurer or self.body_measurer
        self._check_cells(cells)
        return max(
            measurer.measure_wrapped_height(text, column.width - 2 * CELL_PADDING_X)
            for text, column in zip(cells, self.columns)
        ) + ROW_PADDING_Y

    def measure_row(self, cells: Sequence[str], measurer: Optional[Measurer] = None) -> MeasuredRow:
        measurer = measurer or self.body_measurer
        self._check_cells(cells)
        measured = []
        for text, column, x in zip(cells, self.columns, self.column_offsets()):
            text_width = column.width - 2 * CELL_PADDING_X
            lines = tuple(measurer.wrap(text, text_width))
            measured.append(
                MeasuredCell(
                    text=text,
                    lines=lines,
                    x=x + CELL_PADDING_X,
                    width=text_width,
                    height=len(lines) * measurer.leading,
                )
            )
        height = max(cell.height for cell in measured) + ROW_PADDING_Y
        return MeasuredRow(cells=tuple(measured), height=height)

    def measure_header(self) -> MeasuredRow:
        return self.measure_row([column.title for column in self.columns], self.header_measurer)
