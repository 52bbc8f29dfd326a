"""
PDF renderer for the inventory report.

Draws already-measured geometry onto a reportlab canvas and keeps a log of
every drawing operation, so callers and tests can inspect what ended up on
which page without parsing the PDF.
"""

import io
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from reportlab.lib.colors import HexColor
from reportlab.pdfgen import canvas

from .exceptions import RendererClosedError
from .layout import LINE_HEIGHT_RATIO, LayoutBox, PageGeometry, TextMeasurer

logger = logging.getLogger(__name__)

TEXT_COLOR = "#000000"

# Data row backgrounds, alternating by row index
ZEBRA_TONES = ("#ffffff", "#f9fafb")


def zebra_fill(row_index: int) -> str:
    return ZEBRA_TONES[row_index % 2]


@dataclass(frozen=True)
class DrawOperation:
    kind: str  # "box", "text" or "page"
    page_index: int
    box: Optional[LayoutBox] = None
    fill_color: Optional[str] = None
    stroke_color: Optional[str] = None
    text: Optional[str] = None
    font_size: Optional[float] = None
    tag: Optional[str] = None


class PdfRenderer:
    """
    Page-local drawing surface backed by an in-memory reportlab canvas.

    A renderer belongs to exactly one report. Once finish() has returned the
    document bytes, any further call raises RendererClosedError.
    """

    def __init__(self, geometry: PageGeometry = PageGeometry(), font_name: str = "Helvetica", title: Optional[str] = None):
        self.geometry = geometry
        self.font_name = font_name
        self.page_index = 0
        self.operations: List[DrawOperation] = []
        self._finished = False
        self._buffer = io.BytesIO()
        self._canvas = canvas.Canvas(self._buffer, pagesize=(geometry.width, geometry.height))
        if title:
            self._canvas.setTitle(title)

    @property
    def finished(self) -> bool:
        return self._finished

    @property
    def page_count(self) -> int:
        return self.page_index + 1

    def _ensure_open(self):
        if self._finished:
            raise RendererClosedError("The document has already been finished; no further drawing is possible")

    def _pdf_y(self, y: float) -> float:
        # reportlab's origin is the bottom-left corner
        return self.geometry.height - y

    def draw_box(
        self,
        box: LayoutBox,
        fill_color: Optional[str] = None,
        stroke_color: Optional[str] = None,
        line_width: float = 1,
        tag: Optional[str] = None,
    ):
        self._ensure_open()
        c = self._canvas
        c.saveState()
        if fill_color:
            c.setFillColor(HexColor(fill_color))
        if stroke_color:
            c.setStrokeColor(HexColor(stroke_color))
            c.setLineWidth(line_width)
        c.rect(
            box.x,
            self._pdf_y(box.bottom),
            box.width,
            box.height,
            stroke=1 if stroke_color else 0,
            fill=1 if fill_color else 0,
        )
        c.restoreState()
        self.operations.append(
            DrawOperation(
                kind="box",
                page_index=self.page_index,
                box=box,
                fill_color=fill_color,
                stroke_color=stroke_color,
                tag=tag,
            )
        )

    def draw_text(
        self,
        text: str,
        x: float,
        y: float,
        width: float,
        font_size: float = 10,
        align: str = "left",
        lines: Optional[Sequence[str]] = None,
        tag: Optional[str] = None,
    ) -> LayoutBox:
        """
        Draws a wrapped text block whose first line starts at (x, y).

        Pass `lines` when the text has already been wrapped by the layout
        engine; otherwise it is wrapped here with the same metrics.

        Returns:
            LayoutBox: the area covered by the text block.
        """
        self._ensure_open()
        if align not in ("left", "center", "right"):
            raise ValueError(f"Unsupported text alignment: {align}")
        if lines is None:
            lines = TextMeasurer(self.font_name, font_size).wrap(text, width)
        leading = font_size * LINE_HEIGHT_RATIO

        c = self._canvas
        c.saveState()
        c.setFont(self.font_name, font_size)
        c.setFillColor(HexColor(TEXT_COLOR))
        for i, line in enumerate(lines):
            baseline = self._pdf_y(y + i * leading + font_size)
            if align == "center":
                c.drawCentredString(x + width / 2, baseline, line)
            elif align == "right":
                c.drawRightString(x + width, baseline, line)
            else:
                c.drawString(x, baseline, line)
        c.restoreState()

        box = LayoutBox(x=x, y=y, width=width, height=len(lines) * leading)
        self.operations.append(
            DrawOperation(
                kind="text",
                page_index=self.page_index,
                box=box,
                text=text,
                font_size=font_size,
                tag=tag,
            )
        )
        return box

    def new_page(self):
        self._ensure_open()
        self._canvas.showPage()
        self.page_index += 1
        self.operations.append(DrawOperation(kind="page", page_index=self.page_index))
        logger.debug(f"Started page {self.page_count}")

    def finish(self) -> bytes:
        """Closes the document and returns the PDF bytes. Terminal."""
        self._ensure_open()
        self._finished = True
        self._canvas.save()
        return self._buffer.getvalue()
