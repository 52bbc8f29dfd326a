"""
Inventory report generator.

Runs a single forward pass over a record set:

    aggregate -> title block -> table header -> rows -> footer -> finish

Every generate() call owns a fresh renderer and page cursor, so one
generator instance can be reused sequentially but nothing is shared between
two reports. Any failure aborts the whole pass with ReportGenerationFailed;
no partial document is returned.
"""

import datetime
import enum
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple

from ...core.config import (
    REPORT_CURRENCY_PREFIX,
    REPORT_DATE_FORMAT,
    REPORT_FONT_NAME,
    STORE_NAME,
)
from .aggregator import aggregate
from .exceptions import ReportGenerationCancelled, ReportGenerationFailed
from .layout import (
    CELL_PADDING_TOP,
    PLACEHOLDER,
    PRODUCT_COLUMNS,
    ColumnSpec,
    LayoutBox,
    MeasuredRow,
    PageCursor,
    PageGeometry,
    TableLayout,
    TextMeasurer,
    place_row,
)
from .renderer import DrawOperation, PdfRenderer, zebra_fill
from .schemas import InventoryStats, ProductRecord

logger = logging.getLogger(__name__)

REPORT_FILENAME = "products.pdf"
REPORT_MEDIA_TYPE = "application/pdf"

# Title block positions (y from the top of the first page)
TITLE_Y = 50
DATE_Y = 90
SUMMARY_HEADING_Y = 115
DETAILS_HEADING_Y = 310

# Stats boxes
STATS_TOP = 150
STATS_BOX_WIDTH = 100
STATS_BOX_HEIGHT = 60
STATS_GAP = 20
STATS_FILL = "#f9fafb"
STATS_STROKE = "#e5e7eb"

# Table
TABLE_TOP = 350
HEADER_FILL = "#f3f4f6"
HEADER_STROKE = "#000000"
ROW_STROKE = "#e5e7eb"
HEADER_FONT_SIZE = 12
BODY_FONT_SIZE = 10

# Footer offsets below the last row
FOOTER_FIRST_LINE_OFFSET = 20
FOOTER_SECOND_LINE_OFFSET = 35


class ReportStage(str, enum.Enum):
    AGGREGATE = "aggregate"
    TITLE = "title"
    TABLE_HEADER = "table_header"
    ROWS = "rows"
    FOOTER = "footer"
    FINISH = "finish"


@dataclass(frozen=True)
class ReportSettings:
    title: str = "Product Inventory Report"
    store_name: str = STORE_NAME
    currency_prefix: str = REPORT_CURRENCY_PREFIX
    date_format: str = REPORT_DATE_FORMAT
    font_name: str = REPORT_FONT_NAME
    geometry: PageGeometry = field(default_factory=PageGeometry)
    columns: Tuple[ColumnSpec, ...] = PRODUCT_COLUMNS


@dataclass(frozen=True)
class ReportDocument:
    content: bytes
    stats: InventoryStats
    page_count: int
    row_count: int
    operations: Tuple[DrawOperation, ...] = ()
    filename: str = REPORT_FILENAME
    media_type: str = REPORT_MEDIA_TYPE


def format_money(value: float, currency_prefix: str) -> str:
    return f"{currency_prefix} {value:.2f}"


def format_cell(record: ProductRecord, key: str, currency_prefix: str) -> str:
    """Renders one table cell; missing values become the placeholder."""
    value = getattr(record, key, None)
    if value is None or value == "":
        return PLACEHOLDER
    if key == "price":
        return format_money(value, currency_prefix)
    return str(value)


def stat_entries(stats: InventoryStats, currency_prefix: str) -> List[Tuple[str, str]]:
    """Label/value pairs for the five summary boxes, left to right."""
    return [
        ("Total Products", str(stats.total_products)),
        ("Total Stock", str(stats.total_stock)),
        ("Avg. Price", format_money(stats.average_price, currency_prefix)),
        ("Total Value", format_money(stats.total_value, currency_prefix)),
        ("Categories", str(stats.category_count)),
    ]


class InventoryReportGenerator:
    """
    Builds the product inventory PDF.

    Args:
        settings: Layout and branding settings; defaults come from config.
        cancel_check: Optional callable polled before each row. Returning
            True stops the pass with ReportGenerationCancelled.
    """

    def __init__(
        self,
        settings: Optional[ReportSettings] = None,
        cancel_check: Optional[Callable[[], bool]] = None,
    ):
        self.settings = settings or ReportSettings()
        self.cancel_check = cancel_check

    def _table_layout(self) -> TableLayout:
        return TableLayout(
            columns=self.settings.columns,
            left=self.settings.geometry.margin,
            header_measurer=TextMeasurer(self.settings.font_name, HEADER_FONT_SIZE),
            body_measurer=TextMeasurer(self.settings.font_name, BODY_FONT_SIZE),
        )

    def generate(
        self,
        records: Sequence[ProductRecord],
        generated_at: Optional[datetime.datetime] = None,
    ) -> ReportDocument:
        """
        Renders the inventory report for `records`, in input order.

        Args:
            records: The product records to report on.
            generated_at: Timestamp printed on the report; defaults to now.

        Returns:
            ReportDocument: PDF bytes plus the stats and page count.

        Raises:
            ReportGenerationFailed: Any stage failed. Carries the stage and
                the original exception.
            ReportGenerationCancelled: cancel_check asked to stop.
        """
        records = list(records)
        generated_at = generated_at or datetime.datetime.now()
        stage = ReportStage.AGGREGATE
        try:
            stats = aggregate(records)
            renderer = PdfRenderer(
                geometry=self.settings.geometry,
                font_name=self.settings.font_name,
                title=self.settings.title,
            )
            table = self._table_layout()

            stage = ReportStage.TITLE
            logger.debug(f"Drawing title block for {stats.total_products} products")
            self._draw_title_block(renderer, stats, generated_at)

            stage = ReportStage.TABLE_HEADER
            cursor = self._draw_table_header(renderer, table)

            stage = ReportStage.ROWS
            cursor = self._draw_rows(renderer, table, records, cursor)

            stage = ReportStage.FOOTER
            self._draw_footer(renderer, cursor, generated_at)

            stage = ReportStage.FINISH
            content = renderer.finish()
        except ReportGenerationCancelled:
            logger.info("Inventory report generation was cancelled")
            raise
        except Exception as e:
            logger.warning(f"Inventory report failed during {stage.value}: {e}")
            raise ReportGenerationFailed(stage.value, e) from e

        logger.info(
            f"Inventory report generated: {len(records)} rows, "
            f"{renderer.page_count} page(s), {len(content)} bytes"
        )
        return ReportDocument(
            content=content,
            stats=stats,
            page_count=renderer.page_count,
            row_count=len(records),
            operations=tuple(renderer.operations),
        )

    def _draw_title_block(self, renderer: PdfRenderer, stats: InventoryStats, generated_at: datetime.datetime):
        geometry = self.settings.geometry
        left = geometry.margin
        width = geometry.content_width
        date_text = generated_at.strftime(self.settings.date_format)

        renderer.draw_text(self.settings.title, left, TITLE_Y, width, font_size=24, align="center", tag="title")
        renderer.draw_text(f"Generated on: {date_text}", left, DATE_Y, width, font_size=10, align="right", tag="date")
        renderer.draw_text("Inventory Summary", left, SUMMARY_HEADING_Y, width, font_size=16, align="center", tag="heading")

        # The fifth box extends past the right margin on A4; positions are fixed.
        for index, (label, value) in enumerate(stat_entries(stats, self.settings.currency_prefix)):
            x = left + index * (STATS_BOX_WIDTH + STATS_GAP)
            box = LayoutBox(x=x, y=STATS_TOP, width=STATS_BOX_WIDTH, height=STATS_BOX_HEIGHT)
            renderer.draw_box(box, fill_color=STATS_FILL, stroke_color=STATS_STROKE, tag="stat-box")
            renderer.draw_text(label, x + 5, STATS_TOP + 10, STATS_BOX_WIDTH - 10, font_size=10, tag="stat-label")
            renderer.draw_text(value, x + 5, STATS_TOP + 30, STATS_BOX_WIDTH - 10, font_size=14, tag="stat-value")

        renderer.draw_text("Product Details", left, DETAILS_HEADING_Y, width, font_size=16, align="center", tag="heading")

    def _draw_measured_row(self, renderer: PdfRenderer, row: MeasuredRow, box: LayoutBox, font_size: float):
        for cell in row.cells:
            renderer.draw_text(
                cell.text,
                cell.x,
                box.y + CELL_PADDING_TOP,
                cell.width,
                font_size=font_size,
                lines=cell.lines,
                tag="cell",
            )

    def _draw_table_header(self, renderer: PdfRenderer, table: TableLayout) -> PageCursor:
        header = table.measure_header()
        box = LayoutBox(x=table.left, y=TABLE_TOP, width=table.total_width, height=header.height)
        renderer.draw_box(box, fill_color=HEADER_FILL, stroke_color=HEADER_STROKE, tag="header-row")
        self._draw_measured_row(renderer, header, box, HEADER_FONT_SIZE)
        return PageCursor(current_y=box.bottom, page_index=renderer.page_index)

    def _draw_rows(
        self,
        renderer: PdfRenderer,
        table: TableLayout,
        records: Sequence[ProductRecord],
        cursor: PageCursor,
    ) -> PageCursor:
        geometry = self.settings.geometry
        currency = self.settings.currency_prefix
        for index, record in enumerate(records):
            if self.cancel_check is not None and self.cancel_check():
                raise ReportGenerationCancelled(rows_drawn=index)

            cells = [format_cell(record, column.key, currency) for column in table.columns]
            row = table.measure_row(cells)
            placement = place_row(cursor, row.height, geometry, table.left, table.total_width)
            if placement.page_break:
                renderer.new_page()
                logger.debug(f"Row {index} moved to page {placement.page_index + 1}")

            renderer.draw_box(placement.box, fill_color=zebra_fill(index), stroke_color=ROW_STROKE, tag="data-row")
            self._draw_measured_row(renderer, row, placement.box, BODY_FONT_SIZE)
            cursor = placement.cursor
        return cursor

    def _draw_footer(self, renderer: PdfRenderer, cursor: PageCursor, generated_at: datetime.datetime):
        # Drawn right below the last row without an overflow check, so a
        # table ending near the bottom edge pushes the footer off the page.
        geometry = self.settings.geometry
        date_text = generated_at.strftime(self.settings.date_format)
        renderer.draw_text(
            f"© {generated_at.year} {self.settings.store_name} - Inventory Management System",
            geometry.margin,
            cursor.current_y + FOOTER_FIRST_LINE_OFFSET,
            geometry.content_width,
            font_size=10,
            align="center",
            tag="footer",
        )
        renderer.draw_text(
            f"Report generated on {date_text}",
            geometry.margin,
            cursor.current_y + FOOTER_SECOND_LINE_OFFSET,
            geometry.content_width,
            font_size=10,
            align="center",
            tag="footer",
        )
