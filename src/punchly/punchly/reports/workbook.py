from __future__ import annotations

import io
import logging
from typing import Optional, Sequence

import pandas as pd
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from openpyxl.workbook.protection import WorkbookProtection

from .model import SheetDefinition, SheetSection

logger = logging.getLogger(__name__)

HEADER_FONT = Font(bold=True, color="FFFFFF")
HEADER_FILL = PatternFill("solid", fgColor="366092")
SECTION_FONT = Font(bold=True, size=12)
SECTION_FILL = PatternFill("solid", fgColor="D9D9D9")
AUTO_CLOSED_FILL = PatternFill("solid", fgColor="FFC7CE")
THIN_BORDER = Border(
    left=Side(style="thin"),
    right=Side(style="thin"),
    top=Side(style="thin"),
    bottom=Side(style="thin"),
)
MAX_COLUMN_WIDTH = 40


class ExcelReportWriter:
    """Renders sheet definitions into a protected .xlsx workbook.

    Frames are written with pandas (openpyxl engine); merging, grouping,
    highlighting and protection are applied on the openpyxl worksheets.
    """

    def __init__(self, *, password: Optional[str] = None):
        self._password = password or None

    def render(self, sheets: Sequence[SheetDefinition]) -> bytes:
        output = io.BytesIO()
        with pd.ExcelWriter(output, engine="openpyxl") as writer:
            for sheet in sheets:
                self._write_sheet(writer, sheet)

            protection = {"workbookPassword": self._password} if self._password else {}
            writer.book.security = WorkbookProtection(lockStructure=True, **protection)

        logger.debug("Rendered workbook with sheets %s", [s.title for s in sheets])
        return output.getvalue()

    def _write_sheet(self, writer: pd.ExcelWriter, sheet: SheetDefinition) -> None:
        width = len(sheet.columns)
        pd.DataFrame([list(sheet.columns)]).to_excel(
            writer, sheet_name=sheet.title, index=False, header=False, startrow=0
        )
        worksheet = writer.sheets[sheet.title]
        for col in range(1, width + 1):
            cell = worksheet.cell(row=1, column=col)
            cell.font = HEADER_FONT
            cell.fill = HEADER_FILL
            cell.border = THIN_BORDER

        next_row = 2
        for section in sheet.sections:
            next_row = self._write_section(writer, worksheet, sheet, section, next_row)

        worksheet.freeze_panes = "A2"
        self._fit_columns(worksheet)

        if sheet.protected:
            worksheet.protection.sheet = True
            if self._password:
                worksheet.protection.password = self._password

    def _write_section(self, writer, worksheet, sheet: SheetDefinition, section: SheetSection, row: int) -> int:
        width = len(sheet.columns)

        if section.title is not None:
            cell = worksheet.cell(row=row, column=1, value=section.title)
            cell.font = SECTION_FONT
            cell.fill = SECTION_FILL
            if width > 1:
                worksheet.merge_cells(start_row=row, start_column=1, end_row=row, end_column=width)
            row += 1

        if not section.rows:
            return row

        first, last = row, row + len(section.rows) - 1
        frame = pd.DataFrame([list(r) for r in section.rows], dtype=object)
        frame.to_excel(writer, sheet_name=sheet.title, index=False, header=False, startrow=first - 1)

        for r in range(first, last + 1):
            for col in range(1, width + 1):
                worksheet.cell(row=r, column=col).border = THIN_BORDER
        for offset, col in section.highlights:
            worksheet.cell(row=first + offset, column=col + 1).fill = AUTO_CLOSED_FILL

        if section.merge_first_column and last > first:
            worksheet.merge_cells(start_row=first, start_column=1, end_row=last, end_column=1)
            worksheet.cell(row=first, column=1).alignment = Alignment(vertical="top")

        worksheet.row_dimensions.group(first, last, outline_level=1, hidden=False)
        return last + 1

    @staticmethod
    def _fit_columns(worksheet) -> None:
        for idx, column in enumerate(worksheet.iter_cols(), 1):
            longest = max((len(str(c.value)) for c in column if c.value is not None), default=0)
            worksheet.column_dimensions[get_column_letter(idx)].width = min(longest + 2, MAX_COLUMN_WIDTH)
