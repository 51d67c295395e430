"""Spreadsheet Export Service Interface"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.app.use_cases.reporting.dtos import AggregateReportDTO


class SpreadsheetService(ABC):

    @abstractmethod
    def generate_aggregate_report(self, report: "AggregateReportDTO") -> bytes:
        """Render an aggregated report as an XLSX workbook"""
        pass
