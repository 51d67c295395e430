"""PDF Generation Service Interface

Defines the contract for PDF generation operations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, TYPE_CHECKING
from src.domain.invoice import Invoice
from src.domain.invoice_line import InvoiceLine
from src.domain.settings import ResortSettings

if TYPE_CHECKING:
    from src.app.use_cases.reporting.dtos import AggregateReportDTO


class PdfService(ABC):
    """
    Service interface for PDF generation

    Renders finished documents only; never queries or computes totals.
    """

    @abstractmethod
    def generate_invoice(
        self,
        invoice: Invoice,
        invoice_lines: List[InvoiceLine],
        settings: Optional[ResortSettings] = None,
    ) -> bytes:
        """
        Generate an invoice PDF

        Args:
            invoice: Invoice header
            invoice_lines: Line items of the invoice
            settings: Resort identity; the GSTIN printed depends on invoice type

        Returns:
            PDF document as bytes
        """
        pass

    @abstractmethod
    def generate_aggregate_report(self, report: "AggregateReportDTO") -> bytes:
        """
        Generate a PDF of an aggregated resort/kitchen report

        Args:
            report: Finished aggregate document

        Returns:
            PDF document as bytes
        """
        pass
