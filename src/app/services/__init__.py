from .unit_of_work import UnitOfWork
from .pdf_service import PdfService
from .spreadsheet_service import SpreadsheetService
from .mail_service import MailService, MailMessage, MailAttachment

__all__ = [
    "UnitOfWork",
    "PdfService",
    "SpreadsheetService",
    "MailService",
    "MailMessage",
    "MailAttachment",
]
