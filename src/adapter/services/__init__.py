from .unit_of_work import SqlAlchemyUnitOfWork
from .pdf_service import ReportLabPdfService
from .spreadsheet_service import OpenpyxlSpreadsheetService
from .mail_service import LoggingMailService, SmtpMailService, create_mail_service

__all__ = [
    "SqlAlchemyUnitOfWork",
    "ReportLabPdfService",
    "OpenpyxlSpreadsheetService",
    "LoggingMailService",
    "SmtpMailService",
    "create_mail_service",
]
