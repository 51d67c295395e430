"""Billing domain use cases"""
from .create_invoice import CreateInvoice
from .get_invoice import GetInvoice
from .list_invoices import ListInvoices
from .set_invoice_payment import SetInvoicePayment
from .delete_invoice import DeleteInvoice
from .generate_invoice_pdf import GenerateInvoicePdf
from .email_invoice import EmailInvoice
from .reconcile_totals import ReconcileTotals
from .dtos import (
    CreateInvoiceCommandDTO,
    SetInvoicePaymentCommandDTO,
    ListInvoicesQueryDTO,
    InvoiceDTO,
    ListInvoicesResponseDTO,
    InvoicePdfDTO,
    EmailInvoiceResponseDTO,
    TotalsDiscrepancyDTO,
    ReconciliationResultDTO,
)

__all__ = [
    "CreateInvoice",
    "GetInvoice",
    "ListInvoices",
    "SetInvoicePayment",
    "DeleteInvoice",
    "GenerateInvoicePdf",
    "EmailInvoice",
    "ReconcileTotals",
    "CreateInvoiceCommandDTO",
    "SetInvoicePaymentCommandDTO",
    "ListInvoicesQueryDTO",
    "InvoiceDTO",
    "ListInvoicesResponseDTO",
    "InvoicePdfDTO",
    "EmailInvoiceResponseDTO",
    "TotalsDiscrepancyDTO",
    "ReconciliationResultDTO",
]
