from .vendors import Vendor, Brand, Issue
from .invoices import Invoice, InvoicePayment, CreditNote

__all__ = [
    'Vendor', 'Brand', 'Issue',
    'Invoice', 'InvoicePayment', 'CreditNote',
]
