"""Background workers for the billing service"""
from .totals_reconciler import TotalsReconcilerWorker

__all__ = ["TotalsReconcilerWorker"]
