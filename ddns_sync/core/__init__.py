"""
Core synchronization functionality.

This package contains the data model, the error taxonomy, the
reconciliation engine and the orchestrator of a run.
"""

from .reconciler import Reconciler, record_fqdn
from .sync_manager import SyncManager, run_sync

__all__ = ["Reconciler", "record_fqdn", "SyncManager", "run_sync"]
