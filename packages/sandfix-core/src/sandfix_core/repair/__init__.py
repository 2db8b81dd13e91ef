"""Record and store repair."""

from sandfix_core.repair.engine import RecordRepair, repair_record, resolve_dependency
from sandfix_core.repair.orchestrator import StoreRepair, repair_store

__all__ = [
    "RecordRepair",
    "StoreRepair",
    "repair_record",
    "repair_store",
    "resolve_dependency",
]
