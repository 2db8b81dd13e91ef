from .loader import load_config
from .models import (
    SandfixConfig,
    SnapshotConfig,
    StoreConfig,
)

__all__ = [
    "SandfixConfig",
    "SnapshotConfig",
    "StoreConfig",
    "load_config",
]
