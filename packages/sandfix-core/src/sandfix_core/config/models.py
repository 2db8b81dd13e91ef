from pydantic import BaseModel, Field
from typing import Literal


class StoreConfig(BaseModel):
    db_suffix: str = ".conf.d"
    record_suffix: str = ".conf"
    default_package_dbs: list[str] = Field(default_factory=lambda: ["global"])
    global_db: str | None = None
    user_db: str | None = None
    ghc_path: str = "ghc"
    ghc_timeout: int = Field(default=30, gt=0)


class SnapshotConfig(BaseModel):
    ignore_patterns: list[str] = Field(default_factory=list)
    follow_symlinks: bool = True


class SandfixConfig(BaseModel):
    store: StoreConfig = Field(default_factory=StoreConfig)
    snapshot: SnapshotConfig = Field(default_factory=SnapshotConfig)
    verbose: bool = False
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"
