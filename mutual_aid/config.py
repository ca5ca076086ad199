from __future__ import annotations
from dataclasses import dataclass


# relief API
@dataclass(frozen=True)
class ReliefAPIConfig:
    base_url: str
    timeout_seconds: float = 10.0

# export
@dataclass(frozen=True)
class ExportConfig:
    platform_name: str
    output_dir: str = "output"
