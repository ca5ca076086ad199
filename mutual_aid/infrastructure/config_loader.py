from __future__ import annotations
import os
from dotenv import load_dotenv
from mutual_aid.config import ReliefAPIConfig, ExportConfig


load_dotenv()

DEFAULT_PLATFORM_NAME = "花蓮光復鄉互助網"

def _get_required_env(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"Environment variable {name} is required but not set")
    return value

def load_relief_api_config() -> ReliefAPIConfig:
    base_url = _get_required_env("RELIEF_API_URL")

    timeout_str = os.getenv("RELIEF_API_TIMEOUT", "10")
    try:
        timeout_seconds = float(timeout_str)
    except ValueError as exc:
        raise RuntimeError("RELIEF_API_TIMEOUT must be a number") from exc

    return ReliefAPIConfig(
        base_url=base_url.rstrip("/"),
        timeout_seconds=timeout_seconds,
    )

def load_export_config() -> ExportConfig:
    platform_name = os.getenv("RELIEF_PLATFORM_NAME") or DEFAULT_PLATFORM_NAME
    output_dir = os.getenv("RELIEF_EXPORT_DIR") or "output"

    return ExportConfig(
        platform_name=platform_name,
        output_dir=output_dir,
    )
