from dataclasses import dataclass
import os

def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")

@dataclass(frozen=True)
class Settings:
    # Archive input (one JSON document per place-day)
    archive_dir: str = os.environ.get("ARCHIVE_DIR", "archive")
    archive_pattern: str = os.environ.get("ARCHIVE_PATTERN", "**/*.json")

    # Normalized CSV output
    output_dir: str = os.environ.get("OUTPUT_DIR", "normalized")

    # Pipeline options
    interpolation_enabled: bool = _env_flag("INTERPOLATION_ENABLED", "true")
    log_level: str = os.environ.get("LOG_LEVEL", "INFO")
