import json
from pathlib import Path
from typing import Any, Dict, List
from ..core.errors import MalformedInput
from ..utils.logging import get_logger

logger = get_logger(__name__)

class ArchiveReader:
    """Reads extracted archive day documents (JSON) from a directory tree."""

    def __init__(self, root: str, pattern: str = "**/*.json"):
        self.root = Path(root)
        self.pattern = pattern

    def list_files(self) -> List[Path]:
        if not self.root.is_dir():
            raise FileNotFoundError(f"Archive directory does not exist: {self.root}")
        files = sorted(p for p in self.root.glob(self.pattern) if p.is_file())
        logger.info(f"Found {len(files)} archive file(s) under {self.root}")
        return files

    def read(self, path: Path) -> List[Dict[str, Any]]:
        try:
            with open(path, encoding="utf-8") as f:
                payload = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise MalformedInput(f"unreadable archive document: {e}", str(path)) from e

        # a file holds one day document or a list of them
        if isinstance(payload, list):
            return payload
        return [payload]
