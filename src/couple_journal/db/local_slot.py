"""
A durable string-keyed slot store backed by one JSON file.

Read-whole and write-whole only, like a browser's localStorage: each key maps
to one string value.
"""
import json
from pathlib import Path
from typing import Dict, Optional

from loguru import logger


class JsonFileSlot:
    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        raw = self.path.read_text(encoding="utf-8")
        if not raw.strip():
            return {}
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError(f"slot file {self.path} does not hold a JSON object")
        return data

    def read(self, key: str) -> Optional[str]:
        assert key != "", "key cannot be an empty string."
        return self._read_all().get(key)

    def write(self, key: str, value: str) -> None:
        assert key != "", "key cannot be an empty string."
        data = self._read_all()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # 先写临时文件再替换，避免写一半
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        tmp_path.replace(self.path)
        logger.debug(f"Wrote slot {key} ({len(value)} chars) to {self.path}")
