"""
Result registry: where classified stereotypes are handed to downstream tooling.

Maps translation-unit id -> location -> space-joined stereotype string.
"""

import json
import threading
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

from stereocode.logging_config import logger


class ResultRegistry:
    """
    Write-once store of classification results.

    Safe to share between threads classifying different classes. Recording a
    location that already has a result keeps the first result.
    """

    def __init__(self):
        self._results: Dict[int, Dict[str, str]] = {}
        self.lock = threading.Lock()

    def record(self, unit_id: int, location: str, stereotype: str) -> bool:
        """
        Store the stereotype for a location.

        Returns:
            True if stored, False if the location already had a result.
        """
        with self.lock:
            unit = self._results.setdefault(unit_id, {})
            if location in unit:
                logger.debug(f"Unit {unit_id} location '{location}' already recorded, keeping '{unit[location]}'")
                return False
            unit[location] = stereotype
            return True

    def get(self, unit_id: int, location: str) -> Optional[str]:
        with self.lock:
            return self._results.get(unit_id, {}).get(location)

    def unit(self, unit_id: int) -> Dict[str, str]:
        """Copy of all results for one translation unit."""
        with self.lock:
            return dict(self._results.get(unit_id, {}))

    def unit_ids(self) -> List[int]:
        with self.lock:
            return sorted(self._results)

    def items(self) -> Iterator[Tuple[int, str, str]]:
        """Iterate (unit_id, location, stereotype) in unit order."""
        snapshot = self.to_dict()
        for unit_id in sorted(snapshot):
            for location, stereotype in snapshot[unit_id].items():
                yield unit_id, location, stereotype

    def to_dict(self) -> Dict[int, Dict[str, str]]:
        with self.lock:
            return {unit_id: dict(entries) for unit_id, entries in self._results.items()}

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(
            {str(unit_id): entries for unit_id, entries in sorted(self.to_dict().items())},
            indent=indent,
        )

    def write_json(self, path: Path) -> None:
        Path(path).write_text(self.to_json(), encoding="utf-8")
        logger.info(f"Wrote {len(self)} results to {path}")

    def __len__(self) -> int:
        with self.lock:
            return sum(len(entries) for entries in self._results.values())

    def __contains__(self, key: Tuple[int, str]) -> bool:
        unit_id, location = key
        with self.lock:
            return location in self._results.get(unit_id, {})
