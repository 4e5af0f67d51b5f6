"""
Local file-based repository for the spot cache and the curated list.
A missing file is a normal empty state, not an error.
"""
import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from gozleme_finder.core.errors import NotFoundError, StorageError
from gozleme_finder.core.logger import logs
from gozleme_finder.models.spot_model import CacheFile, Spot


class SpotRepository:
    """Repository for cache.json and curated.json."""

    def __init__(self, cache_path: Path, curated_path: Path):
        self.cache_path = Path(cache_path)
        self.curated_path = Path(curated_path)
        # Serializes every load/mutate/persist cycle on the cache file
        self._lock = threading.RLock()

    # ===== Cache Methods =====

    def load_cache(self) -> Optional[CacheFile]:
        """Read cache.json; None when it has not been built yet."""
        try:
            with open(self.cache_path, "r", encoding="utf-8") as f:
                raw = f.read()
        except FileNotFoundError:
            return None
        except OSError as e:
            logs.log(logging.ERROR, f"Cache error: {str(e)}")
            raise StorageError(f"Failed to load cache: {str(e)}")

        try:
            return CacheFile.model_validate_json(raw)
        except ValidationError as e:
            logs.log(logging.ERROR, f"Cache error: {str(e)}")
            raise StorageError(f"Failed to load cache: {e.error_count()} invalid field(s) in {self.cache_path.name}")

    def save_cache(self, cache: CacheFile):
        with self._lock:
            self._atomic_write(self.cache_path, cache.model_dump(by_alias=True, mode="json"))

    def toggle_hidden(self, index: int) -> Spot:
        """Flip the hidden flag of the spot at ``index`` and persist the file."""
        with self._lock:
            cache = self.load_cache()
            if cache is None:
                raise NotFoundError("cache.json not found - run the cache builder first")

            if index < 0 or index >= len(cache.spots):
                raise NotFoundError(f"Spot not found at index {index}")

            spot = cache.spots[index]
            spot.hidden = not spot.hidden
            self.save_cache(cache)

        logs.log(logging.INFO, f"Spot {index} ({spot.name}) hidden={spot.hidden}")
        return spot

    # ===== Curated Methods =====

    def load_curated(self) -> Any:
        """Read curated.json as-is; an empty list when it does not exist."""
        try:
            with open(self.curated_path, "r", encoding="utf-8") as f:
                return json.load(f)
        except FileNotFoundError:
            return []
        except (OSError, ValueError) as e:
            logs.log(logging.ERROR, f"Curated spots error: {str(e)}")
            raise StorageError(f"Failed to load curated spots: {str(e)}")

    # ===== Internals =====

    @staticmethod
    def _atomic_write(path: Path, data: dict):
        tmp = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp, path)
        except OSError as e:
            logs.log(logging.ERROR, f"Failed to write {path.name}: {str(e)}")
            raise StorageError(f"Failed to update cache: {str(e)}")
        finally:
            if tmp and os.path.exists(tmp):
                os.remove(tmp)
