"""
STORAGE.PY - Where the high score table is kept between sessions
A JSON file on disk, or a plain dict when nothing should touch the disk
"""

import json
import os
from pathlib import Path
from mathrace.Constants import STORAGE_KEY
from mathrace.errors import StorageUnavailableError


class JsonScoreStorage:
    def __init__(self, path, key=STORAGE_KEY):
        self.path = Path(path)
        self.key = key

    def load(self):
        """Saved blob, or None if nothing was saved yet"""
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as e:
            raise StorageUnavailableError(f"could not read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageUnavailableError(f"{self.path} does not hold a JSON object")
        return data.get(self.key)

    def save(self, blob):
        # Write to a temp file first, then swap it in (a crash never leaves half a file)
        tmp = self.path.with_name(self.path.name + '.tmp')
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, 'w', encoding='utf-8') as f:
                json.dump({self.key: blob}, f, ensure_ascii=False, indent=2)
            os.replace(tmp, self.path)
        except (OSError, TypeError, ValueError) as e:
            if tmp.exists():
                try:
                    os.remove(tmp)
                except OSError:
                    pass
            raise StorageUnavailableError(f"could not write {self.path}: {e}") from e


class MemoryScoreStorage:
    """Keeps the blob in memory - nothing survives the process"""

    def __init__(self, blob=None):
        self.blob = json.loads(json.dumps(blob)) if blob is not None else None
        self.saves = 0

    def load(self):
        return json.loads(json.dumps(self.blob)) if self.blob is not None else None

    def save(self, blob):
        # Round trip through JSON so whatever is stored is exactly what a file would hold
        self.blob = json.loads(json.dumps(blob))
        self.saves += 1
