"""Storage core: one memo record plus pasted images under a single root.

Layout:
    <data_dir>/
    ├── memo.json                   # Current record {version, updatedAt, doc}
    ├── memo.json.tmp               # Staging file for atomic writes
    ├── memo.json.corrupt-<ms>      # Quarantined unreadable records
    └── images/
        └── <id>.png                # One file per stored image
"""

from alwaysmemo.storage.errors import ImageNotFound, InvalidIdentifier, StorageError
from alwaysmemo.storage.gate import AccessGate, ImageBlob
from alwaysmemo.storage.images import ImageStore, normalize_dimensions
from alwaysmemo.storage.memo import MemoStore
from alwaysmemo.storage.paths import ImageId, StoragePaths

__all__ = [
    "AccessGate",
    "ImageBlob",
    "ImageId",
    "ImageNotFound",
    "ImageStore",
    "InvalidIdentifier",
    "MemoStore",
    "StorageError",
    "StoragePaths",
    "normalize_dimensions",
]
