"""
In-memory data store backing the mock backend.

Holds collections of records keyed by numeric id. The store is created by
whoever builds the client (usually a test fixture) and handed to the mock
backend by reference, so tests can seed it before a call and inspect it after.

The store performs no locking: it assumes a single writer. Tests that drive
mock calls from several threads must serialize access themselves.
"""
import itertools
import logging
from typing import Any, Dict, Iterator, Optional

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


class MockDataStore:
    """Collections of records, keyed by collection name then integer id."""

    def __init__(self, collections: Optional[Dict[str, Dict[int, Record]]] = None):
        self._collections: Dict[str, Dict[int, Record]] = {}
        self._serial = itertools.count(1)
        self.last_request: Any = None
        if collections:
            for name, records in collections.items():
                self._collections[name] = {int(identity): record for identity, record in records.items()}

    def __getitem__(self, collection: str) -> Dict[int, Record]:
        """Return the named collection, creating it empty on first access."""
        return self._collections.setdefault(str(collection), {})

    def __contains__(self, collection: str) -> bool:
        return str(collection) in self._collections

    def __iter__(self) -> Iterator[str]:
        return iter(self._collections)

    def serial_id(self) -> int:
        """Hand out the next unused numeric id."""
        while True:
            identity = next(self._serial)
            if not any(identity in records for records in self._collections.values()):
                return identity

    def insert(self, collection: str, record: Record) -> Record:
        """Store a record under its 'id', allocating one if it has none."""
        if record.get('id') is None:
            record['id'] = self.serial_id()
        self[collection][int(record['id'])] = record
        logger.debug(f"Stored {collection}/{record['id']}")
        return record

    def reset(self) -> None:
        """Drop every collection and the recorded request body."""
        self._collections.clear()
        self._serial = itertools.count(1)
        self.last_request = None
        logger.debug("Mock data store reset")
