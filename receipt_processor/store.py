import threading
from contextlib import contextmanager
from typing import Dict, Iterator
from .errors import NotFound
from .models import Receipt


class ReadWriteLock:
    """Many readers or one writer. Waiting writers block new readers."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class ReceiptStore:
    """In-memory map from receipt id to Receipt, for the life of the process.

    Receipts are copied on the way in and on the way out, so nothing outside
    the store holds a reference to the stored instance.
    """

    def __init__(self) -> None:
        self._lock = ReadWriteLock()
        self._receipts: Dict[str, Receipt] = {}

    def put(self, receipt: Receipt) -> None:
        stored = receipt.model_copy(deep=True)
        with self._lock.write():
            self._receipts[stored.id] = stored

    def get(self, receipt_id: str) -> Receipt:
        with self._lock.read():
            stored = self._receipts.get(receipt_id)
        if stored is None:
            raise NotFound(receipt_id)
        return stored.model_copy(deep=True)

    def __contains__(self, receipt_id: object) -> bool:
        with self._lock.read():
            return receipt_id in self._receipts

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._receipts)
