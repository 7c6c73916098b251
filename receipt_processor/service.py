import json
import logging
from typing import Optional
from .errors import InvalidInput
from .models import RawReceiptRequest
from .normalizer import normalize_receipt
from .scoring import explain_points
from .store import ReceiptStore
from .validator import validate_receipt, validate_receipt_id


logger = logging.getLogger("receipt_processor.service")


class ReceiptService:
    """Validate, normalize, score and store receipts; look their points up again."""

    def __init__(self, store: Optional[ReceiptStore] = None) -> None:
        self.store = store if store is not None else ReceiptStore()

    def process_receipt(self, req: RawReceiptRequest) -> str:
        violations = validate_receipt(req)
        if violations:
            raise InvalidInput(violations)
        try:
            receipt = normalize_receipt(req)
        except ValueError:
            # validation passed, so this is a bug in the validator or normalizer
            logger.exception("normalization failed for a validated receipt")
            raise
        breakdown = explain_points(receipt)
        receipt.points = sum(breakdown.values())
        self.store.put(receipt)
        logger.info(json.dumps({
            "event": "receipt_processed",
            "receipt_id": receipt.id,
            "points": receipt.points,
            "rules": breakdown,
        }))
        return receipt.id

    def get_points(self, receipt_id: Optional[str]) -> int:
        violations = validate_receipt_id(receipt_id)
        if violations:
            raise InvalidInput(violations)
        return self.store.get(receipt_id or "").points
