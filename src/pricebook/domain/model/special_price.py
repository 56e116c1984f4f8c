"""SpecialPrice: a per-user override of a product's catalog price.

Identity is the (user_id, product_id) pair.  At most one SpecialPrice
exists per pair; writing the same pair again replaces price and note
in place, keeping ``id`` and ``created_at``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from pricebook.domain.exceptions import ValidationError
from pricebook.domain.model.value_objects import Money

# Longest price text the store keeps
MAX_PRICE_LENGTH = 64


@dataclass(frozen=True)
class SpecialPrice:
    """A persisted override record.

    Instances are produced by the override store; the ``__init__`` does
    no validation so the repository can reconstitute stored rows as-is.
    Use ``normalize_key()`` to validate identifiers before writing.
    """

    id: str
    user_id: str
    product_id: str
    price: Money
    note: str
    created_at: datetime
    updated_at: datetime

    @property
    def was_updated(self) -> bool:
        """True once the record has been rewritten after creation."""
        return self.updated_at > self.created_at


def normalize_key(user_id: str | None, product_id: str | None) -> tuple[str, str]:
    """Strip and validate the compound key.

    Raises ValidationError naming every missing field.
    """
    user = (user_id or "").strip()
    product = (product_id or "").strip()

    missing = []
    if not user:
        missing.append("user_id")
    if not product:
        missing.append("product_id")
    if missing:
        raise ValidationError(
            f"Missing required field(s): {', '.join(missing)}", fields=tuple(missing)
        )
    return user, product


def normalize_note(note: str | None) -> str:
    return (note or "").strip()
