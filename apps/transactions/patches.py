from dataclasses import dataclass, fields
from typing import Any

from apps.people.patches import UNSET, diff_patch


@dataclass(frozen=True)
class TransactionPatch:
    """Requested edit to a ledger entry. Unset fields are left unchanged."""

    kind: Any = UNSET
    amount: Any = UNSET
    note: Any = UNSET
    created_at: Any = UNSET

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is UNSET for f in fields(self))

    def changes(self, transaction) -> dict:
        return diff_patch(self, transaction)
