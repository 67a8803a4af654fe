"""
Explicit edit structures.

A patch lists the fields a client asked to change. Fields left at
``UNSET`` are not part of the edit, which keeps "clear this value"
(``None`` or ``''``) distinct from "leave it alone".
"""

from dataclasses import dataclass, fields
from typing import Any, Optional


class _Unset:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return 'UNSET'

    def __bool__(self):
        return False


UNSET: Any = _Unset()


def build_patch(patch_class, data: dict):
    """Build a patch from validated input, ignoring keys it does not know."""
    known = {f.name for f in fields(patch_class)}
    return patch_class(**{key: value for key, value in data.items() if key in known})


def diff_patch(patch, instance) -> dict:
    """
    Compare a patch against a stored record.

    Returns:
        Mapping of attribute name to new value, for set fields whose value
        differs from the instance.
    """
    changes = {}
    for field in fields(patch):
        value = getattr(patch, field.name)
        if value is UNSET:
            continue
        if getattr(instance, field.name) != value:
            changes[field.name] = value
    return changes


@dataclass(frozen=True)
class PersonPatch:
    name: Any = UNSET
    dob: Any = UNSET
    address: Any = UNSET
    photo: Any = UNSET
    group_id: Any = UNSET

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is UNSET for f in fields(self))

    def changes(self, person) -> dict:
        return diff_patch(self, person)


def optional_text(value: Optional[str]) -> str:
    """Blank text fields are stored as empty strings, never NULL."""
    return value or ''
