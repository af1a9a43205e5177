"""Deterministic accessory identities."""

from __future__ import annotations

import hashlib

_UUID_TEMPLATE = "xxxxxxxx-xxxx-4xxx-yxxx-xxxxxxxxxxxx"


def generate_uuid(label: str) -> str:
    """Derive a stable accessory UUID from a label.

    Uses the same SHA-1 based layout as the HomeKit host's ``uuid.generate`` so
    identities cached by the host under a label keep matching across runs.
    """
    digest = hashlib.sha1(label.encode("utf-8")).hexdigest()
    chars: list[str] = []
    index = 0
    for placeholder in _UUID_TEMPLATE:
        if placeholder == "x":
            chars.append(digest[index])
            index += 1
        elif placeholder == "y":
            chars.append(format((int(digest[index], 16) & 0x3) | 0x8, "x"))
            index += 1
        else:
            chars.append(placeholder)
    return "".join(chars)
