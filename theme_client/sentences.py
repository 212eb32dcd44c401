from __future__ import annotations

from collections.abc import Mapping, Sequence


def to_messages(errors: Mapping[str, Sequence[str]]) -> list[str]:
    """Flatten a field-error map into ``"<attribute> <message>"`` items.

    Attributes are visited in mapping order; messages keep the order the API
    returned them in.
    """
    return [f"{attribute} {message}" for attribute, messages in errors.items() for message in messages]


def to_sentence(items: Sequence[str]) -> str:
    if not items:
        return ""
    if len(items) == 1:
        return items[0]
    if len(items) == 2:
        return f"{items[0]} and {items[1]}"
    return f"{', '.join(items[:-1])}, and {items[-1]}"
