"""Helpers for YAML-sourced topology records."""

from typing import Any, Dict, Mapping, TypeVar

V = TypeVar("V")


def normalize_speed_label(label: Any) -> str:
    """Return a canonical port-speed label.

    YAML reads a bare ``100`` as an int and hand-written files often use a
    lowercase unit. Both are mapped to the ``<digits>G`` form used as keys
    in ``opticsCost``, ``powerUsage.optics`` and ``breakoutOptions``.

    Examples:
        >>> normalize_speed_label(100)
        '100G'
        >>> normalize_speed_label(" 400g ")
        '400G'
        >>> normalize_speed_label("4x25G")
        '4x25G'
    """
    if isinstance(label, bool):
        return str(label)
    if isinstance(label, int):
        return f"{label}G"
    text = str(label).strip()
    if text[:-1].isdigit() and text[-1:] in ("g", "G"):
        return text[:-1] + "G"
    if text.isdigit():
        return text + "G"
    return text


def normalize_speed_keys(data: Mapping[Any, V]) -> Dict[str, V]:
    """Return a copy of ``data`` keyed by canonical speed labels.

    Later duplicates (for example ``100`` and ``"100G"`` in the same mapping)
    win, matching YAML's own last-key-wins rule.
    """
    return {normalize_speed_label(key): value for key, value in data.items()}
