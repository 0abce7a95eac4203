"""Breakout label arithmetic.

A breakout label has the form ``"<factor>x<speed>"``: ``"4x100G"`` splits one
physical port into four 100G lanes. Port speeds are labels such as ``"400G"``
whose leading integer is the speed in Gbps.

Lookups never fail: a speed or mode without a matching breakout entry
resolves to factor 1 on the configured port speed.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from fabricmetrics.model.topology import BreakoutOption, LegacyBreakoutOption

_LABEL_RE = re.compile(r"(\d+)x(\d+G)")
_LEADING_FACTOR_RE = re.compile(r"\s*(\d+)\s*x")
_DIGITS_RE = re.compile(r"\d+")


@dataclass(frozen=True)
class BreakoutResolution:
    """Outcome of looking up a breakout mode.

    Attributes:
        factor: Lanes per physical port (>= 1).
        wire_speed: Speed label of one lane, used to price optics.
        matched: True when an entry for the speed and mode was found.
    """

    factor: int
    wire_speed: str
    matched: bool


def speed_to_gbps(label: Optional[str], default: int = 0) -> int:
    """Return the leading integer of a speed label, or ``default``.

    Examples:
        >>> speed_to_gbps("400G")
        400
        >>> speed_to_gbps("n/a", default=100)
        100
    """
    if not label:
        return default
    match = _DIGITS_RE.search(label)
    return int(match.group(0)) if match else default


def wire_speed_of(mode: str, fallback: str) -> str:
    """Return the lane speed encoded in a breakout label.

    ``"4x100G"`` gives ``"100G"``; a label without that pattern gives
    ``fallback``.
    """
    match = _LABEL_RE.search(mode or "")
    return match.group(2) if match else fallback


def leading_factor(label: str) -> Optional[int]:
    """Return the ``<factor>`` of a ``"<factor>x..."`` label, if present."""
    match = _LEADING_FACTOR_RE.match(label or "")
    return int(match.group(1)) if match else None


def resolve_breakout(
    options: Mapping[str, Sequence[BreakoutOption]],
    port_speed: str,
    mode: str,
) -> BreakoutResolution:
    """Resolve ``mode`` among the breakout options offered for ``port_speed``.

    Args:
        options: Current-schema mapping of speed label to options.
        port_speed: Physical port speed label.
        mode: Selected breakout label.

    Returns:
        The option's factor and lane speed when found; otherwise factor 1 on
        ``port_speed``.
    """
    for option in options.get(port_speed, ()):
        if option.type == mode:
            return BreakoutResolution(
                factor=option.factor,
                wire_speed=wire_speed_of(mode, port_speed),
                matched=True,
            )
    return BreakoutResolution(factor=1, wire_speed=port_speed, matched=False)


def legacy_breakout_factor(
    options: Sequence[LegacyBreakoutOption], link_type: str
) -> Optional[int]:
    """Return the breakout factor applying to a legacy link type.

    The first enabled option whose label contains ``link_type`` applies, and
    its factor is the label's leading integer. Returns None when no enabled
    option matches or the matching label carries no usable factor.
    """
    for option in options:
        if option.enabled and link_type in option.type:
            factor = leading_factor(option.type)
            if factor is None or factor < 1:
                return None
            return factor
    return None
