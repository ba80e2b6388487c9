from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class UnitSpec:
    display: str
    decimal_places: int


BYTE = UnitSpec("B", 0)
KILOBYTE = UnitSpec("KB", 2)
MEGABYTE = UnitSpec("MB", 2)

_UNIT_TIERS = (BYTE, KILOBYTE, MEGABYTE)


@dataclass(frozen=True)
class ScaledSize:
    size: float
    unit: UnitSpec

    def __str__(self) -> str:
        return f"{self.size:.{self.unit.decimal_places}f} {self.unit.display}"


def convert_size(size_in_bytes: object) -> ScaledSize | None:
    if isinstance(size_in_bytes, bool) or not isinstance(size_in_bytes, (int, float)):
        return None
    if not math.isfinite(size_in_bytes):
        return None

    size: float = size_in_bytes
    tier = 0
    while abs(size) >= 1000 and tier < len(_UNIT_TIERS) - 1:
        size = size / 1000
        tier += 1
    return ScaledSize(size=size, unit=_UNIT_TIERS[tier])


def format_size(size_in_bytes: object) -> str:
    scaled = convert_size(size_in_bytes)
    return "" if scaled is None else str(scaled)


def format_percent(fraction: float, decimal_places: int) -> str:
    if math.isnan(fraction):
        return ""
    prefix = "+" if fraction > 0 else ""
    if math.isinf(fraction):
        return f"{prefix}{'Infinity' if fraction > 0 else '-Infinity'}%"
    return f"{prefix}{fraction * 100:.{decimal_places}f}%"
