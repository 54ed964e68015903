import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from core.models import Voltage

UNIVERSAL_MARKERS = ("bi", "auto", "uni")  # Bivolt, Autovolt, Universal

class VoltageBucket(Enum):
    UNIVERSAL = 0  # Works on any network
    LOW = 1        # 110V / 127V
    MID = 2        # 220V / 240V
    HIGH = 3       # 380V / 440V
    OTHER = -1     # Out of every named range

# Inclusive ranges (V)
BUCKET_RANGES = [
    (90, 140, VoltageBucket.LOW),
    (200, 250, VoltageBucket.MID),
    (340, 480, VoltageBucket.HIGH),
]

@dataclass(frozen=True)
class VoltageReading:
    bucket: VoltageBucket
    volts: Optional[int] = None  # Digits read from the rating, None when universal

def parse_voltage(v: Voltage) -> VoltageReading:
    """
    Reads an equipment or network voltage rating.

    Marked ratings ("Bivolt", "Autovolt", "Universal") and ratings without
    digits are universal. Otherwise the digits are read as an integer, so
    "220V" and "220" are the same rating and "110-240V" reads as 110240.
    Every voltage outside the named ranges shares the OTHER bucket, which
    makes two different out-of-range ratings compatible with each other.
    """
    if isinstance(v, float) and v.is_integer():
        v = int(v)  # 220.0 reads as 220, not 2200
    val = str(v).lower()
    if any(marker in val for marker in UNIVERSAL_MARKERS):
        return VoltageReading(VoltageBucket.UNIVERSAL)

    digits = re.sub(r"[^0-9]", "", val)
    if not digits:
        return VoltageReading(VoltageBucket.UNIVERSAL)

    num = int(digits)
    for low, high, bucket in BUCKET_RANGES:
        if low <= num <= high:
            return VoltageReading(bucket, num)
    return VoltageReading(VoltageBucket.OTHER, num)

def get_voltage_bucket(v: Voltage) -> VoltageBucket:
    return parse_voltage(v).bucket

def is_compatible(system_voltage: Voltage, equipment_voltage: Voltage) -> bool:
    """True if the equipment can be plugged into a network of system_voltage."""
    eq_bucket = get_voltage_bucket(equipment_voltage)
    return eq_bucket is VoltageBucket.UNIVERSAL or eq_bucket is get_voltage_bucket(system_voltage)

def numeric_voltage(v: Voltage) -> float:
    """Voltage as a number for arithmetic; 0 when the rating has no digits."""
    if isinstance(v, (int, float)):
        return float(v)
    reading = parse_voltage(v)
    return float(reading.volts) if reading.volts is not None else 0.0
