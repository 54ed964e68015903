from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional
from standards.nbr_tables import LARGEST_GAUGE_LABEL

class LoadStatus(Enum):
    NEUTRAL = "neutral"   # No breaker defined
    SAFE = "safe"
    OK = "ok"
    WARNING = "warning"
    DANGER = "danger"

@dataclass
class LoadTotals:
    watts: float = 0.0
    va: float = 0.0
    amps: float = 0.0
    count: int = 0  # Number of units (sum of quantities)

    def __add__(self, other: "LoadTotals") -> "LoadTotals":
        return LoadTotals(
            watts=self.watts + other.watts,
            va=self.va + other.va,
            amps=self.amps + other.amps,
            count=self.count + other.count,
        )

@dataclass
class CableSpecs:
    gauge_mm2: float
    connector_type: str
    connector_amps: int
    color: str  # Display tier

@dataclass
class CableRun:
    gauge_mm2: Optional[float]  # None when no gauge in the table covers the current
    capacity_amps: float
    max_distance_m: int

    @property
    def exceeds_table(self) -> bool:
        return self.gauge_mm2 is None

    @property
    def label(self) -> str:
        if self.gauge_mm2 is None:
            return LARGEST_GAUGE_LABEL
        return f"{self.gauge_mm2:g}"

@dataclass
class OverloadReport:
    has_overload: bool
    overloaded_phase_ids: List[str] = field(default_factory=list)

@dataclass
class AssignmentProblems:
    duplicated: List[str] = field(default_factory=list)   # Port ids in more than one phase
    unassigned: List[str] = field(default_factory=list)   # Ports in no phase
    unknown: List[str] = field(default_factory=list)      # Phase entries with no port

    @property
    def ok(self) -> bool:
        return not (self.duplicated or self.unassigned or self.unknown)

@dataclass
class InventoryStats:
    total_items: int
    total_kva: float
