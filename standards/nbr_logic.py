import math
from typing import Optional
from core.components import CableSpecs, CableRun
from standards.nbr_tables import (
    CONNECTOR_TABLE, TIER_COLOR_CLASSES, DEFAULT_COLOR_CLASS, CABLE_CAPACITY,
    COPPER_RESISTIVITY, VOLTAGE_DROP_LIMIT, K_SINGLE_PHASE, K_THREE_PHASE
)

class NBRLogic:

    @staticmethod
    def get_cable_specs(current_amps: float) -> CableSpecs:
        """
        Cable gauge and connector for a circuit current.
        The current is rounded up before the lookup (safety margin), so 10.1 A
        already falls in the 16 A tier. Zero or negative currents get the
        first tier. NaN and +inf get the last one.
        """
        # NaN fails every bound and lands on the last row
        rounded = math.ceil(current_amps) if math.isfinite(current_amps) else current_amps

        # Last row has no upper bound
        _, gauge, connector, connector_amps, color = next(
            row for row in CONNECTOR_TABLE if row[0] is None or rounded <= row[0]
        )
        return CableSpecs(gauge_mm2=gauge, connector_type=connector,
                          connector_amps=connector_amps, color=color)

    @staticmethod
    def cable_color_class(color: str) -> str:
        return TIER_COLOR_CLASSES.get(color, DEFAULT_COLOR_CLASS)

    @staticmethod
    def calculate_cable_details(amps: float, voltage: float, is_three_phase: bool) -> Optional[CableRun]:
        """
        Smallest gauge whose capacity covers the current, and the longest run
        that keeps the voltage drop within the limit:

            L = (e% * V * S) / (k * rho * I)

        k = 2 for single-phase/biphase, 1.732 for three-phase. Returns None
        when there is no load.
        """
        if amps <= 0:
            return None

        # 1. Capacity criterion
        selected = None
        for gauge, capacity in CABLE_CAPACITY.items():
            if capacity >= amps:
                selected = (gauge, capacity)
                break

        if selected is None:
            return CableRun(gauge_mm2=None, capacity_amps=0, max_distance_m=0)

        gauge, capacity = selected

        # 2. Voltage drop criterion
        k = K_THREE_PHASE if is_three_phase else K_SINGLE_PHASE
        max_dist = (VOLTAGE_DROP_LIMIT * voltage * gauge) / (k * COPPER_RESISTIVITY * amps)

        return CableRun(gauge_mm2=gauge, capacity_amps=capacity, max_distance_m=math.floor(max_dist))
