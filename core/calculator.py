from typing import Iterable, List, Optional

from core.components import InventoryStats, LoadStatus, LoadTotals
from core.models import CalculationItem, Equipment, Port, Voltage
from core.voltage import numeric_voltage
from standards.nbr_tables import DANGER_LOAD_PERCENT, WARNING_LOAD_PERCENT

def effective_power_factor(equipment: Equipment) -> float:
    # Missing or zero power factor behaves as a resistive load
    return equipment.power_factor or 1.0

def item_load(item: CalculationItem, voltage: float) -> LoadTotals:
    """
    Load of one line: W = watts * qty, VA = W / pf, I = W / (V * pf).
    A system voltage of 0 (or missing) gives no current estimate (0 A).
    """
    watts = item.equipment.watts * item.quantity
    pf = effective_power_factor(item.equipment)
    return LoadTotals(
        watts=watts,
        va=watts / pf,
        amps=watts / (voltage * pf) if voltage else 0.0,
        count=item.quantity,
    )

def items_totals(items: Iterable[CalculationItem], voltage: float) -> LoadTotals:
    total = LoadTotals()
    for item in items:
        total = total + item_load(item, voltage)
    return total

def port_totals(port: Port, voltage: float) -> LoadTotals:
    """Totals of a circuit at the system voltage (ports carry no voltage of their own)."""
    return items_totals(port.items, voltage)

def aggregate_totals(ports: Iterable[Port], voltage: float) -> LoadTotals:
    total = LoadTotals()
    for port in ports:
        total = total + port_totals(port, voltage)
    return total

def amps_per_phase(total_amps: float, phases: int) -> float:
    """
    Current used for breaker sizing in the simple calculator.

    Three-phase networks divide the single-phase equivalent current by 3
    (balanced load approximation). Any other phase count returns the total.
    """
    if phases == 3:
        return total_amps / 3
    return total_amps

def breaker_load_percent(amps: float, breaker_amps: Optional[float]) -> float:
    if not breaker_amps or breaker_amps <= 0:
        return 0.0
    return (amps / breaker_amps) * 100

def breaker_status(amps: float, breaker_amps: Optional[float],
                   warning_percent: float = WARNING_LOAD_PERCENT) -> LoadStatus:
    """Status of a circuit against its breaker: neutral, safe, warning or danger."""
    if not breaker_amps or breaker_amps <= 0:
        return LoadStatus.NEUTRAL
    percent = breaker_load_percent(amps, breaker_amps)
    if percent > DANGER_LOAD_PERCENT:
        return LoadStatus.DANGER
    if percent > warning_percent:
        return LoadStatus.WARNING
    return LoadStatus.SAFE

def phase_load_status(percent: float, warning_percent: float = WARNING_LOAD_PERCENT) -> LoadStatus:
    # Phase cards flag the limits themselves (inclusive)
    if percent >= DANGER_LOAD_PERCENT:
        return LoadStatus.DANGER
    if percent >= warning_percent:
        return LoadStatus.WARNING
    return LoadStatus.OK

def overloaded_ports(ports: Iterable[Port], voltage: float) -> List[Port]:
    return [p for p in ports
            if p.has_valid_breaker and port_totals(p, voltage).amps > p.breaker_amps]

def ports_missing_breaker(ports: Iterable[Port]) -> List[Port]:
    return [p for p in ports if not p.has_valid_breaker]

def derive_amperes(watts: float, voltage: Voltage, power_factor: float, previous: float = 0.0) -> float:
    """Rated current of an equipment, rounded to 2 decimals. Keeps previous when watts or voltage is missing."""
    w = watts or 0
    v = numeric_voltage(voltage or 0)
    pf = power_factor or 1.0
    if w > 0 and v > 0:
        return round(w / (v * pf), 2)
    return previous

def inventory_stats(equipments: Iterable[Equipment]) -> InventoryStats:
    total_items = 0
    total_va = 0.0
    for eq in equipments:
        owned = eq.quantity_owned or 0
        total_items += owned
        total_va += (eq.watts / effective_power_factor(eq)) * owned
    return InventoryStats(total_items=total_items, total_kva=round(total_va / 1000, 2))
