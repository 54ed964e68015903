import logging
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import List, Optional

from core.calculator import aggregate_totals, items_totals, ports_missing_breaker
from core.config import get_settings
from core.errors import IncompatibleVoltageError, MissingBreakerError, ProjectValidationError
from core.models import (
    Calculation, CalculationItem, DistributionProject, Equipment, GeneratorConfig,
    MainpowerConfig, Port, Voltage
)
from core.voltage import is_compatible
from standards.nbr_tables import DEFAULT_PORT_COLOR, PORT_COLORS

logger = logging.getLogger(__name__)

MAX_ABBREVIATION = 5


def _new_id() -> str:
    return uuid.uuid4().hex


def _abbreviate(text: str) -> str:
    return text.upper()[:MAX_ABBREVIATION]


# --- Circuits ---

def new_port(name: str, abbreviation: str = "", breaker_amps: Optional[float] = None,
             color: str = DEFAULT_PORT_COLOR, port_id: Optional[str] = None) -> Port:
    if breaker_amps is None:
        breaker_amps = get_settings().default_port_breaker_amps
    return Port(
        id=port_id or _new_id(),
        name=name,
        abbreviation=_abbreviate(abbreviation),
        color=color,
        breaker_amps=float(breaker_amps),
        items=[],
    )


def edit_port(port: Port, name: Optional[str] = None, abbreviation: Optional[str] = None,
              breaker_amps: Optional[float] = None, color: Optional[str] = None) -> Port:
    return replace(
        port,
        name=port.name if name is None else name,
        abbreviation=port.abbreviation if abbreviation is None else _abbreviate(abbreviation),
        breaker_amps=port.breaker_amps if breaker_amps is None else float(breaker_amps),
        color=port.color if color is None else color,
        items=list(port.items),
    )


def bulk_create_ports(existing: List[Port], quantity: int, breaker_amps: Optional[float] = None,
                      prefix: str = "Dimmer") -> List[Port]:
    """
    Appends quantity circuits named "<prefix> 1", "<prefix> 2", ...
    Abbreviations use the first 3 letters of the prefix plus the number;
    colors cycle through the palette after the existing circuits.
    """
    if breaker_amps is None:
        breaker_amps = get_settings().default_port_breaker_amps
    created = []
    for i in range(1, quantity + 1):
        color = PORT_COLORS[(len(existing) + i) % len(PORT_COLORS)]
        created.append(Port(
            id=_new_id(),
            name=f"{prefix} {i}",
            abbreviation=f"{prefix[:3].upper()}{i}",
            color=color,
            breaker_amps=float(breaker_amps),
            items=[],
        ))
    logger.debug("Created %d circuits with prefix %r", quantity, prefix)
    return list(existing) + created


def remove_port(ports: List[Port], port_id: str) -> List[Port]:
    return [p for p in ports if p.id != port_id]


# --- Items ---

def add_equipment(items: List[CalculationItem], equipment: Equipment,
                  system_voltage: Voltage) -> List[CalculationItem]:
    """
    Adds one unit of equipment to a list of items.
    Raises IncompatibleVoltageError when the equipment cannot run on
    system_voltage. An existing line for the same equipment gets +1.
    """
    if not is_compatible(system_voltage, equipment.voltage):
        logger.warning("Blocked %s (%sV) on a %sV system", equipment.name, equipment.voltage, system_voltage)
        raise IncompatibleVoltageError(equipment.voltage, system_voltage)

    if any(i.equipment_id == equipment.id for i in items):
        return [replace(i, quantity=i.quantity + 1) if i.equipment_id == equipment.id else i for i in items]
    return list(items) + [CalculationItem(equipment_id=equipment.id, quantity=1, equipment=equipment)]


def add_equipment_to_port(port: Port, equipment: Equipment, system_voltage: Voltage) -> Port:
    return replace(port, items=add_equipment(port.items, equipment, system_voltage))


def set_item_quantity(items: List[CalculationItem], equipment_id: str, quantity: int) -> List[CalculationItem]:
    # Quantity below 1 removes the line
    if quantity < 1:
        return [i for i in items if i.equipment_id != equipment_id]
    return [replace(i, quantity=quantity) if i.equipment_id == equipment_id else i for i in items]


def change_item_quantity(port: Port, equipment_id: str, delta: int) -> Port:
    items = [
        replace(i, quantity=i.quantity + delta) if i.equipment_id == equipment_id else i
        for i in port.items
    ]
    return replace(port, items=[i for i in items if i.quantity > 0])


def remove_item(port: Port, equipment_id: str) -> Port:
    return replace(port, items=[i for i in port.items if i.equipment_id != equipment_id])


def prune_items(items: List[CalculationItem]) -> List[CalculationItem]:
    """Drops lines with zero (or negative) quantity."""
    return [i for i in items if i.quantity > 0]


def _transfer_item(ports: List[Port], source_index: int, target_index: int,
                   item_index: int, keep_source: bool) -> List[Port]:
    if source_index == target_index:
        return list(ports)

    source, target = ports[source_index], ports[target_index]
    item = source.items[item_index]

    result = list(ports)
    if not keep_source:
        result[source_index] = replace(source, items=source.items[:item_index] + source.items[item_index + 1:])
    result[target_index] = replace(target, items=target.items + [replace(item)])
    return result


def move_item(ports: List[Port], source_index: int, target_index: int, item_index: int) -> List[Port]:
    return _transfer_item(ports, source_index, target_index, item_index, keep_source=False)


def copy_item(ports: List[Port], source_index: int, target_index: int, item_index: int) -> List[Port]:
    return _transfer_item(ports, source_index, target_index, item_index, keep_source=True)


# --- Saved records ---

def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def build_distribution_project(name: str, voltage: float, ports: List[Port],
                               generator: Optional[GeneratorConfig] = None,
                               mainpower: Optional[MainpowerConfig] = None,
                               description: str = "", technical_responsible: str = "",
                               project_id: Optional[str] = None,
                               event_id: Optional[str] = None) -> DistributionProject:
    """
    Snapshot of a distribution plan ready to be stored.

    Every circuit needs a breaker rating above 0. Totals are taken now and
    are not kept in sync afterwards. Generator and mainpower configs are only
    stored when enabled.
    """
    if not name or not name.strip():
        raise ProjectValidationError("Give the project a name.")

    missing = ports_missing_breaker(ports)
    if missing:
        raise MissingBreakerError([p.name for p in missing])

    totals = aggregate_totals(ports, voltage)
    return DistributionProject(
        id=project_id or "",
        name=name,
        description=description,
        technical_responsible=technical_responsible,
        voltage_system=voltage,
        ports=list(ports),
        total_watts=totals.watts,
        total_amperes=totals.amps,
        created_at=_now(),
        generator_config=generator if generator is not None and generator.enabled else None,
        mainpower_config=mainpower if mainpower is not None and mainpower.enabled else None,
        event_id=event_id,
    )


def build_calculation(name: str, voltage: float, items: List[CalculationItem],
                      description: str = "", calculation_id: Optional[str] = None) -> Calculation:
    if not name or not name.strip():
        raise ProjectValidationError("Give the calculation a name.")

    totals = items_totals(items, voltage)
    return Calculation(
        id=calculation_id or "",
        name=name,
        description=description,
        voltage_system=voltage,
        items=list(items),
        total_watts=totals.watts,
        total_amperes=totals.amps,
        created_at=_now(),
    )
