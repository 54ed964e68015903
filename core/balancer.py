import logging
from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Tuple

from core.calculator import port_totals
from core.components import AssignmentProblems, OverloadReport
from core.config import Settings, get_settings
from core.errors import DistributionError, PhaseCapacityError
from core.models import GeneratorConfig, MainpowerConfig, PhaseConfig, Port, SystemType
from standards.nbr_tables import (
    BALANCE_QUALITY_THRESHOLDS, BALANCE_UNBALANCED_LABEL, DEFAULT_PHASE_MAX_AMPS,
    LOAD_CHANGE_TOLERANCE, PHASE_COLORS, SQRT3
)

logger = logging.getLogger(__name__)


def calculate_port_load(port: Port, voltage: float) -> float:
    """Circuit current in amperes at the system voltage."""
    return port_totals(port, voltage).amps


def balance_phases(ports: List[Port], voltage: float, config: MainpowerConfig) -> MainpowerConfig:
    """
    Distributes circuits across the phases of config.

    Largest load first: circuits are sorted by current (descending) and each
    one goes to the phase with the lowest load so far. Ties go to the first
    phase in config order, and circuits with equal loads keep their input
    order, so re-running on the same circuits gives the same assignment.
    Phase ids, colors and capacities are kept; loads and assignments are
    rebuilt. The returned config has auto_balance set.
    """
    ports_with_load = [(port, calculate_port_load(port, voltage)) for port in ports]
    ports_with_load.sort(key=lambda pl: pl[1], reverse=True)

    phases = [replace(phase, current_load=0.0, ports=[]) for phase in config.phases]
    if ports_with_load and not phases:
        raise DistributionError("No phases configured to receive circuits")

    for port, load in ports_with_load:
        target = min(phases, key=lambda ph: ph.current_load)
        target.ports.append(port.id)
        target.current_load += load
        logger.debug("Circuit %s (%.2f A) -> phase %s", port.id, load, target.phase_id)

    return replace(config, phases=phases, auto_balance=True)


def _ports_by_id(ports: Iterable[Port]) -> Dict[str, Port]:
    by_id: Dict[str, Port] = {}
    for port in ports:
        by_id.setdefault(port.id, port)
    return by_id


def update_phase_loads(config: MainpowerConfig, ports: List[Port], voltage: float) -> MainpowerConfig:
    """Recomputes phase loads from the circuits already assigned to them (no reassignment)."""
    by_id = _ports_by_id(ports)
    phases = []
    for phase in config.phases:
        load = sum(calculate_port_load(by_id[pid], voltage) for pid in phase.ports if pid in by_id)
        phases.append(replace(phase, current_load=load, ports=list(phase.ports)))
    return replace(config, phases=phases)


def check_phase_overload(config: MainpowerConfig) -> OverloadReport:
    overloaded = [p.phase_id for p in config.phases if p.current_load > p.max_amps]
    return OverloadReport(has_overload=bool(overloaded), overloaded_phase_ids=overloaded)


def phase_load_percent(phase: PhaseConfig) -> float:
    # A phase without a rated capacity has no percentage; check_phase_overload still flags it
    if not phase.max_amps or phase.max_amps <= 0:
        return 0.0
    return (phase.current_load / phase.max_amps) * 100


def calculate_balance_quality(config: MainpowerConfig) -> float:
    """Spread between the most and least loaded phase, in percentage points. Lower is better."""
    if not config.phases:
        return 0.0
    percents = [phase_load_percent(p) for p in config.phases]
    return max(percents) - min(percents)


def balance_label(quality: float) -> str:
    for limit, label in BALANCE_QUALITY_THRESHOLDS:
        if quality <= limit:
            return label
    return BALANCE_UNBALANCED_LABEL


def total_phase_load(config: MainpowerConfig) -> float:
    return sum(p.current_load for p in config.phases)


def average_load_percent(config: MainpowerConfig) -> float:
    if not config.phases:
        return 0.0
    return sum(phase_load_percent(p) for p in config.phases) / len(config.phases)


# --- Power source configuration ---

def max_amps_per_phase(system_type: SystemType, generator: Optional[GeneratorConfig] = None,
                       default_amps: float = DEFAULT_PHASE_MAX_AMPS) -> float:
    """
    Phase capacity from the generator rating.

    single:      I = kVA * 1000 / V
    two-phase:   I = (kVA * 1000 / V) / 2
    three-phase: I = kVA * 1000 / (V * 1.732)

    Without an enabled generator every phase gets default_amps.
    """
    if generator is None or not generator.enabled:
        return default_amps

    kva, volts = generator.power_kva, generator.voltage
    if system_type is SystemType.SINGLE:
        return (kva * 1000) / volts
    if system_type is SystemType.TWO_PHASE:
        return ((kva * 1000) / volts) / 2
    return (kva * 1000) / (volts * SQRT3)


def build_phases(system_type: SystemType, max_amps: float) -> List[PhaseConfig]:
    colors = PHASE_COLORS[system_type.value]
    return [PhaseConfig(phase_id=pid, color=color, max_amps=max_amps) for pid, color in colors.items()]


def default_mainpower_config(settings: Optional[Settings] = None) -> MainpowerConfig:
    settings = settings or get_settings()
    return MainpowerConfig(
        enabled=False,
        system_type=SystemType.THREE_PHASE,
        total_ports=settings.default_total_ports,
        phases=build_phases(SystemType.THREE_PHASE, settings.default_phase_max_amps),
        auto_balance=True,
    )


def configure_mainpower(config: MainpowerConfig, system_type: SystemType, ports_per_phase: int,
                        generator: Optional[GeneratorConfig] = None) -> MainpowerConfig:
    """New enabled config for system_type with ports_per_phase channels on each phase."""
    ports_per_phase = max(1, int(ports_per_phase))
    max_amps = max_amps_per_phase(system_type, generator)
    return replace(
        config,
        enabled=True,
        system_type=system_type,
        total_ports=ports_per_phase * system_type.phase_count,
        phases=build_phases(system_type, max_amps),
    )


def apply_generator(config: MainpowerConfig, generator: GeneratorConfig) -> MainpowerConfig:
    """Re-derives every phase capacity from an enabled generator; other configs are returned as is."""
    if not generator.enabled:
        return config
    max_amps = max_amps_per_phase(config.system_type, generator)
    return replace(config, phases=[replace(p, max_amps=max_amps, ports=list(p.ports)) for p in config.phases])


def apply_mainpower_change(previous: MainpowerConfig, new: MainpowerConfig,
                           ports: List[Port], voltage: float) -> MainpowerConfig:
    # Turning auto-balance on rebalances right away
    if new.auto_balance and not previous.auto_balance and ports:
        return balance_phases(ports, voltage, new)
    return new


def refresh_phase_loads(config: MainpowerConfig, ports: List[Port],
                        voltage: float) -> Tuple[MainpowerConfig, bool]:
    """
    Refresh after circuits change. Only runs for an enabled config with
    circuits.

    With auto-balance on, added or removed circuits trigger a rebalance.
    Otherwise the assignment stays and loads are recomputed;
    a change is reported only if some phase moved by more than 0.01 A so
    callers can skip redundant updates.
    """
    if not (config.enabled and ports):
        return config, False

    assigned = {pid for phase in config.phases for pid in phase.ports}
    if config.auto_balance and assigned != {p.id for p in ports}:
        logger.debug("Circuit set changed, rebalancing %d circuits", len(ports))
        return balance_phases(ports, voltage, config), True

    updated = update_phase_loads(config, ports, voltage)
    changed = any(
        abs(new.current_load - old.current_load) > LOAD_CHANGE_TOLERANCE
        for new, old in zip(updated.phases, config.phases)
    )
    return (updated, True) if changed else (config, False)


def is_under_provisioned(config: MainpowerConfig, port_count: int) -> bool:
    return config.enabled and config.total_ports < port_count


def max_circuits_per_phase(config: MainpowerConfig) -> int:
    return config.total_ports // len(config.phases)


def move_port_to_phase(config: MainpowerConfig, port_id: str, target_phase_id: str,
                       ports: List[Port], voltage: float) -> MainpowerConfig:
    """
    Moves one circuit to another phase (drag and drop).

    Unknown circuits or phases, and drops on the circuit's own phase, return
    config unchanged. A target phase already holding
    total_ports // phase_count circuits raises PhaseCapacityError and
    nothing changes. Amperage overload is not checked here.
    """
    source_idx = next((i for i, p in enumerate(config.phases) if port_id in p.ports), -1)
    target_idx = next((i for i, p in enumerate(config.phases) if p.phase_id == target_phase_id), -1)

    if source_idx == -1 or target_idx == -1 or source_idx == target_idx:
        return config

    limit = max_circuits_per_phase(config)
    if len(config.phases[target_idx].ports) >= limit:
        logger.warning("Rejected move of circuit %s: phase %s is full (%d circuits)",
                       port_id, target_phase_id, limit)
        raise PhaseCapacityError(target_phase_id, limit)

    phases = []
    for i, phase in enumerate(config.phases):
        if i == source_idx:
            phase = replace(phase, ports=[pid for pid in phase.ports if pid != port_id])
        elif i == target_idx:
            phase = replace(phase, ports=phase.ports + [port_id])
        phases.append(phase)

    logger.debug("Circuit %s moved to phase %s", port_id, target_phase_id)
    return update_phase_loads(replace(config, phases=phases), ports, voltage)


def assignment_problems(config: MainpowerConfig, ports: List[Port]) -> AssignmentProblems:
    """Checks that every circuit sits on exactly one phase."""
    seen: Dict[str, int] = {}
    for phase in config.phases:
        for pid in phase.ports:
            seen[pid] = seen.get(pid, 0) + 1

    port_ids = [p.id for p in ports]
    known = set(port_ids)
    return AssignmentProblems(
        duplicated=[pid for pid, n in seen.items() if n > 1],
        unassigned=[pid for pid in port_ids if pid not in seen],
        unknown=[pid for pid in seen if pid not in known],
    )
