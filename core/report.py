import io
from typing import List, Optional

import pandas as pd

from core.balancer import (
    calculate_balance_quality, balance_label, check_phase_overload,
    is_under_provisioned, phase_load_percent
)
from core.calculator import (
    aggregate_totals, amps_per_phase, breaker_load_percent, breaker_status, phase_load_status, port_totals
)
from core.components import CableRun
from core.config import get_settings
from core.models import DistributionProject, MainpowerConfig, Port
from standards.nbr_logic import NBRLogic

CIRCUIT_COLUMNS = [
    "Circuito", "Abrev.", "Disjuntor (A)", "Potência (W)", "VA", "Corrente (A)",
    "Carga %", "Status", "Bitola (mm²)", "Conector", "Fase",
]
PHASE_COLUMNS = ["Fase", "Circuitos", "Carga (A)", "Capacidade (A)", "Carga %", "Status"]


def _phase_of(config: Optional[MainpowerConfig]) -> dict:
    if config is None:
        return {}
    return {pid: phase.phase_id for phase in config.phases for pid in phase.ports}


def circuit_table(ports: List[Port], voltage: float, config: Optional[MainpowerConfig] = None,
                  warning_percent: Optional[float] = None) -> pd.DataFrame:
    """One row per circuit with its load, breaker usage and cable recommendation."""
    if warning_percent is None:
        warning_percent = get_settings().breaker_warning_percent
    phase_of = _phase_of(config)
    rows = []
    for port in ports:
        totals = port_totals(port, voltage)
        specs = NBRLogic.get_cable_specs(totals.amps)
        rows.append({
            "Circuito": port.name,
            "Abrev.": port.abbreviation,
            "Disjuntor (A)": port.breaker_amps,
            "Potência (W)": round(totals.watts, 1),
            "VA": round(totals.va, 1),
            "Corrente (A)": round(totals.amps, 2),
            "Carga %": round(breaker_load_percent(totals.amps, port.breaker_amps), 1),
            "Status": breaker_status(totals.amps, port.breaker_amps, warning_percent).value,
            "Bitola (mm²)": specs.gauge_mm2,
            "Conector": specs.connector_type,
            "Fase": phase_of.get(port.id, "-"),
        })
    return pd.DataFrame(rows, columns=CIRCUIT_COLUMNS)


def phase_table(config: MainpowerConfig, warning_percent: Optional[float] = None) -> pd.DataFrame:
    if warning_percent is None:
        warning_percent = get_settings().breaker_warning_percent
    rows = []
    for phase in config.phases:
        percent = phase_load_percent(phase)
        rows.append({
            "Fase": phase.phase_id,
            "Circuitos": len(phase.ports),
            "Carga (A)": round(phase.current_load, 2),
            "Capacidade (A)": round(phase.max_amps, 1),
            "Carga %": round(percent, 1),
            "Status": phase_load_status(percent, warning_percent).value,
        })
    return pd.DataFrame(rows, columns=PHASE_COLUMNS)


def feeder_run(ports: List[Port], voltage: float, config: Optional[MainpowerConfig] = None) -> Optional[CableRun]:
    """
    Feeder cable for the whole distribution. Three-phase systems size it for
    the per-phase current; other systems carry the total current.
    """
    phases = config.system_type.phase_count if config is not None else 1
    total = aggregate_totals(ports, voltage).amps
    return NBRLogic.calculate_cable_details(amps_per_phase(total, phases), voltage, phases == 3)


def summary_table(project: DistributionProject) -> pd.DataFrame:
    totals = aggregate_totals(project.ports, project.voltage_system)
    rows = [
        {"Parâmetro": "Projeto", "Valor": project.name},
        {"Parâmetro": "Tensão do sistema (V)", "Valor": project.voltage_system},
        {"Parâmetro": "Circuitos", "Valor": len(project.ports)},
        {"Parâmetro": "Potência total (W)", "Valor": round(totals.watts, 1)},
        {"Parâmetro": "Potência aparente (VA)", "Valor": round(totals.va, 1)},
        {"Parâmetro": "Corrente total (A)", "Valor": round(totals.amps, 2)},
    ]
    run = feeder_run(project.ports, project.voltage_system, project.mainpower_config)
    if run is not None:
        rows += [
            {"Parâmetro": "Alimentador (mm²)", "Valor": run.label},
            {"Parâmetro": "Distância máxima (m)", "Valor": run.max_distance_m},
        ]
    config = project.mainpower_config
    if config is not None and config.phases:
        quality = calculate_balance_quality(config)
        overload = check_phase_overload(config)
        rows += [
            {"Parâmetro": "Sistema", "Valor": config.system_type.value},
            {"Parâmetro": "Canais", "Valor": config.total_ports},
            {"Parâmetro": "Balanceamento (pp)", "Valor": round(quality, 1)},
            {"Parâmetro": "Qualidade", "Valor": balance_label(quality)},
            {"Parâmetro": "Fases sobrecarregadas", "Valor": ", ".join(overload.overloaded_phase_ids) or "-"},
            {"Parâmetro": "Canais insuficientes",
             "Valor": "Sim" if is_under_provisioned(config, len(project.ports)) else "Não"},
        ]
    return pd.DataFrame(rows, columns=["Parâmetro", "Valor"])


def to_excel(project: DistributionProject) -> bytes:
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        summary_table(project).to_excel(writer, index=False, sheet_name="Resumo")
        circuit_table(project.ports, project.voltage_system, project.mainpower_config).to_excel(
            writer, index=False, sheet_name="Circuitos")
        if project.mainpower_config is not None:
            phase_table(project.mainpower_config).to_excel(writer, index=False, sheet_name="Fases")
    return output.getvalue()
