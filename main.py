import datetime
import json
import logging
import sys

from core.balancer import (
    balance_phases, balance_label, calculate_balance_quality, check_phase_overload,
    default_mainpower_config, is_under_provisioned, phase_load_percent, update_phase_loads
)
from core.calculator import aggregate_totals, breaker_load_percent, port_totals
from core.circuits import add_equipment_to_port, new_port
from core.config import get_settings
from core.errors import DistributionError
from core.models import DistributionProject, Equipment
from core.report import feeder_run, to_excel
from standards.nbr_logic import NBRLogic


def setup_logging():
    logging.basicConfig(
        level=get_settings().log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def load_project(path):
    with open(path, encoding="utf-8") as f:
        return DistributionProject.from_dict(json.load(f))


def get_project_input():
    settings = get_settings()
    print("\n--- Projeto de Distribuição ---")
    name = input("Nome do projeto: ").strip() or "Projeto"
    try:
        voltage = float(input(f"Tensão do sistema (V) [{settings.default_voltage:g}]: ") or settings.default_voltage)
    except ValueError:
        voltage = settings.default_voltage

    ports = []
    while True:
        print(f"\n[Circuito #{len(ports)+1}]")
        c_name = input("Nome do circuito: ").strip()
        if not c_name:
            break
        try:
            abbr = input("Abreviação (até 5): ").strip() or c_name
            breaker = float(input(f"Disjuntor (A) [{settings.default_port_breaker_amps:g}]: ")
                            or settings.default_port_breaker_amps)
            port = new_port(c_name, abbr, breaker)

            while True:
                eq_name = input("  Equipamento (vazio para terminar): ").strip()
                if not eq_name:
                    break
                watts = float(input("  Potência (W): "))
                eq_voltage = input(f"  Tensão (V ou Bivolt) [{voltage:g}]: ").strip() or voltage
                pf = float(input("  Fator de Potência [1.0]: ") or 1.0)
                qty = int(input("  Quantidade [1]: ") or 1)
                equipment = Equipment(id=f"{eq_name}-{eq_voltage}", name=eq_name, watts=watts,
                                      voltage=eq_voltage, power_factor=pf).with_derived_amperes()
                try:
                    for _ in range(qty):
                        port = add_equipment_to_port(port, equipment, voltage)
                except DistributionError as e:
                    print(f"  {e}")
            ports.append(port)
        except ValueError as e:
            print(f"Erro na entrada de dados: {e}. Tente novamente.")

    return DistributionProject(id="", name=name, voltage_system=voltage, ports=ports)


def print_circuits(project):
    voltage = project.voltage_system
    print("-" * 110)
    print(f"{'Circuito':<16} | {'Abrev':<5} | {'W':>8} | {'VA':>8} | {'A':>7} | {'Disj.':>6} | {'Carga%':>6} | {'Bitola':>6} | {'Conector'}")
    print("-" * 110)
    for port in project.ports:
        t = port_totals(port, voltage)
        specs = NBRLogic.get_cable_specs(t.amps)
        pct = breaker_load_percent(t.amps, port.breaker_amps)
        warn = " (!)" if pct > 100 else ""
        print(f"{port.name[:16]:<16} | {port.abbreviation:<5} | {t.watts:>8.0f} | {t.va:>8.0f} | {t.amps:>7.2f} | "
              f"{port.breaker_amps:>6g} | {pct:>6.1f} | {specs.gauge_mm2:>6g} | {specs.connector_type}{warn}")
    print("-" * 110)

    totals = aggregate_totals(project.ports, voltage)
    print(f"Potência Total: {totals.watts:.0f} W | {totals.va:.0f} VA | Corrente Total: {totals.amps:.2f} A")
    run = feeder_run(project.ports, voltage, project.mainpower_config)
    if run is not None:
        print(f"Alimentador sugerido: {run.label} mm² (até {run.max_distance_m} m com queda de 4%)")


def print_phases(project):
    config = project.mainpower_config
    print(f"\nBalanceamento de Fases ({config.system_type.value}, {config.total_ports} canais)")
    for phase in config.phases:
        print(f"  Fase {phase.phase_id}: {phase.current_load:6.1f} A / {phase.max_amps:6.1f} A "
              f"({phase_load_percent(phase):5.1f}%) - {len(phase.ports)} circuitos")

    quality = calculate_balance_quality(config)
    print(f"Diferença entre fases: {quality:.1f} pp ({balance_label(quality)})")

    overload = check_phase_overload(config)
    if overload.has_overload:
        print(f"[ALERTA] Fases sobrecarregadas: {', '.join(overload.overloaded_phase_ids)}")
    if is_under_provisioned(config, len(project.ports)):
        print(f"[ALERTA] Mainpower com {config.total_ports} canais para {len(project.ports)} circuitos.")


def main():
    setup_logging()
    print("==========================================================")
    print(" LIGHTLOAD - DISTRIBUIÇÃO DE ENERGIA E BALANCEAMENTO")
    print("==========================================================")

    try:
        project = load_project(sys.argv[1]) if len(sys.argv) > 1 else get_project_input()
    except (OSError, ValueError, KeyError) as e:
        print(f"Erro ao carregar projeto: {e}")
        sys.exit(1)

    if not project.ports:
        print("Nenhum circuito informado.")
        sys.exit()

    config = project.mainpower_config or default_mainpower_config()
    if config.auto_balance or not any(p.ports for p in config.phases):
        config = balance_phases(project.ports, project.voltage_system, config)
    else:
        config = update_phase_loads(config, project.ports, project.voltage_system)
    project.mainpower_config = config

    print_circuits(project)
    print_phases(project)

    ask = input("\nExportar relatório para Excel? (s/n): ").lower()
    if ask == 's':
        filename = f"Relatorio_Carga_{datetime.datetime.now().strftime('%Y%m%d_%H%M%S')}.xlsx"
        with open(filename, "wb") as f:
            f.write(to_excel(project))
        print(f"\n[INFO] Excel gerado: {filename}")


if __name__ == "__main__":
    main()
