import streamlit as st
import pandas as pd
from core.balancer import (
    balance_phases, balance_label, calculate_balance_quality, check_phase_overload,
    configure_mainpower, default_mainpower_config, is_under_provisioned, move_port_to_phase, refresh_phase_loads,
    total_phase_load
)
from core.calculator import aggregate_totals
from core.circuits import add_equipment_to_port, new_port
from core.config import get_settings
from core.errors import DistributionError, PhaseCapacityError
from core.models import DistributionProject, Equipment, GeneratorConfig, SystemType
from core.report import circuit_table, feeder_run, phase_table, to_excel

settings = get_settings()

# --- Page Config ---
st.set_page_config(
    page_title="LightLoad - Distribuição de Energia",
    page_icon="⚡",
    layout="wide",
    initial_sidebar_state="expanded"
)

# --- Custom CSS ---
st.markdown("""
<style>
    .main-header { font-family: 'Inter', sans-serif; color: #1E3A8A; font-weight: 700; }
    .stDataFrame { border-radius: 10px; overflow: hidden; }
</style>
""", unsafe_allow_html=True)

# --- Session State Init ---
INPUT_COLUMNS = ["Circuito", "Disjuntor", "Equipamento", "Potencia", "Tensao", "FP", "Qtd"]

if 'items_df' not in st.session_state:
    st.session_state.items_df = pd.DataFrame(columns=INPUT_COLUMNS)
if 'mainpower' not in st.session_state:
    st.session_state.mainpower = None

# --- Helper: Build Circuits ---
def _num(value, default):
    return default if value is None or pd.isna(value) or value == "" else float(value)

def build_ports(df, voltage):
    ports = {}
    errors = []
    for idx, row in df.iterrows():
        try:
            name = str(row["Circuito"]).strip()
            if not name or name == "nan":
                continue
            if name not in ports:
                ports[name] = new_port(name, name, _num(row["Disjuntor"], settings.default_port_breaker_amps), port_id=name)
            eq_voltage = voltage if pd.isna(row["Tensao"]) or not str(row["Tensao"]).strip() else row["Tensao"]
            equipment = Equipment(
                id=f"{row['Equipamento']}-{eq_voltage}", name=str(row["Equipamento"]),
                watts=_num(row["Potencia"], 0), voltage=eq_voltage, power_factor=_num(row["FP"], 1.0)
            )
            port = ports[name]
            for _ in range(int(_num(row["Qtd"], 1))):
                port = add_equipment_to_port(port, equipment, voltage)
            ports[name] = port
        except (DistributionError, ValueError, TypeError) as e:
            errors.append(f"Linha {idx+1}: {e}")
    return list(ports.values()), errors

# --- Sidebar ---
with st.sidebar:
    st.title("Configuração")
    voltage = st.number_input("Tensão do sistema (V)", min_value=1.0, value=settings.default_voltage, step=10.0)

    st.markdown("---")
    st.subheader("🔌 Gerador")
    gen_enabled = st.toggle("Usar gerador", False)
    gen_kva = st.number_input("Potência (kVA)", min_value=1.0, value=settings.generator_power_kva, step=10.0)
    gen_voltage = st.number_input("Tensão do gerador (V)", min_value=1.0, value=settings.generator_voltage, step=10.0)
    generator = GeneratorConfig(enabled=gen_enabled, power_kva=gen_kva,
                                is_three_phase=settings.generator_three_phase, voltage=gen_voltage)

    st.markdown("---")
    st.subheader("⚡ Mainpower")
    system_type = SystemType(st.radio("Sistema", [t.value for t in SystemType], index=2))
    ports_per_phase = st.number_input("Canais por fase", 1, 24, settings.default_total_ports // 3)

# --- Main Area ---
st.markdown("<h1 class='main-header'>⚡ Distribuição de Circuitos e Balanceamento de Fases</h1>", unsafe_allow_html=True)
st.markdown("---")

st.markdown("### 📋 Equipamentos por Circuito (Editável)")
st.caption("Uma linha por equipamento. Linhas com o mesmo nome de circuito são agrupadas.")

edited_df = st.data_editor(
    st.session_state.items_df,
    key="editor",
    use_container_width=True,
    num_rows="dynamic",
    column_config={
        "Disjuntor": st.column_config.NumberColumn("Disjuntor (A)", min_value=0, step=1),
        "Potencia": st.column_config.NumberColumn("Potência (W)", min_value=0, step=10),
        "Tensao": st.column_config.TextColumn("Tensão (V)", help="220, 127 ou Bivolt"),
        "FP": st.column_config.NumberColumn(min_value=0.1, max_value=1.0, step=0.05),
        "Qtd": st.column_config.NumberColumn(min_value=1, step=1, width="small"),
    },
    height=300
)
st.session_state.items_df = edited_df[INPUT_COLUMNS]

ports, row_errors = build_ports(st.session_state.items_df, voltage)
for msg in row_errors:
    st.error(msg)

if not ports:
    st.info("Adicione equipamentos para calcular.")
    st.stop()

# --- Phase Assignment ---
# Topology changes rebuild the phases; circuit edits only refresh the loads.
shape = (system_type, int(ports_per_phase), gen_enabled, gen_kva, gen_voltage)
config = st.session_state.mainpower
if config is None or st.session_state.get("mainpower_shape") != shape:
    config = configure_mainpower(config or default_mainpower_config(settings), system_type, ports_per_phase, generator)
    config = balance_phases(ports, voltage, config)
    st.session_state.mainpower_shape = shape
else:
    config, _ = refresh_phase_loads(config, ports, voltage)
st.session_state.mainpower = config

# --- Circuits ---
st.markdown("---")
st.subheader("🔁 Circuitos")
st.dataframe(circuit_table(ports, voltage, config), use_container_width=True)

totals = aggregate_totals(ports, voltage)
feeder = feeder_run(ports, voltage, config)
c1, c2, c3, c4 = st.columns(4)
c1.metric("Potência Total", f"{totals.watts:.0f} W")
c2.metric("Potência Aparente", f"{totals.va:.0f} VA")
c3.metric("Corrente Total", f"{totals.amps:.1f} A")
if feeder is not None:
    c4.metric("Alimentador", f"{feeder.label} mm²", f"até {feeder.max_distance_m} m", delta_color="off")

# --- Phases ---
st.markdown("---")
st.subheader("🏢 Fases")

tb1, tb2, tb3, tb4 = st.columns([1, 1, 1, 2])
with tb1:
    if st.button("⚖️ Rebalancear", use_container_width=True):
        config = balance_phases(ports, voltage, config)
        st.session_state.mainpower = config
with tb2:
    move_id = st.selectbox("Circuito", [p.id for p in ports])
with tb3:
    target = st.selectbox("Fase destino", [p.phase_id for p in config.phases])
with tb4:
    st.write("")
    if st.button("Mover circuito", use_container_width=True):
        try:
            config = move_port_to_phase(config, move_id, target, ports, voltage)
            st.session_state.mainpower = config
            st.success(f"Circuito movido para Fase {target}")
        except PhaseCapacityError as e:
            st.error(str(e))

st.dataframe(phase_table(config), use_container_width=True)

quality = calculate_balance_quality(config)
m1, m2, m3 = st.columns(3)
m1.metric("Carga Total", f"{total_phase_load(config):.1f} A")
m2.metric("Balanceamento", balance_label(quality), f"{quality:.1f} pp", delta_color="off")
m3.metric("Canais", f"{len(ports)} / {config.total_ports}")

overload = check_phase_overload(config)
if overload.has_overload:
    st.error(f"Fases sobrecarregadas: {', '.join(overload.overloaded_phase_ids)}")
if is_under_provisioned(config, len(ports)):
    st.warning(f"O Mainpower tem {config.total_ports} canais configurados para {len(ports)} circuitos.")

# --- Export ---
project = DistributionProject(id="", name="Distribuição", voltage_system=voltage, ports=ports,
                              total_watts=totals.watts, total_amperes=totals.amps,
                              generator_config=generator if generator.enabled else None,
                              mainpower_config=config)
st.download_button(
    "📥 Baixar Relatório (Excel)",
    data=to_excel(project),
    file_name="relatorio_carga.xlsx",
    mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
)
