# Heuristic tables used for stage power distribution (NBR 5410 inspired).
# These reproduce the field tables used by the crew, not a regulatory check.

# Connector / cable tiers by circuit current (A, rounded up)
# Format: (Max_Amps, Gauge_mm2, Connector, Connector_Amps, Tier_Color)
# Rows are ordered; the last row catches everything above 89 A.
CONNECTOR_TABLE = [
    (10, 1.5, "Outlet 10A", 10, "emerald"),
    (16, 2.5, "Outlet 16A", 16, "blue"),
    (21, 2.5, "Outlet 20A/industrial", 20, "cyan"),
    (28, 4, "Industrial 32A", 32, "yellow"),
    (36, 6, "Industrial 32A", 32, "orange"),
    (50, 10, "Industrial 63A", 63, "red"),
    (68, 16, "Industrial 63A", 63, "purple"),
    (89, 25, "Industrial 100A", 100, "fuchsia"),
    (None, 35, "Industrial 125A+", 125, "rose"),
]

# Badge classes per tier color
TIER_COLOR_CLASSES = {
    "emerald": "bg-emerald-600 text-emerald-100",
    "blue": "bg-blue-600 text-blue-100",
    "cyan": "bg-cyan-600 text-cyan-100",
    "yellow": "bg-yellow-600 text-yellow-100",
    "orange": "bg-orange-600 text-orange-100",
    "red": "bg-red-600 text-red-100",
    "purple": "bg-purple-600 text-purple-100",
    "fuchsia": "bg-fuchsia-600 text-fuchsia-100",
    "rose": "bg-rose-600 text-rose-100",
}
DEFAULT_COLOR_CLASS = "bg-slate-600 text-slate-100"

# Simplified current-carrying capacity (Copper, PVC, method B1)
# Size (mm2) -> Amps
CABLE_CAPACITY = {
    1.5: 15.5,
    2.5: 21,
    4.0: 28,
    6.0: 36,
    10.0: 50,
    16.0: 68,
    25.0: 89,
    35.0: 111,
    50.0: 134,
    70.0: 171,
    95.0: 207,
    120.0: 239,
}
LARGEST_GAUGE_LABEL = "> 120"

# Voltage drop run length
COPPER_RESISTIVITY = 0.0172  # ohm.mm2/m
VOLTAGE_DROP_LIMIT = 0.04    # 4%
K_SINGLE_PHASE = 2.0         # single-phase and biphase
K_THREE_PHASE = 1.732

# Per-phase capacity
DEFAULT_PHASE_MAX_AMPS = 63.0
SQRT3 = 1.732

# Phase balance quality (max - min load %), inclusive upper bounds
BALANCE_QUALITY_THRESHOLDS = [
    (10, "Excellent"),
    (25, "Good"),
    (40, "Fair"),
]
BALANCE_UNBALANCED_LABEL = "Unbalanced"

# Phase colors per system type
PHASE_COLORS = {
    "single": {"A": "#3b82f6"},
    "two-phase": {"A": "#ef4444", "B": "#3b82f6"},
    "three-phase": {"A": "#ef4444", "B": "#3b82f6", "C": "#eab308"},
}

# Circuit tag palette
PORT_COLORS = [
    "#334155",  # Cinza
    "#ef4444",  # Vermelho
    "#ec4899",  # Rosa
    "#f97316",  # Laranja
    "#eab308",  # Amarelo
    "#84cc16",  # Lima
    "#22c55e",  # Verde
    "#10b981",  # Esmeralda
    "#06b6d4",  # Ciano
    "#3b82f6",  # Azul
    "#6366f1",  # Indigo
    "#a855f7",  # Roxo
]
DEFAULT_PORT_COLOR = PORT_COLORS[7]

# Load status thresholds (% of breaker / phase capacity)
WARNING_LOAD_PERCENT = 80.0
DANGER_LOAD_PERCENT = 100.0

# Loads differing less than this are treated as unchanged (A)
LOAD_CHANGE_TOLERANCE = 0.01
