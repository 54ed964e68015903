from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional, Union

from standards.nbr_tables import DEFAULT_PHASE_MAX_AMPS

Voltage = Union[float, int, str]  # 220, 127 or "Bivolt"

class EquipmentCategory(Enum):
    MOVING_HEAD = "Moving Head"
    PAR_LED = "Par Led"
    BLINDER = "Blinder"
    STROBO = "Strobo"
    CONSOLE = "Console"
    OTHER = "Outros"

class EquipmentStatus(Enum):
    ACTIVE = "active"
    MAINTENANCE = "maintenance"
    INACTIVE = "inactive"

class SystemType(Enum):
    SINGLE = "single"
    TWO_PHASE = "two-phase"
    THREE_PHASE = "three-phase"

    @property
    def phase_count(self) -> int:
        return {"single": 1, "two-phase": 2, "three-phase": 3}[self.value]

@dataclass
class Equipment:
    id: str
    name: str
    watts: float
    voltage: Voltage = 220
    power_factor: float = 1.0  # 0 < pf <= 1
    amperes: float = 0.0       # Derived, see with_derived_amperes()
    brand: str = ""
    model: str = ""
    category: EquipmentCategory = EquipmentCategory.OTHER
    quantity_owned: int = 0
    status: EquipmentStatus = EquipmentStatus.ACTIVE

    def with_derived_amperes(self) -> "Equipment":
        """Returns a copy with amperes recomputed from watts, voltage and power factor."""
        from core.calculator import derive_amperes
        return replace(self, amperes=derive_amperes(self.watts, self.voltage, self.power_factor, self.amperes))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "brand": self.brand,
            "model": self.model,
            "category": self.category.value,
            "watts": self.watts,
            "voltage": self.voltage,
            "amperes": self.amperes,
            "powerFactor": self.power_factor,
            "quantityOwned": self.quantity_owned,
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Equipment":
        return cls(
            id=str(data.get("id", "")),
            name=data.get("name", ""),
            brand=data.get("brand", ""),
            model=data.get("model", ""),
            category=EquipmentCategory(data.get("category", EquipmentCategory.OTHER.value)),
            watts=data.get("watts", 0),
            voltage=data.get("voltage", 220),
            amperes=data.get("amperes", 0),
            power_factor=data.get("powerFactor") or 1.0,
            quantity_owned=data.get("quantityOwned", 0),
            status=EquipmentStatus(data.get("status", EquipmentStatus.ACTIVE.value)),
        )

@dataclass
class CalculationItem:
    equipment_id: str
    quantity: int
    equipment: Equipment

    def to_dict(self) -> dict:
        return {
            "equipmentId": self.equipment_id,
            "quantity": self.quantity,
            "equipment": self.equipment.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CalculationItem":
        equipment = Equipment.from_dict(data["equipment"])
        return cls(
            equipment_id=str(data.get("equipmentId", equipment.id)),
            quantity=data.get("quantity", 0),
            equipment=equipment,
        )

@dataclass
class Port:
    id: str
    name: str
    abbreviation: str = ""  # Up to 5 chars, e.g. "DIM1"
    color: str = "#10b981"
    breaker_amps: float = 0.0
    items: List[CalculationItem] = field(default_factory=list)

    @property
    def has_valid_breaker(self) -> bool:
        return bool(self.breaker_amps) and self.breaker_amps > 0

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "abbreviation": self.abbreviation,
            "color": self.color,
            "breakerAmps": self.breaker_amps,
            "items": [i.to_dict() for i in self.items],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Port":
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            abbreviation=data.get("abbreviation", ""),
            color=data.get("color", "#10b981"),
            breaker_amps=data.get("breakerAmps") or 0,
            items=[CalculationItem.from_dict(i) for i in data.get("items", [])],
        )

@dataclass
class PhaseConfig:
    phase_id: str  # "A", "B" or "C"
    color: str
    max_amps: float
    current_load: float = 0.0
    ports: List[str] = field(default_factory=list)  # Port ids on this phase

    def to_dict(self) -> dict:
        return {
            "phaseId": self.phase_id,
            "color": self.color,
            "maxAmps": self.max_amps,
            "currentLoad": self.current_load,
            "ports": list(self.ports),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PhaseConfig":
        return cls(
            phase_id=data["phaseId"],
            color=data.get("color", ""),
            max_amps=data.get("maxAmps") or DEFAULT_PHASE_MAX_AMPS,
            current_load=data.get("currentLoad", 0),
            ports=[str(p) for p in data.get("ports", [])],
        )

@dataclass
class MainpowerConfig:
    enabled: bool = False
    system_type: SystemType = SystemType.THREE_PHASE
    total_ports: int = 12  # Channel capacity
    phases: List[PhaseConfig] = field(default_factory=list)
    auto_balance: bool = True

    def to_dict(self) -> dict:
        return {
            "enabled": self.enabled,
            "systemType": self.system_type.value,
            "totalPorts": self.total_ports,
            "phases": [p.to_dict() for p in self.phases],
            "autoBalance": self.auto_balance,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "MainpowerConfig":
        return cls(
            enabled=bool(data.get("enabled", False)),
            system_type=SystemType(data.get("systemType", SystemType.THREE_PHASE.value)),
            total_ports=data.get("totalPorts", 12),
            phases=[PhaseConfig.from_dict(p) for p in data.get("phases", [])],
            auto_balance=bool(data.get("autoBalance", True)),
        )

@dataclass
class GeneratorConfig:
    enabled: bool = False
    power_kva: float = 180.0
    is_three_phase: bool = True
    voltage: float = 220.0

    def to_dict(self) -> dict:
        return {
            "enabled": self.enabled,
            "powerKVA": self.power_kva,
            "isThreePhase": self.is_three_phase,
            "voltage": self.voltage,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "GeneratorConfig":
        return cls(
            enabled=bool(data.get("enabled", False)),
            power_kva=data.get("powerKVA", 180),
            is_three_phase=bool(data.get("isThreePhase", True)),
            voltage=data.get("voltage", 220),
        )

@dataclass
class DistributionProject:
    id: str
    name: str
    voltage_system: float
    ports: List[Port] = field(default_factory=list)
    total_watts: float = 0.0     # Snapshot taken at save time
    total_amperes: float = 0.0   # Snapshot taken at save time
    description: str = ""
    technical_responsible: str = ""
    created_at: str = ""
    generator_config: Optional[GeneratorConfig] = None
    mainpower_config: Optional[MainpowerConfig] = None
    event_id: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "type": "distribution",
            "name": self.name,
            "description": self.description,
            "technicalResponsible": self.technical_responsible,
            "voltageSystem": self.voltage_system,
            "ports": [p.to_dict() for p in self.ports],
            "totalWatts": self.total_watts,
            "totalAmperes": self.total_amperes,
            "createdAt": self.created_at,
        }
        if self.generator_config is not None:
            data["generatorConfig"] = self.generator_config.to_dict()
        if self.mainpower_config is not None:
            data["mainpowerConfig"] = self.mainpower_config.to_dict()
        if self.event_id:
            data["eventId"] = self.event_id
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "DistributionProject":
        gen = data.get("generatorConfig")
        mp = data.get("mainpowerConfig")
        return cls(
            id=str(data.get("id", "")),
            name=data.get("name", ""),
            description=data.get("description") or "",
            technical_responsible=data.get("technicalResponsible") or "",
            voltage_system=data.get("voltageSystem", 220),
            ports=[Port.from_dict(p) for p in data.get("ports", [])],
            total_watts=data.get("totalWatts", 0),
            total_amperes=data.get("totalAmperes", 0),
            created_at=data.get("createdAt", ""),
            generator_config=GeneratorConfig.from_dict(gen) if gen else None,
            mainpower_config=MainpowerConfig.from_dict(mp) if mp else None,
            event_id=data.get("eventId"),
        )

@dataclass
class Calculation:
    # Simple calculator record (single list, no circuits)
    id: str
    name: str
    voltage_system: float
    items: List[CalculationItem] = field(default_factory=list)
    total_watts: float = 0.0
    total_amperes: float = 0.0
    description: str = ""
    technical_responsible: str = ""
    created_at: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": "simple",
            "name": self.name,
            "description": self.description,
            "technicalResponsible": self.technical_responsible,
            "voltageSystem": self.voltage_system,
            "items": [i.to_dict() for i in self.items],
            "totalWatts": self.total_watts,
            "totalAmperes": self.total_amperes,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Calculation":
        return cls(
            id=str(data.get("id", "")),
            name=data.get("name", ""),
            description=data.get("description") or "",
            technical_responsible=data.get("technicalResponsible") or "",
            voltage_system=data.get("voltageSystem", 220),
            items=[CalculationItem.from_dict(i) for i in data.get("items", [])],
            total_watts=data.get("totalWatts", 0),
            total_amperes=data.get("totalAmperes", 0),
            created_at=data.get("createdAt", ""),
        )
