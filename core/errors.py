from typing import List, Optional


class DistributionError(ValueError):
    """Base error for rejected distribution operations."""


class IncompatibleVoltageError(DistributionError):
    def __init__(self, equipment_voltage, system_voltage):
        self.equipment_voltage = equipment_voltage
        self.system_voltage = system_voltage
        super().__init__(
            f"Blocked: equipment rated {equipment_voltage}V is incompatible with a {system_voltage}V system"
        )


class PhaseCapacityError(DistributionError):
    """Target phase already holds its share of mainpower channels."""

    def __init__(self, phase_id: str, max_circuits: int):
        self.phase_id = phase_id
        self.max_circuits = max_circuits
        super().__init__(f"Phase {phase_id} is full! Limit: {max_circuits} circuits per phase.")


class ProjectValidationError(DistributionError):
    pass


class MissingBreakerError(ProjectValidationError):
    def __init__(self, circuit_names: List[str], message: Optional[str] = None):
        self.circuit_names = circuit_names
        super().__init__(
            message or f"Blocked: set the breaker rating for circuits: {', '.join(circuit_names)}"
        )
