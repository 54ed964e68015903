import unittest
from core.models import (
    Calculation, DistributionProject, Equipment, EquipmentCategory, GeneratorConfig,
    MainpowerConfig, PhaseConfig, Port, SystemType
)

PROJECT_JSON = {
    "id": "proj-1",
    "type": "distribution",
    "name": "Festival",
    "voltageSystem": 220,
    "ports": [{
        "id": "p1",
        "name": "Dimmer 1",
        "abbreviation": "DIM1",
        "color": "#334155",
        "breakerAmps": 32,
        "items": [{
            "equipmentId": "e1",
            "quantity": 4,
            "equipment": {"id": "e1", "name": "Beam", "watts": 280, "voltage": "Bivolt",
                          "powerFactor": 0.95, "category": "Moving Head"},
        }],
    }],
    "totalWatts": 1120,
    "totalAmperes": 5.36,
    "createdAt": "2026-01-01T00:00:00+00:00",
    "mainpowerConfig": {
        "enabled": True,
        "systemType": "two-phase",
        "totalPorts": 8,
        "autoBalance": False,
        "phases": [{"phaseId": "A", "color": "#ef4444", "maxAmps": 63, "currentLoad": 5.36, "ports": ["p1"]}],
    },
}

class TestModels(unittest.TestCase):
    def test_load_project(self):
        project = DistributionProject.from_dict(PROJECT_JSON)
        item = project.ports[0].items[0]
        self.assertEqual(item.quantity, 4)
        self.assertEqual(item.equipment.category, EquipmentCategory.MOVING_HEAD)
        self.assertEqual(project.mainpower_config.system_type, SystemType.TWO_PHASE)
        self.assertFalse(project.mainpower_config.auto_balance)
        self.assertEqual(project.mainpower_config.phases[0].ports, ["p1"])
        self.assertIsNone(project.generator_config)
        self.assertIsNone(project.event_id)

    def test_dump_uses_camel_case(self):
        project = DistributionProject.from_dict(PROJECT_JSON)
        data = project.to_dict()
        self.assertEqual(data["ports"][0]["breakerAmps"], 32)
        self.assertEqual(data["ports"][0]["items"][0]["equipment"]["powerFactor"], 0.95)
        self.assertEqual(data["mainpowerConfig"]["phases"][0]["maxAmps"], 63)
        self.assertNotIn("generatorConfig", data)
        self.assertNotIn("eventId", data)

    def test_missing_power_factor_defaults_to_one(self):
        eq = Equipment.from_dict({"id": 7, "name": "Par", "watts": 100, "powerFactor": 0})
        self.assertEqual(eq.power_factor, 1.0)
        self.assertEqual(eq.id, "7")
        self.assertEqual(eq.category, EquipmentCategory.OTHER)

    def test_port_breaker(self):
        self.assertFalse(Port(id="a", name="A").has_valid_breaker)
        self.assertFalse(Port.from_dict({"id": "a", "breakerAmps": None}).has_valid_breaker)
        self.assertTrue(Port(id="a", name="A", breaker_amps=10).has_valid_breaker)

    def test_configs(self):
        gen = GeneratorConfig.from_dict({"enabled": True, "powerKVA": 50})
        self.assertEqual((gen.power_kva, gen.voltage, gen.is_three_phase), (50, 220, True))
        config = MainpowerConfig(phases=[PhaseConfig("A", "#fff", 63)])
        self.assertEqual(MainpowerConfig.from_dict(config.to_dict()), config)
        self.assertEqual(SystemType.THREE_PHASE.phase_count, 3)

    def test_calculation_type(self):
        calc = Calculation(id="c", name="Palco", voltage_system=127)
        self.assertEqual(calc.to_dict()["type"], "simple")

if __name__ == '__main__':
    unittest.main()
