import unittest
from standards.nbr_logic import NBRLogic

class TestCableSpecs(unittest.TestCase):
    def test_boundary_rounds_up(self):
        # 10 A fits the outlet tier; 10.1 A is rounded to 11 A first
        specs = NBRLogic.get_cable_specs(10)
        self.assertEqual((specs.gauge_mm2, specs.connector_amps), (1.5, 10))
        specs = NBRLogic.get_cable_specs(10.1)
        self.assertEqual((specs.gauge_mm2, specs.connector_amps), (2.5, 16))

    def test_table_tiers(self):
        cases = [
            (16, 2.5, 16, "blue"),
            (21, 2.5, 20, "cyan"),
            (22, 4, 32, "yellow"),
            (36, 6, 32, "orange"),
            (50, 10, 63, "red"),
            (68, 16, 63, "purple"),
            (89, 25, 100, "fuchsia"),
            (89.01, 35, 125, "rose"),
            (400, 35, 125, "rose"),
        ]
        for amps, gauge, connector_amps, color in cases:
            specs = NBRLogic.get_cable_specs(amps)
            self.assertEqual(specs.gauge_mm2, gauge, amps)
            self.assertEqual(specs.connector_amps, connector_amps, amps)
            self.assertEqual(specs.color, color, amps)

    def test_empty_circuit_gets_first_tier(self):
        self.assertEqual(NBRLogic.get_cable_specs(0).connector_type, "Outlet 10A")
        self.assertEqual(NBRLogic.get_cable_specs(-5).color, "emerald")

    def test_non_finite_currents(self):
        self.assertEqual(NBRLogic.get_cable_specs(float("nan")).color, "rose")
        self.assertEqual(NBRLogic.get_cable_specs(float("inf")).connector_amps, 125)
        self.assertEqual(NBRLogic.get_cable_specs(float("-inf")).color, "emerald")

    def test_color_class_fallback(self):
        self.assertEqual(NBRLogic.cable_color_class("red"), "bg-red-600 text-red-100")
        self.assertEqual(NBRLogic.cable_color_class("unknown"), "bg-slate-600 text-slate-100")

class TestCableDetails(unittest.TestCase):
    def test_no_load_gives_no_recommendation(self):
        self.assertIsNone(NBRLogic.calculate_cable_details(0, 220, False))
        self.assertIsNone(NBRLogic.calculate_cable_details(-1, 220, True))

    def test_single_phase_run(self):
        # 20 A -> 2.5 mm2 (21 A)
        # L = 0.04 * 220 * 2.5 / (2 * 0.0172 * 20) = 31.97 -> 31 m
        run = NBRLogic.calculate_cable_details(20, 220, False)
        self.assertEqual(run.gauge_mm2, 2.5)
        self.assertEqual(run.capacity_amps, 21)
        self.assertEqual(run.max_distance_m, 31)

    def test_three_phase_run_is_longer(self):
        # 30 A -> 6 mm2 (36 A)
        # L = 0.04 * 380 * 6 / (1.732 * 0.0172 * 30) = 102.0 -> 102 m
        run = NBRLogic.calculate_cable_details(30, 380, True)
        self.assertEqual(run.gauge_mm2, 6.0)
        self.assertEqual(run.max_distance_m, 102)
        single = NBRLogic.calculate_cable_details(30, 380, False)
        self.assertLess(single.max_distance_m, run.max_distance_m)

    def test_capacity_is_inclusive(self):
        self.assertEqual(NBRLogic.calculate_cable_details(15.5, 220, False).gauge_mm2, 1.5)
        self.assertEqual(NBRLogic.calculate_cable_details(15.6, 220, False).gauge_mm2, 2.5)

    def test_beyond_table(self):
        run = NBRLogic.calculate_cable_details(240, 220, True)
        self.assertTrue(run.exceeds_table)
        self.assertEqual(run.label, "> 120")
        self.assertEqual(run.max_distance_m, 0)

if __name__ == '__main__':
    unittest.main()
