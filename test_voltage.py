import unittest
from core.voltage import VoltageBucket, get_voltage_bucket, is_compatible, numeric_voltage, parse_voltage

class TestVoltageBucket(unittest.TestCase):
    def test_universal_markers(self):
        for v in ["Bivolt", "BIVOLT", "Autovolt", "universal", "bi-volt 220"]:
            self.assertIs(get_voltage_bucket(v), VoltageBucket.UNIVERSAL, v)

    def test_unparseable_is_universal(self):
        self.assertIs(get_voltage_bucket("N/A"), VoltageBucket.UNIVERSAL)
        self.assertIs(get_voltage_bucket(""), VoltageBucket.UNIVERSAL)

    def test_ranges(self):
        self.assertIs(get_voltage_bucket(90), VoltageBucket.LOW)
        self.assertIs(get_voltage_bucket(127), VoltageBucket.LOW)
        self.assertIs(get_voltage_bucket(140), VoltageBucket.LOW)
        self.assertIs(get_voltage_bucket("220V"), VoltageBucket.MID)
        self.assertIs(get_voltage_bucket(250), VoltageBucket.MID)
        self.assertIs(get_voltage_bucket(380), VoltageBucket.HIGH)
        self.assertIs(get_voltage_bucket(480), VoltageBucket.HIGH)
        self.assertIs(get_voltage_bucket(160), VoltageBucket.OTHER)
        self.assertIs(get_voltage_bucket(600), VoltageBucket.OTHER)

    def test_float_rating_reads_as_integer(self):
        self.assertIs(get_voltage_bucket(220.0), VoltageBucket.MID)

    def test_reading_keeps_digits(self):
        self.assertEqual(parse_voltage("127 V"), parse_voltage(127))
        self.assertEqual(parse_voltage(500).volts, 500)
        self.assertIsNone(parse_voltage("Bivolt").volts)

    def test_numeric_voltage(self):
        self.assertEqual(numeric_voltage(220), 220.0)
        self.assertEqual(numeric_voltage("127V"), 127.0)
        self.assertEqual(numeric_voltage("Bivolt"), 0.0)

class TestCompatibility(unittest.TestCase):
    def test_cases(self):
        self.assertTrue(is_compatible(220, 220))
        self.assertTrue(is_compatible(220, "Bivolt"))
        self.assertFalse(is_compatible(220, 110))
        self.assertFalse(is_compatible(220, 127))
        self.assertTrue(is_compatible(127, 110))
        self.assertTrue(is_compatible(380, "440V"))

    def test_universal_system_only_takes_universal_gear(self):
        # A universal network bucket only matches universal equipment
        self.assertFalse(is_compatible("Bivolt", 220))
        self.assertTrue(is_compatible("Bivolt", "Bivolt"))

    def test_out_of_range_voltages_share_one_bucket(self):
        # 500 V and 600 V are different, but both fall in OTHER
        self.assertTrue(is_compatible(500, 600))
        self.assertFalse(is_compatible(220, 600))

if __name__ == '__main__':
    unittest.main()
