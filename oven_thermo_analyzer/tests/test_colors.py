import unittest

from oven_thermo_analyzer.analysis.colors import (
    gradient_color,
    interpolate_gradient,
    performance_color,
    temperature_color,
)


class TestGradient(unittest.TestCase):
    def test_stops(self):
        self.assertEqual(interpolate_gradient(0.0), (0, 0, 255))
        self.assertEqual(interpolate_gradient(0.25), (0, 255, 255))
        self.assertEqual(interpolate_gradient(0.5), (0, 255, 0))
        self.assertEqual(interpolate_gradient(0.75), (255, 255, 0))
        self.assertEqual(interpolate_gradient(1.0), (255, 0, 0))

    def test_between_stops_truncates(self):
        self.assertEqual(interpolate_gradient(0.125), (0, 127, 255))

    def test_value_against_scale(self):
        self.assertEqual(gradient_color(15.0, 10.0, 20.0), (0, 255, 0))
        self.assertEqual(gradient_color(-100.0, 0.0, 10.0), (0, 0, 255))
        self.assertEqual(gradient_color(100.0, 0.0, 10.0), (255, 0, 0))

    def test_no_scale_is_gray(self):
        self.assertIsNone(gradient_color(5.0, None, 20.0))
        self.assertIsNone(gradient_color(5.0, 20.0, 20.0))
        self.assertIsNone(gradient_color(5.0, 30.0, 20.0))


class TestDisplayStrings(unittest.TestCase):
    def test_temperature(self):
        self.assertEqual(temperature_color("15.0°C", 10.0, 20.0), (0, 255, 0))
        self.assertIsNone(temperature_color("N/A", 10.0, 20.0))
        self.assertIsNone(temperature_color("BURNOUT", 10.0, 20.0))
        self.assertIsNone(temperature_color("15.0°C", None, None))

    def test_performance(self):
        self.assertEqual(performance_color("100%"), (255, 0, 0))
        self.assertEqual(performance_color("0%"), (0, 0, 255))
        self.assertEqual(performance_color("50%"), (0, 255, 0))
        self.assertIsNone(performance_color("N/A"))
        self.assertIsNone(performance_color(""))


if __name__ == "__main__":
    unittest.main()
