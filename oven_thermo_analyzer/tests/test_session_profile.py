import json
import unittest

from oven_thermo_analyzer.models.catalog import CanvasAssignment, Measurement, Thermoelement
from oven_thermo_analyzer.models.profile import DEFAULT_LAYERS, ViewerSession
from oven_thermo_analyzer.storage.memory import InMemoryMeasurementStore


class TestViewerSession(unittest.TestCase):
    def test_dict_round_trip_keeps_view_settings(self):
        s = ViewerSession(time_offset_s=12.0, sampling_interval_s=2.0)
        s.set_color_scale(10.0, 90.0)
        s.layers["show_performance_grid"] = False

        d = json.loads(json.dumps(s.to_dict()))
        s2 = ViewerSession.from_dict(d)
        self.assertEqual(s2.time_offset_s, 12.0)
        self.assertEqual((s2.color_scale_min, s2.color_scale_max), (10.0, 90.0))
        self.assertFalse(s2.color_scale_auto)
        self.assertFalse(s2.layers["show_performance_grid"])
        self.assertTrue(s2.layers["show_pyrometer"])

    def test_from_dict_fills_missing_layers(self):
        s = ViewerSession.from_dict({"layers": {"show_pyrometer": False}})
        self.assertEqual(set(s.layers), set(DEFAULT_LAYERS))
        self.assertFalse(s.layers["show_pyrometer"])

    def test_color_scale(self):
        s = ViewerSession()
        s.update_color_scale((5.0, 50.0))
        self.assertEqual((s.color_scale_min, s.color_scale_max), (5.0, 50.0))
        s.update_color_scale(None)
        self.assertIsNone(s.color_scale_min)
        with self.assertRaises(ValueError):
            s.set_color_scale(20.0, 20.0)
        self.assertTrue(s.color_scale_auto)

    def test_attach_assignment_loads_measurements(self):
        store = InMemoryMeasurementStore()
        mid = store.insert(Measurement(filename="a.gbd", channel_group="1-10", data="[]"))
        assignment = CanvasAssignment(canvas_type="MainTop", measurement_1_to_10_id=mid)
        te = Thermoelement(id=1, channel=3, relative_x=0.4, relative_y=0.6)

        s = ViewerSession()
        s.attach_assignment(assignment, [te], store=store)
        self.assertIs(s.measurement_for_channel(3), store.get_by_id(mid))
        self.assertIsNone(s.measurement_for_channel(13))
        self.assertIsNone(s.measurement_for_channel(0))
        self.assertEqual(s.thermoelements_for("MainTop"), [te])
        self.assertEqual(s.thermoelements_for("ReinfBottom"), [])

    def test_reset(self):
        s = ViewerSession(time_offset_s=8.0)
        s.set_measurement("1-10", Measurement(filename="a.gbd", channel_group="1-10", data="[]"))
        s.thermoelements["MainTop"] = [Thermoelement(id=1, channel=1, relative_x=0, relative_y=0)]
        s.set_color_scale(1.0, 2.0)
        s.reset()
        self.assertEqual(s.time_offset_s, 0.0)
        self.assertEqual(s.measurements, {"1-10": None, "11-20": None})
        self.assertEqual(s.thermoelements, {})
        self.assertTrue(s.color_scale_auto)

    def test_deactivate_is_idempotent(self):
        s = ViewerSession()
        events = []
        s.add_deactivation_listener(events.append)
        te = Thermoelement(id=9, channel=2, relative_x=0, relative_y=0)
        first = s.deactivate("MainTop", te, "unavailable")
        self.assertIsNotNone(first)
        self.assertEqual(first.channel, 2)
        self.assertIsNone(s.deactivate("MainTop", te, "burnout"))
        self.assertEqual(events, [first])


if __name__ == "__main__":
    unittest.main()
