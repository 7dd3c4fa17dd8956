import os
import sys
import unittest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from algorithms import MathTools, PlanRequest
from dosing_service import DosingService
from settings_schema import DosingSettings


HISTORY = [
    {"hand": "L", "date": "2024-03-01T12:00:00.000Z", "load": 100, "duration": 20},
    {"hand": "L", "date": "2024-03-02T12:00:00.000Z", "load": 80, "duration": 60},
    {"hand": "L", "date": "2024-03-03T12:00:00.000Z", "load": 50, "duration": 180},
    {"hand": "R", "date": "2024-03-03T12:00:00.000Z", "load": "75", "duration": "62"},
]


class DosingServiceTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.service = DosingService()

    def test_recommend_left(self) -> None:
        result = self.service.recommend(HISTORY, "left", 60)
        self.assertEqual(result["side"], "L")
        self.assertAlmostEqual(result["ratio"], 80.0)
        self.assertIsNotNone(result["model"])
        self.assertIsNone(result["anchor"])
        self.assertEqual(result["policy"], "average")

    def test_recommend_uses_defaults(self) -> None:
        result = self.service.recommend(HISTORY, "L")
        self.assertEqual(result["target"], 60.0)

    def test_recommend_both_is_independent(self) -> None:
        both = self.service.recommend_both(HISTORY, 60, 60, "ratio")
        self.assertAlmostEqual(both["L"]["load"], 80.0)
        self.assertAlmostEqual(both["R"]["load"], 75.0)

    def test_no_history(self) -> None:
        result = self.service.recommend([], "R", 60)
        self.assertIsNone(result["load"])
        plan = self.service.plan([], "R")
        self.assertIsNone(plan["base"])
        self.assertEqual(plan["loads"], [])

    def test_unknown_side(self) -> None:
        with self.assertRaises(ValueError):
            self.service.recommend(HISTORY, "middle")

    def test_plan(self) -> None:
        request = PlanRequest(
            target_duration=60,
            sets=3,
            reps_per_set=2,
            rest_between_reps=30,
            rest_between_sets=180,
            anchor_policy="min",
        )
        plan = self.service.plan(HISTORY, "L", request)
        self.assertEqual(len(plan["loads"]), 6)
        self.assertAlmostEqual(plan["loads"][0], plan["base"])
        self.assertAlmostEqual(plan["base"], 80.0)
        self.assertEqual(plan["display"], [MathTools.round1(v) for v in plan["loads"]])
        self.assertEqual(len(plan["reps"]), 6)

    def test_default_request(self) -> None:
        req = self.service.default_request(sets=2, precise=None)
        self.assertEqual(req.sets, 2)
        self.assertFalse(req.precise)
        self.assertEqual(req.target_duration, 60.0)

    def test_curves(self) -> None:
        curves = self.service.curves("L")
        self.assertEqual(len(curves["fatigue"]), 31)
        self.assertEqual(curves["fatigue"][-1]["t"], 300.0)
        self.assertTrue(curves["recovery"])

    def test_set_points(self) -> None:
        pts = self.service.set_points(HISTORY, "R")
        self.assertEqual(len(pts), 1)
        self.assertEqual(pts[0]["t"], 62.0)

    def test_learn_anchors(self) -> None:
        settings = self.service.learn_anchors(HISTORY, "L")
        self.assertIsNotNone(settings.left.anchors.ema60)
        self.assertIsNone(settings.right.anchors.ema60)
        self.assertIsNone(self.service.settings.left.anchors.ema60)
        result = DosingService(settings).recommend(HISTORY, "L", 60)
        self.assertIsNotNone(result["anchor"])

    def test_per_side_parameters(self) -> None:
        settings = DosingSettings(right={"manual_scale": 300.0})
        service = DosingService(settings)
        result = service.recommend(HISTORY, "R", 60, "model")
        self.assertEqual(result["scale"], 300.0)
        left = service.recommend(HISTORY, "L", 60, "model")
        self.assertNotEqual(left["scale"], 300.0)


if __name__ == "__main__":
    unittest.main()
