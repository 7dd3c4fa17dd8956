import os
import sys
import math
import unittest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from algorithms import CurveModel, CurveParams, Observation, RecoveryParams


class CurveModelTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.params = CurveParams()
        self.rec = RecoveryParams()

    def test_fatigue_starts_at_one(self) -> None:
        self.assertAlmostEqual(CurveModel.fatigue(0, self.params), 1.0)
        odd = CurveParams(w1=3, w2=0, w3=1, tau1=2, tau2=90, tau3=400)
        self.assertAlmostEqual(CurveModel.fatigue(0, odd), 1.0)

    def test_fatigue_strictly_decreasing(self) -> None:
        values = [CurveModel.fatigue(t, self.params) for t in range(0, 601, 5)]
        for a, b in zip(values, values[1:]):
            self.assertLess(b, a)
        self.assertGreater(values[-1], 0.0)

    def test_single_exponential(self) -> None:
        params = CurveParams(w1=1, w2=0, w3=0, tau1=10)
        self.assertAlmostEqual(CurveModel.fatigue(10, params), math.exp(-1), places=6)

    def test_weights_only_matter_by_ratio(self) -> None:
        a = CurveParams(w1=1, w2=1, w3=1)
        b = CurveParams(w1=4, w2=4, w3=4)
        for t in (5, 30, 120):
            self.assertAlmostEqual(CurveModel.fatigue(t, a), CurveModel.fatigue(t, b))

    def test_negative_time_is_clamped(self) -> None:
        self.assertAlmostEqual(CurveModel.fatigue(-5, self.params), 1.0)
        self.assertAlmostEqual(CurveModel.recovery(-5, self.rec, self.params), 0.0)

    def test_recovery_bounds(self) -> None:
        self.assertEqual(CurveModel.recovery(0, self.rec, self.params), 0.0)
        values = [CurveModel.recovery(r, self.rec, self.params) for r in range(0, 3601, 30)]
        for a, b in zip(values, values[1:]):
            self.assertLessEqual(a, b)
        self.assertTrue(all(v < 1.0 for v in values))

    def test_recovery_approaches_full(self) -> None:
        self.assertGreater(CurveModel.recovery(1e6, self.rec, self.params), 0.999)

    def test_recovery_uses_fatigue_weights(self) -> None:
        params = CurveParams(w1=1, w2=0, w3=0)
        rec = RecoveryParams(r1=30, r2=300, r3=1800)
        self.assertAlmostEqual(
            CurveModel.recovery(30, rec, params), 1 - math.exp(-1), places=9
        )

    def test_zero_weights_rejected(self) -> None:
        with self.assertRaises(ValueError):
            CurveParams(w1=0, w2=0, w3=0)

    def test_sampled_curves(self) -> None:
        curve = CurveModel.fatigue_curve(self.params, 300, 10)
        self.assertEqual(len(curve), 31)
        self.assertEqual(curve[0]["t"], 0.0)
        self.assertAlmostEqual(curve[0]["f"], 1.0)
        self.assertEqual(curve[-1]["t"], 300.0)
        rec_curve = CurveModel.recovery_curve(self.rec, self.params)
        self.assertEqual(len(rec_curve), 31)
        self.assertEqual(rec_curve[0]["rec"], 0.0)
        self.assertEqual(CurveModel.fatigue_curve(self.params, 100, 0), [])

    def test_set_points(self) -> None:
        pts = CurveModel.set_points([Observation(20, 100), Observation(60, 80)], self.params)
        self.assertEqual([p["t"] for p in pts], [20, 60])
        self.assertAlmostEqual(pts[0]["f"], CurveModel.fatigue(20, self.params))


if __name__ == "__main__":
    unittest.main()
