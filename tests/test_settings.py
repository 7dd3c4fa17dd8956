import os
import sys
import unittest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from config import YamlConfig, load_settings, save_settings
from settings_schema import DosingSettings, validate_settings


class SettingsTest(unittest.TestCase):
    def setUp(self) -> None:
        self.path = "test_settings.yaml"
        if os.path.exists(self.path):
            os.remove(self.path)

    def tearDown(self) -> None:
        if os.path.exists(self.path):
            os.remove(self.path)
        os.environ.pop("GRIPDOSE_SETTINGS", None)

    def test_missing_file_gives_defaults(self) -> None:
        cfg = YamlConfig(self.path)
        self.assertEqual(cfg.load(), {})
        settings = load_settings(cfg)
        self.assertEqual(settings.left.curve.tau1, 7.0)
        self.assertEqual(settings.right.recovery.r3, 1800.0)
        self.assertEqual(settings.anchor_policy, "average")

    def test_save_and_load(self) -> None:
        cfg = YamlConfig(self.path)
        settings = DosingSettings(sets=3, left={"manual_scale": 250.0, "anchors": {"ema20": 90.0}})
        save_settings(cfg, settings)
        self.assertTrue(os.path.exists(self.path))
        loaded = load_settings(cfg)
        self.assertEqual(loaded.sets, 3)
        self.assertEqual(loaded.left.manual_scale, 250.0)
        self.assertEqual(loaded.left.anchors.ema20, 90.0)
        self.assertIsNone(loaded.left.anchors.ema60)
        self.assertEqual(loaded, settings)

    def test_env_path(self) -> None:
        os.environ["GRIPDOSE_SETTINGS"] = self.path
        self.assertEqual(YamlConfig().path, self.path)

    def test_invalid_settings(self) -> None:
        with self.assertRaises(ValueError):
            validate_settings({"anchor_policy": "median"})
        with self.assertRaises(ValueError):
            validate_settings({"left": {"curve": {"w1": 0, "w2": 0, "w3": 0}}})
        with self.assertRaises(ValueError):
            validate_settings({"sets": 0})

    def test_t_max_clamped(self) -> None:
        self.assertEqual(validate_settings({"t_max": 1000}).t_max, 600.0)
        self.assertEqual(validate_settings({"t_max": 10}).t_max, 60.0)


if __name__ == "__main__":
    unittest.main()
