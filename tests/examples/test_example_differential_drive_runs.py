"""Smoke tests for the differential drive example script.

Runs the script in a subprocess with the Agg backend and validates the
machine-readable [MOTION_SUMMARY] JSON line:
- every odometry reading was consumed
- the particle cloud spreads more with the 'slippery' preset than with
  the 'precise' one
"""

import json
import os
import re
import subprocess
import sys
import unittest
from pathlib import Path
from typing import Any, Dict, Optional


def parse_motion_summary(stdout: str) -> Optional[Dict[str, Any]]:
    """Parse the [MOTION_SUMMARY] JSON line from script output."""
    match = re.search(r'\[MOTION_SUMMARY\]\s*(\{.*\})', stdout)
    if not match:
        return None
    try:
        return json.loads(match.group(1))
    except json.JSONDecodeError as e:
        raise ValueError(f"Malformed MOTION_SUMMARY JSON: {e}")


class TestExampleDifferentialDriveRuns(unittest.TestCase):
    """Smoke tests: the example script should run without errors."""

    def setUp(self):
        self.workspace_root = Path(__file__).parent.parent.parent
        self.script_path = self.workspace_root / "examples" / "example_differential_drive.py"
        self.assertTrue(self.script_path.exists(),
                        f"Script not found: {self.script_path}")

    def _run(self, *args) -> Dict[str, Any]:
        env = os.environ.copy()
        env.update({
            "MPLBACKEND": "Agg",
            "PYTHONPATH": str(self.workspace_root),
        })
        result = subprocess.run(
            [sys.executable, str(self.script_path), *args],
            capture_output=True,
            text=True,
            timeout=300,
            env=env,
            cwd=str(self.workspace_root),
        )
        self.assertEqual(result.returncode, 0,
                         f"Script failed:\nSTDOUT:\n{result.stdout}\nSTDERR:\n{result.stderr}")
        summary = parse_motion_summary(result.stdout)
        self.assertIsNotNone(summary, "[MOTION_SUMMARY] line missing from output")
        return summary

    def test_runs_without_plot(self):
        """Test a run with the default preset and no plotting."""
        summary = self._run("--n-particles", "100", "--no-plot")

        self.assertEqual(summary["n_particles"], 100)
        self.assertEqual(summary["n_odometry_updates"], 201)
        self.assertGreater(summary["position_spread"], 0.0)

    def test_noise_preset_controls_spread(self):
        """Test that noisier parameters spread the cloud further."""
        precise = self._run("--n-particles", "200", "--preset", "precise", "--no-plot")
        slippery = self._run("--n-particles", "200", "--preset", "slippery", "--no-plot")

        self.assertLess(precise["position_spread"], slippery["position_spread"])
        self.assertLess(precise["yaw_spread"], slippery["yaw_spread"])

    def test_runs_with_plot_and_config_file(self):
        """Test loading a JSON config and writing the figure."""
        import tempfile

        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "params.json"
            config_path.write_text(json.dumps({
                "motion_model": {"alpha1": 0.1, "alpha2": 0.05, "alpha3": 0.1, "alpha4": 0.05}
            }))
            out_dir = Path(tmp) / "figs"

            self._run("--n-particles", "50", "--config", str(config_path),
                      "--output-dir", str(out_dir))

            self.assertTrue((out_dir / "differential_drive_particles.png").exists())


if __name__ == "__main__":
    unittest.main()
