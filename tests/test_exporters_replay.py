# ==============================================================================
# File: tests/test_exporters_replay.py
# Purpose: JSON / NPZ exports, bit-exact replay and the command line harness.
# ==============================================================================
import io
import json
import os
import subprocess
import tempfile
import unittest
from contextlib import redirect_stdout

import numpy as np

import sys
from pathlib import Path

ROOT = Path(__file__).parent.parent
sys.path.append(str(ROOT))

from fpsr_engine.analysis import evaluate_preset, replay_trace, verify_trace
from fpsr_engine.cli import main
from fpsr_engine.core.export import (
    build_trace,
    read_sequence_json,
    read_sequence_npz,
    write_sequence_json,
    write_sequence_npz,
)
from fpsr_engine.core.preset import ReplayError, load_preset
from fpsr_engine.core.utils.rle import decode_rle_line


class TestJsonTrace(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def test_trace_layout(self):
        preset = load_preset("sm_reference")
        frames, values = evaluate_preset(preset)
        trace = build_trace(preset, frames, values)
        self.assertEqual(trace["version"], "fpsr_trace_v1")
        self.assertEqual(trace["frames"][0], 0)
        self.assertEqual(trace["frames"][-1], 200)
        self.assertEqual(len(trace["values"]), 201)
        self.assertEqual(decode_rle_line(trace["holds"]["runs"]), trace["values"])

    def test_written_trace_replays(self):
        for preset_id in ("sm_reference", "qs_reference", "qs_derived"):
            preset = load_preset(preset_id)
            frames, values = evaluate_preset(preset)
            path = os.path.join(self.tmp.name, f"{preset_id}.json")
            write_sequence_json(path, preset, frames, values)
            self.assertFalse(os.path.exists(path + ".tmp"))

            trace = read_sequence_json(path)
            self.assertEqual(verify_trace(trace), len(frames))
            np.testing.assert_array_equal(replay_trace(trace), values)

    def test_tampered_trace_is_rejected(self):
        preset = load_preset("qs_reference")
        frames, values = evaluate_preset(preset)
        trace = build_trace(preset, frames, values)
        trace["values"][17] = float(np.nextafter(np.float32(trace["values"][17]), np.float32(2.0)))
        with self.assertRaises(ReplayError):
            verify_trace(trace)

    def test_truncated_trace_is_rejected(self):
        preset = load_preset("sm_reference")
        frames, values = evaluate_preset(preset)
        trace = build_trace(preset, frames, values)
        trace["values"] = trace["values"][:-1]
        with self.assertRaises(ReplayError):
            verify_trace(trace)

    def test_trace_missing_fields_is_rejected(self):
        preset = load_preset("sm_reference")
        frames, values = evaluate_preset(preset)
        for key in ("preset", "frames", "values"):
            trace = build_trace(preset, frames, values)
            del trace[key]
            with self.assertRaises(ReplayError, msg=key):
                verify_trace(trace)
        trace = build_trace(preset, frames, values)
        trace["frames"] = ["a"] * len(frames)
        with self.assertRaises(ReplayError):
            replay_trace(trace)
        with self.assertRaises(ReplayError):
            verify_trace([1, 2])

    def test_unreadable_trace_file(self):
        with self.assertRaises(ReplayError):
            read_sequence_json(os.path.join(self.tmp.name, "missing.json"))
        path = os.path.join(self.tmp.name, "broken.json")
        with open(path, "w", encoding="utf-8") as f:
            f.write("{not json")
        with self.assertRaises(ReplayError):
            read_sequence_json(path)


class TestNpzExport(unittest.TestCase):

    def test_round_trip(self):
        preset = load_preset("qs_derived", overrides={"frames": {"start": -20, "stop": 60}})
        frames, values = evaluate_preset(preset)
        with tempfile.TemporaryDirectory() as tmpdir:
            prefix = os.path.join(tmpdir, "out", "qs")
            write_sequence_npz(prefix, preset, frames, values)
            self.assertFalse(os.path.exists(prefix + ".tmp.npz"))

            frames_back, values_back, meta = read_sequence_npz(prefix)
        np.testing.assert_array_equal(frames_back, frames)
        self.assertEqual(values_back.dtype, np.float32)
        np.testing.assert_array_equal(values_back.view(np.uint32), values.view(np.uint32))
        self.assertEqual(meta["count"], 81)
        self.assertEqual(meta["preset"]["params"]["stream_switch_dur"], -1)


class TestCommandLine(unittest.TestCase):

    def _run(self, argv):
        out = io.StringIO()
        with redirect_stdout(out):
            code = main(argv)
        return code, out.getvalue()

    def test_sm_export_then_replay(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "sm.json")
            code, out = self._run(["sm", "--stop", "120", "--json", path, "--quiet"])
            self.assertEqual(code, 0)
            self.assertIn("frames=121", out)

            code, out = self._run(["replay", path])
            self.assertEqual(code, 0)
            self.assertIn("replay OK: 121 frames identical", out)

    def test_qs_rows(self):
        code, out = self._run(["qs", "--start", "10", "--stop", "14", "--stream-switch-dur", "-1"])
        self.assertEqual(code, 0)
        lines = out.strip().splitlines()
        self.assertEqual(len(lines), 6)
        self.assertTrue(lines[0].split()[0] == "10")
        self.assertTrue(lines[-1].startswith("frames=5 "))

    def test_preset_command(self):
        code, out = self._run(["preset", "sm_reference", "--quiet"])
        self.assertEqual(code, 0)
        self.assertIn("frames=201", out)

    def test_error_codes(self):
        code, _ = self._run(["preset", "does_not_exist"])
        self.assertEqual(code, 1)
        code, _ = self._run(["sm", "--start", "5", "--stop", "1"])
        self.assertEqual(code, 2)

    def test_replay_error_codes(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            code, _ = self._run(["replay", os.path.join(tmpdir, "missing.json")])
            self.assertEqual(code, 1)

            broken = os.path.join(tmpdir, "broken.json")
            with open(broken, "w", encoding="utf-8") as f:
                f.write("{not json")
            code, _ = self._run(["replay", broken])
            self.assertEqual(code, 1)

            partial = os.path.join(tmpdir, "partial.json")
            with open(partial, "w", encoding="utf-8") as f:
                json.dump({"version": "fpsr_trace_v1", "frames": [0, 1]}, f)
            code, _ = self._run(["replay", partial])
            self.assertEqual(code, 1)

    def test_bad_preset_file_exit_code(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "bad.json")
            with open(path, "w", encoding="utf-8") as f:
                json.dump([1, 2], f)
            code, _ = self._run(["preset", path])
            self.assertEqual(code, 1)


class TestCrossProcessReplay(unittest.TestCase):

    def test_fresh_interpreter_reproduces_trace(self):
        preset = load_preset("qs_reference")
        frames, values = evaluate_preset(preset)
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "qs.json")
            write_sequence_json(path, preset, frames, values)

            env = dict(os.environ)
            env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(ROOT), env.get("PYTHONPATH")]))
            result = subprocess.run(
                [sys.executable, "-m", "fpsr_engine.cli", "replay", path],
                cwd=str(ROOT),
                env=env,
                capture_output=True,
                text=True,
                timeout=600,
            )
        self.assertEqual(result.returncode, 0, result.stdout + result.stderr)
        self.assertIn("replay OK: 201 frames identical", result.stdout)


if __name__ == '__main__':
    unittest.main()
