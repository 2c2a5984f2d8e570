# ==============================================================================
# File: tests/test_changes.py
# Purpose: Changed flags, hold runs and frame sampling.
# ==============================================================================
import unittest

import numpy as np

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).parent.parent))

from fpsr_engine import QSParams, SMParams, evaluate, sm_holds
from fpsr_engine.analysis import (
    changed,
    changed_flags,
    hold_lengths,
    hold_runs,
    sample_range,
    transition_frames,
)


class TestChangeHelpers(unittest.TestCase):

    def test_changed_flags(self):
        values = np.array([0.5, 0.5, 0.25, 0.25, 0.25, 0.75], dtype=np.float32)
        self.assertEqual(changed_flags(values).tolist(), [False, False, True, False, False, True])
        self.assertEqual(changed_flags(np.array([], dtype=np.float32)).tolist(), [])

    def test_hold_runs(self):
        values = [0.5, 0.5, 0.25, 0.25, 0.25, 0.75]
        self.assertEqual(hold_runs(values), [[0.5, 2], [0.25, 3], [0.75, 1]])
        self.assertEqual(hold_lengths(values), [2, 3, 1])
        self.assertEqual(hold_runs([]), [])

    def test_transition_frames(self):
        frames = [10, 11, 12, 13]
        values = np.array([1.0, 1.0, 2.0, 3.0], dtype=np.float32)
        self.assertEqual(transition_frames(frames, values), [12, 13])


class TestSampling(unittest.TestCase):

    def test_sample_range_matches_changed(self):
        for params in (SMParams(), QSParams()):
            samples = sample_range(params, 40, 90)
            self.assertEqual(samples[0].frame, 40)
            self.assertEqual(samples[-1].frame, 90)
            for s in samples:
                self.assertEqual(s.changed, changed(params, s.frame))

    def test_first_sample_compares_with_previous_frame(self):
        params = SMParams()
        values = evaluate(params, range(0, 200))
        frame = transition_frames(range(0, 200), values)[0]
        samples = sample_range(params, frame, frame + 3)
        self.assertTrue(samples[0].changed)

    def test_run_lengths_cover_range(self):
        params = SMParams()
        values = evaluate(params, range(0, 201))
        lengths = hold_lengths(values)
        self.assertEqual(sum(lengths), 201)
        self.assertEqual(len(lengths), len(transition_frames(range(0, 201), values)) + 1)

    def test_sm_transitions_follow_state(self):
        params = SMParams()
        frames = np.arange(0, 201, dtype=np.int64)
        values = evaluate(params, frames)
        _, states = sm_holds(frames, params)
        # a new value can only start where the held state moves
        state_moves = set(int(f) for f in frames[1:][states[1:] != states[:-1]])
        self.assertTrue(set(transition_frames(frames, values)) <= state_moves)


if __name__ == '__main__':
    unittest.main()
