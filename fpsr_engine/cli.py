# ==============================================================================
# File: fpsr_engine/cli.py
# Purpose: Command line harness: evaluate SM / QS over a frame range, run a
# preset, export traces and replay them.
# ==============================================================================
from __future__ import annotations
import argparse
import logging
import sys
from typing import Optional, Sequence

import numpy as np

from .analysis import changed_flags, hold_lengths, verify_trace
from .analysis.replay import evaluate_preset
from .core.constants import ALGORITHM_QS, ALGORITHM_SM, SENTINEL_DERIVE
from .core.export import read_sequence_json, write_sequence_json, write_sequence_npz
from .core.preset import FPSRPreset, PresetError, load_preset
from .core.types import QSParams, SMParams
from .setup_logging import setup_logging

logger = logging.getLogger(__name__)


def _int_pair(value: str) -> tuple:
    parts = [p.strip() for p in value.split(",") if p.strip()]
    if len(parts) != 2:
        raise argparse.ArgumentTypeError(f"Expected two comma-separated integers, received '{value}'.")
    try:
        return int(parts[0]), int(parts[1])
    except ValueError as exc:
        raise argparse.ArgumentTypeError("Pair must contain integers.") from exc


def _add_range_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--start", type=int, default=0, help="First frame (inclusive)")
    parser.add_argument("--stop", type=int, default=200, help="Last frame (inclusive)")
    parser.add_argument("--json", dest="json_path", help="Write a replayable JSON trace to this path")
    parser.add_argument("--npz", dest="npz_prefix", help="Write <prefix>.npz and <prefix>.meta.json")
    parser.add_argument("--quiet", action="store_true", help="Only print the summary line")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Frame-persistent stateless randomness (FPS-R)")
    parser.add_argument("--log-file", help="Also write the log to this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_sm = sub.add_parser("sm", help="Stacked Modulo over a frame range")
    p_sm.add_argument("--min-hold", type=int, default=SMParams.min_hold)
    p_sm.add_argument("--max-hold", type=int, default=SMParams.max_hold)
    p_sm.add_argument("--reseed-interval", type=int, default=SMParams.reseed_interval)
    p_sm.add_argument("--seed-inner", type=int, default=SMParams.seed_inner)
    p_sm.add_argument("--seed-outer", type=int, default=SMParams.seed_outer)
    _add_range_args(p_sm)

    p_qs = sub.add_parser("qs", help="Quantised Switching over a frame range")
    p_qs.add_argument("--base-wave-freq", type=float, default=QSParams.base_wave_freq)
    p_qs.add_argument(
        "--stream2-freq-mult", type=float, default=QSParams.stream2_freq_mult,
        help="Negative selects the built-in multiplier",
    )
    p_qs.add_argument("--quant-levels", type=_int_pair, default=QSParams.quant_levels_min_max,
                      metavar="MIN,MAX")
    p_qs.add_argument("--streams-offset", type=_int_pair, default=QSParams.streams_offset,
                      metavar="OFF1,OFF2")
    p_qs.add_argument("--stream-switch-dur", type=int, default=QSParams.stream_switch_dur,
                      help=f"< 1 derives it from the base frequency (e.g. {SENTINEL_DERIVE})")
    p_qs.add_argument("--stream1-quant-dur", type=int, default=QSParams.stream1_quant_dur)
    p_qs.add_argument("--stream2-quant-dur", type=int, default=QSParams.stream2_quant_dur)
    _add_range_args(p_qs)

    p_preset = sub.add_parser("preset", help="Evaluate a preset by id or JSON path")
    p_preset.add_argument("source", help="Preset id (e.g. sm_reference) or path to a preset JSON")
    p_preset.add_argument("--json", dest="json_path", help="Write a replayable JSON trace to this path")
    p_preset.add_argument("--npz", dest="npz_prefix", help="Write <prefix>.npz and <prefix>.meta.json")
    p_preset.add_argument("--quiet", action="store_true", help="Only print the summary line")

    p_replay = sub.add_parser("replay", help="Recompute a JSON trace and compare bit for bit")
    p_replay.add_argument("trace", help="Path to a trace written with --json")

    return parser


def _preset_from_args(args: argparse.Namespace) -> FPSRPreset:
    if args.command == ALGORITHM_SM:
        params = SMParams(args.min_hold, args.max_hold, args.reseed_interval, args.seed_inner, args.seed_outer)
    else:
        params = QSParams(
            base_wave_freq=args.base_wave_freq,
            stream2_freq_mult=args.stream2_freq_mult,
            quant_levels_min_max=tuple(args.quant_levels),
            streams_offset=tuple(args.streams_offset),
            stream_switch_dur=args.stream_switch_dur,
            stream1_quant_dur=args.stream1_quant_dur,
            stream2_quant_dur=args.stream2_quant_dur,
        )
    return load_preset({
        "id": f"cli_{args.command}",
        "algorithm": args.command,
        "params": params.to_dict(),
        "frames": {"start": args.start, "stop": args.stop},
    })


def _print_sequence(frames: np.ndarray, values: np.ndarray, quiet: bool) -> None:
    flags = changed_flags(values)
    if not quiet:
        for frame, value, flag in zip(frames, values, flags):
            print(f"{int(frame):>8d}  {float(value):.9f}  {'*' if flag else ''}")
    holds = hold_lengths(values)
    print(
        f"frames={len(frames)} transitions={int(flags.sum())} "
        f"holds(min/max)={min(holds) if holds else 0}/{max(holds) if holds else 0}"
    )


def _run_preset(preset: FPSRPreset, args: argparse.Namespace) -> int:
    frames, values = evaluate_preset(preset)
    _print_sequence(frames, values, args.quiet)
    if args.json_path:
        write_sequence_json(args.json_path, preset, frames, values)
    if args.npz_prefix:
        write_sequence_npz(args.npz_prefix, preset, frames, values)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_file, level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        if args.command in (ALGORITHM_SM, ALGORITHM_QS):
            if args.start > args.stop:
                logger.error("--start must be <= --stop")
                return 2
            return _run_preset(_preset_from_args(args), args)
        if args.command == "preset":
            return _run_preset(load_preset(args.source), args)
        if args.command == "replay":
            count = verify_trace(read_sequence_json(args.trace))
            print(f"replay OK: {count} frames identical")
            return 0
    except PresetError as exc:
        logger.error("%s", exc)
        return 1
    return 2


if __name__ == "__main__":
    sys.exit(main())
