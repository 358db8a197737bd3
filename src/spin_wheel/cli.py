from __future__ import annotations

import argparse
import json
import logging
import random
import sys
import time

from .animation import AnimationDriver, run_frames
from .config import AppConfig, validate_settings
from .draw import simulate_draws, win_probabilities
from .models import WheelState
from .pool import slot_count
from .render import format_frame, format_segments
from .roster import RosterClient, load_roster_file, names_from_csv
from .state import (
    add_participant,
    eligible_participants,
    load_state,
    remove_participant,
    replace_participants,
    save_state,
    toggle_boosted,
    toggle_excluded,
    update_settings,
)
from .verify import build_audit, verify_audit
from .wheel import build_layout, plan_spin, render_frame, start_plan


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _load(args: argparse.Namespace) -> tuple[AppConfig, WheelState]:
    config = AppConfig.from_env(state_file_override=args.state_file)
    return config, load_state(config.state_file)


def _print_participants(state: WheelState) -> None:
    if not state.participants:
        print("No participants.")
        return
    for p in state.participants:
        flags = []
        if p.excluded:
            flags.append("excluded")
        if p.boosted:
            flags.append("boosted")
        slots = slot_count(p, state.settings)
        print(f"{p.id:<24} {p.name:<20} slots={slots:<3} {' '.join(flags)}")


def cmd_add(args: argparse.Namespace) -> int:
    config, state = _load(args)
    for name in args.names:
        state = add_participant(state, name)
    save_state(state, config.state_file)
    _print_participants(state)
    return 0


def cmd_remove(args: argparse.Namespace) -> int:
    config, state = _load(args)
    save_state(remove_participant(state, args.id), config.state_file)
    print(f"Removed {args.id}")
    return 0


def cmd_toggle(args: argparse.Namespace) -> int:
    config, state = _load(args)
    toggle = toggle_excluded if args.cmd == "exclude" else toggle_boosted
    state = toggle(state, args.id)
    save_state(state, config.state_file)
    _print_participants(state)
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    _, state = _load(args)
    _print_participants(state)
    eligible = eligible_participants(state.participants)
    print(f"({len(state.participants)} participants / {len(eligible)} eligible)")
    return 0


def cmd_settings(args: argparse.Namespace) -> int:
    config, state = _load(args)
    state = update_settings(
        state,
        base_slot_count=args.slots,
        spin_duration_ms=args.duration_ms,
        boost_multiplier=args.multiplier,
    )
    try:
        validate_settings(state.settings)
    except ValueError as e:
        raise SystemExit(str(e))
    save_state(state, config.state_file)
    for key, value in state.settings.to_dict().items():
        print(f"{key:<18}: {value}")
    return 0


def cmd_import(args: argparse.Namespace) -> int:
    config, state = _load(args)
    log = logging.getLogger("import")

    if args.names is not None:
        names = names_from_csv(args.names)
        source = "names"
    elif args.file:
        names = load_roster_file(args.file)
        source = f"file:{args.file}"
    else:
        client = RosterClient(timeout_s=args.timeout)
        try:
            names = client.fetch_names(args.url)
        finally:
            client.close()
        source = f"url:{args.url}"

    if not names:
        raise SystemExit("Roster is empty; nothing imported.")

    log.info("Imported %d participants from %s", len(names), source)
    state = replace_participants(state, names)
    save_state(state, config.state_file)
    _print_participants(state)
    return 0


def cmd_layout(args: argparse.Namespace) -> int:
    _, state = _load(args)
    layout = build_layout(state.participants, state.settings)
    print(f"Pool size: {len(layout.pool)}")
    print(format_segments(layout.merged))
    for pid, prob in win_probabilities(layout.pool).items():
        name = next(p.name for p in state.participants if p.id == pid)
        print(f"{name:<20} {prob:7.2%}")
    return 0


def cmd_spin(args: argparse.Namespace) -> int:
    config, state = _load(args)
    log = logging.getLogger("spin")

    layout = build_layout(state.participants, state.settings)
    if not layout.can_spin:
        raise SystemExit("No eligible participants. Add some or clear exclusions.")

    seed = args.seed if args.seed is not None else random.randrange(2**32)
    plan = plan_spin(layout, state.settings, random.Random(seed), config.min_full_turns)
    if plan is None:
        raise SystemExit("Could not plan a spin for the current wheel.")

    log.info("Seed           : %d", seed)
    log.info("Pool size      : %d", len(layout.pool))
    log.debug("Target angle   : %.3f", plan.target_angle)
    log.debug("Final rotation : %.3f", plan.final_rotation)

    resolved = []
    driver = AnimationDriver(on_settled=resolved.append)
    start_plan(driver, plan)

    if args.no_animate:
        driver.tick(0.0)
        driver.tick(float(plan.duration_ms))
    else:
        def draw_frame(_rotation: float) -> None:
            line = format_frame(render_frame(layout, driver), plan.final_rotation)
            sys.stdout.write("\r" + line)
            sys.stdout.flush()

        driver.on_rotation = draw_frame
        frames = run_frames(
            driver,
            clock=lambda: time.monotonic() * 1000.0,
            sleep=lambda ms: time.sleep(ms / 1000.0),
            frame_ms=config.frame_ms,
        )
        sys.stdout.write("\n")
        log.debug("Frames drawn   : %d", frames)

    winner = resolved[0]
    if args.out:
        audit = build_audit(state, plan, seed, config.min_full_turns)
        with open(args.out, "w", encoding="utf-8") as f:
            json.dump(audit, f, indent=2, ensure_ascii=False)

    print("========================================")
    print("WINNER")
    print(f"Name          : {winner.name}")
    print(f"Id            : {winner.id}")
    print(f"Seed          : {seed}")
    print("----------------------------------------")
    if args.out:
        print(f"Wrote audit: {args.out}")
    return 0


def cmd_verify(args: argparse.Namespace) -> int:
    try:
        result = verify_audit(args.audit)
    except RuntimeError as e:
        raise SystemExit(f"AUDIT FAILED: {e}")
    print("AUDIT VERIFIED")
    print(f"Winner        : {result['winner_name']} ({result['winner']})")
    print(f"Seed          : {result['seed']}")
    print(f"Pool size     : {result['pool_size']}")
    print(f"Final rotation: {result['final_rotation']:.3f}")
    return 0


def cmd_simulate(args: argparse.Namespace) -> int:
    if args.trials < 1:
        raise SystemExit("--trials must be >= 1")
    _, state = _load(args)
    layout = build_layout(state.participants, state.settings)
    if not layout.can_spin:
        raise SystemExit("No eligible participants.")

    rng = random.Random(args.seed)
    wins = simulate_draws(layout.pool, args.trials, rng)
    expected = win_probabilities(layout.pool)
    print(f"{'participant':<20} {'expected':>9} {'observed':>9}")
    for p in state.participants:
        if p.id not in expected:
            continue
        observed = wins[p.id] / args.trials
        print(f"{p.name:<20} {expected[p.id]:9.2%} {observed:9.2%}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="spin-wheel",
        description="Weighted random-selection wheel.",
    )
    p.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    p.add_argument("--state-file", default=None, help="Override state file (else use env).")

    sub = p.add_subparsers(dest="cmd", required=True)

    a = sub.add_parser("add", help="Add participants by name.")
    a.add_argument("names", nargs="+")
    a.set_defaults(func=cmd_add)

    r = sub.add_parser("remove", help="Remove a participant.")
    r.add_argument("id")
    r.set_defaults(func=cmd_remove)

    for name, help_text in (
        ("exclude", "Toggle a participant's excluded flag."),
        ("boost", "Toggle a participant's boosted flag."),
    ):
        t = sub.add_parser(name, help=help_text)
        t.add_argument("id")
        t.set_defaults(func=cmd_toggle)

    sub.add_parser("list", help="List participants.").set_defaults(func=cmd_list)

    s = sub.add_parser("settings", help="Show or change wheel settings.")
    s.add_argument("--slots", type=int, default=None, help="Base slot count (1-5).")
    s.add_argument("--duration-ms", type=int, default=None, help="Spin duration (2000-4000).")
    s.add_argument("--multiplier", type=int, default=None, help="Boost multiplier (2-10).")
    s.set_defaults(func=cmd_settings)

    i = sub.add_parser("import", help="Replace participants from a roster.")
    src = i.add_mutually_exclusive_group(required=True)
    src.add_argument("--names", default=None, help="Comma-separated names.")
    src.add_argument("--url", default=None, help="Roster URL or a URL with ?participants=a,b")
    src.add_argument("--file", default=None, help="Roster file (text or JSON).")
    i.add_argument("--timeout", type=float, default=30.0, help="HTTP timeout seconds.")
    i.set_defaults(func=cmd_import)

    sub.add_parser("layout", help="Show the merged wheel segments.").set_defaults(
        func=cmd_layout
    )

    sp = sub.add_parser("spin", help="Spin the wheel.")
    sp.add_argument("--seed", type=int, default=None, help="Seed for a reproducible spin.")
    sp.add_argument("--no-animate", action="store_true", help="Skip the terminal animation.")
    sp.add_argument("--out", default=None, help="Write an audit JSON to this path.")
    sp.set_defaults(func=cmd_spin)

    v = sub.add_parser("verify", help="Replay and verify a spin audit.")
    v.add_argument("--audit", required=True, help="Path to audit JSON.")
    v.set_defaults(func=cmd_verify)

    sim = sub.add_parser("simulate", help="Compare expected and observed win rates.")
    sim.add_argument("--trials", type=int, default=10_000)
    sim.add_argument("--seed", type=int, default=None)
    sim.set_defaults(func=cmd_simulate)

    return p


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()
    setup_logging(args.verbose)
    try:
        code = args.func(args)
    except RuntimeError as e:
        raise SystemExit(str(e))
    raise SystemExit(code)
