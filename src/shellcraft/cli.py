from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from .config import Settings
from .logging_config import configure_logging, resolve_level
from .quests import QuestDataError, load_quests, run_journal
from .soul import QuestSlotError, Soul, SoulError, SoulIOError, load_soul, save_soul

logger = logging.getLogger(__name__)


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--soul",
        dest="soul_path",
        type=Path,
        default=None,
        help="Path to soul.dat (defaults to the platform user data directory).",
    )
    parser.add_argument(
        "--settings",
        dest="settings_path",
        type=Path,
        default=None,
        help="Path to a user settings YAML file to load/override defaults.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable verbose debug logging.",
    )


def _setup(args: argparse.Namespace) -> Settings:
    settings = Settings.load(user_path=args.settings_path)
    level = logging.DEBUG if args.debug else resolve_level(logging.INFO, settings.log.level)
    configure_logging(level=level)
    return settings


def _report(prefix: str, exc: SoulError) -> None:
    print(f"Error: {prefix}: {exc}", file=sys.stderr)
    if isinstance(exc, SoulIOError) and exc.ambiguous:
        print("Warning: the soul file may or may not contain the new state.", file=sys.stderr)


# ---------------------------------------------------------------- quest ---


def build_quest_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="shellcraft-quest", description="Show the quest journal and take on new quests")
    _add_common_args(p)
    p.add_argument("--sewer", dest="sewer_path", type=Path, default=None, help="Directory scanned for .rat files")
    p.add_argument("--quests", dest="quests_path", type=Path, default=None, help="Quest text file overriding the bundled one")
    return p


def quest_main(argv: Optional[list[str]] = None) -> int:
    args = build_quest_parser().parse_args(argv)
    settings = _setup(args)

    soul_path = args.soul_path or settings.soul_path
    sewer_path = args.sewer_path or settings.sewer_path

    try:
        catalog = load_quests(args.quests_path or settings.quests_path)
    except QuestDataError as e:
        print(f"Error: Cannot read quest data: {e}", file=sys.stderr)
        return 1

    try:
        soul = load_soul(soul_path)
    except SoulError as e:
        _report("Cannot read your soul", e)
        return 1

    try:
        run_journal(soul, catalog, soul_path, sewer_path)
    except QuestDataError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except QuestSlotError as e:
        _report("Cannot accept quest", e)
        return 1
    except SoulError as e:
        _report("Cannot save your soul", e)
        return 1
    return 0


# ----------------------------------------------------------------- soul ---


def _cmd_init(args: argparse.Namespace, soul_path: Path) -> int:
    if soul_path.exists() and not args.force:
        print(f"Error: {soul_path} already exists (use --force to overwrite)", file=sys.stderr)
        return 1
    try:
        save_soul(Soul(), soul_path)
    except SoulError as e:
        _report("Cannot create soul", e)
        return 1
    print(f"Created fresh soul at {soul_path}")
    return 0


def _cmd_show(args: argparse.Namespace, soul_path: Path) -> int:
    try:
        soul = load_soul(soul_path)
    except SoulError as e:
        _report("Cannot read your soul", e)
        return 1

    print(f"Soul: {soul_path}")
    print(f"  Level:      {soul.level}")
    print(f"  Experience: {soul.experience} / {soul.xp_for_next_level}")
    print(f"  HP:         {soul.hit_points} / {soul.hit_point_ceiling}")
    print(f"  Quest slots ({soul.unlocked_slots} unlocked):")
    for index, quest_id in enumerate(soul.quest_slots):
        state = "open" if soul.is_slot_unlocked(index) else "locked"
        print(f"    [{index}] {state:<6} {quest_id if quest_id else '-'}")
    return 0


def build_soul_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="shellcraft-soul", description="Inspect or create a soul.dat file")
    _add_common_args(p)
    sub = p.add_subparsers(dest="cmd", required=True)

    i = sub.add_parser("init", help="Write a fresh level 0 soul")
    i.add_argument("--force", action="store_true", help="Overwrite an existing soul file")
    i.set_defaults(func=_cmd_init)

    s = sub.add_parser("show", help="Print the decoded soul")
    s.set_defaults(func=_cmd_show)

    return p


def soul_main(argv: Optional[list[str]] = None) -> int:
    args = build_soul_parser().parse_args(argv)
    settings = _setup(args)
    return args.func(args, args.soul_path or settings.soul_path)
