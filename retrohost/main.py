"""Entry: start the API server, or list ROMs, check covers, print player URLs."""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

import uvicorn

from retrohost.config import API_HOST, API_PORT, COVERS_SUBDIR, DATA_DIR, ROM_DIR, host_addr
from retrohost.core.catalog import display_key, player_url
from retrohost.core.covers import check_covers
from retrohost.core.scanner import scan_roms
from retrohost.core.systems import SYSTEMS, system_by_id
from retrohost.core.tag_store import load_tags
from retrohost.models.rom import RomRecord

logger = logging.getLogger(__name__)

EPILOG = """
Environment variables:
  ROM_DIR    Directory containing ROM files (default: /roms)
  DATA_DIR   Directory for save data (default: /data)
  PORT       Server port (default: 8080)
  HOST_ADDR  External address for URLs (default: localhost:PORT)
"""


def _table(rows: Sequence[Sequence[str]], out=sys.stdout) -> None:
    widths = [max(len(row[i]) for row in rows) for i in range(len(rows[0]))]
    for row in rows:
        cells = [cell.ljust(w) for cell, w in zip(row, widths)]
        print("  ".join(cells).rstrip(), file=out)


def _scan(rom_dir: Path, data_dir: Path):
    return scan_roms(rom_dir, load_tags(data_dir))


def cmd_serve(args: argparse.Namespace) -> int:
    logger.info("RetroHost starting on %s:%s", API_HOST, API_PORT)
    uvicorn.run("retrohost.api.app:app", host=API_HOST, port=API_PORT, reload=args.reload)
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    roms = _scan(args.rom_dir, args.data_dir)
    if not roms:
        print(f"No ROMs found in {args.rom_dir}")
        return 0
    rows = [("SYSTEM", "ROM", "FILE"), ("------", "---", "----")]
    for system in SYSTEMS:
        for rom in sorted(roms.get(system.id, []), key=lambda r: display_key(r.name)):
            rows.append((system.name, rom.name, rom.file_name))
    _table(rows)
    return 0


def cmd_covers(args: argparse.Namespace) -> int:
    roms = _scan(args.rom_dir, args.data_dir)
    if not roms:
        print(f"No ROMs found in {args.rom_dir}")
        return 0
    statuses = check_covers(roms, args.data_dir)
    rows = [("SYSTEM", "ROM", "COVER"), ("------", "---", "-----")]
    missing = 0
    for s in statuses:
        if not s.has_cover:
            missing += 1
        system = system_by_id(s.rom.system)
        rows.append((system.name if system else s.rom.system, s.rom.name, "✓" if s.has_cover else "✗ missing"))
    _table(rows)

    summary = f"\n{len(statuses) - missing}/{len(statuses)} ROMs have covers"
    if missing:
        summary += f" ({missing} missing)"
    print(summary)
    print(f"\nPlace cover images in: {args.data_dir / COVERS_SUBDIR}/<system>/<rom-name>.{{png,jpg,webp}}")
    return 0


def find_matches(roms, query: str) -> List[RomRecord]:
    """ROMs whose display name or file name contains query (case-insensitive), in system-table order."""
    q = query.casefold()
    matches = []
    for system in SYSTEMS:
        for rom in sorted(roms.get(system.id, []), key=lambda r: display_key(r.name)):
            if q in rom.name.casefold() or q in rom.file_name.casefold():
                matches.append(rom)
    return matches


def cmd_play(args: argparse.Namespace) -> int:
    query = " ".join(args.query)
    matches = find_matches(_scan(args.rom_dir, args.data_dir), query)
    if not matches:
        print(f"No ROM found matching '{query}'", file=sys.stderr)
        print("Use 'retrohost list' to see available ROMs", file=sys.stderr)
        return 1

    host = host_addr()
    if len(matches) == 1:
        rom = matches[0]
        print(f"Open this URL to play {rom.name}:\n")
        print(f"  {player_url(rom, host=host)}\n")
        return 0

    print(f"Multiple ROMs match '{query}':\n")
    for rom in matches:
        system = system_by_id(rom.system)
        print(f"  [{system.name if system else rom.system}] {rom.name}")
        print(f"    {player_url(rom, host=host)}\n")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="retrohost",
        description="RetroHost - Self-hosted retro gaming platform",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EPILOG,
    )
    parser.add_argument("--rom-dir", type=Path, default=ROM_DIR, help="ROM library root")
    parser.add_argument("--data-dir", type=Path, default=DATA_DIR, help="Saves, tags.json and covers")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command")

    serve = sub.add_parser("serve", help="Start the web server (default)")
    serve.add_argument("--reload", action="store_true", help="Reload on code changes")
    serve.set_defaults(func=cmd_serve)

    sub.add_parser("list", help="List all available ROMs").set_defaults(func=cmd_list)
    sub.add_parser("covers", help="Show cover art status for all ROMs").set_defaults(func=cmd_covers)

    play = sub.add_parser("play", help="Print URL to play a ROM")
    play.add_argument("query", nargs="+", help="Part of the ROM name or file name")
    play.set_defaults(func=cmd_play)

    sub.add_parser("help", help="Show this help message")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )
    if args.command == "help":
        parser.print_help()
        return 0
    if args.command is None:
        args.reload = False
        return cmd_serve(args)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
