import sys
import os
import time
import logging
import argparse
from pathlib import Path
from typing import Optional
from .loader import commands_for_file, find_compilation_database, load_compilation_database
from .parsing import DecodeError
from .utils.config import ConfigManager
from .utils.display import display_database
from .utils.watcher import DatabaseWatcher

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser."""
    parser = argparse.ArgumentParser(description="compdb: Inspect a compilation database")
    parser.add_argument("path", nargs="?", default=".", help="compile_commands.json, compile_flags.txt, or a directory to search")
    parser.add_argument("--file", dest="source", help="Only show entries that apply to this source file")
    parser.add_argument("--raw", action="store_true", help="Print the debug rendering of each entry")
    parser.add_argument("--watch", action="store_true", help="Print again whenever the database changes")
    parser.add_argument("--driver", help="Compiler used to run compile_flags.txt flags")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _resolve_database(path: str, config: ConfigManager) -> Optional[Path]:
    target = Path(path)
    if target.is_dir():
        return find_compilation_database(target, config.get("search_dirs", [".", "build", "out", "debug"]))
    if target.exists():
        return target
    return None


def show(db_path: Path, args, driver: Optional[str]):
    database = load_compilation_database(db_path)
    if args.source:
        database = commands_for_file(database, os.path.abspath(args.source))
    display_database(database, title=str(db_path), driver=driver, raw=args.raw)


def run():
    parser = _build_parser()
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = ConfigManager()
    driver = args.driver or config.get("flags_driver")

    db_path = _resolve_database(args.path, config)
    if db_path is None:
        print(f"Error: No compilation database found at {os.path.abspath(args.path)}")
        sys.exit(1)

    try:
        show(db_path, args, driver)
    except (OSError, DecodeError) as e:
        print(f"Error: {db_path}: {e}")
        sys.exit(1)

    if not args.watch:
        return

    def _on_change(path: str):
        try:
            show(Path(path), args, driver)
        except (OSError, DecodeError) as e:
            # Keep watching; the next rewrite may fix it
            print(f"Error: {path}: {e}")

    watcher = DatabaseWatcher()
    watcher.start_watching(str(db_path), _on_change)
    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        pass
    finally:
        watcher.stop_watching()

if __name__ == "__main__":
    run()
