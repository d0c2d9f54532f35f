import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .parsing import CompilationDatabase, CompileCommand, FLAGS_FILE_NAME, from_compile_flags_txt, loads

logger = logging.getLogger(__name__)

DATABASE_FILE_NAME = "compile_commands.json"

# Common places where CMake and friends put the database
DEFAULT_SEARCH_DIRS = (".", "build", "out", "debug")


def find_compilation_database(root_dir: Union[str, Path] = ".",
                              search_dirs: Sequence[str] = DEFAULT_SEARCH_DIRS) -> Optional[Path]:
    """
    Searches for compile_commands.json, then compile_flags.txt, in the
    standard build locations below root_dir.
    """
    root = Path(root_dir)
    for name in (DATABASE_FILE_NAME, FLAGS_FILE_NAME):
        for sub in search_dirs:
            path = root / sub / name
            if path.is_file():
                logger.debug("Found compilation database at %s", path)
                return path
    logger.debug("No compilation database below %s", root)
    return None


def load_compilation_database(path: Union[str, Path]) -> CompilationDatabase:
    """
    Reads a compile_commands.json or compile_flags.txt file.

    A compile_flags.txt file gets its parent directory as the entry's
    directory. Raises FileNotFoundError or DecodeError.
    """
    path = Path(path)
    contents = path.read_text(encoding="utf-8")

    if path.name == FLAGS_FILE_NAME:
        database = from_compile_flags_txt(path.parent, contents)
    else:
        database = loads(contents)

    logger.debug("Loaded %d entries from %s", len(database), path)
    return database


def commands_for_file(database: CompilationDatabase, source_file: Union[str, Path]) -> List[CompileCommand]:
    """
    Returns the entries that apply to source_file, in database order.
    Entries for "all files" always match.
    """
    # Normalize paths for comparison
    target = Path(source_file).resolve()
    matches = []
    for entry in database:
        source = entry.source_path
        if source is None or source.resolve() == target:
            matches.append(entry)
    return matches
