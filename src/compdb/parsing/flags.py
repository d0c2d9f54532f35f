import os
from pathlib import Path
from typing import List, Union

from .model import CompilationDatabase, CompileArgs, CompileCommand, SourceFile

FLAGS_FILE_NAME = "compile_flags.txt"


def _split_lines(contents: str) -> List[str]:
    # Only '\n' (optionally preceded by '\r') ends a line; everything else,
    # including surrounding whitespace and a '\r' not followed by '\n',
    # belongs to the flag.
    lines = contents.split("\n")
    last = lines.pop()
    lines = [line[:-1] if line.endswith("\r") else line for line in lines]
    if last:
        lines.append(last)
    return lines


def from_compile_flags_txt(directory: Union[str, Path], contents: str) -> CompilationDatabase:
    """
    Builds a one-entry CompilationDatabase from a compile_flags.txt file.

    The file holds one argument per line and the same flags apply to every
    source file, so the entry's `file` is SourceFile.all().

    See: https://clang.llvm.org/docs/JSONCompilationDatabase.html#alternatives
    """
    return [
        CompileCommand(
            directory=os.fspath(directory),
            file=SourceFile.all(),
            arguments=CompileArgs.flags(_split_lines(contents)),
        )
    ]
