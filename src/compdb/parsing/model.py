"""
Data model for a compilation database.

See: https://clang.llvm.org/docs/JSONCompilationDatabase.html#format
"""
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from .tokenizer import split_command

PathLike = Union[str, Path]


@dataclass(frozen=True)
class SourceFile:
    """
    The translation unit an entry applies to.

    `path` is None for the "all files" variant produced from a
    compile_flags.txt file. Otherwise it is the `file` field of a
    compile_commands.json entry, relative to the entry's directory
    unless absolute. The string is kept exactly as written, so "./a.c"
    and "a.c" are different files here.
    """
    path: Optional[str] = None

    @classmethod
    def all(cls) -> "SourceFile":
        return cls(None)

    @classmethod
    def file(cls, path: PathLike) -> "SourceFile":
        return cls(os.fspath(path))

    @property
    def is_all(self) -> bool:
        return self.path is None

    def __str__(self) -> str:
        return "all" if self.path is None else self.path


class ArgsKind(str, Enum):
    ARGUMENTS = "arguments"
    FLAGS = "flags"


@dataclass(frozen=True)
class CompileArgs:
    """
    Either a ready-to-exec argv (ARGUMENTS, first element is the compiler)
    or the flags of a compile_flags.txt file (FLAGS), which need a compiler
    driver prepended before they can be run.
    """
    kind: ArgsKind
    values: Tuple[str, ...] = ()

    @classmethod
    def arguments(cls, values: Sequence[str]) -> "CompileArgs":
        return cls(ArgsKind.ARGUMENTS, tuple(values))

    @classmethod
    def flags(cls, values: Sequence[str]) -> "CompileArgs":
        return cls(ArgsKind.FLAGS, tuple(values))

    @property
    def is_flags(self) -> bool:
        return self.kind == ArgsKind.FLAGS

    def __iter__(self):
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)


@dataclass(frozen=True)
class CompileCommand:
    """
    A single entry of a compile_commands.json file.

    Either `arguments` or `command` should be present. `arguments` wins when
    both are, since shell (un)escaping is a possible source of errors.
    """
    # Working directory of the compilation. Paths in `command` and `file`
    # are absolute or relative to it.
    directory: str
    file: SourceFile
    arguments: Optional[CompileArgs] = None
    # Single shell-escaped string; '"' and '\' are the only special characters.
    command: Optional[str] = None
    # Distinguishes several entries for the same input file.
    output: Optional[str] = None

    def args_from_cmd(self) -> Optional[List[str]]:
        """Tokenizes the `command` field, or returns None if there is none."""
        return split_command(self.command)

    def argv(self, driver: Optional[str] = None) -> Optional[List[str]]:
        """
        Returns an executable argv for this entry.

        FLAGS entries are prefixed with `driver`, which is required for them.
        Returns None when neither `arguments` nor `command` is present.
        """
        if self.arguments is not None:
            if self.arguments.is_flags:
                if not driver:
                    raise ValueError("a compiler driver is required to run flags from compile_flags.txt")
                return [driver, *self.arguments.values]
            return list(self.arguments.values)
        return self.args_from_cmd()

    @property
    def source_path(self) -> Optional[Path]:
        """The source file resolved against `directory`, None for "all files"."""
        if self.file.path is None:
            return None
        return Path(self.directory, self.file.path)

    def __str__(self) -> str:
        # Debug view only: values are not re-escaped, so this is not JSON.
        lines = [f'{{ "directory": "{self.directory}",']

        if self.arguments is not None:
            quoted = ", ".join(f'"{arg}"' for arg in self.arguments)
            lines.append(f'"{self.arguments.kind.value}": [{quoted}],')

        if self.command is not None:
            lines.append(f'"command": "{self.command}",')

        if self.output is not None:
            lines.append(f'"output": "{self.output}",')

        if self.file.is_all:
            lines.append('"file": all }')
        else:
            lines.append(f'"file": "{self.file.path}" }}')

        return "\n".join(lines)


# Entries in the order they appear in the source file.
CompilationDatabase = List[CompileCommand]
