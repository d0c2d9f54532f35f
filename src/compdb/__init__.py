from .parsing import (
    ArgsKind,
    CompilationDatabase,
    CompileArgs,
    CompileCommand,
    DecodeError,
    MissingFieldError,
    SourceFile,
    TypeMismatchError,
    from_compile_flags_txt,
    loads,
    split_command,
)
from .loader import (
    commands_for_file,
    find_compilation_database,
    load_compilation_database,
)

__version__ = "0.1.0"
