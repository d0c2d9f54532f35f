from .tokenizer import split_command, unescape_command
from .model import (
    ArgsKind,
    CompilationDatabase,
    CompileArgs,
    CompileCommand,
    SourceFile,
)
from .decoder import (
    DecodeError,
    MissingFieldError,
    TypeMismatchError,
    decode_compile_args,
    decode_compile_command,
    decode_database,
    decode_source_file,
    loads,
)
from .flags import FLAGS_FILE_NAME, from_compile_flags_txt
