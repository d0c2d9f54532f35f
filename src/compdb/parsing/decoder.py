"""
Decoding of compile_commands.json.

The format carries no explicit tags, so each field is decoded by looking at
the runtime shape of its JSON value. Decoding is all-or-nothing: the first
bad entry raises and no partial database is returned.
"""
import json
from typing import Any, Optional

from .model import CompilationDatabase, CompileArgs, CompileCommand, SourceFile

EXPECT_PATH = "a string representing a file path"
EXPECT_STRING_ARRAY = "an array of strings"
EXPECT_STRING = "a string"
EXPECT_ENTRY = "an object describing one compile step"
EXPECT_DATABASE = "an array of compile command objects"

_JSON_TYPE_NAMES = {
    type(None): "null",
    bool: "a boolean",
    int: "a number",
    float: "a number",
    str: "a string",
    list: "an array",
    dict: "an object",
}


def _describe(value: Any) -> str:
    return _JSON_TYPE_NAMES.get(type(value), type(value).__name__)


class DecodeError(ValueError):
    """Raised when a compilation database cannot be decoded."""

    def __init__(self, message: str, field: Optional[str] = None,
                 expected: Optional[str] = None, index: Optional[int] = None):
        self.field = field
        self.expected = expected
        self.index = index
        super().__init__(message)

    def at(self, index: int) -> "DecodeError":
        """Returns a copy of this error located at entry `index`."""
        return type(self)(f"entry {index}: {self}", field=self.field,
                          expected=self.expected, index=index)


class TypeMismatchError(DecodeError):
    pass


class MissingFieldError(DecodeError):
    pass


def _mismatch(value: Any, expected: str, field: Optional[str] = None) -> TypeMismatchError:
    where = f"field '{field}': " if field else ""
    return TypeMismatchError(
        f"{where}invalid type: {_describe(value)}, expected {expected}",
        field=field,
        expected=expected,
    )


def decode_source_file(value: Any) -> SourceFile:
    if not isinstance(value, str):
        raise _mismatch(value, EXPECT_PATH, "file")
    return SourceFile.file(value)


def decode_compile_args(value: Any) -> CompileArgs:
    if not isinstance(value, list):
        raise _mismatch(value, EXPECT_STRING_ARRAY, "arguments")
    for item in value:
        if not isinstance(item, str):
            raise _mismatch(item, EXPECT_STRING_ARRAY, "arguments")
    return CompileArgs.arguments(value)


def _required(entry: dict, field: str) -> Any:
    if field not in entry:
        raise MissingFieldError(f"missing field '{field}'", field=field)
    return entry[field]


def _optional_string(entry: dict, field: str, expected: str) -> Optional[str]:
    value = entry.get(field)
    if value is None:
        return None
    if not isinstance(value, str):
        raise _mismatch(value, expected, field)
    return value


def decode_compile_command(entry: Any) -> CompileCommand:
    """Decodes one object of the database. Unknown keys are ignored."""
    if not isinstance(entry, dict):
        raise _mismatch(entry, EXPECT_ENTRY)

    directory = _required(entry, "directory")
    if not isinstance(directory, str):
        raise _mismatch(directory, EXPECT_PATH, "directory")
    source = decode_source_file(_required(entry, "file"))

    arguments = entry.get("arguments")
    output = _optional_string(entry, "output", EXPECT_PATH)

    return CompileCommand(
        directory=directory,
        file=source,
        arguments=decode_compile_args(arguments) if arguments is not None else None,
        command=_optional_string(entry, "command", EXPECT_STRING),
        output=output,
    )


def decode_database(value: Any) -> CompilationDatabase:
    """Decodes an already parsed JSON value into a CompilationDatabase."""
    if not isinstance(value, list):
        raise _mismatch(value, EXPECT_DATABASE)

    database: CompilationDatabase = []
    for index, entry in enumerate(value):
        try:
            database.append(decode_compile_command(entry))
        except DecodeError as e:
            raise e.at(index) from e
    return database


def loads(text: str) -> CompilationDatabase:
    """Parses the text of a compile_commands.json file."""
    try:
        value = json.loads(text)
    except json.JSONDecodeError as e:
        raise TypeMismatchError(f"malformed JSON: {e}", expected=EXPECT_DATABASE) from e
    return decode_database(value)
