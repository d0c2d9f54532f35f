"""Unit tests for building a database from a compile_flags.txt file."""
from pathlib import Path

from compdb.parsing import ArgsKind, SourceFile, from_compile_flags_txt


class TestFromCompileFlagsTxt:

    def test_single_entry(self):
        database = from_compile_flags_txt(Path("/proj"), "-Wall\n-O2\n-std=c++17")
        assert len(database) == 1
        entry = database[0]
        assert entry.file == SourceFile.all()
        assert entry.arguments.kind == ArgsKind.FLAGS
        assert list(entry.arguments) == ["-Wall", "-O2", "-std=c++17"]
        assert entry.command is None
        assert entry.output is None

    def test_directory_unchanged(self):
        entry = from_compile_flags_txt("relative/dir", "-Wall")[0]
        assert entry.directory == "relative/dir"

    def test_trailing_newline(self):
        entry = from_compile_flags_txt("/proj", "-Wall\n-O2\n")[0]
        assert list(entry.arguments) == ["-Wall", "-O2"]

    def test_crlf_line_endings(self):
        entry = from_compile_flags_txt("/proj", "-Wall\r\n-O2\r\n")[0]
        assert list(entry.arguments) == ["-Wall", "-O2"]

    def test_lines_taken_verbatim(self):
        """No trimming or unescaping: one line is one argument."""
        contents = "  -Wall \n-DX=\"a b\"\n\n-I\\path"
        entry = from_compile_flags_txt("/proj", contents)[0]
        assert list(entry.arguments) == ["  -Wall ", "-DX=\"a b\"", "", "-I\\path"]

    def test_empty_file(self):
        database = from_compile_flags_txt("/proj", "")
        assert len(database) == 1
        assert list(database[0].arguments) == []

    def test_directory_kept_as_written(self):
        entry = from_compile_flags_txt("./proj/", "-Wall")[0]
        assert entry.directory == "./proj/"
        assert str(entry).startswith('{ "directory": "./proj/",')

    def test_path_directory_accepted(self):
        entry = from_compile_flags_txt(Path("/proj"), "-Wall")[0]
        assert entry.directory == "/proj"

    def test_lone_carriage_return_kept(self):
        """A '\\r' only ends a line when a '\\n' follows it."""
        entry = from_compile_flags_txt("/proj", "-Wall\r")[0]
        assert list(entry.arguments) == ["-Wall\r"]

    def test_carriage_return_on_last_unterminated_line(self):
        entry = from_compile_flags_txt("/proj", "-a\r\n-b\r")[0]
        assert list(entry.arguments) == ["-a", "-b\r"]
