import io
import os
import stat

import pytest

from pyiniconf import (
    ByteSource, CharSource, Config, IniParser, ParserOptions, Position,
    SourceError, StreamSource, StringSource, parse, read_document
)


class ListSource(CharSource):
    """Hands out chars, then fails instead of ending."""

    def __init__(self, chars: str) -> None:
        self.chars = list(chars)

    def next(self) -> str:
        if not self.chars:
            raise OSError("device went away")
        return self.chars.pop(0)


class TestSources:
    def test_string_source_drains_to_empty(self) -> None:
        src = StringSource("ab")

        assert [src.next() for _ in range(4)] == ["a", "b", "", ""]

    def test_string_source_translates_newlines(self) -> None:
        src = StringSource("a\r\nb\rc")

        assert "".join(iter(src.next, "")) == "a\nb\nc"

    def test_stream_source(self) -> None:
        cfg = parse(StreamSource(io.StringIO("[s]\nk = v\n")))

        assert cfg["s"]["k"] == "v"

    def test_custom_source(self) -> None:
        class Chunks(CharSource):
            def __init__(self, *parts: str) -> None:
                self._chars = iter("".join(parts))

            def next(self) -> str:
                return next(self._chars, "")

        cfg = parse(Chunks("[s]\n", "k = v"))

        assert cfg["s"]["k"] == "v"

    def test_source_failure_is_wrapped(self) -> None:
        """I/O errors come back with the position they happened at."""
        with pytest.raises(SourceError) as e:
            parse(ListSource("k = v\n"))

        assert e.value.position == Position(2, 1)
        assert isinstance(e.value.__cause__, OSError)

    def test_byte_source_translates_newlines(self) -> None:
        src = ByteSource(io.BytesIO(b"a\r\nb\rc\n"), "utf-8")

        assert "".join(iter(src.next, "")) == "a\nb\nc\n"

    def test_byte_source_multibyte_chars(self) -> None:
        src = ByteSource(io.BytesIO("k = café €".encode("utf-8")), "utf-8")
        cfg = parse(src)

        assert cfg.globals["k"] == "café €"

    def test_byte_source_truncated_sequence(self) -> None:
        """A sequence cut by the end of input fails at that end."""
        with pytest.raises(SourceError) as e:
            parse(ByteSource(io.BytesIO(b"k = \xc3"), "utf-8"))

        assert e.value.position == Position(1, 5)

    def test_readstream(self) -> None:
        cfg = IniParser.readstream(io.StringIO("a = 1"))

        assert cfg.globals["a"] == "1"


class TestFiles:
    def test_read(self, tmp_path) -> None:
        path = tmp_path / "app.ini"
        path.write_text("[s]\nk = v\n", encoding="utf-8")

        assert read_document(path)["s"]["k"] == "v"
        assert Config.from_file(str(path)) == read_document(path)

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(FileNotFoundError):
            read_document(tmp_path / "nope.ini")

    def test_explicit_encoding(self, tmp_path) -> None:
        path = tmp_path / "latin.ini"
        path.write_bytes("name = café\n".encode("latin-1"))

        cfg = read_document(path, ParserOptions(encoding="latin-1"))

        assert cfg.globals["name"] == "café"

    def test_undecodable_byte_is_a_source_error(self, tmp_path) -> None:
        path = tmp_path / "bad.ini"
        path.write_bytes(b"name = \xff\xfe\xfa\n")

        with pytest.raises(SourceError) as e:
            read_document(path, ParserOptions(encoding="utf-8"))

        assert isinstance(e.value.__cause__, UnicodeDecodeError)
        assert e.value.position == Position(1, 8)

    def test_undecodable_byte_far_into_file(self, tmp_path) -> None:
        """The reported position is the bad byte's, not the chunk start."""
        path = tmp_path / "late.ini"
        path.write_bytes(b"a = 1\n" * 20 + b"b = \xff\n")

        with pytest.raises(SourceError) as e:
            read_document(path)

        assert e.value.position == Position(21, 5)

    def test_detected_encoding(self, tmp_path) -> None:
        path = tmp_path / "utf16.ini"
        path.write_bytes("[s]\nk = v\n".encode("utf-16"))

        cfg = read_document(path, ParserOptions(encoding=None))

        assert cfg["s"]["k"] == "v"

    def test_save_and_reload(self, tmp_path) -> None:
        cfg = parse("g = 1\n[DEFAULTS]\nt = 2\n[s]\nk = hello world\n")
        path = tmp_path / "out.ini"
        cfg.save(path)

        assert path.read_text(encoding="utf-8") == cfg.output()
        assert read_document(path) == cfg

    def test_save_sets_permissions(self, tmp_path) -> None:
        path = tmp_path / "mode.ini"
        Config({"s": {"k": "v"}}).save(path, permissions=0o600)

        assert stat.S_IMODE(os.stat(path).st_mode) == 0o600

    def test_save_with_separator(self, tmp_path) -> None:
        options = ParserOptions(separator=":")
        path = tmp_path / "colon.ini"
        IniParser(path, options).write(Config({"s": {"k": "v"}}))

        assert path.read_text(encoding="utf-8") == "[s]\nk : v\n"
        assert IniParser(path, options).read()["s"]["k"] == "v"


class TestOptions:
    def test_defaults(self) -> None:
        options = ParserOptions()

        assert options.comment_characters == frozenset(";#")
        assert options.separator == "="
        assert options.encoding == "utf-8"
        assert ParserOptions.DEFAULT == options

    def test_comment_chars_from_string(self) -> None:
        assert ParserOptions(comment_characters=";").comment_characters == {";"}

    @pytest.mark.parametrize("kwargs", [
        {"separator": "=="},
        {"separator": ";"},
        {"separator": " "},
        {"separator": "["},
        {"separator": '"'},
        {"comment_characters": ["//"]},
        {"comment_characters": " "},
        {"comment_characters": ";["},
        {"comment_characters": "]"},
        {"comment_characters": "'"},
        {"comment_characters": "\\"},
        {"comment_characters": "\n"},
    ])
    def test_rejects_bad_options(self, kwargs: dict) -> None:
        with pytest.raises(ValueError):
            ParserOptions(**kwargs)

    def test_rejects_unknown_encoding(self) -> None:
        with pytest.raises(LookupError):
            ParserOptions(encoding="no-such-codec")

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            ParserOptions.DEFAULT.separator = ":"  # type: ignore[misc]
