"""Tests for the command-line interface.

The CLI opens real files, so these tests work in pytest's ``tmp_path``.
"""

from pathlib import Path

import pytest

from smaps_csv.cli import EXIT_FAILURE, EXIT_OK, main

SMAPS = (
    b"55d0c8a00000-55d0c8a02000 r--p 00000000 fd:01 3277150      /usr/bin/cat\n"
    b"Size:                  8 kB\n"
    b"Rss:                   8 kB\n"
    b"VmFlags: rd mr mw me dw sd\n"
    b"7ffd1b5e1000-7ffd1b602000 rw-p 00000000 00:00 0            [stack]\n"
    b"Size:                132 kB\n"
    b"Rss:                  12 kB\n"
    b"VmFlags: rd wr mr mw me gd ac\n"
)
EXPECTED_CSV = (
    "AddressStart,AddressEnd,Perms,Offset,Dev,Inode,Pathname,Size,Rss,VmFlags\n"
    "55d0c8a00000,55d0c8a02000,r--p,00000000,fd:01,3277150,/usr/bin/cat,8,8,rd mr mw me dw sd\n"
    "7ffd1b5e1000,7ffd1b602000,rw-p,00000000,00:00,0,[stack],132,12,rd wr mr mw me gd ac\n"
)
EXIT_USAGE = 2


def _write_input(tmp_path: Path, data: bytes) -> Path:
    """Write *data* to an input file and return its path."""
    path = tmp_path / "smaps"
    path.write_bytes(data)
    return path


class TestCliSuccess:
    """Verify successful conversions."""

    def test_converts_file(self, tmp_path: Path) -> None:
        """A well-formed input produces the expected CSV file."""
        src = _write_input(tmp_path, SMAPS)
        dst = tmp_path / "out.csv"
        assert main(["-i", str(src), "-o", str(dst)]) == EXIT_OK
        assert dst.read_text() == EXPECTED_CSV

    def test_separator_flag(self, tmp_path: Path) -> None:
        """-sep changes the column separator."""
        src = _write_input(tmp_path, SMAPS)
        dst = tmp_path / "out.csv"
        assert main(["-i", str(src), "-o", str(dst), "-sep", ";"]) == EXIT_OK
        assert dst.read_text().splitlines()[0].startswith("AddressStart;AddressEnd;Perms")

    def test_verbose_prints_log(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """-v prints the conversion log to stderr."""
        src = _write_input(tmp_path, SMAPS)
        dst = tmp_path / "out.csv"
        main(["-i", str(src), "-o", str(dst), "-v"])
        err = capsys.readouterr().err
        assert "[INFO] converter: schema: Size, Rss, VmFlags" in err
        assert "wrote 2 regions" in err

    def test_single_verbose_omits_regions(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """-v shows INFO and above, not the per-region DEBUG entries."""
        src = _write_input(tmp_path, SMAPS)
        main(["-i", str(src), "-o", str(tmp_path / "out.csv"), "-v"])
        assert "[DEBUG]" not in capsys.readouterr().err

    def test_double_verbose_shows_regions(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """-vv adds one DEBUG entry per region."""
        src = _write_input(tmp_path, SMAPS)
        main(["-i", str(src), "-o", str(tmp_path / "out.csv"), "-vv"])
        err = capsys.readouterr().err
        expected_regions = 2
        assert err.count("[DEBUG] converter: region") == expected_regions

    def test_quiet_by_default(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Without -v a successful run prints nothing."""
        src = _write_input(tmp_path, SMAPS)
        main(["-i", str(src), "-o", str(tmp_path / "out.csv")])
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_non_utf8_pathname_preserved(self, tmp_path: Path) -> None:
        """Pathname bytes that aren't UTF-8 reach the output unchanged."""
        data = b"1000-2000 r--p 00000000 08:01 7      /tmp/\xff\nSize: 4 kB\n"
        src = _write_input(tmp_path, data)
        dst = tmp_path / "out.csv"
        assert main(["-i", str(src), "-o", str(dst)]) == EXIT_OK
        assert b"/tmp/\xff,4" in dst.read_bytes()


class TestCliFailure:
    """Verify failures are reported and leave no output behind."""

    def test_schema_mismatch(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """A schema mismatch exits 1, reports the error, and removes the output."""
        data = SMAPS + b"8000-9000 rw-p 00000000 00:00 0 \nSize: 4 kB\n"
        src = _write_input(tmp_path, data)
        dst = tmp_path / "out.csv"
        assert main(["-i", str(src), "-o", str(dst)]) == EXIT_FAILURE
        assert "smaps-csv: error: field names mismatch" in capsys.readouterr().err
        assert not dst.exists()

    def test_long_line(self, tmp_path: Path) -> None:
        """A line over --max-line-length fails the run."""
        src = _write_input(tmp_path, SMAPS)
        dst = tmp_path / "out.csv"
        assert main(["-i", str(src), "-o", str(dst), "--max-line-length", "40"]) == EXIT_FAILURE
        assert not dst.exists()

    def test_missing_input(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """A missing input file is an I/O error, exit 1."""
        dst = tmp_path / "out.csv"
        assert main(["-i", str(tmp_path / "nope"), "-o", str(dst)]) == EXIT_FAILURE
        assert "error" in capsys.readouterr().err
        assert not dst.exists()

    def test_verbose_shows_error_entry(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """-v on a failed run includes the ERROR entry with its line."""
        src = _write_input(tmp_path, b"Size: 4 kB\n")
        main(["-i", str(src), "-o", str(tmp_path / "out.csv"), "-v"])
        assert "[ERROR] converter:" in capsys.readouterr().err


class TestCliUsage:
    """Verify flag validation happens before any file is touched."""

    def test_missing_output_flag(self, tmp_path: Path) -> None:
        """-o is required."""
        with pytest.raises(SystemExit) as info:
            main(["-i", str(tmp_path / "smaps")])
        assert info.value.code == EXIT_USAGE

    def test_missing_input_flag(self, tmp_path: Path) -> None:
        """-i is required."""
        with pytest.raises(SystemExit) as info:
            main(["-o", str(tmp_path / "out.csv")])
        assert info.value.code == EXIT_USAGE

    def test_multi_character_separator(self, tmp_path: Path) -> None:
        """A multi-character -sep is rejected and no output is created."""
        src = _write_input(tmp_path, SMAPS)
        dst = tmp_path / "out.csv"
        with pytest.raises(SystemExit) as info:
            main(["-i", str(src), "-o", str(dst), "-sep", "::"])
        assert info.value.code == EXIT_USAGE
        assert not dst.exists()

    def test_quote_character_separator(self, tmp_path: Path) -> None:
        """-sep '"' collides with CSV quoting and is rejected up front."""
        src = _write_input(tmp_path, SMAPS)
        dst = tmp_path / "out.csv"
        with pytest.raises(SystemExit) as info:
            main(["-i", str(src), "-o", str(dst), "-sep", '"'])
        assert info.value.code == EXIT_USAGE
        assert not dst.exists()

    def test_non_positive_line_limit(self, tmp_path: Path) -> None:
        """--max-line-length must be a positive integer."""
        with pytest.raises(SystemExit) as info:
            main(["-i", "a", "-o", str(tmp_path / "b"), "--max-line-length", "0"])
        assert info.value.code == EXIT_USAGE
