"""Tests for the command-line entry point."""

import argparse

import pytest

from pulsecodes.cli import EXIT_CONSTRUCTION_FAILED, EXIT_INVALID_PARAMETER, _parity, main

SMALL = ["--leds", "4", "--bits", "4", "--parity", "0", "--stride", "0", "--stride-optimize", "0"]


class TestMain:
    def test_small_report(self, capsys):
        assert main(SMALL) == 0
        out = capsys.readouterr().out
        assert out.startswith("Unshifted table: ")
        assert "Maximum brightness: 4" in out
        assert "Theoretical minimum for packing this many 1's: 2" in out

    def test_csv(self, capsys):
        assert main(SMALL + ["--csv"]) == 0
        assert capsys.readouterr().out.endswith("1,1,1,0,\n1,0,1,0,\n1,1,0,0,\n1,0,0,0,\n")

    def test_defaults(self, capsys):
        assert main([]) == 0
        out = capsys.readouterr().out
        assert " 39: " in out

    def test_simple_encoding(self, capsys):
        assert main(["--simple-encoding", "--leds", "4", "--bits", "2"]) == 0
        out = capsys.readouterr().out
        assert "  0: **........" in out

    def test_negative_stride_selects_greedy(self, capsys):
        assert main(["--leds", "6", "--bits", "6", "--stride", "-5"]) == 0

    def test_large_stride(self, capsys):
        assert main(SMALL + ["--stride", "5000"]) == 0

    def test_options(self, capsys):
        assert main(["--leds", "8", "--bits", "8", "--no-level", "--tie-break", "smallest"]) == 0

    def test_construction_failure(self, capsys):
        assert main(["--leds", "1000", "--bits", "4"]) == EXIT_CONSTRUCTION_FAILED
        captured = capsys.readouterr()
        assert "Could not construct table with 4 bits for 1000 LEDs." in captured.err
        assert captured.out == ""

    def test_invalid_leds(self, capsys):
        assert main(["--leds", "0"]) == EXIT_INVALID_PARAMETER
        assert "invalid --leds" in capsys.readouterr().err

    def test_invalid_rounds(self, capsys):
        assert main(["--stride-optimize", "-1"]) == EXIT_INVALID_PARAMETER
        assert "invalid --stride-optimize" in capsys.readouterr().err

    def test_bad_parity_exits(self):
        with pytest.raises(SystemExit) as exc:
            main(["--parity", "3"])
        assert exc.value.code == 2


class TestParityArgument:
    def test_numeric(self):
        assert _parity("0") == "none"
        assert _parity("1") == "odd"
        assert _parity("2") == "even"

    def test_names(self):
        assert _parity("EVEN") == "even"
        assert _parity("odd") == "odd"

    def test_invalid(self):
        with pytest.raises(argparse.ArgumentTypeError):
            _parity("sometimes")
