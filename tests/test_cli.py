import pytest

from bacalign import __version__
from bacalign.cli import build_parser, main


class TestDistance:
    @pytest.mark.parametrize("argv, expected", [
        (["distance", "hamming", "karolin", "kathrin"], "3"),
        (["distance", "levenshtein", "kitten", "sitting"], "3"),
        (["distance", "normalized_hamming", "MARGARET", "MARGAKET"], "0.125"),
    ])
    def test_metrics(self, capsys, argv, expected):
        assert main(argv) == 0
        assert capsys.readouterr().out.strip() == expected

    def test_length_mismatch(self, capsys):
        assert main(["distance", "hamming", "ab", "abc"]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "unequal length" in captured.err

    def test_unknown_metric(self, capsys):
        with pytest.raises(SystemExit):
            main(["distance", "euclidean", "a", "b"])


class TestAlign:
    def test_global(self, capsys):
        assert main(["align", "global", "similarity", "molarity"]) == 0
        out = capsys.readouterr().out
        assert out.startswith("# mode=global score=2 a=0:10 b=0:8\n")
        assert " 1 --molarity" in out

    def test_cigar(self, capsys):
        assert main(["align", "global", "GAAAATAAAT", "GATAAT", "--cigar"]) == 0
        assert capsys.readouterr().out.strip() == "1M3I2M1I3M"

    def test_local_empty(self, capsys):
        assert main(["align", "local", "AAAA", "CCCC"]) == 0
        assert capsys.readouterr().out.strip() == "# mode=local score=0 a=0:0 b=0:0"

    def test_non_ascii(self, capsys):
        assert main(["align", "local", "ACGTé", "ACGT"]) == 1
        assert "[ERROR]" in capsys.readouterr().err

    def test_invalid_width(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["align", "global", "A", "A", "--width", "0"])


def test_version(capsys):
    with pytest.raises(SystemExit):
        main(["--version"])
    assert __version__ in capsys.readouterr().out
