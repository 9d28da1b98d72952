import pytest

from ms2parser.io.readers.ms2 import LineKind, classify_line


@pytest.mark.parametrize(
    "line, expected",
    [
        ("H\tCreationDate\t4/13/2009", LineKind.HEADER),
        ("S\t000006\t000006\t405.58749", LineKind.SCAN_START),
        ("I\tRetTime\t0.03", LineKind.SCAN_ATTRIBUTE),
        ("Z\t7\t2833.0688", LineKind.SCAN_ATTRIBUTE),
        ("308.8282 15.6", LineKind.PEAK),
        ("0.5 1.0", LineKind.PEAK),
        ("9 1", LineKind.PEAK),
    ],
)
def test_classify_tagged_lines(line, expected):
    assert classify_line(line) is expected


@pytest.mark.parametrize(
    "line",
    [
        "",
        "   ",
        " H\tCreationDate\t4/13/2009",
        "D\tseq\tPEPTIDE",
        "# comment",
        "h\tlowercase",
        ".5 1.0",
        "-1.0 2.0",
    ],
)
def test_classify_ignored_lines(line):
    assert classify_line(line) is LineKind.IGNORED
