import pytest

from ms2parser import ChargeState, FormatError, Scan
from ms2parser.io.readers.ms2 import HeaderBuilder, ParseContext, ScanBuilder


@pytest.fixture()
def context():
    return ParseContext()


# -------------------------------------------------------------------------
# HeaderBuilder
# -------------------------------------------------------------------------


def test_header_recognized_keys_are_typed(context):
    builder = HeaderBuilder(context.report)
    builder.apply("H\tFirstScan\t1", 1)
    builder.apply("H\tLastScan\t33000", 2)
    builder.apply("H\tInstrumentType\tITMS", 3)

    assert builder.header.first_scan == 1
    assert builder.header.last_scan == 33000
    assert builder.header.instrument_type == "ITMS"
    assert builder.header.scan_range == (1, 33000)
    assert context.diagnostics == []


def test_header_value_fragments_are_rejoined(context):
    builder = HeaderBuilder(context.report)
    builder.apply("H\tComments\tRawXtract modified by Tao Xu, 2007", 1)
    builder.apply("H\tCreationDate\t4/13/2009 6:45:15 PM", 2)

    assert builder.header.comments == "RawXtract modified by Tao Xu, 2007"
    assert builder.header.creation_date == "4/13/2009 6:45:15 PM"


def test_header_unrecognized_key_goes_to_extras(context):
    builder = HeaderBuilder(context.report)
    builder.apply("H\tResolution\t60000", 1)

    assert builder.header.extras == {"Resolution": "60000"}
    assert builder.header.get("Resolution") == "60000"


def test_header_missing_value_is_reported_and_left_unset(context):
    builder = HeaderBuilder(context.report)
    builder.apply("H\tIsolationWindow", 4)

    assert builder.header.isolation_window is None
    assert len(context.diagnostics) == 1
    assert context.diagnostics[0].line_number == 4
    assert "IsolationWindow" in context.diagnostics[0].reason


def test_header_bad_int_is_reported(context):
    builder = HeaderBuilder(context.report)
    builder.apply("H\tFirstScan\tone", 7)

    assert builder.header.first_scan is None
    assert context.diagnostics[0].kind == "FORMAT_ERROR"
    assert "FirstScan" in context.diagnostics[0].reason


def test_header_repeated_key_last_wins_and_is_flagged(context):
    builder = HeaderBuilder(context.report)
    builder.apply("H\tExtractor\tRAWXtract", 1)
    builder.apply("H\tExtractor\tMakeMS2", 2)

    assert builder.header.extractor == "MakeMS2"
    assert [d.line_number for d in context.diagnostics] == [2]
    assert "repeated" in context.diagnostics[0].reason


# -------------------------------------------------------------------------
# ScanBuilder
# -------------------------------------------------------------------------


def test_scan_start_fields(context):
    scan = ScanBuilder(context.report).start("S\t000006\t000006\t405.58749", 1)

    assert scan.first_scan == 6
    assert scan.second_scan == 6
    assert scan.precursor_mz == pytest.approx(405.58749)
    assert scan.data == {}


def test_scan_start_with_missing_fields_still_opens_a_scan(context):
    scan = ScanBuilder(context.report).start("S\t000006", 3)

    assert isinstance(scan, Scan)
    assert scan.first_scan == 6
    assert scan.second_scan is None
    assert scan.precursor_mz is None
    assert len(context.diagnostics) == 1


def test_info_lines(context):
    builder = ScanBuilder(context.report)
    scan = Scan()
    builder.apply(scan, "I\tRetTime\t0.03", 1)
    builder.apply(scan, "I\tPrecursorScan\t1", 2)
    builder.apply(scan, "I\tPrecursorFile\tPfu_Orbit_041209_05.ms1", 3)
    builder.apply(scan, "I\tEZ\t2\t1057.52\t12.3\t4500", 4)

    assert scan.ret_time == pytest.approx(0.03)
    assert scan.precursor_scan == 1
    assert scan.precursor_file == "Pfu_Orbit_041209_05.ms1"
    assert scan.extras == {"EZ": "2\t1057.52\t12.3\t4500"}
    assert context.diagnostics == []


def test_info_bad_float_leaves_field_unset(context):
    builder = ScanBuilder(context.report)
    scan = Scan()
    builder.apply(scan, "I\tRetTime\tsoon", 9)

    assert scan.ret_time is None
    assert context.diagnostics[0].line_number == 9
    assert "RetTime" in context.diagnostics[0].reason


def test_multiple_charge_lines_are_all_kept(context):
    builder = ScanBuilder(context.report)
    scan = Scan()
    builder.apply(scan, "Z\t2\t1057.5238", 1)
    builder.apply(scan, "Z\t3\t1586.2820", 2)

    assert scan.charge_states == [ChargeState(2, 1057.5238), ChargeState(3, 1586.2820)]
    assert scan.charges == [2, 3]
    assert scan.charge == 3
    assert scan.mass == pytest.approx(1586.2820)


def test_charge_line_with_bad_mass(context):
    builder = ScanBuilder(context.report)
    scan = Scan()
    builder.apply(scan, "Z\t2\tabc", 5)

    assert scan.charge_states == [ChargeState(2, None)]
    assert len(context.diagnostics) == 1


def test_peak_last_write_wins(context):
    builder = ScanBuilder(context.report)
    scan = Scan()
    builder.apply(scan, "308.8282 15.6", 1)
    builder.apply(scan, "308.8282 15.6", 2)
    assert scan.data == {308.8282: 15.6}

    builder.apply(scan, "308.8282 99.0", 3)
    assert scan.data == {308.8282: 99.0}


def test_peak_extra_columns_are_ignored(context):
    builder = ScanBuilder(context.report)
    scan = Scan()
    builder.apply(scan, "308.8282\t15.6\t1\t0.98", 1)

    assert scan.data == {308.8282: 15.6}
    assert context.diagnostics == []


@pytest.mark.parametrize("line", ["308.8282", "308.8282 lots", "3O8.8 15.6"])
def test_malformed_peak_is_reported_and_dropped(context, line):
    builder = ScanBuilder(context.report)
    scan = Scan()
    builder.apply(scan, line, 12)

    assert scan.data == {}
    assert context.diagnostics[0].line_number == 12


def test_strict_context_raises():
    strict = ParseContext(strict=True)
    builder = ScanBuilder(strict.report)

    with pytest.raises(FormatError) as excinfo:
        builder.apply(Scan(), "308.8282 lots", 3)
    assert excinfo.value.line_number == 3
    assert strict.diagnostics == []


@pytest.mark.parametrize("line", ["1_000.5 2", "1000.5 2_0", "nan 1.0", "100.0 inf"])
def test_non_decimal_peak_numbers_are_rejected(context, line):
    scan = Scan()
    ScanBuilder(context.report).apply(scan, line, 2)

    assert scan.data == {}
    assert context.diagnostics[0].line_number == 2


def test_underscored_scan_number_is_rejected(context):
    scan = ScanBuilder(context.report).start("S\t1_0\t10\t5.0", 1)

    assert scan.first_scan is None
    assert scan.second_scan == 10
    assert "FirstScan" in context.diagnostics[0].reason


@pytest.mark.parametrize("value, expected", [("25.000", 25.0), ("1e3", 1000.0), ("-.5", -0.5), ("+3.", 3.0)])
def test_decimal_forms_are_accepted(context, value, expected):
    scan = Scan()
    ScanBuilder(context.report).apply(scan, f"I\tRetTime\t{value}", 1)

    assert scan.ret_time == expected
    assert context.diagnostics == []
