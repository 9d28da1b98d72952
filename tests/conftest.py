import textwrap

import pytest


SAMPLE_MS2 = """\
H\tCreationDate\t4/13/2009 6:45:15 PM
H\tExtractor\tRAWXtract
H\tExtractorVersion\t1.9.9.2
H\tComments\tRawXtract modified by Tao Xu, 2007
H\tExtractorOptions\tMS2
H\tAcquisitionMethod\tData-Dependent
H\tInstrumentType\tITMS
H\tScanType\tMS2
H\tDataType\tCentroid
H\tIsolationWindow
H\tFirstScan\t1
H\tLastScan\t33000
S\t000006\t000006\t405.58749
I\tRetTime\t0.03
I\tIonInjectionTime\t25.000
I\tActivationType\tCID
I\tInstrumentType\tITMS
I\tPrecursorInt\t214647.2
I\tPrecursorScan\t1
I\tPrecursorFile\tPfu_Orbit_041209_05.ms1
Z\t7\t2833.0688
308.8282 15.6
362.2597 27.8
390.5037 12.6
547.0424 16.2
563.5495 28.7
661.8907 15.6
S\t000008\t000008\t529.26556
I\tRetTime\t0.05
I\tActivationType\tHCD
Z\t2\t1057.5238
Z\t3\t1586.2820
150.1234 101.0
250.5678 202.0
S\t000010\t000010\t612.80011
I\tRetTime\t0.08
Z\t2\t1224.5929
200.0 5.0
"""


def mock_ms2_file(tmp_path, text: str, name: str = "sample.ms2"):
    """Write text to an MS2 file under tmp_path and return its path.

    Leading indentation is removed so tests can use indented triple-quoted strings.
    """
    path = tmp_path / name
    path.write_text(textwrap.dedent(text))
    return path


@pytest.fixture()
def sample_ms2(tmp_path):
    """A three-scan MS2 file with a full header."""
    return mock_ms2_file(tmp_path, SAMPLE_MS2)


@pytest.fixture()
def write_ms2(tmp_path):
    """Factory fixture: write_ms2(text, name="sample.ms2") -> Path."""

    def _write(text: str, name: str = "sample.ms2"):
        return mock_ms2_file(tmp_path, text, name)

    return _write
