from pathlib import Path
import sys

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from tools.inspect_gp5 import format_midi_note, main  # noqa: E402

from gp5_bytes import V500, beat, measure, measure_header, note, song, track  # noqa: E402


def _write_song(tmp_path: Path) -> Path:
    data = song(
        V500,
        title="Report",
        headers=[measure_header(True, marker="Verse"), measure_header(False, numerator=3)],
        tracks=[track(1, name="Lead")],
        bodies=[
            measure([beat([(0, note(5))])]),
            measure([beat([(0, note(0, note_type=2))])]),
        ],
    )
    path = tmp_path / "report.gp5"
    path.write_bytes(data)
    return path


def test_format_midi_note() -> None:
    assert format_midi_note(64) == "E4"
    assert format_midi_note(40) == "E2"
    assert format_midi_note(60) == "C4"


def test_report(tmp_path: Path, capsys) -> None:
    path = _write_song(tmp_path)
    assert main([str(path)]) == 0
    out = capsys.readouterr().out
    assert "Version: FICHIER GUITAR PRO v5.00 (5.00)" in out
    assert "Title: Report" in out
    assert "Measures: 2  Tracks: 1" in out
    assert "marker='Verse'" in out
    assert "time=3/4" in out
    assert "Track 1: 'Lead'" in out
    assert "strings: 6 [E4 B3 G3 D3 A2 E2]" in out
    assert "measures=2 beats=2 notes=2 tied=1" in out


def test_report_rejects_unsupported_file(tmp_path: Path, capsys) -> None:
    path = tmp_path / "old.gp4"
    path.write_bytes(b"\x18FICHIER GUITAR PRO v4.06" + bytes(6))
    assert main([str(path)]) == 1
    assert "unsupported version" in capsys.readouterr().err


def test_report_rejects_zero_denominator(tmp_path: Path, capsys) -> None:
    path = tmp_path / "broken.gp5"
    path.write_bytes(song(V500, headers=[measure_header(True, numerator=4, denominator=0)]))
    assert main([str(path)]) == 1
    assert "has no length" in capsys.readouterr().err
