"""End-to-end decoding of synthetic GP5 files."""

from pathlib import Path
import sys

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from gp5 import GP5Error, read_document, read_file  # noqa: E402
from gp5.duration import measure_length, time_for  # noqa: E402
from gp5.channels import GM_CHANNEL_1  # noqa: E402
from gp5.errors import TruncatedInput  # noqa: E402
from gp5.models import Clef, TripletFeel  # noqa: E402

from gp5_bytes import (  # noqa: E402
    V500,
    V510,
    beat,
    channel_slot,
    measure,
    measure_header,
    mix_change,
    note,
    song,
    song_prefix,
    track,
)


def test_minimal_document() -> None:
    document = read_document(song_prefix(V500))
    assert document.version == V500
    assert (document.major, document.minor) == (5, 0)
    assert document.measure_count == 0
    assert document.track_count == 0
    assert document.measure_headers == []
    assert document.tracks == []
    assert len(document.channels) == 64
    assert all(channel.parameters == [] for channel in document.channels)
    assert document.channels[9].is_percussion
    assert document.tempo_value == 120


@pytest.mark.parametrize("version", [V500, V510])
def test_metadata(version: str) -> None:
    data = song_prefix(
        version,
        title="Cliffs",
        artist="Band",
        comments=["first", "second"],
        lyric_track=1,
        lyric=(3, "la la"),
        tempo=96,
        key=-2,
    )
    document = read_document(data)
    assert document.title == "Cliffs"
    assert document.artist == "Band"
    assert document.subtitle == ""
    assert document.comments == ["first", "second"]
    assert document.lyric_track == 1
    assert document.lyric.from_measure == 3
    assert document.lyric.text == "la la"
    assert document.tempo_value == 96
    assert document.key_signature == 9


def _two_track_song(version: str) -> bytes:
    extended = version == V510
    return song(
        version,
        tempo=100,
        lyric_track=2,
        lyric=(1, "words"),
        slots=[channel_slot(program=29, volume=13)] + [channel_slot()] * 8 + [channel_slot(program=0)],
        headers=[
            measure_header(True, numerator=3, denominator=4),
            measure_header(False, repeat_open=True, key=1, triplet_feel=1),
        ],
        tracks=[
            track(1, extended=extended, name="Guitar", gm_channel_1=1, gm_channel_2=2),
            track(
                2,
                extended=extended,
                name="Bass",
                tuning=(43, 38, 33, 28),
                gm_channel_1=3,
                gm_channel_2=4,
            ),
        ],
        bodies=[
            # measure 1, guitar then bass
            measure(
                [
                    beat([(0, note(3)), (5, note(0))], mix_change=mix_change(80, extended)),
                    beat([(0, note(0, note_type=2))], duration=-1),
                ]
            ),
            measure([beat([(3, note(5))], duration=-2)]),
            # measure 2
            measure([beat([(0, note(0, note_type=2))]), beat()]),
            measure([beat()]),
        ],
    )


@pytest.mark.parametrize("version", [V500, V510])
def test_full_song(version: str) -> None:
    document = read_document(_two_track_song(version))

    assert document.measure_count == 2
    assert document.track_count == 2
    first, second = document.measure_headers
    assert first.start == 0
    assert measure_length(first) == 2880
    assert second.start == 2880
    assert second.repeat_open
    assert second.triplet_feel is TripletFeel.EIGHTH
    assert second.time_signature.numerator == 3
    # mix change inside measure 1 sets the tempo snapshot of both headers
    assert first.tempo == 80
    assert second.tempo == 80

    guitar, bass = document.tracks
    assert guitar.name == "Guitar"
    assert [s.value for s in guitar.strings] == [64, 59, 55, 50, 45, 40]
    assert bass.name == "Bass"
    assert len(bass.strings) == 4
    assert guitar.lyric.text == ""
    assert bass.lyric.text == "words"

    assert guitar.channel_id == 65
    assert bass.channel_id == 66
    assert len(document.channels) == 66
    guitar_channel = document.channel_by_id(65)
    assert guitar_channel.program == 29
    assert guitar_channel.volume == 13
    assert guitar_channel.parameter(GM_CHANNEL_1) == "0"

    assert [len(t.measures) for t in document.tracks] == [2, 2]
    m1, m2 = guitar.measures
    assert m1.start == 0 and m2.start == 2880
    assert document.header_for(m2) is second
    assert m1.clef is Clef.TREBLE
    assert bass.measures[0].clef is Clef.BASS
    assert m1.key_signature == 0
    assert m2.key_signature == 1

    assert [b.start for b in m1.beats] == [0, 960]
    assert [(n.string, n.value) for n in m1.beats[0].voices[0].notes] == [(1, 3), (6, 0)]
    tied = m1.beats[1].voices[0].notes[0]
    assert tied.tied and tied.value == 3
    assert time_for(m1.beats[1].voices[0].duration) == 1920

    # the tie in measure 2 reaches back into measure 1; the trailing rest is pruned
    assert len(m2.beats) == 1
    assert m2.beats[0].voices[0].notes[0].value == 3

    assert bass.measures[0].beats[0].voices[0].notes[0].string == 4
    assert bass.measures[0].beats[0].voices[0].duration.value == 1
    assert bass.measures[1].beats == []


def test_tracks_sharing_a_slot_share_a_channel() -> None:
    data = song(
        V500,
        headers=[measure_header(True)],
        tracks=[
            track(1, gm_channel_1=10, gm_channel_2=11),
            track(2, gm_channel_1=10, gm_channel_2=11),
            track(3, gm_channel_1=0, gm_channel_2=0),
        ],
        bodies=[measure(), measure(), measure()],
    )
    document = read_document(data)
    ids = [t.channel_id for t in document.tracks]
    assert ids == [65, 65, 0]
    drums = document.channel_by_id(65)
    assert drums.is_percussion
    assert document.tracks[0].measures[0].clef is Clef.TREBLE
    assert document.channel_by_id(0) is None


def test_truncated_file_raises() -> None:
    data = _two_track_song(V500)
    with pytest.raises(TruncatedInput):
        read_document(data[:-3])


def test_truncated_header_region_raises() -> None:
    data = song_prefix(V510)
    with pytest.raises(TruncatedInput):
        read_document(data[:200])


def test_read_file(tmp_path: Path) -> None:
    path = tmp_path / "song.gp5"
    path.write_bytes(_two_track_song(V510))
    document = read_file(path)
    assert document.minor == 10
    assert [t.name for t in document.tracks] == ["Guitar", "Bass"]


def test_read_file_missing_path(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        read_file(tmp_path / "missing.gp5")


@pytest.mark.parametrize("denominator", [0, -2])
def test_zero_denominator_aborts_decode(denominator: int) -> None:
    data = song(
        V500,
        headers=[measure_header(True, numerator=4, denominator=denominator)],
        tracks=[track(1)],
        bodies=[measure()],
    )
    with pytest.raises(GP5Error):
        read_document(data)


def test_zero_denominator_without_tracks_aborts_decode() -> None:
    with pytest.raises(GP5Error):
        read_document(song(V500, headers=[measure_header(True, numerator=4, denominator=0)]))
