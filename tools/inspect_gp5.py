#!/usr/bin/env python3
"""Human-readable Guitar Pro 5 inspector.

Decodes a single `.gp5` file and prints a text report: version and
score information, the channels tracks are routed to, measure headers
with time signature / repeat / marker changes, and per-track tuning
with measure, beat and note counts.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys
from typing import List, Sequence

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from gp5 import GP5Error, read_file  # noqa: E402
from gp5.models import Document, MeasureHeader, Track  # noqa: E402

NOTE_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]


def format_midi_note(value: int) -> str:
    return f"{NOTE_NAMES[value % 12]}{value // 12 - 1}"


def describe_header(header: MeasureHeader, previous: MeasureHeader | None) -> str | None:
    parts: List[str] = []
    signature = header.time_signature
    if previous is None or (
        previous.time_signature.numerator != signature.numerator
        or previous.time_signature.denominator.value != signature.denominator.value
    ):
        parts.append(f"time={signature.numerator}/{signature.denominator.value}")
    if header.repeat_open:
        parts.append("repeat-open")
    if header.repeat_close >= 0:
        parts.append(f"repeat-close x{header.repeat_close}")
    if header.repeat_alternative:
        parts.append(f"alternative={header.repeat_alternative}")
    if header.marker is not None:
        parts.append(f"marker={header.marker.title!r}")
    if header.key_signature is not None:
        parts.append(f"key={header.key_signature}")
    if not parts:
        return None
    return f"  #{header.number:<4} start={header.start:<8} tempo={header.tempo:<4} " + "  ".join(parts)


def describe_track(document: Document, track: Track) -> List[str]:
    lines = [f"Track {track.number}: {track.name!r}"]
    channel = document.channel_by_id(track.channel_id)
    if channel is None:
        lines.append("  channel: none")
    else:
        kind = "percussion" if channel.is_percussion else f"program {channel.program}"
        lines.append(f"  channel: {channel.id} ({kind}, bank {channel.bank})")
    tuning = " ".join(format_midi_note(s.value) for s in track.strings)
    lines.append(f"  strings: {len(track.strings)} [{tuning}]")
    beats = sum(len(m.beats) for m in track.measures)
    notes = sum(
        len(voice.notes) for m in track.measures for beat in m.beats for voice in beat.voices
    )
    tied = sum(
        1
        for m in track.measures
        for beat in m.beats
        for voice in beat.voices
        for note in voice.notes
        if note.tied
    )
    lines.append(f"  measures={len(track.measures)} beats={beats} notes={notes} tied={tied}")
    if track.measures:
        lines.append(f"  clef: {track.measures[0].clef.value}")
    if track.lyric.text:
        lines.append(f"  lyric from measure {track.lyric.from_measure}: {track.lyric.text!r}")
    return lines


def generate_report(path: Path, document: Document) -> str:
    lines = [f"File: {path}", f"Version: {document.version} ({document.major}.{document.minor:02d})"]
    for label, value in (
        ("Title", document.title),
        ("Subtitle", document.subtitle),
        ("Artist", document.artist),
        ("Album", document.album),
        ("Copyright", document.copyright),
        ("Tab", document.tab),
    ):
        if value:
            lines.append(f"{label}: {value}")
    for comment in document.comments:
        lines.append(f"Comment: {comment}")
    lines.append(f"Tempo: {document.tempo_value}  Key: {document.key_signature}")
    lines.append(f"Measures: {document.measure_count}  Tracks: {document.track_count}")

    routed = document.channels[64:]
    lines.append(f"Channels in use: {len(routed)}")
    for channel in routed:
        params = ", ".join(f"{p.key}={p.value}" for p in channel.parameters)
        lines.append(f"  id={channel.id} program={channel.program} volume={channel.volume} {params}")

    lines.append("Measure headers:")
    previous = None
    for header in document.measure_headers:
        text = describe_header(header, previous)
        if text is not None:
            lines.append(text)
        previous = header

    for track in document.tracks:
        lines.extend(describe_track(document, track))
    return "\n".join(lines)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Inspect a single Guitar Pro 5 file.")
    parser.add_argument("path", type=Path, help="Path to the .gp5 file to inspect.")
    parser.add_argument(
        "--encoding", default="cp1252", help="Text encoding of strings in the file."
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log decoder progress.")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        document = read_file(args.path, encoding=args.encoding)
    except GP5Error as exc:
        print(f"{args.path}: {exc}", file=sys.stderr)
        return 1
    print(generate_report(args.path, document))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
