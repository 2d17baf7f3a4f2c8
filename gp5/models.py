"""In-memory document model for a decoded Guitar Pro 5 file.

Times (``start``, durations) are ticks at 960 per quarter note.  A
``Measure`` refers to its header by index into
``Document.measure_headers`` and a ``Chord`` refers to the strings of the
track with ``track_number``; neither owns the referenced object.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

QUARTER_TIME = 960

# Note velocities: 15 + 16 * (dynamic - 1), forte by default.
MIN_VELOCITY = 15
VELOCITY_INCREMENT = 16
DEFAULT_VELOCITY = MIN_VELOCITY + VELOCITY_INCREMENT * 5

DEFAULT_TEMPO = 120
DEFAULT_BANK = "default"
PERCUSSION_BANK = "percussion"


class TripletFeel(Enum):
    NONE = "none"
    EIGHTH = "eighth"
    SIXTEENTH = "sixteenth"


class Clef(Enum):
    TREBLE = "treble"
    BASS = "bass"


class StrokeDirection(Enum):
    NONE = "none"
    UP = "up"
    DOWN = "down"


class GraceTransition(Enum):
    NONE = "none"
    SLIDE = "slide"
    BEND = "bend"
    HAMMER = "hammer"


class HarmonicType(Enum):
    NATURAL = "natural"
    ARTIFICIAL = "artificial"
    TAPPED = "tapped"
    PINCH = "pinch"
    SEMI = "semi"


@dataclass(frozen=True)
class Division:
    """Tuplet ratio: ``enters`` notes in the time of ``times``."""

    enters: int = 1
    times: int = 1


@dataclass
class Duration:
    value: int = 4  # 1 = whole, 4 = quarter, 64 = sixty-fourth
    dotted: bool = False
    double_dotted: bool = False
    division: Division = field(default_factory=Division)


@dataclass
class Color:
    r: int = 0
    g: int = 0
    b: int = 0


@dataclass
class Lyric:
    from_measure: int = 0
    text: str = ""


@dataclass
class ChannelParameter:
    key: str
    value: str


@dataclass
class Channel:
    id: int = 0  # 0 until the channel is exposed to a track
    program: int = 0
    volume: int = 0
    balance: int = 0
    chorus: int = 0
    reverb: int = 0
    phaser: int = 0
    tremolo: int = 0
    bank: str = DEFAULT_BANK
    is_percussion: bool = False
    parameters: List[ChannelParameter] = field(default_factory=list)

    def parameter(self, key: str) -> Optional[str]:
        for param in self.parameters:
            if param.key == key:
                return param.value
        return None


@dataclass
class TimeSignature:
    numerator: int = 4
    denominator: Duration = field(default_factory=Duration)


@dataclass
class Marker:
    measure: int
    title: str
    color: Color = field(default_factory=Color)


@dataclass
class MeasureHeader:
    number: int  # 1-based
    start: int = 0
    tempo: int = DEFAULT_TEMPO
    time_signature: TimeSignature = field(default_factory=TimeSignature)
    repeat_open: bool = False
    repeat_close: int = -1  # -1 = no repeat close
    repeat_alternative: int = 0  # 0 = no alternate ending
    marker: Optional[Marker] = None
    key_signature: Optional[int] = None  # set only when the header changes key
    triplet_feel: TripletFeel = TripletFeel.NONE


@dataclass
class EffectPoint:
    position: int
    value: int


@dataclass
class Bend:
    points: List[EffectPoint] = field(default_factory=list)


@dataclass
class TremoloBar:
    points: List[EffectPoint] = field(default_factory=list)


@dataclass
class TremoloPicking:
    duration: Duration = field(default_factory=Duration)


@dataclass
class Grace:
    fret: int = 0
    dynamic: int = DEFAULT_VELOCITY
    duration: int = 1
    dead: bool = False
    on_beat: bool = False
    transition: GraceTransition = GraceTransition.NONE


@dataclass
class Harmonic:
    type: HarmonicType
    data: int = 0


@dataclass
class Trill:
    fret: int = 0
    duration: Duration = field(default_factory=Duration)


@dataclass
class NoteEffect:
    fade_in: bool = False
    vibrato: bool = False
    tapping: bool = False
    slapping: bool = False
    popping: bool = False
    dead_note: bool = False
    accentuated_note: bool = False
    heavy_accentuated_note: bool = False
    ghost_note: bool = False
    slide: bool = False
    hammer: bool = False
    let_ring: bool = False
    palm_mute: bool = False
    staccato: bool = False
    tremolo_bar: Optional[TremoloBar] = None
    tremolo_picking: Optional[TremoloPicking] = None
    bend: Optional[Bend] = None
    grace: Optional[Grace] = None
    harmonic: Optional[Harmonic] = None
    trill: Optional[Trill] = None


@dataclass
class Note:
    string: int  # GuitarString.number, not a list index
    value: int = 0
    tied: bool = False
    velocity: int = DEFAULT_VELOCITY
    effect: NoteEffect = field(default_factory=NoteEffect)


@dataclass
class Voice:
    index: int
    empty: bool = True
    duration: Duration = field(default_factory=Duration)
    notes: List[Note] = field(default_factory=list)

    def add_note(self, note: Note) -> None:
        self.notes.append(note)
        self.empty = False


@dataclass
class Chord:
    name: str
    first_fret: int
    frets: List[int]  # one per track string, -1 = not played
    track_number: int

    def count_notes(self) -> int:
        return sum(1 for fret in self.frets if fret >= 0)


@dataclass
class Stroke:
    direction: StrokeDirection = StrokeDirection.NONE
    value: int = 0


@dataclass
class Beat:
    start: int
    voices: List[Voice] = field(default_factory=lambda: [Voice(0), Voice(1)])
    text: Optional[str] = None
    stroke: Stroke = field(default_factory=Stroke)
    chord: Optional[Chord] = None

    def is_empty(self) -> bool:
        return all(voice.empty for voice in self.voices)


@dataclass
class Measure:
    header_index: int
    start: int
    key_signature: int = 0
    clef: Clef = Clef.TREBLE
    beats: List[Beat] = field(default_factory=list)

    def beat_at(self, start: int) -> Beat:
        """Return the beat starting at ``start``, creating it if needed."""

        for beat in self.beats:
            if beat.start == start:
                return beat
        beat = Beat(start=start)
        self.beats.append(beat)
        return beat


@dataclass
class GuitarString:
    number: int  # 1 = highest string
    value: int  # MIDI note of the open string


@dataclass
class Track:
    number: int
    name: str = ""
    channel_id: int = 0  # 0 = no channel
    strings: List[GuitarString] = field(default_factory=list)
    port: int = 0
    fret_count: int = 24
    offset: int = 0
    color: Color = field(default_factory=Color)
    lyric: Lyric = field(default_factory=Lyric)
    measures: List[Measure] = field(default_factory=list)

    def string(self, number: int) -> Optional[GuitarString]:
        for guitar_string in self.strings:
            if guitar_string.number == number:
                return guitar_string
        return None


@dataclass
class Document:
    version: str
    major: int
    minor: int
    title: str = ""
    subtitle: str = ""
    artist: str = ""
    album: str = ""
    lyrics_author: str = ""
    music_author: str = ""
    copyright: str = ""
    tab: str = ""
    instructions: str = ""
    comments: List[str] = field(default_factory=list)
    lyric: Lyric = field(default_factory=Lyric)
    lyric_track: int = 0
    tempo_value: int = DEFAULT_TEMPO
    key_signature: int = 0
    channels: List[Channel] = field(default_factory=list)
    measure_count: int = 0
    track_count: int = 0
    measure_headers: List[MeasureHeader] = field(default_factory=list)
    tracks: List[Track] = field(default_factory=list)

    def channel_by_id(self, channel_id: int) -> Optional[Channel]:
        if channel_id <= 0:
            return None
        for channel in self.channels:
            if channel.id == channel_id:
                return channel
        return None

    def header_for(self, measure: Measure) -> MeasureHeader:
        return self.measure_headers[measure.header_index]

    def chord_strings(self, chord: Chord) -> List[GuitarString]:
        return self.tracks[chord.track_number - 1].strings
