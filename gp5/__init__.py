"""Reader for Guitar Pro 5 (.gp5) tablature files."""

from .channels import ChannelTable  # noqa: F401
from .cursor import Cursor  # noqa: F401
from .duration import (  # noqa: F401
    TUPLET_DIVISIONS,
    division_for,
    measure_length,
    read_duration,
    time_for,
)
from .errors import GP5Error, TruncatedInput, UnsupportedVersion  # noqa: F401
from .models import (  # noqa: F401
    QUARTER_TIME,
    Beat,
    Bend,
    Channel,
    ChannelParameter,
    Chord,
    Clef,
    Division,
    Document,
    Duration,
    Grace,
    GraceTransition,
    GuitarString,
    Harmonic,
    HarmonicType,
    Lyric,
    Marker,
    Measure,
    MeasureHeader,
    Note,
    NoteEffect,
    Stroke,
    StrokeDirection,
    TimeSignature,
    Track,
    TremoloBar,
    TremoloPicking,
    Trill,
    TripletFeel,
    Voice,
)
from .reader import read_document, read_file  # noqa: F401
from .version import VERSIONS, VersionInfo, read_version  # noqa: F401
