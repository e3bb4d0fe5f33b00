from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import List, Optional, Union


class ScoreBand(Enum):
    EXCELLENT = "เยี่ยมมาก"
    VERY_GOOD = "ดีมาก"
    GOOD = "ดี"
    PASS = "พอใช้"
    IMPROVE = "ปรับปรุง"


# Highest band first; classification and matching both walk this order
BAND_PRIORITY = (
    ScoreBand.EXCELLENT,
    ScoreBand.VERY_GOOD,
    ScoreBand.GOOD,
    ScoreBand.PASS,
    ScoreBand.IMPROVE,
)


@dataclass(frozen=True)
class CustomLabel:
    """Free text from the score sheet that matches no band."""
    text: str


Status = Union[ScoreBand, CustomLabel]


@dataclass(frozen=True)
class StatusResult:
    label: str
    color_class: str
    icon: str
    band: Status

    def to_dict(self):
        return {
            'label': self.label,
            'color_class': self.color_class,
            'icon': self.icon,
            'band': self.band.name if isinstance(self.band, ScoreBand) else 'CUSTOM'
        }


@dataclass(frozen=True)
class StudentRecord:
    id: str
    prefix: str
    first_name: str
    last_name: str
    room: str
    number: int
    score: Union[int, float]
    status: Optional[str] = None

    @property
    def full_name(self):
        return f"{self.prefix}{self.first_name} {self.last_name}"

    def to_dict(self):
        return {
            'id': self.id,
            'prefix': self.prefix,
            'first_name': self.first_name,
            'last_name': self.last_name,
            'full_name': self.full_name,
            'room': self.room,
            'number': self.number,
            'score': self.score,
            'status': self.status
        }


# Wire (sheet) field name -> attribute name
DISPLAY_CONFIG_FIELDS = {
    'logoUrl': 'logo_url',
    'headerTitle': 'header_title',
    'headerSubtitle': 'header_subtitle',
    'examName': 'exam_name',
    'maxScore': 'max_score',
}


def _coerce_max_score(value):
    if isinstance(value, bool):
        return 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    # Fractional max scores are left invalid rather than truncated
    if not number.is_integer():
        return 0
    return int(number)


@dataclass(frozen=True)
class DisplayConfig:
    logo_url: str
    header_title: str
    header_subtitle: str
    exam_name: str
    max_score: int

    @classmethod
    def from_dict(cls, data):
        """Build from camelCase or snake_case keys; missing keys become empty."""
        values = {}
        for wire_name, attr in DISPLAY_CONFIG_FIELDS.items():
            value = data.get(wire_name, data.get(attr))
            if value is None:
                value = ''
            values[attr] = value
        values['max_score'] = _coerce_max_score(values['max_score'])
        return cls(**{k: (v if k == 'max_score' else str(v)) for k, v in values.items()})

    def merge(self, partial):
        """Shallow field-by-field overwrite; unknown keys are ignored."""
        if not isinstance(partial, dict):
            return self
        changes = {}
        for key, value in partial.items():
            attr = DISPLAY_CONFIG_FIELDS.get(key, key)
            if attr not in DISPLAY_CONFIG_FIELDS.values() or value is None:
                continue
            changes[attr] = _coerce_max_score(value) if attr == 'max_score' else str(value)
        return replace(self, **changes)

    def is_valid(self):
        return self.max_score > 0

    def to_wire(self):
        return {wire: getattr(self, attr) for wire, attr in DISPLAY_CONFIG_FIELDS.items()}

    def to_dict(self):
        return {attr: getattr(self, attr) for attr in DISPLAY_CONFIG_FIELDS.values()}


@dataclass(frozen=True)
class RoomStat:
    room: str
    average: float
    count: int
    max: Union[int, float]
    min: Union[int, float]

    def to_dict(self):
        return {
            'room': self.room,
            'average': self.average,
            'count': self.count,
            'max': self.max,
            'min': self.min
        }


@dataclass(frozen=True)
class RoomReport:
    rooms: List[RoomStat]
    overall_average: float
    total_students: int

    def is_above_overall(self, stat):
        # Both sides are already rounded to 2 decimals
        return stat.average >= self.overall_average


@dataclass(frozen=True)
class TopRoomEntry:
    room: str
    top_score: Union[int, float]
    tied_students: List[StudentRecord] = field(default_factory=list)


@dataclass
class RosterSnapshot:
    students: List[StudentRecord]
    config: DisplayConfig
    fetched_at: Optional[datetime] = None

    def to_dict(self):
        return {
            'student_count': len(self.students),
            'config': self.config.to_dict(),
            'fetched_at': self.fetched_at.isoformat() if self.fetched_at else None
        }
