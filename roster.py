import logging
import re

from errors import InvalidStudentIdError
from models import StudentRecord

logger = logging.getLogger(__name__)

STUDENT_ID_LENGTH = 5
SORT_KEYS = ('number', 'score')
SORT_DIRECTIONS = ('asc', 'desc')
ALL_ROOMS = 'all'


def _text(value):
    if value is None:
        return ''
    return str(value).strip()


def _score(value):
    if isinstance(value, bool):
        raise ValueError('score cannot be a boolean')
    score = float(value)
    return int(score) if score.is_integer() else score


def _roll_number(value):
    # A blank roll number cell still leaves the student searchable by id
    if value is None or (isinstance(value, str) and not value.strip()):
        return 0
    return int(float(value))


def parse_student(row):
    """Coerce one sheet row into a StudentRecord.

    Raises ValueError/TypeError/KeyError when the row cannot be read.
    """
    status = row.get('status')
    status = status.strip() if isinstance(status, str) and status.strip() else None
    return StudentRecord(
        id=_text(row['id']),
        prefix=_text(row.get('prefix')),
        first_name=_text(row.get('firstName')),
        last_name=_text(row.get('lastName')),
        room=_text(row.get('room')),
        number=_roll_number(row.get('number')),
        score=_score(row.get('score')),
        status=status
    )


def parse_students(rows):
    """Build the roster from the sheet's ``students`` field.

    Anything but a list gives an empty roster. Unreadable rows are skipped.
    Duplicate ids are kept; lookups return the first one.
    """
    if not isinstance(rows, list):
        return []

    students = []
    seen_ids = set()
    for index, row in enumerate(rows):
        if not isinstance(row, dict):
            logger.warning("Skipping roster row %d: not an object", index)
            continue
        try:
            student = parse_student(row)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Skipping roster row %d: %s", index, e)
            continue
        if student.id in seen_ids:
            logger.warning("Duplicate student id %s in roster (row %d)", student.id, index)
        seen_ids.add(student.id)
        students.append(student)
    return students


def normalize_student_id(raw):
    return re.sub(r'\D', '', raw or '')


def require_student_id(raw):
    """Digits-only id of exactly STUDENT_ID_LENGTH characters."""
    student_id = normalize_student_id(raw)
    if len(student_id) != STUDENT_ID_LENGTH:
        raise InvalidStudentIdError(student_id, STUDENT_ID_LENGTH)
    return student_id


def find_by_id(roster, student_id):
    return next((s for s in roster if s.id == student_id), None)


def filter_by_room(roster, room):
    if room == ALL_ROOMS:
        return list(roster)
    return [s for s in roster if s.room == room]


def sort_students(roster, key='number', direction='asc'):
    if key not in SORT_KEYS:
        raise ValueError(f'unknown sort key {key!r}')
    if direction not in SORT_DIRECTIONS:
        raise ValueError(f'unknown sort direction {direction!r}')
    return sorted(roster, key=lambda s: getattr(s, key), reverse=(direction == 'desc'))
