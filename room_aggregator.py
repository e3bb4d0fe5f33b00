from decimal import Decimal, ROUND_HALF_UP

from models import RoomReport, RoomStat, TopRoomEntry

TWO_PLACES = Decimal('0.01')


def round_average(value):
    """Round to 2 decimals, half away from zero on the exact float value."""
    return float(Decimal(value).quantize(TWO_PLACES, rounding=ROUND_HALF_UP))


def distinct_rooms(roster):
    return sorted({s.room for s in roster})


def students_in_room(roster, room):
    return [s for s in roster if s.room == room]


def room_counts(roster, rooms):
    return [{'room': room, 'count': len(students_in_room(roster, room))} for room in rooms]


def top_scorers_by_room(roster, rooms):
    """All students tied at each room's top score, ordered by roll number.

    Rooms without students are left out.
    """
    result = []
    for room in rooms:
        room_students = students_in_room(roster, room)
        if not room_students:
            continue

        top_score = max(s.score for s in room_students)
        tied = sorted((s for s in room_students if s.score == top_score), key=lambda s: s.number)
        result.append(TopRoomEntry(room=room, top_score=top_score, tied_students=tied))
    return result


def room_statistics(roster, rooms):
    """Per-room average/count/max/min plus the overall average."""
    stats = []
    total_score_all = 0
    total_students_all = 0

    for room in rooms:
        room_students = students_in_room(roster, room)
        if not room_students:
            continue

        scores = [s.score for s in room_students]
        total_score = sum(scores)
        total_score_all += total_score
        total_students_all += len(scores)

        stats.append(RoomStat(
            room=room,
            average=round_average(total_score / len(scores)),
            count=len(scores),
            max=max(scores),
            min=min(scores)
        ))

    overall_average = round_average(total_score_all / total_students_all) if total_students_all > 0 else 0
    return RoomReport(rooms=stats, overall_average=overall_average, total_students=total_students_all)
