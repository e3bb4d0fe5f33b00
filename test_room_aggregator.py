from models import StudentRecord
from room_aggregator import (
    distinct_rooms, room_counts, room_statistics, round_average, top_scorers_by_room
)


def student(room, number, score, id=None):
    return StudentRecord(
        id=id or f'{room:0>2}{number:0>3}',
        prefix='ด.ช.',
        first_name=f'นักเรียน{number}',
        last_name='ทดสอบ',
        room=room,
        number=number,
        score=score
    )


def test_distinct_rooms_sorted_and_deduplicated():
    roster = [student('3', 1, 5), student('1', 1, 5), student('10', 1, 5), student('1', 2, 5)]
    assert distinct_rooms(roster) == ['1', '10', '3']


def test_distinct_rooms_empty():
    assert distinct_rooms([]) == []


def test_top_scorers_keeps_all_ties_ordered_by_number():
    roster = [student('1', 1, 18), student('1', 3, 18), student('1', 2, 15)]
    entries = top_scorers_by_room(roster, ['1'])

    assert len(entries) == 1
    assert entries[0].room == '1'
    assert entries[0].top_score == 18
    assert [s.number for s in entries[0].tied_students] == [1, 3]


def test_top_scorers_skip_empty_rooms_and_keep_room_order():
    roster = [student('2', 1, 10), student('1', 1, 12), student('1', 2, 20)]
    entries = top_scorers_by_room(roster, ['2', '9', '1'])

    assert [e.room for e in entries] == ['2', '1']
    assert entries[1].top_score == 20
    assert [s.number for s in entries[1].tied_students] == [2]


def test_top_scorers_single_student_with_zero():
    entries = top_scorers_by_room([student('A', 4, 0)], ['A'])
    assert entries[0].top_score == 0
    assert len(entries[0].tied_students) == 1


def test_room_average_rounding():
    report = room_statistics([student('1', 1, 10), student('1', 2, 11)], ['1'])
    assert report.rooms[0].average == 10.5

    report = room_statistics([student('1', 1, 10), student('1', 2, 10), student('1', 3, 11)], ['1'])
    assert report.rooms[0].average == 10.33


def test_room_statistics_min_max_count_and_overall():
    roster = [
        student('1', 1, 10), student('1', 2, 20),
        student('2', 1, 5), student('2', 2, 6), student('2', 3, 8),
    ]
    report = room_statistics(roster, ['1', '2', '3'])

    assert [s.room for s in report.rooms] == ['1', '2']
    room1, room2 = report.rooms
    assert (room1.count, room1.max, room1.min, room1.average) == (2, 20, 10, 15.0)
    assert (room2.count, room2.max, room2.min, room2.average) == (3, 8, 5, 6.33)
    assert report.total_students == 5
    assert report.overall_average == 9.8
    assert report.is_above_overall(room1)
    assert not report.is_above_overall(room2)


def test_room_statistics_empty_roster():
    report = room_statistics([], [])
    assert report.rooms == []
    assert report.overall_average == 0
    assert report.total_students == 0


def test_room_statistics_ignores_rooms_not_listed():
    roster = [student('1', 1, 10), student('2', 1, 20)]
    report = room_statistics(roster, ['1'])
    assert report.total_students == 1
    assert report.overall_average == 10


def test_round_average_rounds_half_up():
    assert round_average(0.125) == 0.13
    assert round_average(10 / 3) == 3.33
    assert round_average(2 / 3) == 0.67


def test_equal_after_rounding_compares_as_equal():
    report = room_statistics(
        [student('1', 1, 10.001), student('2', 1, 10.004)],
        ['1', '2']
    )
    assert report.rooms[0].average == report.rooms[1].average == 10.0
    assert all(report.is_above_overall(s) for s in report.rooms)


def test_room_counts_include_empty_rooms():
    roster = [student('1', 1, 10), student('1', 2, 10)]
    assert room_counts(roster, ['1', '2']) == [{'room': '1', 'count': 2}, {'room': '2', 'count': 0}]
