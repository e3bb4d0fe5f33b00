"""Teacher dashboard state.

The dashboard keeps no globals: every view setting lives in a frozen
``DashboardState`` and changes only through ``reduce(state, action)``.
Actions are plain dicts with a ``type`` key, e.g.::

    state = reduce(state, {'type': 'TOGGLE_SORT', 'key': 'score'})
"""
from dataclasses import dataclass, field, replace
from typing import Optional

from errors import InvalidActionError
from models import DisplayConfig
from roster import ALL_ROOMS, SORT_DIRECTIONS, SORT_KEYS, filter_by_room, sort_students

TABS = ('report', 'topone', 'average', 'settings')
SAVE_STATUSES = ('idle', 'saving', 'success', 'error')

SAVE_SUCCESS_MESSAGE = 'บันทึกการตั้งค่าลง Google Sheet เรียบร้อยแล้ว'
SAVE_ERROR_MESSAGE = 'เกิดข้อผิดพลาดในการบันทึก กรุณาลองใหม่'


@dataclass(frozen=True)
class SortConfig:
    key: str = 'number'
    direction: str = 'asc'


@dataclass(frozen=True)
class DashboardState:
    active_tab: str = 'report'
    selected_room: str = ALL_ROOMS
    sort: SortConfig = field(default_factory=SortConfig)
    draft_config: Optional[DisplayConfig] = None
    save_status: str = 'idle'
    save_message: str = ''

    @property
    def is_saving(self):
        return self.save_status == 'saving'


def _select_tab(state, action):
    tab = action.get('tab')
    if tab not in TABS:
        raise InvalidActionError(f'unknown tab {tab!r}')
    return replace(state, active_tab=tab)


def _select_room(state, action):
    room = action.get('room')
    if not room:
        raise InvalidActionError('SELECT_ROOM needs a room')
    return replace(state, selected_room=str(room))


def _toggle_sort(state, action):
    key = action.get('key')
    if key not in SORT_KEYS:
        raise InvalidActionError(f'unknown sort key {key!r}')
    current = state.sort
    direction = 'desc' if current.key == key and current.direction == 'asc' else 'asc'
    return replace(state, sort=SortConfig(key=key, direction=direction))


def _set_sort(state, action):
    key = action.get('key', state.sort.key)
    direction = action.get('direction', state.sort.direction)
    if key not in SORT_KEYS:
        raise InvalidActionError(f'unknown sort key {key!r}')
    if direction not in SORT_DIRECTIONS:
        raise InvalidActionError(f'unknown sort direction {direction!r}')
    return replace(state, sort=SortConfig(key=key, direction=direction))


def _edit_draft(state, action):
    if state.draft_config is None:
        raise InvalidActionError('EDIT_DRAFT before a draft was opened')
    changes = action.get('changes')
    if not isinstance(changes, dict):
        raise InvalidActionError('EDIT_DRAFT needs a changes object')
    return replace(state, draft_config=state.draft_config.merge(changes))


def _open_draft(state, action):
    config = action.get('config')
    if not isinstance(config, DisplayConfig):
        raise InvalidActionError('OPEN_DRAFT needs a DisplayConfig')
    return replace(state, draft_config=config)


def _save_started(state, action):
    if state.is_saving:
        raise InvalidActionError('a save is already in progress')
    return replace(state, save_status='saving', save_message='')


def _save_succeeded(state, action):
    return replace(state, save_status='success', save_message=SAVE_SUCCESS_MESSAGE)


def _save_failed(state, action):
    return replace(state, save_status='error', save_message=action.get('message') or SAVE_ERROR_MESSAGE)


def _save_message_cleared(state, action):
    return replace(state, save_status='idle', save_message='')


REDUCERS = {
    'SELECT_TAB': _select_tab,
    'SELECT_ROOM': _select_room,
    'TOGGLE_SORT': _toggle_sort,
    'SET_SORT': _set_sort,
    'OPEN_DRAFT': _open_draft,
    'EDIT_DRAFT': _edit_draft,
    'SAVE_STARTED': _save_started,
    'SAVE_SUCCEEDED': _save_succeeded,
    'SAVE_FAILED': _save_failed,
    'SAVE_MESSAGE_CLEARED': _save_message_cleared,
}


def reduce(state, action):
    handler = REDUCERS.get(action.get('type'))
    if handler is None:
        raise InvalidActionError(f"unknown action {action.get('type')!r}")
    return handler(state, action)


def visible_students(state, roster):
    """Report rows: room filter first, then sort."""
    rows = filter_by_room(roster, state.selected_room)
    return sort_students(rows, state.sort.key, state.sort.direction)
