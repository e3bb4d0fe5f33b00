import logging
import threading
from datetime import datetime

from errors import RosterUnavailableError, SaveInProgressError, SheetAPIError
from models import DisplayConfig, RosterSnapshot
from roster import parse_students

logger = logging.getLogger(__name__)


class RosterStore:
    """Last roster and display config fetched from the score sheet.

    The roster is replaced wholesale on each refresh, never patched.
    """

    def __init__(self, client, default_config):
        self.client = client
        self.default_config = default_config
        self.snapshot = None
        self.last_error = None
        self._save_lock = threading.Lock()

    @classmethod
    def from_app_config(cls, client, app_config):
        return cls(client, DisplayConfig.from_dict(app_config['DEFAULT_DISPLAY_CONFIG']))

    @property
    def loaded(self):
        return self.snapshot is not None

    @property
    def config(self):
        return self.snapshot.config if self.snapshot else self.default_config

    def current(self):
        if self.snapshot is None:
            raise RosterUnavailableError(self.last_error or 'roster has not been loaded')
        return self.snapshot

    def refresh(self):
        """Fetch roster and config; on failure keep the previous snapshot."""
        try:
            payload = self.client.fetch()
        except SheetAPIError as e:
            self.last_error = str(e)
            raise

        config = self.config
        if payload.get('config'):
            config = config.merge(payload['config'])
        if isinstance(payload.get('students'), list) or self.snapshot is None:
            students = parse_students(payload.get('students'))
        else:
            # No student list in this payload: the loaded roster stays
            students = self.snapshot.students

        self.snapshot = RosterSnapshot(students=students, config=config, fetched_at=datetime.utcnow())
        self.last_error = None
        logger.info("Loaded %d students from score sheet", len(students))
        return self.snapshot

    def save_config(self, config):
        """Push ``config`` to the sheet, then use it locally.

        Only one save may wait on the sheet at a time.
        """
        if not self._save_lock.acquire(blocking=False):
            raise SaveInProgressError('a configuration save is already in progress')
        try:
            self.client.update_config(config)
            if self.snapshot is not None:
                self.snapshot.config = config
            else:
                self.default_config = config
        finally:
            self._save_lock.release()
        return config
