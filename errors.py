class ScoreBoardError(Exception):
    """Base class for errors raised by the score board"""


class InvalidMaxScoreError(ScoreBoardError, ValueError):
    """max_score must be a positive number before any percentage is taken"""

    def __init__(self, max_score):
        self.max_score = max_score
        super().__init__(f'max_score must be greater than 0, got {max_score!r}')


class InvalidStudentIdError(ScoreBoardError, ValueError):
    def __init__(self, student_id, expected_length):
        self.student_id = student_id
        self.expected_length = expected_length
        super().__init__(f'student id must be exactly {expected_length} digits, got {student_id!r}')


class InvalidActionError(ScoreBoardError, ValueError):
    """Raised by the dashboard reducer for unknown actions or values"""


class SheetAPIError(ScoreBoardError):
    """The remote score sheet could not be read or written"""

    def __init__(self, message, status_code=None):
        self.status_code = status_code
        super().__init__(message)


class RosterUnavailableError(ScoreBoardError):
    """No roster snapshot has been loaded yet"""


class SaveInProgressError(ScoreBoardError):
    """A configuration save is already waiting on the sheet"""
