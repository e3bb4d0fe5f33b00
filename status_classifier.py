import re
from decimal import Decimal, ROUND_HALF_UP

from errors import InvalidMaxScoreError
from models import BAND_PRIORITY, CustomLabel, ScoreBand, StatusResult

# (color class, icon) per status variant
STATUS_STYLES = {
    ScoreBand.EXCELLENT: ('text-green-600 bg-green-100', '🏆'),
    ScoreBand.VERY_GOOD: ('text-blue-600 bg-blue-100', '🌟'),
    ScoreBand.GOOD: ('text-cyan-600 bg-cyan-100', '👍'),
    ScoreBand.PASS: ('text-yellow-600 bg-yellow-100', '🙂'),
    ScoreBand.IMPROVE: ('text-red-600 bg-red-100', '✌️'),
}
CUSTOM_STYLE = ('text-gray-700 bg-gray-100', '📊')

# Lower bound (inclusive, percent) for each band, highest first
PERCENTAGE_THRESHOLDS = (
    (80, ScoreBand.EXCELLENT),
    (75, ScoreBand.VERY_GOOD),
    (70, ScoreBand.GOOD),
    (50, ScoreBand.PASS),
)

# Loose matches for sheet text that is not an exact band label.
# Order is priority: the first matching predicate wins.
FUZZY_MATCHERS = (
    (re.compile(r'เยี่ยม|ดีเลิศ|สุดยอด').search, ScoreBand.EXCELLENT),
    (re.compile(r'ดีมาก').search, ScoreBand.VERY_GOOD),
    (re.compile(r'^ดี$').match, ScoreBand.GOOD),
    # ไม่ผ่าน ("not passed") is left for the Improve band below
    (re.compile(r'พอใช้|(?<!ไม่)ผ่าน').search, ScoreBand.PASS),
    (re.compile(r'ปรับปรุง|ไม่ผ่าน|ตก|ซ่อม').search, ScoreBand.IMPROVE),
)


def _result(label, status):
    color_class, icon = STATUS_STYLES.get(status, CUSTOM_STYLE)
    return StatusResult(label=label, color_class=color_class, icon=icon, band=status)


def _check_max_score(max_score):
    if max_score is None or max_score <= 0:
        raise InvalidMaxScoreError(max_score)


def percentage(score, max_score):
    _check_max_score(max_score)
    return score / max_score * 100


def format_percentage(value):
    """Whole numbers print bare, anything else with two decimals."""
    if float(value).is_integer():
        return str(int(value))
    return str(Decimal(value).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP))


def is_passing(score, max_score):
    _check_max_score(max_score)
    return score / max_score >= 0.5


def band_for_percentage(value):
    for lower_bound, band in PERCENTAGE_THRESHOLDS:
        if value >= lower_bound:
            return band
    return ScoreBand.IMPROVE


def match_explicit_status(text):
    """Map trimmed sheet text to a band, or to a CustomLabel if nothing fits."""
    for band in BAND_PRIORITY:
        if text == band.value:
            return band
    for predicate, band in FUZZY_MATCHERS:
        if predicate(text):
            return band
    return CustomLabel(text)


def classify(score, max_score, explicit_status=None):
    """Classify a score into a status band.

    A non-empty ``explicit_status`` from the sheet always wins over the score;
    its trimmed text is kept as the label. Otherwise the band comes from the
    percentage of ``max_score``.

    Raises:
        InvalidMaxScoreError: if ``max_score`` is not positive.
    """
    _check_max_score(max_score)

    if isinstance(explicit_status, str) and explicit_status.strip():
        label = explicit_status.strip()
        return _result(label, match_explicit_status(label))

    band = band_for_percentage(percentage(score, max_score))
    return _result(band.value, band)
