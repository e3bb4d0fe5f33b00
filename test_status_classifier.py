import pytest

from errors import InvalidMaxScoreError
from models import CustomLabel, ScoreBand
from status_classifier import (
    FUZZY_MATCHERS, classify, format_percentage, is_passing, match_explicit_status, percentage
)


@pytest.mark.parametrize("score, expected", [
    (10, ScoreBand.PASS),        # exactly 50%
    (14, ScoreBand.GOOD),        # exactly 70%
    (15, ScoreBand.VERY_GOOD),   # exactly 75%
    (16, ScoreBand.EXCELLENT),   # exactly 80%
    (15.999, ScoreBand.VERY_GOOD),
    (9.99, ScoreBand.IMPROVE),
    (0, ScoreBand.IMPROVE),
])
def test_classify_by_percentage_boundaries(score, expected):
    result = classify(score, 20)
    assert result.band is expected
    assert result.label == expected.value


def test_classify_out_of_range_scores_still_classify():
    assert classify(25, 20).band is ScoreBand.EXCELLENT
    assert classify(-3, 20).band is ScoreBand.IMPROVE


def test_classify_styles_come_from_band():
    result = classify(16, 20)
    assert result.color_class == 'text-green-600 bg-green-100'
    assert result.icon == '🏆'

    result = classify(5, 20)
    assert result.color_class == 'text-red-600 bg-red-100'
    assert result.icon == '✌️'


def test_explicit_status_overrides_score():
    result = classify(0, 20, 'ดีมาก')
    assert result.label == 'ดีมาก'
    assert result.band is ScoreBand.VERY_GOOD
    assert result.color_class == 'text-blue-600 bg-blue-100'
    assert result.icon == '🌟'


def test_explicit_status_is_trimmed():
    result = classify(20, 20, '  ปรับปรุง ')
    assert result.label == 'ปรับปรุง'
    assert result.band is ScoreBand.IMPROVE


@pytest.mark.parametrize("blank", [None, '', '   '])
def test_blank_explicit_status_falls_back_to_score(blank):
    assert classify(16, 20, blank).band is ScoreBand.EXCELLENT


def test_fuzzy_excellent_keeps_sheet_text_as_label():
    result = classify(3, 20, 'ดีเลิศมากๆ')
    assert result.band is ScoreBand.EXCELLENT
    assert result.label == 'ดีเลิศมากๆ'
    assert result.icon == '🏆'


@pytest.mark.parametrize("text, expected", [
    ('เยี่ยมมาก', ScoreBand.EXCELLENT),
    ('ดีมาก', ScoreBand.VERY_GOOD),
    ('ดี', ScoreBand.GOOD),
    ('พอใช้', ScoreBand.PASS),
    ('ปรับปรุง', ScoreBand.IMPROVE),
    ('ยอดเยี่ยม', ScoreBand.EXCELLENT),
    ('สุดยอด', ScoreBand.EXCELLENT),
    ('ระดับดีมาก', ScoreBand.VERY_GOOD),
    ('ผ่าน', ScoreBand.PASS),
    ('ผ่านเกณฑ์', ScoreBand.PASS),
    ('ไม่ผ่าน', ScoreBand.IMPROVE),
    ('สอบตก', ScoreBand.IMPROVE),
    ('ต้องซ่อม', ScoreBand.IMPROVE),
])
def test_match_explicit_status(text, expected):
    assert match_explicit_status(text) is expected


def test_good_only_matches_the_exact_token():
    assert match_explicit_status('ดี ') != ScoreBand.GOOD
    assert match_explicit_status('ค่อนข้างดี') == CustomLabel('ค่อนข้างดี')


def test_unmatched_text_becomes_custom_label():
    result = classify(20, 20, 'น่าพอใจ')
    assert result.band == CustomLabel('น่าพอใจ')
    assert result.label == 'น่าพอใจ'
    assert result.color_class == 'text-gray-700 bg-gray-100'
    assert result.icon == '📊'
    assert result.to_dict()['band'] == 'CUSTOM'


def test_fuzzy_matchers_are_in_band_priority_order():
    bands = [band for _, band in FUZZY_MATCHERS]
    assert bands == [
        ScoreBand.EXCELLENT, ScoreBand.VERY_GOOD, ScoreBand.GOOD, ScoreBand.PASS, ScoreBand.IMPROVE
    ]


def test_classify_is_idempotent():
    assert classify(13, 20, 'ผ่าน') == classify(13, 20, 'ผ่าน')
    assert classify(13, 20) == classify(13, 20)


@pytest.mark.parametrize("max_score", [0, -5, None])
def test_non_positive_max_score_is_a_configuration_error(max_score):
    with pytest.raises(InvalidMaxScoreError):
        classify(10, max_score)
    with pytest.raises(InvalidMaxScoreError):
        classify(10, max_score, 'ดี')


def test_percentage_helpers():
    assert percentage(15, 20) == 75
    assert format_percentage(75.0) == '75'
    assert format_percentage(62.5) == '62.50'
    assert format_percentage(100 / 3) == '33.33'
    assert is_passing(10, 20)
    assert not is_passing(9.5, 20)


@pytest.mark.parametrize("score, max_score, expected", [
    (1, 32, '3.13'),      # 3.125%
    (5, 8, '62.50'),
])
def test_format_percentage_rounds_ties_up(score, max_score, expected):
    assert format_percentage(percentage(score, max_score)) == expected
    assert format_percentage(0.125) == '0.13'


def test_not_passed_goes_to_improve_band():
    result = classify(18, 20, 'ไม่ผ่าน')
    assert result.band is ScoreBand.IMPROVE
    assert result.icon == '✌️'
