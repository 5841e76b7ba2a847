import pytest

from viewchecker.models.category_item import CategoryItem
from viewchecker.scoring.aggregator import (
    calculate_category_score,
    calculate_overall_score,
    item_score,
    round_half_up,
)


def item(score, compliance=None):
    return CategoryItem(key="k", name="k", score=score, compliance=compliance)


@pytest.mark.parametrize(
    "value,expected",
    [(0.5, 1), (1.5, 2), (2.5, 3), (54.5, 55), (54.49, 54), (78.75, 79)],
)
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


def test_item_score_fallback_chain():
    assert item_score(item(70)) == 70
    assert item_score(item(None, compliance=60)) == 60
    assert item_score(item(None, compliance="준수")) == 0
    assert item_score(item(None)) == 0


def test_category_score_is_rounded_mean():
    assert calculate_category_score([item(40), item(70)]) == 55
    assert calculate_category_score([item(100), item(71)]) == 86


def test_empty_category_scores_zero():
    assert calculate_category_score([]) == 0


def test_category_score_stays_in_range():
    assert calculate_category_score([item(0)] * 5) == 0
    assert calculate_category_score([item(100)] * 5) == 100


def test_overall_score_counts_empty_sections_as_zero():
    sections = [[item(100)], [item(100)], [], []]
    assert calculate_overall_score(sections) == 50


def test_overall_score_all_empty_is_zero():
    assert calculate_overall_score([[], [], [], []]) == 0


def test_overall_score_is_mean_of_section_aggregates():
    # 55, 80, 60, 90 -> 71.25
    sections = [
        [item(40), item(70)],
        [item(100), item(60)],
        [item(50), item(70)],
        [item(90)],
    ]
    assert calculate_overall_score(sections) == 71
