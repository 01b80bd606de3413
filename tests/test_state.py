import copy
import pickle

import pytest

from catalog_sdk.state import NO_VALUE, FilterState, PageState, to_choice, total_pages_for


def test_no_value_is_a_single_falsy_marker():
    assert not NO_VALUE
    assert NO_VALUE is not None
    assert NO_VALUE != ""
    assert copy.deepcopy(NO_VALUE) is NO_VALUE
    assert pickle.loads(pickle.dumps(NO_VALUE)) is NO_VALUE


@pytest.mark.parametrize("raw", [None, NO_VALUE, "", "   "])
def test_to_choice_maps_absence_to_no_value(raw):
    assert to_choice(raw) is NO_VALUE


def test_to_choice_keeps_real_values():
    assert to_choice(" Sports ") == "Sports"


def test_to_choice_rejects_non_strings():
    with pytest.raises(TypeError):
        to_choice(3)


def test_filter_state_defaults_to_no_value():
    state = FilterState()
    assert state.category is NO_VALUE
    assert state.subcategory is NO_VALUE


def test_filter_state_subcategory_requires_category():
    with pytest.raises(ValueError):
        FilterState(subcategory="Running")


def test_filter_state_rejects_empty_string():
    with pytest.raises(ValueError):
        FilterState(category="")


@pytest.mark.parametrize("total,limit,pages", [(45, 20, 3), (40, 20, 2), (0, 20, 1), (1, 20, 1), (21, 20, 2)])
def test_total_pages(total, limit, pages):
    assert total_pages_for(total, limit) == pages


def test_page_state_is_one_based():
    with pytest.raises(ValueError):
        PageState(current_page=0)
