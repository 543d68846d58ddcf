import uuid

import pytest
from rest_framework.exceptions import ValidationError

from api.query_filters import (MAX_ROW_OFFSET, QueryDescriptor, build_query,
                               coerce_filter)

RACE_FILTERS = {
    'name': 'name',
    'speed': 'speed',
    'playable': 'playable',
    'size': 'size',
    'raceId': 'race_id',
}


class TestCoerceFilter:
    """Typing of individual filter values."""

    def test_integer_looking_values_compare_as_integers(self):
        assert coerce_filter('speed', '30') == ('speed', 30)
        assert coerce_filter('speed', '-5') == ('speed', -5)

    def test_booleans_are_case_insensitive(self):
        assert coerce_filter('playable', 'TRUE') == ('playable', True)
        assert coerce_filter('playable', 'False') == ('playable', False)

    def test_other_values_are_substring_matches(self):
        assert coerce_filter('name', 'elf') == ('name__icontains', 'elf')
        assert coerce_filter('name', '1.5') == ('name__icontains', '1.5')

    def test_reference_filters_compare_exactly(self):
        identifier = uuid.uuid4()
        assert coerce_filter('race_id', str(identifier)) == ('race_id', identifier)

    def test_reference_filters_reject_malformed_ids(self):
        with pytest.raises(ValidationError):
            coerce_filter('race_id', 'not-a-uuid')


class TestBuildQuery:
    """Translation of a whole query string."""

    def test_defaults(self):
        descriptor = build_query({}, RACE_FILTERS)
        assert descriptor == QueryDescriptor(page=1, limit=25)
        assert descriptor.offset == 0

    def test_page_and_limit(self):
        descriptor = build_query({'page': '3', 'limit': '10'}, RACE_FILTERS)
        assert descriptor.page == 3
        assert descriptor.limit == 10
        assert descriptor.offset == 20

    @pytest.mark.parametrize('params', [
        {'page': '0'},
        {'page': 'abc'},
        {'limit': '-1'},
        {'limit': '101'},
        {'page': '99999999999999999999999'},
        {'page': str(MAX_ROW_OFFSET // 10 + 1), 'limit': '10'},
    ])
    def test_invalid_pagination_is_rejected(self, params):
        with pytest.raises(ValidationError):
            build_query(params, RACE_FILTERS)

    def test_last_addressable_page(self):
        descriptor = build_query({'page': str(MAX_ROW_OFFSET // 10), 'limit': '10'}, RACE_FILTERS)
        assert descriptor.offset + descriptor.limit <= MAX_ROW_OFFSET

    def test_filters_are_typed_and_empty_values_skipped(self):
        descriptor = build_query(
            {'name': 'el', 'speed': '30', 'playable': 'true', 'size': ''},
            RACE_FILTERS,
        )
        assert descriptor.filters == {'name__icontains': 'el', 'speed': 30, 'playable': True}

    def test_unknown_filters_are_rejected(self):
        with pytest.raises(ValidationError) as excinfo:
            build_query({'colour': 'green'}, RACE_FILTERS)
        assert 'colour' in excinfo.value.detail

    def test_sorting(self):
        assert build_query({'sortBy': 'speed'}, RACE_FILTERS).ordering == ('speed', 'pk')
        assert build_query({'sortBy': 'speed', 'sortOrder': 'DESC'}, RACE_FILTERS).ordering == ('-speed', 'pk')

    def test_sort_field_must_be_known(self):
        with pytest.raises(ValidationError):
            build_query({'sortBy': 'password'}, RACE_FILTERS)

    def test_sort_order_must_be_asc_or_desc(self):
        with pytest.raises(ValidationError):
            build_query({'sortBy': 'name', 'sortOrder': 'sideways'}, RACE_FILTERS)

    def test_meta(self):
        descriptor = build_query({'limit': '2'}, RACE_FILTERS)
        assert descriptor.meta(5) == {'total': 5, 'page': 1, 'limit': 2, 'totalPages': 3}
        assert descriptor.meta(0)['totalPages'] == 0
