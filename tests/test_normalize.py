"""Payload normalization tests: field precedence and defaults."""

from windair.services.normalize import (
    dig,
    first_present,
    normalize_airline,
    normalize_pilot,
    result_count,
)


class TestFieldLookup:

    def test_dig_nested(self):
        assert dig({'a': {'b': {'c': 1}}}, 'a.b.c') == 1

    def test_dig_missing_hop(self):
        assert dig({'a': 5}, 'a.b') is None
        assert dig(None, 'a') is None

    def test_first_present_skips_none_but_keeps_falsy(self):
        data = {'stats': {'time': None}, 'statsTotal': {'time': 0}}
        assert first_present(data, ('stats.time', 'statsTotal.time')) == 0


class TestNormalizeAirline:

    def test_full_payload(self):
        result = normalize_airline({
            'airline': {
                '_id': '64f0',
                'icao': 'WIN',
                'fullname': 'Wind Airways',
                'shortname': 'Wind',
                'countryCode': 'BR',
                'homeIcao': 'SBGR',
                'tier': 3,
                'status': {'active': False},
                'stats': {
                    'flights': 500,
                    'activePilots': 12,
                    'recentActivePilots': 4,
                    'recentFlights': 30,
                    'rating': 4.8,
                },
                'documents': {'summary': 'Brazilian virtual airline'},
                'logo': 'https://cdn.test/logo.png',
            },
        })

        assert result['airline'] == {
            'id': '64f0',
            'icao': 'WIN',
            'name': 'Wind Airways',
            'countryCode': 'BR',
            'homeIcao': 'SBGR',
            'tier': 3,
            'active': False,
        }
        assert result['totals'] == {
            'flights': 500,
            'pilotsActive': 12,
            'pilotsRecentActive': 4,
            'flightsRecent': 30,
            'rating': 4.8,
            'hours': None,
            'routes': None,
        }
        assert result['description'] == 'Brazilian virtual airline'
        assert result['logo'] == 'https://cdn.test/logo.png'
        assert result['banner'] is None
        assert result['source'].endswith('/airline')

    def test_empty_payload_defaults(self):
        result = normalize_airline({})
        assert result['airline']['name'] == 'Unknown'
        assert result['airline']['active'] is None
        assert result['totals']['flights'] == 0
        assert result['totals']['rating'] is None
        assert result['description'] == ''

    def test_shortname_fallback(self):
        result = normalize_airline({'airline': {'shortname': 'Wind'}})
        assert result['airline']['name'] == 'Wind'

    def test_stats_total_fallback(self):
        result = normalize_airline({'airline': {'statsTotal': {'flights': 7, 'hours': 123}}})
        assert result['totals']['flights'] == 7
        assert result['totals']['hours'] == 123

    def test_non_dict_payload(self):
        assert normalize_airline(None)['airline']['name'] == 'Unknown'


class TestNormalizePilot:

    def test_flat_pilot(self):
        result = normalize_pilot('42', {
            'fullname': 'Ana Lima',
            'callsign': 'WIN042',
            'stats': {'hours': 210.5, 'flights': 88, 'rating': 4.2},
            'lastFlight': '2024-05-02T10:00:00Z',
        })
        assert result == {
            'id': '42',
            'name': 'Ana Lima',
            'callsign': 'WIN042',
            'hours': 210.5,
            'flights': 88,
            'rating': 4.2,
            'lastFlight': '2024-05-02T10:00:00Z',
        }

    def test_wrapped_pilot(self):
        result = normalize_pilot('1', {'pilot': {'fullname': 'Rui', 'callsign': 'WIN001'}})
        assert result['name'] == 'Rui'

    def test_minutes_converted_to_hours(self):
        assert normalize_pilot('1', {'stats': {'time': 90}})['hours'] == 1.5

    def test_stats_total_time_used_when_stats_missing(self):
        assert normalize_pilot('1', {'statsTotal': {'time': 600}})['hours'] == 10.0

    def test_hours_take_precedence_over_minutes(self):
        result = normalize_pilot('1', {'stats': {'time': 600}, 'statsTotal': {'hours': 3}})
        assert result['hours'] == 3

    def test_name_from_parts(self):
        assert normalize_pilot('1', {'firstName': 'Ana', 'lastName': 'Lima'})['name'] == 'Ana Lima'

    def test_missing_fields(self):
        result = normalize_pilot('9', {})
        assert result['name'] is None
        assert result['hours'] is None
        assert result['flights'] == 0


class TestResultCount:

    def test_list(self):
        assert result_count([1, 2, 3]) == 3

    def test_results_object(self):
        assert result_count({'totalResults': 10, 'results': [1, 2]}) == 2

    def test_other(self):
        assert result_count({'flights': 10}) == 0
        assert result_count(None) == 0
