"""Tests for implicit typing of plain scalars.

Rules are tried in a fixed order (null, bool, int, float, timestamp,
symbol, str), so several tests pin down which rule wins for text that
looks like more than one type.
"""

import datetime
import math

import pytest

from safe_yaml import scalars
from safe_yaml.scalars import Symbol, classify, infer
from safe_yaml.tags import (
    NULL_TAG, BOOL_TAG, INT_TAG, FLOAT_TAG, TIMESTAMP_TAG, STR_TAG, SYMBOL_TAG,
)


class TestNull:
    """Null literals."""

    @pytest.mark.parametrize('text', ['', '~', 'null', 'Null', 'NULL'])
    def test_null_literals(self, text):
        assert infer(text) == (NULL_TAG, None)

    def test_null_substring_is_string(self):
        assert classify('nullable') == 'nullable'


class TestBool:
    """Boolean literals (YAML 1.1 set)."""

    @pytest.mark.parametrize('text', ['yes', 'Yes', 'YES', 'true', 'True', 'on', 'ON'])
    def test_true(self, text):
        assert classify(text) is True

    @pytest.mark.parametrize('text', ['no', 'No', 'off', 'Off', 'false', 'FALSE'])
    def test_false(self, text):
        assert classify(text) is False

    @pytest.mark.parametrize('text', ['yess', 'y', 'n', 'truthy', 'onward'])
    def test_not_exact_literal(self, text):
        assert infer(text) == (STR_TAG, text)


class TestInt:
    """Integer literals: decimal, octal, hex, binary, base 60."""

    def test_decimal(self):
        assert classify('42') == 42
        assert classify('-17') == -17
        assert classify('+3') == 3
        assert classify('0') == 0

    def test_underscores_ignored(self):
        assert classify('1_000_000') == 1000000

    def test_hex(self):
        assert infer('0x1A') == (INT_TAG, 26)
        assert classify('0X1a') == 26
        assert classify('-0x10') == -16

    def test_octal(self):
        assert classify('012') == 10
        assert classify('-012') == -10

    def test_invalid_octal_is_string(self):
        assert classify('09') == '09'

    def test_binary(self):
        assert classify('0b1010') == 10

    def test_sexagesimal(self):
        assert classify('1:30:00') == 5400
        assert classify('12:34') == 754
        assert classify('190:20:30') == 685230

    def test_sexagesimal_sign_applies_to_whole(self):
        assert classify('-1:30') == -90

    def test_sexagesimal_segment_out_of_range(self):
        assert classify('1:60') == '1:60'

    def test_bare_prefix_is_string(self):
        assert classify('0x') == '0x'
        assert classify('0b') == '0b'


class TestFloat:
    """Float literals."""

    def test_fraction(self):
        assert infer('3.14') == (FLOAT_TAG, 3.14)
        assert classify('-0.5') == -0.5
        assert classify('.5') == 0.5
        assert classify('1.') == 1.0

    def test_exponent(self):
        assert classify('1.5e10') == 1.5e10
        assert classify('1e3') == 1000.0
        assert classify('2E-2') == 0.02

    def test_infinity(self):
        assert classify('.inf') == float('inf')
        assert classify('.Inf') == float('inf')
        assert classify('+.INF') == float('inf')
        assert classify('-.inf') == float('-inf')

    def test_nan(self):
        assert math.isnan(classify('.nan'))
        assert math.isnan(classify('.NaN'))

    def test_sexagesimal_float(self):
        assert classify('190:20:30.15') == pytest.approx(685230.15)
        assert classify('1:30.5') == pytest.approx(90.5)

    def test_dotted_version_is_string(self):
        assert infer('1.2.3') == (STR_TAG, '1.2.3')

    def test_lone_dot_is_string(self):
        assert classify('.') == '.'


class TestTimestamp:
    """Dates and timestamps."""

    def test_bare_date(self):
        assert infer('2014-03-29') == (TIMESTAMP_TAG, datetime.date(2014, 3, 29))

    def test_bare_date_not_datetime(self):
        assert type(classify('2014-03-29')) is datetime.date

    def test_not_a_date(self):
        assert classify('2014-3-29-x') == '2014-3-29-x'
        assert classify('2014-3-29') == '2014-3-29'

    def test_invalid_calendar_date(self):
        assert classify('2014-02-30') == '2014-02-30'

    def test_timestamp_t_separator(self):
        assert classify('2001-12-14T21:59:43') == \
            datetime.datetime(2001, 12, 14, 21, 59, 43)

    def test_timestamp_space_separator_and_fraction(self):
        assert classify('2001-12-14 21:59:43.10') == \
            datetime.datetime(2001, 12, 14, 21, 59, 43, 100000)

    def test_timestamp_utc(self):
        value = classify('2001-12-15T02:59:43.1Z')
        assert value == datetime.datetime(2001, 12, 15, 2, 59, 43, 100000,
                                          datetime.timezone.utc)

    def test_timestamp_offset(self):
        value = classify('2001-12-14t21:59:43.10-05:00')
        assert value.utcoffset() == datetime.timedelta(hours=-5)
        assert value.hour == 21

    def test_timestamp_space_before_zone(self):
        value = classify('2001-12-14 21:59:43.10 Z')
        assert value.tzinfo is datetime.timezone.utc

    def test_invalid_time_is_string(self):
        assert classify('2001-12-14T25:59:43') == '2001-12-14T25:59:43'


class TestSymbol:
    """Symbols are only read when enabled."""

    def test_disabled_by_default(self):
        assert classify(':foo') == ':foo'

    def test_enabled(self):
        assert infer(':foo', deserialize_symbols=True) == (SYMBOL_TAG, Symbol('foo'))

    def test_quoted_symbol(self):
        assert classify(':"foo bar"', deserialize_symbols=True) == Symbol('foo bar')

    def test_not_identifier(self):
        assert classify(':1abc', deserialize_symbols=True) == ':1abc'
        assert classify('::', deserialize_symbols=True) == '::'

    def test_symbol_is_not_string(self):
        symbol = Symbol('foo')
        assert symbol != 'foo'
        assert str(symbol) == 'foo'
        assert hash(symbol) == hash(Symbol('foo'))

    def test_earlier_rules_win(self):
        # ':' alone never reaches the symbol rule as a name
        assert classify('12:34', deserialize_symbols=True) == 754


class TestTotality:
    """The classifier never raises."""

    @pytest.mark.parametrize('text', [
        '0x_', '1:', ':', '-', '+', '_', '1__', '.e5', '1e', '0b2',
        '9999-99-99', '2001-12-14T21:59:43+99:00', '\x00', 'ü', ' 1', '1 ',
    ])
    def test_odd_text(self, text):
        tag, _ = infer(text, deserialize_symbols=True)
        assert tag in (NULL_TAG, BOOL_TAG, INT_TAG, FLOAT_TAG, TIMESTAMP_TAG,
                       STR_TAG, SYMBOL_TAG)

    @pytest.mark.parametrize('text', ['1' * 5000, '-' + '1' * 5000,
                                      '1' * 5000 + ':30'])
    def test_digits_past_int_limit(self, text):
        """Too many digits for int() is a string, not an error."""
        assert infer(text) == (STR_TAG, text)
        assert scalars.is_miss(scalars.to_int(text))

    def test_deterministic(self):
        for text in ('yes', '0x1A', '1:30:00', '2014-03-29', 'hello'):
            assert infer(text) == infer(text)

    def test_rules_report_miss(self):
        assert scalars.is_miss(scalars.to_int('abc'))
        assert scalars.is_miss(scalars.to_float('abc'))
        assert not scalars.is_miss(scalars.to_null(''))
