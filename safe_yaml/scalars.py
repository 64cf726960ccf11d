"""Implicit typing of plain scalars.

Every untagged (or untrusted) scalar is typed here from its literal text
alone. Rules are tried in a fixed order and the first match wins:

    null, bool, int, float, timestamp, symbol (opt-in), str

All functions in this module are pure and never raise for any input text.
"""

import datetime
import re

from safe_yaml.tags import (
    NULL_TAG,
    BOOL_TAG,
    INT_TAG,
    FLOAT_TAG,
    TIMESTAMP_TAG,
    SYMBOL_TAG,
    STR_TAG,
)


class Symbol:
    """An interned name read from ``:name`` when symbols are enabled."""

    __slots__ = ('name',)

    def __init__(self, name):
        self.name = name

    def __eq__(self, other):
        return isinstance(other, Symbol) and other.name == self.name

    def __hash__(self):
        return hash((Symbol, self.name))

    def __repr__(self):
        return 'Symbol(%r)' % self.name

    def __str__(self):
        return self.name


_MISS = object()

_NULL_VALUES = frozenset(['', '~', 'null'])

_BOOL_VALUES = {
    'true': True, 'yes': True, 'on': True,
    'false': False, 'no': False, 'off': False,
}

_DECIMAL_REGEXP = re.compile(r'^[-+]?(?:0|[1-9][0-9_]*)$')
_OCTAL_REGEXP = re.compile(r'^[-+]?0[0-7_]+$')
_HEX_REGEXP = re.compile(r'^[-+]?0[xX]_*[0-9a-fA-F][0-9a-fA-F_]*$')
_BINARY_REGEXP = re.compile(r'^[-+]?0b_*[01][01_]*$')
_SEXAGESIMAL_INT_REGEXP = re.compile(r'^[-+]?[0-9][0-9_]*(?::[0-5]?[0-9])+$')

_FLOAT_REGEXP = re.compile(
    r'^[-+]?(?:'
    r'[0-9][0-9_]*\.[0-9_]*(?:[eE][-+]?[0-9]+)?'
    r'|\.[0-9][0-9_]*(?:[eE][-+]?[0-9]+)?'
    r'|[0-9][0-9_]*[eE][-+]?[0-9]+'
    r')$')
_INF_REGEXP = re.compile(r'^[-+]?\.inf$', re.IGNORECASE)
_NAN_REGEXP = re.compile(r'^\.nan$', re.IGNORECASE)
_SEXAGESIMAL_FLOAT_REGEXP = re.compile(
    r'^[-+]?[0-9][0-9_]*(?::[0-5]?[0-9])+\.[0-9_]*$')

# Date-only requires 2-digit month/day
_DATE_REGEXP = re.compile(
    r'^(?P<year>[0-9][0-9][0-9][0-9])'
    r'-(?P<month>[0-9][0-9])'
    r'-(?P<day>[0-9][0-9])$')

# Full timestamp (date + time required, 1-digit month/day OK)
_TIMESTAMP_REGEXP = re.compile(
    r'^(?P<year>[0-9][0-9][0-9][0-9])'
    r'-(?P<month>[0-9][0-9]?)'
    r'-(?P<day>[0-9][0-9]?)'
    r'(?:[Tt]|[ \t]+)'
    r'(?P<hour>[0-9][0-9]?)'
    r':(?P<minute>[0-9][0-9])'
    r':(?P<second>[0-9][0-9])'
    r'(?:\.(?P<fraction>[0-9]*))?'
    r'(?:[ \t]*(?P<tz>[Zz]|(?P<tz_sign>[-+])(?P<tz_hour>[0-9][0-9]?)'
    r'(?::(?P<tz_minute>[0-9][0-9]))?))?$')

_SYMBOL_REGEXP = re.compile(
    r'^:(?:(?P<name>[A-Za-z_][A-Za-z0-9_]*[?!=]?)'
    r'|"(?P<dquoted>[^"]+)"'
    r"|'(?P<squoted>[^']+)')$")


def _split_sign(value):
    value = value.replace('_', '')
    if value.startswith('-'):
        return -1, value[1:]
    if value.startswith('+'):
        return 1, value[1:]
    return 1, value


def _base60(parts):
    base = 1
    result = 0
    for digit in reversed(parts):
        result += digit * base
        base *= 60
    return result


def to_null(value):
    if value.lower() in _NULL_VALUES:
        return None
    return _MISS


def to_bool(value):
    return _BOOL_VALUES.get(value.lower(), _MISS)


def to_int(value):
    """Read a YAML 1.1 integer: decimal, octal, hex, binary or base 60.

    Decimal text past the interpreter's int conversion limit is not an
    integer.
    """
    try:
        return _to_int(value)
    except ValueError:
        return _MISS


def _to_int(value):
    if _DECIMAL_REGEXP.match(value):
        sign, digits = _split_sign(value)
        return sign * int(digits)
    if _OCTAL_REGEXP.match(value):
        sign, digits = _split_sign(value)
        return sign * int(digits, 8)
    if _HEX_REGEXP.match(value):
        sign, digits = _split_sign(value)
        return sign * int(digits[2:], 16)
    if _BINARY_REGEXP.match(value):
        sign, digits = _split_sign(value)
        return sign * int(digits[2:], 2)
    if _SEXAGESIMAL_INT_REGEXP.match(value):
        sign, digits = _split_sign(value)
        return sign * _base60([int(part) for part in digits.split(':')])
    return _MISS


def to_float(value):
    """Read a YAML 1.1 float, including .inf/.nan and base 60 forms."""
    if _INF_REGEXP.match(value):
        return float('-inf') if value.startswith('-') else float('inf')
    if _NAN_REGEXP.match(value):
        return float('nan')
    if _FLOAT_REGEXP.match(value):
        sign, digits = _split_sign(value)
        return sign * float(digits)
    if _SEXAGESIMAL_FLOAT_REGEXP.match(value):
        sign, digits = _split_sign(value)
        return sign * _base60([float(part) for part in digits.split(':')])
    return _MISS


def to_timestamp(value):
    """Read an ISO 8601 date or timestamp.

    Returns datetime.date for a bare date and datetime.datetime otherwise.
    Text shaped like a date that is not a valid calendar date is not a
    timestamp.
    """
    match = _DATE_REGEXP.match(value)
    if match:
        values = match.groupdict()
        try:
            return datetime.date(int(values['year']), int(values['month']),
                                 int(values['day']))
        except ValueError:
            return _MISS

    match = _TIMESTAMP_REGEXP.match(value)
    if not match:
        return _MISS
    values = match.groupdict()
    fraction = 0
    if values['fraction']:
        fraction = int(values['fraction'][:6].ljust(6, '0'))
    tz = None
    if values['tz']:
        if values['tz'] in ('Z', 'z'):
            tz = datetime.timezone.utc
        else:
            tz_sign = -1 if values['tz_sign'] == '-' else 1
            tz_hour = int(values['tz_hour'])
            tz_minute = int(values['tz_minute']) if values['tz_minute'] else 0
            try:
                tz = datetime.timezone(datetime.timedelta(
                    hours=tz_sign * tz_hour, minutes=tz_sign * tz_minute))
            except ValueError:
                return _MISS
    try:
        return datetime.datetime(
            int(values['year']), int(values['month']), int(values['day']),
            int(values['hour']), int(values['minute']), int(values['second']),
            fraction, tz)
    except ValueError:
        return _MISS


def to_symbol(value):
    match = _SYMBOL_REGEXP.match(value)
    if not match:
        return _MISS
    return Symbol(match.group('name') or match.group('dquoted')
                  or match.group('squoted'))


_RULES = (
    (NULL_TAG, to_null),
    (BOOL_TAG, to_bool),
    (INT_TAG, to_int),
    (FLOAT_TAG, to_float),
    (TIMESTAMP_TAG, to_timestamp),
)


def infer(value, deserialize_symbols=False):
    """Return ``(tag, native_value)`` for a plain scalar's text."""
    for tag, rule in _RULES:
        result = rule(value)
        if result is not _MISS:
            return tag, result
    if deserialize_symbols:
        result = to_symbol(value)
        if result is not _MISS:
            return SYMBOL_TAG, result
    return STR_TAG, value


def classify(value, deserialize_symbols=False):
    """Return the native value for a plain scalar's text.

    >>> classify('0x1A')
    26
    >>> classify('1.2.3')
    '1.2.3'
    """
    return infer(value, deserialize_symbols)[1]


def is_miss(result):
    return result is _MISS
