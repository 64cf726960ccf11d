"""Strict construction of scalars carrying one of the built-in tags.

An explicit built-in tag such as ``!!int`` asks for that exact type, so
the text must parse under the tag's grammar. Constructors raise
ValueError when it does not; the resolver decides whether that degrades
to a string or fails the load.
"""

import base64
import binascii

from safe_yaml import scalars
from safe_yaml.tags import (
    NULL_TAG,
    BOOL_TAG,
    INT_TAG,
    FLOAT_TAG,
    STR_TAG,
    BINARY_TAG,
    TIMESTAMP_TAG,
)


class SafeConstructor:
    """Maps built-in scalar tags to strict constructor functions."""

    yaml_constructors = {}

    def construct_scalar(self, tag, value):
        """Build the native value of *value* under *tag*.

        Raises:
            KeyError: if *tag* has no scalar constructor
            ValueError: if *value* is not valid for *tag*
        """
        constructor = self.yaml_constructors[tag]
        return constructor(self, value)

    def handles(self, tag):
        return tag in self.yaml_constructors

    @classmethod
    def add_constructor(cls, tag, constructor):
        """Add a constructor for a specific tag."""
        if 'yaml_constructors' not in cls.__dict__:
            cls.yaml_constructors = cls.yaml_constructors.copy()
        cls.yaml_constructors[tag] = constructor

    def construct_yaml_null(self, value):
        result = scalars.to_null(value)
        if scalars.is_miss(result):
            raise ValueError("not a null: %r" % value)
        return None

    def construct_yaml_bool(self, value):
        result = scalars.to_bool(value)
        if scalars.is_miss(result):
            raise ValueError("not a boolean: %r" % value)
        return result

    def construct_yaml_int(self, value):
        result = scalars.to_int(value.strip())
        if scalars.is_miss(result):
            raise ValueError("not an integer: %r" % value)
        return result

    def construct_yaml_float(self, value):
        value = value.strip()
        result = scalars.to_float(value)
        if scalars.is_miss(result):
            # !!float 1 is a valid float
            result = scalars.to_int(value)
            if scalars.is_miss(result):
                raise ValueError("not a float: %r" % value)
            result = float(result)
        return result

    def construct_yaml_str(self, value):
        return value

    def construct_yaml_binary(self, value):
        value = ''.join(value.split())
        try:
            return base64.b64decode(value.encode('ascii'), validate=True)
        except (binascii.Error, UnicodeEncodeError) as exc:
            raise ValueError("failed to decode base64 data: %s" % exc) from exc

    def construct_yaml_timestamp(self, value):
        result = scalars.to_timestamp(value.strip())
        if scalars.is_miss(result):
            raise ValueError("not a timestamp: %r" % value)
        return result


SafeConstructor.add_constructor(NULL_TAG, SafeConstructor.construct_yaml_null)
SafeConstructor.add_constructor(BOOL_TAG, SafeConstructor.construct_yaml_bool)
SafeConstructor.add_constructor(INT_TAG, SafeConstructor.construct_yaml_int)
SafeConstructor.add_constructor(FLOAT_TAG, SafeConstructor.construct_yaml_float)
SafeConstructor.add_constructor(STR_TAG, SafeConstructor.construct_yaml_str)
SafeConstructor.add_constructor(BINARY_TAG, SafeConstructor.construct_yaml_binary)
SafeConstructor.add_constructor(TIMESTAMP_TAG, SafeConstructor.construct_yaml_timestamp)
