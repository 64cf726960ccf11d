"""Options threaded through a single resolution pass."""

import types

SAFE_MODE = 'safe'
UNSAFE_MODE = 'unsafe'

_MODES = (None, SAFE_MODE, UNSAFE_MODE)


class ResolutionOptions:
    """Immutable snapshot of the options used for one load call.

    Attributes:
        default_mode: None, 'safe' or 'unsafe'. 'unsafe' trusts every tag
            that has an initializer, it never looks up arbitrary names.
        deserialize_symbols: read ``:name`` scalars as Symbol
        whitelisted_tags: extra trusted tags for this call
        custom_initializers: tag -> factory called with the tagged content
        raise_on_unknown_tag: fail instead of degrading untrusted tags
        raise_on_malformed_literal: fail instead of degrading to str when a
            built-in tag does not match its text
        suppress_warnings: do not warn about degraded tags
    """

    __slots__ = (
        'default_mode',
        'deserialize_symbols',
        'whitelisted_tags',
        'custom_initializers',
        'raise_on_unknown_tag',
        'raise_on_malformed_literal',
        'suppress_warnings',
    )

    def __init__(self, default_mode=None, deserialize_symbols=False,
                 whitelisted_tags=(), custom_initializers=None,
                 raise_on_unknown_tag=False, raise_on_malformed_literal=False,
                 suppress_warnings=False):
        if default_mode not in _MODES:
            raise ValueError("unknown default_mode %r, expected one of %r"
                             % (default_mode, _MODES))
        if isinstance(whitelisted_tags, str):
            raise TypeError("whitelisted_tags must be a collection of tags, "
                            "not a single string")
        initializers = dict(custom_initializers or {})
        for tag, factory in initializers.items():
            if not callable(factory):
                raise TypeError("initializer for tag %r is not callable" % tag)
        setattr_ = object.__setattr__
        setattr_(self, 'default_mode', default_mode)
        setattr_(self, 'deserialize_symbols', bool(deserialize_symbols))
        setattr_(self, 'whitelisted_tags', frozenset(whitelisted_tags))
        setattr_(self, 'custom_initializers',
                 types.MappingProxyType(initializers))
        setattr_(self, 'raise_on_unknown_tag', bool(raise_on_unknown_tag))
        setattr_(self, 'raise_on_malformed_literal',
                 bool(raise_on_malformed_literal))
        setattr_(self, 'suppress_warnings', bool(suppress_warnings))

    def __setattr__(self, name, value):
        raise AttributeError("ResolutionOptions is immutable; use replace()")

    def __delattr__(self, name):
        raise AttributeError("ResolutionOptions is immutable")

    def as_dict(self):
        values = {name: getattr(self, name) for name in self.__slots__}
        values['custom_initializers'] = dict(self.custom_initializers)
        return values

    def replace(self, **changes):
        """Return a copy with *changes* applied.

        Raises:
            TypeError: for an unknown option name
        """
        unknown = set(changes) - set(self.__slots__)
        if unknown:
            raise TypeError("unknown option(s): %s"
                            % ', '.join(sorted(unknown)))
        values = self.as_dict()
        values.update(changes)
        return ResolutionOptions(**values)

    def __eq__(self, other):
        if not isinstance(other, ResolutionOptions):
            return NotImplemented
        return self.as_dict() == other.as_dict()

    def __hash__(self):
        return hash((self.default_mode, self.whitelisted_tags,
                     self.raise_on_unknown_tag))

    def __repr__(self):
        return 'ResolutionOptions(%s)' % ', '.join(
            '%s=%r' % (name, getattr(self, name)) for name in self.__slots__)

    @property
    def unsafe(self):
        return self.default_mode == UNSAFE_MODE


# Factory defaults; restore_defaults() returns the process-wide options here.
DEFAULT_OPTIONS = ResolutionOptions()
