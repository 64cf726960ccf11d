"""Tag policy: which explicit tags may drive construction.

A tag is trusted when it is absent or non-specific, one of the built-in
YAML tags, whitelisted for the current call, or registered with the
PolicyStore. The store holds the process-wide state:

    init     PolicyStore() starts with factory defaults
    mutate   register_trusted_type(), set_default_options(),
             restore_defaults()
    read     snapshot() at the start of every resolution pass

Mutations take the store's lock, so registration is safe from any thread,
but is meant to happen at start-up.
"""

import datetime
import functools
import logging
import threading
import types
import warnings

from safe_yaml.error import SafeYAMLWarning, UnknownTagError
from safe_yaml.options import DEFAULT_OPTIONS
from safe_yaml.tags import (
    BUILTIN_TAGS,
    NON_SPECIFIC_TAGS,
    OBJECT_TAG_PREFIX,
    NULL_TAG,
    BOOL_TAG,
    INT_TAG,
    FLOAT_TAG,
    STR_TAG,
    BINARY_TAG,
    TIMESTAMP_TAG,
    SEQ_TAG,
    MAP_TAG,
)

logger = logging.getLogger(__name__)

# Types with a tag of their own; registering them adds nothing new.
PREDEFINED_TAGS = types.MappingProxyType({
    type(None): NULL_TAG,
    bool: BOOL_TAG,
    int: INT_TAG,
    float: FLOAT_TAG,
    str: STR_TAG,
    bytes: BINARY_TAG,
    datetime.date: TIMESTAMP_TAG,
    datetime.datetime: TIMESTAMP_TAG,
    list: SEQ_TAG,
    dict: MAP_TAG,
})


def tag_for_type(type_identifier):
    """Return the canonical tag for a class or a dotted class name.

    Raises:
        TypeError: if *type_identifier* is neither a class nor a string
        ValueError: if it is anonymous (empty, lambda or local class)
    """
    if isinstance(type_identifier, str):
        name = type_identifier.strip()
        if not name:
            raise ValueError("type name cannot be empty")
        return OBJECT_TAG_PREFIX + name
    if not isinstance(type_identifier, type):
        raise TypeError("%r is not a class" % (type_identifier,))
    predefined = PREDEFINED_TAGS.get(type_identifier)
    if predefined is not None:
        return predefined
    qualname = getattr(type_identifier, '__qualname__', '') or ''
    if not qualname or '<' in qualname:
        raise ValueError("%r cannot be anonymous" % (type_identifier,))
    module = type_identifier.__module__
    if module and module != 'builtins':
        qualname = '%s.%s' % (module, qualname)
    return OBJECT_TAG_PREFIX + qualname


def construct_registered_object(cls, content):
    """Default factory for a registered class without its own factory.

    Mappings become instance state (``__setstate__`` or ``__dict__``);
    anything else is passed to the constructor.
    """
    if isinstance(content, dict):
        instance = cls.__new__(cls)
        if hasattr(instance, '__setstate__'):
            instance.__setstate__(content)
        else:
            instance.__dict__.update(content)
        return instance
    return cls(content)


class PolicySnapshot:
    """Read-only view of the store taken for one resolution pass."""

    def __init__(self, options, registered):
        self.options = options
        self._registered = registered

    def is_trusted(self, tag):
        if tag in NON_SPECIFIC_TAGS or tag in BUILTIN_TAGS:
            return True
        if tag in self.options.whitelisted_tags or tag in self._registered:
            return True
        if self.options.unsafe:
            return self.initializer_for(tag) is not None
        return False

    def initializer_for(self, tag):
        """Per-call initializers win over registered factories."""
        factory = self.options.custom_initializers.get(tag)
        if factory is None:
            factory = self._registered.get(tag)
        return factory

    def enforce(self, tag, mark=None):
        """Return True if *tag* may drive construction.

        An untrusted tag raises UnknownTagError when the options ask for
        it; otherwise it is reported and False is returned so that the
        caller resolves the node as if it were untagged.
        """
        if self.is_trusted(tag):
            return True
        if self.options.raise_on_unknown_tag:
            raise UnknownTagError(tag, mark)
        logger.debug("ignoring untrusted tag %r", tag)
        if not self.options.suppress_warnings:
            warnings.warn("untrusted YAML tag %r ignored%s"
                          % (tag, '' if mark is None else '\n%s' % mark),
                          SafeYAMLWarning, stacklevel=2)
        return False


class PolicyStore:
    """Process-wide trusted registrations and default options."""

    def __init__(self, options=DEFAULT_OPTIONS):
        self._lock = threading.RLock()
        self._factory_options = options
        self._options = options
        self._registered = {}

    @property
    def options(self):
        return self._options

    @property
    def registered_tags(self):
        with self._lock:
            return frozenset(self._registered)

    def set_default_options(self, **changes):
        with self._lock:
            self._options = self._options.replace(**changes)
            return self._options

    def restore_defaults(self):
        """Drop every registration and go back to the factory options."""
        with self._lock:
            self._options = self._factory_options
            self._registered = {}
        logger.debug("restored default resolution options")

    def register_trusted_type(self, type_identifier, factory=None):
        """Trust the tag of *type_identifier* for every later load.

        *factory* is called with the tagged content (raw text for a
        scalar, the resolved list or dict for a collection). For a class
        it defaults to construct_registered_object(); a string name has no
        default factory. Registering again is a no-op unless a new
        factory is given.

        Returns:
            the canonical tag
        """
        tag = tag_for_type(type_identifier)
        if factory is not None and not callable(factory):
            raise TypeError("factory for %r is not callable" % (tag,))
        if tag in BUILTIN_TAGS:
            return tag
        with self._lock:
            if tag in self._registered and factory is None:
                return tag
            if factory is None and isinstance(type_identifier, type):
                factory = functools.partial(construct_registered_object,
                                            type_identifier)
            # Copy on write; snapshots keep the dict they were given.
            self._registered = dict(self._registered)
            self._registered[tag] = factory
        logger.debug("registered trusted tag %r", tag)
        return tag

    def whitelist(self, *type_identifiers):
        return [self.register_trusted_type(identifier)
                for identifier in type_identifiers]

    def snapshot(self, options=None):
        """Freeze the state for one pass; *options* overrides the defaults."""
        with self._lock:
            if options is None:
                options = self._options
            return PolicySnapshot(options,
                                  types.MappingProxyType(dict(self._registered)))
