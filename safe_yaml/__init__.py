"""
safe_yaml - YAML loading that decides types itself

PyYAML parses the text; this package decides what every node becomes.
Plain scalars are typed from their literal text (YAML 1.1 rules), and an
explicit tag only builds something when it is trusted: one of the
built-in YAML tags, whitelisted for the call, or registered up front.
Untrusted tags are ignored by default, or rejected with
``raise_on_unknown_tag=True``.

Example:
    >>> import safe_yaml
    >>> safe_yaml.load("a: yes\\nb: ~\\nc: 0x10\\n")
    {'a': True, 'b': None, 'c': 16}
    >>> safe_yaml.load("!ruby/object:Foo\\nx: 1\\n", suppress_warnings=True)
    {'x': 1}
"""

from safe_yaml.composer import Composer
from safe_yaml.error import (
    Mark,
    YAMLError,
    MarkedYAMLError,
    SafeYAMLError,
    SafeYAMLWarning,
    GrammarError,
    ResolutionError,
    UnknownTagError,
    UndefinedAnchorError,
    MalformedLiteralError,
    InitializerError,
)
from safe_yaml.options import (
    ResolutionOptions,
    DEFAULT_OPTIONS,
    SAFE_MODE,
    UNSAFE_MODE,
)
from safe_yaml.policy import PolicyStore, tag_for_type
from safe_yaml.resolver import Resolver, AnchorTable
from safe_yaml.scalars import Symbol, classify

# Process-wide registrations and default options.
POLICY = PolicyStore()


def _options_for(options, overrides, store):
    """Per-call options: *options* (or the store defaults) plus overrides."""
    if options is None:
        options = store.options
    elif isinstance(options, dict):
        options = store.options.replace(**options)
    elif not isinstance(options, ResolutionOptions):
        raise TypeError("options must be a ResolutionOptions or a dict, "
                        "not %s" % type(options).__name__)
    if overrides:
        options = options.replace(**overrides)
    return options


def _stream_name(stream, filename):
    if filename is not None:
        return str(filename)
    if isinstance(stream, str):
        return '<unicode string>'
    if isinstance(stream, bytes):
        return '<byte string>'
    return getattr(stream, 'name', '<file>')


def load(stream, filename=None, options=None, policy=None, **overrides):
    """Parse a single YAML document and resolve it safely.

    Args:
        stream: str, bytes (BOM aware) or a file-like object
        filename: name used in error marks
        options: ResolutionOptions or a dict of option overrides
        policy: PolicyStore to use instead of the process-wide one
        **overrides: individual options, e.g. ``raise_on_unknown_tag=True``

    Returns:
        None, bool, int, float, str, date/datetime, Symbol, bytes, list,
        dict, or an object built by a trusted initializer

    Raises:
        GrammarError: if the text is not valid YAML
        UnknownTagError: for an untrusted tag when unknown tags must raise
        UndefinedAnchorError: for an alias to an unknown anchor
        MalformedLiteralError: for a bad tagged literal when configured
        InitializerError: if a trusted initializer fails
    """
    store = policy or POLICY
    snapshot = store.snapshot(_options_for(options, overrides, store))
    node = Composer(stream, _stream_name(stream, filename)).get_single_node()
    return Resolver(snapshot).resolve(node)


def load_all(stream, filename=None, options=None, policy=None, **overrides):
    """Parse every document in *stream*, yielding one value per document.

    Each document gets its own anchor table; the policy snapshot is taken
    once, when load_all() is called.
    """
    store = policy or POLICY
    snapshot = store.snapshot(_options_for(options, overrides, store))
    composer = Composer(stream, _stream_name(stream, filename))
    return _resolve_documents(composer, Resolver(snapshot))


def _resolve_documents(composer, resolver):
    while composer.check_node():
        yield resolver.resolve(composer.compose_document())


def load_file(path, options=None, policy=None, **overrides):
    """Load the single document stored at *path* (UTF-8, BOM stripped)."""
    with open(path, 'r', encoding='utf-8-sig') as stream:
        return load(stream, filename=path, options=options, policy=policy,
                    **overrides)


def register_trusted_type(type_identifier, factory=None):
    """Trust *type_identifier*'s tag for every later load in this process.

    See PolicyStore.register_trusted_type().
    """
    return POLICY.register_trusted_type(type_identifier, factory)


def whitelist(*type_identifiers):
    """Register several trusted types at once."""
    return POLICY.whitelist(*type_identifiers)


def restore_defaults():
    """Forget every registration and reset the process-wide options."""
    POLICY.restore_defaults()


def get_default_options():
    """Return the process-wide options (an immutable snapshot)."""
    return POLICY.options


def set_default_options(**changes):
    """Change the process-wide options for every later load."""
    return POLICY.set_default_options(**changes)


__version__ = "0.1.0"

__all__ = [
    "load",
    "load_all",
    "load_file",
    "register_trusted_type",
    "whitelist",
    "restore_defaults",
    "get_default_options",
    "set_default_options",
    "tag_for_type",
    "classify",
    "Symbol",
    "ResolutionOptions",
    "DEFAULT_OPTIONS",
    "SAFE_MODE",
    "UNSAFE_MODE",
    "PolicyStore",
    "POLICY",
    "Composer",
    "Resolver",
    "AnchorTable",
    "Mark",
    "YAMLError",
    "MarkedYAMLError",
    "SafeYAMLError",
    "SafeYAMLWarning",
    "GrammarError",
    "ResolutionError",
    "UnknownTagError",
    "UndefinedAnchorError",
    "MalformedLiteralError",
    "InitializerError",
]
