"""Canonical tag strings understood by the resolver."""

YAML_TAG_PREFIX = 'tag:yaml.org,2002:'

NULL_TAG = YAML_TAG_PREFIX + 'null'
BOOL_TAG = YAML_TAG_PREFIX + 'bool'
INT_TAG = YAML_TAG_PREFIX + 'int'
FLOAT_TAG = YAML_TAG_PREFIX + 'float'
STR_TAG = YAML_TAG_PREFIX + 'str'
BINARY_TAG = YAML_TAG_PREFIX + 'binary'
TIMESTAMP_TAG = YAML_TAG_PREFIX + 'timestamp'
SEQ_TAG = YAML_TAG_PREFIX + 'seq'
MAP_TAG = YAML_TAG_PREFIX + 'map'

# Never trusted by default; only produced by the classifier.
SYMBOL_TAG = YAML_TAG_PREFIX + 'python/symbol'

OBJECT_TAG_PREFIX = YAML_TAG_PREFIX + 'python/object:'

# Non-specific tags carry no type information.
NON_SPECIFIC_TAGS = frozenset([None, '', '!', '?'])

BUILTIN_TAGS = frozenset([
    BINARY_TAG,
    BOOL_TAG,
    FLOAT_TAG,
    INT_TAG,
    MAP_TAG,
    NULL_TAG,
    SEQ_TAG,
    STR_TAG,
    TIMESTAMP_TAG,
])
