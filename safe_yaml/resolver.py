"""Turns a composed Node tree into native Python values.

The walk is depth-first in document order. Every explicit tag goes
through the policy snapshot first; a tag that is not trusted never reaches
an initializer, and the node is resolved as if it carried no tag.
"""

import logging

from safe_yaml import scalars
from safe_yaml.constructor import SafeConstructor
from safe_yaml.error import (
    InitializerError,
    MalformedLiteralError,
    ResolutionError,
    UndefinedAnchorError,
)
from safe_yaml.nodes import ScalarNode, SequenceNode, MappingNode, AliasNode
from safe_yaml.tags import NON_SPECIFIC_TAGS, SEQ_TAG, MAP_TAG

logger = logging.getLogger(__name__)

MERGE_KEY = '<<'


class AnchorTable:
    """Anchor name -> resolved value for one document.

    A later definition of the same anchor replaces the earlier one. An
    anchor on a collection is pending until its children are resolved, so
    an alias pointing back into its own ancestor is reported as undefined
    instead of being followed.
    """

    def __init__(self):
        self._values = {}
        self._pending = set()

    def __contains__(self, anchor):
        return anchor in self._values

    def __len__(self):
        return len(self._values)

    def begin(self, anchor):
        if anchor is not None:
            self._pending.add(anchor)

    def define(self, anchor, value):
        if anchor is not None:
            self._pending.discard(anchor)
            self._values[anchor] = value

    def lookup(self, anchor, mark=None):
        if anchor in self._pending:
            raise UndefinedAnchorError(
                anchor, mark,
                "found recursive alias %r; an anchor cannot be referenced "
                "from inside its own node" % anchor)
        try:
            return self._values[anchor]
        except KeyError:
            raise UndefinedAnchorError(anchor, mark) from None


class Resolver:
    """Resolves one document at a time against a policy snapshot.

    Args:
        policy: a PolicySnapshot taken at the start of the load call
        constructor: strict constructor for built-in scalar tags
    """

    def __init__(self, policy, constructor=None):
        self.policy = policy
        self.options = policy.options
        self.constructor = constructor or SafeConstructor()
        self.anchors = AnchorTable()

    def resolve(self, node):
        """Resolve *node* (a document root) with a fresh anchor table."""
        self.anchors = AnchorTable()
        if node is None:
            return None
        return self.resolve_node(node)

    def resolve_node(self, node):
        if isinstance(node, AliasNode):
            return self.anchors.lookup(node.anchor, node.start_mark)
        if isinstance(node, ScalarNode):
            return self.resolve_scalar(node)
        if isinstance(node, SequenceNode):
            return self.resolve_sequence(node)
        if isinstance(node, MappingNode):
            return self.resolve_mapping(node)
        raise ResolutionError(None, None, "unknown node %r" % (node,),
                              getattr(node, 'start_mark', None))

    def _check_tag(self, node):
        """Return the tag that may drive construction, or None."""
        if node.tag in NON_SPECIFIC_TAGS:
            return None
        if self.policy.enforce(node.tag, node.start_mark):
            return node.tag
        return None

    def _initialize(self, tag, factory, content, node):
        try:
            return factory(content)
        except Exception as exc:
            raise InitializerError(tag, exc, node.start_mark) from exc

    def _malformed(self, tag, node, fallback, cause=None):
        if self.options.raise_on_malformed_literal:
            value = node.value if isinstance(node, ScalarNode) else node.id
            raise MalformedLiteralError(tag, value, node.start_mark) from cause
        logger.debug("%s node does not match tag %r, keeping it untyped",
                     node.id, tag)
        return fallback

    def resolve_scalar(self, node):
        tag = self._check_tag(node)
        if tag is None:
            value = self.infer_scalar(node)
        else:
            value = self.construct_scalar(tag, node)
        self.anchors.define(node.anchor, value)
        return value

    def infer_scalar(self, node):
        if node.quoted or node.tag == '!':
            return node.value
        return scalars.classify(node.value, self.options.deserialize_symbols)

    def construct_scalar(self, tag, node):
        factory = self.policy.initializer_for(tag)
        if factory is not None:
            return self._initialize(tag, factory, node.value, node)
        if self.constructor.handles(tag):
            try:
                return self.constructor.construct_scalar(tag, node.value)
            except ValueError as exc:
                return self._malformed(tag, node, node.value, exc)
        if tag in (SEQ_TAG, MAP_TAG):
            return self._malformed(tag, node, node.value)
        # Trusted, but nothing knows how to build it.
        return self.infer_scalar(node)

    def resolve_sequence(self, node):
        self.anchors.begin(node.anchor)
        tag = self._check_tag(node)
        value = [self.resolve_node(child) for child in node.value]
        if tag is not None and tag != SEQ_TAG:
            value = self._construct_collection(tag, node, value)
        self.anchors.define(node.anchor, value)
        return value

    def resolve_mapping(self, node):
        self.anchors.begin(node.anchor)
        tag = self._check_tag(node)
        value = {}
        merged = []
        for key_node, value_node in node.value:
            if self._is_merge_key(key_node):
                merged.extend(self._merge_sources(node, value_node))
                continue
            key = self.resolve_node(key_node)
            try:
                hash(key)
            except TypeError as exc:
                raise ResolutionError(
                    "while resolving a mapping", node.start_mark,
                    "found unhashable key", key_node.start_mark) from exc
            value[key] = self.resolve_node(value_node)
        if merged:
            value = self._apply_merge(merged, value)
        if tag is not None and tag != MAP_TAG:
            value = self._construct_collection(tag, node, value)
        self.anchors.define(node.anchor, value)
        return value

    def _construct_collection(self, tag, node, value):
        factory = self.policy.initializer_for(tag)
        if factory is not None:
            return self._initialize(tag, factory, value, node)
        if self.constructor.handles(tag) or tag in (SEQ_TAG, MAP_TAG):
            return self._malformed(tag, node, value)
        return value

    @staticmethod
    def _is_merge_key(key_node):
        return (isinstance(key_node, ScalarNode) and key_node.value == MERGE_KEY
                and not key_node.quoted
                and key_node.tag in NON_SPECIFIC_TAGS)

    def _merge_sources(self, node, value_node):
        source = self.resolve_node(value_node)
        sources = source if isinstance(source, list) else [source]
        for item in sources:
            if not isinstance(item, dict):
                raise ResolutionError(
                    "while resolving a mapping", node.start_mark,
                    "expected a mapping or list of mappings for merging, "
                    "but found %s" % type(item).__name__,
                    value_node.start_mark)
        return sources

    @staticmethod
    def _apply_merge(merged, explicit):
        # Earlier sources win over later ones; explicit keys win over all.
        result = {}
        for source in merged:
            for key, item in source.items():
                result.setdefault(key, item)
        result.update(explicit)
        return result
