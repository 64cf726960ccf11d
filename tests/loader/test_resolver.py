"""Tests for the Resolver on hand-built Node trees.

These run without the parser, with a PolicyStore created per test, so
they show resolution in isolation from the process-wide state.
"""

import pytest

from safe_yaml.error import (
    InitializerError,
    ResolutionError,
    UndefinedAnchorError,
    UnknownTagError,
)
from safe_yaml.nodes import AliasNode, MappingNode, ScalarNode, SequenceNode
from safe_yaml.options import ResolutionOptions
from safe_yaml.policy import PolicyStore
from safe_yaml.resolver import AnchorTable, Resolver
from safe_yaml.tags import INT_TAG


def scalar(value, tag=None, anchor=None, style=None):
    return ScalarNode(tag, value, anchor=anchor, style=style)


def resolver(**options):
    store = PolicyStore()
    return Resolver(store.snapshot(ResolutionOptions(suppress_warnings=True, **options)))


class TestAnchorTable:
    """Anchor bookkeeping."""

    def test_define_and_lookup(self):
        table = AnchorTable()
        value = {'a': 1}
        table.define('x', value)
        assert 'x' in table
        assert table.lookup('x') is value

    def test_missing(self):
        with pytest.raises(UndefinedAnchorError):
            AnchorTable().lookup('x')

    def test_pending_is_recursive(self):
        table = AnchorTable()
        table.begin('x')
        with pytest.raises(UndefinedAnchorError, match='recursive'):
            table.lookup('x')

    def test_redefine_overwrites(self):
        table = AnchorTable()
        table.define('x', 1)
        table.define('x', 2)
        assert table.lookup('x') == 2
        assert len(table) == 1

    def test_none_anchor_ignored(self):
        table = AnchorTable()
        table.begin(None)
        table.define(None, 1)
        assert len(table) == 0


class TestResolveNodes:
    """The walk over Scalar/Sequence/Mapping/Alias nodes."""

    def test_none_document(self):
        assert resolver().resolve(None) is None

    def test_scalar(self):
        assert resolver().resolve(scalar('0x1A')) == 26

    def test_quoted_scalar(self):
        assert resolver().resolve(scalar('0x1A', style='"')) == '0x1A'

    def test_sequence_and_alias(self):
        node = SequenceNode(None, [
            MappingNode(None, [(scalar('k'), scalar('v'))], anchor='m'),
            AliasNode('m'),
        ])
        result = resolver().resolve(node)
        assert result[0] is result[1]

    def test_anchor_on_scalar(self):
        node = SequenceNode(None, [scalar('yes', anchor='b'), AliasNode('b')])
        assert resolver().resolve(node) == [True, True]

    def test_fresh_table_per_document(self):
        r = resolver()
        r.resolve(scalar('1', anchor='a'))
        with pytest.raises(UndefinedAnchorError):
            r.resolve(AliasNode('a'))

    def test_alias_into_own_sequence(self):
        node = SequenceNode(None, [AliasNode('s')], anchor='s')
        with pytest.raises(UndefinedAnchorError):
            resolver().resolve(node)

    def test_unknown_node(self):
        with pytest.raises(ResolutionError):
            resolver().resolve(object())

    def test_builtin_tag(self):
        assert resolver().resolve(scalar('10', tag=INT_TAG, style='"')) == 10

    def test_untrusted_tag_raises(self):
        with pytest.raises(UnknownTagError):
            resolver(raise_on_unknown_tag=True).resolve(scalar('1', tag='!x'))

    def test_initializer_error_is_fatal(self):
        def broken(content):
            raise ValueError('no')
        r = resolver(whitelisted_tags=['!x'], custom_initializers={'!x': broken})
        node = MappingNode(None, [(scalar('a'), scalar('1', tag='!x'))])
        with pytest.raises(InitializerError):
            r.resolve(node)

    def test_symbols_follow_options(self):
        from safe_yaml.scalars import Symbol
        assert resolver(deserialize_symbols=True).resolve(scalar(':a')) == Symbol('a')
