"""Node classes produced by the composer and consumed by the resolver.

Unlike a regular composed tree, aliases stay as AliasNode objects so that
the resolver decides how anchors are shared.
"""


class Node:
    """Base class for YAML nodes."""

    def __init__(self, tag=None, value=None, anchor=None,
                 start_mark=None, end_mark=None):
        self.tag = tag
        self.value = value
        self.anchor = anchor
        self.start_mark = start_mark
        self.end_mark = end_mark

    def __repr__(self):
        return '%s(tag=%r, value=%r, anchor=%r)' % (
            self.__class__.__name__, self.tag, self.value, self.anchor)


class ScalarNode(Node):
    """Scalar node (raw text before typing)."""
    id = 'scalar'

    def __init__(self, tag, value, anchor=None, start_mark=None,
                 end_mark=None, style=None):
        super().__init__(tag, value, anchor, start_mark, end_mark)
        self.style = style

    @property
    def quoted(self):
        """True for any style other than plain, block scalars included."""
        return self.style not in (None, '')


class CollectionNode(Node):
    """Base class for collection nodes."""

    def __init__(self, tag, value, anchor=None, start_mark=None,
                 end_mark=None, flow_style=None):
        super().__init__(tag, value, anchor, start_mark, end_mark)
        self.flow_style = flow_style


class SequenceNode(CollectionNode):
    """Sequence node (list of child nodes)."""
    id = 'sequence'


class MappingNode(CollectionNode):
    """Mapping node (list of (key, value) node pairs)."""
    id = 'mapping'


class AliasNode(Node):
    """Reference to a node anchored earlier in the document."""
    id = 'alias'

    def __init__(self, anchor, start_mark=None, end_mark=None):
        super().__init__(None, None, anchor, start_mark, end_mark)
