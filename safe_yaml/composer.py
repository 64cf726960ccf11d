"""Node source: turns PyYAML's event stream into Node trees.

Only the grammar parser is taken from PyYAML; no tag is resolved and no
alias is followed here. Aliases stay as AliasNode objects and anchors are
handed to the resolver untouched.
"""

import yaml

from safe_yaml.error import GrammarError, Mark
from safe_yaml.nodes import ScalarNode, SequenceNode, MappingNode, AliasNode

# The C parser emits the same events, only faster.
_EventLoader = getattr(yaml, 'CSafeLoader', yaml.SafeLoader)


def _grammar_error(exc, name):
    if isinstance(exc, yaml.MarkedYAMLError):
        return GrammarError(exc.context, Mark.from_pyyaml(exc.context_mark, name),
                            exc.problem, Mark.from_pyyaml(exc.problem_mark, name))
    return GrammarError(None, None, str(exc), None)


class Composer:
    """Composes Node trees from a stream, one document at a time.

    Example:
        >>> composer = Composer("a: &x 1\\nb: *x\\n")
        >>> node = composer.get_single_node()
        >>> node.value[1][1]
        AliasNode(tag=None, value=None, anchor='x')
    """

    def __init__(self, stream, name=None):
        self.name = name
        self._events = yaml.parse(stream, Loader=_EventLoader)
        self._current = None

    def _mark(self, mark):
        return Mark.from_pyyaml(mark, self.name)

    def peek_event(self):
        if self._current is None:
            try:
                self._current = next(self._events)
            except StopIteration:
                return None
            except yaml.YAMLError as exc:
                raise _grammar_error(exc, self.name) from exc
        return self._current

    def get_event(self):
        event = self.peek_event()
        self._current = None
        return event

    def check_event(self, *choices):
        event = self.peek_event()
        if event is None:
            return False
        if not choices:
            return True
        return isinstance(event, choices)

    def check_node(self):
        # Drop StreamStartEvent
        if self.check_event(yaml.StreamStartEvent):
            self.get_event()
        return self.check_event() and not self.check_event(yaml.StreamEndEvent)

    def get_node(self):
        if self.check_node():
            return self.compose_document()
        return None

    def get_single_node(self):
        """Compose the only document of the stream (None when empty)."""
        document = self.get_node()
        if self.check_node():
            event = self.get_event()
            raise GrammarError("expected a single document in the stream",
                               document.start_mark if document else None,
                               "but found another document",
                               self._mark(event.start_mark))
        return document

    def compose_document(self):
        # Drop DocumentStartEvent
        self.get_event()
        node = self.compose_node()
        # Drop DocumentEndEvent
        self.get_event()
        return node

    def compose_node(self):
        if self.check_event(yaml.AliasEvent):
            event = self.get_event()
            return AliasNode(event.anchor,
                             start_mark=self._mark(event.start_mark),
                             end_mark=self._mark(event.end_mark))
        if self.check_event(yaml.ScalarEvent):
            return self.compose_scalar_node()
        if self.check_event(yaml.SequenceStartEvent):
            return self.compose_sequence_node()
        if self.check_event(yaml.MappingStartEvent):
            return self.compose_mapping_node()
        event = self.get_event()
        raise GrammarError(None, None, "unexpected event %r" % (event,),
                           self._mark(getattr(event, 'start_mark', None)))

    def compose_scalar_node(self):
        event = self.get_event()
        return ScalarNode(event.tag, event.value, anchor=event.anchor,
                          start_mark=self._mark(event.start_mark),
                          end_mark=self._mark(event.end_mark),
                          style=event.style)

    def compose_sequence_node(self):
        start_event = self.get_event()
        node = SequenceNode(start_event.tag, [], anchor=start_event.anchor,
                            start_mark=self._mark(start_event.start_mark),
                            flow_style=start_event.flow_style)
        while not self.check_event(yaml.SequenceEndEvent):
            node.value.append(self.compose_node())
        end_event = self.get_event()
        node.end_mark = self._mark(end_event.end_mark)
        return node

    def compose_mapping_node(self):
        start_event = self.get_event()
        node = MappingNode(start_event.tag, [], anchor=start_event.anchor,
                           start_mark=self._mark(start_event.start_mark),
                           flow_style=start_event.flow_style)
        while not self.check_event(yaml.MappingEndEvent):
            key_node = self.compose_node()
            value_node = self.compose_node()
            node.value.append((key_node, value_node))
        end_event = self.get_event()
        node.end_mark = self._mark(end_event.end_mark)
        return node


def compose(stream, name=None):
    """Compose the single document in *stream* into a Node tree."""
    return Composer(stream, name).get_single_node()


def compose_all(stream, name=None):
    """Yield a Node tree for each document in *stream*."""
    composer = Composer(stream, name)
    while composer.check_node():
        yield composer.compose_document()
