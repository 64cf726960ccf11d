"""Error classes raised while loading a document.

Every failure aborts the whole document; nothing partially resolved is
ever returned to the caller.
"""


class Mark:
    """Represents a position in a YAML stream.

    Attributes:
        name: The name of the stream (e.g., filename or '<string>')
        index: Character index in the stream
        line: Line number (0-indexed)
        column: Column number (0-indexed)
    """

    def __init__(self, name, index, line, column):
        self.name = name
        self.index = index
        self.line = line
        self.column = column

    @classmethod
    def from_pyyaml(cls, mark, name=None):
        if mark is None:
            return None
        return cls(name or mark.name, mark.index, mark.line, mark.column)

    def __str__(self):
        return "  in \"%s\", line %d, column %d" % (
            self.name, self.line + 1, self.column + 1)


class YAMLError(Exception):
    """Base exception for YAML errors."""
    pass


class SafeYAMLWarning(UserWarning):
    """Emitted when an untrusted tag is silently degraded."""
    pass


class MarkedYAMLError(YAMLError):
    """YAML error with position marks.

    Attributes:
        context: Description of the resolution context
        context_mark: Mark pointing to the context
        problem: Description of the problem
        problem_mark: Mark pointing to the problem
    """

    def __init__(self, context=None, context_mark=None,
                 problem=None, problem_mark=None):
        super().__init__(problem)
        self.context = context
        self.context_mark = context_mark
        self.problem = problem
        self.problem_mark = problem_mark

    def __str__(self):
        lines = []
        if self.context is not None:
            lines.append(self.context)
        if self.context_mark is not None \
                and (self.problem is None or self.problem_mark is None
                     or self.context_mark.name != self.problem_mark.name
                     or self.context_mark.line != self.problem_mark.line
                     or self.context_mark.column != self.problem_mark.column):
            lines.append(str(self.context_mark))
        if self.problem is not None:
            lines.append(self.problem)
        if self.problem_mark is not None:
            lines.append(str(self.problem_mark))
        return '\n'.join(lines)


class SafeYAMLError(MarkedYAMLError):
    """Base class for every error raised by the resolution layer."""
    pass


class GrammarError(SafeYAMLError):
    """The underlying parser could not tokenize or parse the input."""
    pass


class ResolutionError(SafeYAMLError):
    """Structural failure while building the value graph."""
    pass


class UnknownTagError(SafeYAMLError):
    """An explicit tag is not trusted and unknown tags must raise."""

    def __init__(self, tag, problem_mark=None):
        super().__init__(None, None, "unknown YAML tag %r" % tag, problem_mark)
        self.tag = tag


class UndefinedAnchorError(SafeYAMLError):
    """An alias refers to an anchor that has not been resolved."""

    def __init__(self, anchor, problem_mark=None, problem=None):
        if problem is None:
            problem = "found undefined alias %r" % anchor
        super().__init__(None, None, problem, problem_mark)
        self.anchor = anchor


class MalformedLiteralError(SafeYAMLError):
    """An explicitly tagged scalar does not match its tag's grammar."""

    def __init__(self, tag, value, problem_mark=None):
        super().__init__(None, None,
                         "cannot read %r as %s" % (value, tag), problem_mark)
        self.tag = tag
        self.value = value


class InitializerError(SafeYAMLError):
    """A trusted initializer raised while building its value."""

    def __init__(self, tag, cause, problem_mark=None):
        super().__init__("while constructing a value for tag %r" % tag, None,
                         "initializer failed: %s" % cause, problem_mark)
        self.tag = tag
        self.cause = cause
