#!/usr/bin/py

"""
Defines the two kinds of text a template can hand to the markup module:
plain text, which has to be escaped, and known safe HTML, which already
has been.
"""

# text/plain
# Untrusted text.  Nothing is known about what it contains.
CONTENT_KIND_PLAIN = 0

# text/html
# A snippet of HTML that is safe to emit as-is, typically the output of one
# of the escapers.  Template engines that understand the __html__ protocol
# will not escape it a second time.
CONTENT_KIND_HTML = 1

_CONTENT_KINDS = (CONTENT_KIND_PLAIN, CONTENT_KIND_HTML)


class TypedContent(object):
    """
    A wrapped string whose content is of a particular kind.
    For example, an instance's kind property might indicate that it is a string
    of HTML, not a string of plain text.
    """

    def __init__(self, content, kind):
        if type(content) is not str:
            raise ValueError(content)
        if kind not in _CONTENT_KINDS:
            raise ValueError(kind)
        # The string content.
        self.content = content
        # Describes the context in which content is safe.
        self.kind = kind

    def __str__(self):
        return self.content

    def __repr__(self):
        return '%s(%r)' % (type(self).__name__, self.content)

    def __eq__(self, other):
        if not isinstance(other, TypedContent):
            return NotImplemented
        return (self.kind, self.content) == (other.kind, other.content)

    def __hash__(self):
        return hash((self.kind, self.content))


class PlainText(TypedContent):
    """
    PlainText marks a string as untrusted text.  A bare str means the same
    thing; the wrapper exists so that code can carry the kind explicitly.
    """

    def __init__(self, content):
        TypedContent.__init__(self, content, CONTENT_KIND_PLAIN)


class SafeHTML(TypedContent):
    """
    HTML encapsulates a known safe HTML document fragment.
    It should not be used for HTML from a third-party, or HTML with
    unclosed tags or comments.  The outputs of the escapers in this package
    are fine for use with SafeHTML in the context they were escaped for.
    """

    def __init__(self, content):
        TypedContent.__init__(self, content, CONTENT_KIND_HTML)

    def __html__(self):
        return self.content
