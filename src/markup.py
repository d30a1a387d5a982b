#!/usr/bin/python

"""
Template-facing wrappers around the escapers and filters.

Each function accepts either plain text (a str or content.PlainText) or
known safe HTML (content.SafeHTML), escapes or filters the text, and wraps
the result so that a template engine does not escape it again.

Results that can go into the page as-is come back as content.SafeHTML.
URIs come back as a plain str: a URI still has to be HTML escaped by the
renderer before it goes into an attribute, so the template engine's own
autoescaping, or escaping.escape_html, should see it.

Anything other than a str or a content.TypedContent, including None, maps
to None.
"""

import logging

import content
import escaping
import filtering


logger = logging.getLogger(__name__)


def html(value):
    """Wraps escaping.escape_html."""
    return _as_safe_html(escaping.escape_html(_unwrap(value)))


def html_text(value):
    """Wraps escaping.escape_html_text."""
    return _as_safe_html(escaping.escape_html_text(_unwrap(value)))


def uri(value):
    """Wraps escaping.escape_uri.  Returns a str that still needs escaping."""
    return escaping.escape_uri(_unwrap(value))


def uri_param(value):
    """Wraps escaping.escape_uri_param.  Returns a str."""
    return escaping.escape_uri_param(_unwrap(value))


def js_string(value):
    """Wraps escaping.escape_js_string."""
    return _as_safe_html(escaping.escape_js_string(_unwrap(value)))


def js_regex(value):
    """Wraps escaping.escape_js_regex."""
    return _as_safe_html(escaping.escape_js_regex(_unwrap(value)))


def css_string(value):
    """Wraps escaping.escape_css_string."""
    return _as_safe_html(escaping.escape_css_string(_unwrap(value)))


def as_number(value, default=filtering.DEFAULT_NUMBER):
    """Wraps filtering.filter_number."""
    return _as_safe_html(filtering.filter_number(_unwrap(value), default))


def as_css_color(value, default=filtering.DEFAULT_CSS_COLOR):
    """Wraps filtering.filter_css_color."""
    return _as_safe_html(filtering.filter_css_color(_unwrap(value), default))


def as_url(value):
    """Wraps filtering.filter_url.  Returns a str that still needs escaping."""
    return filtering.filter_url(_unwrap(value))


def as_flexible_url(value):
    """Wraps filtering.filter_flexible_url.  Returns a str."""
    return filtering.filter_flexible_url(_unwrap(value))


def _unwrap(value):
    """
    Returns the text of value whichever kind it is, or None if value is
    neither text nor typed content.

    Safe HTML is unwrapped and then escaped like any other text.  The
    escapers work on characters, not markup, so '<b>' in safe HTML ends up
    as '&lt;b&gt;' just as it would in plain text; what the wrapper buys is
    that the result is not escaped a second time by the template engine.
    """
    if isinstance(value, content.TypedContent):
        return value.content
    if isinstance(value, str):
        return str(value)
    if value is not None:
        logger.debug("cannot escape value of type %s", type(value).__name__)
    return None


def _as_safe_html(text):
    """ 'x' -> SafeHTML('x'), 0 -> SafeHTML('0'), None -> None """
    if text is None:
        return None
    if type(text) is not str:
        text = str(text)
    return content.SafeHTML(text)
