#!/usr/bin/python

"""
Allow-list filters for values that escaping cannot make safe.

An escaper can keep a value from breaking out of the syntactic context it
is embedded in, but some contexts are dangerous even when the value stays
put: style="color: HERE" can run expression(...) in old browsers, and
href="HERE" will happily run a javascript: URL.  For those sinks the value
has to match a narrow grammar, and the filters below either pass it through
unchanged or substitute something inert:
  filter_css_color     - a CSS color keyword or #rgb / #rrggbb.
  filter_number        - a decimal or 0x hexadecimal numeral.
  filter_url           - a relative URL or an http, https, ftp, or mailto URL.
  filter_flexible_url  - like filter_url but also tel:, gopher:, and bare
                         file names.

Filters never raise.  None maps to None and other non-string values are
coerced with str().  A filtered value still has to be escaped for the
context it is embedded in.
"""

import logging
import re

import css


logger = logging.getLogger(__name__)


# Returned by filter_css_color for invalid colors unless the caller picks
# another default.
DEFAULT_CSS_COLOR = "invalid"

# Returned by filter_number for invalid numbers unless the caller picks
# another default.
DEFAULT_NUMBER = "0"

# Prefixed to rejected URLs so that any scheme becomes part of a relative
# path: "./javascript:alert(1)" resolves against the current page.
URL_QUARANTINE_PREFIX = "./"

# Lower case schemes accepted by filter_url.
STRICT_URL_SCHEMES = frozenset(["http", "https", "ftp", "mailto"])

# Lower case schemes accepted by filter_flexible_url.
FLEXIBLE_URL_SCHEMES = STRICT_URL_SCHEMES | frozenset(["tel", "gopher"])


def filter_css_color(value, default=DEFAULT_CSS_COLOR):
    """
    Vets a value for use as a CSS color:
        <div style="color: HERE">

    value - The value to filter.  May not be a string, but the value
        will be coerced to a string.
    default - Returned in place of a value that is not a color.

    Returns value if it is a CSS3 color keyword (in any case) or a '#'
    followed by three or six hex digits, default otherwise.
    """
    if value is None:
        return None
    if type(value) is not str:
        value = str(value)
    if _HEX_COLOR.match(value) or css.is_color_name(value):
        return value
    logger.debug("not a CSS color %r, using %r", value, default)
    return default


def filter_number(value, default=DEFAULT_NUMBER):
    """
    Vets a value for use as a numeric literal in HTML, CSS, or JS:
        <input maxlength="HERE">  <script>var n = HERE;</script>

    This checks syntax only.  The value is never converted, so a leading
    zero as in '0777' is passed through as written, not read as octal.

    value - The value to filter.  May not be a string, but the value
        will be coerced to a string.
    default - Returned in place of a value that is not a number.

    Returns value if it is an optionally signed decimal numeral like '-.04'
    or '65.', or an optionally signed 0x hexadecimal numeral, default
    otherwise.
    """
    if value is None:
        return None
    if type(value) is not str:
        value = str(value)
    if _NUMBER.match(value):
        return value
    logger.debug("not a number %r, using %r", value, default)
    return default


def filter_url(value):
    """
    Vets a URL's scheme for use in an href or src attribute:
        <a href="HERE">

    Relative URLs are allowed, so are absolute URLs whose scheme is http,
    https, ftp, or mailto in any case.  A scheme that is hidden behind control
    characters or HTML entities, as in 'java&#09;script:' or 'javascript\\n:',
    never matches, whatever a browser might decode it to.

    value - The value to filter.  May not be a string, but the value
        will be coerced to a string.

    Returns value if it is allowed, otherwise value prefixed with './' so that
    it is treated as a relative path.
    """
    return _filter_url_helper(value, STRICT_URL_SCHEMES, False)


def filter_flexible_url(value):
    """
    Like filter_url but also allows the tel and gopher schemes, and bare
    file names like 'test.html'.

    value - The value to filter.  May not be a string, but the value
        will be coerced to a string.

    Returns value if it is allowed, otherwise value prefixed with './'.
    """
    return _filter_url_helper(value, FLEXIBLE_URL_SCHEMES, True)


# Values returned by _url_scheme for URLs that have no scheme.
_RELATIVE_PATH = 0
_BARE_NAME = 1
# Returned by _url_scheme for a scheme that must never be allowed.
_SUSPICIOUS = 2


def _url_scheme(value):
    """
    Classifies a URL by what comes before the first '/', '?' or '#' that is not
    part of a numeric entity.

    Returns the lower case scheme if value has one, _RELATIVE_PATH if value is
    empty, a path, a query, a fragment, a protocol-relative or UNC URL,
    or a relative path with a directory part, _BARE_NAME if value is a single
    path segment like 'test.html', and _SUSPICIOUS if the part where a scheme
    would be contains characters that a browser strips or decodes.
    """
    if value.startswith("\\\\"):
        return _RELATIVE_PATH
    head = _URL_HEAD.match(value).group(0)
    if not head:
        return _RELATIVE_PATH
    if _OBFUSCATED_SCHEME.search(head):
        return _SUSPICIOUS
    colon = head.find(":")
    if colon >= 0:
        return head[:colon].lower()
    if len(head) < len(value):
        return _RELATIVE_PATH
    return _BARE_NAME


def _filter_url_helper(value, schemes, allow_bare_name):
    """ 'javascript:alert(1)' -> './javascript:alert(1)' """
    if value is None:
        return None
    if type(value) is not str:
        value = str(value)
    scheme = _url_scheme(value)
    if scheme == _RELATIVE_PATH:
        return value
    if scheme == _BARE_NAME:
        if allow_bare_name:
            return value
    elif scheme in schemes:
        return value
    logger.debug("quarantining URL %r", value)
    return URL_QUARANTINE_PREFIX + value


_HEX_COLOR = re.compile(r'\A#(?:[0-9A-Fa-f]{3}){1,2}\Z')

_NUMBER = re.compile(
    r'\A[+-]?(?:0[xX][0-9A-Fa-f]+|(?=\.?[0-9])[0-9]*\.?[0-9]*)\Z')

# The part of a URL that could hold a scheme: everything before the first
# '/', '?' or '#', except that the '#' of a numeric entity like '&#58' does
# not end it.
_URL_HEAD = re.compile(r'(?:&#|[^/?#])*')

# Control characters, which browsers strip from schemes, backslashes, which
# some browsers treat like '/', numeric entities like '&#58' and named entities
# like '&colon;' which decode to ':' inside an attribute value.  An '&' that
# starts neither, as in 'Tom&Jerry.html', is left alone.
_OBFUSCATED_SCHEME = re.compile(r'[\x00-\x1f\x7f\\]|&(?:#|[0-9A-Za-z]+;)')
