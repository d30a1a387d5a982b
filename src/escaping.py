#!/usr/bin/python

"""
Definitions of escaping functions, one per output sink.

Each escaper takes an untrusted value and returns text that can be
concatenated verbatim into one syntactic context of a server-rendered page:
  escape_html             - HTML tag bodies and attribute values, quoted or not.
  escape_html_text        - HTML tag bodies and quoted attribute values only.
  escape_uri_param        - a query string value, /page?name=HERE
  escape_uri              - same as escape_uri_param for now.
  escape_js_string        - the inside of a '...' or "..." JavaScript string.
  escape_js_regex         - the body of a /.../ JavaScript regular expression.
  escape_css_string       - the inside of a quoted CSS string or url('...').
  escape_sql_like_clause  - the operand of a parameterized SQL LIKE clause.

None of these are idempotent.  escape_html('&amp;') is '&amp;amp;', so
escape a value exactly once per context it is embedded in, innermost
context first:
  escape_html(escape_css_string(escape_uri(value)))
for a value that ends up in <span style="background:url('/x?q=HERE')">.

All escapers map None to None and coerce other non-string values with str().
"""


# The character escape_sql_like_clause prefixes to wildcards by default.
DEFAULT_SQL_LIKE_ESCAPE_CHAR = '@'


def escape_html(value):
    """
    Escapes HTML special characters in a string.  In addition to the
    characters escaped by escape_html_text, escapes backslash, slash, and
    whitespace so that the value cannot end an unquoted attribute value or
    start a new attribute name, and escapes U+2028 and U+2029 so the value
    stays inert if a browser hands the attribute to a JavaScript parser.

    value - The string-like value to be escaped.  May not be a string,
            but the value will be coerced to a string.

    Returns an escaped version of value, or None if value is None.
    """
    if value is None:
        return None
    if type(value) is not str:
        value = str(value)
    return value.translate(_ESCAPE_MAP_FOR_HTML)


def escape_html_text(value):
    """
    Escapes only the five HTML markup characters ' " < > &.

    This is enough inside the body of a tag like <div> or <p>, or inside a
    single or double quoted attribute value, but not inside an unquoted
    attribute value where a space ends the value.  Prefer escape_html when
    unsure.

    value - The string-like value to be escaped.  May not be a string,
            but the value will be coerced to a string.

    Returns an escaped version of value, or None if value is None.
    """
    if value is None:
        return None
    if type(value) is not str:
        value = str(value)
    return value.translate(_ESCAPE_MAP_FOR_HTML_TEXT)


def escape_uri_param(value):
    """
    Percent encodes reserved and unsafe characters so that the value can be
    used as a query string value: /example/?name=HERE

    This is not sufficient to make a whole URI safe in an href or src
    attribute.  For that the scheme has to be vetted, see filtering.filter_url,
    and the whole URI HTML escaped.

    value - The string-like value to be escaped.  May not be a string,
            but the value will be coerced to a string.

    Returns an escaped version of value, or None if value is None.
    """
    if value is None:
        return None
    if type(value) is not str:
        value = str(value)
    return value.translate(_ESCAPE_MAP_FOR_URI)


def escape_uri(value):
    """
    Same as escape_uri_param.

    value - The string-like value to be escaped.

    Returns an escaped version of value, or None if value is None.
    """
    # TODO: filter dangerous schemes here once whole URIs, not just query
    # values, are passed in.
    return escape_uri_param(value)


def escape_js_string(value):
    """
    Unicode escapes (\\uXXXX) characters in the value to make it valid
    content for a single or double quoted JavaScript string literal:
        <script>var s = 'HERE', t = "HERE";</script>

    Besides quotes and backslash, escapes '%' so the value survives an
    unescape(), the HTML characters & / < > so it cannot close the enclosing
    <script> element, control characters, and the JavaScript line
    terminators U+2028 and U+2029.

    value - The string-like value to be escaped.  May not be a string,
            but the value will be coerced to a string.

    Returns an escaped version of value, or None if value is None.
    """
    if value is None:
        return None
    if type(value) is not str:
        value = str(value)
    return value.translate(_ESCAPE_MAP_FOR_JS_STRING)


def escape_js_regex(value):
    """
    Backslash escapes RegExp specials and control characters in the value to
    make it valid content for a JavaScript regular expression literal:
        <script>var re = /^HERE$/;</script>

    Quotes are not escaped.  When the regular expression is itself built from
    a string, use escape_js_string(escape_js_regex(value)).

    value - The string-like value to be escaped.  May not be a string,
            but the value will be coerced to a string.

    Returns an escaped version of value, or None if value is None.
    """
    if value is None:
        return None
    if type(value) is not str:
        value = str(value)
    return value.translate(_ESCAPE_MAP_FOR_JS_REGEX)


def escape_css_string(value):
    """
    Escapes a string so it can safely be included inside a quoted CSS string
    or a quoted url(...):
        <style>li[id *= 'HERE'] { background: url('HERE') }</style>

    value - The string-like value to be escaped.  May not be a string,
            but the value will be coerced to a string.

    Returns an escaped version of value, or None if value is None.
    """
    if value is None:
        return None
    if type(value) is not str:
        value = str(value)
    return value.translate(_ESCAPE_MAP_FOR_CSS_STRING)


def escape_sql_like_clause(value, escape_char=DEFAULT_SQL_LIKE_ESCAPE_CHAR):
    """
    Escapes the LIKE wildcards '_' and '%' and the escape character itself
    by prefixing each with escape_char.

    The result is only safe as the bound value of a parameterized LIKE
    clause that names the same escape character:
        SELECT * FROM users WHERE name LIKE ? ESCAPE '@'
    It does nothing against SQL injection in a concatenated query.

    value - The string-like value to be escaped.  May not be a string,
            but the value will be coerced to a string.
    escape_char - A single character.  None or the empty string means
            DEFAULT_SQL_LIKE_ESCAPE_CHAR.

    Returns an escaped version of value, or None if value is None.
    """
    if not escape_char:
        escape_char = DEFAULT_SQL_LIKE_ESCAPE_CHAR
    elif type(escape_char) is not str or len(escape_char) != 1:
        raise ValueError(escape_char)
    if value is None:
        return None
    if type(value) is not str:
        value = str(value)
    if escape_char == DEFAULT_SQL_LIKE_ESCAPE_CHAR:
        return value.translate(_ESCAPE_MAP_FOR_SQL_LIKE)
    return value.translate(_sql_like_escape_map(escape_char))


def _sql_like_escape_map(escape_char):
    """ '%' -> escape_char + '%' for each wildcard and escape_char. """
    return dict(
        (ord(char), escape_char + char) for char in ('_', '%', escape_char))


def _translation_table(escape_map):
    """
    Converts a map from characters to replacements into a table that
    str.translate can use.  Characters outside the table are left alone.
    """
    return dict((ord(char), encoded) for char, encoded in escape_map.items())


# C0 control characters and DEL.
_CONTROL_CHARS = [chr(code) for code in range(0x20)] + ['\x7f']


_ESCAPE_MAP_FOR_HTML_TEXT = _translation_table({
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#39;",
    })

_ESCAPE_MAP_FOR_HTML = dict(_ESCAPE_MAP_FOR_HTML_TEXT)
_ESCAPE_MAP_FOR_HTML.update(_translation_table(dict(
    (char, "&#x%02X;" % ord(char))
    for char in "\t\n\x0c\r /\\\u2028\u2029")))


_ESCAPE_MAP_FOR_URI = _translation_table(dict(
    (char, "%%%02X" % ord(char))
    for char in _CONTROL_CHARS + list(" !\"#$%&'()*+,./:;<=>?@[]")))


_ESCAPE_MAP_FOR_JS_STRING = _translation_table(dict(
    (char, "\\u%04X" % ord(char))
    for char in _CONTROL_CHARS + list("'\"\\%&/<>\u2028\u2029")))


_ESCAPE_MAP_FOR_JS_REGEX = _translation_table(dict(
    [(char, "\\x%02X" % ord(char)) for char in _CONTROL_CHARS]
    + [(char, "\\u%04X" % ord(char)) for char in "\u2028\u2029"]
    + [(char, "\\" + char) for char in "\\/([{])}*+-.?!^$|"]))
# Named escapes where JS has them.  We do not escape "\x08" to "\\b" since
# that means word-break in RegExps.
_ESCAPE_MAP_FOR_JS_REGEX.update(_translation_table({
    "\t": "\\t",
    "\n": "\\n",
    "\x0b": "\\v",
    "\x0c": "\\f",
    "\r": "\\r",
    }))


# The space after each hex escape terminates it, so that a following hex
# digit is not read as part of the escape: '\3c a' is '<a', not '\3ca'.
_ESCAPE_MAP_FOR_CSS_STRING = _translation_table(dict(
    [(char, "\\%02X " % ord(char))
     for char in _CONTROL_CHARS + list("'\"\\&/<>")]
    + [(char, "\\%06X " % ord(char)) for char in "\u2028\u2029"]))


_ESCAPE_MAP_FOR_SQL_LIKE = _sql_like_escape_map(DEFAULT_SQL_LIKE_ESCAPE_CHAR)
