#!/usr/bin/env python -O

"""Testcases for module markup"""

import content
import markup
import unittest


class MarkupTest(unittest.TestCase):
    """Testcases for module markup"""

    def test_typed_content(self):
        """Each wrapper escapes both kinds of input and wraps the result"""
        data = (
            '<b> "foo%" O\'Reilly &bar;',
            content.PlainText('<b> "foo%" O\'Reilly &bar;'),
            content.SafeHTML('<b> "foo%" O\'Reilly &bar;'),
            )

        tests = (
            (
                markup.html,
                content.SafeHTML(
                    '&lt;b&gt;&#x20;&quot;foo%&quot;&#x20;O&#39;Reilly'
                    '&#x20;&amp;bar;'),
                ),
            (
                markup.html_text,
                content.SafeHTML(
                    '&lt;b&gt; &quot;foo%&quot; O&#39;Reilly &amp;bar;'),
                ),
            (
                markup.uri,
                '%3Cb%3E%20%22foo%25%22%20O%27Reilly%20%26bar%3B',
                ),
            (
                markup.uri_param,
                '%3Cb%3E%20%22foo%25%22%20O%27Reilly%20%26bar%3B',
                ),
            (
                markup.js_string,
                content.SafeHTML(
                    r'\u003Cb\u003E \u0022foo\u0025\u0022'
                    r' O\u0027Reilly \u0026bar;'),
                ),
            (
                markup.js_regex,
                content.SafeHTML('<b> "foo%" O\'Reilly &bar;'),
                ),
            (
                markup.css_string,
                content.SafeHTML(
                    r'\3C b\3E  \22 foo%\22  O\27 Reilly \26 bar;'),
                ),
            (
                markup.as_number,
                content.SafeHTML('0'),
                ),
            (
                markup.as_css_color,
                content.SafeHTML('invalid'),
                ),
            (
                markup.as_url,
                './<b> "foo%" O\'Reilly &bar;',
                ),
            (
                markup.as_flexible_url,
                './<b> "foo%" O\'Reilly &bar;',
                ),
            )

        for wrapper, want in tests:
            for value in data:
                got = wrapper(value)
                self.assertEqual(
                    want, got,
                    '%s(%r)\n\t%r\n!=\n\t%r' % (
                        wrapper.__name__, value, want, got))
                self.assertIs(type(want), type(got), wrapper.__name__)

    def test_defaults(self):
        """The filter wrappers pass defaults through"""
        self.assertEqual(
            content.SafeHTML('blue'), markup.as_css_color('nope', 'blue'))
        self.assertEqual(
            content.SafeHTML('#fff'), markup.as_css_color('#fff', 'blue'))
        self.assertEqual(content.SafeHTML('1'), markup.as_number('x', '1'))
        self.assertEqual(
            content.SafeHTML('-.04'),
            markup.as_number(content.SafeHTML('-.04'), '1'))

    def test_non_string_defaults(self):
        """Defaults that are not strings are coerced to strings"""
        self.assertEqual(content.SafeHTML('0'), markup.as_number('abc', 0))
        self.assertEqual(content.SafeHTML('-1.5'), markup.as_number('', -1.5))
        self.assertEqual(content.SafeHTML('42'), markup.as_number('42', 0))
        self.assertEqual(
            content.SafeHTML('0'), markup.as_css_color('nope', 0))

    def test_urls(self):
        """URL wrappers return plain strings"""
        self.assertEqual(
            'https://example.com', markup.as_url('https://example.com'))
        self.assertEqual(
            'tel:5551234',
            markup.as_flexible_url(content.PlainText('tel:5551234')))
        self.assertEqual('./tel:5551234', markup.as_url('tel:5551234'))

    def test_unsupported(self):
        """None and values of other types map to None"""
        wrappers = (
            markup.html, markup.html_text, markup.uri, markup.uri_param,
            markup.js_string, markup.js_regex, markup.css_string,
            markup.as_number, markup.as_css_color, markup.as_url,
            markup.as_flexible_url)
        for wrapper in wrappers:
            for value in (None, 42, b'<b>', ['<b>']):
                self.assertIsNone(wrapper(value), wrapper.__name__)

    def test_unsupported_is_logged(self):
        """Dropping a value of an unsupported type is logged"""
        with self.assertLogs('markup', level='DEBUG') as logs:
            markup.html(42)
        self.assertIn('int', logs.output[0])

    def test_safe_html_is_escaped(self):
        """Safe HTML input is escaped like plain text"""
        once = markup.html('<')
        self.assertEqual(content.SafeHTML('&lt;'), once)
        self.assertEqual(content.SafeHTML('&amp;lt;'), markup.html(once))


if __name__ == '__main__':
    unittest.main()
