import unittest

from PyStrings.Catalog import Catalog
from PyStrings.Parsers.PhpParser import PhpParser
from PyStrings.Parsers.SmartyParser import SmartyParser, ParseAttributes, BlockText
from PyStrings.Helpers.Tests import log_test_name, log_input_expected_result

filepath = '/project/templates/CRM/Page/Test.tpl'
reference = 'templates/CRM/Page/Test.tpl'

template_source = "\n".join([
    "{* TRANSLATORS: page title *}",
    "{ts}Welcome{/ts}",
    "<p>{ts 1=$name}Hello %1{/ts}</p>",
    '{ts context="menu"}Open{/ts}',
    '{ts count=$n plural="%count items"}%count item{/ts}',
    "{ts}Hello {$name}{/ts}",
    '{ts msgid="Inline"}',
    "{literal}{ts}Literal{/ts}{/literal}",
    "{* just a comment with {ts}Commented{/ts} *}",
    "{ts context=$ctx}Dynamic context{/ts}",
    "{ts}Use {ldelim}braces{rdelim}{/ts}",
    "{php}echo ts('From PHP');{/php}",
])

class TestSmartyParser(unittest.TestCase):
    def _parse(self, content : str) -> Catalog:
        catalog = Catalog('/project')
        SmartyParser(PhpParser()).parse(filepath, content, catalog)
        return catalog

    def test_ExtractStrings(self):
        log_test_name("Smarty extraction")
        catalog = self._parse(template_source)

        expected = [
            ("Welcome", None, 2),
            ("Hello %1", None, 3),
            ("Open", "menu", 4),
            ("%count item", None, 5),
            ("Inline", None, 7),
            ("Use {braces}", None, 11),
            ("From PHP", None, 12),
        ]
        result = [ (entry.msgid, entry.msgctxt, entry.references[0][1]) for entry in catalog ]
        log_input_expected_result("entries", expected, result)
        self.assertEqual(result, expected)

    def test_Plural(self):
        catalog = self._parse(template_source)
        self.assertEqual(catalog.GetEntry("%count item").msgid_plural, "%count items")
        self.assertEqual(catalog.GetEntry("Welcome").references, [(reference, 2)])

    def test_SkippedTags(self):
        log_test_name("Smarty skipped tags")
        catalog = self._parse(template_source)

        for msgid in ["Literal", "Commented", "Dynamic context", "Hello {$name}"]:
            with self.subTest(msgid=msgid):
                self.assertFalse(any(entry.msgid == msgid for entry in catalog))

    def test_TranslatorComment(self):
        log_test_name("Smarty translator comments")
        catalog = self._parse(template_source)
        self.assertEqual(catalog.GetEntry("Welcome").comments, ["TRANSLATORS: page title"])
        self.assertEqual(catalog.GetEntry("Hello %1").comments, [])

        catalog = self._parse("{* TRANSLATORS: detached *}<b>{ts}Bold{/ts}</b>")
        self.assertEqual(catalog.GetEntry("Bold").comments, [])

    def test_MultilineBlock(self):
        catalog = self._parse("<div>\n{ts}First line\nsecond line{/ts}\n{ts}After{/ts}</div>")

        self.assertEqual(catalog.GetEntry("First line\nsecond line").references, [(reference, 2)])
        self.assertEqual(catalog.GetEntry("After").references, [(reference, 4)])

    def test_UnterminatedBlock(self):
        log_test_name("Smarty unterminated block")
        cases = [
            "{ts}First{/ts}\n{ts}Never closed\n",
            "{ts}First{/ts}\n{ts}Nested {ts}Inner{/ts}",
        ]
        for content in cases:
            with self.subTest(content=content):
                catalog = self._parse(content)
                result = [ entry.msgid for entry in catalog ]
                log_input_expected_result(content, ["First"], result)
                self.assertEqual(result, ["First"])

    attribute_cases = [
        ('context="menu"', {'context': 'menu'}),
        ("context='menu'", {'context': 'menu'}),
        ('1=$name 2=$total', {'1': None, '2': None}),
        ('plural="%count items" count=$n', {'plural': '%count items', 'count': None}),
        ('context="$var"', {'context': None}),
        ('escape="js" msgid="Say \\"hi\\""', {'escape': 'js', 'msgid': 'Say "hi"'}),
        ('domain=civicrm', {'domain': 'civicrm'}),
    ]

    def test_ParseAttributes(self):
        log_test_name("Smarty attributes")
        for text, expected in self.attribute_cases:
            with self.subTest(text=text):
                result = ParseAttributes(text)
                log_input_expected_result(text, expected, result)
                self.assertEqual(result, expected)

    block_cases = [
        ("Plain text", "Plain text"),
        ("Price: {ldelim}amount{rdelim}", "Price: {amount}"),
        ("Hello {$name}", None),
        ("Choose {if $a}one{/if}", None),
        ("Spaced { brace }", "Spaced { brace }"),
    ]

    def test_BlockText(self):
        log_test_name("Smarty block text")
        for body, expected in self.block_cases:
            with self.subTest(body=body):
                result = BlockText(body)
                log_input_expected_result(body, expected, result)
                self.assertEqual(result, expected)

if __name__ == '__main__':
    unittest.main()
