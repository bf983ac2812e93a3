import unittest

from PyStrings.Catalog import Catalog
from PyStrings.Parsers.PhpParser import PhpParser, TokenizePhp, DecodeDoubleQuoted, DecodeSingleQuoted
from PyStrings.Helpers.Tokens import STRING, INTERPOLATED, NAME
from PyStrings.Helpers.Tests import log_test_name, log_input_expected_result

filepath = '/project/CRM/Page/Test.php'

php_source = """<?php
// TRANSLATORS: greeting on the home page
$greeting = ts('Hello');
echo ts("Contact %1", array(1 => $name));
$label = ts('Open', array('context' => 'menu'));
$count = ts('%1 item', ['plural' => '%1 items', 'count' => $n]);
$dynamic = ts($message);
$welcome = ts('Welcome to ' . 'CiviCRM');
$escaped = ts('It\\'s here');
$interpolated = ts("Hello $name");
$context = ts('Close', array('context' => $ctx));
"""

class TestPhpParser(unittest.TestCase):
    def _parse(self, content : str, parser : PhpParser|None = None) -> Catalog:
        catalog = Catalog('/project')
        (parser or PhpParser()).parse(filepath, content, catalog)
        return catalog

    def test_ExtractStrings(self):
        log_test_name("PHP extraction")
        catalog = self._parse(php_source)

        expected = ["Hello", "Contact %1", "Open", "%1 item", "Welcome to CiviCRM", "It's here"]
        result = [ entry.msgid for entry in catalog ]
        log_input_expected_result("msgids", expected, result)
        self.assertEqual(result, expected)

    def test_LineNumbers(self):
        log_test_name("PHP line numbers")
        catalog = self._parse(php_source)

        cases = [ ("Hello", None, 3), ("Contact %1", None, 4), ("Open", "menu", 5), ("%1 item", None, 6), ("Welcome to CiviCRM", None, 8) ]
        for msgid, msgctxt, line in cases:
            with self.subTest(msgid=msgid):
                entry = catalog.GetEntry(msgid, msgctxt)
                self.assertIsNotNone(entry)
                log_input_expected_result(msgid, line, entry.references[0][1])
                self.assertEqual(entry.references, [('CRM/Page/Test.php', line)])

    def test_Options(self):
        log_test_name("PHP options")
        catalog = self._parse(php_source)

        self.assertEqual(catalog.GetEntry("Open", "menu").msgctxt, "menu")
        self.assertIsNone(catalog.GetEntry("Open"))
        self.assertEqual(catalog.GetEntry("%1 item").msgid_plural, "%1 items")
        self.assertIsNone(catalog.GetEntry("Contact %1").msgid_plural)

        catalog = self._parse("<?php ts('Aliased', ['msgctxt' => 'alias']);")
        self.assertIsNotNone(catalog.GetEntry("Aliased", "alias"))

    def test_NonLiteralSkipped(self):
        log_test_name("PHP non-literal arguments")
        catalog = self._parse(php_source)

        self.assertIsNone(catalog.GetEntry("Hello $name"))
        self.assertIsNone(catalog.GetEntry("Close"))
        self.assertEqual(len(catalog), 6)

    def test_TranslatorComments(self):
        log_test_name("PHP translator comments")
        catalog = self._parse(php_source)

        self.assertEqual(catalog.GetEntry("Hello").comments, ["TRANSLATORS: greeting on the home page"])
        self.assertEqual(catalog.GetEntry("Contact %1").comments, [])

    def test_CommentsInList(self):
        log_test_name("PHP comments on list items")
        content = "\n".join([
            "<?php",
            "$items = array(",
            "  // TRANSLATORS: first item",
            "  ts('One'),",
            "  ts('Two'),",
            "  /* Not for translators */",
            "  ts('Three'),",
            "  /**",
            "   * TRANSLATORS: a docblock",
            "   * over two lines",
            "   */",
            "  E::ts('Four'),",
            ");",
        ])
        catalog = self._parse(content)

        cases = [
            ("One", ["TRANSLATORS: first item"]),
            ("Two", []),
            ("Three", []),
            ("Four", ["TRANSLATORS: a docblock", "over two lines"]),
        ]
        for msgid, expected in cases:
            with self.subTest(msgid=msgid):
                result = catalog.GetEntry(msgid).comments
                log_input_expected_result(msgid, expected, result)
                self.assertEqual(result, expected)

    def test_CustomCommentTag(self):
        log_test_name("PHP custom comment tag")
        content = "<?php\n// NOTE: custom\nts('Tagged');\n// TRANSLATORS: default\nts('Untagged');\n"
        catalog = self._parse(content, PhpParser(comment_tag="NOTE:"))

        self.assertEqual(catalog.GetEntry("Tagged").comments, ["NOTE: custom"])
        self.assertEqual(catalog.GetEntry("Untagged").comments, [])

    call_cases = [
        ("<?php E::ts('Extension');", ["Extension"]),
        ("<?php \\ts('Global');", ["Global"]),
        ("<?php CRM_Core_Lib::ts('Static');", ["Static"]),
        ("<?php $obj->ts('Method');", []),
        ("<?php $obj?->ts('Nullsafe');", []),
        ("<?php function ts($text, $params = array()) { return $text; }", []),
        ("<?php $x = new ts('Class');", []),
        ("<?php tsLocale('Other');", []),
        ("<?php ts();", []),
        ("<?php ts('');", []),
        ("<?php ts('Unbalanced', array('context' => 'x');", []),
        ("<?php ts ( 'Spaced' );", ["Spaced"]),
        ("<?php TS('Upper');", []),
    ]

    def test_CallForms(self):
        log_test_name("PHP call forms")
        for content, expected in self.call_cases:
            with self.subTest(content=content):
                catalog = self._parse(content)
                result = [ entry.msgid for entry in catalog ]
                log_input_expected_result(content, expected, result)
                self.assertEqual(result, expected)

    def test_InlineHtmlIgnored(self):
        log_test_name("PHP inline HTML")
        content = "\n".join([
            "<p>ts('Not code')</p>",
            "<?php echo ts('Code'); ?>",
            "<div>ts('Also not code')</div>",
            "<?= ts('Short tag') ?>",
        ])
        catalog = self._parse(content)

        self.assertEqual([ entry.msgid for entry in catalog ], ["Code", "Short tag"])
        self.assertEqual(catalog.GetEntry("Code").references, [('CRM/Page/Test.php', 2)])
        self.assertEqual(catalog.GetEntry("Short tag").references, [('CRM/Page/Test.php', 4)])

    def test_MalformedInputKeepsEarlierStrings(self):
        log_test_name("PHP malformed input")
        cases = [
            "<?php\n$a = ts('First');\n$b = 'unterminated;\n",
            "<?php\n$a = ts('First');\n/* unterminated comment\nts('Second');\n",
            "<?php\n$a = ts('First');\n$x = \"\\u{110000}\";\nts('Second');\n",
        ]
        for content in cases:
            with self.subTest(content=content):
                catalog = self._parse(content)
                result = [ entry.msgid for entry in catalog ]
                log_input_expected_result(content, ["First"], result)
                self.assertEqual(result, ["First"])

    def test_HeredocSkipped(self):
        log_test_name("PHP heredoc")
        content = "<?php\n$a = ts(<<<EOT\nHeredoc text\nEOT\n);\n$b = ts('After');\n"
        catalog = self._parse(content)

        self.assertEqual([ entry.msgid for entry in catalog ], ["After"])
        self.assertEqual(catalog.GetEntry("After").references[0][1], 6)

    def test_EscapedDoubleQuotes(self):
        log_test_name("PHP double-quoted escapes")
        catalog = self._parse('<?php ts("Say \\"hi\\"\\n");')

        self.assertIsNotNone(catalog.GetEntry('Say "hi"\n'))
        self.assertIn('msgid "Say \\"hi\\"\\n"', catalog.ToString())

    def test_MultilineCall(self):
        log_test_name("PHP multiline call")
        content = "<?php\n$x = ts(\n  'Part one, ' .\n  'part two',\n  array(\n    'context' => 'long'\n  )\n);\n"
        catalog = self._parse(content)

        entry = catalog.GetEntry("Part one, part two", "long")
        self.assertIsNotNone(entry)
        self.assertEqual(entry.references[0][1], 2)

class TestPhpTokenizer(unittest.TestCase):
    decode_cases = [
        ('"plain"', "plain"),
        ('"tab\\tand\\\\slash"', "tab\tand\\slash"),
        ('"\\x41\\101\\u{263A}"', "AA☺"),
        ('"cost \\$5"', "cost $5"),
        ('"$name"', None),
        ('"{$name}"', None),
        ('"${name}"', None),
        ('"unknown \\q"', "unknown \\q"),
        ('"\\u{D800}"', "\ufffd"),
    ]

    def test_DecodeDoubleQuoted(self):
        log_test_name("DecodeDoubleQuoted")
        for text, expected in self.decode_cases:
            with self.subTest(text=text):
                result = DecodeDoubleQuoted(text)
                log_input_expected_result(text, expected, result)
                self.assertEqual(result, expected)

    def test_DecodeSingleQuoted(self):
        self.assertEqual(DecodeSingleQuoted("'it\\'s \\\\ \\n'"), "it's \\ \\n")

    def test_Tokens(self):
        log_test_name("TokenizePhp")
        tokens = TokenizePhp("<?php\n$x = ts('a', \"b $c\");")

        self.assertEqual([ token.text for token in tokens ], ['$x', '=', 'ts', '(', "'a'", ',', '"b $c"', ')', ';'])
        self.assertEqual(tokens[2].type, NAME)
        self.assertEqual(tokens[4].type, STRING)
        self.assertEqual(tokens[4].value, 'a')
        self.assertEqual(tokens[6].type, INTERPOLATED)
        self.assertTrue(all(token.line == 2 for token in tokens))

if __name__ == '__main__':
    unittest.main()
