"""End-to-end conversion tests."""

import io
import unittest
from contextlib import redirect_stderr

from typepants import (
    Config,
    Converter,
    DashBehavior,
    EllipsisBehavior,
    EntityStyle,
    QuoteBehavior,
    convert,
)

NO_QUOTES = Config(quote_chars=QuoteBehavior.DO_NOTHING)


class TestDashes(unittest.TestCase):
    def test_double_dash_to_en_dash(self):
        result = convert("Nothing endures but change. -- Heraclitus")
        assert result == "Nothing endures but change. &#8211; Heraclitus"

    def test_multiple_dashes(self):
        result = convert("Life itself is the proper binge. --- Julia Child (1912--2004)")
        assert result == "Life itself is the proper binge. &#8212; Julia Child (1912&#8211;2004)"

    def test_dashes_disabled(self):
        config = Config(double_dash=DashBehavior.DO_NOTHING, triple_dash=DashBehavior.DO_NOTHING)
        text = "Life itself is the proper binge. --- Julia Child (1912--2004)"
        assert convert(text, config) == text

    def test_triple_dash_before_double_dash(self):
        assert convert("a---b") == "a&#8212;b"

    def test_dashes_and_quotes(self):
        assert convert('"foo" -- bar') == "&#8220;foo&#8221; &#8211; bar"

    def test_dashes_and_quotes_with_quotes_disabled(self):
        assert convert('"foo" -- bar', NO_QUOTES) == '"foo" &#8211; bar'


class TestEllipses(unittest.TestCase):
    def test_ellipses(self):
        assert convert("Huh...?") == "Huh&#8230;?"
        assert convert("Huh. . .?") == "Huh&#8230;?"

    def test_ellipses_disabled(self):
        config = Config(ellipses=EllipsisBehavior.DO_NOTHING)
        assert convert("Huh...?", config) == "Huh...?"
        assert convert("Huh. . .?", config) == "Huh. . .?"


class TestQuotes(unittest.TestCase):
    def test_mixed_quotes(self):
        assert convert('"Isn\'t this fun?"') == "&#8220;Isn&#8217;t this fun?&#8221;"

    def test_mixed_quotes_with_quotes_disabled(self):
        assert convert('"Isn\'t this fun?"', NO_QUOTES) == '"Isn\'t this fun?"'

    def test_double_sets_of_quotes(self):
        result = convert('<p>He said, "\'Quoted\' words in a larger quote."</p>')
        assert result == "<p>He said, &#8220;&#8216;Quoted&#8217; words in a larger quote.&#8221;</p>"

    def test_decade_abbreviations(self):
        assert convert("It's the '80s") == "It&#8217;s the &#8217;80s"

    def test_possessive_after_markup(self):
        result = convert("<i>Custer</i>'s Last Stand.")
        assert result == "<i>Custer</i>&#8217;s Last Stand."

    def test_lone_quote_between_tags_after_space(self):
        assert convert('He said <em>"</em>hi') == "He said <em>&#8220;</em>hi"

    def test_lone_quote_between_tags_after_word(self):
        assert convert('Yes<em>"</em>') == "Yes<em>&#8221;</em>"

    def test_lone_quote_at_start_of_input(self):
        assert convert("<b>'</b>") == "<b>&#8217;</b>"

    def test_context_is_the_original_last_character(self):
        # The previous run ends in "--" before dash conversion, so the quote
        # follows a non-space character and closes.
        assert convert("wait --<b>'</b>") == "wait &#8211;<b>&#8217;</b>"

    def test_escaped_quotes_stay_straight_entities(self):
        result = convert('"smarty" \\"pants\\"')
        assert result == "&#8220;smarty&#8221; &#34;pants&#34;"

    def test_quot_entities_converted_on_request(self):
        text = (
            "<p>He said &quot;Let's write some code.&quot; This code here "
            "<code>if True:\n\tprint &quot;Okay&quot;</code> is python code.</p>"
        )
        expected = (
            "<p>He said &#8220;Let&#8217;s write some code.&#8221; This code here "
            "<code>if True:\n\tprint &quot;Okay&quot;</code> is python code.</p>"
        )
        assert convert(text, Config(convert_quot=True)) == expected

    def test_quot_entities_left_alone_by_default(self):
        assert convert("&quot;hi&quot;") == "&quot;hi&quot;"


class TestBackticks(unittest.TestCase):
    def test_backticks(self):
        assert convert("``Isn't this fun?''", NO_QUOTES) == "&#8220;Isn't this fun?&#8221;"

    def test_backticks_disabled(self):
        config = NO_QUOTES.replace(double_backticks=QuoteBehavior.DO_NOTHING)
        assert convert("``Isn't this fun?''", config) == "``Isn't this fun?''"

    def test_single_backticks(self):
        config = NO_QUOTES.replace(single_backticks=QuoteBehavior.CONVERT_TO_CURLY)
        assert convert("`Isn't this fun?'", config) == "&#8216;Isn&#8217;t this fun?&#8217;"

    def test_double_backticks_run_before_single(self):
        config = NO_QUOTES.replace(single_backticks=QuoteBehavior.CONVERT_TO_CURLY)
        assert convert("``Hi,'' she said", config) == "&#8220;Hi,&#8221; she said"


class TestSkipTags(unittest.TestCase):
    def test_pre_is_untouched(self):
        assert convert("<pre>This isn't text</pre>") == "<pre>This isn't text</pre>"

    def test_text_around_code_is_converted(self):
        result = convert('<p>He said "hi" <code>x = "y" -- z...</code> ok</p>')
        assert result == '<p>He said &#8220;hi&#8221; <code>x = "y" -- z...</code> ok</p>'

    def test_skip_regions_are_untouched_under_any_config(self):
        text = "<script>var s = 'It\\'s -- ...'; // ``x''</script>"
        configs = [
            Config(),
            Config.from_attr("qBDew"),
            Config(entities=EntityStyle.UNICODE),
            Config.from_attr("-1"),
        ]
        for config in configs:
            assert convert(text, config) == text

    def test_nested_skip_tags(self):
        text = "<pre><code>'a'</code>'b'</pre>'c'"
        assert convert(text) == "<pre><code>'a'</code>'b'</pre>&#8216;c&#8217;"

    def test_mismatched_closing_tag_is_ignored(self):
        assert convert("<pre>'a'</code>'b'</pre>'c'") == "<pre>'a'</code>'b'</pre>&#8216;c&#8217;"

    def test_uppercase_skip_tag(self):
        assert convert("<PRE>don't</PRE> don't") == "<PRE>don't</PRE> don&#8217;t"


class TestComments(unittest.TestCase):
    def test_comment_is_untouched(self):
        assert convert("<!-- a b -->") == "<!-- a b -->"
        assert convert("<!-- don't \"touch\" this... -->") == "<!-- don't \"touch\" this... -->"

    def test_comment_with_dashes_is_converted(self):
        assert convert("<!-- a -- b -->") == "<!&#8211; a &#8211; b &#8211;>"


class TestEntityStyles(unittest.TestCase):
    def test_unicode(self):
        config = Config(entities=EntityStyle.UNICODE)
        assert convert('"Isn\'t this fun?" -- yes...', config) == "“Isn’t this fun?” – yes…"

    def test_named(self):
        config = Config(entities=EntityStyle.NAMED)
        assert convert('"Isn\'t this fun?"', config) == "&ldquo;Isn&rsquo;t this fun?&rdquo;"

    def test_ascii(self):
        config = Config(entities=EntityStyle.ASCII)
        assert convert("a -- b --- c", config) == "a - b -- c"

    def test_stupefy_existing_entities(self):
        result = convert("&#8220;Hello &#8212; world.&#8221;", Config.from_attr("-1"))
        assert result == '"Hello -- world."'

    def test_tags_are_never_rendered(self):
        config = Config(entities=EntityStyle.UNICODE)
        assert convert('<a title="&#8220;x&#8221;">y</a>', config) == '<a title="&#8220;x&#8221;">y</a>'


class TestPresets(unittest.TestCase):
    def test_preset_one_uses_em_dashes(self):
        assert convert("Wait -- what?", Config.from_attr("1")) == "Wait &#8212; what?"

    def test_preset_zero_only_processes_escapes(self):
        assert convert('"a" -- b... \\"c\\"', Config.from_attr("0")) == '"a" -- b... &#34;c&#34;'


class TestPipeline(unittest.TestCase):
    def test_empty_input(self):
        assert convert("") == ""
        assert convert(None) == ""

    def test_markup_is_preserved(self):
        text = '<p class="x">a</p><br/><img alt="it\'s">'
        assert convert(text) == text

    def test_nothing_config_is_identity_without_escapes(self):
        samples = [
            'He said, "Isn\'t this -- fun...?"',
            "<p>``quoted''</p>",
            "<!-- a -- b -->",
            "a < b",
        ]
        for sample in samples:
            assert convert(sample, Config.nothing()) == sample

    def test_converter_instance(self):
        converter = Converter(Config(entities="unicode"))
        assert converter.run("It's") == "It’s"
        assert converter.output == ["It’s"]
        assert converter.prev_last_char == "s"

    def test_converter_reuse_starts_fresh(self):
        converter = Converter(Config())
        assert converter.run("<pre>x") == "<pre>x"
        assert converter.run("'a'") == "&#8216;a&#8217;"
        assert converter.output == ["&#8216;a&#8217;"]
        assert not converter.skip_tags.active

    def test_converter_reuse_forgets_quote_context(self):
        converter = Converter(Config())
        converter.run("word")
        # With no previous text a lone quote closes.
        assert converter.run("<b>'</b>") == "<b>&#8217;</b>"
        converter.run("word ")
        assert converter.run("<b>'</b>") == "<b>&#8217;</b>"

    def test_debug_trace(self):
        stderr = io.StringIO()
        with redirect_stderr(stderr):
            result = convert("<pre>x</pre>'y'", debug=True)
        assert result == "<pre>x</pre>&#8216;y&#8217;"
        trace = stderr.getvalue()
        assert "typepants: skip stack now ['pre']" in trace
        assert "skipping text 'x'" in trace
        assert "typepants: skip stack now []" in trace
        assert "text \"'y'\" -> '&#8216;y&#8217;'" in trace

    def test_trace_has_one_line_per_token(self):
        stderr = io.StringIO()
        with redirect_stderr(stderr):
            convert("<p>a</p>", debug=True)
        assert stderr.getvalue().splitlines() == [
            "typepants: tag '<p>'",
            "typepants: text 'a' -> 'a'",
            "typepants: tag '</p>'",
        ]

    def test_no_trace_by_default(self):
        stderr = io.StringIO()
        with redirect_stderr(stderr):
            convert("'y'")
        assert stderr.getvalue() == ""
