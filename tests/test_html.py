from core.web_minifier.adapters.html import HTMLAdapter
from core.web_minifier.delegates import AdvancedHTMLConfig
from core.web_minifier.models import FormatOptions, MinificationOptions
from core.web_minifier.rules.html import rewrite_html

OPTIONS = MinificationOptions()
KEEP_COMMENTS = MinificationOptions(format=FormatOptions(comments=True))


class RecordingMinifier:
    def __init__(self, output=None, error=None):
        self.output = output
        self.error = error
        self.calls = []

    def minify(self, html, config):
        self.calls.append((html, config))
        if self.error is not None:
            raise self.error
        return self.output


def test_structure_is_collapsed() -> None:
    source = '<div>\n  <p class = "a" >Hi</p>\n</div>'
    assert rewrite_html(source, OPTIONS) == '<div><p class="a">Hi</p></div>'


def test_comments_respect_options() -> None:
    source = "<!-- note --><p>x</p>"
    assert rewrite_html(source, OPTIONS) == "<p>x</p>"
    assert rewrite_html(source, KEEP_COMMENTS) == "<!-- note --><p>x</p>"


def test_style_blocks_and_inline_styles_are_rewritten() -> None:
    source = (
        '<style type="text/css">\n .a { color: rgb(255, 0, 0); }\n</style>'
        '<p style="color: rgb(0, 0, 255)">x</p>'
    )
    assert rewrite_html(source, OPTIONS) == '<style>.a{color:#f00}</style><p style="color: #00f">x</p>'


def test_script_bodies_are_kept_verbatim() -> None:
    source = "<script>\n// hi\nvar a = 1;\n</script>\n<p>x</p>"
    assert rewrite_html(source, OPTIONS) == "<script>\n// hi\nvar a = 1;\n</script><p>x</p>"


def test_pre_bodies_are_kept_verbatim() -> None:
    source = "<pre>  a\n    b</pre>  <p>x</p>"
    assert rewrite_html(source, OPTIONS) == "<pre>  a\n    b</pre><p>x</p>"


def test_whitespace_only_pairs_collapse() -> None:
    assert rewrite_html('<span class="x">   </span>', OPTIONS) == '<span class="x"></span>'


def test_advanced_used_when_smaller() -> None:
    advanced = RecordingMinifier(output="<p>x")
    response = HTMLAdapter(advanced).minify("<p>x</p>", OPTIONS)
    assert response.code == "<p>x"
    assert response.warnings == ["ADVANCED_HTML_USED"]
    html, config = advanced.calls[0]
    assert html == "<p>x</p>"
    assert config == AdvancedHTMLConfig(remove_comments=True)


def test_advanced_receives_comment_preference() -> None:
    advanced = RecordingMinifier(output="<p>x</p>")
    HTMLAdapter(advanced).minify("<p>x</p>", KEEP_COMMENTS)
    assert advanced.calls[0][1].remove_comments is False


def test_advanced_ignored_when_not_smaller() -> None:
    advanced = RecordingMinifier(output="<p>x</p><!---->")
    response = HTMLAdapter(advanced).minify("<p>x</p>", OPTIONS)
    assert response.code == "<p>x</p>"
    assert response.warnings == []


def test_advanced_failure_keeps_basic_result() -> None:
    advanced = RecordingMinifier(error=RuntimeError("boom"))
    response = HTMLAdapter(advanced).minify("<p>x</p>", OPTIONS)
    assert response.code == "<p>x</p>"
    assert response.warnings == ["ADVANCED_HTML_FAILED"]


def test_advanced_skipped_when_basic_pass_was_effective() -> None:
    advanced = RecordingMinifier(output="")
    source = "<p>x</p>" + " " * 100
    response = HTMLAdapter(advanced).minify(source, OPTIONS)
    assert response.code == "<p>x</p>"
    assert advanced.calls == []


def test_no_advanced_minifier() -> None:
    response = HTMLAdapter().minify("<div>  <b>x</b>  </div>", OPTIONS)
    assert response.code == "<div><b>x</b></div>"


def test_placeholder_lookalikes_are_left_alone() -> None:
    source = "<script>alert(1)</script><p>___PRESERVE_0___</p>"
    assert rewrite_html(source, OPTIONS) == source
    source = "<script>x()</script><p>___PRESERVE_5___</p>"
    assert rewrite_html(source, OPTIONS) == source
