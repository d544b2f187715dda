"""Unit tests for chat message rendering."""

import pytest
import pytest_check as check

from deepsearch.models.schemas import (
    FilePart,
    ReasoningPart,
    SourcePart,
    StepStartPart,
    TextPart,
    ToolInvocation,
    ToolInvocationPart,
)
from deepsearch.ui.rendering import markdown_to_html, render_message, render_part


def invocation_part(state: str, result=None, args=None) -> ToolInvocationPart:
    return ToolInvocationPart(
        tool_invocation=ToolInvocation(
            tool_call_id="call_1",
            tool_name="searchWeb",
            state=state,
            args={"query": "weather in Paris"} if args is None else args,
            result=result,
        )
    )


class TestMarkdownToHtml:
    """Tests for markdown_to_html."""

    def test_link_opens_in_new_context(self) -> None:
        """Links render as anchors with target _blank and a safe rel."""
        html = markdown_to_html("[x](http://a)")

        check.is_in('href="http://a"', html)
        check.is_in('target="_blank"', html)
        check.is_in('rel="noopener noreferrer"', html)
        check.is_in(">x</a>", html)

    def test_code_inside_link_label(self) -> None:
        """Inline code in a citation label renders inside the anchor."""
        html = markdown_to_html("See [`httpx`](https://www.python-httpx.org) docs")

        check.is_not_in("\x01", html)
        check.is_in(
            'rel="noopener noreferrer"><code class="rounded bg-gray-700 px-1 py-0.5 text-sm">'
            "httpx</code></a> docs",
            html,
        )

    def test_paragraphs_are_styled(self) -> None:
        """Blank lines separate styled paragraphs."""
        html = markdown_to_html("First.\n\nSecond.")

        assert html.count('<p class="mb-4 first:mt-0 last:mb-0">') == 2

    def test_lists_are_styled(self) -> None:
        """Unordered and ordered lists get their list classes."""
        html = markdown_to_html("- apples\n- pears\n\n1. one\n2. two")

        check.is_in('<ul class="mb-4 list-disc pl-4">', html)
        check.is_in('<ol class="mb-4 list-decimal pl-4">', html)
        check.equal(html.count('<li class="mb-1">'), 4)

    def test_code_block_is_preformatted_and_escaped(self) -> None:
        """Fenced code keeps its language class and escapes markup."""
        html = markdown_to_html("```python\nif a < b:\n    print('**no bold**')\n```")

        check.is_in('<pre class="mb-4 overflow-x-auto rounded-lg bg-gray-700 p-4">', html)
        check.is_in('<code class="language-python">', html)
        check.is_in("if a &lt; b:", html)
        check.is_not_in("<strong>", html)

    def test_inline_formatting(self) -> None:
        """Bold, italic and inline code are converted."""
        html = markdown_to_html("**bold**, *italic* and `code`")

        check.is_in("<strong>bold</strong>", html)
        check.is_in("<em>italic</em>", html)
        check.is_in(">code</code>", html)

    def test_raw_html_is_escaped(self) -> None:
        """Markup in model output is displayed, not executed."""
        html = markdown_to_html("<script>alert(1)</script>")

        assert "<script>" not in html
        assert "&lt;script&gt;" in html

    def test_unsafe_link_scheme_is_not_linked(self) -> None:
        """javascript: links render as plain text."""
        html = markdown_to_html("[click](javascript:alert(1))")

        assert "<a " not in html

    def test_underscores_in_urls_survive(self) -> None:
        """Underscores inside link targets are not treated as emphasis."""
        html = markdown_to_html("See [docs](https://a.example/some_long_path_name).")

        assert 'href="https://a.example/some_long_path_name"' in html


class TestRenderPart:
    """Tests for part dispatch."""

    @pytest.mark.parametrize(
        "part",
        [
            ReasoningPart(reasoning="hidden thoughts"),
            SourcePart(source={"url": "https://a"}),
            FilePart(mime_type="image/png", data="aGk="),
            StepStartPart(),
        ],
    )
    def test_unsupported_parts_render_nothing(self, part) -> None:
        """Reasoning, source, file and step-start parts produce no output."""
        assert render_part(part) == ""

    def test_text_part_renders_markdown(self) -> None:
        assert "<strong>hi</strong>" in render_part(TextPart(text="**hi**"))

    @pytest.mark.parametrize(
        ("state", "label"),
        [("partial-call", "⏳ Calling..."), ("call", "✓ Called"), ("result", "📊 Result")],
    )
    def test_tool_invocation_shows_state(self, state: str, label: str) -> None:
        """Each invocation state has its indicator."""
        html = render_part(invocation_part(state, result=[] if state == "result" else None))

        check.is_in("Tool: searchWeb", html)
        check.is_in(label, html)

    def test_tool_arguments_are_pretty_printed(self) -> None:
        """Arguments appear as indented JSON."""
        html = render_part(invocation_part("call"))

        check.is_in("Arguments:", html)
        check.is_in("{\n  &quot;query&quot;: &quot;weather in Paris&quot;\n}", html)
        check.is_not_in("Result:", html)

    def test_structured_result_is_pretty_printed(self) -> None:
        """Structured results are shown as indented JSON once available."""
        html = render_part(invocation_part("result", result=[{"title": "Météo"}]))

        check.is_in("Result:", html)
        check.is_in("&quot;title&quot;: &quot;Météo&quot;", html)

    def test_arguments_stay_visible_with_result(self) -> None:
        """A finished invocation shows both its arguments and its result."""
        html = render_part(invocation_part("result", result=[]))

        check.is_in("Arguments:", html)
        check.is_in("Result:", html)

    def test_missing_result_hides_result_block(self) -> None:
        html = render_part(invocation_part("result", result=None))

        assert "Result:" not in html

    def test_string_result_is_shown_verbatim(self) -> None:
        """String results are not JSON-quoted."""
        html = render_part(invocation_part("result", result="no results"))

        assert "no results" in html
        assert "&quot;no results&quot;" not in html


class TestRenderMessage:
    """Tests for render_message."""

    def test_assistant_is_labelled_ai(self) -> None:
        html = render_message("assistant", "Ada", [TextPart(text="Hi")])

        check.is_in(">AI</p>", html)
        check.is_in("bg-gray-800", html)

    def test_user_is_labelled_with_display_name(self) -> None:
        html = render_message("user", "Ada <3", [TextPart(text="Hi")])

        check.is_in(">Ada &lt;3</p>", html)
        check.is_in("bg-gray-900", html)

    def test_empty_parts_show_placeholder(self) -> None:
        """Messages without parts render the No content placeholder."""
        check.is_in("No content", render_message("assistant", "Ada", []))
        check.is_in("No content", render_message("assistant", "Ada", None))

    def test_only_hidden_parts_render_empty_body(self) -> None:
        """A message of hidden kinds renders its frame but no part output."""
        html = render_message("assistant", "Ada", [ReasoningPart(reasoning="secret")])

        check.is_not_in("secret", html)
        check.is_not_in("No content", html)

    def test_parts_render_in_order(self) -> None:
        """Tool cards and text keep their part order."""
        html = render_message(
            "assistant",
            "Ada",
            [invocation_part("result", result=[]), TextPart(text="Answer [src](https://s)")],
        )

        assert html.index("Tool: searchWeb") < html.index('href="https://s"')
