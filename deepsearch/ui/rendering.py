"""HTML rendering of chat messages.

Text parts are converted from markdown with fixed element styling; tool
invocations become labelled cards. Reasoning, source, file and step-start
parts render nothing.
"""

import html
import json
import re
from collections.abc import Sequence
from typing import Any

from deepsearch.models.schemas import MessagePart, TextPart, ToolInvocation, ToolInvocationPart

P_CLASS = "mb-4 first:mt-0 last:mb-0"
UL_CLASS = "mb-4 list-disc pl-4"
OL_CLASS = "mb-4 list-decimal pl-4"
LI_CLASS = "mb-1"
PRE_CLASS = "mb-4 overflow-x-auto rounded-lg bg-gray-700 p-4"
INLINE_CODE_CLASS = "rounded bg-gray-700 px-1 py-0.5 text-sm"
LINK_CLASS = "text-blue-400 underline"

STATE_LABELS = {
    "partial-call": "⏳ Calling...",
    "call": "✓ Called",
    "result": "📊 Result",
}

_BLOCK_TOKEN = "\x00{}\x00"
_INLINE_TOKEN = "\x01{}\x01"

_FENCE_RE = re.compile(r"^```[ \t]*([\w+-]*)[^\n]*\n([\s\S]*?)^```[ \t]*$", re.MULTILINE)
_BLOCK_TOKEN_RE = re.compile(r"^\x00(\d+)\x00$")
_INLINE_TOKEN_RE = re.compile(r"\x01(\d+)\x01")
_UL_RE = re.compile(r"^\s*[-*+]\s+(.*)$")
_OL_RE = re.compile(r"^\s*\d+[.)]\s+(.*)$")
_HEADING_RE = re.compile(r"^(#{1,6})\s+(.*?)(?:\s+#+)?\s*$")
_INLINE_CODE_RE = re.compile(r"`([^`\n]+)`")
_LINK_RE = re.compile(r"\[([^\]\n]+)\]\(([^)\s]+)\)")
_SAFE_URL_RE = re.compile(r"^(https?:|mailto:|/|#|\.)", re.IGNORECASE)


def _safe_url(url: str) -> bool:
    return bool(_SAFE_URL_RE.match(html.unescape(url)))


def _inline(text: str) -> str:
    """Apply inline markdown to already-escaped text."""
    tokens: list[str] = []

    def stash(fragment: str) -> str:
        tokens.append(fragment)
        return _INLINE_TOKEN.format(len(tokens) - 1)

    text = _INLINE_CODE_RE.sub(
        lambda m: stash(f'<code class="{INLINE_CODE_CLASS}">{m.group(1)}</code>'), text
    )

    def link(match: re.Match[str]) -> str:
        label, url = match.group(1), match.group(2)
        if not _safe_url(url):
            return label
        return stash(
            f'<a href="{url}" class="{LINK_CLASS}" target="_blank" '
            f'rel="noopener noreferrer">{_emphasis(label)}</a>'
        )

    text = _LINK_RE.sub(link, text)
    text = _emphasis(text)

    # Link labels may hold code tokens, so expand until none remain
    while _INLINE_TOKEN_RE.search(text):
        text = _INLINE_TOKEN_RE.sub(lambda m: tokens[int(m.group(1))], text)
    return text


def _emphasis(text: str) -> str:
    # Bold (**text** or __text__)
    text = re.sub(r"\*\*(.+?)\*\*", r"<strong>\1</strong>", text)
    text = re.sub(r"(?<!\w)__(.+?)__(?!\w)", r"<strong>\1</strong>", text)

    # Italic (*text* or _text_)
    text = re.sub(r"(?<!\*)\*([^*\n]+)\*(?!\*)", r"<em>\1</em>", text)
    text = re.sub(r"(?<!\w)_([^_\n]+)_(?!\w)", r"<em>\1</em>", text)
    return text


def markdown_to_html(text: str) -> str:
    """Convert markdown to styled HTML for chat display.

    Supports: paragraphs, headings, unordered and ordered lists, fenced code
    blocks, inline code, bold, italic, links. Raw HTML is escaped. Links open
    in a new browsing context.
    """
    text = text.replace("\r\n", "\n").replace("\x00", "").replace("\x01", "")

    blocks: list[str] = []

    def fence(match: re.Match[str]) -> str:
        language, code = match.group(1), match.group(2).rstrip("\n")
        code_class = f' class="language-{language}"' if language else ""
        blocks.append(
            f'<pre class="{PRE_CLASS}"><code{code_class}>{html.escape(code)}</code></pre>'
        )
        return _BLOCK_TOKEN.format(len(blocks) - 1)

    text = _FENCE_RE.sub(fence, text)
    text = html.escape(text)

    output: list[str] = []
    paragraph: list[str] = []
    list_kind: str | None = None

    def close_paragraph() -> None:
        if paragraph:
            output.append(f'<p class="{P_CLASS}">{"<br>".join(paragraph)}</p>')
            paragraph.clear()

    def close_list() -> None:
        nonlocal list_kind
        if list_kind:
            output.append(f"</{list_kind}>")
            list_kind = None

    def open_list(kind: str) -> None:
        nonlocal list_kind
        if list_kind != kind:
            close_list()
            css = UL_CLASS if kind == "ul" else OL_CLASS
            output.append(f'<{kind} class="{css}">')
            list_kind = kind

    for line in text.split("\n"):
        stripped = line.strip()

        if block := _BLOCK_TOKEN_RE.match(stripped):
            close_paragraph()
            close_list()
            output.append(blocks[int(block.group(1))])
        elif not stripped:
            close_paragraph()
            close_list()
        elif heading := _HEADING_RE.match(stripped):
            close_paragraph()
            close_list()
            level = len(heading.group(1))
            output.append(f"<h{level}>{_inline(heading.group(2))}</h{level}>")
        elif item := _UL_RE.match(line):
            close_paragraph()
            open_list("ul")
            output.append(f'<li class="{LI_CLASS}">{_inline(item.group(1))}</li>')
        elif item := _OL_RE.match(line):
            close_paragraph()
            open_list("ol")
            output.append(f'<li class="{LI_CLASS}">{_inline(item.group(1))}</li>')
        else:
            close_list()
            paragraph.append(_inline(stripped))

    close_paragraph()
    close_list()

    return "\n".join(output)


def _pretty(value: Any) -> str:
    """Strings verbatim, anything else as indented JSON."""
    if isinstance(value, str):
        return value
    return json.dumps(value, indent=2, ensure_ascii=False, default=str)


def render_tool_invocation(invocation: ToolInvocation) -> str:
    """Render a tool invocation card with state, arguments and result."""
    sections = [
        '<div class="my-2 rounded border border-gray-700 bg-gray-900 p-3">',
        '<div class="flex items-center gap-2 text-sm font-medium text-gray-400">',
        '<span class="text-xs">🔧</span>',
        f"<span>Tool: {html.escape(invocation.tool_name)}</span>",
        f'<span class="ml-auto text-xs">{STATE_LABELS[invocation.state]}</span>',
        "</div>",
    ]

    if invocation.args is not None:
        sections.append(_labelled_block("Arguments", _pretty(invocation.args)))

    if invocation.state == "result" and invocation.result is not None:
        sections.append(_labelled_block("Result", _pretty(invocation.result)))

    sections.append("</div>")
    return "".join(sections)


def _labelled_block(label: str, body: str) -> str:
    return (
        '<div class="mt-2">'
        f'<p class="text-xs text-gray-500">{label}:</p>'
        '<pre class="mt-1 overflow-x-auto rounded bg-gray-800 p-2 text-xs text-gray-300">'
        f"{html.escape(body)}</pre>"
        "</div>"
    )


def render_part(part: MessagePart) -> str:
    """Render one message part; unsupported kinds render an empty string."""
    if isinstance(part, TextPart):
        return markdown_to_html(part.text)
    if isinstance(part, ToolInvocationPart):
        return render_tool_invocation(part.tool_invocation)
    return ""


def render_message(role: str, user_name: str, parts: Sequence[MessagePart] | None) -> str:
    """Render a chat message as a styled HTML block.

    Args:
        role: Message role; assistant messages are labelled "AI".
        user_name: Display name for non-assistant messages.
        parts: Ordered message parts.

    Returns:
        HTML for the whole message.
    """
    is_ai = role == "assistant"
    background = "bg-gray-800" if is_ai else "bg-gray-900"
    author = "AI" if is_ai else html.escape(user_name)

    if parts:
        body = "".join(render_part(part) for part in parts)
    else:
        body = '<p class="italic text-gray-500">No content</p>'

    return (
        '<div class="mb-6">'
        f'<div class="rounded-lg p-4 {background} text-gray-300">'
        f'<p class="mb-2 text-sm font-semibold text-gray-400">{author}</p>'
        f'<div class="prose prose-invert max-w-none">{body}</div>'
        "</div>"
        "</div>"
    )
