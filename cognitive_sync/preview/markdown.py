"""Light Markdown to HTML conversion for chat bubbles and preview sections."""

import re


def _wrap_list_items(text: str, item_pattern: str, open_tag: str, close_tag: str) -> str:
    lines = text.split("\n")
    in_list = False
    result = []
    for line in lines:
        stripped = line.strip()
        if re.match(item_pattern, stripped):
            if not in_list:
                result.append(open_tag)
                in_list = True
            item = re.sub(item_pattern, "", stripped)
            result.append(f"<li>{item}</li>")
        else:
            if in_list:
                result.append(close_tag)
                in_list = False
            result.append(line)
    if in_list:
        result.append(close_tag)
    return "\n".join(result)


def markdown_to_html(text: str) -> str:
    """Convert markdown to HTML for display.

    Supports: headings, bold, italic, inline code, code blocks, links, lists.
    """
    # Escape HTML entities first
    text = (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )

    # Code blocks (```code```)
    text = re.sub(
        r"```(\w*)\n?([\s\S]*?)```",
        r'<pre class="bg-gray-800 text-gray-100 rounded-lg p-3 my-2 overflow-x-auto text-xs"><code>\2</code></pre>',
        text,
    )

    # Inline code (`code`)
    text = re.sub(
        r"`([^`]+)`",
        r'<code class="bg-gray-200 text-pink-600 px-1.5 py-0.5 rounded text-xs">\1</code>',
        text,
    )

    # Headings (### text), rendered one level smaller than the preview title
    text = re.sub(
        r"^#{1,6}\s+(.+)$",
        r'<div class="font-semibold mt-2">\1</div>',
        text,
        flags=re.MULTILINE,
    )

    # Bold (**text** or __text__)
    text = re.sub(r"\*\*(.+?)\*\*", r"<strong>\1</strong>", text)
    text = re.sub(r"__(.+?)__", r"<strong>\1</strong>", text)

    # Italic (*text* or _text_)
    text = re.sub(r"(?<![\w*])\*([^*\n]+)\*(?![\w*])", r"<em>\1</em>", text)
    text = re.sub(r"(?<!\w)_([^_\n]+)_(?!\w)", r"<em>\1</em>", text)

    # Links [text](url), http(s) and mailto only
    text = re.sub(
        r"\[([^\]]+)\]\(((?:https?://|mailto:)[^\s)]+)\)",
        r'<a href="\2" class="text-blue-600 underline" target="_blank">\1</a>',
        text,
    )

    text = _wrap_list_items(
        text, r"^[-*]\s+", '<ul class="list-disc list-inside my-2 space-y-1">', "</ul>"
    )
    text = _wrap_list_items(
        text, r"^\d+\.\s+", '<ol class="list-decimal list-inside my-2 space-y-1">', "</ol>"
    )

    # Line breaks (preserve newlines as <br>), except around block tags
    text = re.sub(r"\n?(</?(?:ul|ol|li|pre)[^>]*>)\n?", r"\1", text)
    text = text.replace("\n", "<br>")

    return text
