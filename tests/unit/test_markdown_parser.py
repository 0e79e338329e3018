"""Tests for the markdown body parser."""
from skilldocs.parsers.markdown_parser import MarkdownParser, slugify


class TestMarkdownParser:
    def test_headings_and_slugs(self):
        parsed = MarkdownParser().parse("# Title\n\n## Sending `send()` requests\n")
        assert [h.text for h in parsed.headings] == ["Title", "Sending `send()` requests"]
        assert parsed.headings[1].level == 2
        assert parsed.headings[1].slug == "sending-send-requests"

    def test_code_blocks(self):
        text = "# T\n\n```php\n$a = 1;\n```\n\n~~~\nplain\n~~~\n"
        parsed = MarkdownParser().parse(text)
        assert len(parsed.code_blocks) == 2
        php, plain = parsed.code_blocks
        assert php.language == "php"
        assert php.content == "$a = 1;"
        assert php.line == 3
        assert php.section == "T"
        assert plain.language == ""
        assert plain.closed

    def test_longer_fence_contains_shorter(self):
        text = "````markdown\n```php\n$a;\n```\n````\n"
        parsed = MarkdownParser().parse(text)
        assert len(parsed.code_blocks) == 1
        assert "```php" in parsed.code_blocks[0].content

    def test_unclosed_fence(self):
        parsed = MarkdownParser().parse("```python\nprint('x')\n")
        assert len(parsed.code_blocks) == 1
        assert parsed.code_blocks[0].closed is False

    def test_line_offset(self):
        parsed = MarkdownParser().parse("# Title\n```bash\nls\n```", line_offset=10)
        assert parsed.headings[0].line == 11
        assert parsed.code_blocks[0].line == 12

    def test_links(self):
        text = (
            "# Intro\n"
            "See [docs](https://example.com/docs \"Docs\") and <https://example.com/auto>.\n"
            "![logo](img/logo.png)\n"
            "`[not](a-link)`\n"
            "## References\n"
            "[ref]: https://example.com/ref\n"
            '<a href="https://example.com/html">HTML</a>\n'
            "```\n[inside](code.md)\n```\n"
        )
        parsed = MarkdownParser().parse(text)
        urls = {l.url: l for l in parsed.links}
        assert set(urls) == {
            "https://example.com/docs",
            "https://example.com/auto",
            "img/logo.png",
            "https://example.com/ref",
            "https://example.com/html",
        }
        assert urls["img/logo.png"].kind == "image"
        assert urls["https://example.com/ref"].kind == "reference"
        assert urls["https://example.com/ref"].section == "References"
        assert urls["https://example.com/html"].kind == "html"
        assert urls["https://example.com/docs"].section == "Intro"

    def test_guidance_polarity(self):
        text = (
            "Always call `connect()` first.\n"
            "Never call `legacyConnect()` in new code.\n"
            "Use `send()` instead of `sendRaw()`.\n"
            "The `Response` object wraps the body.\n"
        )
        parsed = MarkdownParser().parse(text)
        assert len(parsed.guidance) == 3
        first, second, third = parsed.guidance
        assert first.positive == ["connect()"]
        assert second.negative == ["legacyConnect()"]
        assert third.positive == ["send()"]
        assert third.negative == ["sendRaw()"]

    def test_guidance_ignores_code_blocks(self):
        parsed = MarkdownParser().parse("```\nNever use `x`\n```\n")
        assert parsed.guidance == []


def test_slugify():
    assert slugify("Hello, World!") == "hello-world"
    assert slugify("Depth and path") == "depth-and-path"
