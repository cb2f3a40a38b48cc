import re

from dataclasses import dataclass

from constants.index import TEMPLATE_PASSES


@dataclass(frozen=True)
class MarkupPatterns:
    """
    Compiled wikitext patterns, one per sanitizing step.

    Built once by `compile_patterns` and shared read-only between sanitizer
    instances. `\\s`, `\\S` and `\\d` are ASCII classes wherever they occur.
    """

    comment: re.Pattern
    ref: re.Pattern
    template: re.Pattern
    table_row: re.Pattern
    orphan_brace: re.Pattern
    orphan_bracket: re.Pattern
    file: re.Pattern
    category: re.Pattern
    external_link: re.Pattern
    thumb_line: re.Pattern
    link: re.Pattern
    tag: re.Pattern
    style: re.Pattern
    header: re.Pattern
    multi_space: re.Pattern
    multi_newline: re.Pattern


def compile_patterns() -> MarkupPatterns:
    return MarkupPatterns(
        comment=re.compile(r"<!--.*?-->", re.DOTALL),
        ref=re.compile(r"<ref[^>]*>.*?</ref>|<ref[^/]*/>", re.DOTALL),
        template=re.compile(r"\{\{[^{}]*\}\}"),
        table_row=re.compile(r"^[^\S\n]*[|!].*$", re.MULTILINE | re.ASCII),
        orphan_brace=re.compile(r"^\{\{[A-Za-z][^{}\n]*$", re.MULTILINE),
        # [^\[\]] also matches newlines, so this can span several lines
        orphan_bracket=re.compile(r"^[^\[\]]*\]\]$", re.MULTILINE),
        file=re.compile(r"\[\[(File|Image):[^\n]*\]\]", re.IGNORECASE),
        category=re.compile(r"\[\[Category:[^\]]*\]\]", re.IGNORECASE),
        external_link=re.compile(r"\[https?://[^\]]*\]"),
        thumb_line=re.compile(
            r"^(thumb|thumbnail|right|left|center|\d+px)[|].*$",
            re.IGNORECASE | re.MULTILINE | re.ASCII,
        ),
        link=re.compile(r"\[\[(?:[^|\]]*\|)?([^\]]*)\]\]"),
        tag=re.compile(r"<[^>]+>"),
        style=re.compile(r"'{2,}"),
        header=re.compile(r"={2,}\s*([^=]+?)\s*={2,}", re.ASCII),
        multi_space=re.compile(r"[ \t]{2,}"),
        multi_newline=re.compile(r"\n{3,}"),
    )


DEFAULT_PATTERNS = compile_patterns()


class WikitextSanitizer:
    """
    Reduces MediaWiki markup to near-plain text.

    The steps run in a fixed order and later patterns rely on what the
    earlier ones removed (e.g. table rows are only matched once templates,
    which may contain `|` at line start, are gone).

    Template removal only strips innermost `{{...}}` constructs and repeats
    that at most `template_passes` times. Templates nested deeper than that,
    or with unbalanced braces, leave residue which the orphan-line steps
    partially clean up.
    """

    def __init__(
        self,
        patterns: MarkupPatterns = DEFAULT_PATTERNS,
        template_passes: int = TEMPLATE_PASSES,
    ):
        self.patterns = patterns
        self.template_passes = template_passes

    def __call__(self, *args, **kwargs):
        return self.sanitize(*args, **kwargs)

    def sanitize(self, text: str) -> str:
        p = self.patterns

        text = p.comment.sub("", text)
        text = p.ref.sub("", text)
        text = self._remove_templates(text)

        text = p.table_row.sub("", text)
        text = p.orphan_brace.sub("", text)
        text = p.orphan_bracket.sub("", text)

        text = p.file.sub("", text)
        text = p.category.sub("", text)
        text = p.external_link.sub("", text)
        text = p.thumb_line.sub("", text)
        text = p.link.sub(r"\1", text)

        text = p.tag.sub("", text)
        text = p.style.sub("", text)
        text = p.header.sub(r"\n\1\n", text)

        text = p.multi_space.sub(" ", text)
        text = p.multi_newline.sub("\n\n", text)
        return text.strip()

    def _remove_templates(self, text: str) -> str:
        for _ in range(self.template_passes):
            stripped = self.patterns.template.sub("", text)
            if stripped == text:
                break
            text = stripped

        return text


_DEFAULT_SANITIZER = WikitextSanitizer()


def sanitize(text: str) -> str:
    return _DEFAULT_SANITIZER.sanitize(text)
