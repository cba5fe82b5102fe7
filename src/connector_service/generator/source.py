"""
Source scanning helpers for Ballerina files.

The generator never parses Ballerina properly; it works on a "masked"
copy of each file where comments and string contents are blanked out,
so braces and keywords inside them cannot confuse the scan. The masked
text keeps every offset of the raw source, so positions found in it
index straight into the raw source.
"""

import re
from dataclasses import dataclass, field

__all__ = ["Declaration", "SourceText", "parse_doc"]

_ANNOTATION_BEFORE = re.compile(r"@[A-Za-z_][\w:]*\s*$")
_DISPLAY = re.compile(r"@display\s*\{")
_FIELD = re.compile(r'(\w+)\s*:\s*"((?:[^"\\]|\\.)*)"')
_PARAM_DOC = re.compile(r"^\+\s*('?[\w]+)\s*-\s*(.*)$")


def mask(source: str) -> str:
    """Blank out comments and string contents, keeping offsets and newlines."""
    out = list(source)
    n = len(source)
    i = 0

    def blank(start: int, end: int) -> None:
        for k in range(start, min(end, n)):
            if out[k] != "\n":
                out[k] = " "

    while i < n:
        c = source[i]
        if c == '"':
            j = i + 1
            while j < n and source[j] not in '"\n':
                j += 2 if source[j] == "\\" else 1
            blank(i + 1, j)
            i = j + 1
        elif c == "`":
            j = source.find("`", i + 1)
            j = n if j == -1 else j
            blank(i + 1, j)
            i = j + 1
        elif c == "#" or (c == "/" and source.startswith("//", i)):
            j = source.find("\n", i)
            j = n if j == -1 else j
            blank(i, j)
            i = j
        else:
            i += 1

    return "".join(out)


@dataclass
class Declaration:
    """Leading documentation and @display annotation of a declaration."""

    description: str | None = None
    param_docs: dict[str, str] = field(default_factory=dict)
    return_doc: str | None = None
    display: dict[str, str] = field(default_factory=dict)


class SourceText:
    """Raw and masked views of one source file."""

    def __init__(self, raw: str) -> None:
        self.raw = raw
        self.masked = mask(raw)
        self._depth = self._depths(self.masked)

    @staticmethod
    def _depths(text: str) -> list[int]:
        depths = [0] * (len(text) + 1)
        depth = 0
        for i, c in enumerate(text):
            depths[i] = depth
            if c == "{":
                depth += 1
            elif c == "}":
                depth = max(depth - 1, 0)
        depths[len(text)] = depth
        return depths

    def depth(self, index: int) -> int:
        """Curly-brace depth just before index."""
        return self._depth[index]

    def matching(self, open_index: int, opener: str = "{", closer: str = "}") -> int:
        """Index of the bracket closing the one at open_index (len if unclosed)."""
        level = 0
        for i in range(open_index, len(self.masked)):
            c = self.masked[i]
            if c == opener:
                level += 1
            elif c == closer:
                level -= 1
                if level == 0:
                    return i
        return len(self.masked)

    def boundaries(self, start: int, end: int) -> list[int]:
        """Offsets where a declaration at the region's top level may begin.

        A boundary follows every ';' and every closing '}' of a block at
        the region's own depth, except blocks that are annotation values.
        """
        base = self._depth[start]
        result = [start]
        i = start
        while i < end:
            c = self.masked[i]
            if self._depth[i] == base:
                if c == ";":
                    result.append(i + 1)
                elif c == "{":
                    close = self.matching(i)
                    if not _ANNOTATION_BEFORE.search(self.masked, result[-1], i):
                        result.append(close + 1)
                    i = close + 1
                    continue
            i += 1
        return result

    def declaration(self, prefix_start: int, decl_start: int) -> Declaration:
        """Parse the docs and @display annotation preceding a declaration."""
        decl = parse_doc(self.raw[prefix_start:decl_start])

        display = _DISPLAY.search(self.masked, prefix_start, decl_start)
        if display:
            open_index = display.end() - 1
            close = self.matching(open_index)
            body = self.raw[open_index + 1:close]
            decl.display = {k: _unescape(v) for k, v in _FIELD.findall(body)}

        return decl


def parse_doc(prefix: str) -> Declaration:
    """Parse Ballerina '#' documentation lines.

    Description lines come first, then '# + name - text' entries;
    '# + return - text' documents the return value.
    """
    description: list[str] = []
    params: dict[str, str] = {}
    current: str | None = None

    for line in prefix.splitlines():
        line = line.strip()
        if not line.startswith("#"):
            continue
        text = line[1:]
        text = text[1:] if text.startswith(" ") else text

        match = _PARAM_DOC.match(text)
        if match:
            current = match.group(1).lstrip("'")
            params[current] = match.group(2).strip()
        elif current is not None:
            params[current] = f"{params[current]} {text.strip()}".strip()
        else:
            description.append(text.rstrip())

    return_doc = params.pop("return", None)
    return Declaration(
        description="\n".join(description).strip() or None,
        param_docs=params,
        return_doc=return_doc,
    )


def _unescape(value: str) -> str:
    return value.replace('\\"', '"').replace("\\\\", "\\")
