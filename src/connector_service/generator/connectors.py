"""
Connector Generator - Extracts connector descriptors from a project.

A connector is a `public client class` declared in any module of the
project. Summary output carries the identity, docs and display
annotation of each connector; detailed output also lists the client's
init, remote and resource functions with their parameters and return
types.
"""

import re
from pathlib import Path

import structlog

from ..contracts import ProjectLoadError
from ..models import Connector, ConnectorFunction, PackageInfo, Parameter
from ..project.model import Module, Project
from .source import Declaration, SourceText

__all__ = ["ConnectorGenerator"]

logger = structlog.get_logger(__name__)

_CLASS = re.compile(
    r"\b(?P<quals>(?:(?:public|isolated|readonly|distinct|client)\s+)+)class\s+(?P<name>[A-Za-z_]\w*)\s*\{"
)
_FUNCTION = re.compile(
    r"\b(?P<quals>(?:(?:public|private|remote|resource|isolated|transactional)\s+)*)function\s+"
)
_RESOURCE_HEAD = re.compile(r"(?P<accessor>[A-Za-z_]\w*)\s+(?P<path>[^(]+?)\s*\(")
_NAME_HEAD = re.compile(r"(?P<name>'?[A-Za-z_]\w*)\s*\(")
_PARAM = re.compile(r"^(?P<type>.+?)\s+(?P<name>'?[A-Za-z_]\w*)$", re.DOTALL)
_LEADING_ANNOTATION = re.compile(r"@[A-Za-z_][\w:]*\s*")
_WS = re.compile(r"\s+")
_SLASH = re.compile(r"\s*/\s*")

CONNECTOR_FUNCTION_QUALIFIERS = {"remote", "resource"}


class ConnectorGenerator:
    """Builds connector descriptors from project sources.

    Implements ConnectorGeneratorProtocol.
    """

    def get_project_connectors(self, project: Project, detailed: bool) -> list[Connector]:
        connectors: list[Connector] = []
        for module in project.modules:
            for source_file in module.source_files:
                connectors.extend(self._file_connectors(project, module, source_file, detailed))

        logger.debug(
            "connectors_generated",
            project=project.name,
            count=len(connectors),
            detailed=detailed,
        )
        return connectors

    def _file_connectors(
        self, project: Project, module: Module, path: Path, detailed: bool
    ) -> list[Connector]:
        try:
            text = SourceText(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            raise ProjectLoadError(path, f"cannot read source: {e}") from e

        boundaries = text.boundaries(0, len(text.masked))
        connectors = []

        for match in _CLASS.finditer(text.masked):
            quals = match.group("quals").split()
            if "public" not in quals or "client" not in quals or text.depth(match.start()) != 0:
                continue

            name = match.group("name")
            decl = text.declaration(_prefix_start(boundaries, match.start()), match.start())
            functions: list[ConnectorFunction] = []
            if detailed:
                open_index = match.end() - 1
                functions = _functions(text, open_index + 1, text.matching(open_index))

            connectors.append(
                Connector(
                    name=name,
                    display_name=decl.display.get("label") or name,
                    documentation=decl.description,
                    module_name=module.name,
                    package=PackageInfo(
                        organization=project.org,
                        name=project.name,
                        version=project.version,
                    ),
                    functions=functions,
                    display_annotation=decl.display,
                    icon=decl.display.get("iconPath", ""),
                )
            )

        return connectors


def _prefix_start(boundaries: list[int], decl_start: int) -> int:
    return max(b for b in boundaries if b <= decl_start)


def _functions(text: SourceText, start: int, end: int) -> list[ConnectorFunction]:
    """Init, remote and resource functions declared directly in a class body."""
    base = text.depth(start)
    boundaries = text.boundaries(start, end)
    functions = []

    for match in _FUNCTION.finditer(text.masked, start, end):
        if text.depth(match.start()) != base:
            continue

        quals = match.group("quals").split()
        resource = "resource" in quals
        head = (_RESOURCE_HEAD if resource else _NAME_HEAD).match(text.masked, match.end())
        if head is None:
            continue

        if resource:
            name = _SLASH.sub("/", _WS.sub(" ", head.group("path").strip()))
            accessor = head.group("accessor")
        else:
            name = head.group("name").lstrip("'")
            accessor = None

        if name != "init" and not CONNECTOR_FUNCTION_QUALIFIERS.intersection(quals):
            continue

        open_paren = head.end() - 1
        close_paren = text.matching(open_paren, "(", ")")
        decl = text.declaration(_prefix_start(boundaries, match.start()), match.start())

        functions.append(
            ConnectorFunction(
                name=name,
                qualifiers=[q for q in quals if q != "public"],
                parameters=_parameters(text, open_paren + 1, close_paren, decl),
                return_type=_return_type(text, close_paren + 1, end),
                documentation=decl.description,
                accessor=accessor,
                path=name if resource else None,
            )
        )

    return functions


def _split_top_level(masked: str, separator: str) -> list[tuple[int, int]]:
    """Spans of the separator-delimited parts outside any brackets."""
    spans, level, begin = [], 0, 0
    for i, c in enumerate(masked):
        if c in "([{":
            level += 1
        elif c in ")]}":
            level -= 1
        elif c == separator and level == 0:
            spans.append((begin, i))
            begin = i + 1
    spans.append((begin, len(masked)))
    return [(s, e) for s, e in spans if masked[s:e].strip()]


def _parameters(text: SourceText, start: int, end: int, decl: Declaration) -> list[Parameter]:
    result = []
    for s, e in _split_top_level(text.masked[start:end], ","):
        raw = text.raw[start + s:start + e]
        masked = text.masked[start + s:start + e]

        # Drop parameter annotations such as @http:Payload or @display {...}
        skip = _annotation_length(masked)
        raw, masked = raw[skip:], masked[skip:]

        default = None
        assign = _find_assignment(masked)
        if assign != -1:
            default = raw[assign + 1:].strip()
            raw = raw[:assign]

        match = _PARAM.match(raw.strip())
        if match is None:
            continue

        type_name = _WS.sub(" ", match.group("type")).lstrip("*").strip()
        name = match.group("name").lstrip("'")
        result.append(
            Parameter(
                name=name,
                type_name=type_name,
                optional=default is not None or type_name.endswith("..."),
                default_value=default,
                documentation=decl.param_docs.get(name),
            )
        )
    return result


def _annotation_length(masked: str) -> int:
    """Length of the leading annotations of a parameter."""
    offset = len(masked) - len(masked.lstrip())
    while True:
        match = _LEADING_ANNOTATION.match(masked, offset)
        if match is None:
            return offset
        offset = match.end()
        if masked.startswith("{", offset):
            offset = _closing_brace(masked, offset) + 1
            offset += len(masked[offset:]) - len(masked[offset:].lstrip())


def _find_assignment(masked: str) -> int:
    """Index of the top-level '=' introducing a default value, or -1."""
    level = 0
    for i, c in enumerate(masked):
        if c in "([{":
            level += 1
        elif c in ")]}":
            level -= 1
        elif c == "=" and level == 0 and masked[i + 1:i + 2] not in ("=", ">"):
            return i
    return -1


def _closing_brace(masked: str, start: int) -> int:
    level = 0
    for i in range(start, len(masked)):
        if masked[i] == "{":
            level += 1
        elif masked[i] == "}":
            level -= 1
            if level == 0:
                return i
    return len(masked) - 1


def _return_type(text: SourceText, start: int, end: int) -> str | None:
    """Type after `returns`, up to the function body or terminator."""
    level = 0
    stop = end
    i = start
    while i < end:
        c = text.masked[i]
        if c in "([":
            level += 1
        elif c in ")]":
            level -= 1
        elif level == 0 and c in ";=":
            stop = i
            break
        elif level == 0 and c == "{":
            before = text.masked[start:i].rstrip()
            if not (text.masked.startswith("{|", i) or before.endswith(("record", "object"))):
                stop = i
                break
            # Inline record or object type
            i = text.matching(i) + 1
            continue
        i += 1

    signature = text.raw[start:stop].strip()
    if not signature.startswith("returns"):
        return None
    return _WS.sub(" ", signature[len("returns"):]).strip() or None
