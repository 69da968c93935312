# /healthlens/flows/template.py

"""
Prompt templates.

Templates use a small Handlebars-style syntax:

    {{path}} / {{{path}}}              placeholder, dot paths allowed
    {{#if path}}..{{else}}..{{/if}}     emitted iff the value is present and non-empty
    {{#unless path}}..{{/unless}}       inverse of #if
    {{#each path}}..{{else}}..{{/each}} once per array element, in order;
                                        {{this}}, {{@index}} and element fields in scope
    {{#with path}}..{{/with}}           nested object fields in scope; skipped
                                        when the object is absent
    {{! comment }}                      dropped

A template is parsed into an AST once. Rendering walks the AST and writes
values verbatim, so a value containing "{{...}}" is plain text and can never
change which blocks are emitted. Field references are checked against the
input contract with `check_against`, which flows call at registration time.
"""

import json
import re
from typing import Any, List, Mapping, NamedTuple, Optional, Tuple, Union
from healthlens.models.contract import Contract, FieldSpec, FieldType
from healthlens.flows.errors import TemplateResolutionError

TAG_RE = re.compile(r"\{\{\{\s*(.*?)\s*\}\}\}|\{\{\s*(.*?)\s*\}\}", re.DOTALL)
PATH_RE = re.compile(r"^(?:@index|this(?:\.[A-Za-z_]\w*)*|[A-Za-z_]\w*(?:\.[A-Za-z_]\w*)*)$")
BLOCK_HELPERS = ("if", "unless", "each", "with")


class Text(NamedTuple):
    value: str


class Placeholder(NamedTuple):
    path: str


class Conditional(NamedTuple):
    path: str
    negate: bool
    body: List["Node"]
    otherwise: List["Node"]


class Loop(NamedTuple):
    path: str
    body: List["Node"]
    otherwise: List["Node"]


class Scope(NamedTuple):
    path: str
    body: List["Node"]


Node = Union[Text, Placeholder, Conditional, Loop, Scope]


# --- Value formatting --- #

def format_value(value: Any) -> str:
    """
    Stringify a validated value for a prompt.

    Strings are verbatim, booleans are "true"/"false", None is empty, floats use
    the shortest round-trip form without a trailing ".0", arrays are joined with
    ", " and objects are compact JSON.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else repr(value)
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return ", ".join(format_value(v) for v in value)
    if isinstance(value, Mapping):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"), sort_keys=False)
    return str(value)


def is_present(value: Any) -> bool:
    """Truthiness used by #if/#unless: None, False and empty containers are absent."""
    if value is None or value is False:
        return False
    if isinstance(value, (str, list, tuple, dict)) and len(value) == 0:
        return False
    return True


# --- Parsing --- #

def _parse(source: str) -> List[Node]:
    root: List[Node] = []
    # Each frame: (helper, path, body, otherwise, in_else)
    stack: List[list] = []

    def current() -> List[Node]:
        if not stack:
            return root
        frame = stack[-1]
        return frame[3] if frame[4] else frame[2]

    position = 0
    for match in TAG_RE.finditer(source):
        if match.start() > position:
            current().append(Text(source[position:match.start()]))
        position = match.end()

        tag = (match.group(1) if match.group(1) is not None else match.group(2)).strip()
        if not tag:
            raise TemplateResolutionError(f"Empty tag at offset {match.start()}")

        if tag.startswith("!"):
            continue

        if tag.startswith("#"):
            parts = tag[1:].split()
            if len(parts) != 2 or parts[0] not in BLOCK_HELPERS:
                raise TemplateResolutionError(f"Unsupported block tag '{{{{{tag}}}}}'")
            helper, path = parts
            _check_path_syntax(path)
            stack.append([helper, path, [], [], False])
            continue

        if tag.startswith("/"):
            helper = tag[1:].strip()
            if not stack or stack[-1][0] != helper:
                raise TemplateResolutionError(f"Unexpected closing tag '{{{{/{helper}}}}}'")
            open_helper, path, body, otherwise, _ = stack.pop()
            if open_helper in ("if", "unless"):
                node: Node = Conditional(path, open_helper == "unless", body, otherwise)
            elif open_helper == "each":
                node = Loop(path, body, otherwise)
            else:
                node = Scope(path, body)
            current().append(node)
            continue

        if tag == "else":
            if not stack or stack[-1][0] == "with" or stack[-1][4]:
                raise TemplateResolutionError("'{{else}}' outside an if/unless/each block")
            stack[-1][4] = True
            continue

        _check_path_syntax(tag)
        current().append(Placeholder(tag))

    if position < len(source):
        current().append(Text(source[position:]))

    if stack:
        raise TemplateResolutionError(f"Unclosed block '{{{{#{stack[-1][0]} {stack[-1][1]}}}}}'")
    return root


def _check_path_syntax(path: str) -> None:
    if not PATH_RE.match(path):
        raise TemplateResolutionError(f"Invalid field reference '{path}'")


# --- Static checking --- #

class _StaticScope(NamedTuple):
    this: Optional[FieldSpec]
    fields: Optional[Contract]
    in_loop: bool


def _resolve_static(path: str, scopes: List[_StaticScope]) -> Optional[FieldSpec]:
    """Returns the FieldSpec a path refers to, or None for @index. Raises when unresolvable."""
    if path == "@index":
        if not any(scope.in_loop for scope in scopes):
            raise TemplateResolutionError("'@index' used outside an #each block")
        return None

    segments = path.split(".")
    if segments[0] == "this":
        scope = scopes[-1]
        if scope.this is None:
            raise TemplateResolutionError(f"'{path}' used outside an #each or #with block")
        return _walk(scope.this, segments[1:], path)

    for scope in reversed(scopes):
        if scope.fields is not None and segments[0] in scope.fields.fields:
            return _walk(scope.fields.fields[segments[0]], segments[1:], path)
    raise TemplateResolutionError(f"Template references unknown field '{path}'")


def _walk(spec: FieldSpec, rest: List[str], path: str) -> FieldSpec:
    for segment in rest:
        if spec.type != FieldType.OBJECT or segment not in spec.fields.fields:
            raise TemplateResolutionError(f"Template references unknown field '{path}'")
        spec = spec.fields.fields[segment]
    return spec


def _check_nodes(nodes: List[Node], scopes: List[_StaticScope]) -> None:
    for node in nodes:
        if isinstance(node, Text):
            continue
        if isinstance(node, Placeholder):
            _resolve_static(node.path, scopes)
        elif isinstance(node, Conditional):
            _resolve_static(node.path, scopes)
            _check_nodes(node.body, scopes)
            _check_nodes(node.otherwise, scopes)
        elif isinstance(node, Loop):
            spec = _resolve_static(node.path, scopes)
            if spec is None or spec.type != FieldType.ARRAY:
                raise TemplateResolutionError(f"'#each {node.path}' needs an array field")
            item = spec.item
            item_fields = item.fields if item.type == FieldType.OBJECT else None
            _check_nodes(node.body, scopes + [_StaticScope(item, item_fields, True)])
            _check_nodes(node.otherwise, scopes)
        elif isinstance(node, Scope):
            spec = _resolve_static(node.path, scopes)
            if spec is None or spec.type != FieldType.OBJECT:
                raise TemplateResolutionError(f"'#with {node.path}' needs an object field")
            _check_nodes(node.body, scopes + [_StaticScope(spec, spec.fields, scopes[-1].in_loop)])


# --- Rendering --- #

class _Frame(NamedTuple):
    this: Any
    index: Optional[int]
    spec: Optional[FieldSpec] = None
    fields: Optional[Contract] = None


def _lookup(path: str, frames: List[_Frame]) -> Any:
    if path == "@index":
        for frame in reversed(frames):
            if frame.index is not None:
                return frame.index
        return None

    segments = path.split(".")
    if segments[0] == "this":
        value = frames[-1].this
        segments = segments[1:]
    else:
        value = None
        for frame in reversed(frames):
            if frame.fields is not None:
                # A declared name binds to this frame even when the value is absent.
                if segments[0] in frame.fields.fields:
                    value = frame.this.get(segments[0]) if isinstance(frame.this, Mapping) else None
                    break
            elif isinstance(frame.this, Mapping) and segments[0] in frame.this:
                value = frame.this[segments[0]]
                break
        segments = segments[1:]

    for segment in segments:
        if not isinstance(value, Mapping):
            return None
        value = value.get(segment)
    return value


def _child_frame(node: Node, frames: List[_Frame], value: Any, index: Optional[int]) -> _Frame:
    """Frame for a #each element or #with object, carrying its declared fields when known."""
    if frames[0].fields is None:
        return _Frame(value, index)
    scopes = [_StaticScope(f.spec, f.fields, f.index is not None) for f in frames]
    spec = _resolve_static(node.path, scopes)
    if isinstance(node, Loop):
        spec = spec.item
    fields = spec.fields if spec.type == FieldType.OBJECT else None
    return _Frame(value, index, spec, fields)


def _render_nodes(nodes: List[Node], frames: List[_Frame], out: List[str]) -> None:
    for node in nodes:
        if isinstance(node, Text):
            out.append(node.value)
        elif isinstance(node, Placeholder):
            out.append(format_value(_lookup(node.path, frames)))
        elif isinstance(node, Conditional):
            present = is_present(_lookup(node.path, frames))
            if present != node.negate:
                _render_nodes(node.body, frames, out)
            else:
                _render_nodes(node.otherwise, frames, out)
        elif isinstance(node, Loop):
            items = _lookup(node.path, frames)
            if isinstance(items, (list, tuple)) and items:
                for index, element in enumerate(items):
                    _render_nodes(node.body, frames + [_child_frame(node, frames, element, index)], out)
            else:
                _render_nodes(node.otherwise, frames, out)
        elif isinstance(node, Scope):
            value = _lookup(node.path, frames)
            if isinstance(value, Mapping):
                _render_nodes(node.body, frames + [_child_frame(node, frames, value, None)], out)


class PromptTemplate:
    """A parsed prompt template. Immutable and safe to share between invocations."""

    def __init__(self, source: str):
        self.source = source
        self.nodes: Tuple[Node, ...] = tuple(_parse(source))

    def check_against(self, contract: Contract) -> None:
        """Raise TemplateResolutionError if any reference is not backed by the contract."""
        _check_nodes(list(self.nodes), [_StaticScope(None, contract, False)])

    def render(self, values: Mapping[str, Any], contract: Optional[Contract] = None) -> str:
        """
        Renders the template with `values`.

        With a `contract` (the one the template was checked against), names
        resolve to the scope that declares them, as in the static check.
        Without one, a name resolves to the innermost scope holding a value.
        """
        out: List[str] = []
        _render_nodes(list(self.nodes), [_Frame(values, None, None, contract)], out)
        return "".join(out)
