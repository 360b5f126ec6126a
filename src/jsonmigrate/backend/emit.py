"""Override emitter: CallableMethod records -> Python source.

Every object the generated code refers to (the parent class, annotation
types, defaults, conversion helpers) is bound in ``namespace`` under a
``_jm_`` name, so the emitted text never depends on how those objects are
spelled in the user's module. The source is compiled and executed into
that namespace by the synthesizer.

Shape of one override, for a legacy method ``merge(self, a: JsonObject, *rest: JsonArray)``:

    def merge(self, a: _jm_t0, *rest: _jm_t1) -> _jm_t2:
        a = _jm_arg(a, _jm_j0, 'a')
        rest = _jm_seq(rest, _jm_j1, 'rest', _jm_tuple)
        return _jm_result(_jm_parent.merge(self, a, *rest))
"""

from __future__ import annotations

import inspect
import types
import typing
from typing import Any

from ..errors import InstrumentationError
from ..ir import CallableMethod, ParamInfo, SequenceKind, Visibility, node_type_for

RESERVED_PREFIX = "_jm_"

_P = inspect.Parameter


def _allows_none(annotation: Any) -> bool:
    origin = typing.get_origin(annotation)
    if origin is typing.Union or origin is types.UnionType:
        return type(None) in typing.get_args(annotation)
    return False


class OverrideEmitter:
    """Emit Python source for the converting overrides of one generated class."""

    def __init__(self, parent: type, class_name: str, convert: bool) -> None:
        self.parent = parent
        self.class_name = class_name
        self.convert = convert
        self.indent = 0
        self.lines: list[str] = []
        self.namespace: dict[str, object] = {
            "_jm_parent": parent,
            "_jm_list": list,
            "_jm_tuple": tuple,
        }
        self.handle_attrs: dict[str, str] = {}
        self._counters: dict[str, int] = {}

    def emit(self, methods: list[CallableMethod]) -> str:
        """Emit source for all overrides."""
        self.indent = 0
        self.lines = []
        self._line(f'"""Overrides generated for {self.parent.__module__}.{self.parent.__qualname__}."""')
        for method in methods:
            self._line()
            self._emit_method(method)
        return "\n".join(self.lines) + "\n"

    def _line(self, text: str = "") -> None:
        if text:
            self.lines.append("    " * self.indent + text)
        else:
            self.lines.append("")

    def _bind(self, obj: object, prefix: str) -> str:
        n = self._counters.get(prefix, 0)
        self._counters[prefix] = n + 1
        name = f"{RESERVED_PREFIX}{prefix}{n}"
        self.namespace[name] = obj
        return name

    # ------------------------------------------------------------------
    # Annotations
    # ------------------------------------------------------------------

    def _param_annotation(self, param: ParamInfo, converting: bool) -> Any:
        if not (converting and param.is_json):
            return param.annotation
        node_type = node_type_for(param.json_type)
        if param.sequence is SequenceKind.LIST:
            swapped: Any = list[node_type]
        elif param.sequence is SequenceKind.TUPLE:
            swapped = tuple[node_type, ...]
        else:
            swapped = node_type
        if param.sequence is not SequenceKind.VARARGS and _allows_none(param.annotation):
            swapped = swapped | None
        return swapped

    def _return_annotation(self, method: CallableMethod, converting: bool) -> Any:
        if not (converting and method.returns_json):
            return method.return_annotation
        swapped: Any = node_type_for(method.return_json_type)
        if _allows_none(method.return_annotation):
            swapped = swapped | None
        return swapped

    # ------------------------------------------------------------------
    # Methods
    # ------------------------------------------------------------------

    def _emit_method(self, method: CallableMethod) -> None:
        for param in method.params:
            if param.name.startswith(RESERVED_PREFIX):
                raise InstrumentationError(
                    f"{method.qualified()}: parameter name '{param.name}' uses reserved prefix {RESERVED_PREFIX}"
                )
        convert_params = self.convert and method.is_legacy
        convert_result = self.convert and method.returns_json
        signature, call_args = self._signature(method, convert_params)

        ret = self._return_annotation(method, convert_result)
        ret_text = "" if ret is inspect.Signature.empty else " -> " + self._bind(ret, "t")
        keyword = "async def" if method.is_async else "def"
        self._line(f"{keyword} {method.name}({', '.join(signature)}){ret_text}:")
        self.indent += 1
        if convert_params:
            for param in method.json_params:
                self._emit_param_conversion(param)
        call = f"{self._target(method)}({', '.join(call_args)})"
        if method.is_async:
            call = f"(await {call})"
        if convert_result:
            self._line(f"return _jm_result({call})")
        else:
            self._line(f"return {call}")
        self.indent -= 1

    def _signature(self, method: CallableMethod, converting: bool) -> tuple[list[str], list[str]]:
        sig = ["self"]
        call = ["self"]
        last_posonly = max(
            (i for i, p in enumerate(method.params) if p.kind is _P.POSITIONAL_ONLY),
            default=-1,
        )
        star_seen = False
        for i, param in enumerate(method.params):
            if param.kind is _P.KEYWORD_ONLY and not star_seen:
                sig.append("*")
                star_seen = True
            if param.kind is _P.VAR_POSITIONAL:
                star_seen = True
                text = "*" + param.name
                call.append("*" + param.name)
            elif param.kind is _P.VAR_KEYWORD:
                text = "**" + param.name
                call.append("**" + param.name)
            elif param.kind is _P.KEYWORD_ONLY:
                text = param.name
                call.append(f"{param.name}={param.name}")
            else:
                text = param.name
                call.append(param.name)
            annotation = self._param_annotation(param, converting)
            if annotation is not inspect.Parameter.empty:
                text += ": " + self._bind(annotation, "t")
            if param.has_default:
                sep = " = " if annotation is not inspect.Parameter.empty else "="
                text += sep + self._bind(param.default, "d")
            sig.append(text)
            if i == last_posonly:
                sig.append("/")
        return sig, call

    def _emit_param_conversion(self, param: ParamInfo) -> None:
        json_type = self._bind(param.json_type, "j")
        name = param.name
        if param.sequence is SequenceKind.NONE:
            self._line(f"{name} = _jm_arg({name}, {json_type}, {name!r})")
        elif param.sequence is SequenceKind.LIST:
            self._line(f"{name} = _jm_seq({name}, {json_type}, {name!r}, _jm_list)")
        else:
            self._line(f"{name} = _jm_seq({name}, {json_type}, {name!r}, _jm_tuple)")

    def _target(self, method: CallableMethod) -> str:
        if method.visibility is Visibility.PRIVATE:
            attr = f"{RESERVED_PREFIX}handle_{len(self.handle_attrs)}"
            self.handle_attrs[method.name] = attr
            return f"_jm_owner.{attr}.invoke"
        return f"_jm_parent.{method.name}"
