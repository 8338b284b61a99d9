"""Program-level type checking with the built-in environment."""

from __future__ import annotations

from dataclasses import dataclass

from relanote.errors import Span, TypeCheckError
from relanote.inference import InferenceContext
from relanote.syntax import (
    ChordDef,
    Export,
    ExprStmt,
    FunctionDef,
    IdentPattern,
    Import,
    Item,
    LetBinding,
    ModDecl,
    Program,
    ScaleDef,
    SetBinding,
    SynthDef,
    UseDecl,
)
from relanote.types import Prim, Type, TypeScheme, array, function, function_n

_SYNTH_PRESETS = (
    # 8-bit
    "Chiptune", "Chip8bit", "NES", "GameBoy",
    # classic
    "FatBass", "SoftPad", "Lead", "Pluck", "Strings", "Organ",
    # drums
    "Kick", "Snare", "HiHat", "OpenHat", "Tom", "Clap",
)

_FIXED_BUILTINS: dict[str, Type] = {
    "reverse": function(Prim.BLOCK, Prim.BLOCK),
    "transpose": function_n([Prim.INTERVAL, Prim.BLOCK], Prim.BLOCK),
    "repeat": function_n([Prim.INT, Prim.BLOCK], Prim.BLOCK),
    "metronome": function_n([Prim.INT, Prim.INT], Prim.BLOCK),
    "swing": function(Prim.BLOCK, Prim.BLOCK),
    "double_time": function(Prim.BLOCK, Prim.BLOCK),
    "reverb": function_n([Prim.FLOAT, Prim.BLOCK], Prim.PART),
    "hall_reverb": function(Prim.BLOCK, Prim.PART),
    "room_reverb": function(Prim.BLOCK, Prim.PART),
    "plate_reverb": function(Prim.BLOCK, Prim.PART),
    "dry": function(Prim.BLOCK, Prim.PART),
    "volume": function_n([Prim.FLOAT, Prim.BLOCK], Prim.PART),
    "voice": function_n([Prim.SYNTH, Prim.BLOCK], Prim.PART),
    "cutoff": function_n([Prim.FLOAT, Prim.PART], Prim.PART),
    "resonance": function_n([Prim.FLOAT, Prim.PART], Prim.PART),
    "detune": function_n([Prim.FLOAT, Prim.PART], Prim.PART),
    "adsr": function_n(
        [Prim.FLOAT, Prim.FLOAT, Prim.FLOAT, Prim.FLOAT, Prim.PART], Prim.PART
    ),
}


@dataclass(frozen=True)
class Diagnostic:
    """A message about a region of source text."""

    message: str
    span: Span
    severity: str = "error"

    @property
    def is_error(self) -> bool:
        return self.severity == "error"


class TypeChecker:
    """Checks the items of a program against the built-in environment."""

    def __init__(self) -> None:
        self._ctx = InferenceContext()
        self._add_builtins()

    def _add_builtins(self) -> None:
        ctx = self._ctx
        for name, ty in _FIXED_BUILTINS.items():
            ctx.bind(name, TypeScheme.mono(ty))
        for name in _SYNTH_PRESETS:
            ctx.bind(name, TypeScheme.mono(Prim.SYNTH))

        # map : (a -> b) -> [a] -> [b]
        a = ctx.fresh_var()
        b = ctx.fresh_var()
        ctx.bind(
            "map",
            TypeScheme.mono(function_n([function(a, b), array(a)], array(b))),
        )
        ctx.bind("compose", TypeScheme.mono(function(array(Prim.SECTION), Prim.SONG)))
        ctx.bind("play", TypeScheme.mono(function_n([Prim.BLOCK, Prim.PART], Prim.PART)))
        ctx.bind(
            "apply_env",
            TypeScheme.mono(function_n([Prim.ENVELOPE, Prim.PART], Prim.PART)),
        )
        ctx.bind("render", TypeScheme.mono(function_n([Prim.SONG, Prim.UNIT], Prim.UNIT)))

    def check_program(self, program: Program) -> list[Diagnostic]:
        """Check every item, returning one diagnostic per failing item."""
        diagnostics = []
        for item in program.items:
            try:
                self._check_item(item)
            except TypeCheckError as err:
                diagnostics.append(Diagnostic(str(err), err.span))
        return diagnostics

    def lookup_type(self, name: str) -> Type | None:
        """Return the current type of a name, or None if it is unbound."""
        scheme = self._ctx.lookup(name)
        if scheme is None:
            return None
        return self._ctx.apply(scheme.ty)

    def _check_item(self, item: Item) -> None:
        ctx = self._ctx
        match item:
            case ScaleDef():
                ctx.bind(item.name, TypeScheme.mono(Prim.SCALE))
            case ChordDef():
                ctx.bind(item.name, TypeScheme.mono(Prim.CHORD))
            case SynthDef():
                ctx.bind(item.name, TypeScheme.mono(Prim.SYNTH))
            case LetBinding():
                scheme = ctx.generalize(ctx.infer_expr(item.value))
                if isinstance(item.pattern, IdentPattern):
                    ctx.bind(item.pattern.name, scheme)
            case SetBinding():
                ctx.bind(item.name, ctx.generalize(ctx.infer_expr(item.value)))
            case FunctionDef():
                ctx.push_scope()
                params = []
                for param in item.params:
                    ty = ctx.fresh_var()
                    if isinstance(param, IdentPattern):
                        ctx.bind_mono(param.name, ty)
                    params.append(ty)
                body = ctx.infer_expr(item.body)
                ctx.pop_scope()
                ctx.bind(item.name, ctx.generalize(function_n(params, body)))
            case Import() | Export() | ModDecl() | UseDecl():
                pass
            case ExprStmt():
                ctx.infer_expr(item.expr)
            case _:
                raise TypeError(f"not an item: {item!r}")