# relanote

Type checking and module resolution for relanote, a small functional
language for writing music in relative intervals (`R`, `M3`, `P5`, ...).

The package works on syntax trees that you build yourself. It infers and
checks types with Hindley-Milner unification, and it resolves modules
and their imports from `.rela` files on disk.

## Modules

- `relanote.types`: the type representation. `Prim` holds the primitive
  types (`Int`, `Float`, `Interval`, `Block`, `Part`, `Synth`, ...);
  `FunctionType`, `TupleType`, `ArrayType` and `VarType` (wrapping a
  `TyVar`) build compound types; `TypeScheme` (with `mono` and `poly`)
  holds polymorphic types. Helpers: `function`, `function_n` (curried),
  `array`, `has_vars`, `free_vars` and `format_type`.
- `relanote.errors`: `Span`, and the exceptions raised during checking,
  all subclasses of `TypeCheckError` (which carries `message` and
  `span`): `MismatchError`, `UnificationError`,
  `UndefinedVariableError`, `UndefinedTypeError`, `OccursCheckError`,
  `NotAFunctionError`, `NotAScaleError`, `InvalidScaleIndexError` and
  `TimeAlignmentMismatchError`.
- `relanote.context`: `TypeContext`, holding the environment, nested
  scopes and the substitution, with `fresh_var`, `bind`, `bind_mono`,
  `lookup`, `push_scope`, `pop_scope`, `apply`, `instantiate`,
  `generalize`, `unify` and `occurs_in`.
- `relanote.syntax`: frozen dataclasses for the syntax tree:
  expressions (`IntegerLit`, `Ident`, `IntervalLit`, `BlockExpr`,
  `Lambda`, `Application`, `Pipe`, `Binary`, `IfExpr`, `MatchExpr`,
  `InScaleExpr`, ...), patterns (`IdentPattern`, `LiteralPattern`,
  `TuplePattern`, ...), items (`ScaleDef`, `LetBinding`, `FunctionDef`,
  `Import`, `ExprStmt`, ...) and `Program`. Every node has an optional
  `span`.
- `relanote.inference`: `InferenceContext`, a `TypeContext` with
  `infer_expr` and `infer_pattern`.
- `relanote.checker`: `TypeChecker`, which checks a whole `Program`
  against a built-in environment (`reverse`, `transpose`, `repeat`,
  `swing`, `reverb`, `volume`, `voice`, `adsr`, `map`, `compose`, the
  synth presets such as `Lead` and `Chiptune`, and more) and reports
  `Diagnostic` values; `lookup_type` gives the current type of a name.
- `relanote.resolver`: `ModuleLoader` and `ModuleResolver`, which find
  `.rela` files on search paths, follow imports depth first and raise
  `ModuleNotFound`, `CircularDependency`, `ModuleReadError` or
  `ModuleParseError` (all subclasses of `ResolveError`).

## Installation

```
pip install relanote
```

For running the tests:

```
pip install "relanote[test]"
pytest
```

## Type checking

```python
from relanote.checker import TypeChecker
from relanote.syntax import (
    Binary, BinaryOp, BlockExpr, ExprStmt, Ident, IdentPattern,
    IntegerLit, LetBinding, Pipe, Program, StringLit,
)
from relanote.types import format_type

program = Program(items=[
    LetBinding(pattern=IdentPattern("x"), value=IntegerLit(42)),
    ExprStmt(Pipe(BlockExpr(), Ident("reverse"))),
])

checker = TypeChecker()
assert checker.check_program(program) == []

print(format_type(checker.lookup_type("transpose")))  # Interval -> Block -> Block
print(format_type(checker.lookup_type("x")))          # Int
print(checker.lookup_type("undefined_name"))          # None

bad = Program(items=[
    ExprStmt(Binary(BinaryOp.ADD, StringLit("hello"), IntegerLit(1))),
])
for diagnostic in TypeChecker().check_program(bad):
    print(diagnostic.severity, diagnostic.message)
    # error cannot unify types: String and Int
```

Type errors do not stop checking: each failing item produces one
`Diagnostic` carrying the message and the span of the offending
expression, and checking carries on with the next item. Bindings made by
earlier items (`let`, `set`, `scale`, `chord`, `synth`, function
definitions) stay visible to later ones.

## Resolving modules

`ModuleResolver` takes a root directory and a parse function. The parse
function receives a module's text and returns `(program, diagnostics)`,
or `None` when the text cannot be parsed at all (which raises
`ModuleParseError`). Module `a/b` is looked up as `a/b.rela` in each
search path in turn, starting with the root; add more paths with
`resolver.loader.add_search_path(...)`.

```python
from relanote.resolver import ModuleResolver, CircularDependency
from relanote.syntax import Import, Program

def parse(text):
    items = [
        Import(line.split()[-1])
        for line in text.splitlines()
        if line.startswith("import ")
    ]
    return Program(items), []

resolver = ModuleResolver("songs", parse)
main = resolver.resolve("main")
print(main.dependencies)       # modules imported by main.rela
for module in resolver.modules():
    # dependencies come before the modules that import them
    print(resolver.loader.source_path(module.source_id))
```

Resolved modules are cached: resolving the same path again returns the
same `ResolvedModule`. An import cycle raises `CircularDependency`.

## What this package does not do

It has no parser, evaluator, formatter, MIDI or audio renderer and no
command-line program. Syntax trees are built from the classes in
`relanote.syntax`, and the resolver needs a parse function supplied by
the caller.