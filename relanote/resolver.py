"""Finding, loading and resolving modules and their imports."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Iterator, Optional

from relanote.syntax import Import, Program

ParseResult = Optional[tuple[Program, list]]
Parser = Callable[[str], ParseResult]


class ResolveError(Exception):
    """Base class for module resolution failures."""

    def __init__(self, message: str, path: Any) -> None:
        super().__init__(message)
        self.path = path


class ModuleNotFound(ResolveError):
    def __init__(self, path: str) -> None:
        super().__init__(f"module not found: {path}", path)


class CircularDependency(ResolveError):
    def __init__(self, path: str) -> None:
        super().__init__(f"circular dependency detected: {path}", path)


class ModuleReadError(ResolveError):
    def __init__(self, path: Path) -> None:
        super().__init__(f"failed to read file: {path}", path)


class ModuleParseError(ResolveError):
    def __init__(self, path: str) -> None:
        super().__init__(f"parse error in module: {path}", path)


class ModuleLoader:
    """Finds module files on the search paths and keeps their text."""

    def __init__(self, root: os.PathLike | str) -> None:
        self.root = Path(root)
        self.search_paths: list[Path] = [self.root]
        self._sources: list[tuple[Path, str]] = []

    def add_search_path(self, path: os.PathLike | str) -> None:
        self.search_paths.append(Path(path))

    def resolve_path(self, module_path: str) -> Path | None:
        """Return the first existing ``<module_path>.rela`` on the search paths."""
        file_name = module_path.replace("/", os.sep) + ".rela"
        for search_path in self.search_paths:
            candidate = search_path / file_name
            if candidate.exists():
                return candidate
        return None

    def load(self, path: os.PathLike | str) -> int:
        """Read a file and return the id under which its text is kept."""
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as err:
            raise ModuleReadError(path) from err
        self._sources.append((path, text))
        return len(self._sources) - 1

    def source_text(self, source_id: int) -> str:
        """Return the text loaded under ``source_id``."""
        return self._sources[source_id][1]

    def source_path(self, source_id: int) -> Path:
        return self._sources[source_id][0]


@dataclass
class ResolvedModule:
    """A parsed module with the modules it imports."""

    source_id: int
    program: Program
    diagnostics: list = field(default_factory=list)
    dependencies: list[str] = field(default_factory=list)


class ModuleResolver:
    """Resolves modules and, recursively, everything they import.

    ``parse`` turns source text into ``(program, diagnostics)``, or returns
    None when the text cannot be parsed at all.
    """

    def __init__(self, root: os.PathLike | str, parse: Parser) -> None:
        self.loader = ModuleLoader(root)
        self._parse = parse
        self._modules: dict[str, ResolvedModule] = {}
        self._resolving: set[str] = set()

    def resolve(self, module_path: str) -> ResolvedModule:
        """Resolve a module and its dependencies, caching the result."""
        if module_path in self._resolving:
            raise CircularDependency(module_path)
        cached = self._modules.get(module_path)
        if cached is not None:
            return cached

        path = self.loader.resolve_path(module_path)
        if path is None:
            raise ModuleNotFound(module_path)

        source_id = self.loader.load(path)
        parsed = self._parse(self.loader.source_text(source_id))
        if parsed is None:
            raise ModuleParseError(module_path)
        program, diagnostics = parsed

        self._resolving.add(module_path)
        dependencies = [item.module for item in program.items if isinstance(item, Import)]
        for dep in dependencies:
            self.resolve(dep)
        self._resolving.discard(module_path)

        resolved = ResolvedModule(source_id, program, list(diagnostics), dependencies)
        self._modules[module_path] = resolved
        return resolved

    def modules(self) -> Iterator[ResolvedModule]:
        """Iterate over resolved modules in dependency order."""
        return iter(self._modules.values())