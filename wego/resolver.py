"""Transitive dependency resolution over the manifest component list.

Dependencies are declared by name only, so the closure is plain reachability
in the graph whose nodes are entry names and whose edges are declared
dependencies. A worklist keeps each name from being expanded twice, which
also makes cycles harmless.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Sequence

from wego.models import ManifestEntry


def _dependency_index(catalog: Sequence[ManifestEntry]) -> dict[str, list[str]]:
    index: dict[str, list[str]] = {}
    for entry in catalog:
        deps = index.setdefault(entry.name, [])
        deps.extend(d for d in entry.dependencies if d not in deps)
    return index


def resolve_closure(seed: Iterable[str], catalog: Sequence[ManifestEntry]) -> list[str]:
    """Return every name reachable from *seed* through declared dependencies.

    The result holds each name once: seed names first in their given order,
    then newly discovered names in breadth-first order. Names missing from
    *catalog* are kept as unresolved leaves; they fail later at download
    time, not here.

    Example::

        catalog = [ManifestEntry(name="A", dependencies=["B"]), ManifestEntry(name="B")]
        resolve_closure(["A"], catalog) -> ["A", "B"]
    """
    index = _dependency_index(catalog)
    closure: dict[str, None] = {}
    pending: deque[str] = deque()

    for name in seed:
        if name not in closure:
            closure[name] = None
            pending.append(name)

    while pending:
        current = pending.popleft()
        for dep in index.get(current, ()):
            if dep not in closure:
                closure[dep] = None
                pending.append(dep)

    return list(closure)


def find_missing(names: Iterable[str], catalog: Sequence[ManifestEntry]) -> list[str]:
    """Return the names in *names* that no catalog entry declares."""
    known = {entry.name for entry in catalog}
    return [name for name in names if name not in known]
