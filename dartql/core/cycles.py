"""Fragment dependency cycles.

A fragment that (directly or through another fragment) spreads itself is
invalid GraphQL. Two-node cycles, and fragments spreading themselves, are
broken by replacing one spread with a minimal set of scalar fields.
Longer cycles are only reported.
"""

import logging
import re
from dataclasses import dataclass, field

from .inspector import fragment_name, lower_first, upper_first
from .ir import FragmentDefinition
from .parser import SchemaParser
from .scalars import minimal_scalar_fields

logger = logging.getLogger(__name__)

TOKEN = re.compile(r"\b[A-Za-z0-9_]+\b")
UNALIASED_FIELDS = frozenset({"id"})


@dataclass
class FragmentGraph:
    """Spread dependencies between generated fragments, keyed by type name."""
    fragments: dict[str, FragmentDefinition]
    edges: dict[str, list[str]] = field(default_factory=dict)

    @classmethod
    def from_fragments(cls, fragments: dict[str, FragmentDefinition]) -> "FragmentGraph":
        edges = {
            name: list(fragment.dependencies)
            for name, fragment in fragments.items()
        }
        return cls(fragments=fragments, edges=edges)

    def depends_on(self, source: str, target: str) -> bool:
        return target in self.edges.get(source, [])

    def score(self, name: str) -> int:
        """Size heuristic: fragment line count plus number of spreads."""
        fragment = self.fragments.get(name)
        lines = fragment.line_count if fragment else 0
        return lines + len(self.edges.get(name, []))

    def remove_edge(self, source: str, target: str):
        self.edges[source] = [d for d in self.edges.get(source, []) if d != target]

    def mutual_pairs(self) -> list[tuple[str, str]]:
        """Return (a, b) for every a -> b edge whose reverse edge exists.

        Self-spreads come out as (a, a). Both directions of a pair are
        reported; callers de-duplicate.
        """
        pairs = []
        for a, deps in self.edges.items():
            for b in deps:
                if self.depends_on(b, a):
                    pairs.append((a, b))
        return pairs

    def long_cycles(self) -> list[list[str]]:
        """Strongly connected components with three or more fragments."""
        index: dict[str, int] = {}
        lowlink: dict[str, int] = {}
        stack: list[str] = []
        on_stack: set[str] = set()
        components: list[list[str]] = []

        def visit(node: str):
            index[node] = lowlink[node] = len(index)
            stack.append(node)
            on_stack.add(node)
            for dep in self.edges.get(node, []):
                if dep not in self.edges:
                    continue
                if dep not in index:
                    visit(dep)
                    lowlink[node] = min(lowlink[node], lowlink[dep])
                elif dep in on_stack:
                    lowlink[node] = min(lowlink[node], index[dep])
            if lowlink[node] == index[node]:
                component = []
                while True:
                    member = stack.pop()
                    on_stack.discard(member)
                    component.append(member)
                    if member == node:
                        break
                if len(component) >= 3:
                    components.append(sorted(component))

        for node in self.edges:
            if node not in index:
                visit(node)
        return components


class CycleResolver:
    """Breaks direct fragment cycles by inlining scalar fields."""

    def __init__(self, schema: SchemaParser):
        self.schema = schema

    def resolve(self, fragments: dict[str, FragmentDefinition]) -> FragmentGraph:
        """Rewrite fragments in place so no two of them spread each other.

        Returns the graph with the removed edges, for inspection.
        """
        graph = FragmentGraph.from_fragments(fragments)

        pairs = graph.mutual_pairs()
        if pairs:
            logger.warning("Fragment cycles detected, pruning")

        handled: set[tuple[str, str]] = set()
        for a, b in pairs:
            key = tuple(sorted((a, b)))
            if key in handled:
                continue
            handled.add(key)
            self._break_cycle(graph, a, b)

        for component in graph.long_cycles():
            logger.warning(
                "Fragment cycle through %s left as is; only direct cycles are inlined",
                " -> ".join(component),
            )
        return graph

    def _break_cycle(self, graph: FragmentGraph, a: str, b: str):
        # The lower-scored side loses its spread of the other side
        target = a if graph.score(a) < graph.score(b) else b
        source = b if target == a else a
        logger.warning("Cycle detected: %s <-> %s; inlining %s inside %s", a, b, source, target)

        graph.remove_edge(target, source)

        fragment = graph.fragments[target]
        inline_fields = self.inline_fields(source, fragment.text)
        fragment.text = replace_spread(fragment.text, fragment_name(source), inline_fields)
        fragment.dependencies = list(graph.edges[target])

    def inline_fields(self, source: str, target_text: str) -> list[str]:
        """Minimal fields of ``source``, aliased where they clash with ``target_text``."""
        taken = set(TOKEN.findall(target_text))
        result = []
        for name in minimal_scalar_fields(source, self.schema):
            if name not in UNALIASED_FIELDS and name in taken:
                result.append(f"{lower_first(source)}{upper_first(name)}: {name}")
            else:
                result.append(name)
        return result


def replace_spread(text: str, spread_name: str, fields: list[str]) -> str:
    """Replace each ``...spread_name`` in text with fields at the same indent."""
    pattern = re.compile(rf"([ \t]*)\.\.\.\s*{re.escape(spread_name)}\b")

    def substitute(match: re.Match) -> str:
        indent = match.group(1)
        return indent + f"\n{indent}".join(fields)

    return pattern.sub(substitute, text)
