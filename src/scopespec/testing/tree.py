"""Declaration tree: scopes, bindings, hooks and examples."""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any

from scopespec.errors import DuplicateBindingError, StructureError
from scopespec.testing.environment import Environment, ExampleBindings
from scopespec.testing.tags import TagData, merge_tag_data


logger = logging.getLogger(__name__)

Thunk = Callable[..., Any]
Hook = Callable[..., Any]

_example_ids = itertools.count(1)


@dataclass(frozen=True)
class Binding:
    """A named fixture thunk, memoized once per example."""

    name: str
    thunk: Thunk
    eager: bool = False


@dataclass(eq=False)
class Example:
    """One leaf example closure bound to the scope that declared it."""

    body: Callable[..., Any]
    scope: ScopeNode
    description: str | None = None
    tags: TagData = field(default_factory=TagData)
    location: str | None = None
    id: int = field(default_factory=lambda: next(_example_ids))

    @property
    def tag_data(self) -> TagData:
        """Tags of every enclosing scope merged with the example's own."""
        return merge_tag_data(*(s.tags for s in self.scope.chain()), self.tags)

    @property
    def scope_path(self) -> list[str]:
        return self.scope.description_path

    @property
    def full_description(self) -> str:
        parts = [*self.scope_path]
        if self.description:
            parts.append(self.description)
        return " ".join(parts)


@dataclass(eq=False)
class ScopeNode:
    """A named grouping of bindings, hooks, examples and child scopes."""

    description: str
    parent: ScopeNode | None = None
    described: Any = None
    tags: TagData = field(default_factory=TagData)
    bindings: dict[str, Binding] = field(default_factory=dict)
    setups: list[Hook] = field(default_factory=list)
    teardowns: list[Hook] = field(default_factory=list)
    # Examples and child scopes interleaved in declaration order.
    members: list[Example | ScopeNode] = field(default_factory=list)

    @property
    def examples(self) -> list[Example]:
        return [m for m in self.members if isinstance(m, Example)]

    @property
    def children(self) -> list[ScopeNode]:
        return [m for m in self.members if isinstance(m, ScopeNode)]

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def chain(self) -> list[ScopeNode]:
        """Scopes from the root down to this one."""
        nodes: list[ScopeNode] = []
        node: ScopeNode | None = self
        while node is not None:
            nodes.append(node)
            node = node.parent
        nodes.reverse()
        return nodes

    @property
    def description_path(self) -> list[str]:
        return [node.description for node in self.chain() if not node.is_root]

    @property
    def environment(self) -> Environment:
        """This scope's link in the binding environment chain."""
        base = self.parent.environment if self.parent else Environment()
        return base.extend(self.bindings, described=self.described)

    def iter_examples(self) -> Iterator[Example]:
        """Depth-first, declaration order."""
        for member in self.members:
            if isinstance(member, Example):
                yield member
            else:
                yield from member.iter_examples()


class SpecTree:
    """Owns the root scope and guards declaration against running trees.

    All registration goes through this class. Once :meth:`freeze` is called
    (the runner does so before executing the first example) any further
    registration raises :class:`~scopespec.errors.StructureError`.
    """

    def __init__(self, description: str = "") -> None:
        self.root = ScopeNode(description=description)
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        self._frozen = True

    def _check_open(self, what: str) -> None:
        if self._frozen:
            msg = f"Cannot register {what} after execution has begun"
            raise StructureError(msg)

    def register_scope(
        self,
        parent: ScopeNode | None,
        description: str,
        *,
        described: Any = None,
        tags: TagData | None = None,
    ) -> ScopeNode:
        self._check_open(f"scope '{description}'")
        parent = parent or self.root
        node = ScopeNode(
            description=description,
            parent=parent,
            described=described,
            tags=tags or TagData(),
        )
        parent.members.append(node)
        logger.debug("Registered scope %s", " > ".join(node.description_path))
        return node

    def register_binding(
        self,
        scope: ScopeNode,
        name: str,
        thunk: Thunk,
        eager: bool = False,
    ) -> Binding:
        self._check_open(f"binding '{name}'")
        if not name.isidentifier():
            msg = f"Binding name must be a valid identifier, got {name!r}"
            raise StructureError(msg)
        if hasattr(ExampleBindings, name):
            msg = f"Binding name '{name}' is reserved"
            raise StructureError(msg)
        if not callable(thunk):
            msg = f"Binding '{name}' needs a callable thunk, got {type(thunk).__name__}"
            raise StructureError(msg)
        if name in scope.bindings:
            raise DuplicateBindingError(name, scope.description_path)
        binding = Binding(name=name, thunk=thunk, eager=eager)
        scope.bindings[name] = binding
        return binding

    def register_setup(self, scope: ScopeNode, callback: Hook) -> None:
        self._check_open("setup callback")
        scope.setups.append(callback)

    def register_teardown(self, scope: ScopeNode, callback: Hook) -> None:
        self._check_open("teardown callback")
        scope.teardowns.append(callback)

    def register_example(
        self,
        scope: ScopeNode,
        body: Callable[..., Any],
        description: str | None = None,
        *,
        tags: TagData | None = None,
        location: str | None = None,
    ) -> Example:
        self._check_open("example")
        if scope is self.root:
            msg = "Examples must be declared inside a scope"
            raise StructureError(msg)
        example = Example(
            body=body,
            scope=scope,
            description=description,
            tags=tags or TagData(),
            location=location,
        )
        scope.members.append(example)
        return example

    def examples(self) -> list[Example]:
        return list(self.root.iter_examples())


__all__ = ["Binding", "Example", "ScopeNode", "SpecTree"]
