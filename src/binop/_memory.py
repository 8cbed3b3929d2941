"""Lexical environments."""

__all__ = ["Memory"]

import binop


class Memory:
    """Chained mapping from names to values.

    Lookups walk outward through parents. Bindings are never removed, and
    a closure keeps its defining chain alive for as long as it is
    reachable.

    Args:
        parent: (Memory | None) Enclosing scope

    Attributes:
        parent: (Memory | None) Enclosing scope
        bindings: (dict[str, BoObject]) Names bound directly in this scope
    """

    __slots__ = ("parent", "bindings")

    def __init__(self, parent=None):
        self.parent = parent
        self.bindings = {}

    def __repr__(self):
        return f"Memory<{len(self.bindings)} names, depth {self.depth}>"

    def __contains__(self, name):
        return self.find_owner(name) is not None

    @property
    def depth(self):
        """(int) Number of parents above this scope."""
        depth = 0
        scope = self.parent
        while scope is not None:
            depth += 1
            scope = scope.parent
        return depth

    def find_owner(self, name):
        """Find the scope in the chain that binds name.

        Returns:
            (Memory | None) Nearest scope holding the binding
        """
        scope = self
        while scope is not None:
            if name in scope.bindings:
                return scope
            scope = scope.parent
        return None

    def lookup(self, name):
        """Value bound to name, or None when unbound."""
        owner = self.find_owner(name)
        if owner is None:
            return None
        return owner.bindings[name]

    def get(self, name):
        """Value bound to name.

        Raises:
            EvalError: Name is not bound anywhere in the chain
        """
        owner = self.find_owner(name)
        if owner is None:
            raise binop.EvalError(f"Unbound name '{name}'")
        return owner.bindings[name]

    def define(self, name, value):
        """Bind name in this scope, shadowing any outer binding."""
        self.bindings[name] = value
        return value

    def set(self, name, value):
        """Rebind name where it is already bound, else define it here."""
        owner = self.find_owner(name) or self
        owner.bindings[name] = value
        return value

    def extend(self):
        """Create a child scope of this one."""
        return Memory(self)
