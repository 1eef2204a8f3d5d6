"""Lexical scopes. Each Environment maps names to values and may point at an enclosing Environment; the chain is
walked outward on lookup and never written through.

Scopes form a tree rooted at a session's (or a single evaluation's) root environment. A scope stays alive for as
long as any Function value that captured it, or any call in progress inside it, still references it.
"""


class Environment:
    """Chained name -> value mapping."""

    def __init__(self, store=None, outer=None):
        self.store = {} if store is None else store
        self.outer = outer

    def get(self, name):
        """Returns the value bound to name in the nearest scope that binds it, or None if no scope does."""
        env = self
        while env is not None:
            if name in env.store:
                return env.store[name]
            env = env.outer
        return None

    def set(self, name, value):
        """Binds name in this scope only, replacing any local binding. Returns value."""
        self.store[name] = value
        return value

    def enclosed(self):
        """Returns a new, empty scope whose enclosing scope is this one."""
        return Environment(outer=self)

    def __repr__(self):
        return f"Environment({sorted(self.store)}, outer={self.outer!r})"
