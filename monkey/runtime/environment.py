"""Lexical scopes for the Monkey evaluator."""


class Environment:
    """Maps names to runtime values. Lookups fall back to the enclosing (outer) Environment; assignments always go
    to this one, so an inner scope can shadow an outer name but never rebind it.
    """

    def __init__(self, outer=None):
        self.store = {}
        self.outer = outer

    @classmethod
    def new_enclosed(cls, outer):
        """New scope nested in outer, e.g. for a function call (outer is the function's defining Environment)."""
        return cls(outer)

    def get(self, name):
        """Returns the value bound to name in this scope or the nearest enclosing one, or None if unbound."""
        env = self
        while env is not None:
            if name in env.store:
                return env.store[name]
            env = env.outer
        return None

    def set(self, name, value):
        self.store[name] = value
        return value

    def __repr__(self):
        return f"Environment(names={sorted(self.store)}, enclosed={self.outer is not None})"
