"""Scope frames for the lox interpreter.

An Environment is one frame of name: value bindings plus a link to at most one enclosing frame, forming a chain from
the innermost scope out to the global frame (the one with no enclosing link). A name can be bound to UNINITIALIZED,
which is distinct from nil: 'var a;' declares a without giving it a value.
"""

from lox.lang.error import VariableNotFoundError, VariableNotInitializedError


class _Uninitialized:
    """Marker for a declared-but-unassigned binding."""

    def __repr__(self):
        return "UNINITIALIZED"


UNINITIALIZED = _Uninitialized()


class Environment:
    """A scope frame. Lookups and assignments that miss here recurse into self.enclosing."""

    def __init__(self, enclosing=None):
        self.enclosing = enclosing
        self.values = {}

    def define(self, name, value=UNINITIALIZED):
        """Binds name in this frame, overwriting any binding of the same name in this frame. Never fails."""
        self.values[name] = value

    def assign(self, name, value, token=None):
        """Rebinds name in the nearest frame that has it. Never creates a binding. token is only for diagnostics."""
        if name in self.values:
            self.values[name] = value
        elif self.enclosing is not None:
            self.enclosing.assign(name, value, token)
        else:
            raise VariableNotFoundError("undefined variable '{}'", name, token)

    def get(self, name, token=None):
        """Returns the value bound to name in the nearest frame that has it."""
        if name in self.values:
            value = self.values[name]
            if value is UNINITIALIZED:
                raise VariableNotInitializedError("variable '{}' is not initialized", name, token)
            return value
        if self.enclosing is not None:
            return self.enclosing.get(name, token)
        raise VariableNotFoundError("undefined variable '{}'", name, token)

    def __contains__(self, name):
        return name in self.values or (self.enclosing is not None and name in self.enclosing)

    def __repr__(self):
        return f"Environment({self.values!r}, enclosing={self.enclosing!r})"
