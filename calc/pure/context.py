"""Symbol table for the calc language. A Context maps names to Symbols: variables hold a value, functions hold their
arity and a (shared) body tree, and arguments hold the position of a parameter within the function being parsed.

The parser consults the Context while parsing, so the Context decides which identifiers are legal on a given line.
"""

from dataclasses import dataclass


class Symbol:
    """Superclass of every kind of entry in a Context. Symbols are immutable: updates replace the entry."""


@dataclass(frozen=True)
class Variable(Symbol):
    value: float


@dataclass(frozen=True)
class Function(Symbol):
    arity: int
    body: object  # calc.pure.tree.Node, shared with every Call parsed after the definition


@dataclass(frozen=True)
class Argument(Symbol):
    index: int


class Context:
    """Governs the symbols visible to a line (or, for a derived context, to a function body)."""

    def __init__(self, symbols=None):
        self.symbols = dict(symbols) if symbols else {}

    @classmethod
    def function_ctx(cls, params, parent):
        """Returns the context a function body is parsed in: the functions of parent plus an Argument for every name in
        params by position. The parent's variables are deliberately left out.
        """
        symbols = {name: sym for name, sym in parent.symbols.items() if isinstance(sym, Function)}
        for idx, name in enumerate(params):
            symbols[name] = Argument(idx)
        return cls(symbols)

    def update_var(self, name, value):
        """Binds name to a Variable of value. Does nothing if name is bound to a Function or an Argument."""
        if self.is_var(name):
            self.symbols[name] = Variable(value)

    def update_func(self, function_def):
        """Binds function_def.name to a Function, replacing any arity and body previously bound to it."""
        self.symbols[function_def.name] = Function(function_def.arity, function_def.body)

    def is_var(self, name):
        """Whether name can be used as a variable. Names that are not bound at all can."""
        return isinstance(self.symbols.get(name, Variable(0.0)), Variable)

    def is_func(self, name):
        """Whether name can be used as a function. Names that are not bound at all can."""
        return isinstance(self.symbols.get(name, Function(0, None)), Function)

    def _get(self, name, kind):
        sym = self.symbols.get(name)
        return sym if isinstance(sym, kind) else None

    def get_var(self, name):
        sym = self._get(name, Variable)
        return sym.value if sym else None

    def get_arg(self, name):
        sym = self._get(name, Argument)
        return sym.index if sym else None

    def get_arity(self, name):
        sym = self._get(name, Function)
        return sym.arity if sym else None

    def get_func(self, name):
        sym = self._get(name, Function)
        return sym.body if sym else None

    def variables(self):
        """Returns sorted list of (name, value) for every variable."""
        return sorted((name, sym.value) for name, sym in self.symbols.items() if isinstance(sym, Variable))

    def functions(self):
        """Returns sorted list of (name, Function) for every function."""
        return sorted(((name, sym) for name, sym in self.symbols.items() if isinstance(sym, Function)),
                      key=lambda item: item[0])

    def copy(self):
        """Shallow copy. Symbols are immutable, so the copy can be mutated without affecting self."""
        return Context(self.symbols)

    def commit(self, other):
        """Adopts every symbol of other, typically a copy of self that a line has been evaluated against."""
        self.symbols = dict(other.symbols)

    def __contains__(self, name):
        return name in self.symbols

    def __repr__(self):
        return f"Context({self.symbols!r})"
