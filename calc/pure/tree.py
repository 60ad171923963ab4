"""Syntax tree of the calc language. Every node can report the value it has regardless of context (if any), and can be
evaluated against a Context and the argument list of the function call it is evaluated within (empty at top level).

evaluate returns None when a node has no numeric result: function definitions, and nodes that depend on an argument
the current call did not supply.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from calc.lang.numerical import number
from calc.pure.lexical import Operator


class Node(ABC):
    """Superclass of all syntax tree nodes."""

    @property
    def priority(self):
        """Top level operator priority: 0 for atomic nodes, otherwise the priority of the node's operator."""
        return 0

    @property
    def nodes(self):
        """Child nodes, left to right."""
        return []

    def value(self):
        """Value of this node if it is known without any context, else None."""
        return None

    @abstractmethod
    def evaluate(self, context, args):
        """Evaluates this node, possibly mutating context. args are the arguments of the enclosing call."""

    def display(self, indents=0):
        """Recursively displays tree with readable format.

        Format:
        <Node>(expr='<expr>', nodes=[
            <Node>(expr='<expr>', nodes=[
                ...
                <Node>(expr='<expr>')  # <-- if nodes is empty
            ])
        ])
        """
        result = f"{'    ' * indents}{type(self).__name__}(expr='{self}'"
        if self.nodes:
            result += ", nodes=["
            for node in self.nodes:
                result += "\n" + node.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}]"
        return result + ")"


@dataclass
class Value(Node):
    """Literal, or the value of a variable substituted while parsing."""
    num: float

    def value(self):
        return self.num

    def evaluate(self, context, args):
        return self.num

    def __str__(self):
        if self.num < 0:  # there is no unary minus
            return f"(0 - {number(-self.num)})"
        return number(self.num)


@dataclass
class Argument(Node):
    """Placeholder for the index-th argument of a function, only known once the function is called."""
    index: int
    name: str = field(default=None, compare=False)

    def evaluate(self, context, args):
        return args[self.index] if self.index < len(args) else None

    def __str__(self):
        return self.name if self.name is not None else f"${self.index}"


@dataclass
class Assign(Node):
    """'name = expr'. Assignment is an expression: it evaluates to the assigned value."""
    name: str
    expr: Node

    @property
    def nodes(self):
        return [self.expr]

    def evaluate(self, context, args):
        value = self.expr.evaluate(context, args)
        if value is None:
            return None

        context.update_var(self.name, value)
        return value

    def __str__(self):
        return f"{self.name} = {self.expr}"


@dataclass
class BinaryOp(Node):
    op: Operator
    left: Node
    right: Node

    @property
    def priority(self):
        return self.op.priority

    @property
    def nodes(self):
        return [self.left, self.right]

    def value(self):
        left, right = self.left.value(), self.right.value()
        if left is None or right is None:
            return None
        return self.op.eval(left, right)

    def evaluate(self, context, args):
        left = self.left.evaluate(context, args)
        right = self.right.evaluate(context, args)
        if left is None or right is None:
            return None
        return self.op.eval(left, right)

    def _operand(self, node, right):
        # operators are left-associative, so a right operand of equal priority still needs brackets
        needs_brackets = isinstance(node, Assign) or 0 < node.priority < self.priority
        needs_brackets = needs_brackets or (right and node.priority == self.priority)
        return f"({node})" if needs_brackets else str(node)

    def __str__(self):
        return f"{self._operand(self.left, False)} {self.op.value} {self._operand(self.right, True)}"


@dataclass
class Call(Node):
    """Call of a function. body is the function's body as it was when this call was parsed."""
    name: str
    body: Node
    args: list

    @property
    def nodes(self):
        return list(self.args)

    def evaluate(self, context, args):
        values = [arg.evaluate(context, args) for arg in self.args]
        if any(value is None for value in values):
            return None
        return self.body.evaluate(context, values)

    def __str__(self):
        return " ".join([self.name] + [str(arg) for arg in self.args])


@dataclass
class FunctionDef(Node):
    """'name params... => body'. Evaluating a definition registers it in the context; it has no value."""
    name: str
    params: list
    body: Node

    @property
    def arity(self):
        return len(self.params)

    @property
    def nodes(self):
        return [self.body]

    def evaluate(self, context, args):
        context.update_func(self)
        return None

    def __str__(self):
        return " ".join([self.name] + list(self.params) + ["=>", str(self.body)])
