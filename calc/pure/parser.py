"""Recursive descent parser for the calc language. Parsing is interleaved with name resolution: whether an identifier is a
variable, a function argument or a function call depends on the Context the line is parsed against.

The grammar can be loosely defined as follows:

```
<line>           ::= <function_def> | <call>               ; <function_def> if the line contains "=>"
<function_def>   ::= <id> <id>* "=>" <call>                 ; body is parsed in a context of its own
<call>           ::= <function_id> <call>{arity}           ; exactly as many arguments as the function takes
                   | <additive>
<additive>       ::= <multiplicative> (("+" | "-") <multiplicative>)*
<multiplicative> ::= <terminal> (("*" | "/" | "%") <terminal>)*
<terminal>       ::= <number>
                   | "(" <additive> ")"
                   | <assign> <call>                        ; <assign> is the compound 'name =' token
                   | <variable_id>                          ; substituted by its current value
                   | <argument_id>                          ; only inside function bodies
```

Every operator applied to two operands with known values is folded into a single Value as soon as it is parsed.
"""

from calc.lang.error import ParseError
from calc.pure.context import Context
from calc.pure.lexical import Assign, FuncArrow, Id, LBracket, Number, Op, Operator, RBracket
from calc.pure import tree


ADDITIVE = (Operator.ADD, Operator.SUB)
MULTIPLICATIVE = (Operator.MUL, Operator.DIV, Operator.MOD)


class Parser:
    """Parses a token sequence against a Context. Only reads from the Context: mutation happens during evaluation."""

    def __init__(self, tokens, context, pos=0):
        self.tokens = tokens
        self.context = context
        self.pos = pos

    @classmethod
    def parse(cls, tokens, context):
        """Parses a whole line of tokens into a syntax tree. Raises ParseError if the tokens are not a single function
        definition or expression.
        """
        parser = cls(list(tokens), context)
        if any(isinstance(token, FuncArrow) for token in parser.tokens):
            root = parser.parse_function()
        else:
            root = parser.parse_call()

        if parser.peek() is not None:
            msg = "Input not fully consumed, unexpected token '{}'"
            raise ParseError(msg, str(parser.peek()))
        return root

    def peek(self):
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def next(self):
        token = self.peek()
        if token is not None:
            self.pos += 1
        return token

    def _next_operator(self, operators):
        """Consumes and returns the next token's operator if it is one of operators, else None."""
        token = self.peek()
        if isinstance(token, Op) and token.operator in operators:
            self.next()
            return token.operator
        return None

    def _fold(self, op, left, right):
        """Returns BinaryOp(op, left, right), or a Value if both operands are known already."""
        node = tree.BinaryOp(op, left, right)
        value = node.value()
        return tree.Value(value) if value is not None else node

    def parse_terminal(self):
        token = self.next()

        if isinstance(token, Number):
            return tree.Value(token.value)

        elif isinstance(token, LBracket):
            expr = self.parse_additive()
            if not isinstance(self.peek(), RBracket):
                found = self.peek()
                raise ParseError("Invalid token '{}', expected ')'", str(found) if found else "end of input")
            self.next()
            return expr

        elif isinstance(token, Assign):
            if not self.context.is_var(token.name):
                raise ParseError("Assigning to symbol which is not variable: '{}'", token.name)
            return tree.Assign(token.name, self.parse_call())

        elif isinstance(token, Id):
            value = self.context.get_var(token.name)
            if value is not None:
                return tree.Value(value)

            index = self.context.get_arg(token.name)
            if index is not None:
                return tree.Argument(index, token.name)

            raise ParseError("Unresolved symbol: '{}'", token.name)

        elif token is None:
            raise ParseError("Unexpected end of input while parsing terminal expression")

        raise ParseError("Unexpected token while parsing terminal expression: '{}'", str(token))

    def parse_multiplicative(self):
        result = self.parse_terminal()

        op = self._next_operator(MULTIPLICATIVE)
        while op is not None:
            result = self._fold(op, result, self.parse_terminal())
            op = self._next_operator(MULTIPLICATIVE)

        return result

    def parse_additive(self):
        result = self.parse_multiplicative()

        op = self._next_operator(ADDITIVE)
        while op is not None:
            result = self._fold(op, result, self.parse_multiplicative())
            op = self._next_operator(ADDITIVE)

        return result

    def parse_call(self):
        """Parses a function call if the next token names a function, otherwise an arithmetic expression."""
        token = self.peek()
        if not (isinstance(token, Id) and self.context.is_func(token.name)):
            return self.parse_additive()

        self.next()
        body = self.context.get_func(token.name)
        if body is None:  # is_func holds for unbound names
            raise ParseError("Unresolved symbol: '{}'", token.name)

        args = [self.parse_call() for __ in range(self.context.get_arity(token.name))]
        return tree.Call(token.name, body, args)

    def parse_function(self):
        """Parses 'name params... => body'. The body only sees functions and its own parameters."""
        token = self.next()
        if not isinstance(token, Id):
            raise ParseError("Expected function name, but got '{}'", str(token) if token else "end of input")

        name = token.name
        if not self.context.is_func(name):
            raise ParseError("Expected function name, but got non-function symbol: '{}'", name)

        params = []
        while isinstance(self.peek(), Id):
            param = self.next().name
            if param in params:
                raise ParseError("Duplicate parameter '{}' in definition of '{}'", (param, name))
            params.append(param)

        if not isinstance(self.next(), FuncArrow):
            raise ParseError("Expected => token in definition of '{}'", name)

        body_parser = Parser(self.tokens, Context.function_ctx(params, self.context), self.pos)
        body = body_parser.parse_call()
        self.pos = body_parser.pos

        return tree.FunctionDef(name, params, body)
