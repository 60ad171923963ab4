import unittest

from calc.lang.error import ParseError
from calc.lang.numerical import f32
from calc.pure.context import Context
from calc.pure.lexical import Operator, tokenize
from calc.pure.parser import Parser
from calc.pure.tree import Argument, Assign, BinaryOp, Call, FunctionDef, Value


def run(line, context):
    return Parser.parse(tokenize(line), context).evaluate(context, [])


class EvaluateTestCase(unittest.TestCase):

    def setUp(self):
        self.context = Context()

    def test_precedence(self):
        self.assertEqual(27.0, run("10 * 3 - 6 / 2", self.context))
        self.assertEqual(f32(5.0 / 3.0), run("11 % 2 * 5 / 3", self.context))

    def test_assignment_is_expression(self):
        self.assertEqual(10.0, run("a = 10", self.context))
        self.assertEqual(10.0, self.context.get_var("a"))

        self.assertEqual(12.0, run("2 + b = a", self.context))
        self.assertEqual(10.0, self.context.get_var("b"))

        self.assertEqual(3.0, run("c = d = 3", self.context))
        self.assertEqual((3.0, 3.0), (self.context.get_var("c"), self.context.get_var("d")))

    def test_variables_persist_between_lines(self):
        run("a = 10", self.context)
        self.assertEqual(20.0, run("a * 2", self.context))
        run("a = a + 1", self.context)
        self.assertEqual(11.0, run("a", self.context))

    def test_function_definition(self):
        self.assertIsNone(run("add x y => x + y", self.context))
        self.assertEqual(7.0, run("add 3 4", self.context))
        self.assertEqual(10.0, run("add add 1 2 add 3 4", self.context))
        self.assertEqual(9.0, run("add 1 + 2 2 * 3", self.context))

    def test_functions_calling_functions(self):
        run("double x => x * 2", self.context)
        run("quad x => double double x", self.context)
        self.assertEqual(20.0, run("quad 5", self.context))

    def test_function_scoping(self):
        run("a = 10", self.context)
        self.assertIsNone(run("f x => x", self.context))
        self.assertEqual(10.0, run("f a", self.context))  # variables can be passed in as arguments
        self.assertRaises(ParseError, run, "g x => x + a", self.context)

    def test_assignment_in_body(self):
        run("set x => last = x", self.context)
        self.assertEqual(5.0, run("set 5", self.context))
        self.assertEqual(5.0, self.context.get_var("last"))

    def test_redefinition(self):
        run("f x => x", self.context)
        run("g x => f x", self.context)
        run("f x y => x * y", self.context)

        self.assertEqual(2, self.context.get_arity("f"))
        self.assertEqual(6.0, run("f 2 3", self.context))
        self.assertEqual(4.0, run("g 4", self.context))  # g was parsed against the old f

    def test_zero_arity(self):
        run("three => 3", self.context)
        self.assertEqual(3.0, run("three", self.context))
        self.assertEqual(3.0, run("a = three", self.context))

    def test_mod_truncates(self):
        self.assertEqual(1.0, run("11.9 % 2.5", self.context))
        self.assertEqual(-1.0, run("(0 - 7) % 2", self.context))

    def test_division_by_zero(self):
        self.assertEqual(float("inf"), run("1 / 0", self.context))


class NodeTestCase(unittest.TestCase):

    def test_value(self):
        add = BinaryOp(Operator.ADD, Value(1.0), Value(2.0))
        self.assertEqual(3.0, add.value())
        self.assertIsNone(BinaryOp(Operator.ADD, Argument(0), Value(2.0)).value())
        self.assertIsNone(Assign("a", Value(1.0)).value())
        self.assertIsNone(Call("f", Value(1.0), []).value())
        self.assertIsNone(FunctionDef("f", [], Value(1.0)).value())

    def test_priority(self):
        self.assertEqual(0, Value(1.0).priority)
        self.assertEqual(1, BinaryOp(Operator.SUB, Argument(0), Value(2.0)).priority)
        self.assertEqual(2, BinaryOp(Operator.MOD, Argument(0), Value(2.0)).priority)

    def test_missing_argument(self):
        context = Context()
        body = BinaryOp(Operator.ADD, Argument(0), Argument(1))
        self.assertIsNone(body.evaluate(context, [1.0]))
        self.assertEqual(3.0, body.evaluate(context, [1.0, 2.0]))

        assign = Assign("a", Argument(0))
        self.assertIsNone(assign.evaluate(context, []))
        self.assertNotIn("a", context)

    def test_call_uses_fresh_arguments(self):
        context = Context()
        call = Call("f", BinaryOp(Operator.SUB, Argument(0), Argument(1)), [Argument(1), Value(1.0)])
        self.assertEqual(4.0, call.evaluate(context, [0.0, 5.0]))

    def test_str(self):
        cases = {
            "1 + 2 * x": BinaryOp(Operator.ADD, Value(1.0), BinaryOp(Operator.MUL, Value(2.0), Argument(0, "x"))),
            "(x + 1) * 2": BinaryOp(Operator.MUL, BinaryOp(Operator.ADD, Argument(0, "x"), Value(1.0)), Value(2.0)),
            "x - (x - 1)": BinaryOp(Operator.SUB, Argument(0, "x"), BinaryOp(Operator.SUB, Argument(0, "x"),
                                                                               Value(1.0))),
            "(a = 2) * x": BinaryOp(Operator.MUL, Assign("a", Value(2.0)), Argument(0, "x")),
            "(0 - 1.5)": Value(-1.5),
            "$1": Argument(1),
            "f x => x": FunctionDef("f", ["x"], Argument(0, "x")),
            "add 1 2": Call("add", Value(0.0), [Value(1.0), Value(2.0)]),
        }
        for expected, node in cases.items():
            self.assertEqual(expected, str(node))

    def test_display(self):
        node = BinaryOp(Operator.ADD, Argument(0, "x"), Value(2.0))
        expected = ("BinaryOp(expr='x + 2', nodes=[\n"
                    "    Argument(expr='x'),\n"
                    "    Value(expr='2')\n"
                    "])")
        self.assertEqual(expected, node.display())


if __name__ == '__main__':
    unittest.main()
