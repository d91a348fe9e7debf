"""Tests for GoTreeNormalizer."""

import pytest

from gosca.exceptions import ParsingError
from gosca.scanning import DeclKind, NodeKind, Position

SAMPLE_GO = '''\
// Package shapes has a doc comment that documents nothing below.
package shapes

import "math"

// Circle is round.
type Circle struct{ r float64 }

// Area returns the area.
//
//go-sca:ignore
func (c *Circle) Area() float64 {
	return math.Pi * c.r * c.r
}

func Scale(c Circle, k float64) Circle {
	if k <= 0 {
		return c
	}
	return Circle{c.r * k}
}

var (
	unit   = Circle{1}
	double = func(c Circle) Circle { return Scale(c, 2) }
)
'''


def _first(body, kind):
    return next(node for node in body.walk() if node.kind is kind)


class TestNormalize:
    """Converting a parse tree into declarations."""

    def test_package_and_declarations(self, normalizer):
        source = normalizer.parse_file(SAMPLE_GO.encode(), "shapes/circle.go")
        assert source.path == "shapes/circle.go"
        assert source.package == "shapes"
        kinds = [d.kind for d in source.declarations]
        assert kinds == [DeclKind.METHOD, DeclKind.FUNCTION, DeclKind.VALUE]
        assert source.declaration_count == 3

    def test_doc_comments(self, normalizer):
        source = normalizer.parse_file(SAMPLE_GO.encode(), "circle.go")
        area, scale, values = source.declarations
        assert area.doc == ("// Area returns the area.", "//", "//go-sca:ignore")
        assert scale.doc == ()
        assert values.doc == ()

    def test_method_receiver(self, normalizer):
        source = normalizer.parse_file(SAMPLE_GO.encode(), "circle.go")
        area = source.declarations[0]
        assert area.name == "Area"
        assert area.receiver.shape == "pointer"
        assert area.receiver.elem.shape == "ident"
        assert area.receiver.elem.name == "Circle"

    def test_positions_are_one_based(self, normalizer):
        source = normalizer.parse_file(SAMPLE_GO.encode(), "circle.go")
        scale = source.declarations[1]
        assert scale.position == Position("circle.go", 16, 1)
        conditional = _first(scale.body, NodeKind.CONDITIONAL)
        assert conditional.position == Position("circle.go", 17, 2)

    def test_value_specs(self, normalizer):
        source = normalizer.parse_file(SAMPLE_GO.encode(), "circle.go")
        values = source.declarations[2]
        assert [spec.names for spec in values.specs] == [("unit",), ("double",)]
        assert values.specs[0].values[0].kind is NodeKind.OTHER
        assert values.specs[1].values[0].kind is NodeKind.FUNCTION_LITERAL

    def test_indexes_are_unique_and_preorder(self, normalizer):
        source = normalizer.parse_file(SAMPLE_GO.encode(), "circle.go")
        nodes = [
            node
            for decl in source.declarations
            if decl.body is not None
            for node in decl.body.walk()
        ]
        indexes = [node.index for node in nodes]
        assert len(indexes) == len(set(indexes))
        assert indexes == sorted(indexes)


class TestNodeKinds:
    """Classification of body nodes."""

    def _kinds(self, parse_go, body):
        source = parse_go("package p\n\nfunc f(a, b bool, xs []int, c chan int) {\n" + body + "\n}\n")
        return [node.kind for node in source.declarations[0].body.walk()]

    def test_loops(self, parse_go):
        kinds = self._kinds(parse_go, "for i := 0; i < 1; i++ {}\nfor range xs {}")
        assert NodeKind.LOOP in kinds
        assert NodeKind.ITERATION in kinds

    def test_switch_and_default(self, parse_go):
        source = parse_go(
            """
            package p

            func f(x int) {
                switch x {
                case 1:
                default:
                }
            }
            """
        )
        switch = _first(source.declarations[0].body, NodeKind.MULTIWAY_BRANCH)
        assert [case.kind for case in switch.body] == [NodeKind.MULTIWAY_CASE] * 2
        assert [case.is_default for case in switch.body] == [False, True]

    def test_type_switch_is_other_with_case_clauses(self, parse_go):
        source = parse_go(
            """
            package p

            func f(v interface{}) {
                switch x := v.(type) {
                case int:
                default:
                    _ = x
                }
            }
            """
        )
        kinds = [node.kind for node in source.declarations[0].body.walk()]
        assert NodeKind.MULTIWAY_BRANCH not in kinds
        cases = [n for n in source.declarations[0].body.walk() if n.kind is NodeKind.MULTIWAY_CASE]
        assert [case.is_default for case in cases] == [False, True]

    def test_select_default_is_a_select_case(self, parse_go):
        source = parse_go(
            """
            package p

            func f(c chan int) {
                select {
                case <-c:
                default:
                }
            }
            """
        )
        select = _first(source.declarations[0].body, NodeKind.SELECT)
        assert [case.kind for case in select.body] == [NodeKind.SELECT_CASE] * 2
        assert select.body[1].is_default

    def test_logical_and_other_binary_expressions(self, parse_go):
        kinds = self._kinds(parse_go, "_ = a && b\n_ = len(xs) + 1")
        assert kinds.count(NodeKind.LOGICAL_EXPRESSION) == 1
        assert NodeKind.CALL in kinds

    def test_jump_labels(self, parse_go):
        source = parse_go(
            """
            package p

            func f() {
            loop:
                for {
                    break loop
                }
            }
            """
        )
        jumps = [n for n in source.declarations[0].body.walk() if n.kind is NodeKind.JUMP]
        assert [j.label for j in jumps] == ["loop"]

    def test_comments_are_not_nodes(self, parse_go):
        source = parse_go(
            """
            package p

            func f() {
                // nothing here
            }
            """
        )
        assert source.declarations[0].body.children == ()


class TestParseErrors:
    """Syntax errors surface as ParsingError."""

    def test_syntax_error(self, normalizer):
        with pytest.raises(ParsingError) as exc_info:
            normalizer.parse_file(b"package p\n\nfunc f( {\n", "broken.go")
        assert exc_info.value.filepath.name == "broken.go"
        assert exc_info.value.location is not None

    def test_error_details_name_the_file(self, normalizer):
        with pytest.raises(ParsingError) as exc_info:
            normalizer.parse_file(b"package p\nfunc f() { if }\n", "pkg/bad.go")
        assert "bad.go" in str(exc_info.value)
        assert exc_info.value.language == "go"
