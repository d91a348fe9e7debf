"""Tests for unit discovery."""

from gosca.complexity import BAD_RECEIVER, analyze_source_file, func_name, iter_units
from gosca.scanning import Position


class TestFunctionNames:
    """Receiver-qualified names."""

    def test_plain_function(self, measure):
        stats = measure(
            """
            package p

            func Plain() {}
            """
        )
        assert list(stats) == ["Plain"]

    def test_value_and_pointer_receivers(self, measure):
        stats = measure(
            """
            package p

            type T struct{}

            func (t T) Value() {}

            func (t *T) Pointer() {}

            func (*T) Anonymous() {}
            """
        )
        assert list(stats) == ["(T).Value", "(*T).Pointer", "(*T).Anonymous"]

    def test_unrecognized_receiver_shape(self, measure):
        stats = measure(
            """
            package p

            type List[T any] struct{}

            func (l *List[T]) Push(v T) {}

            func (l List[T]) Len() int { return 0 }
            """
        )
        assert list(stats) == [f"(*{BAD_RECEIVER}).Push", f"({BAD_RECEIVER}).Len"]

    def test_func_name_of_declarations(self, parse_go):
        source = parse_go(
            """
            package p

            type T struct{}

            func A() {}

            func (T) B() {}
            """
        )
        assert [func_name(d) for d in source.declarations] == ["A", "(T).B"]


class TestDiscovery:
    """Which units are measured, in which order, with which metadata."""

    def test_declaration_order_and_package(self, parse_go):
        source = parse_go(
            """
            package widgets

            type W struct{}

            func (w W) Draw() {}

            func New() W { return W{} }

            var factory = func() W { return New() }
            """
        )
        stats = analyze_source_file(source)
        assert [s.func_name for s in stats] == ["(W).Draw", "New", "factory"]
        assert {s.pkg_name for s in stats} == {"widgets"}

    def test_positions(self, parse_go):
        source = parse_go(
            """\
            package p

            func First() {}

            var (
                second = 1
                third  = func() {}
            )
            """,
            path="dir/file.go",
        )
        stats = analyze_source_file(source)
        assert stats[0].pos == Position("dir/file.go", 3, 1)
        # Function values are positioned at their literal
        assert stats[1].pos == Position("dir/file.go", 7, 14)
        assert str(stats[1].pos) == "dir/file.go:7:14"

    def test_value_function_literal_is_its_own_unit(self, measure):
        stats = measure(
            """
            package p

            func outer(xs []int) {
                each(xs, func(x int) {
                    if x > 0 {
                    }
                })
            }

            var handler = func(ok bool) int {
                if ok {
                    return 1
                }
                return 0
            }
            """
        )
        assert set(stats) == {"outer", "handler"}
        assert stats["outer"].cyclomatic == 2
        assert stats["outer"].cognitive == 2
        assert stats["handler"].cyclomatic == 2
        assert stats["handler"].cognitive == 1

    def test_non_function_values_are_skipped(self, measure):
        stats = measure(
            """
            package p

            var count = 3

            const name = "p"
            """
        )
        assert stats == {}

    def test_multiple_names_use_the_first(self, parse_go):
        source = parse_go(
            """
            package p

            var a, b = func() {}, func(ok bool) {
                if ok {
                }
            }
            """
        )
        stats = analyze_source_file(source)
        assert [s.func_name for s in stats] == ["a", "a"]
        assert [s.cyclomatic for s in stats] == [1, 2]

    def test_closure_identity_follows_value_name(self, measure):
        stats = measure(
            """
            package p

            var countdown func(n int)

            var walk = func(n int) {
                walk(n - 1)
            }
            """
        )
        assert stats["walk"].cognitive == 1

    def test_units_expose_identity(self, parse_go):
        source = parse_go(
            """
            package p

            type T struct{}

            func F() {}

            func (T) M() {}

            var v = func() {}
            """
        )
        units = list(iter_units(source))
        assert [(u.name, u.identity) for u in units] == [("F", "F"), ("(T).M", None), ("v", "v")]


class TestIgnoreDirective:
    """//go-sca:ignore on doc comments."""

    def test_ignored_function_is_dropped(self, measure):
        stats = measure(
            """
            package p

            // Complicated does a lot.
            //go-sca:ignore
            func Complicated(a, b, c bool) {
                if a && b || c {
                    for {
                    }
                }
            }

            func Kept() {}
            """
        )
        assert list(stats) == ["Kept"]

    def test_ignored_method(self, measure):
        stats = measure(
            """
            package p

            type T struct{}

            //go-sca:ignore
            func (t *T) Skip() {}
            """
        )
        assert stats == {}

    def test_group_comment_applies_to_grouped_values(self, measure):
        stats = measure(
            """
            package p

            //go-sca:ignore
            var (
                x = func() {}
                y = func() {}
            )

            var z = func() {}
            """
        )
        assert list(stats) == ["z"]

    def test_detached_comment_is_not_a_doc_comment(self, measure):
        stats = measure(
            """
            package p

            //go-sca:ignore

            func Detached() {}
            """
        )
        assert list(stats) == ["Detached"]

    def test_trailing_comment_is_not_a_doc_comment(self, measure):
        stats = measure(
            """
            package p

            var x = 1 //go-sca:ignore
            func Next() {}
            """
        )
        assert list(stats) == ["Next"]

    def test_other_directives_are_inert(self, measure):
        stats = measure(
            """
            package p

            //go-sca:experimental
            func Kept() {}
            """
        )
        assert list(stats) == ["Kept"]
