"""Tests for the treediff comparison engine."""

import pytest
from treediff import (
    DiffEngine,
    DiffOptions,
    DiffType,
    Severity,
    ParseError,
    OptionsError,
    ErrorResponse,
    compare,
    from_python,
    parse_text,
    Null,
    Bool,
    Number,
    String,
    Array,
    Object,
)
from treediff.comparators import compare_numbers, compare_strings, is_equal
from treediff.metrics import count_items, complexity, depth, count_keys


class TestBasicComparison:
    """Test basic comparison functionality."""

    def setup_method(self):
        self.engine = DiffEngine()

    def test_identical_payloads(self):
        """Test that identical payloads produce no differences."""
        data = {"name": "test", "tags": ["a", "b"], "meta": {"n": 1}}

        result = self.engine.compare(data, data)
        assert result.is_identical is True
        assert len(result.differences) == 0
        assert result.summary.similarity == 100

    def test_modified_and_added(self):
        """Test the reference example: one changed value, one new key."""
        left = {"a": 1, "b": 2}
        right = {"a": 1, "b": 3, "c": 4}

        result = self.engine.compare(left, right)
        assert [(d.path, d.type) for d in result.differences] == [
            ("b", DiffType.MODIFIED),
            ("c", DiffType.ADDED),
        ]
        modified, added = result.differences
        assert modified.left_value == Number(2)
        assert modified.right_value == Number(3)
        assert added.left_value is None
        assert added.right_value == Number(4)

        summary = result.summary
        assert summary.added == 1
        assert summary.removed == 0
        assert summary.modified == 1
        assert summary.moved == 0
        assert summary.unchanged == 0
        assert summary.total_differences == 2
        assert summary.similarity == pytest.approx(80.0)
        assert summary.complexity == 7

    def test_text_inputs(self):
        """Test that JSON text is parsed before comparing."""
        result = self.engine.compare('{"a": 1, "b": 2}', '{"a": 1, "b": 3, "c": 4}')
        assert [d.path for d in result.differences] == ["b", "c"]
        assert result.left_text == '{"a": 1, "b": 2}'

    def test_structured_input_text_is_pretty_printed(self):
        result = self.engine.compare({"a": 1}, {"a": 1})
        assert result.left_text == '{\n  "a": 1\n}'

    def test_removed_key(self):
        """Test detection of a key missing on the right."""
        result = self.engine.compare({"name": "x", "age": 3}, {"name": "x"})
        assert len(result.differences) == 1
        diff = result.differences[0]
        assert diff.type == DiffType.REMOVED
        assert diff.path == "age"
        assert diff.left_value == Number(3)
        assert diff.right_value is None
        assert diff.description == "Removed property age at root"

    def test_null_counts_as_missing(self):
        result = self.engine.compare({"a": None}, {"a": 1})
        assert len(result.differences) == 1
        assert result.differences[0].type == DiffType.ADDED
        assert result.differences[0].right_value == Number(1)

        result = self.engine.compare({"a": "x"}, {"a": None})
        assert result.differences[0].type == DiffType.REMOVED
        assert result.differences[0].left_value == String("x")

    def test_both_null(self):
        result = self.engine.compare({"a": None}, {"a": None})
        assert result.differences == ()
        result = DiffEngine(DiffOptions(show_unchanged=True)).compare(None, None)
        assert result.differences == ()

    def test_root_primitive(self):
        """Test that the top level is reported as root."""
        result = self.engine.compare(1, 2)
        assert len(result.differences) == 1
        assert result.differences[0].path == "root"
        assert result.differences[0].type == DiffType.MODIFIED

    def test_primitive_vs_container(self):
        """Test that a kind change is reported without recursing."""
        result = self.engine.compare({"a": 1}, {"a": {"x": 1}})
        assert len(result.differences) == 1
        diff = result.differences[0]
        assert diff.type == DiffType.MODIFIED
        assert diff.path == "a"
        assert "number → object" in diff.description

    def test_array_vs_object(self):
        result = self.engine.compare({"a": [1]}, {"a": {"0": 1}})
        assert len(result.differences) == 1
        assert result.differences[0].type == DiffType.MODIFIED
        assert "array → object" in result.differences[0].description

    def test_bool_is_not_number(self):
        result = self.engine.compare({"flag": True}, {"flag": 1})
        assert result.differences[0].type == DiffType.MODIFIED

    def test_int_equals_float(self):
        assert self.engine.compare({"n": 1}, {"n": 1.0}).is_identical

    def test_key_order_follows_left_then_right(self):
        left = {"z": 1, "a": 1}
        right = {"y": 2, "a": 2, "z": 2}

        result = self.engine.compare(left, right)
        assert [d.path for d in result.differences] == ["z", "a", "y"]

    def test_special_keys_are_quoted(self):
        result = self.engine.compare(
            {"user": {"first-name": "a"}},
            {"user": {"first-name": "b"}}
        )
        assert result.differences[0].path == "user['first-name']"

    def test_severity_by_type(self):
        options = DiffOptions(show_unchanged=True)
        result = compare({"a": 1, "b": 1, "c": 1}, {"a": 1, "b": 2, "d": 1}, options)
        severities = {d.type: d.severity for d in result.differences}
        assert severities[DiffType.UNCHANGED] == Severity.LOW
        assert severities[DiffType.MODIFIED] == Severity.HIGH
        assert severities[DiffType.REMOVED] == Severity.MEDIUM
        assert severities[DiffType.ADDED] == Severity.MEDIUM


class TestArrayComparison:
    """Test ordered and order-insensitive arrays."""

    def setup_method(self):
        self.engine = DiffEngine()

    def test_added_item(self):
        result = self.engine.compare([1, 2], [1, 2, 3])
        assert len(result.differences) == 1
        assert result.differences[0].path == "[2]"
        assert result.differences[0].type == DiffType.ADDED

    def test_removed_nested_item(self):
        result = self.engine.compare({"tags": ["a", "b"]}, {"tags": ["a"]})
        assert len(result.differences) == 1
        diff = result.differences[0]
        assert diff.path == "tags[1]"
        assert diff.type == DiffType.REMOVED
        assert diff.left_value == String("b")

    def test_objects_in_array(self):
        result = self.engine.compare([{"a": 1}], [{"a": 2}])
        assert result.differences[0].path == "[0].a"

    def test_order_matters_by_default(self):
        result = self.engine.compare([1, 2, 3], [3, 2, 1])
        assert [d.path for d in result.differences] == ["[0]", "[2]"]

    def test_ignore_array_order(self):
        """Test that reordered primitives are equal when order is ignored."""
        engine = DiffEngine(DiffOptions(ignore_array_order=True))
        result = engine.compare([1, 2, 3], [3, 2, 1])
        assert len(result.differences) == 0

    def test_ignore_array_order_sorts_numerically(self):
        engine = DiffEngine(DiffOptions(ignore_array_order=True))
        assert engine.compare([10, 9, 100], [100, 9, 10]).is_identical

    def test_ignore_array_order_uses_sorted_positions(self):
        engine = DiffEngine(DiffOptions(ignore_array_order=True))
        result = engine.compare([3, 1], [1, 2, 3])
        assert [(d.path, d.type) for d in result.differences] == [
            ("[1]", DiffType.MODIFIED),
            ("[2]", DiffType.ADDED),
        ]
        assert result.differences[0].left_value == Number(3)
        assert result.differences[0].right_value == Number(2)

    def test_ignore_array_order_mixed_kinds(self):
        """Test that mixed arrays sort deterministically instead of failing."""
        engine = DiffEngine(DiffOptions(ignore_array_order=True))
        items = [1, "a", None, {"k": 1}, [2], True]
        assert engine.compare(items, list(reversed(items))).is_identical


class TestStringComparison:
    """Test case and whitespace folding."""

    def test_case_insensitive(self):
        engine = DiffEngine(DiffOptions(ignore_case=True))
        assert engine.compare({"status": "ACTIVE"}, {"status": "active"}).is_identical

    def test_case_sensitive_by_default(self):
        assert not compare({"status": "ACTIVE"}, {"status": "active"}).is_identical

    def test_whitespace(self):
        engine = DiffEngine(DiffOptions(ignore_whitespace=True))
        assert engine.compare({"s": "  hello \t  world\n"}, {"s": "hello world"}).is_identical

    def test_case_and_whitespace(self):
        """Test folding both case and whitespace on bare strings."""
        options = DiffOptions(ignore_case=True, ignore_whitespace=True)
        result = compare(String("Hello World"), String("hello   world"), options)
        assert result.differences == ()
        assert result.summary.similarity == 100

    def test_compare_strings_message(self):
        is_match, message = compare_strings("a", "b", DiffOptions())
        assert is_match is False
        assert "'a' != 'b'" in message


class TestNumericComparison:
    """Test numeric comparison with precision."""

    def test_precision_within_tolerance(self):
        engine = DiffEngine(DiffOptions(precision=2))
        assert engine.compare({"amount": 1.001}, {"amount": 1.005}).is_identical

    def test_precision_exceeds_tolerance(self):
        engine = DiffEngine(DiffOptions(precision=2))
        result = engine.compare({"amount": 1.0}, {"amount": 1.02})
        assert result.differences[0].type == DiffType.MODIFIED

    def test_exact_by_default(self):
        assert not compare({"amount": 1.001}, {"amount": 1.005}).is_identical

    def test_compare_numbers(self):
        assert compare_numbers(1, 1.0) == (True, "")
        assert compare_numbers(0.5, 0.52, 1)[0] is True
        is_match, message = compare_numbers(0.5, 0.7, 1)
        assert is_match is False
        assert "precision" in message


class TestCustomComparator:
    """Test the injectable equality predicate."""

    def test_overrides_default_equality(self):
        options = DiffOptions(custom_comparator=lambda a, b: True)
        assert compare({"a": 1, "b": "x"}, {"a": 2, "b": "y"}, options).is_identical

    def test_receives_values(self):
        seen = []

        def comparator(left, right):
            seen.append((left, right))
            return left == right

        compare({"a": 1}, {"a": "1"}, DiffOptions(custom_comparator=comparator))
        assert seen == [(Number(1), String("1"))]

    def test_not_consulted_for_kind_changes(self):
        options = DiffOptions(custom_comparator=lambda a, b: True)
        result = compare({"a": 1}, {"a": [1]}, options)
        assert result.differences[0].type == DiffType.MODIFIED

    def test_is_equal_delegates(self):
        options = DiffOptions(ignore_case=True, custom_comparator=lambda a, b: False)
        assert is_equal(String("A"), String("a"), options) is False


class TestOptions:
    """Test key suppression, unchanged reporting and depth limits."""

    def test_ignore_extra_keys(self):
        options = DiffOptions(ignore_extra_keys=True)
        result = compare({"a": 1, "b": 2, "old": 0}, {"a": 1, "b": 3, "c": 4}, options)
        assert [d.path for d in result.differences] == ["b"]

    def test_show_unchanged(self):
        options = DiffOptions(show_unchanged=True)
        result = compare({"a": 1, "b": 2}, {"a": 1, "b": 3}, options)
        assert [(d.path, d.type) for d in result.differences] == [
            ("a", DiffType.UNCHANGED),
            ("b", DiffType.MODIFIED),
        ]
        assert result.summary.unchanged == 1
        assert result.summary.total_differences == 1

    def test_max_depth_truncates(self):
        """Test that nothing below the depth limit is reported."""
        left = {"a": {"b": {"c": 1}}}
        right = {"a": {"b": {"c": 2}}}

        assert compare(left, right, DiffOptions(max_depth=1)).differences == ()
        assert compare(left, right, DiffOptions(max_depth=2)).differences == ()
        result = compare(left, right, DiffOptions(max_depth=3))
        assert [d.path for d in result.differences] == ["a.b.c"]

    def test_max_depth_suppresses_deep_added_keys(self):
        options = DiffOptions(max_depth=1)
        assert compare({"a": {}}, {"a": {"b": 1}}, options).differences == ()
        result = compare({"a": 1}, {"a": 1, "b": 2}, options)
        assert [d.path for d in result.differences] == ["b"]

    def test_max_depth_counts_indices(self):
        options = DiffOptions(max_depth=1)
        assert compare({"a": [1]}, {"a": [2]}, options).differences == ()
        assert len(compare({"a": [1]}, {"a": [2]}, DiffOptions(max_depth=2)).differences) == 1

    def test_invalid_options(self):
        with pytest.raises(OptionsError):
            DiffOptions(max_depth=-1)
        with pytest.raises(OptionsError):
            DiffOptions(precision="2")
        with pytest.raises(OptionsError):
            DiffOptions(custom_comparator="not callable")

    def test_from_dict(self):
        options = DiffOptions.from_dict({"ignoreCase": True, "max_depth": 3})
        assert options.ignore_case is True
        assert options.max_depth == 3
        assert DiffOptions.from_dict(None) == DiffOptions()

    def test_from_dict_rejects_unknown(self):
        with pytest.raises(OptionsError) as exc:
            DiffOptions.from_dict({"ignoreEverything": True})
        assert exc.value.details == {"option": "ignoreEverything"}


class TestProperties:
    """Test reflexivity, add/remove symmetry and determinism."""

    SAMPLES = [
        None,
        0,
        String("text"),
        '"text"',
        ["Mixed Case", "  spaced  out "],
        {"title": "Hello World", "note": ""},
        [],
        {},
        [1, "two", None, [3.5, False]],
        {"a": {"b": [1, 2, {"c": None}]}, "d": "x", "e": []},
    ]

    @pytest.mark.parametrize("value", SAMPLES)
    @pytest.mark.parametrize("options", [
        DiffOptions(),
        DiffOptions(ignore_array_order=True, ignore_case=True),
        DiffOptions(precision=3, max_depth=2),
    ])
    def test_reflexive(self, value, options):
        result = compare(value, value, options)
        assert result.differences == ()
        assert result.summary.similarity == 100

    def test_add_remove_symmetry(self):
        a = {"a": 1, "b": [1, 2, 3], "c": {"d": None, "k": {"x": 1}}}
        b = {"a": 1, "b": [1], "e": "x", "c": {}}

        forward = compare(a, b).differences
        backward = compare(b, a).differences

        added = {(d.path, d.right_value) for d in forward if d.type == DiffType.ADDED}
        removed = {(d.path, d.left_value) for d in backward if d.type == DiffType.REMOVED}
        assert added == removed
        assert added

        removed = {(d.path, d.left_value) for d in forward if d.type == DiffType.REMOVED}
        added = {(d.path, d.right_value) for d in backward if d.type == DiffType.ADDED}
        assert removed == added

    def test_deterministic(self):
        left = {"x": [3, 1, {"y": "A "}], "z": {"q": 1.5}}
        right = {"x": [1, 3, {"y": "a"}], "w": True}
        options = DiffOptions(ignore_array_order=True, show_unchanged=True)

        first = compare(left, right, options)
        second = compare(left, right, options)
        assert first.differences == second.differences
        assert first.summary == second.summary
        assert first.id != second.id


class TestErrorHandling:
    """Test input parse failures."""

    def setup_method(self):
        self.engine = DiffEngine()

    def test_invalid_text(self):
        with pytest.raises(ParseError) as exc:
            self.engine.compare('{"a": ', "{}")
        assert exc.value.side == "left"
        assert exc.value.line == 1

    def test_invalid_right_text(self):
        with pytest.raises(ParseError) as exc:
            self.engine.compare("{}", "[1, 2")
        assert exc.value.side == "right"

    def test_nan_is_rejected(self):
        with pytest.raises(ParseError):
            self.engine.compare('{"a": NaN}', "{}")
        with pytest.raises(ParseError):
            self.engine.compare({"a": float("inf")}, {})

    def test_overflowing_number_keeps_side(self):
        with pytest.raises(ParseError) as exc:
            self.engine.compare("{}", '{"a": 1e400}')
        assert exc.value.side == "right"

    def test_huge_integer_is_rejected(self):
        huge = "1" + "0" * 400
        with pytest.raises(ParseError) as exc:
            self.engine.compare('{"n": %s}' % huge, '{"n": 1.5}')
        assert exc.value.side == "left"
        assert "out of range" in exc.value.message
        with pytest.raises(ParseError):
            compare({"n": 10 ** 400}, {"n": 1.5}, DiffOptions(precision=2))

    def test_large_integer_within_range(self):
        result = compare({"n": 2 ** 60}, {"n": 1.5}, DiffOptions(precision=2))
        assert [d.path for d in result.differences] == ["n"]

    def test_cycle_is_rejected(self):
        data = {}
        data["self"] = data
        with pytest.raises(ParseError) as exc:
            self.engine.compare(data, {})
        assert "Circular" in exc.value.message

    def test_shared_subtree_is_accepted(self):
        shared = {"x": 1}
        result = self.engine.compare({"a": shared, "b": shared}, {"a": {"x": 1}, "b": {"x": 2}})
        assert [d.path for d in result.differences] == ["b.x"]

    def test_unsupported_types(self):
        with pytest.raises(ParseError):
            self.engine.compare({1: "a"}, {})
        with pytest.raises(ParseError):
            self.engine.compare({"a": object()}, {})

    def test_safe_compare(self):
        response = self.engine.safe_compare("not json", "{}")
        assert isinstance(response, ErrorResponse)
        assert response.success is False
        assert response.error["code"] == "PARSE_ERROR"
        assert response.error["details"]["side"] == "left"


class TestValues:
    """Test the value model."""

    def test_from_python(self):
        value = from_python({"b": [1, True, None], "a": "s"})
        assert isinstance(value, Object)
        assert value.keys() == ["b", "a"]
        assert value.get("b") == Array((Number(1), Bool(True), Null()))
        assert value.to_python() == {"b": [1, True, None], "a": "s"}

    def test_equality_is_kind_aware(self):
        assert Number(1) == Number(1.0)
        assert Bool(True) != Number(1)
        assert Null() == Null()

    def test_parse_text(self):
        value = parse_text('{"k": [1.5, "x"]}')
        assert value == Object((("k", Array((Number(1.5), String("x")))),))

    def test_values_pass_through(self):
        value = String("x")
        assert from_python(value) is value


class TestMetrics:
    """Test summary and metadata calculations."""

    def test_depth(self):
        assert depth(from_python(1)) == 0
        assert depth(from_python([])) == 0
        assert depth(from_python({"a": {"b": 1}})) == 2
        assert depth(from_python([[1], 2])) == 2

    def test_count_keys(self):
        assert count_keys(from_python({"a": [{"b": 1}, {"c": 2}]})) == 3
        assert count_keys(from_python([1, 2])) == 0

    def test_count_items(self):
        assert count_items(from_python({"a": [1, 2]})) == 3
        assert count_items(from_python([])) == 0
        assert count_items(from_python(None)) == 1

    def test_complexity(self):
        assert complexity(from_python({"a": [1, 2]})) == 4
        assert complexity(from_python("x")) == 1

    def test_metadata(self):
        result = compare({"a": 1, "b": 2}, {"a": 1, "b": 3, "c": 4})
        metadata = result.metadata
        assert metadata.left_size == 13
        assert metadata.right_size == 19
        assert metadata.left_depth == 1
        assert metadata.right_depth == 1
        assert metadata.left_keys == 2
        assert metadata.right_keys == 3
        assert metadata.memory_usage == 64
        assert metadata.processing_time >= 0

    def test_empty_trees(self):
        result = compare({}, {})
        assert result.summary.similarity == 100
        assert result.summary.complexity == 2

    def test_similarity_no_items(self):
        result = compare([], [[], []])
        assert result.summary.added == 2
        assert result.summary.similarity == 100

    def test_similarity_is_clamped(self):
        result = compare({"a": []}, {"a": [[], [], []]})
        assert result.summary.total_differences == 3
        assert result.summary.similarity == 0.0

    def test_to_dict(self):
        result = compare({"a": 1}, {"a": 2})
        data = result.to_dict()
        assert data["summary"]["totalDifferences"] == 1
        assert data["differences"][0] == {
            "path": "a",
            "type": "modified",
            "leftValue": 1,
            "rightValue": 2,
            "description": data["differences"][0]["description"],
            "severity": "high",
        }
        assert data["timestamp"].endswith("Z")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
