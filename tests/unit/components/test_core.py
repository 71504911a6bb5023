"""
Unit tests for field list location and skeleton rendering.
"""

from dataclasses import replace

import pytest

from jsonskel.catalog import StaticCatalog
from jsonskel.core import (
    GenerationContext,
    find_creator,
    generate_skeleton,
    locate_field_list,
    render_object,
)
from jsonskel.dom import ConstructorDescriptor, DeclarationKind, TypeDeclaration
from jsonskel.fields import parse_fields
from jsonskel.formats.java import JavaFormat

PERSON = "public record Person(String name, int age, List<String> tags) {}"
ORDER = "public record Order(Person buyer, Map<String,Integer> totals) {}"


def declare(source: str, editable: bool = True) -> TypeDeclaration:
    return JavaFormat().parse(source, editable=editable)[0]


def context(frozen_now, *sources: str, **kwargs) -> GenerationContext:
    catalog = StaticCatalog(declare(src) for src in sources)
    return GenerationContext(catalog=catalog, captured=frozen_now, **kwargs)


def generate(source: str, ctx: GenerationContext) -> str:
    declaration = declare(source)
    return generate_skeleton(declaration, replace(ctx, path=(declaration.name,)))


class TestScenarios:
    def test_person(self, frozen_now):
        result = generate(PERSON, context(frozen_now))
        assert result == '{\n\t"name": "",\n\t"age": 0,\n\t"tags": [ "" ]\n}'

    def test_order_nests_person_one_level_deeper(self, frozen_now):
        result = generate(ORDER, context(frozen_now, PERSON))
        assert result == (
            '{\n'
            '\t"buyer": {\n'
            '\t\t"name": "",\n'
            '\t\t"age": 0,\n'
            '\t\t"tags": [ "" ]\n'
            '\t},\n'
            '\t"totals": { "": 0 }\n'
            '}'
        )

    def test_external_type_is_not_expanded(self, frozen_now):
        external = declare(PERSON, editable=False)
        ctx = GenerationContext(catalog=StaticCatalog([external]), captured=frozen_now)
        result = generate(ORDER, ctx)
        assert '"buyer": {} // External type,' in result
        assert '"name"' not in result

    def test_dates_share_one_instant(self, frozen_now):
        source = "record Stamp(LocalDate day, LocalDateTime at, OffsetDateTime zoned) {}"
        result = generate(source, context(frozen_now))
        assert '"day": "2024-03-05"' in result
        assert '"at": "2024-03-05T14:07:09.123"' in result
        assert '"zoned": "2024-03-05T14:07:09.123+02:00"' in result


class TestFormatting:
    def test_empty_record_keeps_structure(self, frozen_now):
        assert generate("record Empty() {}", context(frozen_now)) == "{\n\n}"

    def test_all_fields_dropped_keeps_structure(self, frozen_now):
        assert generate("record Junk(garbage, more) {}", context(frozen_now)) == "{\n\n}"

    def test_field_order_minus_malformed(self, frozen_now):
        result = generate("record R(int a, garbage, String b, boolean c) {}", context(frozen_now))
        assert result == '{\n\t"a": 0,\n\t"b": "",\n\t"c": false\n}'

    def test_custom_indent(self, frozen_now):
        ctx = context(frozen_now, PERSON, indent="  ")
        result = generate("record Wrapper(Person person) {}", ctx)
        assert result == (
            '{\n'
            '  "person": {\n'
            '    "name": "",\n'
            '    "age": 0,\n'
            '    "tags": [ "" ]\n'
            '  }\n'
            '}'
        )

    def test_render_object_at_depth_three(self):
        assert render_object(['"a": 0'], 3, "\t") == '{\n\t\t\t"a": 0\n\t\t}'

    def test_brackets_balance(self, frozen_now):
        ctx = context(frozen_now, PERSON, "record Inner(Set<Person> people, Map<String, List<Integer>> m) {}")
        result = generate("record Outer(Inner inner, Optional<Person> maybe, List<Inner> all) {}", ctx)
        assert result.count("{") == result.count("}")
        assert result.count("[") == result.count("]")

    def test_repeated_runs_are_identical(self, frozen_now):
        ctx = context(frozen_now, PERSON)
        first = generate(ORDER, ctx)
        second = generate(ORDER, ctx)
        assert first == second

    def test_comments_in_component_list_are_ignored(self, frozen_now):
        source = "record R(\n    // identifier, unique\n    long id,\n    /* display */ String name) {}"
        result = generate(source, context(frozen_now))
        assert result == '{\n\t"id": 0,\n\t"name": ""\n}'

    def test_marker_strings_with_parentheses(self, frozen_now):
        source = 'record R(@JsonProperty("a(b") String a) {}'
        assert generate(source, context(frozen_now)) == '{\n\t"a": ""\n}'


class TestRecursionGuard:
    def test_self_reference(self, frozen_now):
        node = "record Node(String value, Node next) {}"
        result = generate(node, context(frozen_now, node))
        assert result == '{\n\t"value": "",\n\t"next": {} // Recursive type\n}'

    def test_mutual_reference(self, frozen_now):
        a = "record A(B b) {}"
        b = "record B(A a) {}"
        result = generate(a, context(frozen_now, a, b))
        assert result == '{\n\t"b": {\n\t\t"a": {} // Recursive type\n\t}\n}'

    def test_list_of_self(self, frozen_now):
        tree = "record Tree(String label, List<Tree> children) {}"
        result = generate(tree, context(frozen_now, tree))
        assert '"children": [ {} // Recursive type ]' in result

    def test_max_depth(self, frozen_now):
        a = "record A(B b) {}"
        b = "record B(C c) {}"
        c = "record C(int x) {}"
        result = generate(a, context(frozen_now, a, b, c, max_depth=2))
        assert result == '{\n\t"b": {\n\t\t"c": {} // Recursive type\n\t}\n}'

    def test_repeated_siblings_are_not_cycles(self, frozen_now):
        pair = "record Pair(Person left, Person right) {}"
        result = generate(pair, context(frozen_now, PERSON))
        assert result.count('"name": ""') == 2


class TestLocateFieldList:
    def test_record(self):
        assert locate_field_list(declare(PERSON), "JsonCreator") == "String name, int age, List<String> tags"

    def test_generic_record_header(self):
        declaration = declare("record Pair<A, B>(A left, B right) {}")
        assert locate_field_list(declaration, "JsonCreator") == "A left, B right"

    def test_header_name_must_match_whole_word(self):
        declaration = TypeDeclaration(
            name="Person",
            kind=DeclarationKind.PRODUCT,
            raw_source="record PersonView(int x) {} record Person(String name) {}",
        )
        assert locate_field_list(declaration, "JsonCreator") == "String name"

    def test_unbalanced_record(self):
        declaration = TypeDeclaration("Broken", DeclarationKind.PRODUCT, "record Broken(String name, int age")
        assert locate_field_list(declaration, "JsonCreator") is None

    def test_class_uses_marked_constructor(self):
        source = """
            class Account {
                Account(String id) {}
                @JsonCreator
                Account(@JsonProperty("id") String id, BigDecimal balance) {}
            }
        """
        fields = locate_field_list(declare(source), "JsonCreator")
        assert [f.name for f in parse_fields(fields)] == ["id", "balance"]
        assert fields.endswith("String id, BigDecimal balance")

    def test_class_without_marker(self):
        assert locate_field_list(declare("class Plain { Plain(int a) {} }"), "JsonCreator") is None

    def test_creator_after_marker_with_array_argument(self, frozen_now):
        source = 'public class Point { @ConstructorProperties({"x", "y"}) @JsonCreator public Point(int x, int y) {} }'
        result = generate(source, context(frozen_now))
        assert result == '{\n\t"x": 0,\n\t"y": 0\n}'

    def test_enum_has_no_field_list(self):
        assert locate_field_list(declare("enum Color { RED }"), "JsonCreator") is None

    def test_unbalanced_class_renders_empty_object(self, frozen_now):
        declaration = TypeDeclaration(
            name="Broken",
            kind=DeclarationKind.CONSTRUCTED,
            raw_source="",
            constructors=(ConstructorDescriptor(markers=("JsonCreator",), parameters="(int a, int b"),),
        )
        ctx = GenerationContext(catalog=StaticCatalog(), captured=frozen_now)
        assert generate_skeleton(declaration, ctx) == "{}"


class TestFindCreator:
    def test_first_marked_constructor(self):
        plain = ConstructorDescriptor(markers=("Deprecated",), parameters="(int a)")
        marked = ConstructorDescriptor(
            markers=("com.fasterxml.jackson.annotation.JsonCreator",), parameters="(int b)",
        )
        later = ConstructorDescriptor(markers=("JsonCreator",), parameters="(int c)")
        assert find_creator([plain, marked, later], "JsonCreator") is marked

    def test_none(self):
        assert find_creator([ConstructorDescriptor((), "()")], "JsonCreator") is None

    def test_custom_marker(self):
        ctor = ConstructorDescriptor(markers=("ConstructorProperties",), parameters="(int a)")
        assert find_creator([ctor], "ConstructorProperties") is ctor

    @pytest.mark.parametrize("marker", ["jsoncreator", "Creator"])
    def test_exact_simple_name(self, marker):
        ctor = ConstructorDescriptor(markers=("JsonCreator",), parameters="(int a)")
        assert find_creator([ctor], marker) is None
