"""
Tests for the match query compiler.

Tests free text and qualified parsing, unknown fields, and NEAR groups.
"""

import pytest

from litesearch.database.schema import IndexSchema
from litesearch.search.query_parser import MatchQueryCompiler


@pytest.fixture
def compiler():
    schema = IndexSchema(fields=("id", "__payload", "title", "body", "category"), exists=True)
    return MatchQueryCompiler(schema)


class TestParse:
    """Tests for MatchQueryCompiler.parse."""

    def test_free_text_targets_every_indexed_field(self, compiler):
        result = compiler.parse("cats dogs")

        assert result == {"title": "cats dogs", "body": "cats dogs", "category": "cats dogs"}

    def test_empty_query(self, compiler):
        assert compiler.parse("") == {}
        assert compiler.parse("   ") == {}

    def test_qualified_pair(self, compiler):
        assert compiler.parse("title: cats") == {"title": "cats"}

    def test_qualified_without_space(self, compiler):
        assert compiler.parse("category:animals") == {"category": "animals"}

    def test_quoted_value_keeps_spaces(self, compiler):
        assert compiler.parse('title: "wonderful pets"') == {"title": "wonderful pets"}

    def test_single_quoted_value(self, compiler):
        assert compiler.parse("body: 'daily walks'") == {"body": "daily walks"}

    def test_multiple_pairs(self, compiler):
        result = compiler.parse("title: cats body: night")

        assert result == {"title": "cats", "body": "night"}

    def test_qualifier_makes_free_text_ignored(self, compiler):
        """Unqualified words next to a qualifier are dropped."""
        assert compiler.parse("cats title: dogs") == {"title": "dogs"}

    def test_unknown_field_dropped(self, compiler):
        assert compiler.parse("author: alice title: cats") == {"title": "cats"}

    def test_only_unknown_fields(self, compiler):
        assert compiler.parse("author: alice") == {}

    def test_reserved_fields_not_searchable(self, compiler):
        assert compiler.parse("id: 1") == {}

    def test_repeated_field_keeps_last(self, compiler):
        assert compiler.parse("title: cats title: dogs") == {"title": "dogs"}


class TestCompile:
    """Tests for MatchQueryCompiler.compile."""

    def test_free_text_clauses(self, compiler):
        expression = compiler.compile("cats")

        assert expression.sql == "title MATCH ? OR body MATCH ? OR category MATCH ?"
        assert expression.params == ["cats", "cats", "cats"]
        assert expression.fields == ["title", "body", "category"]

    def test_values_are_bound_not_inlined(self, compiler):
        expression = compiler.compile("title: it's")

        assert "it's" not in expression.sql
        assert expression.params == ["it's"]

    def test_empty_query_is_falsy(self, compiler):
        assert not compiler.compile("")

    def test_fuzzy_uses_near_group(self, compiler):
        expression = compiler.compile("title: 'cats pets'", fuzzy_distance=3)

        assert expression.params == ['NEAR("cats" "pets", 3)']


class TestNearExpression:
    """Tests for the NEAR group builder."""

    def test_tokens_are_quoted(self):
        assert MatchQueryCompiler.near_expression("cats dogs", 5) == 'NEAR("cats" "dogs", 5)'

    def test_embedded_quotes_doubled(self):
        assert MatchQueryCompiler.near_expression('say "hi"', 2) == 'NEAR("say" """hi""", 2)'
