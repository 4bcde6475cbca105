"""Testes da codificação canônica de parâmetros."""

from __future__ import annotations

from api.connectors.zadarma.canonical import (
    build_query,
    build_signing_query,
    signable_params,
)


class TestBuildQuery:
    """Testes para build_query (payload de wire)."""

    def test_empty_mapping_encodes_to_empty_string(self) -> None:
        assert build_query({}) == ""

    def test_spaces_encode_as_plus(self) -> None:
        assert build_query({"message": "hi there"}) == "message=hi+there"

    def test_reserved_characters_are_percent_encoded(self) -> None:
        assert build_query({"q": "a&b=c/d"}) == "q=a%26b%3Dc%2Fd"

    def test_tilde_encoded_and_asterisk_literal(self) -> None:
        """Mesmo resultado do form serializer: ``~`` vira %7E, ``*`` fica."""
        assert build_query({"m": "a~b*c"}) == "m=a%7Eb*c"
        assert build_query({"e~*": "x"}) == "e%7E*=x"

    def test_integral_float_renders_without_fraction(self) -> None:
        assert build_query({"a": 1.0, "b": 2.5, "c": 3}) == "a=1&b=2.5&c=3"

    def test_preserves_insertion_order(self) -> None:
        first = build_query({"b": "2", "a": "1"})
        second = build_query({"a": "1", "b": "2"})

        assert first == "b=2&a=1"
        assert second == "a=1&b=2"
        assert first != second

    def test_arrays_become_repeated_entries(self) -> None:
        assert build_query({"numbers": ["111", "222"], "x": 1}) == "numbers=111&numbers=222&x=1"

    def test_booleans_render_lowercase(self) -> None:
        assert build_query({"predicted": True, "cost_only": False}) == (
            "predicted=true&cost_only=false"
        )

    def test_none_values_are_omitted(self) -> None:
        assert build_query({"start": None, "limit": 10}) == "limit=10"

    def test_nested_mapping_uses_bracket_notation(self) -> None:
        encoded = build_query({"greeting_file": {"name": "a b.mp3"}})
        assert encoded == "greeting_file%5Bname%5D=a+b.mp3"

    def test_unicode_is_utf8_percent_encoded(self) -> None:
        assert build_query({"message": "olá"}) == "message=ol%C3%A1"


class TestSigningQuery:
    """Testes para a query usada na base de assinatura."""

    def test_signable_params_drops_objects_and_none(self) -> None:
        params = {
            "format": "json",
            "numbers": ["1", "2"],
            "file": {"name": "x"},
            "mixed": ["1", {"a": "b"}],
            "empty": None,
            "limit": 5,
        }

        assert signable_params(params) == {
            "format": "json",
            "numbers": ["1", "2"],
            "limit": 5,
        }

    def test_sorted_by_key(self) -> None:
        query = build_signing_query({"number": "1", "format": "json", "message": "a b"})
        assert query == "format=json&message=a+b&number=1"

    def test_sorting_is_ordinal(self) -> None:
        query = build_signing_query({"b": "1", "B": "2", "_": "3", "a": "4"})
        assert query == "B=2&_=3&a=4&b=1"
