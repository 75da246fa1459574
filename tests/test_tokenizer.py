"""Tests for tokenization and negation gluing."""

from __future__ import annotations

from naive_sentiment.normalizer import TextNormalizer
from naive_sentiment.tokenizer import glue_negations, token_length, tokenize


class TestGlueNegations:
    def test_glues_prefix_to_next_word(self) -> None:
        assert glue_negations("it isn't bad", ["isn't"]) == "it isn'tbad"

    def test_every_occurrence_is_glued(self) -> None:
        text = "isn't bad and isn't awful"
        assert glue_negations(text, ["isn't"]) == "isn'tbad and isn'tawful"

    def test_prefix_inside_word_also_glues(self) -> None:
        assert glue_negations("cannot go", ["not"]) == "cannotgo"

    def test_only_one_space_removed(self) -> None:
        assert glue_negations("isn't  bad", ["isn't"]) == "isn't bad"

    def test_case_sensitive(self) -> None:
        assert glue_negations("Isn't bad", ["isn't"]) == "Isn't bad"

    def test_prefix_at_end_untouched(self) -> None:
        assert glue_negations("it isn't", ["isn't"]) == "it isn't"

    def test_bytes(self) -> None:
        assert glue_negations(b"don't like", ["don't"]) == b"don'tlike"

    def test_no_prefixes(self) -> None:
        assert glue_negations("isn't bad", []) == "isn't bad"


class TestTokenize:
    def test_negation_glued_token(self) -> None:
        assert tokenize("isn't bad", ["isn't"]) == ["isn'tbad"]

    def test_lowercases(self) -> None:
        assert tokenize("Hello World") == ["hello", "world"]

    def test_consecutive_spaces_keep_empty_tokens(self) -> None:
        assert tokenize("a  b") == ["a", "", "b"]

    def test_empty_string(self) -> None:
        assert tokenize("") == [""]

    def test_crlf_becomes_space(self) -> None:
        assert tokenize("good\r\nday") == ["good", "day"]

    def test_bare_newline_is_not_a_separator(self) -> None:
        assert tokenize("good\nday") == ["good\nday"]

    def test_crlf_replaced_before_gluing(self) -> None:
        assert tokenize("isn't\r\nbad", ["isn't"]) == ["isn'tbad"]

    def test_punctuation_stays_attached(self) -> None:
        assert tokenize("Great, thanks!") == ["great,", "thanks!"]

    def test_accents_folded(self) -> None:
        assert tokenize("Café OLÉ") == ["cafe", "ole"]

    def test_locale_normalizer(self) -> None:
        normalizer = TextNormalizer(locale="de_DE")
        assert tokenize("Schöne Grüße", normalizer=normalizer) == ["schoene", "gruesse"]

    def test_bytes_latin1(self) -> None:
        assert tokenize("Café ok".encode("latin-1")) == ["cafe", "ok"]

    def test_bytes_utf8(self) -> None:
        assert tokenize("Déjà VU".encode("utf-8")) == ["deja", "vu"]

    def test_bytes_unmapped_byte_keeps_length(self) -> None:
        tokens = tokenize(b"ab\xa4")
        assert len(tokens) == 1
        assert token_length(tokens[0]) == 3

    def test_returns_fresh_list(self) -> None:
        first = tokenize("a b")
        first.append("c")
        assert tokenize("a b") == ["a", "b"]


class TestTokenLength:
    def test_ascii(self) -> None:
        assert token_length("abc") == 3

    def test_counts_utf8_bytes(self) -> None:
        assert token_length("жж") == 4

    def test_empty(self) -> None:
        assert token_length("") == 0
