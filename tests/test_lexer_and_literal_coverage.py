from __future__ import annotations

import importlib.util
import os
import unittest
from unittest import mock


JAX_AVAILABLE = importlib.util.find_spec("jax") is not None


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for lexer tests")
class LexerAndLiteralCoverageTests(unittest.TestCase):
    def _tokens(self, source: str, *, with_spans: bool = False):
        from j_jax.lexer import tokenize

        if with_spans:
            return [(tok.kind, tok.text, tok.pos, tok.end) for tok in tokenize(source)]
        return [(tok.kind, tok.text) for tok in tokenize(source)]

    def test_token_golden_verbs_parens_and_runs(self) -> None:
        tokens = self._tokens("(1 2+~3)#<4,5{6", with_spans=True)
        self.assertEqual(
            tokens,
            [
                ("LPAREN", "(", 0, 1),
                ("NUMBER_RUN", "1 2", 1, 4),
                ("VERB", "+", 4, 5),
                ("VERB", "~", 5, 6),
                ("NUMBER_RUN", "3", 6, 7),
                ("RPAREN", ")", 7, 8),
                ("VERB", "#", 8, 9),
                ("VERB", "<", 9, 10),
                ("NUMBER_RUN", "4", 10, 11),
                ("VERB", ",", 11, 12),
                ("NUMBER_RUN", "5", 12, 13),
                ("VERB", "{", 13, 14),
                ("NUMBER_RUN", "6", 14, 15),
            ],
        )

    def test_single_number_is_rank_zero(self) -> None:
        from j_jax.lexer import tokenize

        (tok,) = tokenize("42")
        assert tok.value is not None
        self.assertEqual(tok.value.rank, 0)
        self.assertEqual(tok.value.tolist(), 42)

    def test_whitespace_separated_numbers_form_one_vector(self) -> None:
        from j_jax.lexer import tokenize

        (tok,) = tokenize("1  2\t3")
        assert tok.value is not None
        self.assertEqual(tok.kind, "NUMBER_RUN")
        self.assertEqual(tok.value.shape, (3,))
        self.assertEqual(tok.value.tolist(), [1, 2, 3])

    def test_whitespace_around_verbs_is_ignored(self) -> None:
        self.assertEqual(
            self._tokens("  1 2 + 3  "),
            [("NUMBER_RUN", "1 2"), ("VERB", "+"), ("NUMBER_RUN", "3")],
        )

    def test_empty_and_blank_input_produce_no_tokens(self) -> None:
        self.assertEqual(self._tokens(""), [])
        self.assertEqual(self._tokens("   "), [])

    def test_invalid_numbers(self) -> None:
        from j_jax.errors import InvalidNumber, TokenError
        from j_jax.lexer import tokenize

        for source in ("1.5", "1..2", ".5", "3.", "2 1.0"):
            with self.subTest(source=source):
                with self.assertRaises(InvalidNumber) as ctx:
                    tokenize(source)
                self.assertIsInstance(ctx.exception, TokenError)

    def test_number_beyond_integer_range_is_invalid(self) -> None:
        from j_jax import evaluate_expression
        from j_jax.errors import InvalidNumber
        from j_jax.lexer import tokenize

        for source in ("99999999999999999999999", "1" * 5000, "1 2 " + "9" * 5000):
            with self.subTest(length=len(source)):
                with self.assertRaises(InvalidNumber):
                    tokenize(source)
        result = evaluate_expression("1" * 5000)
        self.assertTrue(result.startswith("Error: Token Error: Invalid number"), result[:80])

    def test_leading_zeros_do_not_count_toward_the_digit_limit(self) -> None:
        from j_jax.lexer import tokenize

        (token,) = tokenize("0" * 40 + "7")
        self.assertEqual(token.value.tolist(), 7)

    def test_number_run_longer_than_element_ceiling_is_invalid_vector(self) -> None:
        from j_jax import evaluate_expression
        from j_jax.errors import InvalidVector
        from j_jax.lexer import tokenize

        with mock.patch.dict(os.environ, {"J_JAX_MAX_ELEMENTS": "3"}):
            self.assertEqual(tokenize("1 2 3")[0].value.tolist(), [1, 2, 3])
            with self.assertRaises(InvalidVector) as ctx:
                tokenize("5+1 2 3 4")
            self.assertEqual(ctx.exception.pos, 2)
            self.assertTrue(evaluate_expression("1 2 3 4").startswith("Error: Token Error: Invalid vector"))

    def test_unknown_character_reports_position(self) -> None:
        from j_jax.errors import UnknownCharacter
        from j_jax.lexer import tokenize

        with self.assertRaises(UnknownCharacter) as ctx:
            tokenize("1 + a")
        self.assertEqual(ctx.exception.char, "a")
        self.assertEqual(ctx.exception.pos, 4)
        self.assertTrue(str(ctx.exception).startswith("Token Error: "))

    def test_negative_sign_is_not_part_of_the_language(self) -> None:
        from j_jax.errors import UnknownCharacter
        from j_jax.lexer import tokenize

        for source in ("-1", "_1", "1*2"):
            with self.subTest(source=source):
                with self.assertRaises(UnknownCharacter):
                    tokenize(source)


if __name__ == "__main__":
    unittest.main()
