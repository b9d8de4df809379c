import pytest

from lsystem.rules import Rule, RuleSet, expand, parse_iterations


PLANT_RULE = "A -> F[-A]F[-A]+FA"


class TestRuleParsing:
    def test_basic_rule(self) -> None:
        assert Rule.parse("F -> FF") == Rule("F", "FF")

    def test_whitespace_is_trimmed(self) -> None:
        assert Rule.parse("   AB   ->   B A  ") == Rule("AB", "B A")

    def test_missing_separator(self) -> None:
        assert Rule.parse("F = FF") is None
        assert Rule.parse("") is None

    def test_empty_pattern_is_dropped(self) -> None:
        assert Rule.parse(" -> X") is None

    def test_empty_replacement_deletes(self) -> None:
        assert Rule.parse("X ->") == Rule("X", "")

    def test_text_after_second_separator_is_ignored(self) -> None:
        assert Rule.parse("A -> B -> C") == Rule("A", "B")

    def test_str_round_trips(self) -> None:
        rule = Rule("A", "F[-A]")
        assert str(rule) == "A -> F[-A]"
        assert Rule.parse(str(rule)) == rule

    def test_rule_set_skips_bad_lines_and_keeps_order(self) -> None:
        rules = RuleSet.parse("A -> B\n\nnot a rule\nC->D\n -> E")
        assert [r.pattern for r in rules] == ["A", "C"]
        assert rules[1] == Rule("C", "D")
        assert len(rules) == 2

    def test_rule_sets_compare_by_value(self) -> None:
        assert RuleSet.parse("A->B") == RuleSet.parse("  A  ->  B \n\ngarbage")
        assert RuleSet.parse("A->B") != RuleSet.parse("A->C")

    def test_push(self) -> None:
        rules = RuleSet()
        rules.push("F", "FF")
        assert rules.apply("F") == "FF"


class TestApply:
    def test_single_pass(self) -> None:
        assert RuleSet.parse(PLANT_RULE).apply("A") == "F[-A]F[-A]+FA"

    def test_empty_rule_set_is_identity(self) -> None:
        assert RuleSet().apply("F[+F]-F") == "F[+F]-F"

    def test_no_match_returns_input(self) -> None:
        rules = RuleSet.parse("X -> Y\nZ -> W")
        assert rules.apply("F+F-F") == "F+F-F"

    def test_first_listed_rule_wins(self) -> None:
        assert RuleSet.parse("A -> B\nA -> C").apply("AA") == "BB"
        assert RuleSet.parse("A -> C\nA -> B").apply("AA") == "CC"

    def test_longer_pattern_listed_first_wins(self) -> None:
        rules = RuleSet.parse("AB -> X\nA -> Y")
        assert rules.apply("ABA") == "XY"

    def test_shorter_pattern_listed_first_shadows(self) -> None:
        rules = RuleSet.parse("A -> Y\nAB -> X")
        assert rules.apply("AB") == "YB"

    def test_matched_characters_are_skipped(self) -> None:
        rules = RuleSet.parse("AB -> X\nA -> Y")
        assert rules.apply("AAB") == "YX"
        assert RuleSet.parse("AA -> X").apply("AAA") == "XA"

    def test_multibyte_characters(self) -> None:
        assert RuleSet.parse("α -> β").apply("αFα") == "βFβ"
        assert RuleSet.parse("αβ -> γ").apply("αβα") == "γα"

    def test_deterministic(self) -> None:
        rules = RuleSet.parse(PLANT_RULE + "\nF -> FF")
        assert rules.apply("AFA") == rules.apply("AFA")

    def test_fixed_point(self) -> None:
        rules = RuleSet.parse("F -> F\nX -> X")
        s = "F[X]G"
        assert rules.apply(s) == s
        assert rules.apply(rules.apply(s)) == s


class TestExpand:
    def test_zero_iterations_returns_axiom(self) -> None:
        assert expand("A", RuleSet.parse(PLANT_RULE), 0) == "A"

    def test_one_iteration(self) -> None:
        assert expand("A", RuleSet.parse(PLANT_RULE), 1) == "F[-A]F[-A]+FA"

    def test_two_iterations_multiple_rules(self) -> None:
        x = "F[-A]F[-A]+FA"
        expected = "FF[-" + x + "]FF[-" + x + "]+FF" + x
        rules = RuleSet.parse(PLANT_RULE + "\nF -> FF")
        assert expand("A", rules, 2) == expected

    def test_algae(self) -> None:
        rules = RuleSet.parse("A -> AB\nB -> A")
        assert [expand("A", rules, n) for n in range(4)] == ["A", "AB", "ABA", "ABAAB"]


class TestParseIterations:
    @pytest.mark.parametrize("text, expected", [
        ("7", 7), (" 3 ", 3), (5, 5), ("0", 0),
        ("", 0), ("abc", 0), ("2.5", 0), ("-3", 0),
    ])
    def test_values(self, text, expected) -> None:
        assert parse_iterations(text) == expected
