"""Tests for English to Persian connector localization."""

import pytest

from fishchi.localizer import localize, to_persian_numerals


class TestLocalize:
    """Tests for localize()."""

    def test_and_between_names(self) -> None:
        """Should replace a standalone "and"."""
        assert localize("(احمدی and کریمی, 1399)", persian_numerals=False) == "(احمدی و کریمی, 1399)"

    def test_ampersand(self) -> None:
        """Should replace "&" with a spaced "و"."""
        assert localize("احمدی & کریمی", persian_numerals=False) == "احمدی و کریمی"

    def test_html_escaped_ampersand(self) -> None:
        """Should treat "&amp;" like "&"."""
        assert localize("احمدی &amp; کریمی", persian_numerals=False) == "احمدی و کریمی"

    def test_other_entities_untouched(self) -> None:
        """Should leave other HTML entities alone."""
        assert localize("a &lt; b", persian_numerals=False) == "a &lt; b"

    def test_ampersand_inside_word_untouched(self) -> None:
        """Should only replace an ampersand with spaces on both sides."""
        assert localize("R&D policy", persian_numerals=False) == "R&D policy"
        assert localize("R&amp;D policy", persian_numerals=False) == "R&amp;D policy"

    def test_case_insensitive_terms(self) -> None:
        """Should replace connectors and labels in any letter case."""
        assert localize("احمدی And کریمی", persian_numerals=False) == "احمدی و کریمی"
        assert localize("VOL. 3, NO. 3", persian_numerals=False) == "جلد 3, شماره 3"

    def test_in_and_month_names(self) -> None:
        """Should replace "In" and English month names."""
        assert localize("In: مجموعه مقالات", persian_numerals=False) == "در: مجموعه مقالات"
        assert localize("15 March 1401", persian_numerals=False) == "15 مارس 1401"
        assert localize("december", persian_numerals=False) == "دسامبر"

    def test_capital_initial_kept(self) -> None:
        """Should not read a capital initial as a page label."""
        assert localize("Smith, P. and", persian_numerals=False) == "Smith, P. و"

    def test_links_untouched(self) -> None:
        """Should copy links through unchanged."""
        text = "بازیابی از https://example.org/in/may/no.5 and doi:10.1000/and.12"
        assert localize(text, persian_numerals=True) == (
            "بازیابی از https://example.org/in/may/no.5 و doi:10.1000/and.12"
        )

    def test_et_al_collapses_comma(self) -> None:
        """Should drop the comma before et al."""
        assert localize("احمدی, et al., 1399", persian_numerals=False) == "احمدی و همکاران, 1399"

    def test_serial_comma_and(self) -> None:
        """Should drop the serial comma before "and"."""
        assert localize("الف, ب, and ج", persian_numerals=False) == "الف, ب و ج"

    def test_word_boundaries(self) -> None:
        """Should not touch "and" inside a word or "p." inside "pp."."""
        assert localize("Anderson andrew", persian_numerals=False) == "Anderson andrew"
        assert localize("pp. 12-20", persian_numerals=False) == "صص. 12-20"

    def test_bibliographic_terms(self) -> None:
        """Should replace n.d. and volume labels."""
        assert localize("(n.d.)", persian_numerals=False) == "(بی‌تا)"
        assert localize("Vol. 3, No. 2", persian_numerals=False) == "جلد 3, شماره 2"

    def test_persian_numerals_optional(self) -> None:
        """Should convert digits only when asked."""
        assert localize("1399", persian_numerals=True) == "۱۳۹۹"
        assert localize("1399", persian_numerals=False) == "1399"

    @pytest.mark.parametrize("value", ["", None, 12, ["and"]])
    def test_total_on_bad_input(self, value) -> None:
        """Should return an empty string for empty or non-string input."""
        assert localize(value) == ""

    def test_idempotent(self) -> None:
        """Localizing twice should equal localizing once."""
        text = "Smith and Jones, et al. (n.d.). pp. 1-2"
        once = localize(text, persian_numerals=False)
        assert localize(once, persian_numerals=False) == once


class TestPersianNumerals:
    """Tests for digit conversion."""

    def test_converts_all_digits(self) -> None:
        """Should map every ASCII digit."""
        assert to_persian_numerals("0123456789") == "۰۱۲۳۴۵۶۷۸۹"
