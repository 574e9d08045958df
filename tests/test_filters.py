import unittest
from datetime import datetime
from decimal import Decimal

from billquery.domain.enums import BillField, CompareOp
from billquery.domain.filters import (
    NO_CATEGORY,
    BillSearch,
    NoCategory,
    build_bill_filter,
    category_or_uncategorized,
    filter_by_category,
    filter_by_credit_card,
    filter_by_end_date,
    filter_by_has_credit_card,
    filter_by_installment_count,
    filter_by_max_amount,
    filter_by_min_amount,
    filter_by_name,
    filter_by_start_date,
)
from billquery.domain.predicates import (
    ALWAYS,
    And,
    Compare,
    Contains,
    EqualsIgnoreCase,
    InstallmentExists,
    IsBlank,
    IsNotNull,
    Not,
    combine,
)


class AbsentInputTests(unittest.TestCase):
    def test_every_filter_is_neutral_without_input(self) -> None:
        for builder in (
            filter_by_name,
            filter_by_start_date,
            filter_by_end_date,
            filter_by_min_amount,
            filter_by_max_amount,
            filter_by_installment_count,
            filter_by_category,
            filter_by_credit_card,
            filter_by_has_credit_card,
        ):
            with self.subTest(builder=builder.__name__):
                self.assertIs(builder(None), ALWAYS)

    def test_blank_name_and_category_are_neutral(self) -> None:
        self.assertIs(filter_by_name(""), ALWAYS)
        self.assertIs(filter_by_name("   "), ALWAYS)
        self.assertIs(filter_by_category(""), ALWAYS)
        self.assertIs(filter_by_category(" \t"), ALWAYS)

    def test_empty_search_builds_neutral_filter(self) -> None:
        search = BillSearch()
        self.assertTrue(search.is_empty())
        self.assertIs(build_bill_filter(search), ALWAYS)


class FragmentShapeTests(unittest.TestCase):
    def test_name_is_substring_match(self) -> None:
        self.assertEqual(filter_by_name("Foo"), Contains(BillField.NAME, "Foo"))

    def test_date_and_amount_bounds_are_inclusive(self) -> None:
        t = datetime(2026, 1, 1, 12, 0)
        self.assertEqual(filter_by_start_date(t), Compare(BillField.EXECUTION_DATE, CompareOp.GE, t))
        self.assertEqual(filter_by_end_date(t), Compare(BillField.EXECUTION_DATE, CompareOp.LE, t))
        self.assertEqual(
            filter_by_min_amount(Decimal("10.00")),
            Compare(BillField.TOTAL_AMOUNT, CompareOp.GE, Decimal("10.00")),
        )
        self.assertEqual(
            filter_by_max_amount(Decimal("99.99")),
            Compare(BillField.TOTAL_AMOUNT, CompareOp.LE, Decimal("99.99")),
        )

    def test_installment_count_is_exact(self) -> None:
        self.assertEqual(
            filter_by_installment_count(3),
            Compare(BillField.NUMBER_OF_INSTALLMENTS, CompareOp.EQ, 3),
        )

    def test_zero_values_are_real_constraints(self) -> None:
        self.assertIsNot(filter_by_installment_count(0), ALWAYS)
        self.assertIsNot(filter_by_min_amount(Decimal("0")), ALWAYS)
        self.assertIsNot(filter_by_credit_card(0), ALWAYS)

    def test_category_modes(self) -> None:
        self.assertEqual(filter_by_category(NO_CATEGORY), IsBlank(BillField.CATEGORY))
        self.assertEqual(
            filter_by_category("Food"),
            And(
                (
                    IsNotNull(BillField.CATEGORY),
                    EqualsIgnoreCase(BillField.CATEGORY, "Food"),
                )
            ),
        )

    def test_reserved_category_string_is_a_literal_in_the_domain(self) -> None:
        predicate = filter_by_category("__NO_CATEGORY__")
        self.assertNotEqual(predicate, IsBlank(BillField.CATEGORY))

    def test_credit_card_filters(self) -> None:
        self.assertEqual(filter_by_credit_card(5), InstallmentExists(credit_card_id=5))
        self.assertEqual(filter_by_has_credit_card(True), InstallmentExists())
        self.assertEqual(filter_by_has_credit_card(False), Not(InstallmentExists()))

    def test_no_category_is_a_singleton(self) -> None:
        self.assertIs(NoCategory(), NO_CATEGORY)


class CombineTests(unittest.TestCase):
    def test_combine_drops_neutral_and_flattens(self) -> None:
        a = filter_by_name("x")
        b = filter_by_installment_count(2)
        c = filter_by_credit_card(1)
        combined = combine(ALWAYS, combine(a, b), ALWAYS, c)
        self.assertEqual(combined, And((a, b, c)))

    def test_combine_single_fragment_is_unwrapped(self) -> None:
        a = filter_by_name("x")
        self.assertEqual(combine(ALWAYS, a), a)

    def test_build_bill_filter_includes_each_supplied_field(self) -> None:
        search = BillSearch(
            name="rent",
            number_of_installments=1,
            has_credit_card=False,
        )
        self.assertEqual(
            build_bill_filter(search),
            And(
                (
                    Contains(BillField.NAME, "rent"),
                    Compare(BillField.NUMBER_OF_INSTALLMENTS, CompareOp.EQ, 1),
                    Not(InstallmentExists()),
                )
            ),
        )


class CategoryInputTests(unittest.TestCase):
    def test_uncategorized_flag_wins(self) -> None:
        self.assertIs(category_or_uncategorized("Food", uncategorized=True), NO_CATEGORY)

    def test_legacy_reserved_string_maps_to_marker(self) -> None:
        self.assertIs(category_or_uncategorized("__NO_CATEGORY__"), NO_CATEGORY)

    def test_plain_category_passes_through(self) -> None:
        self.assertEqual(category_or_uncategorized("Food"), "Food")
        self.assertIsNone(category_or_uncategorized(None))


if __name__ == "__main__":
    unittest.main()
