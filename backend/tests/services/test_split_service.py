from decimal import Decimal
import unittest

from groupsplit.core.errors import ValidationError
from groupsplit.services.split_service import allocate


def as_dict(splits):
    return {s.user_id: s.share for s in splits}


class TestEqualSplit(unittest.TestCase):
    def test_shares_sum_exactly(self):
        amount = Decimal("10.00")
        splits = allocate(amount, "equal", ["u1", "u2", "u3"])
        self.assertEqual(sum(s.share for s in splits), amount)
        self.assertEqual(len(splits), 3)

    def test_first_user_absorbs_remainder(self):
        """10.00 / 3 -> 3.34, 3.33, 3.33 with the extra cent on the first user."""
        splits = allocate(Decimal("10.00"), "equal", ["u1", "u2", "u3"])
        self.assertEqual(
            [(s.user_id, s.share) for s in splits],
            [("u1", Decimal("3.34")), ("u2", Decimal("3.33")), ("u3", Decimal("3.33"))],
        )

    def test_negative_remainder_also_goes_to_first_user(self):
        """20.00 / 3 rounds up to 6.67 each, so the first user gives back a cent."""
        splits = allocate(Decimal("20.00"), "equal", ["u1", "u2", "u3"])
        self.assertEqual(as_dict(splits), {"u1": Decimal("6.66"), "u2": Decimal("6.67"), "u3": Decimal("6.67")})

    def test_deterministic(self):
        first = allocate(Decimal("100"), "equal", ["a", "b", "c", "d", "e", "f", "g"])
        second = allocate(Decimal("100"), "equal", ["a", "b", "c", "d", "e", "f", "g"])
        self.assertEqual(first, second)

    def test_float_amount_accepted(self):
        splits = allocate(33.3, "equal", ["u1", "u2"])
        self.assertEqual(as_dict(splits), {"u1": Decimal("16.65"), "u2": Decimal("16.65")})

    def test_splits_start_unsettled(self):
        for split in allocate(Decimal("9"), "equal", ["u1", "u2"]):
            self.assertFalse(split.settled)
            self.assertIsNone(split.settled_at)

    def test_empty_participants_rejected(self):
        with self.assertRaises(ValidationError):
            allocate(Decimal("10"), "equal", [])

    def test_duplicate_participants_rejected(self):
        with self.assertRaises(ValidationError):
            allocate(Decimal("10"), "equal", ["u1", "u1"])


class TestPercentageSplit(unittest.TestCase):
    def test_shares_follow_percentages(self):
        splits = allocate(Decimal("200"), "percentage", ["a", "b"], {"a": 25, "b": 75})
        self.assertEqual(as_dict(splits), {"a": Decimal("50.00"), "b": Decimal("150.00")})

    def test_remainder_reconciled(self):
        details = {"a": Decimal("33.33"), "b": Decimal("33.33"), "c": Decimal("33.34")}
        amount = Decimal("10.00")
        splits = allocate(amount, "percentage", ["a", "b", "c"], details)
        self.assertEqual(sum(s.share for s in splits), amount)
        self.assertEqual(as_dict(splits)["b"], Decimal("3.33"))

    def test_total_of_90_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            allocate(Decimal("100"), "percentage", ["a", "b"], {"a": 40, "b": 50})
        self.assertIn("100", str(ctx.exception))
        self.assertIn("90", str(ctx.exception))

    def test_within_tolerance_accepted(self):
        splits = allocate(Decimal("100"), "percentage", ["a", "b"], {"a": "50.005", "b": "50"})
        self.assertEqual(sum(s.share for s in splits), Decimal("100"))

    def test_missing_details_rejected(self):
        with self.assertRaises(ValidationError):
            allocate(Decimal("100"), "percentage", ["a", "b"], {})

    def test_negative_percentage_rejected(self):
        with self.assertRaises(ValidationError):
            allocate(Decimal("100"), "percentage", ["a", "b"], {"a": 120, "b": -20})


class TestExactSplit(unittest.TestCase):
    def test_shares_taken_verbatim(self):
        details = {"a": Decimal("12.50"), "b": Decimal("7.25"), "c": Decimal("0.25")}
        splits = allocate(Decimal("20.00"), "exact", ["a", "b", "c"], details)
        self.assertEqual(as_dict(splits), details)

    def test_mismatched_total_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            allocate(Decimal("20.00"), "exact", ["a", "b"], {"a": 10, "b": 5})
        self.assertIn("Total shares must equal expense amount", str(ctx.exception))

    def test_zero_share_allowed(self):
        splits = allocate(Decimal("20.00"), "exact", ["a", "b"], {"a": 20, "b": 0})
        self.assertEqual(as_dict(splits), {"a": Decimal("20.00"), "b": Decimal("0.00")})


class TestInvalidInput(unittest.TestCase):
    def test_unknown_split_type(self):
        with self.assertRaises(ValidationError) as ctx:
            allocate(Decimal("10"), "shares", ["a"])
        self.assertIn("Invalid split type", str(ctx.exception))

    def test_non_positive_amount(self):
        for amount in (Decimal("0"), Decimal("-5"), "abc", None):
            with self.assertRaises(ValidationError):
                allocate(amount, "equal", ["a"])

    def test_sub_cent_amount_rejected_for_every_split_type(self):
        """0.004 rounds to 0.00, which is not a positive amount."""
        cases = [
            ("equal", None),
            ("percentage", {"a": 100}),
            ("exact", {"a": Decimal("0.004")}),
        ]
        for split_type, details in cases:
            with self.assertRaises(ValidationError, msg=split_type) as ctx:
                allocate(Decimal("0.004"), split_type, ["a", "b"], details)
            self.assertIn("Invalid expense amount", str(ctx.exception))

    def test_smallest_positive_amount_accepted(self):
        splits = allocate(Decimal("0.005"), "equal", ["a", "b"])
        self.assertEqual(as_dict(splits), {"a": Decimal("0.00"), "b": Decimal("0.01")})

    def test_amount_beyond_storage_rejected(self):
        for amount in (Decimal("10000000000"), Decimal("9999999999.999"), Decimal("1e30")):
            with self.assertRaises(ValidationError) as ctx:
                allocate(amount, "equal", ["a", "b"])
            self.assertIn("cannot exceed", str(ctx.exception))

    def test_largest_storable_amount_accepted(self):
        amount = Decimal("9999999999.99")
        splits = allocate(amount, "equal", ["a", "b"])
        self.assertEqual(sum(s.share for s in splits), amount)

    def test_validation_error_is_value_error(self):
        with self.assertRaises(ValueError):
            allocate(Decimal("10"), "bogus", ["a"])


if __name__ == "__main__":
    unittest.main()
