from decimal import Decimal
import unittest

from trip_expenses.aggregation import sort_trips, total_for_trip
from trip_expenses.models import AppState, Category, Currency
from trip_expenses.state import (
    add_expense,
    add_trip,
    demo_state,
    new_expense,
    new_id,
    new_trip,
    remove_expense,
    remove_trip,
    today_iso,
    update_expense,
    update_trip,
)


class StateOperationsTestCase(unittest.TestCase):
    def test_new_records_have_defaults(self):
        trip = new_trip()
        self.assertEqual(trip.start_date, today_iso())
        self.assertEqual(trip.end_date, today_iso())
        self.assertEqual(trip.mileage_km, 0)
        self.assertFalse(trip.include_lunch)

        expense = new_expense(trip.id)
        self.assertEqual(expense.trip_id, trip.id)
        self.assertEqual(expense.category, Category.OTHER)
        self.assertEqual(expense.currency, Currency.EUR)
        self.assertEqual(expense.amount, 0)

    def test_ids_are_unique(self):
        ids = {new_id() for _ in range(500)}
        self.assertEqual(len(ids), 500)

    def test_add_prepends_without_mutating(self):
        first = add_trip(AppState())
        second = add_trip(first)
        self.assertEqual(len(first.trips), 1)
        self.assertEqual(len(second.trips), 2)
        self.assertEqual(second.trips[1], first.trips[0])

        trip_id = first.trips[0].id
        with_expense = add_expense(second, trip_id)
        self.assertEqual(len(second.expenses), 0)
        self.assertEqual(with_expense.expenses[0].trip_id, trip_id)

    def test_update_trip_patches_fields(self):
        state = add_trip(AppState())
        trip_id = state.trips[0].id

        updated = update_trip(state, trip_id, destination="Leipzig", mileage_km="abc", include_dinner=True)

        trip = updated.trips[0]
        self.assertEqual(trip.destination, "Leipzig")
        self.assertEqual(trip.mileage_km, 0)
        self.assertTrue(trip.include_dinner)
        self.assertEqual(state.trips[0].destination, "")

    def test_negative_mileage_is_coerced_to_zero(self):
        state = add_trip(AppState())
        updated = update_trip(state, state.trips[0].id, mileage_km=-12)
        self.assertEqual(updated.trips[0].mileage_km, 0)

    def test_unknown_field_is_rejected(self):
        state = add_trip(AppState())
        trip_id = state.trips[0].id
        with self.assertRaises(AttributeError):
            update_trip(state, trip_id, colour="blue")
        with self.assertRaises(AttributeError):
            update_trip(state, trip_id, id="other")

    def test_update_expense(self):
        state = add_expense(add_trip(AppState()), "t-any")
        expense_id = state.expenses[0].id

        updated = update_expense(state, expense_id, category="Hotel", amount="89.50", note="2 nights")

        expense = updated.expenses[0]
        self.assertEqual(expense.category, Category.HOTEL)
        self.assertEqual(expense.amount, Decimal("89.50"))
        self.assertEqual(expense.note, "2 nights")

    def test_invalid_category_is_rejected(self):
        state = add_expense(AppState(), "t1")
        with self.assertRaises(ValueError):
            update_expense(state, state.expenses[0].id, category="Food")

    def test_bad_amount_counts_as_zero(self):
        state = add_trip(AppState(), new_trip(id="t1", start_date="2025-01-01", end_date="2025-01-01"))
        state = add_expense(state, "t1")
        state = update_expense(state, state.expenses[0].id, amount="twelve")

        self.assertEqual(state.expenses[0].amount, 0)
        self.assertEqual(total_for_trip(state.trips[0], state.expenses).expense_sum, 0)

    def test_oversized_amounts_do_not_break_sorting(self):
        state = AppState(trips=(new_trip(id="t1"), new_trip(id="t2")))
        state = add_expense(state, "t1")
        state = add_expense(state, "t1")
        for expense in state.expenses:
            state = update_expense(state, expense.id, amount="9e999999")
        state = add_expense(state, "t2", new_expense("t2", amount="5"))

        ordered = sort_trips(state.trips, state.expenses, "expense")

        self.assertEqual([t.id for t in ordered], ["t1", "t2"])
        self.assertEqual(total_for_trip(state.trips[0], state.expenses).expense_sum, 0)

    def test_remove_trip_cascades_expenses(self):
        state = AppState()
        state = add_trip(state, new_trip(id="t1"))
        state = add_trip(state, new_trip(id="t2"))
        state = add_expense(state, "t1")
        state = add_expense(state, "t2")
        state = add_expense(state, "t1")

        remaining = remove_trip(state, "t1")

        self.assertEqual([t.id for t in remaining.trips], ["t2"])
        self.assertEqual([e.trip_id for e in remaining.expenses], ["t2"])
        self.assertEqual(len(state.expenses), 3)

    def test_remove_expense(self):
        state = add_expense(add_expense(AppState(), "t1"), "t1")
        removed = remove_expense(state, state.expenses[0].id)
        self.assertEqual(removed.expenses, state.expenses[1:])

    def test_demo_state_totals(self):
        state = demo_state()
        trip = state.trips[0]
        self.assertEqual(state.expenses[0].trip_id, trip.id)

        totals = total_for_trip(trip, state.expenses)
        self.assertEqual(totals.total, Decimal("49.9") + Decimal("14") - Decimal("14") * Decimal("0.4") + Decimal("174"))


if __name__ == "__main__":
    unittest.main()
