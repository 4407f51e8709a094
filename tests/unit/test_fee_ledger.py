from datetime import date

from coaching.services.finance import effective_fee, project_fee_ledger

SCHEDULE = [
    {"amount": 50000, "due_date": "2025-04-01"},
    {"amount": 50000, "due_date": "2025-07-01"},
    {"amount": 50000, "due_date": "2025-10-01"},
]


class TestFeeLedger:
    def test_partial_payment_lands_in_second_installment(self):
        ledger = project_fee_ledger(fee_agreed=150000, waive_off=0, paid=60000, schedule=SCHEDULE)
        assert ledger.total_fee == 150000
        assert ledger.pending == 90000
        assert ledger.current_due == 40000
        assert ledger.current_due_date == date(2025, 7, 1)
        assert ledger.installment_number == 2

    def test_nothing_paid_is_first_installment(self):
        ledger = project_fee_ledger(fee_agreed=150000, waive_off=0, paid=0, schedule=SCHEDULE)
        assert ledger.current_due == 50000
        assert ledger.installment_number == 1

    def test_waive_off_caps_current_due_at_pending(self):
        ledger = project_fee_ledger(fee_agreed=150000, waive_off=20000, paid=100000, schedule=SCHEDULE)
        assert ledger.total_fee == 130000
        assert ledger.pending == 30000
        assert ledger.current_due == 30000

    def test_fully_paid(self):
        ledger = project_fee_ledger(fee_agreed=150000, waive_off=0, paid=150000, schedule=SCHEDULE)
        assert ledger.pending == 0
        assert ledger.current_due == 0
        assert ledger.installment_number is None

    def test_without_schedule_everything_pending_is_due(self):
        ledger = project_fee_ledger(fee_agreed=80000, waive_off=0, paid=30000, schedule=[])
        assert ledger.pending == 50000
        assert ledger.current_due == 50000
        assert ledger.current_due_date is None

    def test_schedule_short_of_agreement(self):
        ledger = project_fee_ledger(fee_agreed=120000, waive_off=0, paid=100000, schedule=SCHEDULE[:2])
        assert ledger.current_due == 20000

    def test_effective_fee_never_negative(self):
        assert effective_fee(10000, 25000) == 0
        assert effective_fee(None, None) == 0
