from datetime import date, timedelta
from decimal import Decimal

from bgb_interest.engine.segmenter import merge_payments, segment_periods
from bgb_interest.models.interest import PartialPayment


def _bounds(segments):
    return [(s.start, s.end) for s in segments]


class TestSegmentPeriods:
    def test_single_period_without_change(self, rate_series):
        segments = list(segment_periods(date(2023, 1, 1), date(2023, 7, 1), rate_series))
        assert _bounds(segments) == [(date(2023, 1, 1), date(2023, 7, 1))]
        assert segments[0].days == 181
        assert segments[0].base_rate == Decimal("1.62")

    def test_splits_at_rate_change(self, rate_series):
        segments = list(segment_periods(date(2023, 1, 1), date(2024, 1, 1), rate_series))
        assert _bounds(segments) == [
            (date(2023, 1, 1), date(2023, 7, 1)),
            (date(2023, 7, 2), date(2024, 1, 1)),
        ]
        assert [s.base_rate for s in segments] == [Decimal("1.62"), Decimal("3.12")]

    def test_contiguous(self, rate_series):
        segments = list(segment_periods(date(2023, 1, 1), date(2025, 6, 30), rate_series))
        for prev, cur in zip(segments, segments[1:]):
            assert cur.start == prev.end + timedelta(days=1)
        assert segments[-1].end == date(2025, 6, 30)

    def test_split_by_year(self, rate_series):
        segments = list(segment_periods(date(2023, 6, 15), date(2024, 3, 15), rate_series, split_by_year=True))
        assert _bounds(segments) == [
            (date(2023, 6, 15), date(2023, 7, 1)),
            (date(2023, 7, 2), date(2023, 12, 31)),
            (date(2024, 1, 1), date(2024, 3, 15)),
        ]
        assert segments[2].base_rate == Decimal("3.62")

    def test_without_year_split_crosses_new_year(self, rate_series):
        segments = list(segment_periods(date(2023, 6, 15), date(2024, 3, 15), rate_series))
        assert (date(2023, 7, 2), date(2024, 1, 1)) in _bounds(segments)

    def test_due_on_new_years_eve_skips_zero_day_step(self, rate_series):
        segments = list(segment_periods(date(2023, 12, 31), date(2024, 3, 1), rate_series, split_by_year=True))
        assert _bounds(segments) == [(date(2024, 1, 1), date(2024, 3, 1))]
        assert all(s.days > 0 for s in segments)

    def test_splits_at_payment(self, rate_series):
        payment = PartialPayment(date(2023, 4, 2), Decimal("500"))
        segments = list(segment_periods(date(2023, 2, 1), date(2023, 6, 1), rate_series, [payment]))
        assert _bounds(segments) == [
            (date(2023, 2, 1), date(2023, 4, 2)),
            (date(2023, 4, 3), date(2023, 6, 1)),
        ]
        assert [s.days for s in segments] == [60, 59]
        assert segments[0].payment == payment
        assert segments[1].payment is None

    def test_payment_on_rate_change_day(self, rate_series):
        payment = PartialPayment(date(2023, 7, 1), Decimal("4000"))
        segments = list(segment_periods(date(2023, 5, 1), date(2023, 9, 1), rate_series, [payment]))
        assert len(segments) == 2
        assert segments[0].end == date(2023, 7, 1)
        assert segments[0].payment == payment

    def test_same_day_payments_merged(self, rate_series):
        payments = [
            PartialPayment(date(2023, 4, 2), Decimal("300")),
            PartialPayment(date(2023, 4, 2), Decimal("200")),
        ]
        segments = list(segment_periods(date(2023, 2, 1), date(2023, 6, 1), rate_series, payments))
        assert len(segments) == 2
        assert segments[0].payment == PartialPayment(date(2023, 4, 2), Decimal("500"))

    def test_payment_on_day_after_boundary_is_carried(self, rate_series):
        payments = [
            PartialPayment(date(2023, 4, 2), Decimal("300")),
            PartialPayment(date(2023, 4, 3), Decimal("200")),
        ]
        segments = list(segment_periods(date(2023, 2, 1), date(2023, 6, 1), rate_series, payments))
        assert len(segments) == 2
        assert segments[1].start == date(2023, 4, 3)
        assert segments[1].opening_payment == payments[1]
        assert segments[1].payment is None

    def test_payment_after_carried_payment_still_splits(self, rate_series):
        payments = [
            PartialPayment(date(2023, 4, 2), Decimal("300")),
            PartialPayment(date(2023, 4, 3), Decimal("200")),
            PartialPayment(date(2023, 5, 1), Decimal("100")),
        ]
        segments = list(segment_periods(date(2023, 2, 1), date(2023, 6, 1), rate_series, payments))
        assert _bounds(segments) == [
            (date(2023, 2, 1), date(2023, 4, 2)),
            (date(2023, 4, 3), date(2023, 5, 1)),
            (date(2023, 5, 2), date(2023, 6, 1)),
        ]
        assert segments[1].opening_payment == payments[1]
        assert segments[1].payment == payments[2]
        assert segments[2].opening_payment is None

    def test_payment_on_end_date(self, rate_series):
        payment = PartialPayment(date(2023, 6, 1), Decimal("100"))
        segments = list(segment_periods(date(2023, 2, 1), date(2023, 6, 1), rate_series, [payment]))
        assert len(segments) == 1
        assert segments[0].payment == payment

    def test_empty_span(self, rate_series):
        assert list(segment_periods(date(2023, 7, 1), date(2023, 7, 1), rate_series)) == []


class TestMergePayments:
    def test_none(self):
        assert merge_payments([]) is None

    def test_single(self):
        payment = PartialPayment(date(2023, 4, 2), Decimal("300"))
        assert merge_payments([payment]) is payment
