from datetime import timedelta

from job_posting.tests.fakes import T0, make_purchase
from purchase.domain.expiry import (
    compute_expires_at,
    days_until_expiry,
    expiry_info,
    is_expired,
)
from purchase.domain.products import product_type_for


def test_no_purchase_record_is_never_expired():
    assert is_expired(None, now=T0) is False
    assert days_until_expiry(None, now=T0) is None


def test_record_without_expiry_is_not_expired():
    record = make_purchase(payment_status="PENDING")

    info = expiry_info(record, now=T0)

    assert info.is_expired is False
    assert info.days_remaining is None
    assert info.has_expiry is False


def test_expired_record_reports_minus_one():
    record = make_purchase(expires_at=T0 - timedelta(seconds=1))

    assert is_expired(record, now=T0) is True
    assert days_until_expiry(record, now=T0) == -1


def test_days_remaining_rounds_up_partial_days():
    record = make_purchase(expires_at=T0 + timedelta(days=1, minutes=1))

    assert days_until_expiry(record, now=T0) == 2


def test_expiry_boundary_is_not_expired():
    record = make_purchase(expires_at=T0)

    assert is_expired(record, now=T0) is False
    assert days_until_expiry(record, now=T0) == 0


def test_validity_window_is_thirty_days():
    assert compute_expires_at(T0) == T0 + timedelta(days=30)


def test_product_type_by_experience_level():
    assert product_type_for("INTERN") == "JUNIOR"
    assert product_type_for("junior") == "JUNIOR"
    assert product_type_for("MID_LEVEL") == "SENIOR"
    assert product_type_for("PRINCIPAL") == "SENIOR"
