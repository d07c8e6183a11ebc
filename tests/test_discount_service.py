import string

import pytest

from store_backend.domain.errors import InvalidDiscountCode
from store_backend.services.discount_service import DiscountService, generate_discount_code


def test_order_counters_are_live_counts(db, make):
    alice = make.user("1111111111")
    bob = make.user("2222222222")
    make.past_orders(alice, 3)
    make.past_orders(bob, 1)

    svc = DiscountService(db)

    assert svc.next_order_number(alice.id) == 4
    assert svc.next_order_number(bob.id) == 2
    assert svc.next_global_order_number() == 5


@pytest.mark.parametrize("prior_orders, accepted", [(1, False), (2, True), (3, False)])
def test_user_code_matches_only_exact_order_number(db, make, prior_orders, accepted):
    user = make.user()
    make.past_orders(user, prior_orders)
    make.code(user, "EXACT3", order_number=3)

    svc = DiscountService(db)
    order_number = svc.next_order_number(user.id)

    if accepted:
        applied = svc.validate_code("EXACT3", user.id, order_number)
        assert applied.code == "EXACT3"
        assert applied.discount_percent == 10
    else:
        with pytest.raises(InvalidDiscountCode):
            svc.validate_code("EXACT3", user.id, order_number)


def test_global_code_checks_global_counter(db, make):
    alice = make.user("1111111111")
    bob = make.user("2222222222")
    make.past_orders(alice, 2)
    make.code(None, "GLOBAL3", order_number=3, percent=25)

    svc = DiscountService(db)

    # bob robi swoje 1. zamowienie, ale globalnie jest to 3.
    applied = svc.validate_code("GLOBAL3", bob.id, svc.next_order_number(bob.id))
    assert applied.discount_percent == 25

    make.past_orders(bob, 1)
    with pytest.raises(InvalidDiscountCode):
        svc.validate_code("GLOBAL3", alice.id, svc.next_order_number(alice.id))


def test_foreign_and_used_codes_are_invalid(db, make):
    owner = make.user("1111111111")
    other = make.user("2222222222")
    make.code(owner, "MINE", order_number=1)

    svc = DiscountService(db)
    with pytest.raises(InvalidDiscountCode):
        svc.validate_code("MINE", other.id, 1)

    discount = make.reload_code("MINE")
    discount.is_used = True
    db.commit()
    with pytest.raises(InvalidDiscountCode):
        svc.validate_code("MINE", owner.id, 1)


def test_consume_code_is_compare_and_swap(db, make):
    user = make.user()
    make.past_orders(user, 2)
    discount = make.code(user, "CAS", order_number=3)
    first_order, second_order = [o.id for o in make.orders_of(user)]

    svc = DiscountService(db)

    assert svc.consume_code(discount.id, first_order) is True
    assert svc.consume_code(discount.id, second_order) is False
    db.commit()

    reloaded = make.reload_code("CAS")
    assert reloaded.used_by_order_id == first_order
    assert reloaded.is_used is True


def test_generated_codes_are_upper_alphanumeric():
    allowed = set(string.ascii_uppercase + string.digits)
    for _ in range(50):
        code = generate_discount_code()
        assert len(code) == 8
        assert set(code) <= allowed


def test_mint_retries_past_collisions(db, make):
    make.code(None, "TAKEN000", order_number=99)
    candidates = iter(["TAKEN000", "TAKEN000", "FRESH001"])

    svc = DiscountService(db, max_attempts=5, code_factory=lambda: next(candidates))
    code = svc.mint_code_for_order(None, 1, 15)
    db.commit()

    assert code == "FRESH001"
    minted = make.reload_code("FRESH001")
    assert minted.user_id is None
    assert minted.is_global_order is True
    assert minted.order_number == 1
    assert float(minted.discount_percent) == 15


def test_mint_returns_none_when_attempts_run_out(db, make):
    make.code(None, "TAKEN000", order_number=99)
    calls = []

    def always_taken():
        calls.append(1)
        return "TAKEN000"

    svc = DiscountService(db, max_attempts=3, code_factory=always_taken)

    assert svc.mint_code_for_order(None, 1) is None
    assert len(calls) == 3
