DISCOUNT_URL = "/api/v1/store/discount"


def codes(section):
    return sorted(entry["code"] for entry in section)


def test_listing_for_new_number_creates_user(client):
    response = client.get(f"{DISCOUNT_URL}?mobileNo=5551234567")

    assert response.status_code == 200
    assert response.json() == {
        "data": {"available": [], "used": [], "expired": [], "nextOrderNumber": 1}
    }
    # drugi odczyt trafia w tego samego usera
    assert client.get(f"{DISCOUNT_URL}?mobileNo=5551234567").status_code == 200


def test_listing_classifies_codes_by_order_number(client, make, db):
    user = make.user()
    other = make.user("2222222222")
    make.past_orders(user, 2)
    spent_on = make.orders_of(user)[0]

    make.code(user, "AVAIL", order_number=3, percent=15)
    make.code(user, "OLD", order_number=2)
    make.code(user, "FUTURE", order_number=5)
    spent = make.code(user, "SPENT", order_number=1)
    spent.is_used = True
    spent.used_by_order_id = spent_on.id
    db.commit()
    make.code(other, "OTHERS", order_number=3)
    make.code(None, "GNOW", order_number=3)
    make.code(None, "GPAST", order_number=1)

    response = client.get(f"{DISCOUNT_URL}?mobileNo=1234567890")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["nextOrderNumber"] == 3
    assert codes(data["available"]) == ["AVAIL", "GNOW"]
    assert codes(data["used"]) == ["SPENT"]
    assert codes(data["expired"]) == ["GPAST", "OLD"]

    avail = next(entry for entry in data["available"] if entry["code"] == "AVAIL")
    assert avail["discountPercent"] == 15.0
    assert avail["orderNumber"] == 3
    assert avail["isUsed"] is False
    assert data["used"][0]["usedByOrderId"] == spent_on.id


def test_listing_requires_mobile_no(client):
    response = client.get(DISCOUNT_URL)

    assert response.status_code == 400
    assert response.json()["error"] is True
