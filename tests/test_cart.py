CART_URL = "/api/v1/store/cart"


def put_cart(client, items, mobile_no="1234567890"):
    return client.put(f"{CART_URL}?mobileNo={mobile_no}", json={"items": items})


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_get_cart_creates_user_with_empty_cart(client):
    response = client.get(f"{CART_URL}?mobileNo=5550001111")

    assert response.status_code == 200
    assert response.json() == {"data": {"items": [], "mobileNo": "5550001111"}}


def test_get_cart_requires_mobile_no(client):
    response = client.get(CART_URL)

    assert response.status_code == 400
    assert response.json() == {"error": True, "message": "Mobile number is required"}


def test_put_replaces_whole_cart(client, make):
    first = make.product(name="First", price="9.99", stock=3)
    second = make.product(name="Second", price=20, stock=7)

    assert put_cart(client, [{"productId": first.id, "quantity": 2}]).status_code == 200
    response = put_cart(client, [{"productId": second.id, "quantity": 1}])

    assert response.json() == {"data": {"success": True, "message": "Cart updated successfully"}}
    items = client.get(f"{CART_URL}?mobileNo=1234567890").json()["data"]["items"]
    assert items == [
        {
            "id": second.id,
            "productId": second.id,
            "name": "Second",
            "price": 20.0,
            "stock": 7,
            "image": None,
            "quantity": 1,
        }
    ]


def test_zero_quantity_drops_line_and_duplicates_are_summed(client, make):
    user = make.user()
    a = make.product(name="A")
    b = make.product(name="B")

    response = put_cart(
        client,
        [
            {"productId": a.id, "quantity": 1},
            {"productId": b.id, "quantity": 0},
            {"productId": a.id, "quantity": 2},
        ],
    )

    assert response.status_code == 200
    assert make.cart_quantities(user) == {a.id: 3}


def test_invalid_items_are_rejected(client, make):
    product = make.product()

    assert put_cart(client, [{"productId": 0, "quantity": 1}]).json()["message"] == "Invalid product ID in items"
    assert put_cart(client, [{"productId": product.id, "quantity": -1}]).json()["message"] == "Invalid quantity in items"
    assert put_cart(client, [{"productId": "abc", "quantity": 1}]).status_code == 400
    assert client.put(f"{CART_URL}?mobileNo=1234567890", json={}).status_code == 400


def test_unknown_product_leaves_cart_untouched(client, make):
    user = make.user()
    product = make.product()
    make.cart(user, [(product, 2)])

    response = put_cart(client, [{"productId": 9999, "quantity": 1}])

    assert response.status_code == 400
    assert response.json()["message"] == "Product 9999 does not exist"
    assert make.cart_quantities(user) == {product.id: 2}
