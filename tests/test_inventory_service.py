import uuid

import pytest
from sqlmodel import Session, select

from nursery.core.errors import InsufficientStock, InvalidOrder, NotFound, PartialFailure
from nursery.models.cart import CartLine
from nursery.models.order import Order
from nursery.models.product import Product
from nursery.repositories.cart_repo import CartRepository
from nursery.repositories.order_repo import OrderRepository
from nursery.repositories.product_repo import ProductRepository
from nursery.schemas.cart import CartLineCreate
from nursery.schemas.order import OrderCreate
from nursery.services.inventory_service import InventoryService

SCOPE = "global"


def add(product_id, quantity, **extra) -> CartLineCreate:
    return CartLineCreate.model_validate({"_id": str(product_id), "quantity": quantity, **extra})


def order(*items, **overrides) -> OrderCreate:
    body = {
        "name": "Ada",
        "phone": "0123456789",
        "address": "1 Garden Lane",
        "grandTotal": 42.5,
        "products": [
            {"productId": str(pid), "quantity": qty} for pid, qty in items
        ],
    }
    body.update(overrides)
    return OrderCreate.model_validate(body)


def stock(session: Session, product_id) -> int:
    return session.get(Product, product_id).quantity


def cart_lines(session: Session, scope: str = SCOPE) -> list[CartLine]:
    return list(session.exec(select(CartLine).where(CartLine.scope == scope)).all())


def orders(session: Session) -> list[Order]:
    return list(session.exec(select(Order)).all())


class LateLineCartRepository(CartRepository):
    """Misses the existing line once, as if it was inserted after the lookup."""

    def __init__(self):
        self.lookups = 0

    def get_for_product(self, session, scope, product_id):
        self.lookups += 1
        if self.lookups == 2:
            return None
        return super().get_for_product(session, scope, product_id)


class TestAddToCart:
    def test_reserves_stock_and_creates_line(self, session, inventory, make_product):
        product = make_product(quantity=10)

        line = inventory.add_to_cart(session, add(product.id, 3, name="Monstera"), SCOPE)

        assert line.quantity == 3
        assert line.product_id == product.id
        assert line.extra == {"name": "Monstera"}
        assert stock(session, product.id) == 7

    def test_same_product_merges_into_one_line(self, session, inventory, make_product):
        product = make_product(quantity=10)

        inventory.add_to_cart(session, add(product.id, 2, note="gift"), SCOPE)
        inventory.add_to_cart(session, add(product.id, 5, price=12), SCOPE)

        lines = cart_lines(session)
        assert len(lines) == 1
        assert lines[0].quantity == 7
        assert lines[0].extra == {"note": "gift", "price": 12}
        assert stock(session, product.id) == 3

    def test_stock_is_conserved_over_sequential_adds(self, session, inventory, make_product):
        product = make_product(quantity=12)

        for qty in (1, 4, 2, 5):
            inventory.add_to_cart(session, add(product.id, qty), SCOPE)

        reserved = sum(line.quantity for line in cart_lines(session))
        assert stock(session, product.id) + reserved == 12
        assert stock(session, product.id) == 0

    def test_more_than_available_is_refused_without_changes(
        self, session, inventory, make_product
    ):
        product = make_product(quantity=5)

        with pytest.raises(InsufficientStock):
            inventory.add_to_cart(session, add(product.id, 6), SCOPE)

        assert stock(session, product.id) == 5
        assert cart_lines(session) == []

    def test_request_checks_remaining_stock_not_original(
        self, session, inventory, make_product
    ):
        product = make_product(quantity=5)
        inventory.add_to_cart(session, add(product.id, 4), SCOPE)

        with pytest.raises(InsufficientStock):
            inventory.add_to_cart(session, add(product.id, 2), SCOPE)

        assert stock(session, product.id) == 1
        assert cart_lines(session)[0].quantity == 4

    @pytest.mark.parametrize("qty", [0, -3])
    def test_non_positive_quantity_is_insufficient_stock(
        self, session, inventory, make_product, qty
    ):
        product = make_product(quantity=5)

        with pytest.raises(InsufficientStock):
            inventory.add_to_cart(session, add(product.id, qty), SCOPE)

        assert stock(session, product.id) == 5

    def test_unknown_product(self, session, inventory):
        with pytest.raises(NotFound):
            inventory.add_to_cart(session, add(uuid.uuid4(), 1), SCOPE)

    def test_reserved_keys_are_not_copied_into_extra(self, session, inventory, make_product):
        product = make_product(quantity=5)

        line = inventory.add_to_cart(
            session, add(product.id, 1, scope="other", createdAt="x", category="Indoor"), SCOPE
        )

        assert line.scope == SCOPE
        assert line.extra == {"category": "Indoor"}

    def test_line_created_concurrently_is_merged_on_retry(self, session, make_product):
        product = make_product(quantity=10)
        inventory = InventoryService(
            ProductRepository(), LateLineCartRepository(), OrderRepository()
        )
        inventory.add_to_cart(session, add(product.id, 2), SCOPE)

        inventory.add_to_cart(session, add(product.id, 3), SCOPE)

        lines = cart_lines(session)
        assert len(lines) == 1
        assert lines[0].quantity == 5
        assert stock(session, product.id) == 5


class TestCartScopes:
    def test_scopes_keep_separate_lines(self, session, inventory, make_product):
        product = make_product(quantity=10)

        inventory.add_to_cart(session, add(product.id, 2), "alice")
        inventory.add_to_cart(session, add(product.id, 3), "bob")

        assert [line.quantity for line in inventory.get_cart(session, "alice")] == [2]
        assert [line.quantity for line in inventory.get_cart(session, "bob")] == [3]
        assert stock(session, product.id) == 5

    def test_get_cart_returns_every_line(self, session, inventory, make_product):
        a = make_product("Fern", quantity=3)
        b = make_product("Cactus", quantity=3)
        inventory.add_to_cart(session, add(a.id, 1), SCOPE)
        inventory.add_to_cart(session, add(b.id, 2), SCOPE)

        lines = inventory.get_cart(session, SCOPE)

        assert {line.product_id for line in lines} == {a.id, b.id}


class TestRemoveCartLine:
    def test_removal_keeps_stock_reserved_by_default(self, session, inventory, make_product):
        product = make_product(quantity=10)
        line = inventory.add_to_cart(session, add(product.id, 4), SCOPE)

        result = inventory.remove_cart_line(session, line.id, SCOPE)

        assert result == {"deletedCount": 1, "restoredQuantity": 0}
        assert cart_lines(session) == []
        assert stock(session, product.id) == 6

    def test_removal_can_restore_stock(self, session, make_product):
        inventory = InventoryService(
            ProductRepository(),
            CartRepository(),
            OrderRepository(),
            restore_stock_on_remove=True,
        )
        product = make_product(quantity=10)
        line = inventory.add_to_cart(session, add(product.id, 4), SCOPE)

        result = inventory.remove_cart_line(session, line.id, SCOPE)

        assert result["restoredQuantity"] == 4
        assert stock(session, product.id) == 10

    def test_unknown_line(self, session, inventory):
        with pytest.raises(NotFound):
            inventory.remove_cart_line(session, uuid.uuid4(), SCOPE)

    def test_line_of_another_scope_is_not_visible(self, session, inventory, make_product):
        product = make_product(quantity=10)
        line = inventory.add_to_cart(session, add(product.id, 1), "alice")

        with pytest.raises(NotFound):
            inventory.remove_cart_line(session, line.id, "bob")

        assert len(cart_lines(session, "alice")) == 1


class TestPlaceOrder:
    def test_decrements_records_and_clears_cart(self, session, inventory, make_product):
        product = make_product(quantity=10)

        placed = inventory.place_order(session, order((product.id, 4)), SCOPE)

        assert stock(session, product.id) == 6
        assert placed.grand_total == 42.5
        assert placed.products == [{"productId": str(product.id), "quantity": 4}]
        assert placed.ordered_at is not None
        assert orders(session) == [placed]
        assert cart_lines(session) == []

    def test_clears_whole_cart_including_unordered_products(
        self, session, inventory, make_product
    ):
        ordered = make_product("Fern", quantity=10)
        other = make_product("Cactus", quantity=10)
        inventory.add_to_cart(session, add(ordered.id, 1), SCOPE)
        inventory.add_to_cart(session, add(other.id, 2), SCOPE)

        inventory.place_order(session, order((ordered.id, 1)), SCOPE)

        assert cart_lines(session) == []
        # The cleared reservation for `other` is not given back
        assert stock(session, other.id) == 8

    def test_other_scopes_are_left_alone(self, session, inventory, make_product):
        product = make_product(quantity=10)
        inventory.add_to_cart(session, add(product.id, 1), "alice")
        inventory.add_to_cart(session, add(product.id, 1), "bob")

        inventory.place_order(session, order((product.id, 1)), "alice")

        assert cart_lines(session, "alice") == []
        assert len(cart_lines(session, "bob")) == 1

    def test_failure_rolls_back_every_decrement(self, session, inventory, make_product):
        enough = make_product("Fern", quantity=10)
        short = make_product("Cactus", quantity=1)
        inventory.add_to_cart(session, add(enough.id, 1), SCOPE)

        with pytest.raises(PartialFailure) as excinfo:
            inventory.place_order(session, order((enough.id, 4), (short.id, 2)), SCOPE)

        failed = excinfo.value.data
        assert [(f.product_id, f.reason) for f in failed] == [
            (short.id, "insufficient stock")
        ]
        assert stock(session, enough.id) == 9
        assert stock(session, short.id) == 1
        assert orders(session) == []
        assert len(cart_lines(session)) == 1

    def test_reports_every_failed_item(self, session, inventory, make_product):
        short = make_product(quantity=0)
        missing = uuid.uuid4()

        with pytest.raises(PartialFailure) as excinfo:
            inventory.place_order(session, order((missing, 1), (short.id, 1)), SCOPE)

        assert [(f.product_id, f.reason) for f in excinfo.value.data] == [
            (missing, "not found"),
            (short.id, "insufficient stock"),
        ]

    def test_same_product_twice_counts_both_lines(self, session, inventory, make_product):
        product = make_product(quantity=5)

        with pytest.raises(PartialFailure):
            inventory.place_order(session, order((product.id, 3), (product.id, 3)), SCOPE)

        assert stock(session, product.id) == 5

        inventory.place_order(session, order((product.id, 3), (product.id, 2)), SCOPE)
        assert stock(session, product.id) == 0

    def test_grand_total_is_not_recomputed(self, session, inventory, make_product):
        product = make_product(quantity=5, price=10)

        placed = inventory.place_order(
            session, order((product.id, 2), grandTotal=1), SCOPE
        )

        assert placed.grand_total == 1

    @pytest.mark.parametrize("missing", ["name", "phone", "address", "grandTotal"])
    def test_missing_field_is_invalid(self, session, inventory, make_product, missing):
        product = make_product(quantity=5)
        payload = order((product.id, 1), **{missing: None})

        with pytest.raises(InvalidOrder) as excinfo:
            inventory.place_order(session, payload, SCOPE)

        assert excinfo.value.data == {"missing": [missing]}
        assert stock(session, product.id) == 5

    def test_blank_field_is_invalid(self, session, inventory, make_product):
        product = make_product(quantity=5)

        with pytest.raises(InvalidOrder):
            inventory.place_order(session, order((product.id, 1), address="   "), SCOPE)

    def test_empty_line_items_is_invalid(self, session, inventory):
        with pytest.raises(InvalidOrder):
            inventory.place_order(session, order(), SCOPE)

    def test_snapshot_keeps_extra_line_fields(self, session, inventory, make_product):
        product = make_product(quantity=5)
        payload = order(
            products=[{"_id": str(product.id), "quantity": 1, "name": "Fern", "price": 9.5}]
        )

        placed = inventory.place_order(session, payload, SCOPE)

        assert placed.products == [
            {"productId": str(product.id), "quantity": 1, "name": "Fern", "price": 9.5}
        ]
