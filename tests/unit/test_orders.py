"""
Order unit tests
"""
import pytest
from config.settings import settings
from immidraft.services.order_service import calculate_total, order_service
from immidraft.utils.exceptions import InvalidInputError, ResourceNotFoundError, ValidationError


class TestCalculateTotal:
    """Order totals"""

    @pytest.mark.unit
    def test_rounds_to_cents(self):
        assert calculate_total(3, 19.999) == 60.0
        assert calculate_total(4, 24.5) == 98.0

    @pytest.mark.unit
    @pytest.mark.parametrize("page_count, price", [(0, 25.0), (-1, 25.0), (2, 0), (2, -5.0)])
    def test_rejects_non_positive_values(self, page_count, price):
        with pytest.raises(ValidationError):
            calculate_total(page_count, price)


class TestCreateOrder:
    """Order creation after payment"""

    @pytest.mark.unit
    def test_completed_payment_creates_order(self):
        order = order_service.create_order(
            user_id="user-1",
            service_type="translation",
            page_count=3,
            payment_result="completed",
            language_from="Spanish",
            language_to="English",
            documents=["uploads/birth_certificate.pdf"],
        )

        assert order["status"] == "paid"
        assert order["price_per_page"] == settings.default_price_per_page
        assert order["total_amount"] == round(3 * settings.default_price_per_page, 2)
        assert order["documents"] == ["uploads/birth_certificate.pdf"]
        assert order_service.get_order(order["id"])["user_id"] == "user-1"

    @pytest.mark.unit
    @pytest.mark.parametrize("payment_result", ["canceled", "failed"])
    def test_unpaid_orders_rejected(self, payment_result):
        with pytest.raises(ValidationError):
            order_service.create_order("user-1", "translation", 2, payment_result)
        assert order_service.list_orders("user-1") == []

    @pytest.mark.unit
    def test_unknown_service_type(self):
        with pytest.raises(InvalidInputError):
            order_service.create_order("user-1", "notary", 2, "completed")

    @pytest.mark.unit
    def test_missing_user(self):
        with pytest.raises(InvalidInputError):
            order_service.create_order("  ", "translation", 2, "completed")

    @pytest.mark.unit
    def test_list_orders_only_for_user(self):
        order_service.create_order("user-1", "evaluation", 1, "completed", price_per_page=40.0)
        order_service.create_order("user-2", "translation", 1, "completed")

        orders = order_service.list_orders("user-1")

        assert len(orders) == 1
        assert orders[0]["total_amount"] == 40.0

    @pytest.mark.unit
    def test_get_unknown_order(self):
        with pytest.raises(ResourceNotFoundError):
            order_service.get_order("missing")
