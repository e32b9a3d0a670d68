"""
Shared test fixtures for all backend tests.

This module provides reusable pytest fixtures for common test objects
like menu items, orders and stand settings.
"""
import itertools

import pytest
from django.utils import timezone

from core_backend.config import app_settings
from products.models import Item
from orders.models import Order, OrderItem


# ============================================================================
# SETTINGS FIXTURES
# ============================================================================

@pytest.fixture
def stand_settings(settings):
    """
    Override stand tunables for one test.

    Usage:
        def test_something(stand_settings):
            stand_settings(KITCHEN_PARALLELISM=1)
    """
    def _apply(**overrides):
        for name, value in overrides.items():
            setattr(settings, name, value)
        app_settings.reload()
        return app_settings

    return _apply


# ============================================================================
# MENU FIXTURES
# ============================================================================

@pytest.fixture
def akara(db):
    """Akara: 240s prep, 50 per day, all still available"""
    return Item.objects.create(
        name='Akara',
        price=30000,
        prep_time_sec=240,
        daily_quantity=50,
        available_today=50,
    )


@pytest.fixture
def bread_and_egg(db):
    """Bread & Egg: 360s prep, 40 per day, all still available"""
    return Item.objects.create(
        name='Bread & Egg',
        price=40000,
        prep_time_sec=360,
        daily_quantity=40,
        available_today=40,
    )


@pytest.fixture
def last_unit_item(db):
    """Moi Moi with a single unit left for today"""
    return Item.objects.create(
        name='Moi Moi',
        price=25000,
        prep_time_sec=120,
        daily_quantity=30,
        available_today=1,
    )


@pytest.fixture
def sold_out_item(db):
    """Pap that sold out earlier this morning"""
    return Item.objects.create(
        name='Pap',
        price=15000,
        prep_time_sec=60,
        daily_quantity=60,
        available_today=0,
    )


@pytest.fixture
def off_menu_item(db):
    """Fried Yam with stock left but taken off the menu"""
    return Item.objects.create(
        name='Fried Yam',
        price=35000,
        prep_time_sec=300,
        daily_quantity=35,
        available_today=35,
        is_available=False,
    )


# ============================================================================
# ORDER FIXTURES
# ============================================================================

@pytest.fixture
def make_order(db):
    """
    Create an Order with lines directly in the database, bypassing
    OrderService (no stock changes, no code sequence).

    Usage:
        order = make_order([(akara, 2)], status=Order.OrderStatus.PAID)
    """
    codes = itertools.count(900)

    def _make(lines, status=Order.OrderStatus.PENDING,
              payment_method=Order.PaymentMethod.ONLINE, **fields):
        now = timezone.now()
        fields.setdefault('created_at', now)
        if status not in (Order.OrderStatus.PENDING, Order.OrderStatus.CANCELLED, Order.OrderStatus.EXPIRED):
            fields.setdefault('paid_at', now)
        order = Order.objects.create(
            short_code=fields.pop('short_code', f'TST-{next(codes)}'),
            status=status,
            payment_method=payment_method,
            total=sum(item.price * quantity for item, quantity in lines),
            **fields,
        )
        for item, quantity in lines:
            OrderItem.objects.create(
                order=order,
                item=item,
                quantity=quantity,
                unit_price=item.price,
            )
        return order

    return _make
