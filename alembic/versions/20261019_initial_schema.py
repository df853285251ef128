"""initial_schema

Revision ID: 20261019_initial_schema
Revises:
Create Date: 2026-10-19

Users, meal catalog, restaurants with their menus, and orders with
price-snapshotted line items.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261019_initial_schema'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

payment_method = sa.Enum('card', 'prepaid', 'cash', name='payment_method')
fulfillment = sa.Enum('pickup', 'delivery', name='fulfillment')
order_status = sa.Enum('ordered', 'preparing', 'delivering', 'delivered', name='order_status')


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('role', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False, unique=True),
        sa.Column('first_name', sa.String(), nullable=False),
        sa.Column('last_name', sa.String(), nullable=False),
        sa.Column('payment_method', payment_method, nullable=True),
        sa.Column('card_brand', sa.String(), nullable=True),
        sa.Column('card_last4', sa.String(4), nullable=True),
        sa.Column('holder_name', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )

    op.create_table(
        'meals',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('source_id', sa.String(), nullable=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('category', sa.String(), nullable=False),
        sa.Column('thumbnail_url', sa.String(), nullable=False),
        sa.Column('ingredients', sa.JSON(), nullable=False),
        sa.Column('measures', sa.JSON(), nullable=False),
        sa.Column('is_global', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_by_seller_id', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint(
            "(is_global AND created_by_seller_id IS NULL) "
            "OR (NOT is_global AND created_by_seller_id IS NOT NULL)",
            name='ck_meal_owner_matches_scope',
        ),
    )
    op.create_index('ix_meals_source_id', 'meals', ['source_id'])
    op.create_index('idx_meals_name', 'meals', ['name'])
    op.create_index('idx_meals_category', 'meals', ['category'])
    op.create_index('idx_meals_seller', 'meals', ['created_by_seller_id'])

    op.create_table(
        'restaurants',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('seller_id', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('address', sa.String(), nullable=False),
        sa.Column('city', sa.String(), nullable=False),
        sa.Column('menu_revision', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('seller_id', name='uq_restaurant_seller'),
    )
    op.create_index('idx_restaurants_city', 'restaurants', ['city'])

    op.create_table(
        'restaurant_menu_items',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('restaurant_id', sa.String(), sa.ForeignKey('restaurants.id', ondelete='CASCADE'), nullable=False),
        sa.Column('meal_id', sa.String(), sa.ForeignKey('meals.id', ondelete='CASCADE'), nullable=False),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('is_available', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
        sa.UniqueConstraint('restaurant_id', 'meal_id', name='uq_menu_item_restaurant_meal'),
    )
    op.create_index('idx_menu_items_restaurant', 'restaurant_menu_items', ['restaurant_id'])

    op.create_table(
        'orders',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('customer_id', sa.String(), nullable=False),
        sa.Column('restaurant_id', sa.String(), sa.ForeignKey('restaurants.id', ondelete='SET NULL'), nullable=True),
        sa.Column('fulfillment', fulfillment, nullable=False),
        sa.Column('status', order_status, nullable=False),
        sa.Column('subtotal', sa.Numeric(10, 2), nullable=False),
        sa.Column('delivery_fee', sa.Numeric(10, 2), nullable=False),
        sa.Column('total', sa.Numeric(10, 2), nullable=False),
        sa.Column('payment_method', sa.String(), nullable=False),
        sa.Column('estimated_ready_at', sa.DateTime(), nullable=True),
        sa.Column('menu_revision', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('idx_orders_customer', 'orders', ['customer_id'])
    op.create_index('idx_orders_restaurant_status', 'orders', ['restaurant_id', 'status'])

    op.create_table(
        'order_items',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('order_id', sa.String(), sa.ForeignKey('orders.id', ondelete='CASCADE'), nullable=False),
        sa.Column('meal_id', sa.String(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('name_snapshot', sa.String(), nullable=False),
        sa.Column('price_snapshot', sa.Numeric(10, 2), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.CheckConstraint('quantity >= 1', name='ck_order_item_quantity_positive'),
        sa.CheckConstraint('price_snapshot >= 0', name='ck_order_item_price_non_negative'),
    )
    op.create_index('idx_order_items_order', 'order_items', ['order_id'])


def downgrade():
    op.drop_index('idx_order_items_order', table_name='order_items')
    op.drop_table('order_items')
    op.drop_index('idx_orders_restaurant_status', table_name='orders')
    op.drop_index('idx_orders_customer', table_name='orders')
    op.drop_table('orders')
    op.drop_index('idx_menu_items_restaurant', table_name='restaurant_menu_items')
    op.drop_table('restaurant_menu_items')
    op.drop_index('idx_restaurants_city', table_name='restaurants')
    op.drop_table('restaurants')
    op.drop_index('idx_meals_seller', table_name='meals')
    op.drop_index('idx_meals_category', table_name='meals')
    op.drop_index('idx_meals_name', table_name='meals')
    op.drop_index('ix_meals_source_id', table_name='meals')
    op.drop_table('meals')
    op.drop_table('users')
    order_status.drop(op.get_bind(), checkfirst=True)
    fulfillment.drop(op.get_bind(), checkfirst=True)
    payment_method.drop(op.get_bind(), checkfirst=True)
