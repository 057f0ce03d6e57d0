"""
Unit tests for OrderRepository and ContactMessageRepository
"""
import json
from datetime import datetime
from decimal import Decimal
from unittest.mock import patch

import pytest

from bakery.domain.order import OrderItem, OrderTotals, ShippingAddress
from bakery.repositories.contact_message_repository import ContactMessageRepository
from bakery.repositories.order_repository import OrderRepository

CREATED_AT = datetime(2025, 6, 20, 12, 0)


def _order_row(order_id=101, **overrides):
    row = {
        'id': order_id,
        'user_id': 7,
        'status': 'pending',
        'subtotal': Decimal('17.00'),
        'tax_amount': Decimal('1.36'),
        'delivery_fee': Decimal('5.00'),
        'total_amount': Decimal('23.36'),
        'shipping_address': {'name': 'Ana', 'address': '1 Main St', 'city': None, 'zip_code': None, 'phone': None},
        'contact_phone': '555-0100',
        'additional_notes': None,
        'customer_info': None,
        'updated_by': None,
        'created_at': CREATED_AT,
        'updated_at': CREATED_AT,
    }
    row.update(overrides)
    return row


class TestOrderRepository:

    @patch('bakery.repositories.order_repository.get_db_connection_dict')
    def test_create_inserts_order_and_items(self, mock_get_conn, mock_db):
        """Test create writes the order row then one row per item in one transaction"""
        # Arrange
        mock_get_conn.return_value = mock_db.conn
        mock_db.cursor.fetchone.return_value = _order_row()
        items = [
            OrderItem(product_id='12', name='Cupcake', price=Decimal('3.50'), quantity=2),
            OrderItem(product_id='15', name='Cookie Box', price=Decimal('10.00'), quantity=1,
                      customizations={'message': 'Happy birthday'}),
        ]
        totals = OrderTotals(subtotal=Decimal('17.00'), tax_amount=Decimal('1.36'),
                             delivery_fee=Decimal('5.00'), total_amount=Decimal('23.36'))

        # Act
        order = OrderRepository().create(
            user_id=7,
            items=items,
            totals=totals,
            shipping_address=ShippingAddress(name='Ana', address='1 Main St'),
            contact_phone='555-0100',
        )

        # Assert
        assert order.id == 101
        assert order.status == 'pending'
        assert order.item_count == 3
        assert mock_db.cursor.execute.call_count == 3

        order_params = mock_db.cursor.execute.call_args_list[0].args[1]
        assert order_params[0] == 7
        assert order_params[4] == Decimal('23.36')
        assert json.loads(order_params[5])['address'] == '1 Main St'

        item_params = mock_db.cursor.execute.call_args_list[2].args[1]
        assert item_params[:2] == (101, '15')
        assert json.loads(item_params[5]) == {'message': 'Happy birthday'}
        mock_db.conn.commit.assert_called_once()

    @patch('bakery.repositories.order_repository.get_db_connection_dict')
    def test_create_rolls_back_when_an_item_fails(self, mock_get_conn, mock_db):
        mock_get_conn.return_value = mock_db.conn
        mock_db.cursor.fetchone.return_value = _order_row()
        mock_db.cursor.execute.side_effect = [None, Exception("item insert failed")]

        with pytest.raises(Exception, match="item insert failed"):
            OrderRepository().create(
                user_id=7,
                items=[OrderItem(product_id='12', name='Cupcake', price=Decimal('3.50'), quantity=1)],
                totals=OrderTotals(subtotal=Decimal('3.50'), tax_amount=Decimal('0'),
                                   delivery_fee=Decimal('0'), total_amount=Decimal('3.50')),
                shipping_address=ShippingAddress(address='1 Main St'),
            )

        mock_db.conn.rollback.assert_called_once()
        mock_db.conn.commit.assert_not_called()

    @patch('bakery.repositories.order_repository.get_db_connection_dict')
    def test_find_by_user_attaches_items(self, mock_get_conn, mock_db):
        mock_get_conn.return_value = mock_db.conn
        mock_db.cursor.fetchall.side_effect = [
            [_order_row(101), _order_row(102)],
            [
                {'order_id': 101, 'product_id': '12', 'name': 'Cupcake', 'price': Decimal('3.50'),
                 'quantity': 2, 'customizations': None},
                {'order_id': 102, 'product_id': '15', 'name': 'Cookie Box', 'price': Decimal('10.00'),
                 'quantity': 1, 'customizations': {}},
            ],
        ]

        orders = OrderRepository().find_by_user(7)

        assert [order.id for order in orders] == [101, 102]
        assert orders[0].items[0].product_id == '12'
        assert orders[1].items[0].name == 'Cookie Box'
        item_query_params = mock_db.cursor.execute.call_args_list[1].args[1]
        assert item_query_params == ([101, 102],)

    @patch('bakery.repositories.order_repository.get_db_connection_dict')
    def test_find_by_user_without_orders_skips_item_query(self, mock_get_conn, mock_db):
        mock_get_conn.return_value = mock_db.conn
        mock_db.cursor.fetchall.return_value = []

        assert OrderRepository().find_by_user(7) == []
        assert mock_db.cursor.execute.call_count == 1

    @patch('bakery.repositories.order_repository.get_db_connection_dict')
    def test_update_status_not_found(self, mock_get_conn, mock_db):
        mock_get_conn.return_value = mock_db.conn
        mock_db.cursor.fetchone.return_value = None

        assert OrderRepository().update_status(404, 'ready', 'jamie') is None
        mock_db.conn.commit.assert_called_once()

    @patch('bakery.repositories.order_repository.get_db_connection_dict')
    def test_stats_exclude_cancelled_revenue(self, mock_get_conn, mock_db):
        mock_get_conn.return_value = mock_db.conn
        mock_db.cursor.fetchone.return_value = {
            'total_orders': 4,
            'revenue_orders': 3,
            'total_revenue': Decimal('99.90'),
            'recent_orders': 2,
            'pending_orders': 1,
        }

        stats = OrderRepository().get_stats()

        assert stats == {
            'total_orders': 4, 'revenue_orders': 3, 'total_revenue': 99.9,
            'recent_orders': 2, 'pending_orders': 1,
        }
        params = mock_db.cursor.execute.call_args.args[1]
        assert params == (['cancelled'], ['cancelled'])

    @patch('bakery.repositories.order_repository.get_db_connection_dict')
    def test_top_products(self, mock_get_conn, mock_db):
        mock_get_conn.return_value = mock_db.conn
        mock_db.cursor.fetchall.return_value = [
            {'product_id': '12', 'name': 'Cupcake', 'quantity': 20, 'revenue': Decimal('70.00')}
        ]

        top = OrderRepository().get_top_products(limit=5)

        assert top == [{'productId': '12', 'name': 'Cupcake', 'quantity': 20, 'revenue': 70.0}]


class TestContactMessageRepository:

    @patch('bakery.repositories.contact_message_repository.get_db_connection_dict')
    def test_find_all_filters_by_status(self, mock_get_conn, mock_db, contact_row):
        mock_get_conn.return_value = mock_db.conn
        mock_db.cursor.fetchall.return_value = [contact_row]

        messages = ContactMessageRepository().find_all(status='unread', limit=20)

        assert messages[0].full_name == 'Lee Park'
        sql, params = mock_db.cursor.execute.call_args.args
        assert "status = %s" in sql
        assert list(params) == ['unread', 20]

    @patch('bakery.repositories.contact_message_repository.get_db_connection_dict')
    def test_mark_replied_keeps_stored_reply_when_none_given(self, mock_get_conn, mock_db, contact_row):
        mock_get_conn.return_value = mock_db.conn
        mock_db.cursor.fetchone.return_value = dict(contact_row, status='replied', replied_by='jamie')

        message = ContactMessageRepository().mark_replied(3, 'jamie', None)

        assert message.status == 'replied'
        sql, values = mock_db.cursor.execute.call_args.args
        assert "reply = COALESCE(%s, reply)" in sql
        assert values == [None, 'jamie', 'jamie', 3]

    @patch('bakery.repositories.contact_message_repository.get_db_connection_dict')
    def test_update_ignores_submission_metadata(self, mock_get_conn, mock_db, contact_row):
        mock_get_conn.return_value = mock_db.conn
        mock_db.cursor.fetchone.return_value = contact_row

        ContactMessageRepository().update(3, {'priority': 'high', 'ip_address': '10.0.0.1'})

        sql, values = mock_db.cursor.execute.call_args.args
        assert "priority = %s" in sql
        assert "ip_address" not in sql.split("RETURNING")[0]
        assert values == ['high', 3]

    @patch('bakery.repositories.contact_message_repository.get_db_connection_dict')
    def test_stats(self, mock_get_conn, mock_db):
        mock_get_conn.return_value = mock_db.conn
        mock_db.cursor.fetchone.return_value = {
            'total': 6, 'unread': 3, 'read': 2, 'replied': 1, 'today_count': 2,
        }

        stats = ContactMessageRepository().get_stats()

        assert stats == {'total': 6, 'unread': 3, 'read': 2, 'replied': 1, 'todayCount': 2}
