"""
Shared fixtures for the accountdesk tests
"""

import pytest

from accountdesk.models import Account, AccountId, Address, Contact, Order, OrderStatus


def build_account(
    code,
    name,
    active=True,
    city=None,
    state=None,
    postal_code="00000",
    contact_name=None,
    email=None,
    phone=None,
    account_id=None,
):
    """Build an Account with at most one address and one contact."""
    account_id = AccountId(account_id or f"id-{code}")
    addresses = []
    if city is not None:
        addresses.append(Address(
            id=f"addr-{code}", account_id=account_id, line1="1 Main St",
            city=city, state=state or "", postal_code=postal_code, is_primary=True
        ))
    contacts = []
    if contact_name or email or phone:
        contacts.append(Contact(
            id=f"cont-{code}", account_id=account_id, name=contact_name or "",
            email=email or "", phone=phone, is_primary=True
        ))
    return Account(id=account_id, code=code, name=name, active=active, addresses=addresses, contacts=contacts)


def build_order(order_no, status=OrderStatus.CONFIRMED, seller_id=None, buyer_id=None):
    return Order(
        id=f"ord-{order_no}",
        order_no=order_no,
        status=status,
        seller_account_id=seller_id,
        buyer_account_id=buyer_id,
        total_amount=100.0,
    )


@pytest.fixture
def make_account():
    """Factory for Account objects."""
    return build_account


@pytest.fixture
def make_order():
    """Factory for Order objects."""
    return build_order


@pytest.fixture
def sample_accounts():
    """Five accounts with distinct codes, names and locations."""
    return [
        build_account("ACC-001", "Sierra Nut House", city="Fresno", state="CA",
                      contact_name="Dana Ruiz", email="dana@sierranut.example", phone="(916) 555-0123"),
        build_account("ACC-002", "Blue Diamond Traders", city="Sacramento", state="CA",
                      contact_name="Lee Park", email="lee@bluediamond.example", phone="209.555.7788"),
        build_account("ACC-003", "Arizona Pecan Co", active=False, city="Yuma", state="AZ", postal_code="85364"),
        build_account("ACC-004", "coastal almond", contact_name="Kim Ito", email="kim@coastal.example"),
        build_account("ACC-005", "Desert Date Farms", active=False, city="Indio", state="CA"),
    ]
