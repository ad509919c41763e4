"""Account detail view: one account plus adding addresses and contacts."""

import logging
from typing import List, Optional

from accountdesk.config import (
    ACCOUNT_NOT_FOUND_ERROR,
    ADD_ADDRESS_ERROR,
    ADD_CONTACT_ERROR,
    LOAD_ACCOUNT_ERROR,
    RECENT_ORDERS_LIMIT,
)
from accountdesk.external_apis.errors import AccountApiError, AccountNotFoundError
from accountdesk.models.account import Account, AccountId
from accountdesk.models.forms import AddressForm, ContactForm, FormValidationError
from accountdesk.models.order import Order

logger = logging.getLogger(__name__)


class AccountDetailManager:
    """State for a single account's detail view."""

    def __init__(self, client, account_id: AccountId):
        self.client = client
        self.account_id = account_id
        self.account: Optional[Account] = None
        self.error: Optional[str] = None
        self.form_error: Optional[str] = None
        self.loading = False
        self.submitting = False

    async def load(self) -> Optional[Account]:
        """
        Fetch the account.

        Returns:
            The account, or None with error set when it could not be loaded
        """
        self.loading = True
        self.error = None
        try:
            self.account = await self.client.get_account(self.account_id)
        except AccountNotFoundError:
            logger.warning(f"Account {self.account_id} not found")
            self.account = None
            self.error = ACCOUNT_NOT_FOUND_ERROR
        except AccountApiError as e:
            logger.error(f"Error loading account {self.account_id}: {str(e)}")
            self.error = LOAD_ACCOUNT_ERROR
        finally:
            self.loading = False
        return self.account

    async def add_address(self, form: AddressForm) -> bool:
        """
        Add an address and refresh the account.

        On failure the form is left as entered and form_error is set.
        """
        return await self._submit(form, self.client.create_address, ADD_ADDRESS_ERROR)

    async def add_contact(self, form: ContactForm) -> bool:
        """
        Add a contact and refresh the account.

        On failure the form is left as entered and form_error is set.
        """
        return await self._submit(form, self.client.create_contact, ADD_CONTACT_ERROR)

    async def _submit(self, form, create, failure_message: str) -> bool:
        self.form_error = None
        try:
            form.validate()
        except FormValidationError as e:
            logger.warning(f"Rejected form for account {self.account_id}: {str(e)}")
            self.form_error = f"{failure_message}: {str(e)}"
            return False

        self.submitting = True
        try:
            await create(self.account_id, form)
        except AccountApiError as e:
            logger.error(f"{failure_message} for account {self.account_id}: {str(e)}")
            self.form_error = failure_message
            return False
        finally:
            self.submitting = False

        # The create response is partial; the account is the source of truth
        await self.load()
        return True

    async def recent_orders(self, limit: int = RECENT_ORDERS_LIMIT) -> List[Order]:
        """Orders for the transactions panel; empty when they cannot be fetched."""
        try:
            return await self.client.list_account_orders(self.account_id, limit=limit)
        except AccountApiError as e:
            logger.error(f"Error fetching orders for account {self.account_id}: {str(e)}")
            return []
