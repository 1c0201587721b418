"""Application service: List Accounts use case (query)."""

from __future__ import annotations

from trading.application.dto import (
    AccountsView,
    MerchantAccountDTO,
    ProductDTO,
    UserAccountDTO,
)
from trading.domain.repository.merchant_account_repository import (
    MerchantAccountRepository,
)
from trading.domain.repository.product_repository import ProductRepository
from trading.domain.repository.transaction_manager import TransactionManager
from trading.domain.repository.user_account_repository import UserAccountRepository


class ListAccountsHandler:

    def __init__(
        self,
        user_repo: UserAccountRepository,
        merchant_repo: MerchantAccountRepository,
        product_repo: ProductRepository,
        transactions: TransactionManager,
    ) -> None:
        self._user_repo = user_repo
        self._merchant_repo = merchant_repo
        self._product_repo = product_repo
        self._transactions = transactions

    def handle(self) -> AccountsView:
        with self._transactions.begin(read_only=True):
            users = self._user_repo.list_all()
            merchants = self._merchant_repo.list_all()
            products = self._product_repo.list_all()

        return AccountsView(
            users=[
                UserAccountDTO(id=u.id, username=u.username, balance=str(u.balance))
                for u in users
            ],
            merchants=[
                MerchantAccountDTO(id=m.id, name=m.name, balance=str(m.balance))
                for m in merchants
            ],
            products=[
                ProductDTO(
                    id=p.id,
                    sku=p.sku,
                    name=p.name,
                    merchant_id=p.merchant_id,
                    price=str(p.price),
                    stock_quantity=p.stock_quantity.value,
                    sold_quantity=p.sold_quantity.value,
                )
                for p in products
            ],
        )
