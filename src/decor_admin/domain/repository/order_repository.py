"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable

from decor_admin.domain.model.order import Order
from decor_admin.domain.model.order_status import OrderStatus


class OrderRepository(ABC):

    @abstractmethod
    def next_id(self) -> int:
        """Generate the next unique order ID."""

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order, newest first."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new or updated order."""

    @abstractmethod
    def delete(self, order_id: int) -> None:
        """Remove an order. Unknown IDs are ignored."""

    @abstractmethod
    def update(self, order_id: int, change: Callable[[Order], bool]) -> bool:
        """Apply *change* to the stored order under the store lock.

        The order is persisted only when *change* returns True.  Returns
        whether a write happened (False also for unknown IDs).
        """

    @abstractmethod
    def update_status(
        self,
        order_id: int,
        expected: OrderStatus,
        new: OrderStatus,
    ) -> bool:
        """Compare-and-set the persisted status.

        Writes *new* only if the stored status equals *expected* and
        returns whether the write happened.
        """
