"""
Rent payment service.
"""

from typing import Any, Dict, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from landlord_api.repositories.rent_payment import RentPaymentRepository
from landlord_api.models.rent_payment import RentPayment
from landlord_api.schemas.rent_payment import RentPaymentCreate, RentPaymentUpdate
import logging

logger = logging.getLogger(__name__)


class RentPaymentService:

    def __init__(self, db_session: AsyncSession, owner_id: int):
        self.db = db_session
        self.owner_id = owner_id
        self.payment_repo = RentPaymentRepository(db_session, owner_id)

    async def record_payment(self, payment_data: RentPaymentCreate) -> RentPayment:
        """
        Record a payment against an owned property.

        Raises:
            NotFoundError: If the property does not exist or is not owned
        """
        payment = await self.payment_repo.create(payment_data.model_dump())
        logger.info(
            f"Rent payment recorded by user {self.owner_id}: {payment.amount} "
            f"for property {payment.property_id} on {payment.payment_date}"
        )
        return payment

    async def list_payments(self, property_id: Optional[int] = None) -> List[Dict[str, Any]]:
        return await self.payment_repo.list_with_address(property_id=property_id)

    async def get_payment(self, payment_id: int) -> RentPayment:
        return await self.payment_repo.get_by_id(payment_id)

    async def update_payment(self, payment_id: int, payment_data: RentPaymentUpdate) -> RentPayment:
        payment = await self.payment_repo.update(payment_id, payment_data.model_dump(exclude_unset=True))
        logger.info(f"Rent payment updated by user {self.owner_id}: {payment_id}")
        return payment

    async def delete_payment(self, payment_id: int) -> None:
        await self.payment_repo.delete(payment_id)
        logger.info(f"Rent payment deleted by user {self.owner_id}: {payment_id}")
