"""
Rent payment repository. Ownership is inherited through the parent property.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from typing import Dict, Any, List, Optional

from landlord_api.models.property import Property
from landlord_api.models.rent_payment import RentPayment
from landlord_api.repositories.owned import OwnedRepository
from landlord_api.repositories.property import PropertyRepository


class RentPaymentRepository(OwnedRepository[RentPayment]):

    ownership_path = (RentPayment.property,)
    resource_name = "Rent payment"
    mutable_fields = (
        "amount",
        "payment_date",
        "due_date",
        "payment_method",
        "reference_number",
        "notes",
        "status",
        "late_fee_amount",
    )

    def __init__(self, db: AsyncSession, owner_id: int):
        super().__init__(RentPayment, db, owner_id)

    def default_order(self):
        return (RentPayment.payment_date.desc(), RentPayment.created_at.desc(), RentPayment.id.desc())

    async def create(self, obj_in: Dict[str, Any], commit: bool = True) -> RentPayment:
        return await self.create_under(PropertyRepository, obj_in["property_id"], obj_in, commit=commit)

    async def list_with_address(self, property_id: Optional[int] = None) -> List[Dict[str, Any]]:
        """Owned payments, newest payment_date first, with the property address."""
        query = self.scoped(RentPayment, Property.address.label("property_address"))
        if property_id is not None:
            query = query.where(RentPayment.property_id == property_id)

        result = await self.db.execute(query.order_by(*self.default_order()))
        payments = []
        for payment, property_address in result.all():
            row = payment.to_dict()
            row["property_address"] = property_address
            payments.append(row)
        return payments
