"""
Tests for service classes.
Covers registration and login, maintenance side effects, issue rules and reporting errors.
"""

import asyncio
import pytest
from datetime import date, timedelta
from decimal import Decimal

from landlord_api.models.appliance import ApplianceStatus
from landlord_api.models.issue import IssueStatus, IssueUrgency
from landlord_api.models.maintenance import MaintenanceType, MaintenanceStatus
from landlord_api.repositories.appliance import ApplianceRepository
from landlord_api.repositories.issue import IssueRepository
from landlord_api.schemas.appliance import ApplianceCreate, ApplianceUpdate
from landlord_api.schemas.issue import IssueCreate, IssueUpdate
from landlord_api.schemas.maintenance import MaintenanceCreate, MaintenanceUpdate
from landlord_api.schemas.property import PropertyCreate, PropertyUpdate
from landlord_api.schemas.rent_payment import RentPaymentCreate, RentPaymentUpdate
from landlord_api.services.auth import AuthService
from landlord_api.services.appliance import ApplianceService
from landlord_api.services.issue import IssueService
from landlord_api.services.maintenance import MaintenanceService
from landlord_api.services.property import PropertyService
from landlord_api.services.rent_payment import RentPaymentService
from landlord_api.services.reporting import ReportingService
from landlord_api.utils.auth import create_access_token, verify_token
from landlord_api.utils.exceptions import (
    DuplicateEmailError,
    InvalidCredentialsError,
    InvalidTokenError,
    NotFoundError,
    ValidationError,
)
from tests.conftest import (
    DEFAULT_PASSWORD,
    ApplianceFactory,
    IssueFactory,
    MaintenanceFactory,
    PropertyFactory,
    RentPaymentFactory,
)


class TestAuthService:

    @pytest.mark.asyncio
    async def test_register_success(self, auth_service: AuthService):
        user = await auth_service.register("New.Owner@Example.com", "secret123", "  New Owner ")

        assert user.id is not None
        assert user.email == "new.owner@example.com"
        assert user.name == "New Owner"
        assert user.password_hash != "secret123"

    @pytest.mark.asyncio
    async def test_register_duplicate_ignores_case(self, auth_service: AuthService, test_user):
        with pytest.raises(DuplicateEmailError) as exc_info:
            await auth_service.register("OWNER@example.com", "secret123", "Copycat")
        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    @pytest.mark.parametrize("email,password,name", [
        ("", "secret123", "Name"),
        ("someone@example.com", "secret123", "   "),
        ("someone@example.com", "", "Name"),
        ("not-an-email", "secret123", "Name"),
        ("someone@example.com", "12345", "Name"),
    ])
    async def test_register_rejects_bad_input(self, auth_service: AuthService, email, password, name):
        with pytest.raises(ValidationError):
            await auth_service.register(email, password, name)

    @pytest.mark.asyncio
    async def test_login_issues_token(self, auth_service: AuthService, test_user):
        user, token = await auth_service.login("Owner@Example.com", DEFAULT_PASSWORD)

        assert user.id == test_user.id
        assert verify_token(token).user_id == test_user.id

    @pytest.mark.asyncio
    async def test_login_failures(self, auth_service: AuthService, test_user):
        with pytest.raises(InvalidCredentialsError):
            await auth_service.login(test_user.email, "wrong-password")
        with pytest.raises(InvalidCredentialsError):
            await auth_service.login("ghost@example.com", DEFAULT_PASSWORD)

    @pytest.mark.asyncio
    async def test_get_current_user(self, auth_service: AuthService, test_user):
        token = create_access_token(user_id=test_user.id, role="user")
        assert (await auth_service.get_current_user(token)).id == test_user.id

    @pytest.mark.asyncio
    async def test_token_for_deleted_user(self, auth_service: AuthService):
        token = create_access_token(user_id=98765, role="user")
        with pytest.raises(InvalidTokenError):
            await auth_service.get_current_user(token)


class TestPropertyService:

    @pytest.mark.asyncio
    async def test_create_and_detail(self, db_session, test_user):
        service = PropertyService(db_session, test_user.id)
        prop = await service.create_property(PropertyCreate(
            address="  7 Quay Street ", property_type="house", monthly_rent=Decimal("950")
        ))
        await ApplianceFactory.create_appliance(db_session, test_user.id, prop.id, name="Boiler")

        detail = await service.get_property_with_appliances(prop.id)

        assert detail["property"].address == "7 Quay Street"
        assert [a.name for a in detail["appliances"]] == ["Boiler"]

    @pytest.mark.asyncio
    async def test_update_replaces_all_fields(self, db_session, test_user, test_property):
        service = PropertyService(db_session, test_user.id)
        updated = await service.update_property(test_property.id, PropertyUpdate(address="New Address"))

        assert updated.address == "New Address"
        assert updated.property_type is None
        assert updated.monthly_rent is None

    @pytest.mark.asyncio
    async def test_other_owner_sees_nothing(self, db_session, test_property, other_user):
        service = PropertyService(db_session, other_user.id)

        assert await service.list_properties() == []
        with pytest.raises(NotFoundError):
            await service.get_property_with_appliances(test_property.id)
        with pytest.raises(NotFoundError):
            await service.delete_property(test_property.id)

    @pytest.mark.asyncio
    async def test_concurrent_creates(self, test_db, test_user):
        async def create(address):
            async with test_db.session() as session:
                service = PropertyService(session, test_user.id)
                return await service.create_property(PropertyCreate(address=address))

        first, second = await asyncio.gather(create("North Wing"), create("South Wing"))

        assert first.id != second.id
        async with test_db.session() as session:
            rows = await PropertyService(session, test_user.id).list_properties()
        assert {row["address"] for row in rows} == {"North Wing", "South Wing"}


class TestApplianceService:

    @pytest.mark.asyncio
    async def test_status_defaults_to_working(self, db_session, test_user, test_property):
        service = ApplianceService(db_session, test_user.id)
        appliance = await service.create_appliance(ApplianceCreate(property_id=test_property.id, name="Oven"))
        assert appliance.status == ApplianceStatus.WORKING

    @pytest.mark.asyncio
    async def test_foreign_property_rejected(self, db_session, test_property, other_user):
        service = ApplianceService(db_session, other_user.id)
        with pytest.raises(NotFoundError):
            await service.create_appliance(ApplianceCreate(property_id=test_property.id, name="Oven"))

    @pytest.mark.asyncio
    async def test_update_and_list_by_property(self, db_session, test_user, test_property, test_appliance):
        service = ApplianceService(db_session, test_user.id)
        updated = await service.update_appliance(
            test_appliance.id, ApplianceUpdate(name="Dishwasher", status=ApplianceStatus.OUT_OF_SERVICE)
        )
        assert updated.status == ApplianceStatus.OUT_OF_SERVICE
        assert updated.type is None

        listed = await service.list_appliances(property_id=test_property.id)
        assert [a.id for a in listed] == [test_appliance.id]

        await service.delete_appliance(test_appliance.id)
        with pytest.raises(NotFoundError):
            await service.get_appliance(test_appliance.id)


class TestMaintenanceService:

    @staticmethod
    def record(appliance_id, **kwargs):
        data = {
            "appliance_id": appliance_id,
            "maintenance_type": MaintenanceType.REPAIR,
            "description": "Replaced drain pump",
            "cost": Decimal("180.00"),
            "maintenance_date": date(2024, 6, 1),
        }
        data.update(kwargs)
        return MaintenanceCreate(**data)

    @pytest.mark.asyncio
    async def test_completed_repair_restores_appliance(self, db_session, test_user, test_property):
        appliance = await ApplianceFactory.create_appliance(
            db_session, test_user.id, test_property.id, status=ApplianceStatus.NEEDS_REPAIR
        )
        issue = await IssueFactory.create_issue(db_session, test_user.id, appliance.id)
        service = MaintenanceService(db_session, test_user.id)

        record = await service.create_record(self.record(appliance.id))

        refreshed = await ApplianceRepository(db_session, test_user.id).get_by_id(appliance.id, refresh=True)
        assert refreshed.status == ApplianceStatus.WORKING
        assert refreshed.last_maintenance == date(2024, 6, 1)

        issue = await IssueRepository(db_session, test_user.id).get_by_id(issue.id, refresh=True)
        assert issue.status == IssueStatus.RESOLVED
        assert issue.maintenance_record_id == record.id
        assert issue.resolved_date == date(2024, 6, 1)
        assert issue.resolution_notes == "Auto-resolved: repair maintenance completed - Replaced drain pump"

    @pytest.mark.asyncio
    async def test_routine_service_keeps_status(self, db_session, test_user, test_property):
        appliance = await ApplianceFactory.create_appliance(
            db_session, test_user.id, test_property.id, status=ApplianceStatus.NEEDS_REPAIR
        )
        issue = await IssueFactory.create_issue(db_session, test_user.id, appliance.id)
        service = MaintenanceService(db_session, test_user.id)

        await service.create_record(self.record(appliance.id, maintenance_type=MaintenanceType.ROUTINE))
        await service.create_record(self.record(appliance.id, status=MaintenanceStatus.SCHEDULED))

        refreshed = await ApplianceRepository(db_session, test_user.id).get_by_id(appliance.id, refresh=True)
        assert refreshed.status == ApplianceStatus.NEEDS_REPAIR
        assert refreshed.last_maintenance == date(2024, 6, 1)
        issue = await IssueRepository(db_session, test_user.id).get_by_id(issue.id, refresh=True)
        assert issue.status == IssueStatus.OPEN

    @pytest.mark.asyncio
    async def test_last_maintenance_only_moves_forward(self, db_session, test_user, test_property):
        appliance = await ApplianceFactory.create_appliance(
            db_session, test_user.id, test_property.id, last_maintenance=date(2024, 5, 1)
        )
        service = MaintenanceService(db_session, test_user.id)

        await service.create_record(self.record(appliance.id, maintenance_date=date(2024, 3, 1)))
        repo = ApplianceRepository(db_session, test_user.id)
        assert (await repo.get_by_id(appliance.id, refresh=True)).last_maintenance == date(2024, 5, 1)

        await service.create_record(self.record(appliance.id, maintenance_date=date(2024, 7, 1)))
        assert (await repo.get_by_id(appliance.id, refresh=True)).last_maintenance == date(2024, 7, 1)

    @pytest.mark.asyncio
    async def test_foreign_appliance_leaves_no_record(self, db_session, test_appliance, other_user):
        service = MaintenanceService(db_session, other_user.id)

        with pytest.raises(NotFoundError):
            await service.create_record(self.record(test_appliance.id))
        assert await service.list_records() == []

    @pytest.mark.asyncio
    async def test_partial_update(self, db_session, test_user, test_appliance):
        service = MaintenanceService(db_session, test_user.id)
        record = await MaintenanceFactory.create_record(db_session, test_user.id, test_appliance.id)

        updated = await service.update_record(record.id, MaintenanceUpdate(cost=Decimal("75.50")))

        assert updated.cost == Decimal("75.50")
        assert updated.description == "Annual service"

    @pytest.mark.asyncio
    async def test_cost_rollups(self, db_session, test_user, test_appliance):
        service = MaintenanceService(db_session, test_user.id)
        await service.create_record(self.record(test_appliance.id, cost=Decimal("40.00")))

        rows = await service.cost_rollups()
        assert rows[0]["total_maintenance_cost"] == 40.0
        assert rows[0]["maintenance_count"] == 1


class TestIssueService:

    @pytest.mark.asyncio
    async def test_create_defaults(self, db_session, test_user, test_appliance):
        service = IssueService(db_session, test_user.id)
        issue = await service.create_issue(IssueCreate(
            appliance_id=test_appliance.id, title="Rattling", description="Loud on spin"
        ))

        assert issue.status == IssueStatus.OPEN
        assert issue.urgency == IssueUrgency.MEDIUM
        assert issue.reported_by == test_user.id
        assert issue.reported_date == date.today()

    @pytest.mark.asyncio
    async def test_link_requires_owned_record(self, db_session, test_user, test_appliance, other_user):
        foreign_property = await PropertyFactory.create_property(db_session, other_user.id)
        foreign_appliance = await ApplianceFactory.create_appliance(db_session, other_user.id, foreign_property.id)
        foreign_record = await MaintenanceFactory.create_record(db_session, other_user.id, foreign_appliance.id)
        issue = await IssueFactory.create_issue(db_session, test_user.id, test_appliance.id)
        service = IssueService(db_session, test_user.id)

        with pytest.raises(NotFoundError):
            await service.update_issue(issue.id, IssueUpdate(maintenance_record_id=foreign_record.id))

        own_record = await MaintenanceFactory.create_record(db_session, test_user.id, test_appliance.id)
        updated = await service.update_issue(
            issue.id, IssueUpdate(maintenance_record_id=own_record.id, status=IssueStatus.SCHEDULED)
        )
        assert updated.maintenance_record_id == own_record.id
        assert updated.status == IssueStatus.SCHEDULED
        assert updated.title == "Leaking"

    @pytest.mark.asyncio
    async def test_link_requires_same_appliance(self, db_session, test_user, test_property, test_appliance):
        fridge = await ApplianceFactory.create_appliance(db_session, test_user.id, test_property.id, name="Fridge")
        fridge_repair = await MaintenanceFactory.create_record(
            db_session, test_user.id, fridge.id, maintenance_type=MaintenanceType.REPAIR
        )
        issue = await IssueFactory.create_issue(db_session, test_user.id, test_appliance.id)
        service = IssueService(db_session, test_user.id)

        with pytest.raises(ValidationError) as exc_info:
            await service.update_issue(
                issue.id, IssueUpdate(maintenance_record_id=fridge_repair.id, status=IssueStatus.RESOLVED)
            )
        assert exc_info.value.field_errors[0]["field"] == "maintenance_record_id"

        unchanged = await IssueRepository(db_session, test_user.id).get_by_id(issue.id, refresh=True)
        assert unchanged.status == IssueStatus.OPEN
        assert unchanged.maintenance_record_id is None

        with pytest.raises(ValidationError):
            await service.create_issue(IssueCreate(
                appliance_id=test_appliance.id,
                title="Door seal",
                description="Torn",
                maintenance_record_id=fridge_repair.id,
            ))


class TestRentPaymentService:

    @pytest.mark.asyncio
    async def test_record_and_update(self, db_session, test_user, test_property):
        service = RentPaymentService(db_session, test_user.id)
        payment = await service.record_payment(RentPaymentCreate(
            property_id=test_property.id, amount=Decimal("1200"), payment_date=date(2024, 2, 1)
        ))

        assert payment.status == "paid"
        assert payment.late_fee_amount == Decimal("0")

        updated = await service.update_payment(payment.id, RentPaymentUpdate(late_fee_amount=Decimal("25")))
        assert updated.late_fee_amount == Decimal("25")
        assert updated.amount == Decimal("1200")

        rows = await service.list_payments(property_id=test_property.id)
        assert [row["id"] for row in rows] == [payment.id]


class TestReportingService:

    @pytest.mark.asyncio
    async def test_bad_time_range(self, db_session, test_user):
        service = ReportingService(db_session, test_user.id)
        with pytest.raises(ValidationError) as exc_info:
            await service.dashboard("1week")
        assert exc_info.value.field_errors[0]["field"] == "time_range"

    @pytest.mark.asyncio
    async def test_bad_year(self, db_session, test_user):
        service = ReportingService(db_session, test_user.id, today=date(2024, 6, 20))
        with pytest.raises(ValidationError):
            await service.monthly_analytics(year=1990)

    @pytest.mark.asyncio
    async def test_rent_status_uses_configured_window(self, db_session, test_user, test_property):
        today = date(2024, 6, 20)
        await RentPaymentFactory.create_payment(
            db_session, test_user.id, test_property.id, payment_date=today - timedelta(days=36)
        )

        rows = await ReportingService(db_session, test_user.id, today=today).rent_status()
        assert rows[0]["rent_status"] == "overdue"
