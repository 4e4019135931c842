"""
Test configuration and fixtures for the Landlord API.
Provides a throwaway SQLite database per test, an HTTP client, and data factories.
"""

import pytest
import uuid
from datetime import date
from decimal import Decimal
from typing import AsyncGenerator, Dict, Optional
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from landlord_api.main import app
from landlord_api.database import Database
from landlord_api.models.user import User
from landlord_api.models.property import Property
from landlord_api.models.appliance import Appliance, ApplianceStatus
from landlord_api.models.maintenance import MaintenanceRecord, MaintenanceType, MaintenanceStatus
from landlord_api.models.issue import Issue, IssueUrgency, IssueStatus
from landlord_api.models.rent_payment import RentPayment
from landlord_api.repositories.user import UserRepository
from landlord_api.repositories.property import PropertyRepository
from landlord_api.repositories.appliance import ApplianceRepository
from landlord_api.repositories.maintenance import MaintenanceRepository
from landlord_api.repositories.issue import IssueRepository
from landlord_api.repositories.rent_payment import RentPaymentRepository
from landlord_api.services.auth import AuthService
from landlord_api.utils.auth import create_access_token, hash_password


DEFAULT_PASSWORD = "testpassword123"


@pytest.fixture
async def test_db(tmp_path) -> AsyncGenerator[Database, None]:
    """A fresh file-backed SQLite database with the full schema."""
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await database.create_tables()
    yield database
    await database.drop_tables()
    await database.dispose()


@pytest.fixture
async def db_session(test_db: Database) -> AsyncGenerator[AsyncSession, None]:
    async with test_db.session() as session:
        yield session


@pytest.fixture
async def async_client(test_db: Database) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the app; every request opens its own session on test_db."""
    app.state.db = test_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def auth_service(db_session: AsyncSession) -> AuthService:
    return AuthService(db_session)


@pytest.fixture
def user_repository(db_session: AsyncSession) -> UserRepository:
    return UserRepository(db_session)


# Test data factories
class UserFactory:
    """Factory for creating test users."""

    @staticmethod
    def create_user_data(
        email: Optional[str] = None,
        password: str = DEFAULT_PASSWORD,
        name: str = "Test Landlord"
    ) -> dict:
        return {
            "email": email or f"landlord{uuid.uuid4().hex[:8]}@example.com",
            "password": password,
            "name": name
        }

    @staticmethod
    async def create_user(
        db: AsyncSession,
        email: Optional[str] = None,
        password: str = DEFAULT_PASSWORD,
        name: str = "Test Landlord"
    ) -> User:
        """Create a test user in the database."""
        data = UserFactory.create_user_data(email=email, password=password, name=name)
        return await UserRepository(db).create_user({
            "email": data["email"],
            "password_hash": hash_password(data["password"]),
            "name": data["name"],
        })


class PropertyFactory:
    """Factory for creating test properties."""

    @staticmethod
    def create_property_data(
        address: str = "12 Harbour Road",
        property_type: Optional[str] = "apartment",
        monthly_rent: Optional[Decimal] = Decimal("1200.00")
    ) -> dict:
        return {
            "address": address,
            "property_type": property_type,
            "monthly_rent": monthly_rent
        }

    @staticmethod
    async def create_property(db: AsyncSession, owner_id: int, **kwargs) -> Property:
        data = PropertyFactory.create_property_data(**kwargs)
        return await PropertyRepository(db, owner_id).create(data)


class ApplianceFactory:

    @staticmethod
    async def create_appliance(
        db: AsyncSession,
        owner_id: int,
        property_id: int,
        name: str = "Dishwasher",
        type: Optional[str] = "kitchen",
        status: ApplianceStatus = ApplianceStatus.WORKING,
        installation_date: Optional[date] = None,
        last_maintenance: Optional[date] = None
    ) -> Appliance:
        return await ApplianceRepository(db, owner_id).create({
            "property_id": property_id,
            "name": name,
            "type": type,
            "status": status,
            "installation_date": installation_date,
            "last_maintenance": last_maintenance,
        })


class MaintenanceFactory:

    @staticmethod
    async def create_record(
        db: AsyncSession,
        owner_id: int,
        appliance_id: int,
        maintenance_type: MaintenanceType = MaintenanceType.ROUTINE,
        description: str = "Annual service",
        cost: Optional[Decimal] = Decimal("100.00"),
        maintenance_date: Optional[date] = None,
        next_due_date: Optional[date] = None,
        status: MaintenanceStatus = MaintenanceStatus.COMPLETED
    ) -> MaintenanceRecord:
        """Insert a record directly, without the appliance side effects of MaintenanceService."""
        return await MaintenanceRepository(db, owner_id).create({
            "appliance_id": appliance_id,
            "maintenance_type": maintenance_type,
            "description": description,
            "cost": cost,
            "maintenance_date": maintenance_date or date.today(),
            "next_due_date": next_due_date,
            "status": status,
        })


class IssueFactory:

    @staticmethod
    async def create_issue(
        db: AsyncSession,
        owner_id: int,
        appliance_id: int,
        title: str = "Leaking",
        description: str = "Water on the floor",
        urgency: IssueUrgency = IssueUrgency.MEDIUM,
        status: IssueStatus = IssueStatus.OPEN,
        reported_date: Optional[date] = None
    ) -> Issue:
        return await IssueRepository(db, owner_id).create({
            "appliance_id": appliance_id,
            "title": title,
            "description": description,
            "urgency": urgency,
            "status": status,
            "reported_date": reported_date or date.today(),
            "reported_by": owner_id,
        })


class RentPaymentFactory:

    @staticmethod
    async def create_payment(
        db: AsyncSession,
        owner_id: int,
        property_id: int,
        amount: Decimal = Decimal("1200.00"),
        payment_date: Optional[date] = None,
        late_fee_amount: Decimal = Decimal("0")
    ) -> RentPayment:
        return await RentPaymentRepository(db, owner_id).create({
            "property_id": property_id,
            "amount": amount,
            "payment_date": payment_date or date.today(),
            "late_fee_amount": late_fee_amount,
        })


# Common test fixtures
@pytest.fixture
async def test_user(db_session: AsyncSession) -> User:
    return await UserFactory.create_user(db_session, email="owner@example.com", name="Olivia Owner")


@pytest.fixture
async def other_user(db_session: AsyncSession) -> User:
    return await UserFactory.create_user(db_session, email="other@example.com", name="Oscar Other")


@pytest.fixture
async def test_property(db_session: AsyncSession, test_user: User) -> Property:
    return await PropertyFactory.create_property(db_session, test_user.id)


@pytest.fixture
async def test_appliance(db_session: AsyncSession, test_user: User, test_property: Property) -> Appliance:
    return await ApplianceFactory.create_appliance(db_session, test_user.id, test_property.id)


def auth_headers(user: User) -> Dict[str, str]:
    """Bearer header for a user without going through the login endpoint."""
    token = create_access_token(user_id=user.id, role=user.role.value)
    return {"Authorization": f"Bearer {token}"}


async def register_and_login(client: AsyncClient, email: Optional[str] = None) -> Dict[str, str]:
    """Register through the API and return the bearer header for the new account."""
    data = UserFactory.create_user_data(email=email)
    response = await client.post("/api/auth/register", json=data)
    assert response.status_code == 201, response.text

    response = await client.post(
        "/api/auth/login",
        json={"email": data["email"], "password": data["password"]}
    )
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
