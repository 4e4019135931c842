"""
Tests for models, configuration and auth utilities.
"""

import pytest
from datetime import timedelta
from decimal import Decimal
from jose import jwt

from landlord_api.config import Settings, settings
from landlord_api.models.user import User, UserRole
from landlord_api.models.appliance import ApplianceStatus, BROKEN_STATUSES
from landlord_api.models.maintenance import MaintenanceRecord, MaintenanceType, MaintenanceStatus
from landlord_api.models.issue import Issue, IssueStatus, IssueUrgency
from landlord_api.models.property import money
from landlord_api.utils.auth import (
    create_access_token,
    hash_password,
    verify_password,
    verify_token
)
from landlord_api.utils.exceptions import InvalidTokenError, TokenExpiredError
from landlord_api.repositories.appliance import ApplianceRepository
from tests.conftest import PropertyFactory


class TestEnums:

    def test_appliance_status_values(self):
        assert [s.value for s in ApplianceStatus] == [
            "working", "needs_repair", "under_repair", "out_of_service"
        ]
        assert set(BROKEN_STATUSES) == {ApplianceStatus.NEEDS_REPAIR, ApplianceStatus.OUT_OF_SERVICE}

    def test_issue_urgency_values(self):
        assert {u.value for u in IssueUrgency} == {"critical", "high", "medium", "low"}

    def test_maintenance_type_values(self):
        assert MaintenanceType("repair") is MaintenanceType.REPAIR
        with pytest.raises(ValueError):
            MaintenanceType("painting")


class TestModels:

    def test_money_keeps_none(self):
        assert money(None) is None
        assert money(Decimal("1200.50")) == 1200.5

    def test_restores_appliance_only_for_completed_repairs(self):
        repair = MaintenanceRecord(maintenance_type=MaintenanceType.REPAIR, status=MaintenanceStatus.COMPLETED)
        scheduled = MaintenanceRecord(maintenance_type=MaintenanceType.REPLACEMENT, status=MaintenanceStatus.SCHEDULED)
        routine = MaintenanceRecord(maintenance_type=MaintenanceType.ROUTINE, status=MaintenanceStatus.COMPLETED)

        assert repair.restores_appliance
        assert not scheduled.restores_appliance
        assert not routine.restores_appliance

    def test_issue_is_active(self):
        assert Issue(status=IssueStatus.SCHEDULED).is_active
        assert not Issue(status=IssueStatus.RESOLVED).is_active
        assert not Issue(status=IssueStatus.CANCELLED).is_active

    def test_user_to_dict_hides_password_hash(self):
        user = User(id=1, email="a@example.com", name="A", role=UserRole.USER, password_hash="secret")
        data = user.to_dict()
        assert "password_hash" not in data
        assert data["role"] == "user"

    @pytest.mark.asyncio
    async def test_appliance_status_defaults_to_working(self, db_session, test_user):
        prop = await PropertyFactory.create_property(db_session, test_user.id)
        appliance = await ApplianceRepository(db_session, test_user.id).create(
            {"property_id": prop.id, "name": "Boiler"}
        )
        assert appliance.status == ApplianceStatus.WORKING
        assert appliance.to_dict()["status"] == "working"

    @pytest.mark.asyncio
    async def test_property_server_defaults_loaded(self, db_session, test_user):
        prop = await PropertyFactory.create_property(db_session, test_user.id, monthly_rent=None)
        assert prop.id is not None
        assert prop.created_at is not None
        assert prop.to_dict()["monthly_rent"] is None


class TestSettings:

    def test_postgres_url_uses_asyncpg(self):
        s = Settings(database_url="postgresql://u:p@localhost/landlord")
        assert s.database_url == "postgresql+asyncpg://u:p@localhost/landlord"

    def test_sqlite_url_uses_aiosqlite(self):
        s = Settings(database_url="sqlite:///./dev.db")
        assert s.database_url == "sqlite+aiosqlite:///./dev.db"
        assert s.is_sqlite

    def test_short_secret_rejected(self):
        with pytest.raises(ValueError):
            Settings(jwt_secret_key="too-short")

    def test_bcrypt_rounds_minimum(self):
        with pytest.raises(ValueError):
            Settings(bcrypt_rounds=4)

    def test_unknown_environment_rejected(self):
        with pytest.raises(ValueError):
            Settings(environment="qa")


class TestPasswords:

    def test_hash_and_verify(self):
        hashed = hash_password("correct horse")
        assert hashed != "correct horse"
        assert hashed.startswith("$2")
        assert verify_password("correct horse", hashed)
        assert not verify_password("wrong horse", hashed)

    def test_verify_against_missing_or_garbage_hash(self):
        assert not verify_password("anything", None)
        assert not verify_password("anything", "not-a-bcrypt-hash")


class TestTokens:

    def test_round_trip(self):
        token = create_access_token(user_id=42, role="user")
        payload = verify_token(token)
        assert payload.user_id == 42
        assert payload.role == "user"

    def test_expired_token(self):
        token = create_access_token(user_id=42, role="user", expires_delta=timedelta(seconds=-10))
        with pytest.raises(TokenExpiredError):
            verify_token(token)

    def test_tampered_token(self):
        token = create_access_token(user_id=42, role="user")
        with pytest.raises(InvalidTokenError):
            verify_token(token[:-4] + "abcd")

    def test_wrong_token_type(self):
        token = jwt.encode(
            {"sub": "42", "type": "refresh", "exp": 4102444800},
            settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm
        )
        with pytest.raises(InvalidTokenError):
            verify_token(token)

    def test_non_numeric_subject(self):
        token = jwt.encode(
            {"sub": "alice", "type": "access", "exp": 4102444800},
            settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm
        )
        with pytest.raises(InvalidTokenError):
            verify_token(token)
