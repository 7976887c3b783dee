"""
Tests for AuthService and the bcrypt password hasher
"""
import pytest
from unittest.mock import Mock

from bto_allocation.application.services.auth import AuthService
from bto_allocation.core.exceptions import (
    AuthenticationException,
    DuplicateResourceException,
    ValidationException,
)
from bto_allocation.domain.entities import Officer
from bto_allocation.domain.enums import MaritalStatus, UserRole
from bto_allocation.infrastructure.security import BcryptPasswordHasher


class TestBcryptPasswordHasher:
    """Real bcrypt with the minimum work factor"""

    @pytest.fixture
    def hasher(self):
        return BcryptPasswordHasher(rounds=4)

    def test_hash_and_verify(self, hasher):
        """Test hash and verify"""
        hashed = hasher.hash_password("password")
        assert hashed != "password"
        assert hasher.verify_password("password", hashed)
        assert not hasher.verify_password("Password", hashed)

    def test_salted(self, hasher):
        """Test hashing the same password twice gives different hashes"""
        assert hasher.hash_password("password") != hasher.hash_password("password")

    def test_malformed_hash_never_matches(self, hasher):
        """Test malformed hash never matches"""
        assert not hasher.verify_password("password", "not-a-bcrypt-hash")


class TestAuthService:
    """Login, registration and password changes"""

    @pytest.fixture
    def hasher(self):
        hasher = Mock()
        hasher.hash_password.side_effect = lambda password: f"hashed:{password}"
        hasher.verify_password.side_effect = lambda plain, hashed: hashed == f"hashed:{plain}"
        return hasher

    @pytest.fixture
    def auth_service(self, catalog, hasher):
        return AuthService(catalog.users, hasher)

    @pytest.fixture
    def registered(self, auth_service):
        return auth_service.register(UserRole.HDB_OFFICER, "T2109876H", "password", 36, MaritalStatus.MARRIED)

    def test_register_builds_role_variant(self, catalog, registered):
        """Test register builds role variant"""
        assert isinstance(registered, Officer)
        assert registered.password_hash == "hashed:password"
        assert catalog.users.get_by_nric("T2109876H") is registered

    def test_register_duplicate(self, auth_service, registered):
        """Test register duplicate"""
        with pytest.raises(DuplicateResourceException):
            auth_service.register(UserRole.APPLICANT, "T2109876H", "password", 30, MaritalStatus.SINGLE)

    @pytest.mark.parametrize("nric,password,age", [
        ("X2109876H", "password", 30),
        ("S1234567A", "short", 30),
        ("S1234567A", "password", -1),
    ])
    def test_register_rejects_bad_input(self, auth_service, nric, password, age):
        """Test register rejects bad input"""
        with pytest.raises(ValidationException):
            auth_service.register(UserRole.APPLICANT, nric, password, age, MaritalStatus.SINGLE)

    def test_login(self, auth_service, registered):
        """Test login with correct credentials"""
        assert auth_service.login("T2109876H", "password") is registered

    def test_login_wrong_password(self, auth_service, registered):
        """Test login wrong password"""
        with pytest.raises(AuthenticationException):
            auth_service.login("T2109876H", "wrong-password")

    def test_login_unknown_user(self, auth_service):
        """Test login unknown user"""
        with pytest.raises(AuthenticationException):
            auth_service.login("S1234567A", "password")

    def test_login_bad_nric_format(self, auth_service):
        """Test login bad nric format"""
        with pytest.raises(ValidationException):
            auth_service.login("1234", "password")

    def test_change_password(self, auth_service, registered):
        """Test change password"""
        auth_service.change_password(registered, "password", "new-password")
        assert registered.password_hash == "hashed:new-password"
        assert auth_service.login("T2109876H", "new-password") is registered

    def test_change_password_checks_old(self, auth_service, registered):
        """Test change password checks old"""
        with pytest.raises(AuthenticationException):
            auth_service.change_password(registered, "nope", "new-password")
        assert registered.password_hash == "hashed:password"

    def test_change_password_length(self, auth_service, registered):
        """Test change password length"""
        with pytest.raises(ValidationException):
            auth_service.change_password(registered, "password", "short")

    def test_logout(self, auth_service, registered):
        """Test logout records activity without error"""
        auth_service.logout(registered)
