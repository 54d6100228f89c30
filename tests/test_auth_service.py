"""
Tests for the auth service flows against a real (SQLite) session.
"""

import uuid
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy import select

from auth import service
from auth.jwt import verify_token
from auth.password import verify_password
from database.models import User
from utils.errors import (
    DuplicateKeyError,
    EmailExistsError,
    EmailTakenError,
    InvalidCredentialsError,
    InvalidCurrentPasswordError,
    UserNotFoundError,
    UsernameExistsError,
    UsernameTakenError,
)
from utils.schemas import (
    LoginRequest,
    SignupRequest,
    UpdatePasswordRequest,
    UpdatePictureRequest,
    UpdateProfileRequest,
)


def _signup_req(username="alice", email="alice@example.com", password="wonderland", name="Alice"):
    return SignupRequest(username=username, name=name, email=email, password=password)


class TestSignup:
    @pytest.mark.asyncio
    async def test_creates_user_with_hashed_password(self, session):
        user, token = await service.signup(session, _signup_req())

        assert isinstance(user.user_id, uuid.UUID)
        assert user.password_hash != "wonderland"
        assert verify_token(token) == str(user.user_id)

    @pytest.mark.asyncio
    async def test_distinct_signups_get_distinct_ids(self, session):
        a, _ = await service.signup(session, _signup_req())
        b, _ = await service.signup(session, _signup_req("bob", "bob@example.com"))
        assert a.user_id != b.user_id

    @pytest.mark.asyncio
    async def test_duplicate_email_wins_over_novel_username(self, session):
        await service.signup(session, _signup_req())
        with pytest.raises(EmailExistsError):
            await service.signup(session, _signup_req(username="someone-else"))

    @pytest.mark.asyncio
    async def test_email_checked_before_username(self, session):
        await service.signup(session, _signup_req())
        with pytest.raises(EmailExistsError):
            await service.signup(session, _signup_req())

    @pytest.mark.asyncio
    async def test_duplicate_username(self, session):
        await service.signup(session, _signup_req())
        with pytest.raises(UsernameExistsError):
            await service.signup(session, _signup_req(email="other@example.com"))

    @pytest.mark.asyncio
    async def test_email_is_case_sensitive(self, session):
        await service.signup(session, _signup_req())
        user, _ = await service.signup(session, _signup_req("alice2", "ALICE@example.com"))
        assert user.email == "ALICE@example.com"

    @pytest.mark.asyncio
    async def test_insert_race_maps_to_duplicate_key(self, session):
        await service.signup(session, _signup_req())
        # Simulate a concurrent signup that slipped past the pre-checks.
        with patch("auth.service._find_by", new_callable=AsyncMock, return_value=None):
            with pytest.raises(DuplicateKeyError) as exc_info:
                await service.signup(session, _signup_req())
        assert exc_info.value.status_code == 400


class TestLogin:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("identifier", ["alice", "alice@example.com"])
    async def test_by_username_or_email(self, session, identifier):
        created, _ = await service.signup(session, _signup_req())
        user, token = await service.login(
            session, LoginRequest(email_or_username=identifier, password="wonderland")
        )
        assert user.user_id == created.user_id
        assert verify_token(token) == str(created.user_id)

    @pytest.mark.asyncio
    async def test_wrong_password_and_unknown_user_look_identical(self, session):
        await service.signup(session, _signup_req())

        with pytest.raises(InvalidCredentialsError) as wrong_pw:
            await service.login(session, LoginRequest(email_or_username="alice", password="nope"))
        with pytest.raises(InvalidCredentialsError) as unknown:
            await service.login(session, LoginRequest(email_or_username="ghost", password="nope"))

        assert wrong_pw.value.message == unknown.value.message
        assert wrong_pw.value.status_code == unknown.value.status_code

    @pytest.mark.asyncio
    async def test_unknown_identifier_still_runs_bcrypt(self, session):
        with patch("auth.service.verify_password", wraps=verify_password) as mock_verify:
            with pytest.raises(InvalidCredentialsError):
                await service.login(session, LoginRequest(email_or_username="ghost", password="pw"))
        mock_verify.assert_called_once()
        assert mock_verify.call_args.args[0] == "pw"


class TestProfile:
    @pytest.mark.asyncio
    async def test_get_profile_unknown_user(self, session):
        with pytest.raises(UserNotFoundError):
            await service.get_profile(session, str(uuid.uuid4()))

    @pytest.mark.asyncio
    async def test_get_profile_malformed_id(self, session):
        with pytest.raises(UserNotFoundError):
            await service.get_profile(session, "not-a-uuid")

    @pytest.mark.asyncio
    async def test_email_taken_by_other_user(self, session):
        alice, _ = await service.signup(session, _signup_req())
        await service.signup(session, _signup_req("bob", "bob@example.com"))

        with pytest.raises(EmailTakenError):
            await service.update_profile(
                session, str(alice.user_id), UpdateProfileRequest(email="bob@example.com")
            )

    @pytest.mark.asyncio
    async def test_own_values_do_not_self_conflict(self, session):
        alice, _ = await service.signup(session, _signup_req())
        user = await service.update_profile(
            session,
            str(alice.user_id),
            UpdateProfileRequest(username="alice", email="alice@example.com", name="Alice L."),
        )
        assert user.name == "Alice L."
        assert user.email == "alice@example.com"

    @pytest.mark.asyncio
    async def test_username_taken_by_other_user(self, session):
        alice, _ = await service.signup(session, _signup_req())
        await service.signup(session, _signup_req("bob", "bob@example.com"))

        with pytest.raises(UsernameTakenError):
            await service.update_profile(
                session, str(alice.user_id), UpdateProfileRequest(username="bob")
            )

    @pytest.mark.asyncio
    async def test_failed_update_changes_nothing(self, session):
        alice, _ = await service.signup(session, _signup_req())
        await service.signup(session, _signup_req("bob", "bob@example.com"))

        with pytest.raises(UsernameTakenError):
            await service.update_profile(
                session,
                str(alice.user_id),
                UpdateProfileRequest(email="new@example.com", username="bob", name="X"),
            )
        assert alice.email == "alice@example.com"
        assert alice.name == "Alice"

    @pytest.mark.asyncio
    async def test_email_conflict_reported_before_username_conflict(self, session):
        alice, _ = await service.signup(session, _signup_req())
        await service.signup(session, _signup_req("bob", "bob@example.com"))

        with pytest.raises(EmailTakenError):
            await service.update_profile(
                session,
                str(alice.user_id),
                UpdateProfileRequest(email="bob@example.com", username="bob"),
            )

    @pytest.mark.asyncio
    async def test_picture_set_and_cleared(self, session):
        alice, _ = await service.signup(session, _signup_req())
        data_uri = "data:image/png;base64,iVBORw0KGgo="

        user = await service.update_profile_picture(
            session, str(alice.user_id), UpdatePictureRequest(profile_picture=data_uri)
        )
        assert user.profile_picture == data_uri

        user = await service.update_profile_picture(
            session, str(alice.user_id), UpdatePictureRequest(profile_picture=None)
        )
        assert user.profile_picture is None


class TestUpdatePassword:
    @pytest.mark.asyncio
    async def test_wrong_current_password_keeps_old_digest(self, session):
        alice, _ = await service.signup(session, _signup_req())
        old_digest = alice.password_hash

        with pytest.raises(InvalidCurrentPasswordError):
            await service.update_password(
                session,
                str(alice.user_id),
                UpdatePasswordRequest(current_password="wrong", new_password="newpass"),
            )

        row = (await session.execute(select(User).where(User.username == "alice"))).scalar_one()
        assert row.password_hash == old_digest
        await service.login(session, LoginRequest(email_or_username="alice", password="wonderland"))

    @pytest.mark.asyncio
    async def test_change_password(self, session):
        alice, _ = await service.signup(session, _signup_req())
        await service.update_password(
            session,
            str(alice.user_id),
            UpdatePasswordRequest(current_password="wonderland", new_password="x"),
        )

        await service.login(session, LoginRequest(email_or_username="alice", password="x"))
        with pytest.raises(InvalidCredentialsError):
            await service.login(
                session, LoginRequest(email_or_username="alice", password="wonderland")
            )
