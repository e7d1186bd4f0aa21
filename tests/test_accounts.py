"""
Account registration, login and profile updates.
"""
import pytest

from superwallet.core.exceptions import InvalidArgument
from superwallet.modules.accounts import (
    AccountAlreadyExistsError,
    AccountService,
    InvalidCredentialsError,
    ProfileUpdateInput,
    UserCreateInput,
)


def _register(session, email="kim@example.com", **overrides):
    return AccountService.with_session(session).register(
        UserCreateInput(email=email, password="secret1", **overrides)
    )


class TestAccountService:

    def test_register_and_authenticate(self, run_db):
        async def scenario(factory):
            async with factory() as session:
                user = await _register(session, first_name="Minji")
                await session.commit()
            async with factory() as session:
                return user, await AccountService.with_session(session).authenticate("KIM@example.com", "secret1")

        user, logged_in = run_db(scenario)

        assert logged_in.id == user.id
        assert user.language == "ko"
        assert user.country == "KR"
        assert user.password_hash != "secret1"

    def test_duplicate_email(self, run_db):
        async def scenario(factory):
            async with factory() as session:
                await _register(session)
                with pytest.raises(AccountAlreadyExistsError):
                    await _register(session, email="kim@example.com")

        run_db(scenario)

    def test_wrong_password(self, run_db):
        async def scenario(factory):
            async with factory() as session:
                await _register(session)
                with pytest.raises(InvalidCredentialsError):
                    await AccountService.with_session(session).authenticate("kim@example.com", "nope")

        run_db(scenario)

    @pytest.mark.parametrize(
        "email,password,language",
        [
            ("not-an-email", "secret1", "ko"),
            ("a@b.c", "123", "ko"),
            ("a@b.c", "가" * 25, "ko"),
            ("a@b.c", "secret1", "fr"),
        ],
    )
    def test_registration_validation(self, run_db, email, password, language):
        async def scenario(factory):
            async with factory() as session:
                with pytest.raises(InvalidArgument):
                    await AccountService.with_session(session).register(
                        UserCreateInput(email=email, password=password, language=language)
                    )

        run_db(scenario)

    def test_partial_profile_update(self, run_db):
        async def scenario(factory):
            async with factory() as session:
                user = await _register(session, first_name="Minji", last_name="Kim")
                service = AccountService.with_session(session)
                return await service.update_profile(user.id, ProfileUpdateInput(language="en", last_name=None))

        updated = run_db(scenario)

        assert updated.language == "en"
        assert updated.first_name == "Minji"
        assert updated.last_name is None

    def test_change_password(self, run_db):
        async def scenario(factory):
            async with factory() as session:
                user = await _register(session)
                service = AccountService.with_session(session)
                with pytest.raises(InvalidCredentialsError):
                    await service.change_password(user.id, "wrong", "newsecret")
                await service.change_password(user.id, "secret1", "newsecret")
                return await service.authenticate("kim@example.com", "newsecret")

        assert run_db(scenario).email == "kim@example.com"
