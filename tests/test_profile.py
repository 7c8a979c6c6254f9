"""Tests for profile, settings and avatars."""

from datetime import date

import pytest

from walletbook.domain.errors import ValidationError
from walletbook.domain.profile import DEFAULT_AVATARS, ProfileService, default_avatars


class TestSettings:
    def test_defaults_when_nothing_saved(self, profile_service):
        settings = profile_service.get_settings()

        assert settings.id is None
        assert settings.language == "id"
        assert settings.theme == "system"
        assert settings.payroll_date is None
        assert settings.budget_warning_threshold == 80

    def test_update_creates_then_updates(self, profile_service):
        first = profile_service.update_settings(theme="dark")
        second = profile_service.update_settings(payroll_date=25)

        assert second.id == first.id
        assert second.theme == "dark"
        assert second.payroll_date == 25
        assert second.updated_at is not None

    @pytest.mark.parametrize(
        "values",
        [
            {"language": "fr"},
            {"theme": "blue"},
            {"payroll_date": 0},
            {"payroll_date": 32},
            {"budget_warning_threshold": 49},
            {"budget_warning_threshold": 101},
        ],
    )
    def test_rejects_invalid_values(self, profile_service, values):
        with pytest.raises(ValidationError):
            profile_service.update_settings(**values)
        assert profile_service.get_settings().id is None

    def test_settings_are_per_user(self, temp_db):
        ProfileService(temp_db, user_id="alice").update_settings(language="en")

        assert ProfileService(temp_db, user_id="bob").get_settings().language == "id"


class TestProfile:
    def test_no_profile_yet(self, profile_service):
        assert profile_service.get_profile() is None

    def test_update_profile_upserts(self, profile_service):
        created = profile_service.update_profile(full_name="Budi Santoso", location="Jakarta")
        updated = profile_service.update_profile(birth_date=date(1990, 4, 2))

        assert updated.id == created.id
        assert updated.full_name == "Budi Santoso"
        assert updated.birth_date == date(1990, 4, 2)

    def test_default_avatars(self, profile_service):
        assert default_avatars() == DEFAULT_AVATARS
        assert len(DEFAULT_AVATARS) == 6

        profile = profile_service.update_profile(avatar_url=DEFAULT_AVATARS[1])
        assert profile.avatar_url == "/avatars/default/professional.png"


class TestAvatar:
    def test_upload_stores_file_and_sets_url(self, profile_service, store):
        url = profile_service.upload_avatar("Me.JPG", b"jpeg-bytes")

        assert url == "http://files.test/avatars/user-1/avatar.jpg"
        assert (store.root / "avatars" / "user-1" / "avatar.jpg").read_bytes() == b"jpeg-bytes"
        assert profile_service.get_profile().avatar_url == url

    def test_upload_replaces_previous(self, profile_service, store):
        profile_service.upload_avatar("a.png", b"old")
        profile_service.upload_avatar("b.png", b"new")

        assert (store.root / "avatars" / "user-1" / "avatar.png").read_bytes() == b"new"

    def test_delete_avatar(self, profile_service, store):
        profile_service.upload_avatar("me.png", b"png")

        assert profile_service.delete_avatar() is True
        assert profile_service.get_profile().avatar_url is None
        assert not (store.root / "avatars" / "user-1" / "avatar.png").exists()

    def test_delete_default_avatar_only_clears_url(self, profile_service, store):
        profile_service.update_profile(avatar_url=DEFAULT_AVATARS[0])

        assert profile_service.delete_avatar() is True
        assert profile_service.get_profile().avatar_url is None

    def test_delete_without_avatar(self, profile_service):
        assert profile_service.delete_avatar() is False

    def test_avatar_needs_store(self, temp_db):
        with pytest.raises(ValidationError):
            ProfileService(temp_db, user_id="user-1").upload_avatar("me.png", b"png")
