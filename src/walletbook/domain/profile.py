"""User profile, preferences and avatar management."""

import logging
from datetime import date, datetime, UTC
from typing import Any, Optional

from walletbook.database.base import Database, Table
from walletbook.domain.entities import UserProfile, UserSettings
from walletbook.domain.errors import StoreError, ValidationError, store_failed
from walletbook.storage.base import ObjectStore

logger = logging.getLogger(__name__)

LANGUAGES = ("id", "en")
THEMES = ("light", "dark", "system")
PAYROLL_DATE_RANGE = (1, 31)
WARNING_THRESHOLD_RANGE = (50, 100)

# Bundled avatars a user can pick instead of uploading one
DEFAULT_AVATARS = (
    "/avatars/default/diverse-users.png",
    "/avatars/default/professional.png",
    "/avatars/default/professional-man.png",
    "/avatars/default/professional-woman.png",
    "/avatars/default/casual-man.png",
    "/avatars/default/casual-woman.png",
)

PROFILE_FIELDS = ("full_name", "phone_number", "location", "birth_date", "avatar_url")


def default_avatars() -> tuple[str, ...]:
    return DEFAULT_AVATARS


def validate_settings(
    language: Optional[str] = None,
    theme: Optional[str] = None,
    payroll_date: Optional[int] = None,
    budget_warning_threshold: Optional[int] = None,
) -> None:
    """Check settings values; None means the value is not being changed.

    Raises:
        ValidationError: If a value is out of range or unknown
    """
    if language is not None and language not in LANGUAGES:
        raise ValidationError(f"Unknown language '{language}'. Expected one of: {', '.join(LANGUAGES)}")
    if theme is not None and theme not in THEMES:
        raise ValidationError(f"Unknown theme '{theme}'. Expected one of: {', '.join(THEMES)}")
    if payroll_date is not None:
        low, high = PAYROLL_DATE_RANGE
        if not low <= payroll_date <= high:
            raise ValidationError(f"Payroll date must be between {low} and {high}")
    if budget_warning_threshold is not None:
        low, high = WARNING_THRESHOLD_RANGE
        if not low <= budget_warning_threshold <= high:
            raise ValidationError(f"Budget warning threshold must be between {low} and {high}")


class ProfileService:
    """Service for the current user's profile and settings."""

    def __init__(self, db: Database, user_id: Optional[str] = None, store: Optional[ObjectStore] = None):
        """Initialize profile service.

        Args:
            db: Database instance
            user_id: User whose profile and settings are managed
            store: Object store for avatar images
        """
        self.db = db
        self.user_id = user_id
        self.store = store

    def get_profile(self) -> Optional[UserProfile]:
        """Return the user's profile, or None if none was saved yet."""
        rows = self.db.list_rows(Table.PROFILES, user_id=self.user_id)
        return rows[0] if rows else None

    def update_profile(
        self,
        full_name: Optional[str] = None,
        phone_number: Optional[str] = None,
        location: Optional[str] = None,
        birth_date: Optional[date] = None,
        avatar_url: Optional[str] = None,
    ) -> UserProfile:
        """Create or update the user's profile.

        Fields left as None keep their value.
        """
        values = {
            name: value
            for name, value in zip(PROFILE_FIELDS, (full_name, phone_number, location, birth_date, avatar_url))
            if value is not None
        }
        return self._save_profile(values)

    def _save_profile(self, values: dict[str, Any]) -> UserProfile:
        profile = self.get_profile()
        if profile is None:
            saved = self.db.insert_row(Table.PROFILES, values, user_id=self.user_id)
        elif values:
            saved = self.db.update_row(Table.PROFILES, profile.id, values, user_id=self.user_id)
        else:
            return profile
        if saved is None:
            raise StoreError(store_failed("save profile"))
        return saved

    def get_settings(self) -> UserSettings:
        """Return the user's settings, or the defaults if none were saved."""
        rows = self.db.list_rows(Table.SETTINGS, user_id=self.user_id)
        if rows:
            return rows[0]
        return UserSettings(id=None, user_id=self.user_id)

    def update_settings(
        self,
        language: Optional[str] = None,
        theme: Optional[str] = None,
        payroll_date: Optional[int] = None,
        budget_warning_threshold: Optional[int] = None,
    ) -> UserSettings:
        """Validate and save settings, stamping the update time.

        Raises:
            ValidationError: If a value is out of range or unknown
        """
        validate_settings(language, theme, payroll_date, budget_warning_threshold)
        values: dict[str, Any] = {
            name: value
            for name, value in (
                ("language", language),
                ("theme", theme),
                ("payroll_date", payroll_date),
                ("budget_warning_threshold", budget_warning_threshold),
            )
            if value is not None
        }
        values["updated_at"] = datetime.now(UTC)

        current = self.get_settings()
        if current.id is None:
            saved = self.db.insert_row(Table.SETTINGS, values, user_id=self.user_id)
        else:
            saved = self.db.update_row(Table.SETTINGS, current.id, values, user_id=self.user_id)
        if saved is None:
            raise StoreError(store_failed("save settings"))
        return saved

    def _avatar_path(self, extension: str) -> str:
        return f"avatars/{self.user_id or 'local'}/avatar.{extension}"

    def _require_store(self) -> ObjectStore:
        if self.store is None:
            raise ValidationError("No attachment storage configured for avatars")
        return self.store

    def upload_avatar(self, filename: str, data: bytes) -> str:
        """Store a new avatar image, replacing the previous one.

        Returns:
            Public URL of the stored avatar
        """
        store = self._require_store()
        extension = filename.rsplit(".", 1)[-1].lower() if "." in filename else "png"
        path = self._avatar_path(extension)
        if not store.upload(path, data, upsert=True):
            raise StoreError(store_failed("upload avatar"))
        url = store.get_public_url(path)
        self._save_profile({"avatar_url": url})
        return url

    def delete_avatar(self) -> bool:
        """Remove the uploaded avatar and clear it from the profile.

        Returns:
            False if there was no uploaded avatar to remove
        """
        store = self._require_store()
        profile = self.get_profile()
        if profile is None or not profile.avatar_url:
            return False

        filename = profile.avatar_url.rsplit("/", 1)[-1]
        if filename.startswith("avatar.") and not store.remove(self._avatar_path(filename.split(".", 1)[1])):
            return False
        if self.db.update_row(Table.PROFILES, profile.id, {"avatar_url": None}, user_id=self.user_id) is None:
            raise StoreError(store_failed("save profile"))
        logger.info("Removed avatar for user %s", self.user_id)
        return True
