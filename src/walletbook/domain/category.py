"""Category domain service.

Categories form a two-level tree: roots carry the label stored on a
transaction's ``category`` field ("Expense", "Income", "Debt") and their
children are the subcategory labels. Transfers use a fixed root that is not
stored at all.
"""

import logging
from typing import Optional

from walletbook.database.base import Database, Table
from walletbook.domain.entities import (
    DEBT_CATEGORY,
    EXPENSE_CATEGORY,
    INCOME_CATEGORY,
    TRANSFER_CATEGORY,
    TRANSFER_SUBCATEGORIES,
    Category,
    CategoryTreeNode,
    CategoryType,
)
from walletbook.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    StoreError,
    ValidationError,
    category_not_found,
    duplicate_category_name,
    store_failed,
)

logger = logging.getLogger(__name__)

CATEGORY_TYPES = tuple(t.value for t in CategoryType)

# Default category tree: (root label, type, subcategories)
DEFAULT_CATEGORIES = [
    (
        EXPENSE_CATEGORY,
        CategoryType.EXPENSE,
        [
            "Groceries",
            "Food & Drinks",
            "Transport",
            "Fuel",
            "Internet",
            "Electricity & Water",
            "Health",
            "Education",
            "Entertainment",
            "Shopping",
            "Other",
        ],
    ),
    (
        INCOME_CATEGORY,
        CategoryType.INCOME,
        ["Salary", "Bonus", "Investment", "Gift", "Other Income"],
    ),
    (
        DEBT_CATEGORY,
        CategoryType.DEBT,
        ["Credit Card", "Loan", "Installment"],
    ),
]


def transfer_root() -> CategoryTreeNode:
    """The fixed Transfer root shown in every category picker."""
    return CategoryTreeNode(
        name=TRANSFER_CATEGORY,
        category_type=CategoryType.TRANSFER.value,
        subcategories=TRANSFER_SUBCATEGORIES,
    )


class CategoryService:
    """Service for managing categories."""

    def __init__(self, db: Database, user_id: Optional[str] = None):
        """Initialize category service.

        Args:
            db: Database instance
            user_id: Optional user scope. Global categories (no user) are
                visible to everyone.
        """
        self.db = db
        self.user_id = user_id

    def create_category(
        self,
        name: str,
        category_type: str = CategoryType.EXPENSE.value,
        parent_id: Optional[int] = None,
        is_default: bool = False,
    ) -> Category:
        """Create a category.

        Args:
            name: Category name
            category_type: expense, income, transfer or debt
            parent_id: Optional parent (root) category ID
            is_default: Mark as part of the default tree

        Returns:
            Created category

        Raises:
            ValidationError: If name or type is invalid, or the parent is not
                a root of the same type
            NotFoundError: If parent category doesn't exist
            ConflictError: If the name is already used for this type
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Category name is required")
        if category_type not in CATEGORY_TYPES:
            raise ValidationError(
                f"Invalid category type '{category_type}'. Expected one of: {', '.join(CATEGORY_TYPES)}"
            )

        if parent_id is not None:
            parent = self.require_category(parent_id)
            if parent.parent_id is not None:
                raise ValidationError(f"Category '{parent.name}' is a subcategory and cannot have children")
            if parent.category_type != category_type:
                raise ValidationError(
                    f"Subcategory type '{category_type}' does not match parent type '{parent.category_type}'"
                )

        for existing in self.list_categories(category_type=category_type):
            if existing.name == name:
                raise ConflictError(duplicate_category_name(name, category_type))

        category = self.db.insert_row(
            Table.CATEGORIES,
            {
                "name": name,
                "category_type": category_type,
                "parent_id": parent_id,
                "is_default": is_default,
            },
            user_id=self.user_id,
        )
        if category is None:
            raise StoreError(store_failed("save category"))
        return category

    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID.

        Args:
            category_id: Category ID

        Returns:
            Category entity or None if not found
        """
        return self.db.get_row(Table.CATEGORIES, category_id, user_id=self.user_id)

    def require_category(self, category_id: int) -> Category:
        """Get category by ID or raise NotFoundError."""
        category = self.get_category(category_id)
        if category is None:
            raise NotFoundError(category_not_found(category_id))
        return category

    def list_categories(
        self,
        category_type: Optional[str] = None,
        include_inactive: bool = False,
    ) -> list[Category]:
        """List categories ordered by name.

        Args:
            category_type: Optional type to filter by
            include_inactive: Also return soft-deleted categories
        """
        filters = {}
        if category_type is not None:
            filters["category_type"] = category_type
        if not include_inactive:
            filters["is_active"] = True
        return self.db.list_rows(Table.CATEGORIES, user_id=self.user_id, **filters)

    def find_root(self, name: str) -> Optional[Category]:
        """Find an active root category by name."""
        for category in self.list_categories():
            if category.parent_id is None and category.name == name:
                return category
        return None

    def get_category_tree(self) -> list[CategoryTreeNode]:
        """Get the active category tree.

        Returns:
            Root nodes ordered by name with their active subcategories,
            followed by the fixed Transfer root
        """
        categories = self.list_categories()
        children: dict[int, list[Category]] = {}
        for category in categories:
            if category.parent_id is not None:
                children.setdefault(category.parent_id, []).append(category)

        tree = [
            CategoryTreeNode(
                name=root.name,
                category_type=root.category_type,
                id=root.id,
                is_default=root.is_default,
                subcategories=tuple(children.get(root.id, [])),
            )
            for root in categories
            if root.parent_id is None and root.name != TRANSFER_CATEGORY
        ]
        tree.append(transfer_root())
        return tree

    def subcategories_of(self, category: str) -> tuple[str, ...]:
        """Subcategory labels available under a root category label."""
        for node in self.get_category_tree():
            if node.name == category:
                return node.subcategory_names
        return ()

    def rename_category(self, category_id: int, name: str) -> Category:
        """Rename a category.

        Existing transactions keep the label they were recorded with.

        Raises:
            NotFoundError: If category not found
            ConflictError: If the name is already used for this type
            DependencyError: If the category is a default root or shared category
        """
        category = self.require_category(category_id)
        if category.is_default and category.parent_id is None:
            raise DependencyError(f"Category '{category.name}' is a default category and cannot be renamed")
        if self.user_id is not None and category.user_id != self.user_id:
            raise DependencyError(f"Category '{category.name}' is shared and cannot be modified")
        name = (name or "").strip()
        if not name:
            raise ValidationError("Category name is required")
        for existing in self.list_categories(category_type=category.category_type):
            if existing.id != category_id and existing.name == name:
                raise ConflictError(duplicate_category_name(name, category.category_type))

        updated = self.db.update_row(Table.CATEGORIES, category_id, {"name": name}, user_id=self.user_id)
        if updated is None:
            raise StoreError(store_failed(f"update category {category_id}"))
        return updated

    def delete_category(self, category_id: int) -> None:
        """Deactivate a category.

        The row is kept so historical labels stay meaningful; it disappears
        from lists and the tree.

        Raises:
            NotFoundError: If category not found
            DependencyError: If the category is a default or shared category
        """
        category = self.require_category(category_id)
        if category.is_default:
            raise DependencyError(f"Category '{category.name}' is a default category and cannot be deleted")
        if self.user_id is not None and category.user_id != self.user_id:
            raise DependencyError(f"Category '{category.name}' is shared and cannot be deleted")

        updated = self.db.update_row(Table.CATEGORIES, category_id, {"is_active": False}, user_id=self.user_id)
        if updated is None:
            raise StoreError(store_failed(f"delete category {category_id}"))
        logger.info("Deactivated category %s (%s)", category_id, category.name)

    def initialize_defaults(self) -> int:
        """Seed the default category tree.

        Categories that already exist are left alone, so this is safe to
        run repeatedly.

        Returns:
            Number of categories created
        """
        created = 0
        for root_name, category_type, subcategories in DEFAULT_CATEGORIES:
            root = self.find_root(root_name)
            if root is None:
                root = self.create_category(root_name, category_type.value, is_default=True)
                created += 1

            existing = {c.name for c in self.list_categories(category_type=category_type.value) if c.parent_id == root.id}
            for name in subcategories:
                if name in existing:
                    continue
                self.create_category(name, category_type.value, parent_id=root.id, is_default=True)
                created += 1

        logger.info("Created %d default categories", created)
        return created
