"""Category domain service."""

from typing import Optional
from fintrack.database.base import Database
from fintrack.domain.entities import (
    Category as CategoryEntity,
    CategoryType,
    Subcategory as SubcategoryEntity,
)
from fintrack.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    category_not_found,
)


class CategoryService:
    """Service for managing categories and their subcategories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_category(
        self, name: str, category_type: CategoryType | str = CategoryType.STANDARD
    ) -> int:
        """Create a category.

        Args:
            name: Category name
            category_type: Standard, Debt or Investment

        Returns:
            Category ID

        Raises:
            ValidationError: If the name is blank or the type is unknown
            ConflictError: If a category with that name exists
        """
        name = name.strip()
        if not name:
            raise ValidationError("Category name cannot be empty")
        try:
            category_type = CategoryType(category_type)
        except ValueError:
            raise ValidationError(f"Unknown category type '{category_type}'")

        if self.db.get_category_by_name(name) is not None:
            raise ConflictError(f"Category '{name}' already exists")

        return self.db.create_category(name=name, category_type=category_type.value)

    def get_category(self, category_id: int) -> Optional[CategoryEntity]:
        """Get category by ID."""
        return self.db.get_category(category_id)

    def require_category(self, category_id: int) -> CategoryEntity:
        """Get category by ID or raise NotFoundError."""
        category = self.db.get_category(category_id)
        if category is None:
            raise NotFoundError(category_not_found(category_id))
        return category

    def get_category_by_name(self, name: str) -> Optional[CategoryEntity]:
        """Get category by name."""
        return self.db.get_category_by_name(name)

    def list_categories(self) -> list[CategoryEntity]:
        """List all categories."""
        return self.db.list_categories()

    def create_subcategory(self, category_id: int, name: str) -> int:
        """Create a subcategory under an existing category.

        Raises:
            NotFoundError: If the category does not exist
            ConflictError: If the category already has a subcategory with that name
        """
        self.require_category(category_id)
        name = name.strip()
        if not name:
            raise ValidationError("Subcategory name cannot be empty")
        for sub in self.db.list_subcategories(category_id):
            if sub.name == name:
                raise ConflictError(f"Subcategory '{name}' already exists")
        return self.db.create_subcategory(category_id=category_id, name=name)

    def list_subcategories(self, category_id: Optional[int] = None) -> list[SubcategoryEntity]:
        """List subcategories, optionally only those of one category."""
        return self.db.list_subcategories(category_id)
