"""Category form validation helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ...models.common import ENTRY_TYPES
from ...services.categories import CategoryPatch
from ..forms import Form


@dataclass
class CategoryForm(Form):
    name: Optional[str] = None
    type: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None

    def validate(self) -> bool:
        self.errors.clear()
        self.name = self._text("name", label="Name", required=True, min_length=1, max_length=64)
        self.type = self._entry_type(required=True)
        self.icon = self._text("icon", label="Icon", required=True, min_length=1, max_length=64)
        self.color = self._text("color", label="Color", required=True, min_length=1, max_length=16)
        return not self.errors


@dataclass
class CategoryUpdateForm(Form):
    """Name, icon and color are optional; type is fixed after creation."""

    name: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None

    def validate(self) -> bool:
        self.errors.clear()
        self.name = self._text("name", label="Name", min_length=1, max_length=64)
        self.icon = self._text("icon", label="Icon", min_length=1, max_length=64)
        self.color = self._text("color", label="Color", min_length=1, max_length=16)
        return not self.errors

    def to_patch(self) -> CategoryPatch:
        return CategoryPatch(name=self.name, icon=self.icon, color=self.color)


@dataclass
class CategoryListQuery(Form):
    type: Optional[str] = None

    def validate(self) -> bool:
        self.errors.clear()
        self.type = self._query_choice("type", label="Type", choices=ENTRY_TYPES, default=None)
        return not self.errors
