"""Category routes."""

from __future__ import annotations

from flask import jsonify, request

from ...extensions import category_registry
from ...security import current_identity
from ..forms import json_body
from ..serializers import category_to_dict
from . import bp
from .forms import CategoryForm, CategoryListQuery, CategoryUpdateForm


@bp.get("", strict_slashes=False)
def list_categories():
    """Return default categories first, then user categories by creation."""

    query = CategoryListQuery(raw_data=request.args)
    query.ensure_valid()
    categories = category_registry().list(query.type)
    return jsonify({"categories": [category_to_dict(item) for item in categories]})


@bp.post("", strict_slashes=False)
def create_category():
    form = CategoryForm(raw_data=json_body())
    form.ensure_valid()
    category = category_registry().create(
        current_identity().user_id,
        name=form.name,  # type: ignore[arg-type]
        category_type=form.type,  # type: ignore[arg-type]
        icon=form.icon,  # type: ignore[arg-type]
        color=form.color,  # type: ignore[arg-type]
    )
    return jsonify(category_to_dict(category)), 201


@bp.put("/<id:category_id>")
def update_category(category_id: int):
    form = CategoryUpdateForm(raw_data=json_body())
    form.ensure_valid()
    category = category_registry().update(current_identity().user_id, category_id, form.to_patch())
    return jsonify(category_to_dict(category))


@bp.delete("/<id:category_id>")
def delete_category(category_id: int):
    category_registry().delete(current_identity().user_id, category_id)
    return jsonify({"message": "Category deleted successfully"})
