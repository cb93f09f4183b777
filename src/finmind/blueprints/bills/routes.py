"""Bill routes."""

from __future__ import annotations

from flask import jsonify, request

from ...extensions import bill_ledger
from ...security import current_identity
from ..forms import json_body
from ..serializers import bill_page_to_dict, bill_to_dict, statistics_to_dict
from . import bp
from .forms import BillForm, BillListQuery, BillUpdateForm, StatisticsQuery


@bp.get("", strict_slashes=False)
def list_bills():
    """List the caller's bills with filters, sorting, and pagination."""

    query = BillListQuery(raw_data=request.args)
    query.ensure_valid()
    page = bill_ledger().list(current_identity().user_id, query.to_query())
    return jsonify(bill_page_to_dict(page))


@bp.post("", strict_slashes=False)
def create_bill():
    form = BillForm(raw_data=json_body())
    form.ensure_valid()
    bill = bill_ledger().create(current_identity().user_id, form.to_draft())
    return jsonify(bill_to_dict(bill)), 201


@bp.get("/statistics")
def statistics():
    """Totals by type and category for a calendar month (default) or year."""

    query = StatisticsQuery(raw_data=request.args)
    query.ensure_valid()
    stats = bill_ledger().statistics(
        current_identity().user_id,
        period=query.period,
        year=query.year,
        month=query.month,
    )
    return jsonify(statistics_to_dict(stats))


@bp.get("/<id:bill_id>")
def get_bill(bill_id: int):
    bill = bill_ledger().get(current_identity().user_id, bill_id)
    return jsonify(bill_to_dict(bill))


@bp.put("/<id:bill_id>")
def update_bill(bill_id: int):
    form = BillUpdateForm(raw_data=json_body())
    form.ensure_valid()
    bill = bill_ledger().update(current_identity().user_id, bill_id, form.to_patch())
    return jsonify(bill_to_dict(bill))


@bp.delete("/<id:bill_id>")
def delete_bill(bill_id: int):
    bill_ledger().delete(current_identity().user_id, bill_id)
    return jsonify({"message": "Bill deleted successfully"})
