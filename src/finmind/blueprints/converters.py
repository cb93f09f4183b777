"""URL converters shared by the API blueprints."""

from __future__ import annotations

from werkzeug.routing import IntegerConverter, Map

from ..models.common import MAX_ID


class RecordIdConverter(IntegerConverter):
    """``<id:...>`` path segment; ids no row can have fail to match (404)."""

    def __init__(self, map: Map, *args, **kwargs) -> None:
        super().__init__(map, max=MAX_ID)
