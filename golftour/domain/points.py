from __future__ import annotations

from typing import Callable, Mapping, Optional

from golftour.db.models import PointTemplate
from golftour.domain.errors import POINT_TEMPLATE_NOT_FOUND, NotFoundError

DEFAULT_TEMPLATE_KEY = "default"

PointTemplateLookup = Callable[[int], Optional[PointTemplate]]


def default_points(rank: int, field_size: int) -> int:
    """Return points from the built-in formula for a field of ``field_size``.

    First place earns ``field_size + 2``, second ``field_size`` and every
    later rank one point less than the rank before, never below zero.
    """
    if not isinstance(rank, int):
        raise TypeError("Rank must be an integer.")
    if rank <= 0:
        return 0
    if rank == 1:
        return field_size + 2
    if rank == 2:
        return field_size
    return max(field_size - (rank - 1), 0)


def template_points(structure: Mapping[str, int], rank: int) -> int:
    """Return points for ``rank`` from a template structure."""
    key = str(rank)
    if key in structure:
        return int(structure[key])
    return int(structure.get(DEFAULT_TEMPLATE_KEY, 0))


class PointsCalculator:
    """Turn a rank inside a competition into points.

    Templates are fetched through ``lookup`` and cached per calculator, so one
    calculator should not outlive the snapshot it reads from.
    """

    def __init__(self, lookup: PointTemplateLookup) -> None:
        self._lookup = lookup
        self._templates: dict[int, PointTemplate] = {}

    def get_template(self, template_id: int) -> PointTemplate:
        template = self._templates.get(template_id)
        if template is None:
            template = self._lookup(template_id)
            if template is None:
                raise NotFoundError(POINT_TEMPLATE_NOT_FOUND)
            self._templates[template_id] = template
        return template

    def calculate_points(self, template_id: int | None, rank: int, field_size: int) -> int:
        if template_id is None:
            return default_points(rank, field_size)
        template = self.get_template(template_id)
        return template_points(template.points_structure, rank)
