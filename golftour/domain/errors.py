from __future__ import annotations


class NotFoundError(ValueError):
    """A tour, point template or category referenced by id does not exist."""


TOUR_NOT_FOUND = "Tour not found"
POINT_TEMPLATE_NOT_FOUND = "Point template not found"
CATEGORY_NOT_FOUND = "Category not found"
