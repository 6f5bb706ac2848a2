"""Match image file names against the search terms."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

from peoplefinder.models import SearchCriteria
from peoplefinder.utils.files import is_image

# full_name is not used for file names.
IMAGE_FIELDS: tuple[str, ...] = (
    "email",
    "username",
    "phone_number",
    "first_name",
    "last_name",
    "address",
    "country",
    "state",
)


def find_related_images(files: Iterable[Path], criteria: SearchCriteria) -> List[str]:
    """Return names of image files whose stem contains any non-empty term."""
    terms = [getattr(criteria, name) for name in IMAGE_FIELDS]
    terms = [term for term in terms if term]
    if not terms:
        return []

    images: List[str] = []
    for path in files:
        if not is_image(path):
            continue
        stem = path.stem.lower()
        if any(term in stem for term in terms):
            images.append(path.name)
    return images
