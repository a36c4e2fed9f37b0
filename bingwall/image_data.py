"""
Image Data

Models for the image metadata served by the Bing image archive. An ImageRecord describes a single
day's wallpaper and an ImageData is the catalog of every record bingwall knows about.

Records are serialized with the archive's own field names (fullstartdate, hsh, urlbase...) so that
the same code reads API responses and the local state file.

Two records are the same image when their identity keys match. The key deliberately leaves out
the start and end dates, which the archive shifts around day boundaries for the same image.
"""

from dataclasses import dataclass
from datetime import date
from datetime import datetime
from operator import attrgetter
from typing import Iterable
from typing import Iterator
from typing import Optional

from bingwall import bing_handler

DATETIME_FORMAT = "%Y%m%d%H%M"
DATE_FORMAT = "%Y%m%d"


class ImageDataError(Exception):
    """Raise when image metadata cannot be parsed."""

    pass


def parse_datetime(value: str) -> datetime:
    """Parse a 'fullstartdate' value as a time in the system's local timezone."""

    return datetime.strptime(value, DATETIME_FORMAT).astimezone()


def parse_date(value: str) -> date:
    return datetime.strptime(value, DATE_FORMAT).date()


@dataclass
class ImageRecord:
    """
    Metadata for one wallpaper. The download url and the file name are not stored here, they are
    derived on demand with image_url() and file_name() from the active size and extension.
    """

    full_start_date: datetime
    end_date: date
    hash: str
    title: str
    url: str
    url_base: str
    copyright: str
    copyright_link: str

    @classmethod
    def from_json(cls, data: dict) -> "ImageRecord":
        """
        Build a record from an element of the archive's 'images' array. Unknown keys are ignored.
        """

        try:
            return cls(
                full_start_date=parse_datetime(data["fullstartdate"]),
                end_date=parse_date(data["enddate"]),
                hash=data["hsh"],
                title=data["title"],
                url=data["url"],
                url_base=data["urlbase"],
                copyright=data["copyright"],
                copyright_link=data["copyrightlink"],
            )

        except KeyError as error:
            raise ImageDataError(f"Image metadata is missing the {error} field.")

        except (TypeError, ValueError) as error:
            raise ImageDataError(f"Invalid image metadata: {error}")

    def to_json(self) -> dict:
        return {
            "fullstartdate": self.full_start_date.astimezone().strftime(DATETIME_FORMAT),
            "enddate": self.end_date.strftime(DATE_FORMAT),
            "hsh": self.hash,
            "title": self.title,
            "url": self.url,
            "urlbase": self.url_base,
            "copyright": self.copyright,
            "copyrightlink": self.copyright_link,
        }


def identity_key(image: ImageRecord) -> tuple:
    """Return the fields that decide whether two records are the same image."""

    return (
        image.hash,
        image.title,
        image.url,
        image.url_base,
        image.copyright,
        image.copyright_link,
    )


def image_url(image: ImageRecord, size: str, ext: str) -> str:
    """Return the url to download the image at the given size and extension."""

    return bing_handler.image_url(image.url_base, size=size, ext=ext)


def file_name(image: ImageRecord, size: str, ext: str) -> str:
    """
    Return the local file name of the image, "{hash}_{id}", where id is the 'id' query parameter of
    the download url (so it already carries the size and extension).
    """

    return f"{image.hash}_{bing_handler.image_id(image_url(image, size, ext))}"


class ImageData:
    """
    A catalog of ImageRecords keyed by identity_key(). Adding a record that is already known is a
    no-op: the first record added wins and later duplicates are discarded.

    Iteration follows insertion order. Use sorted() whenever the order matters.
    """

    def __init__(self, images: Iterable[ImageRecord] = ()):
        self._images: dict[tuple, ImageRecord] = {}
        for image in images:
            self.add(image)

    def add(self, image: ImageRecord) -> bool:
        """Add image to the catalog. Return True if it was not already tracked."""

        key = identity_key(image)
        if key in self._images:
            return False

        self._images[key] = image
        return True

    def sorted(self) -> list[ImageRecord]:
        """Return the records ordered by start date, oldest first."""

        return sorted(self._images.values(), key=attrgetter("full_start_date"))

    def latest(self) -> Optional[ImageRecord]:
        return max(
            self._images.values(), key=attrgetter("full_start_date"), default=None
        )

    def __contains__(self, image: ImageRecord) -> bool:
        return identity_key(image) in self._images

    def __iter__(self) -> Iterator[ImageRecord]:
        return iter(list(self._images.values()))

    def __len__(self) -> int:
        return len(self._images)

    def __repr__(self) -> str:
        return f"ImageData({self.sorted()!r})"

    @classmethod
    def from_json(cls, data: dict) -> "ImageData":
        """Build a catalog from an object holding an 'images' array."""

        if not isinstance(data, dict) or not isinstance(data.get("images"), list):
            raise ImageDataError("Expected an object with an 'images' array.")

        images = []
        for item in data["images"]:
            if not isinstance(item, dict):
                raise ImageDataError(f"Expected an image object, got {item!r}.")
            images.append(ImageRecord.from_json(item))

        return cls(images)

    def to_json(self) -> dict:
        return {"images": [image.to_json() for image in self.sorted()]}
