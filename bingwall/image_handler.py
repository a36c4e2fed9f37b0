"""
Image Handler

Utilities for fetching image metadata from the Bing image archive and downloading images.

Fetching metadata: a single GET to the archive url built by bing_handler. Any network or parsing
problem is raised as ImageDataFetchError before anything local is touched.

Syncing: the remote catalog is diffed against the local one, every image missing from the data
directory is downloaded concurrently (one worker per download, catalogs are small) and newly seen
records are merged into the local catalog once all downloads are done. Failed downloads don't
cancel the others. They are collected and raised together as a SyncError after the merge.
"""

from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import as_completed
from pathlib import Path
from typing import Optional

import requests
from rich.progress import Progress

from bingwall.image_data import ImageData
from bingwall.image_data import ImageDataError
from bingwall.image_data import file_name
from bingwall.image_data import image_url

CHUNK_SIZE = 64 * 1024


class ImageDataFetchError(Exception):
    """
    Raised when image metadata cannot be retrieved from the archive.
    """

    pass


class ImageDownloadError(Exception):
    """
    Raised when an image download is unsuccessful.
    """

    pass


class SyncError(Exception):
    """
    Raised when one or more downloads failed during a sync. The records that were newly tracked are
    still merged into the local catalog and their titles are available on 'tracked'.
    """

    def __init__(self, failures: list[ImageDownloadError], tracked: list[str]):
        self.failures = failures
        self.tracked = tracked
        details = "; ".join(str(failure) for failure in failures)
        super().__init__(f"{len(failures)} image download(s) failed: {details}")


def fetch_json(session: requests.Session, url: str, timeout: float = None):
    """
    GET url and return the decoded JSON body.
    """

    try:
        r = session.get(url, timeout=timeout)
        r.raise_for_status()
        return r.json()

    # requests raises its own JSONDecodeError, which is a RequestException too
    except requests.exceptions.RequestException as error:
        raise ImageDataFetchError(
            f"Failed to fetch image metadata from {url}: {error}"
        )


def fetch_image_data(
    session: requests.Session, url: str, timeout: float = None
) -> ImageData:
    """
    Fetch the remote catalog from the archive url.
    """

    try:
        return ImageData.from_json(fetch_json(session, url, timeout=timeout))

    except ImageDataError as error:
        raise ImageDataFetchError(f"Invalid image metadata from {url}: {error}")


def content_length(response: requests.Response) -> Optional[int]:
    """
    Return the size announced in the response headers, None if it is missing or not a number.
    """

    try:
        return int(response.headers["content-length"])

    except (KeyError, TypeError, ValueError):
        return None


def download_image(
    session: requests.Session,
    url: str,
    file_path: Path,
    timeout: float = None,
    progress: Optional[Progress] = None,
) -> Path:
    """
    Download the image at url into file_path. Returns the location of the file.

    The file is created exclusively. If something already exists at file_path the download is
    treated as done, which covers another sync having written the same file in the meantime.
    Any other failure raises ImageDownloadError and leaves no partial file behind.
    """

    file_path = Path(file_path)

    try:
        r = session.get(url, stream=True, timeout=timeout)
        r.raise_for_status()

    except requests.exceptions.RequestException as error:
        raise ImageDownloadError(
            f"Download error: something went wrong trying to access {url}: {error}"
        )

    try:
        try:
            file = open(file_path, "xb")

        except FileExistsError:
            return file_path

        except OSError as error:
            raise ImageDownloadError(f"Could not create {file_path}: {error}")

        try:
            with file:
                task = None
                if progress is not None:
                    task = progress.add_task(file_path.name, total=content_length(r))

                for chunk in r.iter_content(chunk_size=CHUNK_SIZE):
                    file.write(chunk)
                    if task is not None:
                        progress.advance(task, len(chunk))

        except (requests.exceptions.RequestException, OSError) as error:
            file_path.unlink(missing_ok=True)
            raise ImageDownloadError(
                f"Download error: transfer of {url} to {file_path} failed: {error}"
            )

        except Exception:
            # no file is left behind for a download that did not finish
            file_path.unlink(missing_ok=True)
            raise

    finally:
        r.close()

    return file_path


def sync_images(
    local: ImageData,
    remote: ImageData,
    session: requests.Session,
    data_dir: Path,
    size: str,
    ext: str,
    timeout: float = None,
    progress: Optional[Progress] = None,
) -> list[str]:
    """
    Reconcile the remote catalog with the local one and download every remote image whose file is
    missing from data_dir. Newly seen records are merged into local (records only known locally are
    kept). Returns the titles of the newly tracked images in the order of the remote catalog.

    Raise SyncError after the merge if any download failed.
    """

    data_dir = Path(data_dir)
    new_images = [image for image in remote if image not in local]

    downloads = {}
    for image in remote:
        image_path = data_dir / file_name(image, size, ext)
        if image_path not in downloads and not image_path.exists():
            downloads[image_path] = image_url(image, size, ext)

    failures = []
    if downloads:
        with ThreadPoolExecutor(max_workers=len(downloads)) as executor:
            future_to_path = {
                executor.submit(
                    download_image, session, url, image_path, timeout, progress
                ): image_path
                for image_path, url in downloads.items()
            }

            for future in as_completed(future_to_path):
                try:
                    future.result()
                except ImageDownloadError as error:
                    failures.append(error)
                except Exception as error:
                    failures.append(
                        ImageDownloadError(
                            f"Download error: {future_to_path[future]} failed: {error!r}"
                        )
                    )

    # the catalog is only touched here, after every download has finished
    tracked = [image.title for image in new_images if local.add(image)]

    if failures:
        raise SyncError(failures, tracked)

    return tracked
