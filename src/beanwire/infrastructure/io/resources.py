import io
import sys
from pathlib import Path
from typing import BinaryIO, Iterable, Optional, Union
from urllib.parse import urlparse
from urllib.request import url2pathname

import httpx

from beanwire.domain import IResource, IResourceLoader, ResourceNotFoundError

CLASSPATH_URL_PREFIX = "classpath:"
URL_SCHEMES = ("http", "https", "file")


class ClassPathResource(IResource):
    """Resource looked up relative to the entries of ``sys.path``.

    The first directory entry that contains the relative path wins, the same
    way an import would find a module.

    Attributes:
        path: Relative path, without a leading slash.
    """

    def __init__(self, path: str, search_paths: Optional[Iterable[Union[str, Path]]] = None) -> None:
        if not path or not path.strip():
            raise ValueError("Path must not be empty")
        self.path = path.lstrip("/")
        self._search_paths = list(search_paths) if search_paths is not None else None

    @property
    def description(self) -> str:
        return f"class path resource [{self.path}]"

    def resolve(self) -> Optional[Path]:
        """Return the file the path resolves to, or None."""
        search_paths = self._search_paths if self._search_paths is not None else sys.path
        for entry in search_paths:
            base = Path(entry) if entry else Path.cwd()
            candidate = base / self.path
            if candidate.is_file():
                return candidate
        return None

    def get_input_stream(self) -> BinaryIO:
        resolved = self.resolve()
        if resolved is None:
            raise ResourceNotFoundError(CLASSPATH_URL_PREFIX + self.path)
        return resolved.open("rb")


class FileSystemResource(IResource):
    """Resource backed by a file on disk.

    Attributes:
        path: Path to the file.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    @property
    def description(self) -> str:
        return f"file [{self.path}]"

    def get_input_stream(self) -> BinaryIO:
        try:
            return self.path.open("rb")
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError) as e:
            raise ResourceNotFoundError(str(self.path), str(e)) from e


class UrlResource(IResource):
    """Resource fetched from a URL.

    ``http``/``https`` URLs are downloaded with httpx; ``file`` URLs are opened
    from disk.

    Attributes:
        url: The URL string.
        timeout: HTTP timeout in seconds.
    """

    def __init__(self, url: str, timeout: float = 10.0) -> None:
        self.url = url
        self.timeout = timeout

    @property
    def description(self) -> str:
        return f"URL [{self.url}]"

    def get_input_stream(self) -> BinaryIO:
        parsed = urlparse(self.url)
        if parsed.scheme == "file":
            return FileSystemResource(url2pathname(parsed.path)).get_input_stream()

        try:
            response = httpx.get(self.url, timeout=self.timeout, follow_redirects=True)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ResourceNotFoundError(self.url, f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise ResourceNotFoundError(self.url, str(e)) from e
        return io.BytesIO(response.content)


class DefaultResourceLoader(IResourceLoader):
    """Resolves location strings by prefix.

    - ``classpath:config/beans.xml`` → ``ClassPathResource``
    - ``http://``, ``https://``, ``file://`` → ``UrlResource``
    - anything else → ``FileSystemResource``

    Example:
        >>> loader = DefaultResourceLoader()
        >>> with loader.get_resource("classpath:spring.xml").get_input_stream() as stream:
        ...     data = stream.read()
    """

    def __init__(self, url_timeout: float = 10.0) -> None:
        self.url_timeout = url_timeout

    def get_resource(self, location: str) -> IResource:
        if not location or not location.strip():
            raise ValueError("Location must not be empty")
        location = location.strip()

        if location.startswith(CLASSPATH_URL_PREFIX):
            return ClassPathResource(location[len(CLASSPATH_URL_PREFIX) :])

        if urlparse(location).scheme in URL_SCHEMES:
            return UrlResource(location, timeout=self.url_timeout)

        return FileSystemResource(location)
