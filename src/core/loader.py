"""
Document loader.

Reads SDF and WoT documents from local files, http(s) URLs or inline JSON
text, and parses them into document models.

Remote documents pass URLValidator (SSRF protection) and are fetched with
requests. Timeouts, connection failures and HTTP 429/502/503/504 responses
are retried with exponential back-off.

Usage:
    from core.loader import DocumentLoader, LoaderSettings

    loader = DocumentLoader(LoaderSettings.from_dict(config))
    model = loader.load_sdf("models/switch.sdf.json")
    thing_model = loader.load_thing_model("https://example.com/lamp.tm.json")
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from constants import LoaderConfig
from core.validators import InputValidator, URLValidator
from formats.sdf.sdf_models import SDFModel
from formats.sdf.sdf_parser import SDFParser
from formats.wot.wot_models import ThingDescription, ThingModel
from formats.wot.wot_parser import WoTParser
from shared.errors import DocumentLoadError

logger = logging.getLogger(__name__)


class TransientHTTPError(Exception):
    """HTTP response that is worth retrying (429, 502, 503, 504)."""

    def __init__(self, status_code: int, url: str):
        self.status_code = status_code
        self.url = url
        super().__init__(f"Transient error (HTTP {status_code}) fetching {url}")


def _is_transient_error(exception: BaseException) -> bool:
    """Check if exception is a transient error that should be retried."""
    if isinstance(exception, TransientHTTPError):
        return True
    if isinstance(exception, (requests.exceptions.Timeout, requests.exceptions.ConnectionError)):
        return True
    return False


@dataclass
class LoaderSettings:
    """Settings for remote document loading."""
    timeout_seconds: int = LoaderConfig.DEFAULT_TIMEOUT_SECONDS
    max_retries: int = LoaderConfig.DEFAULT_MAX_RETRIES
    allowed_domains: List[str] = field(default_factory=list)
    allow_http: bool = False
    check_dns: bool = True
    retry_min_wait_seconds: float = LoaderConfig.RETRY_MIN_WAIT_SECONDS
    retry_max_wait_seconds: float = LoaderConfig.RETRY_MAX_WAIT_SECONDS

    @classmethod
    def from_dict(cls, config_dict: Optional[Dict[str, Any]]) -> 'LoaderSettings':
        """Create settings from a config dict, reading its ``loader`` section."""
        loader_config = (config_dict or {}).get('loader', {}) or {}
        return cls(
            timeout_seconds=loader_config.get('timeout_seconds', LoaderConfig.DEFAULT_TIMEOUT_SECONDS),
            max_retries=max(1, int(loader_config.get('max_retries', LoaderConfig.DEFAULT_MAX_RETRIES))),
            allowed_domains=list(loader_config.get('allowed_domains', [])),
            allow_http=bool(loader_config.get('allow_http', False)),
            check_dns=bool(loader_config.get('check_dns', True)),
        )


class DocumentLoader:
    """
    Load SDF and WoT documents from a file path, URL or inline JSON.

    ``source`` arguments are interpreted as:
    - inline JSON if they start with ``{``
    - a URL if they start with ``http://`` or ``https://``
    - a file path otherwise
    """

    def __init__(self, settings: Optional[LoaderSettings] = None,
                 session: Optional[requests.Session] = None):
        self.settings = settings or LoaderSettings()
        self.session = session or requests.Session()
        self.sdf_parser = SDFParser()
        self.wot_parser = WoTParser()
        self._fetch = retry(
            stop=stop_after_attempt(self.settings.max_retries),
            wait=wait_exponential(
                multiplier=1,
                min=self.settings.retry_min_wait_seconds,
                max=self.settings.retry_max_wait_seconds,
            ),
            retry=retry_if_exception(_is_transient_error),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )(self._fetch_once)

    @staticmethod
    def is_inline(source: str) -> bool:
        return source.lstrip().startswith("{")

    def load_text(self, source: str) -> str:
        """
        Read the JSON text of a document.

        Raises:
            DocumentLoadError: If the file or URL cannot be read or is rejected.
        """
        if self.is_inline(source):
            return source
        if URLValidator.is_url(source):
            return self._load_url(source)
        return self._load_file(source)

    def load_sdf(self, source: str) -> SDFModel:
        """Load and parse an SDF model."""
        return self.sdf_parser.parse(self.load_text(source), file_path=self._label(source))

    def load_thing_model(self, source: str) -> ThingModel:
        """Load and parse a WoT Thing Model."""
        return self.wot_parser.parse_thing_model(self.load_text(source), file_path=self._label(source))

    def load_thing_description(self, source: str) -> ThingDescription:
        """Load and parse a WoT Thing Description."""
        return self.wot_parser.parse_thing_description(
            self.load_text(source), file_path=self._label(source)
        )

    def _label(self, source: str) -> Optional[str]:
        if self.is_inline(source):
            return None
        if URLValidator.is_url(source):
            return URLValidator.sanitize_url_for_logging(source)
        return source

    # =========================================================================
    # Files
    # =========================================================================

    def _load_file(self, source: str) -> str:
        try:
            path = InputValidator.validate_input_document_path(source)
        except FileNotFoundError as e:
            raise DocumentLoadError(str(e), file_path=source) from e
        except (TypeError, ValueError, PermissionError) as e:
            raise DocumentLoadError(f"Invalid input path: {e}", file_path=source) from e

        size_mb = path.stat().st_size / (1024 * 1024)
        if size_mb > LoaderConfig.MAX_DOCUMENT_SIZE_MB:
            raise DocumentLoadError(
                f"File too large: {size_mb:.1f}MB (max {LoaderConfig.MAX_DOCUMENT_SIZE_MB}MB)",
                file_path=str(path),
            )

        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentLoadError(f"Failed to read {path}: {e}", file_path=str(path)) from e

        try:
            InputValidator.validate_document_content(content)
        except ValueError as e:
            raise DocumentLoadError(f"Empty document: {path}", file_path=str(path)) from e

        logger.info(f"Loaded {path}")
        return content

    # =========================================================================
    # URLs
    # =========================================================================

    def _load_url(self, url: str) -> str:
        safe_url = URLValidator.sanitize_url_for_logging(url)
        try:
            URLValidator.validate_document_url(
                url,
                allowed_domains=self.settings.allowed_domains or None,
                allow_http=self.settings.allow_http,
                check_dns=self.settings.check_dns,
            )
        except (TypeError, ValueError) as e:
            raise DocumentLoadError(f"URL rejected: {e}", file_path=safe_url) from e

        try:
            content = self._fetch(url)
        except TransientHTTPError as e:
            raise DocumentLoadError(
                f"Giving up on {safe_url} after {self.settings.max_retries} attempts: {e}",
                file_path=safe_url,
            ) from e
        except requests.exceptions.RequestException as e:
            raise DocumentLoadError(f"Failed to fetch {safe_url}: {e}", file_path=safe_url) from e

        logger.info(f"Fetched {safe_url}")
        return content

    def _fetch_once(self, url: str) -> str:
        response = self.session.get(
            url,
            timeout=self.settings.timeout_seconds,
            allow_redirects=False,
        )
        if response.status_code in LoaderConfig.TRANSIENT_STATUS_CODES:
            raise TransientHTTPError(response.status_code, url)
        if response.status_code != 200:
            raise DocumentLoadError(
                f"HTTP {response.status_code} fetching {URLValidator.sanitize_url_for_logging(url)}",
                file_path=URLValidator.sanitize_url_for_logging(url),
            )

        max_bytes = LoaderConfig.MAX_DOCUMENT_SIZE_MB * 1024 * 1024
        if len(response.content) > max_bytes:
            raise DocumentLoadError(
                f"Document too large (max {LoaderConfig.MAX_DOCUMENT_SIZE_MB}MB)",
                file_path=URLValidator.sanitize_url_for_logging(url),
            )

        response.encoding = response.encoding or "utf-8"
        return response.text
