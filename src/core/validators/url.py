"""
URL validation and SSRF protection for remote SDF and WoT documents.

Security features:
- Protocol validation (only https allowed by default)
- Private, loopback and reserved address blocking
- Domain allowlist support
- Port restriction

Usage:
    from core.validators.url import URLValidator

    validated_url = URLValidator.validate_url(url)

    validated_url = URLValidator.validate_document_url(
        url,
        allowed_domains=['example.com'],
    )
"""

import ipaddress
import logging
import socket
from typing import Any, List, Optional
from urllib.parse import urlparse, urlunparse

logger = logging.getLogger(__name__)


class URLValidator:
    """
    SSRF (Server-Side Request Forgery) protection for document URLs.

    All methods raise ValueError with a descriptive message when a URL is
    rejected.
    """

    DEFAULT_ALLOWED_PROTOCOLS = ['https']

    DEFAULT_ALLOWED_PORTS = [443, 8443]

    HTTP_PORTS = [80, 8080]

    LOCALHOST_NAMES = ['localhost', 'localhost.localdomain']

    @staticmethod
    def _is_private_address(address: str) -> bool:
        try:
            ip = ipaddress.ip_address(address.split('%', 1)[0])
        except ValueError:
            return False
        return (
            ip.is_private
            or ip.is_loopback
            or ip.is_link_local
            or ip.is_multicast
            or ip.is_reserved
            or ip.is_unspecified
        )

    @classmethod
    def _is_private_ip(cls, hostname: str, resolve: bool = True) -> bool:
        """Check if hostname is, or resolves to, a non-public address."""
        try:
            ipaddress.ip_address(hostname)
            return cls._is_private_address(hostname)
        except ValueError:
            pass

        if not resolve:
            return False

        try:
            info = socket.getaddrinfo(hostname, None)
        except socket.gaierror:
            logger.warning(f"Could not resolve hostname: {hostname}")
            return False

        return any(cls._is_private_address(sockaddr[0]) for _, _, _, _, sockaddr in info)

    @classmethod
    def validate_url(
        cls,
        url: Any,
        allowed_protocols: Optional[List[str]] = None,
        allowed_domains: Optional[List[str]] = None,
        allowed_ports: Optional[List[int]] = None,
        allow_private_ips: bool = False,
        check_dns: bool = True,
    ) -> str:
        """
        Validate a URL with SSRF protection.

        Args:
            url: URL to validate.
            allowed_protocols: Allowed schemes (default: ['https']).
            allowed_domains: Optional allowlist; subdomains of an entry match.
            allowed_ports: Allowed ports (default: [443, 8443]).
            allow_private_ips: If True, allow private/internal addresses.
            check_dns: If True, also resolve host names and check their addresses.
                IP literals are always checked.

        Returns:
            Validated URL string.

        Raises:
            TypeError: If URL is not a string.
            ValueError: If URL is malformed or fails a security check.
        """
        if not isinstance(url, str):
            raise TypeError(f"URL must be string, got {type(url).__name__}")

        url = url.strip()
        if not url:
            raise ValueError("URL cannot be empty")

        parsed = urlparse(url)
        protocols = [p.lower() for p in (allowed_protocols or cls.DEFAULT_ALLOWED_PROTOCOLS)]

        if not parsed.scheme:
            raise ValueError("URL must include protocol scheme (e.g., https://)")

        scheme = parsed.scheme.lower()
        if scheme not in protocols:
            raise ValueError(
                f"URL protocol '{parsed.scheme}' not allowed. "
                f"Allowed protocols: {', '.join(protocols)}"
            )

        if not parsed.hostname:
            raise ValueError("URL must include a hostname")

        hostname = parsed.hostname.lower()

        if hostname in cls.LOCALHOST_NAMES and not allow_private_ips:
            raise ValueError(
                f"SSRF Protection: Access to localhost ({hostname}) is not allowed."
            )

        if allowed_domains:
            domains = [d.lower() for d in allowed_domains]
            if not any(hostname == d or hostname.endswith(f".{d}") for d in domains):
                raise ValueError(
                    f"Domain '{hostname}' not in allowed list. "
                    f"Allowed domains: {', '.join(allowed_domains)}"
                )

        try:
            port = parsed.port
        except ValueError as e:
            raise ValueError(f"Invalid port in URL: {e}") from e
        if port is None:
            port = 443 if scheme == 'https' else 80

        ports = allowed_ports if allowed_ports is not None else cls.DEFAULT_ALLOWED_PORTS
        if port not in ports:
            raise ValueError(
                f"Port {port} not allowed. Allowed ports: {', '.join(map(str, ports))}"
            )

        if not allow_private_ips and cls._is_private_ip(hostname, resolve=check_dns):
            raise ValueError(
                f"SSRF Protection: URL points to private/internal IP address. "
                f"Hostname: {hostname}"
            )

        return url

    @classmethod
    def validate_document_url(
        cls,
        url: Any,
        allowed_domains: Optional[List[str]] = None,
        allow_http: bool = False,
        check_dns: bool = True,
    ) -> str:
        """
        Validate the URL of a remote SDF or WoT document.

        Args:
            url: URL to validate.
            allowed_domains: Optional allowlist of trusted domains.
            allow_http: Also accept plain http on ports 80 and 8080.
            check_dns: Resolve the hostname and reject private addresses.

        Returns:
            Validated URL string.
        """
        protocols = ['https', 'http'] if allow_http else ['https']
        ports = cls.DEFAULT_ALLOWED_PORTS + (cls.HTTP_PORTS if allow_http else [])
        return cls.validate_url(
            url,
            allowed_protocols=protocols,
            allowed_domains=allowed_domains,
            allowed_ports=ports,
            allow_private_ips=False,
            check_dns=check_dns,
        )

    @staticmethod
    def is_url(value: Any) -> bool:
        """Check if a value looks like an http(s) URL."""
        if not isinstance(value, str):
            return False
        return value.strip().lower().startswith(('http://', 'https://'))

    @staticmethod
    def sanitize_url_for_logging(url: str) -> str:
        """Strip credentials, query string and fragment from a URL."""
        parsed = urlparse(url)
        netloc = parsed.hostname or ''
        if parsed.port:
            netloc = f"{netloc}:{parsed.port}"
        return urlunparse(parsed._replace(netloc=netloc, query='', fragment=''))
