"""Static tables and runtime configuration for the method scanner."""

from dataclasses import dataclass, field
from typing import List, Optional

from methodscanner.core.models import ProbeRequest
from methodscanner.parsers.lists import parse_auth, parse_cookies, parse_headers

APP_NAME = "MethodScanner"
APP_VERSION = "1.0.0"
APP_AUTHOR = "MethodScanner contributors"

DEFAULT_USER_AGENT = f"{APP_NAME}/{APP_VERSION}"

DEFAULT_METHODS = (
    "GET", "POST", "PUT", "DELETE", "HEAD", "OPTIONS", "PATCH",
    "TRACE", "CONNECT", "PROPFIND", "PROPPATCH", "MKCOL", "COPY",
    "MOVE", "LOCK", "UNLOCK", "PURGE", "LINK", "UNLINK",
)

DANGEROUS_METHODS = frozenset({
    "PUT", "DELETE", "TRACE", "PROPFIND", "PROPPATCH",
    "MKCOL", "COPY", "MOVE", "LOCK", "UNLOCK",
})

# Methods exempt from the verb tampering rule
SAFE_METHODS = frozenset({"GET", "HEAD", "OPTIONS"})

VIEW_MODES = ("all", "enabled", "vulnerable")
OUTPUT_FORMATS = ("txt", "json", "xml")


class ConfigurationError(Exception):
    """Invalid flags or unreadable input files; raised before any probing."""


@dataclass
class ScanConfig:
    """Every runtime setting of a campaign."""
    concurrency: int = 10
    timeout: float = 10
    follow_redirects: bool = False
    insecure: bool = False
    proxy: Optional[str] = None
    user_agent: str = DEFAULT_USER_AGENT
    headers: List[str] = field(default_factory=list)   # raw "Name: Value"
    cookies: List[str] = field(default_factory=list)   # raw "name=value"
    auth: Optional[str] = None                         # raw "user:pass"
    view_mode: str = "all"
    output_format: str = "txt"
    output_file: Optional[str] = None
    ordered: bool = False

    @classmethod
    def from_args(cls, args) -> "ScanConfig":
        cfg = cls(
            concurrency=args.concurrency,
            timeout=args.timeout,
            follow_redirects=args.follow_redirects,
            insecure=args.insecure,
            proxy=args.proxy or None,
            user_agent=args.user_agent,
            headers=list(args.headers or []),
            cookies=list(args.cookies or []),
            auth=args.auth or None,
            view_mode=args.view,
            output_format=args.format,
            output_file=args.output or None,
            ordered=args.ordered,
        )
        cfg.validate()
        return cfg

    def validate(self) -> None:
        if self.view_mode not in VIEW_MODES:
            raise ConfigurationError(
                "Invalid view mode. Must be one of: " + ", ".join(VIEW_MODES))
        if self.output_format not in OUTPUT_FORMATS:
            raise ConfigurationError(
                "Invalid output format. Must be one of: " + ", ".join(OUTPUT_FORMATS))
        if self.concurrency < 1:
            raise ConfigurationError("Concurrency must be at least 1")
        if self.timeout <= 0:
            raise ConfigurationError("Timeout must be a positive number of seconds")

    def template(self, url: str = "", method: str = "GET") -> ProbeRequest:
        """Build the read-only request template shared by a scan's probes."""
        return ProbeRequest(
            url=url,
            method=method,
            headers=tuple(parse_headers(self.headers)),
            cookies=tuple(parse_cookies(self.cookies)),
            basic_auth=parse_auth(self.auth),
            user_agent=self.user_agent,
            timeout=self.timeout,
            insecure=self.insecure,
            follow_redirects=self.follow_redirects,
            proxy=self.proxy,
        )
