from datetime import datetime, timezone
from typing import Optional, Sequence

import httpx

from methodscanner.checkers.verbs import VerbChecker
from methodscanner.core.config import APP_AUTHOR, APP_NAME, APP_VERSION, ScanConfig
from methodscanner.core.models import CampaignReport
from methodscanner.core.prober import MethodProber
from methodscanner.core.scanner import URLScanner


def build_client(config: ScanConfig, transport: Optional[httpx.BaseTransport] = None,
                 logger=None) -> httpx.Client:
    """Shared client for the whole campaign; pool sized for the worker count."""
    limits = httpx.Limits(max_connections=max(100, config.concurrency),
                          keepalive_expiry=90)
    kwargs = dict(verify=not config.insecure,
                  follow_redirects=config.follow_redirects,
                  timeout=config.timeout, limits=limits, transport=transport)
    if config.proxy:
        try:
            # socks:// proxies raise ImportError when the socksio extra is missing
            return httpx.Client(proxy=config.proxy, **kwargs)
        except (httpx.InvalidURL, ValueError, ImportError) as e:
            if logger:
                logger.warn(f"Invalid proxy URL {config.proxy!r}: {e}")
    return httpx.Client(**kwargs)


class Engine:
    """Campaign runner: scans URLs one after another and builds the report."""

    def __init__(self, config: ScanConfig, logger=None,
                 transport: Optional[httpx.BaseTransport] = None,
                 checker: Optional[VerbChecker] = None):
        self.name = APP_NAME
        self.version = APP_VERSION
        self.author = APP_AUTHOR
        self.config = config
        self.logger = logger
        self.client = build_client(config, transport=transport, logger=logger)
        self.checker = checker or VerbChecker()
        self.prober = MethodProber(self.client, logger=logger)
        self.scanner = URLScanner(self.prober, self.checker, logger=logger)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        self.client.close()

    def run(self, urls: Sequence[str], methods: Sequence[str]) -> CampaignReport:
        report = CampaignReport(
            tool_name=self.name,
            tool_version=self.version,
            tool_author=self.author,
            timestamp=datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
        )
        template = self.config.template()

        for url in urls:
            if self.logger:
                self.logger.debug(f"Testing URL: {url} ({len(methods)} methods)")
            url_result = self.scanner.scan(
                url, methods, template,
                concurrency=self.config.concurrency,
                view_mode=self.config.view_mode,
                ordered=self.config.ordered,
            )
            if self.logger:
                vulns = sum(1 for r in url_result.results if r.is_vulnerable)
                if vulns:
                    self.logger.ok(f"{url}: {vulns} potentially vulnerable method(s)")
                else:
                    self.logger.debug(f"{url}: no vulnerable methods")
            report.results.append(url_result)

        return report
