"""Shared data models for the method scanner."""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class ProbeRequest:
    """Everything needed to send one (URL, method) probe."""
    url: str
    method: str
    headers: Tuple[Tuple[str, str], ...] = ()      # ordered, duplicates allowed
    cookies: Tuple[Tuple[str, str], ...] = ()
    basic_auth: Optional[Tuple[str, str]] = None
    user_agent: str = ""
    timeout: float = 10
    insecure: bool = False
    follow_redirects: bool = False
    proxy: Optional[str] = None


@dataclass
class ProbeOutcome:
    """Raw result of a single probe, before classification."""
    method: str
    status_code: int = 0       # 0 on transport failure
    status_text: str = ""
    elapsed_ms: int = 0
    body_length: int = 0
    transport_error: Optional[str] = None
    body: str = field(default="", repr=False)
    user_agent: str = ""       # value actually sent


@dataclass(frozen=True)
class Verdict:
    is_dangerous: bool = False
    is_vulnerable: bool = False
    description: Optional[str] = None


@dataclass
class MethodResult:
    """Final per-method record: outcome plus verdict."""
    method: str
    status_code: int
    status: str
    response_time_ms: int
    content_length: int
    is_dangerous: bool
    is_vulnerable: bool
    vulnerability_description: Optional[str] = None

    @classmethod
    def build(cls, outcome: ProbeOutcome, verdict: Verdict) -> "MethodResult":
        return cls(
            method=outcome.method,
            status_code=outcome.status_code,
            status=outcome.status_text,
            response_time_ms=outcome.elapsed_ms,
            content_length=outcome.body_length,
            is_dangerous=verdict.is_dangerous,
            is_vulnerable=verdict.is_vulnerable,
            vulnerability_description=verdict.description,
        )

    def to_dict(self) -> dict:
        data = {
            "method": self.method,
            "status_code": self.status_code,
            "status": self.status,
            "response_time_ms": self.response_time_ms,
            "content_length": self.content_length,
            "is_dangerous": self.is_dangerous,
            "is_vulnerable": self.is_vulnerable,
        }
        if self.vulnerability_description:
            data["vulnerability_description"] = self.vulnerability_description
        return data

    def __str__(self):
        flag = "VULNERABLE" if self.is_vulnerable else (
            "DANGEROUS" if self.is_dangerous else "")
        return (f"{self.method} -> {self.status} "
                f"({self.response_time_ms} ms) {flag}").rstrip()


@dataclass
class URLResult:
    url: str
    results: List[MethodResult] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"url": self.url, "results": [r.to_dict() for r in self.results]}


@dataclass
class CampaignReport:
    """The artifact handed to the renderers."""
    tool_name: str
    tool_version: str
    tool_author: str
    timestamp: str             # UTC, RFC 3339
    results: List[URLResult] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "tool_name": self.tool_name,
            "tool_version": self.tool_version,
            "tool_author": self.tool_author,
            "timestamp": self.timestamp,
            "results": [u.to_dict() for u in self.results],
        }
