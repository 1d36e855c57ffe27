import time

import httpx

from methodscanner.core.models import ProbeOutcome, ProbeRequest


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


def _error_text(exc: Exception) -> str:
    return str(exc) or type(exc).__name__


def phase_timeouts(total: float) -> httpx.Timeout:
    """Split one probe timeout so pool + connect + write + header read never exceed it."""
    return httpx.Timeout(pool=total / 8, connect=total / 4,
                         write=total / 8, read=total / 2)


class MethodProber:
    """Send one bodiless request per (URL, method) over a shared client."""

    def __init__(self, client: httpx.Client, logger=None):
        self.client = client
        self.logger = logger

    def build_request(self, req: ProbeRequest) -> httpx.Request:
        headers = httpx.Headers(list(req.headers))

        if req.cookies:
            jar = "; ".join(f"{name}={value}" for name, value in req.cookies)
            existing = headers.get("Cookie")
            headers["Cookie"] = f"{existing}; {jar}" if existing else jar

        # Configured UA always wins over a custom User-Agent header
        headers["User-Agent"] = req.user_agent

        # Built directly rather than through client.build_request so the
        # client's cookie jar never leaks Set-Cookie values between probes.
        request = httpx.Request(
            req.method, req.url, headers=headers,
            extensions={"timeout": phase_timeouts(req.timeout).as_dict()})
        # httpx upper-cases the method; put it on the wire exactly as listed
        request.method = req.method
        return request

    def _failure(self, req: ProbeRequest, exc: Exception, elapsed: int) -> ProbeOutcome:
        msg = _error_text(exc)
        if self.logger:
            self.logger.debug(f"{req.method} {req.url} failed: {msg}")
        return ProbeOutcome(
            method=req.method, status_code=0, status_text=f"Error: {msg}",
            elapsed_ms=elapsed, body_length=0, transport_error=msg,
            user_agent=req.user_agent)

    def _read_body(self, req: ProbeRequest, resp: httpx.Response, deadline: float) -> bytes:
        # headers already arrived: on timeout or read error keep the status
        # and whatever part of the body came in
        chunks = []
        try:
            for chunk in resp.iter_bytes():
                chunks.append(chunk)
                if time.perf_counter() >= deadline:
                    if self.logger:
                        self.logger.warn(
                            f"{req.method} {req.url}: body cut off after {req.timeout}s timeout")
                    break
        except httpx.HTTPError as e:
            if self.logger:
                self.logger.warn(
                    f"{req.method} {req.url}: body read failed ({_error_text(e)})")
        return b"".join(chunks)

    def probe(self, req: ProbeRequest) -> ProbeOutcome:
        try:
            request = self.build_request(req)
        except (httpx.InvalidURL, ValueError) as e:
            return self._failure(req, e, 0)

        auth = httpx.BasicAuth(*req.basic_auth) if req.basic_auth else None

        start = time.perf_counter()
        deadline = start + req.timeout
        try:
            resp = self.client.send(request, auth=auth, stream=True,
                                    follow_redirects=req.follow_redirects)
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            return self._failure(req, e, _elapsed_ms(start))

        try:
            elapsed = _elapsed_ms(start)
            content = self._read_body(req, resp, deadline)
            return ProbeOutcome(
                method=req.method,
                status_code=resp.status_code,
                status_text=f"{resp.status_code} {resp.reason_phrase}".rstrip(),
                elapsed_ms=elapsed,
                body_length=len(content),
                body=content.decode("utf-8", errors="replace"),
                user_agent=req.user_agent,
            )
        finally:
            resp.close()
