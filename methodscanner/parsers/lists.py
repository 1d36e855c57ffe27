from typing import List, Optional, Tuple


def read_lines(filename: str) -> List[str]:
    """
    Read a newline-delimited list (URLs or methods).

    Surrounding whitespace is trimmed; blank lines and lines starting
    with '#' are skipped.
    """
    with open(filename, 'r', encoding='utf-8', errors='ignore') as f:
        lines = [l.strip() for l in f]
    return [l for l in lines if l and not l.startswith('#')]


def normalize_url(url: str) -> str:
    if url.startswith("http://") or url.startswith("https://"):
        return url
    return f"https://{url}"


def _split_pair(raw: str, sep: str, strip: bool) -> Optional[Tuple[str, str]]:
    if sep not in raw:
        return None
    k, v = raw.split(sep, 1)
    if strip:
        k, v = k.strip(), v.strip()
    return k, v


def parse_headers(raw_headers) -> List[Tuple[str, str]]:
    # "Name: Value"; entries without ':' are dropped
    pairs = []
    for raw in raw_headers or []:
        pair = _split_pair(raw, ':', strip=True)
        if pair is not None:
            pairs.append(pair)
    return pairs


def parse_cookies(raw_cookies) -> List[Tuple[str, str]]:
    # "name=value"; entries without '=' are dropped, no trimming
    pairs = []
    for raw in raw_cookies or []:
        pair = _split_pair(raw, '=', strip=False)
        if pair is not None:
            pairs.append(pair)
    return pairs


def parse_auth(raw: Optional[str]) -> Optional[Tuple[str, str]]:
    if not raw:
        return None
    return _split_pair(raw, ':', strip=False)
