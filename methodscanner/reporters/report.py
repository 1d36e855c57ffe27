"""Report renderers (txt, json, xml) and the file sink."""

import json
import xml.etree.ElementTree as ET

from colorama import Fore, Style

from methodscanner.core.models import CampaignReport

_RULE = "-" * 100


def render_json(report: CampaignReport) -> str:
    return json.dumps(report.to_dict(), indent=2)


def _sub(parent: ET.Element, tag: str, value) -> None:
    if isinstance(value, bool):
        value = "true" if value else "false"
    ET.SubElement(parent, tag).text = str(value)


def render_xml(report: CampaignReport) -> str:
    root = ET.Element("http_method_test_results")
    _sub(root, "tool_name", report.tool_name)
    _sub(root, "tool_version", report.tool_version)
    _sub(root, "tool_author", report.tool_author)
    _sub(root, "timestamp", report.timestamp)

    url_results = ET.SubElement(root, "url_results")
    for url_result in report.results:
        node = ET.SubElement(url_results, "url_result")
        _sub(node, "url", url_result.url)
        results = ET.SubElement(node, "results")
        for r in url_result.results:
            m = ET.SubElement(results, "method_result")
            for key, value in r.to_dict().items():
                _sub(m, key, value)

    ET.indent(root, space="  ")
    body = ET.tostring(root, encoding="unicode")
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + body


def _code_color(code: int) -> str:
    if 200 <= code < 300:
        return Fore.RED
    if 300 <= code < 400:
        return Fore.BLUE
    if 400 <= code < 500:
        return Fore.GREEN
    if code >= 500:
        return Fore.LIGHTBLUE_EX
    return ""


def render_text(report: CampaignReport, color: bool = True) -> str:
    """Tabular report; 2xx codes are red because an accepted method is the finding."""
    def c(code: str, text: str) -> str:
        return f"{code}{text}{Style.RESET_ALL}" if color and code else text

    out = [
        c(Fore.BLUE + Style.BRIGHT, f"Author: {report.tool_author}\n"),
        c(Fore.BLUE + Style.BRIGHT, f"{report.tool_name} v{report.tool_version} - Results\n"),
        c(Fore.YELLOW + Style.BRIGHT, f"Timestamp: {report.timestamp}\n\n"),
    ]

    for url_result in report.results:
        out.append(c(Fore.YELLOW, f"URL: {url_result.url}\n"))
        out.append(c(Fore.LIGHTCYAN_EX + Style.BRIGHT,
                     f"{'METHOD':<10} {'CODE':<8} {'STATUS':<40} {'RESPONSE_TIME':<12}  VULNERABILITY\n"))
        out.append(_RULE + "\n")

        for r in url_result.results:
            if r.is_vulnerable:
                flag = "VULNERABLE"
            elif r.is_dangerous:
                flag = "DANGEROUS"
            else:
                flag = ""

            out.append(f"{r.method:<10}  ")
            out.append(c(_code_color(r.status_code), f"{r.status_code:<8}  "))
            out.append(f"{r.status:<40}  ")
            out.append(c(Fore.LIGHTYELLOW_EX, f"{r.response_time_ms:<12}  "))
            out.append(c(Fore.RED, flag) + "\n")

            if r.is_vulnerable and r.vulnerability_description:
                out.append(c(Fore.LIGHTRED_EX + Style.BRIGHT,
                             f"  - {r.vulnerability_description}") + "\n")
            out.append(_RULE + "\n")
        out.append("\n")

    return "".join(out)


RENDERERS = {
    "json": render_json,
    "xml": render_xml,
    "txt": render_text,
}


def render(report: CampaignReport, fmt: str, color: bool = True) -> str:
    if fmt == "txt":
        return render_text(report, color=color)
    try:
        return RENDERERS[fmt](report)
    except KeyError:
        raise ValueError(f"Unsupported output format: {fmt}") from None


def write_report(path: str, text: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
