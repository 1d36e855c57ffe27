import sys
from datetime import datetime

from colorama import init as colorama_init, Fore, Style
colorama_init(autoreset=True)

BANNER = r"""
  __  __      _   _            _ ___
 |  \/  |___ | |_| |_  ___  __| / __| __ __ _ _ _  _ _  ___ _ _
 | |\/| / -_)|  _| ' \/ _ \/ _` \__ \/ _/ _` | ' \| ' \/ -_) '_|
 |_|  |_\___| \__|_||_\___/\__,_|___/\__\__,_|_||_|_||_\___|_|
"""


class Log:
    """
    Timestamped, coloured log lines on stderr (stdout is kept for the report).

    verbose: 0 = warnings/failures only, 1 = normal, 2 = per-probe and debug.
    """

    def __init__(self, verbose: int = 1, color: bool = True, stream=None):
        self.verbose = verbose
        self.color = color
        self.stream = stream or sys.stderr

    def _c(self, code: str) -> str:
        return code if self.color else ""

    def _time(self):
        return datetime.now().strftime("[%H:%M:%S]")

    def _fmt(self, level: str, color: str):
        return f"{self._time()} {self._c(color)}[{level}]{self._c(Style.RESET_ALL)}"

    def _emit(self, line: str):
        print(line, file=self.stream)

    def info(self, msg: str):
        if self.verbose >= 1:
            self._emit(f"{self._fmt('INFO', Fore.CYAN)} {msg}")

    def warn(self, msg: str):
        if self.verbose >= 0:
            self._emit(f"{self._fmt('WARNING', Fore.YELLOW)} {msg}")

    def ok(self, msg: str):
        if self.verbose >= 1:
            self._emit(f"{self._fmt('SUCCESS', Fore.GREEN)} {msg}")

    def fail(self, msg: str):
        self._emit(f"{self._fmt('FAIL', Fore.RED)} {msg}")

    def debug(self, msg: str):
        if self.verbose >= 2:
            self._emit(f"{self._fmt('DEBUG', Fore.MAGENTA)} {msg}")

    def probe(self, method: str, url: str, code: int, status: str):
        if self.verbose < 2:
            return
        if 200 <= code < 300:
            col = Fore.GREEN
        elif code >= 400:
            col = Fore.RED
        elif code >= 300:
            col = Fore.BLUE
        else:
            col = Fore.WHITE
        reset = self._c(Style.RESET_ALL)
        self._emit(f"{self._c(Fore.YELLOW)}{method}{reset} {url} - "
                   f"{self._c(col)}{status}{reset}")

    def banner(self):
        self._emit(f"{self._c(Fore.CYAN + Style.BRIGHT)}{BANNER}{self._c(Style.RESET_ALL)}")
