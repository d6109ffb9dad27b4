"""Pytest configuration and fixtures."""

import pytest

from terminal_gopher.core import keys


SAMPLE_MENU = (
    "i~ welcome ~\t\tnull.host\t1\r\n"
    "i\t\tnull.host\t1\r\n"
    "1Gopherpedia\t/\tgopherpedia.com\t70\r\n"
    "0About this server\t/about.txt\texample.org\t70\r\n"
    "7Search Veronica\t/v2/vs\tgopher.floodgap.com\t70\r\n"
    "iSome words in between\t\tnull.host\t1\r\n"
    "hSource code\tURL:https://example.org/src\texample.org\t70\r\n"
    "3Something went wrong\t\terror.host\t1\r\n"
    "8Old BBS\t\tbbs.example.org\t23\r\n"
    "9Archive\t/files/archive.tgz\texample.org\t7070\r\n"
    ".\r\n"
)


def numbered_menu(count: int, info_every: int = 0) -> str:
    """Build a menu with `count` links, optionally with an info line
    after every `info_every` links."""
    out = []
    for i in range(1, count + 1):
        out.append(f"1Link number {i}\t/{i}\texample.org\t70\r\n")
        if info_every and i % info_every == 0:
            out.append(f"ispacer {i}\t\tnull.host\t1\r\n")
    return "".join(out)


class FakeTerminal:
    """Terminal stand-in that replays keys and records output."""

    def __init__(self, key_list=None, cols=80, rows=24, poll_keys=None):
        self.keys = list(key_list or [])
        self.poll_keys = list(poll_keys or [])
        self.cols = cols
        self.rows = rows
        self.output = []
        self.suspended = 0

    def size(self):
        return self.cols, self.rows

    def write(self, text):
        self.output.append(text)

    def read_key(self):
        if not self.keys:
            raise EOFError("no more keys")
        return self.keys.pop(0)

    def poll_key(self):
        if self.poll_keys:
            return self.poll_keys.pop(0)
        return None

    def suspend(self):
        self.suspended += 1

    def written(self) -> str:
        return "".join(self.output)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        pass


class MockTransport:
    """Transport stand-in serving canned responses by (host, selector)."""

    def __init__(self, responses=None, error=None):
        self.responses = dict(responses or {})
        self.error = error
        self.requests = []
        self.downloads = []

    def fetch(self, host, port, selector):
        self.requests.append((host, port, selector))
        if self.error is not None:
            raise self.error
        try:
            return self.responses[(host, selector)]
        except KeyError:
            raise ConnectionRefusedError(f"No route to {host}{selector}")

    def download(self, host, port, selector, dest, should_cancel):
        self.downloads.append((host, port, selector, dest))
        if self.error is not None:
            raise self.error
        data = self.responses.get((host, selector), "").encode()
        dest.write_bytes(data)
        return len(data)


@pytest.fixture
def sample_menu_raw():
    """A menu with one of most kinds of line."""
    return SAMPLE_MENU


@pytest.fixture
def fake_terminal():
    return FakeTerminal()


@pytest.fixture
def mock_transport(sample_menu_raw):
    return MockTransport({("example.org", "/"): sample_menu_raw})


@pytest.fixture
def type_keys():
    """Turn a string into a list of char keys."""
    def _type(text):
        return [keys.char(c) for c in text]
    return _type
