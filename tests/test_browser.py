"""Integration tests for the Browser."""

import pytest
from unittest.mock import patch
from pubsub import pub

from terminal_gopher.browser import Browser, format_bytes
from terminal_gopher.config import Config
from terminal_gopher.core import (
    keys,
    MenuView,
    StubView,
    Redraw,
    Status,
    Error,
    Keypress,
    Prompt,
    Open,
)
from terminal_gopher.interfaces import DownloadCancelled
from terminal_gopher.providers import InternalProvider
from terminal_gopher.transport.tcp_transport import PROGRESS_TOPIC

from conftest import FakeTerminal, MockTransport, SAMPLE_MENU


MENU_URL = "gopher://example.org/1/"


class TestBrowserIntegration:
    """Integration tests for Browser with a mock transport."""

    @pytest.fixture
    def browser(self, tmp_path):
        """Browser with canned responses and a fake terminal."""
        transport = MockTransport({
            ("example.org", "/"): SAMPLE_MENU,
            ("example.org", "/about.txt"): "About this server\r\n",
            ("example.org", "/files/archive.tgz"): "binary-ish",
            ("gopher.floodgap.com", "/v2/vs?cats"): "1Cats\t/cats\texample.org\t70\r\n",
        })
        config = Config(download_directory=str(tmp_path / "downloads"))
        return Browser(transport, FakeTerminal(), config, InternalProvider())

    def test_run_opens_start_page_and_quits(self, browser):
        browser.terminal.keys = [keys.ctrl("q")]
        browser.run()

        assert browser.running is False
        assert browser.view.url() == "gopher://terminal-gopher/1/home"
        assert "terminal gopher" in browser.terminal.written()

    def test_run_opens_given_url(self, browser):
        browser.terminal.keys = [keys.ctrl("q")]
        browser.run(MENU_URL)
        assert browser.view.url() == MENU_URL
        assert browser.transport.requests == [("example.org", "70", "/")]

    def test_run_stops_when_input_closes(self, browser):
        with pytest.raises(EOFError):
            browser.run()

    def test_quit_works_without_a_page(self, browser):
        """A failed first page still leaves the browser keys working."""
        browser.terminal.keys = [keys.ctrl("q")]
        browser.run("gopher://unreachable.example/1/")
        assert browser.view is None
        assert browser.running is False

    def test_open_menu(self, browser):
        browser.open("Example", MENU_URL)
        assert isinstance(browser.view, MenuView)
        assert browser.view.selected().name == "Gopherpedia"
        assert browser.dirty

    def test_open_text(self, browser):
        browser.open("About", "gopher://example.org/0/about.txt")
        assert isinstance(browser.view, StubView)
        assert browser.view.raw() == "About this server\r\n"

    @pytest.mark.parametrize("url", [
        "gopher://example.org/h/page.html",
        "gopher://example.org/x/feed.xml",
        "gopher://example.org/c/events.ics",
    ])
    def test_open_text_like_types(self, browser, url):
        """HTML, XML and calendar responses are shown as text."""
        selector = "/" + url.rsplit("/", 1)[-1]
        browser.transport.responses[("example.org", selector)] = "<p>hi</p>"
        browser.open("Page", url)
        assert isinstance(browser.view, StubView)
        assert browser.view.raw() == "<p>hi</p>"

    def test_open_same_url_is_noop(self, browser):
        browser.open("Example", MENU_URL)
        browser.open("Example", MENU_URL)
        assert len(browser.history) == 1
        assert len(browser.transport.requests) == 1

    def test_wide_config_applies_to_menus(self, browser):
        browser.config.wide = True
        browser.open("Example", MENU_URL)
        assert browser.view.wide is True

    def test_transport_error_shows_status(self, browser):
        browser.open("Example", MENU_URL)
        browser.open("Broken", "gopher://unreachable.example/1/")

        assert browser.view.url() == MENU_URL
        assert "No route to unreachable.example" in browser.status
        assert len(browser.history) == 1

    def test_timeout_shows_status(self, browser):
        browser.transport.error = TimeoutError("timed out")
        browser.open("Example", MENU_URL)
        assert browser.view is None
        assert "timed out" in browser.status

    def test_telnet_url(self, browser):
        browser.open("BBS", "telnet://bbs.example.org:23")
        assert "Telnet not supported" in browser.status
        assert browser.transport.requests == []

    def test_bad_ipv6_url(self, browser):
        browser.open("Bad", "[dead:beef")
        assert "Unclosed" in browser.status

    def test_unsupported_type_rejected(self, browser):
        browser.open("Mirror", "gopher://example.org/+/mirror")
        assert "Unsupported" in browser.status
        assert browser.transport.requests == []

    def test_unsupported_response(self, browser):
        browser.transport.responses[("example.org", "/")] = "hi"
        browser.open("Telnet", "gopher://example.org/8/")
        assert "Unsupported Gopher Response" in browser.status

    def test_missing_internal_page(self, browser):
        browser.open("Nope", "gopher://terminal-gopher/1/nope")
        assert "not found" in browser.status
        assert browser.transport.requests == []

    def test_search_prompt_opens_results(self, browser):
        browser.open("Example", MENU_URL)
        browser.draw()
        browser.terminal.keys = [keys.char(c) for c in "cats"] + [keys.ENTER]
        browser.view.link = 2

        browser.process_action(browser.view.respond(keys.ENTER))

        assert browser.view.url() == "gopher://gopher.floodgap.com/7/v2/vs?cats"
        assert browser.view.selected().name == "Cats"

    def test_cancelled_prompt_does_nothing(self, browser):
        browser.open("Example", MENU_URL)
        browser.terminal.keys = [keys.char("x"), keys.ESC]
        browser.process_action(Prompt("Search> ", lambda q: Open(q, q)))
        assert browser.view.url() == MENU_URL

    def test_prompt_editing(self, browser):
        browser.terminal.keys = [
            keys.char("a"), keys.char("b"), keys.BACKSPACE, keys.char("c"), keys.ENTER,
        ]
        assert browser.prompt("Go: ") == "ac"

    def test_error_action(self, browser):
        browser.process_action(Error("Something went wrong"))
        assert browser.status == "\x1b[91mSomething went wrong"

    def test_status_action_written_directly(self, browser):
        browser.process_action(Status("\x1b[24;1Hinput"))
        assert browser.terminal.output[-1] == "\x1b[24;1Hinput"

    def test_redraw_action(self, browser):
        browser.dirty = False
        browser.process_action(Redraw())
        assert browser.dirty

    def test_draw_only_when_dirty(self, browser):
        browser.open("Example", MENU_URL)
        browser.draw()
        assert "\x1b[1;1H" in browser.terminal.written()
        assert not browser.dirty

        browser.terminal.output.clear()
        browser.draw()
        assert browser.terminal.output == []

    def test_redraw_keeps_typed_input(self, browser):
        """A full redraw doesn't blank the view's input line."""
        browser.open("Example", MENU_URL)
        browser.draw()
        browser.terminal.keys = [keys.char("s")]
        browser.update()
        browser.terminal.output.clear()
        browser.draw()
        assert browser.terminal.written().endswith("\x1b[24;1H\x1b[2Ks")

    def test_status_cleared_by_next_action(self, browser):
        browser.open("Example", MENU_URL)
        browser.set_error("old news")
        browser.terminal.keys = [keys.DOWN]
        browser.update()
        assert browser.status == ""


class TestKeyBindings:
    """Keys handled by the browser rather than the view."""

    @pytest.fixture
    def browser(self):
        transport = MockTransport({
            ("example.org", "/"): SAMPLE_MENU,
            ("example.org", "/about.txt"): "About",
        })
        return Browser(transport, FakeTerminal(), Config(), InternalProvider())

    def test_back_and_forward(self, browser):
        browser.open("Example", MENU_URL)
        browser.open("About", "gopher://example.org/0/about.txt")

        browser.process_action(Keypress(keys.LEFT))
        assert browser.view.url() == MENU_URL
        browser.process_action(Keypress(keys.RIGHT))
        assert browser.view.url() == "gopher://example.org/0/about.txt"
        browser.process_action(Keypress(keys.BACKSPACE))
        assert browser.view.url() == MENU_URL

    def test_back_at_start_is_noop(self, browser):
        browser.open("Example", MENU_URL)
        browser.dirty = False
        browser.process_action(Keypress(keys.LEFT))
        assert browser.view.url() == MENU_URL
        assert not browser.dirty

    def test_ctrl_q_quits(self, browser):
        browser.running = True
        browser.process_action(Keypress(keys.ctrl("q")))
        assert browser.running is False

    def test_ctrl_c_hint(self, browser):
        browser.process_action(Keypress(keys.ctrl("c")))
        assert "(Use ctrl-q to quit)" in browser.status

    def test_escape_ignored(self, browser):
        browser.process_action(Keypress(keys.ESC))
        assert browser.status == ""

    def test_unknown_key(self, browser):
        browser.process_action(Keypress(keys.ctrl("y")))
        assert "Unknown keypress: ctrl-y" in browser.status

    def test_ctrl_z_suspends_and_redraws(self, browser):
        browser.open("Example", MENU_URL)
        browser.dirty = False
        browser.process_action(Keypress(keys.ctrl("z")))
        assert browser.terminal.suspended == 1
        assert browser.dirty
        assert browser.status == ""

    def test_go_to_url(self, browser):
        browser.terminal.keys = [keys.char(c) for c in "example.org"] + [keys.ENTER]
        browser.process_action(Keypress(keys.ctrl("g")))
        assert browser.transport.requests == [("example.org", "70", "/")]
        assert isinstance(browser.view, MenuView)

    def test_go_to_url_cancelled(self, browser):
        browser.terminal.keys = [keys.char("x"), keys.ctrl("c")]
        browser.process_action(Keypress(keys.ctrl("g")))
        assert browser.view is None
        assert browser.transport.requests == []

    def test_edit_url_unchanged(self, browser):
        browser.open("Example", MENU_URL)
        browser.terminal.keys = [keys.ENTER]
        browser.process_action(Keypress(keys.ctrl("u")))
        assert len(browser.transport.requests) == 1
        assert "Current URL: gopher://example.org/1/" in browser.terminal.written()

    def test_edit_url(self, browser):
        browser.open("Example", MENU_URL)
        browser.terminal.keys = [keys.BACKSPACE, keys.BACKSPACE]
        browser.terminal.keys += [keys.char(c) for c in "0/about.txt"] + [keys.ENTER]
        browser.process_action(Keypress(keys.ctrl("u")))
        assert browser.view.url() == "gopher://example.org/0/about.txt"

    def test_view_source(self, browser):
        browser.open("Example", MENU_URL)
        browser.process_action(Keypress(keys.ctrl("r")))
        assert isinstance(browser.view, StubView)
        assert browser.view.raw() == SAMPLE_MENU
        assert len(browser.history) == 2

    def test_help(self, browser):
        browser.process_action(Keypress(keys.ctrl("h")))
        assert browser.view.url() == "gopher://terminal-gopher/1/help"


class TestExternalAndDownloads:
    """Confirmations, external URLs and downloads."""

    @pytest.fixture
    def browser(self, tmp_path):
        transport = MockTransport({
            ("example.org", "/files/archive.tgz"): "0123456789",
        })
        config = Config(download_directory=str(tmp_path / "downloads"))
        return Browser(transport, FakeTerminal(), config, InternalProvider())

    def test_external_url_confirmed(self, browser):
        browser.terminal.keys = [keys.char("y")]
        with patch("terminal_gopher.browser.webbrowser.open") as mock_open:
            browser.open("Source", "https://example.org/src")
        mock_open.assert_called_once_with("https://example.org/src")
        assert "Open external URL? https://example.org/src [Y/n]" in browser.terminal.written()

    def test_external_url_declined(self, browser):
        browser.terminal.keys = [keys.char("n")]
        with patch("terminal_gopher.browser.webbrowser.open") as mock_open:
            browser.open("Source", "https://example.org/src")
        mock_open.assert_not_called()

    def test_download(self, browser, tmp_path):
        browser.terminal.keys = [keys.ENTER]
        browser.open("Archive", "gopher://example.org/9/files/archive.tgz")

        dest = tmp_path / "downloads" / "archive.tgz"
        assert dest.read_text() == "0123456789"
        assert "Download complete! 10 bytes saved to" in browser.status
        assert browser.view is None

    def test_download_does_not_overwrite(self, browser, tmp_path):
        (tmp_path / "downloads").mkdir()
        (tmp_path / "downloads" / "archive.tgz").write_text("older")
        browser.terminal.keys = [keys.ENTER]
        browser.open("Archive", "gopher://example.org/9/files/archive.tgz")

        assert (tmp_path / "downloads" / "archive.tgz").read_text() == "older"
        assert (tmp_path / "downloads" / "archive.tgz.1").read_text() == "0123456789"

    def test_download_declined(self, browser):
        browser.terminal.keys = [keys.char("n")]
        browser.open("Archive", "gopher://example.org/9/files/archive.tgz")
        assert browser.transport.downloads == []

    def test_download_failure(self, browser):
        browser.transport.error = ConnectionResetError("reset by peer")
        browser.terminal.keys = [keys.ENTER]
        browser.open("Archive", "gopher://example.org/9/files/archive.tgz")
        assert "Download failed: reset by peer" in browser.status

    def test_download_cancelled_by_keypress(self, browser):
        """A key waiting during the download cancels it."""

        class PollingTransport(MockTransport):
            def download(self, host, port, selector, dest, should_cancel):
                while not should_cancel():
                    pass
                raise DownloadCancelled("cancelled")

        browser.transport = PollingTransport()
        browser.terminal.keys = [keys.ENTER]
        browser.terminal.poll_keys = [keys.char("x")]
        browser.open("Archive", "gopher://example.org/9/files/archive.tgz")
        assert browser.status == "Download cancelled"

    def test_download_progress_shown(self, browser):
        class ProgressTransport(MockTransport):
            def download(self, host, port, selector, dest, should_cancel):
                pub.sendMessage(PROGRESS_TOPIC, url="example.org:70/big", received=2048)
                return 2048

        browser.transport = ProgressTransport()
        browser.terminal.keys = [keys.ENTER]
        browser.open("Big", "gopher://example.org/9/big")
        assert "2.0 KB" in browser.terminal.written()
        assert "Download complete! 2.0 KB" in browser.status


class TestFormatBytes:
    """Tests for format_bytes."""

    def test_bytes(self):
        assert format_bytes(0) == "0 bytes"
        assert format_bytes(1023) == "1023 bytes"

    def test_larger_units(self):
        assert format_bytes(1536) == "1.5 KB"
        assert format_bytes(5 * 1024 * 1024) == "5.0 MB"
        assert format_bytes(3 * 1024 ** 4) == "3072.0 GB"
