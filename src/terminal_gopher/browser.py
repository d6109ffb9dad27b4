"""Browser - main loop of the terminal Gopher client."""

import logging
import webbrowser
from pathlib import Path

from pubsub import pub

from .ansi import CLEAR_LINE, HIDE_CURSOR, RESET, SHOW_CURSOR, goto
from .config import Config
from .core import (
    keys,
    Key,
    Action,
    NoAction,
    Redraw,
    Status,
    Open,
    Error,
    Keypress,
    Prompt,
    ItemType,
    History,
    MenuView,
    StubView,
    parse_url,
)
from .interfaces import ContentProvider, DownloadCancelled, GopherTransport, View
from .providers import INTERNAL_HOST, InternalProvider
from .terminal import Terminal
from .transport.tcp_transport import PROGRESS_TOPIC

logger = logging.getLogger(__name__)

RED = "\x1b[91m"
GREY = "\x1b[90m"

HELP_URL = f"gopher://{INTERNAL_HOST}/1/help"


def format_bytes(count: int) -> str:
    """Human readable byte count, e.g. "1.5 KB"."""
    size = float(count)
    for unit in ("bytes", "KB", "MB", "GB"):
        if size < 1024 or unit == "GB":
            break
        size /= 1024
    if unit == "bytes":
        return f"{count} bytes"
    return f"{size:.1f} {unit}"


class Browser:
    """Interactive Gopher browser.

    Owns the terminal, the history of opened views and the status line.
    Views decide what a key means; the browser carries out the Action
    they return. Network errors only cancel the navigation that caused
    them and are reported on the status line.
    """

    def __init__(
        self,
        transport: GopherTransport,
        terminal: Terminal,
        config: Config | None = None,
        provider: ContentProvider | None = None,
    ):
        """
        Initialize the browser.

        Args:
            transport: Transport used to fetch and download resources.
            terminal: Terminal to draw on and read keys from.
            config: Client configuration (uses defaults if None).
            provider: Built-in pages (uses InternalProvider if None).
        """
        self.transport = transport
        self.terminal = terminal
        self.config = config or Config()
        self.provider = provider or InternalProvider()
        self.history = History()
        self.status = ""
        self.dirty = True
        self.running = False

    @property
    def view(self) -> View | None:
        return self.history.current

    def run(self, url: str | None = None) -> None:
        """Open `url` (or the start page) and handle keys until quit."""
        self.running = True
        self.open("Home", url or self.config.start_url)
        while self.running:
            self.draw()
            self.update()

    def stop(self) -> None:
        self.running = False

    # Drawing

    def rows(self) -> int:
        return self.terminal.size()[1]

    def draw(self) -> None:
        """Draw the focused view if it changed, then the status line."""
        view = self.view
        if self.dirty and view is not None:
            cols, rows = self.terminal.size()
            view.set_viewport(cols, rows)
            # the view's own last row shows typed input unless there's a message
            status = self.render_status() if self.status else ""
            self.terminal.write(goto(1, 1) + HIDE_CURSOR + view.render() + status)
            self.dirty = False
        elif self.status or view is None:
            self.terminal.write(self.render_status())

    def render_status(self) -> str:
        return f"{HIDE_CURSOR}{goto(1, max(1, self.rows()))}{CLEAR_LINE}{self.status}{RESET}"

    def set_status(self, text: str) -> None:
        self.status = text.replace("\n", "\\n").replace("\r", "\\r")

    def set_error(self, message: str) -> None:
        self.set_status(f"{RED}{message}")

    # Input

    def update(self) -> None:
        """Read one key, let the focused view respond, and act on it."""
        key = self.terminal.read_key()
        view = self.view
        # with nothing loaded, browser keys like ctrl-g and ctrl-q still work
        action = view.respond(key) if view is not None else Keypress(key)
        if not isinstance(action, NoAction):
            self.status = ""
        self.process_action(action)

    def process_action(self, action: Action) -> None:
        """Carry out an Action returned by a view."""
        if isinstance(action, NoAction):
            return
        if isinstance(action, Redraw):
            self.dirty = True
        elif isinstance(action, Status):
            self.terminal.write(action.text)
        elif isinstance(action, Error):
            self.set_error(action.message)
        elif isinstance(action, Open):
            self.open(action.label, action.url)
        elif isinstance(action, Prompt):
            query = self.prompt(action.label)
            if query is not None:
                self.process_action(action.on_submit(query))
        elif isinstance(action, Keypress):
            self.process_keypress(action.key)

    def process_keypress(self, key: Key) -> None:
        """Handle keys the focused view passed through."""
        if key in (keys.LEFT, keys.BACKSPACE):
            if self.history.back() is not None:
                self.dirty = True
        elif key == keys.RIGHT:
            if self.history.forward() is not None:
                self.dirty = True
        elif key == keys.ESC:
            pass
        elif key.is_ctrl("c"):
            self.set_status(f"{GREY}(Use ctrl-q to quit)")
        elif key.is_ctrl("q"):
            logger.info("Quit requested")
            self.running = False
        elif key.is_ctrl("g"):
            url = self.prompt("Go to URL: ")
            if url:
                self.open(url, url)
        elif key.is_ctrl("u"):
            if self.view is not None:
                current = self.view.url()
                url = self.prompt("Current URL: ", current)
                if url and url != current:
                    self.open(url, url)
        elif key.is_ctrl("r"):
            self.view_source()
        elif key.is_ctrl("h"):
            self.open("Help", HELP_URL)
        elif key.is_ctrl("z"):
            self.terminal.suspend()
            self.dirty = True
        else:
            self.set_error(f"Unknown keypress: {key}")

    def view_source(self) -> None:
        """Show the raw response behind the focused view."""
        view = self.view
        if view is None:
            return
        self.add_view(StubView(view.url(), view.raw()))

    # Navigation

    def add_view(self, view: View) -> None:
        self.history.push(view)
        self.dirty = True

    def open(self, title: str, url: str) -> None:
        """
        Open a URL: Gopher, internal, external or a download.

        Network and parse failures are logged and shown on the status
        line; the current view stays focused.
        """
        if self.view is not None and self.view.url() == url:
            return

        if url.startswith("telnet://"):
            self.set_error("Telnet not supported")
            return

        if "://" in url and not url.startswith("gopher://"):
            self.dirty = True
            if self.confirm(f"Open external URL? {url}"):
                logger.info(f"Opening external URL {url}")
                webbrowser.open(url)
            return

        target = parse_url(url)
        if target.typ == ItemType.ERROR:
            self.set_error(target.host)
            return

        if target.typ.is_download():
            self.dirty = True
            if self.confirm(f"Download {url}?"):
                self.download(url)
            return

        if not target.typ.is_supported():
            self.set_error(f"Unsupported Gopher type: {target.typ.name}")
            return

        logger.info(f"Opening {title!r} at {url}")
        try:
            view = self.fetch(url)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to open {url}: {e}")
            self.set_error(str(e))
            return
        self.add_view(view)

    def fetch(self, url: str) -> View:
        """
        Fetch a URL and wrap the response in a View.

        Raises:
            OSError: If the resource can't be fetched.
            ValueError: If the type can't be shown or the page doesn't exist.
        """
        target = parse_url(url)
        if target.host == INTERNAL_HOST:
            raw = self.provider.lookup(target.selector)
            if raw is None:
                raise ValueError(f"Help file not found: {url}")
        else:
            raw = self.transport.fetch(target.host, target.port, target.selector)

        if target.typ in (ItemType.MENU, ItemType.SEARCH):
            return MenuView.from_response(url, raw, wide=self.config.wide)
        if target.typ.is_text() or target.typ == ItemType.HTML:
            return StubView(url, raw)
        raise ValueError(f"Unsupported Gopher Response: {target.typ.name}")

    def download(self, url: str) -> None:
        """Save a binary resource to the download directory.

        Any key pressed while the download runs cancels it.
        """
        target = parse_url(url)
        dest = self.download_path(target.selector, target.host)
        self.set_status(f"Downloading {url} (press any key to cancel)")
        self.terminal.write(self.render_status())

        def on_progress(url, received):
            self.set_status(f"Downloading {url}: {format_bytes(received)} (press any key to cancel)")
            self.terminal.write(self.render_status())

        pub.subscribe(on_progress, PROGRESS_TOPIC)
        try:
            received = self.transport.download(
                target.host,
                target.port,
                target.selector,
                dest,
                should_cancel=lambda: self.terminal.poll_key() is not None,
            )
        except DownloadCancelled:
            logger.info(f"Download of {url} cancelled")
            self.set_status("Download cancelled")
            return
        except (OSError, ValueError) as e:
            logger.error(f"Download of {url} failed: {e}")
            self.set_error(f"Download failed: {e}")
            return
        finally:
            pub.unsubscribe(on_progress, PROGRESS_TOPIC)

        self.set_status(f"Download complete! {format_bytes(received)} saved to {dest}")

    def download_path(self, selector: str, host: str) -> Path:
        """Pick a file in the download directory that doesn't exist yet."""
        directory = self.config.get_download_path()
        directory.mkdir(parents=True, exist_ok=True)
        name = selector.rstrip("/").rsplit("/", 1)[-1] or host or "download"
        path = directory / name
        n = 1
        while path.exists():
            path = directory / f"{name}.{n}"
            n += 1
        return path

    # Line input

    def confirm(self, question: str) -> bool:
        """Ask a yes/no question. Enter or y means yes."""
        self.terminal.write(
            f"{RESET}{goto(1, max(1, self.rows()))}{CLEAR_LINE}{question} [Y/n]: {SHOW_CURSOR}"
        )
        key = self.terminal.read_key()
        self.terminal.write(HIDE_CURSOR)
        return key in (keys.ENTER, keys.char("y"), keys.char("Y"))

    def prompt(self, label: str, value: str = "") -> str | None:
        """
        Read a line of input on the status line.

        Returns:
            The entered text, or None if the prompt was cancelled.
        """
        rows = max(1, self.rows())
        text = value
        self.terminal.write(f"{RESET}{goto(1, rows)}{CLEAR_LINE}{label}{text}{SHOW_CURSOR}")
        while True:
            key = self.terminal.read_key()
            if key == keys.ENTER:
                self.terminal.write(CLEAR_LINE + HIDE_CURSOR)
                return text
            if key == keys.ESC or key.is_ctrl("c"):
                self.terminal.write(CLEAR_LINE + HIDE_CURSOR)
                return None
            if key in (keys.BACKSPACE, keys.DELETE):
                text = text[:-1]
            elif key.is_char() and key.value.isprintable():
                text += key.value
            self.terminal.write(f"{goto(1, rows)}{CLEAR_LINE}{label}{text}")
