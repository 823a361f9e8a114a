"""Main editor controller: input and render threads over a shared buffer."""

import errno
import logging
import threading
import time
from pathlib import Path
from typing import Optional

from .commands import CommandRegistry
from .config import Config
from .constants import EditorConstants
from .keyboard import InputEvent, KeyEvent, ResizeEvent
from .model import EditStatus, TextBuffer, write_atomic
from .prompt import Prompt, PromptKind, PromptStatus
from .shared import Shared
from .view import TerminalView

logger = logging.getLogger(__name__)


class Editor:
    """Text editor application controller.

    Two threads share ``self.buffer``: the input thread applies key events
    and sets ``redraw``; the render thread repaints when ``redraw`` is set.
    Both stop once the buffer is marked terminated.
    """

    def __init__(self, config: Config, terminal=None):
        """Initialize the editor components."""
        if terminal is None:
            from .terminal import TerminalInterface
            terminal = TerminalInterface()
        self.terminal = terminal
        self.view = TerminalView(terminal)
        self.command_registry = CommandRegistry()
        if config.file is not None:
            buffer = TextBuffer.load(config.file, config.tab_size)
        else:
            buffer = TextBuffer()
        if not buffer.message.text:
            buffer.post_message(EditorConstants.HELP_MESSAGE)
        self.buffer: Shared[TextBuffer] = Shared(buffer)
        self.config: Shared[Config] = Shared(config)
        self._errors: list[BaseException] = []
        self._errors_lock = threading.Lock()
        # Snapshot taken under the buffer lock, written by the input thread
        self._pending_save: Optional[tuple[Path, bytes]] = None

    def run(self) -> None:
        """Run both threads until quit and restore the terminal.

        Raises the first error either thread hit, after the terminal has
        been restored.
        """
        try:
            self.terminal.setup()
            rows, cols = self.terminal.query_size()
            with self.buffer.write() as buf:
                buf.resize(rows, cols)
            render_thread = self._start_thread("render", self.render_loop)
            input_thread = self._start_thread("input", self.input_loop)
            render_thread.join()
            input_thread.join()
        finally:
            self.terminal.cleanup()
        if self._errors:
            raise self._errors[0]

    def _start_thread(self, name: str, target) -> threading.Thread:
        thread = threading.Thread(target=self._guard, args=(name, target), name=name, daemon=True)
        thread.start()
        return thread

    def _guard(self, name: str, target) -> None:
        """Run a thread body; on failure stop the other thread too."""
        try:
            target()
        except BaseException as exc:
            logger.exception("%s thread failed", name)
            with self._errors_lock:
                self._errors.append(exc)
            with self.buffer.write() as buf:
                buf.terminated = True
            self.terminal.wake()

    def render_loop(self) -> None:
        """Repaint whenever the buffer is marked for redraw."""
        while True:
            time.sleep(EditorConstants.REFRESH_INTERVAL)
            with self.buffer.write() as buf:
                if buf.terminated:
                    break
                if not buf.redraw:
                    continue
                with self.config.read() as config:
                    self.view.paint(buf, config)
                buf.redraw = False

    def input_loop(self) -> None:
        """Apply input events until the editor is terminated."""
        while True:
            event = self.terminal.read_next_event()
            if self.handle_event(event):
                break

    def handle_event(self, event: Optional[InputEvent]) -> bool:
        """Apply one input event. Returns True once the editor is terminated."""
        if isinstance(event, ResizeEvent):
            logger.debug("Resized to %dx%d", event.cols, event.rows)
            with self.buffer.write() as buf:
                buf.resize(event.rows, event.cols)
                return buf.terminated
        if isinstance(event, KeyEvent):
            confirm_quit = self._handle_key(event)
            self._write_pending_save()
            if confirm_quit:
                return self._confirm_quit()
        with self.buffer.read() as buf:
            return buf.terminated

    def _handle_key(self, key_event: KeyEvent) -> bool:
        """Apply a key under the write lock.

        Returns True when a quit needs confirming by a second Ctrl-Q.
        """
        with self.buffer.write() as buf:
            buf.redraw = True
            if buf.terminated:
                return False
            if key_event.is_ctrl:
                return self._handle_ctrl(buf, key_event)
            buf.check_cursor()
            if buf.prompt is not None:
                self._handle_prompt_key(buf, buf.prompt, key_event)
            else:
                with self.config.read() as config:
                    tab_size = config.tab_size
                self.command_registry.execute(buf, key_event, tab_size)
        return False

    def _handle_ctrl(self, buf: TextBuffer, key_event: KeyEvent) -> bool:
        if key_event.value == 'q':
            if buf.edit_status == EditStatus.EDITED:
                buf.post_message(EditorConstants.QUIT_CONFIRM_MESSAGE)
                return True
            buf.terminated = True
        elif key_event.value == 's':
            with self.config.read() as config:
                file = config.file
            if file is not None:
                self._request_save(buf, file)
            else:
                buf.prompt = Prompt.save_path()
        elif key_event.value == 'f':
            buf.prompt = Prompt.search()
        return False

    def _confirm_quit(self) -> bool:
        """Wait for exactly one more event; quit only if it is Ctrl-Q."""
        time.sleep(EditorConstants.QUIT_CONFIRM_DELAY)
        event = self.terminal.read_next_event()
        with self.buffer.write() as buf:
            buf.redraw = True
            if isinstance(event, KeyEvent) and event.is_ctrl_key('q'):
                buf.terminated = True
            elif isinstance(event, ResizeEvent):
                buf.resize(event.rows, event.cols)
            return buf.terminated

    def _handle_prompt_key(self, buf: TextBuffer, prompt: Prompt, key_event: KeyEvent) -> None:
        status = prompt.handle_key(key_event, buf.size.col)
        if status == PromptStatus.CANCELLED:
            buf.prompt = None
        elif status == PromptStatus.ACCEPTED:
            buf.prompt = None
            if prompt.kind == PromptKind.SAVE_PATH:
                if not prompt.text:
                    return
                path = Path(prompt.text)
                with self.config.write() as config:
                    config.file = path
                self._request_save(buf, path)
            elif prompt.kind == PromptKind.SEARCH:
                buf.search(prompt.text)

    def _request_save(self, buf: TextBuffer, path: Path) -> None:
        """Snapshot ``buf`` for :meth:`_write_pending_save`."""
        buf.path = path
        self._pending_save = (path, buf.snapshot())

    def _write_pending_save(self) -> bool:
        """Write the requested snapshot with no lock held.

        Only the input thread edits the buffer, so nothing can change
        between the snapshot and marking the buffer clean. The outcome is
        reported in the message bar.
        """
        if self._pending_save is None:
            return False
        path, data = self._pending_save
        self._pending_save = None
        saved = False
        try:
            write_atomic(path, data)
        except PermissionError:
            logger.warning("Permission denied saving %s", path)
            message = f"Error: Permission denied saving {path}"
        except OSError as e:
            logger.warning("Could not save %s: %s", path, e)
            if e.errno == errno.ENOSPC:
                message = "Error: No space left on device"
            else:
                message = f"Error: Cannot save to {path}"
        else:
            saved = True
            message = EditorConstants.SAVED_MESSAGE.format(path)
        with self.buffer.write() as buf:
            if saved:
                buf.edit_status = EditStatus.CLEAN
            buf.post_message(message)
            buf.redraw = True
        return saved
