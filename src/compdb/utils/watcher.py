import logging
import threading
from pathlib import Path
from typing import Callable, Optional
from watchdog.observers import Observer
from watchdog.events import FileSystemEventHandler

logger = logging.getLogger(__name__)


class DatabaseChangeHandler(FileSystemEventHandler):
    """
    Listens for changes to one compilation database file and triggers a callback
    once the file has been quiet for debounce_seconds.
    """
    def __init__(self, target_file: str, callback: Callable[[str], None],
                 debounce_seconds: float = 0.5):
        self.target_file = str(Path(target_file).resolve())
        self.callback = callback
        self.debounce_seconds = debounce_seconds # Build systems often rewrite the file in several steps
        self.timer: Optional[threading.Timer] = None
        self._lock = threading.Lock()

    def _matches(self, path) -> bool:
        return str(Path(path).resolve()) == self.target_file

    def on_any_event(self, event):
        if event.is_directory or event.event_type not in ("modified", "created", "moved", "closed"):
            return

        # Generators usually write a temporary file and rename it into place
        dest = getattr(event, "dest_path", None)
        if not (self._matches(event.src_path) or (dest and self._matches(dest))):
            return

        # Every event re-arms the timer, so only the last write is reported
        with self._lock:
            if self.timer is not None:
                self.timer.cancel()
            self.timer = threading.Timer(self.debounce_seconds, self._fire)
            self.timer.daemon = True
            self.timer.start()

    def _fire(self):
        with self._lock:
            self.timer = None
        try:
            self.callback(self.target_file)
        except Exception:
            logger.exception("Error in database watcher callback")

    def cancel(self):
        with self._lock:
            if self.timer is not None:
                self.timer.cancel()
                self.timer = None


class DatabaseWatcher:
    """
    Manages the watchdog observer thread.
    """
    def __init__(self):
        self.observer = Observer()
        self.watch = None
        self.handler: Optional[DatabaseChangeHandler] = None

    def start_watching(self, file_path: str, callback: Callable[[str], None]):
        """
        Starts a background thread watching the directory of file_path.
        """
        path = Path(file_path).resolve()
        if not path.exists():
            raise FileNotFoundError(f"Cannot watch non-existent file: {file_path}")

        self.handler = DatabaseChangeHandler(str(path), callback)
        # Watch the parent directory
        self.watch = self.observer.schedule(self.handler, str(path.parent), recursive=False)
        self.observer.start()
        logger.info("Watching %s", path)

    def stop_watching(self):
        if self.observer.is_alive():
            self.observer.stop()
            self.observer.join()
            logger.info("Watcher stopped")
        # A pending reload must not fire after the observer is gone
        if self.handler is not None:
            self.handler.cancel()
