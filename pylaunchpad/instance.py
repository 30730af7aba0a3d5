"""Single-instance coordination.

The first process to ``flock`` the lock file owns the launcher and writes its
pid into it. Any later invocation fails to lock, reads that pid, sends it
SIGUSR1 and exits; the owner then toggles its window.
"""
import enum
import fcntl
import logging
import os
import signal

from .config import APP_NAME

logger = logging.getLogger(__name__)

TOGGLE_SIGNAL = signal.SIGUSR1


class Message(enum.Enum):
    TOGGLE = "toggle"
    TERMINATE = "terminate"


SIGNAL_MESSAGES = {
    signal.SIGUSR1: Message.TOGGLE,
    signal.SIGTERM: Message.TERMINATE,
}


def temp_dir(environ=None):
    environ = os.environ if environ is None else environ
    for name in ("TMPDIR", "TEMP", "TMP"):
        if environ.get(name):
            return environ[name]
    return "/tmp"


def lock_file_path(app=APP_NAME, environ=None):
    return os.path.join(temp_dir(environ), f"{app}.lock")


def read_lock_pid(path):
    with open(path) as f:
        pid = int(f.read())
    # 0 and negative pids would signal whole process groups
    if pid <= 0:
        raise ValueError(f"invalid pid: {pid}")
    return pid


class InstanceLock:
    """Exclusive advisory lock on a file holding the owner's pid"""

    def __init__(self, path=None):
        self.path = path or lock_file_path()
        self.fd = None

    @property
    def held(self):
        return self.fd is not None

    def acquire(self):
        try:
            fd = os.open(self.path, os.O_WRONLY | os.O_CREAT, 0o600)
        except OSError as e:
            logger.debug("Cannot open lock file %s: %s", self.path, e)
            return False

        try:
            fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
            # stale content from a crashed run is overwritten
            os.ftruncate(fd, 0)
            os.write(fd, str(os.getpid()).encode())
        except OSError as e:
            logger.debug("Lock %s not acquired: %s", self.path, e)
            os.close(fd)
            return False

        self.fd = fd
        return True

    def release(self):
        # closing drops the flock, the file itself stays
        if self.fd is not None:
            os.close(self.fd)
            self.fd = None

    def __enter__(self):
        self.acquire()
        return self

    def __exit__(self, *exc):
        self.release()
        return False


def relay_toggle(path, sig=TOGGLE_SIGNAL):
    """Ask the running owner to toggle. Returns True if the signal was sent."""
    try:
        pid = read_lock_pid(path)
    except (OSError, ValueError) as e:
        logger.debug("Unusable lock file %s: %s", path, e)
        return False

    try:
        os.kill(pid, sig)
    except OSError as e:
        logger.debug("Could not signal pid %d: %s", pid, e)
        return False

    logger.debug("Running instance found (pid %d), sent %s", pid, signal.Signals(sig).name)
    return True


def coordinate(lock):
    """Become the owner, or relay a toggle to the existing one.

    Returns True when this process holds the lock. On False the caller is
    expected to exit with status 0, whether or not the relay got through.
    """
    if lock.acquire():
        return True
    relay_toggle(lock.path)
    return False


class SignalListener:
    """Turns OS signals into Messages handed to ``schedule(handler, message)``.

    With GTK, ``schedule`` is ``GLib.idle_add``: the Python signal handler
    only queues the message and the handler runs on the main loop. PyGObject
    wakes ``Gtk.main()`` when a signal arrives, so handlers run even while
    the loop is idle.

    Install early; messages arriving before ``attach`` are kept and
    delivered on attach. Must be started and stopped from the main thread.
    """

    def __init__(self, signals=None):
        self.signals = dict(SIGNAL_MESSAGES if signals is None else signals)
        self.schedule = None
        self.handler = None
        self.pending = []
        self._previous = {}

    def start(self):
        for signum in self.signals:
            self._previous[signum] = signal.signal(signum, self.on_signal)

    def attach(self, schedule, handler):
        self.schedule = schedule
        self.handler = handler
        pending, self.pending = self.pending, []
        for message in pending:
            self.schedule(self.handler, message)

    def on_signal(self, signum, frame):
        message = self.signals.get(signum)
        if message is None:
            return
        if self.handler is None:
            self.pending.append(message)
        else:
            self.schedule(self.handler, message)

    def stop(self):
        for signum, previous in self._previous.items():
            signal.signal(signum, signal.SIG_DFL if previous is None else previous)
        self._previous.clear()
