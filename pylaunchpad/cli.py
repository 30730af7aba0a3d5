import argparse
import logging
import sys
import time

from .config import DEFAULT_COLUMNS, DEFAULT_ICON_SIZE, DEFAULT_SPACING, Options, default_terminal
from .instance import InstanceLock, SignalListener, coordinate
from .state import ApplicationState

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def build_parser():
    parser = argparse.ArgumentParser(prog="pylaunchpad", description="Application launchpad")
    parser.add_argument("-debug", action="store_true", help="display debug information")
    parser.add_argument("-d", dest="daemon", action="store_true", help="launch in daemon mode")
    parser.add_argument("-n", dest="no_show", action="store_true",
                        help="don't show the window on first launch (only if daemon mode is on)")
    parser.add_argument("-style", default="", help="css style file name")
    parser.add_argument("-o", dest="output", default="",
                        help="name of the output to display the launchpad on (sway only)")
    parser.add_argument("-i", dest="icon_size", type=int, default=DEFAULT_ICON_SIZE, help="icon size")
    parser.add_argument("-c", dest="columns", type=int, default=DEFAULT_COLUMNS, help="number of columns")
    parser.add_argument("-s", dest="spacing", type=int, default=DEFAULT_SPACING, help="icon spacing")
    parser.add_argument("-t", dest="terminal", default=default_terminal(), help="terminal emulator")
    return parser


def parse_options(argv=None):
    return Options.from_args(build_parser().parse_args(argv))


def setup_logging(debug):
    # without -debug the log is effectively discarded
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.CRITICAL,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def main(argv=None):
    time_start = time.monotonic()
    options = parse_options(argv)
    setup_logging(options.debug)

    # handlers go in before the lock is taken; messages wait for the window
    listener = SignalListener()
    listener.start()

    lock = InstanceLock()
    if not coordinate(lock):
        listener.stop()
        return 0

    try:
        return run_owner(options, listener, time_start)
    finally:
        listener.stop()
        lock.release()


def run_owner(options, listener, time_start):
    # GTK is only needed by the owner
    from .window import Gtk, GLib, LaunchpadWindow, display_available, load_css

    if not display_available():
        logger.critical("Unable to create window: no display")
        return 1

    if options.style:
        load_css(options.style)

    state = ApplicationState(options)
    state.refresh()

    win = LaunchpadWindow(state)
    listener.attach(GLib.idle_add, lambda message: state.handle(message, win))

    if options.start_visible:
        win.focus_first_item()
        win.show_all()

    logger.debug("UI created in %d ms. Thank you for your patience.",
                 (time.monotonic() - time_start) * 1000)
    Gtk.main()
    return 0
