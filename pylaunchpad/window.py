import logging
import os

import gi
gi.require_version('Gtk', '3.0')
from gi.repository import Gtk, Gdk, GLib

from .icons import IconCache
from .launcher import ProcessLauncher
from .outputs import map_outputs, sway_outputs

logger = logging.getLogger(__name__)

LABEL_MAX = 20
NAVIGATION_KEYS = (
    Gdk.KEY_downarrow, Gdk.KEY_Up, Gdk.KEY_Down, Gdk.KEY_Left, Gdk.KEY_Right, Gdk.KEY_Tab,
    Gdk.KEY_Return, Gdk.KEY_Page_Up, Gdk.KEY_Page_Down, Gdk.KEY_Home, Gdk.KEY_End,
)


def wayland():
    return bool(os.environ.get("WAYLAND_DISPLAY")) or os.environ.get("XDG_SESSION_TYPE") == "wayland"


def display_available():
    return Gdk.Display.get_default() is not None


def layer_shell():
    """The GtkLayerShell module, or None if its typelib is not installed"""
    try:
        gi.require_version('GtkLayerShell', '0.1')
        from gi.repository import GtkLayerShell
    except (ValueError, ImportError) as e:
        logger.debug("GtkLayerShell not available: %s", e)
        return None
    return GtkLayerShell


def short_label(name):
    if len(name) > LABEL_MAX:
        return name[:LABEL_MAX - 3] + "…"
    return name


def load_css(path):
    provider = Gtk.CssProvider()
    try:
        provider.load_from_path(path)
    except GLib.Error as e:
        logger.error("%s css file not found or erroneous. Using GTK styling.", path)
        logger.error("%s", e)
        return False
    logger.debug("Using style from %s", path)
    Gtk.StyleContext.add_provider_for_screen(
        Gdk.Screen.get_default(),
        provider,
        Gtk.STYLE_PROVIDER_PRIORITY_APPLICATION
    )
    return True


class LaunchpadWindow(Gtk.Window):

    def __init__(self, state):
        super().__init__(type=Gtk.WindowType.TOPLEVEL, title="Launchpad")
        self.state = state
        self.options = state.options
        self.icons = IconCache(self.options.icon_size)
        self.launcher = ProcessLauncher(self.options.daemon, self.hide, self.quit)

        shell = layer_shell() if wayland() else None
        if shell:
            self.setup_layer_shell(shell)
        else:
            # X11, or Wayland without layer-shell: best effort
            logger.debug("No layer shell, using a maximized window")
            self.set_decorated(False)
            self.maximize()

        self.build_ui()
        self.connect("delete-event", self.on_delete)
        self.connect("key-press-event", self.on_key_press)

    def setup_layer_shell(self, shell):
        shell.init_for_window(self)

        if self.options.output:
            monitor = self.find_monitor(self.options.output)
            if monitor is not None:
                shell.set_monitor(self, monitor)
            else:
                logger.warning("Output %s not found", self.options.output)

        for edge in (shell.Edge.BOTTOM, shell.Edge.TOP, shell.Edge.LEFT, shell.Edge.RIGHT):
            shell.set_anchor(self, edge, True)
        shell.set_layer(self, shell.Layer.OVERLAY)
        shell.set_exclusive_zone(self, -1)
        shell.set_keyboard_mode(self, shell.KeyboardMode.EXCLUSIVE)

    def find_monitor(self, output_name):
        display = Gdk.Display.get_default()
        monitors = []
        for i in range(display.get_n_monitors()):
            monitor = display.get_monitor(i)
            geometry = monitor.get_geometry()
            monitors.append((monitor, geometry.x, geometry.y))
        return map_outputs(sway_outputs(), monitors).get(output_name)

    def build_ui(self):
        outer_vbox = Gtk.Box(orientation=Gtk.Orientation.VERTICAL)
        self.add(outer_vbox)

        # Search box
        search_box = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL)
        outer_vbox.pack_start(search_box, False, False, 10)

        self.search_entry = Gtk.SearchEntry()
        self.search_entry.set_placeholder_text("Type to search")
        self.search_entry.set_max_width_chars(30)
        self.search_entry.connect("search-changed", self.on_search_changed)
        search_box.pack_start(self.search_entry, True, False, 0)

        # Results
        self.result_window = Gtk.ScrolledWindow()
        self.result_window.set_policy(Gtk.PolicyType.AUTOMATIC, Gtk.PolicyType.AUTOMATIC)
        outer_vbox.pack_start(self.result_window, True, True, 10)

        results_wrapper = Gtk.Box(orientation=Gtk.Orientation.VERTICAL)
        self.result_window.add(results_wrapper)

        self.flowbox = Gtk.FlowBox()
        self.flowbox.set_min_children_per_line(self.options.columns)
        self.flowbox.set_max_children_per_line(self.options.columns)
        self.flowbox.set_column_spacing(self.options.spacing)
        self.flowbox.set_row_spacing(self.options.spacing)
        self.flowbox.set_homogeneous(True)
        self.flowbox.set_selection_mode(Gtk.SelectionMode.NONE)

        hbox = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL)
        hbox.pack_start(self.flowbox, True, False, 0)
        results_wrapper.pack_start(hbox, False, False, 0)

        placeholder = Gtk.Box(orientation=Gtk.Orientation.VERTICAL)
        placeholder.set_size_request(20, 20)
        results_wrapper.pack_start(placeholder, True, True, 0)

        # Status line
        status_box = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL)
        outer_vbox.pack_start(status_box, False, False, 10)
        self.status_label = Gtk.Label(label=self.state.summary)
        status_box.pack_start(self.status_label, True, False, 0)

        self.build_results()

    def build_results(self):
        """Rebuild the flow box from the current search phrase"""
        for child in self.flowbox.get_children():
            child.destroy()

        for entry in self.state.results():
            self.flowbox.add(self.create_app_button(entry))

        # arrow keys should move between buttons, not flow box children
        for child in self.flowbox.get_children():
            child.set_can_focus(False)

        self.status_label.set_text(self.state.summary)
        self.result_window.show_all()

    def create_app_button(self, entry):
        button = Gtk.Button(label=short_label(entry.name_loc))
        button.set_always_show_image(True)
        pixbuf = self.icons.get(entry.icon)
        if pixbuf is not None:
            button.set_image(Gtk.Image.new_from_pixbuf(pixbuf))
        button.set_image_position(Gtk.PositionType.TOP)

        button.connect("button-release-event", self.on_button_release, entry)
        button.connect("activate", lambda b: self.launch(entry))
        button.connect("enter-notify-event", lambda b, e: self.status_label.set_text(entry.comment_loc))
        return button

    def focus_first_item(self):
        child = self.flowbox.get_child_at_index(0)
        if child is not None and child.get_child() is not None:
            child.get_child().grab_focus()

    def launch(self, entry):
        self.launcher.launch(self.state.invocation_for(entry))

    # view protocol used by ApplicationState.handle

    def shown(self):
        return self.get_visible()

    def show_launcher(self):
        """Show a freshly rebuilt launcher"""
        self.search_entry.set_text("")
        self.build_results()
        self.result_window.get_vadjustment().set_value(0)
        self.focus_first_item()
        self.show_all()

    def quit(self):
        Gtk.main_quit()

    def close_or_hide(self):
        if self.options.daemon:
            self.hide()
        else:
            self.quit()

    # signal handlers

    def on_button_release(self, button, event, entry):
        if event.button == 1:
            self.launch(entry)
            return True
        return event.button == 3

    def on_search_changed(self, entry):
        self.state.phrase = entry.get_text()
        self.build_results()
        self.focus_first_item()

    def on_delete(self, widget, event):
        self.close_or_hide()
        return True

    def on_key_press(self, widget, event):
        if event.keyval == Gdk.KEY_Escape:
            if self.search_entry.get_text():
                self.search_entry.grab_focus()
                self.search_entry.set_text("")
            else:
                self.close_or_hide()
            return False

        if event.keyval in NAVIGATION_KEYS:
            return False

        if not self.search_entry.is_focus():
            self.search_entry.grab_focus_without_selecting()
        return False
