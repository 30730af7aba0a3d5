import logging

import gi
gi.require_version('Gtk', '3.0')
from gi.repository import Gtk, GdkPixbuf, GLib

logger = logging.getLogger(__name__)

FALLBACK_ICONS = ("image-missing", "unknown")
ICON_SUFFIXES = (".svg", ".png", ".xpm")


def lookup_name(icon):
    # for entries like "Icon=netflix-desktop.svg"
    if icon.endswith(ICON_SUFFIXES):
        return icon.split(".")[0]
    return icon


class IconCache:
    """Pixbufs keyed by the raw Icon= value of an entry"""

    def __init__(self, size, theme=None):
        self.size = size
        self.theme = theme or Gtk.IconTheme.get_default()
        self.pixbufs = {}

    def load(self, icon):
        if "/" in icon:
            return GdkPixbuf.Pixbuf.new_from_file_at_size(icon, self.size, self.size)
        return self.theme.load_icon(lookup_name(icon), self.size, Gtk.IconLookupFlags.FORCE_SIZE)

    def get(self, icon):
        if icon in self.pixbufs:
            return self.pixbufs[icon]

        pixbuf = None
        for candidate in ((icon,) if icon else ()) + FALLBACK_ICONS:
            try:
                pixbuf = self.load(candidate)
                break
            except GLib.Error as e:
                logger.debug("Icon %s: %s", candidate, e)

        self.pixbufs[icon] = pixbuf
        return pixbuf

    def clear(self):
        self.pixbufs.clear()
