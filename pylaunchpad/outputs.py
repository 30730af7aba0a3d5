"""Sway output names, used to put the launcher on a chosen monitor.

GTK 3 only knows monitors by geometry, so an output is matched to a monitor
by its top-left corner.
"""
import json
import logging
import subprocess

logger = logging.getLogger(__name__)

QUERY_TIMEOUT = 0.1


def parse_sway_outputs(text):
    """Output name -> (x, y) from ``swaymsg -t get_outputs -r``"""
    result = {}
    for output in json.loads(text):
        rect = output.get("rect") or {}
        name = output.get("name")
        if name:
            result[name] = (int(rect.get("x", 0)), int(rect.get("y", 0)))
    return result


def sway_outputs(timeout=QUERY_TIMEOUT):
    try:
        proc = subprocess.run(
            ["swaymsg", "-t", "get_outputs", "-r"],
            capture_output=True, text=True, timeout=timeout, check=True
        )
        return parse_sway_outputs(proc.stdout)
    except (OSError, subprocess.SubprocessError, ValueError) as e:
        logger.debug("Output query failed: %s", e)
        return {}


def map_outputs(outputs, monitors):
    """Output name -> monitor, ``monitors`` being (monitor, x, y) triples"""
    result = {}
    for monitor, x, y in monitors:
        for name, position in outputs.items():
            if position == (x, y):
                result[name] = monitor
    return result
