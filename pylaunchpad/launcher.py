import logging
import os
import subprocess

logger = logging.getLogger(__name__)


def child_environment(overrides, base=None):
    """Environment for the child, or None to simply inherit ours"""
    if not overrides:
        return None
    env = dict(os.environ if base is None else base)
    for item in overrides:
        key, _, value = item.partition("=")
        env[key] = value
    return env


class ProcessLauncher:
    """Starts invocations detached from the launcher.

    After a successful start the window is hidden in daemon mode, otherwise
    the whole launcher quits.
    """

    def __init__(self, daemon, on_hide, on_quit):
        self.daemon = daemon
        self.on_hide = on_hide
        self.on_quit = on_quit

    def launch(self, invocation):
        if not invocation.executable:
            logger.warning("Nothing to launch: empty command")
            return False

        logger.debug("env vars: %s; command: '%s'; args: %s",
                     invocation.env, invocation.executable, invocation.arguments)

        try:
            subprocess.Popen(
                [invocation.executable, *invocation.arguments],
                env=child_environment(invocation.env),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True
            )
        except (OSError, ValueError) as e:
            logger.error("Failed to launch %s: %s", invocation.executable, e)
            return False

        if self.daemon:
            self.on_hide()
        else:
            self.on_quit()
        return True
