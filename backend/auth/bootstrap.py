# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
Bootstrap-admin tracker.

Whoever registers while no admin exists becomes the admin.  The two flags
below are a cache of the user table and are always rebuilt from counts,
never patched by hand.
"""


class BootstrapTracker:
    def __init__(self):
        self.has_any_user = False
        self.has_admin_user = False
        self.primed = False

    def recompute(self, directory) -> None:
        self.has_any_user = directory.count_all() > 0
        self.has_admin_user = self.has_any_user and directory.count_admins() > 0
        self.primed = True
