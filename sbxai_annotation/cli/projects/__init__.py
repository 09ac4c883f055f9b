from gettext import gettext as _
from pathlib import Path

COMMAND_DESCRIPTION = _("List, create, delete or fill projects")


def command(subparser):
    subparser.add_argument(
        "action",
        choices=["list", "create", "delete", "images", "upload", "stats"],
        nargs="?",
        default="list",
    )
    subparser.add_argument("target", nargs="?", help=_("Project name or id"))
    subparser.add_argument("files", nargs="*", type=Path)
    subparser.add_argument("-n", "--limit", dest="limit", type=int, default=50)

    def handle(args):
        from .projects import handle as projects_handle

        projects_handle(args)

    return handle
