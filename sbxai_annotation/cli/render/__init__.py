from gettext import gettext as _
from pathlib import Path

COMMAND_DESCRIPTION = _("Render the annotation canvas of project images to files")


def command(subparser):
    subparser.add_argument("project", help=_("Project id"))
    subparser.add_argument("output", type=Path, help=_("Output folder"))
    subparser.add_argument(
        "-i",
        "--image",
        dest="images",
        action="append",
        default=[],
        help=_("Image id to render (all project images when omitted)"),
    )
    subparser.add_argument("-s", "--scale", dest="scale", type=float, default=1.0)
    subparser.add_argument("-n", "--limit", dest="limit", type=int)

    def handle(args):
        from .render import handle as render_handle

        render_handle(args)

    return handle
