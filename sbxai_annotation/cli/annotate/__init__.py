# flake8: noqa E501

from gettext import gettext as _
from pathlib import Path

COMMAND_DESCRIPTION = _("Draw bounding boxes on an image and save them to a new session")


def command(subparser):
    subparser.add_argument("project", help=_("Project id"))
    subparser.add_argument("image", help=_("Image id"))
    subparser.add_argument(
        "-l", "--label", dest="label", type=int, help=_("Label id used for every box")
    )
    subparser.add_argument(
        "-b",
        "--box",
        dest="boxes",
        type=float,
        nargs=4,
        action="append",
        default=[],
        metavar=("X1", "Y1", "X2", "Y2"),
        help=_("Drag from (X1, Y1) to (X2, Y2) in canvas coordinates"),
    )
    subparser.add_argument("-s", "--scale", dest="scale", type=float, default=1.0)
    subparser.add_argument(
        "-o", "--output", dest="output", type=Path, help=_("Save the final canvas as an image")
    )

    def handle(args):
        from .annotator import handle as annotator_handle

        annotator_handle(args)

    return handle
