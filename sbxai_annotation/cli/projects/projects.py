import logging
from gettext import gettext as _

from sbxai_annotation.cli.context import build_context
from sbxai_annotation.errors import ValidationError

logger = logging.getLogger(__name__)


def _require_target(args):
    if not args.target:
        raise ValidationError(
            _("'{action}' needs a project").format(action=args.action)
        )
    return args.target


def handle(args):
    projects = build_context(args).projects

    if args.action == "list":
        for project in projects.list_projects(limit=args.limit):
            print(
                "{id}\t{name}".format(
                    id=project.get("id"), name=project.get("name", "")
                )
            )
    elif args.action == "create":
        project = projects.create_project(_require_target(args))
        print(_("Created project {id}").format(id=project.get("id")))
    elif args.action == "delete":
        projects.delete_project(_require_target(args))
        print(_("Deleted project {id}").format(id=args.target))
    elif args.action == "images":
        images = projects.list_images(_require_target(args), limit=args.limit)
        for image in images:
            print(
                "{id}\t{name}\t{w}x{h}".format(
                    id=image.get("id"),
                    name=image.get("original_filename", ""),
                    w=image.get("image_width", "?"),
                    h=image.get("image_height", "?"),
                )
            )
    elif args.action == "upload":
        project_id = _require_target(args)
        if not args.files:
            raise ValidationError(_("No files to upload"))
        missing = [str(f) for f in args.files if not f.is_file()]
        if missing:
            raise ValidationError(
                _("Not a file: {files}").format(files=", ".join(missing))
            )
        result = projects.upload_images(project_id, args.files)
        logger.debug("Upload result: %s", result)
        print(
            _("Uploaded {count} file(s) to project {id}").format(
                count=len(args.files), id=project_id
            )
        )
    elif args.action == "stats":
        for key, value in sorted(projects.dashboard_stats().items()):
            print(f"{key}: {value}")
