from gettext import gettext as _

COMMAND_DESCRIPTION = _("Manage the labels of a project")


def command(subparser):
    subparser.add_argument("project", help=_("Project id"))
    subparser.add_argument(
        "action", choices=["list", "create", "delete"], nargs="?", default="list"
    )
    subparser.add_argument("target", nargs="?", help=_("Label name or id"))
    subparser.add_argument("-c", "--color", dest="color", default="#FF0000")
    subparser.add_argument(
        "-f",
        "--format",
        dest="expected_format",
        choices=["bbox", "polygon", "text"],
        default="bbox",
    )
    subparser.add_argument("-d", "--description", dest="description", default="")

    def handle(args):
        from sbxai_annotation.cli.context import build_context
        from sbxai_annotation.core.annotation import Label
        from sbxai_annotation.errors import ValidationError

        projects = build_context(args).projects
        if args.action == "list":
            for data in projects.list_labels(args.project):
                label = Label.from_dict(data)
                print(
                    f"{label.id}\t{label.name}\t{label.color}\t"
                    f"{label.expected_format.value}"
                )
            return
        if not args.target:
            raise ValidationError(_("A label name or id is required"))
        if args.action == "create":
            data = projects.create_label(
                args.project,
                args.target,
                expected_format=args.expected_format,
                color=args.color,
                description=args.description,
            )
            print(_("Created label {id}").format(id=data.get("id")))
        else:
            projects.delete_label(args.project, args.target)
            print(_("Deleted label {id}").format(id=args.target))

    return handle
