from gettext import gettext as _

COMMAND_DESCRIPTION = _("Summarize the service's OpenAPI schema")


def command(subparser):
    subparser.add_argument("-t", "--tag", dest="tag", help=_("Only show this tag"))

    def handle(args):
        from sbxai_annotation.api.docs import fetch_schema, format_schema
        from sbxai_annotation.cli.context import build_context

        client = build_context(args).client
        print(format_schema(fetch_schema(client), tag=args.tag))

    return handle
