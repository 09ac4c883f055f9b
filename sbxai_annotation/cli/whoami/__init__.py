from gettext import gettext as _

COMMAND_DESCRIPTION = _("Show the logged-in user")


def command(subparser):
    subparser.add_argument(
        "--cached",
        action="store_true",
        help=_("Print the stored profile without calling the service"),
    )

    def handle(args):
        from sbxai_annotation.cli.context import build_context

        auth = build_context(args).auth
        if not auth.is_authenticated():
            print(_("Not logged in"))
            return
        user = auth.stored_user() if args.cached else auth.current_user()
        user = user or {}
        print(
            "{email} ({user_id}) {subscription}".format(
                email=user.get("email", "?"),
                user_id=user.get("user_id", "?"),
                subscription=user.get("subscription") or "",
            ).rstrip()
        )

    return handle
