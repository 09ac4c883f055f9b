import getpass
from gettext import gettext as _

COMMAND_DESCRIPTION = _("Log in and store the access token")


def command(subparser):
    subparser.add_argument("username", type=str)
    subparser.add_argument(
        "-p",
        "--password",
        dest="password",
        help=_("Password (prompted for when omitted)"),
    )

    def handle(args):
        from sbxai_annotation.cli.context import build_context

        ctx = build_context(args)
        password = args.password or getpass.getpass(_("Password: "))
        auth = ctx.auth
        auth.login(args.username, password)
        user = auth.current_user()
        print(
            _("Logged in as {email}").format(
                email=user.get("email") or args.username
            )
        )

    return handle
