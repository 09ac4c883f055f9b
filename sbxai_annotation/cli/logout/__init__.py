from gettext import gettext as _

COMMAND_DESCRIPTION = _("Forget the stored access token and profile")


def command(subparser):
    def handle(args):
        from sbxai_annotation.cli.context import build_context

        build_context(args).auth.logout()
        print(_("Logged out"))

    return handle
