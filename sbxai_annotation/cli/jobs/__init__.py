from gettext import gettext as _
from pathlib import Path

COMMAND_DESCRIPTION = _("Inspect workflow jobs or run a workflow on an image")


def command(subparser):
    subparser.add_argument(
        "job", nargs="?", help=_("Job id; prints its steps when given")
    )
    subparser.add_argument(
        "--status",
        dest="status",
        choices=["pending", "running", "completed", "failed"],
    )
    subparser.add_argument("--workflow", dest="workflow", type=int)
    subparser.add_argument("-n", "--limit", dest="limit", type=int, default=20)
    subparser.add_argument(
        "--execute",
        dest="execute",
        type=Path,
        help=_("Image file to run through --workflow"),
    )

    def handle(args):
        from sbxai_annotation.api import JobStatus
        from sbxai_annotation.cli.context import build_context
        from sbxai_annotation.errors import ValidationError

        workflows = build_context(args).workflows

        if args.execute is not None:
            if args.workflow is None:
                raise ValidationError(_("--execute needs --workflow"))
            job = workflows.execute_with_file(args.workflow, args.execute)
            print(
                _("Started job {id} ({status})").format(
                    id=job.get("id"), status=job.get("status", "?")
                )
            )
            return

        if args.job is not None:
            job = workflows.get_job(args.job)
            print(
                "{id}\t{status}\t{error}".format(
                    id=job.get("id"),
                    status=job.get("status", "?"),
                    error=job.get("error_message") or "",
                ).rstrip()
            )
            for step in workflows.list_job_steps(args.job):
                print(
                    "  {order}\t{status}".format(
                        order=step.get("step_order", "?"),
                        status=step.get("status", "?"),
                    )
                )
            return

        status = JobStatus(args.status) if args.status else None
        for job in workflows.list_jobs(
            status=status, workflow_id=args.workflow, limit=args.limit
        ):
            print(
                "{id}\t{workflow}\t{status}\t{created}".format(
                    id=job.get("id"),
                    workflow=job.get("workflow_id", "?"),
                    status=job.get("status", "?"),
                    created=job.get("created_at", ""),
                ).rstrip()
            )

    return handle
