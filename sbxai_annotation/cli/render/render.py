import logging
from gettext import gettext as _

from sbxai_annotation.cli.context import build_context
from sbxai_annotation.core.annotation import AnnotationToolController, CanvasRenderer
from sbxai_annotation.utils.misc import try_tqdm

logger = logging.getLogger(__name__)


def render_image(projects, cfg, renderer, project_id, image_id, scale, output):
    """
    Open an editor on one image and write its canvas to ``output``.

    Returns the written path, or None when the image could not be opened.
    """
    controller = AnnotationToolController(projects, cfg=cfg, renderer=renderer)
    try:
        if not controller.open(project_id, image_id):
            return None
        controller.set_scale(scale)
        result = controller.last_render
        if result is None:
            return None
        return result.save(output / f"{image_id}.png")
    finally:
        controller.close()


def handle(args):
    ctx = build_context(args)
    projects = ctx.projects
    renderer = CanvasRenderer.from_config(ctx.cfg)

    image_ids = list(args.images)
    if not image_ids:
        images = projects.list_images(args.project, limit=args.limit)
        image_ids = [str(image["id"]) for image in images if "id" in image]
    if not image_ids:
        print(_("Project {id} has no images").format(id=args.project))
        return

    args.output.mkdir(parents=True, exist_ok=True)
    written = 0
    for image_id in try_tqdm(image_ids, desc=_("Rendering")):
        path = render_image(
            projects, ctx.cfg, renderer, args.project, image_id, args.scale, args.output
        )
        if path is None:
            logger.warning(_("Skipped image %s"), image_id)
            continue
        logger.debug("Wrote %s", path)
        written += 1
    print(
        _("Rendered {written} of {total} image(s) into {output}").format(
            written=written, total=len(image_ids), output=args.output
        )
    )
