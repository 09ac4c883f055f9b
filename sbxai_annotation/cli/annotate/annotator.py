import logging
from gettext import gettext as _

from sbxai_annotation.cli.context import build_context
from sbxai_annotation.core.annotation import AnnotationToolController, Tool
from sbxai_annotation.errors import ValidationError
from sbxai_annotation.interfaces import CanvasAnnotationAdapter

logger = logging.getLogger(__name__)


def _notify(level, message):
    getattr(logger, "error" if level == "error" else "info")(message)


def handle(args):
    ctx = build_context(args)
    controller = AnnotationToolController(ctx.projects, cfg=ctx.cfg)
    adapter = CanvasAnnotationAdapter(controller, notify_callback=_notify)

    try:
        if not controller.open(args.project, args.image):
            raise ValidationError(
                _("Could not open image {image}").format(image=args.image)
            )
        controller.set_scale(args.scale)
        logger.info(_("Zoom: %s"), adapter.zoom_label())

        if args.boxes:
            if args.label is None:
                raise ValidationError(_("--label is required to draw boxes"))
            if not controller.select_label(args.label):
                available = ", ".join(f"{lb.id}={lb.name}" for lb in controller.labels)
                raise ValidationError(
                    _("Unknown label {label} (available: {available})").format(
                        label=args.label, available=available or "-"
                    )
                )
            controller.select_tool(Tool.BBOX)
            for x1, y1, x2, y2 in args.boxes:
                saved = adapter.drag((x1, y1), (x2, y2))
                if saved is None:
                    print(_("Skipped box {box}").format(box=(x1, y1, x2, y2)))

        for index, annotation in enumerate(controller.annotations):
            label = controller.registry.get(annotation.label_id)
            bbox = annotation.bbox
            geometry = (
                f"{bbox.x:g},{bbox.y:g} {bbox.width:g}x{bbox.height:g}"
                if bbox is not None
                else getattr(annotation.geometry_kind, "value", "-")
            )
            print(
                "{index}\t{label}\t{geometry}\t{confidence:.2f}".format(
                    index=index,
                    label=label.name if label else annotation.label_id,
                    geometry=geometry,
                    confidence=annotation.confidence,
                )
            )

        if args.output is not None:
            result = controller.last_render or controller.render()
            if result is not None:
                result.save(args.output)
                print(_("Saved canvas to {path}").format(path=args.output))
    finally:
        controller.close()
