"""
Annotation tool controller.

Root of one editor view: owns the selected tool, the selected label, the
zoom scale, the label registry, the session store, the pointer state machine
and the renderer. UI-agnostic; a host feeds it pointer events and listens to
its events.
"""

import logging
from gettext import gettext as _
from typing import List, Optional

from ...config import default_config
from ...errors import Cancelled, SbxaiError, ValidationError
from ...utils.cancel import CancelToken
from .events import AnnotationEvent, EventEmitter, EventType
from .interaction import PointerStateMachine
from .labels import LabelRegistry
from .renderer import CanvasRenderer, RenderResult
from .state import Annotation, EditorState, ImageInfo, Label, Tool
from .store import AnnotationSessionStore
from .utils import clamp_scale

logger = logging.getLogger(__name__)


class AnnotationToolController:
    """
    Orchestrates label loading, drawing, persistence and redraws.

    Network and API errors are caught here, logged and turned into
    ``NOTIFICATION`` events; none of them escape a pointer or zoom handler.
    Every network call carries the view's cancel token, so once
    :meth:`close` ran, late responses are dropped instead of applied.
    """

    def __init__(
        self,
        projects,
        cfg=None,
        renderer: Optional[CanvasRenderer] = None,
    ):
        """
        Initialize the controller.

        Args:
            projects: ProjectsClient used for labels, images and sessions
            cfg: Configuration (defaults to ``default_config()``)
            renderer: Canvas renderer (built from ``cfg`` when omitted)
        """
        self.cfg = cfg if cfg is not None else default_config()
        editor_cfg = self.cfg.editor

        self.projects = projects
        self.registry = LabelRegistry(projects)
        self.store = AnnotationSessionStore(projects, source=editor_cfg.session_source)
        self.interaction = PointerStateMachine(min_size=float(editor_cfg.min_bbox_size))
        self.renderer = renderer if renderer is not None else CanvasRenderer.from_config(self.cfg)

        self.scale_min = float(editor_cfg.scale_min)
        self.scale_max = float(editor_cfg.scale_max)
        self.scale_step = float(editor_cfg.scale_step)

        self.state = EditorState()
        self.project_id = None
        self.events = EventEmitter()
        self.cancel_token = CancelToken("annotation editor")
        self.last_render: Optional[RenderResult] = None

    # Lifecycle

    def open(self, project_id, image_id) -> bool:
        """
        Mount the editor on an image.

        Loads labels, resolves the image size, opens a fresh annotation
        session and lists its items. A failed label load leaves the editor
        usable but without selectable labels.

        Returns:
            True if a session was opened and its items listed
        """
        self.project_id = project_id
        self._load_labels(project_id)
        self.state.image = self._resolve_image(project_id, image_id)

        opened = False
        try:
            session_id = self.store.open(image_id, cancel=self.cancel_token)
            self.state.session_id = session_id
            self._emit(EventType.SESSION_OPENED, session_id=session_id, image_id=str(image_id))

            annotations = self.store.list(session_id, cancel=self.cancel_token)
            self._emit(EventType.ANNOTATIONS_LOADED, count=len(annotations))
            opened = True
        except Cancelled:
            logger.debug("Editor closed while opening image %s", image_id)
            return False
        except SbxaiError as e:
            self._report(_("Failed to load annotation data"), e)

        self.render()
        return opened

    def close(self):
        """Abandon in-flight work and stop notifying listeners."""
        self.cancel_token.cancel()
        self.interaction.reset()
        self._emit(EventType.EDITOR_CLOSED)
        self.events.clear()

    @property
    def closed(self) -> bool:
        return self.cancel_token.cancelled

    # Selections

    @property
    def labels(self) -> List[Label]:
        return self.registry.labels

    @property
    def can_annotate(self) -> bool:
        return len(self.registry) > 0 and not self.closed

    @property
    def annotations(self) -> List[Annotation]:
        return self.store.annotations

    @property
    def draft(self) -> Optional[Annotation]:
        return self.interaction.draft

    @property
    def scale(self) -> float:
        return self.state.scale

    @property
    def tool(self) -> Tool:
        return self.state.tool

    @property
    def selected_label(self) -> Optional[Label]:
        return self.state.selected_label

    def select_tool(self, tool):
        self.state.tool = Tool(tool)
        self._emit(EventType.TOOL_SELECTED, tool=self.state.tool.value)

    def select_label(self, label_id: int) -> bool:
        """Select a label by id. Returns False if it is not in the registry."""
        label = self.registry.get(label_id)
        if label is None:
            logger.debug("Label %s is not selectable", label_id)
            return False
        self.state.selected_label = label
        self._emit(EventType.LABEL_SELECTED, label_id=label.id)
        return True

    # Zoom

    def set_scale(self, scale: float) -> float:
        self.state.scale = clamp_scale(scale, self.scale_min, self.scale_max)
        self._emit(EventType.SCALE_CHANGED, scale=self.state.scale)
        self.render()
        return self.state.scale

    def zoom_in(self) -> float:
        return self.set_scale(self.state.scale + self.scale_step)

    def zoom_out(self) -> float:
        return self.set_scale(self.state.scale - self.scale_step)

    def reset_zoom(self) -> float:
        return self.set_scale(1.0)

    # Pointer events, canvas-relative screen coordinates

    def pointer_down(self, x: float, y: float):
        if not self.can_annotate:
            return
        draft = self.interaction.pointer_down(
            x, y, self.state.tool, self.state.selected_label, self.state.scale
        )
        if draft is not None:
            self._emit(EventType.DRAFT_STARTED, draft=draft.to_dict())
            self.render()

    def pointer_move(self, x: float, y: float):
        draft = self.interaction.pointer_move(x, y, self.state.scale)
        if draft is not None:
            self._emit(EventType.DRAFT_UPDATED, draft=draft.to_dict())
            self.render()

    def pointer_up(self, x: Optional[float] = None, y: Optional[float] = None) -> Optional[Annotation]:
        """
        Finish a drag and persist the draft if it is large enough.

        Returns:
            The persisted annotation, or None
        """
        if not self.interaction.is_drawing:
            return None
        draft = self.interaction.pointer_up(x, y, self.state.scale)
        persisted = None
        if draft is None:
            self._emit(EventType.DRAFT_DISCARDED)
        else:
            persisted = self._persist(draft)
        self.render()
        return persisted

    # Annotation list

    def delete_annotation(self, index: int) -> Optional[Annotation]:
        """
        Remove the annotation at ``index`` from the local list.

        The server copy is left in place; only the displayed list changes.
        """
        try:
            removed = self.store.remove(index)
        except IndexError:
            logger.warning("No annotation at index %s", index)
            return None
        self._emit(EventType.ANNOTATION_REMOVED, index=index, annotation=removed.to_dict())
        self._notify("info", _("Annotation deleted"))
        self.render()
        return removed

    # Rendering

    def render(self) -> Optional[RenderResult]:
        if self.state.image is None or self.closed:
            return None
        self.last_render = self.renderer.render(
            self.state.image,
            self.store.annotations,
            self.interaction.draft,
            self.registry.labels,
            self.state.scale,
            draft_label=self.state.selected_label,
        )
        self._emit(EventType.RENDERED, result=self.last_render)
        return self.last_render

    # Internals

    def _load_labels(self, project_id):
        try:
            labels = self.registry.load(project_id, cancel=self.cancel_token)
        except Cancelled:
            return
        except SbxaiError as e:
            self.registry.clear()
            self.state.selected_label = None
            self._report(_("Failed to load labels"), e)
            return
        self._emit(EventType.LABELS_LOADED, count=len(labels))

    def _resolve_image(self, project_id, image_id) -> ImageInfo:
        try:
            images = self.projects.list_images(project_id, cancel=self.cancel_token)
        except Cancelled:
            images = []
        except SbxaiError as e:
            logger.warning("Could not list images of project %s: %s", project_id, e)
            images = []
        for data in images:
            if not isinstance(data, dict) or str(data.get("id")) != str(image_id):
                continue
            try:
                return ImageInfo.from_dict(data)
            except (TypeError, ValueError) as e:
                logger.warning("Unreadable size for image %s: %s", image_id, e)
                break
        return ImageInfo(id=str(image_id))

    def _persist(self, draft: Annotation) -> Optional[Annotation]:
        if self.state.session_id is None:
            self._notify("error", _("No annotation session is open"))
            return None
        try:
            persisted = self.store.append(self.state.session_id, draft, cancel=self.cancel_token)
        except Cancelled:
            logger.debug("Dropping annotation, editor was closed")
            return None
        except ValidationError as e:
            logger.debug("Discarding invalid annotation: %s", e)
            return None
        except SbxaiError as e:
            self._report(_("Failed to save annotation"), e)
            return None
        self._emit(
            EventType.ANNOTATION_ADDED,
            index=len(self.store) - 1,
            annotation=persisted.to_dict(),
        )
        self._notify("info", _("Annotation saved successfully"))
        return persisted

    def _report(self, message: str, error: Exception):
        logger.error("%s: %s", message, error)
        self._notify("error", message, error=str(error))

    def _notify(self, level: str, message: str, **data):
        self._emit(EventType.NOTIFICATION, level=level, message=message, **data)

    def _emit(self, event_type: EventType, **data):
        self.events.emit(AnnotationEvent(event_type, data))
