"""Progress events and cooperative cancellation for long renders."""

from collections import namedtuple

from .errors import GenerationCancelled

ProgressEvent = namedtuple("ProgressEvent", ["stage", "done", "total"])


class Progress:
    """Checkpoint helper threaded through a render.

    Args:
        on_progress: Optional callable receiving ``ProgressEvent`` objects.
        cancel: Optional callable returning True, or an object with an
            ``is_set()`` method (e.g. ``threading.Event``), that requests
            cancellation when checked.
    """

    def __init__(self, on_progress=None, cancel=None):
        self._on_progress = on_progress
        if cancel is not None and hasattr(cancel, "is_set"):
            cancel = cancel.is_set
        self._cancel = cancel

    def step(self, stage, done, total):
        """Report progress and honor a pending cancellation request."""
        if self._cancel is not None and self._cancel():
            raise GenerationCancelled(f"cancelled during {stage} "
                                      f"({done}/{total})")
        if self._on_progress is not None:
            self._on_progress(ProgressEvent(stage, done, total))


SILENT = Progress()
