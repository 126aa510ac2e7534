"""Exception hierarchy for slicegeom.

The geometry kernel itself never raises on degenerate input; these errors
cover file handling, the clipping collaborator and the layer pipeline.
"""


class SliceGeomError(Exception):
    """Base exception for all slicegeom errors."""

    pass


class LayerFileError(SliceGeomError):
    """Errors related to layer file loading or saving."""

    pass


class LayerLoadError(LayerFileError):
    """Error loading a layer file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load layers '{path}': {reason}")


class LayerSaveError(LayerFileError):
    """Error saving a layer file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save layers '{path}': {reason}")


class LayerFormatError(LayerFileError):
    """Unsupported or invalid layer file contents."""

    def __init__(self, path: str, details: str) -> None:
        self.path = path
        self.details = details
        super().__init__(f"Invalid layer file '{path}': {details}")


class GeometryError(SliceGeomError):
    """Errors in geometric calculations."""

    pass


class ClippingError(GeometryError):
    """The clipping engine failed to execute an operation."""

    def __init__(self, operation: str, reason: str) -> None:
        self.operation = operation
        self.reason = reason
        super().__init__(f"Clipping operation '{operation}' failed: {reason}")


class LayerProcessingError(SliceGeomError):
    """Error processing a specific layer."""

    def __init__(self, z: int, reason: str) -> None:
        self.z = z
        self.reason = reason
        super().__init__(f"Error processing layer z={z}: {reason}")


class ProcessingCancelledError(SliceGeomError):
    """Processing was cancelled by user."""

    def __init__(self, processed_count: int, pending_count: int) -> None:
        self.processed_count = processed_count
        self.pending_count = pending_count
        super().__init__(
            f"Processing cancelled: {processed_count} completed, {pending_count} pending"
        )
